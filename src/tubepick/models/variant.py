"""
StreamVariant Pydantic model for one entry of a stream catalogue.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, model_validator

from tubepick.config.codecs import detect_family
from tubepick.config.quality import normalize_quality


class Role(str, Enum):
    """What payload a variant carries."""

    VIDEO_ONLY = "video-only"
    AUDIO_ONLY = "audio-only"
    MUXED = "muxed"


class StreamVariant(BaseModel):
    """A single audio and/or video stream offered by the upstream provider.

    Instances are validated at the collaborator boundary, so selection code
    can rely on every field being present and well-typed. A variant either
    carries a direct ``url`` or a ``cipher`` that must be materialized on
    demand by the catalogue provider.
    """

    model_config = ConfigDict(frozen=True)

    format_id: str = Field(..., min_length=1, description="Opaque stable identity (itag)")
    mime_type: str = Field(..., min_length=1, description="MIME type with codecs parameter")
    has_video: bool = False
    has_audio: bool = False

    # Video
    width: int | None = Field(None, ge=0)
    height: int | None = Field(None, ge=0)
    fps: float | None = Field(None, ge=0)
    quality_label: str | None = None

    # Common
    bitrate: int = Field(0, ge=0)
    content_length: int | None = Field(None, ge=0)

    # Audio
    audio_quality: str | None = None
    language: str | None = None
    audio_track: bool = Field(False, description="Member of a multi-language track set")
    is_original: bool = False

    # Delivery
    url: str | None = None
    cipher: str | None = None
    drm_families: tuple[str, ...] = ()

    @model_validator(mode="after")
    def _check_payload(self) -> StreamVariant:
        if not self.has_video and not self.has_audio:
            raise ValueError(f"Variant {self.format_id} carries neither audio nor video")
        return self

    @property
    def role(self) -> Role:
        if self.has_video and self.has_audio:
            return Role.MUXED
        if self.has_video:
            return Role.VIDEO_ONLY
        return Role.AUDIO_ONLY

    @property
    def codec_family(self) -> str | None:
        return detect_family(self.mime_type)

    @property
    def is_drm_protected(self) -> bool:
        return bool(self.drm_families)

    @property
    def has_dimensions(self) -> bool:
        return bool(self.width and self.height)

    @property
    def resolution(self) -> str | None:
        if not self.has_dimensions:
            return None
        return f"{self.width}x{self.height}"

    @property
    def tier(self) -> int | None:
        """Normalized quality tier, or None for streams without dimensions."""
        if not self.has_dimensions:
            return None
        return normalize_quality(self.width, self.height)

    def __str__(self) -> str:
        parts = [self.format_id, self.role.value, self.mime_type]
        if self.resolution:
            parts.append(self.resolution)
        parts.append(f"{self.bitrate}bps")
        return " ".join(parts)
