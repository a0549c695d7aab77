"""
SelectionRequest Pydantic model: what the caller wants resolved.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, field_validator

from tubepick.config.defaults import DEFAULT_CODEC, DEFAULT_QUALITY
from tubepick.config.quality import parse_quality

CodecName = Literal["h264", "vp9", "av1"]


class PinnedFormats(BaseModel):
    """Format IDs a retry must reselect, per role."""

    model_config = ConfigDict(frozen=True)

    video: str | None = None
    audio: str | None = None

    def for_role(self, role: str) -> str | None:
        return self.video if role == "video" else self.audio


class SelectionRequest(BaseModel):
    """Immutable input to one resolution attempt.

    Example:
        >>> SelectionRequest(quality="1080p", codec="av1").quality
        1080
    """

    model_config = ConfigDict(frozen=True)

    quality: int | Literal["max"] = DEFAULT_QUALITY
    codec: CodecName = DEFAULT_CODEC
    audio_only: bool = False
    dub_language: str | None = None
    pinned: PinnedFormats | None = None

    @field_validator("quality", mode="before")
    @classmethod
    def _parse_quality(cls, v):
        return parse_quality(v)

    @field_validator("codec", mode="before")
    @classmethod
    def _normalize_codec(cls, v):
        if isinstance(v, str):
            v = v.strip().lower()
            # Common aliases
            return {"avc": "h264", "avc1": "h264", "av01": "av1"}.get(v, v)
        return v

    @field_validator("dub_language", mode="before")
    @classmethod
    def _blank_dub_is_none(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v

    def with_pinned(self, video: str | None, audio: str | None) -> SelectionRequest:
        """Copy of this request locked to previously chosen format IDs."""
        return self.model_copy(update={"pinned": PinnedFormats(video=video, audio=audio)})

    def describe(self) -> dict:
        """Context attached to error details."""
        return {"codec": self.codec, "quality": self.quality, "audio_only": self.audio_only}
