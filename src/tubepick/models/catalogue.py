"""
Catalogue models: what a catalogue provider returns for one video.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from tubepick.models.variant import Role, StreamVariant


class Playability(str, Enum):
    OK = "OK"
    LOGIN_REQUIRED = "LOGIN_REQUIRED"
    UNPLAYABLE = "UNPLAYABLE"
    ERROR = "ERROR"


class PlayabilityStatus(BaseModel):
    """Whether the provider will serve streams for this video at all."""

    model_config = ConfigDict(frozen=True)

    status: Playability = Playability.OK
    reason: str | None = None

    @property
    def is_ok(self) -> bool:
        return self.status == Playability.OK


class Thumbnail(BaseModel):
    model_config = ConfigDict(frozen=True)

    url: str
    width: int | None = None
    height: int | None = None


class BasicInfo(BaseModel):
    """Descriptive metadata fetched alongside the stream list."""

    model_config = ConfigDict(frozen=True)

    title: str | None = None
    author: str | None = None
    duration: int | None = None
    description: str | None = None
    thumbnails: tuple[Thumbnail, ...] = ()

    @property
    def thumbnail(self) -> str | None:
        """First (preferred) thumbnail URL."""
        return self.thumbnails[0].url if self.thumbnails else None


class Catalogue(BaseModel):
    """Every stream variant offered for one video by one client identity."""

    model_config = ConfigDict(frozen=True)

    video_id: str
    client: str
    variants: tuple[StreamVariant, ...] = Field(
        default=(), description="All variants: adaptive (video-only/audio-only) and muxed"
    )
    basic_info: BasicInfo = Field(default_factory=BasicInfo)
    playability: PlayabilityStatus = Field(default_factory=PlayabilityStatus)

    @property
    def adaptive(self) -> list[StreamVariant]:
        return [v for v in self.variants if v.role != Role.MUXED]

    @property
    def muxed(self) -> list[StreamVariant]:
        return [v for v in self.variants if v.role == Role.MUXED]

    @property
    def has_streams(self) -> bool:
        """True when at least one variant is deliverable (URL or cipher)."""
        return any(v.url or v.cipher for v in self.adaptive)
