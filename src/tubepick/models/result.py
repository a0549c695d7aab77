"""
Resolution result dataclasses.

ResolutionResult is the transient output of selection; ResolvedMedia is the
assembled, URL-materialized answer handed back to callers.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

from tubepick.config.codecs import audio_ext_for, container_for
from tubepick.config.defaults import URL_VALIDITY_HOURS
from tubepick.config.quality import quality_label
from tubepick.models.variant import StreamVariant
from tubepick.utils.formatting import format_duration, format_size


@dataclass(frozen=True)
class ResolutionResult:
    """Variants chosen by one selection pass, before URL materialization.

    ``codec_family`` is the effective family of the request (the video
    family, or the audio family for audio-only requests); ``audio_family``
    differs from it when audio fell back to h264. ``muxed`` is the
    catalogue's own muxed pick; it is optional and never required.
    """

    codec_family: str
    video: StreamVariant | None = None
    audio: StreamVariant | None = None
    muxed: StreamVariant | None = None
    audio_family: str | None = None
    dub_language: str | None = None

    def selected(self) -> list[StreamVariant]:
        """The required (non-muxed) variants of this selection."""
        return [v for v in (self.video, self.audio) if v is not None]


@dataclass(frozen=True)
class ResolvedStream:
    """A selected variant paired with its materialized URL."""

    variant: StreamVariant
    url: str
    format: str
    quality: str | None = None
    codec: str | None = None

    @classmethod
    def video_stream(cls, variant: StreamVariant, url: str, family: str) -> ResolvedStream:
        tier = variant.tier
        return cls(
            variant=variant,
            url=url,
            format=container_for(family),
            quality=quality_label(tier) if tier else variant.quality_label,
            codec=family,
        )

    @classmethod
    def audio_stream(cls, variant: StreamVariant, url: str, family: str) -> ResolvedStream:
        return cls(
            variant=variant,
            url=url,
            format=audio_ext_for(family),
            quality=variant.audio_quality,
            codec=family,
        )

    @classmethod
    def muxed_stream(cls, variant: StreamVariant, url: str) -> ResolvedStream:
        return cls(
            variant=variant,
            url=url,
            format="mp4" if "mp4" in variant.mime_type else "webm",
            quality=variant.quality_label,
            codec=variant.codec_family,
        )

    def to_dict(self) -> dict[str, Any]:
        v = self.variant
        result: dict[str, Any] = {
            "url": self.url,
            "format": self.format,
            "quality": self.quality,
            "codec": self.codec,
            "bitrate": v.bitrate,
            "mimeType": v.mime_type,
            "size": format_size(v.content_length),
            "sizeBytes": v.content_length,
            "itag": v.format_id,
        }
        if v.has_video:
            result["resolution"] = v.resolution
            result["fps"] = v.fps
        if v.language:
            result["language"] = v.language
        return result


@dataclass
class ResolvedMedia:
    """Fully resolved media: metadata plus URL-materialized streams."""

    video_id: str
    client: str
    codec_family: str
    title: str | None = None
    author: str | None = None
    duration: int | None = None
    thumbnail: str | None = None
    description: str | None = None
    video: ResolvedStream | None = None
    audio: ResolvedStream | None = None
    muxed: ResolvedStream | None = None
    cover: str | None = None
    dub_language: str | None = None
    album: str | None = None
    copyright: str | None = None
    release_date: str | None = None
    clients_tried: list[str] = field(default_factory=list)
    extracted_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def total_size(self) -> int | None:
        sizes = [s.variant.content_length for s in (self.video, self.audio) if s]
        if not sizes or any(size is None for size in sizes):
            return None
        return sum(sizes)

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-serializable dict."""
        result: dict[str, Any] = {
            "success": True,
            "videoId": self.video_id,
            "title": self.title,
            "author": self.author,
            "duration": self.duration,
            "durationFormatted": format_duration(self.duration),
            "thumbnail": self.thumbnail,
            "client": self.client,
            "codec": self.codec_family,
            "videoWithAudioUrl": self.muxed.url if self.muxed else None,
            "downloads": {
                "videoWithAudio": self.muxed.to_dict() if self.muxed else None,
                "video": self.video.to_dict() if self.video else None,
                "audio": self.audio.to_dict() if self.audio else None,
            },
            "totalSize": format_size(self.total_size),
            "totalSizeBytes": self.total_size,
            "extractedAt": self.extracted_at.isoformat(),
            "note": f"URLs are valid for about {URL_VALIDITY_HOURS} hours.",
        }
        optional = {
            "cover": self.cover,
            "dubLanguage": self.dub_language,
            "album": self.album,
            "copyright": self.copyright,
            "releaseDate": self.release_date,
        }
        result.update({k: v for k, v in optional.items() if v})
        return result
