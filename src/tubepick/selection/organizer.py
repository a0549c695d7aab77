"""
Catalogue organizer: partitions variants into per-codec-family buckets.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from tubepick.config.codecs import CODEC_FAMILIES, matches_family
from tubepick.models.request import PinnedFormats
from tubepick.models.variant import StreamVariant


@dataclass(frozen=True)
class CodecBucket:
    """Video and audio variants of one codec family, best (highest bitrate) first."""

    family: str
    video: tuple[StreamVariant, ...] = ()
    audio: tuple[StreamVariant, ...] = ()

    @property
    def best_video(self) -> StreamVariant | None:
        return self.video[0] if self.video else None

    @property
    def best_audio(self) -> StreamVariant | None:
        return self.audio[0] if self.audio else None


def _qualifies(variant: StreamVariant, family: str) -> bool:
    return bool(variant.content_length) and matches_family(variant.mime_type, family)


def _admits(pinned: PinnedFormats | None, role: str, variant: StreamVariant) -> bool:
    if pinned is None:
        return True
    required = pinned.for_role(role)
    return required is None or required == variant.format_id


def organize(
    variants: Iterable[StreamVariant],
    pinned: PinnedFormats | None = None,
) -> dict[str, CodecBucket]:
    """Bucket variants by codec family.

    Every known family gets a bucket (possibly empty) so selectors can fall
    back without rescanning. A variant lands in a family when it declares a
    content length and its codec string carries that family's video or
    audio signature. Sorting is stable, so equal bitrates keep catalogue
    order and the result is deterministic.

    Args:
        variants: Catalogue variants (adaptive streams)
        pinned: Format IDs that must be reselected, per role

    Returns:
        Mapping of family name to CodecBucket
    """
    ranked = sorted(variants, key=lambda v: v.bitrate, reverse=True)

    buckets: dict[str, CodecBucket] = {}
    for family in CODEC_FAMILIES:
        video: list[StreamVariant] = []
        audio: list[StreamVariant] = []
        for variant in ranked:
            if not _qualifies(variant, family):
                continue
            if variant.has_video and _admits(pinned, "video", variant):
                video.append(variant)
            if variant.has_audio and _admits(pinned, "audio", variant):
                audio.append(variant)
        buckets[family] = CodecBucket(family=family, video=tuple(video), audio=tuple(audio))

    return buckets
