"""
Format selector: picks one video and one audio variant from codec buckets.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from tubepick.config.codecs import BASELINE_FAMILY, FAMILY_FALLBACK
from tubepick.config.quality import quality_value
from tubepick.exceptions import NoAudioFormatError, NoVideoFormatError
from tubepick.models.variant import StreamVariant
from tubepick.selection.organizer import CodecBucket

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AudioSelection:
    variant: StreamVariant
    family: str
    dub_language: str | None = None


def _resolve_video_family(buckets: dict[str, CodecBucket], codec: str) -> str:
    """Apply the codec fallback chain: av1 <-> vp9, then the h264 baseline."""
    if buckets[codec].best_video:
        return codec

    fallback = FAMILY_FALLBACK.get(codec)
    if fallback and buckets[fallback].best_video:
        logger.debug(f"No {codec} video, falling back to {fallback}")
        return fallback

    if codec != BASELINE_FAMILY:
        logger.debug(f"No {codec} video, falling back to {BASELINE_FAMILY}")
    return BASELINE_FAMILY


def select_video(
    buckets: dict[str, CodecBucket],
    codec: str,
    quality: int | str,
) -> tuple[StreamVariant, str]:
    """Select the video variant for a requested codec and quality.

    The family's best (highest bitrate) video is returned whenever the
    requested quality is at or above its tier; a lower exact-tier match is
    only chosen when the caller asked for less than the best.

    Returns:
        (variant, effective codec family)

    Raises:
        NoVideoFormatError: If no family in the fallback chain has video
    """
    family = _resolve_video_family(buckets, codec)
    bucket = buckets[family]
    best = bucket.best_video
    if best is None:
        raise NoVideoFormatError(
            "No video format available",
            details={"codec": codec, "quality": quality, "family_tried": family},
        )

    wanted = quality_value(quality)
    if best.tier is None or wanted >= best.tier:
        return best, family

    for variant in bucket.video:
        if variant.tier == wanted:
            return variant, family

    return best, family


def select_audio(
    buckets: dict[str, CodecBucket],
    family: str,
    dub_language: str | None = None,
) -> AudioSelection:
    """Select the audio variant for a codec family.

    Prefers the original track over an auto-selected dub, honours an
    explicit dub language, and falls back to the h264 family's best audio
    when the family has no audio at all.

    Returns:
        AudioSelection whose ``family`` is the family the chosen audio
        belongs to (h264 after a fallback)

    Raises:
        NoAudioFormatError: If neither the family nor h264 has audio
    """
    bucket = buckets[family]
    chosen = bucket.best_audio
    chosen_dub = None

    if chosen is not None and chosen.audio_track and not chosen.is_original:
        chosen = next((a for a in bucket.audio if a.is_original), None)

    if dub_language:
        dubbed = next(
            (
                a
                for a in bucket.audio
                if a.language and a.language.startswith(dub_language) and a.audio_track
            ),
            None,
        )
        if dubbed is not None and not dubbed.is_original:
            chosen = dubbed
            chosen_dub = dubbed.language

    if chosen is None:
        chosen = buckets[BASELINE_FAMILY].best_audio
        if chosen is not None and family != BASELINE_FAMILY:
            logger.debug(f"No {family} audio, falling back to {BASELINE_FAMILY}")
            family = BASELINE_FAMILY

    if chosen is None:
        raise NoAudioFormatError(
            "No audio format available",
            details={"codec": family, "dub_language": dub_language},
        )

    return AudioSelection(variant=chosen, family=family, dub_language=chosen_dub)
