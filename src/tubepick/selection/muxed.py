"""
Muxed selector: picks a single pre-muxed (audio+video) variant.
"""

from __future__ import annotations

from collections.abc import Iterable

from tubepick.config.quality import MAX_QUALITY
from tubepick.models.variant import StreamVariant


def select_muxed(
    variants: Iterable[StreamVariant],
    quality: int | str,
) -> StreamVariant | None:
    """Select the muxed variant nearest the requested quality.

    Muxed streams are optional; None means the catalogue offers none.
    DRM-marked variants are never candidates.

    Returns:
        The exact-tier match when quality is a number and one exists,
        otherwise the highest-bitrate muxed variant.
    """
    candidates = [
        v for v in variants if v.has_audio and v.has_video and not v.is_drm_protected
    ]
    if not candidates:
        return None

    ranked = sorted(candidates, key=lambda v: v.bitrate, reverse=True)

    if quality != MAX_QUALITY:
        for variant in ranked:
            if variant.tier is not None and variant.tier == quality:
                return variant

    return ranked[0]
