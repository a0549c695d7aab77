"""
Video quality tier definitions and normalization.
"""

from __future__ import annotations

# Standard quality tiers, ascending. A stream's tier is the smallest entry
# that is >= its shorter side.
VIDEO_QUALITIES: tuple[int, ...] = (144, 240, 360, 480, 720, 1080, 1440, 2160, 4320)

# "max" compares above every tier
MAX_QUALITY = "max"
MAX_QUALITY_VALUE = 9000


def normalize_quality(width: int, height: int) -> int:
    """Map a (width, height) pair to the nearest standard quality tier.

    Uses the shorter side so portrait and landscape streams normalize the
    same way. Dimensions above the top of the ladder map to the top tier.
    """
    shortest_side = min(width, height)
    for tier in VIDEO_QUALITIES:
        if tier >= shortest_side:
            return tier
    return VIDEO_QUALITIES[-1]


def parse_quality(value: int | str | None) -> int | str:
    """Parse a user-supplied quality into a tier number or "max".

    Accepts ints, digit strings and strings with a trailing "p" ("720p").

    Raises:
        ValueError: If the value is not a positive number or "max"
    """
    if value is None:
        return MAX_QUALITY
    if isinstance(value, bool):
        raise ValueError(f"Invalid quality: {value!r}")
    if isinstance(value, int):
        quality = value
    else:
        text = str(value).strip().lower()
        if text == MAX_QUALITY:
            return MAX_QUALITY
        text = text.removesuffix("p")
        if not text.isdigit():
            raise ValueError(f"Invalid quality: {value!r}")
        quality = int(text)
    if quality <= 0:
        raise ValueError(f"Invalid quality: {value!r}")
    return quality


def quality_value(quality: int | str) -> int:
    """Numeric value of a parsed quality for tier comparisons."""
    return MAX_QUALITY_VALUE if quality == MAX_QUALITY else int(quality)


def quality_label(tier: int) -> str:
    """Human label for a tier, e.g. 1080 -> "1080p"."""
    return f"{tier}p"
