"""
Configuration constants for tubepick.

Contains the quality ladder, codec families, client defaults and the
layered config loader.
"""

from tubepick.config.codecs import (
    BASELINE_FAMILY,
    CODEC_FAMILIES,
    FAMILY_FALLBACK,
    detect_family,
    matches_family,
)
from tubepick.config.loader import (
    ConfigSource,
    TubepickConfig,
    clear_config_cache,
    get_config,
)
from tubepick.config.quality import (
    MAX_QUALITY,
    VIDEO_QUALITIES,
    normalize_quality,
    parse_quality,
)

__all__ = [
    "VIDEO_QUALITIES",
    "MAX_QUALITY",
    "normalize_quality",
    "parse_quality",
    "CODEC_FAMILIES",
    "BASELINE_FAMILY",
    "FAMILY_FALLBACK",
    "detect_family",
    "matches_family",
    # Config loader
    "TubepickConfig",
    "ConfigSource",
    "get_config",
    "clear_config_cache",
]
