"""
Codec family definitions.

Each family groups a video codec with the audio codec it is muxed with, and
the container/extension the streams are delivered in.
"""

from __future__ import annotations

CODEC_FAMILIES: dict[str, dict[str, str]] = {
    "h264": {
        "video_codec": "avc1",
        "audio_codec": "mp4a",
        "container": "mp4",
        "audio_ext": "m4a",
    },
    "av1": {
        "video_codec": "av01",
        "audio_codec": "opus",
        "container": "webm",
        "audio_ext": "opus",
    },
    "vp9": {
        "video_codec": "vp9",
        "audio_codec": "opus",
        "container": "webm",
        "audio_ext": "opus",
    },
}

# Baseline family present on practically every video
BASELINE_FAMILY = "h264"

# Where to look next when a family has no video streams
FAMILY_FALLBACK: dict[str, str] = {
    "av1": "vp9",
    "vp9": "av1",
}


def matches_family(codec_string: str, family: str) -> bool:
    """Check whether a MIME/codec string carries the family's video or audio codec."""
    codecs = CODEC_FAMILIES[family]
    return codecs["video_codec"] in codec_string or codecs["audio_codec"] in codec_string


def detect_family(codec_string: str) -> str | None:
    """Return the first family whose codec signature appears in the string."""
    for family in CODEC_FAMILIES:
        if matches_family(codec_string, family):
            return family
    return None


def container_for(family: str) -> str:
    return CODEC_FAMILIES[family]["container"]


def audio_ext_for(family: str) -> str:
    return CODEC_FAMILIES[family]["audio_ext"]
