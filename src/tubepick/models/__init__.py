"""
Data models for tubepick.

Provides Pydantic models for stream variants, catalogues, requests and
identifiers, and dataclasses for resolution results.
"""

from tubepick.models.catalogue import (
    BasicInfo,
    Catalogue,
    Playability,
    PlayabilityStatus,
    Thumbnail,
)
from tubepick.models.request import PinnedFormats, SelectionRequest
from tubepick.models.result import ResolutionResult, ResolvedMedia, ResolvedStream
from tubepick.models.variant import Role, StreamVariant
from tubepick.models.video_id import VideoID

__all__ = [
    "StreamVariant",
    "Role",
    "Catalogue",
    "BasicInfo",
    "Thumbnail",
    "Playability",
    "PlayabilityStatus",
    "SelectionRequest",
    "PinnedFormats",
    "ResolutionResult",
    "ResolvedMedia",
    "ResolvedStream",
    "VideoID",
]
