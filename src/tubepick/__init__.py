"""
tubepick - resolve YouTube videos into downloadable stream URLs.

Given a URL or video ID plus a requested quality and codec family, tubepick:
1. Fetches the stream catalogue for a client identity
2. Buckets streams by codec family and selects video + audio (with fallbacks)
3. Materializes direct URLs, retrying once with another client if needed
"""

from tubepick.config.quality import VIDEO_QUALITIES, normalize_quality

# Exceptions
from tubepick.exceptions import (
    CatalogueStaleError,
    CatalogueUnavailableError,
    ConfigError,
    DrmProtectedError,
    InvalidIdentifierError,
    LoginRequiredError,
    NoAudioFormatError,
    NoVideoFormatError,
    ResolutionError,
    ToolNotFoundError,
    TubepickError,
    UnplayableError,
    UrlResolutionFailedError,
)

# Models
from tubepick.models import (
    Catalogue,
    ResolutionResult,
    ResolvedMedia,
    ResolvedStream,
    SelectionRequest,
    StreamVariant,
    VideoID,
)
from tubepick.resolver import Resolver, resolve
from tubepick.selection import organize, select_audio, select_muxed, select_video
from tubepick.session import SessionHandle

__version__ = "0.1.0"

__all__ = [
    # Core
    "Resolver",
    "resolve",
    "SessionHandle",
    # Selection
    "normalize_quality",
    "VIDEO_QUALITIES",
    "organize",
    "select_video",
    "select_audio",
    "select_muxed",
    # Models
    "Catalogue",
    "StreamVariant",
    "SelectionRequest",
    "ResolutionResult",
    "ResolvedMedia",
    "ResolvedStream",
    "VideoID",
    # Exceptions
    "TubepickError",
    "ResolutionError",
    "InvalidIdentifierError",
    "CatalogueUnavailableError",
    "LoginRequiredError",
    "UnplayableError",
    "NoVideoFormatError",
    "NoAudioFormatError",
    "DrmProtectedError",
    "UrlResolutionFailedError",
    "CatalogueStaleError",
    "ToolNotFoundError",
    "ConfigError",
]
