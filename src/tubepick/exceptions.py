"""
Custom exceptions for tubepick.

All tubepick exceptions inherit from TubepickError for easy catching.
Terminal resolution failures inherit from ResolutionError and carry enough
context (identifier, codec, quality, clients tried) to explain themselves.
"""

from __future__ import annotations

from typing import Any


class TubepickError(Exception):
    """Base exception for all tubepick errors."""

    pass


class ResolutionError(TubepickError):
    """A request could not be resolved into downloadable streams.

    This is the base class for every error in the resolution taxonomy.

    Attributes:
        message: Human-readable error message
        category: Error classification (e.g., "login_required", "drm")
        details: Diagnostic context (video_id, codec, quality, clients_tried)
        suggestion: Recommended remediation steps
    """

    category = "unknown"

    def __init__(
        self,
        message: str,
        *,
        category: str | None = None,
        details: dict[str, Any] | None = None,
        suggestion: str = "",
    ):
        super().__init__(message)
        self.message = message
        if category is not None:
            self.category = category
        self.details = details or {}
        self.suggestion = suggestion

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to a structured dict for JSON error output."""
        result: dict[str, Any] = {
            "type": self.__class__.__name__,
            "message": self.message,
            "category": self.category,
        }
        if self.details:
            result["details"] = self.details
        if self.suggestion:
            result["suggestion"] = self.suggestion
        return result


class InvalidIdentifierError(ResolutionError):
    """The input is neither a recognised YouTube URL nor a video ID."""

    category = "invalid_identifier"

    def __init__(self, identifier: str, *, details: dict[str, Any] | None = None):
        details = details or {}
        details["identifier"] = identifier
        super().__init__(
            f"Invalid YouTube URL or video ID: {identifier!r}",
            details=details,
            suggestion="Pass a youtube.com / youtu.be URL or an 11-character video ID.",
        )
        self.identifier = identifier


class CatalogueUnavailableError(ResolutionError):
    """No usable stream catalogue could be fetched from any client."""

    category = "catalogue_unavailable"

    def __init__(
        self,
        message: str,
        *,
        details: dict[str, Any] | None = None,
        clients_tried: list[str] | None = None,
    ):
        details = details or {}
        if clients_tried:
            details["clients_tried"] = clients_tried
        super().__init__(
            message,
            details=details,
            suggestion="The video may be unavailable or the provider changed. Try again later.",
        )
        self.clients_tried = clients_tried


class LoginRequiredError(ResolutionError):
    """The content is gated behind a signed-in session."""

    category = "login_required"

    def __init__(self, message: str, *, details: dict[str, Any] | None = None):
        super().__init__(
            message,
            details=details,
            suggestion="This video requires signing in and cannot be resolved anonymously.",
        )


class UnplayableError(ResolutionError):
    """The provider reported the content as unplayable (private, removed...)."""

    category = "unplayable"

    def __init__(
        self,
        message: str,
        *,
        reason: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        details = details or {}
        if reason:
            details["reason"] = reason
        super().__init__(message, details=details)
        self.reason = reason

    @property
    def is_private(self) -> bool:
        return bool(self.reason and "private" in self.reason.lower())


class NoVideoFormatError(ResolutionError):
    """No video-only stream exists in the requested or fallback codec family."""

    category = "no_video_format"

    def __init__(self, message: str, *, details: dict[str, Any] | None = None):
        super().__init__(
            message,
            details=details,
            suggestion="Try a different codec or quality setting.",
        )


class NoAudioFormatError(ResolutionError):
    """No audio-only stream exists in the selected or h264 family."""

    category = "no_audio_format"

    def __init__(self, message: str, *, details: dict[str, Any] | None = None):
        super().__init__(
            message,
            details=details,
            suggestion="Try a different codec setting.",
        )


class DrmProtectedError(ResolutionError):
    """A selected stream is DRM-protected and cannot be returned."""

    category = "drm"

    def __init__(
        self,
        message: str,
        *,
        details: dict[str, Any] | None = None,
        drm_families: list[str] | None = None,
    ):
        details = details or {}
        if drm_families:
            details["drm_families"] = drm_families
        super().__init__(message, details=details)
        self.drm_families = drm_families


class UrlResolutionFailedError(ResolutionError):
    """Selected streams had no obtainable URL, even after the client retry."""

    category = "url_resolution"

    def __init__(
        self,
        message: str,
        *,
        details: dict[str, Any] | None = None,
        clients_tried: list[str] | None = None,
    ):
        details = details or {}
        if clients_tried:
            details["clients_tried"] = clients_tried
        super().__init__(
            message,
            details=details,
            suggestion="The format may not be available right now. Try another codec or quality.",
        )
        self.clients_tried = clients_tried


class CatalogueStaleError(TubepickError):
    """The session handle used for a catalogue fetch has gone stale."""

    pass


class ToolNotFoundError(TubepickError):
    """Required external tool (yt-dlp) not found."""

    def __init__(self, tool_name: str, message: str | None = None):
        self.tool_name = tool_name
        msg = message or f"Required tool '{tool_name}' not found in PATH"
        super().__init__(msg)


class ConfigError(TubepickError):
    """Invalid value in a tubepick config file or environment variable."""

    pass
