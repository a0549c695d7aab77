"""
VideoID Pydantic model for YouTube identifier parsing and validation.
"""

from __future__ import annotations

import re
from urllib.parse import parse_qs, urlparse

from pydantic import BaseModel, Field

from tubepick.exceptions import InvalidIdentifierError

_VIDEO_ID_RE = re.compile(r"^[a-zA-Z0-9_-]{11}$")

_YOUTUBE_URL_RE = re.compile(
    r"(?:youtube\.com/(?:watch\?(?:.*&)?v=|embed/|v/|shorts/|live/)|youtu\.be/)"
    r"(?P<video_id>[a-zA-Z0-9_-]{11})",
    re.IGNORECASE,
)

_YOUTUBE_DOMAINS = {
    "youtube.com",
    "www.youtube.com",
    "m.youtube.com",
    "music.youtube.com",
    "youtu.be",
}


class VideoID(BaseModel):
    """Parsed YouTube video identifier."""

    video_id: str = Field(..., description="11-character video ID")
    source: str = Field(..., description="Identifier as given by the caller")

    @classmethod
    def parse(cls, identifier: str) -> VideoID:
        """Parse a URL or bare ID into a VideoID.

        Raises:
            InvalidIdentifierError: If no video ID can be extracted
        """
        if not isinstance(identifier, str):
            raise InvalidIdentifierError(repr(identifier))

        text = identifier.strip()
        if _VIDEO_ID_RE.match(text):
            return cls(video_id=text, source=identifier)

        match = _YOUTUBE_URL_RE.search(text)
        if match:
            return cls(video_id=match.group("video_id"), source=identifier)

        # Query-string fallback for watch URLs with unusual paths
        parsed = urlparse(text if "://" in text else f"https://{text}")
        if parsed.netloc.lower() in _YOUTUBE_DOMAINS:
            candidates = parse_qs(parsed.query).get("v", [])
            if candidates and _VIDEO_ID_RE.match(candidates[0]):
                return cls(video_id=candidates[0], source=identifier)

        raise InvalidIdentifierError(identifier)

    @property
    def watch_url(self) -> str:
        return f"https://www.youtube.com/watch?v={self.video_id}"

    @property
    def cover_url(self) -> str:
        """Highest-resolution cover image (may not exist for every video)."""
        return f"https://i.ytimg.com/vi/{self.video_id}/maxresdefault.jpg"

    def __str__(self) -> str:
        return self.video_id
