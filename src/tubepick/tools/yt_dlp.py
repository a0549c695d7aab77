"""
yt-dlp backed catalogue provider.

Runs ``yt-dlp -J`` for one YouTube client identity and turns its format list
into validated StreamVariant objects. yt-dlp deciphers stream URLs itself, so
URL materialization is a pure lookup.
"""

from __future__ import annotations

import json
import logging
import re
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from pydantic import ValidationError

from tubepick.config.defaults import METADATA_TIMEOUT
from tubepick.exceptions import CatalogueUnavailableError
from tubepick.models.catalogue import (
    BasicInfo,
    Catalogue,
    Playability,
    PlayabilityStatus,
    Thumbnail,
)
from tubepick.models.variant import StreamVariant
from tubepick.tools.base import ExternalTool

if TYPE_CHECKING:
    from collections.abc import Callable

logger = logging.getLogger(__name__)


# Client identities understood by tubepick -> yt-dlp player_client names
CLIENT_MAP: dict[str, str] = {
    "mobile": "ios",
    "ios": "ios",
    "web": "web",
    "android": "android",
    "tv": "tv",
    "mweb": "mweb",
}


@dataclass
class YtDlpError:
    """Structured error information parsed from yt-dlp stderr.

    Attributes:
        category: Error classification (e.g., "login_required", "private", "network")
        message: The original error message from yt-dlp
        stderr: Full stderr output for debugging
        details: Additional parsed details (HTTP codes, etc.)
    """

    category: str
    message: str
    stderr: str
    details: dict[str, Any] = field(default_factory=dict)


# Each tuple: (pattern, category, detail_extractor)
_ERROR_PATTERNS: list[tuple[re.Pattern, str, Callable[[re.Match], dict] | None]] = [
    (
        re.compile(r"Sign in to confirm your age|age.restricted", re.IGNORECASE),
        "login_required",
        None,
    ),
    (
        re.compile(r"Sign in to confirm you.re not a bot|login required|members.only", re.IGNORECASE),
        "login_required",
        None,
    ),
    (
        re.compile(r"private video|video is private", re.IGNORECASE),
        "private",
        None,
    ),
    (
        re.compile(
            r"Video unavailable|This video is unavailable|removed by the uploader|"
            r"This video has been removed",
            re.IGNORECASE,
        ),
        "unavailable",
        None,
    ),
    (
        re.compile(
            r"not available in your country|geo.?restrict|blocked in your country",
            re.IGNORECASE,
        ),
        "unavailable",
        None,
    ),
    (
        re.compile(r"Connection reset|Connection refused|Connection timed out", re.IGNORECASE),
        "network",
        None,
    ),
    (
        re.compile(r"429|too many requests|rate.?limit", re.IGNORECASE),
        "rate_limited",
        None,
    ),
    (
        re.compile(r"HTTP Error (\d+)", re.IGNORECASE),
        "http_error",
        lambda m: {"http_code": int(m.group(1))},
    ),
]

_ERROR_LINE_RE = re.compile(r"ERROR:\s*(?:\[[^\]]+\]\s*)?(?:[\w-]{11}:\s*)?(.+?)(?:\n|$)")

# Formats fetched as one plain HTTP download; anything else is a manifest
DIRECT_PROTOCOLS = frozenset({"http", "https"})


def parse_yt_dlp_error(stderr: str) -> YtDlpError:
    """Parse yt-dlp stderr output into structured error information."""
    error_match = _ERROR_LINE_RE.search(stderr)
    message = error_match.group(1).strip() if error_match else stderr.strip()

    for pattern, category, detail_extractor in _ERROR_PATTERNS:
        match = pattern.search(stderr)
        if match:
            details = detail_extractor(match) if detail_extractor else {}
            return YtDlpError(category=category, message=message, stderr=stderr, details=details)

    return YtDlpError(category="unknown", message=message, stderr=stderr)


def playability_from_error(error: YtDlpError) -> PlayabilityStatus | None:
    """Map a content-level yt-dlp error to a playability status.

    Returns:
        PlayabilityStatus for login gates and unplayable content, or None
        for transport-level failures that deserve a client retry.
    """
    if error.category == "login_required":
        return PlayabilityStatus(status=Playability.LOGIN_REQUIRED, reason=error.message)
    if error.category == "private":
        return PlayabilityStatus(status=Playability.UNPLAYABLE, reason="This video is private")
    if error.category == "unavailable":
        return PlayabilityStatus(status=Playability.UNPLAYABLE, reason=error.message)
    return None


def _codec_string(codec: str | None) -> str | None:
    if not codec or codec == "none":
        return None
    # yt-dlp spells VP9 profile strings "vp09.xx"; the family signature is "vp9"
    if codec.startswith("vp09"):
        return "vp9" + codec[4:]
    return codec


def _mime_type(fmt: dict[str, Any], vcodec: str | None, acodec: str | None) -> str:
    kind = "video" if vcodec else "audio"
    ext = fmt.get("ext") or "unknown"
    codecs = ", ".join(c for c in (vcodec, acodec) if c)
    return f'{kind}/{ext}; codecs="{codecs}"'


def _format_to_fields(fmt: dict[str, Any]) -> dict[str, Any] | None:
    """Map one yt-dlp format dict onto StreamVariant fields.

    Returns:
        Field dict, or None for entries without media (storyboards, etc.)
        and for manifest-delivered formats (HLS, DASH) that have no single
        downloadable URL
    """
    protocol = fmt.get("protocol")
    if protocol and protocol not in DIRECT_PROTOCOLS:
        logger.debug(f"Skipping format {fmt.get('format_id')!r}: {protocol} delivery")
        return None

    vcodec = _codec_string(fmt.get("vcodec"))
    acodec = _codec_string(fmt.get("acodec"))
    if not vcodec and not acodec:
        return None

    tbr = fmt.get("tbr") or fmt.get("vbr") or fmt.get("abr") or 0
    note = (fmt.get("format_note") or "").lower()
    size = fmt.get("filesize") or fmt.get("filesize_approx")
    drm = fmt.get("drm_families") or (("unknown",) if fmt.get("has_drm") else ())

    fields: dict[str, Any] = {
        "format_id": str(fmt.get("format_id") or ""),
        "mime_type": _mime_type(fmt, vcodec, acodec),
        "has_video": bool(vcodec),
        "has_audio": bool(acodec),
        "bitrate": int(float(tbr) * 1000),
        "content_length": int(size) if size else None,
        "url": fmt.get("url"),
        "drm_families": tuple(drm),
    }
    if vcodec:
        fields.update(
            width=fmt.get("width"),
            height=fmt.get("height"),
            fps=fmt.get("fps"),
            quality_label=f"{fmt['height']}p" if fmt.get("height") else None,
        )
    if acodec:
        fields.update(
            audio_quality=fmt.get("format_note") if not vcodec else None,
            language=fmt.get("language"),
            is_original="original" in note,
        )
    return fields


def variants_from_formats(formats: list[dict[str, Any]]) -> list[StreamVariant]:
    """Validate yt-dlp formats into StreamVariants, dropping malformed entries.

    A language-tagged audio format counts as part of a multi-track set when
    the video offers audio in more than one language.
    """
    rows = [f for f in (_format_to_fields(fmt) for fmt in formats) if f is not None]

    languages = {r.get("language") for r in rows if r["has_audio"] and r.get("language")}
    multi_track = len(languages) > 1

    variants: list[StreamVariant] = []
    for row in rows:
        if row["has_audio"]:
            row["audio_track"] = multi_track and bool(row.get("language"))
        try:
            variants.append(StreamVariant.model_validate(row))
        except ValidationError as e:
            logger.warning(f"Skipping malformed format {row.get('format_id')!r}: {e}")
    return variants


def basic_info_from_json(info: dict[str, Any]) -> BasicInfo:
    thumbnails: list[Thumbnail] = []
    if info.get("thumbnail"):
        thumbnails.append(Thumbnail(url=info["thumbnail"]))
    # yt-dlp lists thumbnails worst-first
    for thumb in reversed(info.get("thumbnails") or []):
        url = thumb.get("url")
        if url and all(t.url != url for t in thumbnails):
            thumbnails.append(
                Thumbnail(url=url, width=thumb.get("width"), height=thumb.get("height"))
            )

    duration = info.get("duration")
    return BasicInfo(
        title=info.get("title"),
        author=info.get("uploader") or info.get("channel"),
        duration=int(duration) if duration is not None else None,
        description=info.get("description"),
        thumbnails=tuple(thumbnails),
    )


class YtDlpCatalogueProvider(ExternalTool):
    """Catalogue provider that shells out to the yt-dlp executable.

    Args:
        timeout: Seconds allowed for one metadata fetch
        extra_args: Arguments passed to every invocation (cookies, proxy...)
    """

    env_var = "TUBEPICK_YT_DLP"

    def __init__(self, timeout: float = METADATA_TIMEOUT, extra_args: list[str] | None = None):
        self.timeout = timeout
        self.extra_args = list(extra_args or [])

    @property
    def name(self) -> str:
        return "yt-dlp"

    def create_session(self) -> None:
        # yt-dlp fetches a fresh player on every run
        return None

    def fetch_catalogue(self, video_id: str, client: str, session: Any = None) -> Catalogue:
        """Fetch the catalogue for ``video_id`` as seen by ``client``.

        Raises:
            CatalogueUnavailableError: yt-dlp failed for a non-content reason
                or returned unparseable output
        """
        player_client = CLIENT_MAP.get(client.lower(), client.lower())
        args = [
            "--dump-single-json",
            "--no-download",
            "--no-playlist",
            "--no-warnings",
            "--extractor-args",
            f"youtube:player_client={player_client}",
            f"https://www.youtube.com/watch?v={video_id}",
        ]
        logger.debug(f"Fetching catalogue for {video_id} with client {player_client}")
        result = self.run([*self.extra_args, *args])

        if not result.success:
            if result.error:
                raise CatalogueUnavailableError(
                    result.error, details={"video_id": video_id, "client": client}
                )
            error = parse_yt_dlp_error(result.stderr or "")
            status = playability_from_error(error)
            if status is not None:
                return Catalogue(video_id=video_id, client=client, playability=status)
            raise CatalogueUnavailableError(
                error.message or "yt-dlp failed",
                details={
                    "video_id": video_id,
                    "client": client,
                    "category": error.category,
                    **error.details,
                },
            )

        try:
            info = json.loads(result.stdout)
        except json.JSONDecodeError as e:
            raise CatalogueUnavailableError(
                f"Invalid JSON response: {e}", details={"video_id": video_id, "client": client}
            ) from e

        return Catalogue(
            video_id=video_id,
            client=client,
            variants=tuple(variants_from_formats(info.get("formats") or [])),
            basic_info=basic_info_from_json(info),
        )

    def materialize_url(self, variant: StreamVariant, session: Any = None) -> str | None:
        """yt-dlp only reports formats it could decipher, so this is a lookup."""
        return variant.url
