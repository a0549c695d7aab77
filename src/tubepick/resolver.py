"""
Resolution orchestrator: identifier + request -> ResolvedMedia.

Pipeline per request:

    parse identifier
      -> fetch catalogue (primary client, one fetch fallback to the alternate)
      -> reject login-gated / unplayable content
      -> organize + select (video, audio)
      -> DRM gate
      -> materialize URLs
           on failure, first attempt only: refetch from the alternate client
           with the chosen format IDs pinned, and select again
      -> best-effort muxed stream (may consult extra clients)
      -> assemble

Every terminal failure raises a ResolutionError subclass. Only the muxed
stream and cover image lookups swallow failures.
"""

from __future__ import annotations

import logging
import time
from functools import partial
from typing import Any

from tubepick.config.loader import TubepickConfig, get_config
from tubepick.exceptions import (
    CatalogueStaleError,
    CatalogueUnavailableError,
    DrmProtectedError,
    LoginRequiredError,
    NoAudioFormatError,
    NoVideoFormatError,
    UnplayableError,
    UrlResolutionFailedError,
)
from tubepick.models.catalogue import Catalogue, Playability
from tubepick.models.request import SelectionRequest
from tubepick.models.result import ResolutionResult, ResolvedMedia, ResolvedStream
from tubepick.models.variant import StreamVariant
from tubepick.models.video_id import VideoID
from tubepick.parsing import clean_author, parse_release_info
from tubepick.protocols import CatalogueProvider, ExistenceProbe
from tubepick.selection import organize, select_audio, select_muxed, select_video
from tubepick.session import SessionHandle
from tubepick.tools.http import probe_exists
from tubepick.utils.logging import log_timed

logger = logging.getLogger(__name__)

# First attempt plus one pinned retry against the alternate client
MAX_URL_ATTEMPTS = 2


def _reject_unplayable(catalogue: Catalogue, details: dict[str, Any]) -> None:
    """Raise the taxonomy error for a catalogue the provider won't serve."""
    status = catalogue.playability
    if status.status == Playability.LOGIN_REQUIRED:
        raise LoginRequiredError(
            status.reason or "This video requires signing in", details=dict(details)
        )
    if status.status == Playability.UNPLAYABLE:
        reason = status.reason or "Unknown reason"
        if "private" in reason.lower():
            message = "This video is private"
        else:
            message = f"Video unavailable: {reason}"
        raise UnplayableError(message, reason=reason, details=dict(details))


def _check_drm(selection: ResolutionResult, details: dict[str, Any]) -> None:
    protected = [v for v in selection.selected() if v.is_drm_protected]
    if protected:
        families = sorted({f for v in protected for f in v.drm_families})
        raise DrmProtectedError(
            "This video is DRM-protected and cannot be downloaded",
            details={**details, "format_ids": [v.format_id for v in protected]},
            drm_families=families,
        )


class Resolver:
    """Resolve YouTube identifiers into downloadable streams.

    Args:
        provider: Catalogue backend (see protocols.CatalogueProvider)
        config: Resolved config; defaults to get_config()
        probe: Existence check for cover images; defaults to an HTTP HEAD
        session: Shared session handle; one is created from the provider
            if not given. Pass the same handle to several resolvers to share
            a refreshed player between them.
    """

    def __init__(
        self,
        provider: CatalogueProvider,
        *,
        config: TubepickConfig | None = None,
        probe: ExistenceProbe | None = None,
        session: SessionHandle | None = None,
    ):
        self.provider = provider
        self.config = config or get_config()
        self.probe = probe or partial(probe_exists, timeout=self.config.probe_timeout)
        self.session = session or SessionHandle(
            provider.create_session,
            refresh_period=self.config.session_refresh_minutes * 60,
        )

    # ------------------------------------------------------------------
    # Fetching
    # ------------------------------------------------------------------

    def _fetch_once(self, video_id: str, client: str) -> tuple[Catalogue, Any]:
        """Fetch from one client, refreshing the session once if it is stale."""
        session = self.session.get()
        try:
            return self.provider.fetch_catalogue(video_id, client, session), session
        except CatalogueStaleError:
            logger.info("Session stale, refreshing and refetching")
            self.session.invalidate(session)
            session = self.session.get()
            try:
                return self.provider.fetch_catalogue(video_id, client, session), session
            except CatalogueStaleError as e:
                raise CatalogueUnavailableError(
                    f"Session still stale after refresh: {e}",
                    details={"video_id": video_id, "client": client},
                ) from e

    def _fetch(
        self,
        video_id: str,
        client: str,
        clients_tried: list[str],
        details: dict[str, Any],
    ) -> tuple[Catalogue, Any]:
        """Fetch a playable catalogue, falling back to the alternate client once.

        Raises:
            LoginRequiredError, UnplayableError: Content rejected, no retry
            CatalogueUnavailableError: Neither client produced streams
        """
        last_error: CatalogueUnavailableError | None = None
        for candidate in (client, self.config.alternate_for(client)):
            clients_tried.append(candidate)
            try:
                catalogue, session = self._fetch_once(video_id, candidate)
            except CatalogueUnavailableError as e:
                logger.info(f"Catalogue fetch failed with client {candidate}: {e}")
                last_error = e
                continue

            _reject_unplayable(catalogue, details)

            if catalogue.has_streams:
                return catalogue, session
            logger.info(f"Client {candidate} returned no streams")

        message = "Could not fetch streaming data"
        if last_error is not None:
            message = f"{message}: {last_error.message}"
        raise CatalogueUnavailableError(
            message, details=dict(details), clients_tried=list(clients_tried)
        ) from last_error

    # ------------------------------------------------------------------
    # Selection
    # ------------------------------------------------------------------

    def select(self, catalogue: Catalogue, request: SelectionRequest) -> ResolutionResult:
        """Select video, audio and (optional) muxed variants from a catalogue.

        Raises:
            NoVideoFormatError, NoAudioFormatError: Nothing selectable
        """
        buckets = organize(catalogue.adaptive, request.pinned)

        if request.audio_only:
            audio = select_audio(buckets, request.codec, request.dub_language)
            return ResolutionResult(
                codec_family=audio.family,
                audio=audio.variant,
                muxed=select_muxed(catalogue.muxed, request.quality),
                audio_family=audio.family,
                dub_language=audio.dub_language,
            )

        video, family = select_video(buckets, request.codec, request.quality)
        audio = select_audio(buckets, family, request.dub_language)
        return ResolutionResult(
            codec_family=family,
            video=video,
            audio=audio.variant,
            muxed=select_muxed(catalogue.muxed, request.quality),
            audio_family=audio.family,
            dub_language=audio.dub_language,
        )

    def _materialize(self, variant: StreamVariant | None, session: Any) -> str | None:
        if variant is None:
            return None
        return self.provider.materialize_url(variant, session)

    # ------------------------------------------------------------------
    # Muxed (best effort)
    # ------------------------------------------------------------------

    def _muxed_stream(self, variant: StreamVariant | None, session: Any) -> ResolvedStream | None:
        url = self._materialize(variant, session)
        if variant is None or url is None:
            return None
        return ResolvedStream.muxed_stream(variant, url)

    def _find_muxed(
        self,
        video_id: str,
        selection: ResolutionResult,
        catalogue: Catalogue,
        session: Any,
        request: SelectionRequest,
    ) -> ResolvedStream | None:
        """Materialize the selected muxed variant, else look on other clients. Never raises."""
        try:
            muxed = self._muxed_stream(selection.muxed, session)
        except Exception as e:
            logger.debug(f"Muxed URL failed for client {catalogue.client}: {e}")
            muxed = None

        if muxed is not None or request.audio_only:
            return muxed

        for client in self.config.muxed_clients:
            if client == catalogue.client:
                continue
            try:
                other, other_session = self._fetch_once(video_id, client)
                if not other.playability.is_ok:
                    continue
                variant = select_muxed(other.muxed, request.quality)
                muxed = self._muxed_stream(variant, other_session)
            except Exception as e:
                logger.debug(f"Muxed lookup with client {client} failed: {e}")
                continue
            if muxed is not None:
                logger.debug(f"Muxed stream found with client {client}")
                return muxed

        return None

    # ------------------------------------------------------------------
    # Assembly
    # ------------------------------------------------------------------

    def _cover(self, video_id: VideoID, catalogue: Catalogue) -> str | None:
        """maxresdefault.jpg if it exists, else the catalogue's first thumbnail."""
        cover = video_id.cover_url
        try:
            if self.probe(cover):
                return cover
        except Exception as e:
            logger.debug(f"Cover probe failed for {cover}: {e}")
        return catalogue.basic_info.thumbnail

    def _assemble(
        self,
        video_id: VideoID,
        catalogue: Catalogue,
        selection: ResolutionResult,
        urls: dict[str, str],
        muxed: ResolvedStream | None,
        request: SelectionRequest,
        clients_tried: list[str],
    ) -> ResolvedMedia:
        info = catalogue.basic_info
        release = parse_release_info(info.description)
        family = selection.codec_family

        media = ResolvedMedia(
            video_id=video_id.video_id,
            client=catalogue.client,
            codec_family=family,
            title=info.title.strip() if info.title else None,
            author=clean_author(info.author),
            duration=info.duration,
            thumbnail=info.thumbnail,
            description=info.description,
            muxed=muxed,
            dub_language=selection.dub_language,
            album=release.get("album"),
            copyright=release.get("copyright"),
            release_date=release.get("release_date"),
            clients_tried=list(clients_tried),
        )
        if selection.video is not None:
            media.video = ResolvedStream.video_stream(selection.video, urls["video"], family)
        audio_family = selection.audio_family or family
        media.audio = ResolvedStream.audio_stream(selection.audio, urls["audio"], audio_family)
        if request.audio_only:
            media.cover = self._cover(video_id, catalogue)
        return media

    # ------------------------------------------------------------------
    # Entry point
    # ------------------------------------------------------------------

    def resolve(
        self,
        identifier: str,
        request: SelectionRequest | None = None,
    ) -> ResolvedMedia:
        """Resolve an identifier into downloadable streams.

        Args:
            identifier: YouTube URL or 11-character video ID
            request: Quality/codec/audio-only/dub selection; defaults apply

        Returns:
            ResolvedMedia with URL-materialized streams

        Raises:
            InvalidIdentifierError: Unparseable identifier
            CatalogueUnavailableError: No catalogue from any client
            LoginRequiredError, UnplayableError: Content rejected
            NoVideoFormatError, NoAudioFormatError: Nothing selectable
            DrmProtectedError: Selected stream is DRM-protected
            UrlResolutionFailedError: No URL even after the pinned retry
        """
        start = time.time()
        request = request or SelectionRequest()
        video_id = VideoID.parse(identifier)
        details: dict[str, Any] = {"video_id": video_id.video_id, **request.describe()}
        clients_tried: list[str] = []
        log_timed(f"Resolving {video_id} ({request.codec}, {request.quality})")

        client = self.config.primary_client
        attempt_request = request
        for attempt in range(1, MAX_URL_ATTEMPTS + 1):
            catalogue, session = self._fetch(
                video_id.video_id, client, clients_tried, details
            )

            try:
                selection = self.select(catalogue, attempt_request)
            except (NoVideoFormatError, NoAudioFormatError) as e:
                e.details.update({k: v for k, v in details.items() if k not in e.details})
                if attempt_request.pinned is None:
                    raise
                raise UrlResolutionFailedError(
                    "Pinned formats are not offered by the fallback client",
                    details={**details, "pinned": attempt_request.pinned.model_dump()},
                    clients_tried=list(clients_tried),
                ) from e

            _check_drm(selection, details)

            urls = {
                "video": self._materialize(selection.video, session),
                "audio": self._materialize(selection.audio, session),
            }
            missing = [
                role
                for role, variant in (("video", selection.video), ("audio", selection.audio))
                if variant is not None and not urls[role]
            ]
            if not missing:
                muxed = self._find_muxed(
                    video_id.video_id, selection, catalogue, session, request
                )
                media = self._assemble(
                    video_id, catalogue, selection, urls, muxed, request, clients_tried
                )
                log_timed(f"Resolved {video_id} via {catalogue.client}", start)
                return media

            logger.info(
                f"No {' / '.join(missing)} URL from client {catalogue.client} "
                f"(attempt {attempt}/{MAX_URL_ATTEMPTS})"
            )
            client = self.config.alternate_for(catalogue.client)
            attempt_request = request.with_pinned(
                video=selection.video.format_id if selection.video else None,
                audio=selection.audio.format_id if selection.audio else None,
            )

        raise UrlResolutionFailedError(
            "Could not obtain download URLs. The format may not be available.",
            details=dict(details),
            clients_tried=list(clients_tried),
        )


def resolve(
    identifier: str,
    request: SelectionRequest | None = None,
    *,
    provider: CatalogueProvider | None = None,
) -> ResolvedMedia:
    """Convenience wrapper: resolve with the yt-dlp provider and global config."""
    if provider is None:
        from tubepick.tools.yt_dlp import YtDlpCatalogueProvider

        provider = YtDlpCatalogueProvider(timeout=get_config().metadata_timeout)
    return Resolver(provider).resolve(identifier, request)
