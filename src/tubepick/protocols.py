"""Protocols (interfaces) consumed by the resolver.

These define the contracts that catalogue backends must satisfy. The
resolver depends only on these protocols, never on concrete providers.
"""

from __future__ import annotations

from typing import Any, Protocol

from tubepick.models.catalogue import Catalogue
from tubepick.models.variant import StreamVariant


class CatalogueProvider(Protocol):
    """Contract for stream catalogue backends."""

    def create_session(self) -> Any:
        """Create a fresh session/player object for later fetches.

        Backends without session state may return None.
        """
        ...  # pragma: no cover

    def fetch_catalogue(self, video_id: str, client: str, session: Any) -> Catalogue:
        """Fetch every stream variant offered to ``client`` for ``video_id``.

        Login gates and unplayable content are reported through
        ``Catalogue.playability`` rather than raised.

        Raises:
            CatalogueUnavailableError: The backend cannot produce a catalogue
                (network, parse errors)
            CatalogueStaleError: ``session`` is no longer accepted and must
                be refreshed
        """
        ...  # pragma: no cover

    def materialize_url(self, variant: StreamVariant, session: Any) -> str | None:
        """Return a direct URL for ``variant``, or None if it cannot be obtained.

        Pure lookup when the variant already carries a URL; otherwise a
        decipher step. Must never raise.
        """
        ...  # pragma: no cover


class ExistenceProbe(Protocol):
    """Best-effort check that a URL points at an existing resource."""

    def __call__(self, url: str) -> bool:
        ...  # pragma: no cover
