"""Service protocols for dependency inversion.

Batch processing only needs a lookup callable and a way to page through
records; these protocols describe both without importing the services layer.
"""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from typing import Any, Protocol, runtime_checkable


class LookupClientProtocol(Protocol):
    """Protocol for the remote resolution client.

    Example:
        >>> from placekit.services.placekey_client import PlacekeyClient
        >>> client: LookupClientProtocol = PlacekeyClient(config)
        >>> client.lookup({"latitude": 37.7371, "longitude": -122.44283})
    """

    def lookup(
        self,
        query: dict[str, Any],
        fields: list[str] | None = None,
    ) -> dict[str, Any]:
        """Resolve a single query to a result payload."""


@runtime_checkable
class PagedCollection(Protocol):
    """A record source that is read page by page.

    Database-backed sources implement this so batch processing never loads
    the whole collection at once.
    """

    def count(self) -> int:
        """Total number of records."""

    def iter_pages(self, page_size: int) -> Iterator[Sequence[Any]]:
        """Yield consecutive pages of at most ``page_size`` records."""
