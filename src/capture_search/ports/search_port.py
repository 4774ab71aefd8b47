from __future__ import annotations

from typing import Protocol, runtime_checkable

from capture_search.domain.models import SearchOutcome


@runtime_checkable
class SearchPort(Protocol):
    def search(self, image_url: str, query: str | None = None) -> SearchOutcome:
        """Run a reverse image search for a hosted image. Raises SearchError."""
