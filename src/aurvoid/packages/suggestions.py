"""Suggestions shown when a package name does not resolve."""

from typing import Optional, Sequence

from aurvoid.config import DEFAULT_SUGGESTION_CAP
from aurvoid.packages.models import PackageRecord


class SuggestionEngine:
    """Caps filtered search results for "did you mean" display.

    Records are kept in the order the API returned them; relevance is
    already enforced by the resolver's search filter.

    Args:
        cap: Default maximum number of suggestions
    """

    def __init__(self, cap: int = DEFAULT_SUGGESTION_CAP) -> None:
        if cap < 0:
            raise ValueError(f"cap must be non-negative, got {cap}")
        self.cap = cap

    def rank(self, results: Sequence[PackageRecord], cap: Optional[int] = None) -> list[PackageRecord]:
        """Return at most cap records from results, preserving order.

        Args:
            results: Filtered search results
            cap: Override for the engine's default cap

        Returns:
            The first cap records (all of them if there are fewer)
        """
        limit = self.cap if cap is None else cap
        if limit < 0:
            raise ValueError(f"cap must be non-negative, got {limit}")
        return list(results[:limit])
