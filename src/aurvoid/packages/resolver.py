"""AUR RPC client: exact package lookup and filtered search.

The RPC search endpoint matches on substrings of names and descriptions,
which is far too permissive for "did you mean" suggestions. Search results
are therefore passed through classify_match(), a strict allow-list: a hit is
kept only if its name equals the query, starts with it, or contains it as a
whole token.
"""

import logging
import re
from typing import Any, Optional

import requests

from aurvoid.config import VoidConfig
from aurvoid.errors import DecodeError, NetworkError
from aurvoid.packages.models import PackageRecord, RelevanceTier

logger = logging.getLogger(__name__)

RPC_VERSION = 5


def classify_match(name: str, query: str) -> Optional[RelevanceTier]:
    """Classify how a package name matches a search query.

    Comparison is case-insensitive. A token match requires the query to be
    bounded on both sides by a non-alphanumeric character or the end of the
    name, so "foo" matches "oo-foo-bar" but not "barfoo" or "éfoo".
    Non-ASCII letters and digits count as alphanumeric.

    Args:
        name: Package name from a search result
        query: What the user typed

    Returns:
        The strongest matching tier, or None if the name does not match

    Examples:
        >>> classify_match("FooBar", "foo")
        <RelevanceTier.PREFIX: 'prefix'>
        >>> classify_match("python-foo", "foo")
        <RelevanceTier.TOKEN: 'token'>
        >>> classify_match("barfoo", "foo") is None
        True
    """
    name = name.lower()
    query = query.lower()
    if not query:
        return None
    if name == query:
        return RelevanceTier.EXACT
    if name.startswith(query):
        return RelevanceTier.PREFIX
    if re.search(rf"(?<![^\W_]){re.escape(query)}(?![^\W_])", name):
        return RelevanceTier.TOKEN
    return None


def filter_relevant(records: list[PackageRecord], query: str) -> list[PackageRecord]:
    """Drop every record whose name does not match query, keeping input order."""
    return [record for record in records if classify_match(record.name, query) is not None]


class PackageResolver:
    """Queries the AUR RPC API for package metadata.

    Args:
        config: Settings providing the RPC URL and optional timeout
        session: requests session to use (a new one is created if None)
    """

    def __init__(self, config: VoidConfig, session: Optional[requests.Session] = None) -> None:
        self._config = config
        self._session = session if session is not None else requests.Session()

    def resolve_exact(self, name: str) -> Optional[PackageRecord]:
        """Look up a package by exact name.

        Args:
            name: Package name

        Returns:
            The first result of the info query, or None if there is none

        Raises:
            NetworkError: If the request fails
            DecodeError: If the response is not a valid RPC payload
        """
        records = self._query({"type": "info", "arg[]": name})
        if not records:
            logger.debug("No info result for %s", name)
            return None
        return records[0]

    def search(self, query: str) -> list[PackageRecord]:
        """Search for packages related to query.

        Args:
            query: Search term

        Returns:
            Matching records in the order the API returned them

        Raises:
            NetworkError: If the request fails
            DecodeError: If the response is not a valid RPC payload
        """
        records = self._query({"type": "search", "arg": query})
        filtered = filter_relevant(records, query)
        logger.debug("Search for %s: %d results, %d kept", query, len(records), len(filtered))
        return filtered

    def _query(self, params: dict[str, str]) -> list[PackageRecord]:
        url = self._config.rpc_url
        full_params: dict[str, Any] = {"v": RPC_VERSION, **params}
        logger.debug("GET %s params=%s", url, full_params)

        try:
            response = self._session.get(url, params=full_params, timeout=self._config.http_timeout)
            response.raise_for_status()
        except requests.RequestException as e:
            raise NetworkError(f"AUR request failed: {e}") from e

        try:
            payload = response.json()
        except ValueError as e:
            raise DecodeError(f"AUR returned a non-JSON response: {e}") from e

        return _parse_results(payload)


def _parse_results(payload: Any) -> list[PackageRecord]:
    if not isinstance(payload, dict):
        raise DecodeError("AUR response is not a JSON object")

    results = payload.get("results")
    if not isinstance(results, list):
        raise DecodeError("AUR response has no 'results' list")

    # Rejected queries ("Query arg too small.", "Too many package results.")
    # still carry an empty results list
    if payload.get("type") == "error":
        logger.debug("AUR returned an error: %s", payload.get("error", "unknown error"))

    records = []
    for entry in results:
        if not isinstance(entry, dict):
            raise DecodeError("AUR result entry is not a JSON object")
        try:
            records.append(PackageRecord.from_rpc(entry))
        except (KeyError, TypeError) as e:
            raise DecodeError(f"AUR result entry is malformed: {e}") from e
    return records
