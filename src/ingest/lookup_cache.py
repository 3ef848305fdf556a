"""In-memory lookup tables for row resolution.

This module snapshots status codes, function codes, and known
countries keyed by natural code before rows are streamed.
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping

from core.logging_config import get_logger
from core.types import CountryRef
from store.reference_store import ReferenceStore

_LOGGER = get_logger(__name__)


@dataclass(frozen=True)
class LookupCache:
    """Read-only code-to-reference maps.

    Attributes:
        status_ids: Status code to store id.
        function_ids: Function code ("1".."7") to store id.
        countries: Country code to country reference.
    """

    status_ids: Mapping[str, int]
    function_ids: Mapping[str, int]
    countries: Mapping[str, CountryRef]

    def status_id(self, code: str | None) -> int | None:
        """Return the id of a status code, None when blank or unknown."""
        if not code:
            return None
        return self.status_ids.get(code.upper())

    def country(self, code: str) -> CountryRef | None:
        """Return a cached country reference by code."""
        return self.countries.get(code.upper())


def load_lookup_cache(store: ReferenceStore) -> LookupCache:
    """Load lookup maps from the store.

    Args:
        store: Reference store to read from.

    Returns:
        Frozen lookup cache.

    Raises:
        LocusStoreError: If the store cannot be read.
    """
    cache = LookupCache(
        status_ids=MappingProxyType(store.status_code_ids()),
        function_ids=MappingProxyType(store.function_code_ids()),
        countries=MappingProxyType(store.country_refs()),
    )
    if not cache.function_ids:
        _LOGGER.warning(
            "function_codes_missing",
            detail="no function codes stored; every location row will be rejected",
        )
    _LOGGER.debug(
        "lookup_cache_loaded",
        status_codes=len(cache.status_ids),
        function_codes=len(cache.function_ids),
        countries=len(cache.countries),
    )
    return cache
