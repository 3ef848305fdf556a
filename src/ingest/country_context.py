"""Country context carried across listing rows.

Listings declare a country once in a header row and then list its
locations. The tracker holds the most recently declared country for
one listing; a fresh tracker is created for every file.
"""

from __future__ import annotations

from core.errors import LocusStoreError
from core.logging_config import get_logger
from core.types import CountryHeaderRow, CountryRef, LocationRow
from ingest.lookup_cache import LookupCache
from store.reference_store import ReferenceStore

_LOGGER = get_logger(__name__)


class CountryContextTracker:
    """Most recently seen country while scanning one listing in order."""

    def __init__(self, store: ReferenceStore, lookup: LookupCache) -> None:
        self._store = store
        self._lookup = lookup
        self._current: CountryRef | None = None

    @property
    def current_country(self) -> CountryRef | None:
        """Country applied to rows without an explicit country code."""
        return self._current

    def apply_header(self, row: CountryHeaderRow) -> CountryRef:
        """Upsert the declared country and make it current.

        A failed write clears the context, so rows after the header are
        not attributed to the previously declared country.

        Args:
            row: Country header row.

        Returns:
            Persisted country reference.

        Raises:
            LocusStoreError: If the country cannot be stored.
        """
        try:
            country = self._store.ensure_country(row.country_code, row.country_name)
        except LocusStoreError:
            self._current = None
            raise
        self._current = country
        _LOGGER.debug("country_context_set", country_code=country.code, name=country.name)
        return country

    def resolve(self, row: LocationRow) -> CountryRef | None:
        """Return the country a location row belongs to.

        A blank country column inherits the current context. A declared
        code different from the context is resolved against the lookup
        cache and then the store; the context changes only when it
        resolves.

        Args:
            row: Validated location row.

        Returns:
            Country reference, or None when the country is unknown.
        """
        declared_code = row.country_code
        if declared_code is None:
            return self._current
        if self._current is not None and self._current.code == declared_code:
            return self._current
        country = self._lookup.country(declared_code) or self._store.find_country(declared_code)
        if country is None:
            return None
        self._current = country
        return country
