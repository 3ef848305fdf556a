"""Per-row resolution and persistence.

This module applies one classified listing row to the store and
reports the result as a ``RowOutcome``. Validation and soft decoding
problems become outcomes; store failures other than lost connectivity
are converted to ``failed`` outcomes at a single boundary.
"""

from __future__ import annotations

from typing import Mapping

from core.errors import LocusStoreConnectionError, LocusStoreError
from core.logging_config import get_logger
from core.types import (
    AdminAreaRecord,
    ColumnMapping,
    CountryHeaderRow,
    CountryRef,
    InvalidRow,
    LocationPayload,
    LocationRow,
    RowOutcome,
    SourceRow,
)
from ingest.country_context import CountryContextTracker
from ingest.lookup_cache import LookupCache
from store.reference_store import ReferenceStore
from transforms.coordinates import decode_coordinates
from transforms.function_codes import decode_function_indicator, resolve_function_ids
from transforms.row_classifier import classify_row

_LOGGER = get_logger(__name__)


class RowProcessor:
    """Turns source rows of one listing into store writes."""

    def __init__(
        self,
        store: ReferenceStore,
        lookup: LookupCache,
        columns: ColumnMapping,
        admin_areas: Mapping[tuple[str, str], AdminAreaRecord],
    ) -> None:
        self._store = store
        self._lookup = lookup
        self._columns = columns
        self._admin_areas = admin_areas
        self._tracker = CountryContextTracker(store, lookup)
        self._admin_area_ids: dict[tuple[int, str], int] = {}

    @property
    def current_country(self) -> CountryRef | None:
        """Country context after the most recently processed row."""
        return self._tracker.current_country

    def process(self, source_row: SourceRow) -> RowOutcome:
        """Apply one row and report its outcome.

        Args:
            source_row: Raw row read from the listing.

        Returns:
            Outcome describing what happened to the row.

        Raises:
            LocusStoreConnectionError: If the store becomes unreachable.
        """
        line_number = source_row.line_number
        try:
            return self._apply(source_row)
        except LocusStoreConnectionError:
            raise
        except LocusStoreError as error:
            _LOGGER.error(
                "row_failed",
                source_uri=source_row.source_uri,
                line_number=line_number,
                error=str(error),
            )
            return RowOutcome.failure(line_number, f"row {line_number}: {error}")

    def _apply(self, source_row: SourceRow) -> RowOutcome:
        row = classify_row(source_row.fields, source_row.line_number, self._columns)
        if isinstance(row, InvalidRow):
            return RowOutcome.invalid(row.line_number, row.message)
        if isinstance(row, CountryHeaderRow):
            self._tracker.apply_header(row)
            return RowOutcome.header(row.line_number)
        return self._apply_location(row)

    def _apply_location(self, row: LocationRow) -> RowOutcome:
        country = self._tracker.resolve(row)
        if country is None:
            declared = row.country_code or "(none)"
            return RowOutcome.invalid(
                row.line_number,
                f"row {row.line_number}: unknown country {declared} for {row.location_code}",
            )
        identifiers = decode_function_indicator(row.function_indicator)
        function_ids = resolve_function_ids(identifiers, self._lookup.function_ids)
        if not function_ids:
            return RowOutcome.invalid(
                row.line_number,
                f"row {row.line_number}: {country.code}{row.location_code} has no functions "
                f"(indicator '{row.function_indicator}')",
            )
        if self._store.location_exists(country.id, row.location_code):
            return _duplicate(row, country)
        payload = LocationPayload(
            country_id=country.id,
            location_code=row.location_code,
            name=row.name,
            description=row.description,
            function_ids=function_ids,
            status_id=self._lookup.status_id(row.status_code),
            administrative_area_id=self._ensure_admin_area(row, country),
            coordinates=decode_coordinates(row.coordinates_token),
            numeric_location_code=row.numeric_location_code,
        )
        if not self._store.insert_location_if_absent(payload):
            return _duplicate(row, country)
        return RowOutcome.imported(row.line_number)

    def _ensure_admin_area(self, row: LocationRow, country: CountryRef) -> int | None:
        """Upsert the referenced area ahead of the location insert.

        The area write commits on its own. If the insert then fails the
        area stays stored; it is keyed by (country, code), so a later run
        reuses it instead of creating another.
        """
        if row.admin_area_code is None:
            return None
        cache_key = (country.id, row.admin_area_code)
        if cache_key in self._admin_area_ids:
            return self._admin_area_ids[cache_key]
        record = self._admin_areas.get((country.code, row.admin_area_code))
        area_id = self._store.ensure_admin_area(
            country.id,
            row.admin_area_code,
            record.name if record is not None else None,
            record.area_type if record is not None else None,
        )
        self._admin_area_ids[cache_key] = area_id
        return area_id


def _duplicate(row: LocationRow, country: CountryRef) -> RowOutcome:
    return RowOutcome.duplicate(
        row.line_number,
        f"row {row.line_number}: {country.code}{row.location_code} already stored",
    )
