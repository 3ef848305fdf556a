"""Administrative-area listing ingestion.

This module reads tab-separated administrative-area listings. The
records name the areas that location rows reference by code, and a
listing can also be upserted on its own.
"""

from __future__ import annotations

from typing import Iterator, Mapping

from core.config import LocusConfig
from core.logging_config import get_logger
from core.types import (
    AdminAreaColumnMapping,
    AdminAreaImportSummary,
    AdminAreaRecord,
    CountryRef,
    SourceFormat,
)
from ingest.input_reader import iter_source_rows
from store.reference_store import ReferenceStore

_LOGGER = get_logger(__name__)

AdminAreaKey = tuple[str, str]


def load_admin_area_names(
    source_uri: str,
    source_format: SourceFormat,
    columns: AdminAreaColumnMapping,
    config: LocusConfig,
) -> dict[AdminAreaKey, AdminAreaRecord]:
    """Read a listing into records keyed by (country code, area code).

    Incomplete rows are skipped. A later row for the same key wins.

    Raises:
        LocusIngestError: If the listing cannot be read.
    """
    records: dict[AdminAreaKey, AdminAreaRecord] = {}
    for record in _iter_admin_area_records(source_uri, source_format, columns, config):
        if record is not None:
            records[(record.country_code, record.code)] = record
    _LOGGER.info("admin_area_names_loaded", source_uri=source_uri, count=len(records))
    return records


def import_admin_areas(
    source_uri: str,
    source_format: SourceFormat,
    columns: AdminAreaColumnMapping,
    store: ReferenceStore,
    config: LocusConfig,
) -> AdminAreaImportSummary:
    """Upsert every area of a listing whose country is stored.

    Args:
        source_uri: Listing path or ``s3://`` URI.
        source_format: Listing layout.
        columns: Listing column names.
        store: Reference store receiving the upserts.
        config: Runtime configuration.

    Returns:
        Upsert and skip counts.
    """
    countries: dict[str, CountryRef | None] = {}
    upserted = skipped_unknown_country = skipped_invalid = 0
    for record in _iter_admin_area_records(source_uri, source_format, columns, config):
        if record is None:
            skipped_invalid += 1
            continue
        if record.country_code not in countries:
            countries[record.country_code] = store.find_country(record.country_code)
        country = countries[record.country_code]
        if country is None:
            skipped_unknown_country += 1
            continue
        store.ensure_admin_area(country.id, record.code, record.name, record.area_type)
        upserted += 1
    summary = AdminAreaImportSummary(
        upserted=upserted,
        skipped_unknown_country=skipped_unknown_country,
        skipped_invalid=skipped_invalid,
    )
    _LOGGER.info(
        "admin_areas_imported",
        source_uri=source_uri,
        upserted=summary.upserted,
        skipped_unknown_country=summary.skipped_unknown_country,
        skipped_invalid=summary.skipped_invalid,
    )
    return summary


def _iter_admin_area_records(
    source_uri: str,
    source_format: SourceFormat,
    columns: AdminAreaColumnMapping,
    config: LocusConfig,
) -> Iterator[AdminAreaRecord | None]:
    """Yield parsed records, or None for rows missing a required cell."""
    for source_row in iter_source_rows(source_uri, source_format, config):
        yield _parse_record(source_row.fields, columns)


def _parse_record(
    fields: Mapping[str, str | None],
    columns: AdminAreaColumnMapping,
) -> AdminAreaRecord | None:
    country_code = (fields.get(columns.country_code) or "").strip().upper()
    code = (fields.get(columns.code) or "").strip()
    name = (fields.get(columns.name) or "").strip()
    if not country_code or not code or not name:
        return None
    area_type = (fields.get(columns.area_type) or "").strip() or None
    return AdminAreaRecord(country_code=country_code, code=code, name=name, area_type=area_type)
