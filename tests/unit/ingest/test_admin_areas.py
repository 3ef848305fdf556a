"""Unit tests for administrative-area listing ingestion."""

from __future__ import annotations

from core.config import LocusConfig
from core.types import AdminAreaColumnMapping, AdminAreaRecord, SourceFormat
from ingest.admin_areas import import_admin_areas, load_admin_area_names
from store.reference_store import ReferenceStore
from tests.fixture_paths import fixture_path

_TSV = SourceFormat(delimiter="\t")


def test_load_admin_area_names_keys_by_country_and_code(locus_config: LocusConfig) -> None:
    """Complete rows should be keyed by (country, code); incomplete rows dropped."""
    records = load_admin_area_names(
        str(fixture_path("listings/admin_areas.tsv")),
        _TSV,
        AdminAreaColumnMapping(),
        locus_config,
    )

    assert len(records) == 5 and records[("IN", "MH")] == AdminAreaRecord(
        "IN", "MH", "Maharashtra", "State"
    )


def test_import_admin_areas_skips_unknown_countries(
    reference_store: ReferenceStore,
    locus_config: LocusConfig,
) -> None:
    """Areas of countries that are not stored should be skipped."""
    reference_store.ensure_country("NZ", "NEW ZEALAND")
    reference_store.ensure_country("IN", "INDIA")

    summary = import_admin_areas(
        str(fixture_path("listings/admin_areas.tsv")),
        _TSV,
        AdminAreaColumnMapping(),
        reference_store,
        locus_config,
    )

    assert (summary.upserted, summary.skipped_unknown_country, summary.skipped_invalid) == (
        4,
        1,
        1,
    )


def test_import_admin_areas_is_idempotent(
    reference_store: ReferenceStore,
    locus_config: LocusConfig,
) -> None:
    """Re-importing a listing should update areas in place."""
    country = reference_store.ensure_country("IN", "INDIA")
    listing = str(fixture_path("listings/admin_areas.tsv"))
    import_admin_areas(listing, _TSV, AdminAreaColumnMapping(), reference_store, locus_config)
    area_id = reference_store.ensure_admin_area(country.id, "MH", None)

    import_admin_areas(listing, _TSV, AdminAreaColumnMapping(), reference_store, locus_config)

    assert reference_store.ensure_admin_area(country.id, "MH", None) == area_id
