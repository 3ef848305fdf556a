"""Integration tests for the location import workflow."""

from __future__ import annotations

from pathlib import Path

import pytest

from core.config import LocusConfig
from core.errors import LocusIngestError
from core.types import ImportOptions, SourceFormat
from store.registry_sdk import LocusClient
from tests.fixture_paths import fixture_path


def _options(*sources: str) -> ImportOptions:
    return ImportOptions(
        source_uris=sources or (str(fixture_path("listings/ports_nz_in.csv")),),
        admin_area_uri=str(fixture_path("listings/admin_areas.tsv")),
        admin_area_format=SourceFormat(delimiter="\t"),
    )


def test_import_pipeline_counts_every_row_outcome(locus_config: LocusConfig) -> None:
    """End-to-end import should classify, resolve and count each row."""
    client = LocusClient(locus_config)

    summary = client.import_locations(_options())

    assert (
        summary.imported,
        summary.skipped_duplicate,
        summary.skipped_invalid,
        summary.failed,
        summary.country_headers,
    ) == (4, 1, 2, 0, 2) and summary.files[0].stage == "done"


def test_import_pipeline_second_run_imports_nothing(locus_config: LocusConfig) -> None:
    """Re-running an import should leave the store unchanged."""
    client = LocusClient(locus_config)
    client.import_locations(_options())
    stored_before = client.list_locations(limit=100).total_count

    summary = client.import_locations(_options())
    stored_after = client.list_locations(limit=100).total_count

    assert (
        summary.imported == 0
        and summary.skipped_duplicate == 5
        and stored_before == stored_after == 4
    )


def test_import_pipeline_attributes_rows_to_header_country(locus_config: LocusConfig) -> None:
    """Rows following the NZ header should belong to NZ with or without a country cell."""
    client = LocusClient(locus_config)
    client.import_locations(_options())

    page = client.list_locations(country_code="NZ", populate=True)

    assert [view.unlocode for view in page.items] == ["NZAKL", "NZWLG"]


def test_import_pipeline_decodes_location_attributes(locus_config: LocusConfig) -> None:
    """Stored locations should carry decoded coordinates, functions and area names."""
    client = LocusClient(locus_config)
    client.import_locations(_options())

    view = client.find_location("NZ", "AKL")

    assert (
        view is not None
        and view.coordinates is not None
        and (view.coordinates.latitude, view.coordinates.longitude)
        == ("-36.850000", "174.783333")
        and view.function_codes == ("1", "4")
        and view.status_code == "AI"
        and view.administrative_area_name == "Auckland"
    )


def test_import_pipeline_unknown_country_is_not_stored(locus_config: LocusConfig) -> None:
    """Rows with an unresolvable country should leave no trace in the store."""
    client = LocusClient(locus_config)
    summary = client.import_locations(_options())

    countries = client.list_countries()

    assert (
        [country.code for country in countries.items] == ["IN", "NZ"]
        and client.find_location("XX", "FOO") is None
        and any("unknown country XX" in message for message in summary.messages)
    )


def test_import_pipeline_missing_listing_is_fatal_after_earlier_commits(
    locus_config: LocusConfig,
    tmp_path: Path,
) -> None:
    """An unreadable listing should abort the run but keep earlier rows."""
    client = LocusClient(locus_config)
    options = _options(
        str(fixture_path("listings/ports_nz_in.csv")),
        str(tmp_path / "missing.csv"),
    )

    with pytest.raises(LocusIngestError):
        client.import_locations(options)

    assert client.list_locations().total_count == 4


def test_import_pipeline_country_context_resets_per_listing(
    locus_config: LocusConfig,
    tmp_path: Path,
) -> None:
    """A new listing should not inherit the previous listing's country."""
    orphan_listing = tmp_path / "orphans.csv"
    orphan_listing.write_text(
        "COUNTRYCODE,LOCODE,CITY,FUNCTIONCODE\n,ORP,Orphan,1-------\n", encoding="utf-8"
    )
    client = LocusClient(locus_config)

    summary = client.import_locations(
        _options(str(fixture_path("listings/ports_nz_in.csv")), str(orphan_listing))
    )

    assert summary.files[1].skipped_invalid == 1 and summary.files[1].imported == 0
