"""Unit tests for the registry SDK client."""

from __future__ import annotations

import pytest

from core.config import LocusConfig
from core.errors import LocusNotFoundError
from core.types import ImportOptions
from store.registry_sdk import LocusClient
from tests.fixture_paths import fixture_path


def test_client_import_without_seed_rejects_every_location(locus_config: LocusConfig) -> None:
    """Without function codes no location can be stored."""
    client = LocusClient(locus_config)
    options = ImportOptions(
        source_uris=(str(fixture_path("listings/ports_nz_in.csv")),),
        seed_reference=False,
    )

    summary = client.import_locations(options)

    assert summary.imported == 0 and summary.skipped_invalid == 7


def test_client_run_import_spec(locus_config: LocusConfig) -> None:
    """Import specs should run through the same pipeline."""
    client = LocusClient(locus_config)

    summary = client.run_import_spec(str(fixture_path("import_spec/valid_import.yaml")))

    assert summary.imported == 4


def test_client_get_location_by_id(locus_config: LocusConfig) -> None:
    """Locations found by natural key should also resolve by id."""
    client = LocusClient(locus_config)
    listing = str(fixture_path("listings/ports_nz_in.csv"))
    client.import_locations(ImportOptions(source_uris=(listing,)))
    found = client.find_location("IN", "MAA")

    assert found is not None and client.get_location(found.id).function_codes == ("1", "2", "3")


def test_client_get_location_unknown_id_raises(locus_config: LocusConfig) -> None:
    """Unknown ids should raise not-found errors."""
    with LocusClient(locus_config) as client:
        with pytest.raises(LocusNotFoundError):
            client.get_location(1)


def test_client_with_database_url_points_at_new_store(
    locus_config: LocusConfig,
    tmp_path,
) -> None:
    """Cloned clients should use the new database URL."""
    other_url = f"sqlite:///{tmp_path / 'other.db'}"

    clone = LocusClient(locus_config).with_database_url(other_url)

    assert clone.config.database_url == other_url and clone.config.data_root == tmp_path
