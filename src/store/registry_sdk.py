"""Python SDK for location registry operations.

This module exposes high-level APIs for seeding reference data,
importing listings, and reading the imported locations back.
"""

from __future__ import annotations

from dataclasses import replace
from types import TracebackType

from sqlalchemy.engine import Engine

from core.config import LocusConfig
from core.constants import DEFAULT_PAGE_SIZE
from core.import_spec import load_import_spec
from core.types import (
    AdminAreaColumnMapping,
    AdminAreaImportSummary,
    CountryRef,
    ImportOptions,
    ImportSummary,
    Page,
    SeedSummary,
    SourceFormat,
)
from ingest.admin_areas import import_admin_areas
from ingest.pipeline import import_locations
from ingest.reference_seed import seed_reference_data
from store.database import open_store_engine
from store.location_queries import LocationQueries, LocationView
from store.reference_store import ReferenceStore


class LocusClient:
    """Primary SDK entry point for registry workflows."""

    def __init__(self, config: LocusConfig | None = None) -> None:
        """Create SDK client.

        The store is opened on first use.

        Args:
            config: Optional runtime configuration.
        """
        self._config = config or LocusConfig.from_env()
        self._engine: Engine | None = None

    @property
    def config(self) -> LocusConfig:
        """Runtime configuration of this client."""
        return self._config

    def __enter__(self) -> "LocusClient":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> None:
        self.close()

    def seed_reference_data(self) -> SeedSummary:
        """Insert the fixed status and function codes when absent.

        Returns:
            Counts of inserted and already-present codes.

        Raises:
            LocusStoreError: If the store rejects a write.
        """
        return seed_reference_data(self._reference_store())

    def import_locations(self, options: ImportOptions) -> ImportSummary:
        """Import location listings and release the store afterwards.

        The store connection is disposed whether the run succeeds or
        fails; later calls reopen it.

        Args:
            options: Import options.

        Returns:
            Run summary.

        Raises:
            LocusIngestError: If a listing cannot be read.
            LocusStoreConnectionError: If the store becomes unreachable.
        """
        try:
            return import_locations(options, self._config, self._reference_store())
        finally:
            self.close()

    def import_admin_areas(
        self,
        source_uri: str,
        source_format: SourceFormat | None = None,
        columns: AdminAreaColumnMapping | None = None,
    ) -> AdminAreaImportSummary:
        """Upsert the administrative areas of a listing.

        Args:
            source_uri: Listing path or ``s3://`` URI.
            source_format: Listing layout, tab-separated by default.
            columns: Listing column names.

        Returns:
            Upsert and skip counts.
        """
        defaults = ImportOptions(source_uris=())
        return import_admin_areas(
            source_uri,
            source_format or defaults.admin_area_format,
            columns or defaults.admin_area_columns,
            self._reference_store(),
            self._config,
        )

    def run_import_spec(self, spec_file: str) -> ImportSummary:
        """Run the import declared by a YAML import spec.

        Args:
            spec_file: Path to YAML import-spec file.

        Returns:
            Run summary.
        """
        return self.import_locations(load_import_spec(spec_file))

    def get_location(self, location_id: int, populate: bool = True) -> LocationView:
        """Return one location by id."""
        return self._queries().get_location(location_id, populate=populate)

    def find_location(
        self,
        country_code: str,
        location_code: str,
        populate: bool = True,
    ) -> LocationView | None:
        """Return a location by country and location code, None when absent."""
        return self._queries().find_location(country_code, location_code, populate=populate)

    def list_locations(
        self,
        page: int = 1,
        limit: int = DEFAULT_PAGE_SIZE,
        country_code: str | None = None,
        populate: bool = False,
    ) -> Page[LocationView]:
        """Return one page of locations ordered by country and code."""
        return self._queries().list_locations(
            page=page, limit=limit, country_code=country_code, populate=populate
        )

    def list_countries(self, page: int = 1, limit: int = DEFAULT_PAGE_SIZE) -> Page[CountryRef]:
        """Return one page of countries ordered by code."""
        return self._queries().list_countries(page=page, limit=limit)

    def with_database_url(self, database_url: str) -> "LocusClient":
        """Clone the client against a different database.

        Args:
            database_url: SQLAlchemy database URL.

        Returns:
            New SDK client instance.
        """
        return LocusClient(replace(self._config, database_url=database_url))

    def close(self) -> None:
        """Release pooled store connections."""
        if self._engine is not None:
            self._engine.dispose()
            self._engine = None

    def _reference_store(self) -> ReferenceStore:
        return ReferenceStore(self._open_engine())

    def _queries(self) -> LocationQueries:
        return LocationQueries(self._open_engine())

    def _open_engine(self) -> Engine:
        if self._engine is None:
            self._engine = open_store_engine(self._config)
        return self._engine
