"""Import orchestration for location listings.

This module streams each configured listing through classification,
country context, decoding, and idempotent store writes. Listings are
processed one after another and rows strictly in file order, because
location rows depend on the country declared by earlier header rows.
"""

from __future__ import annotations

from collections import Counter
from contextlib import closing
from typing import Mapping

from core.config import LocusConfig
from core.constants import MAX_SAMPLED_MESSAGES, PROGRESS_LOG_INTERVAL
from core.errors import LocusError
from core.logging_config import get_logger
from core.types import (
    AdminAreaRecord,
    FileImportSummary,
    ImportOptions,
    ImportSummary,
    PipelineStage,
    RowOutcome,
)
from ingest.admin_areas import load_admin_area_names
from ingest.input_reader import iter_source_rows
from ingest.lookup_cache import load_lookup_cache
from ingest.reference_seed import seed_reference_data
from ingest.row_processor import RowProcessor
from store.reference_store import ReferenceStore

_LOGGER = get_logger(__name__)


class ImportPipelineRunner:
    """Sequential runner over all listings of one import request."""

    def __init__(
        self,
        options: ImportOptions,
        config: LocusConfig,
        store: ReferenceStore,
    ) -> None:
        self._options = options
        self._config = config
        self._store = store
        self._messages: list[str] = []
        self._stage: PipelineStage = "idle"

    @property
    def stage(self) -> PipelineStage:
        """Stage of the listing currently or most recently processed."""
        return self._stage

    def run(self) -> ImportSummary:
        """Import every listing and return the run summary.

        Raises:
            LocusIngestError: If a listing cannot be read.
            LocusStoreConnectionError: If the store becomes unreachable.
        """
        if self._options.seed_reference:
            seed_reference_data(self._store)
        admin_areas = self._load_admin_areas()
        file_summaries = [
            self._import_file(source_uri, admin_areas) for source_uri in self._options.source_uris
        ]
        summary = ImportSummary(files=tuple(file_summaries), messages=tuple(self._messages))
        _log_import_completion(summary)
        return summary

    def _load_admin_areas(self) -> Mapping[tuple[str, str], AdminAreaRecord]:
        if not self._options.admin_area_uri:
            return {}
        return load_admin_area_names(
            self._options.admin_area_uri,
            self._options.admin_area_format,
            self._options.admin_area_columns,
            self._config,
        )

    def _import_file(
        self,
        source_uri: str,
        admin_areas: Mapping[tuple[str, str], AdminAreaRecord],
    ) -> FileImportSummary:
        self._transition(source_uri, "idle")
        counts: Counter[str] = Counter()
        try:
            self._transition(source_uri, "loading_lookups")
            lookup = load_lookup_cache(self._store)
            processor = RowProcessor(self._store, lookup, self._options.columns, admin_areas)
            self._transition(source_uri, "streaming_rows")
            rows = iter_source_rows(source_uri, self._options.source_format, self._config)
            with closing(rows):
                for source_row in rows:
                    outcome = processor.process(source_row)
                    counts[outcome.kind] += 1
                    self._record(source_uri, outcome)
                    imported = counts["imported"]
                    if outcome.kind == "imported" and imported % PROGRESS_LOG_INTERVAL == 0:
                        _LOGGER.info("import_progress", source_uri=source_uri, imported=imported)
            self._transition(source_uri, "finalizing")
        except LocusError as error:
            self._transition(source_uri, "failed")
            _LOGGER.error(
                "file_import_failed",
                source_uri=source_uri,
                error=str(error),
                imported=counts["imported"],
            )
            raise
        summary = _file_summary(source_uri, counts)
        self._transition(source_uri, "done")
        _LOGGER.info(
            "file_imported",
            source_uri=source_uri,
            imported=summary.imported,
            skipped_duplicate=summary.skipped_duplicate,
            skipped_invalid=summary.skipped_invalid,
            failed=summary.failed,
            country_headers=summary.country_headers,
        )
        return summary

    def _record(self, source_uri: str, outcome: RowOutcome) -> None:
        if outcome.message is None:
            return
        if outcome.kind == "skipped_invalid":
            _LOGGER.warning("row_skipped", source_uri=source_uri, reason=outcome.message)
        else:
            _LOGGER.debug("row_skipped", source_uri=source_uri, reason=outcome.message)
        if len(self._messages) < MAX_SAMPLED_MESSAGES:
            self._messages.append(f"{source_uri}: {outcome.message}")

    def _transition(self, source_uri: str, stage: PipelineStage) -> None:
        self._stage = stage
        _LOGGER.debug("pipeline_stage", source_uri=source_uri, stage=stage)


def import_locations(
    options: ImportOptions,
    config: LocusConfig,
    store: ReferenceStore,
) -> ImportSummary:
    """Run the location import pipeline.

    Args:
        options: Import request options.
        config: Runtime configuration.
        store: Reference store receiving writes.

    Returns:
        Run summary with per-listing counters.

    Raises:
        LocusIngestError: If a listing cannot be read.
        LocusStoreConnectionError: If the store becomes unreachable.
    """
    runner = ImportPipelineRunner(options, config, store)
    return runner.run()


def _file_summary(source_uri: str, counts: Counter[str]) -> FileImportSummary:
    return FileImportSummary(
        source_uri=source_uri,
        stage="done",
        imported=counts["imported"],
        skipped_duplicate=counts["skipped_duplicate"],
        skipped_invalid=counts["skipped_invalid"],
        failed=counts["failed"],
        country_headers=counts["country_header"],
    )


def _log_import_completion(summary: ImportSummary) -> None:
    """Log run completion with aggregate counters."""
    _LOGGER.info(
        "import_completed",
        files=len(summary.files),
        imported=summary.imported,
        skipped_duplicate=summary.skipped_duplicate,
        skipped_invalid=summary.skipped_invalid,
        failed=summary.failed,
        country_headers=summary.country_headers,
    )
