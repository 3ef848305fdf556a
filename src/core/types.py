"""Shared typed models.

This module defines immutable data models used by transforms, ingest,
store, and SDK layers to keep interfaces explicit and stable.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Generic, Literal, Mapping, TypeVar, Union

from core.constants import (
    ADMIN_COLUMN_CODE,
    ADMIN_COLUMN_COUNTRY_CODE,
    ADMIN_COLUMN_NAME,
    ADMIN_COLUMN_TYPE,
    COLUMN_ADMIN_AREA,
    COLUMN_COORDINATES,
    COLUMN_COUNTRY_CODE,
    COLUMN_DESCRIPTION,
    COLUMN_FUNCTION_CODE,
    COLUMN_LOCATION_CODE,
    COLUMN_NAME,
    COLUMN_NUMERIC_LOCATION_CODE,
    COLUMN_STATUS,
    DEFAULT_ADMIN_AREA_DELIMITER,
    DEFAULT_DELIMITER,
    DEFAULT_SOURCE_ENCODING,
)

RowOutcomeKind = Literal[
    "imported",
    "skipped_duplicate",
    "skipped_invalid",
    "country_header",
    "failed",
]
PipelineStage = Literal[
    "idle",
    "loading_lookups",
    "streaming_rows",
    "finalizing",
    "done",
    "failed",
]
ItemT = TypeVar("ItemT")


@dataclass(frozen=True)
class ColumnMapping:
    """Column names of a location listing.

    Attributes:
        country_code: Two-letter country code column.
        location_code: Location code column (LOCODE without country prefix).
        name: City or place name column.
        description: Free-text description column, also carries headers.
        admin_area: Administrative-area code column.
        function_code: Positional function indicator column.
        status: Status code column.
        numeric_location_code: Optional numeric location code column.
        coordinates: ``DDMMH DDDMMH`` coordinate token column.
    """

    country_code: str = COLUMN_COUNTRY_CODE
    location_code: str = COLUMN_LOCATION_CODE
    name: str = COLUMN_NAME
    description: str = COLUMN_DESCRIPTION
    admin_area: str = COLUMN_ADMIN_AREA
    function_code: str = COLUMN_FUNCTION_CODE
    status: str = COLUMN_STATUS
    numeric_location_code: str = COLUMN_NUMERIC_LOCATION_CODE
    coordinates: str = COLUMN_COORDINATES


@dataclass(frozen=True)
class AdminAreaColumnMapping:
    """Column names of an administrative-area listing."""

    country_code: str = ADMIN_COLUMN_COUNTRY_CODE
    code: str = ADMIN_COLUMN_CODE
    name: str = ADMIN_COLUMN_NAME
    area_type: str = ADMIN_COLUMN_TYPE


@dataclass(frozen=True)
class SourceFormat:
    """Delimited text layout of one listing.

    Attributes:
        delimiter: Single-character field separator.
        encoding: Text encoding used to decode the file.
    """

    delimiter: str = DEFAULT_DELIMITER
    encoding: str = DEFAULT_SOURCE_ENCODING


@dataclass(frozen=True)
class ImportOptions:
    """Location import options.

    Attributes:
        source_uris: Ordered location listings (paths or ``s3://`` URIs).
        admin_area_uri: Optional administrative-area listing used for names.
        source_format: Layout of the location listings.
        admin_area_format: Layout of the administrative-area listing.
        columns: Location listing column names.
        admin_area_columns: Administrative-area listing column names.
        seed_reference: Seed status and function codes before importing.
    """

    source_uris: tuple[str, ...]
    admin_area_uri: str | None = None
    source_format: SourceFormat = field(default_factory=SourceFormat)
    admin_area_format: SourceFormat = field(
        default_factory=lambda: SourceFormat(delimiter=DEFAULT_ADMIN_AREA_DELIMITER)
    )
    columns: ColumnMapping = field(default_factory=ColumnMapping)
    admin_area_columns: AdminAreaColumnMapping = field(default_factory=AdminAreaColumnMapping)
    seed_reference: bool = True


@dataclass(frozen=True)
class SourceRow:
    """Raw delimited row before classification.

    Attributes:
        source_uri: Listing the row was read from.
        line_number: One-based data row number within the listing.
        fields: Column name to raw cell value.
    """

    source_uri: str
    line_number: int
    fields: Mapping[str, str]


@dataclass(frozen=True)
class Coordinates:
    """Signed decimal-degree coordinates rendered with fixed precision."""

    latitude: str
    longitude: str


@dataclass(frozen=True)
class CountryHeaderRow:
    """Row declaring the country for the rows that follow it."""

    line_number: int
    country_code: str
    country_name: str


@dataclass(frozen=True)
class LocationRow:
    """Structurally valid location row.

    Attributes:
        line_number: One-based data row number.
        country_code: Declared country code, None when the column is blank.
        location_code: Upper-cased location code.
        name: City or place name.
        description: Free-text description.
        admin_area_code: Optional administrative-area code.
        function_indicator: Raw positional function indicator.
        status_code: Optional status code.
        numeric_location_code: Optional numeric location code.
        coordinates_token: Raw coordinate token.
    """

    line_number: int
    country_code: str | None
    location_code: str
    name: str
    description: str
    admin_area_code: str | None
    function_indicator: str
    status_code: str | None
    numeric_location_code: int | None
    coordinates_token: str


@dataclass(frozen=True)
class InvalidRow:
    """Row rejected by structural validation."""

    line_number: int
    reason: str
    message: str


ClassifiedRow = Union[CountryHeaderRow, LocationRow, InvalidRow]


@dataclass(frozen=True)
class CountryRef:
    """Detached reference to a persisted country."""

    id: int
    code: str
    name: str


@dataclass(frozen=True)
class AdminAreaRecord:
    """One administrative area read from a listing."""

    country_code: str
    code: str
    name: str
    area_type: str | None = None


@dataclass(frozen=True)
class LocationPayload:
    """Resolved attributes for a new location record."""

    country_id: int
    location_code: str
    name: str
    description: str
    function_ids: tuple[int, ...]
    status_id: int | None
    administrative_area_id: int | None
    coordinates: Coordinates | None
    numeric_location_code: int | None


@dataclass(frozen=True)
class RowOutcome:
    """Result of applying one row to the store."""

    kind: RowOutcomeKind
    line_number: int
    message: str | None = None

    @classmethod
    def imported(cls, line_number: int) -> "RowOutcome":
        """Build an outcome for a newly inserted location."""
        return cls(kind="imported", line_number=line_number)

    @classmethod
    def header(cls, line_number: int) -> "RowOutcome":
        """Build an outcome for a country header row."""
        return cls(kind="country_header", line_number=line_number)

    @classmethod
    def duplicate(cls, line_number: int, message: str) -> "RowOutcome":
        """Build an outcome for an already-present location."""
        return cls(kind="skipped_duplicate", line_number=line_number, message=message)

    @classmethod
    def invalid(cls, line_number: int, message: str) -> "RowOutcome":
        """Build an outcome for a rejected row."""
        return cls(kind="skipped_invalid", line_number=line_number, message=message)

    @classmethod
    def failure(cls, line_number: int, message: str) -> "RowOutcome":
        """Build an outcome for a row whose store write failed."""
        return cls(kind="failed", line_number=line_number, message=message)


@dataclass(frozen=True)
class FileImportSummary:
    """Counters for one processed listing."""

    source_uri: str
    stage: PipelineStage
    imported: int = 0
    skipped_duplicate: int = 0
    skipped_invalid: int = 0
    failed: int = 0
    country_headers: int = 0


@dataclass(frozen=True)
class ImportSummary:
    """Run-level import report.

    Attributes:
        files: Per-listing counters in processing order.
        messages: Bounded sample of diagnostic messages.
    """

    files: tuple[FileImportSummary, ...]
    messages: tuple[str, ...] = ()

    @property
    def imported(self) -> int:
        """Total locations inserted."""
        return sum(item.imported for item in self.files)

    @property
    def skipped_duplicate(self) -> int:
        """Total rows skipped because the location already existed."""
        return sum(item.skipped_duplicate for item in self.files)

    @property
    def skipped_invalid(self) -> int:
        """Total rows rejected by validation or resolution."""
        return sum(item.skipped_invalid for item in self.files)

    @property
    def failed(self) -> int:
        """Total rows whose store write failed."""
        return sum(item.failed for item in self.files)

    @property
    def country_headers(self) -> int:
        """Total country header rows applied."""
        return sum(item.country_headers for item in self.files)


@dataclass(frozen=True)
class SeedSummary:
    """Counts from seeding reference data."""

    inserted: int
    skipped: int


@dataclass(frozen=True)
class AdminAreaImportSummary:
    """Counts from importing an administrative-area listing."""

    upserted: int
    skipped_unknown_country: int
    skipped_invalid: int


@dataclass(frozen=True)
class Page(Generic[ItemT]):
    """One page of a paginated listing."""

    items: tuple[ItemT, ...]
    total_count: int
    current_page: int
    total_pages: int
