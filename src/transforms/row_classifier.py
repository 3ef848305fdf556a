"""Raw listing row classification.

This module validates raw column mappings and classifies them as
country headers, location rows, or invalid rows with a reason.
"""

from __future__ import annotations

from typing import Mapping

from core.constants import COUNTRY_CODE_LENGTH, COUNTRY_HEADER_MARKER
from core.types import (
    ClassifiedRow,
    ColumnMapping,
    CountryHeaderRow,
    InvalidRow,
    LocationRow,
)


def classify_row(
    fields: Mapping[str, str | None],
    line_number: int,
    columns: ColumnMapping,
) -> ClassifiedRow:
    """Classify one raw listing row.

    Header rows carry no location code and a name or description that
    starts with the ``.`` marker, e.g. ``NZ,,.NEW ZEALAND``.

    Args:
        fields: Column name to raw cell value.
        line_number: One-based data row number.
        columns: Listing column names.

    Returns:
        Country header, validated location row, or invalid row.
    """
    missing_columns = [
        column
        for column in (columns.country_code, columns.location_code)
        if column not in fields
    ]
    if missing_columns:
        return InvalidRow(
            line_number=line_number,
            reason="missing_column",
            message=f"row {line_number}: missing column(s) {', '.join(missing_columns)}",
        )
    country_code = _cell(fields, columns.country_code).upper()
    location_code = _cell(fields, columns.location_code).upper()
    name = _cell(fields, columns.name)
    description = _cell(fields, columns.description)
    if not location_code:
        return _classify_header(line_number, country_code, name, description)
    if country_code and not _is_country_code(country_code):
        return InvalidRow(
            line_number=line_number,
            reason="malformed_country_code",
            message=f"row {line_number}: malformed country code '{country_code}'",
        )
    if not name:
        return InvalidRow(
            line_number=line_number,
            reason="missing_name",
            message=f"row {line_number}: location {location_code} has no name",
        )
    raw_numeric_code = _cell(fields, columns.numeric_location_code)
    numeric_location_code = _parse_optional_int(raw_numeric_code)
    if raw_numeric_code and numeric_location_code is None:
        return InvalidRow(
            line_number=line_number,
            reason="malformed_numeric_location_code",
            message=(
                f"row {line_number}: numeric location code '{raw_numeric_code}' "
                "is not an integer"
            ),
        )
    return LocationRow(
        line_number=line_number,
        country_code=country_code or None,
        location_code=location_code,
        name=name,
        description=description,
        admin_area_code=_cell(fields, columns.admin_area) or None,
        function_indicator=_cell(fields, columns.function_code),
        status_code=_cell(fields, columns.status).upper() or None,
        numeric_location_code=numeric_location_code,
        coordinates_token=_cell(fields, columns.coordinates),
    )


def _classify_header(
    line_number: int,
    country_code: str,
    name: str,
    description: str,
) -> ClassifiedRow:
    header_text = name or description
    if not header_text.startswith(COUNTRY_HEADER_MARKER):
        return InvalidRow(
            line_number=line_number,
            reason="missing_location_code",
            message=f"row {line_number}: no location code and no country header marker",
        )
    if not _is_country_code(country_code):
        return InvalidRow(
            line_number=line_number,
            reason="missing_country_code",
            message=f"row {line_number}: country header without a usable country code",
        )
    country_name = header_text[len(COUNTRY_HEADER_MARKER) :].strip()
    if not country_name:
        return InvalidRow(
            line_number=line_number,
            reason="missing_country_name",
            message=f"row {line_number}: country header for {country_code} has no name",
        )
    return CountryHeaderRow(
        line_number=line_number,
        country_code=country_code,
        country_name=country_name,
    )


def _cell(fields: Mapping[str, str | None], column: str) -> str:
    value = fields.get(column)
    if value is None:
        return ""
    return value.strip()


def _is_country_code(value: str) -> bool:
    return len(value) == COUNTRY_CODE_LENGTH and value.isascii() and value.isalpha()


def _parse_optional_int(raw_value: str) -> int | None:
    if not raw_value:
        return None
    try:
        return int(raw_value)
    except ValueError:
        return None
