"""Unit tests for raw listing row classification."""

from __future__ import annotations

from core.types import ColumnMapping, CountryHeaderRow, InvalidRow, LocationRow
from transforms.row_classifier import classify_row


def _fields(**overrides: str) -> dict[str, str]:
    fields = {
        "COUNTRYCODE": "IN",
        "LOCODE": "BOM",
        "CITY": "Mumbai",
        "DESC": "",
        "ADMINAREA": "MH",
        "FUNCTIONCODE": "1-------",
        "STATUS": "aa",
        "LOCATIONCODE": "",
        "COORDS": "1852N 07250E",
    }
    fields.update(overrides)
    return fields


def test_classify_row_builds_location_row() -> None:
    """Complete location rows should be normalized into LocationRow."""
    row = classify_row(_fields(LOCODE="bom"), 3, ColumnMapping())

    assert row == LocationRow(
        line_number=3,
        country_code="IN",
        location_code="BOM",
        name="Mumbai",
        description="",
        admin_area_code="MH",
        function_indicator="1-------",
        status_code="AA",
        numeric_location_code=None,
        coordinates_token="1852N 07250E",
    )


def test_classify_row_detects_country_header_in_name() -> None:
    """Rows without a location code and a dotted name should be headers."""
    fields = _fields(COUNTRYCODE="nz", LOCODE="", CITY=".NEW ZEALAND")
    row = classify_row(fields, 1, ColumnMapping())

    assert row == CountryHeaderRow(line_number=1, country_code="NZ", country_name="NEW ZEALAND")


def test_classify_row_detects_country_header_in_description() -> None:
    """Header marker should also be read from the description column."""
    row = classify_row(_fields(LOCODE="", CITY="", DESC=" .INDIA"), 1, ColumnMapping())

    assert isinstance(row, CountryHeaderRow) and row.country_name == "INDIA"


def test_classify_row_blank_country_column_is_none() -> None:
    """A blank country column should defer to the country context."""
    row = classify_row(_fields(COUNTRYCODE=" "), 2, ColumnMapping())

    assert isinstance(row, LocationRow) and row.country_code is None


def test_classify_row_rejects_row_without_code_or_marker() -> None:
    """Rows lacking a location code and a header marker should be invalid."""
    row = classify_row(_fields(LOCODE="", CITY="Mumbai"), 4, ColumnMapping())

    assert isinstance(row, InvalidRow) and row.reason == "missing_location_code"


def test_classify_row_rejects_header_without_country_code() -> None:
    """Header rows need a two-letter country code."""
    row = classify_row(_fields(COUNTRYCODE="", LOCODE="", CITY=".INDIA"), 1, ColumnMapping())

    assert isinstance(row, InvalidRow) and row.reason == "missing_country_code"


def test_classify_row_rejects_header_without_name() -> None:
    """A bare header marker should not create a nameless country."""
    row = classify_row(_fields(LOCODE="", CITY="."), 1, ColumnMapping())

    assert isinstance(row, InvalidRow) and row.reason == "missing_country_name"


def test_classify_row_rejects_malformed_country_code() -> None:
    """Country codes must be two ASCII letters."""
    row = classify_row(_fields(COUNTRYCODE="IND"), 5, ColumnMapping())

    assert isinstance(row, InvalidRow) and row.reason == "malformed_country_code"


def test_classify_row_rejects_location_without_name() -> None:
    """Location rows need a name."""
    row = classify_row(_fields(CITY=""), 6, ColumnMapping())

    assert isinstance(row, InvalidRow) and row.reason == "missing_name"


def test_classify_row_parses_numeric_location_code() -> None:
    """Numeric location codes should be parsed as integers."""
    row = classify_row(_fields(LOCATIONCODE="356"), 7, ColumnMapping())

    assert isinstance(row, LocationRow) and row.numeric_location_code == 356


def test_classify_row_rejects_non_integer_numeric_code() -> None:
    """Non-integer numeric location codes should be invalid."""
    row = classify_row(_fields(LOCATIONCODE="3a"), 8, ColumnMapping())

    assert isinstance(row, InvalidRow) and row.reason == "malformed_numeric_location_code"


def test_classify_row_reports_missing_key_columns() -> None:
    """Listings without the country or location column should be rejected per row."""
    row = classify_row({"CITY": "Mumbai"}, 1, ColumnMapping())

    assert isinstance(row, InvalidRow) and row.reason == "missing_column"


def test_classify_row_uses_custom_column_names() -> None:
    """Custom column mappings should be honoured."""
    columns = ColumnMapping(country_code="COUNTRY", location_code="CODE", name="PLACE")
    row = classify_row({"COUNTRY": "NZ", "CODE": "NPE", "PLACE": "Napier"}, 1, columns)

    assert isinstance(row, LocationRow) and (row.country_code, row.location_code) == ("NZ", "NPE")
