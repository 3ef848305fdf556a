"""Core constants used across Locus modules.

This module centralizes listing layout defaults and store settings.
Keeping values here avoids magic literals in business logic.
"""

from __future__ import annotations

from pathlib import Path

DEFAULT_DATA_ROOT = Path(".locus")
DEFAULT_DATABASE_FILE_NAME = "locus.db"
DEFAULT_DB_TIMEOUT_SECONDS = 30
DEFAULT_LOG_LEVEL = "info"
SUPPORTED_LOG_LEVELS = ("debug", "info", "warning", "error")

DEFAULT_DELIMITER = ","
DEFAULT_ADMIN_AREA_DELIMITER = "\t"
DEFAULT_SOURCE_ENCODING = "utf-8-sig"
SUPPORTED_DELIMITERS = (",", "\t", ";", "|")

COUNTRY_HEADER_MARKER = "."
FUNCTION_ABSENT_MARKER = "-"
COORDINATE_DECIMAL_PLACES = 6
LATITUDE_DEGREE_DIGITS = 2
LONGITUDE_DEGREE_DIGITS = 3
MINUTE_DIGITS = 2
COUNTRY_CODE_LENGTH = 2

COLUMN_COUNTRY_CODE = "COUNTRYCODE"
COLUMN_LOCATION_CODE = "LOCODE"
COLUMN_NAME = "CITY"
COLUMN_DESCRIPTION = "DESC"
COLUMN_ADMIN_AREA = "ADMINAREA"
COLUMN_FUNCTION_CODE = "FUNCTIONCODE"
COLUMN_STATUS = "STATUS"
COLUMN_NUMERIC_LOCATION_CODE = "LOCATIONCODE"
COLUMN_COORDINATES = "COORDS"

ADMIN_COLUMN_COUNTRY_CODE = "COUNTRYCODE"
ADMIN_COLUMN_CODE = "ADMINCODE"
ADMIN_COLUMN_NAME = "ADMINAREANAME"
ADMIN_COLUMN_TYPE = "ADMINAREATYPE"

PROGRESS_LOG_INTERVAL = 250
MAX_SAMPLED_MESSAGES = 20
DEFAULT_PAGE_SIZE = 25
MAX_PAGE_SIZE = 500
