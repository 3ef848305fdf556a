"""Coordinate token decoding.

This module converts ``DDMM[N|S] DDDMM[E|W]`` tokens into signed decimal
degrees and renders decimal degrees back into the same token layout.
"""

from __future__ import annotations

import re

from core.constants import (
    COORDINATE_DECIMAL_PLACES,
    LATITUDE_DEGREE_DIGITS,
    LONGITUDE_DEGREE_DIGITS,
    MINUTE_DIGITS,
)
from core.types import Coordinates

_DIGITS_PATTERN = re.compile(r"[0-9]+")
_MAX_LATITUDE = 90.0
_MAX_LONGITUDE = 180.0


def decode_coordinates(raw_token: str | None) -> Coordinates | None:
    """Decode a coordinate token into decimal-degree strings.

    Args:
        raw_token: Latitude block and longitude block separated by whitespace.

    Returns:
        Coordinates fixed to six decimal places, or None when the token is
        empty or malformed.
    """
    if not raw_token:
        return None
    parts = raw_token.split()
    if len(parts) < 2:
        return None
    latitude = _decode_axis(parts[0], LATITUDE_DEGREE_DIGITS, "S", _MAX_LATITUDE)
    longitude = _decode_axis(parts[1], LONGITUDE_DEGREE_DIGITS, "W", _MAX_LONGITUDE)
    if latitude is None or longitude is None:
        return None
    return Coordinates(latitude=_format_degrees(latitude), longitude=_format_degrees(longitude))


def encode_coordinates(coordinates: Coordinates) -> str:
    """Render decimal-degree coordinates as a ``DDMMH DDDMMH`` token.

    Args:
        coordinates: Decimal-degree coordinates.

    Returns:
        Token with minutes rounded to the nearest whole minute.
    """
    latitude_block = _encode_axis(float(coordinates.latitude), LATITUDE_DEGREE_DIGITS, "N", "S")
    longitude_block = _encode_axis(
        float(coordinates.longitude), LONGITUDE_DEGREE_DIGITS, "E", "W"
    )
    return f"{latitude_block} {longitude_block}"


def _decode_axis(
    block: str,
    degree_digits: int,
    negative_hemisphere: str,
    max_degrees: float,
) -> float | None:
    degree_text = block[:degree_digits]
    minute_text = block[degree_digits : degree_digits + MINUTE_DIGITS]
    if len(degree_text) != degree_digits or len(minute_text) != MINUTE_DIGITS:
        return None
    if not _DIGITS_PATTERN.fullmatch(degree_text + minute_text):
        return None
    minutes = int(minute_text)
    if minutes >= 60:
        return None
    value = int(degree_text) + minutes / 60
    if value > max_degrees:
        return None
    if block.upper().endswith(negative_hemisphere):
        value = -value
    return value


def _encode_axis(value: float, degree_digits: int, positive: str, negative: str) -> str:
    hemisphere = negative if value < 0 else positive
    total_minutes = round(abs(value) * 60)
    degrees, minutes = divmod(total_minutes, 60)
    return f"{degrees:0{degree_digits}d}{minutes:0{MINUTE_DIGITS}d}{hemisphere}"


def _format_degrees(value: float) -> str:
    # -0.0 would otherwise render as "-0.000000"
    if value == 0:
        value = 0.0
    return f"{value:.{COORDINATE_DECIMAL_PLACES}f}"
