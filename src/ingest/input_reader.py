"""Source listing readers for ingestion.

This module streams delimited rows from local files or S3 objects.
It normalizes inputs into typed source rows in file order.
"""

from __future__ import annotations

import csv
import io
from pathlib import Path
from typing import Any, Iterable, Iterator

from core.config import LocusConfig
from core.constants import SUPPORTED_DELIMITERS
from core.errors import LocusDependencyError, LocusIngestError
from core.s3_uri import S3Location, is_s3_uri, parse_s3_uri
from core.types import SourceFormat, SourceRow


def iter_source_rows(
    source_uri: str,
    source_format: SourceFormat,
    config: LocusConfig,
) -> Iterator[SourceRow]:
    """Stream rows of one delimited listing in file order.

    The first line is the header naming the columns. Blank lines are
    skipped; line numbers count data rows from 1.

    Args:
        source_uri: Local file path or ``s3://bucket/key`` URI.
        source_format: Delimiter and encoding of the listing.
        config: Runtime configuration for S3 session defaults.

    Yields:
        Source rows with raw cell values.

    Raises:
        LocusIngestError: If the listing cannot be opened or decoded.
    """
    _validate_format(source_format)
    if is_s3_uri(source_uri):
        body = _read_s3_text(source_uri, source_format, config)
        yield from _rows_from_lines(source_uri, io.StringIO(body, newline=""), source_format)
        return
    source_path = Path(source_uri).expanduser()
    if not source_path.is_file():
        raise LocusIngestError(
            f"Failed to read listing at {source_path}: file does not exist. "
            "Provide an existing delimited text file."
        )
    try:
        with source_path.open(encoding=source_format.encoding, newline="") as handle:
            yield from _rows_from_lines(str(source_path), handle, source_format)
    except OSError as error:
        raise LocusIngestError(
            f"Failed to read listing at {source_path}: {error}. Check file permissions."
        ) from error


def _rows_from_lines(
    source_uri: str,
    lines: Iterable[str],
    source_format: SourceFormat,
) -> Iterator[SourceRow]:
    """Parse delimited lines into source rows.

    Raises:
        LocusIngestError: If the text is not valid for the configured layout.
    """
    reader = csv.DictReader(lines, delimiter=source_format.delimiter)
    line_number = 0
    try:
        for fields in reader:
            if _is_blank(fields):
                continue
            line_number += 1
            yield SourceRow(
                source_uri=source_uri,
                line_number=line_number,
                fields={key.strip(): value for key, value in fields.items() if key is not None},
            )
    except UnicodeDecodeError as error:
        raise LocusIngestError(
            f"Failed to decode listing {source_uri} as {source_format.encoding}: {error}. "
            "Set the listing encoding (UN/LOCODE releases are often latin-1)."
        ) from error
    except csv.Error as error:
        raise LocusIngestError(
            f"Malformed delimited text in {source_uri} near data row {line_number + 1}: {error}."
        ) from error


def _is_blank(fields: dict[str | None, Any]) -> bool:
    return not any(isinstance(value, str) and value.strip() for value in fields.values())


def _validate_format(source_format: SourceFormat) -> None:
    if source_format.delimiter not in SUPPORTED_DELIMITERS:
        raise LocusIngestError(
            f"Unsupported delimiter {source_format.delimiter!r}. "
            f"Use one of: {', '.join(repr(item) for item in SUPPORTED_DELIMITERS)}."
        )


def _read_s3_text(source_uri: str, source_format: SourceFormat, config: LocusConfig) -> str:
    """Download and decode one S3 listing object.

    Raises:
        LocusIngestError: If the object cannot be fetched or decoded.
    """
    location = parse_s3_uri(source_uri)
    s3_client = _create_s3_client(config)
    payload = _download_s3_object(s3_client, location)
    try:
        return payload.decode(source_format.encoding)
    except UnicodeDecodeError as error:
        raise LocusIngestError(
            f"Failed to decode {source_uri} as {source_format.encoding}: {error}."
        ) from error


def _create_s3_client(config: LocusConfig) -> Any:
    """Create a boto3 S3 client.

    Args:
        config: Runtime config containing optional profile/region.

    Returns:
        Boto3 S3 client.

    Raises:
        LocusDependencyError: If boto3 is missing.
    """
    try:
        import boto3
    except ImportError as error:
        raise LocusDependencyError(
            "S3 support requires boto3, but it is not installed. "
            "Install boto3 to import s3:// listings."
        ) from error
    session_kwargs = _build_boto3_session_kwargs(config)
    session = boto3.session.Session(**session_kwargs)
    return session.client("s3")


def _build_boto3_session_kwargs(config: LocusConfig) -> dict[str, str]:
    """Build boto3 Session kwargs from config."""
    kwargs: dict[str, str] = {}
    if config.s3_profile:
        kwargs["profile_name"] = config.s3_profile
    if config.s3_region:
        kwargs["region_name"] = config.s3_region
    return kwargs


def _download_s3_object(s3_client: Any, location: S3Location) -> bytes:
    try:
        response = s3_client.get_object(Bucket=location.bucket, Key=location.key)
        return response["Body"].read()
    except Exception as error:
        raise LocusIngestError(
            f"Failed to fetch s3://{location.bucket}/{location.key}: {error}. "
            "Check the object exists and credentials allow reading it."
        ) from error
