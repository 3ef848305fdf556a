"""S3 URI parsing helpers.

This module parses ``s3://bucket/key`` listing locations for the
source reader and import specs.
"""

from __future__ import annotations

from dataclasses import dataclass

from core.errors import LocusIngestError

S3_SCHEME = "s3://"


@dataclass(frozen=True)
class S3Location:
    """Parsed S3 object location."""

    bucket: str
    key: str


def is_s3_uri(uri: str) -> bool:
    """Return whether a source URI points at S3."""
    return uri.startswith(S3_SCHEME)


def parse_s3_uri(uri: str) -> S3Location:
    """Parse and validate an S3 object URI.

    Args:
        uri: URI in format ``s3://bucket/key``.

    Returns:
        Parsed bucket and key pair.

    Raises:
        LocusIngestError: If bucket or key is missing.
    """
    stripped_uri = uri.removeprefix(S3_SCHEME)
    bucket, _, key = stripped_uri.partition("/")
    if not bucket or not key or key.endswith("/"):
        raise LocusIngestError(
            f"Invalid S3 URI '{uri}': expected s3://bucket/key. "
            "Provide both a bucket and an object key."
        )
    return S3Location(bucket=bucket, key=key)
