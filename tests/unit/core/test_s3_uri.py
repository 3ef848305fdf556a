"""Unit tests for S3 URI parsing."""

from __future__ import annotations

import pytest

from core.errors import LocusIngestError
from core.s3_uri import S3Location, is_s3_uri, parse_s3_uri


def test_parse_s3_uri_splits_bucket_and_key() -> None:
    """Parser should split bucket and nested key."""
    assert parse_s3_uri("s3://registry/2024-2/part1.csv") == S3Location(
        bucket="registry", key="2024-2/part1.csv"
    )


@pytest.mark.parametrize("uri", ["s3://", "s3://registry", "s3://registry/folder/"])
def test_parse_s3_uri_rejects_incomplete_uri(uri: str) -> None:
    """Parser should reject URIs without an object key."""
    with pytest.raises(LocusIngestError):
        parse_s3_uri(uri)


def test_is_s3_uri_ignores_local_paths() -> None:
    """Local paths should not be treated as S3 URIs."""
    assert not is_s3_uri("data/s3://odd.csv")
