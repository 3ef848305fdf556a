"""Runtime configuration model for Locus.

This module owns all environment variable parsing and validation.
Other modules consume a typed config object instead of raw env reads.
"""

from __future__ import annotations

from dataclasses import dataclass
import os
from pathlib import Path

from core.constants import (
    DEFAULT_DATA_ROOT,
    DEFAULT_DATABASE_FILE_NAME,
    DEFAULT_DB_TIMEOUT_SECONDS,
    DEFAULT_LOG_LEVEL,
    SUPPORTED_LOG_LEVELS,
)
from core.errors import LocusConfigError


@dataclass(frozen=True)
class LocusConfig:
    """Validated runtime configuration.

    Attributes:
        data_root: Local root directory for the default SQLite database.
        database_url: SQLAlchemy URL of the persistent store.
        db_timeout_seconds: Driver-level timeout applied to store calls.
        log_level: Minimum structured log level.
        s3_region: Optional default AWS region for S3 sources.
        s3_profile: Optional AWS profile for boto3 session initialization.
    """

    data_root: Path
    database_url: str
    db_timeout_seconds: int
    log_level: str
    s3_region: str | None
    s3_profile: str | None

    @classmethod
    def from_env(cls) -> "LocusConfig":
        """Build config from process environment variables.

        Returns:
            A validated config object.

        Raises:
            LocusConfigError: If environment values are invalid.
        """
        data_root = Path(os.getenv("LOCUS_DATA_ROOT", str(DEFAULT_DATA_ROOT)))
        data_root = data_root.expanduser().resolve()
        database_url = os.getenv("LOCUS_DATABASE_URL") or default_database_url(data_root)
        timeout_value = os.getenv("LOCUS_DB_TIMEOUT", str(DEFAULT_DB_TIMEOUT_SECONDS))
        log_level_value = os.getenv("LOCUS_LOG_LEVEL", DEFAULT_LOG_LEVEL)
        return cls(
            data_root=data_root,
            database_url=database_url,
            db_timeout_seconds=_parse_timeout(timeout_value),
            log_level=_parse_log_level(log_level_value),
            s3_region=os.getenv("LOCUS_S3_REGION"),
            s3_profile=os.getenv("LOCUS_S3_PROFILE"),
        )


def default_database_url(data_root: Path) -> str:
    """Return the SQLite URL used when no database URL is configured."""
    return f"sqlite:///{data_root / DEFAULT_DATABASE_FILE_NAME}"


def _parse_timeout(raw_value: str) -> int:
    """Parse the store timeout environment value.

    Args:
        raw_value: Raw string from environment.

    Returns:
        Positive timeout in seconds.

    Raises:
        LocusConfigError: If value is not a positive integer.
    """
    try:
        timeout = int(raw_value)
    except ValueError as error:
        raise LocusConfigError(
            "Invalid LOCUS_DB_TIMEOUT value: "
            f"expected integer seconds, got '{raw_value}'. "
            "Set LOCUS_DB_TIMEOUT to a positive number."
        ) from error
    if timeout <= 0:
        raise LocusConfigError(
            f"Invalid LOCUS_DB_TIMEOUT value: {timeout}. Use a value greater than zero."
        )
    return timeout


def _parse_log_level(raw_value: str) -> str:
    normalized = raw_value.strip().lower()
    if normalized not in SUPPORTED_LOG_LEVELS:
        raise LocusConfigError(
            f"Invalid LOCUS_LOG_LEVEL value '{raw_value}'. "
            f"Use one of: {', '.join(SUPPORTED_LOG_LEVELS)}."
        )
    return normalized
