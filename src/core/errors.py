"""Locus exception hierarchy.

This module defines traceable domain errors with clear boundaries.
Each subsystem raises a specific error type for debuggability.
"""

from __future__ import annotations


class LocusError(Exception):
    """Base exception for all Locus failures."""


class LocusConfigError(LocusError):
    """Raised for invalid runtime configuration."""


class LocusIngestError(LocusError):
    """Raised when a source listing cannot be read."""


class LocusStoreError(LocusError):
    """Raised for persistent store failures."""


class LocusStoreConnectionError(LocusStoreError):
    """Raised when the persistent store is unreachable."""


class LocusDependencyError(LocusError):
    """Raised when an optional runtime dependency is missing."""


class LocusImportSpecError(LocusError):
    """Raised for invalid or unsupported import-spec configuration."""


class LocusNotFoundError(LocusStoreError):
    """Raised when a requested record does not exist."""
