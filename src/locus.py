"""Public SDK surface for Locus.

This module provides a stable import path for SDK users.
It re-exports the primary client and typed option models.
"""

from __future__ import annotations

from core.config import LocusConfig
from core.import_spec import load_import_spec
from core.types import (
    AdminAreaColumnMapping,
    ColumnMapping,
    Coordinates,
    ImportOptions,
    ImportSummary,
    Page,
    SourceFormat,
)
from store.location_queries import LocationView
from store.registry_sdk import LocusClient
from transforms.coordinates import decode_coordinates, encode_coordinates
from transforms.function_codes import decode_function_indicator

__all__ = [
    "AdminAreaColumnMapping",
    "ColumnMapping",
    "Coordinates",
    "ImportOptions",
    "ImportSummary",
    "LocationView",
    "LocusClient",
    "LocusConfig",
    "Page",
    "SourceFormat",
    "decode_coordinates",
    "decode_function_indicator",
    "encode_coordinates",
    "load_import_spec",
]
