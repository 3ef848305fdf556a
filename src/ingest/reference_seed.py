"""Seeding of enumerated reference data.

Status and function codes are inserted when absent. Existing codes
are left untouched, so reseeding never rewrites a description.
"""

from __future__ import annotations

from core.logging_config import get_logger
from core.reference_data import FUNCTION_CODE_SEEDS, STATUS_CODE_SEEDS
from core.types import SeedSummary
from store.reference_store import ReferenceStore

_LOGGER = get_logger(__name__)


def seed_reference_data(store: ReferenceStore) -> SeedSummary:
    """Insert missing status and function codes.

    Args:
        store: Reference store to seed.

    Returns:
        Counts of inserted and already-present codes.
    """
    inserted = skipped = 0
    for status in STATUS_CODE_SEEDS:
        created = store.ensure_status_code_if_absent(status.code, status.description)
        inserted, skipped = _count(created, inserted, skipped)
        _LOGGER.debug("status_code_seeded", code=status.code, inserted=created)
    for function in FUNCTION_CODE_SEEDS:
        created = store.ensure_function_code_if_absent(
            function.code, function.name, function.description
        )
        inserted, skipped = _count(created, inserted, skipped)
        _LOGGER.debug("function_code_seeded", code=function.code, inserted=created)
    _LOGGER.info("reference_data_seeded", inserted=inserted, skipped=skipped)
    return SeedSummary(inserted=inserted, skipped=skipped)


def _count(created: bool, inserted: int, skipped: int) -> tuple[int, int]:
    if created:
        return inserted + 1, skipped
    return inserted, skipped + 1
