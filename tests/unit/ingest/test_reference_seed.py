"""Unit tests for status and function code seeding."""

from __future__ import annotations

from core.reference_data import FUNCTION_CODE_SEEDS, STATUS_CODE_SEEDS
from ingest.reference_seed import seed_reference_data
from store.reference_store import ReferenceStore


def test_seed_reference_data_inserts_all_codes(reference_store: ReferenceStore) -> None:
    """First seeding should insert every status and function code."""
    summary = seed_reference_data(reference_store)

    assert (
        summary.inserted == len(STATUS_CODE_SEEDS) + len(FUNCTION_CODE_SEEDS)
        and summary.skipped == 0
        and sorted(reference_store.function_code_ids()) == ["1", "2", "3", "4", "5", "6", "7"]
        and len(reference_store.status_code_ids()) == 13
    )


def test_seed_reference_data_is_idempotent(reference_store: ReferenceStore) -> None:
    """Reseeding should skip every existing code."""
    seed_reference_data(reference_store)

    summary = seed_reference_data(reference_store)

    assert summary.inserted == 0 and summary.skipped == 20
