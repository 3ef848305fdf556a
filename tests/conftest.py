"""Pytest configuration for repository test runs."""

from __future__ import annotations

import sys
from dataclasses import replace
from pathlib import Path
from typing import Any, Iterator

import pytest


def pytest_sessionstart() -> None:
    """Add src directory to sys.path for test imports."""
    project_root = Path(__file__).resolve().parent.parent
    src_path = project_root / "src"
    if str(src_path) not in sys.path:
        sys.path.insert(0, str(src_path))


@pytest.fixture
def locus_config(tmp_path: Path) -> Any:
    """Config pointing at a throwaway SQLite database."""
    from core.config import LocusConfig, default_database_url

    return replace(
        LocusConfig.from_env(),
        data_root=tmp_path,
        database_url=default_database_url(tmp_path),
    )


@pytest.fixture
def reference_store(locus_config: Any) -> Iterator[Any]:
    """Reference store over a freshly created schema."""
    from store.database import open_store_engine
    from store.reference_store import ReferenceStore

    store = ReferenceStore(open_store_engine(locus_config))
    yield store
    store.dispose()


@pytest.fixture
def seeded_store(reference_store: Any) -> Any:
    """Reference store with status and function codes seeded."""
    from ingest.reference_seed import seed_reference_data

    seed_reference_data(reference_store)
    return reference_store
