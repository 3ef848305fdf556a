"""Unit tests for idempotent reference store writes."""

from __future__ import annotations

from dataclasses import replace

import pytest

from core.errors import LocusStoreError
from core.types import Coordinates, LocationPayload
from store.reference_store import ReferenceStore


def _payload(store: ReferenceStore, location_code: str = "BOM") -> LocationPayload:
    country = store.ensure_country("IN", "INDIA")
    return LocationPayload(
        country_id=country.id,
        location_code=location_code,
        name="Mumbai",
        description="",
        function_ids=(store.function_code_ids()["1"],),
        status_id=store.status_code_ids()["AA"],
        administrative_area_id=None,
        coordinates=Coordinates(latitude="18.866667", longitude="72.833333"),
        numeric_location_code=None,
    )


def test_ensure_country_is_idempotent(reference_store: ReferenceStore) -> None:
    """Repeated country upserts should keep one record and update its name."""
    first = reference_store.ensure_country("nz", "NEW ZEALAND")
    second = reference_store.ensure_country("NZ", "New Zealand")

    assert (
        first.id == second.id
        and second.name == "New Zealand"
        and list(reference_store.country_refs()) == ["NZ"]
    )


def test_find_country_returns_none_for_unknown_code(reference_store: ReferenceStore) -> None:
    """Unknown country codes should not resolve."""
    assert reference_store.find_country("ZZ") is None


def test_ensure_admin_area_keeps_name_when_none(reference_store: ReferenceStore) -> None:
    """A None name should keep the stored area name."""
    country = reference_store.ensure_country("IN", "INDIA")
    area_id = reference_store.ensure_admin_area(country.id, "MH", "Maharashtra", "State")

    same_id = reference_store.ensure_admin_area(country.id, "MH", None)

    assert same_id == area_id


def test_ensure_enum_if_absent_never_overwrites(reference_store: ReferenceStore) -> None:
    """Existing status codes should keep their first description."""
    created = reference_store.ensure_status_code_if_absent("AA", "first")
    recreated = reference_store.ensure_status_code_if_absent("AA", "second")

    assert created is True and recreated is False and len(reference_store.status_code_ids()) == 1


def test_insert_location_if_absent_skips_existing_key(seeded_store: ReferenceStore) -> None:
    """Second insert of the same natural key should be a no-op."""
    payload = _payload(seeded_store)

    first = seeded_store.insert_location_if_absent(payload)
    second = seeded_store.insert_location_if_absent(payload)

    assert first is True and second is False


def test_location_exists_is_case_insensitive_on_code(seeded_store: ReferenceStore) -> None:
    """Location codes should be stored and matched upper-cased."""
    payload = _payload(seeded_store, location_code="bom")
    seeded_store.insert_location_if_absent(payload)

    assert seeded_store.location_exists(payload.country_id, "BOM")


def test_insert_location_without_functions_raises(seeded_store: ReferenceStore) -> None:
    """Locations without functions should never be stored."""
    payload = _payload(seeded_store)
    empty_payload = replace(payload, function_ids=())

    with pytest.raises(LocusStoreError):
        seeded_store.insert_location_if_absent(empty_payload)

    assert not seeded_store.location_exists(payload.country_id, "BOM")


def test_insert_location_reports_race_lost_key_as_duplicate(
    seeded_store: ReferenceStore,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    """A unique-key conflict after a stale existence check should count as a duplicate."""
    payload = _payload(seeded_store)
    seeded_store.insert_location_if_absent(payload)
    real_exists = seeded_store.location_exists
    calls: list[str] = []

    def _stale_exists(country_id: int, location_code: str) -> bool:
        calls.append(location_code)
        if len(calls) == 1:
            return False
        return real_exists(country_id, location_code)

    monkeypatch.setattr(seeded_store, "location_exists", _stale_exists)

    assert seeded_store.insert_location_if_absent(payload) is False and len(calls) == 2


def test_insert_location_other_constraint_errors_raise(seeded_store: ReferenceStore) -> None:
    """Constraint failures unrelated to the natural key should not look like duplicates."""
    payload = replace(_payload(seeded_store), name=None)

    with pytest.raises(LocusStoreError):
        seeded_store.insert_location_if_absent(payload)

    assert not seeded_store.location_exists(payload.country_id, "BOM")
