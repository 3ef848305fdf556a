"""Unit tests for location read queries."""

from __future__ import annotations

import pytest

from core.errors import LocusNotFoundError, LocusStoreError
from core.types import LocationPayload
from store.location_queries import LocationQueries
from store.reference_store import ReferenceStore


def _insert(store: ReferenceStore, country_code: str, location_code: str, name: str) -> None:
    country = store.ensure_country(country_code, f"{country_code} country")
    area_id = store.ensure_admin_area(country.id, "A1", "Area One", "Region")
    store.insert_location_if_absent(
        LocationPayload(
            country_id=country.id,
            location_code=location_code,
            name=name,
            description="",
            function_ids=(store.function_code_ids()["1"], store.function_code_ids()["4"]),
            status_id=store.status_code_ids()["AI"],
            administrative_area_id=area_id,
            coordinates=None,
            numeric_location_code=None,
        )
    )


@pytest.fixture
def queries(seeded_store: ReferenceStore) -> LocationQueries:
    _insert(seeded_store, "NZ", "WLG", "Wellington")
    _insert(seeded_store, "NZ", "AKL", "Auckland")
    _insert(seeded_store, "IN", "BOM", "Mumbai")
    return LocationQueries(seeded_store.engine)


def test_find_location_populates_references(queries: LocationQueries) -> None:
    """Natural-key lookup should populate country, status, area and functions."""
    view = queries.find_location("nz", "akl")

    assert (
        view is not None
        and view.unlocode == "NZAKL"
        and view.status_code == "AI"
        and view.function_codes == ("1", "4")
        and view.administrative_area_name == "Area One"
    )


def test_find_location_returns_none_when_absent(queries: LocationQueries) -> None:
    """Unknown natural keys should return None."""
    assert queries.find_location("NZ", "ZZZ") is None


def test_get_location_raises_for_unknown_id(queries: LocationQueries) -> None:
    """Unknown ids should raise a not-found error."""
    with pytest.raises(LocusNotFoundError):
        queries.get_location(9999)


def test_list_locations_orders_by_country_and_code(queries: LocationQueries) -> None:
    """Listing should order by country code then location code."""
    page = queries.list_locations(limit=2, populate=True)

    assert (
        [view.unlocode for view in page.items] == ["INBOM", "NZAKL"]
        and page.total_count == 3
        and page.total_pages == 2
    )


def test_list_locations_filters_by_country(queries: LocationQueries) -> None:
    """Country filter should restrict the page and total count."""
    page = queries.list_locations(country_code="NZ")

    assert page.total_count == 2 and {view.location_code for view in page.items} == {"AKL", "WLG"}


def test_list_locations_without_populate_leaves_codes_empty(queries: LocationQueries) -> None:
    """Unpopulated views should carry ids but no referenced codes."""
    page = queries.list_locations()

    assert all(view.country_code is None and view.function_ids for view in page.items)


def test_list_locations_rejects_invalid_page(queries: LocationQueries) -> None:
    """Pages start at one."""
    with pytest.raises(LocusStoreError):
        queries.list_locations(page=0)


def test_list_countries_returns_sorted_page(queries: LocationQueries) -> None:
    """Countries should be listed by code."""
    page = queries.list_countries()

    assert [country.code for country in page.items] == ["IN", "NZ"]
