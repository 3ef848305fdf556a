"""Read access to imported locations and countries.

This module exposes find-by-id, find-by-natural-key, and paginated
listing with optional population of referenced records.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, replace

from sqlalchemy import Select, func, select
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, selectinload

from core.constants import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE
from core.errors import LocusNotFoundError, LocusStoreError
from core.types import Coordinates, CountryRef, Page
from store.schema import Country, Location


@dataclass(frozen=True)
class LocationView:
    """Detached read model of a stored location.

    Reference ids are always present. Code fields of the referenced
    records are filled only when the query populated them.
    """

    id: int
    country_id: int
    location_code: str
    name: str
    description: str
    status_id: int | None
    administrative_area_id: int | None
    function_ids: tuple[int, ...]
    coordinates: Coordinates | None
    numeric_location_code: int | None
    is_deleted: bool
    country_code: str | None = None
    country_name: str | None = None
    status_code: str | None = None
    administrative_area_code: str | None = None
    administrative_area_name: str | None = None
    function_codes: tuple[str, ...] = ()

    @property
    def unlocode(self) -> str | None:
        """Five-character code such as ``NZAKL`` when the country is populated."""
        if self.country_code is None:
            return None
        return f"{self.country_code}{self.location_code}"


class LocationQueries:
    """Read-only queries over the normalized store."""

    def __init__(self, engine: Engine) -> None:
        self._engine = engine

    def get_location(self, location_id: int, populate: bool = True) -> LocationView:
        """Return one location by id.

        Raises:
            LocusNotFoundError: If no location has this id.
        """
        with Session(self._engine) as session:
            statement = _location_select(populate).where(Location.id == location_id)
            location = session.scalars(statement).one_or_none()
            if location is None:
                raise LocusNotFoundError(f"Location {location_id} not found.")
            return _location_view(location, populate)

    def find_location(
        self,
        country_code: str,
        location_code: str,
        populate: bool = True,
    ) -> LocationView | None:
        """Return a location by natural key, None when absent."""
        with Session(self._engine) as session:
            statement = (
                _location_select(populate)
                .join(Country, Location.country_id == Country.id)
                .where(
                    Country.code == country_code.strip().upper(),
                    Location.location_code == location_code.strip().upper(),
                )
            )
            location = session.scalars(statement).one_or_none()
            return _location_view(location, populate) if location is not None else None

    def list_locations(
        self,
        page: int = 1,
        limit: int = DEFAULT_PAGE_SIZE,
        country_code: str | None = None,
        populate: bool = False,
        include_deleted: bool = False,
    ) -> Page[LocationView]:
        """Return one page of locations ordered by country and code.

        Args:
            page: One-based page number.
            limit: Page size, at most ``MAX_PAGE_SIZE``.
            country_code: Optional country filter.
            populate: Load referenced country, status, area and functions.
            include_deleted: Include soft-deleted locations.

        Returns:
            Requested page with total counts.

        Raises:
            LocusStoreError: If paging arguments are out of range.
        """
        _validate_paging(page, limit)
        with Session(self._engine) as session:
            statement = _location_select(populate).join(
                Country, Location.country_id == Country.id
            )
            count_statement = select(func.count(Location.id)).join(
                Country, Location.country_id == Country.id
            )
            if country_code:
                country_filter = Country.code == country_code.strip().upper()
                statement = statement.where(country_filter)
                count_statement = count_statement.where(country_filter)
            if not include_deleted:
                statement = statement.where(Location.is_deleted.is_(False))
                count_statement = count_statement.where(Location.is_deleted.is_(False))
            statement = (
                statement.order_by(Country.code, Location.location_code)
                .limit(limit)
                .offset((page - 1) * limit)
            )
            locations = session.scalars(statement).all()
            total_count = session.scalar(count_statement) or 0
            return Page(
                items=tuple(_location_view(location, populate) for location in locations),
                total_count=total_count,
                current_page=page,
                total_pages=math.ceil(total_count / limit),
            )

    def list_countries(self, page: int = 1, limit: int = DEFAULT_PAGE_SIZE) -> Page[CountryRef]:
        """Return one page of non-deleted countries ordered by code."""
        _validate_paging(page, limit)
        with Session(self._engine) as session:
            active = Country.is_deleted.is_(False)
            countries = session.scalars(
                select(Country)
                .where(active)
                .order_by(Country.code)
                .limit(limit)
                .offset((page - 1) * limit)
            ).all()
            total_count = session.scalar(select(func.count(Country.id)).where(active)) or 0
            return Page(
                items=tuple(
                    CountryRef(id=country.id, code=country.code, name=country.name)
                    for country in countries
                ),
                total_count=total_count,
                current_page=page,
                total_pages=math.ceil(total_count / limit),
            )

    def count_locations(self) -> int:
        """Return the number of stored locations."""
        with Session(self._engine) as session:
            return session.scalar(select(func.count(Location.id))) or 0


def _location_select(populate: bool) -> Select[tuple[Location]]:
    statement = select(Location).options(selectinload(Location.functions))
    if populate:
        statement = statement.options(
            selectinload(Location.country),
            selectinload(Location.status),
            selectinload(Location.administrative_area),
        )
    return statement


def _location_view(location: Location, populate: bool) -> LocationView:
    coordinates = None
    if location.latitude is not None and location.longitude is not None:
        coordinates = Coordinates(latitude=location.latitude, longitude=location.longitude)
    view = LocationView(
        id=location.id,
        country_id=location.country_id,
        location_code=location.location_code,
        name=location.name,
        description=location.description,
        status_id=location.status_id,
        administrative_area_id=location.administrative_area_id,
        function_ids=tuple(function.id for function in location.functions),
        coordinates=coordinates,
        numeric_location_code=location.numeric_location_code,
        is_deleted=location.is_deleted,
    )
    if not populate:
        return view
    area = location.administrative_area
    return replace(
        view,
        country_code=location.country.code,
        country_name=location.country.name,
        status_code=location.status.code if location.status else None,
        administrative_area_code=area.code if area else None,
        administrative_area_name=area.name if area else None,
        function_codes=tuple(function.code for function in location.functions),
    )


def _validate_paging(page: int, limit: int) -> None:
    if page < 1:
        raise LocusStoreError(f"Invalid page {page}: pages start at 1.")
    if limit < 1 or limit > MAX_PAGE_SIZE:
        raise LocusStoreError(f"Invalid page size {limit}: use a value from 1 to {MAX_PAGE_SIZE}.")
