"""Idempotent writes keyed by natural keys.

This module owns every mutation the import pipeline performs. Countries
and administrative areas are upserted, status and function codes are
inserted only when absent, and locations are inserted only when their
(country, location code) key is new. Each write commits on its own, so
rows applied before a later fatal error stay committed.

The location existence check and insert are two statements without an
atomic check-and-set. Runs are single-threaded and sequential; callers
must serialize concurrent runs against the same store.
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator, Mapping

from sqlalchemy import select
from sqlalchemy.engine import Engine
from sqlalchemy.exc import DBAPIError, IntegrityError, OperationalError, SQLAlchemyError
from sqlalchemy.orm import Session

from core.errors import LocusStoreConnectionError, LocusStoreError
from core.types import CountryRef, LocationPayload
from store.schema import (
    AdministrativeArea,
    Country,
    FunctionCode,
    Location,
    StatusCode,
)

EnumModel = type[StatusCode] | type[FunctionCode]


class ReferenceStore:
    """Natural-key upsert and insert-if-absent operations."""

    def __init__(self, engine: Engine) -> None:
        self._engine = engine

    @property
    def engine(self) -> Engine:
        """Underlying SQLAlchemy engine."""
        return self._engine

    def ensure_country(self, code: str, name: str) -> CountryRef:
        """Create or update a country by code.

        Args:
            code: Two-letter country code.
            name: Country name to store.

        Returns:
            Reference to the persisted country.
        """
        normalized_code = code.strip().upper()
        with self._write_session("ensure_country") as session:
            country = session.scalars(
                select(Country).where(Country.code == normalized_code)
            ).one_or_none()
            if country is None:
                country = Country(code=normalized_code, name=name)
                session.add(country)
            else:
                country.name = name
                country.is_deleted = False
            session.flush()
            return _country_ref(country)

    def find_country(self, code: str) -> CountryRef | None:
        """Return a country reference by code, None when absent."""
        with self._read_session("find_country") as session:
            country = session.scalars(
                select(Country).where(Country.code == code.strip().upper())
            ).one_or_none()
            return _country_ref(country) if country is not None else None

    def country_refs(self) -> dict[str, CountryRef]:
        """Return all known countries keyed by code."""
        with self._read_session("country_refs") as session:
            countries = session.scalars(select(Country)).all()
            return {country.code: _country_ref(country) for country in countries}

    def ensure_admin_area(
        self,
        country_id: int,
        code: str,
        name: str | None,
        area_type: str | None = None,
    ) -> int:
        """Create or update an administrative area by (country, code).

        Args:
            country_id: Owning country id.
            code: Area code within the country.
            name: Area name; None keeps a stored name and falls back to
                the code for a new area.
            area_type: Optional area type such as ``Province``.

        Returns:
            Administrative area id.
        """
        with self._write_session("ensure_admin_area") as session:
            area = session.scalars(
                select(AdministrativeArea).where(
                    AdministrativeArea.country_id == country_id,
                    AdministrativeArea.code == code,
                )
            ).one_or_none()
            if area is None:
                area = AdministrativeArea(
                    country_id=country_id, code=code, name=name or code, type=area_type
                )
                session.add(area)
            else:
                if name is not None:
                    area.name = name
                if area_type is not None:
                    area.type = area_type
                area.is_deleted = False
            session.flush()
            return area.id

    def ensure_enum_if_absent(
        self,
        model: EnumModel,
        code: str,
        payload: Mapping[str, str],
    ) -> bool:
        """Insert an enumerated reference row unless its code exists.

        Args:
            model: ``StatusCode`` or ``FunctionCode``.
            code: Natural key.
            payload: Remaining column values.

        Returns:
            True when a row was inserted, False when it already existed.
        """
        with self._write_session("ensure_enum_if_absent") as session:
            existing_id = session.scalar(select(model.id).where(model.code == code))
            if existing_id is not None:
                return False
            session.add(model(code=code, **payload))
            return True

    def ensure_status_code_if_absent(self, code: str, description: str) -> bool:
        """Insert a status code unless it exists; never rewrites a description."""
        return self.ensure_enum_if_absent(StatusCode, code, {"description": description})

    def ensure_function_code_if_absent(self, code: str, name: str, description: str) -> bool:
        """Insert a function code unless it exists."""
        return self.ensure_enum_if_absent(
            FunctionCode, code, {"name": name, "description": description}
        )

    def status_code_ids(self) -> dict[str, int]:
        """Return status code to id."""
        return self._enum_ids(StatusCode)

    def function_code_ids(self) -> dict[str, int]:
        """Return function code to id."""
        return self._enum_ids(FunctionCode)

    def location_exists(self, country_id: int, location_code: str) -> bool:
        """Return whether a location with this natural key is stored."""
        with self._read_session("location_exists") as session:
            location_id = session.scalar(
                select(Location.id).where(
                    Location.country_id == country_id,
                    Location.location_code == location_code.upper(),
                )
            )
            return location_id is not None

    def insert_location_if_absent(self, payload: LocationPayload) -> bool:
        """Insert a location unless its natural key is already stored.

        Args:
            payload: Resolved location attributes.

        Returns:
            True when inserted, False when the key already existed.

        Raises:
            LocusStoreError: If the payload has no functions or the write fails.
        """
        if not payload.function_ids:
            raise LocusStoreError(
                f"Refusing to store location {payload.location_code}: no functions resolved."
            )
        if self.location_exists(payload.country_id, payload.location_code):
            return False
        try:
            with self._write_session("insert_location") as session:
                functions = session.scalars(
                    select(FunctionCode).where(FunctionCode.id.in_(payload.function_ids))
                ).all()
                session.add(_build_location(payload, list(functions)))
        except LocusStoreError as error:
            # Only a conflicting natural key is a duplicate; other constraint errors propagate.
            if isinstance(error.__cause__, IntegrityError) and self.location_exists(
                payload.country_id, payload.location_code
            ):
                return False
            raise
        return True

    def dispose(self) -> None:
        """Release pooled store connections."""
        self._engine.dispose()

    def _enum_ids(self, model: EnumModel) -> dict[str, int]:
        with self._read_session("enum_ids") as session:
            rows = session.execute(select(model.code, model.id)).all()
            return {code: row_id for code, row_id in rows}

    @contextmanager
    def _write_session(self, operation: str) -> Iterator[Session]:
        with _translate_errors(operation):
            with Session(self._engine, expire_on_commit=False) as session:
                with session.begin():
                    yield session

    @contextmanager
    def _read_session(self, operation: str) -> Iterator[Session]:
        with _translate_errors(operation):
            with Session(self._engine) as session:
                yield session


@contextmanager
def _translate_errors(operation: str) -> Iterator[None]:
    """Map SQLAlchemy failures onto the Locus store error hierarchy."""
    try:
        yield
    except OperationalError as error:
        raise LocusStoreConnectionError(
            f"Store unavailable during {operation}: {error.orig}. "
            "Check that the database is reachable and retry."
        ) from error
    except DBAPIError as error:
        if error.connection_invalidated:
            raise LocusStoreConnectionError(
                f"Store connection lost during {operation}: {error.orig}."
            ) from error
        raise LocusStoreError(f"Store write failed during {operation}: {error.orig}.") from error
    except SQLAlchemyError as error:
        raise LocusStoreError(f"Store operation {operation} failed: {error}.") from error


def _country_ref(country: Country) -> CountryRef:
    return CountryRef(id=country.id, code=country.code, name=country.name)


def _build_location(payload: LocationPayload, functions: list[FunctionCode]) -> Location:
    coordinates = payload.coordinates
    return Location(
        country_id=payload.country_id,
        location_code=payload.location_code.upper(),
        name=payload.name,
        description=payload.description,
        status_id=payload.status_id,
        administrative_area_id=payload.administrative_area_id,
        latitude=coordinates.latitude if coordinates else None,
        longitude=coordinates.longitude if coordinates else None,
        numeric_location_code=payload.numeric_location_code,
        functions=functions,
    )
