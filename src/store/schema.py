"""Relational schema for normalized location reference data.

This module declares the SQLAlchemy ORM tables for countries,
administrative areas, status and function codes, and locations.
"""

from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    ForeignKey,
    Integer,
    String,
    Table,
    UniqueConstraint,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    """Declarative base for all Locus tables."""


class TimestampMixin:
    """Creation and update timestamps plus the soft-delete flag."""

    is_deleted: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=_utc_now, nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=_utc_now, onupdate=_utc_now, nullable=False
    )


location_functions = Table(
    "location_functions",
    Base.metadata,
    Column("location_id", ForeignKey("locations.id", ondelete="CASCADE"), primary_key=True),
    Column("function_code_id", ForeignKey("function_codes.id"), primary_key=True),
)


class Country(TimestampMixin, Base):
    __tablename__ = "countries"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    code: Mapped[str] = mapped_column(String(2), unique=True, nullable=False)
    name: Mapped[str] = mapped_column(String(255), nullable=False)

    def __repr__(self) -> str:
        return f"<Country {self.code} {self.name!r}>"


class AdministrativeArea(TimestampMixin, Base):
    __tablename__ = "administrative_areas"
    __table_args__ = (UniqueConstraint("country_id", "code", name="uq_admin_area_country_code"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    country_id: Mapped[int] = mapped_column(ForeignKey("countries.id"), nullable=False)
    code: Mapped[str] = mapped_column(String(16), nullable=False)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    type: Mapped[str | None] = mapped_column(String(64))

    country: Mapped[Country] = relationship()

    def __repr__(self) -> str:
        return f"<AdministrativeArea {self.code} {self.name!r}>"


class StatusCode(TimestampMixin, Base):
    __tablename__ = "status_codes"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    code: Mapped[str] = mapped_column(String(2), unique=True, nullable=False)
    description: Mapped[str] = mapped_column(String(255), nullable=False)


class FunctionCode(TimestampMixin, Base):
    __tablename__ = "function_codes"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    code: Mapped[str] = mapped_column(String(1), unique=True, nullable=False)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str] = mapped_column(String(512), nullable=False)


class Location(TimestampMixin, Base):
    """A coded location, unique per country and location code."""

    __tablename__ = "locations"
    __table_args__ = (
        UniqueConstraint("country_id", "location_code", name="uq_location_country_code"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    country_id: Mapped[int] = mapped_column(ForeignKey("countries.id"), nullable=False)
    location_code: Mapped[str] = mapped_column(String(8), nullable=False)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str] = mapped_column(String(512), default="", nullable=False)
    status_id: Mapped[int | None] = mapped_column(ForeignKey("status_codes.id"))
    administrative_area_id: Mapped[int | None] = mapped_column(
        ForeignKey("administrative_areas.id")
    )
    latitude: Mapped[str | None] = mapped_column(String(16))
    longitude: Mapped[str | None] = mapped_column(String(16))
    numeric_location_code: Mapped[int | None] = mapped_column(Integer)

    country: Mapped[Country] = relationship()
    status: Mapped[StatusCode | None] = relationship()
    administrative_area: Mapped[AdministrativeArea | None] = relationship()
    functions: Mapped[list[FunctionCode]] = relationship(
        secondary=location_functions, order_by=FunctionCode.code
    )

    def __repr__(self) -> str:
        return f"<Location {self.location_code} {self.name!r}>"
