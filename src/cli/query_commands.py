"""Read-only CLI commands over the imported registry."""

from __future__ import annotations

import argparse
from typing import Any

from cli.output import format_location_row
from core.constants import COUNTRY_CODE_LENGTH, DEFAULT_PAGE_SIZE
from core.errors import LocusNotFoundError
from store.location_queries import LocationView
from store.registry_sdk import LocusClient


def add_locations_command(subparsers: Any) -> None:
    """Register locations subcommand."""
    parser = subparsers.add_parser("locations", help="List imported locations page by page")
    parser.add_argument("--country", help="Two-letter country code filter")
    parser.add_argument("--page", type=int, default=1, help="One-based page number")
    parser.add_argument("--limit", type=int, default=DEFAULT_PAGE_SIZE, help="Rows per page")
    parser.add_argument(
        "--populate",
        action="store_true",
        help="Load country, status and function codes for each row",
    )


def add_show_command(subparsers: Any) -> None:
    """Register show subcommand."""
    parser = subparsers.add_parser("show", help="Show one location, e.g. INBOM or IN BOM")
    parser.add_argument("code", help="Full code like NZAKL, or a country code")
    parser.add_argument("location_code", nargs="?", help="Location code when CODE is a country")


def add_countries_command(subparsers: Any) -> None:
    """Register countries subcommand."""
    parser = subparsers.add_parser("countries", help="List imported countries")
    parser.add_argument("--page", type=int, default=1, help="One-based page number")
    parser.add_argument("--limit", type=int, default=DEFAULT_PAGE_SIZE, help="Rows per page")


def run_locations_command(client: LocusClient, args: argparse.Namespace) -> int:
    """Print one page of locations followed by paging totals."""
    page = client.list_locations(
        page=args.page,
        limit=args.limit,
        country_code=args.country,
        populate=args.populate,
    )
    for view in page.items:
        print(format_location_row(view))
    print(f"page={page.current_page}/{page.total_pages}\ttotal={page.total_count}")
    return 0


def run_show_command(client: LocusClient, args: argparse.Namespace) -> int:
    """Print every stored attribute of one location."""
    country_code, location_code = _split_code(args.code, args.location_code)
    view = client.find_location(country_code, location_code)
    if view is None:
        raise LocusNotFoundError(
            f"Location {country_code}{location_code} not found. "
            "Import the listing that contains it first."
        )
    for line in _describe_location(view):
        print(line)
    return 0


def run_countries_command(client: LocusClient, args: argparse.Namespace) -> int:
    """Print one page of countries followed by paging totals."""
    page = client.list_countries(page=args.page, limit=args.limit)
    for country in page.items:
        print(f"{country.code}\t{country.name}")
    print(f"page={page.current_page}/{page.total_pages}\ttotal={page.total_count}")
    return 0


def _split_code(code: str, location_code: str | None) -> tuple[str, str]:
    normalized = code.strip().upper()
    if location_code:
        return normalized, location_code.strip().upper()
    if len(normalized) <= COUNTRY_CODE_LENGTH:
        raise LocusNotFoundError(
            f"Location code '{code}' is incomplete. Pass a full code like NZAKL or 'NZ AKL'."
        )
    return normalized[:COUNTRY_CODE_LENGTH], normalized[COUNTRY_CODE_LENGTH:]


def _describe_location(view: LocationView) -> list[str]:
    coordinates = view.coordinates
    numeric_code = view.numeric_location_code
    return [
        f"id={view.id}",
        f"unlocode={view.unlocode}",
        f"country={view.country_code}\t{view.country_name}",
        f"name={view.name}",
        f"description={view.description or '-'}",
        f"status={view.status_code or '-'}",
        f"functions={','.join(view.function_codes) or '-'}",
        f"admin_area={view.administrative_area_code or '-'}\t"
        f"{view.administrative_area_name or '-'}",
        f"latitude={coordinates.latitude if coordinates else '-'}",
        f"longitude={coordinates.longitude if coordinates else '-'}",
        f"numeric_location_code={'-' if numeric_code is None else numeric_code}",
    ]
