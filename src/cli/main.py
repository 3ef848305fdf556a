"""Locus CLI entry points.
This module exposes commands for seeding, importing, and browsing the registry.
It maps argparse commands onto SDK calls.
"""

from __future__ import annotations

import argparse
from dataclasses import replace
from typing import Any, Sequence

from cli.output import print_import_summary
from cli.query_commands import (
    add_countries_command,
    add_locations_command,
    add_show_command,
    run_countries_command,
    run_locations_command,
    run_show_command,
)
from cli.run_spec_command import add_run_spec_command, run_run_spec_command
from core.config import LocusConfig
from core.constants import (
    DEFAULT_ADMIN_AREA_DELIMITER,
    DEFAULT_DELIMITER,
    DEFAULT_SOURCE_ENCODING,
    SUPPORTED_LOG_LEVELS,
)
from core.errors import LocusError
from core.logging_config import configure_logging
from core.types import ImportOptions, SourceFormat
from store.registry_sdk import LocusClient


def build_parser() -> argparse.ArgumentParser:
    """Build the top-level CLI parser.

    Returns:
        Configured argument parser.
    """
    parser = argparse.ArgumentParser(prog="locus", description="Locus location registry CLI")
    parser.add_argument("--database-url", help="Override LOCUS_DATABASE_URL for this command")
    parser.add_argument(
        "--log-level",
        choices=SUPPORTED_LOG_LEVELS,
        help="Override LOCUS_LOG_LEVEL for this command",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)
    _add_seed_command(subparsers)
    _add_import_command(subparsers)
    _add_import_admin_areas_command(subparsers)
    add_run_spec_command(subparsers)
    add_locations_command(subparsers)
    add_show_command(subparsers)
    add_countries_command(subparsers)
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run the Locus CLI.

    Args:
        argv: Optional argument vector.

    Returns:
        Process exit code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        client = _build_client(args.database_url, args.log_level)
    except LocusError as error:
        print(f"error={error}")
        return 1
    try:
        return _dispatch(parser, client, args)
    except LocusError as error:
        print(f"error={error}")
        return 1
    finally:
        client.close()


def _dispatch(
    parser: argparse.ArgumentParser,
    client: LocusClient,
    args: argparse.Namespace,
) -> int:
    if args.command == "seed":
        return _run_seed_command(client, args)
    if args.command == "import":
        return _run_import_command(client, args)
    if args.command == "import-admin-areas":
        return _run_import_admin_areas_command(client, args)
    if args.command == "run-spec":
        return run_run_spec_command(client, args)
    if args.command == "locations":
        return run_locations_command(client, args)
    if args.command == "show":
        return run_show_command(client, args)
    if args.command == "countries":
        return run_countries_command(client, args)
    parser.error(f"Unsupported command: {args.command}")
    return 2


def _build_client(database_url: str | None, log_level: str | None) -> LocusClient:
    """Build SDK client with optional overrides.

    Args:
        database_url: Optional database URL override.
        log_level: Optional log level override.

    Returns:
        Configured SDK client.
    """
    config = LocusConfig.from_env()
    if database_url:
        config = replace(config, database_url=database_url)
    if log_level:
        config = replace(config, log_level=log_level)
    configure_logging(config.log_level)
    return LocusClient(config)


def _run_seed_command(client: LocusClient, args: argparse.Namespace) -> int:
    """Handle seed command."""
    summary = client.seed_reference_data()
    print(f"inserted={summary.inserted}")
    print(f"skipped={summary.skipped}")
    return 0


def _run_import_command(client: LocusClient, args: argparse.Namespace) -> int:
    """Handle import command.

    Args:
        client: SDK client.
        args: Parsed CLI args.

    Returns:
        Exit code.
    """
    options = ImportOptions(
        source_uris=tuple(args.sources),
        admin_area_uri=args.admin_areas,
        source_format=SourceFormat(delimiter=args.delimiter, encoding=args.encoding),
        admin_area_format=SourceFormat(
            delimiter=args.admin_delimiter, encoding=args.admin_encoding
        ),
        seed_reference=not args.no_seed,
    )
    summary = client.import_locations(options)
    print_import_summary(summary)
    return 0


def _run_import_admin_areas_command(client: LocusClient, args: argparse.Namespace) -> int:
    """Handle import-admin-areas command."""
    summary = client.import_admin_areas(
        args.source,
        SourceFormat(delimiter=args.delimiter, encoding=args.encoding),
    )
    print(f"upserted={summary.upserted}")
    print(f"skipped_unknown_country={summary.skipped_unknown_country}")
    print(f"skipped_invalid={summary.skipped_invalid}")
    return 0


def _add_seed_command(subparsers: Any) -> None:
    """Register seed subcommand."""
    subparsers.add_parser("seed", help="Insert status and function codes when absent")


def _add_import_command(subparsers: Any) -> None:
    """Register import subcommand."""
    parser = subparsers.add_parser("import", help="Import location listings in order")
    parser.add_argument("sources", nargs="+", help="Listing files or s3://bucket/key URIs")
    parser.add_argument("--admin-areas", help="Administrative-area listing used to name areas")
    parser.add_argument("--delimiter", default=DEFAULT_DELIMITER, help="Listing field delimiter")
    parser.add_argument(
        "--encoding",
        default=DEFAULT_SOURCE_ENCODING,
        help="Listing text encoding, e.g. latin-1",
    )
    parser.add_argument(
        "--admin-delimiter",
        default=DEFAULT_ADMIN_AREA_DELIMITER,
        help="Administrative-area listing delimiter",
    )
    parser.add_argument(
        "--admin-encoding",
        default=DEFAULT_SOURCE_ENCODING,
        help="Administrative-area listing encoding",
    )
    parser.add_argument(
        "--no-seed",
        action="store_true",
        help="Skip seeding status and function codes before importing",
    )


def _add_import_admin_areas_command(subparsers: Any) -> None:
    """Register import-admin-areas subcommand."""
    parser = subparsers.add_parser(
        "import-admin-areas",
        help="Upsert administrative areas whose country is already stored",
    )
    parser.add_argument("source", help="Listing file or s3://bucket/key URI")
    parser.add_argument(
        "--delimiter",
        default=DEFAULT_ADMIN_AREA_DELIMITER,
        help="Listing field delimiter",
    )
    parser.add_argument("--encoding", default=DEFAULT_SOURCE_ENCODING, help="Listing encoding")
