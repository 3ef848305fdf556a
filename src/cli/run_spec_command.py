"""Run-spec CLI command wiring.

This module registers the run-spec subcommand and delegates execution to the
shared import pipeline used by CLI and SDK entry points.
"""

from __future__ import annotations

import argparse
from typing import Any

from cli.output import print_import_summary
from store.registry_sdk import LocusClient


def add_run_spec_command(subparsers: Any) -> None:
    """Register run-spec subcommand."""
    parser = subparsers.add_parser(
        "run-spec",
        help="Run a declarative YAML import spec",
    )
    parser.add_argument("spec_file", help="Path to YAML import-spec file")


def run_run_spec_command(client: LocusClient, args: argparse.Namespace) -> int:
    """Handle run-spec command invocation."""
    summary = client.run_import_spec(args.spec_file)
    print_import_summary(summary)
    return 0
