"""Plain-text rendering shared by CLI commands."""

from __future__ import annotations

from core.types import ImportSummary
from store.location_queries import LocationView


def print_import_summary(summary: ImportSummary) -> None:
    """Print run totals, per-listing counters, and sampled messages."""
    print(f"imported={summary.imported}")
    print(f"skipped_duplicate={summary.skipped_duplicate}")
    print(f"skipped_invalid={summary.skipped_invalid}")
    print(f"failed={summary.failed}")
    print(f"country_headers={summary.country_headers}")
    for file_summary in summary.files:
        print(
            f"file={file_summary.source_uri}\t"
            f"imported={file_summary.imported}\t"
            f"skipped_duplicate={file_summary.skipped_duplicate}\t"
            f"skipped_invalid={file_summary.skipped_invalid}\t"
            f"failed={file_summary.failed}"
        )
    for message in summary.messages:
        print(f"message={message}")


def format_location_row(view: LocationView) -> str:
    """Render one location as a tab-separated listing line."""
    coordinates = view.coordinates
    return (
        f"{view.unlocode or view.location_code}\t"
        f"{view.name}\t"
        f"{view.status_code or '-'}\t"
        f"{''.join(view.function_codes) or '-'}\t"
        f"{coordinates.latitude if coordinates else '-'}\t"
        f"{coordinates.longitude if coordinates else '-'}"
    )
