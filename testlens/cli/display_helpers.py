"""Display helper functions for CLI commands."""

from pathlib import Path
from typing import Any

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from ..application.run_targets import LineIndex
from ..domain.models import ExtractionResult


def result_rows(text: str, result: ExtractionResult) -> list[dict[str, Any]]:
    """Modules and tests of one file with 1-based line numbers, in source order."""
    index = LineIndex(text)
    rows: list[dict[str, Any]] = []
    for entry in result.modules:
        location = index.location(entry.position)
        rows.append(
            {
                "kind": "module",
                "path": entry.path,
                "position": entry.position,
                "line": location.line + 1,
                "column": location.column + 1,
            }
        )
    for entry in result.tests:
        location = index.location(entry.position)
        rows.append(
            {
                "kind": "test",
                "path": entry.path,
                "module": entry.module_path,
                "name": entry.test_name,
                "position": entry.position,
                "line": location.line + 1,
                "column": location.column + 1,
            }
        )
    rows.sort(key=lambda row: row["position"])
    return rows


def display_file_table(
    console: Console, file_path: Path, rows: list[dict[str, Any]]
) -> None:
    """Print the modules and tests of one file."""
    table = Table(
        title=escape(str(file_path)),
        show_header=True,
        header_style="bold blue",
        border_style="blue",
    )
    table.add_column("Line", justify="right", style="bright_cyan", min_width=4)
    table.add_column("Kind", justify="center", style="yellow", min_width=6)
    table.add_column("Path", style="green", no_wrap=False)

    for row in rows:
        table.add_row(str(row["line"]), row["kind"].upper(), escape(row["path"]))

    console.print(table)


def display_scan_table(console: Console, summaries: list[dict[str, Any]]) -> None:
    """Print per-file module and test counts."""
    table = Table(
        title="Test Files",
        show_header=True,
        header_style="bold blue",
        border_style="blue",
    )
    table.add_column("File", style="cyan", no_wrap=False, min_width=15)
    table.add_column("Variant", justify="center", style="yellow")
    table.add_column("Modules", justify="right", style="green")
    table.add_column("Tests", justify="right", style="green")

    for summary in summaries:
        table.add_row(
            escape(summary["file"]),
            summary["variant"],
            str(summary["modules"]),
            str(summary["tests"]) if summary["error"] is None else "[red]parse error[/]",
        )

    console.print(table)
