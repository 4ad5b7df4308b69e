"""Output formatting for ghupload.

Renders upload plans, link reports and settings as JSON, Rich tables, or
bare URLs for piping.
"""

from __future__ import annotations

import json
from collections.abc import Sequence
from enum import Enum
from typing import Any

from rich.console import Console
from rich.progress import BarColumn, Progress, SpinnerColumn, TaskProgressColumn, TextColumn
from rich.table import Table

# =============================================================================
# Console Instances
# =============================================================================

console = Console()
err_console = Console(stderr=True)


# =============================================================================
# Output Format
# =============================================================================


class OutputFormat(Enum):
    """Output format options."""

    JSON = "json"
    TABLE = "table"

    @classmethod
    def from_string(cls, value: str) -> OutputFormat:
        """Create from string value."""
        return cls(value.lower())


# =============================================================================
# Table Output
# =============================================================================


def print_table(
    rows: Sequence[dict[str, Any]],
    columns: Sequence[str],
    *,
    title: str | None = None,
    column_labels: dict[str, str] | None = None,
) -> None:
    """Print rows of file names, remote paths and URLs as a Rich table.

    URL columns fold rather than truncate.

    Args:
        rows: One dict per file.
        columns: Column keys to display.
        title: Optional table title.
        column_labels: Optional mapping of column keys to display labels.
    """
    if not rows:
        console.print("[dim]No files[/dim]")
        return

    table = Table(title=title, show_header=True, header_style="bold")
    labels = column_labels or {}
    for col in columns:
        table.add_column(labels.get(col, col.replace("_", " ").title()), overflow="fold")

    for row in rows:
        table.add_row(*(str(row.get(col, "")) for col in columns))

    console.print(table)


def print_key_value(
    data: dict[str, Any],
    *,
    title: str | None = None,
) -> None:
    """Print settings or repository facts as aligned ``Key  value`` lines.

    Booleans render as Yes/No and lists as comma-separated values.
    """
    if title:
        console.print(f"[bold]{title}[/bold]")
    if not data:
        return

    labels = {key: key.replace("_", " ").title() for key in data}
    width = max(len(label) for label in labels.values())

    for key, value in data.items():
        if value is None:
            value = "[dim]-[/dim]"
        elif isinstance(value, bool):
            value = "[green]Yes[/green]" if value else "[red]No[/red]"
        elif isinstance(value, (list, tuple)):
            value = ", ".join(str(v) for v in value)
        console.print(f"  {labels[key]:<{width}}  {value}")


def print_counts(succeeded: int, failed: int) -> None:
    """Print the batch tally line."""
    failed_style = "red" if failed else "dim"
    console.print(
        f"[green]Succeeded: {succeeded}[/green] | [{failed_style}]Failed: {failed}[/{failed_style}]"
    )


# =============================================================================
# JSON Output
# =============================================================================


def print_json(data: Any, *, indent: int = 2) -> None:
    """Print data as JSON."""
    print(json.dumps(data, indent=indent, default=str, ensure_ascii=False))


# =============================================================================
# Unified Output
# =============================================================================


def print_output(
    data: Any,
    *,
    format: OutputFormat = OutputFormat.TABLE,
    columns: Sequence[str] | None = None,
    column_labels: dict[str, str] | None = None,
    title: str | None = None,
    quiet: bool = False,
    id_field: str = "name",
) -> None:
    """Print data in the specified format.

    Args:
        data: A dict of facts or a list of per-file rows.
        format: Output format.
        columns: Columns for table format.
        column_labels: Labels for columns.
        title: Optional title.
        quiet: If True, only print the ``id_field`` of each row, one per line.
        id_field: Field printed in quiet mode (a file name or a URL).
    """
    if quiet:
        rows = data if isinstance(data, list) else [data]
        for row in rows:
            print(row.get(id_field, ""))
        return

    if format == OutputFormat.JSON:
        print_json(data)
    elif isinstance(data, list):
        if columns is None:
            columns = list(data[0]) if data else []
        print_table(data, columns, title=title, column_labels=column_labels)
    else:
        print_key_value(data, title=title)


# =============================================================================
# Status Messages
# =============================================================================


def print_error(message: str) -> None:
    """Print error message to stderr."""
    err_console.print(f"[red]Error:[/red] {message}", highlight=False)


def print_warning(message: str) -> None:
    """Print warning message to stderr."""
    err_console.print(f"[yellow]Warning:[/yellow] {message}", highlight=False)


def print_success(message: str) -> None:
    """Print success message."""
    console.print(f"[green]✓[/green] {message}")


def print_info(message: str) -> None:
    """Print info message."""
    console.print(f"[blue]Info:[/blue] {message}")


# =============================================================================
# Progress
# =============================================================================


def create_progress() -> Progress:
    """Create a transient upload progress bar on stderr."""
    return Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        BarColumn(),
        TaskProgressColumn(),
        console=err_console,
        transient=True,
    )
