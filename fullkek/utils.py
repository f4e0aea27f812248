"""Shared utility functions for fullkek.

Provides project naming helpers (output directory and module path
derivation) and Rich-based console output helpers.  The naming helpers are
pure and never touch the filesystem.
"""

from __future__ import annotations

import os
from pathlib import Path

from rich.console import Console
from rich.table import Table

console = Console()

# ---------------------------------------------------------------------------
# Project naming helpers
# ---------------------------------------------------------------------------


def _hyphenate(app_name: str) -> str:
    return app_name.strip().replace(" ", "-").lower()


def resolve_output_dir(app_name: str, override: str = "") -> str:
    """Return the directory the project is scaffolded into.

    An explicit *override* wins.  Otherwise the app name is lower-cased,
    spaces become hyphens and leading/trailing hyphens are trimmed.

    Examples::

        resolve_output_dir("My App")          -> "my-app"
        resolve_output_dir("My App", "./out") -> "./out"
        resolve_output_dir(" -Demo- ")        -> "demo"
    """
    override = override.strip()
    if override:
        return override
    sanitized = _hyphenate(app_name).strip("-")
    if not sanitized:
        return app_name.strip()
    return sanitized


def derive_module_path(app_name: str, override: str = "") -> str:
    """Return the module path, falling back to the hyphenated app name."""
    if override.strip():
        return override.strip()
    return _hyphenate(app_name)


def scaffold_destination_path(base_dir: str, app_name: str, output_dir: str) -> str:
    """Return the absolute destination shown to the user, or ``""`` if unknown."""
    destination = resolve_output_dir(app_name, output_dir).strip()
    if not destination:
        return ""
    path = Path(destination)
    if base_dir and not path.is_absolute():
        path = Path(base_dir) / path
    return os.path.normpath(path)


def value_or_placeholder(value: str) -> str:
    value = value.strip()
    return value if value else "(not set)"


def humanize_bool(value: bool) -> str:
    return "Yes" if value else "No"


# ---------------------------------------------------------------------------
# Rich output helpers
# ---------------------------------------------------------------------------


def print_summary_table(data: dict[str, str], title: str = "Summary") -> None:
    """Print a two-column key/value summary table.

    Args:
        data: Mapping of label -> value.
        title: Table title.
    """
    table = Table(title=title, show_header=True, header_style="bold cyan")
    table.add_column("Item", style="dim", no_wrap=True)
    table.add_column("Value")

    for key, value in data.items():
        table.add_row(key, str(value))

    console.print(table)
    console.print()


def print_success(message: str) -> None:
    """Print a green success message."""
    console.print(f"[bold green]{message}[/bold green]")


def print_error(message: str) -> None:
    """Print a red error message."""
    console.print(f"[bold red]{message}[/bold red]")


def print_warning(message: str) -> None:
    """Print a yellow warning message."""
    console.print(f"[bold yellow]{message}[/bold yellow]")
