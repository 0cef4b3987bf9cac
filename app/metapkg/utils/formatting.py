"""Rich console formatting utilities.

Provides consistent formatting for CLI output using Rich.
"""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING

from rich.console import Console
from rich.table import Table
from rich.theme import Theme

if TYPE_CHECKING:
    from metapkg.models.package import Package

_THEME = Theme(
    {
        "text": "#ffffff",
        "muted": "#b2bec3",
        "bold_header": "bold #69B9A1",
        "border": "#29526d",
        "success": "#03b971",
        "warning": "#f5b332",
        "error": "#f53263",
        "info": "#0ec1c8",
        "package": "bold #69B9A1",
        "available": "#03b971",
        "unavailable": "#b2bec3",
    }
)


def _detect_color_system() -> str | None:
    """Detect the best color system for the current terminal.

    Returns "truecolor" for interactive terminals to enable full hex color support,
    None otherwise to let Rich auto-detect.
    """
    if sys.stdout.isatty():
        return "truecolor"
    return None


console = Console(theme=_THEME, color_system=_detect_color_system())
err_console = Console(theme=_THEME, stderr=True, color_system=_detect_color_system())


def create_package_table(title: str = "Packages") -> Table:
    """Create a pre-configured table for displaying packages.

    Args:
        title: Table title.

    Returns:
        Rich Table with Package and Version columns.
    """
    table = Table(
        title=title,
        show_header=True,
        header_style="bold_header",
        border_style="border",
        row_styles=["", "on grey7"],  # Zebra striping for readability
    )
    table.add_column("Package", no_wrap=True)
    table.add_column("Version", style="muted")
    return table


def format_package_row(pkg: Package) -> tuple[str, str]:
    """Format a package as a table row.

    Args:
        pkg: The package to format.

    Returns:
        Tuple of (name, version) with Rich markup.
    """
    return (f"[package]{pkg.name}[/]", f"[muted]{pkg.version or '-'}[/]")


def create_manager_table(title: str = "Package Managers") -> Table:
    """Create a table for the supported package managers.

    Returns:
        Rich Table with Manager, Name, Formats and Status columns.
    """
    table = Table(
        title=title,
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("Manager", style="package", no_wrap=True)
    table.add_column("Name", style="text")
    table.add_column("Formats", style="muted")
    table.add_column("Status", justify="center")
    return table


def format_availability(available: bool) -> str:
    """Format backend availability with color markup."""
    if available:
        return "[available]● available[/]"  # Filled circle
    return "[unavailable]○ not found[/]"  # Empty circle


def print_info(message: str) -> None:
    """Print an info message."""
    console.print(f"[info]{message}[/]")


def print_error(message: str) -> None:
    """Print an error message."""
    err_console.print(f"[error]Error:[/] {message}")


def print_success(message: str) -> None:
    """Print a success message."""
    console.print(f"[success]{message}[/]")
