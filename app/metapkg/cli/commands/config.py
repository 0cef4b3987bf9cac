"""Settings commands.

Shows the effective settings or writes a default settings file.
"""

from typing import Annotated

import typer
from rich.table import Table

from metapkg.cli.types import get_settings
from metapkg.core.config import ConfigError, Settings, save_settings
from metapkg.core.paths import get_config_path, get_download_dir
from metapkg.utils.formatting import console, print_error, print_info, print_success

app = typer.Typer(
    help="Show or create the metapkg settings file.",
    no_args_is_help=True,
)


@app.command()
def show(ctx: typer.Context) -> None:
    """Show the effective settings."""
    settings = get_settings(ctx)
    path = get_config_path()

    table = Table(show_header=True, header_style="bold_header", border_style="border")
    table.add_column("Setting", style="package", no_wrap=True)
    table.add_column("Value", style="text")
    table.add_row("manager", settings.manager or "[muted](autodetect)[/]")
    table.add_row("elevate", str(settings.elevate).lower())
    table.add_row("stream_output", str(settings.stream_output).lower())
    table.add_row("download_dir", str(settings.download_dir or get_download_dir()))
    console.print(table)

    if path.exists():
        console.print(f"\n[muted]Loaded from {path}[/]")
    else:
        console.print(f"\n[muted]No settings file at {path}, showing defaults[/]")


@app.command()
def init(
    force: Annotated[
        bool,
        typer.Option("--force", "-f", help="Overwrite an existing settings file."),
    ] = False,
) -> None:
    """Write a settings file with default values."""
    path = get_config_path()

    if path.exists() and not force:
        print_info(f"Settings file already exists: {path}")
        print_info("Use --force to overwrite it.")
        raise typer.Exit(code=1)

    try:
        saved = save_settings(Settings(), path)
    except ConfigError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    print_success(f"Settings written to {saved}")
