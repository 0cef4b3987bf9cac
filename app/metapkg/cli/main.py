"""Main CLI application entry point.

Defines the Typer application and global options.
"""

import logging
from typing import Annotated

import typer
from rich.logging import RichHandler

from metapkg import __version__
from metapkg.cli.commands import (
    config,
    install,
    installed,
    managers,
    repo,
    search,
    sync,
    uninstall,
    update,
)
from metapkg.utils.formatting import err_console

# Create main Typer app
app = typer.Typer(
    name="metapkg",
    help="One command line for many package managers.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"metapkg version {__version__}")
        raise typer.Exit()


def configure_logging(verbose: bool) -> None:
    """Route library logging to stderr through rich."""
    handler = RichHandler(console=err_console, show_time=False, show_path=False)
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[handler],
        force=True,
    )


@app.callback()
def main(
    ctx: typer.Context,
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit.",
        ),
    ] = None,
    manager: Annotated[
        str | None,
        typer.Option(
            "--manager",
            "-m",
            help="Package manager to use (brew, choco, apt, dnf, yum, zypper, flatpak).",
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Enable verbose output.",
        ),
    ] = False,
    dry_run: Annotated[
        bool,
        typer.Option(
            "--dry-run",
            help="Show commands that change the system instead of running them.",
        ),
    ] = False,
) -> None:
    """metapkg - One command line for many package managers.

    The package manager is taken from --manager, then from the settings
    file, and is otherwise autodetected.
    """
    configure_logging(verbose)

    # Store options in context for subcommands
    ctx.ensure_object(dict)
    ctx.obj["manager"] = manager
    ctx.obj["verbose"] = verbose
    ctx.obj["dry_run"] = dry_run


# Register commands
app.command("managers")(managers.list_managers)
app.command("search")(search.search_packages)
app.command("list")(installed.list_packages)
app.command("install")(install.install_packages)
app.command("uninstall")(uninstall.uninstall_packages)
app.command("update")(update.update_packages)
app.command("repo")(repo.add_repository)
app.command("sync")(sync.sync_repositories)
app.add_typer(config.app, name="config")


if __name__ == "__main__":
    app()
