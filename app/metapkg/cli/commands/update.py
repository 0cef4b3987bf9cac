"""Update command implementation.

Updates the named packages, or every installed package with --all.
"""

from typing import Annotated

import typer

from metapkg.cli.types import get_backend, report_result, run_package_operation
from metapkg.models.operation import Operation
from metapkg.utils.formatting import print_error


def update_packages(
    ctx: typer.Context,
    packages: Annotated[
        list[str] | None,
        typer.Argument(help="Packages to update."),
    ] = None,
    update_all: Annotated[
        bool,
        typer.Option("--all", "-a", help="Update all installed packages."),
    ] = False,
) -> None:
    """Update packages.

    Examples:
        metapkg update hello
        metapkg update --all
    """
    if update_all and packages:
        print_error("Pass package names or --all, not both.")
        raise typer.Exit(code=1)

    if not update_all and not packages:
        print_error("No packages given. Use --all to update everything.")
        raise typer.Exit(code=1)

    backend = get_backend(ctx)
    if update_all:
        report_result(backend.update_all())
        return

    run_package_operation(backend, Operation.UPDATE, packages or [])
