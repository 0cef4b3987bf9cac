"""List command implementation.

Lists packages installed through the selected package manager.
"""

from typing import Annotated

import typer

from metapkg.cli.types import OutputFormat, get_backend, print_packages
from metapkg.core.errors import MetapkgError
from metapkg.utils.formatting import print_error


def list_packages(
    ctx: typer.Context,
    output_format: Annotated[
        OutputFormat,
        typer.Option(
            "--format",
            "-f",
            help="Output format: table or json.",
            case_sensitive=False,
        ),
    ] = OutputFormat.TABLE,
) -> None:
    """List installed packages."""
    backend = get_backend(ctx)

    try:
        packages = backend.list_installed()
    except MetapkgError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    print_packages(packages, output_format, f"Installed Packages ({backend.name})")
