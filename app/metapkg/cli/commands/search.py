"""Search command implementation."""

from typing import Annotated

import typer

from metapkg.cli.types import OutputFormat, get_backend, print_packages
from metapkg.core.errors import MetapkgError
from metapkg.utils.formatting import print_error, print_info


def search_packages(
    ctx: typer.Context,
    query: Annotated[str, typer.Argument(help="Search term.")],
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
    """Search available packages.

    Examples:
        metapkg search hello
        metapkg -m flatpak search gimp --format json
    """
    backend = get_backend(ctx)

    try:
        packages = backend.search(query)
    except MetapkgError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    if not packages and output_format == OutputFormat.TABLE:
        print_info(f"No packages matching '{query}' found via {backend.name}.")
        return

    print_packages(packages, output_format, f"Search results for '{query}' ({backend.name})")
