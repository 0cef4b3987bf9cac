"""Install command implementation."""

from typing import Annotated

import typer

from metapkg.cli.types import get_backend, run_package_operation
from metapkg.models.operation import Operation


def install_packages(
    ctx: typer.Context,
    packages: Annotated[
        list[str],
        typer.Argument(help="Packages to install: name, name@version, URL or file path."),
    ],
) -> None:
    """Install packages.

    Examples:
        metapkg install hello
        metapkg install hello@2.10
        metapkg install ./hello_2.10-3_amd64.deb
        metapkg install https://example.com/hello_2.10-3_amd64.deb
    """
    run_package_operation(get_backend(ctx), Operation.INSTALL, packages)
