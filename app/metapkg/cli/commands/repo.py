"""Repository command implementation."""

from typing import Annotated

import typer

from metapkg.cli.types import get_backend
from metapkg.core.errors import RepositoryError
from metapkg.utils.formatting import print_error, print_success


def add_repository(
    ctx: typer.Context,
    repo: Annotated[str, typer.Argument(help="Repository URL or sources line.")],
) -> None:
    """Add a third-party repository.

    Examples:
        metapkg -m flatpak repo https://dl.flathub.org/repo/flathub.flatpakrepo
        metapkg -m brew repo homebrew/cask-fonts
    """
    backend = get_backend(ctx)

    try:
        backend.add_repo(repo)
    except RepositoryError as e:
        print_error(str(e))
        cause = e.__cause__
        while cause is not None:
            print_error(f"  caused by: {cause}")
            cause = cause.__cause__
        raise typer.Exit(code=1) from e

    print_success(f"Added repository '{repo}' via {backend.name}")
