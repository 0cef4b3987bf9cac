"""Homebrew backend implementation."""

from typing import ClassVar

from metapkg.backends.base import Backend
from metapkg.models.operation import Operation
from metapkg.models.package import Package, PackageFormat

_COMMANDS: dict[Operation, list[str]] = {
    Operation.INSTALL: ["install"],
    Operation.UNINSTALL: ["uninstall"],
    Operation.UPDATE: ["upgrade"],
    Operation.UPDATE_ALL: ["upgrade"],
    Operation.LIST: ["list"],
    Operation.SYNC: ["update"],
    Operation.ADD_REPO: ["tap"],
    Operation.SEARCH: ["search"],
}


class HomebrewBackend(Backend):
    """Backend for Homebrew on macOS and Linux.

    brew takes no confirmation flags; ``sync`` is brew's own metadata
    update and ``add_repo`` taps a repository.
    """

    name: ClassVar[str] = "Homebrew"
    executable: ClassVar[str] = "brew"
    delimiter: ClassVar[str] = "@"
    formats: ClassVar[tuple[PackageFormat, ...]] = (PackageFormat.BOTTLE,)

    def commands(self, operation: Operation, package: Package | None = None) -> list[str]:
        return list(_COMMANDS[operation])
