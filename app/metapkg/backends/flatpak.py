"""Flatpak backend implementation.

Flatpak lists applications as tab-separated columns and addresses
versions through branches (``org.gnome.Maps//stable``).
"""

from collections.abc import Sequence
from typing import ClassVar

from metapkg.backends.base import Backend, repo_alias
from metapkg.backends.parsers import FlatpakLineParser, OutputParser
from metapkg.models.operation import Operation
from metapkg.models.package import Package, PackageFormat

_COMMANDS: dict[Operation, list[str]] = {
    Operation.INSTALL: ["install"],
    Operation.UNINSTALL: ["uninstall"],
    Operation.UPDATE: ["update"],
    Operation.UPDATE_ALL: ["update"],
    Operation.LIST: ["list"],
    Operation.SYNC: ["update", "--appstream"],
    Operation.ADD_REPO: ["remote-add", "--if-not-exists"],
    Operation.SEARCH: ["search"],
}

_FLAGS: dict[Operation, list[str]] = {
    Operation.INSTALL: ["-y"],
    Operation.UNINSTALL: ["-y"],
    Operation.UPDATE: ["-y"],
    Operation.UPDATE_ALL: ["-y"],
}


class FlatpakBackend(Backend):
    """Backend for Flatpak applications."""

    name: ClassVar[str] = "Flatpak"
    executable: ClassVar[str] = "flatpak"
    delimiter: ClassVar[str] = "/"
    formats: ClassVar[tuple[PackageFormat, ...]] = (PackageFormat.FLATPAK,)

    def default_parser(self) -> OutputParser:
        return FlatpakLineParser()

    def commands(self, operation: Operation, package: Package | None = None) -> list[str]:
        return list(_COMMANDS[operation])

    def flags(self, operation: Operation) -> list[str]:
        return list(_FLAGS.get(operation, []))

    def consolidate(
        self,
        operation: Operation,
        package: Package | None = None,
        args: Sequence[str] = (),
    ) -> list[str]:
        """Build the argument vector; remote-add takes an alias before the URL."""
        if operation is Operation.ADD_REPO:
            aliased = [token for repo in args for token in (repo_alias(repo), repo)]
            return super().consolidate(operation, package, aliased)
        return super().consolidate(operation, package, args)

    def format_package(self, package: Package) -> list[str]:
        # Versions are branches: name//branch
        if package.version is not None and package.url is None:
            return [f"{package.name}//{package.version}"]
        return super().format_package(package)
