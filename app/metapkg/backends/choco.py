"""Chocolatey backend implementation.

Chocolatey has no name/version token: a version is passed as a separate
``--version`` option. List and search use ``--limit-output``, which
prints ``name|version`` lines.
"""

from collections.abc import Sequence
from typing import ClassVar

from metapkg.backends.base import Backend, repo_alias
from metapkg.models.operation import Operation
from metapkg.models.package import Package, PackageFormat

_COMMANDS: dict[Operation, list[str]] = {
    Operation.INSTALL: ["install"],
    Operation.UNINSTALL: ["uninstall"],
    Operation.UPDATE: ["upgrade"],
    Operation.UPDATE_ALL: ["upgrade", "all"],
    Operation.LIST: ["list"],
    Operation.SYNC: ["upgrade", "chocolatey"],
    Operation.ADD_REPO: ["source", "add"],
    Operation.SEARCH: ["search"],
}

_FLAGS: dict[Operation, list[str]] = {
    Operation.INSTALL: ["-y"],
    Operation.UNINSTALL: ["-y"],
    Operation.UPDATE: ["-y"],
    Operation.UPDATE_ALL: ["-y"],
    Operation.LIST: ["--limit-output"],
    Operation.SYNC: ["-y"],
    Operation.SEARCH: ["--limit-output"],
}


class ChocolateyBackend(Backend):
    """Backend for Chocolatey on Windows."""

    name: ClassVar[str] = "Chocolatey"
    executable: ClassVar[str] = "choco"
    delimiter: ClassVar[str] = "|"
    formats: ClassVar[tuple[PackageFormat, ...]] = (PackageFormat.EXE, PackageFormat.MSI)

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
        """Build the argument vector, with named options for add-repo.

        ``choco source add`` takes the repository as ``--source`` and
        requires a ``--name``, so add-repo does not append its arguments.
        """
        if operation is Operation.ADD_REPO:
            tokens = self.commands(operation, package)
            for repo in args:
                tokens += [f"--name={repo_alias(repo)}", f"--source={repo}"]
            return tokens
        return super().consolidate(operation, package, args)

    def format_package(self, package: Package) -> list[str]:
        if package.version is not None and package.url is None:
            return [package.name, "--version", package.version]
        return super().format_package(package)
