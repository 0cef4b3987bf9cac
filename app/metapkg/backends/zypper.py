"""Zypper backend implementation.

List and search use zypper's XML output mode, the only output format of
zypper with a stable structure.
"""

import logging
from collections.abc import Sequence
from typing import ClassVar

from metapkg.backends.base import Backend, repo_alias
from metapkg.backends.parsers import OutputParser, ZypperXmlParser
from metapkg.models.operation import Operation
from metapkg.models.package import Package, PackageFormat
from metapkg.utils.shell import CommandResult

logger = logging.getLogger(__name__)

# Exit status of 'zypper search' when nothing matched
ZYPPER_EXIT_INF_CAP_NOT_FOUND = 104

_COMMANDS: dict[Operation, list[str]] = {
    Operation.INSTALL: ["install"],
    Operation.UNINSTALL: ["remove"],
    Operation.UPDATE: ["update"],
    Operation.UPDATE_ALL: ["dist-upgrade"],
    Operation.LIST: ["--xmlout", "search"],
    Operation.SYNC: ["refresh"],
    Operation.ADD_REPO: ["addrepo"],
    Operation.SEARCH: ["--xmlout", "--no-refresh", "search"],
}

_FLAGS: dict[Operation, list[str]] = {
    Operation.INSTALL: ["-n"],
    Operation.UNINSTALL: ["-n"],
    Operation.UPDATE: ["-n"],
    Operation.UPDATE_ALL: ["-n"],
    Operation.LIST: ["--installed-only", "--details"],
    Operation.ADD_REPO: ["-f"],
}


class ZypperBackend(Backend):
    """Backend for zypper (openSUSE, SLES)."""

    name: ClassVar[str] = "Zypper"
    executable: ClassVar[str] = "zypper"
    delimiter: ClassVar[str] = "-"
    formats: ClassVar[tuple[PackageFormat, ...]] = (PackageFormat.RPM,)

    def default_parser(self) -> OutputParser:
        return ZypperXmlParser(self.name)

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
        """Build the argument vector; addrepo takes the URI and an alias."""
        if operation is Operation.ADD_REPO:
            aliased = [token for repo in args for token in (repo, repo_alias(repo))]
            return super().consolidate(operation, package, aliased)
        return super().consolidate(operation, package, args)

    def parse_result(self, operation: Operation, result: CommandResult) -> list[Package]:
        """Parse the XML document; a search without matches yields nothing."""
        if result.returncode == ZYPPER_EXIT_INF_CAP_NOT_FOUND:
            logger.debug("zypper %s found no matches", operation.value)
            return []
        return super().parse_result(operation, result)
