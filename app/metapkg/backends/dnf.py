"""DNF and YUM backend implementations.

Both tools share command vocabulary and output format. Adding a
repository needs the config-manager plugin, which is installed on
demand first.
"""

import logging
from typing import ClassVar

from metapkg.backends.base import Backend
from metapkg.backends.parsers import DnfLineParser, OutputParser
from metapkg.core.errors import OperationFailedError, RepositoryError
from metapkg.models.operation import Operation
from metapkg.models.package import Package, PackageFormat

logger = logging.getLogger(__name__)

_COMMANDS: dict[Operation, list[str]] = {
    Operation.INSTALL: ["install"],
    Operation.UNINSTALL: ["remove"],
    Operation.UPDATE: ["upgrade"],
    Operation.UPDATE_ALL: ["distro-sync"],
    Operation.LIST: ["list"],
    Operation.SYNC: ["makecache"],
    Operation.ADD_REPO: ["config-manager", "--add-repo"],
    Operation.SEARCH: ["search"],
}

_FLAGS: dict[Operation, list[str]] = {
    Operation.INSTALL: ["-y"],
    Operation.UNINSTALL: ["-y"],
    Operation.UPDATE: ["-y"],
    Operation.UPDATE_ALL: ["-y"],
    Operation.LIST: ["--installed"],
    Operation.SEARCH: ["-q"],
}


class DnfBackend(Backend):
    """Backend for DNF (Fedora, RHEL 8+)."""

    name: ClassVar[str] = "Dandified YUM"
    executable: ClassVar[str] = "dnf"
    delimiter: ClassVar[str] = "-"
    formats: ClassVar[tuple[PackageFormat, ...]] = (PackageFormat.RPM,)

    # Package providing the config-manager subcommand
    config_manager_plugin: ClassVar[str] = "dnf-command(config-manager)"

    def default_parser(self) -> OutputParser:
        return DnfLineParser()

    def commands(self, operation: Operation, package: Package | None = None) -> list[str]:
        return list(_COMMANDS[operation])

    def flags(self, operation: Operation) -> list[str]:
        return list(_FLAGS.get(operation, []))

    def add_repo(self, repo: str) -> None:
        """Add a repository with config-manager.

        The plugin providing config-manager is installed first.

        Raises:
            RepositoryError: If the plugin cannot be installed (the failed
                install is attached as cause) or config-manager fails.
        """
        logger.debug("Installing %s before adding %s", self.config_manager_plugin, repo)
        result = self.install(Package(name=self.config_manager_plugin))
        if result.failed:
            raise RepositoryError(
                repo, self.name, f"failed to install {self.config_manager_plugin}"
            ) from OperationFailedError(result)

        super().add_repo(repo)


class YumBackend(DnfBackend):
    """Backend for YUM (RHEL 7, CentOS 7 and older)."""

    name: ClassVar[str] = "Yellowdog Updater Modified"
    executable: ClassVar[str] = "yum"

    config_manager_plugin: ClassVar[str] = "yum-utils"
