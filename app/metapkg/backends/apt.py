"""APT backend implementation.

Mutating operations run through apt-get; list and search use the apt
front end, whose output is line oriented (``name/suite version arch``).
"""

import logging
from pathlib import Path
from typing import ClassVar

from metapkg.backends.base import Backend
from metapkg.backends.parsers import AptLineParser, OutputParser
from metapkg.core.errors import RepositoryError
from metapkg.core.invoker import Invoker
from metapkg.core.materialize import materialize
from metapkg.models.operation import Operation
from metapkg.models.package import Package, PackageFormat

logger = logging.getLogger(__name__)

# Default APT sources file that add-repo appends to
SOURCES_LIST = Path("/etc/apt/sources.list")

_COMMANDS: dict[Operation, list[str]] = {
    Operation.INSTALL: ["install"],
    Operation.UNINSTALL: ["remove"],
    Operation.UPDATE: ["install"],
    Operation.UPDATE_ALL: ["upgrade"],
    Operation.LIST: ["list"],
    Operation.SYNC: ["update"],
    Operation.ADD_REPO: [],
    Operation.SEARCH: ["search"],
}

_FLAGS: dict[Operation, list[str]] = {
    Operation.INSTALL: ["--yes"],
    Operation.UNINSTALL: ["--yes"],
    Operation.UPDATE: ["--yes", "--only-upgrade"],
    Operation.UPDATE_ALL: ["--yes"],
    Operation.LIST: ["--installed"],
}


class AptBackend(Backend):
    """Backend for APT (Debian, Ubuntu and derivatives).

    Remote ``.deb`` URLs are downloaded before installation since apt-get
    only installs local files by path.
    """

    name: ClassVar[str] = "AdvancedPackageTool"
    executable: ClassVar[str] = "apt-get"
    delimiter: ClassVar[str] = "="
    formats: ClassVar[tuple[PackageFormat, ...]] = (PackageFormat.DEB,)

    def __init__(
        self,
        invoker: Invoker | None = None,
        parser: OutputParser | None = None,
        *,
        download_dir: Path | None = None,
        sources_list: Path = SOURCES_LIST,
    ) -> None:
        """Initialize the APT backend.

        Args:
            invoker: Runs the executable.
            parser: Parses captured output.
            download_dir: Directory for downloaded .deb files.
            sources_list: Sources file that add-repo appends to.
        """
        super().__init__(invoker, parser, download_dir=download_dir)
        self._sources_list = sources_list

    @property
    def query_executable(self) -> str:
        """Return 'apt', whose list/search output is stable enough to parse."""
        return "apt"

    def default_parser(self) -> OutputParser:
        return AptLineParser()

    def commands(self, operation: Operation, package: Package | None = None) -> list[str]:
        return list(_COMMANDS[operation])

    def flags(self, operation: Operation) -> list[str]:
        return list(_FLAGS.get(operation, []))

    def format_package(self, package: Package) -> list[str]:
        """Format a package, downloading remote artifacts first."""
        if package.is_remote:
            package, path = materialize(package, download_dir=self._download_dir)
            logger.debug("Installing %s from downloaded file %s", package.name, path)
        return super().format_package(package)

    def add_repo(self, repo: str) -> None:
        """Append a repository line to the APT sources file.

        Args:
            repo: Full sources line (e.g., 'deb http://host/debian stable main').

        Raises:
            RepositoryError: If the sources file cannot be written.
        """
        if self.invoker.dry_run:
            logger.info("Dry-run: would append %r to %s", repo, self._sources_list)
            return

        logger.info("Appending repository to %s", self._sources_list)
        try:
            with open(self._sources_list, "a", encoding="utf-8") as f:
                f.write(f"\n{repo}")
        except OSError as e:
            raise RepositoryError(repo, self.name, f"cannot write {self._sources_list}") from e
