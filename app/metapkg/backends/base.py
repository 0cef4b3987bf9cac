"""Abstract base class for package manager backends.

This module defines the Backend interface every supported package manager
implements. A backend supplies its command table, package delimiter and
output parser; the base class composes them with an Invoker into the
uniform operations (search, list, install, uninstall, update, update-all,
sync, add-repo).
"""

import logging
import subprocess
from abc import ABC, abstractmethod
from collections.abc import Sequence
from pathlib import Path, PurePosixPath
from typing import ClassVar
from urllib.parse import urlsplit

from metapkg.backends.parsers import DelimitedLineParser, OutputParser
from metapkg.core.errors import OperationFailedError, RepositoryError
from metapkg.core.invoker import DEFAULT_PROBE_ARGS, Invoker
from metapkg.models.operation import Operation, OperationResult
from metapkg.models.package import Package, PackageFormat
from metapkg.utils.shell import CommandResult

logger = logging.getLogger(__name__)


def repo_alias(repo: str) -> str:
    """Derive a short repository name from a repository URL.

    ``https://dl.flathub.org/repo/flathub.flatpakrepo`` becomes
    ``flathub``; a URL without a usable file name falls back to its host,
    and anything that is not a URL is returned unchanged.

    Args:
        repo: Repository URL or name.

    Returns:
        Alias suitable for backends that require one.
    """
    parts = urlsplit(repo)
    if not parts.scheme:
        return repo
    stem = PurePosixPath(parts.path).stem
    return stem or parts.hostname or repo


class Backend(ABC):
    """Abstract base class for all package manager backends.

    Subclasses describe the package manager through class attributes and
    implement :meth:`commands`. Everything else has a default that can be
    overridden where the tool diverges.

    Attributes:
        name: Human readable name (e.g., 'Homebrew').
        executable: Primary executable (e.g., 'brew').
        delimiter: Separator between name and version on the command line.
        formats: Package file formats the backend can install.

    Example:
        >>> backend = HomebrewBackend()
        >>> if backend.is_available():
        ...     for pkg in backend.search("hello"):
        ...         print(pkg)
        ...     result = backend.install("hello")
        ...     print(result.describe())
    """

    name: ClassVar[str]
    executable: ClassVar[str]
    delimiter: ClassVar[str]
    formats: ClassVar[tuple[PackageFormat, ...]]
    probe_args: ClassVar[tuple[str, ...]] = DEFAULT_PROBE_ARGS

    def __init__(
        self,
        invoker: Invoker | None = None,
        parser: OutputParser | None = None,
        *,
        download_dir: Path | None = None,
    ) -> None:
        """Initialize the backend.

        Args:
            invoker: Runs the executable. Defaults to a plain Invoker.
            parser: Parses captured output. Defaults to :meth:`default_parser`.
            download_dir: Directory for downloaded package artifacts.
                Defaults to the cache directory.
        """
        self._invoker = invoker or Invoker()
        self._parser = parser or self.default_parser()
        self._download_dir = download_dir

    @property
    def invoker(self) -> Invoker:
        """Return the invoker used to run commands."""
        return self._invoker

    @property
    def parser(self) -> OutputParser:
        """Return the output parser."""
        return self._parser

    def default_parser(self) -> OutputParser:
        """Return the parser used when none is injected.

        The default splits each output line once on :attr:`delimiter`.
        """
        return DelimitedLineParser(self.delimiter)

    # ------------------------------------------------------------------
    # Command table and argument consolidation
    # ------------------------------------------------------------------

    @abstractmethod
    def commands(self, operation: Operation, package: Package | None = None) -> list[str]:
        """Return the subcommand tokens for an operation.

        Args:
            operation: Abstract operation.
            package: Package the operation acts on, for commands that
                depend on package attributes.

        Returns:
            Subcommand tokens; may be empty for operations the tool has
            no subcommand for.
        """

    def flags(self, operation: Operation) -> list[str]:
        """Return the flag tokens for an operation. None by default."""
        return []

    def consolidate(
        self,
        operation: Operation,
        package: Package | None = None,
        args: Sequence[str] = (),
    ) -> list[str]:
        """Build the argument vector for an operation.

        The order is always commands, then flags, then caller arguments;
        some tools require flags before positional arguments. A backend
        that needs another order overrides this method as a whole.

        Args:
            operation: Abstract operation.
            package: Package the operation acts on, if any.
            args: Caller supplied arguments (package tokens, query, repo).

        Returns:
            Argument vector without the executable.
        """
        return [*self.commands(operation, package), *self.flags(operation), *args]

    def format_package(self, package: Package) -> list[str]:
        """Return the caller arguments that name a package on the command line.

        Args:
            package: Package to format.

        Returns:
            Argument tokens, by default a single ``name<delimiter>version``
            (or path/URL) token.
        """
        return [package.cli_display(self.delimiter)]

    # ------------------------------------------------------------------
    # Availability and output parsing
    # ------------------------------------------------------------------

    def is_available(self) -> bool:
        """Check if the primary executable can be run on this system.

        Not cached: availability can change between calls.
        """
        return self._invoker.probe(self.executable, self.probe_args)

    def parse_output(self, raw: bytes) -> list[Package]:
        """Parse raw stdout into packages."""
        return self._parser.parse(raw)

    # ------------------------------------------------------------------
    # Uniform operations
    # ------------------------------------------------------------------

    def search(self, query: str) -> list[Package]:
        """Search available packages.

        Args:
            query: Search term.

        Returns:
            Packages matching the query.
        """
        return self._query(Operation.SEARCH, [query])

    def list_installed(self) -> list[Package]:
        """List installed packages."""
        return self._query(Operation.LIST, [])

    def install(self, package: Package | str) -> OperationResult:
        """Install a single package."""
        return self.execute(package, Operation.INSTALL)

    def uninstall(self, package: Package | str) -> OperationResult:
        """Uninstall a single package."""
        return self.execute(package, Operation.UNINSTALL)

    def update(self, package: Package | str) -> OperationResult:
        """Update a single package."""
        return self.execute(package, Operation.UPDATE)

    def update_all(self) -> OperationResult:
        """Update all installed packages."""
        return self._run(Operation.UPDATE_ALL)

    def sync(self) -> OperationResult:
        """Refresh repository metadata."""
        return self._run(Operation.SYNC)

    def add_repo(self, repo: str) -> None:
        """Add a third-party repository.

        Args:
            repo: Repository URL or tool specific repository identifier.

        Raises:
            RepositoryError: If the repository could not be added.
        """
        result = self._run(Operation.ADD_REPO, args=[repo], target=repo)
        if result.failed:
            raise RepositoryError(
                repo, self.name, f"exit status {result.returncode}"
            ) from OperationFailedError(result)

    def execute(self, package: Package | str, operation: Operation) -> OperationResult:
        """Run a package operation (install, uninstall or update).

        Args:
            package: Package or package string.
            operation: One of INSTALL, UNINSTALL or UPDATE.

        Returns:
            OperationResult with the exit status of the package manager.

        Raises:
            ValueError: If the operation does not act on a package.
        """
        if not operation.is_package_operation:
            msg = f"{operation.value} does not act on a single package"
            raise ValueError(msg)

        pkg = Package.from_string(package) if isinstance(package, str) else package
        logger.debug("Operation %s on %r", operation.value, pkg)

        args = self.format_package(pkg)
        logger.debug("Formatted %s as %s", pkg, args)

        return self._run(operation, package=pkg, args=args, target=str(pkg))

    def spawn(
        self,
        operation: Operation,
        package: Package | None = None,
        args: Sequence[str] = (),
    ) -> subprocess.Popen[bytes] | None:
        """Start an operation without waiting for it to finish.

        Returns:
            Handle to the running process, or None in dry-run mode.
        """
        return self._invoker.spawn(self.executable, self.consolidate(operation, package, args))

    def _run(
        self,
        operation: Operation,
        *,
        package: Package | None = None,
        args: Sequence[str] = (),
        target: str | None = None,
    ) -> OperationResult:
        """Run a status-only operation."""
        argv = self.consolidate(operation, package, args)
        returncode = self._invoker.status(self.executable, argv)
        return OperationResult(
            operation=operation,
            backend=self.name,
            returncode=returncode,
            target=target,
        )

    def _query(self, operation: Operation, args: Sequence[str]) -> list[Package]:
        """Run a capturing operation and parse its output."""
        argv = self.consolidate(operation, None, args)
        result = self._invoker.capture(self.query_executable, argv)
        if not result.success:
            logger.debug(
                "%s %s exited with status %d", self.name, operation.value, result.returncode
            )
        return self.parse_result(operation, result)

    @property
    def query_executable(self) -> str:
        """Return the executable used for capturing queries (search, list)."""
        return self.executable

    def parse_result(self, operation: Operation, result: CommandResult) -> list[Package]:
        """Turn the result of a capturing query into packages.

        The default parses stdout regardless of exit status.
        """
        return self.parse_output(result.stdout)

    def __str__(self) -> str:
        return self.name
