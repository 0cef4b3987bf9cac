"""Operation models for backend commands.

This module defines the closed vocabulary of abstract operations every
backend maps onto its own subcommands, and the result record returned by
status-only operations.
"""

from dataclasses import dataclass
from enum import Enum


class Operation(Enum):
    """Abstract package management operation.

    Attributes:
        INSTALL: Install a package.
        UNINSTALL: Remove a package.
        UPDATE: Upgrade a single package.
        UPDATE_ALL: Upgrade every installed package.
        LIST: List installed packages.
        SYNC: Refresh repository metadata.
        ADD_REPO: Register a third-party repository.
        SEARCH: Search available packages.
    """

    INSTALL = "install"
    UNINSTALL = "uninstall"
    UPDATE = "update"
    UPDATE_ALL = "update-all"
    LIST = "list"
    SYNC = "sync"
    ADD_REPO = "add-repo"
    SEARCH = "search"

    @property
    def is_package_operation(self) -> bool:
        """Check if this operation acts on a single package."""
        return self in (Operation.INSTALL, Operation.UNINSTALL, Operation.UPDATE)


@dataclass(frozen=True, slots=True)
class OperationResult:
    """Outcome of a status-only backend operation.

    The exit status is kept exactly as the package manager reported it.

    Attributes:
        operation: The operation that was executed.
        backend: Display name of the backend that executed it.
        returncode: Exit status of the package manager process.
        target: Package or argument the operation acted on, if any.
    """

    operation: Operation
    backend: str
    returncode: int
    target: str | None = None

    @property
    def success(self) -> bool:
        """Check if the operation completed successfully."""
        return self.returncode == 0

    @property
    def failed(self) -> bool:
        """Check if the operation failed."""
        return not self.success

    def describe(self) -> str:
        """Return a one-line human readable summary."""
        subject = self.operation.value
        if self.target:
            subject = f"{subject} of '{self.target}'"
        if self.success:
            return f"{subject} via {self.backend} succeeded"
        return f"{subject} via {self.backend} failed (exit status {self.returncode})"
