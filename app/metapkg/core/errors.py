"""Exception hierarchy for metapkg.

Every error raised on purpose by the library derives from MetapkgError so
callers can handle all of them with a single except clause.
"""

from metapkg.models.operation import OperationResult


class MetapkgError(Exception):
    """Base exception for all metapkg errors."""


class UnknownBackendError(MetapkgError):
    """Raised when a backend name is not in the registry."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Unknown package manager: {name}")


class BackendUnavailableError(MetapkgError):
    """Raised when an explicitly requested backend cannot be used."""

    def __init__(self, backend: str, reason: str = "is not available on this system") -> None:
        self.backend = backend
        super().__init__(f"Package manager {backend} {reason}")


class NoBackendFoundError(MetapkgError):
    """Raised when autodetection finds no usable backend."""

    def __init__(self) -> None:
        super().__init__("No supported package manager found")


class OperationFailedError(MetapkgError):
    """Raised when a status-only operation has to be reported as an error."""

    def __init__(self, result: OperationResult) -> None:
        self.result = result
        super().__init__(result.describe())


class RepositoryError(MetapkgError):
    """Raised when a repository cannot be added.

    The underlying failure, if any, is attached as ``__cause__``.
    """

    def __init__(self, repo: str, backend: str, reason: str) -> None:
        self.repo = repo
        self.backend = backend
        self.reason = reason
        super().__init__(f"Adding repository '{repo}' via {backend} failed: {reason}")


class MalformedOutputError(MetapkgError):
    """Raised when structured package manager output has an unexpected shape."""

    def __init__(self, backend: str, reason: str) -> None:
        self.backend = backend
        self.reason = reason
        super().__init__(f"Unexpected output from {backend}: {reason}")


class MaterializationError(MetapkgError):
    """Raised when a package artifact cannot be made available on disk."""
