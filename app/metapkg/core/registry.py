"""Backend registry and selection.

The order of the Manager enum is the autodetection priority: the first
supported and available backend wins. Platform support is checked
before probing so that, for example, Chocolatey is never probed on Linux.
"""

import logging
import sys
from collections.abc import Iterable
from enum import Enum
from pathlib import Path

from metapkg.backends import (
    AptBackend,
    Backend,
    ChocolateyBackend,
    DnfBackend,
    FlatpakBackend,
    HomebrewBackend,
    YumBackend,
    ZypperBackend,
)
from metapkg.core.errors import BackendUnavailableError, NoBackendFoundError, UnknownBackendError
from metapkg.core.invoker import Invoker

logger = logging.getLogger(__name__)


class Manager(str, Enum):
    """Supported package managers, in autodetection priority order."""

    BREW = "brew"
    CHOCO = "choco"
    APT = "apt"
    DNF = "dnf"
    YUM = "yum"
    ZYPPER = "zypper"
    FLATPAK = "flatpak"

    @property
    def backend_class(self) -> type[Backend]:
        """Return the backend implementation for this manager."""
        return _BACKENDS[self]

    @property
    def platforms(self) -> tuple[str, ...]:
        """Return the sys.platform values this manager supports."""
        return _PLATFORMS[self]

    def is_supported_platform(self, platform: str | None = None) -> bool:
        """Check whether this manager can exist on a platform.

        Args:
            platform: sys.platform value. Defaults to the current platform.
        """
        return (platform or sys.platform) in self.platforms

    def create(self, invoker: Invoker | None = None, download_dir: Path | None = None) -> Backend:
        """Instantiate the backend with the given invoker."""
        return self.backend_class(invoker, download_dir=download_dir)


_BACKENDS: dict[Manager, type[Backend]] = {
    Manager.BREW: HomebrewBackend,
    Manager.CHOCO: ChocolateyBackend,
    Manager.APT: AptBackend,
    Manager.DNF: DnfBackend,
    Manager.YUM: YumBackend,
    Manager.ZYPPER: ZypperBackend,
    Manager.FLATPAK: FlatpakBackend,
}

_PLATFORMS: dict[Manager, tuple[str, ...]] = {
    Manager.BREW: ("darwin", "linux"),
    Manager.CHOCO: ("win32",),
    Manager.APT: ("linux",),
    Manager.DNF: ("linux",),
    Manager.YUM: ("linux",),
    Manager.ZYPPER: ("linux",),
    Manager.FLATPAK: ("linux",),
}

# Autodetection order
PRIORITY: tuple[Manager, ...] = tuple(Manager)


def parse_manager(name: str) -> Manager:
    """Look up a manager by name (case-insensitive).

    Raises:
        UnknownBackendError: If the name is not a supported manager.
    """
    try:
        return Manager(name.strip().lower())
    except ValueError as e:
        raise UnknownBackendError(name) from e


def select(
    name: str | Manager,
    invoker: Invoker | None = None,
    download_dir: Path | None = None,
) -> Backend:
    """Select a backend explicitly by name.

    Args:
        name: Manager name or Manager member.
        invoker: Invoker handed to the backend.
        download_dir: Directory for downloaded package artifacts.

    Returns:
        Backend instance that passed the availability probe.

    Raises:
        UnknownBackendError: If the name is not a supported manager.
        BackendUnavailableError: If the manager is not supported on this
            platform or its probe fails.
    """
    manager = name if isinstance(name, Manager) else parse_manager(name)
    if not manager.is_supported_platform():
        raise BackendUnavailableError(manager.value, f"is not supported on {sys.platform}")

    backend = manager.create(invoker, download_dir)
    if not backend.is_available():
        raise BackendUnavailableError(manager.value)

    logger.debug("Selected %s", backend.name)
    return backend


def select_default(
    invoker: Invoker | None = None,
    order: Iterable[Manager] = PRIORITY,
    download_dir: Path | None = None,
) -> Backend:
    """Select the first supported and available backend.

    Probing stops at the first available backend.

    Args:
        invoker: Invoker handed to the backend.
        order: Candidates in priority order.
        download_dir: Directory for downloaded package artifacts.

    Returns:
        First backend whose probe succeeds.

    Raises:
        NoBackendFoundError: If no candidate is available.
    """
    for manager in order:
        if not manager.is_supported_platform():
            continue
        backend = manager.create(invoker, download_dir)
        if backend.is_available():
            logger.debug("Autodetected %s", backend.name)
            return backend
        logger.debug("%s is not available", manager.value)

    raise NoBackendFoundError()


def manager_availability(invoker: Invoker | None = None) -> list[tuple[Manager, Backend, bool]]:
    """Probe every manager supported on this platform.

    Returns:
        (manager, backend, available) for each manager in priority order;
        managers not supported on this platform are reported unavailable
        without probing.
    """
    report: list[tuple[Manager, Backend, bool]] = []
    for manager in PRIORITY:
        backend = manager.create(invoker)
        available = manager.is_supported_platform() and backend.is_available()
        report.append((manager, backend, available))
    return report
