"""Process invocation for backends.

The Invoker runs a backend's executable with a prepared argument vector.
Privilege elevation, output streaming and dry-run mode are held here as
explicit context so the backends themselves stay free of process-wide
state.
"""

import logging
import os
import subprocess
from collections.abc import Sequence

from metapkg.utils.shell import (
    CommandResult,
    LineSink,
    command_exists,
    probe_command,
    run_command,
    run_status,
    spawn_command,
)

logger = logging.getLogger(__name__)

# Probe arguments used to check that an executable works
DEFAULT_PROBE_ARGS: tuple[str, ...] = ("--version",)


def _log_line(line: str) -> None:
    logger.debug(">> %s", line)


class Invoker:
    """Runs package manager executables.

    Attributes:
        elevate: Prefix mutating commands with sudo when not running as root.
        dry_run: Log mutating commands instead of executing them.

    Example:
        >>> invoker = Invoker(elevate=True)
        >>> if invoker.probe("apt-get"):
        ...     invoker.status("apt-get", ["install", "--yes", "hello"])
    """

    def __init__(
        self,
        *,
        elevate: bool = False,
        dry_run: bool = False,
        sink: LineSink | None = None,
    ) -> None:
        """Initialize the invoker.

        Args:
            elevate: If True, run mutating commands through sudo.
            dry_run: If True, only log mutating commands.
            sink: Receives captured stdout lines as they arrive. Defaults
                to DEBUG logging.
        """
        self._elevate = elevate
        self._dry_run = dry_run
        self._sink = sink

    @property
    def elevate(self) -> bool:
        """Check if mutating commands are elevated."""
        return self._elevate

    @property
    def dry_run(self) -> bool:
        """Check if invoker is in dry-run mode."""
        return self._dry_run

    def capture(self, executable: str, args: Sequence[str]) -> CommandResult:
        """Run a command and capture its stdout.

        Captured commands are read-only queries and run even in dry-run mode.

        Args:
            executable: Primary executable of the backend.
            args: Consolidated argument vector.

        Returns:
            CommandResult with the raw stdout bytes and exit status.

        Raises:
            FileNotFoundError: If the executable is not on PATH.
        """
        argv = [executable, *args]
        logger.info("Executing %s", " ".join(argv))
        result = run_command(argv, on_line=self._sink or _log_line)
        logger.debug("%s exited with status %d", executable, result.returncode)
        return result

    def status(self, executable: str, args: Sequence[str]) -> int:
        """Run a command attached to the terminal and return its exit status.

        Args:
            executable: Primary executable of the backend.
            args: Consolidated argument vector.

        Returns:
            Exit status of the command, or 0 in dry-run mode.

        Raises:
            FileNotFoundError: If the executable is not on PATH.
        """
        argv = self._elevated([executable, *args])
        if self._dry_run:
            logger.info("Dry-run: would execute %s", " ".join(argv))
            return 0

        logger.info("Executing %s", " ".join(argv))
        returncode = run_status(argv)
        logger.debug("%s exited with status %d", executable, returncode)
        return returncode

    def spawn(self, executable: str, args: Sequence[str]) -> subprocess.Popen[bytes] | None:
        """Start a command without waiting for it.

        Args:
            executable: Primary executable of the backend.
            args: Consolidated argument vector.

        Returns:
            Handle to the running process, or None in dry-run mode.

        Raises:
            FileNotFoundError: If the executable is not on PATH.
        """
        argv = self._elevated([executable, *args])
        if self._dry_run:
            logger.info("Dry-run: would spawn %s", " ".join(argv))
            return None

        logger.info("Spawning %s", " ".join(argv))
        return spawn_command(argv)

    def probe(self, executable: str, args: Sequence[str] = DEFAULT_PROBE_ARGS) -> bool:
        """Check whether an executable can be run.

        A missing executable and one that exits non-zero are treated the
        same way: both make the backend unusable.

        Args:
            executable: Executable to probe.
            args: Harmless arguments, a version query by default.

        Returns:
            True if the probe started and exited with status 0.
        """
        available = probe_command([executable, *args])
        logger.debug("Probe of %s: %s", executable, "available" if available else "unavailable")
        return available

    def _elevated(self, argv: list[str]) -> list[str]:
        """Prefix argv with sudo when elevation is requested and needed."""
        if not self._elevate:
            return argv

        # Windows or already root: nothing to do
        if not hasattr(os, "geteuid") or os.geteuid() == 0:
            return argv

        if not command_exists("sudo"):
            logger.warning("Elevation requested but sudo is not available, running as-is")
            return argv

        return ["sudo", *argv]
