"""Shell execution utilities.

Provides the raw subprocess primitives used by the invoker: capturing
stdout as bytes, waiting for an exit status, and spawning detached.
"""

import shutil
import subprocess
from collections.abc import Callable, Sequence
from dataclasses import dataclass

# Receives one decoded stdout line (without the trailing newline)
LineSink = Callable[[str], None]


@dataclass(frozen=True, slots=True)
class CommandResult:
    """Result of a shell command execution.

    Attributes:
        stdout: Raw standard output from the command.
        stderr: Raw standard error from the command (empty when not captured).
        returncode: Exit code of the command.
    """

    stdout: bytes
    stderr: bytes
    returncode: int

    @property
    def success(self) -> bool:
        """Check if command executed successfully."""
        return self.returncode == 0

    @property
    def text(self) -> str:
        """Return stdout decoded as UTF-8, replacing undecodable bytes."""
        return self.stdout.decode("utf-8", errors="replace")


def run_command(
    args: Sequence[str],
    *,
    on_line: LineSink | None = None,
    cwd: str | None = None,
) -> CommandResult:
    """Execute a command and capture its output.

    When ``on_line`` is given, stdout is read line by line and every line
    is handed to it as soon as it arrives; stderr is then left attached
    to the parent so the two pipes can never block each other.

    Args:
        args: Command and arguments to execute.
        on_line: Optional callback receiving each stdout line as it arrives.
        cwd: Working directory for the command. If None, uses current directory.

    Returns:
        CommandResult with stdout, stderr, and returncode.

    Raises:
        FileNotFoundError: If command executable is not found.
    """
    if on_line is None:
        result = subprocess.run(list(args), capture_output=True, check=False, cwd=cwd)
        return CommandResult(
            stdout=result.stdout,
            stderr=result.stderr,
            returncode=result.returncode,
        )

    chunks: list[bytes] = []
    with subprocess.Popen(list(args), stdout=subprocess.PIPE, cwd=cwd) as proc:
        for raw in proc.stdout or ():
            chunks.append(raw)
            on_line(raw.decode("utf-8", errors="replace").rstrip("\r\n"))
        returncode = proc.wait()

    return CommandResult(stdout=b"".join(chunks), stderr=b"", returncode=returncode)


def run_status(args: Sequence[str], *, cwd: str | None = None) -> int:
    """Execute a command attached to the terminal and wait for it.

    Output is not captured, so the user sees progress and prompts of the
    underlying tool directly.

    Args:
        args: Command and arguments to execute.
        cwd: Working directory for the command.

    Returns:
        Exit code of the command.

    Raises:
        FileNotFoundError: If command executable is not found.
    """
    result = subprocess.run(list(args), check=False, cwd=cwd)
    return result.returncode


def spawn_command(args: Sequence[str], *, cwd: str | None = None) -> subprocess.Popen[bytes]:
    """Start a command without waiting for it to finish.

    Args:
        args: Command and arguments to execute.
        cwd: Working directory for the command.

    Returns:
        Handle to the running process.

    Raises:
        FileNotFoundError: If command executable is not found.
    """
    return subprocess.Popen(list(args), cwd=cwd)


def probe_command(args: Sequence[str]) -> bool:
    """Run a command with all output discarded and report whether it succeeded.

    A command that cannot be started counts as a failure.

    Args:
        args: Command and arguments to execute.

    Returns:
        True if the command started and exited with status 0.
    """
    try:
        result = subprocess.run(
            list(args),
            stdout=subprocess.DEVNULL,
            stderr=subprocess.DEVNULL,
            check=False,
        )
    except OSError:
        return False
    return result.returncode == 0


def command_exists(name: str) -> bool:
    """Check if a command exists in the system PATH.

    Args:
        name: Command name to check.

    Returns:
        True if command exists, False otherwise.
    """
    return shutil.which(name) is not None
