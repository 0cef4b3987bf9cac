"""Unit tests for the Invoker.

Tests for elevation, dry-run, line streaming and availability probing.
"""

from unittest.mock import MagicMock, patch

import pytest

from metapkg.core.invoker import Invoker
from metapkg.utils.shell import CommandResult


class TestCapture:
    """Tests for Invoker.capture."""

    def test_passes_executable_and_args(self) -> None:
        """capture runs executable followed by args."""
        with patch("metapkg.core.invoker.run_command") as mock_run:
            mock_run.return_value = CommandResult(stdout=b"x", stderr=b"", returncode=0)

            result = Invoker().capture("brew", ["list"])

        assert result.stdout == b"x"
        assert mock_run.call_args[0][0] == ["brew", "list"]

    def test_uses_sink(self) -> None:
        """A configured sink receives the lines."""
        sink = MagicMock()
        with patch("metapkg.core.invoker.run_command") as mock_run:
            mock_run.return_value = CommandResult(stdout=b"", stderr=b"", returncode=0)

            Invoker(sink=sink).capture("brew", ["list"])

        assert mock_run.call_args.kwargs["on_line"] is sink

    def test_runs_in_dry_run(self) -> None:
        """Read-only captures still run in dry-run mode."""
        with patch("metapkg.core.invoker.run_command") as mock_run:
            mock_run.return_value = CommandResult(stdout=b"", stderr=b"", returncode=0)

            Invoker(dry_run=True).capture("apt", ["list", "--installed"])

        mock_run.assert_called_once()

    def test_does_not_elevate(self) -> None:
        """Captures never go through sudo."""
        with (
            patch("metapkg.core.invoker.run_command") as mock_run,
            patch("metapkg.core.invoker.os.geteuid", return_value=1000, create=True),
            patch("metapkg.core.invoker.command_exists", return_value=True),
        ):
            mock_run.return_value = CommandResult(stdout=b"", stderr=b"", returncode=0)

            Invoker(elevate=True).capture("apt", ["search", "hello"])

        assert mock_run.call_args[0][0][0] == "apt"


class TestStatus:
    """Tests for Invoker.status."""

    def test_returns_exit_status(self) -> None:
        """status returns the exit status verbatim."""
        with patch("metapkg.core.invoker.run_status", return_value=100) as mock_run:
            assert Invoker().status("apt-get", ["install", "--yes", "hello"]) == 100

        mock_run.assert_called_once_with(["apt-get", "install", "--yes", "hello"])

    def test_dry_run_does_not_execute(self) -> None:
        """Dry-run reports success without running anything."""
        with patch("metapkg.core.invoker.run_status") as mock_run:
            assert Invoker(dry_run=True).status("apt-get", ["upgrade", "--yes"]) == 0

        mock_run.assert_not_called()

    def test_elevates_when_not_root(self) -> None:
        """Elevation prefixes sudo for non-root users."""
        with (
            patch("metapkg.core.invoker.run_status", return_value=0) as mock_run,
            patch("metapkg.core.invoker.os.geteuid", return_value=1000, create=True),
            patch("metapkg.core.invoker.command_exists", return_value=True),
        ):
            Invoker(elevate=True).status("dnf", ["install", "-y", "hello"])

        assert mock_run.call_args[0][0] == ["sudo", "dnf", "install", "-y", "hello"]

    def test_no_sudo_for_root(self) -> None:
        """Root runs commands directly."""
        with (
            patch("metapkg.core.invoker.run_status", return_value=0) as mock_run,
            patch("metapkg.core.invoker.os.geteuid", return_value=0, create=True),
        ):
            Invoker(elevate=True).status("dnf", ["makecache"])

        assert mock_run.call_args[0][0] == ["dnf", "makecache"]

    def test_missing_sudo_runs_unelevated(self, caplog: pytest.LogCaptureFixture) -> None:
        """Without sudo the command runs as-is and a warning is logged."""
        with (
            patch("metapkg.core.invoker.run_status", return_value=0) as mock_run,
            patch("metapkg.core.invoker.os.geteuid", return_value=1000, create=True),
            patch("metapkg.core.invoker.command_exists", return_value=False),
        ):
            Invoker(elevate=True).status("zypper", ["refresh"])

        assert mock_run.call_args[0][0] == ["zypper", "refresh"]
        assert "sudo is not available" in caplog.text


class TestSpawn:
    """Tests for Invoker.spawn."""

    def test_returns_handle(self) -> None:
        """spawn returns the process handle."""
        with patch("metapkg.core.invoker.spawn_command") as mock_spawn:
            handle = Invoker().spawn("flatpak", ["update", "-y"])

        assert handle is mock_spawn.return_value

    def test_dry_run_returns_none(self) -> None:
        """Dry-run spawns nothing."""
        with patch("metapkg.core.invoker.spawn_command") as mock_spawn:
            assert Invoker(dry_run=True).spawn("flatpak", ["update", "-y"]) is None

        mock_spawn.assert_not_called()


class TestProbe:
    """Tests for Invoker.probe."""

    def test_default_probe_is_version_query(self) -> None:
        """probe runs '<executable> --version' by default."""
        with patch("metapkg.core.invoker.probe_command", return_value=True) as mock_probe:
            assert Invoker().probe("brew") is True

        mock_probe.assert_called_once_with(["brew", "--version"])

    def test_failed_probe(self) -> None:
        """A failing probe means unavailable."""
        with patch("metapkg.core.invoker.probe_command", return_value=False):
            assert Invoker().probe("choco") is False
