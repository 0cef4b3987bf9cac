"""Unit tests for the main CLI application.

Tests for global options and backend resolution.
"""

from pathlib import Path
from unittest.mock import MagicMock, patch

from typer.testing import CliRunner

from metapkg import __version__
from metapkg.backends.base import Backend
from metapkg.cli.main import app
from metapkg.core.errors import BackendUnavailableError, NoBackendFoundError
from metapkg.models.operation import Operation, OperationResult

runner = CliRunner()


def _backend() -> MagicMock:
    """Create a backend double whose sync succeeds."""
    backend = MagicMock(spec=Backend)
    backend.name = "Dummy"
    backend.sync.return_value = OperationResult(Operation.SYNC, "Dummy", 0)
    return backend


class TestGlobalOptions:
    """Tests for options handled by the main callback."""

    def test_version(self) -> None:
        """--version prints the version and exits."""
        result = runner.invoke(app, ["--version"])

        assert result.exit_code == 0
        assert __version__ in result.output

    def test_help_lists_commands(self) -> None:
        """--help lists every command."""
        result = runner.invoke(app, ["--help"])

        assert result.exit_code == 0
        for command in ("managers", "search", "list", "install", "uninstall", "update", "repo"):
            assert command in result.output

    def test_no_args_shows_help(self) -> None:
        """Running without a command shows help."""
        result = runner.invoke(app, [])

        assert "Usage" in result.output


class TestBackendResolution:
    """Tests for --manager, settings and autodetection."""

    def test_manager_option_wins(self, xdg_home: Path) -> None:
        """--manager selects explicitly."""
        with patch("metapkg.core.registry.select", return_value=_backend()) as mock_select:
            result = runner.invoke(app, ["--manager", "dnf", "sync"])

        assert result.exit_code == 0
        assert mock_select.call_args[0][0] == "dnf"

    def test_settings_manager(self, xdg_home: Path) -> None:
        """The manager setting is used without --manager."""
        config = xdg_home / "config" / "metapkg" / "config.toml"
        config.parent.mkdir(parents=True)
        config.write_text('manager = "zypper"\n')

        with patch("metapkg.core.registry.select", return_value=_backend()) as mock_select:
            result = runner.invoke(app, ["sync"])

        assert result.exit_code == 0
        assert mock_select.call_args[0][0] == "zypper"

    def test_autodetect(self, xdg_home: Path) -> None:
        """Without a preference the backend is autodetected."""
        with patch(
            "metapkg.core.registry.select_default", return_value=_backend()
        ) as mock_default:
            result = runner.invoke(app, ["sync"])

        assert result.exit_code == 0
        mock_default.assert_called_once()

    def test_dry_run_reaches_invoker(self, xdg_home: Path) -> None:
        """--dry-run configures the invoker handed to the backend."""
        with patch("metapkg.core.registry.select_default", return_value=_backend()) as mock_default:
            runner.invoke(app, ["--dry-run", "sync"])

        assert mock_default.call_args[0][0].dry_run is True

    def test_no_backend_found(self, xdg_home: Path) -> None:
        """A failed autodetection exits with code 1."""
        with patch("metapkg.core.registry.select_default", side_effect=NoBackendFoundError()):
            result = runner.invoke(app, ["sync"])

        assert result.exit_code == 1
        assert "No supported package manager found" in result.output

    def test_unavailable_manager(self, xdg_home: Path) -> None:
        """An unavailable explicit manager exits with code 1."""
        with patch("metapkg.core.registry.select", side_effect=BackendUnavailableError("apt")):
            result = runner.invoke(app, ["-m", "apt", "sync"])

        assert result.exit_code == 1
        assert "apt" in result.output

    def test_invalid_settings(self, xdg_home: Path) -> None:
        """A broken settings file exits with code 1."""
        config = xdg_home / "config" / "metapkg" / "config.toml"
        config.parent.mkdir(parents=True)
        config.write_text("manager = \n")

        result = runner.invoke(app, ["sync"])

        assert result.exit_code == 1
        assert "Invalid TOML" in result.output
