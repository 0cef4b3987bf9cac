"""Unit tests for ZypperBackend."""

from unittest.mock import MagicMock

import pytest

from metapkg.backends.zypper import ZYPPER_EXIT_INF_CAP_NOT_FOUND, ZypperBackend
from metapkg.core.errors import MalformedOutputError
from metapkg.models.operation import Operation
from metapkg.models.package import Package
from metapkg.utils.shell import CommandResult


class TestZypperBackend:
    """Tests for ZypperBackend class."""

    @pytest.fixture
    def backend(self, mock_invoker: MagicMock) -> ZypperBackend:
        """Create ZypperBackend instance."""
        return ZypperBackend(mock_invoker)

    @pytest.mark.parametrize(
        ("operation", "expected"),
        [
            (Operation.INSTALL, ["install", "-n"]),
            (Operation.UNINSTALL, ["remove", "-n"]),
            (Operation.UPDATE, ["update", "-n"]),
            (Operation.UPDATE_ALL, ["dist-upgrade", "-n"]),
            (Operation.LIST, ["--xmlout", "search", "--installed-only", "--details"]),
            (Operation.SEARCH, ["--xmlout", "--no-refresh", "search"]),
            (Operation.SYNC, ["refresh"]),
        ],
    )
    def test_command_table(
        self, backend: ZypperBackend, operation: Operation, expected: list[str]
    ) -> None:
        """Commands and flags per operation."""
        assert backend.consolidate(operation) == expected

    def test_list(
        self, backend: ZypperBackend, mock_invoker: MagicMock, mock_zypper_search_xml: bytes
    ) -> None:
        """Installed packages are read from the XML document."""
        mock_invoker.capture.return_value = CommandResult(
            stdout=mock_zypper_search_xml, stderr=b"", returncode=0
        )

        assert backend.list_installed()[0] == Package(name="hello", version="2.12.1-1.5")

    def test_search_without_matches(self, backend: ZypperBackend, mock_invoker: MagicMock) -> None:
        """zypper's no-match exit status yields no records."""
        mock_invoker.capture.return_value = CommandResult(
            stdout=b"<stream><message>No matching items found.</message></stream>",
            stderr=b"",
            returncode=ZYPPER_EXIT_INF_CAP_NOT_FOUND,
        )

        assert backend.search("nothing") == []

    def test_malformed_output(self, backend: ZypperBackend, mock_invoker: MagicMock) -> None:
        """A document of the wrong shape is fatal."""
        mock_invoker.capture.return_value = CommandResult(
            stdout=b"<stream/>", stderr=b"", returncode=0
        )

        with pytest.raises(MalformedOutputError, match="Zypper"):
            backend.search("hello")

    def test_add_repo(self, backend: ZypperBackend, mock_invoker: MagicMock) -> None:
        """addrepo takes the URI followed by an alias."""
        repo = "https://download.opensuse.org/repositories/games/openSUSE_Tumbleweed/games.repo"

        backend.add_repo(repo)

        mock_invoker.status.assert_called_once_with("zypper", ["addrepo", "-f", repo, "games"])
