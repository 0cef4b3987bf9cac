"""Unit tests for backend registry and selection."""

from unittest.mock import patch

import pytest

from metapkg.backends import (
    AptBackend,
    ChocolateyBackend,
    DnfBackend,
    FlatpakBackend,
    HomebrewBackend,
)
from metapkg.core import registry
from metapkg.core.errors import BackendUnavailableError, NoBackendFoundError, UnknownBackendError
from metapkg.core.registry import PRIORITY, Manager


def _probe_only(*available: str):
    """Build a probe replacement that succeeds for the given executables."""

    def probe(self, executable, args=("--version",)):
        return executable in available

    return probe


class TestManager:
    """Tests for Manager enum."""

    def test_priority_order(self) -> None:
        """Autodetection order is fixed."""
        assert [m.value for m in PRIORITY] == [
            "brew",
            "choco",
            "apt",
            "dnf",
            "yum",
            "zypper",
            "flatpak",
        ]

    def test_backend_classes(self) -> None:
        """Each manager maps to its backend."""
        assert Manager.APT.backend_class is AptBackend
        assert Manager.CHOCO.backend_class is ChocolateyBackend
        assert isinstance(Manager.FLATPAK.create(), FlatpakBackend)

    @pytest.mark.parametrize(
        ("manager", "platform", "expected"),
        [
            (Manager.BREW, "darwin", True),
            (Manager.BREW, "linux", True),
            (Manager.CHOCO, "linux", False),
            (Manager.CHOCO, "win32", True),
            (Manager.APT, "darwin", False),
        ],
    )
    def test_platform_support(self, manager: Manager, platform: str, expected: bool) -> None:
        """Platform support follows the manager table."""
        assert manager.is_supported_platform(platform) is expected

    def test_parse_manager_is_case_insensitive(self) -> None:
        """Manager names are matched case-insensitively."""
        assert registry.parse_manager(" DNF ") is Manager.DNF

    def test_parse_unknown_manager(self) -> None:
        """Unknown names raise UnknownBackendError."""
        with pytest.raises(UnknownBackendError, match="pacman"):
            registry.parse_manager("pacman")


class TestSelect:
    """Tests for explicit selection."""

    def test_select_available(self) -> None:
        """An available backend is returned."""
        with (
            patch("metapkg.core.registry.sys.platform", "linux"),
            patch("metapkg.core.invoker.Invoker.probe", _probe_only("dnf")),
        ):
            backend = registry.select("dnf")

        assert isinstance(backend, DnfBackend)

    def test_select_unavailable(self) -> None:
        """A backend whose probe fails is rejected."""
        with (
            patch("metapkg.core.registry.sys.platform", "linux"),
            patch("metapkg.core.invoker.Invoker.probe", _probe_only()),
            pytest.raises(BackendUnavailableError, match="not available"),
        ):
            registry.select("apt")

    def test_select_unsupported_platform_does_not_probe(self) -> None:
        """Managers of other platforms are rejected before probing."""
        with (
            patch("metapkg.core.registry.sys.platform", "linux"),
            patch("metapkg.core.invoker.Invoker.probe") as mock_probe,
            pytest.raises(BackendUnavailableError, match="not supported"),
        ):
            registry.select("choco")

        mock_probe.assert_not_called()

    def test_select_unknown(self) -> None:
        """Unknown names raise UnknownBackendError."""
        with pytest.raises(UnknownBackendError):
            registry.select("pacman")


class TestSelectDefault:
    """Tests for autodetection."""

    def test_first_available_wins(self) -> None:
        """The highest priority available backend is selected."""
        with (
            patch("metapkg.core.registry.sys.platform", "linux"),
            patch("metapkg.core.invoker.Invoker.probe", _probe_only("flatpak", "apt-get", "brew")),
        ):
            backend = registry.select_default()

        assert isinstance(backend, HomebrewBackend)

    def test_selection_is_deterministic(self) -> None:
        """Repeated selection on the same system yields the same backend."""
        with (
            patch("metapkg.core.registry.sys.platform", "linux"),
            patch("metapkg.core.invoker.Invoker.probe", _probe_only("flatpak", "apt-get")),
        ):
            names = {registry.select_default().name for _ in range(3)}

        assert names == {AptBackend.name}

    def test_nothing_available(self) -> None:
        """No available backend raises NoBackendFoundError."""
        with (
            patch("metapkg.core.registry.sys.platform", "linux"),
            patch("metapkg.core.invoker.Invoker.probe", _probe_only()),
            pytest.raises(NoBackendFoundError, match="No supported package manager found"),
        ):
            registry.select_default()

    def test_probing_stops_at_first_hit(self) -> None:
        """Lower priority backends are not probed once one is found."""
        probed: list[str] = []

        def probe(self, executable, args=("--version",)):
            probed.append(executable)
            return executable == "apt-get"

        with (
            patch("metapkg.core.registry.sys.platform", "linux"),
            patch("metapkg.core.invoker.Invoker.probe", probe),
        ):
            registry.select_default()

        assert probed == ["brew", "apt-get"]


class TestManagerAvailability:
    """Tests for manager_availability."""

    def test_reports_every_manager(self) -> None:
        """Every manager is reported in priority order."""
        with (
            patch("metapkg.core.registry.sys.platform", "linux"),
            patch("metapkg.core.invoker.Invoker.probe", _probe_only("dnf")),
        ):
            report = registry.manager_availability()

        assert [m for m, _, _ in report] == list(PRIORITY)
        assert {m.value for m, _, ok in report if ok} == {"dnf"}
