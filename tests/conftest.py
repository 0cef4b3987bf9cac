"""Pytest configuration and shared fixtures.

This module contains fixtures used across all test modules.
"""

from collections.abc import Iterator
from pathlib import Path
from unittest.mock import MagicMock

import pytest

from metapkg.core.invoker import Invoker
from metapkg.utils.shell import CommandResult


@pytest.fixture
def mock_apt_list_output() -> bytes:
    """Sample 'apt list --installed' output."""
    return b"""Listing... Done
hello/stable,now 2.10-3 amd64 [installed]
mysql-common/now 5.8+1.1.0 all [installed,local]
curl/stable-security 7.88.1-10+deb12u5 amd64 [installed,automatic]
"""


@pytest.fixture
def mock_apt_search_output() -> bytes:
    """Sample 'apt search' output with wrapped descriptions."""
    return b"""Sorting... Done
Full Text Search... Done
hello/stable 2.10-3 amd64
  example package based on GNU hello

hello-traditional/stable 2.10-6 amd64
  example package that uses the GNU hello source
"""


@pytest.fixture
def mock_dnf_list_output() -> bytes:
    """Sample 'dnf list --installed' output."""
    return b"""Installed Packages
hello.x86_64                 2.10-3.fc38                @fedora
bash.x86_64                  5.2.15-3.fc38              @anaconda
"""


@pytest.fixture
def mock_dnf_search_output() -> bytes:
    """Sample 'dnf search -q' output."""
    return b"""======================== Name Exactly Matched: hello ========================
hello.x86_64 : Prints a familiar, friendly greeting
======================== Name & Summary Matched: hello =======================
hello-devel.x86_64 : Headers for hello
"""


@pytest.fixture
def mock_flatpak_list_output() -> bytes:
    """Sample 'flatpak list' output (Name, Application ID, Version, Branch, Installation)."""
    return (
        b"GIMP\torg.gimp.GIMP\t2.10.36\tstable\tsystem\n"
        b"Maps\torg.gnome.Maps\t\tstable\tsystem\n"
        b"Spotify\tcom.spotify.Client\t1.2.31\tstable\tuser\n"
    )


@pytest.fixture
def mock_flatpak_search_output() -> bytes:
    """Sample 'flatpak search' output (six columns)."""
    return (
        b"GNU Image Manipulation Program\tCreate images and edit photographs\t"
        b"org.gimp.GIMP\t2.10.36\tstable\tflathub\n"
    )


@pytest.fixture
def mock_zypper_search_xml() -> bytes:
    """Sample 'zypper --xmlout search --details' document."""
    return b"""<?xml version='1.0'?>
<stream>
<message type="info">Loading repository data...</message>
<search-result version="0.0">
<solvable-list>
<solvable status="installed" name="hello" kind="package" edition="2.12.1-1.5" arch="x86_64" repository="repo-oss"/>
<solvable status="not-installed" name="hello-lang" kind="package" edition="2.12.1-1.5" arch="noarch" repository="repo-oss"/>
</solvable-list>
</search-result>
</stream>
"""


@pytest.fixture
def mock_choco_output() -> bytes:
    """Sample 'choco list --limit-output' output."""
    return b"git|2.44.0\r\nnodejs|21.7.1\r\n7zip|23.1.0\r\n"


@pytest.fixture
def mock_brew_output() -> bytes:
    """Sample 'brew list' output."""
    return b"hello\npython@3.12\nwget\n"


@pytest.fixture
def ok_result() -> CommandResult:
    """Successful command result with no output."""
    return CommandResult(stdout=b"", stderr=b"", returncode=0)


@pytest.fixture
def mock_invoker() -> MagicMock:
    """Invoker double whose status-only runs succeed."""
    invoker = MagicMock(spec=Invoker)
    invoker.dry_run = False
    invoker.status.return_value = 0
    invoker.probe.return_value = True
    invoker.capture.return_value = CommandResult(stdout=b"", stderr=b"", returncode=0)
    return invoker


@pytest.fixture
def xdg_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Iterator[Path]:
    """Point XDG config and cache directories into a temporary directory."""
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    monkeypatch.setenv("XDG_CACHE_HOME", str(tmp_path / "cache"))
    yield tmp_path
