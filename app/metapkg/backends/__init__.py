"""Package manager backends.

This module provides the abstract Backend contract and one concrete
implementation per supported package manager.
"""

from metapkg.backends.apt import AptBackend
from metapkg.backends.base import Backend
from metapkg.backends.brew import HomebrewBackend
from metapkg.backends.choco import ChocolateyBackend
from metapkg.backends.dnf import DnfBackend, YumBackend
from metapkg.backends.flatpak import FlatpakBackend
from metapkg.backends.zypper import ZypperBackend

__all__ = [
    "AptBackend",
    "Backend",
    "ChocolateyBackend",
    "DnfBackend",
    "FlatpakBackend",
    "HomebrewBackend",
    "YumBackend",
    "ZypperBackend",
]
