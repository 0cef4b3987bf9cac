"""Package models shared by every backend.

This module defines the immutable package record produced by output
parsers and consumed by install, uninstall and update operations, along
with the package file formats a backend can handle.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from pathlib import Path, PurePosixPath
from typing import Any
from urllib.parse import unquote, urlsplit
from urllib.request import url2pathname

# Scheme of a locator that points at an on-disk artifact
FILE_SCHEME = "file"


class PackageFormat(Enum):
    """Package file formats understood by the supported backends."""

    BOTTLE = "bottle"
    EXE = "exe"
    MSI = "msi"
    RPM = "rpm"
    DEB = "deb"
    FLATPAK = "flatpak"

    @property
    def extension(self) -> str:
        """Return the file extension used by this format."""
        if self == PackageFormat.BOTTLE:
            return "tar.gz"
        return self.value


def _is_url(value: str) -> bool:
    """Check whether a user supplied string is a package locator URL.

    Single letter schemes are rejected so that Windows drive paths such
    as ``C:\\pkgs\\tool.msi`` are not mistaken for URLs.
    """
    parts = urlsplit(value)
    if len(parts.scheme) < 2:
        return False
    return bool(parts.netloc) or parts.path.startswith("/")


def _parse_fragment(fragment: str) -> dict[str, str]:
    """Parse a ``key=value,key=value`` URL fragment."""
    values: dict[str, str] = {}
    for item in fragment.split(","):
        key, sep, value = item.partition("=")
        if sep and key.strip():
            values[key.strip()] = value.strip()
    return values


@dataclass(frozen=True, slots=True)
class Package:
    """A package known to, or requested from, a package manager.

    Equality only considers ``name`` and ``version``; two records for the
    same package at the same version compare equal regardless of where
    they were obtained from.

    Attributes:
        name: Package name (e.g., 'hello', 'org.gimp.GIMP').
        version: Opaque version string, if known.
        url: Locator of the package artifact (remote URL or ``file://`` URI).
        origin: Remote URL a local artifact was downloaded from.
    """

    name: str
    version: str | None = None
    url: str | None = field(default=None, compare=False)
    origin: str | None = field(default=None, compare=False)

    def __post_init__(self) -> None:
        """Validate package data after initialization."""
        if not self.name or not self.name.strip():
            msg = "Package name cannot be empty"
            raise ValueError(msg)

    @classmethod
    def from_string(cls, value: str) -> Package:
        """Parse the user facing package grammar.

        Accepts ``name``, ``name@version`` or a URL whose fragment may
        carry ``version=<version>``.

        Args:
            value: Package string as typed by the user.

        Returns:
            Parsed Package.

        Raises:
            ValueError: If no package name can be determined.
        """
        text = value.strip()

        if _is_url(text):
            parts = urlsplit(text)
            name = PurePosixPath(unquote(parts.path)).name
            if not name:
                msg = f"Cannot determine package name from URL: {text}"
                raise ValueError(msg)
            version = _parse_fragment(parts.fragment).get("version") or None
            return cls(name=name, version=version, url=text)

        name, sep, version = text.partition("@")
        if sep:
            return cls(name=name.strip(), version=version.strip() or None)
        return cls(name=text)

    @classmethod
    def from_path(cls, path: str | Path) -> Package:
        """Create a package that points at an on-disk artifact."""
        return cls.from_string(Path(path).resolve().as_uri())

    @property
    def is_remote(self) -> bool:
        """Check if the package locator points at a remote artifact."""
        return self.url is not None and urlsplit(self.url).scheme != FILE_SCHEME

    @property
    def is_local(self) -> bool:
        """Check if the package locator points at an on-disk artifact."""
        return self.url is not None and urlsplit(self.url).scheme == FILE_SCHEME

    @property
    def local_path(self) -> Path | None:
        """Return the filesystem path of a local artifact, if any."""
        if self.url is None or urlsplit(self.url).scheme != FILE_SCHEME:
            return None
        return Path(url2pathname(urlsplit(self.url).path))

    def with_local_path(self, path: Path) -> Package:
        """Return a copy whose locator points at ``path``.

        The remote URL the artifact came from is kept in ``origin``.
        """
        origin = self.origin if self.is_local else self.url
        return replace(self, url=path.resolve().as_uri(), origin=origin)

    def cli_display(self, delimiter: str) -> str:
        """Format the package as a command-line token.

        Args:
            delimiter: Backend specific separator between name and version.

        Returns:
            Local path, URL, ``name<delimiter>version`` or just the name.
        """
        local = self.local_path
        if local is not None:
            return str(local)
        if self.url is not None:
            return self.url
        if self.version:
            return f"{self.name}{delimiter}{self.version}"
        return self.name

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {"name": self.name, "version": self.version, "url": self.url}

    def __str__(self) -> str:
        if self.version:
            return f"{self.name}@{self.version}"
        return self.name
