"""Materialization of remote package artifacts.

Some backends cannot install from a URL. For those a package's remote
locator is turned into a local file first. The transition is one way:
the returned package points at the local file and remembers the remote
URL as its origin.
"""

import logging
import os
from collections.abc import Callable
from pathlib import Path, PurePosixPath
from urllib.parse import unquote, urlsplit

import requests

from metapkg.core.errors import MaterializationError
from metapkg.core.paths import ensure_dir, get_download_dir
from metapkg.models.package import Package

logger = logging.getLogger(__name__)

# Downloads a URL to the given destination path
Fetcher = Callable[[str, Path], None]

# Chunk size for streamed downloads (64 KiB)
_CHUNK_SIZE = 64 * 1024

# Connect/read timeouts for artifact downloads
_TIMEOUT: tuple[float, float] = (10.0, 300.0)


def fetch_url(url: str, dest: Path) -> None:
    """Download ``url`` to ``dest`` with a streamed HTTP GET.

    Args:
        url: Remote artifact URL.
        dest: Destination file path.

    Raises:
        requests.RequestException: On network or HTTP errors.
        OSError: If the destination cannot be written.
    """
    with requests.get(url, stream=True, timeout=_TIMEOUT) as resp:
        resp.raise_for_status()
        with open(dest, "wb") as fh:
            for chunk in resp.iter_content(chunk_size=_CHUNK_SIZE):
                if chunk:
                    fh.write(chunk)


def _default_destination(url: str, download_dir: Path | None) -> Path:
    """Derive the download path from the last URL path segment."""
    filename = PurePosixPath(unquote(urlsplit(url).path)).name
    if not filename:
        msg = f"Cannot determine a file name from URL: {url}"
        raise MaterializationError(msg)
    directory = ensure_dir(download_dir or get_download_dir(), "download")
    return directory / filename


def _download(remote: str, dest: Path, fetcher: Fetcher, *, force: bool) -> None:
    """Fetch into a sibling ".part" file and move it into place on success.

    An interrupted download never leaves a file at ``dest``.
    """
    partial = dest.with_name(dest.name + ".part")
    logger.info("Downloading %s -> %s (force=%s)", remote, dest, force)
    try:
        fetcher(remote, partial)
    except (requests.RequestException, OSError) as e:
        partial.unlink(missing_ok=True)
        msg = f"Failed to download {remote}: {e}"
        raise MaterializationError(msg) from e

    if not partial.is_file():
        msg = f"Failed to download {remote} -> {dest}"
        raise MaterializationError(msg)

    os.replace(partial, dest)


def materialize(
    package: Package,
    *,
    output: Path | None = None,
    force: bool = False,
    fetcher: Fetcher | None = None,
    download_dir: Path | None = None,
) -> tuple[Package, Path]:
    """Make a package artifact available on disk.

    An existing destination file is reused unless ``force`` is set, so
    repeated calls fetch at most once.

    Args:
        package: Package with a remote or local URL.
        output: Explicit destination path. Derived from the URL if None.
        force: Re-download even if the artifact is already present.
        fetcher: Download function. Defaults to an HTTP GET via requests.
        download_dir: Directory for derived destinations.

    Returns:
        Tuple of (package pointing at the local file, local file path).

    Raises:
        MaterializationError: If the package has no URL or the download fails.
    """
    if package.url is None:
        msg = f"There is no URL associated with package {package}"
        raise MaterializationError(msg)

    local = package.local_path
    if local is not None and not force:
        logger.debug("Package %s already points to local file %s", package.name, local)
        return package, local

    remote = package.url if package.is_remote else package.origin
    if remote is None:
        msg = f"Package {package} has no remote origin to fetch from"
        raise MaterializationError(msg)

    dest = output or local or _default_destination(remote, download_dir)

    if force or not dest.exists():
        _download(remote, dest, fetcher or fetch_url, force=force)
    else:
        logger.debug("Reusing downloaded artifact %s", dest)

    return package.with_local_path(dest), dest
