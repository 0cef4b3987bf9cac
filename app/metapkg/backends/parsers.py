"""Output parsers turning raw package manager output into Package records.

Line oriented parsers never fail as a whole: a line that cannot be
parsed is skipped. The structured (XML) parser is strict instead, since
a document of the wrong shape means the tool's output contract changed.

Several backends use a name/version delimiter that may also appear in
package names ('-' for the RPM family, '@' in versioned Homebrew formula
names such as ``python@3.12``). The column-count and structural-character
checks below are heuristics for these tools, not a general grammar.
"""

import logging
from abc import ABC, abstractmethod
from xml.etree.ElementTree import Element, ParseError

from defusedxml import DefusedXmlException
from defusedxml.ElementTree import fromstring

from metapkg.core.errors import MalformedOutputError
from metapkg.models.package import Package

logger = logging.getLogger(__name__)

# Marker of heading/banner lines in DNF and YUM output
BANNER_MARKER = "===="


class OutputParser(ABC):
    """Converts raw stdout of a backend into package records."""

    @abstractmethod
    def parse(self, raw: bytes) -> list[Package]:
        """Parse raw output.

        Args:
            raw: Captured stdout bytes.

        Returns:
            Packages found in the output, in output order.
        """


class LineParser(OutputParser):
    """Base class for parsers that read one package per line."""

    def parse(self, raw: bytes) -> list[Package]:
        """Parse every non-blank line, skipping lines that do not parse."""
        packages: list[Package] = []

        for raw_line in raw.decode("utf-8", errors="replace").splitlines():
            if not raw_line.strip():
                continue

            line = self.normalize(raw_line)
            try:
                package = self.parse_line(line)
            except ValueError:
                package = None

            if package is None:
                logger.debug("Skipping unparsable line: %r", line[:100])
                continue
            packages.append(package)

        return packages

    def normalize(self, line: str) -> str:
        """Prepare a non-blank line for parsing. Trims whitespace by default."""
        return line.strip()

    @abstractmethod
    def parse_line(self, line: str) -> Package | None:
        """Parse a single normalized, non-blank line.

        Args:
            line: Line of output.

        Returns:
            Package if the line describes one, None otherwise.
        """


class DelimitedLineParser(LineParser):
    """Splits each line once on a fixed delimiter into name and version.

    A line without the delimiter yields a package without version.
    """

    def __init__(self, delimiter: str) -> None:
        self._delimiter = delimiter

    @property
    def delimiter(self) -> str:
        """Return the name/version delimiter."""
        return self._delimiter

    def parse_line(self, line: str) -> Package | None:
        name, sep, version = line.partition(self._delimiter)
        if not sep:
            return Package(name=line.strip())
        return Package(name=name.strip(), version=version.strip() or None)


class AptLineParser(LineParser):
    """Parser for ``apt list`` and ``apt search`` output.

    Package lines look like ``hello/stable 2.10-3 amd64`` or
    ``mysql-common/now 5.8+1.1.0 all [installed,local]``. The text after
    the first '/' must consist of exactly three or four tokens, which
    rejects wrapped description lines without inspecting their content.
    """

    _ACCEPTED_TOKEN_COUNTS = (3, 4)

    def parse_line(self, line: str) -> Package | None:
        name, sep, info = line.partition("/")
        if not sep:
            return None

        tokens = info.split()
        if len(tokens) not in self._ACCEPTED_TOKEN_COUNTS:
            return None

        return Package(name=name.strip(), version=tokens[1])


class DnfLineParser(LineParser):
    """Parser for DNF and YUM ``list`` and ``search`` output.

    - banner lines (``==== Name Matched: hello ====``) are always rejected
    - installed listings (``hello.x86_64  2.10-3.fc38  @fedora``) carry a
      repository marked with '@'; the first two tokens are name and version
    - search hits (``hello.x86_64 : Prints a friendly greeting``) carry
      only a name before the first ':'
    """

    def parse_line(self, line: str) -> Package | None:
        if BANNER_MARKER in line:
            return None

        if "@" in line:
            tokens = line.split()
            if len(tokens) < 2:
                return None
            return Package(name=tokens[0], version=tokens[1])

        name, sep, _ = line.partition(":")
        if not sep:
            return None
        return Package(name=name.strip())


class FlatpakLineParser(LineParser):
    """Parser for tab-separated ``flatpak list`` and ``flatpak search`` output.

    ``list`` prints Name, Application ID, Version, Branch[, Installation];
    ``search`` prints Name, Description, Application ID, Version, Branch,
    Remotes. Rows with any other column count are rejected.
    """

    # column count -> (name column, version column)
    _COLUMNS: dict[int, tuple[int, int]] = {
        4: (1, 2),
        5: (1, 2),
        6: (2, 3),
    }

    def normalize(self, line: str) -> str:
        # Empty leading/trailing columns are significant
        return line.strip(" \r\n")

    def parse_line(self, line: str) -> Package | None:
        columns = line.split("\t")
        positions = self._COLUMNS.get(len(columns))
        if positions is None:
            return None

        name_col, version_col = positions
        version = columns[version_col].strip() or None
        return Package(name=columns[name_col].strip(), version=version)


class ZypperXmlParser(OutputParser):
    """Parser for ``zypper --xmlout search`` documents.

    Expects ``<stream><search-result><solvable-list><solvable .../>``.
    Each solvable's ``name`` attribute is the package name and its
    ``edition`` attribute, present with ``--details``, the version.
    """

    def __init__(self, backend: str = "zypper") -> None:
        self._backend = backend

    def parse(self, raw: bytes) -> list[Package]:
        """Parse an XML document.

        Raises:
            MalformedOutputError: If the document is not XML, lacks
                ``search-result/solvable-list`` or has a nameless entry.
        """
        try:
            root: Element = fromstring(raw)
        except (ParseError, DefusedXmlException) as e:
            raise MalformedOutputError(self._backend, f"invalid XML document: {e}") from e

        solvables = root.find("search-result/solvable-list")
        if solvables is None:
            raise MalformedOutputError(self._backend, "no search-result/solvable-list found")

        packages: list[Package] = []
        for solvable in solvables:
            name = solvable.get("name")
            if not name:
                raise MalformedOutputError(self._backend, f"<{solvable.tag}> without a name")
            packages.append(Package(name=name, version=solvable.get("edition") or None))

        return packages
