# topmark:header:start
#
#   project      : MapperFmt
#   file         : __init__.py
#   file_relpath : src/mapperfmt/filetypes/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 MapperFmt contributors
#
# topmark:header:end

"""Applicability filter: which files the formatter may touch.

A file is eligible when its name ends with one of the configured suffixes.
The default is ``.xml``; a project that wants to restrict formatting to
MyBatis mapper files configures ``suffixes = ["Mapper.xml"]``.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import PurePath
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pathlib import Path

    from mapperfmt.config.model import Config


@dataclass(frozen=True)
class ApplicabilityFilter:
    """Suffix-based file filter.

    Attributes:
        suffixes (tuple[str, ...]): File-name suffixes (matched case-sensitively
            against the whole file name, not only the extension).
    """

    suffixes: tuple[str, ...] = (".xml",)

    @classmethod
    def from_config(cls, config: Config) -> ApplicabilityFilter:
        """Build the filter from the resolved ``[files].suffixes`` setting."""
        return cls(suffixes=tuple(config.suffixes))

    def is_applicable(self, path: Path | str) -> bool:
        """Return True if ``path`` names a file the formatter may process."""
        name: str = PurePath(path).name
        return any(name.endswith(suffix) for suffix in self.suffixes)
