# topmark:header:start
#
#   project      : MapperFmt
#   file         : scanner.py
#   file_relpath : src/mapperfmt/pipeline/scanner.py
#   license      : MIT
#   copyright    : (c) 2025 MapperFmt contributors
#
# topmark:header:end

"""Block scanner for SQL statement elements in mapper documents.

The scanner works on raw text, not on a DOM: it yields the
``<select|insert|update|delete ...>...</...>`` blocks of a buffer as
[`Match`][mapperfmt.pipeline.scanner.Match] records, left to right and without
overlap. Everything the scanner does not match is copied through verbatim by
the driver.

The pattern captures:

1. the horizontal whitespace preceding the opening tag (reconstruction indent),
2. the tag name (case-insensitive, original case preserved),
3. the raw attribute text up to the ``>`` of the opening tag,
4. the inner content, matched minimally up to the nearest closing tag of the
   *same* name (a back-reference, not an independent match of two tags).

An opening tag without a matching closing tag produces no match. Nested
same-name tags are not handled specially: the first same-name closing tag ends
the block.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import TYPE_CHECKING, Final, Protocol

from mapperfmt.config.logging import get_logger
from mapperfmt.constants import STATEMENT_TAGS

if TYPE_CHECKING:
    from collections.abc import Iterator

    from mapperfmt.config.logging import MapperfmtLogger

logger: MapperfmtLogger = get_logger(__name__)

STATEMENT_BLOCK_PATTERN: Final[re.Pattern[str]] = re.compile(
    r"(?P<indent>[ \t]*)"
    r"<(?P<tag>" + "|".join(STATEMENT_TAGS) + r")\b"
    r"(?P<attrs>[^>]*)(?<!/)>"
    r"(?P<body>.*?)"
    r"</(?P=tag)\s*>",
    re.IGNORECASE | re.DOTALL,
)


@dataclass(frozen=True, slots=True)
class Match:
    """A located statement block.

    Attributes:
        leading_indent (str): Whitespace preceding the opening tag on its line.
        tag_name (str): Tag name as written in the source (original case).
        attributes (str): Verbatim attribute text between the tag name and ``>``.
        inner_content (str): Raw text between the opening and the closing tag.
        span (tuple[int, int]): ``(start, end)`` offsets in the source buffer, covering
            the leading indent through the closing tag (end exclusive).
    """

    leading_indent: str
    tag_name: str
    attributes: str
    inner_content: str
    span: tuple[int, int]

    @property
    def start(self) -> int:
        return self.span[0]

    @property
    def end(self) -> int:
        return self.span[1]


class BlockScanner(Protocol):
    """Locate statement blocks in a text buffer.

    Implementations must yield matches lazily, in source order, with disjoint
    spans. A structural XML scanner can replace the regex scanner without
    touching the extractor or the reconstructor.
    """

    def scan(self, text: str) -> Iterator[Match]:
        """Yield the statement blocks of ``text`` from left to right."""
        ...


class RegexBlockScanner:
    """Default scanner backed by a single compiled, immutable pattern."""

    def __init__(self, pattern: re.Pattern[str] = STATEMENT_BLOCK_PATTERN) -> None:
        self._pattern: re.Pattern[str] = pattern

    @property
    def pattern(self) -> re.Pattern[str]:
        return self._pattern

    def scan(self, text: str) -> Iterator[Match]:
        """Yield the statement blocks of ``text`` from left to right.

        Args:
            text (str): The full source buffer.

        Yields:
            Match: One record per located block, in source order.
        """
        for m in self._pattern.finditer(text):
            match = Match(
                leading_indent=m.group("indent"),
                tag_name=m.group("tag"),
                attributes=m.group("attrs"),
                inner_content=m.group("body"),
                span=m.span(),
            )
            logger.trace(
                "scanner: <%s> at %d..%d (indent=%r)",
                match.tag_name,
                match.start,
                match.end,
                match.leading_indent,
            )
            yield match


def line_number_at(text: str, offset: int) -> int:
    """Return the 1-based line number of ``offset`` in ``text``."""
    return text.count("\n", 0, offset) + 1
