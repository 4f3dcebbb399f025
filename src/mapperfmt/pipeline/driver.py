# topmark:header:start
#
#   project      : MapperFmt
#   file         : driver.py
#   file_relpath : src/mapperfmt/pipeline/driver.py
#   license      : MIT
#   copyright    : (c) 2025 MapperFmt contributors
#
# topmark:header:end

"""Pipeline driver: format every statement block of a document.

The driver runs a single left-to-right pass over an immutable buffer:

    scan → for each block: extract → format → reconstruct

Text between blocks is copied through character-for-character; each block's
span is replaced by its reconstruction. Blocks and replacements correspond
1:1, in order.

Failure policy: if the engine rejects any statement, the whole run fails with
[`FormatFailure`][mapperfmt.core.errors.FormatFailure] and no partial document
is produced. The driver holds no state between runs and can be used from
several threads on independent buffers.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from mapperfmt.config.logging import get_logger
from mapperfmt.config.types import Dialect
from mapperfmt.constants import DEFAULT_INDENT_UNIT
from mapperfmt.core.errors import FormatFailure
from mapperfmt.pipeline.extractor import extract_statement, has_entity_references
from mapperfmt.pipeline.reconstructor import build_replacement
from mapperfmt.pipeline.scanner import RegexBlockScanner, line_number_at

if TYPE_CHECKING:
    from mapperfmt.config.logging import MapperfmtLogger
    from mapperfmt.pipeline.formatter import SqlFormatter
    from mapperfmt.pipeline.scanner import BlockScanner, Match

logger: MapperfmtLogger = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class DocumentOptions:
    """Immutable settings for one document run.

    Attributes:
        dialect (Dialect): Dialect handed to the formatting engine.
        indent_unit (str): One nesting level inside a statement element.
        unescape_entities (bool): Decode XML entities in non-CDATA statement bodies.
            When off, such a body is rejected rather than re-wrapped as CDATA.
    """

    dialect: Dialect = Dialect.MYSQL
    indent_unit: str = DEFAULT_INDENT_UNIT
    unescape_entities: bool = True


@dataclass(frozen=True, slots=True)
class BlockRewrite:
    """One statement block and what it became."""

    match: Match
    statement: str
    formatted: str
    replacement: str


@dataclass(frozen=True, slots=True)
class DocumentRewrite:
    """Result of formatting one document.

    Attributes:
        original (str): The input buffer.
        text (str): The output buffer (equal to ``original`` when nothing matched).
        blocks (tuple[BlockRewrite, ...]): One entry per located block, in source order.
    """

    original: str
    text: str
    blocks: tuple[BlockRewrite, ...] = field(default_factory=tuple)

    @property
    def changed(self) -> bool:
        return self.text != self.original

    @property
    def statement_count(self) -> int:
        return len(self.blocks)


def detect_newline(text: str) -> str:
    """Return the first line break used in ``text`` (``"\\n"`` when there is none)."""
    for i, ch in enumerate(text):
        if ch == "\n":
            return "\n"
        if ch == "\r":
            return "\r\n" if text[i + 1 : i + 2] == "\n" else "\r"
    return "\n"


def _rewrite_block(
    text: str,
    match: Match,
    formatter: SqlFormatter,
    options: DocumentOptions,
    newline: str,
) -> BlockRewrite:
    if not options.unescape_entities and has_entity_references(match.inner_content):
        # The body is always re-emitted as CDATA.
        raise FormatFailure(
            "statement contains XML entities; enable unescape_entities to decode them",
            tag_name=match.tag_name,
            line=line_number_at(text, match.start + len(match.leading_indent)),
        )
    statement: str = extract_statement(
        match.inner_content, unescape_entities=options.unescape_entities
    )
    try:
        formatted: str = formatter.format(statement, options.dialect)
    except FormatFailure as exc:
        line: int = line_number_at(text, match.start + len(match.leading_indent))
        logger.debug("driver: <%s> at line %d rejected: %s", match.tag_name, line, exc.message)
        raise exc.with_location(tag_name=match.tag_name, line=line) from exc
    replacement: str = build_replacement(
        match, formatted, indent_unit=options.indent_unit, newline=newline
    )
    return BlockRewrite(
        match=match, statement=statement, formatted=formatted, replacement=replacement
    )


def rewrite_document(
    text: str,
    formatter: SqlFormatter,
    *,
    options: DocumentOptions | None = None,
    scanner: BlockScanner | None = None,
) -> DocumentRewrite:
    """Format every statement block of ``text``.

    Args:
        text (str): The full document.
        formatter (SqlFormatter): Formatting engine for individual statements.
        options (DocumentOptions | None): Run settings (defaults when ``None``).
        scanner (BlockScanner | None): Block scanner (regex scanner when ``None``).

    Returns:
        DocumentRewrite: The output buffer and the per-block details.

    Raises:
        FormatFailure: If any statement is rejected by the engine. The failure
            carries the tag name and line of the offending block.
    """
    opts: DocumentOptions = options or DocumentOptions()
    block_scanner: BlockScanner = scanner or RegexBlockScanner()
    newline: str = detect_newline(text)

    parts: list[str] = []
    blocks: list[BlockRewrite] = []
    cursor: int = 0
    for match in block_scanner.scan(text):
        if match.start < cursor:
            # Scanner contract violation: spans must be disjoint and ordered.
            raise ValueError(
                f"Overlapping statement blocks at offset {match.start} (previous end {cursor})"
            )
        block: BlockRewrite = _rewrite_block(text, match, formatter, opts, newline)
        parts.append(text[cursor : match.start])
        parts.append(block.replacement)
        blocks.append(block)
        cursor = match.end
    parts.append(text[cursor:])

    if not blocks:
        logger.debug("driver: no statement blocks found")
        return DocumentRewrite(original=text, text=text)

    logger.debug("driver: formatted %d statement block(s)", len(blocks))
    return DocumentRewrite(original=text, text="".join(parts), blocks=tuple(blocks))


def format_document(
    text: str,
    formatter: SqlFormatter,
    *,
    options: DocumentOptions | None = None,
    scanner: BlockScanner | None = None,
) -> str:
    """Return ``text`` with every statement block reformatted.

    See [`rewrite_document`][mapperfmt.pipeline.driver.rewrite_document] for
    arguments and failure behavior.
    """
    return rewrite_document(text, formatter, options=options, scanner=scanner).text
