# topmark:header:start
#
#   project      : MapperFmt
#   file         : extractor.py
#   file_relpath : src/mapperfmt/pipeline/extractor.py
#   license      : MIT
#   copyright    : (c) 2025 MapperFmt contributors
#
# topmark:header:end

"""Content extractor: recover the raw statement text of a block."""

from __future__ import annotations

import re

from mapperfmt.constants import CDATA_END, CDATA_START

# Predefined XML entities and numeric character references.
_ENTITY_RE: re.Pattern[str] = re.compile(r"&(lt|gt|amp|quot|apos|#[0-9]+|#x[0-9a-fA-F]+);")
_NAMED_ENTITIES: dict[str, str] = {"lt": "<", "gt": ">", "amp": "&", "quot": '"', "apos": "'"}


def has_cdata_wrapper(inner_content: str) -> bool:
    return CDATA_START in inner_content


def has_entity_references(inner_content: str) -> bool:
    """Return True when content outside CDATA carries XML entity references."""
    return not has_cdata_wrapper(inner_content) and _ENTITY_RE.search(inner_content) is not None


def _decode_entity(m: re.Match[str]) -> str:
    ref: str = m.group(1)
    if not ref.startswith("#"):
        return _NAMED_ENTITIES[ref]
    code: int = int(ref[2:], 16) if ref.startswith("#x") else int(ref[1:])
    # Out-of-range references stay as written.
    return chr(code) if code <= 0x10FFFF else m.group(0)


def decode_entities(text: str) -> str:
    """Decode predefined XML entities and character references in a single pass.

    A single pass keeps ``&amp;lt;`` as the literal text ``&lt;``.
    """
    return _ENTITY_RE.sub(_decode_entity, text)


def extract_statement(inner_content: str, *, unescape_entities: bool = False) -> str:
    """Return the raw SQL text of a statement block.

    When the content contains a CDATA start marker, every CDATA start and end
    marker is removed (not only an outer pair) before trimming. Otherwise the
    content is only trimmed. This function never fails.

    Args:
        inner_content (str): Text between the opening and the closing tag.
        unescape_entities (bool): Decode the predefined XML entities and
            character references of content that is *not* CDATA-wrapped. The
            reconstructed body is always CDATA-wrapped, so entity-escaped SQL
            would otherwise change meaning.

    Returns:
        str: The statement text, without wrapper markers and outer whitespace.
    """
    if has_cdata_wrapper(inner_content):
        return inner_content.replace(CDATA_START, "").replace(CDATA_END, "").strip()
    if unescape_entities:
        return decode_entities(inner_content).strip()
    return inner_content.strip()
