# topmark:header:start
#
#   project      : MapperFmt
#   file         : test_document_properties.py
#   file_relpath : tests/pipeline/test_document_properties.py
#   license      : MIT
#   copyright    : (c) 2025 MapperFmt contributors
#
# topmark:header:end

"""Property tests for whole-document formatting.

Generated mapper documents (random block count, tag case, indentation, CDATA
use and line endings) must satisfy:

1) every block is found and formatted, in source order;
2) text outside the blocks survives verbatim and in order;
3) a second run is a no-op;
4) the document's line ending is used for every emitted line.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest
from hypothesis import HealthCheck, given, settings

from mapperfmt.pipeline.driver import rewrite_document
from tests.conftest import IdentityFormatter, KeywordFormatter
from tests.strategies_mapperfmt import s_mapper_document

if TYPE_CHECKING:
    from mapperfmt.pipeline.driver import DocumentRewrite
    from tests.strategies_mapperfmt import MapperSample


pytestmark: pytest.MarkDecorator = pytest.mark.hypothesis_slow

_SETTINGS = settings(
    suppress_health_check=[HealthCheck.too_slow],
    deadline=None,
    max_examples=60,
)


@_SETTINGS
@given(sample=s_mapper_document())
def test_blocks_are_found_in_order(sample: MapperSample) -> None:
    formatter = IdentityFormatter()

    result: DocumentRewrite = rewrite_document(sample.text, formatter)

    assert tuple(b.match.tag_name for b in result.blocks) == sample.tags
    assert len(formatter.calls) == len(sample.tags)


@_SETTINGS
@given(sample=s_mapper_document())
def test_text_outside_blocks_survives(sample: MapperSample) -> None:
    out: str = rewrite_document(sample.text, KeywordFormatter()).text

    assert out.startswith("<mapper>")
    assert out.endswith("</mapper>" + sample.newline)
    cursor: int = 0
    for filler in sample.fillers:
        found: int = out.find(filler, cursor)
        assert found >= 0, filler
        cursor = found + len(filler)


@_SETTINGS
@given(sample=s_mapper_document())
def test_second_run_is_a_no_op(sample: MapperSample) -> None:
    formatter = KeywordFormatter()

    once: str = rewrite_document(sample.text, formatter).text
    twice: DocumentRewrite = rewrite_document(once, formatter)

    assert twice.text == once
    assert not twice.changed


@_SETTINGS
@given(sample=s_mapper_document())
def test_line_endings_are_preserved(sample: MapperSample) -> None:
    out: str = rewrite_document(sample.text, KeywordFormatter()).text

    if sample.newline == "\r\n":
        assert "\n" not in out.replace("\r\n", "")
    else:
        assert "\r" not in out
