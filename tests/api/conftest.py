# topmark:header:start
#
#   project      : MapperFmt
#   file         : conftest.py
#   file_relpath : tests/api/conftest.py
#   license      : MIT
#   copyright    : (c) 2025 MapperFmt contributors
#
# topmark:header:end

"""Fixtures for API tests."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

if TYPE_CHECKING:
    from pathlib import Path

MAPPER_TEXT: str = (
    '<?xml version="1.0" encoding="UTF-8"?>\n'
    '<mapper namespace="com.example.UserMapper">\n'
    '    <select id="findById" resultType="User">\n'
    "        select id, name from user where id = #{id}\n"
    "    </select>\n"
    "</mapper>\n"
)


@pytest.fixture
def mapper_project(isolation: Path) -> Path:
    """A project with one mapper, one XML file without statements and a non-XML file."""
    res: Path = isolation / "res"
    res.mkdir()
    (res / "UserMapper.xml").write_text(MAPPER_TEXT, encoding="utf-8")
    (res / "pom.xml").write_text("<project/>\n", encoding="utf-8")
    (res / "notes.md").write_text("# notes\n", encoding="utf-8")
    return isolation
