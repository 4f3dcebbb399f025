# topmark:header:start
#
#   project      : MapperFmt
#   file         : io.py
#   file_relpath : src/mapperfmt/config/io.py
#   license      : MIT
#   copyright    : (c) 2025 MapperFmt contributors
#
# topmark:header:end

"""TOML I/O and typed value extraction for MapperFmt configuration.

Parsing and rendering are done with `tomlkit`; tables are returned as plain
`dict` structures. The *checked* getters never raise on user mistakes: they
log a warning, record a diagnostic and fall back to "unset".
"""

from __future__ import annotations

from importlib.resources import files
from typing import TYPE_CHECKING, Any, Final, TypeVar, cast

import tomlkit
from tomlkit.exceptions import ParseError as TomlkitParseError

from mapperfmt.config.keys import Toml
from mapperfmt.config.logging import get_logger
from mapperfmt.constants import (
    DEFAULT_PREVIEW_CHARS,
    DEFAULT_TOML_CONFIG_NAME,
    DEFAULT_TOML_CONFIG_PACKAGE,
    PYPROJECT_TOOL_SECTION,
)

if TYPE_CHECKING:
    from enum import Enum
    from pathlib import Path

    from mapperfmt.config.logging import MapperfmtLogger
    from mapperfmt.config.types import TomlTable
    from mapperfmt.core.diagnostics import DiagnosticLog

    E = TypeVar("E", bound=Enum)

logger: MapperfmtLogger = get_logger(__name__)


# --- TOML file I/O ---


def load_defaults_dict() -> TomlTable:
    """Return MapperFmt's runtime defaults as a Python dict.

    Runtime defaults are defined in code (no I/O) so MapperFmt can operate even
    if the packaged template is missing. The bundled ``mapperfmt-default.toml``
    is the annotated, human-facing rendition of the same values.

    Returns:
        TomlTable: A new dict; callers may mutate it safely.
    """
    return {
        Toml.SECTION_FORMAT: {
            Toml.KEY_DIALECT: "mysql",
            Toml.KEY_INDENT_WIDTH: 4,
            Toml.KEY_USE_TABS: False,
            Toml.KEY_UNESCAPE_ENTITIES: True,
            Toml.KEY_LEADING_COMMA: False,
            Toml.KEY_MAX_TEXT_WIDTH: 80,
            Toml.KEY_NORMALIZE_FUNCTIONS: "upper",
        },
        Toml.SECTION_FILES: {
            Toml.KEY_SUFFIXES: [".xml"],
            Toml.KEY_INCLUDE_PATTERNS: [],
            Toml.KEY_EXCLUDE_PATTERNS: [],
        },
        Toml.SECTION_PREVIEW: {
            Toml.KEY_MAX_CHARS: DEFAULT_PREVIEW_CHARS,
        },
    }


def load_default_config_template_text() -> str:
    """Return the bundled, annotated default configuration as TOML text.

    Falls back to rendering `load_defaults_dict` when the packaged template
    cannot be read.
    """
    resource = files(DEFAULT_TOML_CONFIG_PACKAGE).joinpath(DEFAULT_TOML_CONFIG_NAME)
    try:
        return resource.read_text(encoding="utf-8")
    except OSError as exc:
        logger.warning("Cannot read packaged default config template %s: %s", resource, exc)
        return to_toml(load_defaults_dict())


def load_toml_dict(path: Path) -> TomlTable:
    """Load and parse a TOML file from the filesystem.

    Args:
        path (Path): Path to a TOML document (``mapperfmt.toml`` or ``pyproject.toml``).

    Returns:
        TomlTable: The parsed TOML content; an empty dict on failure (errors are logged).
    """
    try:
        text: str = path.read_text(encoding="utf-8")
        doc: tomlkit.TOMLDocument = tomlkit.parse(text)
        data_any: Any = doc.unwrap()
        return cast("TomlTable", data_any) if isinstance(data_any, dict) else {}
    except OSError as e:
        logger.error("Error loading TOML from %s: %s", path, e)
        return {}
    except TomlkitParseError as e:
        logger.error("Error decoding TOML from %s: %s", path, e)
        return {}


def extract_pyproject_table(data: TomlTable) -> TomlTable | None:
    """Return the ``[tool.mapperfmt]`` table of a parsed ``pyproject.toml``, if any."""
    tool: Any = data.get("tool")
    if not isinstance(tool, dict):
        return None
    table: Any = cast("dict[str, Any]", tool).get(PYPROJECT_TOOL_SECTION)
    return cast("TomlTable", table) if isinstance(table, dict) else None


def to_toml(data: TomlTable) -> str:
    """Render a TOML table as text (``None`` values are omitted; TOML has no null)."""
    return tomlkit.dumps(_strip_none(data))


def _strip_none(value: Any) -> Any:
    if isinstance(value, dict):
        return {
            str(k): _strip_none(v)
            for k, v in cast("dict[Any, Any]", value).items()
            if v is not None
        }
    if isinstance(value, list):
        return [_strip_none(v) for v in cast("list[Any]", value) if v is not None]
    return value


# --- Checked getters ---


def get_table_value(table: TomlTable, key: str) -> TomlTable:
    """Return the sub-table ``key`` of ``table`` (empty dict when missing or not a table)."""
    value: Any = table.get(key)
    return cast("TomlTable", value) if isinstance(value, dict) else {}


def _warn(
    diagnostics: DiagnosticLog,
    log: MapperfmtLogger,
    loc: str,
    expected: str,
    value: Any,
) -> None:
    log.warning("Expected %s in %s, got %s: %r", expected, loc, type(value).__name__, value)
    diagnostics.add_warning(f"Expected {expected} in {loc}, got {type(value).__name__}: {value!r}")


def get_bool_value_or_none_checked(
    table: TomlTable,
    key: str,
    *,
    where: str,
    diagnostics: DiagnosticLog,
    log: MapperfmtLogger = logger,
) -> bool | None:
    """Return an optional boolean value, warning when present but not `bool`."""
    value: Any | None = table.get(key)
    if value is None or isinstance(value, bool):
        return value
    _warn(diagnostics, log, f"{where}.{key}", "bool", value)
    return None


def get_int_value_or_none_checked(
    table: TomlTable,
    key: str,
    *,
    where: str,
    diagnostics: DiagnosticLog,
    log: MapperfmtLogger = logger,
    minimum: int | None = None,
) -> int | None:
    """Return an optional int value, warning when present but not a valid `int`.

    Notes:
        - Missing key -> None
        - `bool` is rejected (since `bool` is a subclass of `int`).
        - Values below ``minimum`` are rejected.
    """
    value: Any | None = table.get(key)
    if value is None:
        return None
    loc: Final[str] = f"{where}.{key}"
    if isinstance(value, bool) or not isinstance(value, int):
        _warn(diagnostics, log, loc, "int", value)
        return None
    if minimum is not None and value < minimum:
        log.warning("Value for %s must be >= %d, got %d", loc, minimum, value)
        diagnostics.add_warning(f"Value for {loc} must be >= {minimum}, got {value}")
        return None
    return value


def get_string_list_value_or_none_checked(
    table: TomlTable,
    key: str,
    *,
    where: str,
    diagnostics: DiagnosticLog,
    log: MapperfmtLogger = logger,
) -> list[str] | None:
    """Return an optional list of strings; non-string entries are dropped with a warning.

    Returns:
        list[str] | None: ``None`` when the key is missing or not a list.
    """
    value: Any | None = table.get(key)
    if value is None:
        return None
    loc: Final[str] = f"{where}.{key}"
    if not isinstance(value, list):
        _warn(diagnostics, log, loc, "list", value)
        return None
    out: list[str] = []
    for v in cast("list[Any]", value):
        if isinstance(v, str):
            out.append(v)
        else:
            log.warning("Ignoring non-string entry in %s: %r", loc, v)
            diagnostics.add_warning(f"Ignoring non-string entry in {loc}: {v!r}")
    return out


def get_enum_value_checked(
    table: TomlTable,
    key: str,
    enum_cls: type[E],
    *,
    where: str,
    diagnostics: DiagnosticLog,
    log: MapperfmtLogger = logger,
) -> E | None:
    """Parse an enum value from TOML (matched case-insensitively against enum values).

    - Missing key -> None
    - Wrong type -> warning + None
    - Unknown enum value -> warning + None
    """
    raw: Any | None = table.get(key)
    if raw is None:
        return None
    loc: Final[str] = f"{where}.{key}"
    if not isinstance(raw, str):
        _warn(diagnostics, log, loc, "string enum value", raw)
        return None
    try:
        return enum_cls(raw.strip().lower())
    except ValueError:
        allowed: str = ", ".join(str(e.value) for e in enum_cls)
        log.warning("Invalid value for %s: %r (allowed: %s)", loc, raw, allowed)
        diagnostics.add_warning(f"Invalid value for {loc}: {raw!r} (allowed: {allowed})")
        return None
