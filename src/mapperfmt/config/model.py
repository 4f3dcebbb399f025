# topmark:header:start
#
#   project      : MapperFmt
#   file         : model.py
#   file_relpath : src/mapperfmt/config/model.py
#   license      : MIT
#   copyright    : (c) 2025 MapperFmt contributors
#
# topmark:header:end

"""Configuration model for MapperFmt.

This module defines the immutable runtime configuration (`Config`) and its
mutable builder (`MutableConfig`).

Layering (lowest → highest precedence):
    1) Built-in defaults
    2) Project configs discovered upward from the anchor directory, merged
       root-most → nearest; within a directory `pyproject.toml` (``[tool.mapperfmt]``)
       is merged first, then `mapperfmt.toml`
    3) Extra config files passed explicitly via ``--config`` (in the order provided)
    4) CLI / API overrides (`MutableConfig.apply_cli_args`)

Builder fields are tri-state where it matters: ``None`` means "not set by this
layer" so that merging keeps the lower layer's value. `MutableConfig.freeze`
resolves whatever is still unset to the built-in defaults.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Any

from mapperfmt.config.io import (
    extract_pyproject_table,
    get_bool_value_or_none_checked,
    get_enum_value_checked,
    get_int_value_or_none_checked,
    get_string_list_value_or_none_checked,
    get_table_value,
    load_default_config_template_text,
    load_defaults_dict,
    load_toml_dict,
    to_toml,
)
from mapperfmt.config.keys import Toml
from mapperfmt.config.logging import get_logger
from mapperfmt.config.types import Dialect, FunctionCase
from mapperfmt.constants import (
    DEFAULT_PREVIEW_CHARS,
    PROJECT_CONFIG_NAME,
    PYPROJECT_TOML_NAME,
)
from mapperfmt.core.diagnostics import Diagnostic, DiagnosticLog
from mapperfmt.core.errors import ConfigError

if TYPE_CHECKING:
    from collections.abc import Iterable

    from mapperfmt.config.logging import MapperfmtLogger
    from mapperfmt.config.types import ArgsLike, TomlTable

logger: MapperfmtLogger = get_logger(__name__)

CLI_OVERRIDE_STR: str = "<CLI overrides>"


# ------------------ Immutable runtime config ------------------


@dataclass(frozen=True, slots=True)
class Config:
    """Immutable runtime configuration for MapperFmt.

    Produced by `MutableConfig.freeze` after merging defaults, project files,
    extra config files and CLI overrides. Collections are tuples so the
    snapshot can be shared safely across the pipeline.

    Attributes:
        config_files (tuple[Path | str, ...]): Config sources that contributed, in merge order.
        files (tuple[str, ...]): Paths to process (files or directories).
        apply_changes (bool): Write results back (True) or preview only (False).
        dialect (Dialect): SQL dialect used to read and write statements.
        indent_width (int): Spaces per indentation unit (ignored with ``use_tabs``).
        use_tabs (bool): Indent statement bodies with a tab instead of spaces.
        unescape_entities (bool): Decode XML entities in statements without a CDATA wrapper.
        leading_comma (bool): Put commas at the start of continuation lines.
        max_text_width (int): Line width the formatting engine tries to stay within.
        normalize_functions (FunctionCase): Case applied to function names.
        suffixes (tuple[str, ...]): File-name suffixes eligible for processing.
        include_patterns (tuple[str, ...]): Glob patterns a file must match (if any are given).
        exclude_patterns (tuple[str, ...]): Glob patterns that remove files from processing.
        preview_max_chars (int): Truncation limit for confirmation previews.
        diagnostics (tuple[Diagnostic, ...]): Warnings collected while loading and merging.
    """

    config_files: tuple[Path | str, ...]
    files: tuple[str, ...]
    apply_changes: bool

    # [format]
    dialect: Dialect
    indent_width: int
    use_tabs: bool
    unescape_entities: bool
    leading_comma: bool
    max_text_width: int
    normalize_functions: FunctionCase

    # [files]
    suffixes: tuple[str, ...]
    include_patterns: tuple[str, ...]
    exclude_patterns: tuple[str, ...]

    # [preview]
    preview_max_chars: int

    diagnostics: tuple[Diagnostic, ...]

    @property
    def indent_unit(self) -> str:
        """Return the text added per indentation level inside a statement block."""
        return "\t" if self.use_tabs else " " * self.indent_width

    def to_toml_dict(self, *, include_files: bool = False) -> TomlTable:
        """Convert this Config into a TOML-serializable dict.

        Args:
            include_files (bool): Also emit a top-level ``files`` list with the
                paths to process (not a config key; useful for debugging).

        Returns:
            TomlTable: Keys laid out like ``mapperfmt-default.toml``.
        """
        data: TomlTable = {
            Toml.SECTION_FORMAT: {
                Toml.KEY_DIALECT: self.dialect.value,
                Toml.KEY_INDENT_WIDTH: self.indent_width,
                Toml.KEY_USE_TABS: self.use_tabs,
                Toml.KEY_UNESCAPE_ENTITIES: self.unescape_entities,
                Toml.KEY_LEADING_COMMA: self.leading_comma,
                Toml.KEY_MAX_TEXT_WIDTH: self.max_text_width,
                Toml.KEY_NORMALIZE_FUNCTIONS: self.normalize_functions.value,
            },
            Toml.SECTION_FILES: {
                Toml.KEY_SUFFIXES: list(self.suffixes),
                Toml.KEY_INCLUDE_PATTERNS: list(self.include_patterns),
                Toml.KEY_EXCLUDE_PATTERNS: list(self.exclude_patterns),
            },
            Toml.SECTION_PREVIEW: {
                Toml.KEY_MAX_CHARS: self.preview_max_chars,
            },
        }
        if include_files:
            data["files"] = list(self.files)
        return data

    def to_toml(self) -> str:
        """Render this Config as TOML text."""
        return to_toml(self.to_toml_dict())

    def thaw(self) -> MutableConfig:
        """Return a mutable copy of this frozen config."""
        return MutableConfig(
            config_files=list(self.config_files),
            files=list(self.files),
            apply_changes=self.apply_changes,
            dialect=self.dialect,
            indent_width=self.indent_width,
            use_tabs=self.use_tabs,
            unescape_entities=self.unescape_entities,
            leading_comma=self.leading_comma,
            max_text_width=self.max_text_width,
            normalize_functions=self.normalize_functions,
            suffixes=list(self.suffixes),
            include_patterns=list(self.include_patterns),
            exclude_patterns=list(self.exclude_patterns),
            preview_max_chars=self.preview_max_chars,
            diagnostics=DiagnosticLog(list(self.diagnostics)),
        )


# -------------------------- Mutable builder --------------------------


@dataclass
class MutableConfig:
    """Mutable configuration used during discovery and merging.

    Scalars left at ``None`` (and lists left empty) are "unset" and inherit
    from lower layers in `merge_with`. TOML I/O is delegated to
    `mapperfmt.config.io`.
    """

    config_files: list[Path | str] = field(default_factory=lambda: [])
    files: list[str] = field(default_factory=lambda: [])
    apply_changes: bool | None = None

    dialect: Dialect | None = None
    indent_width: int | None = None
    use_tabs: bool | None = None
    unescape_entities: bool | None = None
    leading_comma: bool | None = None
    max_text_width: int | None = None
    normalize_functions: FunctionCase | None = None

    suffixes: list[str] = field(default_factory=lambda: [])
    include_patterns: list[str] = field(default_factory=lambda: [])
    exclude_patterns: list[str] = field(default_factory=lambda: [])

    preview_max_chars: int | None = None

    # Stop upward discovery after the directory declaring this config.
    root: bool = False

    diagnostics: DiagnosticLog = field(default_factory=DiagnosticLog)

    # ---------------------------- Build/freeze ----------------------------

    def freeze(self) -> Config:
        """Freeze this builder into an immutable `Config`, filling unset values with defaults."""
        self.sanitize()
        return Config(
            config_files=tuple(self.config_files),
            files=tuple(self.files),
            apply_changes=bool(self.apply_changes),
            dialect=self.dialect or Dialect.MYSQL,
            indent_width=self.indent_width if self.indent_width is not None else 4,
            use_tabs=bool(self.use_tabs),
            unescape_entities=(
                self.unescape_entities if self.unescape_entities is not None else True
            ),
            leading_comma=bool(self.leading_comma),
            max_text_width=self.max_text_width if self.max_text_width is not None else 80,
            normalize_functions=self.normalize_functions or FunctionCase.UPPER,
            suffixes=tuple(self.suffixes) if self.suffixes else (".xml",),
            include_patterns=tuple(self.include_patterns),
            exclude_patterns=tuple(self.exclude_patterns),
            preview_max_chars=(
                self.preview_max_chars
                if self.preview_max_chars is not None
                else DEFAULT_PREVIEW_CHARS
            ),
            diagnostics=tuple(self.diagnostics),
        )

    def sanitize(self) -> None:
        """Normalize list-valued settings in place (strip, drop empties, de-duplicate)."""

        def _clean(name: str, values: list[str]) -> list[str]:
            out: list[str] = []
            for value in values:
                v: str = value.strip()
                if not v:
                    self.diagnostics.add_warning(f"Ignoring empty entry in {name}")
                    continue
                if v not in out:
                    out.append(v)
            return out

        self.suffixes = _clean(f"{Toml.SECTION_FILES}.{Toml.KEY_SUFFIXES}", self.suffixes)
        self.include_patterns = _clean(
            f"{Toml.SECTION_FILES}.{Toml.KEY_INCLUDE_PATTERNS}", self.include_patterns
        )
        self.exclude_patterns = _clean(
            f"{Toml.SECTION_FILES}.{Toml.KEY_EXCLUDE_PATTERNS}", self.exclude_patterns
        )

    # --------------------------- Loaders/parsers --------------------------

    @classmethod
    def get_default_config_toml(cls) -> str:
        """Return the bundled, annotated default configuration as TOML text."""
        return load_default_config_template_text()

    @classmethod
    def from_defaults(cls) -> MutableConfig:
        """Return a builder populated with MapperFmt's built-in defaults."""
        return cls.from_toml_dict(load_defaults_dict())

    @classmethod
    def from_toml_dict(
        cls,
        data: TomlTable,
        *,
        config_file: Path | None = None,
    ) -> MutableConfig:
        """Parse a MapperFmt TOML table into a builder.

        Values of the wrong type or outside their domain are skipped with a
        warning diagnostic; the lower layer's value then survives the merge.

        Args:
            data (TomlTable): The ``mapperfmt.toml`` document (or ``[tool.mapperfmt]`` table).
            config_file (Path | None): Source file, used in diagnostics only.

        Returns:
            MutableConfig: The parsed layer.
        """
        draft = cls()
        origin: str = str(config_file) if config_file is not None else "<defaults>"

        def _where(section: str) -> str:
            return f"{origin}:[{section}]"

        fmt: TomlTable = get_table_value(data, Toml.SECTION_FORMAT)
        w: str = _where(Toml.SECTION_FORMAT)
        draft.dialect = get_enum_value_checked(
            fmt, Toml.KEY_DIALECT, Dialect, where=w, diagnostics=draft.diagnostics
        )
        draft.indent_width = get_int_value_or_none_checked(
            fmt, Toml.KEY_INDENT_WIDTH, where=w, diagnostics=draft.diagnostics, minimum=0
        )
        draft.use_tabs = get_bool_value_or_none_checked(
            fmt, Toml.KEY_USE_TABS, where=w, diagnostics=draft.diagnostics
        )
        draft.unescape_entities = get_bool_value_or_none_checked(
            fmt, Toml.KEY_UNESCAPE_ENTITIES, where=w, diagnostics=draft.diagnostics
        )
        draft.leading_comma = get_bool_value_or_none_checked(
            fmt, Toml.KEY_LEADING_COMMA, where=w, diagnostics=draft.diagnostics
        )
        draft.max_text_width = get_int_value_or_none_checked(
            fmt, Toml.KEY_MAX_TEXT_WIDTH, where=w, diagnostics=draft.diagnostics, minimum=1
        )
        draft.normalize_functions = get_enum_value_checked(
            fmt,
            Toml.KEY_NORMALIZE_FUNCTIONS,
            FunctionCase,
            where=w,
            diagnostics=draft.diagnostics,
        )

        files_tbl: TomlTable = get_table_value(data, Toml.SECTION_FILES)
        w = _where(Toml.SECTION_FILES)
        draft.suffixes = (
            get_string_list_value_or_none_checked(
                files_tbl, Toml.KEY_SUFFIXES, where=w, diagnostics=draft.diagnostics
            )
            or []
        )
        draft.include_patterns = (
            get_string_list_value_or_none_checked(
                files_tbl, Toml.KEY_INCLUDE_PATTERNS, where=w, diagnostics=draft.diagnostics
            )
            or []
        )
        draft.exclude_patterns = (
            get_string_list_value_or_none_checked(
                files_tbl, Toml.KEY_EXCLUDE_PATTERNS, where=w, diagnostics=draft.diagnostics
            )
            or []
        )

        preview: TomlTable = get_table_value(data, Toml.SECTION_PREVIEW)
        draft.preview_max_chars = get_int_value_or_none_checked(
            preview,
            Toml.KEY_MAX_CHARS,
            where=_where(Toml.SECTION_PREVIEW),
            diagnostics=draft.diagnostics,
            minimum=1,
        )

        draft.root = (
            get_bool_value_or_none_checked(
                data, Toml.KEY_ROOT, where=origin, diagnostics=draft.diagnostics
            )
            or False
        )
        return draft

    @classmethod
    def from_toml_file(cls, path: Path) -> MutableConfig | None:
        """Load configuration from a single TOML file.

        Supports both ``mapperfmt.toml`` and ``pyproject.toml`` (``[tool.mapperfmt]``).

        Args:
            path (Path): Path to the TOML file.

        Returns:
            MutableConfig | None: The parsed layer; None for a ``pyproject.toml``
                without a ``[tool.mapperfmt]`` table.
        """
        logger.debug("Creating MutableConfig from TOML config: %s", path)
        data: TomlTable = load_toml_dict(path)

        if path.name == PYPROJECT_TOML_NAME:
            table: TomlTable | None = extract_pyproject_table(data)
            if table is None:
                logger.debug("No [tool.mapperfmt] table in %s", path)
                return None
            data = table

        draft: MutableConfig = cls.from_toml_dict(data, config_file=path)
        draft.config_files = [path]
        return draft

    @classmethod
    def discover_local_config_files(cls, start: Path) -> list[Path]:
        """Return config files found walking upward from ``start``, root-most first.

        Within one directory ``pyproject.toml`` precedes ``mapperfmt.toml`` so the
        tool-specific file wins a nearest-last merge. A config declaring
        ``root = true`` stops the walk after its directory.

        Args:
            start (Path): Directory to start from (a file's parent is used for files).

        Returns:
            list[Path]: Candidate config files in merge order.
        """
        anchor: Path = start.resolve()
        if anchor.is_file():
            anchor = anchor.parent

        per_dir: list[list[Path]] = []
        for directory in (anchor, *anchor.parents):
            found: list[Path] = []
            stop: bool = False
            for name in (PYPROJECT_TOML_NAME, PROJECT_CONFIG_NAME):
                candidate: Path = directory / name
                if not candidate.is_file():
                    continue
                layer: MutableConfig | None = cls.from_toml_file(candidate)
                if layer is None:
                    continue
                found.append(candidate)
                stop = stop or layer.root
            if found:
                per_dir.append(found)
            if stop:
                break

        ordered: list[Path] = [p for group in reversed(per_dir) for p in group]
        logger.debug("Discovered config files: %s", ordered)
        return ordered

    @classmethod
    def load_merged(
        cls,
        *,
        anchor: Path | None = None,
        extra_config_files: Iterable[Path] | None = None,
        no_config: bool = False,
    ) -> MutableConfig:
        """Discover and merge configuration layers into a draft `MutableConfig`.

        Args:
            anchor (Path | None): Directory (or file) where upward discovery starts;
                defaults to the current working directory.
            extra_config_files (Iterable[Path] | None): Explicit config files merged
                after discovery, in the given order.
            no_config (bool): Skip project config discovery.

        Returns:
            MutableConfig: A draft ready to receive CLI overrides and be frozen.

        Raises:
            ConfigError: If an explicit config file does not exist.
        """
        draft: MutableConfig = cls.from_defaults()

        if not no_config:
            for cfg_path in cls.discover_local_config_files(anchor or Path.cwd()):
                layer: MutableConfig | None = cls.from_toml_file(cfg_path)
                if layer is not None:
                    draft = draft.merge_with(layer)

        for extra in extra_config_files or ():
            path = Path(extra)
            if not path.is_file():
                raise ConfigError(f"Config file not found: {path}")
            extra_layer: MutableConfig | None = cls.from_toml_file(path)
            if extra_layer is None:
                draft.diagnostics.add_warning(f"No [tool.mapperfmt] table in {path}")
                continue
            draft = draft.merge_with(extra_layer)

        return draft

    # ------------------------------- Merging -------------------------------

    def merge_with(self, other: MutableConfig) -> MutableConfig:
        """Return a new draft where values set in ``other`` override this draft."""

        def _pick(mine: Any, theirs: Any) -> Any:
            return theirs if theirs is not None else mine

        merged = MutableConfig(
            config_files=self.config_files + other.config_files,
            files=other.files or self.files,
            apply_changes=_pick(self.apply_changes, other.apply_changes),
            dialect=_pick(self.dialect, other.dialect),
            indent_width=_pick(self.indent_width, other.indent_width),
            use_tabs=_pick(self.use_tabs, other.use_tabs),
            unescape_entities=_pick(self.unescape_entities, other.unescape_entities),
            leading_comma=_pick(self.leading_comma, other.leading_comma),
            max_text_width=_pick(self.max_text_width, other.max_text_width),
            normalize_functions=_pick(self.normalize_functions, other.normalize_functions),
            suffixes=other.suffixes or self.suffixes,
            include_patterns=other.include_patterns or self.include_patterns,
            exclude_patterns=other.exclude_patterns or self.exclude_patterns,
            preview_max_chars=_pick(self.preview_max_chars, other.preview_max_chars),
            root=other.root,
        )
        merged.diagnostics.extend(list(self.diagnostics))
        merged.diagnostics.extend(list(other.diagnostics))
        return merged

    def apply_cli_args(self, args: ArgsLike) -> MutableConfig:
        """Apply overrides from a parsed arguments mapping (CLI or API).

        Only keys present with a non-``None`` value override. Include and
        exclude patterns extend the configured ones; suffixes replace them.

        Args:
            args (ArgsLike): Parsed arguments mapping.

        Returns:
            MutableConfig: This builder, updated in place.

        Raises:
            ConfigError: If ``dialect`` names an unsupported dialect.
        """
        logger.debug("Applying CLI arguments to MutableConfig: %s", args)
        self.config_files.append(CLI_OVERRIDE_STR)

        if args.get("files"):
            self.files = [str(f) for f in args["files"]]
        if args.get("apply_changes") is not None:
            self.apply_changes = bool(args["apply_changes"])

        if args.get("dialect") is not None:
            try:
                self.dialect = Dialect.from_name(str(args["dialect"]))
            except ValueError as exc:
                raise ConfigError(str(exc)) from exc
        if args.get("indent_width") is not None:
            self.indent_width = int(args["indent_width"])
        for name in ("use_tabs", "unescape_entities", "leading_comma"):
            if args.get(name) is not None:
                setattr(self, name, bool(args[name]))
        if args.get("max_text_width") is not None:
            self.max_text_width = int(args["max_text_width"])

        if args.get("suffixes"):
            self.suffixes = list(args["suffixes"])
        self.include_patterns.extend(args.get("include_patterns") or [])
        self.exclude_patterns.extend(args.get("exclude_patterns") or [])

        logger.info("Applied CLI overrides to MutableConfig")
        return self
