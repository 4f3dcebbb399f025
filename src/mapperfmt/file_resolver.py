# topmark:header:start
#
#   project      : MapperFmt
#   file         : file_resolver.py
#   file_relpath : src/mapperfmt/file_resolver.py
#   license      : MIT
#   copyright    : (c) 2025 MapperFmt contributors
#
# topmark:header:end

"""File resolution for MapperFmt.

Turns the positional paths of a run into the sorted list of files to process:
expand directories recursively, apply include/exclude glob patterns
(gitignore semantics via `pathspec`), then keep only applicable files.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from pathspec import PathSpec
from pathspec.patterns.gitwildmatch import GitWildMatchPattern

from mapperfmt.config.logging import get_logger
from mapperfmt.filetypes import ApplicabilityFilter

if TYPE_CHECKING:
    from mapperfmt.config.logging import MapperfmtLogger
    from mapperfmt.config.model import Config

logger: MapperfmtLogger = get_logger(__name__)


def _rel_for_match(path: Path, base: Path) -> str:
    """Return a POSIX-style relative path (or absolute as fallback) for PathSpec matching."""
    try:
        return path.resolve().relative_to(base.resolve()).as_posix()
    except ValueError:
        return path.as_posix()


def expand_path(p: Path) -> list[Path]:
    """Expand one positional path into files.

    Directories are walked recursively; a missing path yields nothing.
    """
    if p.is_dir():
        return [c for c in p.rglob("*") if c.is_file()]
    if p.is_file():
        return [p]
    return []


def find_missing_paths(config: Config) -> list[Path]:
    """Return the positional paths of ``config`` that do not exist."""
    return [Path(p) for p in config.files if not Path(p).exists()]


def resolve_file_list(config: Config, *, base: Path | None = None) -> list[Path]:
    """Return the files to process, applying expansion and filters.

    Semantics:
      1. **Candidate set**: expand positional paths (files, and directories recursively).
      2. **Include intersection**: with include patterns, keep only files matching any.
      3. **Exclude subtraction**: remove files matching any exclude pattern.
      4. **Applicability**: keep files whose name ends with a configured suffix.
      5. Return a **sorted**, de-duplicated list for deterministic output.

    Explicitly named files bypass neither the patterns nor the suffix filter.
    Missing paths are logged and skipped; see `find_missing_paths`.

    Args:
        config (Config): Configuration values influencing path collection and filters.
        base (Path | None): Directory patterns are matched relative to (default: CWD).

    Returns:
        list[Path]: Sorted list of files selected for processing.
    """
    workspace_root: Path = base or Path.cwd()

    candidate_set: set[Path] = set()
    for raw in config.files:
        p = Path(raw)
        if not p.exists():
            logger.warning("No such file or directory: %s", p)
            continue
        candidate_set.update(expand_path(p))
    logger.debug("Candidate files before filtering: %d", len(candidate_set))

    if config.include_patterns:
        spec_include: PathSpec = PathSpec.from_lines(
            GitWildMatchPattern, list(config.include_patterns)
        )
        candidate_set = {
            p for p in candidate_set if spec_include.match_file(_rel_for_match(p, workspace_root))
        }

    if config.exclude_patterns:
        spec_exclude: PathSpec = PathSpec.from_lines(
            GitWildMatchPattern, list(config.exclude_patterns)
        )
        candidate_set = {
            p
            for p in candidate_set
            if not spec_exclude.match_file(_rel_for_match(p, workspace_root))
        }

    applicability: ApplicabilityFilter = ApplicabilityFilter.from_config(config)
    filtered_files: set[Path] = {p for p in candidate_set if applicability.is_applicable(p)}

    logger.trace("Files to process: %d -- %s", len(filtered_files), sorted(filtered_files))
    return sorted(filtered_files)
