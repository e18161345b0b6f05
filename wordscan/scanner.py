"""Discovery of candidate text files under a path."""

from __future__ import annotations

import os
from dataclasses import dataclass
from fnmatch import fnmatchcase
from pathlib import Path
from typing import Iterator, List, Sequence

_EXCLUDED_DIRS = {
    ".git",
    ".hg",
    ".svn",
    ".venv",
    "node_modules",
    "__pycache__",
    ".pytest_cache",
    ".mypy_cache",
}


@dataclass
class ExcludeRule:
    """A gitignore-style exclusion pattern from .wordscan.yml."""

    pattern: str
    directory_only: bool
    anchored: bool

    def matches(self, rel_path: str, is_dir: bool) -> bool:
        if self.directory_only and not is_dir:
            return False
        if self.anchored:
            return fnmatchcase(rel_path, self.pattern)
        return any(fnmatchcase(part, self.pattern) for part in rel_path.split("/"))


def _build_rule(pattern: str) -> ExcludeRule | None:
    pattern = pattern.strip()
    if not pattern:
        return None
    directory_only = pattern.endswith("/")
    pattern = pattern.rstrip("/")
    anchored = pattern.startswith("/") or "/" in pattern
    pattern = pattern.lstrip("/")
    if not pattern:
        return None
    return ExcludeRule(pattern=pattern, directory_only=directory_only, anchored=anchored)


def _is_excluded(rel_path: str, is_dir: bool, rules: Sequence[ExcludeRule]) -> bool:
    return any(rule.matches(rel_path, is_dir) for rule in rules)


def _raise_walk_error(error: OSError) -> None:
    raise error


class FileScanner:
    """Finds files by extension and byte-size bounds.

    A bound of ``0`` disables that bound. Traversal errors propagate: a
    partially walked tree is never returned.
    """

    def __init__(
        self,
        extension: str = ".txt",
        *,
        min_size: int = 0,
        max_size: int = 0,
        exclude_paths: Sequence[str] = (),
    ) -> None:
        self.extension = extension
        self.min_size = min_size
        self.max_size = max_size
        self.rules = [rule for rule in map(_build_rule, exclude_paths) if rule is not None]

    def scan(self, path: str) -> List[str]:
        """Return matching file paths under ``path`` in sorted order."""
        target = Path(path).expanduser()
        if not target.exists():
            raise FileNotFoundError(f"Path not found: {path}")

        if not target.is_dir():
            if self._accepts(target.name, target.stat().st_size):
                return [str(target)]
            return []

        return sorted(str(found) for found in self._iter_files(target))

    def _iter_files(self, root: Path) -> Iterator[Path]:
        for dirpath, dirnames, filenames in os.walk(root, onerror=_raise_walk_error):
            current_dir = Path(dirpath)
            rel_dir = current_dir.relative_to(root).as_posix() if current_dir != root else ""

            kept = []
            for name in dirnames:
                rel_path = f"{rel_dir}/{name}" if rel_dir else name
                if name in _EXCLUDED_DIRS or _is_excluded(rel_path, True, self.rules):
                    continue
                kept.append(name)
            dirnames[:] = kept

            for filename in filenames:
                rel_path = f"{rel_dir}/{filename}" if rel_dir else filename
                if _is_excluded(rel_path, False, self.rules):
                    continue
                candidate = current_dir / filename
                if not candidate.is_file():
                    continue
                if self._accepts(filename, candidate.stat().st_size):
                    yield candidate

    def _accepts(self, name: str, size: int) -> bool:
        if not name.endswith(self.extension):
            return False
        if self.min_size > 0 and size < self.min_size:
            return False
        if self.max_size > 0 and size > self.max_size:
            return False
        return True


__all__ = ["ExcludeRule", "FileScanner"]
