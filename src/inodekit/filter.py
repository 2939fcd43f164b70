"""Entry filtering: fnmatch exclusion, hidden names, and filter chaining."""

from __future__ import annotations

from fnmatch import fnmatch
from typing import Protocol


class EntryFilter(Protocol):
    """Protocol for entry filtering.

    Keeps walker logic decoupled from matching strategy.
    """

    def should_exclude(self, name: str, is_dir: bool) -> bool: ...


class PatternFilter:
    """Filter entries whose name matches any fnmatch pattern.

    Implements ``-I PATTERN`` exclusion behavior.
    """

    def __init__(self, patterns: list[str] | None = None) -> None:
        self._patterns: list[str] = list(patterns) if patterns else []

    @property
    def patterns(self) -> list[str]:
        return list(self._patterns)

    def should_exclude(self, name: str, is_dir: bool) -> bool:
        """Return whether an entry should be excluded.

        Args:
            name: Entry name (basename, not full path).
            is_dir: Whether the entry is a directory.

        Returns:
            bool: ``True`` when any configured pattern matches.
        """
        return any(fnmatch(name, pat) for pat in self._patterns)


class HiddenFilter:
    """Exclude names starting with ``.``."""

    def should_exclude(self, name: str, is_dir: bool) -> bool:
        return name.startswith(".")


class ChainFilter:
    """Exclude an entry when any of the wrapped filters excludes it."""

    def __init__(self, *filters: EntryFilter) -> None:
        self._filters = filters

    def should_exclude(self, name: str, is_dir: bool) -> bool:
        return any(f.should_exclude(name, is_dir) for f in self._filters)
