"""Caller-owned arena tying produced paths and records to one lifetime."""

from __future__ import annotations

import logging
from collections import Counter
from typing import TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class Arena:
    """Allocation region whose contents are released together.

    Walker and parser results register every path and record they
    produce here. Nothing is freed individually; ``reset()`` (or leaving
    a ``with`` block) drops all registrations at once.

    Not thread-safe: a single writer owns the arena at a time.
    """

    def __init__(self, name: str = "arena") -> None:
        self.name = name
        self._items: list[object] = []
        self._tags: list[str] = []

    def allocate(self, value: T, tag: str = "") -> T:
        """Register *value* for the lifetime of the arena.

        Args:
            value: Object to keep alive.
            tag: Diagnostic label, not used for correctness.

        Returns:
            The same object, for inline use.
        """
        self._items.append(value)
        self._tags.append(tag)
        return value

    def tag_counts(self) -> dict[str, int]:
        """Return how many allocations were made under each tag."""
        return dict(Counter(self._tags))

    def reset(self) -> None:
        """Release everything allocated so far."""
        logger.debug("Releasing %d allocations from %s", len(self._items), self.name)
        self._items.clear()
        self._tags.clear()

    def __len__(self) -> int:
        return len(self._items)

    def __enter__(self) -> Arena:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.reset()
