"""Gitignore integration — match walk entries against the root .gitignore."""

from __future__ import annotations

import logging
import os

from pathspec import GitIgnoreSpec

logger = logging.getLogger(__name__)


def load_gitignore_spec(root: str | os.PathLike[str]) -> GitIgnoreSpec | None:
    """Load .gitignore patterns from *root* directory.

    Args:
        root: Directory containing the ``.gitignore`` file.

    Returns:
        A compiled spec when a ``.gitignore`` exists and is readable,
        otherwise ``None``.
    """
    gitignore_path = os.path.join(os.fspath(root), ".gitignore")
    try:
        with open(gitignore_path, encoding="utf-8") as fh:
            lines = fh.read().splitlines()
    except OSError:
        logger.debug("Cannot read .gitignore: %s", gitignore_path)
        return None
    return GitIgnoreSpec.from_lines(lines)


class GitignoreMatcher:
    """Match inode paths produced under *root* against a gitignore spec.

    Paths are matched relative to the root, with a trailing ``/`` for
    directories so directory-only patterns (``dist/``) apply.
    """

    def __init__(self, root: str, spec: GitIgnoreSpec) -> None:
        self._prefix = root if root.endswith("/") else root + "/"
        self._spec = spec

    @classmethod
    def for_root(cls, root: str) -> GitignoreMatcher | None:
        spec = load_gitignore_spec(root)
        if spec is None:
            return None
        return cls(root, spec)

    def is_ignored(self, path: str, is_dir: bool) -> bool:
        if not path.startswith(self._prefix):
            return False
        relative = path[len(self._prefix):]
        if is_dir:
            relative += "/"
        return self._spec.match_file(relative)
