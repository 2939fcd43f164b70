"""Inode tree walker: flatten a filesystem subtree into ordered path strings."""

from __future__ import annotations

import enum
import logging
import os
from dataclasses import dataclass, field
from typing import Iterator

from inodekit.arena import Arena
from inodekit.filter import ChainFilter, EntryFilter, HiddenFilter
from inodekit.gitignore import GitignoreMatcher

logger = logging.getLogger(__name__)

ARENA_TAG = "InodeList"


class WalkStatus(enum.Enum):
    """Outcome of a walk, separating "no data" from "no such path"."""

    OK = "ok"
    EMPTY = "empty"
    NOT_FOUND = "not_found"
    UNREADABLE = "unreadable"


@dataclass(frozen=True, slots=True)
class WalkOptions:
    """Options controlling walker behavior.

    Attributes:
        include_hidden: Whether names starting with ``.`` are reported.
            Only the ``.`` and ``..`` pseudo-entries are always skipped.
        follow_symlinks: Whether a symlink to a directory counts as a
            directory (and is descended into when recursing).
        gitignore: Whether to skip entries matched by the root's
            ``.gitignore``.
    """

    include_hidden: bool = True
    follow_symlinks: bool = True
    gitignore: bool = False


@dataclass(slots=True)
class InodeList:
    """Ordered inode paths produced by :func:`walk`.

    Attributes:
        paths: Path strings in walk order.
        status: How the walk ended.
        skipped: Nested directories that could not be opened.
    """

    paths: list[str] = field(default_factory=list)
    status: WalkStatus = WalkStatus.OK
    skipped: list[str] = field(default_factory=list)

    @property
    def count(self) -> int:
        return len(self.paths)

    def __len__(self) -> int:
        return len(self.paths)

    def __iter__(self) -> Iterator[str]:
        return iter(self.paths)

    def __getitem__(self, index: int) -> str:
        return self.paths[index]


@dataclass(slots=True)
class _WalkContext:
    """Accumulator threaded through the recursive directory walk."""

    recursive: bool
    options: WalkOptions
    arena: Arena | None
    entry_filter: EntryFilter | None
    gitignore: GitignoreMatcher | None
    paths: list[str] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)
    # (st_dev, st_ino) of directories on the current descent
    active: set[tuple[int, int]] = field(default_factory=set)

    def append(self, path: str) -> None:
        if self.arena is not None:
            self.arena.allocate(path, ARENA_TAG)
        self.paths.append(path)


@dataclass(frozen=True, slots=True)
class _Child:
    path: str
    is_dir: bool
    key: tuple[int, int] | None


def _join(directory: str, name: str) -> str:
    if directory.endswith("/"):
        return directory + name
    return directory + "/" + name


def _dir_key(path: str) -> tuple[int, int] | None:
    try:
        st = os.stat(path)
    except OSError:
        return None
    return (st.st_dev, st.st_ino)


def _read_children(directory: str, ctx: _WalkContext) -> list[_Child] | None:
    """List and sort the direct children of *directory*.

    Returns ``None`` when the directory cannot be read. The scandir
    handle is closed before any recursion happens.
    """
    children: list[_Child] = []
    try:
        with os.scandir(directory) as it:
            for dir_entry in it:
                name = dir_entry.name
                if name in (".", ".."):
                    continue
                try:
                    is_dir = dir_entry.is_dir(
                        follow_symlinks=ctx.options.follow_symlinks
                    )
                except OSError:
                    logger.debug("Cannot stat: %s", dir_entry.path)
                    is_dir = False

                if ctx.entry_filter is not None and ctx.entry_filter.should_exclude(
                    name, is_dir
                ):
                    continue

                path = _join(directory, name)
                if ctx.gitignore is not None and ctx.gitignore.is_ignored(path, is_dir):
                    continue

                children.append(
                    _Child(
                        path=path,
                        is_dir=is_dir,
                        key=_dir_key(path) if is_dir and ctx.recursive else None,
                    )
                )
    except OSError as exc:
        logger.debug("Cannot open directory %s: %s", directory, exc)
        return None

    # Byte-wise order of the full path, as the filesystem stores it
    children.sort(key=lambda child: os.fsencode(child.path))
    return children


def _walk_directory(directory: str, ctx: _WalkContext) -> bool:
    """Append the subtree of *directory* to ``ctx.paths`` in pre-order.

    Returns:
        bool: ``False`` when the directory could not be opened.
    """
    children = _read_children(directory, ctx)
    if children is None:
        return False

    for child in children:
        ctx.append(child.path)
        if not (ctx.recursive and child.is_dir):
            continue

        if child.key is not None and child.key in ctx.active:
            logger.debug("Not re-entering directory already on the walk: %s", child.path)
            continue

        if child.key is not None:
            ctx.active.add(child.key)
        if not _walk_directory(child.path, ctx):
            ctx.skipped.append(child.path)
        if child.key is not None:
            ctx.active.discard(child.key)

    return True


def walk(
    root: str | os.PathLike[str],
    recursive: bool = False,
    *,
    arena: Arena | None = None,
    options: WalkOptions | None = None,
    entry_filter: EntryFilter | None = None,
) -> InodeList:
    """Enumerate *root* into a flat, ordered list of inode paths.

    A directory yields its entries (everything except ``.`` and ``..``)
    as ``root + "/" + name``, sorted per directory. With *recursive*,
    each subdirectory's contents follow it immediately, before its
    later siblings (depth-first pre-order). A regular file yields
    itself. Anything else yields an empty list with status
    ``NOT_FOUND``.

    Directories that cannot be opened contribute no entries; the walk
    carries on and records them in ``InodeList.skipped``.

    Args:
        root: Directory or file to enumerate. Kept as given, not resolved.
        recursive: Whether to descend into subdirectories.
        arena: Optional arena owning the produced path strings.
        options: Walker options. Defaults to ``WalkOptions()``.
        entry_filter: Optional exclude filter implementation.

    Returns:
        InodeList: Paths plus the walk status.
    """
    root_path = os.fspath(root)
    walk_options = options or WalkOptions()

    if os.path.isdir(root_path):
        active_filter = entry_filter
        if not walk_options.include_hidden:
            active_filter = (
                ChainFilter(HiddenFilter(), entry_filter)
                if entry_filter is not None
                else HiddenFilter()
            )

        ctx = _WalkContext(
            recursive=recursive,
            options=walk_options,
            arena=arena,
            entry_filter=active_filter,
            gitignore=GitignoreMatcher.for_root(root_path) if walk_options.gitignore else None,
        )
        root_key = _dir_key(root_path)
        if root_key is not None:
            ctx.active.add(root_key)

        if not _walk_directory(root_path, ctx):
            return InodeList(status=WalkStatus.UNREADABLE)

        status = WalkStatus.OK if ctx.paths else WalkStatus.EMPTY
        logger.debug("Walked %s: %d entries", root_path, len(ctx.paths))
        return InodeList(paths=ctx.paths, status=status, skipped=ctx.skipped)

    if os.path.isfile(root_path):
        if arena is not None:
            arena.allocate(root_path, ARENA_TAG)
        return InodeList(paths=[root_path])

    logger.debug("%s is not a file or a directory", root_path)
    return InodeList(status=WalkStatus.NOT_FOUND)


def count_entries(directory: str | os.PathLike[str]) -> int:
    """Return the number of entries in *directory*, ``0`` if unreadable.

    Hidden entries count; ``.`` and ``..`` do not.
    """
    try:
        with os.scandir(directory) as it:
            return sum(1 for _ in it)
    except OSError:
        logger.debug("Cannot open directory: %s", directory)
        return 0
