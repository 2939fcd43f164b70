"""Single-call filesystem queries used alongside the walker.

Each helper returns a plain value or a sentinel (``None``, ``0``, ``-1``)
instead of raising, so callers can check paths freely.
"""

from __future__ import annotations

import grp
import logging
import os
import pwd
import stat
from dataclasses import dataclass
from typing import Final

logger = logging.getLogger(__name__)

StrPath = str | os.PathLike[str]

PERMISSION_NONE: Final[int] = 0
PERMISSION_R: Final[int] = 1
PERMISSION_W: Final[int] = 2
PERMISSION_RW: Final[int] = PERMISSION_R | PERMISSION_W


def is_directory(path: StrPath) -> bool:
    return os.path.isdir(path)


def is_file(path: StrPath) -> bool:
    """Return whether *path* is a regular file that can be opened for reading."""
    if not os.path.isfile(path):
        return False
    try:
        with open(path, "rb"):
            pass
    except OSError:
        return False
    return True


def get_file_size(path: StrPath) -> int:
    """Return the size of a regular file in bytes, ``0`` otherwise."""
    if not is_file(path):
        return 0
    return os.path.getsize(path)


def read_file_text(path: StrPath) -> str | None:
    """Return the whole content of *path*, ``None`` if it cannot be read."""
    try:
        with open(path, "rb") as fh:
            return fh.read().decode("utf-8", "surrogateescape")
    except OSError as exc:
        logger.debug("Cannot read %s: %s", path, exc)
        return None


def filename_from_path(path: str) -> str:
    """Return the part after the last ``/`` or ``\\``."""
    cut = max(path.rfind("/"), path.rfind("\\"))
    return path[cut + 1:]


def parent_directory(path: str) -> str:
    """Drop the last path component.

    ``/a/b`` gives ``/a`` and ``/a`` gives ``/``. A path without any
    ``/`` is returned unchanged.
    """
    cut = path.rfind("/")
    if cut == -1:
        return path
    if cut == 0:
        return "/"
    return path[:cut]


def permissions_string(path: StrPath) -> str | None:
    """Return an ``ls -l`` style mode string such as ``drwxr-xr-x``.

    The type letter is ``d`` for directories, ``l`` for symlinks and
    ``-`` otherwise. Returns ``None`` when *path* cannot be stat'ed.
    """
    try:
        st = os.stat(path)
    except OSError:
        return None

    mode = st.st_mode
    kind = "d" if stat.S_ISDIR(mode) else "-"
    if os.path.islink(path):
        kind = "l"

    bits = (
        (stat.S_IRUSR, "r"), (stat.S_IWUSR, "w"), (stat.S_IXUSR, "x"),
        (stat.S_IRGRP, "r"), (stat.S_IWGRP, "w"), (stat.S_IXGRP, "x"),
        (stat.S_IROTH, "r"), (stat.S_IWOTH, "w"), (stat.S_IXOTH, "x"),
    )
    return kind + "".join(letter if mode & bit else "-" for bit, letter in bits)


def owner_name(path: StrPath) -> str | None:
    try:
        return pwd.getpwuid(os.stat(path).st_uid).pw_name
    except (OSError, KeyError):
        return None


def group_name(path: StrPath) -> str | None:
    try:
        return grp.getgrgid(os.stat(path).st_gid).gr_name
    except (OSError, KeyError):
        return None


def uid_for(user: str) -> int:
    """Return the uid of *user*, ``-1`` if there is no such user."""
    try:
        return pwd.getpwnam(user).pw_uid
    except KeyError:
        return -1


def gid_for(group: str) -> int:
    """Return the gid of *group*, ``-1`` if there is no such group."""
    try:
        return grp.getgrnam(group).gr_gid
    except KeyError:
        return -1


def check_user_permissions(path: StrPath, uid: int, gid: int) -> int:
    """Return the ``PERMISSION_*`` access bits *uid*/*gid* have on *path*.

    Root (uid or gid ``0``) always gets read/write without touching the
    filesystem. The owner or a member of the owning group gets
    read/write. Anyone else gets the "other" read and write bits.

    Returns:
        int: A ``PERMISSION_*`` bitmask, or ``-1`` when *path* cannot be
        stat'ed.
    """
    if uid == 0 or gid == 0:
        return PERMISSION_RW

    try:
        st = os.stat(path)
    except OSError:
        return -1

    if st.st_uid == uid or st.st_gid == gid:
        return PERMISSION_RW

    permissions = PERMISSION_NONE
    if st.st_mode & stat.S_IROTH:
        permissions |= PERMISSION_R
    if st.st_mode & stat.S_IWOTH:
        permissions |= PERMISSION_W
    return permissions


def check_parent_permissions(path: str, uid: int, gid: int) -> int:
    """Like :func:`check_user_permissions`, for the directory holding *path*.

    A path with no ``/`` has no parent to check and gives ``-1``.
    """
    if "/" not in path:
        return -1
    return check_user_permissions(parent_directory(path), uid, gid)


def last_modified(path: StrPath) -> int:
    """Return the mtime in whole seconds since the epoch, ``0`` on error."""
    try:
        return int(os.stat(path).st_mtime)
    except OSError:
        return 0


def available_space(path: StrPath) -> int:
    """Return bytes available to unprivileged users, ``-1`` on error."""
    try:
        st = os.statvfs(path)
    except OSError:
        return -1
    return st.f_bsize * st.f_bavail


@dataclass(frozen=True, slots=True)
class InodeInfo:
    """Summary of one inode, as printed by ``inodekit info``."""

    path: str
    permissions: str
    owner: str | None
    group: str | None
    size: int
    modified: int

    def format(self) -> str:
        owner = self.owner if self.owner is not None else "?"
        group = self.group if self.group is not None else "?"
        return f"{self.permissions} {owner} {group} {self.size} {self.modified} {self.path}"


def describe(path: StrPath) -> InodeInfo | None:
    """Collect :class:`InodeInfo` for *path*, ``None`` if it does not exist."""
    permissions = permissions_string(path)
    if permissions is None:
        return None
    return InodeInfo(
        path=os.fspath(path),
        permissions=permissions,
        owner=owner_name(path),
        group=group_name(path),
        size=get_file_size(path),
        modified=last_modified(path),
    )
