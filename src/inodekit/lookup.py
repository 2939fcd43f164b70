"""Record lookup by name: linear scan and binary search."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Final, Sequence

if TYPE_CHECKING:
    from inodekit.params import ParameterRecord

logger = logging.getLogger(__name__)

NOT_FOUND: Final[int] = -1


def name_key(name: str) -> bytes:
    """Return the byte string record names are ordered by.

    Undecodable bytes kept by ``surrogateescape`` map back to themselves.
    Other lone surrogates are encoded with ``surrogatepass``.
    """
    try:
        return name.encode("utf-8", "surrogateescape")
    except UnicodeEncodeError:
        return name.encode("utf-8", "surrogatepass")


def linear_search(records: Sequence[ParameterRecord], name: str) -> int:
    """Return the index of the first record named *name*.

    Works on any order.

    Returns:
        int: Index of the match, or ``NOT_FOUND``.
    """
    for index, record in enumerate(records):
        if record.name == name:
            return index
    return NOT_FOUND


def binary_search(records: Sequence[ParameterRecord], name: str) -> int:
    """Return the index of a record named *name* in a name-sorted sequence.

    The sequence must be sorted ascending by name; on unsorted input the
    result is unspecified.

    Returns:
        int: Index of the match, or ``NOT_FOUND``.
    """
    if getattr(records, "is_sorted", True) is False:
        logger.debug("binary_search called on an unsorted sequence")

    needle = name_key(name)
    low = 0
    high = len(records) - 1
    while low <= high:
        middle = (low + high) // 2
        current = name_key(records[middle].name)
        if current == needle:
            # distinct names can share a key across the two encodings
            return middle if records[middle].name == name else NOT_FOUND
        if current < needle:
            low = middle + 1
        else:
            high = middle - 1
    return NOT_FOUND
