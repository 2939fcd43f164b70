"""Parameter files: ``name=value`` lines parsed into sorted records.

The parser is a per-character state machine driven by three markers:

* ``first_char``: first significant character of the line. ``#`` makes
  the line a comment.
* ``separator_char``: set by the first ``=`` after ``first_char``.
* ``parameter_char``: first character after the separator; the value
  starts here.

Spaces and tabs are not significant anywhere outside comment lines, so
``baz = qux `` yields ``baz -> qux``. A consequence is that values cannot
carry whitespace at all. Names and values are capped at
``ParserLimits.max_parameter_length`` characters; the excess is dropped.
"""

from __future__ import annotations

import enum
import logging
import os
from dataclasses import dataclass
from typing import Final, Iterable, Iterator

from inodekit.arena import Arena
from inodekit.lookup import NOT_FOUND, binary_search, name_key

logger = logging.getLogger(__name__)

MAX_LINE_LENGTH: Final[int] = 1024
MAX_PARAMETER_LENGTH: Final[int] = 256

ARENA_TAG = "parameters"

_COMMENT = "#"
_SEPARATOR = "="
_SENTINEL = "\0"
_BLANKS = (" ", "\t")
_TERMINATORS = ("\r", "\n")


@dataclass(frozen=True, slots=True)
class ParserLimits:
    """Fixed capacities of the parser.

    Attributes:
        max_line_length: Characters kept per line; the rest is discarded.
        max_parameter_length: Characters kept per name and per value.
    """

    max_line_length: int = MAX_LINE_LENGTH
    max_parameter_length: int = MAX_PARAMETER_LENGTH

    def __post_init__(self) -> None:
        if self.max_line_length < 1:
            raise ValueError("max_line_length must be a positive integer")
        if self.max_parameter_length < 1:
            raise ValueError("max_parameter_length must be a positive integer")


@dataclass(frozen=True, slots=True)
class ParameterRecord:
    """One ``name=value`` pair read from a parameter file."""

    name: str
    value: str


class ParameterRecordSequence:
    """Growable sequence of records with a sortedness flag.

    Appending keeps the flag only if the new record does not break the
    ascending name order; :meth:`sort_by_name` re-establishes it.
    """

    def __init__(self, records: Iterable[ParameterRecord] = ()) -> None:
        self._records: list[ParameterRecord] = []
        self._sorted = True
        for record in records:
            self.push_back(record)

    def push_back(self, record: ParameterRecord) -> None:
        if self._records and name_key(self._records[-1].name) > name_key(record.name):
            self._sorted = False
        self._records.append(record)

    def sort_by_name(self) -> None:
        """Sort records ascending by name (stable, byte-wise)."""
        if not self._sorted:
            self._records.sort(key=lambda record: name_key(record.name))
        self._sorted = True

    def find(self, name: str) -> ParameterRecord | None:
        """Binary-search *name*, sorting first if needed."""
        self.sort_by_name()
        index = binary_search(self, name)
        if index == NOT_FOUND:
            return None
        return self._records[index]

    @property
    def is_sorted(self) -> bool:
        return self._sorted

    @property
    def count(self) -> int:
        return len(self._records)

    @property
    def names(self) -> list[str]:
        return [record.name for record in self._records]

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[ParameterRecord]:
        return iter(self._records)

    def __getitem__(self, index: int) -> ParameterRecord:
        return self._records[index]

    def __repr__(self) -> str:
        return f"ParameterRecordSequence({self._records!r})"


class ParseStatus(enum.Enum):
    """Outcome of a parse, separating "no records" from "unreadable"."""

    OK = "ok"
    EMPTY = "empty"
    UNREADABLE = "unreadable"


@dataclass(slots=True)
class ParseResult:
    """Records parsed from one input, plus how the parse ended.

    Attributes:
        records: Records sorted by name.
        status: Parse outcome.
        error: Reason the input could not be read, if any.
    """

    records: ParameterRecordSequence
    status: ParseStatus
    error: str | None = None

    def get(self, name: str, default: str | None = None) -> str | None:
        record = self.records.find(name)
        if record is None:
            return default
        return record.value

    def __len__(self) -> int:
        return len(self.records)


def scan_line(line: str, limits: ParserLimits | None = None) -> ParameterRecord | None:
    """Run the state machine over one line.

    Args:
        line: Line text; a trailing newline is allowed. Scanning stops at
            an embedded NUL.
        limits: Parser capacities. Defaults to ``ParserLimits()``.

    Returns:
        The record when the line holds a name, a ``=`` and at least one
        value character, otherwise ``None``.
    """
    cap = (limits or ParserLimits()).max_parameter_length
    first_char = ""
    separator_char = ""
    parameter_char = ""
    name: list[str] = []
    value: list[str] = []

    for c in line + _SENTINEL:
        if (c in _BLANKS and first_char != _COMMENT) or c in _TERMINATORS:
            continue
        if c == _SENTINEL:
            break

        if not first_char:
            first_char = c
        elif not separator_char and c == _SEPARATOR:
            separator_char = c
        elif separator_char and not parameter_char:
            parameter_char = c

        if first_char == _COMMENT:
            continue
        if not separator_char:
            if len(name) < cap:
                name.append(c)
        elif parameter_char:
            if len(value) < cap:
                value.append(c)

    if (
        first_char
        and first_char not in (_COMMENT, _SEPARATOR)
        and separator_char
        and parameter_char
    ):
        return ParameterRecord(name="".join(name), value="".join(value))
    return None


def _parse_lines(
    lines: Iterable[str],
    limits: ParserLimits,
    arena: Arena | None,
) -> ParameterRecordSequence:
    records = ParameterRecordSequence()
    for line in lines:
        record = scan_line(line[: limits.max_line_length], limits)
        if record is None:
            continue
        if arena is not None:
            arena.allocate(record, ARENA_TAG)
        records.push_back(record)
    records.sort_by_name()
    return records


def _result(records: ParameterRecordSequence) -> ParseResult:
    status = ParseStatus.OK if len(records) else ParseStatus.EMPTY
    return ParseResult(records=records, status=status)


def parse_parameters_text(
    text: str,
    *,
    limits: ParserLimits | None = None,
    arena: Arena | None = None,
) -> ParseResult:
    """Parse parameter lines held in memory.

    Lines are split on ``\\n`` only; ``\\r`` is treated as insignificant
    content, so CRLF input parses the same as LF input.
    """
    return _result(_parse_lines(text.split("\n"), limits or ParserLimits(), arena))


def parse_parameters(
    path: str | os.PathLike[str],
    *,
    limits: ParserLimits | None = None,
    arena: Arena | None = None,
) -> ParseResult:
    """Parse a parameter file into records sorted by name.

    Bytes that are not valid UTF-8 are kept through ``surrogateescape``.
    A file that cannot be opened or read yields no records and status
    ``UNREADABLE``; nothing is raised.

    Args:
        path: Parameter file to read.
        limits: Parser capacities. Defaults to ``ParserLimits()``.
        arena: Optional arena owning the produced records.

    Returns:
        ParseResult: Sorted records plus the parse status.
    """
    parser_limits = limits or ParserLimits()
    try:
        with open(path, "rb") as fh:
            lines = [raw.decode("utf-8", "surrogateescape") for raw in fh]
    except OSError as exc:
        logger.warning("Cannot read parameter file %s: %s", path, exc)
        return ParseResult(
            records=ParameterRecordSequence(),
            status=ParseStatus.UNREADABLE,
            error=str(exc),
        )

    records = _parse_lines(lines, parser_limits, arena)
    logger.debug("Parsed %d parameters from %s", len(records), path)
    return _result(records)
