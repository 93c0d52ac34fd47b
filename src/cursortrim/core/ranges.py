"""Structured helpers for representing line/column positions and spans."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from functools import total_ordering
from typing import Any, Iterator


def _coerce_index(value: Any, owner: str, label: str) -> int:
    if isinstance(value, bool):
        raise ValueError(f"{owner} {label} must be an integer")
    try:
        number = int(value)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"{owner} {label} must be an integer") from exc
    if number < 0:
        return 0
    return number


@total_ordering
@dataclass(slots=True, frozen=True)
class Position(Sequence[int]):
    """Zero-based location between two characters on a line."""

    line: int
    column: int

    def __post_init__(self) -> None:
        object.__setattr__(self, "line", _coerce_index(self.line, "Position", "line"))
        object.__setattr__(self, "column", _coerce_index(self.column, "Position", "column"))

    def __len__(self) -> int:
        return 2

    def __getitem__(self, index: int | slice) -> int | tuple[int, ...]:
        if isinstance(index, slice):
            return self.to_tuple()[index]
        if index == 0:
            return self.line
        if index == 1:
            return self.column
        raise IndexError("Position index out of range")

    def __iter__(self) -> Iterator[int]:
        yield self.line
        yield self.column

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Position):
            return NotImplemented
        return self.to_tuple() < other.to_tuple()

    def to_tuple(self) -> tuple[int, int]:
        """Return the position as a ``(line, column)`` tuple."""

        return (self.line, self.column)

    def to_dict(self) -> dict[str, int]:
        return {"line": self.line, "column": self.column}

    def with_column(self, column: int) -> Position:
        """Return a position on the same line at ``column``."""

        return Position(self.line, column)

    @classmethod
    def from_value(cls, value: Any) -> Position:
        """Coerce ``value`` into a :class:`Position`."""

        if isinstance(value, Position):
            return value
        if isinstance(value, Mapping):
            line = value.get("line")
            column = value.get("column", value.get("character"))
            if line is None or column is None:
                raise ValueError("Position mappings require line and column keys")
            return cls(line, column)
        if isinstance(value, Sequence) and not isinstance(value, (str, bytes)):
            seq = list(value)
            if len(seq) != 2:
                raise ValueError("Position sequences must have exactly two entries")
            return cls(seq[0], seq[1])
        line = getattr(value, "line", None)
        column = getattr(value, "column", getattr(value, "character", None))
        if line is not None and column is not None:
            return cls(line, column)
        raise TypeError("Unsupported Position input")


@dataclass(slots=True, frozen=True)
class Span:
    """Half-open interval ``[start, end)`` of text between two positions.

    Reversed endpoints are swapped so ``start <= end`` always holds. Spans
    produced by the whitespace locator never cross a line boundary, which is
    what :meth:`intersects` and :meth:`union` rely on.
    """

    start: Position
    end: Position

    def __post_init__(self) -> None:
        start = Position.from_value(self.start)
        end = Position.from_value(self.end)
        if end < start:
            start, end = end, start
        object.__setattr__(self, "start", start)
        object.__setattr__(self, "end", end)

    @classmethod
    def on_line(cls, line: int, start_column: int, end_column: int) -> Span:
        """Build a single-line span covering ``[start_column, end_column)``."""

        return cls(Position(line, start_column), Position(line, end_column))

    @property
    def is_empty(self) -> bool:
        """Return ``True`` when the span collapses to a caret."""

        return self.start == self.end

    @property
    def is_single_line(self) -> bool:
        return self.start.line == self.end.line

    @property
    def line(self) -> int:
        """Return the line of a single-line span."""

        if not self.is_single_line:
            raise ValueError("Span covers more than one line")
        return self.start.line

    @property
    def length(self) -> int:
        """Return the column width of a single-line span."""

        return self.end.column - self.start.column if self.is_single_line else 0

    def intersects(self, other: Span) -> bool:
        """Return ``True`` when both spans share at least one position.

        Boundaries are inclusive, so spans that merely touch intersect. Spans
        on different lines never intersect.
        """

        if not (self.is_single_line and other.is_single_line):
            return False
        if self.start.line != other.start.line:
            return False
        return self.start.column <= other.end.column and other.start.column <= self.end.column

    def union(self, other: Span) -> Span:
        """Return the smallest span covering both single-line spans."""

        if not (self.is_single_line and other.is_single_line) or self.line != other.line:
            raise ValueError("Cannot union spans on different lines")
        return Span(min(self.start, other.start), max(self.end, other.end))

    def to_tuple(self) -> tuple[int, int, int, int]:
        """Return ``(start_line, start_column, end_line, end_column)``."""

        return (*self.start.to_tuple(), *self.end.to_tuple())

    def to_dict(self) -> dict[str, dict[str, int]]:
        return {"start": self.start.to_dict(), "end": self.end.to_dict()}


__all__ = ["Position", "Span"]
