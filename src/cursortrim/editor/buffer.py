"""Buffer contract consumed by the trim command plus an in-memory adapter.

The trim core only needs line-addressed reads, the current selections and an
atomic multi-span delete. :class:`TextBuffer` captures that contract so hosts
(Qt widgets, the command-line front end, tests) can plug in their own buffer.
:class:`InMemoryBuffer` is the reference implementation; it also models undo
grouping so the single-undo-step behaviour of a trim can be exercised without
a live editor.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, Protocol, Sequence, runtime_checkable

from ..core.ranges import Position, Span

LOGGER = logging.getLogger(__name__)


class CursorTrimError(RuntimeError):
    """Base class for errors surfaced by cursortrim."""


class BufferEditError(CursorTrimError):
    """Raised when a buffer rejects an atomic edit."""

    def __init__(self, message: str, *, reason: str = "rejected", span: Span | None = None) -> None:
        super().__init__(message)
        self.reason = reason
        self.span = span

    def details(self) -> dict[str, object]:
        return {
            "reason": self.reason,
            "span": self.span.to_dict() if self.span is not None else None,
        }


class BufferClosedError(BufferEditError):
    """Raised when an edit targets a buffer that is no longer open."""

    def __init__(self, message: str = "Buffer is closed") -> None:
        super().__init__(message, reason="closed")


@dataclass(slots=True, frozen=True)
class Selection:
    """A caret or selection described by its anchor and active positions."""

    anchor: Position
    active: Position

    def __post_init__(self) -> None:
        object.__setattr__(self, "anchor", Position.from_value(self.anchor))
        object.__setattr__(self, "active", Position.from_value(self.active))

    @classmethod
    def caret(cls, line: int, column: int) -> Selection:
        position = Position(line, column)
        return cls(position, position)

    @property
    def start(self) -> Position:
        """Return the position closest to the beginning of the document."""

        return min(self.anchor, self.active)

    @property
    def end(self) -> Position:
        """Return the position closest to the end of the document."""

        return max(self.anchor, self.active)

    @property
    def is_caret(self) -> bool:
        return self.anchor == self.active


@dataclass(slots=True, frozen=True)
class EditOptions:
    """Undo grouping flags accompanying an atomic edit."""

    undo_checkpoint_before: bool = True
    undo_checkpoint_after: bool = True


@runtime_checkable
class TextBuffer(Protocol):
    """Protocol implemented by buffers the trim command can operate on.

    Buffers that group undo steps may also provide ``checkpoint()``; the
    command registry calls it before each command.
    """

    @property
    def line_count(self) -> int:
        ...

    def line_text(self, index: int) -> str:
        ...

    @property
    def selections(self) -> Sequence[Selection]:
        ...

    async def atomic_edit(self, spans: Sequence[Span], options: EditOptions) -> None:
        ...


class EditorHost(Protocol):
    """Protocol for hosts exposing the buffer that currently has focus."""

    def active_buffer(self) -> TextBuffer | None:
        ...


@dataclass(slots=True)
class StaticEditorHost:
    """Host that always reports the same buffer (or none)."""

    buffer: TextBuffer | None = None

    def active_buffer(self) -> TextBuffer | None:
        return self.buffer


def validate_delete_spans(buffer: TextBuffer, spans: Iterable[Span]) -> list[Span]:
    """Check ``spans`` against ``buffer`` and return them in document order.

    Every span must sit on a single existing line, stay within that line and
    not overlap another span. Touching spans are accepted.
    """

    ordered = sorted(spans, key=lambda span: (span.start, span.end))
    line_count = buffer.line_count
    previous: Span | None = None
    for span in ordered:
        if not span.is_single_line:
            raise BufferEditError("Delete spans must stay on one line", reason="multi_line", span=span)
        if span.line >= line_count:
            raise BufferEditError(
                f"Line {span.line} is outside the buffer ({line_count} lines)",
                reason="out_of_range",
                span=span,
            )
        if span.end.column > len(buffer.line_text(span.line)):
            raise BufferEditError(
                f"Column {span.end.column} is past the end of line {span.line}",
                reason="out_of_range",
                span=span,
            )
        if previous is not None and previous.line == span.line and span.start.column < previous.end.column:
            raise BufferEditError("Delete spans overlap", reason="overlap", span=span)
        previous = span
    return ordered


def shift_column(column: int, deleted: Sequence[Span]) -> int:
    """Return where ``column`` lands once ``deleted`` spans on its line are removed."""

    removed = 0
    for span in deleted:
        if span.start.column >= column:
            continue
        removed += min(column, span.end.column) - span.start.column
    return column - removed


@dataclass(slots=True)
class _UndoEntry:
    """Buffer snapshot restored by undo/redo."""

    lines: tuple[str, ...]
    selections: tuple[Selection, ...]


class InMemoryBuffer:
    """List-of-lines buffer implementing :class:`TextBuffer`."""

    MAX_HISTORY = 50

    def __init__(
        self,
        lines: Sequence[str] = ("",),
        selections: Iterable[Selection] | None = None,
    ) -> None:
        self._lines: list[str] = list(lines) or [""]
        if selections is None:
            selections = (Selection.caret(0, 0),)
        self._selections: tuple[Selection, ...] = tuple(selections)
        self._undo_stack: list[_UndoEntry] = []
        self._redo_stack: list[_UndoEntry] = []
        self._group_open = False
        self._closed = False
        self.version = 1

    @classmethod
    def from_text(cls, text: str, selections: Iterable[Selection] | None = None) -> InMemoryBuffer:
        """Build a buffer from ``text`` split on ``\\n``."""

        return cls(text.split("\n"), selections)

    # ------------------------------------------------------------------
    # Read access
    # ------------------------------------------------------------------
    @property
    def text(self) -> str:
        return "\n".join(self._lines)

    @property
    def line_count(self) -> int:
        return len(self._lines)

    def line_text(self, index: int) -> str:
        return self._lines[index]

    @property
    def selections(self) -> tuple[Selection, ...]:
        return self._selections

    def set_selections(self, selections: Iterable[Selection]) -> None:
        self._selections = tuple(selections)

    @property
    def closed(self) -> bool:
        return self._closed

    def close(self) -> None:
        """Mark the buffer closed; later edits raise :class:`BufferClosedError`."""

        self._closed = True

    # ------------------------------------------------------------------
    # Editing
    # ------------------------------------------------------------------
    async def atomic_edit(self, spans: Sequence[Span], options: EditOptions | None = None) -> None:
        """Delete every span in one all-or-nothing step."""

        self.apply_deletions(spans, options or EditOptions())

    def apply_deletions(self, spans: Sequence[Span], options: EditOptions) -> None:
        """Synchronous body of :meth:`atomic_edit`."""

        if self._closed:
            raise BufferClosedError()
        ordered = validate_delete_spans(self, [span for span in spans if not span.is_empty])
        if options.undo_checkpoint_before:
            self._group_open = False
        if not ordered:
            if options.undo_checkpoint_after:
                self._group_open = False
            return

        self._record_undo()
        by_line: dict[int, list[Span]] = {}
        for span in ordered:
            by_line.setdefault(span.line, []).append(span)
        for line, line_spans in by_line.items():
            text = self._lines[line]
            for span in reversed(line_spans):
                text = text[: span.start.column] + text[span.end.column :]
            self._lines[line] = text
        self._selections = tuple(self._shift_selection(sel, by_line) for sel in self._selections)
        self._group_open = not options.undo_checkpoint_after
        self.version += 1
        LOGGER.debug("Deleted %d span(s) across %d line(s)", len(ordered), len(by_line))

    def checkpoint(self) -> None:
        """Close the open undo group so the next edit starts a new one."""

        self._group_open = False

    # ------------------------------------------------------------------
    # Undo/redo
    # ------------------------------------------------------------------
    @property
    def can_undo(self) -> bool:
        return bool(self._undo_stack)

    @property
    def can_redo(self) -> bool:
        return bool(self._redo_stack)

    def undo(self) -> bool:
        """Revert the most recent undo group. Returns ``False`` when there is none."""

        if not self._undo_stack:
            return False
        entry = self._undo_stack.pop()
        self._redo_stack.append(self._snapshot())
        self._restore(entry)
        return True

    def redo(self) -> bool:
        """Reapply the most recently undone group."""

        if not self._redo_stack:
            return False
        entry = self._redo_stack.pop()
        self._undo_stack.append(self._snapshot())
        self._restore(entry)
        return True

    def _snapshot(self) -> _UndoEntry:
        return _UndoEntry(lines=tuple(self._lines), selections=self._selections)

    def _restore(self, entry: _UndoEntry) -> None:
        self._lines = list(entry.lines)
        self._selections = entry.selections
        self._group_open = False
        self.version += 1

    def _record_undo(self) -> None:
        if not self._group_open:
            self._undo_stack.append(self._snapshot())
            if len(self._undo_stack) > self.MAX_HISTORY:
                self._undo_stack.pop(0)
        self._redo_stack.clear()

    @staticmethod
    def _shift_selection(selection: Selection, by_line: dict[int, list[Span]]) -> Selection:
        def shift(position: Position) -> Position:
            deleted = by_line.get(position.line)
            if not deleted:
                return position
            return position.with_column(shift_column(position.column, deleted))

        return Selection(shift(selection.anchor), shift(selection.active))


__all__ = [
    "BufferClosedError",
    "BufferEditError",
    "CursorTrimError",
    "EditOptions",
    "EditorHost",
    "InMemoryBuffer",
    "Selection",
    "StaticEditorHost",
    "TextBuffer",
    "shift_column",
    "validate_delete_spans",
]
