"""Locate runs of blanks immediately around a cursor position."""

from __future__ import annotations

from ..core.ranges import Position, Span
from .buffer import Selection, TextBuffer

_BLANKS = frozenset(" \t")


def leading_whitespace_span(buffer: TextBuffer, position: Position) -> Span:
    """Return the run of spaces/tabs ending at ``position``.

    The scan stops at the start of the line; it never reaches the previous
    line. The span is empty when no blank precedes ``position``.
    """

    line = position.line
    text = buffer.line_text(line)
    end_char = position.column
    start_char = end_char
    while start_char > 0 and text[start_char - 1] in _BLANKS:
        start_char -= 1
    return Span.on_line(line, start_char, end_char)


def trailing_whitespace_span(buffer: TextBuffer, position: Position) -> Span:
    """Return the run of spaces/tabs starting at ``position``."""

    line = position.line
    text = buffer.line_text(line)
    start_char = position.column
    end_char = start_char
    while end_char < len(text) and text[end_char] in _BLANKS:
        end_char += 1
    return Span.on_line(line, start_char, end_char)


def selection_leading_span(buffer: TextBuffer, selection: Selection) -> Span:
    return leading_whitespace_span(buffer, selection.start)


def selection_trailing_span(buffer: TextBuffer, selection: Selection) -> Span:
    return trailing_whitespace_span(buffer, selection.end)


__all__ = [
    "leading_whitespace_span",
    "selection_leading_span",
    "selection_trailing_span",
    "trailing_whitespace_span",
]
