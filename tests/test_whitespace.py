"""Tests for locating whitespace runs around cursors."""

from __future__ import annotations

from cursortrim.core.ranges import Position, Span
from cursortrim.editor.buffer import InMemoryBuffer, Selection
from cursortrim.editor.whitespace import (
    leading_whitespace_span,
    selection_leading_span,
    selection_trailing_span,
    trailing_whitespace_span,
)


def test_leading_span_covers_blanks_before_cursor() -> None:
    buffer = InMemoryBuffer.from_text("  ab")

    assert leading_whitespace_span(buffer, Position(0, 2)) == Span.on_line(0, 0, 2)
    assert trailing_whitespace_span(buffer, Position(0, 2)).is_empty


def test_trailing_span_covers_blanks_after_cursor() -> None:
    buffer = InMemoryBuffer.from_text("ab   cd")

    assert trailing_whitespace_span(buffer, Position(0, 2)) == Span.on_line(0, 2, 5)
    assert leading_whitespace_span(buffer, Position(0, 2)).is_empty


def test_tabs_count_as_whitespace() -> None:
    buffer = InMemoryBuffer.from_text("a \t \tb")

    assert leading_whitespace_span(buffer, Position(0, 5)) == Span.on_line(0, 1, 5)
    assert trailing_whitespace_span(buffer, Position(0, 1)) == Span.on_line(0, 1, 5)


def test_other_blanks_are_not_whitespace() -> None:
    buffer = InMemoryBuffer.from_text("a\x0bb\xa0c d")

    assert leading_whitespace_span(buffer, Position(0, 2)).is_empty
    assert trailing_whitespace_span(buffer, Position(0, 1)).is_empty
    assert trailing_whitespace_span(buffer, Position(0, 3)).is_empty
    assert trailing_whitespace_span(buffer, Position(0, 5)) == Span.on_line(0, 5, 6)


def test_scan_stops_at_line_boundaries() -> None:
    buffer = InMemoryBuffer.from_text("end   \n   start")

    assert leading_whitespace_span(buffer, Position(1, 3)) == Span.on_line(1, 0, 3)
    assert trailing_whitespace_span(buffer, Position(0, 3)) == Span.on_line(0, 3, 6)


def test_cursor_at_line_edges() -> None:
    buffer = InMemoryBuffer.from_text("   ")

    assert leading_whitespace_span(buffer, Position(0, 0)).is_empty
    assert trailing_whitespace_span(buffer, Position(0, 3)).is_empty
    assert leading_whitespace_span(buffer, Position(0, 3)) == Span.on_line(0, 0, 3)


def test_selection_uses_start_for_leading_and_end_for_trailing() -> None:
    buffer = InMemoryBuffer.from_text("a  word  b\n  more  ")
    selection = Selection(Position(1, 6), Position(0, 3))

    assert selection_leading_span(buffer, selection) == Span.on_line(0, 1, 3)
    assert selection_trailing_span(buffer, selection) == Span.on_line(1, 6, 8)
