"""Tests for the trim orchestrator."""

from __future__ import annotations

import pytest

from cursortrim.core.direction import Direction
from cursortrim.core.ranges import Position, Span
from cursortrim.editor.buffer import BufferEditError, EditOptions, InMemoryBuffer, Selection
from cursortrim.editor.trim import collect_delete_spans, trim_cursors
from tests.helpers import FailingBuffer, RecordingBuffer

_NO_CHECKPOINT = EditOptions(undo_checkpoint_before=False, undo_checkpoint_after=False)


def test_collect_delete_spans_respects_direction() -> None:
    buffer = InMemoryBuffer.from_text("a  b  c")
    selections = [Selection.caret(0, 3)]

    assert collect_delete_spans(buffer, selections, Direction.LEFT) == [Span.on_line(0, 1, 3)]
    assert collect_delete_spans(buffer, selections, Direction.RIGHT) == []
    assert collect_delete_spans(buffer, [Selection.caret(0, 4)], Direction.BOTH) == [Span.on_line(0, 4, 6)]


@pytest.mark.asyncio
async def test_trim_both_inside_whitespace_run() -> None:
    buffer = RecordingBuffer.from_text("foo   bar", [Selection.caret(0, 4)])

    deleted = await trim_cursors(buffer, direction=Direction.BOTH)

    assert deleted == (Span.on_line(0, 3, 6),)
    assert buffer.text == "foobar"
    assert buffer.selections == (Selection.caret(0, 3),)


@pytest.mark.asyncio
async def test_issues_primary_edit_then_empty_follow_up_without_checkpoints() -> None:
    buffer = RecordingBuffer.from_text("foo   bar", [Selection.caret(0, 4)])

    await trim_cursors(buffer)

    assert buffer.calls == [
        ((Span.on_line(0, 3, 6),), _NO_CHECKPOINT),
        ((), _NO_CHECKPOINT),
    ]


@pytest.mark.asyncio
async def test_follow_up_edit_can_be_disabled() -> None:
    buffer = RecordingBuffer.from_text("a  b", [Selection.caret(0, 1)])

    await trim_cursors(buffer, follow_up_edit=False)

    assert len(buffer.calls) == 1
    assert buffer.text == "ab"


@pytest.mark.asyncio
async def test_overlapping_cursor_spans_are_deleted_once() -> None:
    buffer = RecordingBuffer.from_text("x    y", [Selection.caret(0, 2), Selection.caret(0, 3)])

    deleted = await trim_cursors(buffer, direction=0)

    assert deleted == (Span.on_line(0, 1, 5),)
    assert buffer.text == "xy"
    assert buffer.selections == (Selection.caret(0, 1), Selection.caret(0, 1))


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("direction", "expected"),
    [(-1, "ab  c"), (0, "abc"), (1, "a  bc"), ("junk", "abc"), (Direction.RIGHT, "a  bc")],
)
async def test_direction_selects_side(direction, expected) -> None:
    buffer = InMemoryBuffer.from_text("a  b  c", [Selection(Position(0, 3), Position(0, 4))])

    await trim_cursors(buffer, direction=direction)

    assert buffer.text == expected


@pytest.mark.asyncio
async def test_cursors_on_several_lines() -> None:
    buffer = InMemoryBuffer.from_text(
        "one  two\n\tthree\t\nfour",
        [Selection.caret(0, 5), Selection.caret(1, 1), Selection.caret(1, 7)],
    )

    deleted = await trim_cursors(buffer)

    assert buffer.text == "onetwo\nthree\nfour"
    assert sorted(deleted, key=lambda span: span.start) == [
        Span.on_line(0, 3, 5),
        Span.on_line(1, 0, 1),
        Span.on_line(1, 6, 7),
    ]


@pytest.mark.asyncio
async def test_explicit_selections_override_buffer_selections() -> None:
    buffer = InMemoryBuffer.from_text("a  b  c", [Selection.caret(0, 1)])

    await trim_cursors(buffer, [Selection.caret(0, 4)], Direction.RIGHT)

    assert buffer.text == "a  bc"


@pytest.mark.asyncio
async def test_no_adjacent_whitespace_issues_no_edit() -> None:
    buffer = RecordingBuffer.from_text("foo bar", [Selection.caret(0, 1)])

    deleted = await trim_cursors(buffer, direction=Direction.BOTH)

    assert deleted == ()
    assert buffer.calls == []
    assert buffer.text == "foo bar"


@pytest.mark.asyncio
async def test_missing_buffer_or_cursors_is_a_no_op() -> None:
    buffer = RecordingBuffer.from_text("a  b")
    buffer.set_selections([])

    assert await trim_cursors(None) == ()
    assert await trim_cursors(buffer) == ()
    assert buffer.calls == []


@pytest.mark.asyncio
async def test_primary_failure_propagates_and_skips_follow_up() -> None:
    buffer = FailingBuffer.from_text("a  b", [Selection.caret(0, 2)])

    with pytest.raises(BufferEditError):
        await trim_cursors(buffer)

    assert len(buffer.calls) == 1
    assert buffer.text == "a  b"


@pytest.mark.asyncio
async def test_whole_trim_undoes_in_one_step() -> None:
    buffer = InMemoryBuffer.from_text("a  b  c", [Selection.caret(0, 2), Selection.caret(0, 5)])

    await trim_cursors(buffer)

    assert buffer.text == "abc"
    assert buffer.undo() is True
    assert buffer.text == "a  b  c"
    assert buffer.selections == (Selection.caret(0, 2), Selection.caret(0, 5))
    assert buffer.can_undo is False
