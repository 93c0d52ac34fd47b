"""Trim whitespace around every cursor of a buffer in one undoable edit."""

from __future__ import annotations

import logging
from typing import Any, Iterable, Sequence

from ..core.direction import Direction, normalize_direction
from ..core.merge import merge_overlapping
from ..core.ranges import Span
from .buffer import EditOptions, Selection, TextBuffer
from .whitespace import selection_leading_span, selection_trailing_span

LOGGER = logging.getLogger(__name__)

_NO_UNDO_CHECKPOINT = EditOptions(undo_checkpoint_before=False, undo_checkpoint_after=False)


def collect_delete_spans(
    buffer: TextBuffer,
    selections: Iterable[Selection],
    direction: Direction,
) -> list[Span]:
    """Return the non-empty whitespace spans around each selection, unmerged."""

    spans: list[Span] = []
    for selection in selections:
        if direction.trims_left:
            span = selection_leading_span(buffer, selection)
            if not span.is_empty:
                spans.append(span)
        if direction.trims_right:
            span = selection_trailing_span(buffer, selection)
            if not span.is_empty:
                spans.append(span)
    return spans


async def trim_cursors(
    buffer: TextBuffer | None,
    selections: Sequence[Selection] | None = None,
    direction: Any = Direction.BOTH,
    *,
    follow_up_edit: bool = True,
) -> tuple[Span, ...]:
    """Delete the whitespace around each cursor and return the deleted spans.

    ``selections`` defaults to the buffer's own selections. Nothing is issued
    when there is no buffer or nothing to trim. The deletion is followed by an
    empty edit (unless ``follow_up_edit`` is false) so hosts that only restore
    selections on redo when a trailing edit exists behave; neither edit opens
    an undo checkpoint, so the user undoes the whole trim in one step.

    Errors raised by the primary edit propagate and skip the follow-up edit.
    """

    resolved = normalize_direction(direction)
    if buffer is None:
        return ()
    targets = buffer.selections if selections is None else selections
    if not targets:
        return ()

    spans = merge_overlapping(collect_delete_spans(buffer, targets, resolved))
    if not spans:
        LOGGER.debug("Nothing to trim around %d cursor(s)", len(targets))
        return ()

    await buffer.atomic_edit(spans, _NO_UNDO_CHECKPOINT)
    if follow_up_edit:
        await buffer.atomic_edit((), _NO_UNDO_CHECKPOINT)
    LOGGER.debug(
        "Trimmed %d span(s) around %d cursor(s) (direction=%s)",
        len(spans),
        len(targets),
        resolved.name.lower(),
    )
    return tuple(spans)


__all__ = ["collect_delete_spans", "trim_cursors"]
