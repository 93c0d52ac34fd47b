"""PySide6 adapter exposing a ``QPlainTextEdit`` as a :class:`TextBuffer`.

Positions map onto ``QTextDocument`` blocks: the line is the block number and
the column is the offset inside the block. Qt counts UTF-16 code units, so
columns only match Python string indices for text in the Basic Multilingual
Plane.
"""

from __future__ import annotations

import logging
from functools import partial
from typing import Any, Sequence

from PySide6.QtGui import QTextCursor
from PySide6.QtWidgets import QApplication, QPlainTextEdit

from ..core.ranges import Position, Span
from .buffer import BufferClosedError, EditOptions, Selection, validate_delete_spans

LOGGER = logging.getLogger(__name__)


class QtTextBuffer:
    """Buffer backed by a live ``QPlainTextEdit``.

    Each text-changing edit runs inside a single Qt edit block, so Qt's undo
    stack sees one step. When the previous edit from this adapter left its
    undo group open, the next one joins that block instead of starting a new
    one. Any other change to the document closes the group.
    """

    def __init__(self, editor: QPlainTextEdit) -> None:
        self._editor: QPlainTextEdit | None = editor
        self._group_open = False
        editor.destroyed.connect(self._handle_destroyed)  # type: ignore[attr-defined]
        editor.document().undoCommandAdded.connect(self._handle_undo_command)  # type: ignore[attr-defined]

    @property
    def editor(self) -> QPlainTextEdit | None:
        return self._editor

    @property
    def line_count(self) -> int:
        return self._require_editor().document().blockCount()

    def line_text(self, index: int) -> str:
        block = self._require_editor().document().findBlockByNumber(index)
        if not block.isValid():
            raise IndexError(f"Line {index} is outside the document")
        return block.text()

    @property
    def selections(self) -> tuple[Selection, ...]:
        cursor = self._require_editor().textCursor()
        return (Selection(self._position_at(cursor.anchor()), self._position_at(cursor.position())),)

    async def atomic_edit(self, spans: Sequence[Span], options: EditOptions) -> None:
        editor = self._require_editor()
        ordered = validate_delete_spans(self, [span for span in spans if not span.is_empty])
        if options.undo_checkpoint_before:
            self._group_open = False
        if not ordered:
            if options.undo_checkpoint_after:
                self._group_open = False
            return

        cursor = QTextCursor(editor.document())
        if self._group_open:
            cursor.joinPreviousEditBlock()
        else:
            cursor.beginEditBlock()
        try:
            for span in reversed(ordered):
                cursor.setPosition(self._offset_of(span.start))
                cursor.setPosition(self._offset_of(span.end), QTextCursor.MoveMode.KeepAnchor)
                cursor.removeSelectedText()
        finally:
            cursor.endEditBlock()
        self._group_open = not options.undo_checkpoint_after
        LOGGER.debug("Qt edit block removed %d span(s)", len(ordered))

    def checkpoint(self) -> None:
        """Start the next edit in a fresh Qt edit block."""

        self._group_open = False

    def _position_at(self, offset: int) -> Position:
        block = self._require_editor().document().findBlock(offset)
        return Position(block.blockNumber(), offset - block.position())

    def _offset_of(self, position: Position) -> int:
        block = self._require_editor().document().findBlockByNumber(position.line)
        return block.position() + position.column

    def _require_editor(self) -> QPlainTextEdit:
        if self._editor is None:
            raise BufferClosedError("Editor widget has been destroyed")
        return self._editor

    def _handle_destroyed(self, *_args: Any) -> None:
        self._editor = None

    def _handle_undo_command(self) -> None:
        self._group_open = False


class QtEditorHost:
    """Resolve the active buffer from an explicit editor or the focused widget.

    Buffers are cached per editor and dropped when the editor is destroyed.
    """

    def __init__(self, editor: QPlainTextEdit | None = None) -> None:
        self._active: QPlainTextEdit | None = None
        self._active_key: int | None = None
        self._buffers: dict[int, QtTextBuffer] = {}
        self.set_active(editor)

    def set_active(self, editor: QPlainTextEdit | None) -> None:
        self._active = editor
        self._active_key = id(editor) if editor is not None else None

    def active_buffer(self) -> QtTextBuffer | None:
        editor = self._active
        if editor is None:
            focused = QApplication.focusWidget()
            if isinstance(focused, QPlainTextEdit):
                editor = focused
        if editor is None:
            return None
        key = id(editor)
        buffer = self._buffers.get(key)
        if buffer is None or buffer.editor is not editor:
            buffer = QtTextBuffer(editor)
            self._buffers[key] = buffer
            editor.destroyed.connect(partial(self._forget, key))  # type: ignore[attr-defined]
        return buffer

    def _forget(self, key: int, *_args: Any) -> None:
        self._buffers.pop(key, None)
        if self._active_key == key:
            self.set_active(None)


__all__ = ["QtEditorHost", "QtTextBuffer"]
