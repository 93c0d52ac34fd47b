"""Trim the spaces and tabs around every cursor of an editor buffer."""

from .core.direction import Direction, normalize_direction
from .core.merge import merge_overlapping
from .core.ranges import Position, Span
from .editor.buffer import (
    BufferClosedError,
    BufferEditError,
    CursorTrimError,
    EditOptions,
    InMemoryBuffer,
    Selection,
    TextBuffer,
)
from .editor.trim import trim_cursors

__version__ = "1.0.0"

__all__ = [
    "BufferClosedError",
    "BufferEditError",
    "CursorTrimError",
    "Direction",
    "EditOptions",
    "InMemoryBuffer",
    "Position",
    "Selection",
    "Span",
    "TextBuffer",
    "merge_overlapping",
    "normalize_direction",
    "trim_cursors",
]
