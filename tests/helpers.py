"""Shared test helpers and stub buffers.

Import from here instead of duplicating these classes in individual test files.
"""

from __future__ import annotations

from typing import Sequence

from cursortrim.core.ranges import Span
from cursortrim.editor.buffer import BufferEditError, EditOptions, InMemoryBuffer


class RecordingBuffer(InMemoryBuffer):
    """In-memory buffer that records every ``atomic_edit`` call."""

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self.calls: list[tuple[tuple[Span, ...], EditOptions]] = []

    async def atomic_edit(self, spans: Sequence[Span], options: EditOptions | None = None) -> None:
        self.calls.append((tuple(spans), options or EditOptions()))
        await super().atomic_edit(spans, options)


class FailingBuffer(RecordingBuffer):
    """Buffer whose first edit is rejected, as if another actor changed it."""

    async def atomic_edit(self, spans: Sequence[Span], options: EditOptions | None = None) -> None:
        self.calls.append((tuple(spans), options or EditOptions()))
        raise BufferEditError("document changed underneath the edit", reason="version_mismatch")
