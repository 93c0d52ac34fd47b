"""Coalescing of overlapping delete spans."""

from __future__ import annotations

from typing import Iterable

from .ranges import Span


def merge_overlapping(spans: Iterable[Span]) -> list[Span]:
    """Combine every pair of intersecting spans until none remain.

    Touching spans count as intersecting. Each merged group keeps the slot of
    its first member, so output order is deterministic for a given input.
    """

    merged = list(spans)

    i = 0
    while i < len(merged):
        j = i + 1
        while j < len(merged):
            combined = _combine_if_overlapping(merged[i], merged[j])
            if combined is None:
                j += 1
                continue
            merged[i] = combined
            del merged[j]
            # the grown span may now reach spans already passed over
            j = i + 1
        i += 1

    return merged


def _combine_if_overlapping(first: Span, second: Span) -> Span | None:
    if not first.intersects(second):
        return None
    return first.union(second)


__all__ = ["merge_overlapping"]
