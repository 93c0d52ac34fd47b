"""Tests for coalescing overlapping delete spans."""

from __future__ import annotations

import random

from cursortrim.core.merge import merge_overlapping
from cursortrim.core.ranges import Span


def _covered(spans):
    return {(span.line, column) for span in spans for column in range(span.start.column, span.end.column + 1)}


def test_empty_input_returns_empty_list() -> None:
    assert merge_overlapping([]) == []


def test_single_span_is_unchanged() -> None:
    span = Span.on_line(0, 1, 3)

    assert merge_overlapping([span]) == [span]


def test_identical_spans_collapse_to_one() -> None:
    span = Span.on_line(3, 2, 6)

    assert merge_overlapping([span, span, span]) == [span]


def test_touching_spans_merge() -> None:
    assert merge_overlapping([Span.on_line(0, 0, 2), Span.on_line(0, 2, 4)]) == [Span.on_line(0, 0, 4)]


def test_transitive_overlap_merges_into_one_span() -> None:
    spans = [Span.on_line(0, 0, 2), Span.on_line(0, 5, 7), Span.on_line(0, 1, 6)]

    assert merge_overlapping(spans) == [Span.on_line(0, 0, 7)]


def test_spans_on_different_lines_stay_apart() -> None:
    spans = [Span.on_line(0, 0, 4), Span.on_line(1, 0, 4), Span.on_line(0, 2, 6)]

    assert merge_overlapping(spans) == [Span.on_line(0, 0, 6), Span.on_line(1, 0, 4)]


def test_disjoint_spans_keep_input_order() -> None:
    spans = [Span.on_line(0, 8, 9), Span.on_line(0, 0, 1), Span.on_line(0, 4, 5)]

    assert merge_overlapping(spans) == spans


def test_input_list_is_not_mutated() -> None:
    spans = [Span.on_line(0, 0, 2), Span.on_line(0, 1, 3)]

    merge_overlapping(spans)

    assert spans == [Span.on_line(0, 0, 2), Span.on_line(0, 1, 3)]


def test_random_span_sets_reach_a_fixpoint() -> None:
    rng = random.Random(1234)
    for _ in range(200):
        spans = []
        for _ in range(rng.randint(0, 8)):
            line = rng.randint(0, 2)
            start = rng.randint(0, 20)
            spans.append(Span.on_line(line, start, start + rng.randint(0, 4)))

        merged = merge_overlapping(spans)

        for i, first in enumerate(merged):
            for second in merged[i + 1 :]:
                assert not first.intersects(second)
        assert _covered(merged) == _covered(spans)
        assert merge_overlapping(merged) == merged
