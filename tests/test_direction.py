"""Tests for trim direction coercion."""

from __future__ import annotations

import math

import pytest

from cursortrim.core.direction import Direction, normalize_direction


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (0, Direction.BOTH),
        (0.0, Direction.BOTH),
        (1, Direction.RIGHT),
        (42.5, Direction.RIGHT),
        (-1, Direction.LEFT),
        (-0.25, Direction.LEFT),
        (None, Direction.BOTH),
        ("1", Direction.BOTH),
        ("left", Direction.BOTH),
        (True, Direction.BOTH),
        (False, Direction.BOTH),
        (math.nan, Direction.BOTH),
        ([1], Direction.BOTH),
    ],
)
def test_normalize_direction_maps_any_value(value, expected) -> None:
    assert normalize_direction(value) is expected


@pytest.mark.parametrize("value", [-7, -1, 0, 1, 3.5, "x", None, math.inf, -math.inf])
def test_normalize_direction_is_idempotent(value) -> None:
    once = normalize_direction(value)

    assert normalize_direction(once) is once
    assert int(once) in {-1, 0, 1}


def test_direction_sides() -> None:
    assert Direction.BOTH.trims_left and Direction.BOTH.trims_right
    assert Direction.LEFT.trims_left and not Direction.LEFT.trims_right
    assert Direction.RIGHT.trims_right and not Direction.RIGHT.trims_left


def test_direction_from_name_accepts_aliases() -> None:
    assert Direction.from_name("Left") is Direction.LEFT
    assert Direction.from_name(" r ") is Direction.RIGHT
    assert Direction.from_name("both") is Direction.BOTH
    with pytest.raises(ValueError):
        Direction.from_name("up")


def test_nan_is_not_treated_as_negative() -> None:
    assert normalize_direction(float("nan")) is Direction.BOTH
    assert normalize_direction(-math.inf) is Direction.LEFT
    assert normalize_direction(math.inf) is Direction.RIGHT
