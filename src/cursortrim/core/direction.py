"""Trim direction values and coercion helpers."""

from __future__ import annotations

import math
from enum import IntEnum
from numbers import Real
from typing import Any

_NAME_ALIASES = {
    "both": "BOTH",
    "b": "BOTH",
    "left": "LEFT",
    "l": "LEFT",
    "right": "RIGHT",
    "r": "RIGHT",
}


class Direction(IntEnum):
    """Side of the cursor to trim whitespace from."""

    LEFT = -1
    BOTH = 0
    RIGHT = 1

    @property
    def trims_left(self) -> bool:
        return self <= 0

    @property
    def trims_right(self) -> bool:
        return self >= 0

    @classmethod
    def from_name(cls, name: str) -> Direction:
        """Parse ``"both"``, ``"left"`` or ``"right"`` (and one-letter aliases)."""

        key = _NAME_ALIASES.get(str(name).strip().lower())
        if key is None:
            raise ValueError(f"Unknown trim direction: {name!r}")
        return cls[key]


def normalize_direction(value: Any) -> Direction:
    """Coerce any value into a :class:`Direction`.

    Non-numeric values (``bool`` and NaN included) and zero map to ``BOTH``,
    positive numbers to ``RIGHT`` and negative numbers to ``LEFT``.

    NaN is neither zero nor positive, so a bare sign test would send it to
    ``LEFT``; it is treated as non-numeric instead and trims both sides.
    """

    if isinstance(value, bool) or not isinstance(value, Real):
        return Direction.BOTH
    if isinstance(value, float) and math.isnan(value):
        return Direction.BOTH
    if value == 0:
        return Direction.BOTH
    if value > 0:
        return Direction.RIGHT
    return Direction.LEFT


__all__ = ["Direction", "normalize_direction"]
