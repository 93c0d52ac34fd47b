"""Core value types and pure span algorithms.

Nothing in this package touches a buffer; the editor package builds on it.
"""

from .direction import Direction, normalize_direction
from .merge import merge_overlapping
from .ranges import Position, Span

__all__ = ["Direction", "Position", "Span", "merge_overlapping", "normalize_direction"]
