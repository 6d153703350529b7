"""
Neighborhood shapes as ordered lists of coordinate offsets, outermost
dimension first. The order of the offsets is the order of the states in
every Combination the space builds, so rule tables must use the same order.
"""

from __future__ import annotations
from itertools import product
from typing import List, Tuple

Offset = Tuple[int, ...]


def _check(dimensions: int, radius: int) -> None:
    if dimensions < 1:
        raise ValueError(f"dimensions must be >= 1, got {dimensions}")
    if radius < 1:
        raise ValueError(f"radius must be >= 1, got {radius}")


def moore(dimensions: int, radius: int = 1) -> List[Offset]:
    """
    Every offset within Chebyshev distance `radius`, centre included,
    in row-major order. moore(1) is (left, centre, right).
    """
    _check(dimensions, radius)
    span = range(-radius, radius + 1)
    return [tuple(o) for o in product(span, repeat=dimensions)]


def von_neumann(dimensions: int, radius: int = 1) -> List[Offset]:
    """Offsets within Manhattan distance `radius`, centre included, row-major."""
    _check(dimensions, radius)
    return [o for o in moore(dimensions, radius) if sum(abs(x) for x in o) <= radius]


def elementary() -> List[Offset]:
    return moore(1)


def center_index(offsets: List[Offset]) -> int:
    """Position of the all-zero offset, i.e. the cell itself."""
    dims = len(offsets[0])
    return offsets.index((0,) * dims)
