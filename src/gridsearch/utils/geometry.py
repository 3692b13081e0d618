"""
Geometric utility functions for grid search.

This module provides the distance metric shared by edge costs and
heuristics on 8-connected grids.
"""

import math
from typing import Tuple

SQRT2 = math.sqrt(2.0)


def octile_distance(a: Tuple[int, int], b: Tuple[int, int]) -> float:
    """
    Compute the octile distance between two grid cells.

    Octile distance is the exact shortest-path length on an obstacle-free
    8-connected grid where cardinal moves cost 1 and diagonal moves cost √2.

    Args:
        a: First cell (x, y)
        b: Second cell (x, y)

    Returns:
        Distance in grid units

    Mathematical Background:
        With dx = |ax - bx| and dy = |ay - by|:
        - min(dx, dy) diagonal steps cover both axes at once
        - max(dx, dy) - min(dx, dy) cardinal steps cover the remainder
        - distance = min * √2 + (max - min)

        The metric never overestimates the true cost of any 8-connected path
        with non-negative surcharges and satisfies the triangle inequality,
        so it is admissible and consistent as an A* heuristic.

    Example:
        >>> octile_distance((0, 0), (2, 2))
        2.8284271247461903
        >>> octile_distance((0, 0), (3, 1))
        3.414213562373095
    """
    dx = abs(a[0] - b[0])
    dy = abs(a[1] - b[1])
    diagonal_steps = min(dx, dy)
    straight_steps = max(dx, dy) - diagonal_steps
    return diagonal_steps * SQRT2 + straight_steps
