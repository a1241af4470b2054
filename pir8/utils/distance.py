"""Distance calculations for the game map."""

import math


def chebyshev_distance(x1: int, y1: int, x2: int, y2: int) -> int:
    """Calculate Chebyshev distance between two points.

    Chebyshev distance is the maximum absolute difference of coordinates.
    In game terms, this is the number of cells a ship must sail, where
    diagonal movement costs the same as orthogonal movement.

    Args:
        x1: X coordinate of first point
        y1: Y coordinate of first point
        x2: X coordinate of second point
        y2: Y coordinate of second point

    Returns:
        Chebyshev distance between the two points

    Examples:
        >>> chebyshev_distance(0, 0, 3, 3)
        3  # Diagonal is same cost as orthogonal
        >>> chebyshev_distance(0, 0, 5, 0)
        5
    """
    return max(abs(x2 - x1), abs(y2 - y1))


def euclidean_distance(x1: int, y1: int, x2: int, y2: int) -> float:
    """Calculate straight-line distance between two points.

    Used for cannon reach and treasure isolation, where a diagonal neighbour
    sits at sqrt(2) rather than 1.

    Args:
        x1: X coordinate of first point
        y1: Y coordinate of first point
        x2: X coordinate of second point
        y2: Y coordinate of second point

    Returns:
        Euclidean distance between the two points

    Examples:
        >>> euclidean_distance(0, 0, 3, 4)
        5.0
    """
    return math.hypot(x2 - x1, y2 - y1)


def is_adjacent(x1: int, y1: int, x2: int, y2: int) -> bool:
    """Return True if two distinct cells touch (8-neighbourhood)."""
    return chebyshev_distance(x1, y1, x2, y2) == 1
