"""Distance calculations for the game map."""

import math


def trip_length(x1: float, y1: float, x2: float, y2: float) -> int:
    """Calculate the number of turns a fleet needs between two points.

    This is the Euclidean distance rounded up to the next integer. Fleets
    travel one unit per turn, so this value becomes both the total trip
    length and the initial turns remaining of a new fleet.

    Args:
        x1: X coordinate of first point
        y1: Y coordinate of first point
        x2: X coordinate of second point
        y2: Y coordinate of second point

    Returns:
        Rounded-up Euclidean distance between the two points

    Examples:
        >>> trip_length(0, 0, 3, 4)
        5
        >>> trip_length(0, 0, 1, 1)
        2  # sqrt(2) rounds up
    """
    dx = x1 - x2
    dy = y1 - y2
    return math.ceil(math.sqrt(dx * dx + dy * dy))
