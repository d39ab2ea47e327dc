"""Ring helpers shared by the geometry types.

A ring is a sequence of objects exposing `x` and `y`, implicitly closed.
"""

import math
from typing import List, Sequence, TypeVar

P = TypeVar("P")


def polygon_signed_area(ring: Sequence) -> float:
    """Calculate the signed area of a ring (shoelace formula).

    Positive = counter-clockwise in y-up coordinates, negative = clockwise.
    """
    if len(ring) < 3:
        return 0.0

    area = 0.0
    n = len(ring)
    for i in range(n):
        j = (i + 1) % n
        area += ring[i].x * ring[j].y
        area -= ring[j].x * ring[i].y

    return area / 2.0


def remove_path_reps(path: List[P]) -> List[P]:
    """Drop consecutive points with identical coordinates."""
    if not path:
        return path

    prev = path[0]
    result = [prev]
    for p in path[1:]:
        if not (p.x == prev.x and p.y == prev.y):
            result.append(p)
            prev = p
    return result


def round_half_up(value: float) -> float:
    """Round to the nearest integer, halves towards +infinity."""
    return float(math.floor(value + 0.5))


def round_to_places(value: float, dp: int) -> float:
    """Round to `dp` decimal places, halves away from zero."""
    scale = 10 ** dp
    return math.copysign(math.floor(abs(value) * scale + 0.5) / scale, value)


def format_number(value: float) -> str:
    """Shortest text for a coordinate: integral values lose their '.0'."""
    if math.isfinite(value) and value == int(value):
        return str(int(value))
    return repr(float(value))
