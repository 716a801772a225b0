"""Solid-angle estimates for surfaces and bounding volumes."""

from __future__ import annotations

import math
from typing import Sequence


def solid_angle(
    pos: Sequence[float],
    intersect_point: Sequence[float],
    intersect_normal: Sequence[float],
    area: float,
) -> float:
    """Solid angle subtended at ``pos`` by an area at ``intersect_point``."""
    to_point = [p - q for p, q in zip(intersect_point, pos)]
    distance = math.hypot(*to_point)
    if distance == 0.0:
        raise ValueError("position coincides with the intersection point")
    wi = [c / distance for c in to_point]
    cosine = abs(sum(n * -w for n, w in zip(intersect_normal, wi)))
    return (cosine * area * 2.0 * math.pi) / (distance * distance)


def solid_angle_from_bounds(
    centre: Sequence[float], side_lengths: Sequence[float], pos: Sequence[float]
) -> float:
    """Solid angle of a box, approximated by a disc facing ``pos``.

    The disc sits at the box centre with a radius of half the longest side.
    """
    radius = max(side_lengths) / 2.0
    area = math.pi * radius * radius
    to_pos = [p - c for p, c in zip(pos, centre)]
    length = math.hypot(*to_pos)
    if length == 0.0:
        raise ValueError("position coincides with the bounds centre")
    normal = [c / length for c in to_pos]
    return solid_angle(pos, centre, normal, area)