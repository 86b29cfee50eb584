"""
Axis-aligned extent helpers.

An extent is a list ``[minx, miny, maxx, maxy]``. Functions taking a
``dest`` argument write into it when given, so callers can reuse one
scratch list across iterations.
"""

from __future__ import annotations

import math
from typing import List, Optional, Sequence

Extent = List[float]


def create_empty() -> Extent:
    """Return an empty extent (inverted infinite bounds)."""
    return [math.inf, math.inf, -math.inf, -math.inf]


def _create_or_update(
    minx: float, miny: float, maxx: float, maxy: float, dest: Optional[Extent]
) -> Extent:
    if dest is None:
        return [minx, miny, maxx, maxy]
    dest[0] = minx
    dest[1] = miny
    dest[2] = maxx
    dest[3] = maxy
    return dest


def create_or_update_from_coordinate(
    coordinate: Sequence[float], dest: Optional[Extent] = None
) -> Extent:
    """Return the zero-area extent sitting on ``coordinate``."""
    x, y = coordinate[0], coordinate[1]
    return _create_or_update(x, y, x, y, dest)


def buffer(extent: Sequence[float], value: float, dest: Optional[Extent] = None) -> Extent:
    """Grow ``extent`` by ``value`` on every side.

    The result is a box, so the corners reach ``value * sqrt(2)`` from the
    centre of a point extent.
    """
    return _create_or_update(
        extent[0] - value,
        extent[1] - value,
        extent[2] + value,
        extent[3] + value,
        dest,
    )


def contains_extent(outer: Sequence[float], inner: Sequence[float]) -> bool:
    return (
        outer[0] <= inner[0]
        and inner[2] <= outer[2]
        and outer[1] <= inner[1]
        and inner[3] <= outer[3]
    )
