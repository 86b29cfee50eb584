"""Build a cluster feature from a group of member features."""

from __future__ import annotations

import math
from typing import Any, List, Optional

from ..geom import Point, add_coordinate, scale_coordinate
from ..source.feature import Feature
from .extractor import GeometryFunction


def to_number(value: Any) -> float:
    """
    Coerce an attribute value to a float without ever raising.

    ``None`` and unparseable values become NaN. Booleans map to 1.0/0.0
    and a blank string maps to 0.0.
    """
    if value is None:
        return math.nan
    if isinstance(value, bool):
        return 1.0 if value else 0.0
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return 0.0
        try:
            return float(text)
        except ValueError:
            return math.nan
    try:
        return float(value)
    except (TypeError, ValueError):
        return math.nan


def create_cluster(
    group_key: Any,
    features: List[Feature],
    geometry_function: GeometryFunction,
    index_key: str,
) -> Optional[Feature]:
    """
    Return a cluster feature for ``features``, or None when no member
    yields a clustering point.

    Members are walked last to first, so ``identifiers`` comes out in
    reverse member order. A member whose geometry function yields no point
    is dropped from ``features`` in place.

    The cluster carries three properties: ``features`` (the member list,
    same objects as the base store), ``groupkey`` and ``identifiers``.
    """
    centroid = [0.0, 0.0]
    identifiers: List[float] = []
    for i in range(len(features) - 1, -1, -1):
        geometry = geometry_function(features[i])
        if geometry is not None:
            add_coordinate(centroid, geometry.get_coordinates())
            identifiers.append(to_number(features[i].get(index_key)))
        else:
            del features[i]

    if not features:
        return None
    scale_coordinate(centroid, 1 / len(features))

    return Feature(
        Point(centroid),
        {
            "features": features,
            "groupkey": group_key,
            "identifiers": identifiers,
        },
    )
