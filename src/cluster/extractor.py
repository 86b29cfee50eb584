"""
Geometry functions: map a feature to the point used for clustering.

A geometry function returns a :class:`~src.geom.Point`, or ``None`` to
leave the feature out of clustering altogether.
"""

from __future__ import annotations

from typing import Callable, Optional

from ..geom import Point
from ..source.feature import Feature
from .errors import GEOMETRY_NOT_POINT, ClusterAssertionError

GeometryFunction = Callable[[Feature], Optional[Point]]


def default_geometry_function(feature: Feature) -> Point:
    """
    Return the feature's own geometry, which must be a Point.

    Raises:
        ClusterAssertionError: If the geometry is anything but a Point
            (including a missing geometry)
    """
    geometry = feature.get_geometry()
    if not isinstance(geometry, Point):
        raise ClusterAssertionError(
            GEOMETRY_NOT_POINT,
            "The default geometry function can only handle Point geometries",
        )
    return geometry


def interior_point_geometry_function(feature: Feature) -> Optional[Point]:
    """Cluster points as-is; polygons and lines by a point lying on them."""
    geometry = feature.get_geometry()
    if geometry is None:
        return None
    if isinstance(geometry, Point):
        return geometry
    return geometry.get_interior_point()
