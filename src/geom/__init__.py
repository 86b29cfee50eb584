"""
src/geom: Planar geometry types plus extent and coordinate helpers.

Geometries wrap shapely objects. Extents are mutable
``[minx, miny, maxx, maxy]`` lists so hot loops can update a single scratch
extent in place.
"""

from .coordinate import add_coordinate, scale_coordinate
from .extent import (
    buffer,
    contains_extent,
    create_empty,
    create_or_update_from_coordinate,
)
from .geometry import Geometry, GeometryType, LineString, Point, Polygon

__all__ = [
    "add_coordinate",
    "scale_coordinate",
    "buffer",
    "contains_extent",
    "create_empty",
    "create_or_update_from_coordinate",
    "Geometry",
    "GeometryType",
    "LineString",
    "Point",
    "Polygon",
]
