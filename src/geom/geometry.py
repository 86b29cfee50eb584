"""Planar geometries backed by shapely: Point, LineString and Polygon."""

from __future__ import annotations

from enum import Enum
from typing import List, Sequence

import shapely

from .extent import Extent


class GeometryType(Enum):
    """Geometry type names (GeoJSON spelling)."""
    POINT = "Point"
    LINE_STRING = "LineString"
    POLYGON = "Polygon"


class Geometry:
    """
    Base class for geometries.

    The underlying shapely geometry is available as :attr:`shape`; it is
    what spatial indexes and representative-point lookups work on.
    """

    geometry_type: GeometryType

    def __init__(self, shape: shapely.Geometry):
        self._shape = shape

    @property
    def shape(self) -> shapely.Geometry:
        return self._shape

    def get_type(self) -> GeometryType:
        return self.geometry_type

    def get_coordinates(self):
        raise NotImplementedError

    def get_extent(self) -> Extent:
        return list(self._shape.bounds)

    def get_interior_point(self) -> "Point":
        """Return a point guaranteed to lie on the geometry."""
        return Point.from_shape(self._shape.representative_point())

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Geometry) or other.get_type() != self.get_type():
            return NotImplemented
        return self.get_coordinates() == other.get_coordinates()

    __hash__ = object.__hash__

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.get_coordinates()!r})"


class Point(Geometry):
    """A single ``(x, y)`` position."""

    geometry_type = GeometryType.POINT

    def __init__(self, coordinates: Sequence[float]):
        super().__init__(shapely.Point(float(coordinates[0]), float(coordinates[1])))

    @classmethod
    def from_shape(cls, shape: shapely.Point) -> "Point":
        return cls((shape.x, shape.y))

    @property
    def x(self) -> float:
        return self._shape.x

    @property
    def y(self) -> float:
        return self._shape.y

    def get_coordinates(self) -> List[float]:
        return [self._shape.x, self._shape.y]


class LineString(Geometry):
    geometry_type = GeometryType.LINE_STRING

    def __init__(self, coordinates: Sequence[Sequence[float]]):
        if len(coordinates) < 2:
            raise ValueError("LineString needs at least two coordinates")
        super().__init__(shapely.LineString([(float(x), float(y)) for x, y in coordinates]))

    def get_coordinates(self) -> List[List[float]]:
        return [[x, y] for x, y in self._shape.coords]


class Polygon(Geometry):
    """Polygon made of linear rings; the first ring is the exterior."""

    geometry_type = GeometryType.POLYGON

    def __init__(self, rings: Sequence[Sequence[Sequence[float]]]):
        if not rings or len(rings[0]) < 3:
            raise ValueError("Polygon exterior ring needs at least three coordinates")
        exterior, *holes = [[(float(x), float(y)) for x, y in ring] for ring in rings]
        super().__init__(shapely.Polygon(exterior, holes))

    def get_coordinates(self) -> List[List[List[float]]]:
        rings = [self._shape.exterior] + list(self._shape.interiors)
        return [[[x, y] for x, y in ring.coords] for ring in rings]
