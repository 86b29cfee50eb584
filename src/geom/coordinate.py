"""In-place arithmetic on ``[x, y]`` coordinates."""

from typing import List, Sequence


def add_coordinate(coordinate: List[float], delta: Sequence[float]) -> List[float]:
    """Add ``delta`` to ``coordinate`` in place and return it."""
    coordinate[0] += delta[0]
    coordinate[1] += delta[1]
    return coordinate


def scale_coordinate(coordinate: List[float], scale: float) -> List[float]:
    """Multiply ``coordinate`` by ``scale`` in place and return it."""
    coordinate[0] *= scale
    coordinate[1] *= scale
    return coordinate
