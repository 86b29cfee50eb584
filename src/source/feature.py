"""
Feature: a geometry plus an open attribute mapping.

Every feature gets a process-wide unique ``uid`` at construction. The uid
is what sources and the clustering pass use for identity, so it never
changes over the feature's lifetime.
"""

from __future__ import annotations

import itertools
from typing import Any, Dict, Mapping, Optional

from ..geom import Geometry
from .events import Observable

_uid_counter = itertools.count(1)


class Feature(Observable):
    """A vector feature. Attribute changes dispatch ``change``."""

    def __init__(
        self,
        geometry: Optional[Geometry] = None,
        properties: Optional[Mapping[str, Any]] = None,
    ):
        super().__init__()
        self.uid: str = str(next(_uid_counter))
        self._id: Optional[Any] = None
        self._geometry = geometry
        self._properties: Dict[str, Any] = dict(properties or {})

    def get_id(self) -> Optional[Any]:
        return self._id

    def set_id(self, feature_id: Any) -> None:
        self._id = feature_id
        self.changed()

    def get_geometry(self) -> Optional[Geometry]:
        return self._geometry

    def set_geometry(self, geometry: Optional[Geometry]) -> None:
        self._geometry = geometry
        self.changed()

    def get(self, key: str) -> Any:
        """Return the attribute ``key``, or ``None`` when it is absent."""
        return self._properties.get(key)

    def set(self, key: str, value: Any) -> None:
        self._properties[key] = value
        self.changed()

    def set_properties(self, properties: Mapping[str, Any]) -> None:
        self._properties.update(properties)
        self.changed()

    def get_properties(self) -> Dict[str, Any]:
        return dict(self._properties)

    def __repr__(self) -> str:
        return f"Feature(uid={self.uid}, id={self._id!r}, geometry={self._geometry!r})"
