"""
Vector feature collection with change notification and extent queries.

``VectorSource`` holds features in insertion order, answers bounding-box
queries from a cached shapely STRtree, and optionally pulls
data through a loader callable driven by a loading strategy.
"""

from __future__ import annotations

import logging
import math
from typing import Any, Callable, Dict, Iterable, List, Optional, Sequence

import numpy as np
import shapely
from shapely import STRtree

from ..geom import contains_extent, create_empty
from ..geom.extent import Extent
from .events import EventType, Observable
from .feature import Feature

logger = logging.getLogger(__name__)

Loader = Callable[[Extent, float, Any], None]
Strategy = Callable[[Extent, float], List[Extent]]


def all_strategy(extent: Extent, resolution: float) -> List[Extent]:
    """Load everything once, whatever the requested view."""
    return [[-math.inf, -math.inf, math.inf, math.inf]]


def bbox_strategy(extent: Extent, resolution: float) -> List[Extent]:
    """Load exactly the requested extent."""
    return [list(extent)]


class VectorSource(Observable):
    """
    Ordered feature collection.

    Every public mutation dispatches ``change`` exactly once, and so does
    any change on a contained feature. Features without a geometry are kept
    but never returned by :meth:`get_features_in_extent`.
    """

    def __init__(
        self,
        features: Optional[Iterable[Feature]] = None,
        loader: Optional[Loader] = None,
        strategy: Strategy = all_strategy,
        wrap_x: bool = True,
    ):
        super().__init__()
        self._features: Dict[str, Feature] = {}
        self._features_by_id: Dict[Any, Feature] = {}
        self._feature_listeners: Dict[str, Callable[[str], None]] = {}
        self._loader = loader
        self._strategy = strategy
        self._loaded_extents: List[Extent] = []
        self._wrap_x = wrap_x

        self._index_features: List[Feature] = []
        self._index_tree: Optional[STRtree] = None

        if features is not None:
            self._add_features_internal(features)

    # -----------------------------
    # Mutation
    # -----------------------------

    def add_feature(self, feature: Feature) -> None:
        if self._add_feature_internal(feature):
            self.changed()

    def add_features(self, features: Iterable[Feature]) -> None:
        if self._add_features_internal(features):
            self.changed()

    def remove_feature(self, feature: Feature) -> None:
        if feature.uid not in self._features:
            return
        self._remove_feature_internal(feature)
        self.dispatch_event(EventType.REMOVE_FEATURE.value)
        self.changed()

    def clear(self) -> None:
        """Remove every feature and forget loaded extents."""
        for feature in list(self._features.values()):
            self._unlisten(feature)
        self._features = {}
        self._features_by_id = {}
        self._loaded_extents = []
        self._invalidate_index()
        self.dispatch_event(EventType.CLEAR.value)
        self.changed()

    def _add_features_internal(self, features: Iterable[Feature]) -> int:
        added = 0
        for feature in features:
            if self._add_feature_internal(feature):
                added += 1
        return added

    def _add_feature_internal(self, feature: Feature) -> bool:
        if feature.uid in self._features:
            return False
        self._features[feature.uid] = feature
        feature_id = feature.get_id()
        if feature_id is not None:
            self._features_by_id[feature_id] = feature
        listener = self._make_feature_listener(feature)
        self._feature_listeners[feature.uid] = listener
        feature.on(EventType.CHANGE.value, listener)
        self._invalidate_index()
        self.dispatch_event(EventType.ADD_FEATURE.value)
        return True

    def _remove_feature_internal(self, feature: Feature) -> None:
        self._unlisten(feature)
        del self._features[feature.uid]
        feature_id = feature.get_id()
        if feature_id is not None and self._features_by_id.get(feature_id) is feature:
            del self._features_by_id[feature_id]
        self._invalidate_index()

    def _make_feature_listener(self, feature: Feature) -> Callable[[str], None]:
        def _on_feature_change(event_type: str) -> None:
            feature_id = feature.get_id()
            stale = [k for k, f in self._features_by_id.items() if f is feature and k != feature_id]
            for key in stale:
                del self._features_by_id[key]
            if feature_id is not None:
                self._features_by_id[feature_id] = feature
            self._invalidate_index()
            self.changed()

        return _on_feature_change

    def _unlisten(self, feature: Feature) -> None:
        listener = self._feature_listeners.pop(feature.uid, None)
        if listener is not None:
            feature.un(EventType.CHANGE.value, listener)

    # -----------------------------
    # Queries
    # -----------------------------

    def get_features(self) -> List[Feature]:
        """Return all features in insertion order."""
        return list(self._features.values())

    def get_feature_by_id(self, feature_id: Any) -> Optional[Feature]:
        return self._features_by_id.get(feature_id)

    def has_feature(self, feature: Feature) -> bool:
        return feature.uid in self._features

    def is_empty(self) -> bool:
        return not self._features

    def for_each_feature(self, callback: Callable[[Feature], Any]) -> Any:
        """Call ``callback`` per feature; stop early on a truthy return."""
        for feature in self.get_features():
            result = callback(feature)
            if result:
                return result
        return None

    def get_features_in_extent(self, extent: Sequence[float]) -> List[Feature]:
        """
        Return features whose geometry extent intersects ``extent``.

        Edges are inclusive. Results come back in insertion order.
        """
        tree = self._ensure_index()
        if not self._index_features or extent[2] < extent[0] or extent[3] < extent[1]:
            return []
        # non-finite bounds clamp to the largest floats
        query = shapely.box(*np.nan_to_num(np.asarray(extent, dtype=float)))
        hits = np.sort(tree.query(query))
        return [self._index_features[i] for i in hits]

    def get_extent(self) -> Extent:
        self._ensure_index()
        if not self._index_features:
            return create_empty()
        shapes = [f.get_geometry().shape for f in self._index_features]
        return [float(v) for v in shapely.total_bounds(shapes)]

    def get_wrap_x(self) -> bool:
        return self._wrap_x

    def _invalidate_index(self) -> None:
        self._index_tree = None

    def _ensure_index(self) -> STRtree:
        if self._index_tree is None:
            features = []
            shapes = []
            for feature in self._features.values():
                geometry = feature.get_geometry()
                if geometry is None:
                    continue
                features.append(feature)
                shapes.append(geometry.shape)
            self._index_features = features
            self._index_tree = STRtree(shapes)
        return self._index_tree

    # -----------------------------
    # Loading
    # -----------------------------

    def load_features(self, extent: Extent, resolution: float, projection: Any = None) -> None:
        """
        Run the loader for every strategy extent not loaded yet.

        Loaders report results by adding features, which dispatches
        ``change``; nothing is returned from here.
        """
        if self._loader is None:
            return
        for load_extent in self._strategy(extent, resolution):
            if any(contains_extent(done, load_extent) for done in self._loaded_extents):
                continue
            logger.debug("Loading features for extent %s at resolution %s", load_extent, resolution)
            self._loaded_extents.append(list(load_extent))
            self._loader(load_extent, resolution, projection)

    def remove_loaded_extent(self, extent: Sequence[float]) -> None:
        self._loaded_extents = [e for e in self._loaded_extents if list(e) != list(extent)]

    def get_loaded_extents(self) -> List[Extent]:
        return [list(e) for e in self._loaded_extents]
