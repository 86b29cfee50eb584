"""
Cluster source: exposes clusters of a wrapped vector source.

The source re-clusters the whole wrapped store whenever it is asked to
load at a new resolution, whenever the wrapped store reports a change, and
whenever a clustering option is set. Each pass replaces the exposed
clusters wholesale; cluster features are never updated in place.
"""

from __future__ import annotations

import logging
from typing import Any, List, Optional, Sequence

from ..geom.extent import Extent
from ..source.events import EventType, Listener
from ..source.feature import Feature
from ..source.vector import VectorSource
from .config import ClusterOptions, validate_distance
from .engine import ClusterDiagnostics, cluster_features
from .extractor import GeometryFunction, default_geometry_function

logger = logging.getLogger(__name__)


class PropertyClusterSource:
    """
    Clusters point features of ``source`` by distance and a shared property.

    Features are only clustered together when their ``group_key`` property
    values are equal. Each cluster feature carries ``features`` (members),
    ``groupkey`` and ``identifiers`` (members' ``index_key`` values as
    numbers, last member first).

    Until a resolution has been seen through :meth:`load_features` no
    clusters are produced.
    """

    def __init__(
        self,
        source: VectorSource,
        distance: float = 20,
        group_key: str = "",
        index_key: str = "",
        geometry_function: Optional[GeometryFunction] = None,
        wrap_x: bool = True,
    ):
        self.resolution: Optional[float] = None
        self.distance = validate_distance(distance)
        self.group_key = group_key
        self.index_key = index_key
        self.geometry_function = geometry_function or default_geometry_function

        self._features: List[Feature] = []
        self._diagnostics: Optional[ClusterDiagnostics] = None
        self._clusters = VectorSource(wrap_x=wrap_x)

        self.source = source
        self.source.on(EventType.CHANGE.value, self._on_source_change)

    @classmethod
    def from_options(
        cls,
        options: ClusterOptions,
        source: VectorSource,
        geometry_function: Optional[GeometryFunction] = None,
    ) -> "PropertyClusterSource":
        return cls(
            source,
            distance=options.distance,
            group_key=options.group_key,
            index_key=options.index_key,
            geometry_function=geometry_function,
            wrap_x=options.wrap_x,
        )

    # -----------------------------
    # Accessors
    # -----------------------------

    def get_distance(self) -> float:
        return self.distance

    def get_group_key(self) -> str:
        return self.group_key

    def get_index_key(self) -> str:
        return self.index_key

    def get_source(self) -> VectorSource:
        """Get a reference to the wrapped source."""
        return self.source

    def get_resolution(self) -> Optional[float]:
        return self.resolution

    def get_diagnostics(self) -> Optional[ClusterDiagnostics]:
        """Diagnostics of the last clustering pass, None before the first."""
        return self._diagnostics

    def get_features(self) -> List[Feature]:
        return self._clusters.get_features()

    def get_features_in_extent(self, extent: Sequence[float]) -> List[Feature]:
        return self._clusters.get_features_in_extent(extent)

    def get_extent(self) -> Extent:
        return self._clusters.get_extent()

    def get_wrap_x(self) -> bool:
        return self._clusters.get_wrap_x()

    def on(self, event_type: str, listener: Listener) -> None:
        self._clusters.on(event_type, listener)

    def un(self, event_type: str, listener: Listener) -> None:
        self._clusters.un(event_type, listener)

    # -----------------------------
    # Mutators (each forces a full re-cluster)
    # -----------------------------

    def set_distance(self, distance: float) -> None:
        """Set the distance in pixels between clusters."""
        self.distance = validate_distance(distance)
        logger.info("Cluster distance set to %s px", self.distance)
        self.refresh()

    def set_group_key(self, group_key: str) -> None:
        """Set the property features must share to cluster together."""
        self.group_key = group_key
        logger.info("Cluster group key set to %r", group_key)
        self.refresh()

    def set_index_key(self, index_key: str) -> None:
        """Set the property collected into cluster identifiers."""
        self.index_key = index_key
        logger.info("Cluster index key set to %r", index_key)
        self.refresh()

    def set_source(self, source: VectorSource) -> None:
        """Wrap a different source and re-cluster."""
        self.source.un(EventType.CHANGE.value, self._on_source_change)
        self.source = source
        self.source.on(EventType.CHANGE.value, self._on_source_change)
        self.refresh()

    # -----------------------------
    # Clustering
    # -----------------------------

    def load_features(self, extent: Extent, resolution: Optional[float], projection: Any = None) -> None:
        """
        Forward the load to the wrapped source, then re-cluster if the
        resolution differs from the one the current clusters were built at.
        """
        self.source.load_features(extent, resolution, projection)
        if resolution != self.resolution:
            logger.debug("Resolution changed %s -> %s, re-clustering", self.resolution, resolution)
            self._clusters.clear()
            self.resolution = resolution
            self._cluster()
            self._clusters.add_features(self._features)

    def refresh(self) -> None:
        """Drop the current clusters and cluster again."""
        self._clusters.clear()
        self._cluster()
        self._clusters.add_features(self._features)

    def dispose(self) -> None:
        """Stop listening to the wrapped source."""
        self.source.un(EventType.CHANGE.value, self._on_source_change)

    def _on_source_change(self, event_type: str) -> None:
        self.refresh()

    def _cluster(self) -> None:
        if self.resolution is None:
            self._features = []
            self._diagnostics = None
            return
        self._features, self._diagnostics = cluster_features(
            self.source,
            self.resolution,
            self.distance,
            group_key=self.group_key,
            index_key=self.index_key,
            geometry_function=self.geometry_function,
        )
