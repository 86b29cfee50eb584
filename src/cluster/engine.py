"""
Greedy bounding-box clustering.

A single pass over the features in store order:
1. The first unclustered feature with a point becomes an anchor
2. The anchor's point is buffered into a square of half-side
   ``distance * resolution`` (map units)
3. Every same-group feature in that square not yet taken joins the anchor
4. The group becomes one cluster feature

The result depends on input order. Because the search area is a box, two
points up to ``sqrt(2)`` times the map distance apart on a diagonal can end
up together, and because each anchor only looks around itself, a cluster
can span further than the map distance from its centroid.
"""

from __future__ import annotations

import json
import logging
from dataclasses import asdict, dataclass, field
from typing import Any, Iterable, List, Optional, Set, Tuple

from ..geom import buffer, create_empty, create_or_update_from_coordinate
from ..source.feature import Feature
from ..source.vector import VectorSource
from .builder import create_cluster
from .extractor import GeometryFunction, default_geometry_function

logger = logging.getLogger(__name__)


def same_group(a: Any, b: Any) -> bool:
    """Strict group value equality: booleans never match numbers."""
    if isinstance(a, bool) != isinstance(b, bool):
        return False
    return a == b


@dataclass
class ClusterDiagnostics:
    """Summary of one clustering pass."""

    num_features: int
    """Features considered (store snapshot size)."""

    num_clusters: int
    """Clusters produced."""

    num_clustered: int = 0
    """Features that ended up in some cluster."""

    num_excluded: int = 0
    """Features left out because no clustering point could be derived."""

    cluster_sizes: List[int] = field(default_factory=list)
    """Member count per cluster, in output order."""

    resolution: Optional[float] = None
    """Map units per pixel the pass ran at."""

    map_distance: float = 0.0
    """Pixel distance converted to map units."""

    def to_dict(self):
        return asdict(self)


def cluster_features(
    source: VectorSource,
    resolution: float,
    distance: float,
    group_key: str = "",
    index_key: str = "",
    geometry_function: Optional[GeometryFunction] = None,
    features: Optional[Iterable[Feature]] = None,
) -> Tuple[List[Feature], ClusterDiagnostics]:
    """
    Partition the features of ``source`` into cluster features.

    Args:
        source: Store queried for neighbours with ``get_features_in_extent``
        resolution: Map units per pixel
        distance: Clustering distance in pixels
        group_key: Attribute whose value must match for features to cluster
        index_key: Attribute collected into each cluster's ``identifiers``
        geometry_function: Point extraction policy (default: Point geometries only)
        features: Anchors to walk, in order (default: ``source.get_features()``)

    Returns:
        (clusters, diagnostics)

    Raises:
        ClusterAssertionError: If the default geometry function meets a
            non-point geometry
    """
    if geometry_function is None:
        geometry_function = default_geometry_function
    if features is None:
        features = source.get_features()
    features = list(features)

    map_distance = distance * resolution
    extent = create_empty()
    clustered: Set[str] = set()
    clusters: List[Feature] = []

    for feature in features:
        if feature.uid in clustered:
            continue
        geometry = geometry_function(feature)
        if geometry is None:
            continue

        key = feature.get(group_key)
        create_or_update_from_coordinate(geometry.get_coordinates(), extent)
        buffer(extent, map_distance, extent)

        neighbors = []
        for candidate in source.get_features_in_extent(extent):
            if not same_group(candidate.get(group_key), key):
                continue
            if candidate.uid in clustered:
                continue
            clustered.add(candidate.uid)
            neighbors.append(candidate)

        if neighbors:
            cluster = create_cluster(key, neighbors, geometry_function, index_key)
            if cluster is not None:
                clusters.append(cluster)

    sizes = [len(c.get("features")) for c in clusters]
    diagnostics = ClusterDiagnostics(
        num_features=len(features),
        num_clusters=len(clusters),
        num_clustered=sum(sizes),
        num_excluded=len(features) - sum(sizes),
        cluster_sizes=sizes,
        resolution=resolution,
        map_distance=map_distance,
    )
    if logger.isEnabledFor(logging.DEBUG):
        logger.debug(f"Clustering pass: {json.dumps(diagnostics.to_dict())}")
    return clusters, diagnostics
