"""
src/cluster: Greedy, property-partitioned point clustering.

Usage:
    from src.cluster import PropertyClusterSource
    from src.source import VectorSource

    base = VectorSource(features=points)
    clusters = PropertyClusterSource(base, distance=40, group_key="category")
    clusters.load_features(extent, resolution, projection)
    clusters.get_features()
"""

from .builder import create_cluster, to_number
from .config import ClusterOptions, get_cluster_options, validate_distance
from .engine import ClusterDiagnostics, cluster_features
from .errors import ClusterAssertionError, GEOMETRY_NOT_POINT
from .extractor import (
    GeometryFunction,
    default_geometry_function,
    interior_point_geometry_function,
)
from .source import PropertyClusterSource

__all__ = [
    "create_cluster",
    "to_number",
    "ClusterOptions",
    "get_cluster_options",
    "validate_distance",
    "ClusterDiagnostics",
    "cluster_features",
    "ClusterAssertionError",
    "GEOMETRY_NOT_POINT",
    "GeometryFunction",
    "default_geometry_function",
    "interior_point_geometry_function",
    "PropertyClusterSource",
]
