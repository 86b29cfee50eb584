"""Clustering helpers built on top of :mod:`src.cluster`."""

from __future__ import annotations

import math
from typing import Any, List, Optional

import numpy as np
import pandas as pd

from src.cluster import ClusterOptions, PropertyClusterSource
from src.geom import Point
from src.source import Feature, VectorSource, clusters_to_dataframe

from ..schemas.models import (
    ClusterRequest,
    ClusterResponse,
    ClusterSummary,
    DiagnosticsSummary,
    PointFeature,
)


def _finite_or_none(value: float) -> Optional[float]:
    return value if math.isfinite(value) else None


def _plain(value: Any) -> Any:
    if isinstance(value, np.generic):
        value = value.item()
    if isinstance(value, float) and math.isnan(value):
        return None
    return value


def source_from_points(points: List[PointFeature]) -> VectorSource:
    """Build the base vector source from posted point features."""

    features = []
    for point in points:
        feature = Feature(Point((point.x, point.y)), point.properties)
        if point.id is not None:
            feature.set_id(point.id)
        features.append(feature)
    return VectorSource(features=features)


def resolve_options(request: ClusterRequest, profile_options: ClusterOptions) -> ClusterOptions:
    """Request values win over profile values when set."""

    return ClusterOptions(
        distance=request.distance if request.distance is not None else profile_options.distance,
        group_key=request.group_key if request.group_key is not None else profile_options.group_key,
        index_key=request.index_key if request.index_key is not None else profile_options.index_key,
        wrap_x=profile_options.wrap_x,
    )


def dataframe_to_cluster_models(df: pd.DataFrame) -> List[ClusterSummary]:
    models: List[ClusterSummary] = []
    for row in df.itertuples():
        models.append(
            ClusterSummary(
                x=float(row.x),
                y=float(row.y),
                size=int(row.size),
                groupkey=_plain(row.groupkey),
                identifiers=[_finite_or_none(v) for v in row.identifiers],
                memberIds=[_plain(v) for v in row.member_ids],
            )
        )
    return models


def cluster_points(request: ClusterRequest, options: ClusterOptions) -> ClusterResponse:
    """Cluster the posted points once at the requested resolution."""

    base = source_from_points(request.features)
    cluster_source = PropertyClusterSource.from_options(options, base)
    extent = request.extent or base.get_extent()
    cluster_source.load_features(extent, request.resolution)

    clusters_df = clusters_to_dataframe(cluster_source.get_features())
    diagnostics = cluster_source.get_diagnostics()
    cluster_source.dispose()

    summary = None
    if diagnostics is not None:
        summary = DiagnosticsSummary(
            numFeatures=diagnostics.num_features,
            numClusters=diagnostics.num_clusters,
            numClustered=diagnostics.num_clustered,
            numExcluded=diagnostics.num_excluded,
            mapDistance=diagnostics.map_distance,
        )
    return ClusterResponse(clusters=dataframe_to_cluster_models(clusters_df), diagnostics=summary)
