"""Pydantic models for the cluster server."""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, Field, field_validator


class PointFeature(BaseModel):
    """A point feature posted for clustering."""

    id: Optional[Union[int, str]] = None
    x: float = Field(..., description="X coordinate in map units")
    y: float = Field(..., description="Y coordinate in map units")
    properties: Dict[str, Any] = Field(default_factory=dict)


class ClusterRequest(BaseModel):
    features: List[PointFeature]
    resolution: float = Field(..., gt=0, description="Map units per pixel")
    extent: Optional[List[float]] = Field(
        default=None, description="View extent [minx, miny, maxx, maxy]"
    )
    distance: Optional[float] = Field(default=None, ge=0, description="Pixels between clusters")
    group_key: Optional[str] = Field(default=None, alias="groupKey")
    index_key: Optional[str] = Field(default=None, alias="indexKey")
    profile: Optional[str] = Field(default=None, description="Cluster profile name")

    model_config = {"populate_by_name": True}

    @field_validator("extent")
    @classmethod
    def _validate_extent(cls, value: Optional[List[float]]) -> Optional[List[float]]:
        if value is not None and len(value) != 4:
            raise ValueError("extent must have exactly four values")
        return value


class ClusterSummary(BaseModel):
    x: float
    y: float
    size: int
    groupkey: Any = None
    identifiers: List[Optional[float]] = Field(default_factory=list)
    member_ids: List[Any] = Field(default_factory=list, alias="memberIds")

    model_config = {"populate_by_name": True}


class DiagnosticsSummary(BaseModel):
    num_features: int = Field(..., alias="numFeatures")
    num_clusters: int = Field(..., alias="numClusters")
    num_clustered: int = Field(..., alias="numClustered")
    num_excluded: int = Field(..., alias="numExcluded")
    map_distance: float = Field(..., alias="mapDistance")

    model_config = {"populate_by_name": True}


class ClusterResponse(BaseModel):
    clusters: List[ClusterSummary]
    diagnostics: Optional[DiagnosticsSummary] = None
