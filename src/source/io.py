"""pandas interchange for point features and cluster features."""

from __future__ import annotations

import math
from typing import Iterable, List, Optional

import numpy as np
import pandas as pd

from ..geom import Point
from .feature import Feature


def _clean_cell(value):
    if isinstance(value, np.generic):
        value = value.item()
    if isinstance(value, float) and math.isnan(value):
        return None
    return value


def features_from_dataframe(
    df: pd.DataFrame,
    *,
    x: str = "lng",
    y: str = "lat",
    id_column: Optional[str] = None,
) -> List[Feature]:
    """
    Build one point feature per row of ``df``.

    The ``x``/``y`` columns become the geometry; every other column becomes
    a feature property. NaN cells are stored as ``None`` so they read as
    absent attributes.

    Raises:
        KeyError: If ``x`` or ``y`` (or ``id_column``) is missing
    """
    missing = [col for col in (x, y, id_column) if col is not None and col not in df.columns]
    if missing:
        raise KeyError(f"Missing columns: {', '.join(missing)}")

    property_columns = [col for col in df.columns if col not in (x, y)]
    features: List[Feature] = []
    for record in df.to_dict("records"):
        properties = {col: _clean_cell(record[col]) for col in property_columns}
        feature = Feature(Point((float(record[x]), float(record[y]))), properties)
        if id_column is not None:
            feature.set_id(_clean_cell(record[id_column]))
        features.append(feature)
    return features


def clusters_to_dataframe(clusters: Iterable[Feature]) -> pd.DataFrame:
    """Flatten cluster features into one row per cluster."""
    rows = []
    for cluster in clusters:
        x, y = cluster.get_geometry().get_coordinates()
        members = cluster.get("features") or []
        rows.append(
            {
                "x": x,
                "y": y,
                "size": len(members),
                "groupkey": cluster.get("groupkey"),
                "identifiers": list(cluster.get("identifiers") or []),
                "member_ids": [m.get_id() for m in members],
            }
        )
    return pd.DataFrame(
        rows, columns=["x", "y", "size", "groupkey", "identifiers", "member_ids"]
    )
