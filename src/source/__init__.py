"""
src/source: Features, change notification and vector feature collections.

``VectorSource`` is both the store that holds unclustered features and the
collection a cluster source exposes its clusters through.
"""

from .events import EventType, Observable
from .feature import Feature
from .io import clusters_to_dataframe, features_from_dataframe
from .vector import VectorSource, all_strategy, bbox_strategy

__all__ = [
    "EventType",
    "Observable",
    "Feature",
    "clusters_to_dataframe",
    "features_from_dataframe",
    "VectorSource",
    "all_strategy",
    "bbox_strategy",
]
