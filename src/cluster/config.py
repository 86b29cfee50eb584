"""Cluster options and their YAML profile binding."""

from __future__ import annotations

import math
from dataclasses import dataclass, fields
from typing import Any, Dict, Optional

from ..tools.config_loader import ConfigLoader

DEFAULT_DISTANCE = 20.0


def validate_distance(distance: float) -> float:
    """Return ``distance`` as a float, rejecting negative or non-finite values."""
    value = float(distance)
    if not math.isfinite(value) or value < 0:
        raise ValueError(f"distance must be a finite number >= 0, got {distance!r}")
    return value


@dataclass
class ClusterOptions:
    """Configuration for a property cluster source."""
    
    distance: float = DEFAULT_DISTANCE
    """Minimum distance in pixels between clusters."""
    
    group_key: str = ""
    """Attribute features must share to be clustered together."""
    
    index_key: str = ""
    """Attribute collected (as numbers) into each cluster's identifiers."""
    
    wrap_x: bool = True
    """Whether to wrap the world horizontally."""

    def __post_init__(self):
        self.distance = validate_distance(self.distance)

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "ClusterOptions":
        """Build options from a mapping, ignoring unknown keys."""
        known = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in (data or {}).items() if k in known})

    @classmethod
    def from_profile(cls, profile_name: Optional[str] = None) -> "ClusterOptions":
        """Load the ``cluster`` section of a YAML profile (env/default when None)."""
        if profile_name:
            profile = ConfigLoader.load_cluster_profile(profile_name)
        else:
            profile = ConfigLoader.load_default_or_env_profile()
        return cls.from_dict(profile.get("cluster", {}))


def get_cluster_options() -> ClusterOptions:
    """Convenience function to get options for the current profile."""
    return ClusterOptions.from_profile()
