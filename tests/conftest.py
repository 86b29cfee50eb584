"""
Pytest configuration and shared fixtures for cluster engine tests.

This file provides:
- Point feature factories
- Sample vector sources
- Common test utilities
"""

import os
from typing import Any, List

import numpy as np
import pytest

from src.geom import Point
from src.source import Feature, VectorSource


# ==============================================================================
# Feature Factories
# ==============================================================================

def point_feature(x: float, y: float, feature_id: Any = None, **properties) -> Feature:
    """Build a point feature with the given properties."""
    feature = Feature(Point((x, y)), properties)
    if feature_id is not None:
        feature.set_id(feature_id)
    return feature


@pytest.fixture
def abc_features() -> List[Feature]:
    """A(0,0), B(5,0), C(100,0), no properties."""
    return [
        point_feature(0, 0, "A"),
        point_feature(5, 0, "B"),
        point_feature(100, 0, "C"),
    ]


@pytest.fixture
def abc_source(abc_features) -> VectorSource:
    return VectorSource(features=abc_features)


@pytest.fixture
def categorized_features() -> List[Feature]:
    """Close points split over two categories, with numeric ids."""
    return [
        point_feature(0, 0, "a1", category="cafe", id=1),
        point_feature(1, 0, "b1", category="bar", id=2),
        point_feature(2, 0, "a2", category="cafe", id=3),
        point_feature(3, 0, "b2", category="bar", id="4"),
        point_feature(500, 500, "a3", category="cafe", id=5),
    ]


@pytest.fixture
def random_features() -> List[Feature]:
    """Seeded random points with a mix of group values (including absent)."""
    rng = np.random.default_rng(42)
    coords = rng.uniform(0, 200, size=(120, 2))
    groups = rng.choice(["a", "b", "none"], size=120)
    features = []
    for i, ((x, y), group) in enumerate(zip(coords, groups)):
        props = {"idx": i}
        if group != "none":
            props["group"] = str(group)
        features.append(point_feature(float(x), float(y), i, **props))
    return features


WORLD_EXTENT = [-1000.0, -1000.0, 1000.0, 1000.0]


@pytest.fixture
def world_extent() -> List[float]:
    return list(WORLD_EXTENT)


# ==============================================================================
# Environment Setup
# ==============================================================================

@pytest.fixture(scope="session", autouse=True)
def setup_test_environment():
    """Make sure the default cluster profile is used unless a test overrides it."""
    previous = os.environ.pop("CLUSTER_PROFILE", None)
    yield
    if previous is not None:
        os.environ["CLUSTER_PROFILE"] = previous


# ==============================================================================
# Utilities
# ==============================================================================

def assert_approx_equal(a: float, b: float, tolerance: float = 1e-9):
    """Assert two floats are approximately equal."""
    assert abs(a - b) < tolerance, f"{a} != {b} (tolerance={tolerance})"


def member_uids(cluster: Feature) -> List[str]:
    return [m.uid for m in cluster.get("features")]
