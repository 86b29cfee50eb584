"""
Unit Tests for PropertyClusterSource (src/cluster/source.py)

Tests resolution gating, refresh on change notification and option setters.
"""

import math

import pytest

from src.cluster import (
    ClusterAssertionError,
    ClusterOptions,
    PropertyClusterSource,
    interior_point_geometry_function,
)
from src.geom import Point, Polygon
from src.source import EventType, Feature, VectorSource

from tests.conftest import point_feature


@pytest.fixture
def cluster_source(abc_source):
    return PropertyClusterSource(abc_source, distance=10)


# ==============================================================================
# Configuration Tests
# ==============================================================================

class TestConfiguration:
    """Test construction and accessors."""
    
    def test_defaults(self, abc_source):
        """Test default option values."""
        source = PropertyClusterSource(abc_source)
        
        assert source.get_distance() == 20
        assert source.get_group_key() == ""
        assert source.get_index_key() == ""
        assert source.get_source() is abc_source
        assert source.get_resolution() is None
        assert source.get_wrap_x() is True
    
    def test_from_options(self, abc_source):
        """Test building from ClusterOptions."""
        options = ClusterOptions(distance=15, group_key="category", index_key="id", wrap_x=False)
        
        source = PropertyClusterSource.from_options(options, abc_source)
        
        assert source.get_distance() == 15.0
        assert source.get_group_key() == "category"
        assert source.get_index_key() == "id"
        assert source.get_wrap_x() is False
    
    def test_negative_distance_rejected(self, abc_source):
        """Test distance validation."""
        with pytest.raises(ValueError):
            PropertyClusterSource(abc_source, distance=-1)
        
        source = PropertyClusterSource(abc_source)
        with pytest.raises(ValueError):
            source.set_distance(math.inf)


# ==============================================================================
# Resolution Gating Tests
# ==============================================================================

class TestLoadFeatures:
    """Test load_features resolution gating."""
    
    def test_unresolved_has_no_clusters(self, cluster_source, world_extent):
        """Test the idle state before a resolution is known."""
        assert cluster_source.get_features() == []
        
        cluster_source.refresh()
        assert cluster_source.get_features() == []
        assert cluster_source.get_diagnostics() is None
        
        cluster_source.load_features(world_extent, None)
        assert cluster_source.get_features() == []
    
    def test_losing_resolution_clears_diagnostics(self, cluster_source, world_extent):
        """Test that going back to no resolution drops clusters and diagnostics."""
        cluster_source.load_features(world_extent, 1.0)
        assert cluster_source.get_diagnostics() is not None
        
        cluster_source.load_features(world_extent, None)
        
        assert cluster_source.get_features() == []
        assert cluster_source.get_diagnostics() is None
    
    def test_first_load_clusters(self, cluster_source, world_extent):
        """Test the reference example through the facade."""
        cluster_source.load_features(world_extent, 1.0, "EPSG:3857")
        
        clusters = cluster_source.get_features()
        assert len(clusters) == 2
        assert clusters[0].get_geometry() == Point((2.5, 0))
        assert len(clusters[0].get("features")) == 2
        assert clusters[1].get_geometry() == Point((100, 0))
        assert cluster_source.get_resolution() == 1.0
        assert cluster_source.get_diagnostics().num_clusters == 2
    
    def test_same_resolution_keeps_clusters(self, cluster_source, world_extent):
        """Test that an unchanged resolution reuses the exposed clusters."""
        cluster_source.load_features(world_extent, 1.0)
        first = cluster_source.get_features()
        
        cluster_source.load_features([0, 0, 1, 1], 1.0)
        second = cluster_source.get_features()
        
        assert len(first) == len(second)
        assert all(a is b for a, b in zip(first, second))
    
    def test_new_resolution_rebuilds_clusters(self, cluster_source, world_extent):
        """Test that a changed resolution builds fresh clusters."""
        cluster_source.load_features(world_extent, 1.0)
        first = cluster_source.get_features()
        
        cluster_source.load_features(world_extent, 2.0)
        cluster_source.load_features(world_extent, 1.0)
        again = cluster_source.get_features()
        
        assert len(again) == len(first)
        assert not any(a is b for a, b in zip(first, again))
    
    def test_clustering_ignores_requested_extent(self, cluster_source):
        """Test that clustering covers the whole store, not the view."""
        cluster_source.load_features([-1, -1, 1, 1], 1.0)
        
        assert len(cluster_source.get_features()) == 2
    
    def test_load_forwards_to_base_store(self, abc_features):
        """Test that loads reach the wrapped store every time."""
        calls = []
        base = VectorSource(loader=lambda extent, res, proj: calls.append((res, proj)))
        base.add_features(abc_features)
        source = PropertyClusterSource(base, distance=10)
        
        source.load_features([0, 0, 1, 1], 1.0, "EPSG:3857")
        source.load_features([0, 0, 1, 1], 1.0, "EPSG:3857")
        
        # all strategy: the base store decides it is already loaded
        assert calls == [(1.0, "EPSG:3857")]
        assert len(source.get_features()) == 2
    
    def test_loader_populates_before_clustering(self, world_extent):
        """Test features loaded during load_features are clustered."""
        holder = {}
        
        def loader(extent, resolution, projection):
            holder["base"].add_features([point_feature(0, 0), point_feature(3, 4)])
        
        base = VectorSource(loader=loader)
        holder["base"] = base
        source = PropertyClusterSource(base, distance=10)
        
        source.load_features(world_extent, 1.0)
        
        assert len(source.get_features()) == 1
        assert source.get_features()[0].get_geometry() == Point((1.5, 2))


# ==============================================================================
# Refresh Tests
# ==============================================================================

class TestRefresh:
    """Test explicit and change-driven re-clustering."""
    
    def test_base_change_triggers_refresh(self, cluster_source, abc_source, world_extent):
        """Test re-clustering on base store change notification."""
        cluster_source.load_features(world_extent, 1.0)
        first = cluster_source.get_features()
        
        abc_source.add_feature(point_feature(500, 500))
        
        clusters = cluster_source.get_features()
        assert len(clusters) == 3
        assert not any(a is b for a, b in zip(first, clusters))
    
    def test_member_attribute_change_triggers_refresh(
        self, abc_features, abc_source, world_extent
    ):
        """Test that changing a grouped attribute regroups features."""
        source = PropertyClusterSource(abc_source, distance=10, group_key="category")
        source.load_features(world_extent, 1.0)
        assert len(source.get_features()) == 2
        
        abc_features[1].set("category", "bar")
        
        assert len(source.get_features()) == 3
    
    def test_refresh_rebuilds(self, cluster_source, world_extent):
        """Test that refresh always builds fresh clusters."""
        cluster_source.load_features(world_extent, 1.0)
        first = cluster_source.get_features()
        
        cluster_source.refresh()
        
        assert not any(a is b for a, b in zip(first, cluster_source.get_features()))
    
    def test_consumers_are_notified(self, cluster_source, world_extent):
        """Test that listeners on the cluster source see replacements."""
        events = []
        cluster_source.on(EventType.CHANGE.value, events.append)
        
        cluster_source.load_features(world_extent, 1.0)
        assert events
        
        events.clear()
        cluster_source.un(EventType.CHANGE.value, events.append)
        cluster_source.refresh()
        assert events == []
    
    def test_dispose_stops_listening(self, cluster_source, abc_source, world_extent):
        """Test that a disposed source ignores base changes."""
        cluster_source.load_features(world_extent, 1.0)
        first = cluster_source.get_features()
        
        cluster_source.dispose()
        abc_source.add_feature(point_feature(500, 500))
        
        assert cluster_source.get_features() == first
    
    def test_set_source(self, cluster_source, abc_source, world_extent):
        """Test swapping the wrapped store."""
        cluster_source.load_features(world_extent, 1.0)
        other = VectorSource(features=[point_feature(0, 0)])
        
        cluster_source.set_source(other)
        assert len(cluster_source.get_features()) == 1
        assert cluster_source.get_source() is other
        
        abc_source.add_feature(point_feature(500, 500))
        assert len(cluster_source.get_features()) == 1
    
    def test_default_policy_violation_propagates(self, cluster_source, abc_source, world_extent):
        """Test that a polygon in the base store aborts clustering."""
        cluster_source.load_features(world_extent, 1.0)
        
        with pytest.raises(ClusterAssertionError):
            abc_source.add_feature(Feature(Polygon([[(0, 0), (1, 0), (1, 1), (0, 0)]])))
    
    def test_custom_geometry_function(self, abc_source, world_extent):
        """Test clustering polygons with a custom geometry function."""
        abc_source.add_feature(Feature(Polygon([[(98, -2), (102, -2), (102, 2), (98, 2), (98, -2)]])))
        source = PropertyClusterSource(
            abc_source, distance=10, geometry_function=interior_point_geometry_function
        )
        
        source.load_features(world_extent, 1.0)
        
        clusters = source.get_features()
        assert len(clusters) == 2
        assert clusters[1].get_geometry().get_coordinates() == pytest.approx([100.0, 0.0])
        assert len(clusters[1].get("features")) == 2


# ==============================================================================
# Setter Tests
# ==============================================================================

class TestSetters:
    """Test that option setters force a full re-cluster."""
    
    def test_set_distance_recomputes_at_same_resolution(self, cluster_source, world_extent):
        """Test new cluster objects after setting distance, even to the same value."""
        cluster_source.load_features(world_extent, 1.0)
        first = cluster_source.get_features()
        
        cluster_source.set_distance(10)
        
        second = cluster_source.get_features()
        assert len(second) == len(first)
        assert not any(a is b for a, b in zip(first, second))
        
        cluster_source.set_distance(200)
        assert len(cluster_source.get_features()) == 1
        assert cluster_source.get_resolution() == 1.0
    
    def test_set_group_key(self, categorized_features, world_extent):
        """Test regrouping after changing the group key."""
        source = PropertyClusterSource(VectorSource(features=categorized_features), distance=10)
        source.load_features(world_extent, 1.0)
        assert len(source.get_features()) == 2
        
        source.set_group_key("category")
        
        assert source.get_group_key() == "category"
        assert [c.get("groupkey") for c in source.get_features()] == ["cafe", "bar", "cafe"]
    
    def test_set_index_key(self, categorized_features, world_extent):
        """Test identifiers after changing the index key."""
        source = PropertyClusterSource(VectorSource(features=categorized_features), distance=10)
        source.load_features(world_extent, 1.0)
        assert all(math.isnan(v) for v in source.get_features()[0].get("identifiers"))
        
        source.set_index_key("id")
        
        assert source.get_index_key() == "id"
        assert source.get_features()[0].get("identifiers") == [4.0, 3.0, 2.0, 1.0]
    
    def test_setters_before_resolution_stay_idle(self, cluster_source):
        """Test setters while unresolved expose nothing."""
        cluster_source.set_distance(50)
        cluster_source.set_group_key("category")
        
        assert cluster_source.get_features() == []
