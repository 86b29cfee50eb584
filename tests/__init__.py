"""Test package for the property cluster engine.

This package contains:
- Unit tests (test_geom.py, test_source.py, test_cluster.py, test_cluster_source.py, test_config.py)
- HTTP action tests (test_actions.py)
- Integration tests (test_integration.py)
- Test configuration (conftest.py)
"""
