"""Configuration tools."""

from .config_loader import ConfigLoader, DEFAULT_PROFILE, get_config

__all__ = [
    "ConfigLoader",
    "DEFAULT_PROFILE",
    "get_config",
]
