"""Versions file loading and runtime settings."""

from .loader import ConfigLoader, load_versions_yaml
from .schema import CategoryConfig, FlavorConfig, PackageInfo, parse_versions_config
from .settings import Settings

__all__ = [
    "CategoryConfig",
    "ConfigLoader",
    "FlavorConfig",
    "PackageInfo",
    "Settings",
    "load_versions_yaml",
    "parse_versions_config",
]
