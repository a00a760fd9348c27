"""Package index data sources."""

from .base import Release, VersionSource
from .pypi import PyPISource

__all__ = [
    "PyPISource",
    "Release",
    "VersionSource",
]
