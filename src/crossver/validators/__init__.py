"""Version parsing and selection helpers."""

from .version_utils import (
    DEV_VERSION,
    is_stable_version,
    matches,
    select_latest_micro_versions,
    version_sort_key,
)

__all__ = [
    "DEV_VERSION",
    "is_stable_version",
    "matches",
    "select_latest_micro_versions",
    "version_sort_key",
]
