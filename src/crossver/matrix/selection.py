"""Selection of the release versions to test for a category."""

import logging

from packaging.version import Version

from ..config.schema import CategoryConfig
from ..sources.base import Release
from ..validators.version_utils import (
    is_stable_version,
    matches,
    select_latest_micro_versions,
)

logger = logging.getLogger(__name__)


def is_unsupported(version: str, unsupported: list[str]) -> bool:
    """Check a version against the category's ``unsupported`` entries."""
    return any(matches(spec, version) for spec in unsupported)


def select_versions(
    releases: dict[str, Release],
    category: CategoryConfig,
    only_latest: bool = False,
    label: str = "",
) -> list[str]:
    """Pick the released versions a category should be tested against.

    Parameters
    ----------
    releases : dict[str, Release]
        Releases of the package keyed by version
    category : CategoryConfig
        Category providing the version range and exclusions
    only_latest : bool
        Keep only the newest selected version
    label : str
        Name used in log messages

    Returns
    -------
    list[str]
        Selected versions, sorted ascending
    """
    min_ver, max_ver = category.min_version, category.max_version

    if not category.allow_unreleased_max_version and not any(
        Version(v) == max_ver for v in releases
    ):
        logger.warning("%s: maximum version %s has not been released", label, category.maximum)

    in_range = [
        v
        for v in releases
        if is_stable_version(v)
        and min_ver <= Version(v) <= max_ver
        and not is_unsupported(v, category.unsupported)
    ]

    selected = set(select_latest_micro_versions(in_range))
    minimum = next((v for v in in_range if Version(v) == min_ver), None)
    if minimum is not None:
        selected.add(minimum)

    ordered = sorted(selected, key=Version)
    if only_latest:
        ordered = ordered[-1:]

    logger.debug("%s: selected versions %s", label, ordered)
    return ordered
