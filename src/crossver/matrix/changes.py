"""Narrowing of the matrix to what a pull request touches."""

import logging
import re
from collections.abc import Iterable

from ..config.schema import FlavorConfig
from .items import MatrixItem

logger = logging.getLogger(__name__)

DEFAULT_SOURCE_ROOTS = ("mlflow", "tests")

# Files that define how the matrix itself is built
MATRIX_TRIGGER_FILES = (
    ".github/workflows/cross-version-tests.yml",
    ".github/workflows/cross-version-test-runner.yml",
)
MATRIX_TRIGGER_PREFIXES = ("src/crossver/",)

_FLAVOR_PATH = re.compile(
    r"^(?P<root>[^/]+)/(?P<name>[^/]+?)(?:_autolog(?:ging)?)?(?:\.py$|/)",
)


def parse_changed_files(changed_files: str | Iterable[str] | None) -> list[str]:
    """Normalize a whitespace separated string or iterable of paths."""
    if changed_files is None:
        return []
    if isinstance(changed_files, str):
        changed_files = changed_files.split()
    return [f.strip() for f in changed_files if f and f.strip()]


def get_changed_flavors(
    changed_files: Iterable[str],
    flavors: dict[str, FlavorConfig],
    source_roots: Iterable[str] = DEFAULT_SOURCE_ROOTS,
) -> set[str]:
    """Find the flavors whose sources or tests were changed.

    Parameters
    ----------
    changed_files : Iterable[str]
        Repository-relative paths
    flavors : dict[str, FlavorConfig]
        Known flavors; a flavor's ``module_name`` is accepted as an alias
    source_roots : Iterable[str]
        Top-level directories holding per-flavor code

    Returns
    -------
    set[str]
        Names of the changed flavors
    """
    roots = set(source_roots)
    aliases = {}
    for name, flavor in flavors.items():
        aliases[name] = name
        if flavor.package_info.module_name:
            aliases[flavor.package_info.module_name] = name

    changed = set()
    for path in changed_files:
        match = _FLAVOR_PATH.match(path)
        if not match or match.group("root") not in roots:
            continue
        flavor_name = aliases.get(match.group("name"))
        if flavor_name is not None:
            changed.add(flavor_name)

    logger.info("Changed flavors: %s", sorted(changed) or "none")
    return changed


def affects_all_flavors(changed_files: Iterable[str]) -> bool:
    """Check whether a file driving matrix generation itself changed."""
    for path in changed_files:
        if path in MATRIX_TRIGGER_FILES or path.startswith(MATRIX_TRIGGER_PREFIXES):
            logger.info("%s changed, testing all flavors", path)
            return True
    return False


def filter_by_changes(
    items: set[MatrixItem],
    ref_items: set[MatrixItem],
    changed_flavors: set[str],
) -> set[MatrixItem]:
    """Keep jobs for changed flavors plus jobs absent from the base branch.

    A job missing from ``ref_items`` means the versions file added a
    version or changed how an existing one is installed or run.
    """
    new_items = items - ref_items
    if new_items:
        logger.info("%d job(s) differ from the base versions file", len(new_items))
    return {item for item in items if item.flavor in changed_flavors} | new_items
