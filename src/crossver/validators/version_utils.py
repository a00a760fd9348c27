"""Version parsing, comparison, and selection utilities."""

import re
from collections.abc import Iterable

from packaging.specifiers import InvalidSpecifier, SpecifierSet
from packaging.version import InvalidVersion, Version

DEV_VERSION = "dev"

_OPERATOR_PREFIX = re.compile(r"^\s*(==|!=|<=|>=|<|>|~=)")


def parse_version(version_str: str) -> Version | None:
    """Parse a version string, returning None when it is not PEP 440."""
    try:
        return Version(version_str)
    except InvalidVersion:
        return None


def is_stable_version(version_str: str) -> bool:
    """Check if version string represents a stable release.

    Parameters
    ----------
    version_str : str
        Version string to check

    Returns
    -------
    bool
        False for pre-releases, dev releases and unparsable strings
    """
    parsed = parse_version(version_str)
    if parsed is None:
        return False
    return not (parsed.is_prerelease or parsed.is_devrelease)


def to_specifier(spec: str) -> SpecifierSet:
    """Turn a specifier key into a SpecifierSet.

    A bare version such as ``1.2.3`` means ``== 1.2.3``.
    """
    text = spec.strip()
    if not _OPERATOR_PREFIX.match(text):
        text = f"=={text}"
    try:
        return SpecifierSet(text)
    except InvalidSpecifier as e:
        msg = f"Invalid version specifier: {spec!r}"
        raise ValueError(msg) from e


def matches(spec: str, version: str, dev_reference: str | None = None) -> bool:
    """Check whether a version satisfies a specifier key.

    Parameters
    ----------
    spec : str
        Specifier key, a bare version, or the literal ``dev``
    version : str
        Version to test, possibly ``dev``
    dev_reference : str | None
        Version that stands in for ``dev`` when evaluating real specifiers

    Returns
    -------
    bool
        True if the version matches
    """
    if spec.strip() == DEV_VERSION:
        return version == DEV_VERSION

    if version == DEV_VERSION:
        if dev_reference is None:
            return False
        version = dev_reference

    return to_specifier(spec).contains(Version(version), prereleases=True)


def version_sort_key(version: str) -> tuple[int, Version]:
    """Sort key placing ``dev`` after every release."""
    if version == DEV_VERSION:
        return (1, Version("0"))
    return (0, Version(version))


def select_latest_micro_versions(versions: Iterable[str]) -> list[str]:
    """Keep the latest micro release of every ``major.minor`` series.

    Parameters
    ----------
    versions : Iterable[str]
        Parsable release versions

    Returns
    -------
    list[str]
        Selected versions, sorted ascending
    """
    latest: dict[tuple[int, int], Version] = {}
    original: dict[Version, str] = {}

    for version_str in versions:
        parsed = Version(version_str)
        original[parsed] = version_str
        series = (parsed.major, parsed.minor)
        if series not in latest or parsed > latest[series]:
            latest[series] = parsed

    return [original[v] for v in sorted(latest.values())]
