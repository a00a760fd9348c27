"""Manual filters applied to a generated matrix."""

from collections.abc import Iterable

from .items import MatrixItem


def parse_csv(value: str | None) -> set[str]:
    """Split a comma-separated value, ignoring blanks and whitespace."""
    if not value:
        return set()
    return {part.strip() for part in value.split(",") if part.strip()}


def filter_by_flavors_and_versions(
    items: Iterable[MatrixItem],
    flavors: str | None = None,
    versions: str | None = None,
) -> set[MatrixItem]:
    """Keep items matching the requested flavors and versions.

    Parameters
    ----------
    items : Iterable[MatrixItem]
        Items to filter
    flavors : str | None
        Comma-separated flavor names, empty for all
    versions : str | None
        Comma-separated versions (``dev`` included), empty for all

    Returns
    -------
    set[MatrixItem]
        Matching items
    """
    wanted_flavors = parse_csv(flavors)
    wanted_versions = parse_csv(versions)
    return {
        item
        for item in items
        if (not wanted_flavors or item.flavor in wanted_flavors)
        and (not wanted_versions or item.version in wanted_versions)
    }
