"""Splitting of jobs across the two available job matrices."""

from collections.abc import Iterable
from typing import Any

from ..errors import MatrixTooLargeError
from .items import MatrixItem

# GitHub Actions rejects a job matrix with more entries than this
MAX_MATRIX_SIZE = 256
NUM_MATRICES = 2


def split_matrix(
    items: Iterable[MatrixItem],
    max_size: int = MAX_MATRIX_SIZE,
) -> tuple[list[MatrixItem], list[MatrixItem]]:
    """Sort items and split them into two matrices.

    Parameters
    ----------
    items : Iterable[MatrixItem]
        All jobs to run
    max_size : int
        Maximum number of jobs per matrix

    Returns
    -------
    tuple[list[MatrixItem], list[MatrixItem]]
        First and second matrix; the second is empty when one suffices

    Raises
    ------
    MatrixTooLargeError
        If the jobs do not fit in two matrices
    """
    ordered = sorted(items, key=MatrixItem.sort_key)
    total = len(ordered)

    if total > max_size * NUM_MATRICES:
        msg = (
            f"{total} jobs exceed the limit of {max_size * NUM_MATRICES} "
            f"({NUM_MATRICES} matrices of {max_size})"
        )
        raise MatrixTooLargeError(msg)

    if total <= max_size:
        return ordered, []

    half = (total + 1) // 2
    return ordered[:half], ordered[half:]


def to_matrix_json(items: Iterable[MatrixItem]) -> dict[str, Any]:
    """Return the GitHub Actions ``strategy.matrix`` form of the items."""
    return {"include": [item.to_dict() for item in items]}
