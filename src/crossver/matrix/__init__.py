"""Matrix expansion, change filtering and splitting."""

from .changes import affects_all_flavors, filter_by_changes, get_changed_flavors
from .expand import MatrixExpander, expand_config
from .filters import filter_by_flavors_and_versions
from .items import MatrixItem
from .selection import select_versions
from .split import MAX_MATRIX_SIZE, split_matrix, to_matrix_json

__all__ = [
    "MAX_MATRIX_SIZE",
    "MatrixExpander",
    "MatrixItem",
    "affects_all_flavors",
    "expand_config",
    "filter_by_changes",
    "filter_by_flavors_and_versions",
    "get_changed_flavors",
    "select_versions",
    "split_matrix",
    "to_matrix_json",
]
