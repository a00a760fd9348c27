"""Matrix item type."""

from dataclasses import asdict, dataclass
from typing import Any

from ..validators.version_utils import version_sort_key


@dataclass(frozen=True)
class MatrixItem:
    """One job in a cross-version test matrix.

    Items are hashable so that expansions of two versions files can be
    compared with set operations.
    """

    name: str
    flavor: str
    category: str
    job_name: str
    install: str
    run: str
    package: str
    version: str
    python: str
    java: str
    supported: bool
    free_disk_space: bool
    runs_on: str
    pre_test: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON form, omitting unset fields."""
        return {key: value for key, value in asdict(self).items() if value is not None}

    def sort_key(self) -> tuple:
        return (self.flavor, self.category, version_sort_key(self.version))
