"""Console reporter for local runs and CI logs."""

import json
import logging

from ..matrix.items import MatrixItem
from ..matrix.split import to_matrix_json
from .base import Reporter

logger = logging.getLogger(__name__)


def format_job_table(items: list[MatrixItem]) -> str:
    """Render job names with their python and runner, one per line."""
    if not items:
        return "  (no jobs)"
    width = max(len(item.job_name) for item in items)
    return "\n".join(
        f"  {item.job_name:<{width}}  python={item.python}  runs_on={item.runs_on}"
        for item in items
    )


class ConsoleReporter(Reporter):
    """Prints matrices as JSON to stdout and a job summary to the log."""

    def output(self, matrix1: list[MatrixItem], matrix2: list[MatrixItem]) -> None:
        for index, items in enumerate((matrix1, matrix2), start=1):
            logger.info("matrix%d (%d jobs):\n%s", index, len(items), format_job_table(items))

        print(
            json.dumps(
                {"matrix1": to_matrix_json(matrix1), "matrix2": to_matrix_json(matrix2)},
                indent=2,
            ),
        )
