"""GitHub Actions reporter writing step outputs."""

import json
import logging
import os

from ..matrix.items import MatrixItem
from ..matrix.split import to_matrix_json
from .base import Reporter

logger = logging.getLogger(__name__)


def write_outputs(outputs: dict[str, str], path: str | None = None) -> bool:
    """Append ``key=value`` lines to the GitHub Actions output file.

    Parameters
    ----------
    outputs : dict[str, str]
        Single-line output values
    path : str | None
        Output file, defaults to ``$GITHUB_OUTPUT``

    Returns
    -------
    bool
        False when no output file is configured
    """
    gh_out = path or os.environ.get("GITHUB_OUTPUT")
    if not gh_out:
        logger.warning("GITHUB_OUTPUT environment variable not set")
        return False

    with open(gh_out, "a") as f:
        for key, value in outputs.items():
            f.write(f"{key}={value}\n")
    return True


def format_bool(value: bool) -> str:
    return "true" if value else "false"


class GitHubActionsReporter(Reporter):
    """Writes matrix outputs consumed by downstream jobs."""

    def __init__(self, output_path: str | None = None):
        self.output_path = output_path

    def output(self, matrix1: list[MatrixItem], matrix2: list[MatrixItem]) -> None:
        outputs = {}
        for index, items in enumerate((matrix1, matrix2), start=1):
            outputs[f"matrix{index}"] = json.dumps(to_matrix_json(items), separators=(",", ":"))
            outputs[f"is_matrix{index}_empty"] = format_bool(not items)

        if write_outputs(outputs, self.output_path):
            logger.info(
                "Wrote matrix outputs (%d + %d jobs)", len(matrix1), len(matrix2),
            )
