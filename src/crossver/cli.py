#!/usr/bin/env python3
"""CLI generating the cross-version test matrices."""

import argparse
import logging
import sys

from .config.loader import load_versions_yaml
from .config.schema import parse_versions_config
from .config.settings import Settings
from .errors import CrossverError
from .matrix.changes import (
    DEFAULT_SOURCE_ROOTS,
    affects_all_flavors,
    filter_by_changes,
    get_changed_flavors,
    parse_changed_files,
)
from .matrix.expand import MatrixExpander
from .matrix.filters import filter_by_flavors_and_versions, parse_csv
from .matrix.items import MatrixItem
from .matrix.split import split_matrix
from .reporters.console import ConsoleReporter
from .reporters.github import GitHubActionsReporter
from .sources.pypi import PyPISource
from .utils.logging_config import configure_logging

logger = logging.getLogger(__name__)

DEFAULT_VERSIONS_YAML = "mlflow/ml-package-versions.yml"


def parse_arguments(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments.

    Returns
    -------
    argparse.Namespace
        Parsed arguments
    """
    parser = argparse.ArgumentParser(
        description="Generate cross-version test matrices from a versions file",
    )
    parser.add_argument(
        "--versions-yaml",
        default=DEFAULT_VERSIONS_YAML,
        help=f"Path or URL of the versions file (default: {DEFAULT_VERSIONS_YAML})",
    )
    parser.add_argument(
        "--ref-versions-yaml",
        help="Path or URL of the versions file on the base branch",
    )
    parser.add_argument(
        "--changed-files",
        help="Whitespace separated files changed by the pull request",
    )
    parser.add_argument(
        "--no-dev",
        action="store_true",
        help="Skip jobs that test development builds",
    )
    parser.add_argument(
        "--only-latest",
        action="store_true",
        help="Test only the latest release of each category",
    )
    parser.add_argument(
        "--flavors",
        help="Comma-separated flavors to test (default: all)",
    )
    parser.add_argument(
        "--versions",
        help="Comma-separated versions to test (default: all)",
    )
    parser.add_argument(
        "--source-roots",
        default=",".join(DEFAULT_SOURCE_ROOTS),
        help="Comma-separated top-level directories holding per-flavor code",
    )

    args = parser.parse_args(argv)
    if (args.ref_versions_yaml is None) != (args.changed_files is None):
        parser.error("--ref-versions-yaml and --changed-files must be used together")
    return args


def generate(args: argparse.Namespace, settings: Settings) -> tuple[list[MatrixItem], list[MatrixItem]]:
    """Build both matrices for the parsed arguments.

    Parameters
    ----------
    args : argparse.Namespace
        Parsed CLI arguments
    settings : Settings
        Runtime settings

    Returns
    -------
    tuple[list[MatrixItem], list[MatrixItem]]
        The two matrices

    Raises
    ------
    CrossverError
        On configuration, index, or size errors
    """
    expander = MatrixExpander(PyPISource(timeout=settings.http_timeout), settings)

    flavors = parse_versions_config(
        load_versions_yaml(args.versions_yaml, timeout=settings.http_timeout),
    )
    items = expander.expand(flavors, no_dev=args.no_dev, only_latest=args.only_latest)
    logger.info("Expanded %d flavor(s) into %d job(s)", len(flavors), len(items))

    if args.ref_versions_yaml is not None:
        ref_flavors = parse_versions_config(
            load_versions_yaml(args.ref_versions_yaml, timeout=settings.http_timeout),
        )
        ref_items = expander.expand(
            ref_flavors, no_dev=args.no_dev, only_latest=args.only_latest,
        )

        changed_files = parse_changed_files(args.changed_files)
        if affects_all_flavors(changed_files):
            changed_flavors = set(flavors)
        else:
            changed_flavors = get_changed_flavors(
                changed_files, flavors, source_roots=parse_csv(args.source_roots),
            )
        items = filter_by_changes(items, ref_items, changed_flavors)

    items = filter_by_flavors_and_versions(items, args.flavors, args.versions)
    return split_matrix(items)


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point.

    Returns
    -------
    int
        Exit code: 0 on success, 1 on configuration or index errors,
        2 on unexpected errors
    """
    try:
        settings = Settings.from_env()
    except CrossverError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    configure_logging(settings.log_level)
    args = parse_arguments(argv)

    try:
        matrix1, matrix2 = generate(args, settings)

        ConsoleReporter().output(matrix1, matrix2)
        if settings.github_output:
            GitHubActionsReporter(settings.github_output).output(matrix1, matrix2)

        return 0

    except CrossverError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    except KeyboardInterrupt:
        print("\n\nInterrupted by user", file=sys.stderr)
        return 130

    except Exception as e:
        logger.exception("Unexpected error occurred")
        print(f"Error: {e}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    sys.exit(main())
