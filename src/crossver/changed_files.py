#!/usr/bin/env python3
"""CLI listing the files changed by a pull request."""

import argparse
import logging
import sys

import requests

from .config.settings import Settings
from .errors import ConfigError
from .utils.github_api import RetryableError, list_pull_request_files
from .utils.logging_config import configure_logging

logger = logging.getLogger(__name__)


def parse_arguments(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="List files changed by a pull request")
    parser.add_argument(
        "--repository",
        required=True,
        help="Repository in owner/name form",
    )
    parser.add_argument(
        "--pr-num",
        type=int,
        required=True,
        help="Pull request number",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    """Print one changed path per line.

    Returns
    -------
    int
        Exit code: 0 on success, 1 on configuration or API errors
    """
    try:
        settings = Settings.from_env()
    except ConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    configure_logging(settings.log_level)
    args = parse_arguments(argv)

    if not settings.github_token:
        logger.warning("GITHUB_TOKEN not set, using unauthenticated requests")

    try:
        files = list_pull_request_files(
            args.repository,
            args.pr_num,
            token=settings.github_token,
            api_url=settings.github_api_url,
        )
    except (requests.RequestException, RetryableError) as e:
        print(f"Error: failed to list files for {args.repository}#{args.pr_num}: {e}", file=sys.stderr)
        return 1

    logger.info("%s#%d changes %d file(s)", args.repository, args.pr_num, len(files))
    for path in files:
        print(path)
    return 0


if __name__ == "__main__":
    sys.exit(main())
