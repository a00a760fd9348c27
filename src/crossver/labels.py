#!/usr/bin/env python3
"""CLI deriving matrix flags from pull request labels."""

import argparse
import json
import logging
import sys
from collections.abc import Iterable

import requests

from .config.settings import Settings
from .errors import ConfigError
from .reporters.github import format_bool, write_outputs
from .utils.github_api import RetryableError, list_issue_labels
from .utils.logging_config import configure_logging

logger = logging.getLogger(__name__)

ENABLE_DEV_TESTS_LABEL = "enable-dev-tests"
ONLY_LATEST_LABEL = "only-latest"


def resolve_label_flags(event_name: str, labels: Iterable[str]) -> dict[str, bool]:
    """Map an event and its labels to matrix flags.

    Only pull requests are narrowed; scheduled and manual runs always test
    development builds and every version.
    """
    if event_name != "pull_request":
        return {"enable_dev_tests": True, "only_latest": False}

    names = set(labels)
    return {
        "enable_dev_tests": ENABLE_DEV_TESTS_LABEL in names,
        "only_latest": ONLY_LATEST_LABEL in names,
    }


def parse_arguments(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Derive matrix flags from PR labels")
    parser.add_argument(
        "--event-name",
        required=True,
        help="Triggering event, e.g. pull_request or schedule",
    )
    parser.add_argument("--repository", help="Repository in owner/name form")
    parser.add_argument("--pr-num", type=int, help="Pull request number")

    args = parser.parse_args(argv)
    if args.event_name == "pull_request" and (not args.repository or args.pr_num is None):
        parser.error("--repository and --pr-num are required for pull_request events")
    return args


def main(argv: list[str] | None = None) -> int:
    """Print the flags as JSON and write them as step outputs.

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

    labels: list[str] = []
    if args.event_name == "pull_request":
        try:
            labels = list_issue_labels(
                args.repository,
                args.pr_num,
                token=settings.github_token,
                api_url=settings.github_api_url,
            )
        except (requests.RequestException, RetryableError) as e:
            print(f"Error: failed to list labels for {args.repository}#{args.pr_num}: {e}", file=sys.stderr)
            return 1

    flags = resolve_label_flags(args.event_name, labels)
    logger.info("Label flags: %s", flags)
    print(json.dumps(flags))

    if settings.github_output:
        write_outputs(
            {key: format_bool(value) for key, value in flags.items()},
            settings.github_output,
        )
    return 0


if __name__ == "__main__":
    sys.exit(main())
