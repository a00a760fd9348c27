"""Shared GitHub API utilities for the CI tools."""

import logging
import time
from functools import wraps
from typing import Any

import requests

logger = logging.getLogger(__name__)

GITHUB_API_BASE_URL = "https://api.github.com"
GITHUB_API_ACCEPT_HEADER = "application/vnd.github+json"
GITHUB_API_VERSION = "2022-11-28"
PER_PAGE = 100

RETRYABLE_STATUS_CODES = {429, 500, 502, 503, 504}


class RetryableError(Exception):
    """Error that should trigger a retry attempt."""


def retry_with_backoff(max_retries: int = 3, base_delay: float = 1.0, max_delay: float = 60.0):
    """
    Decorator for retrying functions with exponential backoff.

    Parameters
    ----------
    max_retries : int, optional
        Maximum number of attempts (default: 3)
    base_delay : float, optional
        Initial delay between retries in seconds (default: 1.0)
    max_delay : float, optional
        Maximum delay between retries in seconds (default: 60.0)

    Returns
    -------
    callable
        Decorated function with retry logic

    Notes
    -----
    - Only retries on RetryableError exceptions
    - Uses exponential backoff: delay = min(base_delay * (2 ** attempt), max_delay)
    - Non-retryable errors are raised immediately
    """
    def decorator(func):
        @wraps(func)
        def wrapper(*args, **kwargs):
            for attempt in range(max_retries):
                try:
                    return func(*args, **kwargs)
                except RetryableError as e:
                    if attempt == max_retries - 1:
                        logger.error(
                            "Max retries (%d) reached for %s: %s", max_retries, func.__name__, e,
                        )
                        raise

                    delay = min(base_delay * (2 ** attempt), max_delay)
                    logger.warning(
                        "Retry %d/%d for %s after %ss: %s",
                        attempt + 1, max_retries, func.__name__, delay, e,
                    )
                    time.sleep(delay)

            return None  # Should never reach here
        return wrapper
    return decorator


def build_headers(token: str | None) -> dict[str, str]:
    """Build request headers, authenticating only when a token is given."""
    headers = {
        "Accept": GITHUB_API_ACCEPT_HEADER,
        "X-GitHub-Api-Version": GITHUB_API_VERSION,
    }
    if token:
        headers["Authorization"] = f"Bearer {token}"
    return headers


@retry_with_backoff(max_retries=3, base_delay=1.0, max_delay=10.0)
def github_api_request(
    url: str,
    token: str | None = None,
    params: dict[str, Any] | None = None,
    timeout: float = 30.0,
) -> Any:
    """
    Make a GitHub API request with automatic retry logic.

    Parameters
    ----------
    url : str
        GitHub API endpoint URL
    token : str | None
        GitHub authentication token, anonymous when None
    params : dict[str, Any] | None
        Query parameters
    timeout : float
        Request timeout in seconds

    Returns
    -------
    Any
        Decoded JSON response

    Raises
    ------
    requests.HTTPError
        If the API returns a non-retryable error status
    RetryableError
        If max retries exceeded on transient errors

    Notes
    -----
    Retries on rate limits and server errors (429, 500, 502, 503, 504)
    and on connection failures. Other client errors propagate.
    """
    try:
        response = requests.get(url, headers=build_headers(token), params=params, timeout=timeout)
    except (requests.ConnectionError, requests.Timeout) as e:
        msg = f"Request to {url} failed: {e}"
        raise RetryableError(msg) from e

    if response.status_code in RETRYABLE_STATUS_CODES:
        msg = f"GitHub API returned {response.status_code}: {response.reason}"
        raise RetryableError(msg)

    response.raise_for_status()
    return response.json()


def paginate(
    url: str,
    token: str | None = None,
    per_page: int = PER_PAGE,
    timeout: float = 30.0,
) -> list[Any]:
    """Collect every page of a list endpoint.

    Stops at the first page shorter than ``per_page``.
    """
    results: list[Any] = []
    page = 1
    while True:
        batch = github_api_request(
            url, token, params={"per_page": per_page, "page": page}, timeout=timeout,
        )
        results.extend(batch)
        if len(batch) < per_page:
            return results
        page += 1


def list_pull_request_files(
    repository: str,
    pr_number: int,
    token: str | None = None,
    api_url: str = GITHUB_API_BASE_URL,
) -> list[str]:
    """Return the paths changed by a pull request.

    Parameters
    ----------
    repository : str
        Repository in ``owner/name`` form
    pr_number : int
        Pull request number
    token : str | None
        GitHub authentication token
    api_url : str
        API base URL

    Returns
    -------
    list[str]
        Changed file paths, in API order
    """
    url = f"{api_url}/repos/{repository}/pulls/{pr_number}/files"
    return [entry["filename"] for entry in paginate(url, token)]


def list_issue_labels(
    repository: str,
    issue_number: int,
    token: str | None = None,
    api_url: str = GITHUB_API_BASE_URL,
) -> list[str]:
    """Return the label names on an issue or pull request."""
    url = f"{api_url}/repos/{repository}/issues/{issue_number}/labels"
    return [entry["name"] for entry in paginate(url, token)]
