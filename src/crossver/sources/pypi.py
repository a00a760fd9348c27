"""PyPI JSON API source for Python packages."""

import logging
from datetime import datetime
from typing import Any

import requests
from packaging.version import InvalidVersion, Version

from ..errors import SourceError
from .base import Release, VersionSource

logger = logging.getLogger(__name__)


class PyPISource(VersionSource):
    """Fetch package releases from PyPI, caching per package."""

    PYPI_API = "https://pypi.org/pypi/{}/json"

    def __init__(self, timeout: float = 30.0):
        self.timeout = timeout
        self._cache: dict[str, dict[str, Release]] = {}

    def fetch_releases(self, package: str) -> dict[str, Release]:
        """Fetch non-yanked releases from PyPI.

        Parameters
        ----------
        package : str
            Package name

        Returns
        -------
        dict[str, Release]
            Releases keyed by version string

        Raises
        ------
        SourceError
            If the request fails or the response is malformed
        """
        if package in self._cache:
            return self._cache[package]

        url = self.PYPI_API.format(package)
        logger.debug("Fetching releases for %s from %s", package, url)
        try:
            response = requests.get(url, timeout=self.timeout)
            response.raise_for_status()
            data = response.json()
        except requests.RequestException as e:
            msg = f"Failed to fetch releases for {package}: {e}"
            raise SourceError(msg) from e
        except ValueError as e:
            msg = f"Invalid JSON from PyPI for {package}: {e}"
            raise SourceError(msg) from e

        raw_releases = data.get("releases")
        if not isinstance(raw_releases, dict):
            msg = f"PyPI response for {package} has no 'releases' mapping"
            raise SourceError(msg)

        releases = {}
        for version_str, files in raw_releases.items():
            release = self._parse_release(version_str, files)
            if release is not None:
                releases[version_str] = release

        logger.debug("Found %d releases for %s", len(releases), package)
        self._cache[package] = releases
        return releases

    @staticmethod
    def _parse_release(version_str: str, files: list[dict[str, Any]]) -> Release | None:
        """Build a Release from the files uploaded for it.

        Releases without files, with only yanked files, or with a version
        that is not PEP 440 are skipped.
        """
        try:
            Version(version_str)
        except InvalidVersion:
            return None

        live = [f for f in files or [] if not f.get("yanked", False)]
        if not live:
            return None

        upload_times = [
            datetime.fromisoformat(f["upload_time_iso_8601"].replace("Z", "+00:00"))
            for f in live
            if f.get("upload_time_iso_8601")
        ]
        requires_python = next(
            (f["requires_python"] for f in live if f.get("requires_python")),
            None,
        )

        return Release(
            version=version_str,
            upload_time=min(upload_times) if upload_times else None,
            requires_python=requires_python,
        )
