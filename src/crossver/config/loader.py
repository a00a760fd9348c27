"""Loader for the versions file, from disk or from a URL."""

import logging
from pathlib import Path
from typing import Any

import requests
import yaml

from ..errors import ConfigError

logger = logging.getLogger(__name__)


class ConfigLoader:
    """Loads and parses a versions YAML document."""

    @staticmethod
    def parse(text: str, origin: str) -> dict[str, Any]:
        """Parse YAML text into a mapping.

        Parameters
        ----------
        text : str
            YAML document
        origin : str
            Where the document came from, used in error messages

        Returns
        -------
        dict[str, Any]
            Parsed mapping, empty for an empty document

        Raises
        ------
        ConfigError
            If the YAML is invalid or its top level is not a mapping
        """
        try:
            data = yaml.safe_load(text)
        except yaml.YAMLError as e:
            msg = f"Invalid YAML in {origin}: {e}"
            raise ConfigError(msg) from e

        if data is None:
            return {}
        if not isinstance(data, dict):
            msg = f"Invalid versions file format at {origin}: expected a mapping"
            raise ConfigError(msg)
        return data

    @staticmethod
    def load(config_path: Path) -> dict[str, Any]:
        """Load a versions file from disk.

        Parameters
        ----------
        config_path : Path
            Path to the versions file

        Returns
        -------
        dict[str, Any]
            Loaded configuration

        Raises
        ------
        ConfigError
            If the file is missing or malformed
        """
        config_path = Path(config_path)
        if not config_path.exists():
            msg = f"Versions file not found: {config_path}"
            raise ConfigError(msg)

        with config_path.open() as f:
            return ConfigLoader.parse(f.read(), str(config_path))

    @staticmethod
    def load_url(url: str, timeout: float = 30.0) -> dict[str, Any]:
        """Fetch and parse a versions file over HTTP.

        A 404 means the file does not exist at that ref yet, which is
        treated as an empty configuration.

        Parameters
        ----------
        url : str
            Raw file URL
        timeout : float
            Request timeout in seconds

        Returns
        -------
        dict[str, Any]
            Loaded configuration

        Raises
        ------
        ConfigError
            If the request fails or the document is malformed
        """
        try:
            response = requests.get(url, timeout=timeout)
        except requests.RequestException as e:
            msg = f"Failed to fetch {url}: {e}"
            raise ConfigError(msg) from e

        if response.status_code == 404:  # noqa: PLR2004
            logger.warning("Versions file not found at %s, using an empty config", url)
            return {}

        try:
            response.raise_for_status()
        except requests.HTTPError as e:
            msg = f"Failed to fetch {url}: {e}"
            raise ConfigError(msg) from e

        return ConfigLoader.parse(response.text, url)


def load_versions_yaml(source: str | Path, timeout: float = 30.0) -> dict[str, Any]:
    """Load a versions file from a local path or an http(s) URL."""
    source_str = str(source)
    if source_str.startswith(("http://", "https://")):
        return ConfigLoader.load_url(source_str, timeout=timeout)
    return ConfigLoader.load(Path(source_str))
