"""Unit tests for PyPISource class."""

from datetime import datetime, timezone
from unittest.mock import patch

import pytest
import requests
from _test_helpers import MockHTTPResponse, create_pypi_file, create_pypi_payload
from test_constants import HTTPStatus, TestPackages, TestTimeouts, TestURLs

from crossver.errors import SourceError
from crossver.sources.pypi import PyPISource


class TestPyPISource:
    """Test PyPISource functionality."""

    @patch("crossver.sources.pypi.requests.get")
    def test_fetch_releases_success(self, mock_get):
        """Verify releases are parsed from the PyPI JSON API."""
        mock_get.return_value = MockHTTPResponse(
            json_data=create_pypi_payload(
                {
                    "1.2.0": [create_pypi_file("2023-01-01T00:00:00Z", ">=3.8")],
                    "1.3.0": [create_pypi_file("2023-06-01T00:00:00Z", ">=3.9")],
                },
            ),
            status_code=HTTPStatus.OK,
        )

        releases = PyPISource().fetch_releases(TestPackages.SKLEARN)

        assert set(releases) == {"1.2.0", "1.3.0"}
        assert releases["1.3.0"].requires_python == ">=3.9"
        assert releases["1.2.0"].upload_time == datetime(2023, 1, 1, tzinfo=timezone.utc)
        mock_get.assert_called_once_with(
            TestURLs.PYPI_API.format(package=TestPackages.SKLEARN),
            timeout=TestTimeouts.HTTP_REQUEST,
        )

    @patch("crossver.sources.pypi.requests.get")
    def test_skips_unusable_releases(self, mock_get):
        """Verify empty, fully yanked and non-PEP 440 releases are dropped."""
        mock_get.return_value = MockHTTPResponse(
            json_data=create_pypi_payload(
                {
                    "1.0.0": [create_pypi_file()],
                    "1.0.1": [],
                    "1.0.2": [create_pypi_file(yanked=True)],
                    "1.0.3": [create_pypi_file(yanked=True), create_pypi_file()],
                    "not-a-version": [create_pypi_file()],
                },
            ),
        )

        releases = PyPISource().fetch_releases(TestPackages.SKLEARN)

        assert set(releases) == {"1.0.0", "1.0.3"}

    @patch("crossver.sources.pypi.requests.get")
    def test_earliest_upload_time_wins(self, mock_get):
        """Verify the release time is its first file upload."""
        mock_get.return_value = MockHTTPResponse(
            json_data=create_pypi_payload(
                {
                    "1.0.0": [
                        create_pypi_file("2023-02-01T00:00:00Z"),
                        create_pypi_file("2023-01-15T00:00:00Z"),
                    ],
                },
            ),
        )

        release = PyPISource().fetch_releases(TestPackages.SKLEARN)["1.0.0"]

        assert release.upload_time == datetime(2023, 1, 15, tzinfo=timezone.utc)

    @patch("crossver.sources.pypi.requests.get")
    def test_results_are_cached(self, mock_get):
        """Verify each package is fetched only once per source."""
        mock_get.return_value = MockHTTPResponse(
            json_data=create_pypi_payload({"1.0.0": [create_pypi_file()]}),
        )
        source = PyPISource()

        source.fetch_releases(TestPackages.SKLEARN)
        source.fetch_releases(TestPackages.SKLEARN)

        assert mock_get.call_count == 1

    @patch("crossver.sources.pypi.requests.get")
    def test_package_not_found_raises(self, mock_get):
        """Verify HTTP 404 errors raise SourceError."""
        mock_get.return_value = MockHTTPResponse(status_code=HTTPStatus.NOT_FOUND)

        with pytest.raises(SourceError, match="nonexistent-package"):
            PyPISource().fetch_releases("nonexistent-package")

    @patch("crossver.sources.pypi.requests.get")
    def test_network_timeout_raises(self, mock_get):
        """Verify timeouts raise SourceError."""
        mock_get.side_effect = requests.Timeout("Connection timeout")

        with pytest.raises(SourceError, match="Connection timeout"):
            PyPISource().fetch_releases(TestPackages.SKLEARN)

    @patch("crossver.sources.pypi.requests.get")
    def test_invalid_json_raises(self, mock_get):
        """Verify malformed JSON raises SourceError."""
        mock_get.return_value = MockHTTPResponse(json_data=None)

        with pytest.raises(SourceError, match="Invalid JSON"):
            PyPISource().fetch_releases(TestPackages.SKLEARN)

    @patch("crossver.sources.pypi.requests.get")
    def test_missing_releases_key_raises(self, mock_get):
        """Verify a response without releases raises SourceError."""
        mock_get.return_value = MockHTTPResponse(json_data={"info": {"version": "1.0"}})

        with pytest.raises(SourceError, match="releases"):
            PyPISource().fetch_releases(TestPackages.SKLEARN)
