"""Shared fixtures for CI/CD tests."""

import sys
from pathlib import Path

import pytest

# Make the unit helpers importable as top-level modules
sys.path.insert(0, str(Path(__file__).parent / "unit"))

from _test_helpers import FakeSource, create_mock_versions_config, write_versions_yaml  # noqa: E402


@pytest.fixture
def versions_config():
    """Return a small two-flavor versions configuration."""
    return create_mock_versions_config()


@pytest.fixture
def versions_yaml(tmp_path, versions_config):
    """Write the default versions configuration to disk."""
    return write_versions_yaml(tmp_path / "ml-package-versions.yml", versions_config)


@pytest.fixture
def fake_source():
    """Return an in-memory release source with a few packages."""
    return FakeSource(
        {
            "scikit-learn": ["1.0.2", "1.1.0", "1.1.3", "1.2.0", "1.2.2", "1.3.0rc1"],
            "xgboost": ["1.7.0", "1.7.6", "2.0.0", "2.0.3"],
        },
    )


@pytest.fixture
def clean_env(monkeypatch):
    """Remove environment variables that change CLI behaviour."""
    for name in (
        "GITHUB_OUTPUT",
        "GITHUB_TOKEN",
        "GITHUB_API_URL",
        "CROSSVER_LOG_LEVEL",
        "CROSSVER_DEFAULT_PYTHON",
        "CROSSVER_PYTHON_CANDIDATES",
        "CROSSVER_DEFAULT_JAVA",
        "CROSSVER_DEFAULT_RUNS_ON",
        "CROSSVER_HTTP_TIMEOUT",
    ):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch
