"""Environment-driven settings shared by the CLIs."""

import os
from dataclasses import dataclass, field

from ..errors import ConfigError


def _split_csv(value: str) -> list[str]:
    return [part.strip() for part in value.split(",") if part.strip()]


def _parse_timeout(value: str) -> float:
    try:
        timeout = float(value)
    except ValueError as e:
        msg = f"CROSSVER_HTTP_TIMEOUT must be a number, got {value!r}"
        raise ConfigError(msg) from e
    if timeout <= 0:
        msg = f"CROSSVER_HTTP_TIMEOUT must be positive, got {value!r}"
        raise ConfigError(msg)
    return timeout


@dataclass(frozen=True)
class Settings:
    """Runtime settings.

    Every field can be overridden through a ``CROSSVER_`` prefixed
    environment variable; GitHub provided variables keep their usual names.
    """

    log_level: str = "INFO"
    default_python: str = "3.10"
    python_candidates: list[str] = field(
        default_factory=lambda: ["3.10", "3.11", "3.12", "3.13"],
    )
    default_java: str = "11"
    default_runs_on: str = "ubuntu-latest"
    http_timeout: float = 30.0
    github_api_url: str = "https://api.github.com"
    github_token: str | None = None
    github_output: str | None = None

    @classmethod
    def from_env(cls, environ: dict[str, str] | None = None) -> "Settings":
        """Build settings from environment variables.

        Parameters
        ----------
        environ : dict[str, str] | None
            Mapping to read from, defaults to ``os.environ``

        Returns
        -------
        Settings
            Settings with environment overrides applied

        Raises
        ------
        ConfigError
            If CROSSVER_HTTP_TIMEOUT is not a positive number
        """
        env = os.environ if environ is None else environ
        defaults = cls()

        candidates = env.get("CROSSVER_PYTHON_CANDIDATES")
        timeout = env.get("CROSSVER_HTTP_TIMEOUT")

        return cls(
            log_level=env.get("CROSSVER_LOG_LEVEL", defaults.log_level).upper(),
            default_python=env.get("CROSSVER_DEFAULT_PYTHON", defaults.default_python),
            python_candidates=(
                _split_csv(candidates) if candidates else defaults.python_candidates
            ),
            default_java=env.get("CROSSVER_DEFAULT_JAVA", defaults.default_java),
            default_runs_on=env.get("CROSSVER_DEFAULT_RUNS_ON", defaults.default_runs_on),
            http_timeout=_parse_timeout(timeout) if timeout else defaults.http_timeout,
            github_api_url=env.get("GITHUB_API_URL", defaults.github_api_url).rstrip("/"),
            github_token=env.get("GITHUB_TOKEN") or None,
            github_output=env.get("GITHUB_OUTPUT") or None,
        )
