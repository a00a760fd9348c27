"""Typed view of the versions file.

The versions file maps flavor names to a ``package_info`` block and one or
more test categories::

    sklearn:
      package_info:
        pip_release: scikit-learn
        install_dev: |
          pip install git+https://github.com/scikit-learn/scikit-learn.git
      models:
        minimum: "1.0.2"
        maximum: "1.5.1"
        requirements:
          ">= 1.4": ["scipy>=1.11"]
        run: |
          pytest tests/sklearn/test_sklearn_model_export.py
"""

from dataclasses import dataclass, field
from typing import Any

from packaging.version import InvalidVersion, Version

from ..errors import ConfigError
from ..validators.version_utils import DEV_VERSION, to_specifier

PACKAGE_INFO_KEY = "package_info"


@dataclass(frozen=True)
class PackageInfo:
    """How a flavor's library is published and installed."""

    pip_release: str
    install_dev: str | None = None
    module_name: str | None = None


@dataclass(frozen=True)
class CategoryConfig:
    """Supported version range and test commands for one category."""

    minimum: str
    maximum: str
    run: str
    unsupported: list[str] = field(default_factory=list)
    requirements: dict[str, list[str]] = field(default_factory=dict)
    python: dict[str, str] = field(default_factory=dict)
    java: dict[str, str] = field(default_factory=dict)
    runs_on: str | None = None
    pre_test: str | None = None
    free_disk_space: bool = False
    allow_unreleased_max_version: bool = False

    @property
    def min_version(self) -> Version:
        return Version(self.minimum)

    @property
    def max_version(self) -> Version:
        return Version(self.maximum)


@dataclass(frozen=True)
class FlavorConfig:
    """A flavor and all of its test categories."""

    name: str
    package_info: PackageInfo
    categories: dict[str, CategoryConfig]


def _require(mapping: dict[str, Any], key: str, where: str) -> Any:
    if key not in mapping or mapping[key] is None:
        msg = f"Missing required key '{key}' in {where}"
        raise ConfigError(msg)
    return mapping[key]


def _as_mapping(value: Any, where: str) -> dict[str, Any]:
    if value is None:
        return {}
    if not isinstance(value, dict):
        msg = f"Expected a mapping in {where}, got {type(value).__name__}"
        raise ConfigError(msg)
    return value


def _parse_version(value: Any, where: str) -> str:
    text = str(value).strip()
    try:
        Version(text)
    except InvalidVersion as e:
        msg = f"Invalid version '{text}' in {where}"
        raise ConfigError(msg) from e
    return text


def _parse_package_info(raw: Any, flavor: str) -> PackageInfo:
    where = f"{flavor}.{PACKAGE_INFO_KEY}"
    info = _as_mapping(raw, where)
    return PackageInfo(
        pip_release=str(_require(info, "pip_release", where)),
        install_dev=info.get("install_dev"),
        module_name=info.get("module_name"),
    )


def _as_list(value: Any, where: str) -> list[Any]:
    if value is None:
        return []
    if not isinstance(value, list):
        msg = f"Expected a list in {where}, got {type(value).__name__}"
        raise ConfigError(msg)
    return value


def _check_specifiers(specs: list[str], where: str) -> None:
    for spec in specs:
        if spec.strip() == DEV_VERSION:
            continue
        try:
            to_specifier(spec)
        except ValueError as e:
            msg = f"{e} in {where}"
            raise ConfigError(msg) from e


def _parse_category(raw: Any, flavor: str, category: str) -> CategoryConfig:
    where = f"{flavor}.{category}"
    cfg = _as_mapping(raw, where)

    minimum = _parse_version(_require(cfg, "minimum", where), f"{where}.minimum")
    maximum = _parse_version(_require(cfg, "maximum", where), f"{where}.maximum")
    if Version(minimum) > Version(maximum):
        msg = f"minimum ({minimum}) is greater than maximum ({maximum}) in {where}"
        raise ConfigError(msg)

    requirements = {
        str(spec): [str(req) for req in _as_list(reqs, f"{where}.requirements")]
        for spec, reqs in _as_mapping(cfg.get("requirements"), f"{where}.requirements").items()
    }
    unsupported = [str(v) for v in _as_list(cfg.get("unsupported"), f"{where}.unsupported")]
    python = {
        str(k): str(v) for k, v in _as_mapping(cfg.get("python"), f"{where}.python").items()
    }
    java = {str(k): str(v) for k, v in _as_mapping(cfg.get("java"), f"{where}.java").items()}

    _check_specifiers(list(requirements), f"{where}.requirements")
    _check_specifiers(unsupported, f"{where}.unsupported")
    _check_specifiers(list(python), f"{where}.python")
    _check_specifiers(list(java), f"{where}.java")

    return CategoryConfig(
        minimum=minimum,
        maximum=maximum,
        run=str(_require(cfg, "run", where)),
        unsupported=unsupported,
        requirements=requirements,
        python=python,
        java=java,
        runs_on=cfg.get("runs_on"),
        pre_test=cfg.get("pre_test"),
        free_disk_space=bool(cfg.get("free_disk_space", False)),
        allow_unreleased_max_version=bool(cfg.get("allow_unreleased_max_version", False)),
    )


def parse_versions_config(raw: dict[str, Any]) -> dict[str, FlavorConfig]:
    """Validate a loaded versions file.

    Parameters
    ----------
    raw : dict[str, Any]
        Mapping returned by the loader

    Returns
    -------
    dict[str, FlavorConfig]
        Flavors keyed by name, in file order

    Raises
    ------
    ConfigError
        If a flavor or category is malformed
    """
    flavors = {}
    for name, body in raw.items():
        flavor_raw = _as_mapping(body, str(name))
        package_info = _parse_package_info(
            _require(flavor_raw, PACKAGE_INFO_KEY, str(name)), str(name),
        )
        categories = {
            str(category): _parse_category(cfg, str(name), str(category))
            for category, cfg in flavor_raw.items()
            if category != PACKAGE_INFO_KEY
        }
        flavors[str(name)] = FlavorConfig(
            name=str(name),
            package_info=package_info,
            categories=categories,
        )
    return flavors
