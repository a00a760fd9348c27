"""Expansion of a versions file into matrix items."""

import logging

from packaging.specifiers import InvalidSpecifier, SpecifierSet
from packaging.version import Version

from ..config.schema import CategoryConfig, FlavorConfig
from ..config.settings import Settings
from ..sources.base import Release, VersionSource
from ..validators.version_utils import DEV_VERSION, matches
from .items import MatrixItem
from .selection import select_versions

logger = logging.getLogger(__name__)


class MatrixExpander:
    """Expands flavors into matrix items using a release source."""

    def __init__(self, source: VersionSource, settings: Settings | None = None):
        """Initialize expander.

        Parameters
        ----------
        source : VersionSource
            Where package releases are looked up
        settings : Settings | None
            Defaults for python, java and runner labels
        """
        self.source = source
        self.settings = settings or Settings()

    def expand(
        self,
        flavors: dict[str, FlavorConfig],
        no_dev: bool = False,
        only_latest: bool = False,
    ) -> set[MatrixItem]:
        """Expand every flavor and category.

        Parameters
        ----------
        flavors : dict[str, FlavorConfig]
            Parsed versions file
        no_dev : bool
            Skip jobs for development builds
        only_latest : bool
            Test only the newest release of each category

        Returns
        -------
        set[MatrixItem]
            All generated jobs
        """
        items = set()
        for flavor in flavors.values():
            releases = self.source.fetch_releases(flavor.package_info.pip_release)
            for category_name, category in flavor.categories.items():
                items.update(
                    self._expand_category(
                        flavor, category_name, category, releases, no_dev, only_latest,
                    ),
                )
        return items

    def _expand_category(
        self,
        flavor: FlavorConfig,
        category_name: str,
        category: CategoryConfig,
        releases: dict[str, Release],
        no_dev: bool,
        only_latest: bool,
    ) -> list[MatrixItem]:
        label = f"{flavor.name}/{category_name}"
        versions = select_versions(releases, category, only_latest=only_latest, label=label)
        if flavor.package_info.install_dev and not no_dev:
            versions.append(DEV_VERSION)

        if not versions:
            logger.warning("%s: no versions to test", label)

        return [
            self._make_item(flavor, category_name, category, version, releases.get(version))
            for version in versions
        ]

    def _make_item(
        self,
        flavor: FlavorConfig,
        category_name: str,
        category: CategoryConfig,
        version: str,
        release: Release | None,
    ) -> MatrixItem:
        package = flavor.package_info.pip_release
        return MatrixItem(
            name=flavor.name,
            flavor=flavor.name,
            category=category_name,
            job_name=f"{flavor.name} / {category_name} / {version}",
            install=self.build_install(flavor, category, version),
            run=category.run.strip(),
            package=package,
            version=version,
            python=self.choose_python(category, version, release),
            java=self.choose_java(category, version),
            supported=version != DEV_VERSION,
            free_disk_space=category.free_disk_space,
            runs_on=category.runs_on or self.settings.default_runs_on,
            pre_test=category.pre_test.strip() if category.pre_test else None,
        )

    @staticmethod
    def matching_requirements(category: CategoryConfig, version: str) -> list[str]:
        """Collect extra requirements whose specifier matches the version."""
        return [
            req
            for spec, reqs in category.requirements.items()
            if matches(spec, version, dev_reference=category.maximum)
            for req in reqs
        ]

    def build_install(self, flavor: FlavorConfig, category: CategoryConfig, version: str) -> str:
        """Build the shell snippet installing the package under test."""
        extras = " ".join(f"'{req}'" for req in self.matching_requirements(category, version))

        if version == DEV_VERSION:
            install = flavor.package_info.install_dev.strip()
            if extras:
                install += f"\npip install {extras}"
            return install

        install = f"pip install '{flavor.package_info.pip_release}=={version}'"
        if extras:
            install += f" {extras}"
        return install

    def choose_python(
        self, category: CategoryConfig, version: str, release: Release | None,
    ) -> str:
        """Pick the python version a job runs on.

        An explicit ``python`` mapping wins. Otherwise the default python is
        used when the release's ``requires_python`` admits it, falling back
        to the oldest admitted candidate.
        """
        for spec, python in category.python.items():
            if matches(spec, version, dev_reference=category.maximum):
                return python

        default = self.settings.default_python
        if release is None or not release.requires_python:
            return default

        try:
            requires = SpecifierSet(release.requires_python)
        except InvalidSpecifier:
            logger.debug("Ignoring invalid requires_python %r", release.requires_python)
            return default

        if requires.contains(default):
            return default

        for candidate in sorted(self.settings.python_candidates, key=Version):
            if requires.contains(candidate):
                return candidate
        return default

    def choose_java(self, category: CategoryConfig, version: str) -> str:
        for spec, java in category.java.items():
            if matches(spec, version, dev_reference=category.maximum):
                return java
        return self.settings.default_java


def expand_config(
    flavors: dict[str, FlavorConfig],
    source: VersionSource,
    no_dev: bool = False,
    only_latest: bool = False,
    settings: Settings | None = None,
) -> set[MatrixItem]:
    """Expand parsed flavors into matrix items."""
    return MatrixExpander(source, settings).expand(flavors, no_dev=no_dev, only_latest=only_latest)
