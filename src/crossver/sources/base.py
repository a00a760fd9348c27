"""Abstract base class for release sources."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class Release:
    """A single published release of a package."""

    version: str
    upload_time: datetime | None = None
    requires_python: str | None = None


class VersionSource(ABC):
    """Abstract base class for fetching release information."""

    @abstractmethod
    def fetch_releases(self, package: str) -> dict[str, Release]:
        """Fetch all releases of a package.

        Parameters
        ----------
        package : str
            Package name on the index

        Returns
        -------
        dict[str, Release]
            Releases keyed by version string

        Raises
        ------
        SourceError
            If the index cannot be queried
        """
