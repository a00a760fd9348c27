"""Exception types raised by crossver."""


class CrossverError(Exception):
    """Base class for all crossver errors."""


class ConfigError(CrossverError):
    """The versions file is missing, malformed, or inconsistent."""


class SourceError(CrossverError):
    """Package index data could not be fetched or understood."""


class MatrixTooLargeError(CrossverError):
    """Generated jobs do not fit in the available job matrices."""
