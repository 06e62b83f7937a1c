"""Exceptions raised by ndf sources and configuration."""

from typing import Optional


class NdfError(Exception):
    """Base exception for ndf errors."""
    pass


class SourceUnavailable(NdfError):
    """A volume or mount listing could not be obtained at all."""
    pass


class PathQueryFailed(NdfError):
    """Usage statistics for a single mount path could not be read."""

    def __init__(self, path: str, message: str):
        super().__init__(f"{path}: {message}")
        self.path = path


class UnsupportedQuery(PathQueryFailed):
    """The platform has no raw filesystem statistics call."""
    pass


class PathIOError(PathQueryFailed):
    """The filesystem statistics call failed for this path."""

    def __init__(self, path: str, cause: Optional[OSError] = None):
        super().__init__(path, str(cause) if cause else "inaccessible")
        self.cause = cause


class ConfigError(NdfError):
    """Configuration file is unreadable or has invalid values."""
    pass
