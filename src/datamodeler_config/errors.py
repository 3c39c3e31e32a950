"""Exceptions raised while syncing Data Modeler configuration."""

from enum import Enum
from pathlib import Path
from typing import Optional


class DatamodelerConfigError(Exception):
    """Base class for all errors raised by this package."""


class ConfigErrorReason(str, Enum):
    """Why the version of an installation home could not be determined."""
    MISSING_FILE = "missing_file"
    MISSING_VERSION = "missing_version"
    INVALID_VERSION = "invalid_version"


class ConfigError(DatamodelerConfigError):
    """The version of an installation home could not be read."""

    def __init__(self, reason: ConfigErrorReason, path: Path, cause: Optional[Exception] = None):
        self.reason = reason
        self.path = Path(path)
        self.cause = cause

        if reason == ConfigErrorReason.MISSING_FILE:
            message = f"Can not open {self.path}"
            if cause is not None:
                message += f": {cause}"
        elif reason == ConfigErrorReason.INVALID_VERSION:
            message = f"VER_FULL in {self.path} is not a valid directory name"
        else:
            message = f"No VER_FULL found in {self.path}"

        super().__init__(message)


class CopyError(DatamodelerConfigError):
    """Copying a configuration directory failed."""

    def __init__(self, source: Path, destination: Path, cause: Exception):
        self.source = Path(source)
        self.destination = Path(destination)
        self.cause = cause
        super().__init__(f"Can not copy '{self.source}' to '{self.destination}': {cause}")


class CleanupError(DatamodelerConfigError):
    """A best-effort removal inside the cleanup pass failed.

    Never raised out of the cleaner; instances are collected in its report.
    """

    def __init__(self, path: Path, cause: Exception):
        self.path = Path(path)
        self.cause = cause
        super().__init__(f"Can not remove '{self.path}': {cause}")
