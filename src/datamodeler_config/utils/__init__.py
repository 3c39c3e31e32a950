"""Utility functions and helpers."""

from .logging import setup_logging, verbosity_to_level
from .file_utils import FileHelper

__all__ = ["setup_logging", "verbosity_to_level", "FileHelper"]
