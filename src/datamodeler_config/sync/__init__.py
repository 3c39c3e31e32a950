"""Sync engine for backup and restore operations."""

from .cleaner import TreeCleaner, clean
from .engine import SyncEngine, get_run_summary
from .paths import ConfigLocationPair, resolve_locations
from .version import read_version

__all__ = [
    "TreeCleaner",
    "clean",
    "SyncEngine",
    "get_run_summary",
    "ConfigLocationPair",
    "resolve_locations",
    "read_version",
]
