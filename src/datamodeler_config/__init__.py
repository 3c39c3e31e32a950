"""
Oracle SQL Developer Data Modeler configuration sync

Backup and restore the global Data Modeler configuration between an
installation and a version-labeled config directory.
"""

__version__ = "1.0.0"
__author__ = "Data Modeler Config"
__description__ = "Backup and restore the global Oracle SQL Developer Data Modeler configuration"

from .config.settings import HostEnvironment, Mode, RunConfig
from .sync.engine import SyncEngine

__all__ = ["HostEnvironment", "Mode", "RunConfig", "SyncEngine"]
