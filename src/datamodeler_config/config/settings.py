"""Configuration settings and models for the configuration sync tool."""

import os
import sys
from enum import Enum
from pathlib import Path
from typing import Optional, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator

# Fixed installation home on Mac OS X
MAC_INSTALLATION_HOME = Path("/Applications/OracleDataModeler.app/Contents/Resources/datamodeler")

# Characters that would turn a version into more than one path component
_VERSION_FORBIDDEN = ('/', '\\', ':')


def is_valid_version_name(value: str) -> bool:
    """True if value names a single directory below the config directory."""
    if not value or value in ('.', '..'):
        return False
    return not any(char in value for char in _VERSION_FORBIDDEN)


class Mode(str, Enum):
    """Copy direction of a run."""
    BACKUP = "backup"
    RESTORE = "restore"

    @property
    def label(self) -> str:
        return self.value.capitalize()


class RunConfig(BaseModel):
    """Options of a single run, built once by the command line."""
    model_config = ConfigDict(frozen=True)

    mode: Mode
    config_directory: Path
    config_version: Optional[str] = None
    verbose: int = 0
    dry_run: bool = False

    @field_validator('config_version')
    def validate_config_version(cls, v):
        if v is not None and not v.strip():
            raise ValueError('config_version must not be empty')
        if v is not None and not is_valid_version_name(v):
            raise ValueError('config_version must be a single directory name')
        return v

    @field_validator('verbose')
    def validate_verbose(cls, v):
        if v < 0:
            raise ValueError('verbose must not be negative')
        return v

    @property
    def is_backup(self) -> bool:
        return self.mode == Mode.BACKUP


class HostEnvironment(BaseModel):
    """Per-user environment of the host operating system."""
    model_config = ConfigDict(frozen=True)

    platform: str
    user_home: Path
    user_app_data: Optional[Path] = None

    @property
    def is_windows(self) -> bool:
        return self.platform.startswith('win')

    @property
    def is_mac(self) -> bool:
        return self.platform == 'darwin'

    @classmethod
    def from_env(cls) -> "HostEnvironment":
        """Load the host environment from environment variables."""
        app_data = os.getenv('APPDATA')
        return cls(
            platform=sys.platform,
            user_home=Path(os.getenv('HOME') or Path.home()),
            user_app_data=Path(app_data) if app_data else None
        )


class RunSettings(BaseModel):
    """Defaults for command line options, read from a settings file."""
    config_directory: Optional[Path] = None
    config_version: Optional[str] = None
    verbose: int = Field(default=0, ge=0)

    @classmethod
    def from_yaml(cls, settings_path: Union[str, Path]) -> "RunSettings":
        """Load settings from YAML file."""
        settings_path = Path(settings_path)
        if not settings_path.exists():
            raise FileNotFoundError(f"Settings file not found: {settings_path}")

        with open(settings_path, 'r', encoding='utf-8') as f:
            settings_data = yaml.safe_load(f) or {}

        if not isinstance(settings_data, dict):
            raise ValueError(f"Settings file {settings_path} must contain a mapping")

        return cls(**settings_data)
