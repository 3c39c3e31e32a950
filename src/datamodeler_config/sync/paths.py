"""Resolve the configuration locations of an installation home."""

from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Tuple, Union

WINDOWS_USER_CONFIG = "Oracle SQL Developer Data Modeler"
UNIX_USER_CONFIG = ".oraclesqldeveloperdatamodeler"


@dataclass(frozen=True)
class ConfigLocationPair:
    """A configuration directory and its place in the archive."""
    name: str
    installation_path: Path
    archive_path: Path

    def direction(self, backup: bool) -> Tuple[Path, Path]:
        """Return (source, destination) for a backup or a restore."""
        if backup:
            return self.installation_path, self.archive_path
        return self.archive_path, self.installation_path


def user_config_dir(platform: str, user_home: Union[str, Path],
                    user_app_data: Optional[Union[str, Path]] = None) -> Path:
    """Per-user Data Modeler directory for a platform.

    Raises:
        ValueError: On Windows without an application data directory
    """
    if platform.startswith('win'):
        if user_app_data is None:
            raise ValueError("An application data directory is required on Windows")
        return Path(user_app_data) / WINDOWS_USER_CONFIG
    return Path(user_home) / UNIX_USER_CONFIG


def resolve_locations(root: Union[str, Path], version: str, archive_base: Union[str, Path],
                      platform: str, user_home: Union[str, Path],
                      user_app_data: Optional[Union[str, Path]] = None,
                      archive_version: Optional[str] = None) -> List[ConfigLocationPair]:
    """Compute the configuration location pairs of an installation home.

    Pure path arithmetic, nothing is read from disk. The types pair comes
    first, the system pair second.

    Args:
        root: Data Modeler installation home
        version: Version reported by the installation home
        archive_base: Directory holding the version subdirectories
        platform: Value of sys.platform
        user_home: Home directory of the user
        user_app_data: Application data directory of the user (Windows)
        archive_version: Version subdirectory to use in the archive instead of version

    Returns:
        The types and system location pairs
    """
    archive_dir = Path(archive_base) / (archive_version or version)

    return [
        ConfigLocationPair(
            name="types",
            installation_path=Path(root) / "datamodeler" / "types",
            archive_path=archive_dir / "datamodeler" / "types",
        ),
        ConfigLocationPair(
            name="system",
            installation_path=user_config_dir(platform, user_home, user_app_data) / f"system{version}",
            archive_path=archive_dir / "system",
        ),
    ]
