"""Read the Data Modeler version of an installation home."""

import logging
from pathlib import Path
from typing import Dict, Union

from ..config.settings import is_valid_version_name
from ..errors import ConfigError, ConfigErrorReason

logger = logging.getLogger(__name__)

VERSION_KEY = "VER_FULL"


def version_file(root: Union[str, Path]) -> Path:
    """Location of version.properties below an installation home."""
    return Path(root) / "datamodeler" / "bin" / "version.properties"


def read_properties(path: Union[str, Path]) -> Dict[str, str]:
    """Read a key-value properties file.

    Lines are split on the first ``=``; key and value are stripped. Blank
    lines, comments and lines without a key are skipped. A repeated key
    keeps its last value.

    Raises:
        OSError: If the file can not be opened or read
    """
    properties: Dict[str, str] = {}

    with open(path, 'r', encoding='utf-8', errors='replace') as f:
        for line in f:
            line = line.strip()
            if not line or line[0] in '#!':
                continue

            key, sep, value = line.partition('=')
            key = key.strip()
            if not sep or not key:
                continue

            properties[key] = value.strip()

    return properties


def read_version(root: Union[str, Path]) -> str:
    """Return the VER_FULL value of an installation home.

    Args:
        root: Data Modeler installation home

    Returns:
        Version string, e.g. 18.4.0.339.1532

    Raises:
        ConfigError: If version.properties is missing or has no usable VER_FULL
    """
    path = version_file(root)

    try:
        properties = read_properties(path)
    except OSError as e:
        raise ConfigError(ConfigErrorReason.MISSING_FILE, path, e) from e

    version = properties.get(VERSION_KEY)
    if not version:
        raise ConfigError(ConfigErrorReason.MISSING_VERSION, path)

    if not is_valid_version_name(version):
        raise ConfigError(ConfigErrorReason.INVALID_VERSION, path)

    logger.info(f"Version from {path}: {version}")
    return version
