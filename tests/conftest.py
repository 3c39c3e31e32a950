"""Shared fixtures: fake Data Modeler installations and config directories."""

import logging
import sys
from pathlib import Path

import pytest

# Add src to Python path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from datamodeler_config.config.settings import HostEnvironment, Mode, RunConfig


def write(path: Path, content: str = "") -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    return path


@pytest.fixture
def make_installation(tmp_path):
    """Factory for installation homes with a version.properties file."""
    def _make(name: str = "datamodeler_home", version: str = "1.2.3") -> Path:
        root = tmp_path / name
        write(root / "datamodeler" / "bin" / "version.properties",
              f"VER=1.2\nVER_FULL={version}\nBUILD_LABEL=whatever\n")
        (root / "datamodeler" / "types").mkdir(parents=True, exist_ok=True)
        return root
    return _make


@pytest.fixture
def config_dir(tmp_path):
    d = tmp_path / "config"
    d.mkdir()
    return d


@pytest.fixture
def user_home(tmp_path):
    d = tmp_path / "home"
    d.mkdir()
    return d


@pytest.fixture
def environment(user_home):
    return HostEnvironment(platform="linux", user_home=user_home)


@pytest.fixture
def backup_config(config_dir):
    return RunConfig(mode=Mode.BACKUP, config_directory=config_dir)


@pytest.fixture
def restore_config(config_dir):
    return RunConfig(mode=Mode.RESTORE, config_directory=config_dir)


@pytest.fixture(autouse=True)
def reset_package_logger():
    """Drop handlers bound to streams of a finished CLI invocation."""
    yield
    logger = logging.getLogger("datamodeler_config")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
