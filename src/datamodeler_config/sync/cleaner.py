"""Prune a freshly written backup directory.

Only XML files are worth keeping in the archive. After a backup copy the
archive directory is cleaned in three passes:

1. every file that is not an XML file is deleted,
2. every ``system_cache*`` directory is deleted with its contents,
3. directories left empty are removed, deepest first.

Symbolic links are never followed and nothing outside the directory being
cleaned is touched. The last pass is best effort: a directory that can not
be removed is left alone.
"""

import errno
import logging
import os
import shutil
from pathlib import Path
from typing import Any, Dict, List, Union

from ..errors import CleanupError
from ..utils.file_utils import FileHelper

logger = logging.getLogger(__name__)

KEEP_SUFFIX = ".xml"
CACHE_DIR_PREFIX = "system_cache"

# rmdir failures that just mean "leave it"
_IGNORED_ERRNOS = frozenset({errno.ENOTEMPTY, errno.EEXIST, errno.ENOENT})


def is_non_xml_file(path: Path) -> bool:
    """True for a regular file (or link to one) not named *.xml."""
    return path.is_file() and not path.name.endswith(KEEP_SUFFIX)


def is_system_cache_dir(path: Path) -> bool:
    """True for a directory whose name starts with system_cache."""
    return path.is_dir() and path.name.startswith(CACHE_DIR_PREFIX)


class TreeCleaner:
    """Remove everything but XML files from a backup directory."""

    def clean(self, directory: Union[str, Path]) -> Dict[str, Any]:
        """Clean a directory in place.

        Args:
            directory: Backup directory that has just been written

        Returns:
            Report with the number of removed files and directories and the
            removal failures that were skipped
        """
        directory = Path(directory)
        report: Dict[str, Any] = {
            'directory': str(directory),
            'files_removed': 0,
            'cache_dirs_removed': 0,
            'dirs_removed': 0,
            'warnings': [],
        }

        if not directory.is_dir():
            logger.debug(f"Nothing to clean, '{directory}' is not a directory")
            return report

        logger.info(f"Cleanup config directory {directory}")

        report['files_removed'] = self._remove_files(directory, report['warnings'])
        report['cache_dirs_removed'] = self._remove_cache_dirs(directory, report['warnings'])
        report['dirs_removed'] = self._remove_empty_dirs(directory, report['warnings'])

        for warning in report['warnings']:
            logger.warning(str(warning))

        return report

    def _remove_files(self, directory: Path, warnings: List[CleanupError]) -> int:
        file_list = []
        for dirpath, _, filenames in os.walk(directory):
            for filename in filenames:
                path = Path(dirpath) / filename
                if is_non_xml_file(path):
                    file_list.append(path)

        removed = 0
        for path in file_list:
            if not FileHelper.is_within_directory(path, directory):
                logger.warning(f"Skipping '{path}' outside of '{directory}'")
                continue
            logger.debug(f"Remove file '{path}'")
            try:
                path.unlink()
                removed += 1
            except FileNotFoundError:
                pass
            except OSError as e:
                warnings.append(CleanupError(path, e))

        return removed

    def _remove_cache_dirs(self, directory: Path, warnings: List[CleanupError]) -> int:
        dir_list = []
        for dirpath, dirnames, _ in os.walk(directory):
            for dirname in list(dirnames):
                path = Path(dirpath) / dirname
                if is_system_cache_dir(path):
                    dir_list.append(path)
                    # its contents go with it
                    dirnames.remove(dirname)

        removed = 0
        for path in dir_list:
            if not os.path.lexists(path):
                continue
            if not FileHelper.is_within_directory(path, directory):
                logger.warning(f"Skipping '{path}' outside of '{directory}'")
                continue
            logger.debug(f"Remove directory tree '{path}'")
            try:
                if path.is_symlink():
                    path.unlink()
                else:
                    shutil.rmtree(path)
                removed += 1
            except FileNotFoundError:
                pass
            except OSError as e:
                warnings.append(CleanupError(path, e))

        return removed

    def _remove_empty_dirs(self, directory: Path, warnings: List[CleanupError]) -> int:
        removed = 0
        for dirpath, _, _ in os.walk(directory, topdown=False):
            path = Path(dirpath)
            if path == directory or not FileHelper.is_within_directory(path, directory):
                continue
            try:
                path.rmdir()
                removed += 1
                logger.debug(f"Removed empty directory '{path}'")
            except OSError as e:
                if e.errno not in _IGNORED_ERRNOS:
                    warnings.append(CleanupError(path, e))

        return removed


def clean(directory: Union[str, Path]) -> Dict[str, Any]:
    """Clean a backup directory, see TreeCleaner.clean."""
    return TreeCleaner().clean(directory)
