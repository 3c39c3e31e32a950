"""File utility functions."""

import logging
import os
import shutil
from pathlib import Path
from typing import List

from ..errors import CopyError

logger = logging.getLogger(__name__)


class FileHelper:
    """Helper class for file operations."""
    
    @staticmethod
    def copy_tree(source: Path, destination: Path) -> int:
        """Copy directory tree source into destination.
        
        The destination and its parents are created as needed and existing
        entries are overwritten. A missing source is not an error: there is
        simply nothing to copy. Symbolic links are copied as the files they
        point to; dangling links are skipped.
        
        Args:
            source: Directory to copy from
            destination: Directory to copy into
            
        Returns:
            Number of files copied
            
        Raises:
            CopyError: If the source is not a directory or copying fails
        """
        source = Path(source)
        destination = Path(destination)
        
        try:
            if not source.exists():
                logger.info(f"Nothing to copy, '{source}' does not exist")
                return 0
            is_dir = source.is_dir()
        except OSError as e:
            raise CopyError(source, destination, e) from e
        
        if not is_dir:
            raise CopyError(source, destination, NotADirectoryError(f"Not a directory: {source}"))
        
        copied: List[str] = []
        
        def _ignore_dangling(directory, names):
            dangling = set()
            for name in names:
                path = os.path.join(directory, name)
                if os.path.islink(path) and not os.path.exists(path):
                    logger.info(f"Skipping dangling link '{path}'")
                    dangling.add(name)
            return dangling
        
        def _copy(src, dst):
            copied.append(dst)
            logger.debug(f"Copy '{src}' to '{dst}'")
            return shutil.copy2(src, dst)
        
        try:
            shutil.copytree(source, destination, copy_function=_copy,
                            ignore=_ignore_dangling, dirs_exist_ok=True)
        except OSError as e:
            # shutil.Error is an OSError too
            raise CopyError(source, destination, e) from e
        
        return len(copied)
    
    @staticmethod
    def is_within_directory(path: Path, directory: Path) -> bool:
        """Check whether path lies strictly inside directory.
        
        The parent of path is resolved but path itself is not, so a symbolic
        link inside directory counts as inside even when its target is not.
        
        Args:
            path: Path to check
            directory: Directory that must contain path
            
        Returns:
            True if path is below directory
        """
        path = Path(path)
        root = Path(directory).resolve()
        candidate = path.parent.resolve() / path.name
        
        if candidate == root:
            return False
        
        try:
            candidate.relative_to(root)
        except ValueError:
            return False
        return True
    
    @staticmethod
    def count_files(directory: Path) -> int:
        """Count regular files below directory without following links."""
        return sum(len(files) for _, _, files in os.walk(directory))
