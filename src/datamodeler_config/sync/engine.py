"""Sync engine orchestrating backups and restores of installation homes."""

import logging
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Union

from ..config.settings import HostEnvironment, RunConfig
from ..errors import ConfigError, CopyError
from ..utils.file_utils import FileHelper
from ..utils.logging import ContextualLogger, TimedOperation
from .cleaner import TreeCleaner
from .paths import ConfigLocationPair, resolve_locations
from .version import read_version

# Module logger
logger = logging.getLogger(__name__)


class SyncEngine:
    """Back up or restore the configuration of installation homes."""
    
    def __init__(self, config: RunConfig, environment: HostEnvironment,
                 cleaner: Optional[TreeCleaner] = None):
        """Initialize sync engine.
        
        Args:
            config: Options of this run
            environment: Per-user environment of the host
            cleaner: Cleaner applied to backup directories
        """
        self.config = config
        self.environment = environment
        self.cleaner = cleaner or TreeCleaner()
    
    def locations(self, root: Union[str, Path], version: str) -> List[ConfigLocationPair]:
        """Location pairs of an installation home reporting version."""
        return resolve_locations(
            root,
            version,
            self.config.config_directory,
            platform=self.environment.platform,
            user_home=self.environment.user_home,
            user_app_data=self.environment.user_app_data,
            archive_version=self.config.config_version
        )
    
    def run(self, roots: Iterable[Union[str, Path]]) -> List[Dict[str, Any]]:
        """Process installation homes one after the other.
        
        A failing home does not stop the others.
        
        Args:
            roots: Installation homes
            
        Returns:
            List of per home results
        """
        results = []
        for root in roots:
            results.append(self.process_root(root))
        return results
    
    def process_root(self, root: Union[str, Path]) -> Dict[str, Any]:
        """Back up or restore a single installation home.
        
        Args:
            root: Installation home
            
        Returns:
            Dictionary with the results for this home
        """
        mode = self.config.mode
        root_logger = ContextualLogger(logger, {'root': root, 'mode': mode.value})
        start_time = datetime.now()
        
        results = {
            'root': str(root),
            'mode': mode.value,
            'version': None,
            'archive_version': None,
            'status': 'started',
            'pairs_copied': 0,
            'pairs_skipped': 0,
            'files_copied': 0,
            'files_removed': 0,
            'dirs_removed': 0,
            'errors': [],
            'warnings': []
        }
        
        try:
            with TimedOperation(root_logger, f"{mode.label} {root}"):
                # Also validates the installation home when the version is overridden
                version = read_version(root)
                results['version'] = version
                results['archive_version'] = self.config.config_version or version
                
                for pair in self.locations(root, version):
                    self._process_pair(pair, results, root_logger)
            
            results['status'] = 'completed'
            
        except (ConfigError, CopyError) as e:
            results['status'] = 'failed'
            results['errors'].append(str(e))
        
        finally:
            results['duration'] = (datetime.now() - start_time).total_seconds()
        
        return results
    
    def _process_pair(self, pair: ConfigLocationPair, results: Dict[str, Any],
                      root_logger: ContextualLogger) -> None:
        source, destination = pair.direction(self.config.is_backup)
        
        root_logger.info(f"{self.config.mode.label} from '{source}' to '{destination}'")
        
        try:
            source_exists = source.exists()
        except OSError as e:
            # e.g. a name too long for the filesystem
            raise CopyError(source, destination, e) from e
        
        if not source_exists:
            root_logger.info(f"Skipping {pair.name}: '{source}' does not exist")
            results['pairs_skipped'] += 1
            return
        
        if self.config.dry_run:
            results['files_copied'] += FileHelper.count_files(source)
            results['pairs_copied'] += 1
            return
        
        results['files_copied'] += FileHelper.copy_tree(source, destination)
        results['pairs_copied'] += 1
        
        # Do not clutter the archive with irrelevant files and empty directories
        if self.config.is_backup:
            report = self.cleaner.clean(destination)
            results['files_removed'] += report['files_removed']
            results['dirs_removed'] += report['cache_dirs_removed'] + report['dirs_removed']
            results['warnings'].extend(str(w) for w in report['warnings'])


def get_run_summary(results: List[Dict[str, Any]]) -> Dict[str, Any]:
    """Generate summary of run results.
    
    Args:
        results: List of per home results
        
    Returns:
        Summary dictionary
    """
    return {
        'total_roots': len(results),
        'successful_roots': len([r for r in results if r.get('status') == 'completed']),
        'failed_roots': len([r for r in results if r.get('status') == 'failed']),
        'total_files_copied': sum(r.get('files_copied', 0) for r in results),
        'total_files_removed': sum(r.get('files_removed', 0) for r in results),
        'total_errors': sum(len(r.get('errors', [])) for r in results),
        'total_warnings': sum(len(r.get('warnings', [])) for r in results),
        'run_time': datetime.now().isoformat()
    }
