"""Command-line interface for the Data Modeler configuration sync tool."""

import glob
import os
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import click
import yaml
from rich import print as rprint
from rich.console import Console
from rich.table import Table

from . import __version__
from .config.settings import MAC_INSTALLATION_HOME, HostEnvironment, Mode, RunConfig, RunSettings
from .sync.engine import SyncEngine, get_run_summary
from .utils.logging import setup_logging, verbosity_to_level

console = Console()
err_console = Console(stderr=True)


@click.command(context_settings={'help_option_names': ['-h', '--help']})
@click.version_option(version=__version__)
@click.argument('homes', nargs=-1, metavar='[DATAMODELER_HOME]...')
@click.option('--backup',
              is_flag=True,
              help='Copy the configuration into the config directory. '
                   'Only XML files are kept.')
@click.option('--restore',
              is_flag=True,
              help='Copy the configuration from the config directory back '
                   'into the installation.')
@click.option('--config-directory',
              type=click.Path(path_type=Path),
              help='Directory to backup to or restore from. Must exist and be writable.')
@click.option('--config-version',
              help='Configuration version to use instead of the installation home version.')
@click.option('--verbose', '-v',
              count=True,
              help='Increase verbose logging (repeatable).')
@click.option('--dry-run', '-d',
              is_flag=True,
              help='Show what would be copied without copying or removing anything.')
@click.option('--settings',
              type=click.Path(exists=True, dir_okay=False, path_type=Path),
              help='YAML file with defaults for --config-directory, '
                   '--config-version and --verbose.')
@click.option('--log-file',
              type=click.Path(dir_okay=False, path_type=Path),
              help='Also write a debug log to this file.')
def cli(homes, backup: bool, restore: bool, config_directory: Optional[Path],
        config_version: Optional[str], verbose: int, dry_run: bool,
        settings: Optional[Path], log_file: Optional[Path]):
    """Backup or restore the (global) Oracle SQL Developer Data Modeler configuration.

    For each installation home DATAMODELER_HOME the version is read from
    datamodeler/bin/version.properties (VER_FULL). The installation
    directory datamodeler/types and the user directory system<version> are
    stored below <config-directory>/<version>.

    On Mac OS X the installation home is fixed and must not be given.
    """
    run_settings = _load_settings(settings) if settings else RunSettings()
    environment = HostEnvironment.from_env()

    config = _build_run_config(
        backup=backup,
        restore=restore,
        config_directory=config_directory or run_settings.config_directory,
        config_version=config_version or run_settings.config_version,
        verbose=verbose or run_settings.verbose,
        dry_run=dry_run
    )
    roots = _resolve_roots(homes, environment)

    setup_logging(log_level=verbosity_to_level(config.verbose), log_file=log_file)

    if config.dry_run:
        console.print("🔍 DRY RUN MODE - Nothing will be copied or removed", style="yellow bold")

    engine = SyncEngine(config, environment)
    results = engine.run(roots)

    _display_results(results, config)

    if any(result['status'] == 'failed' for result in results):
        sys.exit(1)


def _load_settings(settings: Path) -> RunSettings:
    try:
        return RunSettings.from_yaml(settings)
    except (yaml.YAMLError, ValueError) as e:
        raise click.BadParameter(str(e), param_hint="'--settings'")


def _build_run_config(backup: bool, restore: bool, config_directory: Optional[Path],
                      config_version: Optional[str], verbose: int, dry_run: bool) -> RunConfig:
    """Validate the options and turn them into a RunConfig."""
    if backup == restore:
        raise click.UsageError("Must either backup or restore but not both.")

    if (config_directory is None
            or not config_directory.is_dir()
            or not os.access(config_directory, os.W_OK)):
        raise click.UsageError("The config directory must exist and be writable.")

    try:
        return RunConfig(
            mode=Mode.BACKUP if backup else Mode.RESTORE,
            config_directory=config_directory,
            config_version=config_version,
            verbose=verbose,
            dry_run=dry_run
        )
    except ValueError as e:
        raise click.UsageError(str(e))


def expand_homes(homes: Sequence[str]) -> List[str]:
    """Expand shell patterns in installation home arguments.

    A pattern may match zero or more homes; other arguments are kept as is.
    """
    expanded = []
    for home in homes:
        home = os.path.expanduser(home)
        if glob.has_magic(home):
            expanded.extend(sorted(glob.glob(home)))
        else:
            expanded.append(home)
    return expanded


def _resolve_roots(homes: Sequence[str], environment: HostEnvironment) -> List[Path]:
    roots = expand_homes(homes)

    if environment.is_mac:
        if roots:
            raise click.UsageError(
                "Should NOT supply an Oracle SQL Developer Data Modeler home on Mac OS X.")
        return [MAC_INSTALLATION_HOME]

    if not roots:
        raise click.UsageError("Must supply at least one Oracle SQL Developer Data Modeler home.")

    if environment.is_windows and environment.user_app_data is None:
        raise click.UsageError("The APPDATA environment variable must be set.")

    return [Path(root) for root in roots]


def _display_results(results: List[Dict[str, Any]], config: RunConfig):
    """Display run results in a table."""
    table = Table(title=f"{config.mode.label} Results")
    table.add_column("Installation Home", style="cyan")
    table.add_column("Version")
    table.add_column("Archive Version", style="magenta")
    table.add_column("Status")
    table.add_column("Files Copied", justify="right", style="green")
    table.add_column("Files Removed", justify="right", style="yellow")
    table.add_column("Duration", justify="right")

    for result in results:
        status_style = "green" if result['status'] == 'completed' else "red"
        table.add_row(
            result['root'],
            result.get('version') or "-",
            result.get('archive_version') or "-",
            f"[{status_style}]{result['status']}[/{status_style}]",
            str(result.get('files_copied', 0)),
            str(result.get('files_removed', 0)),
            f"{result.get('duration', 0):.1f}s"
        )

    console.print(table)

    summary = get_run_summary(results)
    rprint(f"\n📊 [bold]Summary:[/bold]")
    rprint(f"   • Installation homes: {summary['total_roots']}")
    rprint(f"   • Successful: [green]{summary['successful_roots']}[/green]")
    rprint(f"   • Failed: [red]{summary['failed_roots']}[/red]")

    if summary['total_warnings'] > 0:
        err_console.print(f"\n⚠️ {summary['total_warnings']} cleanup warnings:", style="yellow")
        for result in results:
            for warning in result.get('warnings', []):
                err_console.print(f"   • {warning}", style="yellow")

    if summary['total_errors'] > 0:
        err_console.print(f"\n❌ {summary['total_errors']} errors occurred:", style="red bold")
        for result in results:
            for error in result.get('errors', []):
                err_console.print(f"   • {result['root']}: {error}", style="red")


def normalize_argv(argv: Sequence[str]) -> List[str]:
    """Undo the Windows FTYPE/ASSOC quirk.

    A file association may hand over all options as a single argument with
    leading whitespace, e.g. ' --backup --config-directory C:\\config'.
    """
    if len(argv) == 1 and argv[0][:1].isspace():
        return argv[0].split()
    return list(argv)


def main():
    """Console script entry point."""
    cli(args=normalize_argv(sys.argv[1:]), prog_name="datamodeler-config")


if __name__ == '__main__':
    main()
