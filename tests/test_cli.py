"""Tests for the command-line interface."""

from pathlib import Path

import pytest
from click.testing import CliRunner

from conftest import write
from datamodeler_config import cli as cli_module
from datamodeler_config.cli import cli, expand_homes, normalize_argv
from datamodeler_config.config.settings import HostEnvironment


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def host(monkeypatch, user_home):
    """Pin the host environment seen by the CLI."""
    def _host(platform="linux", user_app_data=None):
        env = HostEnvironment(platform=platform, user_home=user_home, user_app_data=user_app_data)
        monkeypatch.setattr(HostEnvironment, "from_env", staticmethod(lambda: env))
        return env
    _host()
    return _host


class TestOptions:
    def test_help(self, runner):
        result = runner.invoke(cli, ["--help"])
        assert result.exit_code == 0
        assert "--backup" in result.output
        assert "--config-directory" in result.output

    def test_version(self, runner):
        result = runner.invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert "1.0.0" in result.output

    @pytest.mark.parametrize("flags", [[], ["--backup", "--restore"]])
    def test_backup_or_restore_required(self, runner, host, make_installation, config_dir, flags):
        root = make_installation()
        result = runner.invoke(cli, flags + ["--config-directory", str(config_dir), str(root)])
        assert result.exit_code == 2
        assert "Must either backup or restore" in result.output

    def test_config_directory_required(self, runner, host, make_installation):
        result = runner.invoke(cli, ["--backup", str(make_installation())])
        assert result.exit_code == 2
        assert "config directory must exist" in result.output

    def test_config_directory_must_exist(self, runner, host, make_installation, tmp_path):
        result = runner.invoke(cli, ["--backup", "--config-directory", str(tmp_path / "missing"),
                                     str(make_installation())])
        assert result.exit_code == 2
        assert not (tmp_path / "missing").exists()

    def test_home_required(self, runner, host, config_dir):
        result = runner.invoke(cli, ["--backup", "--config-directory", str(config_dir)])
        assert result.exit_code == 2
        assert "Must supply at least one" in result.output

    def test_empty_config_version(self, runner, host, make_installation, config_dir):
        result = runner.invoke(cli, ["--backup", "--config-directory", str(config_dir),
                                     "--config-version", " ", str(make_installation())])
        assert result.exit_code == 2

    def test_config_version_must_stay_in_config_directory(self, runner, host, make_installation,
                                                          config_dir):
        result = runner.invoke(cli, ["--backup", "--config-directory", str(config_dir),
                                     "--config-version", "../escape", str(make_installation())])
        assert result.exit_code == 2
        assert not (config_dir.parent / "escape").exists()

    def test_windows_requires_app_data(self, runner, host, make_installation, config_dir):
        host(platform="win32")
        result = runner.invoke(cli, ["--backup", "--config-directory", str(config_dir),
                                     str(make_installation())])
        assert result.exit_code == 2
        assert "APPDATA" in result.output


class TestMac:
    def test_home_must_be_omitted(self, runner, host, make_installation, config_dir):
        host(platform="darwin")
        result = runner.invoke(cli, ["--backup", "--config-directory", str(config_dir),
                                     str(make_installation())])
        assert result.exit_code == 2
        assert "Should NOT supply" in result.output

    def test_fixed_installation_home(self, runner, host, make_installation, config_dir, monkeypatch):
        host(platform="darwin")
        root = make_installation(version="21.2")
        write(root / "datamodeler" / "types" / "a.xml")
        monkeypatch.setattr(cli_module, "MAC_INSTALLATION_HOME", root)

        result = runner.invoke(cli, ["--backup", "--config-directory", str(config_dir)])

        assert result.exit_code == 0, result.output
        assert (config_dir / "21.2" / "datamodeler" / "types" / "a.xml").exists()


class TestRun:
    def test_backup(self, runner, host, make_installation, config_dir):
        root = make_installation(version="1.2.3")
        write(root / "datamodeler" / "types" / "a.xml")
        write(root / "datamodeler" / "types" / "notes.txt")

        result = runner.invoke(cli, ["--backup", "--config-directory", str(config_dir), str(root)])

        assert result.exit_code == 0, result.output
        assert (config_dir / "1.2.3" / "datamodeler" / "types" / "a.xml").exists()
        assert not (config_dir / "1.2.3" / "datamodeler" / "types" / "notes.txt").exists()

    def test_restore(self, runner, host, make_installation, config_dir, user_home):
        root = make_installation(version="1.2.3")
        write(config_dir / "1.2.3" / "system" / "pref.xml")

        result = runner.invoke(cli, ["--restore", "--config-directory", str(config_dir), str(root)])

        assert result.exit_code == 0, result.output
        assert (user_home / ".oraclesqldeveloperdatamodeler" / "system1.2.3" / "pref.xml").exists()

    def test_config_version(self, runner, host, make_installation, config_dir):
        root = make_installation(version="1.2.3")
        write(root / "datamodeler" / "types" / "a.xml")

        result = runner.invoke(cli, ["--backup", "--config-directory", str(config_dir),
                                     "--config-version", "9.9.9", str(root)])

        assert result.exit_code == 0, result.output
        assert (config_dir / "9.9.9" / "datamodeler" / "types" / "a.xml").exists()

    def test_config_version_without_version_file(self, runner, host, tmp_path, config_dir):
        root = tmp_path / "broken"
        write(root / "datamodeler" / "types" / "a.xml")

        result = runner.invoke(cli, ["--backup", "--config-directory", str(config_dir),
                                     "--config-version", "9.9.9", str(root)])

        assert result.exit_code == 1
        assert not (config_dir / "9.9.9").exists()

    def test_failing_home_does_not_stop_others(self, runner, host, make_installation,
                                               tmp_path, config_dir):
        good = make_installation(name="good", version="1.0")
        write(good / "datamodeler" / "types" / "a.xml")

        result = runner.invoke(cli, ["--backup", "--config-directory", str(config_dir),
                                     str(tmp_path / "bad"), str(good)])

        assert result.exit_code == 1
        assert "errors occurred" in result.output
        assert (config_dir / "1.0" / "datamodeler" / "types" / "a.xml").exists()

    def test_glob_patterns(self, runner, host, make_installation, tmp_path, config_dir):
        for name, version in [("dm-18", "18.4"), ("dm-19", "19.2")]:
            root = make_installation(name=name, version=version)
            write(root / "datamodeler" / "types" / "a.xml")

        result = runner.invoke(cli, ["--backup", "--config-directory", str(config_dir),
                                     str(tmp_path / "dm-*")])

        assert result.exit_code == 0, result.output
        assert sorted(p.name for p in config_dir.iterdir()) == ["18.4", "19.2"]

    def test_dry_run(self, runner, host, make_installation, config_dir):
        root = make_installation()
        write(root / "datamodeler" / "types" / "a.xml")

        result = runner.invoke(cli, ["--backup", "--dry-run", "--config-directory", str(config_dir),
                                     str(root)])

        assert result.exit_code == 0, result.output
        assert "DRY RUN" in result.output
        assert list(config_dir.iterdir()) == []

    def test_settings_file(self, runner, host, make_installation, config_dir, tmp_path):
        root = make_installation(version="1.2.3")
        write(root / "datamodeler" / "types" / "a.xml")
        settings = write(tmp_path / "settings.yaml",
                         f"config_directory: {config_dir}\nconfig_version: '7.0'\n")

        result = runner.invoke(cli, ["--backup", "--settings", str(settings), str(root)])

        assert result.exit_code == 0, result.output
        assert (config_dir / "7.0" / "datamodeler" / "types" / "a.xml").exists()

    def test_command_line_beats_settings_file(self, runner, host, make_installation,
                                              config_dir, tmp_path):
        root = make_installation(version="1.2.3")
        write(root / "datamodeler" / "types" / "a.xml")
        settings = write(tmp_path / "settings.yaml", "config_version: '7.0'\n")

        result = runner.invoke(cli, ["--backup", "--settings", str(settings),
                                     "--config-directory", str(config_dir),
                                     "--config-version", "8.0", str(root)])

        assert result.exit_code == 0, result.output
        assert [p.name for p in config_dir.iterdir()] == ["8.0"]

    def test_invalid_settings_file(self, runner, host, make_installation, config_dir, tmp_path):
        settings = write(tmp_path / "settings.yaml", "verbose: -3\n")
        result = runner.invoke(cli, ["--backup", "--settings", str(settings),
                                     "--config-directory", str(config_dir),
                                     str(make_installation())])
        assert result.exit_code == 2

    def test_log_file(self, runner, host, make_installation, config_dir, tmp_path):
        root = make_installation(version="1.2.3")
        write(root / "datamodeler" / "types" / "a.xml")
        log_file = tmp_path / "logs" / "sync.log"

        result = runner.invoke(cli, ["--backup", "--config-directory", str(config_dir),
                                     "--log-file", str(log_file), str(root)])

        assert result.exit_code == 0, result.output
        assert "Version from" in log_file.read_text(encoding="utf-8")


class TestArguments:
    def test_normalize_single_padded_argument(self):
        assert normalize_argv([" --backup --config-directory C:\\config"]) == \
            ["--backup", "--config-directory", "C:\\config"]

    def test_normalize_leaves_regular_arguments(self):
        assert normalize_argv(["--backup", "home with space"]) == ["--backup", "home with space"]
        assert normalize_argv(["home"]) == ["home"]
        assert normalize_argv([]) == []

    def test_expand_homes(self, tmp_path):
        (tmp_path / "a1").mkdir()
        (tmp_path / "a2").mkdir()
        assert expand_homes([str(tmp_path / "a*")]) == [str(tmp_path / "a1"), str(tmp_path / "a2")]
        assert expand_homes([str(tmp_path / "z*")]) == []
        assert expand_homes([str(tmp_path / "plain")]) == [str(tmp_path / "plain")]
