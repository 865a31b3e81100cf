"""Tests for the Drush adapter."""

import os
from pathlib import Path
from unittest.mock import Mock

import pytest
import yaml

from paasctl.config import Config
from paasctl.exceptions import DependencyMissingError
from paasctl.models.results import ExecutionResult
from paasctl.services.drush import DrushService, compare_version, parse_version
from paasctl.services.shell_service import ShellService
from paasctl.site_alias import DrushPhpWriter, DrushYamlWriter

from conftest import make_environment


def make_service(tmp_path: Path, version_output: str = "", returncode: int = 0, **local):
    values = {"local": {"drush_executable": "/opt/drush/drush", "drush_home": str(tmp_path / "drush")}}
    values["local"].update(local)
    config = Config(values=values, env={"PAASCTL_HOME": str(tmp_path / "home")})

    shell = Mock()
    shell.run.return_value = ExecutionResult(returncode=returncode, stdout=version_output)
    local_project = Mock()
    local_project.get_project_root.return_value = None
    local_project.get_project_config.return_value = {}
    return DrushService(config, shell, local_project)


class TestParseVersion:
    def test_drush_8_output(self):
        assert parse_version("Tool Version   :  8.0.0-beta14") == "8.0.0-beta14"
        assert parse_version(" Drush Version   :  8.0.0-beta14 \n") == "8.0.0-beta14"

    def test_drush_9_output(self):
        assert parse_version("Drush Commandline Tool 9.0.0-alpha1\n") == "9.0.0-alpha1"

    def test_skips_leading_blank_lines(self):
        assert parse_version("\n\n   \n Drush Version : 8.1.15\n") == "8.1.15"

    def test_only_first_line_is_read(self):
        assert parse_version("Unexpected output\nDrush Version : 8.1.15\n") is None

    def test_empty_output(self):
        assert parse_version("") is None


class TestCompareVersion:
    def test_pre_release_sorts_before_release(self):
        assert compare_version("9.0.0-alpha1", "9.0.0") == -1

    def test_release_only_ignores_pre_release(self):
        assert compare_version("9.0.0-alpha1", "9.0.0", release_only=True) == 0

    def test_invalid_version(self):
        assert compare_version("not-a-version", "9.0.0") is None


class TestCapabilities:
    def test_drush_9_alpha(self, tmp_path):
        drush = make_service(tmp_path, "Drush Commandline Tool 9.0.0-alpha1")
        assert drush.supports_yaml_alias_files() is True
        assert drush.supports_php_alias_files() is False

    def test_drush_8(self, tmp_path):
        drush = make_service(tmp_path, " Drush Version   :  8.1.15 ")
        assert drush.supports_yaml_alias_files() is False
        assert drush.supports_php_alias_files() is True
        assert drush.supports_make_lock() is True

    def test_unknown_version_supports_both_alias_formats(self, tmp_path):
        drush = make_service(tmp_path, "garbage")
        assert drush.get_version() is None
        assert drush.supports_yaml_alias_files() is True
        assert drush.supports_php_alias_files() is True
        assert drush.supports_make_lock() is False

    def test_failed_version_command_is_unknown(self, tmp_path):
        drush = make_service(tmp_path, " Drush Version : 8.1.15", returncode=1)
        assert drush.get_version() is None

    @pytest.mark.parametrize(
        "version, expected",
        [("6.7.0", False), ("7.0.0-rc1", True), ("7.0.0", True), ("8.0.0-beta14", True)],
    )
    def test_make_lock(self, tmp_path, version, expected):
        drush = make_service(tmp_path, f"Drush Version : {version}")
        assert drush.supports_make_lock() is expected


class TestVersionCache:
    def test_version_is_detected_once(self, tmp_path):
        drush = make_service(tmp_path, "Drush Version : 8.1.15")
        drush.get_version()
        drush.get_version()
        assert drush.shell.run.call_count == 1
        drush.shell.run.assert_called_once_with(["/opt/drush/drush", "version"])

    def test_refresh_detects_again(self, tmp_path):
        drush = make_service(tmp_path, "Drush Version : 8.1.15")
        drush.get_version()
        drush.shell.run.return_value = ExecutionResult(returncode=0, stdout="Drush Version : 9.2.0")
        assert drush.get_version(refresh=True) == "9.2.0"
        assert drush.shell.run.call_count == 2


class TestExecutable:
    def test_configured_executable(self, tmp_path):
        drush = make_service(tmp_path)
        assert drush.get_executable() == "/opt/drush/drush"

    def test_project_vendor_bin(self, tmp_path, project_root):
        drush = make_service(tmp_path, drush_executable=None)
        executable = project_root / "vendor" / "bin" / "drush"
        executable.parent.mkdir(parents=True)
        executable.write_text("#!/bin/sh\n")
        os.chmod(executable, 0o755)
        drush.local_project.get_project_root.return_value = project_root

        assert drush.get_executable() == str(executable)

    def test_path_lookup(self, tmp_path):
        drush = make_service(tmp_path, drush_executable=None)
        drush.shell.command_exists.return_value = True
        drush.shell.resolve_command.return_value = "/usr/local/bin/drush"
        assert drush.get_executable() == "/usr/local/bin/drush"

    def test_not_installed(self, tmp_path):
        drush = make_service(tmp_path, drush_executable=None)
        drush.shell.command_exists.return_value = False

        with pytest.raises(DependencyMissingError):
            drush.ensure_installed()
        with pytest.raises(DependencyMissingError):
            drush.get_version()
        drush.shell.run.assert_not_called()


class TestCreateAliases:
    @pytest.fixture
    def drupal_root(self, project_root):
        (project_root / ".paasctl.app.yaml").write_text("name: drupal\n")
        (project_root / "composer.json").write_text('{"require": {"drupal/core-recommended": "^9"}}')
        (project_root / "web").mkdir()
        return project_root

    def test_auto_remove_key(self, tmp_path):
        assert make_service(tmp_path).get_auto_remove_key() == "paasctl-auto-remove"

    def test_alias_group_from_project_config(self, tmp_path, project, project_root):
        drush = make_service(tmp_path)
        assert drush.get_alias_group(project, project_root) == "abc123"
        drush.local_project.get_project_config.return_value = {"alias-group": "mysite"}
        assert drush.get_alias_group(project, project_root) == "mysite"

    def test_writers_follow_version(self, tmp_path):
        drush = make_service(tmp_path, "Drush Version : 8.1.15")
        assert [type(w) for w in drush.get_writers()] == [DrushPhpWriter]

        drush = make_service(tmp_path, "Drush Commandline Tool 10.3.0")
        assert [type(w) for w in drush.get_writers()] == [DrushYamlWriter]

    def test_unknown_version_writes_both_formats(self, tmp_path, project, drupal_root):
        drush = make_service(tmp_path, "garbage")
        environments = [make_environment("master"), make_environment("old", status="inactive")]

        assert drush.create_aliases(project, drupal_root, environments) is True

        with open(tmp_path / "drush" / "site-aliases" / "abc123.site.yml") as f:
            aliases = yaml.safe_load(f)
        assert set(aliases) == {"_local", "master"}
        assert aliases["_local"]["root"] == str(drupal_root / "web")
        assert aliases["master"]["host"] == "ssh.example.com"
        assert aliases["master"]["user"] == "abc123-master"
        assert aliases["master"]["uri"] == "https://master.example.com/"
        assert aliases["master"]["paasctl-auto-remove"] is True

        php = (tmp_path / "drush" / "abc123.aliases.drushrc.php").read_text()
        assert php.startswith("<?php")
        assert "'remote-host' => 'ssh.example.com'," in php
        assert "'remote-user' => 'abc123-master'," in php

    def test_every_writer_runs_after_a_failure(self, tmp_path, project, drupal_root):
        drush = make_service(tmp_path)
        failing, succeeding = Mock(), Mock()
        failing.create_aliases.return_value = False
        succeeding.create_aliases.return_value = True
        drush.get_writers = Mock(return_value=[failing, succeeding])

        assert drush.create_aliases(project, drupal_root, []) is False
        failing.create_aliases.assert_called_once()
        succeeding.create_aliases.assert_called_once()

    def test_non_drupal_apps_are_skipped(self, tmp_path, project, project_root):
        (project_root / ".paasctl.app.yaml").write_text("name: node\n")
        drush = make_service(tmp_path)
        writer = Mock()
        writer.create_aliases.return_value = True
        drush.get_writers = Mock(return_value=[writer])

        drush.create_aliases(project, project_root, [])
        assert writer.create_aliases.call_args[0][2] == []


class TestDrushCommands:
    def test_get_aliases(self, tmp_path):
        drush = make_service(tmp_path)
        drush.shell.execute.return_value = "@abc123._local\n@abc123.master"
        assert drush.get_aliases("abc123") == "@abc123._local\n@abc123.master"
        drush.shell.execute.assert_called_once_with(
            ["/opt/drush/drush", "@none", "site-alias", "--format=list", "@abc123"],
            cwd=None,
            must_run=False,
            quiet=True,
        )

    def test_clear_cache(self, tmp_path):
        drush = make_service(tmp_path)
        drush.shell.execute.return_value = False
        assert drush.clear_cache() is False
        assert drush.shell.execute.call_args[0][0] == ["/opt/drush/drush", "cache-clear", "drush"]


class TestMissingExecutable:
    def test_configured_path_that_does_not_exist(self, tmp_path):
        missing = tmp_path / "nope" / "drush"
        config = Config(
            values={"local": {"drush_executable": str(missing)}},
            env={"PAASCTL_HOME": str(tmp_path / "home")},
        )
        local_project = Mock()
        local_project.get_project_root.return_value = None
        drush = DrushService(config, ShellService(), local_project)

        assert drush.get_version() is None
        assert drush.supports_yaml_alias_files() is True
        assert drush.supports_make_lock() is False
