"""Tests for the supporting services."""

import base64
import io
import json
import time
from unittest.mock import Mock

import pytest
from rich.console import Console

from paasctl.exceptions import ActivityError, ApiError, GitError, PaasctlError
from paasctl.models.platform import Activity
from paasctl.models.results import ExecutionResult
from paasctl.models.ssh import SSHConfig
from paasctl.services.activity_monitor import ActivityMonitor
from paasctl.services.cache_service import CacheService
from paasctl.services.git_service import GitService
from paasctl.services.relationships_service import RelationshipsService
from paasctl.services.shell_service import ShellService
from paasctl.services.ssh_service import SSHService


class TestCacheService:
    def test_set_and_get(self, tmp_path):
        cache = CacheService(tmp_path)
        cache.set("environments:abc123", [{"id": "master"}], ttl=60)
        assert cache.get("environments:abc123") == [{"id": "master"}]
        assert cache.has("environments:abc123")

    def test_expired_entry(self, tmp_path, monkeypatch):
        cache = CacheService(tmp_path)
        cache.set("key", "value", ttl=10)
        monkeypatch.setattr(time, "time", lambda: 10 ** 12)
        assert cache.get("key") is None

    def test_delete(self, tmp_path):
        cache = CacheService(tmp_path)
        cache.set("key", "value")
        assert cache.delete("key") is True
        assert cache.delete("key") is False
        assert cache.get("key") is None

    def test_entry_that_is_not_an_object(self, tmp_path):
        cache = CacheService(tmp_path)
        cache.set("key", "value")
        cache._path("key").write_text("[]")
        assert cache.get("key") is None
        assert not cache.has("key")


class TestShellService:
    def test_execute_returns_output(self):
        shell = ShellService()
        assert shell.execute(["echo", "hello"]) == "hello"

    def test_execute_failure(self):
        shell = ShellService()
        assert shell.execute(["false"]) is False
        with pytest.raises(RuntimeError):
            shell.execute(["false"], must_run=True)

    def test_missing_program(self, tmp_path):
        result = ShellService().run([str(tmp_path / "missing")])
        assert result.returncode == 127
        assert result.is_failure
        assert ShellService().execute([str(tmp_path / "missing")]) is False


class TestGitService:
    def test_ssh_command_is_passed_to_git(self):
        shell = Mock()
        git = GitService(shell, repository_dir="/srv/site")
        git.set_ssh_command("ssh -q")
        git.execute(["push", "paas", "HEAD:master"], env={"X": "1"})

        shell.execute.assert_called_once_with(
            ["git", "push", "paas", "HEAD:master"],
            cwd="/srv/site",
            must_run=False,
            quiet=True,
            env={"X": "1", "GIT_SSH_COMMAND": "ssh -q"},
        )

    def test_must_run_failure_raises_git_error(self):
        shell = Mock()
        shell.execute.side_effect = RuntimeError("Command failed: git fetch")
        with pytest.raises(GitError):
            GitService(shell).execute(["fetch"], must_run=True)

    def test_current_branch(self):
        shell = Mock()
        shell.execute.return_value = "feature"
        assert GitService(shell).get_current_branch() == "feature"
        shell.execute.return_value = False
        assert GitService(shell).get_current_branch() is None

    def test_adds_missing_remote(self):
        shell = Mock()
        shell.execute.side_effect = [False, True]
        GitService(shell).ensure_remote("paas", "git@example.com:abc.git", cwd="/srv/site")
        assert shell.execute.call_args[0][0] == ["git", "remote", "add", "paas", "git@example.com:abc.git"]

    def test_updates_wrong_remote(self):
        shell = Mock()
        shell.execute.side_effect = ["git@example.com:old.git", True]
        GitService(shell).ensure_remote("paas", "git@example.com:abc.git")
        assert shell.execute.call_args[0][0] == ["git", "remote", "set-url", "paas", "git@example.com:abc.git"]

    def test_matching_remote_is_left_alone(self):
        shell = Mock()
        shell.execute.return_value = "git@example.com:abc.git"
        GitService(shell).ensure_remote("paas", "git@example.com:abc.git")
        assert shell.execute.call_count == 1


class TestSSHService:
    def test_ssh_args(self):
        config = SSHConfig(identity_file="/keys/id_ed25519", options=["StrictHostKeyChecking no"])
        ssh = SSHService(config, Mock())
        assert ssh.get_ssh_args(["SendEnv FOO"]) == [
            "ssh",
            "-o", "StrictHostKeyChecking no",
            "-o", "SendEnv FOO",
            "-i", "/keys/id_ed25519",
            "-q",
        ]

    def test_verbose_is_not_quiet(self):
        ssh = SSHService(SSHConfig(verbose=True), Mock())
        assert ssh.get_ssh_command() == "ssh"

    def test_ssh_command_is_quoted(self):
        ssh = SSHService(SSHConfig(), Mock())
        assert ssh.get_ssh_command(["SendEnv FOO"]) == "ssh -o 'SendEnv FOO' -q"


class TestRelationshipsService:
    def encoded(self, data):
        return base64.b64encode(json.dumps(data).encode()).decode()

    def test_relationships_are_decoded_and_cached(self, tmp_path):
        ssh = Mock()
        ssh.execute_command.return_value = ExecutionResult(
            returncode=0, stdout=self.encoded({"database": [{"host": "db.internal"}]}) + "\n"
        )
        service = RelationshipsService(ssh, CacheService(tmp_path))

        assert service.get_relationships("ssh://a@b")["database"][0]["host"] == "db.internal"
        service.get_relationships("ssh://a@b")
        assert ssh.execute_command.call_count == 1

        service.clear_cache("ssh://a@b")
        service.get_relationships("ssh://a@b")
        assert ssh.execute_command.call_count == 2

    def test_ssh_failure(self, tmp_path):
        ssh = Mock()
        ssh.execute_command.return_value = ExecutionResult(returncode=255, stderr="Permission denied")
        with pytest.raises(PaasctlError):
            RelationshipsService(ssh, CacheService(tmp_path)).get_relationships("ssh://a@b")

    def test_invalid_value(self, tmp_path):
        ssh = Mock()
        ssh.execute_command.return_value = ExecutionResult(returncode=0, stdout="not base64!")
        with pytest.raises(PaasctlError):
            RelationshipsService(ssh, CacheService(tmp_path)).get_relationships("ssh://a@b")


class TestActivityMonitor:
    @pytest.fixture
    def monitor(self):
        api = Mock()
        return ActivityMonitor(api, Console(file=io.StringIO()), poll_interval=0, sleep=lambda _: None)

    def test_waits_until_complete(self, monitor, project):
        pending = Activity(id="a1", type="environment.activate", state="pending")
        monitor.api.get_activity.side_effect = [
            Activity(id="a1", type="environment.activate", state="in_progress", completion_percent=50),
            Activity(id="a1", type="environment.activate", state="complete", result="success"),
        ]
        finished = monitor.wait(pending, project)
        assert finished.is_success
        assert monitor.api.get_activity.call_count == 2

    def test_wait_multiple_keeps_order(self, monitor, project):
        first = Activity(id="a1", type="environment.update", state="pending")
        second = Activity(id="a2", type="environment.activate", state="pending")
        monitor.api.get_activity.side_effect = lambda _project, activity_id: Activity(
            id=activity_id, type="", state="complete", result="success"
        )

        assert monitor.wait_multiple([first, second], project) is True
        assert [c[0][1] for c in monitor.api.get_activity.call_args_list] == ["a1", "a2"]

    def test_no_activities(self, monitor, project):
        assert monitor.wait_multiple([], project) is True

    def test_failed_activity(self, monitor, project):
        done = Activity(id="a1", type="environment.update", state="complete", result="success")
        failed = Activity(id="a2", type="environment.activate", state="complete", result="failure")
        assert monitor.wait_multiple([done, failed], project) is False
        monitor.api.get_activity.assert_not_called()

    def test_api_error_while_polling(self, monitor, project):
        monitor.api.get_activity.side_effect = ApiError("boom", status_code=500)
        with pytest.raises(ActivityError):
            monitor.wait(Activity(id="a1", type="", state="pending"), project)
