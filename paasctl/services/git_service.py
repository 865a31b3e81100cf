"""Git service: thin wrapper around the git executable."""

from pathlib import Path
from typing import Dict, List, Optional, Union

from paasctl.exceptions import GitError
from paasctl.services.shell_service import ShellService


class GitService:
    """Runs git commands in the project repository."""

    def __init__(self, shell: ShellService, repository_dir: Optional[Path] = None):
        self.shell = shell
        self.repository_dir = repository_dir
        self.ssh_command: Optional[str] = None

    def set_default_repository_dir(self, repository_dir: Path) -> None:
        self.repository_dir = repository_dir

    def set_ssh_command(self, ssh_command: Optional[str]) -> None:
        """Use this SSH command (GIT_SSH_COMMAND) for remote operations."""
        self.ssh_command = ssh_command

    def execute(
        self,
        args: List[str],
        cwd: Optional[Path] = None,
        must_run: bool = False,
        quiet: bool = True,
        env: Optional[Dict[str, str]] = None,
    ) -> Union[str, bool]:
        """
        Run a git command.

        Args:
            args: Arguments after 'git'
            cwd: Working directory (defaults to the repository dir)
            must_run: Raise GitError if the command fails
            quiet: Capture output instead of streaming it
            env: Extra environment variables

        Returns:
            Output string (or True) on success, False on failure
        """
        env = dict(env or {})
        if self.ssh_command:
            env["GIT_SSH_COMMAND"] = self.ssh_command
        try:
            return self.shell.execute(
                ["git", *args],
                cwd=cwd or self.repository_dir,
                must_run=must_run,
                quiet=quiet,
                env=env,
            )
        except RuntimeError as e:
            raise GitError(str(e))

    def get_current_branch(self, cwd: Optional[Path] = None) -> Optional[str]:
        """Current branch name, or None (detached HEAD or not a repository)."""
        output = self.execute(["symbolic-ref", "--short", "-q", "HEAD"], cwd=cwd)
        if isinstance(output, str) and output:
            return output
        return None

    def get_remote_url(self, remote: str, cwd: Optional[Path] = None) -> Optional[str]:
        output = self.execute(["remote", "get-url", remote], cwd=cwd)
        return output if isinstance(output, str) else None

    def ensure_remote(self, remote: str, url: str, cwd: Optional[Path] = None) -> None:
        """Add the remote, or fix its URL. Does nothing if it already matches."""
        current = self.get_remote_url(remote, cwd=cwd)
        if current == url:
            return
        if current is None:
            self.execute(["remote", "add", remote, url], cwd=cwd, must_run=True)
        else:
            self.execute(["remote", "set-url", remote, url], cwd=cwd, must_run=True)
