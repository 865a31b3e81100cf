"""SSH service for building SSH commands and running remote commands."""

import shlex
from typing import List, Optional

from paasctl.models.results import ExecutionResult
from paasctl.models.ssh import SSHConfig
from paasctl.services.shell_service import ShellService


class SSHService:
    """Service for SSH operations."""

    def __init__(self, config: SSHConfig, shell: ShellService):
        """
        Initialize SSH service.

        Args:
            config: SSH configuration
            shell: Shell service used to run ssh
        """
        self.config = config
        self.shell = shell

    def get_ssh_args(self, extra_options: Optional[List[str]] = None) -> List[str]:
        """
        Build the ssh argument list (without the host).

        Args:
            extra_options: Extra '-o' options, e.g. 'SendEnv FOO'

        Returns:
            List of arguments, starting with 'ssh'
        """
        args = ["ssh"]
        for option in [*self.config.options, *(extra_options or [])]:
            args.extend(["-o", option])

        identity = self.config.identity_file_expanded
        if identity is not None:
            args.extend(["-i", str(identity)])

        if not self.config.verbose:
            args.append("-q")
        return args

    def get_ssh_command(self, extra_options: Optional[List[str]] = None) -> str:
        """SSH command as a single shell string (for GIT_SSH_COMMAND)."""
        return shlex.join(self.get_ssh_args(extra_options))

    def execute_command(self, ssh_url: str, command: str) -> ExecutionResult:
        """
        Execute command on an environment via SSH.

        Args:
            ssh_url: SSH URL of the environment
            command: Remote command

        Returns:
            ExecutionResult with execution details
        """
        return self.shell.run([*self.get_ssh_args(), ssh_url, command])
