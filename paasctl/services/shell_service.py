"""Shell service for running local commands."""

import os
import shlex
import shutil
import subprocess
from pathlib import Path
from typing import Dict, List, Optional, Union

from paasctl.logger import CommandLogger
from paasctl.models.results import ExecutionResult


class ShellService:
    """Runs external programs (git, ssh, drush) and resolves commands."""

    def __init__(self, logger: Optional[CommandLogger] = None, verbose: bool = False):
        self.logger = logger
        self.verbose = verbose

    def run(
        self,
        args: List[str],
        cwd: Optional[Union[str, Path]] = None,
        env: Optional[Dict[str, str]] = None,
        quiet: bool = True,
    ) -> ExecutionResult:
        """
        Run a command and return its result.

        Args:
            args: Command and arguments
            cwd: Working directory
            env: Extra environment variables
            quiet: Capture output instead of streaming it to the terminal

        Returns:
            ExecutionResult
        """
        command = shlex.join(args)
        if self.logger:
            self.logger.log_command(command)

        try:
            result = subprocess.run(
                args,
                cwd=cwd,
                env={**os.environ, **(env or {})},
                capture_output=quiet,
                text=True,
            )
        except OSError as e:
            # Same exit code a shell gives for a command it cannot run
            if self.logger:
                self.logger.log(f"Cannot run {args[0]}: {e}", "WARNING")
            return ExecutionResult(returncode=127, stderr=str(e), command=command)

        stdout = result.stdout or ""
        stderr = result.stderr or ""
        if self.logger:
            self.logger.log_output(stdout, "stdout")
            self.logger.log_output(stderr, "stderr")
            if result.returncode != 0:
                self.logger.log(f"Command exited with code {result.returncode}", "WARNING")

        return ExecutionResult(
            returncode=result.returncode,
            stdout=stdout,
            stderr=stderr,
            command=command,
        )

    def execute(
        self,
        args: List[str],
        cwd: Optional[Union[str, Path]] = None,
        must_run: bool = False,
        quiet: bool = True,
        env: Optional[Dict[str, str]] = None,
    ) -> Union[str, bool]:
        """
        Run a command, returning its output on success.

        Returns:
            The command's stdout (stripped) or True if it was not captured,
            or False if the command failed and must_run is False

        Raises:
            RuntimeError: If the command fails and must_run is True
        """
        result = self.run(args, cwd=cwd, env=env, quiet=quiet)
        if result.is_failure:
            if must_run:
                error_msg = f"Command failed: {result.command}\nExit code: {result.returncode}"
                if result.stderr:
                    error_msg += f"\nError: {result.stderr.strip()}"
                raise RuntimeError(error_msg)
            return False
        if not quiet:
            return True
        return result.stdout.strip() or True

    def command_exists(self, command: str) -> bool:
        """Check if a command is on PATH."""
        return shutil.which(command) is not None

    def resolve_command(self, command: str) -> str:
        """Absolute path of a command on PATH (or the bare name if not found)."""
        return shutil.which(command) or command
