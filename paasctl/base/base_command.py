"""
Base Command

Abstract base for all paasctl CLI commands.
Provides common functionality and structure.
"""

import json
import sys
from abc import ABC, abstractmethod
from typing import Any, Iterable, Optional

import inquirer
from rich.console import Console

from paasctl.config import Config
from paasctl.exceptions import PaasctlError
from paasctl.logger import CommandLogger
from paasctl.ui_components import show_header


class BaseCommand(ABC):
    """
    Abstract base command class.

    Provides:
    - Config loading
    - Logger initialization
    - Header display
    - Prompts (confirm, input with autocomplete)
    - Error handling / exit codes
    - JSON output support
    """

    def __init__(
        self,
        verbose: bool = False,
        json_output: bool = False,
        yes: bool = False,
        config: Optional[Config] = None,
        console: Optional[Console] = None,
    ):
        self.verbose = verbose
        self.json_output = json_output
        self.yes = yes
        # Messages go to stderr, data to stdout
        self.console = console or Console(stderr=True)
        self._config = config
        self.logger: Optional[CommandLogger] = None

    @property
    def config(self) -> Config:
        if self._config is None:
            self._config = Config()
        return self._config

    def init_logger(self, project_name: str, command_name: str) -> Optional[CommandLogger]:
        """
        Initialize command logger (skip in JSON mode).

        Args:
            project_name: Project ID (use "global" for non-project commands)
            command_name: Command name

        Returns:
            CommandLogger instance or None if JSON mode
        """
        if self.json_output:
            return None
        self.logger = CommandLogger(
            project_name,
            command_name,
            logs_dir=self.config.user_config_dir() / "logs",
            verbose=self.verbose,
            console=self.console,
        )
        return self.logger

    def output_json(self, data: Any) -> None:
        print(json.dumps(data, indent=2))

    def show_header(
        self,
        title: str,
        subtitle: Optional[str] = None,
        project: Optional[str] = None,
        environment: Optional[str] = None,
        details: Optional[dict] = None,
    ) -> None:
        """Show command header (skip in JSON or verbose mode)."""
        if not self.verbose and not self.json_output:
            show_header(
                title=title,
                subtitle=subtitle,
                project=project,
                environment=environment,
                details=details,
                console=self.console,
            )

    def print_success(self, message: str) -> None:
        if not self.json_output:
            self.console.print(f"[green]✓ {message}[/green]", highlight=False)

    def print_error(self, message: str) -> None:
        self.console.print(f"[red]✗ {message}[/red]", highlight=False)

    def print_warning(self, message: str) -> None:
        if not self.json_output:
            self.console.print(f"[yellow]⚠ {message}[/yellow]", highlight=False)

    def print_dim(self, message: str) -> None:
        if not self.json_output:
            self.console.print(f"[dim]{message}[/dim]", highlight=False)

    def confirm(self, question: str, default: bool = False) -> bool:
        """
        Ask for user confirmation.

        Args:
            question: Question to ask (rich markup allowed)
            default: Default answer

        Returns:
            True if confirmed
        """
        if self.yes:
            return True

        default_str = "y" if default else "n"
        self.console.print(
            f"{question} [bold bright_white]\\[y/n][/bold bright_white] [dim]({default_str})[/dim]: ",
            end="",
        )
        try:
            answer = input().strip().lower()
        except EOFError:
            return default

        if not answer:
            return default

        return answer in ["y", "yes"]

    def ask_input(
        self, question: str, default: Optional[str] = None, choices: Iterable[str] = ()
    ) -> Optional[str]:
        """
        Ask for a value, with tab completion from choices.

        Returns the default when there is no terminal to ask on.
        """
        if self.yes or not sys.stdin.isatty():
            return default

        values = sorted(choices)

        def complete(text: str, state: int) -> Optional[str]:
            matches = [value for value in values if value.startswith(text)]
            return matches[state] if state < len(matches) else None

        answers = inquirer.prompt(
            [inquirer.Text("value", message=question, default=default, autocomplete=complete)],
            raise_keyboard_interrupt=True,
        )
        value = (answers or {}).get("value")
        return value.strip() if value and value.strip() else default

    def _show_log_path(self) -> None:
        if self.logger and self.logger.log_path and not self.verbose:
            self.print_dim(f"Logs saved to: {self.logger.log_path}")

    @abstractmethod
    def execute(self, **kwargs) -> int:
        """
        Execute command logic.

        Returns:
            Exit code
        """

    def run(self, **kwargs) -> None:
        """
        Run command with error handling, then exit with its code.

        Args:
            **kwargs: Command arguments
        """
        try:
            exit_code = self.execute(**kwargs) or 0
        except KeyboardInterrupt:
            self.console.print("\n[yellow]⚠️  Operation cancelled by user[/yellow]")
            self._show_log_path()
            raise SystemExit(130)
        except SystemExit:
            raise
        except PaasctlError as e:
            if self.logger:
                self.logger.log_error(e.message, context=e.context)
            else:
                self.console.print(f"\n[bold red]✗ {e.message}[/bold red]", highlight=False)
                if e.context:
                    self.console.print(f"  [color(208)]{e.context}[/color(208)]", highlight=False)
            self._show_log_path()
            raise SystemExit(1)
        except Exception as e:
            error_type = type(e).__name__
            self.console.print(f"\n[bold red]✗ {error_type}:[/bold red] {e}\n", highlight=False)
            if self.logger:
                self.logger.log_error(f"{error_type}: {e}")
            self._show_log_path()
            raise SystemExit(1)
        finally:
            if self.logger:
                self.logger.close()

        raise SystemExit(exit_code)
