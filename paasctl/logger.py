"""
Logging system for paasctl
Writes each command run to its own log file, with clean console output
"""

import re
from pathlib import Path
from datetime import datetime
from typing import Optional, TextIO
from rich.console import Console

from paasctl.constants import LOG_DATE_FORMAT, LOG_TIME_FORMAT

ANSI_ESCAPE = re.compile(r"\x1B(?:[@-Z\\-_]|\[[0-?]*[ -/]*[@-~])")


class CommandLogger:
    """
    Manages logging for a single command run
    - Writes all output to a log file in real-time
    - Shows clean progress lines in the console (unless verbose)
    - Captures errors with context
    """

    def __init__(
        self,
        project_name: str,
        operation: str,
        logs_dir: Path,
        verbose: bool = False,
        console: Optional[Console] = None,
    ):
        """
        Initialize logger

        Args:
            project_name: Project ID (or 'global')
            operation: Command name (e.g., 'environment-push')
            logs_dir: Base logs directory (~/.paasctl/logs)
            verbose: If True, mirror every log line in the console
            console: Console for user-facing lines (stderr by default)
        """
        self.project_name = project_name
        self.operation = operation
        self.verbose = verbose
        self.console = console if console is not None else Console(stderr=True)
        self.log_file: Optional[TextIO] = None
        self.log_path: Optional[Path] = None
        self.current_step = ""
        self.has_errors = False

        # Structure: logs/{project}/{date}/{time}_{operation}.log
        now = datetime.now()
        project_logs_dir = Path(logs_dir) / project_name / now.strftime(LOG_DATE_FORMAT)
        project_logs_dir.mkdir(parents=True, exist_ok=True)

        self.log_path = project_logs_dir / f"{now.strftime(LOG_TIME_FORMAT)}_{operation}.log"
        self.log_file = open(self.log_path, "w", buffering=1)

        self._write_log_header()

    def _write_log_header(self):
        header = f"""
{"=" * 80}
paasctl Command Log
{"=" * 80}
Project: {self.project_name}
Operation: {self.operation}
Started: {datetime.now().isoformat()}
{"=" * 80}

"""
        self.log_file.write(header)

    def log(self, message: str, level: str = "INFO"):
        """
        Log a message to file and optionally console

        Args:
            message: Message to log
            level: Log level (INFO, WARNING, ERROR, DEBUG)
        """
        timestamp = datetime.now().strftime("%H:%M:%S")
        if self.log_file:
            self.log_file.write(f"[{timestamp}] [{level}] {message}\n")

        if self.verbose:
            if level == "ERROR":
                self.console.print(f"[red]{message}[/red]", highlight=False)
            elif level == "WARNING":
                self.console.print(f"[yellow]{message}[/yellow]", highlight=False)
            elif level == "DEBUG":
                self.console.print(f"[dim]{message}[/dim]", highlight=False)
            else:
                self.console.print(message, highlight=False)

    def log_command(self, command: str):
        """Log a command being executed"""
        self.log(f"Executing: {command}", "DEBUG")

    def log_output(self, output: str, stream: str = "stdout"):
        """
        Log command output to the file (console only in verbose mode)

        Args:
            output: Command output (single line or multiline)
            stream: Stream name (stdout, stderr)
        """
        if not output:
            return

        clean_output = ANSI_ESCAPE.sub("", output)
        if self.log_file:
            for line in clean_output.splitlines():
                self.log_file.write(f"  [{stream}] {line}\n")

        if self.verbose:
            self.console.print(output, markup=False, highlight=False)

    def log_error(self, error: str, context: Optional[str] = None):
        """
        Log an error with context

        Args:
            error: Error message
            context: Additional context (e.g., command that failed)
        """
        self.has_errors = True

        error_block = f"""
{"!" * 80}
ERROR OCCURRED
{"!" * 80}
{error}
"""
        if context:
            error_block += f"\nContext: {context}\n"
        error_block += f"{'!' * 80}\n\n"

        if self.log_file:
            self.log_file.write(error_block)

        self.console.print(f"[bold red]✗ {error}[/bold red]", highlight=False)
        if context:
            self.console.print(f"  [color(208)]{context}[/color(208)]", highlight=False)

    def step(self, step_name: str):
        """
        Start a new step

        Args:
            step_name: Name of the step
        """
        self.current_step = step_name
        self.log(f"Step: {step_name}", "INFO")

        if not self.verbose:
            self.console.print(
                f"[color(214)]▶[/color(214)] [white]{step_name}[/white]", highlight=False
            )

    def success(self, message: str):
        """Log a success message"""
        self.log(message, "INFO")

        if not self.verbose:
            self.console.print(f"  [dim]✓ {message}[/dim]", highlight=False)

    def warning(self, message: str):
        """Log a warning message"""
        self.log(message, "WARNING")

        if not self.verbose:
            self.console.print(f"  [yellow]⚠[/yellow] [dim]{message}[/dim]", highlight=False)

    def close(self):
        """Close log file"""
        if self.log_file:
            footer = f"""
{"=" * 80}
Completed: {datetime.now().isoformat()}
Status: {"FAILED" if self.has_errors else "SUCCESS"}
{"=" * 80}
"""
            self.log_file.write(footer)
            self.log_file.close()
            self.log_file = None

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, _exc_tb):
        if exc_type is not None and exc_type is not SystemExit:
            # SystemExit is the normal way commands finish
            self.log_error(
                str(exc_val) if exc_val else "Operation failed",
                context=f"{exc_type.__name__}",
            )
        self.close()
        return False
