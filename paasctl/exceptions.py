"""
paasctl CLI Exception Hierarchy

Clean exception hierarchy for consistent error handling across the CLI.
"""

from typing import Optional


class PaasctlError(Exception):
    """Base exception for all paasctl errors."""

    def __init__(self, message: str, context: Optional[str] = None):
        self.message = message
        self.context = context
        super().__init__(self.format_message())

    def format_message(self) -> str:
        """Format error message with optional context."""
        if self.context:
            return f"{self.message}\nContext: {self.context}"
        return self.message


class ConfigurationError(PaasctlError):
    """Raised when configuration is invalid or missing."""

    pass


class RootNotFoundError(PaasctlError):
    """Raised when a command needs a local project but none was found."""

    def __init__(self, cwd: Optional[str] = None):
        message = "Project root not found. This can only be run from inside a project directory."
        context = f"Searched upwards from: {cwd}" if cwd else None
        super().__init__(message, context)


class DependencyMissingError(PaasctlError):
    """Raised when a required external tool is not installed."""

    pass


class ApiError(PaasctlError):
    """Raised when the platform API returns an error."""

    def __init__(self, message: str, status_code: Optional[int] = None, context: Optional[str] = None):
        self.status_code = status_code
        super().__init__(message, context)


class EnvironmentStateError(PaasctlError):
    """Raised when an environment is not in the state an operation needs."""

    def __init__(self, message: str, environment_id: str):
        self.environment_id = environment_id
        super().__init__(message, context=f"Environment: {environment_id}")


class GitError(PaasctlError):
    """Raised when a Git command fails."""

    pass


class ActivityError(PaasctlError):
    """Raised when an activity cannot be loaded."""

    pass
