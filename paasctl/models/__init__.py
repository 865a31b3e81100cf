"""
paasctl Domain Models

Clean dataclass-based models for type-safe data handling.
"""

from .platform import (
    Project,
    Environment,
    Activity,
)
from .results import ExecutionResult
from .local import LocalApplication
from .ssh import SSHConfig

__all__ = [
    # Platform API
    "Project",
    "Environment",
    "Activity",
    # Results
    "ExecutionResult",
    # Local
    "LocalApplication",
    # SSH
    "SSHConfig",
]
