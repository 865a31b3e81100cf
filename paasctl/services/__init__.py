"""
paasctl Services Layer

Centralized business logic and operations for CLI commands.
"""

from .shell_service import ShellService
from .cache_service import CacheService
from .api_service import ApiService
from .activity_monitor import ActivityMonitor
from .git_service import GitService
from .ssh_service import SSHService
from .local_project import LocalProject
from .relationships_service import RelationshipsService
from .drush import DrushService

__all__ = [
    "ShellService",
    "CacheService",
    "ApiService",
    "ActivityMonitor",
    "GitService",
    "SSHService",
    "LocalProject",
    "RelationshipsService",
    "DrushService",
]
