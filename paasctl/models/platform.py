"""
Platform API Models

Dataclass models for projects, environments and activities as returned by
the platform API.
"""

from dataclasses import dataclass, field
from typing import Optional, Dict, Any, List

from paasctl.constants import (
    ACTIVE_ENVIRONMENT_STATUSES,
    ACTIVITY_STATE_COMPLETE,
    ACTIVITY_STATE_PENDING,
    ACTIVITY_STATE_CANCELLED,
    ACTIVITY_RESULT_SUCCESS,
)
from paasctl.exceptions import EnvironmentStateError


@dataclass(frozen=True)
class Project:
    """A platform project. Read-only for the duration of a command."""

    id: str
    title: str
    git_url: str
    endpoint: str

    @classmethod
    def from_dict(cls, data: Dict[str, Any], endpoint: str) -> "Project":
        """Create from an API project resource."""
        repository = data.get("repository") or {}
        return cls(
            id=data["id"],
            title=data.get("title") or data["id"],
            git_url=repository.get("url", ""),
            endpoint=endpoint.rstrip("/"),
        )

    def __repr__(self) -> str:
        return f"Project(id={self.id})"


@dataclass
class Environment:
    """A deployable environment of a project."""

    id: str
    project_id: str
    status: str
    parent: Optional[str] = None
    name: Optional[str] = None
    title: Optional[str] = None
    links: Dict[str, Any] = field(default_factory=dict)

    @property
    def is_active(self) -> bool:
        """Check if the environment is active."""
        return self.status in ACTIVE_ENVIRONMENT_STATUSES

    @property
    def public_url(self) -> Optional[str]:
        """First public URL of the environment, if any."""
        public = self.links.get("public-url")
        if isinstance(public, dict):
            return public.get("href")
        return None

    def get_ssh_url(self, app: Optional[str] = None) -> str:
        """
        Get the SSH URL of the environment (or of one app in it).

        Raises:
            EnvironmentStateError: If the environment has no SSH URL
        """
        key = f"pf:ssh:{app}" if app else "ssh"
        link = self.links.get(key)
        if not link and app:
            link = self.links.get("ssh")
        if not isinstance(link, dict) or not link.get("href"):
            raise EnvironmentStateError(
                "The environment does not have an SSH URL. It may be inactive or still building.",
                self.id,
            )
        return link["href"]

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the API representation (used by the cache)."""
        return {
            "id": self.id,
            "project": self.project_id,
            "status": self.status,
            "parent": self.parent,
            "name": self.name,
            "title": self.title,
            "_links": self.links,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Environment":
        """Create from an API environment resource."""
        return cls(
            id=data["id"],
            project_id=data.get("project", ""),
            status=data.get("status", "inactive"),
            parent=data.get("parent"),
            name=data.get("name") or data["id"],
            title=data.get("title"),
            links=data.get("_links") or {},
        )

    def __repr__(self) -> str:
        return f"Environment(id={self.id}, status={self.status}, parent={self.parent})"


@dataclass
class Activity:
    """Handle to an asynchronous remote operation."""

    id: str
    type: str
    state: str
    result: Optional[str] = None
    completion_percent: int = 0
    description: str = ""
    project_id: str = ""
    environments: List[str] = field(default_factory=list)

    @property
    def is_complete(self) -> bool:
        """Check if the activity has finished (successfully or not)."""
        return self.state in (ACTIVITY_STATE_COMPLETE, ACTIVITY_STATE_CANCELLED)

    @property
    def is_success(self) -> bool:
        """Check if the activity finished successfully."""
        return self.state == ACTIVITY_STATE_COMPLETE and self.result == ACTIVITY_RESULT_SUCCESS

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Activity":
        """Create from an API activity resource."""
        return cls(
            id=data["id"],
            type=data.get("type", ""),
            state=data.get("state", ACTIVITY_STATE_PENDING),
            result=data.get("result"),
            completion_percent=int(data.get("completion_percent") or 0),
            description=data.get("description") or data.get("type", ""),
            project_id=data.get("project", ""),
            environments=list(data.get("environments") or []),
        )

    def __repr__(self) -> str:
        return f"Activity(id={self.id}, type={self.type}, state={self.state})"
