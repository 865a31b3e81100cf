"""
Platform API Service

Thin client for the platform REST API: projects, environments and
activities. Environment lists are cached locally between commands.
"""

from typing import Any, Dict, List, Optional

import requests

from paasctl.config import Config
from paasctl.constants import ENVIRONMENTS_CACHE_PREFIX
from paasctl.exceptions import ApiError, ConfigurationError
from paasctl.models.platform import Activity, Environment, Project
from paasctl.services.cache_service import CacheService


class ApiService:
    """
    Platform API client.

    Responsibilities:
    - Authenticated HTTP calls (bearer token)
    - Project / environment / activity loading
    - Environment list caching and invalidation
    - Environment mutations (update, activate) returning activities
    """

    def __init__(
        self,
        config: Config,
        cache: CacheService,
        session: Optional[requests.Session] = None,
    ):
        self.config = config
        self.cache = cache
        self.base_url = config.require("api.base_url").rstrip("/")
        self.timeout = config.get("api.timeout", 30)
        self.session = session or requests.Session()
        self._projects: Dict[str, Project] = {}

        token = config.get("api.token")
        if token:
            self.session.headers["Authorization"] = f"Bearer {token}"
        self.session.headers.setdefault("Accept", "application/json")

    # HTTP helpers

    def _request(self, method: str, url: str, **kwargs) -> requests.Response:
        if not url.startswith("http"):
            url = f"{self.base_url}/{url.lstrip('/')}"
        try:
            response = self.session.request(method, url, timeout=self.timeout, **kwargs)
        except requests.RequestException as e:
            raise ApiError(f"Cannot reach the API: {e}", context=f"{method} {url}")
        return response

    def _check(self, response: requests.Response, method: str, url: str) -> Dict[str, Any]:
        if response.status_code == 401:
            raise ConfigurationError(
                "The API rejected the credentials",
                context="Set an API token in PAASCTL_TOKEN or api.token in ~/.paasctl/config.yaml",
            )
        if response.status_code >= 400:
            raise ApiError(
                f"API request failed (HTTP {response.status_code})",
                status_code=response.status_code,
                context=f"{method} {url}: {response.text[:200]}",
            )
        if not response.content:
            return {}
        return response.json()

    def _get(self, url: str, allow_missing: bool = False) -> Optional[Any]:
        response = self._request("GET", url)
        if allow_missing and response.status_code == 404:
            return None
        return self._check(response, "GET", url)

    @staticmethod
    def _activities(data: Dict[str, Any]) -> List[Activity]:
        embedded = data.get("_embedded") or {}
        return [Activity.from_dict(item) for item in embedded.get("activities", [])]

    # Projects

    def get_project(self, project_id: str) -> Optional[Project]:
        """
        Load a project by ID.

        Returns:
            Project, or None if it does not exist
        """
        if project_id not in self._projects:
            url = f"{self.base_url}/projects/{project_id}"
            data = self._get(url, allow_missing=True)
            if data is None:
                return None
            self._projects[project_id] = Project.from_dict(data, endpoint=url)
        return self._projects[project_id]

    # Environments

    def _environments_cache_key(self, project_id: str) -> str:
        return f"{ENVIRONMENTS_CACHE_PREFIX}:{self.base_url}:{project_id}"

    def get_environments(self, project: Project, refresh: bool = False) -> Dict[str, Environment]:
        """
        List a project's environments, keyed by ID.

        Args:
            project: Project
            refresh: Bypass the local cache

        Returns:
            Dict of environment ID -> Environment
        """
        cache_key = self._environments_cache_key(project.id)
        cached = None if refresh else self.cache.get(cache_key)

        if cached is None:
            data = self._get(f"{project.endpoint}/environments")
            cached = data if isinstance(data, list) else []
            self.cache.set(cache_key, cached, ttl=self.config.get("api.environments_ttl"))

        environments = [Environment.from_dict(item) for item in cached]
        return {environment.id: environment for environment in environments}

    def get_environment(
        self, environment_id: str, project: Project, refresh: bool = False
    ) -> Optional[Environment]:
        """
        Load an environment by ID.

        Uses the cached list unless refresh is set or the ID is not in it.

        Returns:
            Environment, or None if it does not exist
        """
        if not refresh:
            environments = self.get_environments(project)
            if environment_id in environments:
                return environments[environment_id]

        data = self._get(
            f"{project.endpoint}/environments/{environment_id}", allow_missing=True
        )
        if data is None:
            return None
        return Environment.from_dict(data)

    def clear_environments_cache(self, project_id: str) -> None:
        self.cache.delete(self._environments_cache_key(project_id))

    def update_environment(
        self, environment: Environment, project: Project, values: Dict[str, Any]
    ) -> List[Activity]:
        """PATCH an environment and return the activities it started."""
        url = f"{project.endpoint}/environments/{environment.id}"
        response = self._request("PATCH", url, json=values)
        data = self._check(response, "PATCH", url)
        for key, value in values.items():
            if hasattr(environment, key):
                setattr(environment, key, value)
        return self._activities(data)

    def activate_environment(self, environment: Environment, project: Project) -> List[Activity]:
        """Start activating an environment and return its activities."""
        url = f"{project.endpoint}/environments/{environment.id}/activate"
        response = self._request("POST", url, json={})
        return self._activities(self._check(response, "POST", url))

    # Activities

    def get_activity(self, project: Project, activity_id: str) -> Activity:
        url = f"{project.endpoint}/activities/{activity_id}"
        return Activity.from_dict(self._get(url))
