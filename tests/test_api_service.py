"""Tests for the platform API client."""

from unittest.mock import Mock

import pytest

from paasctl.config import Config
from paasctl.exceptions import ApiError, ConfigurationError
from paasctl.services.api_service import ApiService
from paasctl.services.cache_service import CacheService

ENVIRONMENTS = [
    {"id": "master", "status": "active", "_links": {"ssh": {"href": "ssh://abc123-master@ssh.example.com"}}},
    {"id": "feature", "status": "inactive", "parent": "master"},
]


def response(status_code=200, data=None):
    resp = Mock()
    resp.status_code = status_code
    resp.content = b"{}" if data is not None else b""
    resp.json.return_value = data
    resp.text = ""
    return resp


@pytest.fixture
def session():
    session = Mock()
    session.headers = {}
    return session


@pytest.fixture
def api(config, session, tmp_path):
    return ApiService(config, CacheService(tmp_path / "cache"), session=session)


class TestProjects:
    def test_get_project(self, api, session):
        session.request.return_value = response(
            data={"id": "abc123", "title": "Example", "repository": {"url": "abc123@git.example.com:abc123.git"}}
        )
        project = api.get_project("abc123")

        assert project.git_url == "abc123@git.example.com:abc123.git"
        assert project.endpoint == "https://api.paas.example.com/projects/abc123"
        session.request.assert_called_once_with(
            "GET", "https://api.paas.example.com/projects/abc123", timeout=30
        )

    def test_missing_project(self, api, session):
        session.request.return_value = response(404)
        assert api.get_project("nope") is None

    def test_bad_credentials(self, api, session):
        session.request.return_value = response(401)
        with pytest.raises(ConfigurationError):
            api.get_project("abc123")

    def test_server_error(self, api, session):
        session.request.return_value = response(500)
        with pytest.raises(ApiError) as exc:
            api.get_project("abc123")
        assert exc.value.status_code == 500


class TestEnvironments:
    def test_environment_list_is_cached(self, api, session, project):
        session.request.return_value = response(data=ENVIRONMENTS)

        first = api.get_environments(project)
        second = api.get_environments(project)

        assert list(first) == ["master", "feature"]
        assert second["feature"].parent == "master"
        assert session.request.call_count == 1

    def test_refresh_bypasses_cache(self, api, session, project):
        session.request.return_value = response(data=ENVIRONMENTS)
        api.get_environments(project)
        api.get_environments(project, refresh=True)
        assert session.request.call_count == 2

    def test_clear_cache(self, api, session, project):
        session.request.return_value = response(data=ENVIRONMENTS)
        api.get_environments(project)
        api.clear_environments_cache(project.id)
        api.get_environments(project)
        assert session.request.call_count == 2

    def test_get_environment_uses_list(self, api, session, project):
        session.request.return_value = response(data=ENVIRONMENTS)
        environment = api.get_environment("master", project)
        assert environment.is_active
        assert session.request.call_count == 1

    def test_get_environment_refresh(self, api, session, project):
        session.request.return_value = response(data={"id": "feature", "status": "active"})
        environment = api.get_environment("feature", project, refresh=True)

        assert environment.status == "active"
        session.request.assert_called_once_with(
            "GET", f"{project.endpoint}/environments/feature", timeout=30
        )

    def test_unknown_environment(self, api, session, project):
        session.request.side_effect = [response(data=ENVIRONMENTS), response(404)]
        assert api.get_environment("nope", project) is None

    def test_update_environment_returns_activities(self, api, session, project):
        session.request.return_value = response(data=ENVIRONMENTS)
        environment = api.get_environments(project)["feature"]
        session.request.return_value = response(
            data={"_embedded": {"activities": [{"id": "a1", "type": "environment.update", "state": "pending"}]}}
        )

        activities = api.update_environment(environment, project, {"parent": "staging"})

        assert [activity.id for activity in activities] == ["a1"]
        assert environment.parent == "staging"
        assert session.request.call_args[0][0] == "PATCH"
        assert session.request.call_args[1]["json"] == {"parent": "staging"}

    def test_activate_environment(self, api, session, project):
        session.request.return_value = response(data=ENVIRONMENTS)
        environment = api.get_environments(project)["feature"]
        session.request.return_value = response(data={})

        assert api.activate_environment(environment, project) == []
        assert session.request.call_args[0] == ("POST", f"{project.endpoint}/environments/feature/activate")


def test_token_header(session, tmp_path):
    config = Config(env={"PAASCTL_HOME": str(tmp_path), "PAASCTL_TOKEN": "secret"})
    ApiService(config, CacheService(tmp_path / "cache"), session=session)
    assert session.headers["Authorization"] == "Bearer secret"
