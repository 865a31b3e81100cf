"""Shared fixtures for paasctl tests."""

import io
from pathlib import Path

import pytest
from rich.console import Console

from paasctl.config import Config
from paasctl.models.platform import Environment, Project

API_URL = "https://api.paas.example.com"


@pytest.fixture
def config(tmp_path: Path) -> Config:
    """Config isolated from the real environment and ~/.paasctl."""
    return Config(env={"PAASCTL_HOME": str(tmp_path / "home")})


@pytest.fixture
def console() -> Console:
    return Console(file=io.StringIO(), width=120)


@pytest.fixture
def project() -> Project:
    return Project(
        id="abc123",
        title="Example site",
        git_url="abc123@git.example.com:abc123.git",
        endpoint=f"{API_URL}/projects/abc123",
    )


def make_environment(
    environment_id: str,
    status: str = "active",
    parent: str = None,
    ssh: bool = True,
) -> Environment:
    links = {"public-url": {"href": f"https://{environment_id}.example.com/"}}
    if ssh:
        links["ssh"] = {"href": f"ssh://abc123-{environment_id}@ssh.example.com"}
    return Environment(
        id=environment_id,
        project_id="abc123",
        status=status,
        parent=parent,
        name=environment_id,
        title=environment_id.title(),
        links=links,
    )


@pytest.fixture
def project_root(tmp_path: Path) -> Path:
    """A local checkout with a project config."""
    root = tmp_path / "site"
    config_dir = root / ".paasctl" / "local"
    config_dir.mkdir(parents=True)
    (config_dir / "project.yaml").write_text("id: abc123\n")
    return root
