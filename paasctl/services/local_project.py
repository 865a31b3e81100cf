"""
Local Project Service

Finds the project checkout on disk and reads/writes its local config
(.paasctl/local/project.yaml).
"""

from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from paasctl.config import Config
from paasctl.services.git_service import GitService


class LocalProject:
    """The local checkout of a platform project."""

    def __init__(self, config: Config, git: GitService, cwd: Optional[Path] = None):
        self.config = config
        self.git = git
        self.cwd = Path(cwd) if cwd else Path.cwd()
        self._project_root: Optional[Path] = None
        self._searched = False

    def _config_path(self, project_root: Path) -> Path:
        return (
            project_root
            / self.config.get("local.local_dir")
            / self.config.get("local.project_config")
        )

    def get_project_root(self) -> Optional[Path]:
        """
        Find the project root: the nearest directory (from cwd upwards)
        containing the local project config.
        """
        if not self._searched:
            self._searched = True
            for directory in [self.cwd, *self.cwd.parents]:
                if self._config_path(directory).is_file():
                    self._project_root = directory
                    break
        return self._project_root

    def get_project_config(self, project_root: Optional[Path] = None) -> Dict[str, Any]:
        project_root = project_root or self.get_project_root()
        if project_root is None:
            return {}
        path = self._config_path(project_root)
        if not path.is_file():
            return {}
        with open(path) as f:
            return yaml.safe_load(f) or {}

    def write_project_config(self, project_root: Path, values: Dict[str, Any]) -> None:
        """Merge values into the local project config."""
        path = self._config_path(project_root)
        current = self.get_project_config(project_root)
        current.update(values)
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w") as f:
            yaml.safe_dump(current, f, default_flow_style=False)

    def ensure_git_remote(self, project_root: Path, git_url: str) -> None:
        """Make sure the platform Git remote exists and points at git_url."""
        self.git.ensure_remote(
            self.config.get("detection.git_remote_name"), git_url, cwd=project_root
        )
