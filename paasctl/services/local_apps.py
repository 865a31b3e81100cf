"""Discovery of applications in a local project checkout."""

import json
import os
from pathlib import Path
from typing import List

import yaml

from paasctl.config import Config
from paasctl.models.local import LocalApplication

# Directories never searched for app config files
IGNORED_DIRS = {".git", "node_modules", "vendor", ".paasctl"}


def get_applications(project_root: Path, config: Config) -> List[LocalApplication]:
    """
    Find every application in the project.

    Each directory containing the app config file is one application. Its
    name comes from the file's 'name' key, falling back to the directory name.
    """
    project_root = Path(project_root)
    app_file = config.get("local.app_config_file")
    found = []

    for dirpath, dirnames, filenames in os.walk(project_root):
        # Prune in place so ignored trees are never walked
        dirnames[:] = sorted(d for d in dirnames if d not in IGNORED_DIRS)
        if app_file in filenames:
            found.append(Path(dirpath) / app_file)

    apps = []
    for path in sorted(found):
        with open(path) as f:
            data = yaml.safe_load(f) or {}
        root = path.parent
        name = data.get("name") if isinstance(data, dict) else None
        apps.append(LocalApplication(name=name or root.name, root=root))

    return apps


def is_drupal(root: Path) -> bool:
    """Check whether a directory holds a Drupal site."""
    root = Path(root)
    composer_file = root / "composer.json"
    if composer_file.is_file():
        try:
            composer = json.loads(composer_file.read_text())
        except ValueError:
            composer = {}
        requires = composer.get("require") or {}
        if any(package.startswith("drupal/core") for package in requires):
            return True

    return any(
        (root / candidate).is_file()
        for candidate in ("core/lib/Drupal.php", "web/core/lib/Drupal.php")
    )
