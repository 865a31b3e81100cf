"""Drush 9+ site aliases (YAML, ~/.drush/site-aliases/<group>.site.yml)."""

from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from paasctl.models.local import LocalApplication
from paasctl.models.platform import Environment, Project
from paasctl.site_alias.common import build_aliases, remove_file

HEADER = """# Drush aliases for the project "{title}" ({id}).
#
# Generated by {application}. Aliases marked with '{key}' are replaced the
# next time aliases are generated. Other aliases in this file are kept.

"""


class DrushYamlWriter:
    """Writes aliases in the YAML format read by Drush 9 and later."""

    def __init__(self, drush_home: Path, auto_remove_key: str, application_name: str):
        self.drush_home = Path(drush_home)
        self.auto_remove_key = auto_remove_key
        self.application_name = application_name

    @property
    def alias_dir(self) -> Path:
        return self.drush_home / "site-aliases"

    def get_filename(self, group: str) -> Path:
        return self.alias_dir / f"{group}.site.yml"

    def _read_existing(self, path: Path) -> Dict[str, Any]:
        if not path.is_file():
            return {}
        with open(path) as f:
            data = yaml.safe_load(f) or {}
        return data if isinstance(data, dict) else {}

    def _ensure_drush_config(self) -> None:
        """Register the alias directory in ~/.drush/drush.yml."""
        config_file = self.drush_home / "drush.yml"
        config: Dict[str, Any] = {}
        if config_file.is_file():
            with open(config_file) as f:
                config = yaml.safe_load(f) or {}

        if not isinstance(config, dict):
            config = {}
        if not isinstance(config.get("drush"), dict):
            config["drush"] = {}
        if not isinstance(config["drush"].get("paths"), dict):
            config["drush"]["paths"] = {}
        paths = config["drush"]["paths"]
        alias_path = paths.get("alias-path")
        if isinstance(alias_path, str):
            paths["alias-path"] = [alias_path]
        elif not isinstance(alias_path, list):
            paths["alias-path"] = []
        alias_paths = paths["alias-path"]
        alias_dir = str(self.alias_dir)
        if alias_dir in alias_paths:
            return

        alias_paths.append(alias_dir)
        with open(config_file, "w") as f:
            yaml.safe_dump(config, f, default_flow_style=False)

    def create_aliases(
        self,
        project: Project,
        group: str,
        apps: List[LocalApplication],
        environments: List[Environment],
        original_group: Optional[str] = None,
    ) -> bool:
        filename = self.get_filename(group)
        original_file = None
        if original_group and original_group != group:
            original_file = self.get_filename(original_group)

        # Aliases added by the user survive; generated ones are rebuilt
        try:
            existing = self._read_existing(filename)
            if original_file is not None:
                existing = {**self._read_existing(original_file), **existing}
        except (OSError, yaml.YAMLError):
            # Leave a file that cannot be read untouched
            return False

        kept = {
            name: alias
            for name, alias in existing.items()
            if not (isinstance(alias, dict) and alias.get(self.auto_remove_key))
        }
        aliases = {**kept, **build_aliases(apps, environments, self.auto_remove_key)}

        header = HEADER.format(
            title=project.title,
            id=project.id,
            application=self.application_name,
            key=self.auto_remove_key,
        )
        try:
            self.alias_dir.mkdir(parents=True, exist_ok=True)
            with open(filename, "w") as f:
                f.write(header)
                yaml.safe_dump(aliases, f, default_flow_style=False, sort_keys=False)
            self._ensure_drush_config()
        except (OSError, yaml.YAMLError):
            return False
        if original_file is not None:
            remove_file(original_file)
        return True
