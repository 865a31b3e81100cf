"""Drush 8 and earlier site aliases (PHP, ~/.drush/<group>.aliases.drushrc.php)."""

import re
from pathlib import Path
from typing import Any, Dict, List, Optional

from paasctl.models.local import LocalApplication
from paasctl.models.platform import Environment, Project
from paasctl.site_alias.common import build_aliases, remove_file

PHP_OPEN_TAG = "<?php"


def php_export(value: Any) -> str:
    """Render a scalar as a PHP literal."""
    if value is True:
        return "TRUE"
    if value is False:
        return "FALSE"
    if value is None:
        return "NULL"
    if isinstance(value, (int, float)):
        return str(value)
    escaped = str(value).replace("\\", "\\\\").replace("'", "\\'")
    return f"'{escaped}'"


class DrushPhpWriter:
    """Writes aliases in the PHP array format read by Drush 8 and earlier."""

    def __init__(self, drush_home: Path, auto_remove_key: str, application_name: str):
        self.drush_home = Path(drush_home)
        self.auto_remove_key = auto_remove_key
        self.application_name = application_name

    @property
    def begin_marker(self) -> str:
        return f"// BEGIN {self.auto_remove_key}"

    @property
    def end_marker(self) -> str:
        return f"// END {self.auto_remove_key}"

    def get_filename(self, group: str) -> Path:
        return self.drush_home / f"{group}.aliases.drushrc.php"

    def _user_content(self, path: Path) -> str:
        """Everything in an existing file outside the generated block."""
        if not path.is_file():
            return ""
        content = path.read_text()
        if content.startswith(PHP_OPEN_TAG):
            content = content[len(PHP_OPEN_TAG):]
        block = re.compile(
            re.escape(self.begin_marker) + r".*?" + re.escape(self.end_marker) + r"\n?",
            re.DOTALL,
        )
        return block.sub("", content).strip()

    def _render_alias(self, name: str, alias: Dict[str, Any]) -> str:
        lines = [f"$aliases[{php_export(name)}] = array("]
        for key, value in alias.items():
            lines.append(f"  {php_export(key)} => {php_export(value)},")
        lines.append(");")
        return "\n".join(lines)

    def _render_block(self, project: Project, aliases: Dict[str, Dict[str, Any]]) -> str:
        parts = [
            self.begin_marker,
            "/**",
            f' * Drush aliases for the project "{project.title}" ({project.id}).',
            " *",
            f" * Generated by {self.application_name}. This block is replaced the next",
            " * time aliases are generated. Aliases outside it are kept.",
            " */",
        ]
        for name, alias in aliases.items():
            # Drush 8 names remote connection keys differently
            php_alias = {
                ("remote-host" if key == "host" else "remote-user" if key == "user" else key): value
                for key, value in alias.items()
            }
            parts.append(self._render_alias(name, php_alias))
        parts.append(self.end_marker)
        return "\n".join(parts)

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
        try:
            user_content = self._user_content(filename)
            if original_group and original_group != group:
                original_file = self.get_filename(original_group)
                original_content = self._user_content(original_file)
                user_content = "\n\n".join(c for c in (user_content, original_content) if c)
        except (OSError, UnicodeDecodeError):
            return False

        aliases = build_aliases(apps, environments, self.auto_remove_key)
        content = f"{PHP_OPEN_TAG}\n{self._render_block(project, aliases)}\n"
        if user_content:
            content += f"\n{user_content}\n"

        try:
            self.drush_home.mkdir(parents=True, exist_ok=True)
            filename.write_text(content)
        except OSError:
            return False
        if original_file is not None:
            remove_file(original_file)
        return True
