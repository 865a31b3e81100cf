"""
Drush Service

Locates the Drush executable, detects its version and generates site
aliases in the format(s) that version understands.
"""

import os
import re
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Union

from packaging.version import InvalidVersion, Version

from paasctl.config import Config
from paasctl.constants import (
    DRUSH_COMMAND,
    DRUSH_MAKE_LOCK_MIN_VERSION,
    DRUSH_PHP_ALIASES_MAX_VERSION,
    DRUSH_VERSION_PATTERN,
    DRUSH_YAML_ALIASES_MIN_VERSION,
)
from paasctl.exceptions import DependencyMissingError
from paasctl.models.platform import Environment, Project
from paasctl.services import local_apps
from paasctl.services.local_project import LocalProject
from paasctl.services.shell_service import ShellService
from paasctl.site_alias import AliasWriter, DrushPhpWriter, DrushYamlWriter

CLI_ROOT = Path(__file__).resolve().parent.parent


@dataclass
class DrushState:
    """What has been learned about Drush during this process."""

    executable: Optional[str] = None
    version: Optional[str] = None
    version_detected: bool = False
    installed: bool = False

    def reset(self) -> None:
        self.executable = None
        self.version = None
        self.version_detected = False
        self.installed = False


def parse_version(output: str) -> Optional[str]:
    """
    Parse the version from 'drush version' output.

    The first non-blank line looks like " Drush Version   :  8.0.0-beta14 ".

    Returns:
        The version string, or None if it cannot be found
    """
    lines = [line for line in output.splitlines() if line.strip()]
    if not lines:
        return None
    match = re.search(DRUSH_VERSION_PATTERN, lines[0])
    return match.group(1) if match else None


def compare_version(version: str, other: str, release_only: bool = False) -> Optional[int]:
    """
    Compare two version strings (-1, 0, 1), or None if either is unparseable.

    With release_only, pre-release and dev suffixes are ignored, so
    "9.0.0-alpha1" compares equal to "9.0.0".
    """
    try:
        left, right = Version(version), Version(other)
    except InvalidVersion:
        return None
    if release_only:
        left, right = Version(left.base_version), Version(right.base_version)
    return (left > right) - (left < right)


def _is_executable(path: Path) -> bool:
    return path.is_file() and os.access(path, os.X_OK)


class DrushService:
    """Adapter around the external Drush tool."""

    def __init__(self, config: Config, shell: ShellService, local_project: LocalProject):
        self.config = config
        self.shell = shell
        self.local_project = local_project
        self.state = DrushState()

    def get_executable(self) -> str:
        """
        Get the full path to the Drush executable.

        Returns:
            The absolute path, or 'drush' if the path is not known
        """
        if self.state.executable is None:
            self.state.executable = self._find_executable()
        return self.state.executable

    def _find_executable(self) -> str:
        if self.config.has("local.drush_executable"):
            return self.config.get("local.drush_executable")

        # Drush installed in the project, via Composer or local build dependencies
        project_root = self.local_project.get_project_root()
        if project_root is not None:
            candidates = [
                project_root / "vendor" / "bin" / DRUSH_COMMAND,
                project_root
                / self.config.get("local.dependencies_dir")
                / "php" / "vendor" / "bin" / DRUSH_COMMAND,
            ]
            for candidate in candidates:
                if _is_executable(candidate):
                    return str(candidate)

        if self.shell.command_exists(DRUSH_COMMAND):
            return self.shell.resolve_command(DRUSH_COMMAND)

        # Drush bundled with the CLI
        bundled = CLI_ROOT / "vendor" / "bin" / DRUSH_COMMAND
        if _is_executable(bundled):
            return str(bundled)

        return DRUSH_COMMAND

    def ensure_installed(self) -> None:
        """
        Raises:
            DependencyMissingError: If Drush is not installed
        """
        if self.state.installed:
            return
        if self.get_executable() == DRUSH_COMMAND and not self.shell.command_exists(DRUSH_COMMAND):
            raise DependencyMissingError(
                "Drush is not installed",
                context="Install Drush with Composer, or set local.drush_executable",
            )
        self.state.installed = True

    def get_version(self, refresh: bool = False) -> Optional[str]:
        """
        Get the installed Drush version.

        Args:
            refresh: Detect the version again instead of using the cached one

        Returns:
            The version, or None if it cannot be determined

        Raises:
            DependencyMissingError: If Drush is not installed
        """
        if refresh:
            self.state.reset()
        if self.state.version_detected:
            return self.state.version

        self.ensure_installed()
        result = self.shell.run([self.get_executable(), "version"])
        self.state.version = parse_version(result.stdout) if result.is_success else None
        self.state.version_detected = True
        return self.state.version

    def _version_at_least(self, minimum: str, unknown: bool, release_only: bool = False) -> bool:
        version = self.get_version()
        if version is None:
            return unknown
        comparison = compare_version(version, minimum, release_only=release_only)
        return unknown if comparison is None else comparison >= 0

    def supports_make_lock(self) -> bool:
        """Check whether Drush supports --lock for the 'make' command."""
        return self._version_at_least(DRUSH_MAKE_LOCK_MIN_VERSION, unknown=False)

    def supports_yaml_alias_files(self) -> bool:
        """Check whether Drush reads YAML alias files (unknown versions: yes)."""
        return self._version_at_least(DRUSH_YAML_ALIASES_MIN_VERSION, unknown=True)

    def supports_php_alias_files(self) -> bool:
        """Check whether Drush reads PHP alias files (unknown versions: yes)."""
        # Any 9.x release, pre-releases included, dropped PHP alias files
        return not self._version_at_least(
            DRUSH_PHP_ALIASES_MAX_VERSION, unknown=False, release_only=True
        )

    def execute(
        self,
        args: List[str],
        cwd: Optional[Path] = None,
        must_run: bool = False,
        quiet: bool = True,
    ) -> Union[str, bool]:
        """
        Execute a Drush command.

        Args:
            args: Command arguments (everything after 'drush')
            cwd: The working directory
            must_run: Raise if the command fails
            quiet: Suppress command output
        """
        return self.shell.execute(
            [self.get_executable(), *args], cwd=cwd, must_run=must_run, quiet=quiet
        )

    def clear_cache(self) -> bool:
        return bool(self.execute(["cache-clear", "drush"]))

    def get_aliases(self, group: str) -> Union[str, bool]:
        return self.execute(["@none", "site-alias", "--format=list", f"@{group}"])

    def get_auto_remove_key(self) -> str:
        name = self.config.get("application.name").lower().replace(".", "")
        return re.sub(r"[^a-z-]+", "-", name) + "-auto-remove"

    def get_alias_group(self, project: Project, project_root: Path) -> str:
        project_config = self.local_project.get_project_config(project_root)
        return project_config.get("alias-group") or project.id

    def get_writers(self) -> List[AliasWriter]:
        """Alias writers for every format the installed Drush supports."""
        drush_home = Path(self.config.get("local.drush_home") or Path.home() / ".drush").expanduser()
        key = self.get_auto_remove_key()
        name = self.config.get("application.name")

        writers: List[AliasWriter] = []
        if self.supports_yaml_alias_files():
            writers.append(DrushYamlWriter(drush_home, key, name))
        if self.supports_php_alias_files():
            writers.append(DrushPhpWriter(drush_home, key, name))
        return writers

    def create_aliases(
        self,
        project: Project,
        project_root: Path,
        environments: List[Environment],
        original_group: Optional[str] = None,
    ) -> bool:
        """
        Create Drush aliases for the project and its environments.

        Returns:
            True if every alias writer succeeded
        """
        group = self.get_alias_group(project, project_root)
        apps = [
            app
            for app in local_apps.get_applications(project_root, self.config)
            if local_apps.is_drupal(app.root)
        ]

        # Run every writer, even after a failure
        results = [
            writer.create_aliases(project, group, apps, environments, original_group)
            for writer in self.get_writers()
        ]
        return all(results)
