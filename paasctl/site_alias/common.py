"""
Shared pieces of the Drush alias writers.

Both writers build the same alias data; they only differ in the file
format and location.
"""

from pathlib import Path
from typing import Any, Dict, List, Optional, Protocol, Tuple

from paasctl.constants import DRUSH_LOCAL_ALIAS, DRUSH_REMOTE_ROOT
from paasctl.exceptions import EnvironmentStateError
from paasctl.models.local import LocalApplication
from paasctl.models.platform import Environment, Project


class AliasWriter(Protocol):
    """A Drush alias file format."""

    def get_filename(self, group: str) -> Path:
        ...

    def create_aliases(
        self,
        project: Project,
        group: str,
        apps: List[LocalApplication],
        environments: List[Environment],
        original_group: Optional[str] = None,
    ) -> bool:
        ...


def parse_ssh_url(ssh_url: str) -> Tuple[str, str]:
    """Split 'ssh://user@host' (or 'user@host') into (user, host)."""
    address = ssh_url.split("://", 1)[-1]
    user, _, host = address.rpartition("@")
    return user, host


def alias_name(environment_id: str, app: LocalApplication, multiple_apps: bool) -> str:
    if multiple_apps:
        return f"{environment_id}--{app.name}"
    return environment_id


def local_alias_name(app: LocalApplication, multiple_apps: bool) -> str:
    if multiple_apps:
        return f"{DRUSH_LOCAL_ALIAS}--{app.name}"
    return DRUSH_LOCAL_ALIAS


def build_aliases(
    apps: List[LocalApplication],
    environments: List[Environment],
    auto_remove_key: str,
) -> Dict[str, Dict[str, Any]]:
    """
    Build alias definitions, keyed by alias name.

    Every generated alias carries the auto-remove key so that it can be told
    apart from aliases the user added by hand.
    """
    multiple_apps = len(apps) > 1
    aliases: Dict[str, Dict[str, Any]] = {}

    for app in apps:
        aliases[local_alias_name(app, multiple_apps)] = {
            "root": str(app.web_root),
            auto_remove_key: True,
        }

        for environment in environments:
            if not environment.is_active:
                continue
            try:
                ssh_url = environment.get_ssh_url(app.name if multiple_apps else None)
            except EnvironmentStateError:
                continue

            user, host = parse_ssh_url(ssh_url)
            alias: Dict[str, Any] = {
                "root": DRUSH_REMOTE_ROOT,
                "host": host,
                "user": user,
            }
            if environment.public_url:
                alias["uri"] = environment.public_url
            alias[auto_remove_key] = True
            aliases[alias_name(environment.id, app, multiple_apps)] = alias

    return aliases


def remove_file(path: Path) -> None:
    if path.is_file():
        path.unlink()
