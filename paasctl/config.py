"""
Configuration for paasctl.

Defaults ship in the package (config.yaml). They are merged with the user
config file, then with PAASCTL_* environment variables and the project .env.
"""

import copy
import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from dotenv import dotenv_values

from paasctl.exceptions import ConfigurationError

DEFAULTS_PATH = Path(__file__).parent / "config.yaml"

# Environment variables mapped onto dotted config keys
ENV_OVERRIDES = {
    "TOKEN": "api.token",
    "API_URL": "api.base_url",
    "GIT_REMOTE_NAME": "detection.git_remote_name",
    "PRODUCTION_BRANCH": "detection.production_branch",
    "DRUSH_EXECUTABLE": "local.drush_executable",
    "DRUSH_HOME": "local.drush_home",
    "SSH_IDENTITY_FILE": "ssh.identity_file",
}


def _deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    merged = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def _load_yaml(path: Path) -> Dict[str, Any]:
    try:
        with open(path) as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in {path}", context=str(e))
    if not isinstance(data, dict):
        raise ConfigurationError(f"Config file must contain a mapping: {path}")
    return data


class Config:
    """
    Layered CLI configuration with dotted-key access.

    Example:
        config = Config()
        config.get("detection.git_remote_name")  # "paas"
    """

    def __init__(
        self,
        values: Optional[Dict[str, Any]] = None,
        env: Optional[Dict[str, str]] = None,
        project_root: Optional[Path] = None,
    ):
        data = _load_yaml(DEFAULTS_PATH)
        env = dict(os.environ if env is None else env)
        prefix = data["application"]["env_prefix"]

        # Project .env values have lower priority than the real environment
        if project_root is not None:
            dotenv_file = Path(project_root) / ".env"
            if dotenv_file.is_file():
                file_values = {
                    k: v for k, v in dotenv_values(dotenv_file).items() if v is not None
                }
                env = {**file_values, **env}

        self._env = env
        user_file = self.user_config_dir(data) / "config.yaml"
        if user_file.is_file():
            data = _deep_merge(data, _load_yaml(user_file))
        if values:
            data = _deep_merge(data, values)

        for suffix, key in ENV_OVERRIDES.items():
            if env.get(prefix + suffix):
                data = _deep_merge(data, self._nest(key, env[prefix + suffix]))

        self._data = data

    @staticmethod
    def _nest(key: str, value: Any) -> Dict[str, Any]:
        nested: Dict[str, Any] = {}
        cursor = nested
        parts = key.split(".")
        for part in parts[:-1]:
            cursor = cursor.setdefault(part, {})
        cursor[parts[-1]] = value
        return nested

    def user_config_dir(self, data: Optional[Dict[str, Any]] = None) -> Path:
        """Directory holding user config, caches and logs (~/.paasctl)."""
        data = data if data is not None else self._data
        home = self._env.get(data["application"]["env_prefix"] + "HOME")
        if home:
            return Path(home).expanduser()
        return Path.home() / data["application"]["user_config_dir"]

    def has(self, key: str) -> bool:
        """True if the key exists and is not null."""
        return self._lookup(key) is not None

    def get(self, key: str, default: Any = None) -> Any:
        value = self._lookup(key)
        return default if value is None else value

    def require(self, key: str) -> Any:
        value = self._lookup(key)
        if value is None:
            raise ConfigurationError(f"Missing required configuration: {key}")
        return value

    def _lookup(self, key: str) -> Any:
        cursor: Any = self._data
        for part in key.split("."):
            if not isinstance(cursor, dict) or part not in cursor:
                return None
            cursor = cursor[part]
        return cursor

    def env(self, name: str) -> Optional[str]:
        return self._env.get(name)

    def __repr__(self) -> str:
        return f"Config(api={self.get('api.base_url')})"
