"""
Cache Service

Small JSON file cache under ~/.paasctl/cache, used for environment lists
and relationships.
"""

import hashlib
import json
import time
from pathlib import Path
from typing import Any, Optional


class CacheService:
    """File-backed key/value cache with per-entry TTL."""

    def __init__(self, cache_dir: Path):
        self.cache_dir = Path(cache_dir)

    def _path(self, key: str) -> Path:
        digest = hashlib.sha256(key.encode()).hexdigest()[:32]
        return self.cache_dir / f"{digest}.json"

    def get(self, key: str) -> Optional[Any]:
        """
        Get a cached value.

        Returns:
            The value, or None if missing, expired or unreadable
        """
        path = self._path(key)
        if not path.is_file():
            return None
        try:
            entry = json.loads(path.read_text())
        except (OSError, ValueError):
            return None
        if not isinstance(entry, dict):
            return None

        expires = entry.get("expires")
        if expires is not None and expires < time.time():
            path.unlink(missing_ok=True)
            return None
        return entry.get("value")

    def set(self, key: str, value: Any, ttl: Optional[int] = None) -> None:
        self.cache_dir.mkdir(parents=True, exist_ok=True)
        entry = {
            "key": key,
            "expires": time.time() + ttl if ttl else None,
            "value": value,
        }
        self._path(key).write_text(json.dumps(entry))

    def delete(self, key: str) -> bool:
        """Delete a cache entry. Returns True if something was removed."""
        path = self._path(key)
        if path.is_file():
            path.unlink()
            return True
        return False

    def has(self, key: str) -> bool:
        return self.get(key) is not None
