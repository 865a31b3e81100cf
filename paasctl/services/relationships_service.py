"""Relationships service: an environment's service credentials, read over SSH."""

import base64
import binascii
import json
from typing import Any, Dict

from paasctl.constants import RELATIONSHIPS_CACHE_PREFIX
from paasctl.exceptions import PaasctlError
from paasctl.services.cache_service import CacheService
from paasctl.services.ssh_service import SSHService

RELATIONSHIPS_VARIABLE = "PLATFORM_RELATIONSHIPS"


class RelationshipsService:
    """Loads and caches relationships per SSH URL."""

    def __init__(self, ssh: SSHService, cache: CacheService, ttl: int = 3600):
        self.ssh = ssh
        self.cache = cache
        self.ttl = ttl

    def _cache_key(self, ssh_url: str) -> str:
        return f"{RELATIONSHIPS_CACHE_PREFIX}:{ssh_url}"

    def get_relationships(self, ssh_url: str, refresh: bool = False) -> Dict[str, Any]:
        """
        Get the relationships of the environment behind an SSH URL.

        Raises:
            PaasctlError: If the remote command fails or returns bad data
        """
        cache_key = self._cache_key(ssh_url)
        if not refresh:
            cached = self.cache.get(cache_key)
            if cached is not None:
                return cached

        result = self.ssh.execute_command(ssh_url, f"echo ${RELATIONSHIPS_VARIABLE}")
        if result.is_failure:
            raise PaasctlError(
                "Failed to read relationships over SSH",
                context=result.stderr.strip() or f"ssh exited with {result.returncode}",
            )

        encoded = result.stdout.strip()
        if not encoded:
            relationships: Dict[str, Any] = {}
        else:
            try:
                relationships = json.loads(base64.b64decode(encoded))
            except (binascii.Error, ValueError) as e:
                raise PaasctlError(f"Invalid ${RELATIONSHIPS_VARIABLE} value", context=str(e))

        self.cache.set(cache_key, relationships, ttl=self.ttl)
        return relationships

    def clear_cache(self, ssh_url: str) -> None:
        self.cache.delete(self._cache_key(ssh_url))
