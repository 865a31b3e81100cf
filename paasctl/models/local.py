"""
Local Project Models
"""

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class LocalApplication:
    """An application found in the local project checkout."""

    name: str
    root: Path

    @property
    def web_root(self) -> Path:
        """Local document root used for the _local Drush alias."""
        for candidate in ("web", "docroot", "public"):
            if (self.root / candidate).is_dir():
                return self.root / candidate
        return self.root

    def __repr__(self) -> str:
        return f"LocalApplication(name={self.name}, root={self.root})"
