"""
SSH Configuration Models

Dataclass models for SSH operations.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional


@dataclass
class SSHConfig:
    """SSH options shared by every command that talks to an environment."""

    identity_file: Optional[str] = None
    options: List[str] = field(default_factory=list)
    verbose: bool = False

    @property
    def identity_file_expanded(self) -> Optional[Path]:
        """Get expanded identity file path (resolves ~)."""
        if self.identity_file:
            return Path(self.identity_file).expanduser()
        return None

    def __repr__(self) -> str:
        return f"SSHConfig(identity_file={self.identity_file}, options={len(self.options)})"
