"""
Type definitions for session management.

This module defines the core data structures shared by the resolver,
the registry and the service: session kinds, session records, per-action
options, open editor documents and scan warnings.
"""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any


class SessionKind(Enum):
    """Namespace a session record was discovered in.

    GLOBAL: a file inside the configured session directory
    LOCAL: the fixed-name session file in the working directory
    """

    GLOBAL = "global"
    LOCAL = "local"


@dataclass(frozen=True)
class SessionRecord:
    """One discovered session file.

    Attributes:
        name: File base name including extension; unique registry key
        path: Absolute path to the session file
        kind: Namespace that produced this record
        modified_at: File modification time, used only for ordering
    """

    name: str
    path: Path
    kind: SessionKind
    modified_at: float

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary.

        Returns:
            Dictionary representation
        """
        return {
            "name": self.name,
            "path": str(self.path),
            "kind": self.kind.value,
            "modified_at": self.modified_at,
        }


@dataclass(frozen=True)
class ActionOptions:
    """Effective options for a single read, write or delete call."""

    force: bool
    verbose: bool


@dataclass(frozen=True)
class OpenDocument:
    """An editor document as reported by the host."""

    id: Any
    dirty: bool = False


@dataclass(frozen=True)
class ScanWarning:
    """Non-fatal problem found while scanning for sessions."""

    path: str
    message: str
