"""
Session name to path resolution.

A session name maps to a file in one of two places: the configured local
file name resolves inside the working directory, every other name resolves
inside the global session directory. A missing name means "the current
session".
"""

import os
from pathlib import Path
from typing import TYPE_CHECKING

from .errors import EmptyNameError, GlobalSessionsDisabledError, NoActiveSessionError

if TYPE_CHECKING:
    from ..config.models import SessionsConfig

    """Expand ``~`` and make absolute, collapsing ``..`` without following symlinks."""

def absolute_path(path: Path | str) -> Path:
    return Path(os.path.abspath(os.path.expanduser(str(path))))


class PathResolver:
    """Turn session names into absolute session file paths.

    Example:
        path = PathResolver.resolve("work.session", config, current_session_path=None)
        # -> <config.directory>/work.session
    """

    @classmethod
    def resolve(
        cls,
        name: str | None,
        config: "SessionsConfig",
        current_session_path: Path | str | None,
        cwd: Path | None = None,
    ) -> Path:
        """Resolve a session name to an absolute path.

        Args:
            name: Session name, or None for the current session
            config: Session configuration
            current_session_path: Path of the current session, if any
            cwd: Working directory (defaults to CWD)

        Returns:
            Absolute, normalized path

        Raises:
            NoActiveSessionError: name is None and there is no current session
            EmptyNameError: name is an empty string
            GlobalSessionsDisabledError: name is global but directory is empty
        """
        if name is None:
            if not current_session_path:
                raise NoActiveSessionError()
            return absolute_path(current_session_path)

        if name == "":
            raise EmptyNameError()

        if config.local_sessions_enabled and name == config.local_file_name:
            return absolute_path((cwd or Path.cwd()) / name)

        if not config.global_sessions_enabled:
            raise GlobalSessionsDisabledError(name)

        return absolute_path(Path(config.directory) / name)

    @classmethod
    def global_directory(cls, config: "SessionsConfig") -> Path | None:
        """Absolute global session directory, or None when disabled."""
        if not config.global_sessions_enabled:
            return None
        return absolute_path(config.directory)


def resolve_path(
    name: str | None,
    config: "SessionsConfig",
    current_session_path: Path | str | None,
    cwd: Path | None = None,
) -> Path:
    """Module-level shortcut for PathResolver.resolve."""
    return PathResolver.resolve(name, config, current_session_path, cwd=cwd)
