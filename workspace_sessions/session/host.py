"""
Host collaborator interfaces for session management.

The session core never touches the editor directly. Everything it needs
from its environment goes through two interfaces:

- FileSystem: directory listing, file checks, modification times, deletion
- SessionHost: snapshot writer/loader, open documents, current-session
  tracking and the user-visible notification sink

LocalFileSystem is the default FileSystem backed by the real disk.
"""

import os
from abc import ABC, abstractmethod
from pathlib import Path

from .types import OpenDocument


class FileSystem(ABC):
    """Filesystem capabilities used by session detection and deletion."""

    @abstractmethod
    def list_directory_entries(self, path: Path) -> list[Path]:
        """List direct children of a directory."""

    @abstractmethod
    def is_directory(self, path: Path) -> bool:
        """Check whether path is an existing directory."""

    @abstractmethod
    def is_readable_regular_file(self, path: Path) -> bool:
        """Check whether path is a regular file the process can read."""

    @abstractmethod
    def file_modified_time(self, path: Path) -> float:
        """Get the modification time of a file."""

    @abstractmethod
    def delete_file(self, path: Path) -> None:
        """Delete a file.

        Raises:
            OSError: If the file cannot be deleted
        """

    @abstractmethod
    def get_current_working_directory(self) -> Path:
        """Get the current working directory."""


class LocalFileSystem(FileSystem):
    """FileSystem implementation backed by the local disk."""

    def list_directory_entries(self, path: Path) -> list[Path]:
        return sorted(Path(path).iterdir())

    def is_directory(self, path: Path) -> bool:
        return Path(path).is_dir()

    def is_readable_regular_file(self, path: Path) -> bool:
        path = Path(path)
        return path.is_file() and os.access(path, os.R_OK)

    def file_modified_time(self, path: Path) -> float:
        return Path(path).stat().st_mtime

    def delete_file(self, path: Path) -> None:
        Path(path).unlink()

    def get_current_working_directory(self) -> Path:
        return Path.cwd()


class SessionHost(ABC):
    """Editor-side capabilities the session service depends on.

    Example:
        class EditorHost(SessionHost):
            def load_snapshot(self, path):
                editor.restore(path)
            ...

        service = SessionService(config, EditorHost())
        service.read("work.session")
    """

    @abstractmethod
    def current_session_path(self) -> Path | None:
        """Get the path of the current session, or None if there is none."""

    @abstractmethod
    def set_current_session_path(self, path: Path | None) -> None:
        """Set (or clear with None) the current session path."""

    @abstractmethod
    def write_snapshot(self, path: Path, overwrite: bool) -> None:
        """Serialize editor state to path."""

    @abstractmethod
    def load_snapshot(self, path: Path) -> None:
        """Restore editor state from path."""

    @abstractmethod
    def list_open_documents(self) -> list[OpenDocument]:
        """List documents currently open in the editor."""

    @abstractmethod
    def discard_all_open_documents(self) -> None:
        """Close every open document, dropping unsaved changes."""

    @abstractmethod
    def report(self, message: str) -> None:
        """Show a notification to the user."""
