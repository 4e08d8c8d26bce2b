"""
Session management for editor workspaces.

Key components:
- PathResolver: Maps session names to session file paths
- SessionRegistry: Discovers sessions and answers catalog queries
- SessionService: Detect, read, write and delete operations
- SessionHost / FileSystem: Collaborator interfaces supplied by the host
"""

from .errors import (
    CannotDeleteCurrentError,
    ConfigInvalidError,
    DeleteFailedError,
    EmptyNameError,
    EmptyRegistryError,
    ErrorCategory,
    GlobalSessionsDisabledError,
    HostActionError,
    NoActiveSessionError,
    NoSessionsError,
    SessionError,
    SessionExistsError,
    UnknownSessionError,
    UnsavedChangesError,
)
from .host import FileSystem, LocalFileSystem, SessionHost
from .paths import PathResolver, resolve_path
from .policy import run_shutdown, run_startup, should_auto_read, should_auto_write
from .registry import SessionRegistry, build_record, infer_kind
from .service import SessionService
from .types import ActionOptions, OpenDocument, ScanWarning, SessionKind, SessionRecord

__all__ = [
    "ActionOptions",
    "CannotDeleteCurrentError",
    "ConfigInvalidError",
    "DeleteFailedError",
    "EmptyNameError",
    "EmptyRegistryError",
    "ErrorCategory",
    "FileSystem",
    "GlobalSessionsDisabledError",
    "HostActionError",
    "LocalFileSystem",
    "NoActiveSessionError",
    "NoSessionsError",
    "OpenDocument",
    "PathResolver",
    "ScanWarning",
    "SessionError",
    "SessionExistsError",
    "SessionHost",
    "SessionKind",
    "SessionRecord",
    "SessionRegistry",
    "SessionService",
    "UnknownSessionError",
    "UnsavedChangesError",
    "build_record",
    "infer_kind",
    "resolve_path",
    "run_shutdown",
    "run_startup",
    "should_auto_read",
    "should_auto_write",
]
