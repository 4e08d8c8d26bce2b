"""Structured error types for session operations.

Every guard failure in the session service raises one of these errors.
Each carries a category, a human-readable message, an optional recovery
suggestion and a details dict, so callers (the CLI, host glue) can format
them consistently.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any


class ErrorCategory(Enum):
    """Categories of session errors for organization and handling."""

    STATE = "state"  # Registry or current-session state forbids the action
    VALIDATION = "validation"  # Invalid names or arguments
    FILE_SYSTEM = "file_system"  # Path issues, permissions
    CONFIGURATION = "configuration"  # Malformed or unusable configuration
    RUNTIME = "runtime"  # Host collaborator failures


@dataclass
class SessionError(Exception):
    """Base class for session errors with recovery suggestions.

    Attributes:
        category: Error category for grouping.
        message: Human-readable error message.
        suggestion: Optional actionable recovery suggestion.
        details: Optional additional details dict.
        exit_code: Exit code to use when this error terminates the CLI.
    """

    category: ErrorCategory
    message: str
    suggestion: str | None = None
    details: dict[str, Any] | None = field(default_factory=dict)
    exit_code: int = 1

    def __post_init__(self) -> None:
        """Initialize the exception with the message."""
        super().__init__(self.message)

    def format(self, use_color: bool = True) -> str:
        """Format the error for display.

        Args:
            use_color: Whether to include ANSI color codes.

        Returns:
            Formatted error string with suggestion if available.
        """
        red = "\033[91m" if use_color else ""
        cyan = "\033[96m" if use_color else ""
        dim = "\033[2m" if use_color else ""
        reset = "\033[0m" if use_color else ""

        lines = [f"{red}Error:{reset} {self.message}"]

        if self.suggestion:
            lines.append(f"{cyan}Suggestion:{reset} {self.suggestion}")

        if self.details:
            for key, value in self.details.items():
                lines.append(f"{dim}  {key}: {value}{reset}")

        return "\n".join(lines)

    def __str__(self) -> str:
        """Return the formatted error message."""
        return self.format(use_color=False)


class EmptyRegistryError(SessionError):
    """No sessions were detected, so there is nothing to act on."""

    def __init__(self) -> None:
        super().__init__(
            category=ErrorCategory.STATE,
            message="There are no detected sessions.",
            suggestion="Change the configuration and detect sessions again",
        )


class NoSessionsError(SessionError):
    """No default session could be chosen for reading."""

    def __init__(self) -> None:
        super().__init__(
            category=ErrorCategory.STATE,
            message="There is no session to read.",
            suggestion="Supply a session name explicitly",
        )


class UnknownSessionError(SessionError):
    """The name does not belong to a detected session."""

    def __init__(self, name: str):
        super().__init__(
            category=ErrorCategory.VALIDATION,
            message=f"{name!r} is not a name for a detected session.",
            suggestion="List detected sessions to see the available names",
            details={"name": name},
        )
        self.name = name


class NoActiveSessionError(SessionError):
    """No name was given and there is no current session to fall back on."""

    def __init__(self) -> None:
        super().__init__(
            category=ErrorCategory.STATE,
            message="There is no active session.",
            suggestion="Supply a non-empty session name",
        )


class EmptyNameError(SessionError):
    """An explicitly supplied session name was empty."""

    def __init__(self) -> None:
        super().__init__(
            category=ErrorCategory.VALIDATION,
            message="Session name must not be empty.",
            suggestion="Supply a non-empty session name",
            exit_code=2,
        )


class UnsavedChangesError(SessionError):
    """Open documents have unsaved changes and the action was not forced."""

    def __init__(self, document_ids: list[Any]):
        ids = ", ".join(str(doc_id) for doc_id in document_ids)
        super().__init__(
            category=ErrorCategory.STATE,
            message=f"There are unsaved documents: {ids}.",
            suggestion="Save the documents or repeat the action with force",
            details={"documents": ids},
        )
        self.document_ids = list(document_ids)


class SessionExistsError(SessionError):
    """A session file already exists at the target path."""

    def __init__(self, path: Path):
        super().__init__(
            category=ErrorCategory.FILE_SYSTEM,
            message="Can't write to an existing session without force.",
            suggestion="Repeat the write with force to overwrite it",
            details={"path": str(path)},
        )
        self.path = path


class CannotDeleteCurrentError(SessionError):
    """The current session can only be deleted with force."""

    def __init__(self, path: Path):
        super().__init__(
            category=ErrorCategory.STATE,
            message="Can't delete the current session without force.",
            suggestion="Repeat the delete with force",
            details={"path": str(path)},
        )
        self.path = path


class DeleteFailedError(SessionError):
    """The session file could not be removed from disk."""

    def __init__(self, path: Path, original_error: str | None = None):
        message = f"Could not delete session file {path}"
        if original_error:
            message = f"{message}: {original_error}"
        super().__init__(
            category=ErrorCategory.FILE_SYSTEM,
            message=message,
            suggestion="Check that the file exists and you have write permissions",
            details={"path": str(path)},
        )
        self.path = path


class ConfigInvalidError(SessionError):
    """Malformed or unusable configuration."""

    def __init__(
        self,
        message: str,
        config_file: str | None = None,
        suggestion: str | None = None,
    ):
        default_suggestion = "Check your configuration file syntax and field types"
        super().__init__(
            category=ErrorCategory.CONFIGURATION,
            message=message,
            suggestion=suggestion or default_suggestion,
            details={"config_file": config_file} if config_file else None,
        )


class GlobalSessionsDisabledError(ConfigInvalidError):
    """A global session was addressed while the global directory is disabled."""

    def __init__(self, name: str):
        super().__init__(
            f"Can't resolve {name!r}: global sessions are disabled.",
            suggestion=(
                "Set 'directory' in the configuration or use the local session name"
            ),
        )
        self.name = name


class HostActionError(SessionError):
    """A host collaborator (snapshot writer/loader, document discard) failed."""

    def __init__(self, action: str, original_error: str | None = None):
        message = f"Host failed to {action}"
        if original_error:
            message = f"{message}: {original_error}"
        super().__init__(
            category=ErrorCategory.RUNTIME,
            message=message,
            details={"action": action},
        )
        self.action = action
