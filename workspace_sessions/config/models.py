"""Configuration models for session management."""

import os
from pathlib import Path
from typing import Any, Literal

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    StrictBool,
    ValidationInfo,
    field_validator,
)

from ..session.types import ActionOptions

Action = Literal["read", "write", "delete"]

DEFAULT_GLOBAL_DIR = Path.home() / ".workspace-sessions"
DEFAULT_SESSION_DIRECTORY = str(DEFAULT_GLOBAL_DIR / "sessions")
DEFAULT_LOCAL_FILE_NAME = "Session.snapshot"

ACTION_DEFAULTS: dict[str, dict[str, bool]] = {
    "force": {"read": False, "write": True, "delete": False},
    "verbose": {"read": False, "write": True, "delete": True},
}


class ActionFlags(BaseModel):
    """One boolean per session action."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    read: StrictBool = Field(default=False)
    write: StrictBool = Field(default=False)
    delete: StrictBool = Field(default=False)

    def for_action(self, action: Action) -> bool:
        return getattr(self, action)


class SessionsConfig(BaseModel):
    """Session management configuration with validation.

    Empty ``directory`` disables global sessions, empty ``local_file_name``
    disables local sessions.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    # Where sessions live
    directory: str = Field(default=DEFAULT_SESSION_DIRECTORY)
    local_file_name: str = Field(default=DEFAULT_LOCAL_FILE_NAME)

    # Host lifecycle policy
    auto_read: StrictBool = Field(default=False)
    auto_write: StrictBool = Field(default=True)

    # Per-action defaults
    force: ActionFlags = Field(
        default_factory=lambda: ActionFlags(**ACTION_DEFAULTS["force"])
    )
    verbose: ActionFlags = Field(
        default_factory=lambda: ActionFlags(**ACTION_DEFAULTS["verbose"])
    )

    disabled: StrictBool = Field(default=False)

    @field_validator("directory")
    @classmethod
    def expand_directory(cls, v: str) -> str:
        if not v:
            return ""
        return os.path.expanduser(v)

    @field_validator("force", "verbose", mode="before")
    @classmethod
    def fill_action_defaults(cls, v: Any, info: ValidationInfo) -> Any:
        """Partial tables keep the defaults for the actions they omit."""
        if isinstance(v, dict):
            return {**ACTION_DEFAULTS[info.field_name], **v}
        return v

    @field_validator("local_file_name")
    @classmethod
    def validate_local_file_name(cls, v: str) -> str:
        separators = {os.sep, "/"} | ({os.altsep} if os.altsep else set())
        if any(sep in v for sep in separators):
            raise ValueError("local_file_name must be a bare file name")
        if v in (".", ".."):
            raise ValueError("local_file_name must name a file")
        return v

    @property
    def global_sessions_enabled(self) -> bool:
        return self.directory != ""

    @property
    def local_sessions_enabled(self) -> bool:
        return self.local_file_name != ""

    def options_for(self, action: Action, **overrides: Any) -> ActionOptions:
        """Build the effective options for an action.

        Args:
            action: One of "read", "write", "delete"
            **overrides: ``force`` / ``verbose`` values; None keeps the default

        Returns:
            ActionOptions with configured defaults and non-None overrides
        """
        force = overrides.get("force")
        verbose = overrides.get("verbose")
        return ActionOptions(
            force=self.force.for_action(action) if force is None else bool(force),
            verbose=(
                self.verbose.for_action(action) if verbose is None else bool(verbose)
            ),
        )
