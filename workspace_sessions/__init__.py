"""Named editor workspace sessions: discovery, read, write and delete."""

from .config import ConfigLoader, SessionsConfig, load_config
from .session import (
    SessionError,
    SessionHost,
    SessionKind,
    SessionRecord,
    SessionRegistry,
    SessionService,
)
from .sessions_logging import get_logger, setup_logging

__version__ = "1.0.0"

__all__ = [
    "ConfigLoader",
    "SessionError",
    "SessionHost",
    "SessionKind",
    "SessionRecord",
    "SessionRegistry",
    "SessionService",
    "SessionsConfig",
    "get_logger",
    "load_config",
    "setup_logging",
]
