"""
Startup and shutdown policy for session auto-read and auto-write.

The decisions are pure functions of their inputs so host glue can call
them from whatever lifecycle events the editor provides.
"""

from typing import TYPE_CHECKING

from ..sessions_logging import get_logger
from .types import SessionRecord

if TYPE_CHECKING:
    from ..config.models import SessionsConfig
    from .service import SessionService

logger = get_logger()


def should_auto_read(has_shown_content: bool, config: "SessionsConfig") -> bool:
    """Read a session on startup only if the editor shows nothing yet."""
    return config.auto_read and not has_shown_content and not config.disabled


def should_auto_write(has_current_session: bool, config: "SessionsConfig") -> bool:
    """Write on shutdown only if there is a current session to write to."""
    return config.auto_write and has_current_session and not config.disabled


def run_startup(
    service: "SessionService", has_shown_content: bool
) -> SessionRecord | None:
    """Startup hook: read the default session when policy allows.

    Args:
        service: Session service with sessions already detected
        has_shown_content: True if the editor opened files or has content

    Returns:
        The record that was read, or None if policy skipped the read
    """
    if not should_auto_read(has_shown_content, service.config):
        return None
    logger.debug("Auto-reading default session on startup")
    return service.read()


def run_shutdown(service: "SessionService") -> SessionRecord | None:
    """Shutdown hook: rewrite the current session when policy allows.

    The write is forced since it always targets the current session's own
    file.

    Returns:
        The record that was written, or None if policy skipped the write
    """
    has_current = service.current_session_name() is not None
    if not should_auto_write(has_current, service.config):
        return None
    logger.debug("Auto-writing current session on shutdown")
    return service.write(None, force=True)
