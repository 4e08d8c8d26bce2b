"""
Session service: detect, read, write and delete sessions.

This module provides the SessionService class that composes PathResolver,
SessionRegistry and the host collaborators into the four user-facing
operations. Each operation is a short sequence of guard checks; the first
failing guard raises a SessionError before anything further happens.
"""

from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import TYPE_CHECKING

from ..sessions_logging import get_logger
from .errors import (
    CannotDeleteCurrentError,
    DeleteFailedError,
    EmptyNameError,
    EmptyRegistryError,
    HostActionError,
    NoSessionsError,
    SessionError,
    SessionExistsError,
    UnknownSessionError,
    UnsavedChangesError,
)
from .host import FileSystem, LocalFileSystem, SessionHost
from .paths import PathResolver, absolute_path
from .registry import SessionRegistry, build_record
from .types import SessionRecord

if TYPE_CHECKING:
    from ..config.models import SessionsConfig

logger = get_logger()

REPORT_PREFIX = "(workspace-sessions)"


class SessionService:
    """Manages named session files for an editor host.

    Responsibilities:
    - Detect sessions in the global directory and the working directory
    - Read a session after guarding unsaved documents
    - Write a session without clobbering existing files unless forced
    - Delete a session, protecting the current one unless forced

    Example:
        service = SessionService(load_config(), EditorHost())
        service.detect()
        service.write("work.session")
        service.read("work.session", force=True)
        print(f"Latest: {service.latest()}")
    """

    def __init__(
        self,
        config: "SessionsConfig",
        host: SessionHost,
        filesystem: FileSystem | None = None,
        registry: SessionRegistry | None = None,
    ):
        """Initialize session service.

        Args:
            config: Validated session configuration
            host: Editor collaborators (snapshots, documents, notifications)
            filesystem: Filesystem capabilities (defaults to the local disk)
            registry: Session catalog (a fresh, empty one if not provided)
        """
        self.config = config
        self.host = host
        self.filesystem = filesystem if filesystem is not None else LocalFileSystem()
        self.registry = (
            registry if registry is not None else SessionRegistry(self.filesystem)
        )

    @property
    def disabled(self) -> bool:
        return self.config.disabled

    @property
    def sessions(self) -> dict[str, SessionRecord]:
        """Copy of the detected sessions, keyed by name."""
        return self.registry.as_dict()

    def apply_config(self, config: "SessionsConfig") -> dict[str, SessionRecord]:
        """Replace the configuration and detect sessions again."""
        self.config = config
        return self.detect()

    def detect(self) -> dict[str, SessionRecord]:
        """Rescan both namespaces and replace the registry.

        Scan problems are reported but never raised.

        Returns:
            Copy of the detected sessions
        """
        sessions = self.registry.detect(self.config)
        for warning in self.registry.warnings:
            self._notify(warning.message)
        return sessions

    def latest(self) -> str | None:
        """Name of the most recently modified session, or None."""
        return self.registry.latest()

    def current_session_name(self) -> str | None:
        """Base name of the current session file, or None."""
        current = self.host.current_session_path()
        if not current:
            return None
        return Path(current).name

    def read(
        self,
        name: str | None = None,
        *,
        force: bool | None = None,
        verbose: bool | None = None,
    ) -> SessionRecord | None:
        """Read a detected session into the editor.

        Args:
            name: Session name; None picks the local session, else the latest
            force: Discard unsaved documents (default from config.force.read)
            verbose: Report success (default from config.verbose.read)

        Returns:
            The record that was read, or None when sessions are disabled

        Raises:
            EmptyRegistryError: No sessions are detected
            NoSessionsError: No default session could be picked
            UnknownSessionError: name is not a detected session
            UnsavedChangesError: Dirty documents and force is false
            HostActionError: The host failed to discard or load
        """
        if self.disabled:
            logger.debug("Sessions disabled, skipping read")
            return None

        opts = self.config.options_for("read", force=force, verbose=verbose)
        with self._reporting_failures():
            if len(self.registry) == 0:
                raise EmptyRegistryError()

            if name is None:
                name = self.registry.resolve_default_read_target(self.config)
                if name is None:
                    raise NoSessionsError()

            record = self._detected(name)

            if not opts.force:
                dirty = [
                    doc.id for doc in self.host.list_open_documents() if doc.dirty
                ]
                if dirty:
                    raise UnsavedChangesError(dirty)

            try:
                self.host.discard_all_open_documents()
            except Exception as e:
                raise HostActionError("discard open documents", str(e)) from e

            try:
                self.host.load_snapshot(record.path)
            except Exception as e:
                raise HostActionError(f"load session {record.path}", str(e)) from e

        self.host.set_current_session_path(record.path)
        logger.info(f"Read session {record.path}")
        if opts.verbose:
            self._notify(f"Read session {record.path}")
        return record

    def write(
        self,
        name: str | None = None,
        *,
        force: bool | None = None,
        verbose: bool | None = None,
    ) -> SessionRecord | None:
        """Write the editor state to a session file.

        Args:
            name: Session name; None rewrites the current session
            force: Overwrite an existing file (default from config.force.write)
            verbose: Report success (default from config.verbose.write)

        Returns:
            The record of the written session, or None when disabled

        Raises:
            EmptyNameError: name is an empty string
            NoActiveSessionError: name is None and there is no current session
            GlobalSessionsDisabledError: Global name with no directory configured
            SessionExistsError: File exists and force is false
            HostActionError: The snapshot writer failed or produced no file
        """
        if self.disabled:
            logger.debug("Sessions disabled, skipping write")
            return None

        opts = self.config.options_for("write", force=force, verbose=verbose)
        with self._reporting_failures():
            if name == "":
                raise EmptyNameError()

            path = self._resolve(name)

            if not opts.force and self.filesystem.is_readable_regular_file(path):
                raise SessionExistsError(path)

            try:
                self.host.write_snapshot(path, overwrite=opts.force)
            except Exception as e:
                raise HostActionError(f"write session {path}", str(e)) from e

            if not self.filesystem.is_readable_regular_file(path):
                raise HostActionError(
                    f"write session {path}", "no readable file was produced"
                )

            record = build_record(
                path,
                self.filesystem,
                global_directory=PathResolver.global_directory(self.config),
            )

        self.registry.put(record)
        self.host.set_current_session_path(record.path)
        logger.info(f"Written session {record.path} ({record.kind.value})")
        if opts.verbose:
            self._notify(f"Written session {record.path}")
        return record

    def delete(
        self,
        name: str | None = None,
        *,
        force: bool | None = None,
        verbose: bool | None = None,
    ) -> SessionRecord | None:
        """Delete a detected session file.

        Args:
            name: Session name; None deletes the current session
            force: Allow deleting the current session
                (default from config.force.delete)
            verbose: Report success (default from config.verbose.delete)

        Returns:
            The deleted record, or None when disabled

        Raises:
            EmptyRegistryError: No sessions are detected
            NoActiveSessionError: name is None and there is no current session
            UnknownSessionError: Resolved file is not a detected session
            CannotDeleteCurrentError: Current session and force is false
            DeleteFailedError: The file could not be removed
        """
        if self.disabled:
            logger.debug("Sessions disabled, skipping delete")
            return None

        opts = self.config.options_for("delete", force=force, verbose=verbose)
        with self._reporting_failures():
            if len(self.registry) == 0:
                raise EmptyRegistryError()

            resolved = self._resolve(name)

            # Trust the registry's path over the resolver's: the name may
            # have resolved into the other namespace.
            record = self._detected(resolved.name)
            path = record.path

            is_current = self._is_current(path)
            if is_current and not opts.force:
                raise CannotDeleteCurrentError(path)

            try:
                self.filesystem.delete_file(path)
            except OSError as e:
                raise DeleteFailedError(path, str(e)) from e

        self.registry.remove(record.name)
        if is_current:
            self.host.set_current_session_path(None)
        logger.info(f"Deleted session {path}")
        if opts.verbose:
            self._notify(f"Deleted session {path}")
        return record

    def _resolve(self, name: str | None) -> Path:
        return PathResolver.resolve(
            name,
            self.config,
            self.host.current_session_path(),
            cwd=self.filesystem.get_current_working_directory(),
        )

    def _detected(self, name: str) -> SessionRecord:
        record = self.registry.get(name)
        if record is None:
            raise UnknownSessionError(name)
        return record

    def _is_current(self, path: Path) -> bool:
        current = self.host.current_session_path()
        if not current:
            return False
        return absolute_path(current) == absolute_path(path)

    def _notify(self, message: str) -> None:
        self.host.report(f"{REPORT_PREFIX} {message}")

    @contextmanager
    def _reporting_failures(self) -> Iterator[None]:
        """Report and log SessionErrors raised inside the block, then re-raise."""
        try:
            yield
        except SessionError as e:
            logger.debug(f"Session action failed: {e.message}")
            self._notify(e.message)
            raise
