"""
Session discovery and the in-memory session catalog.

Sessions come from two namespaces:
1. Global: every readable file directly inside the configured directory
2. Local: the single file named ``local_file_name`` in the working directory

A local session shadows a global session with the same name.
"""

from collections.abc import Iterator
from pathlib import Path
from typing import TYPE_CHECKING

from ..sessions_logging import get_logger
from .host import FileSystem, LocalFileSystem
from .paths import PathResolver
from .types import ScanWarning, SessionKind, SessionRecord

if TYPE_CHECKING:
    from ..config.models import SessionsConfig

logger = get_logger()


def build_record(
    path: Path,
    filesystem: FileSystem,
    kind: SessionKind | None = None,
    global_directory: Path | None = None,
) -> SessionRecord:
    """Build a SessionRecord for a file on disk.

    Args:
        path: Absolute path to the session file
        filesystem: Filesystem used to read the modification time
        kind: Provenance of the record; inferred when None
        global_directory: Absolute global directory, used for inference

    Returns:
        SessionRecord for the file
    """
    path = Path(path)
    if kind is None:
        kind = infer_kind(path, global_directory)
    return SessionRecord(
        name=path.name,
        path=path,
        kind=kind,
        modified_at=filesystem.file_modified_time(path),
    )


def infer_kind(path: Path, global_directory: Path | None) -> SessionKind:
    """Infer a record's kind from where its file lives.

    Only records created outside detection need this; detected records
    carry the kind of the namespace that produced them.
    """
    if global_directory is not None and Path(path).parent == global_directory:
        return SessionKind.GLOBAL
    return SessionKind.LOCAL


class SessionRegistry:
    """Catalog of known sessions, keyed by name.

    Lifecycle: empty on creation, fully replaced by ``detect()``, then
    point-mutated with ``put()`` and ``remove()``.

    Example:
        registry = SessionRegistry()
        registry.detect(config)
        for record in registry.records():
            print(f"{record.name} ({record.kind.value}): {record.path}")
        print(f"Latest: {registry.latest()}")
    """

    def __init__(self, filesystem: FileSystem | None = None):
        self.filesystem = filesystem if filesystem is not None else LocalFileSystem()
        self._sessions: dict[str, SessionRecord] = {}
        self._warnings: list[ScanWarning] = []

    def detect(self, config: "SessionsConfig") -> dict[str, SessionRecord]:
        """Scan both namespaces and replace the catalog.

        Args:
            config: Session configuration

        Returns:
            Copy of the new name -> record mapping
        """
        self._warnings = []

        detected: dict[str, SessionRecord] = {}
        if config.global_sessions_enabled:
            detected.update(self._detect_global(config))
        if config.local_sessions_enabled:
            # Local shadows global on name collision
            detected.update(self._detect_local(config.local_file_name))

        self._sessions = detected
        logger.debug(
            f"Detected {len(detected)} sessions "
            f"({sum(r.kind is SessionKind.LOCAL for r in detected.values())} local)"
        )
        return dict(self._sessions)

    def _detect_global(self, config: "SessionsConfig") -> dict[str, SessionRecord]:
        global_dir = PathResolver.global_directory(config)
        if global_dir is None:
            return {}

        if not self.filesystem.is_directory(global_dir):
            self._warn(global_dir, f"{str(global_dir)!r} is not a directory path.")
            return {}

        try:
            entries = self.filesystem.list_directory_entries(global_dir)
        except OSError as e:
            self._warn(global_dir, f"Could not list session directory {global_dir}: {e}")
            return {}

        found: dict[str, SessionRecord] = {}
        for entry in entries:
            record = self._scan_file(entry, SessionKind.GLOBAL)
            if record is not None:
                found[record.name] = record
        return found

    def _detect_local(self, local_file_name: str) -> dict[str, SessionRecord]:
        cwd = self.filesystem.get_current_working_directory()
        record = self._scan_file(Path(cwd) / local_file_name, SessionKind.LOCAL)
        if record is None:
            return {}
        return {record.name: record}

    def _scan_file(self, path: Path, kind: SessionKind) -> SessionRecord | None:
        if not self.filesystem.is_readable_regular_file(path):
            return None
        try:
            return build_record(path, self.filesystem, kind=kind)
        except OSError as e:
            # File changed between the check and the stat
            self._warn(path, f"Could not read session file {path}: {e}")
            return None

    def _warn(self, path: Path, message: str) -> None:
        self._warnings.append(ScanWarning(path=str(path), message=message))
        logger.warning(message)

    @property
    def warnings(self) -> list[ScanWarning]:
        """Warnings produced by the most recent scan."""
        return list(self._warnings)

    def latest(self) -> str | None:
        """Get the name of the most recently modified session.

        Ties go to the record seen first.

        Returns:
            Session name, or None if the registry is empty
        """
        latest_name = None
        latest_time = None
        for name, record in self._sessions.items():
            if latest_time is None or record.modified_at > latest_time:
                latest_name, latest_time = name, record.modified_at
        return latest_name

    def resolve_default_read_target(self, config: "SessionsConfig") -> str | None:
        """Pick the session to read when no name is given.

        The local session wins when present, otherwise the latest one.
        """
        if config.local_sessions_enabled and config.local_file_name in self._sessions:
            return config.local_file_name
        return self.latest()

    def contains(self, name: str) -> bool:
        return name in self._sessions

    def get(self, name: str) -> SessionRecord | None:
        return self._sessions.get(name)

    def put(self, record: SessionRecord) -> None:
        self._sessions[record.name] = record

    def remove(self, name: str) -> SessionRecord | None:
        return self._sessions.pop(name, None)

    def clear(self) -> None:
        self._sessions = {}
        self._warnings = []

    def names(self) -> list[str]:
        return list(self._sessions)

    def records(self) -> list[SessionRecord]:
        return list(self._sessions.values())

    def as_dict(self) -> dict[str, SessionRecord]:
        return dict(self._sessions)

    def __contains__(self, name: object) -> bool:
        return name in self._sessions

    def __len__(self) -> int:
        return len(self._sessions)

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._sessions))
