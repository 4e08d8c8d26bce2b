"""
Shared fixtures for the workspace sessions test suite.

Provides:
- An isolated global session directory and working directory
- A configuration factory pointing at them
- A recording fake editor host
"""

import os
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import pytest

from workspace_sessions.config import SessionsConfig, build_config
from workspace_sessions.session import (
    OpenDocument,
    SessionHost,
    SessionService,
)

LOCAL_FILE = "Session.snapshot"


class FakeHost(SessionHost):
    """Editor host that records every collaborator call."""

    def __init__(self, documents: list[OpenDocument] | None = None):
        self.documents = list(documents or [])
        self.current: Path | None = None
        self.messages: list[str] = []
        self.written: list[tuple[Path, bool]] = []
        self.loaded: list[Path] = []
        self.discard_calls = 0
        self.produce_file = True
        self.fail_load = False

    def current_session_path(self) -> Path | None:
        return self.current

    def set_current_session_path(self, path: Path | None) -> None:
        self.current = path

    def write_snapshot(self, path: Path, overwrite: bool) -> None:
        self.written.append((path, overwrite))
        if self.produce_file:
            Path(path).write_text("snapshot")

    def load_snapshot(self, path: Path) -> None:
        if self.fail_load:
            raise RuntimeError("corrupt snapshot")
        self.loaded.append(path)

    def list_open_documents(self) -> list[OpenDocument]:
        return list(self.documents)

    def discard_all_open_documents(self) -> None:
        self.discard_calls += 1
        self.documents = []

    def report(self, message: str) -> None:
        self.messages.append(message)


@dataclass
class SessionDirs:
    global_dir: Path
    work_dir: Path


def write_session(path: Path, mtime: float | None = None) -> Path:
    """Create a session file, optionally with a fixed modification time."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text("snapshot")
    if mtime is not None:
        os.utime(path, (mtime, mtime))
    return path


@pytest.fixture
def session_dirs(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> SessionDirs:
    """Global session directory plus a working directory we chdir into."""
    global_dir = tmp_path / "global"
    work_dir = tmp_path / "work"
    global_dir.mkdir()
    work_dir.mkdir()
    monkeypatch.chdir(work_dir)
    return SessionDirs(global_dir=global_dir, work_dir=work_dir)


@pytest.fixture
def make_config(session_dirs: SessionDirs) -> Callable[..., SessionsConfig]:
    """Factory for configs rooted at the test directories."""

    def _make(**overrides: Any) -> SessionsConfig:
        settings: dict[str, Any] = {
            "directory": str(session_dirs.global_dir),
            "local_file_name": LOCAL_FILE,
        }
        settings.update(overrides)
        return build_config(settings)

    return _make


@pytest.fixture
def host() -> FakeHost:
    return FakeHost()


@pytest.fixture
def make_service(
    make_config: Callable[..., SessionsConfig], host: FakeHost
) -> Callable[..., SessionService]:
    """Factory for a detected SessionService using the fake host."""

    def _make(**overrides: Any) -> SessionService:
        service = SessionService(make_config(**overrides), host)
        service.detect()
        return service

    return _make
