"""Tests for the click command line interface."""

import json
import logging
from pathlib import Path

import pytest
from click.testing import CliRunner
from conftest import LOCAL_FILE, write_session

from workspace_sessions.cli import HeadlessHost, cli
from workspace_sessions.config import ConfigLoader, ConfigPaths, build_config
from workspace_sessions.session import SessionService
from workspace_sessions.session.errors import HostActionError
from workspace_sessions.sessions_logging import LOGGER_NAME


@pytest.fixture(autouse=True)
def cli_env(session_dirs, tmp_path: Path, monkeypatch):
    """Point the CLI at the test directories only."""
    for var in ConfigLoader.ENV_MAPPINGS:
        monkeypatch.delenv(var, raising=False)
    monkeypatch.delenv("WORKSPACE_SESSIONS_CURRENT", raising=False)
    monkeypatch.setattr(ConfigPaths, "GLOBAL_CONFIG", tmp_path / "no-global.json")
    monkeypatch.setenv("WORKSPACE_SESSIONS_DIRECTORY", str(session_dirs.global_dir))
    monkeypatch.setenv("WORKSPACE_SESSIONS_FILE", LOCAL_FILE)
    yield
    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


class TestList:
    def test_list_newest_first(self, runner, session_dirs) -> None:
        write_session(session_dirs.global_dir / "old.session", mtime=1_000_000)
        write_session(session_dirs.global_dir / "new.session", mtime=2_000_000)
        write_session(session_dirs.work_dir / LOCAL_FILE, mtime=1_500_000)

        result = runner.invoke(cli, ["list"])

        assert result.exit_code == 0
        lines = result.output.strip().splitlines()
        assert [line.split()[0] for line in lines] == [
            "new.session",
            LOCAL_FILE,
            "old.session",
        ]
        assert "local" in lines[1]

    def test_list_json(self, runner, session_dirs) -> None:
        write_session(session_dirs.global_dir / "a.session", mtime=1_000_000)

        result = runner.invoke(cli, ["list", "--json"])

        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data == [
            {
                "name": "a.session",
                "path": str(session_dirs.global_dir / "a.session"),
                "kind": "global",
                "modified_at": 1_000_000,
            }
        ]

    def test_list_empty(self, runner) -> None:
        result = runner.invoke(cli, ["list"])

        assert result.exit_code == 0
        assert "No sessions detected." in result.output


class TestLatest:
    def test_latest(self, runner, session_dirs) -> None:
        write_session(session_dirs.global_dir / "old.session", mtime=1_000_000)
        write_session(session_dirs.global_dir / "new.session", mtime=2_000_000)

        result = runner.invoke(cli, ["latest"])

        assert result.exit_code == 0
        assert result.output.strip() == "new.session"

    def test_latest_empty(self, runner) -> None:
        result = runner.invoke(cli, ["latest"])

        assert result.exit_code == 1


class TestDelete:
    def test_delete(self, runner, session_dirs) -> None:
        path = write_session(session_dirs.global_dir / "a.session")

        result = runner.invoke(cli, ["delete", "a.session"])

        assert result.exit_code == 0
        assert not path.exists()
        assert "Deleted session" in result.output

    def test_delete_current_requires_force(self, runner, session_dirs) -> None:
        path = write_session(session_dirs.global_dir / "a.session")

        result = runner.invoke(cli, ["delete", "a.session", "--current", str(path)])

        assert result.exit_code == 1
        assert path.exists()
        assert "Can't delete the current session" in result.output

    def test_delete_current_with_force(self, runner, session_dirs, monkeypatch) -> None:
        path = write_session(session_dirs.global_dir / "a.session")
        monkeypatch.setenv("WORKSPACE_SESSIONS_CURRENT", str(path))

        result = runner.invoke(cli, ["delete", "a.session", "--force"])

        assert result.exit_code == 0
        assert not path.exists()

    def test_delete_unknown(self, runner, session_dirs) -> None:
        write_session(session_dirs.global_dir / "a.session")

        result = runner.invoke(cli, ["delete", "b.session"])

        assert result.exit_code == 1
        assert "'b.session' is not a name for a detected session." in result.output

    def test_delete_error_shown_when_quiet(self, runner, session_dirs) -> None:
        path = write_session(session_dirs.global_dir / "a.session")

        result = runner.invoke(
            cli, ["--quiet", "delete", "a.session", "--current", str(path)]
        )

        assert result.exit_code == 1
        assert path.exists()
        assert "Can't delete the current session" in result.output
        assert "(workspace-sessions)" not in result.output


class TestConfig:
    def test_show_config(self, runner, session_dirs) -> None:
        result = runner.invoke(cli, ["config"])

        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["directory"] == str(session_dirs.global_dir)
        assert data["local_file_name"] == LOCAL_FILE
        assert data["force"] == {"read": False, "write": True, "delete": False}

    def test_invalid_config_exits(self, runner, monkeypatch) -> None:
        monkeypatch.setenv("WORKSPACE_SESSIONS_DISABLE", "sometimes")

        result = runner.invoke(cli, ["config"])

        assert result.exit_code == 1
        assert "WORKSPACE_SESSIONS_DISABLE" in result.output


class TestHeadlessHost:
    def test_has_no_documents(self) -> None:
        host = HeadlessHost()

        assert host.list_open_documents() == []
        host.discard_all_open_documents()

    def test_cannot_snapshot(self, tmp_path: Path) -> None:
        host = HeadlessHost()

        with pytest.raises(RuntimeError):
            host.write_snapshot(tmp_path / "a.session", overwrite=True)
        with pytest.raises(RuntimeError):
            host.load_snapshot(tmp_path / "a.session")

    def test_write_failure_is_wrapped_once(self, session_dirs) -> None:
        service = SessionService(
            build_config({"directory": str(session_dirs.global_dir)}),
            HeadlessHost(quiet=True),
        )

        with pytest.raises(HostActionError) as exc_info:
            service.write("a.session")

        assert exc_info.value.message == (
            f"Host failed to write session {session_dirs.global_dir / 'a.session'}: "
            "no editor state is available"
        )

    def test_tracks_current_session(self, tmp_path: Path) -> None:
        host = HeadlessHost(current_session=tmp_path / "a.session")

        assert host.current_session_path() == tmp_path / "a.session"
        host.set_current_session_path(None)
        assert host.current_session_path() is None
