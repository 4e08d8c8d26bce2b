"""Click-based command line interface for workspace sessions.

Outside the editor there is no workspace state to snapshot, so the CLI
covers the catalog side: listing, finding the latest session, deleting
sessions and showing the effective configuration.
"""

import json
import os
import sys
from datetime import datetime
from pathlib import Path
from typing import Any

import click

from .config import load_config
from .session import (
    OpenDocument,
    SessionError,
    SessionHost,
    SessionRecord,
    SessionService,
)
from .sessions_logging import setup_logging

CURRENT_SESSION_ENV = "WORKSPACE_SESSIONS_CURRENT"


class HeadlessHost(SessionHost):
    """Session host for use outside an editor.

    Has no open documents and cannot take or restore snapshots. The
    current session path comes from the command line.
    """

    def __init__(self, current_session: Path | None = None, quiet: bool = False):
        self._current = current_session
        self.quiet = quiet

    def current_session_path(self) -> Path | None:
        return self._current

    def set_current_session_path(self, path: Path | None) -> None:
        self._current = path

    def write_snapshot(self, path: Path, overwrite: bool) -> None:
        raise RuntimeError("no editor state is available")

    def load_snapshot(self, path: Path) -> None:
        raise RuntimeError("no editor is available")

    def list_open_documents(self) -> list[OpenDocument]:
        return []

    def discard_all_open_documents(self) -> None:
        return None

    def report(self, message: str) -> None:
        if not self.quiet:
            click.echo(message, err=True)


def _format_time(timestamp: float) -> str:
    return datetime.fromtimestamp(timestamp).strftime("%Y-%m-%d %H:%M:%S")


def _build_service(ctx: click.Context, current: str | None = None) -> SessionService:
    obj = ctx.obj
    current_path = current or os.environ.get(CURRENT_SESSION_ENV) or None
    host = HeadlessHost(
        current_session=Path(current_path) if current_path else None,
        quiet=obj["quiet"],
    )
    service = SessionService(obj["config"], host)
    service.detect()
    return service


def _exit_with(error: SessionError) -> None:
    click.echo(error.format(use_color=sys.stderr.isatty()), err=True)
    sys.exit(error.exit_code)


@click.group()
@click.version_option(version="1.0.0")
@click.option(
    "--project",
    "-p",
    type=click.Path(file_okay=False),
    default=None,
    help="Project directory for config lookup (defaults to CWD)",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-error output")
@click.pass_context
def cli(ctx: click.Context, project: str | None, verbose: bool, quiet: bool) -> None:
    """Manage named editor workspace sessions."""
    setup_logging(quiet=quiet, verbose=verbose, level="WARNING")
    try:
        config = load_config(Path(project) if project else None)
    except SessionError as e:
        _exit_with(e)
    ctx.obj = {"config": config, "quiet": quiet}


@cli.command("list")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_context
def list_sessions(ctx: click.Context, as_json: bool) -> None:
    """List detected sessions, newest first."""
    service = _build_service(ctx)
    records: list[SessionRecord] = sorted(
        service.sessions.values(), key=lambda r: r.modified_at, reverse=True
    )

    if as_json:
        click.echo(json.dumps([r.to_dict() for r in records], indent=2))
        return

    if not records:
        click.echo("No sessions detected.")
        return

    width = max(len(r.name) for r in records)
    for record in records:
        click.echo(
            f"{record.name:<{width}}  {record.kind.value:<6}  "
            f"{_format_time(record.modified_at)}  {record.path}"
        )


@cli.command()
@click.pass_context
def latest(ctx: click.Context) -> None:
    """Print the name of the most recently modified session."""
    service = _build_service(ctx)
    name = service.latest()
    if name is None:
        click.echo("No sessions detected.", err=True)
        sys.exit(1)
    click.echo(name)


@cli.command()
@click.argument("name")
@click.option("--force", "-f", is_flag=True, help="Allow deleting the current session")
@click.option(
    "--current",
    type=click.Path(dir_okay=False),
    default=None,
    help=f"Path of the current session (or set {CURRENT_SESSION_ENV})",
)
@click.pass_context
def delete(ctx: click.Context, name: str, force: bool, current: str | None) -> None:
    """Delete the session NAME."""
    service = _build_service(ctx, current=current)
    try:
        service.delete(name, force=force or None, verbose=True)
    except SessionError as e:
        if ctx.obj["quiet"]:
            _exit_with(e)
        # Otherwise the host has already printed the message
        if e.suggestion:
            click.echo(f"Suggestion: {e.suggestion}", err=True)
        sys.exit(e.exit_code)


@cli.command("config")
@click.pass_context
def show_config(ctx: click.Context) -> None:
    """Print the effective configuration as JSON."""
    data: dict[str, Any] = ctx.obj["config"].model_dump()
    click.echo(json.dumps(data, indent=2))


def main() -> None:
    """Console script entry point."""
    cli()


if __name__ == "__main__":
    main()
