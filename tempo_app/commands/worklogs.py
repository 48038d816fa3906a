"""List command: one day of worklogs with day and month progress."""

from __future__ import annotations

import typer

from tempo_app import app as application
from tempo_app.core.errors import WorklogAppError
from tempo_app.visual.tables import render_worklogs


@application.register_command("list", aliases=("ls",))
def list_command(
    when: str | None = typer.Argument(None, help="date: y, t-1, t+2 or yyyy-MM-dd; defaults to today"),
) -> None:
    """[or ls], print worklogs from the provided date (today by default)"""
    service = application.build_service()
    try:
        data = service.get_user_worklogs(when)
    except WorklogAppError as exc:
        application.fail(exc)
    application.console.print(render_worklogs(data))
