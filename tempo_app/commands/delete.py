"""Delete command."""

from __future__ import annotations

import typer

from tempo_app import app as application
from tempo_app.core.errors import WorklogAppError


@application.register_command("delete", aliases=("d",))
def delete_command(worklog_id: str = typer.Argument(..., help="worklog id, see list command")) -> None:
    """[or d], delete an existing worklog"""
    service = application.build_service()
    try:
        worklog = service.delete_worklog(worklog_id)
    except WorklogAppError as exc:
        application.fail(exc)
    application.console.print(
        f"[green]Successfully deleted worklog {worklog.id}[/green] ({worklog.duration} on {worklog.issue_key})"
    )
