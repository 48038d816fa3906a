"""Log command: add a worklog from a duration or interval expression."""

from __future__ import annotations

import typer

from tempo_app import app as application
from tempo_app.core.errors import WorklogAppError
from tempo_app.core.models import AddWorklogInput


@application.register_command("log", aliases=("l",))
def log_command(
    issue_key: str = typer.Argument(..., help="issue key, like KEY-1"),
    duration_or_interval: str = typer.Argument(..., help="worked time, like 1h30m, 45m or 11-12:30"),
    when: str | None = typer.Argument(None, help="date: y, t-1, t+2 or yyyy-MM-dd; defaults to now"),
    description: str | None = typer.Option(None, "--description", "-d", help="worklog description"),
    start_time: str | None = typer.Option(None, "--start-time", "-s", help="start time in HH:mm format"),
    remaining_estimate: str | None = typer.Option(
        None, "--remaining-estimate", "-r", help="remaining estimate, like 2h"
    ),
) -> None:
    """[or l], add a new worklog using duration or interval (1h15m or 11:30-14)"""
    service = application.build_service()
    try:
        worklog = service.add_worklog(
            AddWorklogInput(
                issue_key=issue_key,
                duration_or_interval=duration_or_interval,
                when=when,
                description=description,
                start_time=start_time,
                remaining_estimate=remaining_estimate,
            )
        )
    except WorklogAppError as exc:
        application.fail(exc)
    application.console.print(
        f"[green]Successfully logged {worklog.duration} to {worklog.issue_key}[/green] (id: {worklog.id})"
    )
    if worklog.link:
        application.console.print(worklog.link)
