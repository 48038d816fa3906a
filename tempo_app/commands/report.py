"""Report command: logged versus required hours per project and issue."""

from __future__ import annotations

import typer

from tempo_app import app as application
from tempo_app.analytics.parsing.dates import resolve_when
from tempo_app.core.config import DATE_FORMAT
from tempo_app.core.errors import WorklogAppError
from tempo_app.visual.tables import render_report


@application.register_command("report", aliases=("rep",))
def report_command(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="verbose output with logged time per issue"),
    start: str | None = typer.Option(
        None, "--start", "-s", help="start date (yyyy-MM-dd format) defaulted to first recorded worklog"
    ),
    end: str | None = typer.Option(None, "--end", "-e", help="end date (yyyy-MM-dd format) defaulted to today"),
    project: str | None = typer.Option(
        None,
        "--project",
        "-p",
        help="project key to which the report should be limited, eg KEY includes KEY-1 but not KEZ-1",
    ),
) -> None:
    """[or rep], print a report about the users logged times"""
    service = application.build_service()
    try:
        now = service.now()
        start_date = resolve_when(now, start) if start else None
        end_date = resolve_when(now, end) if end else now
        totals = service.get_all_logged_time(start_date, end_date, project)
    except WorklogAppError as exc:
        application.fail(exc)
    report_start = start_date.strftime(DATE_FORMAT) if start_date else totals.first_worklog_date
    application.console.print(render_report(report_start, end_date.strftime(DATE_FORMAT), totals, verbose))
