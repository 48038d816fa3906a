"""Reusable table helpers for terminal rendering."""

from __future__ import annotations

from rich.markup import escape
from rich.table import Table

from tempo_app.analytics.aggregations.worklogs import project_key
from tempo_app.core.models import ReportLine, UserTotals, UserWorklogs, Worklog

ISSUE_KEY_WIDTH = 10


def convert_to_hours(seconds: int) -> str:
    return f"{round(seconds / 3600, 2):g}h"


def _interval_text(worklog: Worklog) -> str:
    if worklog.interval is None:
        return ""
    return f"{worklog.interval.start:%H:%M}-{worklog.interval.end:%H:%M}"


def render_worklogs(data: UserWorklogs) -> Table:
    details = data.schedule_details
    table = Table(
        title=f"{data.date:%Y-%m-%d}",
        caption=(
            f"day {convert_to_hours(details.day_logged_seconds)}/{convert_to_hours(details.day_required_seconds)}"
            f"  month {convert_to_hours(details.month_logged_seconds)}"
            f"/{convert_to_hours(details.month_required_seconds)}"
        ),
    )
    table.add_column("id", style="yellow", justify="right")
    table.add_column("from-to")
    table.add_column("duration", justify="right")
    table.add_column("issue", style="bold")
    table.add_column("description")
    table.add_column("link", style="cyan")
    for worklog in data.worklogs:
        table.add_row(
            escape(worklog.id or ""),
            _interval_text(worklog),
            worklog.duration,
            escape(worklog.issue_key),
            escape(worklog.description or ""),
            escape(worklog.link or ""),
        )
    return table


def issues_of_project(times_per_issue: list[ReportLine], project: str) -> list[ReportLine]:
    return [line for line in times_per_issue if project_key(line.key) == project]


def render_report(start: str, end: str, totals: UserTotals, verbose: bool = False) -> Table:
    table = Table(show_header=False)
    table.add_column(justify="left")
    table.add_column(justify="right")
    table.add_row("[bold bright_green]report timespan", "[bold bright_green]total logged hours")
    table.add_row(
        f"[yellow]{start} to {end}",
        f"{convert_to_hours(totals.total)}/{convert_to_hours(totals.required)}",
    )
    table.add_row("[bold bright_green]projects", "[bold bright_green]logged hours")
    for line in totals.times_per_project:
        table.add_row(f"[yellow]Project: {escape(line.key)}", convert_to_hours(line.time))
        if verbose:
            for issue_line in issues_of_project(totals.times_per_issue, line.key):
                table.add_row(
                    f"[yellow]{escape(issue_line.key.rjust(ISSUE_KEY_WIDTH))}",
                    convert_to_hours(issue_line.time),
                )
    return table
