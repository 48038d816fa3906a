"""Logged-versus-required reconciliation for the daily worklog view."""

from __future__ import annotations

from collections.abc import Sequence

from .models import ScheduleDetails, ScheduleEntity, WorklogEntity


def create_schedule_details(
    worklogs: Sequence[WorklogEntity],
    schedule: Sequence[ScheduleEntity],
    selected_date: str,
    account_id: str | None,
) -> ScheduleDetails:
    """Summarize one account's logged and required seconds for a day and its month.

    ``worklogs`` and ``schedule`` are expected to cover the month of
    ``selected_date``; month figures count days up to and including it.
    """
    own = [w for w in worklogs if account_id is None or w.author_account_id == account_id]
    return ScheduleDetails(
        month_required_seconds=sum(s.required_seconds for s in schedule if s.date <= selected_date),
        month_logged_seconds=sum(w.time_spent_seconds for w in own if w.start_date <= selected_date),
        day_required_seconds=sum(s.required_seconds for s in schedule if s.date == selected_date),
        day_logged_seconds=sum(w.time_spent_seconds for w in own if w.start_date == selected_date),
    )
