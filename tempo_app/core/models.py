"""Domain data models for Tempo worklogs, schedules, and report totals."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime


@dataclass(slots=True, frozen=True)
class WorklogEntity:
    issue_key: str
    time_spent_seconds: int
    start_date: str
    start_time: str | None
    author_account_id: str | None
    tempo_worklog_id: str | None = None
    description: str | None = None
    issue_self: str | None = None


@dataclass(slots=True, frozen=True)
class ScheduleEntity:
    date: str
    required_seconds: int
    type: str | None = None


@dataclass(slots=True, frozen=True)
class ParsedDuration:
    seconds: int
    start_time: str | None = None


@dataclass(slots=True, frozen=True)
class Interval:
    start: datetime
    end: datetime


@dataclass(slots=True)
class ReportLine:
    key: str
    time: int


@dataclass(slots=True)
class UserTotals:
    total: int
    required: int
    first_worklog_date: str
    times_per_issue: list[ReportLine] = field(default_factory=list)
    times_per_project: list[ReportLine] = field(default_factory=list)


@dataclass(slots=True)
class AddWorklogInput:
    issue_key: str
    duration_or_interval: str
    when: str | None = None
    description: str | None = None
    start_time: str | None = None
    remaining_estimate: str | None = None


@dataclass(slots=True)
class Worklog:
    id: str | None
    issue_key: str
    duration: str
    description: str | None
    link: str | None
    interval: Interval | None = None


@dataclass(slots=True)
class ScheduleDetails:
    month_required_seconds: int
    month_logged_seconds: int
    day_required_seconds: int
    day_logged_seconds: int


@dataclass(slots=True)
class UserWorklogs:
    worklogs: list[Worklog]
    date: datetime
    schedule_details: ScheduleDetails
