"""WorklogService: orchestrates fetching, parsing, aggregation, and reconciliation."""

from __future__ import annotations

import calendar
import logging
from collections.abc import Callable
from concurrent.futures import ThreadPoolExecutor
from datetime import datetime
from urllib.parse import urlparse

from tempo_app.analytics.aggregations.worklogs import (
    filter_by_project,
    first_worklog_date,
    times_per_issue,
    times_per_project,
    total_seconds,
)
from tempo_app.analytics.parsing import time_expressions
from tempo_app.analytics.parsing.dates import resolve_when

from .config import DATE_FORMAT, SCHEDULE_FETCH_MAX_WORKERS, START_TIME_FORMAT, AppSettings, local_now
from .errors import (
    DomainValidationError,
    ExpressionParseError,
    StartTimeParseError,
    TokenNotSetError,
)
from .mappers import map_schedule, map_worklog
from .models import (
    AddWorklogInput,
    ParsedDuration,
    ScheduleEntity,
    UserTotals,
    UserWorklogs,
    Worklog,
    WorklogEntity,
)
from .schedule import create_schedule_details
from .tempo_client import TempoAPI

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]
EPOCH = datetime(1970, 1, 1)


class WorklogService:
    def __init__(self, api: TempoAPI, settings: AppSettings | None = None, *, clock: Clock | None = None):
        self.api = api
        self.settings = settings or AppSettings()
        self._clock = clock or (lambda: local_now(self.settings))

    def now(self) -> datetime:
        return self._clock()

    # ------------------ Fetch Methods ------------------
    def fetch_worklogs(self, from_date: str, to_date: str) -> list[WorklogEntity]:
        return [map_worklog(raw) for raw in self.api.get_worklogs(from_date, to_date)]

    def fetch_schedule(self, from_date: str, to_date: str) -> list[ScheduleEntity]:
        return [map_schedule(raw) for raw in self.api.get_user_schedule(from_date, to_date)]

    # ------------------ Commands ------------------
    def add_worklog(self, data: AddWorklogInput) -> Worklog:
        self._check_token()
        reference_date = resolve_when(self.now(), data.when)
        parsed = time_expressions.parse(data.duration_or_interval, reference_date)
        if parsed is None:
            raise ExpressionParseError(data.duration_or_interval)
        if parsed.seconds <= 0:
            raise DomainValidationError("Error. Minutes worked must be larger than 0.")
        payload = {
            "issueKey": data.issue_key,
            "timeSpentSeconds": parsed.seconds,
            "startDate": reference_date.strftime(DATE_FORMAT),
            "startTime": self._start_time(parsed, data.start_time, reference_date),
            "description": data.description,
            "remainingEstimateSeconds": self._remaining_estimate_seconds(reference_date, data.remaining_estimate),
        }
        created = self.api.add_worklog(payload)
        return self.to_worklog(map_worklog(created))

    def delete_worklog(self, worklog_id_input: str) -> Worklog:
        self._check_token()
        try:
            worklog_id = int(worklog_id_input)
        except (TypeError, ValueError) as exc:
            raise DomainValidationError("Error. Worklog id should be an integer number.") from exc
        worklog = self.to_worklog(map_worklog(self.api.get_worklog(worklog_id)))
        self.api.delete_worklog(worklog_id)
        return worklog

    def get_user_worklogs(self, when: str | None = None) -> UserWorklogs:
        """Worklogs of the configured account for one day, plus month progress."""
        self._check_token()
        date = resolve_when(self.now(), when)
        selected = date.strftime(DATE_FORMAT)
        last_day = calendar.monthrange(date.year, date.month)[1]
        month_start = date.replace(day=1).strftime(DATE_FORMAT)
        month_end = date.replace(day=last_day).strftime(DATE_FORMAT)

        # Both fetches must finish; an exception from either propagates.
        with ThreadPoolExecutor(max_workers=SCHEDULE_FETCH_MAX_WORKERS) as pool:
            worklogs_future = pool.submit(self.fetch_worklogs, month_start, month_end)
            schedule_future = pool.submit(self.fetch_schedule, month_start, month_end)
            worklogs = worklogs_future.result()
            schedule = schedule_future.result()

        account_id = self.settings.account_id or self.api.account_id
        day_worklogs = [
            self.to_worklog(w)
            for w in worklogs
            if w.start_date == selected and (account_id is None or w.author_account_id == account_id)
        ]
        details = create_schedule_details(worklogs, schedule, selected, account_id)
        return UserWorklogs(worklogs=day_worklogs, date=date, schedule_details=details)

    def get_all_logged_time(
        self,
        start: datetime | None = None,
        end: datetime | None = None,
        project: str | None = None,
    ) -> UserTotals:
        """Logged time per project and issue compared with the required time.

        Note that ``total`` is summed over every fetched worklog, while the
        per-project and per-issue lines only cover ``project`` when given.
        """
        self._check_token()
        date_from = (start or EPOCH).strftime(DATE_FORMAT)
        date_to = (end or self.now()).strftime(DATE_FORMAT)

        worklogs = self.fetch_worklogs(date_from, date_to)
        relevant = filter_by_project(worklogs, project)
        per_project = times_per_project(relevant)
        per_issue = times_per_issue(relevant, per_project)
        total = total_seconds(worklogs)
        first_date = first_worklog_date(worklogs)

        schedule = self.fetch_schedule(first_date, date_to)
        required = sum(s.required_seconds for s in schedule)
        logger.debug(
            "Report %s..%s: %s worklogs (%s relevant), %s schedule days",
            first_date,
            date_to,
            len(worklogs),
            len(relevant),
            len(schedule),
        )
        return UserTotals(
            total=total,
            required=required,
            first_worklog_date=first_date,
            times_per_issue=per_issue,
            times_per_project=per_project,
        )

    # ------------------ Internal Helpers ------------------
    def to_worklog(self, entity: WorklogEntity) -> Worklog:
        try:
            reference_date = datetime.strptime(entity.start_date, DATE_FORMAT)
        except (TypeError, ValueError):
            reference_date = self.now()
        return Worklog(
            id=entity.tempo_worklog_id,
            issue_key=entity.issue_key,
            duration=time_expressions.to_duration(entity.time_spent_seconds) or "unknown",
            description=entity.description,
            link=generate_link(entity),
            interval=time_expressions.to_interval(entity.time_spent_seconds, entity.start_time, reference_date),
        )

    def _check_token(self) -> None:
        if not self.api.has_token():
            raise TokenNotSetError()

    def _start_time(self, parsed: ParsedDuration, start_time: str | None, reference_date: datetime) -> str:
        if parsed.start_time:
            if start_time:
                logger.warning("Start time param is ignored, %s is used instead.", parsed.start_time)
            return parsed.start_time
        if start_time:
            parsed_time = time_expressions.parse_time(start_time, reference_date)
            if parsed_time is None:
                raise StartTimeParseError(start_time)
            return parsed_time.strftime(START_TIME_FORMAT)
        return reference_date.strftime(START_TIME_FORMAT)

    def _remaining_estimate_seconds(self, reference_date: datetime, remaining: str | None) -> int | None:
        if not remaining:
            return None
        parsed = time_expressions.parse(remaining, reference_date)
        if parsed is None:
            raise ExpressionParseError(remaining, example="1h")
        return parsed.seconds


def generate_link(entity: WorklogEntity) -> str | None:
    if not entity.issue_self or not entity.issue_key:
        return None
    host = urlparse(entity.issue_self).hostname
    if not host:
        return None
    return f"https://{host}/browse/{entity.issue_key}"
