"""Mapping raw Tempo JSON payloads into WorklogEntity / ScheduleEntity instances."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import asdict
from typing import Any

import pandas as pd

from .models import ScheduleEntity, WorklogEntity

WORKLOG_COLUMNS: tuple[str, ...] = (
    "issue_key",
    "time_spent_seconds",
    "start_date",
    "start_time",
    "author_account_id",
    "tempo_worklog_id",
    "description",
    "issue_self",
)


def _as_int(value: Any) -> int:
    if value is None:
        return 0
    try:
        return int(value)
    except (TypeError, ValueError):
        return 0


def map_worklog(raw: dict[str, Any]) -> WorklogEntity:
    issue = raw.get("issue") or {}
    author = raw.get("author") or {}
    worklog_id = raw.get("tempoWorklogId")
    return WorklogEntity(
        issue_key=issue.get("key") or "",
        time_spent_seconds=_as_int(raw.get("timeSpentSeconds")),
        start_date=raw.get("startDate") or "",
        start_time=raw.get("startTime"),
        author_account_id=author.get("accountId"),
        tempo_worklog_id=str(worklog_id) if worklog_id is not None else None,
        description=raw.get("description"),
        issue_self=issue.get("self"),
    )


def map_schedule(raw: dict[str, Any]) -> ScheduleEntity:
    return ScheduleEntity(
        date=raw.get("date") or "",
        required_seconds=_as_int(raw.get("requiredSeconds")),
        type=raw.get("type"),
    )


def worklogs_to_dataframe(worklogs: Iterable[WorklogEntity]) -> pd.DataFrame:
    rows = [asdict(w) for w in worklogs]
    df = pd.DataFrame(rows, columns=list(WORKLOG_COLUMNS))
    df["time_spent_seconds"] = pd.to_numeric(df["time_spent_seconds"], errors="coerce").fillna(0).astype("int64")
    return df
