"""Project- and issue-level worklog aggregations."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Sequence

import pandas as pd

from tempo_app.core.errors import EmptyResultError
from tempo_app.core.mappers import worklogs_to_dataframe
from tempo_app.core.models import ReportLine, WorklogEntity

logger = logging.getLogger(__name__)

KeyFn = Callable[[WorklogEntity], str]


def project_key(issue_key: str) -> str:
    """Project prefix of an issue key (``KEY-12`` -> ``KEY``)."""
    return issue_key.partition("-")[0]


def filter_by_project(worklogs: Iterable[WorklogEntity], project: str | None) -> list[WorklogEntity]:
    if not project:
        return list(worklogs)
    prefix = f"{project}-"
    return [w for w in worklogs if w.issue_key.startswith(prefix)]


def group_by(worklogs: Iterable[WorklogEntity], key_fn: KeyFn) -> list[ReportLine]:
    """Sum ``time_spent_seconds`` per key, keys in first-seen order."""
    worklogs = list(worklogs)
    if not worklogs:
        return []
    df = worklogs_to_dataframe(worklogs)
    df["group_key"] = [key_fn(w) for w in worklogs]
    sums = df.groupby("group_key", sort=False)["time_spent_seconds"].sum()
    logger.debug("Grouped %s worklogs into %s lines", len(worklogs), len(sums))
    return [ReportLine(key=str(key), time=int(time)) for key, time in sums.items()]


def _lines_frame(lines: Sequence[ReportLine]) -> pd.DataFrame:
    return pd.DataFrame({"key": [ln.key for ln in lines], "time": [ln.time for ln in lines]})


def _frame_lines(frame: pd.DataFrame) -> list[ReportLine]:
    return [ReportLine(key=str(k), time=int(t)) for k, t in zip(frame["key"], frame["time"])]


def times_per_project(worklogs: Iterable[WorklogEntity]) -> list[ReportLine]:
    """Totals per project, most time first; ties by project key ascending."""
    lines = group_by(worklogs, lambda w: project_key(w.issue_key))
    if not lines:
        return []
    ordered = _lines_frame(lines).sort_values(by=["time", "key"], ascending=[False, True], kind="mergesort")
    return _frame_lines(ordered)


def project_rank_lookup(project_lines: Sequence[ReportLine]) -> dict[str, int]:
    return {line.key: idx for idx, line in enumerate(project_lines)}


def times_per_issue(worklogs: Iterable[WorklogEntity], project_lines: Sequence[ReportLine]) -> list[ReportLine]:
    """Totals per issue, clustered by project rank, most time first within a project.

    Issues whose project is missing from ``project_lines`` go last.
    """
    lines = group_by(worklogs, lambda w: w.issue_key)
    if not lines:
        return []
    ranks = project_rank_lookup(project_lines)
    unknown_rank = len(project_lines)
    frame = _lines_frame(lines)
    frame["rank"] = [ranks.get(project_key(key), unknown_rank) for key in frame["key"]]
    ordered = frame.sort_values(by=["rank", "time"], ascending=[True, False], kind="mergesort")
    return _frame_lines(ordered)


def total_seconds(worklogs: Iterable[WorklogEntity]) -> int:
    return sum(w.time_spent_seconds for w in worklogs)


def first_worklog_date(worklogs: Iterable[WorklogEntity]) -> str:
    """Start date of the chronologically first worklog."""
    ordered = sorted(worklogs, key=lambda w: (w.start_date, w.start_time or ""))
    if not ordered:
        raise EmptyResultError("No worklogs found in the selected period, nothing to report.")
    return ordered[0].start_date
