import pytest

from tempo_app.analytics.aggregations.worklogs import (
    filter_by_project,
    first_worklog_date,
    group_by,
    project_key,
    times_per_issue,
    times_per_project,
    total_seconds,
)
from tempo_app.core.errors import EmptyResultError
from tempo_app.core.models import ReportLine, WorklogEntity


def _wl(key, seconds, date="2024-09-02", start="09:00:00"):
    return WorklogEntity(
        issue_key=key,
        time_spent_seconds=seconds,
        start_date=date,
        start_time=start,
        author_account_id="acc-1",
    )


def _sample():
    return [
        _wl("OBS-3", 600),
        _wl("KEY-2", 1800),
        _wl("OTH-1", 900),
        _wl("KEY-1", 3600),
        _wl("OBS-3", 1200),
        _wl("KEZ-1", 300),
        _wl("OBS-4", 2400),
    ]


def _pairs(lines):
    return [(line.key, line.time) for line in lines]


def test_project_key():
    assert project_key("KEY-12") == "KEY"
    assert project_key("A-B-3") == "A"
    assert project_key("NOSEP") == "NOSEP"


def test_group_by_keeps_first_seen_order():
    lines = group_by(_sample(), lambda w: w.issue_key)
    assert [ln.key for ln in lines] == ["OBS-3", "KEY-2", "OTH-1", "KEY-1", "KEZ-1", "OBS-4"]
    assert lines[0] == ReportLine("OBS-3", 1800)


def test_group_by_empty():
    assert group_by([], lambda w: w.issue_key) == []


def test_scenario_projects_and_issues():
    records = [_wl("KEY-1", 3600), _wl("KEY-2", 1800), _wl("OTH-1", 900)]
    projects = times_per_project(records)
    assert _pairs(projects) == [("KEY", 5400), ("OTH", 900)]
    issues = times_per_issue(records, projects)
    assert _pairs(issues) == [("KEY-1", 3600), ("KEY-2", 1800), ("OTH-1", 900)]


def test_project_ties_break_by_key():
    records = [_wl("ZED-1", 600), _wl("ABC-1", 600), _wl("MID-1", 900)]
    assert _pairs(times_per_project(records)) == [("MID", 900), ("ABC", 600), ("ZED", 600)]


def test_issues_cluster_under_project_rank():
    records = _sample()
    projects = times_per_project(records)
    assert _pairs(projects) == [("KEY", 5400), ("OBS", 4200), ("OTH", 900), ("KEZ", 300)]
    issues = times_per_issue(records, projects)
    assert _pairs(issues) == [
        ("KEY-1", 3600),
        ("KEY-2", 1800),
        ("OBS-4", 2400),
        ("OBS-3", 1800),
        ("OTH-1", 900),
        ("KEZ-1", 300),
    ]
    ranks = {line.key: idx for idx, line in enumerate(projects)}
    issue_ranks = [ranks[project_key(line.key)] for line in issues]
    assert issue_ranks == sorted(issue_ranks)


def test_issue_with_unknown_project_goes_last():
    records = [_wl("NEW-1", 9999), _wl("KEY-1", 60)]
    issues = times_per_issue(records, [ReportLine("KEY", 60)])
    assert _pairs(issues) == [("KEY-1", 60), ("NEW-1", 9999)]


def test_sum_invariant():
    records = _sample()
    projects = times_per_project(records)
    issues = times_per_issue(records, projects)
    expected = total_seconds(records)
    assert sum(ln.time for ln in projects) == expected
    assert sum(ln.time for ln in issues) == expected
    for project in projects:
        assert project.time == sum(ln.time for ln in issues if ln.key.startswith(project.key + "-"))


def test_filter_scoping_excludes_similar_prefixes():
    records = _sample() + [_wl("KEYS-9", 100)]
    relevant = filter_by_project(records, "KEY")
    projects = times_per_project(relevant)
    issues = times_per_issue(relevant, projects)
    assert _pairs(projects) == [("KEY", 5400)]
    assert all(line.key.startswith("KEY-") for line in issues)
    assert "KEZ-1" not in [line.key for line in issues]
    assert "KEYS-9" not in [line.key for line in issues]


def test_filter_without_scope_keeps_everything():
    records = _sample()
    assert filter_by_project(records, None) == records


def test_first_worklog_date_is_chronological():
    records = [_wl("KEY-1", 60, "2024-09-05"), _wl("KEY-2", 60, "2024-09-01"), _wl("KEY-3", 60, "2024-09-03")]
    assert first_worklog_date(records) == "2024-09-01"


def test_first_worklog_date_empty_fails():
    with pytest.raises(EmptyResultError):
        first_worklog_date([])
