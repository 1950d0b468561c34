import datetime as dt

import pytest

from controllers.report_builder import build_report
from controllers.stats_controller import summary_stats, monthly_buckets, completion_rate, monthly_frame

UTC = dt.timezone.utc
NOW = dt.datetime(2026, 10, 19, 15, 0, tzinfo=UTC)


def _report(make_draft, created_at, issues=False):
    return build_report(make_draft(general_issues="Broken seats" if issues else ""), created_at=created_at)


def test_empty_collection():
    stats = summary_stats([], now=NOW)
    assert (stats.total, stats.completed, stats.issues, stats.today, stats.this_week) == (0, 0, 0, 0, 0)
    assert stats.completion_rate == 0
    assert monthly_buckets([], tz=UTC) == []


def test_counts_add_up_and_rate(make_draft):
    reports = [
        _report(make_draft, "2026-10-19T09:00:00+00:00"),
        _report(make_draft, "2026-10-15T09:00:00+00:00", issues=True),
        _report(make_draft, "2026-09-01T09:00:00+00:00"),
    ]
    stats = summary_stats(reports, now=NOW)
    assert stats.completed + stats.issues == stats.total == 3
    assert stats.completion_rate == round(2 / 3 * 100, 1) == 66.7
    assert stats.today == 1
    assert stats.this_week == 2


def test_today_uses_the_evaluation_time_zone(make_draft):
    # 23:30 UTC on the 18th is already the 19th in UTC+2
    report = _report(make_draft, "2026-10-18T23:30:00+00:00")
    plus_two = dt.timezone(dt.timedelta(hours=2))
    assert summary_stats([report], now=NOW).today == 0
    assert summary_stats([report], now=NOW.astimezone(plus_two)).today == 1


def test_week_window_is_trailing_seven_days(make_draft):
    just_inside = _report(make_draft, (NOW - dt.timedelta(days=6, hours=23)).isoformat())
    just_outside = _report(make_draft, (NOW - dt.timedelta(days=7, hours=1)).isoformat())
    assert summary_stats([just_inside, just_outside], now=NOW).this_week == 1


@pytest.mark.parametrize("completed, total, expected", [(0, 0, 0.0), (1, 1, 100.0), (1, 3, 33.3), (2, 7, 28.6)])
def test_completion_rate(completed, total, expected):
    assert completion_rate(completed, total) == expected


def test_monthly_buckets_newest_first(make_draft):
    reports = [
        _report(make_draft, "2025-12-30T10:00:00+00:00"),
        _report(make_draft, "2026-10-01T10:00:00+00:00"),
        _report(make_draft, "2026-01-05T10:00:00Z"),
        _report(make_draft, "2026-10-18T10:00:00+00:00"),
    ]
    buckets = monthly_buckets(reports, tz=UTC)
    assert [(b.label, b.count) for b in buckets] == [
        ("October 2026", 2), ("January 2026", 1), ("December 2025", 1),
    ]
    assert list(monthly_frame(buckets)["Reports"]) == [2, 1, 1]


def test_unparseable_timestamps_are_skipped_by_buckets(make_draft):
    reports = [_report(make_draft, "not a date"), _report(make_draft, "2026-10-01T10:00:00+00:00")]
    assert [b.count for b in monthly_buckets(reports, tz=UTC)] == [1]
    assert summary_stats(reports, now=NOW).total == 2
