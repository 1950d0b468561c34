from dataclasses import replace

import pytest

from common.errors import ValidationError
from controllers.query_controller import (
    filter_reports, recent_reports, reports_frame, parse_created_at, newest_first,
)
from controllers.report_builder import build_report


@pytest.fixture
def reports(make_draft):
    specs = [
        ("2026-06-01T10:00:00.000+00:00", dict(match_number="M1", home_team="Mexico", away_team="Canada")),
        ("2026-06-03T10:00:00.000+00:00", dict(match_number="M2", stadium="MetLife Stadium", general_issues="Gate jam")),
        ("2026-06-02T10:00:00.000+00:00", dict(match_number="M3", venue_manager_name="Laura Pérez")),
    ]
    return [build_report(make_draft(**fields), created_at=ts) for ts, fields in specs]


def test_empty_filters_sort_newest_first(reports):
    assert [r.match_number for r in filter_reports(reports)] == ["M2", "M3", "M1"]


def test_status_filter_returns_only_matching(reports):
    hits = filter_reports(reports, status_filter="issues")
    assert [r.match_number for r in hits] == ["M2"]
    assert len(filter_reports(reports, status_filter="completed")) == 2


@pytest.mark.parametrize("term, expected", [
    ("metlife", ["M2"]),
    ("CANADA", ["M2", "M3", "M1"]),   # default away team in the fixture draft is Canada
    ("pérez", ["M3"]),
    ("m1", ["M1"]),
    ("  ", ["M2", "M3", "M1"]),
    ("nowhere", []),
])
def test_search_term(reports, term, expected):
    assert [r.match_number for r in filter_reports(reports, term)] == expected


def test_search_and_status_compose(reports):
    assert filter_reports(reports, "metlife", "completed") == []
    assert [r.match_number for r in filter_reports(reports, "metlife", "issues")] == ["M2"]


def test_filtering_is_idempotent(reports):
    once = filter_reports(reports, "m", "completed")
    assert filter_reports(once, "m", "completed") == once


def test_input_is_not_mutated(reports):
    before = list(reports)
    filter_reports(reports, "m")
    assert reports == before


def test_ties_keep_insertion_order(reports):
    same = [replace(r, created_at="2026-06-05T00:00:00+00:00") for r in reports]
    assert [r.match_number for r in newest_first(same)] == ["M1", "M2", "M3"]


def test_unknown_status_filter_is_rejected(reports):
    with pytest.raises(ValidationError):
        filter_reports(reports, status_filter="archived")


def test_recent_reports_are_last_created(reports):
    assert [r.match_number for r in recent_reports(reports, 2)] == ["M3", "M2"]
    assert recent_reports(reports, 0) == []
    assert len(recent_reports(reports)) == 3


def test_parse_created_at_variants():
    z = parse_created_at("2026-06-01T10:00:00.000Z")
    offset = parse_created_at("2026-06-01T12:00:00+02:00")
    assert z == offset
    assert parse_created_at("2026-06-01T10:00:00").tzinfo is not None
    assert parse_created_at("garbage").year == 1


def test_reports_frame_columns(reports):
    df = reports_frame(reports)
    assert list(df["Match #"]) == ["M1", "M2", "M3"]
    assert list(df["Status"]) == ["Completed", "Has Issues", "Completed"]
    assert "Spectators" in df.columns
    assert reports_frame([]).empty
