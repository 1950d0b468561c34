"""
Search, filter and ordering helpers for the report list.

Everything here is a pure function of the list it receives; the input list
is never modified. Pages call `filter_reports` with the search box value and
the status dropdown value, and `recent_reports` for the dashboard.
"""

from __future__ import annotations
import datetime as dt
from typing import Iterable, List, Sequence

import pandas as pd

from common.constants import SEARCH_FIELDS, STATUSES, STATUS_LABELS, RECENT_REPORTS, ATTENDANCE_FIELDS
from common.errors import ValidationError
from models.report_model import Report

_EPOCH = dt.datetime.min.replace(tzinfo=dt.timezone.utc)


def parse_created_at(value: str) -> dt.datetime:
    """
    Parse an ISO-8601 timestamp into an aware datetime.
    Accepts the trailing 'Z' older reports were saved with; naive values are
    taken as UTC and unparseable ones sort as the oldest possible time.
    """
    s = (value or "").strip()
    if s.endswith("Z"):
        s = s[:-1] + "+00:00"
    try:
        ts = dt.datetime.fromisoformat(s)
    except ValueError:
        return _EPOCH
    return ts if ts.tzinfo else ts.replace(tzinfo=dt.timezone.utc)


def newest_first(reports: Iterable[Report]) -> List[Report]:
    # sorted() is stable with reverse=True too: equal timestamps keep insertion order
    return sorted(reports, key=lambda r: parse_created_at(r.created_at), reverse=True)


def matches_search(report: Report, term: str) -> bool:
    needle = term.strip().lower()
    if not needle:
        return True
    return any(needle in (getattr(report, f) or "").lower() for f in SEARCH_FIELDS)


def filter_reports(reports: Sequence[Report], search_term: str = "", status_filter: str = "") -> List[Report]:
    """Reports matching the search term AND the status filter, newest first."""
    status_filter = (status_filter or "").strip()
    if status_filter and status_filter not in STATUSES:
        raise ValidationError(f"Unknown status filter: {status_filter!r}", ["status_filter"])

    hits = [
        r for r in reports
        if matches_search(r, search_term or "") and (not status_filter or r.status == status_filter)
    ]
    return newest_first(hits)


def recent_reports(reports: Sequence[Report], limit: int = RECENT_REPORTS) -> List[Report]:
    """The last `limit` reports created, most recent first."""
    if limit <= 0:
        return []
    return list(reversed(reports[-limit:]))


def reports_frame(reports: Sequence[Report]) -> pd.DataFrame:
    """Flat table for st.dataframe / JSON export, one row per report."""
    rows = []
    for r in reports:
        row = {
            "Id": r.id,
            "Match #": r.match_number,
            "Match": r.match_name,
            "Stadium": r.stadium,
            "Date": r.date,
            "Score": r.final_score,
            "Venue Manager": r.venue_manager_name,
            "Status": STATUS_LABELS.get(r.status, r.status),
            "Failing Areas": len(r.failing_areas),
            "Created": parse_created_at(r.created_at),
        }
        row.update({label: getattr(r, f) for f, label in ATTENDANCE_FIELDS.items()})
        rows.append(row)

    columns = ["Id", "Match #", "Match", "Stadium", "Date", "Score", "Venue Manager",
               "Status", "Failing Areas", "Created", *ATTENDANCE_FIELDS.values()]
    return pd.DataFrame(rows, columns=columns)
