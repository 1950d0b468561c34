from __future__ import annotations
import datetime as dt
from dataclasses import dataclass
from typing import List, Optional, Sequence

import pandas as pd

from common.constants import STATUS_COMPLETED, STATUS_ISSUES
from models.report_model import Report


@dataclass(frozen=True)
class SummaryStats:
    total: int
    completed: int
    issues: int
    today: int
    this_week: int
    completion_rate: float


@dataclass(frozen=True)
class MonthlyBucket:
    year: int
    month: int
    label: str     # e.g. "October 2026"
    count: int


def _local_tz() -> dt.tzinfo:
    return dt.datetime.now().astimezone().tzinfo


def created_series(reports: Sequence[Report]) -> pd.Series:
    """UTC timestamps of `created_at`; unparseable values become NaT."""
    raw = [r.created_at for r in reports]
    return pd.to_datetime(pd.Series(raw, dtype="object"), utc=True, errors="coerce", format="ISO8601")


def completion_rate(completed: int, total: int) -> float:
    if total == 0:
        return 0.0
    return round(completed / total * 100, 1)


def summary_stats(reports: Sequence[Report], now: Optional[dt.datetime] = None) -> SummaryStats:
    """
    Headline numbers for the Dashboard and Statistics pages.

    `today` and `this_week` depend on `now` (defaults to the current local
    time): `today` counts reports created on now's calendar day in now's
    time zone, `this_week` those created in the trailing 7 days.
    """
    now = now or dt.datetime.now().astimezone()
    if now.tzinfo is None:
        now = now.replace(tzinfo=_local_tz())

    status = pd.Series([r.status for r in reports], dtype="object")
    total = len(status)
    completed = int((status == STATUS_COMPLETED).sum())
    issues = int((status == STATUS_ISSUES).sum())

    created = created_series(reports)
    now_ts = pd.Timestamp(now)
    local_days = created.dt.tz_convert(now_ts.tz).dt.date
    today = int((local_days == now_ts.date()).sum())
    this_week = int((created > now_ts - pd.Timedelta(days=7)).sum())

    return SummaryStats(
        total=total,
        completed=completed,
        issues=issues,
        today=today,
        this_week=this_week,
        completion_rate=completion_rate(completed, total),
    )


def monthly_buckets(reports: Sequence[Report], tz: Optional[dt.tzinfo] = None) -> List[MonthlyBucket]:
    """Reports per (year, month) of creation, most recent month first."""
    created = created_series(reports).dropna()
    if created.empty:
        return []

    local = created.dt.tz_convert(tz or _local_tz())
    counts = (
        pd.DataFrame({"year": local.dt.year, "month": local.dt.month})
        .groupby(["year", "month"])
        .size()
        .reset_index(name="n")
        .sort_values(["year", "month"], ascending=False)
    )
    return [
        MonthlyBucket(
            year=int(row.year),
            month=int(row.month),
            label=dt.date(int(row.year), int(row.month), 1).strftime("%B %Y"),
            count=int(row.n),
        )
        for row in counts.itertuples(index=False)
    ]


def monthly_frame(buckets: Sequence[MonthlyBucket]) -> pd.DataFrame:
    return pd.DataFrame(
        [{"Month": b.label, "Reports": b.count} for b in buckets],
        columns=["Month", "Reports"],
    )
