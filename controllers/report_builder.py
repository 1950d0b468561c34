"""
Report builder: turns a form draft into a finished `Report`.

A draft is a plain mapping using the Report's snake_case attribute names
(what the Create/Edit forms produce). `build_report` is the only place a
`Report` is assembled for storage, which gives three guarantees:

    - required fields (`match_number`, `final_score`, `venue_manager_name`)
      are checked once, here, and a `ValidationError` names all the
      missing ones at the same time,
    - counters and the functional-area checklist are normalized the same
      way for new reports and for edits,
    - `status` is always derived from the fields, never taken from the
      caller. Edits go through `rebuild_report`, so the status of an edited
      report is re-derived as well.

The builder has no side effects; saving is the store's job.
"""

from __future__ import annotations
import datetime as dt
import uuid
from typing import Any, Dict, List, Mapping, Optional

from common.constants import FUNCTIONAL_AREAS, DEFAULT_TOURNAMENT, REQUIRED_FIELDS, ATTENDANCE_FIELDS
from common.errors import ValidationError
from models.report_model import FunctionalArea, Report, derive_status, to_count, to_flag, to_text

REQUIRED_LABELS = {
    "match_number": "Match Number",
    "final_score": "Final Score",
    "venue_manager_name": "Venue Manager Name",
}


def new_report_id() -> str:
    return uuid.uuid4().hex


def utc_now_iso(now: Optional[dt.datetime] = None) -> str:
    now = now or dt.datetime.now(dt.timezone.utc)
    if now.tzinfo is None:
        now = now.replace(tzinfo=dt.timezone.utc)
    return now.astimezone(dt.timezone.utc).isoformat(timespec="milliseconds")


def default_draft() -> Dict[str, Any]:
    """The blank form: every area OK, default tournament, zero attendance."""
    draft: Dict[str, Any] = {
        "match_number": "", "date": "", "time": "", "tournament": DEFAULT_TOURNAMENT,
        "stadium": "", "home_team": "", "away_team": "", "final_score": "",
        "venue_manager_name": "",
        "functional_areas": [{"name": n, "status": True, "comment": ""} for n in FUNCTIONAL_AREAS],
        "general_issues": "", "drs_compliant": True, "drs_comment": "",
        "additional_comments": "", "photos": [],
    }
    draft.update({f: 0 for f in ATTENDANCE_FIELDS})
    return draft


def draft_from_report(report: Report) -> Dict[str, Any]:
    """Prefill values for the edit form."""
    data = {attr: getattr(report, attr) for attr in default_draft()}
    data["functional_areas"] = [a.to_dict() for a in report.functional_areas]
    data["photos"] = list(report.photos)
    return data


def _date_text(val: Any) -> str:
    # st.date_input / st.time_input hand back date and time objects
    if isinstance(val, dt.datetime):
        return val.date().isoformat()
    if isinstance(val, dt.date):
        return val.isoformat()
    if isinstance(val, dt.time):
        return val.strftime("%H:%M")
    return to_text(val)


def _normalize_areas(raw: Any) -> tuple[FunctionalArea, ...]:
    """
    Map whatever the form sent onto the fixed catalogue.
    Unknown or repeated names are rejected; areas not mentioned stay OK.
    """
    if raw is None:
        return tuple(FunctionalArea(name=n) for n in FUNCTIONAL_AREAS)
    if not isinstance(raw, (list, tuple)):
        raise ValidationError("Functional areas must be a list of entries.", ["functional_areas"])

    given: Dict[str, FunctionalArea] = {}
    unknown: List[str] = []
    for item in raw:
        if isinstance(item, FunctionalArea):
            item = item.to_dict()
        if not isinstance(item, Mapping):
            raise ValidationError(f"Invalid functional area entry: {item!r}", ["functional_areas"])
        name = to_text(item.get("name"))
        if name not in FUNCTIONAL_AREAS:
            unknown.append(name or "(blank)")
            continue
        if name in given:
            raise ValidationError(f"Functional area '{name}' is listed twice.", ["functional_areas"])
        status = to_flag(item.get("status"))
        given[name] = FunctionalArea(
            name=name,
            status=status,
            comment="" if status else to_text(item.get("comment")),
        )

    if unknown:
        raise ValidationError(f"Unknown functional area(s): {', '.join(unknown)}", ["functional_areas"])
    return tuple(given.get(n, FunctionalArea(name=n)) for n in FUNCTIONAL_AREAS)


def build_report(
    draft: Mapping[str, Any],
    *,
    report_id: Optional[str] = None,
    created_at: Optional[str] = None,
    now: Optional[dt.datetime] = None,
) -> Report:
    missing = [f for f in REQUIRED_FIELDS if not to_text(draft.get(f))]
    if missing:
        labels = ", ".join(REQUIRED_LABELS[f] for f in missing)
        raise ValidationError(f"Missing required field(s): {labels}", missing)

    areas = _normalize_areas(draft.get("functional_areas"))
    drs_compliant = to_flag(draft.get("drs_compliant"))
    general_issues = to_text(draft.get("general_issues"))
    tournament = draft.get("tournament")

    return Report(
        id=report_id or new_report_id(),
        created_at=created_at or utc_now_iso(now),
        match_number=to_text(draft.get("match_number")),
        final_score=to_text(draft.get("final_score")),
        venue_manager_name=to_text(draft.get("venue_manager_name")),
        status=derive_status(drs_compliant, areas, general_issues),
        date=_date_text(draft.get("date")),
        time=_date_text(draft.get("time")),
        tournament=DEFAULT_TOURNAMENT if tournament is None else to_text(tournament),
        stadium=to_text(draft.get("stadium")),
        home_team=to_text(draft.get("home_team")),
        away_team=to_text(draft.get("away_team")),
        functional_areas=areas,
        general_issues=general_issues,
        drs_compliant=drs_compliant,
        drs_comment="" if drs_compliant else to_text(draft.get("drs_comment")),
        additional_comments=to_text(draft.get("additional_comments")),
        photos=tuple(str(p) for p in (draft.get("photos") or [])),
        **{f: to_count(draft.get(f)) for f in ATTENDANCE_FIELDS},
    )


def rebuild_report(existing: Report, draft: Mapping[str, Any]) -> Report:
    """Edit path: same id and creation time, status derived again from the new values."""
    return build_report(draft, report_id=existing.id, created_at=existing.created_at)
