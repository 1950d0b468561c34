"""
Data model for a matchday inspection report.

Two frozen dataclasses describe a stored report:
    - `FunctionalArea`: one checklist line (name, OK flag, comment),
    - `Report`: the whole inspection, including the derived `status`.

Attribute names are snake_case; the persisted JSON keeps the camelCase keys
the reports have always been saved with (`matchNumber`, `createdAt`, ...).
`Report.to_dict()` and `Report.from_dict()` translate between the two.

`from_dict` accepts blobs written by older versions: any missing field takes its
default, counters are coerced to non-negative ints, and a missing status is
derived from the other fields.
"""

from __future__ import annotations
import re
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, Mapping, Tuple

from common.constants import STATUS_COMPLETED, STATUS_ISSUES, DEFAULT_TOURNAMENT

_INT_RE = re.compile(r"[+-]?\d+")

# python attribute -> persisted JSON key
FIELD_KEYS: Dict[str, str] = {
    "id": "id",
    "created_at": "createdAt",
    "match_number": "matchNumber",
    "date": "date",
    "time": "time",
    "tournament": "tournament",
    "stadium": "stadium",
    "home_team": "homeTeam",
    "away_team": "awayTeam",
    "final_score": "finalScore",
    "venue_manager_name": "venueManagerName",
    "spectators": "spectators",
    "vip_guests": "vipGuests",
    "vvip_guests": "vvipGuests",
    "media_representatives": "mediaRepresentatives",
    "photographers": "photographers",
    "functional_areas": "functionalAreas",
    "general_issues": "generalIssues",
    "drs_compliant": "drsCompliant",
    "drs_comment": "drsComment",
    "additional_comments": "additionalComments",
    "status": "status",
    "photos": "photos",
}


# ---------- Coercion helpers (shared with the builder) ----------
def to_text(val: Any) -> str:
    """None -> '', anything else -> trimmed str."""
    if val is None:
        return ""
    return str(val).strip()


def to_count(val: Any) -> int:
    """
    Coerce a counter to a non-negative int.
    Accepts ints, integral floats and digit strings; everything else is 0.
    """
    if isinstance(val, bool):
        return 0
    if isinstance(val, int):
        n = val
    elif isinstance(val, float) and val.is_integer():
        n = int(val)
    elif isinstance(val, str) and _INT_RE.fullmatch(val.strip()):
        n = int(val.strip())
    else:
        return 0
    return max(n, 0)


def to_flag(val: Any, default: bool = True) -> bool:
    """Read a checkbox-like value. Strings such as 'OK' / 'issue' are understood."""
    if val is None:
        return default
    if isinstance(val, bool):
        return val
    if isinstance(val, (int, float)):
        return bool(val)
    s = str(val).strip().lower()
    if s in {"true", "ok", "yes", "y", "1"}:
        return True
    if s in {"false", "issue", "no", "n", "0"}:
        return False
    return default


def derive_status(drs_compliant: bool, areas: Iterable["FunctionalArea"], general_issues: str) -> str:
    has_issues = (
        not drs_compliant
        or any(not a.status for a in areas)
        or bool((general_issues or "").strip())
    )
    return STATUS_ISSUES if has_issues else STATUS_COMPLETED


# ---------- Records ----------
@dataclass(frozen=True)
class FunctionalArea:
    name: str
    status: bool = True
    comment: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "status": self.status, "comment": self.comment}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "FunctionalArea":
        return cls(
            name=to_text(data.get("name")),
            status=to_flag(data.get("status")),
            comment=to_text(data.get("comment")),
        )


@dataclass(frozen=True)
class Report:
    id: str
    created_at: str
    match_number: str
    final_score: str
    venue_manager_name: str
    status: str
    date: str = ""
    time: str = ""
    tournament: str = DEFAULT_TOURNAMENT
    stadium: str = ""
    home_team: str = ""
    away_team: str = ""
    spectators: int = 0
    vip_guests: int = 0
    vvip_guests: int = 0
    media_representatives: int = 0
    photographers: int = 0
    functional_areas: Tuple[FunctionalArea, ...] = ()
    general_issues: str = ""
    drs_compliant: bool = True
    drs_comment: str = ""
    additional_comments: str = ""
    photos: Tuple[str, ...] = field(default_factory=tuple)

    @property
    def has_issues(self) -> bool:
        return self.status == STATUS_ISSUES

    @property
    def match_name(self) -> str:
        home, away = self.home_team or "TBD", self.away_team or "TBD"
        return f"{home} vs {away}"

    @property
    def failing_areas(self) -> Tuple[FunctionalArea, ...]:
        return tuple(a for a in self.functional_areas if not a.status)

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {}
        for attr, key in FIELD_KEYS.items():
            val = getattr(self, attr)
            if attr == "functional_areas":
                val = [a.to_dict() for a in val]
            elif attr == "photos":
                val = list(val)
            out[key] = val
        return out

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Report":
        def g(attr: str, default: Any = None) -> Any:
            return data.get(FIELD_KEYS[attr], default)

        areas = tuple(
            FunctionalArea.from_dict(a) for a in (g("functional_areas") or []) if isinstance(a, Mapping)
        )
        drs_compliant = to_flag(g("drs_compliant"))
        general_issues = str(g("general_issues") or "")
        status = to_text(g("status"))
        if status not in (STATUS_COMPLETED, STATUS_ISSUES):
            status = derive_status(drs_compliant, areas, general_issues)

        return cls(
            id=to_text(g("id")),
            created_at=to_text(g("created_at")),
            match_number=to_text(g("match_number")),
            final_score=to_text(g("final_score")),
            venue_manager_name=to_text(g("venue_manager_name")),
            status=status,
            date=to_text(g("date")),
            time=to_text(g("time")),
            tournament=to_text(g("tournament", DEFAULT_TOURNAMENT)),
            stadium=to_text(g("stadium")),
            home_team=to_text(g("home_team")),
            away_team=to_text(g("away_team")),
            spectators=to_count(g("spectators")),
            vip_guests=to_count(g("vip_guests")),
            vvip_guests=to_count(g("vvip_guests")),
            media_representatives=to_count(g("media_representatives")),
            photographers=to_count(g("photographers")),
            functional_areas=areas,
            general_issues=general_issues,
            drs_compliant=drs_compliant,
            drs_comment=str(g("drs_comment") or ""),
            additional_comments=str(g("additional_comments") or ""),
            photos=tuple(str(p) for p in (g("photos") or [])),
        )
