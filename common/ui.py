# common/ui.py
from __future__ import annotations
from typing import Any, Dict, Optional

import streamlit as st

from common.constants import APP_TITLE, FUNCTIONAL_AREAS, TOURNAMENTS, ATTENDANCE_FIELDS
from common.utils import parse_form_date, parse_form_time


def sidebar_header(store=None):
    # Hide the built-in pages nav so only our custom links appear
    st.markdown(
        "<style>[data-testid='stSidebarNav']{display:none !important;}</style>",
        unsafe_allow_html=True,
    )
    with st.sidebar:
        st.markdown(f"### ⚽ {APP_TITLE}")
        st.caption("Matchday venue inspection reports")
        st.divider()
        st.page_link("main.py", label="Dashboard", icon="🏠")
        st.page_link("pages/1_Create_Report.py", label="Create Report", icon="📝")
        st.page_link("pages/2_Reports.py", label="Reports", icon="📋")
        st.page_link("pages/3_Report_Details.py", label="Report Details", icon="🔎")
        st.page_link("pages/4_Statistics.py", label="Statistics", icon="📊")
        st.page_link("pages/5_About.py", label="About", icon="ℹ️")

    # A blob that failed to parse on startup is reported on every page
    if store is not None and store.load_warning:
        st.warning(store.load_warning, icon="⚠️")


def clear_form(prefix: str) -> None:
    """Forget every widget value of a form so the next run starts blank."""
    for k in [k for k in st.session_state.keys() if str(k).startswith(f"{prefix}_")]:
        del st.session_state[k]


def report_form(prefix: str, initial: Dict[str, Any], submit_label: str = "Save Report") -> Optional[Dict[str, Any]]:
    """
    Render the full report form and return the draft when submitted.

    Not wrapped in st.form: the comment box of an area (and the DRS comment)
    only shows up once its checkbox is cleared, which needs a rerun per click.
    Returns None until the submit button is pressed.
    """
    k = lambda name: f"{prefix}_{name}"

    st.subheader("Match Information")
    c1, c2, c3 = st.columns(3)
    match_number = c1.text_input("Match Number *", value=initial["match_number"], key=k("match_number"),
                                 placeholder="Enter match number")
    date = c2.date_input("Date", value=parse_form_date(initial["date"]), key=k("date"))
    time = c3.time_input("Time", value=parse_form_time(initial["time"]), key=k("time"))

    c1, c2 = st.columns(2)
    tournaments = list(TOURNAMENTS)
    if initial["tournament"] and initial["tournament"] not in tournaments:
        tournaments.append(initial["tournament"])
    tournament = c1.selectbox(
        "Tournament", tournaments,
        index=tournaments.index(initial["tournament"]) if initial["tournament"] in tournaments else 0,
        key=k("tournament"),
    )
    stadium = c2.text_input("Stadium", value=initial["stadium"], key=k("stadium"))

    c1, c2, c3 = st.columns(3)
    home_team = c1.text_input("Home Team", value=initial["home_team"], key=k("home_team"))
    away_team = c2.text_input("Away Team", value=initial["away_team"], key=k("away_team"))
    final_score = c3.text_input("Final Score *", value=initial["final_score"], key=k("final_score"),
                                placeholder="e.g. 2:1")
    venue_manager_name = st.text_input("Venue Manager Name *", value=initial["venue_manager_name"],
                                       key=k("venue_manager_name"))

    st.subheader("Attendance")
    counts: Dict[str, int] = {}
    for col, (field, label) in zip(st.columns(len(ATTENDANCE_FIELDS)), ATTENDANCE_FIELDS.items()):
        counts[field] = col.number_input(label, min_value=0, step=1, value=int(initial[field]), key=k(field))

    st.subheader("Functional Areas")
    st.caption("Clear the checkbox of an area that is not OK and describe the problem.")
    by_name = {a["name"]: a for a in initial["functional_areas"]}
    areas = []
    for i, name in enumerate(FUNCTIONAL_AREAS):
        prev = by_name.get(name, {"status": True, "comment": ""})
        c1, c2 = st.columns([1, 2])
        ok = c1.checkbox(name, value=bool(prev["status"]), key=k(f"area_{i}_ok"))
        comment = ""
        if not ok:
            comment = c2.text_input(f"Issue at {name}", value=prev.get("comment", ""),
                                    key=k(f"area_{i}_comment"), label_visibility="collapsed",
                                    placeholder=f"Describe the issue at {name}")
        areas.append({"name": name, "status": ok, "comment": comment})

    st.subheader("Issues & Compliance")
    general_issues = st.text_area("General Issues", value=initial["general_issues"], key=k("general_issues"))
    drs_compliant = st.checkbox("DRS Compliant", value=bool(initial["drs_compliant"]), key=k("drs_compliant"))
    drs_comment = ""
    if not drs_compliant:
        drs_comment = st.text_area("DRS Comment", value=initial["drs_comment"], key=k("drs_comment"))
    additional_comments = st.text_area("Additional Comments", value=initial["additional_comments"],
                                       key=k("additional_comments"))

    if not st.button(submit_label, type="primary", key=k("submit")):
        return None

    return {
        "match_number": match_number,
        "date": date,
        "time": time,
        "tournament": tournament,
        "stadium": stadium,
        "home_team": home_team,
        "away_team": away_team,
        "final_score": final_score,
        "venue_manager_name": venue_manager_name,
        **counts,
        "functional_areas": areas,
        "general_issues": general_issues,
        "drs_compliant": drs_compliant,
        "drs_comment": drs_comment,
        "additional_comments": additional_comments,
        "photos": list(initial.get("photos") or []),
    }
