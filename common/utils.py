"""
Small helpers shared by the pages.

This module contains Streamlit convenience utilities (`safe_rerun`,
`selectbox_with_placeholder`) and display formatting for report values
(`format_timestamp`, `status_badge`, `attendance_total`). None of them
touch the store.
"""

# Import libraries
from __future__ import annotations
import datetime as dt
from typing import List, Optional

import streamlit as st

from .constants import STATUS_COLORS, STATUS_LABELS, ATTENDANCE_FIELDS
from controllers.query_controller import parse_created_at
from models.report_model import Report


def safe_rerun() -> None:
    if hasattr(st, "rerun"): st.rerun()
    elif hasattr(st, "experimental_rerun"): st.experimental_rerun()
    else: st.stop()


def format_timestamp(value: str, with_time: bool = True) -> str:
    """'2026-10-19T14:03:00.000+00:00' -> 'Oct 19, 2026, 04:03 PM' in local time."""
    ts = parse_created_at(value)
    if ts.year == 1:
        return value or "—"
    local = ts.astimezone()
    return local.strftime("%b %d, %Y, %I:%M %p" if with_time else "%b %d, %Y")


def status_badge(status: str) -> str:
    """Inline HTML pill for st.markdown(..., unsafe_allow_html=True)."""
    color = STATUS_COLORS.get(status, "#6c757d")
    label = STATUS_LABELS.get(status, status)
    return (
        f'<span style="background:{color};color:#fff;padding:2px 10px;'
        f'border-radius:10px;font-size:0.8rem">{label}</span>'
    )


def attendance_total(report: Report) -> int:
    return sum(getattr(report, f) for f in ATTENDANCE_FIELDS)


def parse_form_date(value: str) -> Optional[dt.date]:
    try:
        return dt.date.fromisoformat(value) if value else None
    except ValueError:
        return None


def parse_form_time(value: str) -> Optional[dt.time]:
    try:
        return dt.time.fromisoformat(value) if value else None
    except ValueError:
        return None


def selectbox_with_placeholder(
    label: str,
    options: List[str],
    key: Optional[str] = None,
    default_index: Optional[int] = None,
    format_func=str,
):
    """
    A selectbox that can start empty (placeholder) or preselect an item (default_index).
    - Uses a hidden label to avoid duplicate text under the title.
    - Works on older Streamlit as well.
    """
    try:
        # Newer Streamlit supports a `placeholder` argument; use it to show
        # the descriptive label while keeping the rendered label hidden.
        return st.selectbox(
            label,
            options=options,
            index=default_index,            # None -> placeholder shown; int -> preselect
            placeholder=label,
            label_visibility="collapsed",
            format_func=format_func,
            key=key,
        )
    except TypeError:
        # Older Streamlit versions do not accept `placeholder`. Fall back to
        # inserting a synthetic placeholder item at the front of the list.
        if default_index is None:
            placeholder = f"— {label} —"
            choice = st.selectbox(
                " ", options=[placeholder] + options, index=0, key=key,
                format_func=lambda o: o if o == placeholder else format_func(o),
            )
            # Return None when the placeholder is selected so callers can
            # detect 'no selection' consistently.
            return None if choice == placeholder else choice
        return st.selectbox(" ", options=options, index=default_index, key=key, format_func=format_func)
