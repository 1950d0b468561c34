"""
Main application entry for the FIFA Matchday Reports Streamlit app.

This module defines the Dashboard page users see when they open the app.
It handles:
    - application configuration (`st.set_page_config`),
    - environment variable loading via `python-dotenv` (storage backend,
        data directory, log level; see `common/config.py`),
    - the sidebar navigation (delegated to `common.ui`),
    - the headline numbers (total reports, reports with issues, this week,
        today) and the three most recent reports.

This file only composes logic from helper modules; the report store, the
builder and the statistics live under `controllers/`.

Notes for a new Python learner:
    - Side effects: calling this module runs Streamlit code that renders the
        UI. The store is created once per server process by
        `controllers.data_controller.get_store` (cached with
        `st.cache_resource`), so reruns do not reload the file.
    - Session state: clicking "View" stores the report id in
        `st.session_state["selected_report_id"]` so the Report Details page
        knows which report to show.
"""

# Import libraries
import streamlit as st
from dotenv import load_dotenv

from controllers.data_controller import get_store
from controllers.query_controller import recent_reports
from controllers.stats_controller import summary_stats
from common.ui import sidebar_header
from common.utils import format_timestamp, status_badge

# Configure Streamlit page and load environment variables from `.env`.
st.set_page_config(page_title="Matchday Reports — Dashboard", layout="wide")
load_dotenv(override=False)


def main():
    store = get_store()
    sidebar_header(store)

    st.title("⚽ Matchday Reports — Dashboard")
    st.caption("Venue inspection reports for every match, stored locally.")

    reports = store.list()
    stats = summary_stats(reports)

    c1, c2, c3, c4 = st.columns(4)
    c1.metric("Total Reports", stats.total)
    c2.metric("With Issues", stats.issues)
    c3.metric("This Week", stats.this_week)
    c4.metric("Today", stats.today)

    st.subheader("Quick actions")
    q1, q2, q3 = st.columns(3)
    q1.page_link("pages/1_Create_Report.py", label="Create a new report", icon="📝")
    q2.page_link("pages/2_Reports.py", label="Browse all reports", icon="📋")
    q3.page_link("pages/4_Statistics.py", label="See statistics", icon="📊")

    st.subheader("Recent reports")
    recent = recent_reports(reports)
    if not recent:
        st.info("No reports yet. Create the first one from **Create Report**.")
        return

    for r in recent:
        with st.container(border=True):
            left, right = st.columns([4, 1])
            left.markdown(f"**Match #{r.match_number}** — {r.match_name} &nbsp; {status_badge(r.status)}",
                          unsafe_allow_html=True)
            left.caption(
                f'**Stadium:** {r.stadium or "—"}  |  **Score:** {r.final_score}  |  '
                f'**Created:** {format_timestamp(r.created_at)}'
            )
            if right.button("View", key=f"view_{r.id}"):
                st.session_state["selected_report_id"] = r.id
                st.switch_page("pages/3_Report_Details.py")


if __name__ == "__main__":
    main()
