import streamlit as st

from controllers.data_controller import get_store, export_json
from controllers.query_controller import filter_reports, reports_frame
from common.constants import STATUSES, STATUS_LABELS
from common.ui import sidebar_header
from common.utils import selectbox_with_placeholder, format_timestamp

st.set_page_config(page_title="Reports", layout="wide")

STATUS_OPTIONS = ["", *STATUSES]


def main():
    store = get_store()
    sidebar_header(store)

    st.header("📋 Match Reports")
    st.caption("Search by match number, team, stadium or venue manager.")

    c1, c2 = st.columns([3, 1])
    term = c1.text_input("Search", key="reports_search", placeholder="Search reports...")
    status = c2.selectbox(
        "Status", STATUS_OPTIONS, key="reports_status",
        format_func=lambda s: STATUS_LABELS.get(s, "All statuses"),
    )

    reports = filter_reports(store.list(), term, status)
    st.caption(f"{len(reports)} of {len(store)} report(s)")
    if not reports:
        st.info("No reports match the current filters.")
        return

    df = reports_frame(reports)
    st.dataframe(
        df.drop(columns=["Id"]),
        use_container_width=True,
        hide_index=True,
        column_config={"Created": st.column_config.DatetimeColumn("Created", format="MMM D, YYYY h:mm a")},
    )

    # Pick one to open
    by_id = {r.id: r for r in reports}
    ids = list(by_id)
    prev_id = st.session_state.get("selected_report_id")
    chosen = selectbox_with_placeholder(
        "Choose a report to open:",
        ids,
        key="reports_open_select",
        default_index=ids.index(prev_id) if prev_id in by_id else None,
        format_func=lambda i: (
            f"#{by_id[i].match_number} | {by_id[i].match_name} | {format_timestamp(by_id[i].created_at, False)}"
        ),
    )

    c1, c2 = st.columns([1, 4])
    if c1.button("Open report", disabled=chosen is None):
        st.session_state["selected_report_id"] = chosen
        st.switch_page("pages/3_Report_Details.py")

    c2.download_button(
        "⬇️ Export filtered reports (JSON)",
        data=export_json(reports),
        file_name="matchday_reports.json",
        mime="application/json",
    )


if __name__ == "__main__":
    main()
