# pages/3_Report_Details.py
import streamlit as st

from controllers.data_controller import get_store, save_edit, remove_report
from controllers.report_builder import draft_from_report
from common.errors import ReportError, PersistenceError
from common.plots import report_pdf_bytes
from common.ui import sidebar_header, report_form, clear_form
from common.utils import format_timestamp, status_badge, safe_rerun
from models.report_model import Report

EDIT_PREFIX = "edit"

st.set_page_config(page_title="Report Details", layout="wide")


def _selected_report(store):
    report_id = st.session_state.get("selected_report_id")
    report = store.get(report_id) if report_id else None
    if report is None:
        st.info("Go to **Reports** and open a report first.")
        st.page_link("pages/2_Reports.py", label="Browse reports", icon="📋")
        st.stop()
    return report


@st.cache_data(max_entries=32, show_spinner=False)
def _sheet_pdf(report_data: dict) -> bytes:
    # keyed on the stored fields, so an edit renders a fresh sheet
    return report_pdf_bytes(Report.from_dict(report_data))


def _render_view(report):
    st.markdown(f"### Match #{report.match_number} &nbsp; {status_badge(report.status)}", unsafe_allow_html=True)
    st.caption(
        f'**Tournament:** {report.tournament}  |  **Stadium:** {report.stadium or "—"}  |  '
        f'**Date:** {report.date or "Not specified"} {report.time}  |  '
        f'**Created:** {format_timestamp(report.created_at)}'
    )

    c1, c2, c3 = st.columns(3)
    c1.metric("Match", report.match_name)
    c2.metric("Final Score", report.final_score)
    c3.metric("Venue Manager", report.venue_manager_name)

    st.subheader("Attendance")
    cols = st.columns(5)
    for col, (label, value) in zip(cols, [
        ("Spectators", report.spectators), ("VIP Guests", report.vip_guests),
        ("VVIP Guests", report.vvip_guests), ("Media", report.media_representatives),
        ("Photographers", report.photographers),
    ]):
        col.metric(label, f"{value:,}")

    st.subheader("Functional Areas")
    st.dataframe(
        [{"Area": a.name, "Status": "✅ OK" if a.status else "❌ Issue", "Comment": a.comment}
         for a in report.functional_areas],
        use_container_width=True,
        hide_index=True,
    )

    st.subheader("Issues & Compliance")
    st.markdown(f"**General issues:** {report.general_issues or 'None reported'}")
    if report.drs_compliant:
        st.markdown("**DRS:** ✅ Compliant")
    else:
        st.markdown(f"**DRS:** ❌ Not compliant — {report.drs_comment or 'no comment'}")
    if report.additional_comments:
        st.markdown(f"**Additional comments:** {report.additional_comments}")


def main():
    store = get_store()
    sidebar_header(store)
    report = _selected_report(store)

    st.header("🔎 Report Details")
    if st.session_state.pop("report_updated", False):
        st.success("Report updated.")
    tab_view, tab_edit = st.tabs(["View", "Edit"])

    with tab_view:
        _render_view(report)

        c1, c2 = st.columns(2)
        c1.download_button(
            "⬇️ Download PDF",
            data=_sheet_pdf(report.to_dict()),
            file_name=f"matchday_report_{report.match_number}.pdf",
            mime="application/pdf",
        )

        with c2.popover("🗑️ Delete report"):
            st.write("Are you sure you want to delete this report?")
            if st.button("Yes, delete", type="primary", key="confirm_delete"):
                try:
                    remove_report(report.id, store)
                except ReportError as exc:
                    st.error(str(exc))
                else:
                    st.session_state.pop("selected_report_id", None)
                    st.switch_page("pages/2_Reports.py")

    with tab_edit:
        st.caption("Saving re-evaluates the report status from the updated checklist and DRS values.")
        draft = report_form(f"{EDIT_PREFIX}_{report.id}", draft_from_report(report), submit_label="Update Report")
        if draft is not None:
            try:
                save_edit(report.id, draft, store)
            except PersistenceError as exc:
                st.error(f"The changes were not saved. {exc}")
            except ReportError as exc:
                st.error(str(exc))
            else:
                clear_form(f"{EDIT_PREFIX}_{report.id}")
                st.session_state["report_updated"] = True
                safe_rerun()


if __name__ == "__main__":
    main()
