import streamlit as st

from controllers.data_controller import get_store, submit_report
from controllers.report_builder import default_draft
from common.errors import ReportError, PersistenceError
from common.ui import sidebar_header, report_form, clear_form
from common.utils import safe_rerun

st.set_page_config(page_title="Create Report", layout="wide")

FORM_PREFIX = "create"


def main():
    store = get_store()
    sidebar_header(store)

    st.header("📝 Create Match Report")
    st.caption("Fill in all required information for the match report. Fields marked * are required.")

    # Success message survives the rerun that clears the form
    created_id = st.session_state.pop("just_created_id", None)
    if created_id:
        st.success("Report created successfully!")
        if st.button("Open the new report"):
            st.session_state["selected_report_id"] = created_id
            st.switch_page("pages/3_Report_Details.py")

    draft = report_form(FORM_PREFIX, default_draft(), submit_label="Save Report")
    if draft is None:
        return

    try:
        report = submit_report(draft, store)
    except PersistenceError as exc:
        st.error(f"The report was not saved. {exc}")
        return
    except ReportError as exc:
        st.error(str(exc))
        return

    st.session_state["just_created_id"] = report.id
    clear_form(FORM_PREFIX)
    safe_rerun()


if __name__ == "__main__":
    main()
