import streamlit as st

from controllers.data_controller import get_store
from common.constants import FUNCTIONAL_AREAS
from common.ui import sidebar_header

st.set_page_config(page_title="About", layout="wide")


def main():
    store = get_store()
    sidebar_header(store)

    st.header("ℹ️ About")
    st.markdown(
        "This app records one **matchday inspection report** per match: match details, "
        "attendance, a checklist of the stadium's functional areas and DRS compliance.\n\n"
        "A report is marked **Has Issues** when DRS is not compliant, any functional area "
        "is not OK, or general issues are written down; otherwise it is **Completed**."
    )

    st.subheader("Functional areas checked")
    cols = st.columns(3)
    for i, name in enumerate(FUNCTIONAL_AREAS):
        cols[i % 3].markdown(f"- {name}")

    st.subheader("Storage")
    st.markdown(f"Reports are kept locally in `{store.backend!r}`. Nothing is sent over the network.")


if __name__ == "__main__":
    main()
