import streamlit as st
import matplotlib.pyplot as plt

from controllers.data_controller import get_store
from controllers.stats_controller import summary_stats, monthly_buckets, monthly_frame
from common.plots import plot_status_bar, plot_monthly_line
from common.ui import sidebar_header

# ------------------------------------------------------------
# Page setup & consistent sidebar
# ------------------------------------------------------------
SMALL_FIGSIZE = (5.2, 2.4)  # <- compact size for both charts

st.set_page_config(page_title="Statistics", layout="wide")


def main():
    store = get_store()
    sidebar_header(store)

    reports = store.list()
    stats = summary_stats(reports)
    buckets = monthly_buckets(reports)

    st.header("📊 Statistics")
    st.caption("Computed from every stored report.")

    c1, c2, c3, c4 = st.columns(4)
    c1.metric("Total Reports", stats.total)
    c2.metric("Completed", stats.completed)
    c3.metric("With Issues", stats.issues)
    c4.metric("Completion Rate", f"{stats.completion_rate:.1f}%")

    # ------------------------------------------------------------
    # Charts: status split & reports per month
    # ------------------------------------------------------------
    left, right = st.columns(2)
    with left:
        st.subheader("Report status")
        fig1, ax1 = plt.subplots(figsize=SMALL_FIGSIZE)
        plot_status_bar(stats, ax=ax1)
        st.pyplot(fig1, use_container_width=True)
        plt.close(fig1)

    with right:
        st.subheader("Reports per month")
        fig2, ax2 = plt.subplots(figsize=SMALL_FIGSIZE)
        plot_monthly_line(buckets, ax=ax2)
        st.pyplot(fig2, use_container_width=True)
        plt.close(fig2)

    # ------------------------------------------------------------
    # Detail table
    # ------------------------------------------------------------
    st.subheader("Monthly breakdown")
    if not buckets:
        st.info("No reports yet.")
    else:
        st.dataframe(monthly_frame(buckets), use_container_width=True, hide_index=True)

    st.caption(f"Created today: {stats.today}  |  In the last 7 days: {stats.this_week}")


if __name__ == "__main__":
    main()
