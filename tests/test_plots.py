import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt

from common import utils
from common.plots import plot_report_sheet, report_pdf_bytes, plot_status_bar, plot_monthly_line
from controllers.report_builder import build_report
from controllers.stats_controller import summary_stats, monthly_buckets


def test_report_pdf_bytes_is_a_pdf_and_closes_the_figure(make_draft):
    report = build_report(make_draft(drs_compliant=False, drs_comment="No certificate", spectators=40000))
    plt.close("all")
    data = report_pdf_bytes(report)
    assert data.startswith(b"%PDF")
    assert plt.get_fignums() == []


def test_report_sheet_lists_every_area(make_draft):
    fig = plot_report_sheet(build_report(make_draft()))
    try:
        texts = [t.get_text() for ax in fig.axes for t in ax.texts]
        assert "Stadium Lighting" in texts
        assert texts.count("OK") == 15
    finally:
        plt.close(fig)


def test_charts_handle_empty_collections():
    ax = plot_status_bar(summary_stats([]))
    assert ax.texts[0].get_text() == "No data available"
    ax2 = plot_monthly_line(monthly_buckets([]))
    assert ax2.texts[0].get_text() == "No data available"
    plt.close("all")


def test_safe_rerun_prefers_rerun(monkeypatch):
    calls = []
    monkeypatch.setattr(utils.st, "rerun", lambda: calls.append("rerun"))
    utils.safe_rerun()
    assert calls == ["rerun"]


def test_safe_rerun_falls_back_to_experimental_rerun(monkeypatch):
    calls = []
    monkeypatch.delattr(utils.st, "rerun", raising=False)
    monkeypatch.setattr(utils.st, "experimental_rerun", lambda: calls.append("experimental"), raising=False)
    utils.safe_rerun()
    assert calls == ["experimental"]
