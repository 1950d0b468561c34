# common/plots.py
from __future__ import annotations
from io import BytesIO
from typing import Optional, Sequence

import numpy as np
import matplotlib.pyplot as plt
from matplotlib.gridspec import GridSpec

from common.constants import STATUS_COLORS, STATUS_LABELS, STATUS_COMPLETED, STATUS_ISSUES, ATTENDANCE_FIELDS
from common.utils import format_timestamp, attendance_total
from controllers.stats_controller import SummaryStats, MonthlyBucket
from models.report_model import Report

DEFAULT_FIGSIZE = (6.6, 2.6)  # compact; Streamlit columns are narrow
LINE_COLOR = "#667eea"


def _new_ax(ax=None):
    """Return a compact figure/axes when ax is None; otherwise reuse the axes."""
    if ax is None:
        fig, ax = plt.subplots(figsize=DEFAULT_FIGSIZE, constrained_layout=True)
    else:
        fig = ax.figure
    return fig, ax


def _no_data(ax: plt.Axes, msg: str = "No data available") -> plt.Axes:
    ax.text(0.5, 0.5, msg, ha="center", va="center", color="#666666", fontsize=8, transform=ax.transAxes)
    ax.set_xticks([]); ax.set_yticks([])
    return ax


# --- Completed vs issues (two bars) ---
def plot_status_bar(stats: SummaryStats, ax: Optional[plt.Axes] = None, title: str = "") -> plt.Axes:
    fig, ax = _new_ax(ax)
    if stats.total == 0:
        return _no_data(ax)

    values = [stats.completed, stats.issues]
    colors = [STATUS_COLORS[STATUS_COMPLETED], STATUS_COLORS[STATUS_ISSUES]]
    bars = ax.bar([0, 1], values, color=colors, width=0.55)
    ax.bar_label(bars, fontsize=7)
    ax.set_xticks([0, 1], ["Completed", "Issues"])
    ax.set_ylim(0, max(values + [1]) * 1.2)
    ax.set_title(title)
    ax.tick_params(axis="both", labelsize=6)
    return ax


# --- Reports per month (line, oldest month on the left) ---
def plot_monthly_line(buckets: Sequence[MonthlyBucket], ax: Optional[plt.Axes] = None, title: str = "") -> plt.Axes:
    fig, ax = _new_ax(ax)
    if not buckets:
        return _no_data(ax)

    # buckets arrive newest first; the chart reads left to right in time
    ordered = list(reversed(buckets))
    x = np.arange(len(ordered))
    y = [b.count for b in ordered]

    ax.plot(x, y, color=LINE_COLOR, linewidth=2, marker="o", markersize=4)
    ax.set_xticks(x, [b.label.split(" ")[0][:3] + " " + str(b.year)[2:] for b in ordered], rotation=45)
    ax.set_ylim(0, max(y) * 1.2)
    ax.yaxis.get_major_locator().set_params(integer=True)
    ax.set_title(title)
    ax.tick_params(axis="both", labelsize=6)
    return ax


# --- Attendance of a single report (horizontal bars) ---
def plot_attendance(report: Report, ax: Optional[plt.Axes] = None, title: str = "") -> plt.Axes:
    fig, ax = _new_ax(ax)
    labels = list(ATTENDANCE_FIELDS.values())
    values = [getattr(report, f) for f in ATTENDANCE_FIELDS]
    if not any(values):
        return _no_data(ax, "No attendance recorded")

    y = np.arange(len(labels))
    bars = ax.barh(y, values, color=LINE_COLOR)
    ax.bar_label(bars, fontsize=6, padding=2)
    ax.set_yticks(y, labels)
    ax.invert_yaxis()
    ax.set_title(title, fontsize=8)
    ax.tick_params(axis="both", labelsize=6)
    return ax


# --- Printable one-page sheet for a single report ---
def plot_report_sheet(report: Report) -> plt.Figure:
    """One-page printable summary of the report."""
    fig = plt.figure(figsize=(8.27, 11.69))  # A4 portrait
    gs = GridSpec(3, 1, figure=fig, height_ratios=[1.1, 1.0, 2.4], hspace=0.35)

    fig.suptitle(f"Matchday Report — Match #{report.match_number}", fontsize=14, y=0.975)
    fig.text(0.5, 0.945, f"{report.match_name}  •  Final score {report.final_score}", ha="center", fontsize=11)
    fig.text(0.5, 0.925, STATUS_LABELS.get(report.status, report.status), ha="center", fontsize=10,
             color=STATUS_COLORS.get(report.status, "black"), weight="bold")

    ax_info = fig.add_subplot(gs[0])
    ax_info.axis("off")
    info = [
        ("Tournament", report.tournament), ("Stadium", report.stadium or "—"),
        ("Date / Time", f"{report.date or '—'} {report.time}".strip()),
        ("Venue Manager", report.venue_manager_name),
        ("DRS", "Compliant" if report.drs_compliant else f"NOT compliant: {report.drs_comment or '—'}"),
        ("Created", format_timestamp(report.created_at)),
    ]
    for i, (label, value) in enumerate(info):
        ax_info.text(0.0, 1 - i * 0.17, f"{label}:", fontsize=9, weight="bold", va="top")
        ax_info.text(0.25, 1 - i * 0.17, value, fontsize=9, va="top", wrap=True)

    plot_attendance(report, ax=fig.add_subplot(gs[1]), title=f"Attendance (total {attendance_total(report)})")

    ax_areas = fig.add_subplot(gs[2])
    ax_areas.axis("off")
    ax_areas.set_title("Functional Areas", fontsize=9, loc="left")
    for i, area in enumerate(report.functional_areas):
        y = 1 - i * 0.055
        mark, color = ("OK", STATUS_COLORS["completed"]) if area.status else ("ISSUE", STATUS_COLORS["issues"])
        ax_areas.text(0.0, y, mark, fontsize=8, color=color, weight="bold", va="top")
        ax_areas.text(0.1, y, area.name, fontsize=8, va="top")
        if area.comment:
            ax_areas.text(0.42, y, area.comment[:80], fontsize=7, va="top", style="italic")
    y = 1 - len(report.functional_areas) * 0.055 - 0.03
    for label, text in (("General issues", report.general_issues), ("Additional comments", report.additional_comments)):
        ax_areas.text(0.0, y, f"{label}: {text or '—'}"[:140], fontsize=8, va="top")
        y -= 0.05
    return fig




def report_pdf_bytes(report: Report) -> bytes:
    """Render `plot_report_sheet` to PDF bytes for st.download_button."""
    fig = plot_report_sheet(report)
    try:
        buf = BytesIO()
        fig.savefig(buf, format="pdf", bbox_inches="tight")
    finally:
        plt.close(fig)
    return buf.getvalue()
