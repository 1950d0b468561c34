"""
Data controller helpers that glue the report core to the Streamlit pages.

This module exposes the few calls pages need:
    - `get_store()` returns the process-wide `ReportStore` (cached with
        `st.cache_resource`, so every page and every browser session works
        on the same list),
    - `submit_report(draft)` / `save_edit(report_id, draft)` /
        `remove_report(report_id)` run a form submission or a button click
        through the builder and the store,
    - `export_json(reports)` serializes a list for the download button.

Validation, conflict and persistence errors are not caught here: pages
catch `ReportError` and show the message to the user.
"""

from __future__ import annotations
import json
import logging
from typing import Any, Mapping, Sequence

import streamlit as st
from dotenv import load_dotenv

from common.config import load_settings, configure_logging
from common.errors import NotFoundError
from common.storage import make_backend
from controllers.report_builder import build_report, rebuild_report
from controllers.report_store import ReportStore
from models.report_model import Report

logger = logging.getLogger("reports.data")


@st.cache_resource(show_spinner=False)
def get_store() -> ReportStore:
    # pages can be opened directly, before main.py ever ran
    load_dotenv(override=False)
    settings = load_settings()
    configure_logging(settings.log_level)
    backend = make_backend(settings)
    logger.info("Opening report store on %r", backend)
    return ReportStore(backend)


def submit_report(draft: Mapping[str, Any], store: ReportStore | None = None) -> Report:
    store = get_store() if store is None else store
    return store.create(build_report(draft))


def save_edit(report_id: str, draft: Mapping[str, Any], store: ReportStore | None = None) -> Report:
    store = get_store() if store is None else store
    existing = store.get(report_id)
    if existing is None:
        raise NotFoundError(report_id)
    return store.update(report_id, rebuild_report(existing, draft))


def remove_report(report_id: str, store: ReportStore | None = None) -> None:
    store = get_store() if store is None else store
    store.delete(report_id)


def export_json(reports: Sequence[Report]) -> str:
    return json.dumps([r.to_dict() for r in reports], ensure_ascii=False, indent=2)
