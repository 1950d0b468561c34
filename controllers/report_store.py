"""
Report store: the ordered collection of reports plus its persistence.

`ReportStore` keeps reports in creation order and writes the whole list to
its storage backend after every change (create, update, delete). The
backend is injected, so the app can use a JSON file or SQLite and tests can
use an in-memory double.

Behaviour worth knowing when calling it from a page:
    - a change is saved first and only then applied in memory; if the save
      fails a `PersistenceError` is raised and nothing changed,
    - `create` refuses a duplicate id (`ConflictError`), `update`/`delete`
      refuse an unknown id (`NotFoundError`),
    - an unreadable blob at startup does not crash the app: the store
      starts empty and keeps the reason in `load_warning` so the UI can
      show it.

Streamlit runs each session's script in its own thread while sharing one
cached store, so mutations are serialized with a lock.
"""

from __future__ import annotations
import json
import logging
import sqlite3
import threading
from typing import List, Optional

from common.errors import ConflictError, NotFoundError, PersistenceError
from common.storage import StorageBackend
from models.report_model import Report

logger = logging.getLogger("reports.store")


class ReportStore:
    def __init__(self, backend: StorageBackend):
        self.backend = backend
        self.load_warning: Optional[str] = None
        self._lock = threading.RLock()
        self._reports: List[Report] = self._load()

    # ---------- Loading / saving ----------
    def _load(self) -> List[Report]:
        try:
            blob = self.backend.load()
        except (OSError, sqlite3.Error, ValueError) as exc:
            return self._degrade(f"Could not read stored reports ({exc}); starting with an empty list.")

        if blob is None or not blob.strip():
            logger.info("No stored reports found in %r", self.backend)
            return []

        try:
            data = json.loads(blob)
            if not isinstance(data, list):
                raise ValueError(f"expected a JSON array, got {type(data).__name__}")
            reports = [Report.from_dict(item) for item in data]
            seen = set()
            for r in reports:
                if r.id in seen:
                    raise ValueError(f"duplicate report id {r.id!r}")
                seen.add(r.id)
        except (ValueError, TypeError, AttributeError, RecursionError) as exc:
            return self._degrade(f"Stored reports could not be parsed ({exc}); starting with an empty list.")

        logger.info("Loaded %d report(s) from %r", len(reports), self.backend)
        return reports

    def _degrade(self, message: str) -> List[Report]:
        logger.warning(message)
        self.load_warning = message
        return []

    def _persist(self, reports: List[Report]) -> None:
        try:
            blob = json.dumps([r.to_dict() for r in reports], ensure_ascii=False)
            self.backend.save(blob)
        except (TypeError, ValueError, OSError, sqlite3.Error) as exc:
            logger.error("Saving %d report(s) to %r failed: %s", len(reports), self.backend, exc)
            raise PersistenceError(f"Reports could not be saved: {exc}") from exc
        logger.debug("Saved %d report(s)", len(reports))

    def _index_of(self, report_id: str) -> int:
        for i, r in enumerate(self._reports):
            if r.id == report_id:
                return i
        raise NotFoundError(report_id)

    # ---------- Public API ----------
    def create(self, report: Report) -> Report:
        with self._lock:
            if any(r.id == report.id for r in self._reports):
                raise ConflictError(f"A report with id '{report.id}' already exists.")
            updated = self._reports + [report]
            self._persist(updated)
            self._reports = updated
        logger.info("Created report %s (match %s, %s)", report.id, report.match_number, report.status)
        return report

    def update(self, report_id: str, report: Report) -> Report:
        with self._lock:
            idx = self._index_of(report_id)
            if report.id != report_id:
                raise ConflictError(f"Report id '{report.id}' does not match '{report_id}'.")
            updated = list(self._reports)
            updated[idx] = report
            self._persist(updated)
            self._reports = updated
        logger.info("Updated report %s", report_id)
        return report

    def delete(self, report_id: str) -> None:
        with self._lock:
            idx = self._index_of(report_id)
            updated = self._reports[:idx] + self._reports[idx + 1:]
            self._persist(updated)
            self._reports = updated
        logger.info("Deleted report %s", report_id)

    def get(self, report_id: str) -> Optional[Report]:
        with self._lock:
            return next((r for r in self._reports if r.id == report_id), None)

    def list(self) -> List[Report]:
        with self._lock:
            return list(self._reports)

    def __len__(self) -> int:
        return len(self._reports)
