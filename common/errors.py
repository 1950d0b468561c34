"""
Exception types raised by the report core.

Pages catch `ReportError` and show the message with `st.error`, so every
message here is written to be read by the person filling in the form.
"""

from __future__ import annotations
from typing import Iterable, Tuple


class ReportError(Exception):
    """Base class for every error the report core raises on purpose."""


class ValidationError(ReportError):
    def __init__(self, message: str, fields: Iterable[str] = ()):
        super().__init__(message)
        self.fields: Tuple[str, ...] = tuple(fields)


class NotFoundError(ReportError):
    def __init__(self, report_id: str):
        super().__init__(f"Report '{report_id}' was not found.")
        self.report_id = report_id


class ConflictError(ReportError):
    pass


class PersistenceError(ReportError):
    """Serialising, writing or reading the stored reports failed."""
