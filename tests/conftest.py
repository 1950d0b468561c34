"""
Pytest configuration and fixtures
"""
from pathlib import Path
import sys

import pytest

# Ensure project root is on path
ROOT_DIR = Path(__file__).resolve().parent.parent
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

from common.constants import FUNCTIONAL_AREAS
from controllers.report_store import ReportStore


class MemoryBackend:
    """Storage double: keeps the blob in memory and counts saves."""

    def __init__(self, blob=None):
        self.blob = blob
        self.saves = 0

    def load(self):
        return self.blob

    def save(self, blob):
        self.blob = blob
        self.saves += 1


class BrokenBackend(MemoryBackend):
    """Loads fine, fails every write."""

    def save(self, blob):
        raise OSError("disk full")


@pytest.fixture
def backend():
    return MemoryBackend()


@pytest.fixture
def store(backend):
    return ReportStore(backend)


@pytest.fixture
def make_draft():
    def _make(**overrides):
        draft = {
            "match_number": "M1",
            "final_score": "2:1",
            "venue_manager_name": "A. Smith",
            "home_team": "Mexico",
            "away_team": "Canada",
            "stadium": "Estadio Azteca",
            "drs_compliant": True,
            "general_issues": "",
            "functional_areas": [{"name": n, "status": True, "comment": ""} for n in FUNCTIONAL_AREAS],
        }
        draft.update(overrides)
        return draft
    return _make
