import json
import logging
from dataclasses import replace

import pytest

from common.errors import ConflictError, NotFoundError, PersistenceError
from controllers.report_builder import build_report
from common.storage import JsonFileBackend
from controllers.report_store import ReportStore
from conftest import MemoryBackend, BrokenBackend


def test_create_then_get_returns_same_record(store, make_draft):
    report = store.create(build_report(make_draft()))
    assert store.get(report.id) == report


def test_delete_then_get_signals_not_found(store, make_draft):
    report = store.create(build_report(make_draft()))
    store.delete(report.id)
    assert store.get(report.id) is None
    with pytest.raises(NotFoundError):
        store.delete(report.id)


def test_list_keeps_insertion_order_and_is_a_copy(store, make_draft):
    ids = [store.create(build_report(make_draft(match_number=f"M{i}"))).id for i in range(3)]
    listed = store.list()
    assert [r.id for r in listed] == ids
    listed.clear()
    assert len(store) == 3


def test_duplicate_id_is_rejected_before_saving(store, backend, make_draft):
    report = store.create(build_report(make_draft()))
    with pytest.raises(ConflictError):
        store.create(replace(report, match_number="M2"))
    assert backend.saves == 1
    assert len(store) == 1


def test_update_replaces_in_place(store, make_draft):
    first = store.create(build_report(make_draft(match_number="A")))
    second = store.create(build_report(make_draft(match_number="B")))
    store.update(first.id, replace(first, final_score="3:3"))
    assert [r.match_number for r in store.list()] == ["A", "B"]
    assert store.get(first.id).final_score == "3:3"
    assert store.get(second.id) == second


def test_update_unknown_id_and_mismatched_id(store, make_draft):
    report = store.create(build_report(make_draft()))
    with pytest.raises(NotFoundError):
        store.update("missing", report)
    with pytest.raises(ConflictError):
        store.update(report.id, replace(report, id="other"))


def test_every_mutation_persists_the_whole_collection(store, backend, make_draft):
    a = store.create(build_report(make_draft(match_number="A")))
    store.create(build_report(make_draft(match_number="B")))
    store.delete(a.id)
    data = json.loads(backend.blob)
    assert [d["matchNumber"] for d in data] == ["B"]
    assert backend.saves == 3


def test_reload_from_persisted_blob(store, backend, make_draft):
    report = store.create(build_report(make_draft()))
    reopened = ReportStore(backend)
    assert reopened.list() == [report]
    assert reopened.load_warning is None


def test_save_failure_propagates_and_leaves_memory_untouched(make_draft):
    store = ReportStore(BrokenBackend())
    with pytest.raises(PersistenceError) as err:
        store.create(build_report(make_draft()))
    assert "disk full" in str(err.value)
    assert isinstance(err.value.__cause__, OSError)
    assert store.list() == []


@pytest.mark.parametrize("blob", ["{not json", '{"id": "x"}', "[1, 2]"])
def test_unreadable_blob_degrades_to_empty(blob, caplog):
    with caplog.at_level(logging.WARNING, logger="reports.store"):
        store = ReportStore(MemoryBackend(blob))
    assert store.list() == []
    assert store.load_warning
    assert any(rec.levelno == logging.WARNING for rec in caplog.records)


def test_backend_read_error_degrades_to_empty():
    class Unreadable(MemoryBackend):
        def load(self):
            raise OSError("permission denied")

    store = ReportStore(Unreadable())
    assert store.list() == []
    assert "permission denied" in store.load_warning


def test_old_blob_with_missing_fields_loads():
    blob = json.dumps([{
        "id": "1718000000000",
        "createdAt": "2024-06-10T08:00:00.000Z",
        "matchNumber": "12",
        "finalScore": "1:0",
        "venueManagerName": "R. Diaz",
        "spectators": "oops",
        "drsCompliant": False,
    }])
    store = ReportStore(MemoryBackend(blob))
    report = store.get("1718000000000")
    assert report.spectators == 0
    assert report.status == "issues"
    assert report.functional_areas == ()


def test_undecodable_file_degrades_to_empty(tmp_path):
    path = tmp_path / "fifa-reports.json"
    path.write_bytes(b'[{"id": "x", "matchNumber": "\xff\xfe"}]')
    store = ReportStore(JsonFileBackend(path))
    assert store.list() == []
    assert store.load_warning


def test_deeply_nested_blob_degrades_to_empty():
    store = ReportStore(MemoryBackend("[" * 200000 + "]" * 200000))
    assert store.list() == []
    assert store.load_warning


def test_duplicate_ids_in_blob_degrade_to_empty(store, backend, make_draft):
    report = store.create(build_report(make_draft()))
    backend.blob = json.dumps([report.to_dict(), report.to_dict()])
    reopened = ReportStore(backend)
    assert reopened.list() == []
    assert "duplicate" in reopened.load_warning
