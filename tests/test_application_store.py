"""Tests for the in-process application store."""

import json
import threading

import pytest

from hireflow.automation.progression import ProgressionEngine
from hireflow.core.exceptions import (
    ApplicationNotFoundError,
    DuplicateApplicationError,
    StaleApplicationError,
)
from hireflow.core.models import ApplicationStatus, RoleType
from hireflow.storage.store import ApplicationStore

from conftest import FIXED_NOW, make_application, make_job


class TestApplicationStore:

    def test_records_are_copied(self, store):
        original = make_application("app-1")
        store.add_application(original)

        original.status = ApplicationStatus.OFFER
        fetched = store.get_application("app-1")
        fetched.history.clear()

        again = store.get_application("app-1")
        assert again.status == ApplicationStatus.APPLIED
        assert len(again.history) == 1

    def test_missing_application(self, store):
        with pytest.raises(ApplicationNotFoundError):
            store.get_application("nope")

    def test_missing_job_returns_none(self, store):
        assert store.get_job("nope") is None
        assert store.get_job("job-tech").is_technical

    def test_duplicate_id_rejected(self, store):
        store.add_application(make_application("app-1", applicant_id="u1"))
        with pytest.raises(DuplicateApplicationError):
            store.add_application(make_application("app-1", applicant_id="u2"))

    def test_filters(self, store):
        store.add_application(make_application("app-1"))
        store.add_application(make_application("app-2", job_id="job-ops", technical=False))

        assert [a.id for a in store.list_applications(role_type=RoleType.TECHNICAL)] == ["app-1"]
        assert [a.id for a in store.list_applications(status=ApplicationStatus.APPLIED)] == ["app-1", "app-2"]
        assert len(store) == 2
        assert {job.id for job in store.list_jobs()} == {"job-tech", "job-ops"}

    def test_save_checks_expected_status(self, store):
        store.add_application(make_application("app-1"))
        application = store.get_application("app-1")
        application.status = ApplicationStatus.REVIEWED

        with pytest.raises(StaleApplicationError) as excinfo:
            store.save(application, expected_status="Interview")
        assert excinfo.value.actual == "Applied"

        store.save(application, expected_status="Applied")
        assert store.get_application("app-1").status == ApplicationStatus.REVIEWED

    def test_save_unknown_application(self, store):
        with pytest.raises(ApplicationNotFoundError):
            store.save(make_application("ghost"), expected_status="Applied")

    def test_dump_and_load(self, store, tmp_path):
        store.add_application(make_application("app-1", match_score=42))
        path = tmp_path / "store.json"

        store.dump(path)
        data = json.loads(path.read_text(encoding="utf-8"))
        loaded = ApplicationStore.load(path)

        assert [a["id"] for a in data["applications"]] == ["app-1"]
        restored = loaded.get_application("app-1")
        assert restored.match_score == 42
        assert restored.history[0].timestamp == FIXED_NOW
        assert loaded.get_job("job-tech") == store.get_job("job-tech")

    def test_concurrent_batches_advance_once(self, fixed_clock):
        """Overlapping runs commit each step at most once."""
        store = ApplicationStore(
            jobs=[make_job()],
            applications=[make_application(f"app-{i}", match_score=50) for i in range(20)],
        )
        snapshot = store.list_pending_technical()
        results = []

        def run():
            results.append(ProgressionEngine(store, clock=fixed_clock).run_batch(snapshot))

        threads = [threading.Thread(target=run) for _ in range(4)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert sum(r.updated_count for r in results) == 20
        for application in store.list_applications():
            assert application.status == ApplicationStatus.REVIEWED
            assert len(application.history) == 2

    def test_failed_dump_keeps_previous_file(self, store, tmp_path, monkeypatch):
        store.add_application(make_application("app-1"))
        path = tmp_path / "store.json"
        store.dump(path)
        before = path.read_text(encoding="utf-8")

        def broken_dump(payload, f, **kwargs):
            f.write('{"jobs": [')
            raise OSError("disk full")

        store.add_application(make_application("app-2"))
        monkeypatch.setattr("hireflow.storage.store.json.dump", broken_dump)
        with pytest.raises(OSError):
            store.dump(path)

        assert path.read_text(encoding="utf-8") == before
        assert list(tmp_path.iterdir()) == [path]
        monkeypatch.undo()
        assert [a.id for a in ApplicationStore.load(path).list_applications()] == ["app-1"]
