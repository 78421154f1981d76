# tests/trace/test_trace_store.py
import json

import pytest

from flakeproof.core.errors import ToolCode, ToolStatus
from flakeproof.core.trace import TOOL_START, TraceRecorder, TraceStore, load_trace_file


class TestTraceRecorder:
    def test_steps_are_kept_in_order(self):
        rec = TraceRecorder("t1", "demo")
        rec.record("a", "x")
        rec.record("b", "y", "note")

        snap = rec.snapshot()
        assert [s.action for s in snap.steps] == ["a", "b"]
        assert snap.steps[1].note == "note"
        assert snap.finished_at is None

    def test_snapshot_is_a_copy(self):
        rec = TraceRecorder("t1", "demo")
        rec.record("a", "x")
        snap = rec.snapshot()
        rec.record("b", "y")
        assert len(snap.steps) == 1

    def test_complete_writes_file(self, tmp_path):
        rec = TraceRecorder("t1", "demo", tmp_path / "traces")
        rec.record("a", "x")
        record = rec.complete(ToolStatus.SUCCESS, ToolCode.OK, "ok")

        path = tmp_path / "traces" / "t1.json"
        assert record.file_path == str(path)
        data = json.loads(path.read_text(encoding="utf-8"))
        assert data["traceId"] == "t1"
        assert data["toolName"] == "demo"
        assert data["finishedAt"]
        assert data["status"] == "success"
        assert data["code"] == "OK"
        assert data["steps"][0]["action"] == "a"

    def test_complete_without_root_stays_in_memory(self, tmp_path):
        rec = TraceRecorder("t1", "demo")
        record = rec.complete(ToolStatus.FATAL_ERROR, ToolCode.UNKNOWN, "x")
        assert record.file_path is None
        assert record.completed

    def test_complete_twice_returns_first(self, tmp_path):
        rec = TraceRecorder("t1", "demo", tmp_path)
        first = rec.complete(ToolStatus.SUCCESS, ToolCode.OK, "ok")
        second = rec.complete(ToolStatus.FATAL_ERROR, ToolCode.UNKNOWN, "later")
        assert second is first
        assert json.loads((tmp_path / "t1.json").read_text(encoding="utf-8"))["status"] == "success"

    def test_record_after_complete_raises(self):
        rec = TraceRecorder("t1", "demo")
        rec.complete(ToolStatus.SUCCESS, ToolCode.OK, "ok")
        with pytest.raises(RuntimeError):
            rec.record("late", "x")
        with pytest.raises(RuntimeError):
            rec.set_traces_root("/tmp")

    def test_set_traces_root_retargets(self, tmp_path):
        rec = TraceRecorder("t1", "demo")
        rec.set_traces_root(tmp_path / "later")
        rec.complete(ToolStatus.SUCCESS, ToolCode.OK, "ok")
        assert (tmp_path / "later" / "t1.json").exists()


class TestTraceStore:
    def test_create_trace_records_start(self):
        store = TraceStore()
        rec = store.create_trace("t1", "demo")
        steps = rec.snapshot().steps
        assert steps[0].action == TOOL_START
        assert steps[0].target == "demo"
        assert steps[0].note == "tool execution started"

    def test_capacity_evicts_oldest_inserted(self):
        store = TraceStore(capacity=3)
        for i in range(5):
            rec = store.create_trace(f"t{i}", "demo")
            store.save(rec.complete(ToolStatus.SUCCESS, ToolCode.OK, "ok"))

        assert len(store) == 3
        assert store.get_by_trace_id("t0") is None
        assert store.get_by_trace_id("t1") is None
        assert [r.trace_id for r in store.list_recent()] == ["t4", "t3", "t2"]
        assert store.get_latest().trace_id == "t4"

    def test_reading_does_not_refresh_position(self):
        store = TraceStore(capacity=2)
        for tid in ("a", "b"):
            store.save(store.create_trace(tid, "demo").complete(ToolStatus.SUCCESS, ToolCode.OK, "ok"))

        assert store.get_by_trace_id("a") is not None
        store.save(store.create_trace("c", "demo").complete(ToolStatus.SUCCESS, ToolCode.OK, "ok"))
        assert "a" not in store
        assert "b" in store

    def test_latest_points_at_open_trace_until_saved(self):
        store = TraceStore()
        store.save(store.create_trace("a", "demo").complete(ToolStatus.SUCCESS, ToolCode.OK, "ok"))
        store.create_trace("b", "demo")
        assert store.get_latest() is None

    def test_empty_store(self):
        store = TraceStore()
        assert store.get_latest() is None
        assert store.get_by_trace_id("nope") is None
        assert store.list_recent() == []

    def test_invalid_capacity(self):
        with pytest.raises(ValueError):
            TraceStore(capacity=0)

    def test_load_trace_file_round_trips(self, tmp_path):
        store = TraceStore()
        rec = store.create_trace("t1", "demo", tmp_path)
        rec.record("click", "css=#go", "click done")
        saved = rec.complete(ToolStatus.RETRYABLE_ERROR, ToolCode.NAVIGATION_TIMEOUT, "slow")

        loaded = load_trace_file(saved.file_path)
        assert loaded == saved
