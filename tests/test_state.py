"""Tests for curation/state.py — RunState."""

import json

from curation.state import RunState


class TestRunState:
    def test_new_run_has_no_results(self):
        state = RunState("run1", ["health_safety", "sleep_patterns"])
        assert state.results == {}
        assert state.total_inserted == 0
        assert state.failed_topics == []

    def test_complete_topic(self):
        state = RunState("run1", ["health_safety"])
        state.complete_topic("health_safety", 7, ["baby first aid basics"], {"short_description": 2})
        assert state.is_done("health_safety")
        assert not state.is_failed("health_safety")
        entry = state.results["health_safety"]
        assert entry["inserted_count"] == 7
        assert entry["failed_queries"] == ["baby first aid basics"]
        assert entry["rejected"] == {"short_description": 2}
        assert "timestamp" in entry

    def test_fail_topic(self):
        state = RunState("run1", ["health_safety"])
        state.fail_topic("health_safety", "sqlite: database is locked")
        assert state.is_failed("health_safety")
        assert state.failed_topics == ["health_safety"]
        assert state.results["health_safety"]["inserted_count"] == 0

    def test_total_inserted(self):
        state = RunState("run1", ["a", "b", "c"])
        state.complete_topic("a", 4)
        state.complete_topic("b", 6)
        state.fail_topic("c", "boom")
        assert state.total_inserted == 10

    def test_report(self):
        state = RunState("run1", ["a", "b", "c"])
        state.complete_topic("a", 3)
        state.fail_topic("b", "store down")
        assert state.report() == [
            {"topic": "a", "inserted_count": 3},
            {"topic": "b", "error": "store down"},
            {"topic": "c", "error": "not run"},
        ]

    def test_summary(self):
        state = RunState("run1", ["a", "b", "c"])
        state.complete_topic("a", 3, ["q1", "q2"])
        state.fail_topic("b", "store down")
        summary = state.summary()
        assert "[+] a: 3 inserted (2 queries failed)" in summary
        assert "[!] b: store down" in summary
        assert "[ ] c" in summary
        assert "total inserted: 3" in summary

    def test_save(self, tmp_path):
        state = RunState("run1", ["a"])
        state.complete_topic("a", 2)
        path = tmp_path / "runs" / "run1.json"
        state.save(path)

        data = json.loads(path.read_text())
        assert data["run_id"] == "run1"
        assert data["topics"] == ["a"]
        assert data["results"]["a"]["inserted_count"] == 2
