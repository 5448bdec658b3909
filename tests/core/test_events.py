# tests/core/test_events.py
"""Testes do Event Log estruturado."""

from semver_flow.core.events import EventLog


def test_log_records_structured_event():
    events = EventLog(run_id="run-1")

    events.log(stage="engine", level="info", message="cache hit", cache_key="k")

    (event,) = events.events
    assert event["run_id"] == "run-1"
    assert event["stage"] == "engine"
    assert event["level"] == "info"
    assert event["message"] == "cache hit"
    assert event["cache_key"] == "k"
    assert event["timestamp"].endswith("+00:00")


def test_warn_logs_and_groups_by_stage():
    events = EventLog()

    events.warn(stage="cache", message="a")
    events.warn(stage="cache", message="b")
    events.warn(stage="engine", message="c")

    assert events.warnings == {"cache": ["a", "b"], "engine": ["c"]}
    assert [e["message"] for e in events.by_level("warning")] == ["a", "b", "c"]


def test_run_ids_are_unique():
    assert EventLog().run_id != EventLog().run_id
