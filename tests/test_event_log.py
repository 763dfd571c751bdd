"""Unit tests for the EventLog."""

import pytest

from features.events import EventLog, LogCategory


class TestEventLogRecord:

    def test_record_prepends(self, events):
        events.record(LogCategory.SYS, "first")
        events.record(LogCategory.CORE, "second", "detail")
        entries = events.entries()
        assert [e.message for e in entries] == ["second", "first"]
        assert entries[0].detail == "detail"
        assert entries[0].category is LogCategory.CORE

    def test_ids_are_unique(self, events):
        for i in range(20):
            events.record(LogCategory.SYS, f"msg {i}")
        ids = [e.id for e in events.entries()]
        assert len(set(ids)) == len(ids)

    def test_timestamp_is_clock_time(self, events):
        entry = events.record(LogCategory.SYS, "tick")
        assert len(entry.timestamp) == 8
        assert entry.timestamp.count(":") == 2

    def test_explicit_timestamp(self, events):
        entry = events.record(LogCategory.SEC, "boot", timestamp="INIT")
        assert entry.timestamp == "INIT"

    def test_string_category_accepted(self, events):
        entry = events.record("ERR", "bad")
        assert entry.category is LogCategory.ERR

    def test_unknown_category_does_not_raise(self, events):
        entry = events.record("NOPE", "still logged")
        assert entry.category is LogCategory.SYS
        assert events.latest() is entry


class TestEventLogCapacity:

    @pytest.mark.parametrize("count", [0, 1, 29, 30, 31, 100])
    def test_never_exceeds_capacity(self, count):
        events = EventLog()
        for i in range(count):
            events.record(LogCategory.SYS, f"msg {i}")
        assert len(events) == min(count, 30)
        if count:
            assert events.entries()[0].message == f"msg {count - 1}"

    def test_oldest_is_evicted(self):
        events = EventLog(capacity=3)
        for i in range(5):
            events.record(LogCategory.SYS, f"msg {i}")
        assert [e.message for e in events.entries()] == ["msg 4", "msg 3", "msg 2"]

    def test_clear(self, events):
        events.record(LogCategory.SYS, "x")
        events.clear()
        assert len(events) == 0
        assert events.latest() is None
