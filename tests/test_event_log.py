"""Tests for the bounded event feed."""

import sys
import os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from conquest.utils.event_log import EventLog, GameEvent


def _make_event(tick: int, category: str = "capture") -> GameEvent:
    return GameEvent(tick=tick, category=category, message=f"event at {tick}", empire_ids=("a",))


class TestEventLog:
    def test_bounded(self):
        log = EventLog(maxlen=3)
        log.append_many([_make_event(t) for t in range(5)])
        assert len(log) == 3
        assert [e.tick for e in log.latest(10)] == [2, 3, 4]

    def test_since_tick(self):
        log = EventLog()
        for t in (1, 2, 2, 5):
            log.append(_make_event(t))
        assert [e.tick for e in log.since_tick(2)] == [2, 2, 5]
        assert log.since_tick(6) == []

    def test_for_empire(self):
        log = EventLog()
        log.append(GameEvent(1, "capture", "a took a tile", ("a",)))
        log.append(GameEvent(2, "build", "b built", ("b",)))
        log.append(GameEvent(3, "control", "Game paused"))
        log.append(GameEvent(4, "capture", "a again", ("a",)))
        assert [e.tick for e in log.for_empire("a")] == [1, 4]
        assert [e.tick for e in log.for_empire("a", since_tick=2)] == [4]
        assert log.for_empire("c") == []

    def test_latest_and_clear(self):
        log = EventLog()
        log.append_many([_make_event(t) for t in range(4)])
        assert [e.tick for e in log.latest(2)] == [2, 3]
        log.clear()
        assert len(log) == 0
