"""Thread-safe ring buffer for game events exposed via the API."""

from __future__ import annotations

import threading
from collections import deque
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class GameEvent:
    """A single game event for the API event feed."""

    tick: int
    category: str                      # "capture" | "build" | "victory" | "control"
    message: str
    empire_ids: tuple[str, ...] = ()   # empires involved in this event


class EventLog:
    """Bounded event log. Writers append; readers snapshot a slice.

    Thread-safe via a simple lock: writes happen once per tick batch and
    reads are non-blocking copies.
    """

    __slots__ = ("_buffer", "_lock")

    def __init__(self, maxlen: int = 1000) -> None:
        self._buffer: deque[GameEvent] = deque(maxlen=maxlen)
        self._lock = threading.Lock()

    def append(self, event: GameEvent) -> None:
        with self._lock:
            self._buffer.append(event)

    def append_many(self, events: list[GameEvent]) -> None:
        with self._lock:
            self._buffer.extend(events)

    def since_tick(self, tick: int) -> list[GameEvent]:
        """Return all retained events with tick >= *tick*."""
        with self._lock:
            return [e for e in self._buffer if e.tick >= tick]

    def for_empire(self, empire_id: str, since_tick: int = 0) -> list[GameEvent]:
        """Return retained events involving *empire_id* from *since_tick* on."""
        with self._lock:
            return [e for e in self._buffer if e.tick >= since_tick and empire_id in e.empire_ids]

    def latest(self, count: int = 50) -> list[GameEvent]:
        """Return the *count* most recent events."""
        with self._lock:
            items = list(self._buffer)
        return items[-count:]

    def clear(self) -> None:
        with self._lock:
            self._buffer.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._buffer)
