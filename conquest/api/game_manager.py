"""GameManager — runs one Simulation on a background thread.

Request handlers never touch the Simulation directly: they push Commands
onto a queue and read the latest immutable Snapshot, which the game thread
swaps in atomically after each iteration (single writer).
"""

from __future__ import annotations

import logging
import threading
import time
from pathlib import Path
from typing import TYPE_CHECKING

from conquest.core.commands import PauseGame
from conquest.core.roster import HUMAN_EMPIRE_ID
from conquest.engine.command_queue import CommandQueue
from conquest.engine.simulation import Simulation
from conquest.persistence.codec import load_or_create, save_snapshot
from conquest.systems.rng import DeterministicRNG
from conquest.utils.event_log import EventLog, GameEvent

if TYPE_CHECKING:
    from conquest.config import GameConfig
    from conquest.core.commands import Command
    from conquest.core.snapshot import Snapshot

logger = logging.getLogger(__name__)


class GameManager:
    """Manages the game lifecycle on a background thread.

    Provides thread-safe access to:
      - latest snapshot (atomic reference swap)
      - event log (lock-guarded ring buffer)
      - command submission, reset and save
    """

    def __init__(self, config: GameConfig, save_path: str | Path | None = None) -> None:
        self.config = config
        self._save_path = Path(save_path or config.snapshot_file)
        self._rng = DeterministicRNG(config.world_seed)

        self._commands = CommandQueue(config.command_queue_size)
        self._event_log = EventLog()
        self._sim_lock = threading.Lock()
        self._snapshot_lock = threading.Lock()

        state = load_or_create(self._save_path, config, self._rng)
        self._sim = Simulation(config, state, self._rng)
        self._latest_snapshot: Snapshot = self._sim.snapshot()

        self._thread: threading.Thread | None = None
        self._running = threading.Event()
        self._stop_requested = threading.Event()

    # -- public properties --

    @property
    def running(self) -> bool:
        return self._running.is_set()

    @property
    def event_log(self) -> EventLog:
        return self._event_log

    @property
    def save_path(self) -> Path:
        return self._save_path

    def get_snapshot(self) -> Snapshot:
        with self._snapshot_lock:
            return self._latest_snapshot

    # -- input --

    def submit(self, command: Command) -> bool:
        """Queue *command* for the next loop iteration; False if the queue is full."""
        return self._commands.push(command)

    def set_paused(self, paused: bool, now: float | None = None) -> bool:
        """Pause or resume the live game now. False if it is already in that state."""
        now = time.time() if now is None else now
        with self._sim_lock:
            if self._sim.state.paused == paused:
                return False
            changed = self._sim.apply(PauseGame(HUMAN_EMPIRE_ID), now).paused == paused
            self._publish()
        return changed

    # -- lifecycle --

    def start(self) -> None:
        if self._running.is_set():
            return
        self._stop_requested.clear()
        self._running.set()
        self._thread = threading.Thread(target=self._run_loop, name="game-loop", daemon=True)
        self._thread.start()
        logger.info("GameManager started (tick_interval=%.3fs)", self.config.tick_interval)

    def stop(self) -> None:
        self._stop_requested.set()
        if self._thread and self._thread.is_alive():
            self._thread.join(timeout=5.0)
        self._running.clear()
        if self.config.autosave:
            self.save()
        logger.info("GameManager stopped.")

    def reset(self) -> None:
        """Replace the game with a freshly generated one."""
        with self._sim_lock:
            self._commands.drain()
            self._sim.reset()
            self._event_log.clear()
            self._publish()

    def save(self) -> Path:
        with self._sim_lock:
            return save_snapshot(self._sim.state, self._save_path)

    def run_once(self, now: float | None = None) -> Snapshot:
        """One loop iteration: apply queued commands, tick, publish."""
        now = time.time() if now is None else now
        with self._sim_lock:
            for command in self._commands.drain():
                self._sim.apply(command, now)
            self._sim.tick(now)
            self._publish()
        return self.get_snapshot()

    # -- internals --

    def _publish(self) -> None:
        snap = self._sim.snapshot()
        with self._snapshot_lock:
            self._latest_snapshot = snap
        events: list[GameEvent] = self._sim.drain_events()
        if events:
            self._event_log.append_many(events)

    def _run_loop(self) -> None:
        logger.info("Game thread started.")
        while not self._stop_requested.is_set():
            self.run_once()
            time.sleep(self.config.tick_interval)
        logger.info("Game thread exited.")
