"""Simulation — the tick scheduler and command handler for one game.

Every operation takes the current GameState and returns the next one.
A state that has been handed out is never mutated: changes are made on a
``copy()`` which then replaces it. When nothing changes (deferred tick,
rejected or unknown command) the very same state object is returned.

Tick order:
  1. Economy for every empire
  2. AI turn for every AI empire, in list order
  3. Win check: first empire (list order) holding every land tile wins
"""

from __future__ import annotations

import logging
import math
import time
from typing import TYPE_CHECKING

from conquest.core.commands import Build, CaptureTile, PauseGame, SelectTile, SetSpeed
from conquest.core.enums import GamePhase
from conquest.core.snapshot import Snapshot
from conquest.engine.ai import AIDecisionEngine
from conquest.engine.capture import CaptureResolver
from conquest.engine.construction import try_build
from conquest.engine.economy import Economy
from conquest.systems.rng import DeterministicRNG
from conquest.systems.world_builder import new_game_state
from conquest.utils.event_log import GameEvent

if TYPE_CHECKING:
    from conquest.config import GameConfig
    from conquest.core.commands import Command
    from conquest.core.game_state import GameState

logger = logging.getLogger(__name__)


class Simulation:
    """Owns one GameState and advances it on ticks and commands.

    Not thread-safe: a single actor must serialise ``tick`` and ``apply``.
    """

    __slots__ = ("_config", "_rng", "_state", "_economy", "_resolver", "_ai", "_pending_events")

    def __init__(
        self,
        config: GameConfig,
        state: GameState,
        rng: DeterministicRNG | None = None,
        ai: AIDecisionEngine | None = None,
    ) -> None:
        self._config = config
        self._rng = rng or DeterministicRNG(config.world_seed)
        self._state = state
        self._economy = Economy(config)
        self._resolver = CaptureResolver(config)
        self._ai = ai or AIDecisionEngine(config, self._rng, self._resolver)
        self._pending_events: list[GameEvent] = []

    @classmethod
    def new_game(cls, config: GameConfig, now: float | None = None) -> Simulation:
        rng = DeterministicRNG(config.world_seed)
        now = time.time() if now is None else now
        return cls(config, new_game_state(config, rng, now), rng)

    # -- accessors --

    @property
    def state(self) -> GameState:
        return self._state

    def snapshot(self) -> Snapshot:
        return Snapshot.from_state(self._state)

    def drain_events(self) -> list[GameEvent]:
        """Return and forget the events emitted since the last drain."""
        events, self._pending_events = self._pending_events, []
        return events

    def _emit(self, state: GameState, category: str, message: str, *empire_ids: str) -> None:
        self._pending_events.append(GameEvent(
            tick=state.tick, category=category, message=message, empire_ids=empire_ids))

    # -- stateful wrappers --

    def tick(self, current_time: float) -> GameState:
        self._state = self.advance(self._state, current_time)
        return self._state

    def apply(self, command: Command, now: float | None = None) -> GameState:
        now = time.time() if now is None else now
        self._state = self.dispatch(self._state, command, now)
        return self._state

    def reset(self, now: float | None = None) -> GameState:
        """Discard the current game and start a freshly generated one."""
        now = time.time() if now is None else now
        self._state = new_game_state(self._config, self._rng, now)
        self._pending_events.clear()
        logger.info("Game reset.")
        return self._state

    # -- tick --

    def advance(self, state: GameState, current_time: float) -> GameState:
        """Return the state after one scheduler tick at wall time *current_time*."""
        if state.phase != GamePhase.PLAYING or state.paused:
            return state

        delta_time = (current_time - state.last_update_time) * state.game_speed
        if delta_time < self._config.min_tick_delta:
            return state

        t0 = time.perf_counter()
        new = state.copy()
        new.game_time += delta_time
        new.last_update_time = current_time
        new.tick += 1

        for empire in new.empires:
            self._economy.update(empire, new.grid, delta_time)

        for empire in new.empires:
            if not empire.is_ai:
                continue
            result = self._ai.take_turn(new, empire, current_time)
            if result.captured:
                self._emit(new, "capture",
                           f"{empire.name} captured {len(result.captured)} tile(s)", empire.empire_id)
            if result.built is not None:
                self._emit(new, "build",
                           f"{empire.name} built a {result.built.kind.value} at {result.built.position}",
                           empire.empire_id)

        self._check_victory(new)

        logger.debug("Tick %d: dt=%.3fs game_time=%.2f took=%.4fs",
                     new.tick, delta_time, new.game_time, time.perf_counter() - t0)
        return new

    def _check_victory(self, state: GameState) -> None:
        land = state.grid.land_tile_count
        for empire in state.empires:
            if len(empire.territories) >= land:
                state.phase = GamePhase.ENDED
                state.winner = empire.empire_id
                logger.info("Tick %d: %s controls all %d land tiles and wins.", state.tick, empire.name, land)
                self._emit(state, "victory", f"{empire.name} has conquered the map", empire.empire_id)
                return

    # -- commands --

    def dispatch(self, state: GameState, command: Command, now: float) -> GameState:
        """Return the state after applying *command* at wall time *now*.

        Invalid commands leave the state untouched; they are never reported
        to the caller as errors.
        """
        if not isinstance(command, (SelectTile, CaptureTile, Build, PauseGame, SetSpeed)):
            logger.warning("Ignoring unknown command kind %s", type(command).__name__)
            return state

        if state.empire(command.empire_id) is None:
            logger.debug("Rejected %s: unknown empire %r", command.type.value, command.empire_id)
            return state

        match command:
            case SelectTile():
                return self._select_tile(state, command)
            case CaptureTile():
                return self._capture_tile(state, command, now)
            case Build():
                return self._build(state, command)
            case PauseGame():
                return self._toggle_pause(state, now)
            case SetSpeed():
                return self._set_speed(state, command)
        return state

    def _select_tile(self, state: GameState, cmd: SelectTile) -> GameState:
        if state.grid.by_id(cmd.tile_id) is None:
            logger.debug("Rejected SELECT_TILE: unknown tile %r", cmd.tile_id)
            return state
        new = state.copy()
        new.selected_tile = cmd.tile_id
        new.selected_ship = None
        return new

    def _capture_tile(self, state: GameState, cmd: CaptureTile, now: float) -> GameState:
        if state.phase == GamePhase.ENDED:
            return state
        empire = state.empire(cmd.empire_id)
        if not empire.is_ai and not empire.cooldown_ready(now):
            logger.debug("Rejected CAPTURE_TILE by %s: cooldown (%.2fs left)",
                         empire.empire_id, empire.action_cooldown - (now - empire.last_action_time))
            return state
        center = state.grid.by_id(cmd.tile_id)
        if center is None or center.is_water:
            logger.debug("Rejected CAPTURE_TILE by %s: tile %r not capturable", empire.empire_id, cmd.tile_id)
            return state

        tiles = self._resolver.capture_area(center, empire, state.grid)
        if not tiles:
            logger.debug("Rejected CAPTURE_TILE by %s: nothing to take at %s", empire.empire_id, center.position)
            return state

        new = state.copy()
        actor = new.empire(cmd.empire_id)
        captured = [new.grid.by_id(t.tile_id) for t in tiles]
        self._resolver.apply_capture(new, actor, captured)
        actor.last_action_time = now
        self._emit(new, "capture", f"{actor.name} captured {len(captured)} tile(s)", actor.empire_id)
        return new

    def _build(self, state: GameState, cmd: Build) -> GameState:
        if state.phase == GamePhase.ENDED:
            return state
        tile = state.grid.by_id(cmd.tile_id)
        if tile is None or tile.owner != cmd.empire_id or tile.building is not None:
            logger.debug("Rejected BUILD by %s: tile %r not buildable", cmd.empire_id, cmd.tile_id)
            return state

        new = state.copy()
        actor = new.empire(cmd.empire_id)
        building = try_build(actor, new.grid.by_id(cmd.tile_id), cmd.building, self._config)
        if building is None:
            return state
        logger.info("%s built %s at %s", actor.name, building.kind.value, building.position)
        self._emit(new, "build", f"{actor.name} built a {building.kind.value} at {building.position}",
                   actor.empire_id)
        return new

    def _toggle_pause(self, state: GameState, now: float) -> GameState:
        new = state.copy()
        new.paused = not state.paused
        if not new.paused:
            # Paused wall time must not turn into one huge catch-up tick.
            new.last_update_time = now
        self._emit(new, "control", "Game paused" if new.paused else "Game resumed")
        return new

    def _set_speed(self, state: GameState, cmd: SetSpeed) -> GameState:
        if not math.isfinite(cmd.speed):
            logger.debug("Rejected SET_SPEED: %r is not finite", cmd.speed)
            return state
        cfg = self._config
        speed = min(cfg.max_game_speed, max(cfg.min_game_speed, cmd.speed))
        if speed != cmd.speed:
            logger.debug("SET_SPEED %.2f clamped to %.2f", cmd.speed, speed)
        new = state.copy()
        new.game_speed = speed
        return new
