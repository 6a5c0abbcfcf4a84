"""Authoritative game state — replaced, never shared, on every mutation."""

from __future__ import annotations

from conquest.core.enums import GamePhase
from conquest.core.grid import Grid
from conquest.core.models import Camera, Empire, Ship


class GameState:
    """The single source of truth for one game.

    The Simulation never mutates a state it has handed out: it calls
    ``copy()``, mutates the copy and publishes it, so readers holding the
    previous reference never observe a half-applied tick or command.
    """

    __slots__ = (
        "game_time", "last_update_time", "tick", "empires", "grid", "ships",
        "selected_tile", "selected_ship", "phase", "winner", "camera",
        "game_speed", "paused",
    )

    def __init__(
        self,
        grid: Grid,
        empires: list[Empire],
        last_update_time: float = 0.0,
    ) -> None:
        self.game_time: float = 0.0
        self.last_update_time: float = last_update_time
        self.tick: int = 0
        self.empires: list[Empire] = empires
        self.grid: Grid = grid
        self.ships: list[Ship] = []
        self.selected_tile: int | None = None
        self.selected_ship: str | None = None
        self.phase: GamePhase = GamePhase.SETUP
        self.winner: str | None = None
        self.camera: Camera = Camera()
        self.game_speed: float = 1.0
        self.paused: bool = False

    # -- queries --

    @property
    def map_size(self) -> tuple[int, int]:
        return self.grid.width, self.grid.height

    def empire(self, empire_id: str) -> Empire | None:
        for e in self.empires:
            if e.empire_id == empire_id:
                return e
        return None

    def empire_index(self, empire_id: str) -> int:
        for i, e in enumerate(self.empires):
            if e.empire_id == empire_id:
                return i
        return -1

    def territory_violations(self) -> list[str]:
        """Describe every breach of the ownership/territory-list invariant.

        Empty when each owned non-water tile appears exactly once, in its
        owner's territory list, and nowhere else.
        """
        problems: list[str] = []
        listed: dict[int, str] = {}
        for emp in self.empires:
            if len(set(emp.territories)) != len(emp.territories):
                problems.append(f"{emp.empire_id}: duplicate territory ids")
            for tid in emp.territories:
                if tid in listed:
                    problems.append(f"tile {tid} listed by {listed[tid]} and {emp.empire_id}")
                listed[tid] = emp.empire_id
        for tile in self.grid:
            if tile.owner is None:
                if tile.tile_id in listed:
                    problems.append(f"tile {tile.tile_id} unowned but listed by {listed[tile.tile_id]}")
                continue
            if tile.is_water:
                problems.append(f"water tile {tile.tile_id} owned by {tile.owner}")
            if listed.get(tile.tile_id) != tile.owner:
                problems.append(f"tile {tile.tile_id} owned by {tile.owner} but listed by {listed.get(tile.tile_id)}")
        return problems

    # -- copy --

    def copy(self) -> GameState:
        """Copy-on-write boundary: tiles, empires and their lists are duplicated."""
        new = GameState.__new__(GameState)
        new.game_time = self.game_time
        new.last_update_time = self.last_update_time
        new.tick = self.tick
        new.empires = [e.copy() for e in self.empires]
        new.grid = self.grid.copy()
        new.ships = list(self.ships)
        new.selected_tile = self.selected_tile
        new.selected_ship = self.selected_ship
        new.phase = self.phase
        new.winner = self.winner
        new.camera = self.camera.copy()
        new.game_speed = self.game_speed
        new.paused = self.paused
        return new
