"""Immutable snapshot of the game state for renderers and API readers."""

from __future__ import annotations

from dataclasses import dataclass

from conquest.core.enums import GamePhase, Terrain
from conquest.core.game_state import GameState
from conquest.core.models import Building, Ship


@dataclass(frozen=True, slots=True)
class EmpireView:
    """Read-only summary of one empire."""

    empire_id: str
    name: str
    color: str
    is_ai: bool
    gold: float
    population: float
    max_population: float
    military_ratio: float
    gold_per_second: float
    population_growth_rate: float
    territory_count: int
    building_count: int
    last_action_time: float
    action_cooldown: float


@dataclass(frozen=True, slots=True)
class Snapshot:
    """Read-only view of a game, safe to share across threads.

    Per-tile layers are flat tuples indexed by tile id (``y * width + x``).
    ``selected_tile``, ``selected_ship`` and ``winner`` may be None.
    """

    tick: int
    game_time: float
    phase: GamePhase
    winner: str | None
    paused: bool
    game_speed: float
    width: int
    height: int
    terrain: tuple[Terrain, ...]
    owners: tuple[str | None, ...]
    resources: tuple[int, ...]
    empires: tuple[EmpireView, ...]
    buildings: tuple[Building, ...]
    ships: tuple[Ship, ...]
    selected_tile: int | None
    selected_ship: str | None
    camera: tuple[float, float, float]
    land_tile_count: int

    @classmethod
    def from_state(cls, state: GameState) -> Snapshot:
        tiles = list(state.grid)
        empires = tuple(
            EmpireView(
                empire_id=e.empire_id, name=e.name, color=e.color, is_ai=e.is_ai,
                gold=e.resources.gold, population=e.resources.population,
                max_population=e.resources.max_population,
                military_ratio=e.resources.military_ratio,
                gold_per_second=e.resources.gold_per_second,
                population_growth_rate=e.resources.population_growth_rate,
                territory_count=len(e.territories),
                building_count=len(e.buildings),
                last_action_time=e.last_action_time,
                action_cooldown=e.action_cooldown,
            )
            for e in state.empires
        )
        return cls(
            tick=state.tick,
            game_time=state.game_time,
            phase=state.phase,
            winner=state.winner,
            paused=state.paused,
            game_speed=state.game_speed,
            width=state.grid.width,
            height=state.grid.height,
            terrain=tuple(t.terrain for t in tiles),
            owners=tuple(t.owner for t in tiles),
            resources=tuple(t.resources for t in tiles),
            empires=empires,
            buildings=tuple(t.building for t in tiles if t.building is not None),
            ships=tuple(state.ships),
            selected_tile=state.selected_tile,
            selected_ship=state.selected_ship,
            camera=(state.camera.x, state.camera.y, state.camera.zoom),
            land_tile_count=state.grid.land_tile_count,
        )

    def empire(self, empire_id: str) -> EmpireView | None:
        for e in self.empires:
            if e.empire_id == empire_id:
                return e
        return None
