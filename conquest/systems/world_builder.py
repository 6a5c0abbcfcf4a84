"""Fresh game generation: map, empires and their starting territories."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Sequence

from conquest.core.enums import BuildingKind, GamePhase
from conquest.core.game_state import GameState
from conquest.core.grid import Grid
from conquest.core.models import Building
from conquest.core.roster import DEFAULT_ROSTER, EmpireTemplate, fallback_start

if TYPE_CHECKING:
    from conquest.config import GameConfig
    from conquest.core.models import Empire, Position
    from conquest.systems.rng import DeterministicRNG

logger = logging.getLogger(__name__)

START_RADIUS = 2


def _seed_empire(empire: Empire, start: Position, grid: Grid, config: GameConfig) -> None:
    """Claim the free land around *start* and found a capital on it."""
    for tile in grid.neighbors(start, START_RADIUS):
        if tile.is_water or tile.owner is not None:
            continue
        tile.owner = empire.empire_id
        empire.territories.append(tile.tile_id)

    center = grid.get(start)
    if center is None or center.is_water or center.owner != empire.empire_id or center.building is not None:
        logger.info("%s starts without a capital (start %s unusable)", empire.name, start)
        return

    capital = Building(
        building_id=f"city-{empire.empire_id}-start",
        kind=BuildingKind.CITY,
        position=start,
        owner=empire.empire_id,
        level=1,
        health=config.building_health,
        max_health=config.building_health,
    )
    center.building = capital
    empire.buildings.append(capital)
    empire.resources.max_population += config.city_population_bonus


def new_game_state(
    config: GameConfig,
    rng: DeterministicRNG,
    now: float,
    roster: Sequence[EmpireTemplate] = DEFAULT_ROSTER,
) -> GameState:
    """Generate the map and seed every empire; the game starts in PLAYING."""
    grid = Grid.generate(config.map_width, config.map_height, rng)
    empires = [t.build() for t in roster]
    state = GameState(grid=grid, empires=empires, last_update_time=now)

    for index, (template, empire) in enumerate(zip(roster, empires)):
        start = template.start if template.start is not None else fallback_start(index)
        _seed_empire(empire, start, grid, config)

    state.phase = GamePhase.PLAYING
    logger.info(
        "New game: %dx%d map, %d land tiles, %d empires (seed=%d)",
        grid.width, grid.height, grid.land_tile_count, len(empires), rng.seed,
    )
    return state
