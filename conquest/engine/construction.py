"""Building placement rules, costs and construction."""

from __future__ import annotations

import logging
from types import MappingProxyType
from typing import TYPE_CHECKING, Mapping

from conquest.core.enums import BuildingKind, Terrain
from conquest.core.models import Building

if TYPE_CHECKING:
    from conquest.config import GameConfig
    from conquest.core.models import Empire, Tile

logger = logging.getLogger(__name__)

BUILDING_COSTS: Mapping[BuildingKind, int] = MappingProxyType({
    BuildingKind.CITY: 50,
    BuildingKind.FARM: 20,
    BuildingKind.DEFENSE: 30,
    BuildingKind.PORT: 40,
})


def _as_kind(kind: BuildingKind | str) -> BuildingKind | None:
    try:
        return BuildingKind(kind)
    except ValueError:
        return None


def building_cost(kind: BuildingKind | str) -> int:
    """Gold cost of *kind*; 0 for unrecognised kinds."""
    k = _as_kind(kind)
    return BUILDING_COSTS[k] if k is not None else 0


def can_build_on(tile: Tile | None, kind: BuildingKind | str, empire: Empire | None) -> bool:
    """Terrain and ownership legality, ignoring cost.

    Ports need a coast tile; every other kind accepts land or coast.
    Water never accepts a building.
    """
    if tile is None or empire is None:
        return False
    k = _as_kind(kind)
    if k is None:
        return False
    if tile.owner != empire.empire_id or tile.building is not None:
        return False
    if tile.terrain == Terrain.WATER:
        return False
    if k == BuildingKind.PORT:
        return tile.terrain == Terrain.COAST
    return tile.terrain in (Terrain.LAND, Terrain.COAST)


def construct(empire: Empire, tile: Tile, kind: BuildingKind, config: GameConfig) -> Building:
    """Place a level-1 building unconditionally and charge for it.

    Callers are expected to have checked ``can_build_on`` and affordability.
    """
    building = Building(
        building_id=f"{kind.value}-{empire.empire_id}-{tile.tile_id}",
        kind=kind,
        position=tile.position,
        owner=empire.empire_id,
        level=1,
        health=config.building_health,
        max_health=config.building_health,
    )
    tile.building = building
    empire.buildings.append(building)
    empire.resources.gold = max(0.0, empire.resources.gold - BUILDING_COSTS[kind])
    if kind == BuildingKind.CITY:
        empire.resources.max_population += config.city_population_bonus
    return building


def try_build(empire: Empire, tile: Tile | None, kind: BuildingKind | str, config: GameConfig) -> Building | None:
    """Construct if legal and affordable; return the new building or None."""
    k = _as_kind(kind)
    if k is None:
        logger.debug("Build rejected for %s: unknown building type %r", empire.empire_id, kind)
        return None
    if not can_build_on(tile, k, empire):
        logger.debug("Build rejected for %s: %s not allowed on tile %s",
                     empire.empire_id, k.value, tile.tile_id if tile else None)
        return None
    cost = BUILDING_COSTS[k]
    if empire.resources.gold < cost:
        logger.debug("Build rejected for %s: %s costs %d, has %.1f gold",
                     empire.empire_id, k.value, cost, empire.resources.gold)
        return None
    return construct(empire, tile, k, config)
