"""MapBuilder — hand-made maps and empires for deterministic tests.

Builds an all-land grid (optionally with water/coast cells), empires with
chosen resources, and claims tiles while keeping the ownership and
territory lists consistent.

Usage:
    mb = MapBuilder(20, 20, water=[(0, 0)])
    a = mb.add_empire("a", population=10, military_ratio=0.3)
    mb.claim(a, (10, 10))
    state = mb.state()
"""

from __future__ import annotations

import sys
import os
from typing import Iterable

sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", ".."))

from conquest.config import GameConfig
from conquest.core.enums import GamePhase, Terrain
from conquest.core.game_state import GameState
from conquest.core.grid import Grid
from conquest.core.models import Empire, Position, ResourceBundle, Tile


class MapBuilder:
    def __init__(
        self,
        width: int = 20,
        height: int = 20,
        water: Iterable[tuple[int, int]] = (),
        coast: Iterable[tuple[int, int]] = (),
        resources: int = 1,
    ) -> None:
        water = set(water)
        coast = set(coast)
        tiles: list[Tile] = []
        for y in range(height):
            for x in range(width):
                if (x, y) in water:
                    terrain = Terrain.WATER
                elif (x, y) in coast:
                    terrain = Terrain.COAST
                else:
                    terrain = Terrain.LAND
                tiles.append(Tile(
                    tile_id=y * width + x,
                    position=Position(x, y),
                    terrain=terrain,
                    resources=0 if terrain == Terrain.WATER else resources,
                ))
        self.grid = Grid(width, height, tiles)
        self.empires: list[Empire] = []
        self.config = GameConfig(map_width=width, map_height=height)

    def add_empire(
        self,
        empire_id: str,
        name: str | None = None,
        is_ai: bool = False,
        population: float = 10.0,
        max_population: float | None = None,
        military_ratio: float = 0.3,
        gold: float = 100.0,
        gold_per_second: float = 2.0,
        growth: float = 0.5,
        cooldown: float = 2.0,
        last_action_time: float = 0.0,
    ) -> Empire:
        resources = ResourceBundle(
            gold=gold, population=population,
            max_population=max_population if max_population is not None else max(population, 10.0),
            military_ratio=military_ratio,
            gold_per_second=gold_per_second, population_growth_rate=growth,
            base_gold_per_second=gold_per_second, base_population_growth_rate=growth,
        )
        empire = Empire(
            empire_id=empire_id, name=name or empire_id, color="#000000",
            is_ai=is_ai, resources=resources,
            last_action_time=last_action_time, action_cooldown=cooldown,
        )
        self.empires.append(empire)
        return empire

    def tile(self, x: int, y: int) -> Tile:
        t = self.grid.get_xy(x, y)
        assert t is not None, f"({x}, {y}) out of bounds"
        return t

    def claim(self, empire: Empire, *coords: tuple[int, int]) -> None:
        for x, y in coords:
            t = self.tile(x, y)
            if t.owner is not None:
                prev = next(e for e in self.empires if e.empire_id == t.owner)
                prev.territories.remove(t.tile_id)
            t.owner = empire.empire_id
            empire.territories.append(t.tile_id)

    def claim_rect(self, empire: Empire, x0: int, y0: int, x1: int, y1: int) -> None:
        """Claim every non-water tile in the inclusive rectangle."""
        for x in range(x0, x1 + 1):
            for y in range(y0, y1 + 1):
                if not self.tile(x, y).is_water:
                    self.claim(empire, (x, y))

    def state(self, now: float = 0.0) -> GameState:
        state = GameState(grid=self.grid, empires=self.empires, last_update_time=now)
        state.phase = GamePhase.PLAYING
        return state


def coords(grid: Grid, tile_ids: Iterable[int]) -> set[tuple[int, int]]:
    result = set()
    for tid in tile_ids:
        t = grid.by_id(tid)
        result.add((t.position.x, t.position.y))
    return result
