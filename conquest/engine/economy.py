"""Economy — per-empire resource accrual from territory and buildings."""

from __future__ import annotations

from types import MappingProxyType
from typing import TYPE_CHECKING, Mapping

from conquest.core.enums import BuildingKind

if TYPE_CHECKING:
    from conquest.config import GameConfig
    from conquest.core.grid import Grid
    from conquest.core.models import Empire

# Per building level: (gold/s, population growth/s)
BUILDING_YIELDS: Mapping[BuildingKind, tuple[float, float]] = MappingProxyType({
    BuildingKind.CITY: (0.5, 0.1),
    BuildingKind.FARM: (0.3, 0.2),
    BuildingKind.PORT: (0.4, 0.0),
    BuildingKind.DEFENSE: (0.0, 0.0),
})


class Economy:
    """Advances one empire's gold and population over simulated time."""

    __slots__ = ("_config",)

    def __init__(self, config: GameConfig) -> None:
        self._config = config

    def rates(self, empire: Empire, grid: Grid) -> tuple[float, float]:
        """Instantaneous (gold/s, population growth/s) for *empire*."""
        res = empire.resources
        gold_rate = res.base_gold_per_second
        growth_rate = res.base_population_growth_rate

        for tile_id in empire.territories:
            tile = grid.by_id(tile_id)
            if tile is not None and not tile.is_water:
                gold_rate += tile.resources * self._config.territory_gold_rate

        for building in empire.buildings:
            gold, growth = BUILDING_YIELDS.get(building.kind, (0.0, 0.0))
            gold_rate += gold * building.level
            growth_rate += growth * building.level

        return gold_rate, growth_rate

    def update(self, empire: Empire, grid: Grid, delta_time: float) -> None:
        """Accrue *delta_time* seconds of income; no-op when delta_time <= 0.

        Gold is floored at 0 and population clamped to [1, max_population].
        The computed rates are stored back on the empire for readers.
        """
        if delta_time <= 0:
            return

        gold_rate, growth_rate = self.rates(empire, grid)
        res = empire.resources
        res.gold = max(0.0, res.gold + gold_rate * delta_time)
        res.population = min(res.max_population, max(1.0, res.population + growth_rate * delta_time))
        res.gold_per_second = gold_rate
        res.population_growth_rate = growth_rate
