"""Area capture — the only way tile ownership changes after seeding.

An empire can only push its border outward: a tile is capturable when it
is land or coast, not already the empire's, and touches (8-neighbourhood)
a land/coast tile the empire owns. A capture action centred on such a tile
takes a batch of nearby tiles whose size scales with military population.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Collection

if TYPE_CHECKING:
    from conquest.config import GameConfig
    from conquest.core.game_state import GameState
    from conquest.core.grid import Grid
    from conquest.core.models import Empire, Tile

logger = logging.getLogger(__name__)


def can_capture(
    tile: Tile,
    empire: Empire,
    grid: Grid,
    pending: Collection[int] = (),
) -> bool:
    """Return True if *empire* may take *tile*.

    Tiles in *pending* count as owned by *empire*; this lets a batch grow
    outward through tiles captured earlier in the same batch.
    """
    if tile.is_water:
        return False
    if tile.owner == empire.empire_id:
        return False
    for adj in grid.neighbors(tile.position, 1):
        if adj.is_water:
            continue
        if adj.owner == empire.empire_id or adj.tile_id in pending:
            return True
    return False


class CaptureResolver:
    """Decides and applies area captures."""

    __slots__ = ("_config",)

    def __init__(self, config: GameConfig) -> None:
        self._config = config

    can_capture = staticmethod(can_capture)

    def capture_radius(self, military_pop: int) -> int:
        for limit, radius in self._config.capture_radius_thresholds:
            if military_pop <= limit:
                return radius
        return self._config.capture_radius_max

    def max_captures(self, military_pop: int, candidate_count: int) -> int:
        cfg = self._config
        return min(military_pop // cfg.capture_tiles_per_soldier, candidate_count, cfg.capture_max_tiles)

    def capture_area(self, center: Tile, empire: Empire, grid: Grid) -> list[Tile]:
        """Return the tiles *empire* would take by attacking *center*.

        Candidates are the non-water tiles within the capture radius that
        the empire does not own, ordered by Manhattan distance to the centre
        (stable, so ties keep enumeration order). The first ``max_captures``
        candidates are each re-validated in that order before inclusion.
        Nothing is mutated.
        """
        if not can_capture(center, empire, grid):
            return []

        military_pop = empire.resources.military_population
        radius = self.capture_radius(military_pop)
        candidates = [
            t for t in grid.neighbors(center.position, radius)
            if not t.is_water and t.owner != empire.empire_id
        ]
        candidates.sort(key=lambda t: t.position.manhattan(center.position))
        limit = self.max_captures(military_pop, len(candidates))

        captured: list[Tile] = []
        batch: set[int] = set()
        for tile in candidates[:limit]:
            if can_capture(tile, empire, grid, batch):
                captured.append(tile)
                batch.add(tile.tile_id)
        return captured

    @staticmethod
    def apply_capture(state: GameState, empire: Empire, tiles: list[Tile]) -> int:
        """Transfer *tiles* to *empire* and charge attrition.

        *state*, *empire* and *tiles* must all belong to the same (already
        copied) GameState. Returns the population lost, 0 if nothing moved.
        """
        if not tiles:
            return 0
        for tile in tiles:
            if tile.owner is not None:
                previous = state.empire(tile.owner)
                if previous is not None:
                    previous.territories = [tid for tid in previous.territories if tid != tile.tile_id]
            tile.owner = empire.empire_id
            empire.territories.append(tile.tile_id)

        losses = max(1, len(tiles) // 2)
        res = empire.resources
        res.population = max(1.0, res.population - losses)
        logger.info(
            "%s captured %d tile(s) around %s (losses=%d, population=%.1f)",
            empire.name, len(tiles), tiles[0].position, losses, res.population,
        )
        return losses
