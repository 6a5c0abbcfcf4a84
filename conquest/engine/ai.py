"""AIDecisionEngine — personality-driven turns for non-human empires.

One turn, at most once per action cooldown:
  1. Expansion: pick a random capturable border tile and, with probability
     ``aggressiveness``, run an area capture on it.
  2. Building: if gold exceeds the personality's threshold, pick a random
     unbuilt owned tile and try to put a building on it.

The turn timestamp is stamped whenever the cooldown allows a turn, even if
neither step fires.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Mapping

from conquest.core.enums import BuildingKind, Domain, Terrain
from conquest.core.personality import PERSONALITIES, Personality, personality_for
from conquest.engine.capture import CaptureResolver, can_capture
from conquest.engine.construction import try_build

if TYPE_CHECKING:
    from conquest.config import GameConfig
    from conquest.core.game_state import GameState
    from conquest.core.models import Building, Empire, Tile
    from conquest.systems.rng import DeterministicRNG

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class TurnResult:
    """What an AI turn did; ``taken`` is False when the cooldown blocked it."""

    taken: bool = False
    captured: list[int] | None = None
    built: Building | None = None


class AIDecisionEngine:
    """Stateless decision engine; all randomness comes from the shared RNG."""

    __slots__ = ("_config", "_rng", "_resolver", "_personalities")

    def __init__(
        self,
        config: GameConfig,
        rng: DeterministicRNG,
        resolver: CaptureResolver | None = None,
        personalities: Mapping[str, Personality] | None = None,
    ) -> None:
        self._config = config
        self._rng = rng
        self._resolver = resolver or CaptureResolver(config)
        self._personalities = personalities if personalities is not None else PERSONALITIES

    def personality(self, empire: Empire) -> Personality:
        return personality_for(empire.name, self._personalities)

    def expansion_targets(self, empire: Empire, state: GameState) -> list[Tile]:
        """Distinct capturable tiles bordering *empire*, in discovery order."""
        grid = state.grid
        seen: dict[int, Tile] = {}
        for tid in empire.territories:
            owned = grid.by_id(tid)
            if owned is None or owned.is_water:
                continue
            for adj in grid.neighbors(owned.position, 1):
                if adj.tile_id not in seen and can_capture(adj, empire, grid):
                    seen[adj.tile_id] = adj
        return list(seen.values())

    def take_turn(self, state: GameState, empire: Empire, now: float) -> TurnResult:
        """Run one turn for *empire*, mutating *state* in place.

        *state* must be a private copy owned by the caller.
        """
        if not empire.cooldown_ready(now):
            return TurnResult()

        empire.last_action_time = now
        result = TurnResult(taken=True)
        profile = self.personality(empire)
        key = state.empire_index(empire.empire_id)
        counter = state.tick

        result.captured = self._expand(state, empire, profile, key, counter)
        result.built = self._build(state, empire, profile, key, counter)

        if not result.captured and result.built is None:
            logger.debug("AI %s: idle turn at t=%.2f", empire.name, now)
        return result

    # -- steps --

    def _expand(self, state: GameState, empire: Empire, profile: Personality,
                key: int, counter: int) -> list[int] | None:
        targets = self.expansion_targets(empire, state)
        res = empire.resources
        if not targets:
            return None
        if res.military_population <= profile.min_military_for_expansion:
            return None
        if res.population <= profile.min_population_for_expansion:
            return None

        target = self._rng.choice(Domain.AI_EXPANSION, key, counter, targets)
        if not self._rng.next_bool(Domain.AI_AGGRESSION, key, counter, profile.aggressiveness):
            return None

        tiles = self._resolver.capture_area(target, empire, state.grid)
        if not tiles:
            return None
        self._resolver.apply_capture(state, empire, tiles)
        return [t.tile_id for t in tiles]

    def _build(self, state: GameState, empire: Empire, profile: Personality,
               key: int, counter: int) -> Building | None:
        if empire.resources.gold <= profile.min_gold_for_building:
            return None

        sites = []
        for tid in empire.territories:
            tile = state.grid.by_id(tid)
            if tile is not None and tile.building is None and not tile.is_water:
                sites.append(tile)
        if not sites:
            return None

        tile = self._rng.choice(Domain.AI_BUILD_SITE, key, counter, sites)
        kind = self._choose_kind(tile, profile, key, counter)
        building = try_build(empire, tile, kind, self._config)
        if building is not None:
            logger.info("AI %s built %s at %s", empire.name, kind.value, tile.position)
        return building

    def _choose_kind(self, tile: Tile, profile: Personality, key: int, counter: int) -> BuildingKind:
        rng = self._rng
        if tile.terrain == Terrain.COAST and rng.next_float(Domain.AI_BUILD_KIND, key, counter) < profile.port_preference:
            return BuildingKind.PORT
        if rng.next_float(Domain.AI_BUILD_KIND, key, counter + 1_000_000) < profile.city_preference:
            return BuildingKind.CITY
        if rng.next_float(Domain.AI_BUILD_KIND, key, counter + 2_000_000) < profile.defense_preference:
            return BuildingKind.DEFENSE
        return profile.preferred_building
