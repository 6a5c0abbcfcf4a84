"""AI personalities — data-driven expansion and building policy per empire.

Personalities are looked up by empire name so new AI empires can be added
without touching the decision engine. Unknown names fall back to the
Roman Empire profile.
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping

from conquest.core.enums import BuildingKind


@dataclass(frozen=True, slots=True)
class Personality:
    """Fixed parameter set governing one AI empire."""

    aggressiveness: float            # probability of acting on an expansion opportunity
    min_military_for_expansion: int  # military population must exceed this
    min_population_for_expansion: int
    min_gold_for_building: float     # gold must exceed this before building
    preferred_building: BuildingKind
    city_preference: float
    port_preference: float           # only rolled on coast tiles
    defense_preference: float


DEFAULT_PERSONALITY_NAME = "Roman Empire"

PERSONALITIES: Mapping[str, Personality] = MappingProxyType({
    "Roman Empire": Personality(
        aggressiveness=0.8,
        min_military_for_expansion=8, min_population_for_expansion=8,
        min_gold_for_building=25, preferred_building=BuildingKind.CITY,
        city_preference=0.4, port_preference=0.3, defense_preference=0.2,
    ),
    "Byzantine Empire": Personality(
        aggressiveness=0.6,
        min_military_for_expansion=6, min_population_for_expansion=6,
        min_gold_for_building=30, preferred_building=BuildingKind.DEFENSE,
        city_preference=0.3, port_preference=0.4, defense_preference=0.4,
    ),
    "Holy Roman Empire": Personality(
        aggressiveness=0.7,
        min_military_for_expansion=10, min_population_for_expansion=10,
        min_gold_for_building=35, preferred_building=BuildingKind.CITY,
        city_preference=0.5, port_preference=0.2, defense_preference=0.3,
    ),
    "French Kingdom": Personality(
        aggressiveness=0.75,
        min_military_for_expansion=7, min_population_for_expansion=7,
        min_gold_for_building=28, preferred_building=BuildingKind.FARM,
        city_preference=0.35, port_preference=0.25, defense_preference=0.25,
    ),
    "English Kingdom": Personality(
        aggressiveness=0.5,
        min_military_for_expansion=5, min_population_for_expansion=8,
        min_gold_for_building=40, preferred_building=BuildingKind.PORT,
        city_preference=0.3, port_preference=0.5, defense_preference=0.2,
    ),
    "Viking Clans": Personality(
        aggressiveness=0.9,
        min_military_for_expansion=4, min_population_for_expansion=4,
        min_gold_for_building=20, preferred_building=BuildingKind.PORT,
        city_preference=0.2, port_preference=0.6, defense_preference=0.1,
    ),
})


def personality_for(name: str, table: Mapping[str, Personality] = PERSONALITIES) -> Personality:
    """Return the profile for *name*, defaulting to the Roman Empire's."""
    profile = table.get(name)
    if profile is None:
        profile = table.get(DEFAULT_PERSONALITY_NAME, PERSONALITIES[DEFAULT_PERSONALITY_NAME])
    return profile
