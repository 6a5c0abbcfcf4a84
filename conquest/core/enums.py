"""Enumerations used throughout the engine."""

from __future__ import annotations

from enum import Enum, IntEnum, unique


@unique
class Terrain(IntEnum):
    """Static terrain classification of a tile."""

    LAND = 0
    WATER = 1
    COAST = 2

    @property
    def label(self) -> str:
        return self.name.lower()


@unique
class BuildingKind(str, Enum):
    """Buildings an empire can construct on its own land."""

    CITY = "city"
    FARM = "farm"
    DEFENSE = "defense"
    PORT = "port"


@unique
class ShipKind(str, Enum):
    TRADE = "trade"
    MILITARY = "military"


@unique
class GamePhase(str, Enum):
    """Lifecycle of a game: setup -> playing -> ended (terminal)."""

    SETUP = "setup"
    PLAYING = "playing"
    ENDED = "ended"


@unique
class Domain(IntEnum):
    """RNG domains for deterministic randomness isolation."""

    MAP_GEN = 0
    AI_EXPANSION = 1
    AI_AGGRESSION = 2
    AI_BUILD_SITE = 3
    AI_BUILD_KIND = 4
