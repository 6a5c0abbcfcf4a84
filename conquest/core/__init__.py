"""Core data models and game state representation."""

from conquest.core.enums import BuildingKind, Domain, GamePhase, ShipKind, Terrain
from conquest.core.models import Building, Camera, Empire, Position, ResourceBundle, Ship, Tile
from conquest.core.grid import Grid
from conquest.core.game_state import GameState
from conquest.core.snapshot import EmpireView, Snapshot

__all__ = [
    "Building",
    "BuildingKind",
    "Camera",
    "Domain",
    "Empire",
    "EmpireView",
    "GamePhase",
    "GameState",
    "Grid",
    "Position",
    "ResourceBundle",
    "Ship",
    "ShipKind",
    "Snapshot",
    "Terrain",
    "Tile",
]
