"""Game configuration with sensible defaults."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class GameConfig:
    """Immutable configuration for one game instance."""

    # World
    world_seed: int = 42
    map_width: int = 80
    map_height: int = 60

    # Timing
    min_tick_delta: float = 0.1            # simulated seconds; smaller deltas are deferred
    tick_interval: float = 0.1             # wall-clock seconds between manager ticks

    # Game speed (SET_SPEED is clamped to this range)
    min_game_speed: float = 0.5
    max_game_speed: float = 8.0

    # Economy
    territory_gold_rate: float = 0.1       # gold/s per resource point of owned land
    city_population_bonus: int = 20        # maxPopulation granted by each new city

    # Capture
    # (max_military_pop, radius) pairs checked in order; above the last -> capture_radius_max
    capture_radius_thresholds: tuple = ((15, 1), (30, 2))
    capture_radius_max: int = 3
    capture_tiles_per_soldier: int = 3     # one tile per N military population
    capture_max_tiles: int = 8

    # Buildings
    building_health: int = 100

    # Input
    command_queue_size: int = 256          # pending commands beyond this are dropped

    # Persistence
    snapshot_file: str = "savegame.json"
    autosave: bool = True

    # Logging
    log_level: str = "INFO"
