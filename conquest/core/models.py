"""Core data models: Position, Tile, Building, Ship, Empire."""

from __future__ import annotations

from dataclasses import dataclass, field

from conquest.core.enums import BuildingKind, ShipKind, Terrain


@dataclass(frozen=True, slots=True)
class Position:
    """Immutable 2D integer grid coordinate."""

    x: int = 0
    y: int = 0

    def manhattan(self, other: Position) -> int:
        return abs(self.x - other.x) + abs(self.y - other.y)

    def __repr__(self) -> str:
        return f"({self.x}, {self.y})"


@dataclass(frozen=True, slots=True)
class Building:
    """A structure on a single tile.

    Buildings never change after construction, so tiles and empires may
    share the same instance across state copies.
    """

    building_id: str
    kind: BuildingKind
    position: Position
    owner: str
    level: int = 1
    health: int = 100
    max_health: int = 100


@dataclass(frozen=True, slots=True)
class Ship:
    """Naval unit. Carried in the state but not advanced by the tick."""

    ship_id: str
    kind: ShipKind
    position: Position
    owner: str
    health: int = 100
    max_health: int = 100
    cargo: int | None = None
    destination: Position | None = None
    moving: bool = False


@dataclass(slots=True)
class Tile:
    """One cell of the map."""

    tile_id: int
    position: Position
    terrain: Terrain
    owner: str | None = None
    resources: int = 0
    building: Building | None = None
    visible: bool = True

    @property
    def is_water(self) -> bool:
        return self.terrain == Terrain.WATER

    def copy(self) -> Tile:
        return Tile(
            tile_id=self.tile_id, position=self.position, terrain=self.terrain,
            owner=self.owner, resources=self.resources,
            building=self.building, visible=self.visible,
        )


@dataclass(slots=True)
class ResourceBundle:
    """Mutable economy of one empire.

    ``gold_per_second`` and ``population_growth_rate`` hold the rates last
    computed by the economy; the ``base_*`` fields are the flat rates they
    are computed from.
    """

    gold: float = 100.0
    population: float = 10.0
    max_population: float = 10.0
    military_ratio: float = 0.3
    gold_per_second: float = 2.0
    population_growth_rate: float = 0.5
    base_gold_per_second: float = 2.0
    base_population_growth_rate: float = 0.5

    @property
    def military_population(self) -> int:
        return int(self.population * self.military_ratio)

    def copy(self) -> ResourceBundle:
        return ResourceBundle(
            gold=self.gold, population=self.population,
            max_population=self.max_population, military_ratio=self.military_ratio,
            gold_per_second=self.gold_per_second,
            population_growth_rate=self.population_growth_rate,
            base_gold_per_second=self.base_gold_per_second,
            base_population_growth_rate=self.base_population_growth_rate,
        )


@dataclass(slots=True)
class Empire:
    """A player, human or AI.

    ``territories`` lists the ids of exactly the tiles whose owner is this
    empire, without duplicates.
    """

    empire_id: str
    name: str
    color: str
    is_ai: bool
    resources: ResourceBundle = field(default_factory=ResourceBundle)
    last_action_time: float = 0.0
    action_cooldown: float = 2.0
    territories: list[int] = field(default_factory=list)
    buildings: list[Building] = field(default_factory=list)
    ships: list[Ship] = field(default_factory=list)

    def cooldown_ready(self, now: float) -> bool:
        return now - self.last_action_time >= self.action_cooldown

    def copy(self) -> Empire:
        return Empire(
            empire_id=self.empire_id, name=self.name, color=self.color,
            is_ai=self.is_ai, resources=self.resources.copy(),
            last_action_time=self.last_action_time,
            action_cooldown=self.action_cooldown,
            territories=list(self.territories),
            buildings=list(self.buildings),
            ships=list(self.ships),
        )


@dataclass(slots=True)
class Camera:
    """Viewport of the renderer; persisted with the game but never simulated."""

    x: float = 0.0
    y: float = 0.0
    zoom: float = 1.0

    def copy(self) -> Camera:
        return Camera(self.x, self.y, self.zoom)
