"""Grid / map system."""

from __future__ import annotations

from typing import TYPE_CHECKING, Iterator

from conquest.core.enums import Domain, Terrain
from conquest.core.models import Position, Tile
from conquest.systems.terrain import classify

if TYPE_CHECKING:
    from conquest.systems.rng import DeterministicRNG

MIN_TILE_RESOURCES = 1
MAX_TILE_RESOURCES = 3


class Grid:
    """2D tile lattice backed by a flat list indexed by ``y * width + x``.

    A tile's id is its index, so id lookups and coordinate lookups are
    both O(1) without any string keys.
    """

    __slots__ = ("width", "height", "_tiles", "_land_count")

    def __init__(self, width: int, height: int, tiles: list[Tile]) -> None:
        if len(tiles) != width * height:
            raise ValueError(f"expected {width * height} tiles, got {len(tiles)}")
        self.width = width
        self.height = height
        self._tiles: list[Tile] = tiles
        self._land_count = sum(1 for t in tiles if not t.is_water)

    @classmethod
    def generate(cls, width: int, height: int, rng: DeterministicRNG) -> Grid:
        """Build a fresh, unowned map.

        Terrain depends only on (width, height); resource yields on land and
        coast come from the MAP_GEN RNG domain keyed by coordinates.
        """
        tiles: list[Tile] = []
        for y in range(height):
            for x in range(width):
                terrain = classify(x, y, width, height)
                resources = 0
                if terrain != Terrain.WATER:
                    resources = rng.next_int(
                        Domain.MAP_GEN, x, y, MIN_TILE_RESOURCES, MAX_TILE_RESOURCES)
                tiles.append(Tile(
                    tile_id=y * width + x,
                    position=Position(x, y),
                    terrain=terrain,
                    resources=resources,
                ))
        return cls(width, height, tiles)

    # -- access --

    def get_xy(self, x: int, y: int) -> Tile | None:
        if 0 <= x < self.width and 0 <= y < self.height:
            return self._tiles[y * self.width + x]
        return None

    def get(self, pos: Position) -> Tile | None:
        return self.get_xy(pos.x, pos.y)

    def by_id(self, tile_id: int) -> Tile | None:
        if isinstance(tile_id, int) and 0 <= tile_id < len(self._tiles):
            return self._tiles[tile_id]
        return None

    def __iter__(self) -> Iterator[Tile]:
        return iter(self._tiles)

    def __len__(self) -> int:
        return len(self._tiles)

    @property
    def land_tile_count(self) -> int:
        """Number of non-water tiles (terrain never changes after generation)."""
        return self._land_count

    # -- neighbourhood --

    def neighbors(self, pos: Position, radius: int = 1) -> list[Tile]:
        """All tiles within a square (Chebyshev) *radius* of *pos*, centre included.

        Enumerated column by column (dx outer, dy inner); out-of-bounds
        coordinates are skipped.
        """
        result: list[Tile] = []
        for dx in range(-radius, radius + 1):
            for dy in range(-radius, radius + 1):
                tile = self.get_xy(pos.x + dx, pos.y + dy)
                if tile is not None:
                    result.append(tile)
        return result

    # -- copy --

    def copy(self) -> Grid:
        new = Grid.__new__(Grid)
        new.width = self.width
        new.height = self.height
        new._tiles = [t.copy() for t in self._tiles]
        new._land_count = self._land_count
        return new
