"""Procedural terrain classification.

Water placement is a fixed function of the coordinates and map size, with no
randomness, so a map of a given size always has the same coastline:

  - an "inland sea" rectangle south of the map centre
  - a "northern sea" rectangle north of the map centre
  - a western ocean strip (x < 5)
  - scattered lakes and islands where sin(0.1x)*cos(0.1y) > 0.7
"""

from __future__ import annotations

import math

from conquest.core.enums import Terrain

WESTERN_OCEAN_WIDTH = 5
LAKE_NOISE_THRESHOLD = 0.7


def is_water(x: int, y: int, width: int, height: int) -> bool:
    """Return True if (x, y) is water on a *width* x *height* map.

    Also defined for coordinates outside the map, which the coast test
    relies on at the borders.
    """
    center_x = width / 2
    center_y = height / 2

    # Inland sea
    if center_y + 10 < y < center_y + 25 and center_x - 20 < x < center_x + 20:
        return True

    # Northern sea
    if y < center_y - 15 and center_x - 10 < x < center_x + 15:
        return True

    if x < WESTERN_OCEAN_WIDTH:
        return True

    return math.sin(x * 0.1) * math.cos(y * 0.1) > LAKE_NOISE_THRESHOLD


def has_adjacent_water(x: int, y: int, width: int, height: int) -> bool:
    """Check the 8-neighbourhood of (x, y) for water."""
    for dx in (-1, 0, 1):
        for dy in (-1, 0, 1):
            if dx == 0 and dy == 0:
                continue
            if is_water(x + dx, y + dy, width, height):
                return True
    return False


def classify(x: int, y: int, width: int, height: int) -> Terrain:
    if is_water(x, y, width, height):
        return Terrain.WATER
    if has_adjacent_water(x, y, width, height):
        return Terrain.COAST
    return Terrain.LAND
