"""GET /api/v1/map — static terrain data (fetch once)."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from conquest.api.dependencies import get_game_manager
from conquest.api.game_manager import GameManager
from conquest.api.schemas import MapResponse

router = APIRouter()


def rle_encode(values: list[int]) -> list[int]:
    """Run-length encode as [value, count, value, count, ...]."""
    rle: list[int] = []
    if not values:
        return rle
    cur_val = values[0]
    cur_count = 1
    for v in values[1:]:
        if v == cur_val:
            cur_count += 1
        else:
            rle.append(cur_val)
            rle.append(cur_count)
            cur_val = v
            cur_count = 1
    rle.append(cur_val)
    rle.append(cur_count)
    return rle


@router.get("/map", response_model=MapResponse)
def get_map(manager: GameManager = Depends(get_game_manager)) -> MapResponse:
    snap = manager.get_snapshot()
    return MapResponse(
        width=snap.width,
        height=snap.height,
        grid=rle_encode([int(t) for t in snap.terrain]),
        resources=list(snap.resources),
    )
