"""GET /api/v1/config — expose game configuration."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from conquest.api.dependencies import get_game_manager
from conquest.api.game_manager import GameManager
from conquest.api.schemas import GameConfigResponse

router = APIRouter()


@router.get("/config", response_model=GameConfigResponse)
def get_config(manager: GameManager = Depends(get_game_manager)) -> GameConfigResponse:
    cfg = manager.config
    return GameConfigResponse(
        world_seed=cfg.world_seed,
        map_width=cfg.map_width,
        map_height=cfg.map_height,
        min_tick_delta=cfg.min_tick_delta,
        tick_interval=cfg.tick_interval,
        min_game_speed=cfg.min_game_speed,
        max_game_speed=cfg.max_game_speed,
        snapshot_file=str(manager.save_path),
        autosave=cfg.autosave,
    )
