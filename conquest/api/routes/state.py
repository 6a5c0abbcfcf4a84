"""GET /api/v1/state, /events — dynamic game data (polled by the renderer)."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from conquest.api.dependencies import get_game_manager
from conquest.api.game_manager import GameManager
from conquest.api.schemas import (
    BuildingSchema,
    CameraSchema,
    EmpireSchema,
    EventSchema,
    GameStateResponse,
    ShipSchema,
)

router = APIRouter()


@router.get("/state", response_model=GameStateResponse)
def get_state(manager: GameManager = Depends(get_game_manager)) -> GameStateResponse:
    snap = manager.get_snapshot()
    cam_x, cam_y, zoom = snap.camera
    return GameStateResponse(
        tick=snap.tick,
        game_time=snap.game_time,
        phase=snap.phase.value,
        winner=snap.winner,
        paused=snap.paused,
        game_speed=snap.game_speed,
        width=snap.width,
        height=snap.height,
        land_tile_count=snap.land_tile_count,
        owners=list(snap.owners),
        empires=[
            EmpireSchema(
                id=e.empire_id, name=e.name, color=e.color, is_ai=e.is_ai,
                gold=round(e.gold, 2), population=round(e.population, 2),
                max_population=e.max_population, military_ratio=e.military_ratio,
                gold_per_second=round(e.gold_per_second, 3),
                population_growth_rate=round(e.population_growth_rate, 3),
                territory_count=e.territory_count, building_count=e.building_count,
                action_cooldown=e.action_cooldown, last_action_time=e.last_action_time,
            )
            for e in snap.empires
        ],
        buildings=[
            BuildingSchema(
                id=b.building_id, type=b.kind.value, level=b.level,
                x=b.position.x, y=b.position.y, owner=b.owner,
                health=b.health, max_health=b.max_health,
            )
            for b in snap.buildings
        ],
        ships=[
            ShipSchema(
                id=s.ship_id, type=s.kind.value, x=s.position.x, y=s.position.y,
                owner=s.owner, health=s.health, is_moving=s.moving,
            )
            for s in snap.ships
        ],
        selected_tile=snap.selected_tile,
        selected_ship=snap.selected_ship,
        camera=CameraSchema(x=cam_x, y=cam_y, zoom=zoom),
    )


@router.get("/events", response_model=list[EventSchema])
def get_events(
    since_tick: int | None = Query(None, ge=0, description="Return events from this tick on"),
    empire_id: str | None = Query(None, description="Only events involving this empire"),
    limit: int = Query(50, ge=1, le=500),
    manager: GameManager = Depends(get_game_manager),
) -> list[EventSchema]:
    log = manager.event_log
    if empire_id is not None:
        events = log.for_empire(empire_id, since_tick or 0)[-limit:]
    elif since_tick is not None:
        events = log.since_tick(since_tick)[-limit:]
    else:
        events = log.latest(limit)
    return [
        EventSchema(tick=e.tick, category=e.category, message=e.message, empire_ids=list(e.empire_ids))
        for e in events
    ]
