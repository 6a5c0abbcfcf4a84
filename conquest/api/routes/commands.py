"""POST /api/v1/commands — queue a player command for the next tick."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from conquest.api.dependencies import get_game_manager
from conquest.api.game_manager import GameManager
from conquest.api.schemas import CommandRequest, ControlResponse
from conquest.core.commands import CommandError, parse_command

router = APIRouter()


@router.post("/commands", response_model=ControlResponse, status_code=202)
def submit_command(
    request: CommandRequest,
    manager: GameManager = Depends(get_game_manager),
) -> ControlResponse:
    try:
        command = parse_command(request.model_dump())
    except CommandError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    if not manager.submit(command):
        raise HTTPException(status_code=429, detail="Command queue is full; retry after the next tick.")
    return ControlResponse(status="queued", message=f"{command.type.value} queued.",
                           tick=manager.get_snapshot().tick)
