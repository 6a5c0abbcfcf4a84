"""POST /api/v1/control/{action} — game lifecycle controls."""

from __future__ import annotations

from enum import Enum

from fastapi import APIRouter, Depends

from conquest.api.dependencies import get_game_manager
from conquest.api.game_manager import GameManager
from conquest.api.schemas import ControlResponse

router = APIRouter()


class ControlAction(str, Enum):
    pause = "pause"
    resume = "resume"
    reset = "reset"
    save = "save"


@router.post("/control/{action}", response_model=ControlResponse)
def control(
    action: ControlAction,
    manager: GameManager = Depends(get_game_manager),
) -> ControlResponse:
    tick = manager.get_snapshot().tick

    match action:
        case ControlAction.pause:
            if not manager.set_paused(True):
                return ControlResponse(status="noop", message="Already paused.", tick=tick)
            return ControlResponse(status="ok", message="Game paused.", tick=tick)

        case ControlAction.resume:
            if not manager.set_paused(False):
                return ControlResponse(status="noop", message="Not paused.", tick=tick)
            return ControlResponse(status="ok", message="Game resumed.", tick=tick)

        case ControlAction.reset:
            manager.reset()
            return ControlResponse(status="ok", message="Game reset.", tick=manager.get_snapshot().tick)

        case ControlAction.save:
            path = manager.save()
            return ControlResponse(status="ok", message=f"Game saved to {path}.", tick=tick)
