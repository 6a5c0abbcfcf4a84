"""Commands — the discrete player intents fed to the Simulation.

Each variant is a frozen dataclass tagged with the acting empire. The
Simulation matches on the concrete class; anything else is rejected.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum, unique
from typing import Any, Union

from conquest.core.enums import BuildingKind


class CommandError(ValueError):
    """Raised when an external payload cannot be turned into a Command."""


@unique
class CommandType(str, Enum):
    SELECT_TILE = "SELECT_TILE"
    CAPTURE_TILE = "CAPTURE_TILE"
    BUILD = "BUILD"
    PAUSE_GAME = "PAUSE_GAME"
    SET_SPEED = "SET_SPEED"


@dataclass(frozen=True, slots=True)
class SelectTile:
    empire_id: str
    tile_id: int
    type = CommandType.SELECT_TILE


@dataclass(frozen=True, slots=True)
class CaptureTile:
    empire_id: str
    tile_id: int
    type = CommandType.CAPTURE_TILE


@dataclass(frozen=True, slots=True)
class Build:
    empire_id: str
    tile_id: int
    building: BuildingKind
    type = CommandType.BUILD


@dataclass(frozen=True, slots=True)
class PauseGame:
    empire_id: str
    type = CommandType.PAUSE_GAME


@dataclass(frozen=True, slots=True)
class SetSpeed:
    empire_id: str
    speed: float
    type = CommandType.SET_SPEED


Command = Union[SelectTile, CaptureTile, Build, PauseGame, SetSpeed]


def _require(payload: dict[str, Any], key: str) -> Any:
    if key not in payload:
        raise CommandError(f"missing field {key!r}")
    return payload[key]


def _tile_id(payload: dict[str, Any]) -> int:
    raw = _require(payload, "tile_id")
    if isinstance(raw, bool) or not isinstance(raw, int):
        raise CommandError(f"tile_id must be an integer, got {raw!r}")
    return raw


def parse_command(data: dict[str, Any]) -> Command:
    """Build a Command from ``{"type", "empire_id", "payload"}``.

    Raises CommandError for unknown types or malformed payloads. Ids are
    not resolved here; that happens when the Simulation applies it.
    """
    try:
        ctype = CommandType(_require(data, "type"))
    except ValueError as exc:
        if isinstance(exc, CommandError):
            raise
        raise CommandError(f"unknown command type {data.get('type')!r}") from exc

    empire_id = _require(data, "empire_id")
    if not isinstance(empire_id, str):
        raise CommandError("empire_id must be a string")
    payload = data.get("payload") or {}
    if not isinstance(payload, dict):
        raise CommandError("payload must be an object")

    match ctype:
        case CommandType.SELECT_TILE:
            return SelectTile(empire_id, _tile_id(payload))
        case CommandType.CAPTURE_TILE:
            return CaptureTile(empire_id, _tile_id(payload))
        case CommandType.BUILD:
            raw_kind = _require(payload, "building")
            try:
                kind = BuildingKind(raw_kind)
            except ValueError as exc:
                raise CommandError(f"unknown building type {raw_kind!r}") from exc
            return Build(empire_id, _tile_id(payload), kind)
        case CommandType.PAUSE_GAME:
            return PauseGame(empire_id)
        case CommandType.SET_SPEED:
            speed = _require(payload, "speed")
            if isinstance(speed, bool) or not isinstance(speed, (int, float)) or not math.isfinite(speed):
                raise CommandError(f"speed must be a finite number, got {speed!r}")
            return SetSpeed(empire_id, float(speed))
