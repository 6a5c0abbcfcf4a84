"""Pydantic request/response models for the REST API."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


# --- State ---

class EmpireSchema(BaseModel):
    id: str
    name: str
    color: str
    is_ai: bool
    gold: float
    population: float
    max_population: float
    military_ratio: float
    gold_per_second: float
    population_growth_rate: float
    territory_count: int
    building_count: int
    action_cooldown: float
    last_action_time: float


class BuildingSchema(BaseModel):
    id: str
    type: str
    level: int
    x: int
    y: int
    owner: str
    health: int
    max_health: int


class ShipSchema(BaseModel):
    id: str
    type: str
    x: int
    y: int
    owner: str
    health: int
    is_moving: bool = False


class CameraSchema(BaseModel):
    x: float = 0.0
    y: float = 0.0
    zoom: float = 1.0


class GameStateResponse(BaseModel):
    tick: int
    game_time: float
    phase: str
    winner: str | None = None
    paused: bool
    game_speed: float
    width: int
    height: int
    land_tile_count: int
    owners: list[str | None] = Field(description="Owner id per tile, indexed by y * width + x")
    empires: list[EmpireSchema]
    buildings: list[BuildingSchema]
    ships: list[ShipSchema]
    selected_tile: int | None = None
    selected_ship: str | None = None
    camera: CameraSchema


# --- Map ---

class MapResponse(BaseModel):
    width: int
    height: int
    grid: list[int] = Field(description="RLE-encoded terrain: [value, count, value, count, ...]")
    resources: list[int] = Field(description="Resource yield per tile, indexed by y * width + x")


# --- Events ---

class EventSchema(BaseModel):
    tick: int
    category: str
    message: str
    empire_ids: list[str] = []


# --- Commands / control ---

class CommandRequest(BaseModel):
    type: str
    empire_id: str = "player"
    payload: dict[str, Any] = {}


class ControlResponse(BaseModel):
    status: str
    message: str
    tick: int


# --- Config ---

class GameConfigResponse(BaseModel):
    world_seed: int
    map_width: int
    map_height: int
    min_tick_delta: float
    tick_interval: float
    min_game_speed: float
    max_game_speed: float
    snapshot_file: str
    autosave: bool
