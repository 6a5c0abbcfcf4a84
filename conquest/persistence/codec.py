"""Snapshot codec — GameState to and from a JSON-safe structure.

The tile grid is written as an explicit list of ``[tile_id, tile]`` pairs
rather than a mapping, and rebuilt into the dense grid on load. Loading
always overwrites ``last_update_time`` with the current time so that time
spent saved does not turn into one giant tick.
"""

from __future__ import annotations

import json
import logging
import time
from pathlib import Path
from typing import TYPE_CHECKING, Any

from conquest.core.enums import BuildingKind, GamePhase, ShipKind, Terrain
from conquest.core.game_state import GameState
from conquest.core.grid import Grid
from conquest.core.models import Building, Camera, Empire, Position, ResourceBundle, Ship, Tile
from conquest.systems.world_builder import new_game_state

if TYPE_CHECKING:
    from conquest.config import GameConfig
    from conquest.systems.rng import DeterministicRNG

logger = logging.getLogger(__name__)

FORMAT_VERSION = 1
REQUIRED_FIELDS = ("players", "tiles")


class SnapshotError(ValueError):
    """Raised when a persisted snapshot is missing fields or inconsistent."""


# ---------------------------------------------------------------------------
# Encoding
# ---------------------------------------------------------------------------

def _pos(p: Position) -> list[int]:
    return [p.x, p.y]


def _building_to_dict(b: Building) -> dict[str, Any]:
    return {
        "id": b.building_id,
        "type": b.kind.value,
        "level": b.level,
        "position": _pos(b.position),
        "owner": b.owner,
        "health": b.health,
        "max_health": b.max_health,
    }


def _ship_to_dict(s: Ship) -> dict[str, Any]:
    return {
        "id": s.ship_id,
        "type": s.kind.value,
        "position": _pos(s.position),
        "owner": s.owner,
        "health": s.health,
        "max_health": s.max_health,
        "cargo": s.cargo,
        "destination": _pos(s.destination) if s.destination is not None else None,
        "is_moving": s.moving,
    }


def _tile_to_dict(t: Tile) -> dict[str, Any]:
    return {
        "position": _pos(t.position),
        "type": t.terrain.label,
        "owner": t.owner,
        "resources": t.resources,
        "building": _building_to_dict(t.building) if t.building is not None else None,
        "is_visible": t.visible,
    }


def _empire_to_dict(e: Empire) -> dict[str, Any]:
    r = e.resources
    return {
        "id": e.empire_id,
        "name": e.name,
        "color": e.color,
        "is_ai": e.is_ai,
        "last_action_time": e.last_action_time,
        "action_cooldown": e.action_cooldown,
        "resources": {
            "gold": r.gold,
            "population": r.population,
            "max_population": r.max_population,
            "military_ratio": r.military_ratio,
            "gold_per_second": r.gold_per_second,
            "population_growth_rate": r.population_growth_rate,
            "base_gold_per_second": r.base_gold_per_second,
            "base_population_growth_rate": r.base_population_growth_rate,
        },
        "territories": list(e.territories),
        "buildings": [_building_to_dict(b) for b in e.buildings],
        "ships": [_ship_to_dict(s) for s in e.ships],
    }


def encode(state: GameState) -> dict[str, Any]:
    """Convert *state* into plain lists/dicts/scalars."""
    return {
        "version": FORMAT_VERSION,
        "game_time": state.game_time,
        "last_update_time": state.last_update_time,
        "tick": state.tick,
        "players": [_empire_to_dict(e) for e in state.empires],
        "tiles": [[t.tile_id, _tile_to_dict(t)] for t in state.grid],
        "ships": [_ship_to_dict(s) for s in state.ships],
        "selected_tile": state.selected_tile,
        "selected_ship": state.selected_ship,
        "phase": state.phase.value,
        "winner": state.winner,
        "map_size": {"width": state.grid.width, "height": state.grid.height},
        "camera": {"x": state.camera.x, "y": state.camera.y, "zoom": state.camera.zoom},
        "game_speed": state.game_speed,
        "paused": state.paused,
    }


# ---------------------------------------------------------------------------
# Decoding
# ---------------------------------------------------------------------------

def _as_dict(value: Any, what: str) -> dict[str, Any]:
    if not isinstance(value, dict):
        raise SnapshotError(f"{what} must be an object, got {type(value).__name__}")
    return value


def _to_pos(raw: Any) -> Position:
    x, y = raw
    return Position(int(x), int(y))


def _building_from_dict(d: dict[str, Any]) -> Building:
    return Building(
        building_id=str(d["id"]),
        kind=BuildingKind(d["type"]),
        position=_to_pos(d["position"]),
        owner=str(d["owner"]),
        level=int(d.get("level", 1)),
        health=int(d.get("health", 100)),
        max_health=int(d.get("max_health", 100)),
    )


def _ship_from_dict(d: dict[str, Any]) -> Ship:
    dest = d.get("destination")
    return Ship(
        ship_id=str(d["id"]),
        kind=ShipKind(d["type"]),
        position=_to_pos(d["position"]),
        owner=str(d["owner"]),
        health=int(d.get("health", 100)),
        max_health=int(d.get("max_health", 100)),
        cargo=d.get("cargo"),
        destination=_to_pos(dest) if dest is not None else None,
        moving=bool(d.get("is_moving", False)),
    )


def _empire_from_dict(d: Any) -> Empire:
    d = _as_dict(d, "player")
    r = _as_dict(d["resources"], "player resources")
    resources = ResourceBundle(
        gold=float(r["gold"]),
        population=float(r["population"]),
        max_population=float(r["max_population"]),
        military_ratio=float(r["military_ratio"]),
        gold_per_second=float(r["gold_per_second"]),
        population_growth_rate=float(r["population_growth_rate"]),
        base_gold_per_second=float(r.get("base_gold_per_second", r["gold_per_second"])),
        base_population_growth_rate=float(r.get("base_population_growth_rate", r["population_growth_rate"])),
    )
    return Empire(
        empire_id=str(d["id"]),
        name=str(d["name"]),
        color=str(d.get("color", "#888888")),
        is_ai=bool(d["is_ai"]),
        resources=resources,
        last_action_time=float(d.get("last_action_time", 0.0)),
        action_cooldown=float(d.get("action_cooldown", 2.0)),
        territories=[int(t) for t in d.get("territories", [])],
        buildings=[_building_from_dict(b) for b in d.get("buildings", [])],
        ships=[_ship_from_dict(s) for s in d.get("ships", [])],
    )


def _grid_from_pairs(pairs: list[Any], width: int, height: int) -> Grid:
    by_id: dict[int, dict[str, Any]] = {}
    for tile_id, record in pairs:
        by_id[int(tile_id)] = _as_dict(record, f"tile {tile_id}")
    if len(by_id) != width * height:
        raise SnapshotError(f"expected {width * height} tiles, found {len(by_id)}")

    tiles: list[Tile] = []
    for tile_id in range(width * height):
        record = by_id.get(tile_id)
        if record is None:
            raise SnapshotError(f"tile {tile_id} missing")
        building = record.get("building")
        tiles.append(Tile(
            tile_id=tile_id,
            position=_to_pos(record["position"]),
            terrain=Terrain[str(record["type"]).upper()],
            owner=record.get("owner"),
            resources=int(record.get("resources", 0)),
            building=_building_from_dict(building) if building is not None else None,
            visible=bool(record.get("is_visible", True)),
        ))
    return Grid(width, height, tiles)


def decode(data: dict[str, Any], now: float) -> GameState:
    """Rebuild a GameState from :func:`encode` output.

    Raises SnapshotError for missing required fields, malformed records, or
    ownership that disagrees with the territory lists.
    """
    if not isinstance(data, dict):
        raise SnapshotError("snapshot is not an object")
    missing = [f for f in REQUIRED_FIELDS if not data.get(f)]
    if missing:
        raise SnapshotError(f"snapshot missing required fields: {', '.join(missing)}")

    try:
        size = _as_dict(data["map_size"], "map_size")
        grid = _grid_from_pairs(data["tiles"], int(size["width"]), int(size["height"]))
        empires = [_empire_from_dict(p) for p in data["players"]]

        state = GameState(grid=grid, empires=empires, last_update_time=now)
        state.game_time = float(data.get("game_time", 0.0))
        state.tick = int(data.get("tick", 0))
        state.ships = [_ship_from_dict(s) for s in data.get("ships", [])]
        state.selected_tile = data.get("selected_tile")
        state.selected_ship = data.get("selected_ship")
        state.phase = GamePhase(data.get("phase", GamePhase.PLAYING.value))
        state.winner = data.get("winner")
        cam = _as_dict(data.get("camera") or {}, "camera")
        state.camera = Camera(float(cam.get("x", 0.0)), float(cam.get("y", 0.0)), float(cam.get("zoom", 1.0)))
        state.game_speed = float(data.get("game_speed", 1.0))
        state.paused = bool(data.get("paused", False))
    except SnapshotError:
        raise
    except (KeyError, TypeError, ValueError, AttributeError) as exc:
        raise SnapshotError(f"malformed snapshot: {exc!r}") from exc

    problems = state.territory_violations()
    if problems:
        raise SnapshotError(f"inconsistent territory: {problems[0]}")
    return state


# ---------------------------------------------------------------------------
# Files
# ---------------------------------------------------------------------------

def save_snapshot(state: GameState, path: str | Path) -> Path:
    """Write *state* to *path* as JSON."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(encode(state)), encoding="utf-8")
    logger.info("Game saved to %s (tick %d)", path, state.tick)
    return path


def load_snapshot(path: str | Path, now: float | None = None) -> GameState | None:
    """Load a saved game, or return None when absent or unusable."""
    path = Path(path)
    now = time.time() if now is None else now
    if not path.exists():
        return None
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
        state = decode(data, now)
    except (OSError, json.JSONDecodeError, SnapshotError) as exc:
        logger.warning("Discarding saved game %s: %s", path, exc)
        return None
    logger.info("Loaded saved game from %s (tick %d, phase %s)", path, state.tick, state.phase.value)
    return state


def load_or_create(
    path: str | Path,
    config: GameConfig,
    rng: DeterministicRNG,
    now: float | None = None,
) -> GameState:
    """Resume the game saved at *path*, falling back to a freshly generated one."""
    now = time.time() if now is None else now
    state = load_snapshot(path, now)
    if state is None:
        state = new_game_state(config, rng, now)
    return state
