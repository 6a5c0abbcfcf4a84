"""Tests for new-game generation and empire seeding."""

import sys
import os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from conquest.config import GameConfig
from conquest.core.enums import BuildingKind, GamePhase
from conquest.core.models import Position
from conquest.core.roster import DEFAULT_ROSTER, EmpireTemplate, fallback_start
from conquest.systems.rng import DeterministicRNG
from conquest.systems.world_builder import new_game_state


def _make_state(roster=DEFAULT_ROSTER, now: float = 0.0):
    return new_game_state(GameConfig(), DeterministicRNG(42), now, roster)


class TestDefaultRoster:
    def test_one_human_six_ai(self):
        assert [t.is_ai for t in DEFAULT_ROSTER].count(False) == 1
        assert len(DEFAULT_ROSTER) == 7
        assert DEFAULT_ROSTER[0].empire_id == "player"

    def test_vikings_start_lean(self):
        vikings = next(t for t in DEFAULT_ROSTER if t.name == "Viking Clans")
        empire = vikings.build()
        assert empire.resources.gold == 80
        assert empire.resources.population == 8
        assert empire.resources.military_ratio == 0.6
        assert empire.resources.base_gold_per_second == 1.5

    def test_fallback_start(self):
        assert fallback_start(0) == Position(40, 30)
        assert fallback_start(3) == Position(55, 39)


class TestNewGame:
    def test_playing_and_consistent(self):
        state = _make_state(now=12.5)
        assert state.phase == GamePhase.PLAYING
        assert state.last_update_time == 12.5
        assert state.tick == 0
        assert state.game_time == 0.0
        assert state.winner is None
        assert state.territory_violations() == []

    def test_every_empire_has_a_capital(self):
        state = _make_state()
        for template, empire in zip(DEFAULT_ROSTER, state.empires):
            assert 0 < len(empire.territories) <= 25
            tile = state.grid.get(template.start)
            assert tile.owner == empire.empire_id
            assert tile.building is not None
            assert tile.building.kind == BuildingKind.CITY
            assert empire.buildings == [tile.building]
            assert empire.resources.max_population == template.population + 20

    def test_capital_is_free(self):
        state = _make_state()
        assert state.empire("player").resources.gold == 100

    def test_overlapping_starts_first_come_first_served(self):
        roster = (
            EmpireTemplate("a", "A", "#111111", False, 2.0, Position(15, 25)),
            EmpireTemplate("b", "B", "#222222", True, 3.0, Position(17, 25)),
        )
        state = _make_state(roster)
        a, b = state.empires
        assert len(a.territories) == 25
        assert len(b.territories) == 10
        assert b.buildings == []
        assert b.resources.max_population == 10
        assert state.territory_violations() == []
