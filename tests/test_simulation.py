"""Tests for the tick scheduler, command handling and game lifecycle."""

import sys
import os
import logging
import unittest

import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from conquest.config import GameConfig
from conquest.core.commands import Build, CaptureTile, PauseGame, SelectTile, SetSpeed
from conquest.core.enums import BuildingKind, GamePhase
from conquest.core.roster import HUMAN_EMPIRE_ID
from conquest.engine.simulation import Simulation
from tests.helpers.map_builder import MapBuilder, coords


def _make_sim(mb: MapBuilder, now: float = 0.0) -> Simulation:
    return Simulation(mb.config, mb.state(now))


def _make_two_empires():
    mb = MapBuilder()
    a = mb.add_empire("a", population=10, military_ratio=0.3)
    b = mb.add_empire("b")
    mb.claim(a, (10, 10))
    mb.claim(b, (2, 2))
    return mb, a, b


class TestTick:
    def test_small_delta_is_deferred(self):
        mb, _, _ = _make_two_empires()
        sim = _make_sim(mb)
        before = sim.state
        assert sim.tick(0.05) is before
        assert before.tick == 0
        assert before.game_time == 0.0

    def test_tick_produces_new_state(self):
        mb, _, _ = _make_two_empires()
        sim = _make_sim(mb)
        before = sim.state
        after = sim.tick(1.0)
        assert after is not before
        assert after.tick == 1
        assert after.game_time == pytest.approx(1.0)
        assert after.last_update_time == 1.0
        # the previous state is never touched
        assert before.tick == 0
        assert before.empires[0].resources.gold == 100

    def test_economy_runs_for_every_empire(self):
        mb, _, _ = _make_two_empires()
        sim = _make_sim(mb)
        state = sim.tick(1.0)
        # base 2.0 + one tile with 1 resource * 0.1
        for empire in state.empires:
            assert empire.resources.gold == pytest.approx(102.1)
            assert empire.resources.population == 10.0  # already at the cap

    def test_speed_scales_delta(self):
        mb, _, _ = _make_two_empires()
        sim = _make_sim(mb)
        sim.apply(SetSpeed("a", 2.0), now=0.0)
        assert sim.tick(1.0).game_time == pytest.approx(2.0)

    def test_paused_does_not_advance(self):
        mb, _, _ = _make_two_empires()
        sim = _make_sim(mb)
        paused = sim.apply(PauseGame("a"), now=0.0)
        assert paused.paused
        assert sim.tick(10.0) is paused

    def test_game_time_monotonic(self):
        mb, _, _ = _make_two_empires()
        sim = _make_sim(mb)
        last = 0.0
        for step in range(1, 20):
            state = sim.tick(step * 0.3)
            assert state.game_time >= last
            last = state.game_time


class TestVictory:
    def _nearly_won(self):
        mb = MapBuilder(3, 3)
        a = mb.add_empire("a", population=10, military_ratio=0.3)
        mb.claim_rect(a, 0, 0, 2, 2)
        b = mb.add_empire("b")
        mb.claim(b, (2, 2))
        return mb

    def test_owning_all_land_ends_game(self):
        mb = self._nearly_won()
        sim = _make_sim(mb)
        sim.apply(CaptureTile("a", mb.tile(2, 2).tile_id), now=5.0)
        state = sim.tick(5.5)
        assert state.phase == GamePhase.ENDED
        assert state.winner == "a"
        assert any(e.category == "victory" for e in sim.drain_events())

    def test_water_is_not_required(self):
        mb = MapBuilder(3, 3, water=[(0, 0)])
        a = mb.add_empire("a")
        mb.claim_rect(a, 0, 0, 2, 2)
        state = _make_sim(mb).tick(1.0)
        assert mb.grid.land_tile_count == 8
        assert state.phase == GamePhase.ENDED
        assert state.winner == "a"

    def test_tie_goes_to_first_listed_empire(self):
        mb = MapBuilder(3, 3)
        a = mb.add_empire("a")
        b = mb.add_empire("b")
        mb.claim_rect(a, 0, 0, 2, 2)
        b.territories = list(a.territories)
        state = _make_sim(mb).tick(1.0)
        assert state.phase == GamePhase.ENDED
        assert state.winner == "a"

    def test_ended_is_terminal(self):
        mb = self._nearly_won()
        sim = _make_sim(mb)
        sim.apply(CaptureTile("a", mb.tile(2, 2).tile_id), now=5.0)
        ended = sim.tick(5.5)
        assert sim.tick(100.0) is ended
        assert sim.apply(CaptureTile("a", 0), now=100.0) is ended
        assert sim.apply(Build("a", 0, BuildingKind.FARM), now=100.0) is ended
        sim.apply(PauseGame("a"), now=100.0)
        sim.apply(PauseGame("a"), now=101.0)
        assert sim.tick(200.0).phase == GamePhase.ENDED
        assert sim.state.winner == "a"


class TestCommands:
    def test_select_tile(self):
        mb, _, _ = _make_two_empires()
        sim = _make_sim(mb)
        state = sim.apply(SelectTile("a", 5), now=0.0)
        assert state.selected_tile == 5
        assert state.selected_ship is None

    def test_select_unknown_tile(self):
        mb, _, _ = _make_two_empires()
        sim = _make_sim(mb)
        before = sim.state
        assert sim.apply(SelectTile("a", 10_000), now=0.0) is before

    def test_unknown_empire(self):
        mb, _, _ = _make_two_empires()
        sim = _make_sim(mb)
        before = sim.state
        assert sim.apply(CaptureTile("nobody", mb.tile(10, 11).tile_id), now=5.0) is before

    def test_unknown_command_kind_logged(self, caplog):
        mb, _, _ = _make_two_empires()
        sim = _make_sim(mb)
        before = sim.state
        with caplog.at_level(logging.WARNING, logger="conquest.engine.simulation"):
            assert sim.apply(object(), now=0.0) is before
        assert "Ignoring unknown command kind" in caplog.text

    def test_human_capture(self):
        mb, _, _ = _make_two_empires()
        sim = _make_sim(mb)
        state = sim.apply(CaptureTile("a", mb.tile(10, 11).tile_id), now=5.0)
        a = state.empire("a")
        assert coords(state.grid, a.territories) == {(10, 10), (10, 11)}
        assert a.resources.population == 9
        assert a.last_action_time == 5.0
        assert state.territory_violations() == []
        assert [e.category for e in sim.drain_events()] == ["capture"]

    def test_human_capture_respects_cooldown(self):
        mb, _, _ = _make_two_empires()
        sim = _make_sim(mb)
        before = sim.state
        assert sim.apply(CaptureTile("a", mb.tile(10, 11).tile_id), now=1.0) is before
        after = sim.apply(CaptureTile("a", mb.tile(10, 11).tile_id), now=2.0)
        assert after is not before

    def test_failed_capture_does_not_stamp_cooldown(self):
        mb, _, _ = _make_two_empires()
        sim = _make_sim(mb)
        before = sim.state
        assert sim.apply(CaptureTile("a", mb.tile(15, 15).tile_id), now=5.0) is before
        assert before.empire("a").last_action_time == 0.0

    def test_capture_water_rejected(self):
        mb = MapBuilder(water=[(10, 11)])
        a = mb.add_empire("a")
        mb.claim(a, (10, 10))
        sim = _make_sim(mb)
        before = sim.state
        assert sim.apply(CaptureTile("a", mb.tile(10, 11).tile_id), now=5.0) is before

    def test_ai_capture_ignores_cooldown(self):
        mb = MapBuilder()
        bot = mb.add_empire("bot", name="Bot", is_ai=True, last_action_time=5.0, cooldown=3.0)
        mb.claim(bot, (10, 10))
        sim = _make_sim(mb)
        state = sim.apply(CaptureTile("bot", mb.tile(10, 11).tile_id), now=5.5)
        assert len(state.empire("bot").territories) == 2

    def test_build(self):
        mb, _, _ = _make_two_empires()
        sim = _make_sim(mb)
        before = sim.state
        tid = mb.tile(10, 10).tile_id
        state = sim.apply(Build("a", tid, BuildingKind.CITY), now=0.0)
        assert state.grid.by_id(tid).building.kind == BuildingKind.CITY
        assert state.empire("a").resources.gold == 50
        assert state.empire("a").resources.max_population == 30
        assert before.grid.by_id(tid).building is None

    def test_build_on_foreign_tile(self):
        mb, _, _ = _make_two_empires()
        sim = _make_sim(mb)
        before = sim.state
        assert sim.apply(Build("a", mb.tile(2, 2).tile_id, BuildingKind.FARM), now=0.0) is before

    def test_build_unaffordable(self):
        mb = MapBuilder()
        a = mb.add_empire("a", gold=10)
        mb.claim(a, (1, 1))
        sim = _make_sim(mb)
        before = sim.state
        assert sim.apply(Build("a", mb.tile(1, 1).tile_id, BuildingKind.FARM), now=0.0) is before

    def test_pause_toggle_and_resume_resets_clock(self):
        mb, _, _ = _make_two_empires()
        sim = _make_sim(mb)
        assert sim.apply(PauseGame("a"), now=1.0).paused
        resumed = sim.apply(PauseGame("a"), now=50.0)
        assert not resumed.paused
        assert resumed.last_update_time == 50.0
        # no catch-up tick for the paused interval
        assert sim.tick(50.05) is resumed

    @pytest.mark.parametrize("requested,expected", [(100.0, 8.0), (0.1, 0.5), (3.0, 3.0)])
    def test_speed_clamped(self, requested, expected):
        mb, _, _ = _make_two_empires()
        sim = _make_sim(mb)
        assert sim.apply(SetSpeed("a", requested), now=0.0).game_speed == expected

    def test_non_finite_speed_rejected(self):
        mb, _, _ = _make_two_empires()
        sim = _make_sim(mb)
        before = sim.state
        assert sim.apply(SetSpeed("a", float("nan")), now=0.0) is before
        assert sim.apply(SetSpeed("a", float("inf")), now=0.0) is before


class TestFullGame(unittest.TestCase):
    """Play a real generated game headlessly and check global invariants."""

    def setUp(self):
        self.sim = Simulation.new_game(GameConfig(), now=0.0)

    def test_new_game_layout(self):
        state = self.sim.state
        self.assertEqual(state.phase, GamePhase.PLAYING)
        self.assertEqual(len(state.empires), 7)
        self.assertEqual(state.territory_violations(), [])
        player = state.empire(HUMAN_EMPIRE_ID)
        self.assertFalse(player.is_ai)
        capital = state.grid.get_xy(15, 25).building
        self.assertIsNotNone(capital)
        self.assertEqual(capital.kind, BuildingKind.CITY)
        self.assertEqual(player.resources.max_population, 30)

    def test_invariants_hold_over_many_ticks(self):
        start = {e.empire_id: len(e.territories) for e in self.sim.state.empires}
        self.sim.apply(SetSpeed(HUMAN_EMPIRE_ID, 4.0), now=0.0)
        now = 0.0
        for _ in range(120):
            now += 0.5
            state = self.sim.tick(now)
            self.assertEqual(state.territory_violations(), [])
            for empire in state.empires:
                res = empire.resources
                self.assertGreaterEqual(res.gold, 0.0)
                self.assertGreaterEqual(res.population, 1.0)
                self.assertLessEqual(res.population, res.max_population)
        grown = [e for e in self.sim.state.empires if e.is_ai and len(e.territories) > start[e.empire_id]]
        self.assertTrue(grown)

    def test_same_seed_same_game(self):
        other = Simulation.new_game(GameConfig(), now=0.0)
        now = 0.0
        for _ in range(40):
            now += 1.0
            a = self.sim.tick(now)
            b = other.tick(now)
        self.assertEqual(
            [len(e.territories) for e in a.empires],
            [len(e.territories) for e in b.empires],
        )
        self.assertEqual([t.owner for t in a.grid], [t.owner for t in b.grid])

    def test_snapshot_mirrors_state(self):
        self.sim.tick(1.0)
        snap = self.sim.snapshot()
        state = self.sim.state
        self.assertEqual(snap.tick, state.tick)
        self.assertEqual(len(snap.owners), 80 * 60)
        self.assertEqual(snap.empire(HUMAN_EMPIRE_ID).territory_count,
                         len(state.empire(HUMAN_EMPIRE_ID).territories))

    def test_reset(self):
        self.sim.tick(5.0)
        state = self.sim.reset(now=10.0)
        self.assertEqual(state.tick, 0)
        self.assertEqual(state.last_update_time, 10.0)
        self.assertEqual(self.sim.drain_events(), [])
