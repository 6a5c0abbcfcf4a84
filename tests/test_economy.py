"""Tests for per-empire resource accrual."""

import sys
import os

import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from conquest.core.enums import BuildingKind
from conquest.core.models import Building, Position
from conquest.engine.economy import Economy
from tests.helpers.map_builder import MapBuilder


def _economy(mb: MapBuilder) -> Economy:
    return Economy(mb.config)


def _add_building(mb: MapBuilder, empire, kind: BuildingKind, x: int, y: int, level: int = 1) -> None:
    b = Building(f"{kind.value}-{x}-{y}", kind, Position(x, y), empire.empire_id, level=level)
    mb.tile(x, y).building = b
    empire.buildings.append(b)


class TestRates:
    def test_base_rate_only(self):
        mb = MapBuilder()
        a = mb.add_empire("a", gold_per_second=2.0, growth=0.5)
        assert _economy(mb).rates(a, mb.grid) == (2.0, 0.5)

    def test_territory_income(self):
        mb = MapBuilder(resources=3)
        a = mb.add_empire("a", gold_per_second=1.0, growth=0.0)
        mb.claim(a, (1, 1), (1, 2))
        gold, growth = _economy(mb).rates(a, mb.grid)
        assert gold == pytest.approx(1.0 + 2 * 3 * 0.1)
        assert growth == 0.0

    def test_building_bonuses_scale_with_level(self):
        mb = MapBuilder(resources=0)
        a = mb.add_empire("a", gold_per_second=0.0, growth=0.0)
        _add_building(mb, a, BuildingKind.CITY, 1, 1, level=2)
        _add_building(mb, a, BuildingKind.FARM, 2, 2)
        _add_building(mb, a, BuildingKind.PORT, 3, 3)
        _add_building(mb, a, BuildingKind.DEFENSE, 4, 4)
        gold, growth = _economy(mb).rates(a, mb.grid)
        assert gold == pytest.approx(2 * 0.5 + 0.3 + 0.4)
        assert growth == pytest.approx(2 * 0.1 + 0.2)


class TestUpdate:
    def test_accrues_gold_and_population(self):
        mb = MapBuilder(resources=0)
        a = mb.add_empire("a", gold=10.0, population=5.0, max_population=50.0,
                          gold_per_second=2.0, growth=1.0)
        _economy(mb).update(a, mb.grid, 2.0)
        assert a.resources.gold == pytest.approx(14.0)
        assert a.resources.population == pytest.approx(7.0)

    def test_rates_persisted(self):
        mb = MapBuilder(resources=2)
        a = mb.add_empire("a", gold_per_second=1.0)
        mb.claim(a, (3, 3))
        _economy(mb).update(a, mb.grid, 0.5)
        assert a.resources.gold_per_second == pytest.approx(1.2)

    def test_rates_do_not_compound(self):
        mb = MapBuilder(resources=2)
        a = mb.add_empire("a", gold_per_second=1.0)
        mb.claim(a, (3, 3))
        eco = _economy(mb)
        eco.update(a, mb.grid, 1.0)
        first = a.resources.gold_per_second
        eco.update(a, mb.grid, 1.0)
        assert a.resources.gold_per_second == pytest.approx(first)

    @pytest.mark.parametrize("dt", [0.0, -1.0])
    def test_non_positive_delta_is_noop(self, dt):
        mb = MapBuilder()
        a = mb.add_empire("a", gold=10.0, population=5.0, gold_per_second=7.0)
        mb.claim(a, (1, 1))
        before = a.resources.copy()
        _economy(mb).update(a, mb.grid, dt)
        assert a.resources == before

    def test_population_capped_at_max(self):
        mb = MapBuilder()
        a = mb.add_empire("a", population=9.5, max_population=10.0, growth=5.0)
        _economy(mb).update(a, mb.grid, 10.0)
        assert a.resources.population == 10.0

    def test_gold_floor_and_population_floor(self):
        mb = MapBuilder()
        a = mb.add_empire("a", gold=1.0, population=2.0, gold_per_second=-5.0, growth=-5.0)
        eco = _economy(mb)
        for _ in range(5):
            eco.update(a, mb.grid, 1.0)
            assert a.resources.gold >= 0.0
            assert 1.0 <= a.resources.population <= a.resources.max_population
        assert a.resources.gold == 0.0
        assert a.resources.population == 1.0

    def test_water_tiles_yield_nothing(self):
        mb = MapBuilder(water=[(2, 2)], resources=3)
        a = mb.add_empire("a", gold_per_second=0.0)
        # Corrupt listing of a water tile must not produce income.
        a.territories.append(mb.tile(2, 2).tile_id)
        assert _economy(mb).rates(a, mb.grid)[0] == 0.0
