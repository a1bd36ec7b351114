"""Tests for building layout and ward placement rules."""
from pathlib import Path
import math
import sys

sys.path.append(str(Path(__file__).resolve().parents[1]))

import pytest

from towngen.patch import Patch
from towngen.point import Point
from towngen.polygon import Polygon
from towngen.random import Random
from towngen.ward import (
    Ward,
    WardKind,
    CraftsmenWard,
    GateWard,
    Park,
    Slum,
    MerchantWard,
    Cathedral,
    Market,
    MilitaryWard,
    PatriciateWard,
    AdministrationWard,
    Farm,
)


def test_alleys_yield_positive_lots():
    block = Polygon.rect(60, 40)
    buildings = Ward.create_alleys(block, 30, 0.5, 0.6, Random(7))
    assert len(buildings) > 1
    for b in buildings:
        assert b.square > Polygon.DELTA
    assert sum(b.square for b in buildings) < block.square


def test_alleys_are_deterministic():
    block = Polygon.regular(7, 30)
    a = Ward.create_alleys(block, 20, 0.8, 0.8, Random(1234))
    b = Ward.create_alleys(block, 20, 0.8, 0.8, Random(1234))
    assert [p.to_list() for p in a] == [p.to_list() for p in b]


def test_alleys_without_gap_on_first_cut():
    block = Polygon.rect(10, 10)
    buildings = Ward.create_alleys(block, 0.5, 0.3, 0.3, Random(5), split=False)
    assert len(buildings) > 10
    assert all(b.square > 0 for b in buildings)


def test_alleys_keep_small_block():
    block = Polygon.rect(2, 2)
    buildings = Ward.create_alleys(block, 1000, 0.5, 0.0, Random(9), empty_prob=0.0)
    assert 1 <= len(buildings) <= 2
    assert sum(b.square for b in buildings) <= 4.0 + 1e-9


def test_ortho_building_fills_block():
    block = Polygon.rect(30, 20)
    buildings = Ward.create_ortho_building(block, 20, 1.0, Random(3))
    assert len(buildings) > 1
    assert sum(b.square for b in buildings) == pytest.approx(600.0)
    for b in buildings:
        assert 0 < b.square < 40


def test_ortho_building_small_block_is_kept():
    block = Polygon.rect(2, 2)
    assert len(Ward.create_ortho_building(block, 10, 0.5, Random(3))) == 1


def test_ortho_building_with_fill_drops_some():
    block = Polygon.rect(60, 60)
    buildings = Ward.create_ortho_building(block, 10, 0.3, Random(21))
    assert sum(b.square for b in buildings) < 3600


def test_indifferent_wards_rate_every_patch_alike():
    town = Town()
    for ward_class in (CraftsmenWard, GateWard, Park, Farm, Ward):
        assert [ward_class.rate_location(town, p) for p in town.patches] == [0] * 9


def test_rated_wards():
    for ward_class in (Slum, MerchantWard, Cathedral, Market, MilitaryWard,
                       PatriciateWard, AdministrationWard):
        assert callable(ward_class.rate_location)


def test_kinds_and_labels():
    assert Cathedral.kind is WardKind.CATHEDRAL
    assert Cathedral.label == "Temple"
    assert Ward.kind is WardKind.GENERIC
    assert Ward.label is None
    assert Slum.kind.value == "slum"


class Wall:
    def __init__(self, *patches):
        self.patches = patches

    def borders(self, patch):
        return patch in self.patches


class Town:
    """A 3x3 grid of 10x10 patches sharing their corners"""

    def __init__(self, seed=1):
        self.rng = Random(seed)
        g = [[Point(i * 10, j * 10) for j in range(4)] for i in range(4)]
        self.cells = {}
        for i in range(3):
            for j in range(3):
                self.cells[i, j] = Patch(Polygon([g[i][j], g[i + 1][j], g[i + 1][j + 1], g[i][j + 1]]))
        self.patches = list(self.cells.values())
        self.inner = list(self.patches)
        self.center = Point(15, 15)
        self.plaza = None
        self.citadel = None
        self.wall = None
        self.arteries = []
        self.gates = []

    def patch_by_vertex(self, v):
        return [p for p in self.patches if p.shape.contains(v)]

    def get_neighbour(self, patch, v):
        next_v = patch.shape.next(v)
        for p in self.patches:
            if p.shape.find_edge(next_v, v) != -1:
                return p
        return None

    def is_enclosed(self, patch):
        return patch.within_city


def test_market_avoids_other_markets():
    town = Town()
    town.plaza = town.cells[1, 1]
    town.plaza.ward = Market(town, town.plaza)

    assert Market.rate_location(town, town.cells[1, 0]) == math.inf
    assert Market.rate_location(town, town.cells[2, 1]) == math.inf
    # Only a corner is shared
    assert Market.rate_location(town, town.cells[0, 0]) == pytest.approx(1.0)


def test_military_needs_citadel_or_wall():
    town = Town()
    assert MilitaryWard.rate_location(town, town.cells[1, 1]) == 0

    town.citadel = town.cells[0, 0]
    town.wall = Wall(town.cells[2, 2])
    assert MilitaryWard.rate_location(town, town.cells[1, 0]) == 0
    assert MilitaryWard.rate_location(town, town.cells[2, 2]) == 1
    assert MilitaryWard.rate_location(town, town.cells[1, 1]) == math.inf


def test_administration_overlooks_plaza():
    town = Town()
    assert AdministrationWard.rate_location(town, town.cells[0, 0]) == pytest.approx(math.sqrt(50))

    town.plaza = town.cells[1, 1]
    assert AdministrationWard.rate_location(town, town.cells[0, 1]) == 0
    assert AdministrationWard.rate_location(town, town.cells[0, 0]) == pytest.approx(math.sqrt(50))


def test_cathedral_prefers_plaza():
    town = Town()
    town.plaza = town.cells[1, 1]
    facing = Cathedral.rate_location(town, town.cells[1, 2])
    away = Cathedral.rate_location(town, town.cells[2, 2])
    assert facing == pytest.approx(-0.01)
    assert away == pytest.approx(math.sqrt(50) * 100)


def test_patriciate_likes_parks_and_dislikes_slums():
    town = Town()
    park = town.cells[0, 1]
    slum = town.cells[2, 1]
    park.ward = Park(town, park)
    slum.ward = Slum(town, slum)

    assert PatriciateWard.rate_location(town, town.cells[0, 0]) == -1
    assert PatriciateWard.rate_location(town, town.cells[2, 0]) == 1
    assert PatriciateWard.rate_location(town, town.cells[1, 1]) == 0


def test_slums_and_merchants_pull_apart():
    town = Town()
    town.center = Point(0, 0)
    far = town.cells[2, 2]
    near = town.cells[0, 0]
    assert Slum.rate_location(town, far) < Slum.rate_location(town, near)
    assert MerchantWard.rate_location(town, near) < MerchantWard.rate_location(town, far)


def lots(patch, seed=7):
    return Ward.create_alleys(patch.shape, 8, 0.5, 0.6, Random(seed))


def test_outskirts_in_open_country_are_cleared():
    town = Town()
    patch = town.cells[1, 1]
    ward = Ward(town, patch)
    ward.geometry = lots(patch)
    assert len(ward.geometry) > 0

    ward.filter_outskirts()
    assert ward.geometry == []


def test_outskirts_are_thinned():
    town = Town(seed=3)
    for p in town.patches:
        p.within_city = True
    patch = town.cells[0, 0]
    ward = Ward(town, patch)
    before = lots(patch)
    ward.geometry = list(before)

    ward.filter_outskirts()
    assert len(ward.geometry) <= len(before)
    assert all(any(b is a for a in before) for b in ward.geometry)
