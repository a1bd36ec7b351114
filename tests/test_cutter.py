"""Tests for polygon cutting utilities."""
from pathlib import Path
import sys

sys.path.append(str(Path(__file__).resolve().parents[1]))

import pytest

from towngen.cutter import Cutter
from towngen.polygon import Polygon


def test_bisect_halves():
    poly = Polygon.rect(4, 2)
    halves = Cutter.bisect(poly, poly[0], 0.5)
    assert len(halves) == 2
    for half in halves:
        assert half.square == pytest.approx(4.0)


def test_bisect_gap_removes_strip():
    poly = Polygon.rect(4, 2)
    halves = Cutter.bisect(poly, poly[0], 0.5, 0.0, 0.4)
    assert sum(h.square for h in halves) == pytest.approx(8.0 - 0.4 * 2)


def test_bisect_does_not_touch_source():
    poly = Polygon.rect(4, 2)
    before = poly.to_list()
    halves = Cutter.bisect(poly, poly[0], 0.3, 0.2)
    assert poly.to_list() == before
    for half in halves:
        assert all(not poly.contains(v) for v in half)


def test_radial_covers_polygon():
    poly = Polygon.rect(4, 4)
    sectors = Cutter.radial(poly)
    assert len(sectors) == 4
    assert sum(s.square for s in sectors) == pytest.approx(16.0)


def test_radial_gap_shrinks_sectors():
    poly = Polygon.rect(4, 4)
    sectors = Cutter.radial(poly, None, 0.6)
    assert len(sectors) == 4
    assert all(0 < s.square < 4.0 for s in sectors)


def test_semi_radial_skips_apex_edges():
    poly = Polygon.regular(6, 5)
    sectors = Cutter.semi_radial(poly)
    assert len(sectors) == 4
    assert sum(s.square for s in sectors) == pytest.approx(poly.square)


def test_ring_peels_band():
    poly = Polygon.rect(10, 10)
    band = Cutter.ring(poly, 1)
    assert len(band) == 4
    assert sum(p.square for p in band) == pytest.approx(100 - 64)
