"""Tests for the Delaunay triangulation and Voronoi partitioning."""
from pathlib import Path
import math
import sys

sys.path.append(str(Path(__file__).resolve().parents[1]))

from towngen.patch import Patch
from towngen.point import Point
from towngen.voronoi import Voronoi


def spiral(n):
    points = []
    for i in range(n):
        a = 0.7 + math.sqrt(i) * 5
        r = 0 if i == 0 else 10 + i * 2.5
        points.append(Point(math.cos(a) * r, math.sin(a) * r))
    return points


def test_delaunay_empty_circumcircles():
    points = [Point(0, 0), Point(10, 1), Point(-9, 2), Point(1, 11), Point(2, -10)]
    voronoi = Voronoi.build(points)
    for tr in voronoi.triangles:
        for p in voronoi.points:
            if not tr.has_vertex(p):
                assert p.distance(tr.c) >= tr.r - 1e-9


def test_inner_point_gets_region():
    center = Point(0, 0)
    voronoi = Voronoi.build([center, Point(10, 1), Point(-9, 2), Point(1, 11), Point(2, -10)])
    regions = voronoi.partitioning()
    assert [r.seed for r in regions] == [center]

    patch = Patch.from_region(regions[0])
    assert len(patch.shape) >= 3
    assert patch.shape.square > 0


def test_triangulation_skips_frame():
    voronoi = Voronoi.build(spiral(20))
    for tr in voronoi.triangulation():
        for corner in voronoi.frame:
            assert not tr.has_vertex(corner)


def test_neighbouring_patches_share_vertices():
    voronoi = Voronoi.build(spiral(40))
    regions = voronoi.partitioning()
    assert len(regions) > 5

    patches = [Patch.from_region(r) for r in regions]
    for patch in patches:
        assert patch.shape.square > 0

    first = patches[0]
    neighbours = [p for p in patches[1:] if p.shape.borders(first.shape)]
    assert len(neighbours) > 0
    for n in neighbours:
        assert any(n.shape.contains(v) for v in first.shape)


def test_partitioning_follows_point_order():
    voronoi = Voronoi.build(spiral(40))
    order = {id(p): i for i, p in enumerate(voronoi.points)}
    indices = [order[id(r.seed)] for r in voronoi.partitioning()]
    assert indices == sorted(indices)


def test_relax_keeps_point_count():
    voronoi = Voronoi.build(spiral(30))
    relaxed = Voronoi.relax(voronoi, voronoi.points[:3] + [voronoi.points[10]])
    assert len(relaxed.points) == len(voronoi.points)
    assert len(relaxed.partitioning()) > 0


def test_region_neighbours():
    center = Point(0, 0)
    voronoi = Voronoi.build([center, Point(10, 1), Point(-9, 2), Point(1, 11), Point(2, -10)])
    region = voronoi.regions[center]
    seeds = [r.seed for r in voronoi.get_neighbours(region)]
    assert len(seeds) == 4
    assert all(s is not center for s in seeds)
