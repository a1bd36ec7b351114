"""Tests for walls on a hand-made grid of patches."""
from pathlib import Path
import sys

sys.path.append(str(Path(__file__).resolve().parents[1]))

import pytest

from towngen.curtain_wall import CurtainWall
from towngen.errors import GeometryFailure
from towngen.model import Model
from towngen.patch import Patch
from towngen.point import Point
from towngen.polygon import Polygon
from towngen.random import Random


class GridModel:
    """Just enough of a Model for a wall to be built"""

    find_circumference = staticmethod(Model.find_circumference)

    def __init__(self, size=3, step=10, seed=1):
        self.rng = Random(seed)
        offset = size * step / 2
        self.points = [
            [Point(i * step - offset, j * step - offset) for j in range(size + 1)]
            for i in range(size + 1)
        ]
        self.cells = {}
        self.patches = []
        for i in range(size):
            for j in range(size):
                p = self.points
                patch = Patch(Polygon([p[i][j], p[i + 1][j], p[i + 1][j + 1], p[i][j + 1]]))
                self.cells[i, j] = patch
                self.patches.append(patch)

    def patch_by_vertex(self, v):
        return [p for p in self.patches if p.shape.contains(v)]


def test_find_circumference_of_two_cells():
    model = GridModel()
    outline = Model.find_circumference([model.cells[1, 1], model.cells[2, 1]])
    assert len(outline) == 6
    assert outline.square == pytest.approx(200.0)


def test_find_circumference_single_patch_shares_points():
    model = GridModel()
    cell = model.cells[0, 0]
    outline = Model.find_circumference([cell])
    assert outline is not cell.shape
    assert all(a is b for a, b in zip(outline, cell.shape))


def test_border_gates_on_shared_vertices():
    model = GridModel()
    inner = [model.cells[1, 1], model.cells[2, 1]]
    wall = CurtainWall(False, model, inner, [])

    shared = {model.points[2][1], model.points[2][2]}
    assert len(wall.shape) == 6
    assert len(wall.gates) == 1
    assert wall.gates[0] in shared
    assert all(wall.shape.contains(g) for g in wall.gates)
    assert wall.segments == [True] * 6


def test_real_wall_towers_and_borders():
    model = GridModel()
    inner = [model.cells[1, 1], model.cells[2, 1]]
    wall = CurtainWall(True, model, inner, [])
    wall.build_towers()

    assert len(wall.towers) == len(wall.shape) - len(wall.gates)
    assert all(t not in wall.gates for t in wall.towers)
    assert wall.get_radius() > 0

    p = model.points
    assert wall.borders(model.cells[1, 0])
    assert not wall.borders(model.cells[0, 0])
    assert wall.borders_by(model.cells[1, 1], p[1][1], p[2][1])
    assert wall.borders_by(model.cells[1, 0], p[2][1], p[1][1])


def test_single_patch_wall_uses_patch_shape():
    model = GridModel()
    cell = model.cells[1, 1]
    wall = CurtainWall(True, model, [cell], [])
    assert wall.shape is cell.shape
    assert 1 <= len(wall.gates) <= 2
    assert all(cell.shape.contains(g) for g in wall.gates)


def test_no_entrances_is_a_failure():
    model = GridModel()
    inner = [model.cells[1, 1], model.cells[2, 1]]
    reserved = list(model.cells[1, 1].shape) + list(model.cells[2, 1].shape)
    with pytest.raises(GeometryFailure):
        CurtainWall(False, model, inner, reserved)


def test_gate_road_stub_splits_outer_patch():
    model = GridModel(size=1)
    cell = model.cells[0, 0]
    p = model.points
    # A single hexagon outside the cell, touching it along its right edge
    outer = Patch(Polygon([
        p[1][0], Point(12, -8), Point(25, -20), Point(25, 20), Point(12, 8), p[1][1]
    ]))
    model.patches.append(outer)
    count = len(model.patches)

    wall = CurtainWall(True, model, [cell], [p[0][0], p[0][1]])
    assert len(wall.gates) == 1
    assert outer not in model.patches
    assert len(model.patches) == count + 1
