"""
CurtainWall class for city walls
"""
import logging

from .point import Point
from .patch import Patch
from .errors import GeometryFailure

logger = logging.getLogger(__name__)


class CurtainWall:
    """Wall (or just city limit) around a group of patches.

    ``real`` walls are smoothed, get towers and cut road stubs into the
    countryside at their gates.
    """

    def __init__(self, real, model, patches, reserved):
        self.real = real
        self.patches = patches
        self.gates = []
        self.towers = []

        if len(patches) == 1:
            self.shape = patches[0].shape
        else:
            self.shape = model.find_circumference(patches)

            if real:
                reserved_set = set(reserved)
                smooth_factor = min(1, 40 / len(patches))
                smoothed = [
                    v if v in reserved_set else self.shape.smooth_vertex(v, smooth_factor)
                    for v in self.shape.vertices
                ]
                self.shape.set(smoothed)

        self.segments = [True] * len(self.shape)
        self._build_gates(real, model, reserved)

    def _build_gates(self, real, model, reserved):
        reserved = set(reserved)

        if len(self.patches) > 1:
            entrances = [
                v for v in self.shape.vertices
                if v not in reserved
                and sum(1 for p in self.patches if p.shape.contains(v)) > 1
            ]
        else:
            entrances = [v for v in self.shape.vertices if v not in reserved]

        if len(entrances) == 0:
            raise GeometryFailure("Bad walled area shape!")

        while len(entrances) > 0:
            index = model.rng.int(0, len(entrances))
            gate = entrances[index]
            self.gates.append(gate)

            if real:
                self._build_road_stub(model, gate, reserved)

            # Keep gates apart: drop the gate and its neighbours
            if index == 0:
                entrances = entrances[2:]
                if len(entrances) > 0:
                    entrances.pop()
            elif index == len(entrances) - 1:
                entrances = entrances[:index - 1]
                if len(entrances) > 0:
                    entrances.pop(0)
            else:
                entrances = entrances[:index - 1] + entrances[index + 2:]

        if len(self.gates) == 0:
            raise GeometryFailure("Bad walled area shape!")

        if real:
            for gate in self.gates:
                gate.set(self.shape.smooth_vertex(gate))

    def _build_road_stub(self, model, gate, reserved):
        """Split the single outer patch at a gate so a road can leave the city"""
        outer_wards = [w for w in model.patch_by_vertex(gate) if w not in self.patches]
        if len(outer_wards) != 1:
            return

        outer = outer_wards[0]
        if len(outer.shape) <= 3:
            return

        wall = self.shape.next(gate) - self.shape.prev(gate)
        out = Point(wall.y, -wall.x)

        def outwardness(v):
            if self.shape.contains(v) or v in reserved:
                return float("-inf")
            d = v - gate
            if d.length == 0:
                return float("-inf")
            return d.dot(out) / d.length

        farthest = outer.shape.max(outwardness)

        try:
            halves = outer.shape.split(gate, farthest)
        except GeometryFailure as e:
            logger.warning("Skipping road stub at %r: %s", gate, e)
            return

        idx = model.patches.index(outer)
        model.patches[idx:idx + 1] = [Patch(half) for half in halves]

    def build_towers(self):
        self.towers = []
        if self.real:
            length = len(self.shape)
            gates = set(self.gates)
            for i, t in enumerate(self.shape.vertices):
                if t not in gates and (self.segments[(i + length - 1) % length] or self.segments[i]):
                    self.towers.append(t)

    def get_radius(self):
        return max((v.length for v in self.shape.vertices), default=0.0)

    def borders_by(self, patch, v0, v1):
        """Check if a real wall segment runs along the patch edge v0 -> v1"""
        if patch in self.patches:
            index = self.shape.find_edge(v0, v1)
        else:
            index = self.shape.find_edge(v1, v0)
        return index != -1 and self.segments[index]

    def borders(self, patch):
        """Check if wall borders patch"""
        within_walls = patch in self.patches
        length = len(self.shape)

        for i in range(length):
            if self.segments[i]:
                v0 = self.shape.vertices[i]
                v1 = self.shape.vertices[(i + 1) % length]
                if within_walls:
                    index = patch.shape.find_edge(v0, v1)
                else:
                    index = patch.shape.find_edge(v1, v0)
                if index != -1:
                    return True
        return False
