"""
Model class - core city generation logic
"""
import asyncio
import enum
import logging
import math

from .point import Point
from .polygon import Polygon
from .random import Random
from .voronoi import Voronoi
from .patch import Patch
from .curtain_wall import CurtainWall
from .topology import Topology
from .errors import GenerationError, GeometryFailure, PathNotFound, ExhaustedRetries
from .ward import (
    Ward,
    CraftsmenWard,
    MerchantWard,
    Slum,
    Market,
    Castle,
    GateWard,
    AdministrationWard,
    MilitaryWard,
    PatriciateWard,
    Park,
    Cathedral,
    Farm,
)

logger = logging.getLogger(__name__)


class Phase(enum.Enum):
    UNINITIALIZED = "uninitialized"
    PATCHES_BUILT = "patches_built"
    JUNCTIONS_OPTIMIZED = "junctions_optimized"
    WALLS_BUILT = "walls_built"
    STREETS_BUILT = "streets_built"
    WARDS_ASSIGNED = "wards_assigned"
    READY = "ready"
    FAILED = "failed"


class Model:
    """Main model for city generation.

    Construction runs the whole pipeline. A failed attempt is thrown away and
    the pipeline restarts with a seed drawn from the failed attempt's stream,
    up to ``MAX_ATTEMPTS`` times; ``seed`` holds the seed of the attempt that
    succeeded, so ``Model(n, model.seed)`` rebuilds the same city.
    """

    # Ward types distribution
    WARDS = [
        CraftsmenWard,
        CraftsmenWard,
        MerchantWard,
        CraftsmenWard,
        CraftsmenWard,
        Cathedral,
        CraftsmenWard,
        CraftsmenWard,
        CraftsmenWard,
        CraftsmenWard,
        CraftsmenWard,
        CraftsmenWard,
        CraftsmenWard,
        CraftsmenWard,
        AdministrationWard,
        CraftsmenWard,
        Slum,
        CraftsmenWard,
        Slum,
        PatriciateWard,
        Market,
        Slum,
        CraftsmenWard,
        CraftsmenWard,
        CraftsmenWard,
        Slum,
        CraftsmenWard,
        CraftsmenWard,
        CraftsmenWard,
        MilitaryWard,
        Slum,
        CraftsmenWard,
        Park,
        PatriciateWard,
        Market,
        MerchantWard,
    ]

    MAX_ATTEMPTS = 5
    JUNCTION_DISTANCE = 8
    CITADEL_COMPACTNESS = 0.75

    def __init__(self, n_patches=15, seed=-1):
        self._setup(n_patches, seed)
        for _ in self._build():
            pass

    @classmethod
    async def create_async(cls, n_patches=15, seed=-1):
        """Build a model, yielding to the event loop between phases"""
        model = cls.__new__(cls)
        model._setup(n_patches, seed)
        for _ in model._build():
            await asyncio.sleep(0)
        return model

    def _setup(self, n_patches, seed):
        self.n_patches = n_patches if n_patches != -1 else 15
        self.rng = Random(seed)
        self.seed = self.rng.get_seed()
        self.attempts = 0
        self.state = Phase.UNINITIALIZED
        self._reset()

    def _reset(self):
        """Clear everything a previous attempt may have produced"""
        self.topology = None
        self.patches = []
        self.inner = []
        self.citadel = None
        self.plaza = None
        self.center = Point(0, 0)
        self.border = None
        self.wall = None
        self.city_radius = 0.0
        self.gates = []
        self.arteries = []
        self.streets = []
        self.roads = []

    def _phases(self):
        return [
            (Phase.PATCHES_BUILT, self.build_patches),
            (Phase.JUNCTIONS_OPTIMIZED, self.optimize_junctions),
            (Phase.WALLS_BUILT, self.build_walls),
            (Phase.STREETS_BUILT, self.build_streets),
            (Phase.WARDS_ASSIGNED, self.create_wards),
            (Phase.READY, self.build_geometry),
        ]

    def _build(self):
        """Run attempts until one succeeds; yields after every phase"""
        last_failure = None

        for attempt in range(1, self.MAX_ATTEMPTS + 1):
            self.attempts = attempt
            self.seed = self.rng.get_seed()
            self.state = Phase.UNINITIALIZED
            self._reset()

            self.plaza_needed = self.rng.bool()
            self.citadel_needed = self.rng.bool()
            self.walls_needed = self.rng.bool()

            failure = None
            for phase, step in self._phases():
                failure = self._run_phase(step)
                if failure is not None:
                    break
                self.state = phase
                logger.debug("Attempt %d (seed %d): %s", attempt, self.seed, phase.value)
                yield phase

            if failure is None:
                return

            self.state = Phase.FAILED
            last_failure = failure
            logger.warning("Attempt %d of %d (seed %d) failed: %s",
                           attempt, self.MAX_ATTEMPTS, self.seed, failure)
            self.rng.reset(self.rng.int(1, Random.n))

        raise ExhaustedRetries(self.MAX_ATTEMPTS, last_failure)

    @staticmethod
    def _run_phase(step):
        """Run a phase, turning a generation error into a returned failure"""
        try:
            return step()
        except GenerationError as e:
            return e
        except ArithmeticError as e:
            return GeometryFailure(f"Degenerate geometry: {e}")

    def build_patches(self):
        """Build Voronoi patches"""
        rng = self.rng
        sa = rng.float() * 2 * math.pi
        points = []
        for i in range(self.n_patches * 8):
            a = sa + math.sqrt(i) * 5
            r = 0 if i == 0 else 10 + i * (2 + rng.float())
            points.append(Point(math.cos(a) * r, math.sin(a) * r))

        voronoi = Voronoi.build(points)

        # Relax central wards
        for _ in range(3):
            to_relax = voronoi.points[:3] + [voronoi.points[self.n_patches]]
            voronoi = Voronoi.relax(voronoi, to_relax)

        voronoi.points.sort(key=lambda p: p.length)
        regions = voronoi.partitioning()

        self.patches = []
        self.inner = []

        for count, r in enumerate(regions):
            patch = Patch.from_region(r)
            self.patches.append(patch)

            if count == 0:
                self.center = patch.shape.min(lambda p: p.length)
                if self.plaza_needed:
                    self.plaza = patch
            elif count == self.n_patches and self.citadel_needed:
                self.citadel = patch
                self.citadel.within_city = True

            if count < self.n_patches:
                patch.within_city = True
                patch.within_walls = self.walls_needed
                self.inner.append(patch)

        if len(self.inner) < self.n_patches:
            return GeometryFailure(f"Only {len(self.inner)} of {self.n_patches} patches were built")
        return None

    def optimize_junctions(self):
        """Merge vertices of inner patches that are too close to each other"""
        patches_to_optimize = self.inner if self.citadel is None else self.inner + [self.citadel]

        wards_to_clean = []
        for w in patches_to_optimize:
            index = 0
            while index < len(w.shape):
                v0 = w.shape[index]
                v1 = w.shape[(index + 1) % len(w.shape)]

                if v0 is not v1 and v0.distance(v1) < self.JUNCTION_DISTANCE:
                    for w1 in self.patch_by_vertex(v1):
                        if w1 is not w:
                            w1.shape[w1.shape.index_of(v1)] = v0
                            wards_to_clean.append(w1)

                    v0.set((v0.x + v1.x) / 2, (v0.y + v1.y) / 2)
                    del w.shape.vertices[w.shape.index_of(v1)]
                else:
                    index += 1

        # Remove duplicate vertices
        for w in wards_to_clean:
            vertices = w.shape.vertices
            i = 0
            while i < len(vertices):
                v = vertices[i]
                vertices[i + 1:] = [u for u in vertices[i + 1:] if u is not v]
                i += 1

        for w in patches_to_optimize + wards_to_clean:
            if len(w.shape) < 3:
                return GeometryFailure("Junction merge collapsed a patch")
        return None

    def build_walls(self):
        """Build city walls (or just the city border) and the citadel"""
        reserved = list(self.citadel.shape.vertices) if self.citadel else []

        self.border = CurtainWall(self.walls_needed, self, self.inner, reserved)
        if self.walls_needed:
            self.wall = self.border
            self.wall.build_towers()

        radius = self.border.get_radius()
        self.patches = [p for p in self.patches if p.shape.distance(self.center) < radius * 3]

        self.gates = list(self.border.gates)

        if self.citadel is not None:
            castle = Castle(self, self.citadel)
            castle.wall.build_towers()
            self.citadel.ward = castle

            if self.citadel.shape.compactness < self.CITADEL_COMPACTNESS:
                return GeometryFailure("Bad citadel shape!")

            self.gates.extend(castle.wall.gates)
        return None

    def build_streets(self):
        """Route streets from every gate inwards and roads from border gates outwards"""

        def smooth_street(street):
            smoothed = street.smooth_vertex_eq(3)
            for i in range(1, len(street) - 1):
                street[i].set(smoothed[i])

        self.topology = Topology(self)
        self.streets = []
        self.roads = []

        for gate in self.gates:
            if self.plaza is not None:
                end = self.plaza.shape.min(lambda v: v.distance(gate))
            else:
                end = self.center

            street = self.topology.build_path(gate, end, self.topology.outer)
            if street is None:
                return PathNotFound("Unable to build a street!")
            self.streets.append(Polygon(street))

            if gate in self.border.gates:
                direction = gate.norm(1000)
                start = None
                dist = float("inf")
                for p in self.topology.node2pt.values():
                    d = p.distance(direction)
                    if d < dist:
                        dist = d
                        start = p

                road = self.topology.build_path(start, gate, self.topology.inner)
                if road is not None:
                    self.roads.append(Polygon(road))

        self._tidy_up_roads()

        for a in self.arteries:
            smooth_street(a)
        return None

    def _tidy_up_roads(self):
        """Merge streets and roads into non-overlapping arteries"""
        segments = []

        def cut_to_segments(street):
            v1 = street[0]
            for i in range(1, len(street)):
                v0 = v1
                v1 = street[i]

                # Segments along the plaza are not streets
                if self.plaza is not None and self.plaza.shape.contains(v0) and self.plaza.shape.contains(v1):
                    continue

                if not any(s0 is v0 and s1 is v1 for s0, s1 in segments):
                    segments.append((v0, v1))

        for street in self.streets:
            cut_to_segments(street)
        for road in self.roads:
            cut_to_segments(road)

        self.arteries = []
        while len(segments) > 0:
            start, end = segments.pop()

            attached = False
            for a in self.arteries:
                if a[0] is end:
                    a.vertices.insert(0, start)
                    attached = True
                    break
                elif a[-1] is start:
                    a.append(end)
                    attached = True
                    break

            if not attached:
                self.arteries.append(Polygon([start, end]))

    def create_wards(self):
        """Assign a ward to every patch"""
        rng = self.rng
        unassigned = list(self.inner)

        if self.plaza is not None:
            self.plaza.ward = Market(self, self.plaza)
            unassigned.remove(self.plaza)

        # Gate wards
        for gate in self.border.gates:
            for patch in self.patch_by_vertex(gate):
                if patch.within_city and patch.ward is None and rng.bool(0.2 if self.wall is None else 0.5):
                    patch.ward = GateWard(self, patch)
                    unassigned.remove(patch)

        wards = list(self.WARDS)
        # some shuffling
        for _ in range(len(wards) // 10):
            index = rng.int(0, len(wards) - 1)
            wards[index], wards[index + 1] = wards[index + 1], wards[index]

        while len(unassigned) > 0:
            ward_class = wards.pop(0) if len(wards) > 0 else Slum

            best_patch = None
            best_rate = float("inf")
            for patch in unassigned:
                rate = ward_class.rate_location(self, patch)
                if rate < best_rate:
                    best_rate = rate
                    best_patch = patch
            if best_patch is None:
                logger.debug("No place for %s ward", ward_class.kind.value)
                continue

            best_patch.ward = ward_class(self, best_patch)
            unassigned.remove(best_patch)

        # Outskirts
        if self.wall is not None:
            for gate in self.wall.gates:
                if not rng.bool(1 / max(self.n_patches - 5, 1)):
                    for patch in self.patch_by_vertex(gate):
                        if patch.ward is None:
                            patch.within_city = True
                            patch.ward = GateWard(self, patch)

        # Calculate radius and process the countryside
        self.city_radius = 0.0
        for patch in self.patches:
            if patch.within_city:
                for v in patch.shape:
                    self.city_radius = max(self.city_radius, v.length)
            elif patch.ward is None:
                if rng.bool(0.2) and patch.shape.compactness >= 0.7:
                    patch.ward = Farm(self, patch)
                else:
                    patch.ward = Ward(self, patch)
        return None

    def build_geometry(self):
        for patch in self.patches:
            patch.ward.create_geometry()
        return None

    @staticmethod
    def find_circumference(wards):
        """Outline of a group of patches made of the edges they don't share"""
        if len(wards) == 0:
            return Polygon()
        elif len(wards) == 1:
            return Polygon(wards[0].shape.vertices)

        A = []
        B = []
        for w1 in wards:
            for a, b in w1.shape.edges():
                if not any(w2.shape.find_edge(b, a) != -1 for w2 in wards):
                    A.append(a)
                    B.append(b)

        if len(A) == 0:
            raise GeometryFailure("Patches have no outer edges")

        result = Polygon()
        index = 0
        for _ in range(len(A)):
            result.append(A[index])
            index = next((i for i, a in enumerate(A) if a is B[index]), -1)
            if index == -1:
                raise GeometryFailure("Broken circumference")
            if index == 0:
                return result
        raise GeometryFailure("Circumference does not close")

    def patch_by_vertex(self, v):
        """Patches that have v as a vertex"""
        return [p for p in self.patches if p.shape.contains(v)]

    def get_neighbour(self, patch, v):
        """Patch across the edge that starts at v"""
        next_v = patch.shape.next(v)
        if next_v is None:
            return None
        for p in self.patches:
            if p.shape.find_edge(next_v, v) != -1:
                return p
        return None

    def get_neighbours(self, patch):
        return [p for p in self.patches if p is not patch and p.shape.borders(patch.shape)]

    def is_enclosed(self, patch):
        """Within the city and surrounded by the city on all sides"""
        return patch.within_city and (
            patch.within_walls or all(p.within_city for p in self.get_neighbours(patch))
        )
