"""
Ward classes representing different city districts
"""
import enum
import math

from .polygon import Polygon
from .math_utils import distance2line, scalar, interpolate as geom_interpolate
from .cutter import Cutter
from .curtain_wall import CurtainWall


class WardKind(enum.Enum):
    GENERIC = "generic"
    CASTLE = "castle"
    CATHEDRAL = "cathedral"
    MARKET = "market"
    CRAFTSMEN = "craftsmen"
    MERCHANT = "merchant"
    PATRICIATE = "patriciate"
    ADMINISTRATION = "administration"
    GATE = "gate"
    SLUM = "slum"
    MILITARY = "military"
    PARK = "park"
    FARM = "farm"


def _solid(polygons):
    """Drop polygons with (near) zero area"""
    return [p for p in polygons if abs(p.square) > Polygon.DELTA]


def _longest_edge_vertex(poly):
    return poly.min(lambda v: -poly.vector(v).length)


class Ward:
    """Base ward: a patch with no buildings (countryside).

    Subclasses set ``kind`` and may override the static
    ``rate_location(model, patch)``: lower is better, ``inf`` forbids the
    patch. The base rating is constant, so such a ward takes the first
    candidate patch.
    """

    kind = WardKind.GENERIC
    label = None

    MAIN_STREET = 2.0
    REGULAR_STREET = 1.0
    ALLEY = 0.6

    MAX_ALLEY_DEPTH = 40
    MAX_ORTHO_DEPTH = 50
    ORTHO_ATTEMPTS = 10

    def __init__(self, model, patch):
        self.model = model
        self.patch = patch
        self.geometry = []

    @property
    def rng(self):
        return self.model.rng

    def create_geometry(self):
        self.geometry = []

    def get_label(self):
        return self.label

    @staticmethod
    def rate_location(model, patch):
        return 0

    def get_city_block(self):
        """Patch shape inset by half the width of the street on each edge"""
        model = self.model
        inset_dist = []
        inner_patch = model.wall is None or self.patch.within_walls

        for v0, v1 in self.patch.shape.edges():
            if model.wall is not None and model.wall.borders_by(self.patch, v0, v1):
                # Not too close to the wall
                inset_dist.append(self.MAIN_STREET / 2)
                continue

            on_street = inner_patch and (
                model.plaza is not None and model.plaza.shape.find_edge(v1, v0) != -1
            )
            if not on_street:
                on_street = any(
                    street.contains(v0) and street.contains(v1) for street in model.arteries
                )
            if on_street:
                width = self.MAIN_STREET
            elif inner_patch:
                width = self.REGULAR_STREET
            else:
                width = self.ALLEY
            inset_dist.append(width / 2)

        if self.patch.shape.is_convex():
            return self.patch.shape.shrink(inset_dist)
        return self.patch.shape.shrink_eq(self.REGULAR_STREET / 2)

    def filter_outskirts(self):
        """Thin out buildings towards the edges that face open country"""
        model = self.model
        shape = self.patch.shape
        populated_edges = []

        def add_edge(v1, v2, factor):
            dx = v2.x - v1.x
            dy = v2.y - v1.y
            depth = max(
                (distance2line(v1.x, v1.y, dx, dy, v.x, v.y)
                 for v in shape.vertices if v is not v1 and v is not v2),
                default=0.0,
            )
            if depth > 0:
                populated_edges.append((v1.x, v1.y, dx, dy, depth * factor))

        for v1, v2 in shape.edges():
            on_road = any(street.contains(v1) and street.contains(v2) for street in model.arteries)
            if on_road:
                add_edge(v1, v2, 1)
            else:
                n = model.get_neighbour(self.patch, v1)
                if n is not None and n.within_city:
                    add_edge(v1, v2, 1 if model.is_enclosed(n) else 0.4)

        density = []
        for v in shape.vertices:
            if v in model.gates:
                density.append(1)
            elif all(p.within_city for p in model.patch_by_vertex(v)):
                density.append(2 * self.rng.float())
            else:
                density.append(0)

        def keep(building):
            min_dist = 1.0
            for x, y, dx, dy, d in populated_edges:
                for v in building.vertices:
                    min_dist = min(min_dist, distance2line(x, y, dx, dy, v.x, v.y) / d)

            weights = shape.interpolate(building.center)
            p = sum(density[j] * weights[j] for j in range(len(weights)))
            min_dist = min_dist / p if p > 0 else float("inf")

            return self.rng.fuzzy(1) > min_dist

        self.geometry = [b for b in self.geometry if keep(b)]

    @staticmethod
    def create_alleys(poly, min_sq, grid_chaos, size_chaos, rng, empty_prob=0.04, split=True, depth=0):
        """Recursively bisect a block into building lots.

        Each cut goes through the longest edge; ``grid_chaos`` spreads the cut
        position and angle, ``size_chaos`` jitters the size at which a lot is
        considered small enough, ``empty_prob`` leaves some lots empty.
        """
        if depth > Ward.MAX_ALLEY_DEPTH or len(poly) < 3:
            return _solid([poly])

        v = _longest_edge_vertex(poly)

        spread = 0.8 * grid_chaos
        ratio = (1 - spread) / 2 + rng.float() * spread

        # Small blocks are cut straight to keep buildings rectangular
        angle_spread = math.pi / 6 * grid_chaos * (0.0 if abs(poly.square) < min_sq * 4 else 1.0)
        b = (rng.float() - 0.5) * angle_spread

        halves = Cutter.bisect(poly, v, ratio, b, Ward.ALLEY if split else 0.0)
        if len(halves) < 2:
            return _solid([poly])

        buildings = []
        for half in halves:
            if abs(half.square) < min_sq * math.pow(2, 4 * size_chaos * (rng.float() - 0.5)):
                if not rng.bool(empty_prob):
                    buildings.extend(_solid([half]))
            else:
                should_split = abs(half.square) > min_sq / (rng.float() * rng.float())
                buildings.extend(Ward.create_alleys(
                    half, min_sq, grid_chaos, size_chaos, rng, empty_prob, should_split, depth + 1
                ))

        return buildings

    @staticmethod
    def create_ortho_building(poly, min_block_sq, fill, rng):
        """Split a block with cuts parallel to its own axes"""

        def cut_block(poly, c1, c2, depth):
            v0 = _longest_edge_vertex(poly)
            v1 = poly.next(v0)
            v = v1 - v0

            ratio = 0.4 + rng.float() * 0.2
            p1 = geom_interpolate(v0, v1, ratio)

            if abs(scalar(v.x, v.y, c1.x, c1.y)) < abs(scalar(v.x, v.y, c2.x, c2.y)):
                c = c1
            else:
                c = c2

            halves = poly.cut(p1, p1 + c)
            if len(halves) < 2:
                return []

            buildings = []
            for half in halves:
                if (depth >= Ward.MAX_ORTHO_DEPTH
                        or abs(half.square) < min_block_sq * math.pow(2, rng.normal() * 2 - 1)):
                    if rng.bool(fill):
                        buildings.extend(_solid([half]))
                else:
                    buildings.extend(cut_block(half, c1, c2, depth + 1))
            return buildings

        if abs(poly.square) < min_block_sq:
            return _solid([poly])

        c1 = poly.vector(_longest_edge_vertex(poly))
        c2 = c1.rotate90()
        for _ in range(Ward.ORTHO_ATTEMPTS):
            blocks = cut_block(poly, c1, c2, 0)
            if len(blocks) > 0:
                return blocks
        return _solid([poly])


class CommonWard(Ward):
    """Ward of ordinary houses split by alleys"""

    def __init__(self, model, patch, min_sq, grid_chaos, size_chaos, empty_prob=0.04):
        super().__init__(model, patch)
        self.min_sq = min_sq
        self.grid_chaos = grid_chaos
        self.size_chaos = size_chaos
        self.empty_prob = empty_prob

    def create_geometry(self):
        block = self.get_city_block()
        self.geometry = Ward.create_alleys(
            block, self.min_sq, self.grid_chaos, self.size_chaos, self.rng, self.empty_prob
        )

        if not self.model.is_enclosed(self.patch):
            self.filter_outskirts()


class CraftsmenWard(CommonWard):
    kind = WardKind.CRAFTSMEN
    label = "Craftsmen"

    def __init__(self, model, patch):
        rng = model.rng
        super().__init__(
            model, patch,
            10 + 80 * rng.float() * rng.float(),  # small to large
            0.5 + rng.float() * 0.2,
            0.6,
        )


class Slum(CommonWard):
    kind = WardKind.SLUM
    label = "Slum"

    def __init__(self, model, patch):
        rng = model.rng
        super().__init__(
            model, patch,
            10 + 30 * rng.float() * rng.float(),  # small to medium
            0.6 + rng.float() * 0.4,  # chaotic
            0.8,
            0.03,
        )

    @staticmethod
    def rate_location(model, patch):
        # As far from the center as possible
        center = model.plaza.shape.center if model.plaza else model.center
        return -patch.shape.distance(center)


class MerchantWard(CommonWard):
    kind = WardKind.MERCHANT
    label = "Merchant"

    def __init__(self, model, patch):
        rng = model.rng
        super().__init__(
            model, patch,
            50 + 60 * rng.float() * rng.float(),  # medium to large
            0.5 + rng.float() * 0.3,
            0.7,
            0.15,
        )

    @staticmethod
    def rate_location(model, patch):
        # As close to the center as possible
        center = model.plaza.shape.center if model.plaza else model.center
        return patch.shape.distance(center)


class GateWard(CommonWard):
    kind = WardKind.GATE
    label = "Gate"

    def __init__(self, model, patch):
        rng = model.rng
        super().__init__(
            model, patch,
            10 + 50 * rng.float() * rng.float(),
            0.5 + rng.float() * 0.3,
            0.7,
        )


class AdministrationWard(CommonWard):
    kind = WardKind.ADMINISTRATION
    label = "Administration"

    def __init__(self, model, patch):
        rng = model.rng
        super().__init__(
            model, patch,
            80 + 30 * rng.float() * rng.float(),  # large
            0.1 + rng.float() * 0.3,  # regular
            0.3,
        )

    @staticmethod
    def rate_location(model, patch):
        # Ideally overlooking the plaza, otherwise as close to it as possible
        if model.plaza is not None:
            if patch.shape.borders(model.plaza.shape):
                return 0
            return patch.shape.distance(model.plaza.shape.center)
        return patch.shape.distance(model.center)


class PatriciateWard(CommonWard):
    kind = WardKind.PATRICIATE
    label = "Patriciate"

    def __init__(self, model, patch):
        rng = model.rng
        super().__init__(
            model, patch,
            80 + 30 * rng.float() * rng.float(),  # large
            0.5 + rng.float() * 0.3,
            0.8,
            0.2,  # gardens
        )

    @staticmethod
    def rate_location(model, patch):
        # Likes parks, dislikes slums
        rate = 0
        for p in model.patches:
            if p.ward is not None and p.shape.borders(patch.shape):
                if p.ward.kind is WardKind.PARK:
                    rate -= 1
                elif p.ward.kind is WardKind.SLUM:
                    rate += 1
        return rate


class MilitaryWard(Ward):
    kind = WardKind.MILITARY
    label = "Military"

    def create_geometry(self):
        block = self.get_city_block()
        rng = self.rng
        self.geometry = Ward.create_alleys(
            block,
            math.sqrt(abs(block.square)) * (1 + rng.float()),
            0.1 + rng.float() * 0.3,  # regular
            0.3,
            rng,
            0.25,  # squares
        )

    @staticmethod
    def rate_location(model, patch):
        # Should border the citadel or the city walls
        if model.citadel is not None and model.citadel.shape.borders(patch.shape):
            return 0
        if model.wall is not None and model.wall.borders(patch):
            return 1
        return 0 if (model.citadel is None and model.wall is None) else float("inf")


class Market(Ward):
    kind = WardKind.MARKET
    label = "Market"

    def create_geometry(self):
        rng = self.rng
        statue = rng.bool(0.6)
        offset = statue or rng.bool(0.3)

        v0 = v1 = None
        if statue or offset:
            longest = -1.0
            for p0, p1 in self.patch.shape.edges():
                length = p0.distance(p1)
                if length > longest:
                    longest = length
                    v0, v1 = p0, p1

        if statue:
            obj = Polygon.rect(1 + rng.float(), 1 + rng.float())
            obj.rotate((v1 - v0).atan())
        else:
            obj = Polygon.circle(1 + rng.float())

        centroid = self.patch.shape.centroid
        if offset:
            gravity = geom_interpolate(v0, v1, 0.5)
            obj.offset(geom_interpolate(centroid, gravity, 0.2 + rng.float() * 0.4))
        else:
            obj.offset(centroid)

        self.geometry = [obj]

    @staticmethod
    def rate_location(model, patch):
        # One market should not touch another
        for p in model.inner:
            if p.ward is not None and p.ward.kind is WardKind.MARKET and p.shape.borders(patch.shape):
                return float("inf")

        # Market shouldn't be much larger than the plaza
        if model.plaza is not None:
            return patch.shape.square / model.plaza.shape.square
        return patch.shape.distance(model.center)


class Castle(Ward):
    kind = WardKind.CASTLE
    label = "Castle"

    def __init__(self, model, patch):
        super().__init__(model, patch)
        reserved = [
            v for v in patch.shape.vertices
            if any(not p.within_city for p in model.patch_by_vertex(v))
        ]
        self.wall = CurtainWall(True, model, [patch], reserved)

    def create_geometry(self):
        block = self.patch.shape.shrink_eq(self.MAIN_STREET * 2)
        self.geometry = Ward.create_ortho_building(
            block, math.sqrt(abs(block.square)) * 4, 0.6, self.rng
        )


class Cathedral(Ward):
    kind = WardKind.CATHEDRAL
    label = "Temple"

    def create_geometry(self):
        block = self.get_city_block()
        rng = self.rng
        if rng.bool(0.4):
            self.geometry = _solid(Cutter.ring(block, 2 + rng.float() * 4))
        else:
            self.geometry = Ward.create_ortho_building(block, 50, 0.8, rng)

    @staticmethod
    def rate_location(model, patch):
        # Ideally overlooking the plaza, otherwise as close to it as possible
        if model.plaza is not None and patch.shape.borders(model.plaza.shape):
            return -1 / patch.shape.square
        center = model.plaza.shape.center if model.plaza else model.center
        return patch.shape.distance(center) * patch.shape.square


class Park(Ward):
    kind = WardKind.PARK
    label = "Park"

    def create_geometry(self):
        block = self.get_city_block()
        if block.compactness >= 0.7:
            self.geometry = Cutter.radial(block, None, self.ALLEY)
        else:
            self.geometry = Cutter.semi_radial(block, None, self.ALLEY)


class Farm(Ward):
    kind = WardKind.FARM
    label = "Farm"

    def create_geometry(self):
        rng = self.rng
        housing = Polygon.rect(4, 4)
        verts = self.patch.shape.vertices

        rand_v = verts[math.floor(rng.float() * len(verts))]
        pos = geom_interpolate(rand_v, self.patch.shape.centroid, 0.3 + rng.float() * 0.4)

        housing.rotate(rng.float() * math.pi)
        housing.offset(pos)

        self.geometry = Ward.create_ortho_building(housing, 8, 0.5, rng)
