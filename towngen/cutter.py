"""
Cutter class for polygon operations
"""
from .polygon import Polygon
from .point import Point
from .math_utils import interpolate


class Cutter:
    """Utility class for cutting polygons"""

    @staticmethod
    def bisect(poly, vertex, ratio=0.5, angle=0.0, gap=0.0):
        """Cut through the edge starting at vertex, roughly perpendicular to it.

        The cut crosses the edge at ``ratio`` of its length and is tilted by
        ``angle`` radians from the perpendicular.
        """
        next_v = poly.next(vertex)
        if next_v is None:
            return [poly.copy()]

        p1 = interpolate(vertex, next_v, ratio)
        d = (next_v - vertex).rotate(angle)
        p2 = Point(p1.x - d.y, p1.y + d.x)

        return poly.cut(p1, p2, gap)

    @staticmethod
    def radial(poly, center=None, gap=0.0):
        """Create triangular sectors from a center to each edge"""
        if center is None:
            center = poly.centroid

        sectors = [Polygon([center.clone(), v0.clone(), v1.clone()]) for v0, v1 in poly.edges()]

        if gap > 0:
            half_gap = gap / 2
            sectors = [sector.shrink([half_gap, 0, half_gap]) for sector in sectors]

        return sectors

    @staticmethod
    def semi_radial(poly, center=None, gap=0.0):
        """Create sectors from the vertex nearest to the centroid to each far edge"""
        if center is None:
            centroid = poly.centroid
            center = poly.min(lambda v: v.distance(centroid))

        half_gap = gap / 2
        sectors = []

        for v0, v1 in poly.edges():
            if v0 is center or v1 is center:
                continue
            sector = Polygon([center.clone(), v0.clone(), v1.clone()])
            if gap > 0:
                # No gap along the outline of the polygon itself
                d = [
                    0 if poly.find_edge(center, v0) != -1 else half_gap,
                    0,
                    0 if poly.find_edge(v1, center) != -1 else half_gap,
                ]
                sector = sector.shrink(d)
            sectors.append(sector)

        return sectors

    @staticmethod
    def ring(poly, thickness):
        """Peel a band of given thickness off every edge, shortest edges first"""
        slices = []
        for v1, v2 in poly.edges():
            v = v2 - v1
            n = v.rotate90().norm(thickness)
            slices.append((v.length, v1 + n, v2 + n))

        slices.sort(key=lambda s: s[0])

        peel = []
        p = poly
        for _, p1, p2 in slices:
            halves = p.cut(p1, p2)
            p = halves[0]
            if len(halves) == 2:
                peel.append(halves[1])

        return peel
