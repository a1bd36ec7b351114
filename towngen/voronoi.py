"""
Voronoi diagram implementation
"""
from functools import cmp_to_key
from .point import Point
from .math_utils import sign
from .errors import GeometryFailure


class Triangle:
    """Delaunay triangle with its circumcircle"""

    def __init__(self, p1, p2, p3):
        # Determine orientation
        s = (p2.x - p1.x) * (p2.y + p1.y) + (p3.x - p2.x) * (p3.y + p2.y) + (p1.x - p3.x) * (p1.y + p3.y)

        self.p1 = p1
        if s > 0:
            self.p2 = p2
            self.p3 = p3
        else:
            self.p2 = p3
            self.p3 = p2

        # Calculate circumcenter
        x1 = (p1.x + p2.x) / 2
        y1 = (p1.y + p2.y) / 2
        x2 = (p2.x + p3.x) / 2
        y2 = (p2.y + p3.y) / 2

        dx1 = p1.y - p2.y
        dy1 = p2.x - p1.x
        dx2 = p2.y - p3.y
        dy2 = p3.x - p2.x

        if abs(dx1) < 1e-10:
            t2 = (x1 - x2) / dx2 if abs(dx2) > 1e-10 else 0
        else:
            tg1 = dy1 / dx1
            denom = dy2 - dx2 * tg1
            t2 = ((y1 - y2) - (x1 - x2) * tg1) / denom if abs(denom) > 1e-10 else 0

        self.c = Point(x2 + dx2 * t2, y2 + dy2 * t2)
        self.r = self.c.distance(p1)

    def has_edge(self, a, b):
        """Check if triangle has edge from a to b"""
        return ((self.p1 is a and self.p2 is b) or
                (self.p2 is a and self.p3 is b) or
                (self.p3 is a and self.p1 is b))

    def has_vertex(self, p):
        return self.p1 is p or self.p2 is p or self.p3 is p


class Region:
    """Voronoi region: a seed and the triangles around it"""

    def __init__(self, seed):
        self.seed = seed
        self.vertices = []

    def sort_vertices(self):
        """Sort triangles counterclockwise around the seed"""
        self.vertices.sort(key=cmp_to_key(self._compare_angles))
        return self

    def _compare_angles(self, v1, v2):
        x1 = v1.c.x - self.seed.x
        y1 = v1.c.y - self.seed.y
        x2 = v2.c.x - self.seed.x
        y2 = v2.c.y - self.seed.y

        # Quadrants first, so that the comparison stays consistent across the axis
        if x1 >= 0 and x2 < 0:
            return 1
        if x2 >= 0 and x1 < 0:
            return -1
        if x1 == 0 and x2 == 0:
            return sign(y1 - y2)

        return sign(x2 * y1 - x1 * y2)

    def center(self):
        """Average of the circumcenters"""
        if len(self.vertices) == 0:
            return Point(self.seed.x, self.seed.y)
        x = sum(v.c.x for v in self.vertices)
        y = sum(v.c.y for v in self.vertices)
        return Point(x / len(self.vertices), y / len(self.vertices))

    def borders(self, other):
        """Check if regions share an edge"""
        len1 = len(self.vertices)
        len2 = len(other.vertices)
        for i, v in enumerate(self.vertices):
            j = _index_of(other.vertices, v)
            if j != -1 and self.vertices[(i + 1) % len1] is other.vertices[(j + len2 - 1) % len2]:
                return True
        return False


class Voronoi:
    """Incremental Delaunay triangulation and its dual Voronoi diagram"""

    def __init__(self, minx, miny, maxx, maxy):
        self.triangles = []
        self._regions = {}
        self._regions_dirty = False

        c1 = Point(minx, miny)
        c2 = Point(minx, maxy)
        c3 = Point(maxx, miny)
        c4 = Point(maxx, maxy)
        self.frame = [c1, c2, c3, c4]
        self.points = [c1, c2, c3, c4]

        self.triangles.append(Triangle(c1, c2, c3))
        self.triangles.append(Triangle(c2, c3, c4))

        for p in self.points:
            self._regions[p] = self._build_region(p)

    def _is_real(self, tr):
        """Check if triangle is real (not using frame points)"""
        return not any(tr.has_vertex(f) for f in self.frame)

    def add_point(self, p):
        """Insert a point (Bowyer-Watson)"""
        to_split = [tr for tr in self.triangles if p.distance(tr.c) < tr.r]
        if len(to_split) == 0:
            return

        self.points.append(p)

        # Cavity boundary: edges not shared (in reverse) by another split triangle
        a = []
        b = []
        for t1 in to_split:
            e1 = True
            e2 = True
            e3 = True
            for t2 in to_split:
                if t2 is not t1:
                    if e1 and t2.has_edge(t1.p2, t1.p1):
                        e1 = False
                    if e2 and t2.has_edge(t1.p3, t1.p2):
                        e2 = False
                    if e3 and t2.has_edge(t1.p1, t1.p3):
                        e3 = False
                    if not (e1 or e2 or e3):
                        break
            if e1:
                a.append(t1.p1)
                b.append(t1.p2)
            if e2:
                a.append(t1.p2)
                b.append(t1.p3)
            if e3:
                a.append(t1.p3)
                b.append(t1.p1)

        index = 0
        for _ in range(len(a)):
            self.triangles.append(Triangle(p, a[index], b[index]))
            index = _index_of(a, b[index])
            if index == -1:
                raise GeometryFailure("Broken cavity while inserting a point")
            if index == 0:
                break
        else:
            raise GeometryFailure("Cavity boundary is not a single loop")

        for tr in to_split:
            self.triangles.remove(tr)

        self._regions_dirty = True

    def _build_region(self, p):
        r = Region(p)
        r.vertices = [tr for tr in self.triangles if tr.has_vertex(p)]
        return r.sort_vertices()

    @property
    def regions(self):
        if self._regions_dirty:
            self._regions = {p: self._build_region(p) for p in self.points}
            self._regions_dirty = False
        return self._regions

    def triangulation(self):
        """Get real triangles (without frame points)"""
        return [tr for tr in self.triangles if self._is_real(tr)]

    def partitioning(self):
        """Get regions that do not touch the frame, in point order"""
        regions = self.regions
        result = []
        for p in self.points:
            r = regions[p]
            if all(self._is_real(v) for v in r.vertices):
                result.append(r)
        return result

    def get_neighbours(self, r1):
        return [r2 for r2 in self.regions.values() if r2 is not r1 and r1.borders(r2)]

    @staticmethod
    def relax(voronoi, to_relax=None):
        """Lloyd relaxation: move selected seeds to their region centers and rebuild"""
        regions = voronoi.partitioning()
        points = [p for p in voronoi.points if not _contains(voronoi.frame, p)]

        if to_relax is None:
            to_relax = voronoi.points

        for r in regions:
            if _contains(to_relax, r.seed):
                index = _index_of(points, r.seed)
                if index != -1:
                    points.pop(index)
                points.append(r.center())

        return Voronoi.build(points)

    @staticmethod
    def build(vertices):
        """Build Voronoi diagram from vertices"""
        if len(vertices) == 0:
            return Voronoi(-100, -100, 100, 100)

        minx = min(v.x for v in vertices)
        miny = min(v.y for v in vertices)
        maxx = max(v.x for v in vertices)
        maxy = max(v.y for v in vertices)

        dx = (maxx - minx) * 0.5
        dy = (maxy - miny) * 0.5

        voronoi = Voronoi(minx - dx / 2, miny - dy / 2, maxx + dx / 2, maxy + dy / 2)
        for v in vertices:
            voronoi.add_point(v)

        return voronoi


def _index_of(items, item):
    for i, x in enumerate(items):
        if x is item:
            return i
    return -1


def _contains(items, item):
    return _index_of(items, item) != -1
