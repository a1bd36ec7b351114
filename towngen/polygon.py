"""
Polygon class for 2D polygons
"""
import math
from .point import Point
from .math_utils import cross, intersect_lines, interpolate as geom_interpolate
from .errors import GeometryFailure


class Polygon:
    """2D polygon represented as a list of points.

    The polygon keeps the Point objects it is given, so several polygons can
    share vertices. Use ``copy`` for an independent polygon.
    """

    DELTA = 0.000001

    def __init__(self, vertices=None):
        if vertices is None:
            self.vertices = []
        else:
            self.vertices = [v if isinstance(v, Point) else Point(v[0], v[1]) for v in vertices]

    def __len__(self):
        return len(self.vertices)

    def __getitem__(self, index):
        return self.vertices[index]

    def __setitem__(self, index, value):
        self.vertices[index] = value

    def __iter__(self):
        return iter(self.vertices)

    def __repr__(self):
        return f"Polygon({len(self.vertices)} vertices)"

    def copy(self):
        """Create a copy of the polygon with its own points"""
        return Polygon([v.clone() for v in self.vertices])

    def set(self, points):
        """Move every vertex in place to the matching point of ``points``"""
        for v, p in zip(self.vertices, points):
            v.set(p)

    def append(self, point):
        self.vertices.append(point)

    def index_of(self, point):
        """Find index of point (by identity)"""
        for i, v in enumerate(self.vertices):
            if v is point:
                return i
        return -1

    def contains(self, point):
        """Check if the point is one of the vertices"""
        return self.index_of(point) != -1

    @property
    def square(self):
        """Signed area, positive for counter-clockwise winding"""
        if len(self.vertices) < 3:
            return 0.0
        s = 0.0
        length = len(self.vertices)
        for i in range(length):
            v1 = self.vertices[i]
            v2 = self.vertices[(i + 1) % length]
            s += v1.x * v2.y - v2.x * v1.y
        return s * 0.5

    @property
    def perimeter(self):
        if len(self.vertices) < 2:
            return 0.0
        length = 0.0
        for v0, v1 in self.edges():
            length += v0.distance(v1)
        return length

    @property
    def compactness(self):
        """Compactness measure (1.0 for circle, 0.79 for square, 0.60 for triangle)"""
        p = self.perimeter
        if p == 0:
            return 0.0
        return 4 * math.pi * abs(self.square) / (p * p)

    @property
    def center(self):
        """Fast approximation of centroid (average of vertices)"""
        if len(self.vertices) == 0:
            return Point(0, 0)
        x = sum(v.x for v in self.vertices)
        y = sum(v.y for v in self.vertices)
        return Point(x / len(self.vertices), y / len(self.vertices))

    @property
    def centroid(self):
        """True centroid"""
        if len(self.vertices) < 3:
            return self.center
        x = 0.0
        y = 0.0
        a = 0.0
        for v0, v1 in self.edges():
            f = cross(v0.x, v0.y, v1.x, v1.y)
            a += f
            x += (v0.x + v1.x) * f
            y += (v0.y + v1.y) * f
        if abs(a) < 1e-10:
            return self.center
        s6 = 1 / (3 * a)
        return Point(s6 * x, s6 * y)

    def edges(self):
        """Yield (v0, v1) for every edge including the closing one"""
        length = len(self.vertices)
        for i in range(length):
            yield self.vertices[i], self.vertices[(i + 1) % length]

    def next(self, point):
        """Get next vertex after given point"""
        index = self.index_of(point)
        if index == -1:
            return None
        return self.vertices[(index + 1) % len(self.vertices)]

    def prev(self, point):
        """Get previous vertex before given point"""
        index = self.index_of(point)
        if index == -1:
            return None
        return self.vertices[(index + len(self.vertices) - 1) % len(self.vertices)]

    def vector(self, point):
        """Get vector from point to next point"""
        next_p = self.next(point)
        if next_p is None:
            return Point(0, 0)
        return next_p - point

    def find_edge(self, a, b):
        """Find edge index from a to b"""
        index = self.index_of(a)
        if index == -1:
            return -1
        if self.vertices[(index + 1) % len(self.vertices)] is b:
            return index
        return -1

    def is_convex_vertex(self, v):
        v0 = self.prev(v)
        v2 = self.next(v)
        if v0 is None or v2 is None:
            return False
        return cross(v.x - v0.x, v.y - v0.y, v2.x - v.x, v2.y - v.y) > 0

    def is_convex(self):
        return all(self.is_convex_vertex(v) for v in self.vertices)

    def smooth_vertex(self, v, f=1.0):
        """Weighted average of a vertex and its two neighbours"""
        prev_v = self.prev(v)
        next_v = self.next(v)
        if prev_v is None or next_v is None:
            return Point(v.x, v.y)
        return Point(
            (prev_v.x + v.x * f + next_v.x) / (2 + f),
            (prev_v.y + v.y * f + next_v.y) / (2 + f)
        )

    def smooth_vertex_eq(self, f=1.0):
        """Smooth all vertices"""
        length = len(self.vertices)
        if length < 3:
            return self.copy()
        result = []
        for i in range(length):
            v0 = self.vertices[(i + length - 1) % length]
            v1 = self.vertices[i]
            v2 = self.vertices[(i + 1) % length]
            result.append(Point(
                (v0.x + v1.x * f + v2.x) / (2 + f),
                (v0.y + v1.y * f + v2.y) / (2 + f)
            ))
        return Polygon(result)

    def rotate(self, angle):
        """Rotate polygon around the origin"""
        cos_a = math.cos(angle)
        sin_a = math.sin(angle)
        for v in self.vertices:
            v.set(v.x * cos_a - v.y * sin_a, v.y * cos_a + v.x * sin_a)

    def offset(self, point):
        for v in self.vertices:
            v.x += point.x
            v.y += point.y

    def distance(self, point):
        """Minimal distance from any vertex to point"""
        if len(self.vertices) == 0:
            return float('inf')
        return min(v.distance(point) for v in self.vertices)

    def borders(self, another):
        """Check if polygons share an edge"""
        len2 = len(another.vertices)
        for i, v in enumerate(self.vertices):
            j = another.index_of(v)
            if j != -1:
                next_v = self.vertices[(i + 1) % len(self.vertices)]
                if (next_v is another.vertices[(j + 1) % len2] or
                        next_v is another.vertices[(j + len2 - 1) % len2]):
                    return True
        return False

    def min(self, func):
        """Find vertex that minimizes function (first one wins ties)"""
        if len(self.vertices) == 0:
            return None
        best = self.vertices[0]
        best_val = func(best)
        for v in self.vertices[1:]:
            val = func(v)
            if val < best_val:
                best = v
                best_val = val
        return best

    def max(self, func):
        """Find vertex that maximizes function (first one wins ties)"""
        if len(self.vertices) == 0:
            return None
        best = self.vertices[0]
        best_val = func(best)
        for v in self.vertices[1:]:
            val = func(v)
            if val > best_val:
                best = v
                best_val = val
        return best

    def shrink(self, distances):
        """Move every edge inwards by its distance"""
        result = self.copy()
        for i, (v1, v2) in enumerate(self.edges()):
            d = distances[i] if i < len(distances) else 0
            if d > 0:
                n = (v2 - v1).rotate90().norm(d)
                result = result.cut(v1 + n, v2 + n)[0]
        return result

    def shrink_eq(self, d):
        """Shrink all edges by same distance"""
        return self.shrink([d] * len(self.vertices))

    def peel(self, v1, d):
        """Cut off a strip of width d along the edge starting at v1"""
        i1 = self.index_of(v1)
        if i1 == -1:
            return self.copy()
        v2 = self.vertices[(i1 + 1) % len(self.vertices)]
        n = (v2 - v1).rotate90().norm(d)
        return self.cut(v1 + n, v2 + n)[0]

    def cut(self, p1, p2, gap=0.0):
        """Split the polygon by the infinite line through p1 and p2.

        Returns two halves when the line crosses exactly two edges, otherwise
        a single copy of the polygon. With a gap, each half loses gap/2 along
        the cut.
        """
        x1, y1 = p1.x, p1.y
        dx1, dy1 = p2.x - x1, p2.y - y1

        length = len(self.vertices)
        edge1 = 0
        ratio1 = 0.0
        edge2 = 0
        ratio2 = 0.0
        count = 0

        for i in range(length):
            v0 = self.vertices[i]
            v1 = self.vertices[(i + 1) % length]

            t = intersect_lines(x1, y1, dx1, dy1, v0.x, v0.y, v1.x - v0.x, v1.y - v0.y)
            if t is not None and 0 <= t[1] <= 1:
                if count == 0:
                    edge1 = i
                    ratio1 = t[0]
                elif count == 1:
                    edge2 = i
                    ratio2 = t[0]
                count += 1

        if count != 2:
            return [self.copy()]

        point1 = geom_interpolate(p1, p2, ratio1)
        point2 = geom_interpolate(p1, p2, ratio2)

        half1 = Polygon(
            [point1] + [v.clone() for v in self.vertices[edge1 + 1:edge2 + 1]] + [point2]
        )
        half2 = Polygon(
            [point2.clone()]
            + [v.clone() for v in self.vertices[edge2 + 1:] + self.vertices[:edge1 + 1]]
            + [point1.clone()]
        )

        if gap > 0:
            half1 = half1.peel(half1.vertices[-1], gap / 2)
            half2 = half2.peel(half2.vertices[-1], gap / 2)

        v = self.vertices[(edge1 + 1) % length] - self.vertices[edge1]
        if cross(dx1, dy1, v.x, v.y) > 0:
            return [half1, half2]
        return [half2, half1]

    def split(self, p1, p2):
        """Split polygon at two of its vertices; halves share the vertices"""
        i1 = self.index_of(p1)
        i2 = self.index_of(p2)
        if i1 == -1 or i2 == -1:
            raise GeometryFailure("Split points are not vertices of the polygon")
        return self.spliti(i1, i2)

    def spliti(self, i1, i2):
        if i1 > i2:
            i1, i2 = i2, i1
        halves = [
            Polygon(self.vertices[i1:i2 + 1]),
            Polygon(self.vertices[i2:] + self.vertices[:i1 + 1])
        ]
        if any(len(half) < 3 for half in halves):
            raise GeometryFailure("Degenerate split")
        return halves

    def interpolate(self, p):
        """Inverse-distance weights of the vertices at point p"""
        weights = []
        for v in self.vertices:
            d = v.distance(p)
            weights.append(1.0 / d if d > 0 else 1e10)
        total = sum(weights)
        return [w / total for w in weights]

    def to_list(self):
        return [v.coords() for v in self.vertices]

    @staticmethod
    def rect(w=1.0, h=1.0):
        """Create rectangle"""
        return Polygon([
            Point(-w/2, -h/2),
            Point(w/2, -h/2),
            Point(w/2, h/2),
            Point(-w/2, h/2)
        ])

    @staticmethod
    def regular(n=8, r=1.0):
        """Create regular polygon"""
        return Polygon([
            Point(r * math.cos(i / n * math.pi * 2), r * math.sin(i / n * math.pi * 2))
            for i in range(n)
        ])

    @staticmethod
    def circle(r=1.0):
        """Create circle approximation"""
        return Polygon.regular(16, r)
