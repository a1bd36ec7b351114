"""
Point class for 2D coordinates
"""
import math


class Point:
    """2D point with x, y coordinates.

    Points compare and hash by identity: a Point is the handle of a vertex,
    and neighbouring patches share the very same object. Moving a vertex
    (``set``) therefore moves it in every polygon that references it, and
    dictionaries keyed by points stay valid after the move.
    """

    __slots__ = ("x", "y")

    def __init__(self, x=0.0, y=0.0):
        self.x = float(x)
        self.y = float(y)

    def __repr__(self):
        return f"Point({self.x:.2f}, {self.y:.2f})"

    def __add__(self, other):
        return Point(self.x + other.x, self.y + other.y)

    def __sub__(self, other):
        return Point(self.x - other.x, self.y - other.y)

    def clone(self):
        return Point(self.x, self.y)

    def set(self, x, y=None):
        """Set coordinates. Can take Point or (x, y)"""
        if isinstance(x, Point):
            self.x = x.x
            self.y = x.y
        elif y is not None:
            self.x = float(x)
            self.y = float(y)
        else:
            raise ValueError("Invalid arguments")

    @property
    def length(self):
        return math.sqrt(self.x * self.x + self.y * self.y)

    def normalize(self, length=1.0):
        """Normalize to given length, returns self"""
        l = self.length
        if l > 0:
            self.x = (self.x / l) * length
            self.y = (self.y / l) * length
        return self

    def norm(self, length=1.0):
        """Return normalized copy"""
        l = self.length
        if l > 0:
            return Point((self.x / l) * length, (self.y / l) * length)
        return Point(0, 0)

    def dot(self, other):
        return self.x * other.x + self.y * other.y

    def rotate90(self):
        """Rotate 90 degrees counterclockwise"""
        return Point(-self.y, self.x)

    def rotate(self, angle):
        """Return a copy rotated by angle (radians)"""
        cos_a = math.cos(angle)
        sin_a = math.sin(angle)
        return Point(self.x * cos_a - self.y * sin_a, self.y * cos_a + self.x * sin_a)

    def atan(self):
        return math.atan2(self.y, self.x)

    def distance(self, other):
        dx = self.x - other.x
        dy = self.y - other.y
        return math.sqrt(dx * dx + dy * dy)

    def coords(self):
        return (self.x, self.y)
