"""
Mathematical utility functions
"""
import math


def gate(value, min_val, max_val):
    """Clamp value between min and max"""
    return min_val if value < min_val else (value if value < max_val else max_val)


def sign(value):
    """Sign of value: -1, 0, or 1"""
    if value == 0:
        return 0
    return -1 if value < 0 else 1


def cross(x1, y1, x2, y2):
    """2D cross product"""
    return x1 * y2 - y1 * x2


def scalar(x1, y1, x2, y2):
    """Scalar product"""
    return x1 * x2 + y1 * y2


def distance2line(x1, y1, dx, dy, px, py):
    """Perpendicular distance from (px, py) to the infinite line (x1, y1) + t*(dx, dy)"""
    length = math.sqrt(dx * dx + dy * dy)
    if length == 0:
        return math.sqrt((px - x1) ** 2 + (py - y1) ** 2)
    return abs(dx * py - dy * px + (y1 + dy) * x1 - (x1 + dx) * y1) / length


def interpolate(p1, p2, ratio=0.5):
    """Interpolate between two points"""
    from .point import Point
    return Point(
        p1.x + (p2.x - p1.x) * ratio,
        p1.y + (p2.y - p1.y) * ratio
    )


def intersect_lines(x1, y1, dx1, dy1, x2, y2, dx2, dy2):
    """
    Find intersection of two lines.
    Returns (t1, t2) where intersection is at (x1 + t1*dx1, y1 + t1*dy1)
    or None if lines are parallel.
    """
    d = dx1 * dy2 - dy1 * dx2
    if abs(d) < 1e-10:
        return None

    t2 = (dy1 * (x2 - x1) - dx1 * (y2 - y1)) / d
    if dx1 != 0:
        t1 = (x2 - x1 + dx2 * t2) / dx1
    else:
        t1 = (y2 - y1 + dy2 * t2) / dy1
    return t1, t2
