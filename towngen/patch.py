"""
Patch class representing a city region
"""
from .polygon import Polygon


class Patch:
    """A patch (district cell) of the city"""

    def __init__(self, shape):
        self.shape = shape if isinstance(shape, Polygon) else Polygon(shape)
        self.ward = None
        self.within_walls = False
        self.within_city = False

    def __repr__(self):
        kind = self.ward.kind.value if self.ward else None
        return f"Patch({len(self.shape)} vertices, ward={kind})"

    @staticmethod
    def from_region(region):
        """Create patch from Voronoi region, sharing its circumcenters"""
        return Patch(Polygon([tr.c for tr in region.vertices]))
