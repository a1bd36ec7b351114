"""
Read-only snapshot of a generated city for renderers and exporters
"""
from dataclasses import dataclass
from typing import Optional, Tuple

Coords = Tuple[Tuple[float, float], ...]

SIZE_CLASSES = [
    (40, "Metropolis"),
    (24, "Large City"),
    (15, "Small City"),
    (10, "Large Town"),
    (6, "Small Town"),
]


def size_class(n_patches):
    """Presentation name for a city of n_patches"""
    for threshold, name in SIZE_CLASSES:
        if n_patches >= threshold:
            return name
    return "Unknown State"


def _coords(polygon):
    return tuple(v.coords() for v in polygon)


def _points(points):
    return tuple(p.coords() for p in points)


def _lists(coords):
    return [list(c) for c in coords]


@dataclass(frozen=True)
class PatchSnapshot:
    shape: Coords
    ward: Optional[str]
    label: Optional[str]
    buildings: Tuple[Coords, ...]
    within_city: bool
    within_walls: bool

    def to_dict(self):
        return {
            "shape": _lists(self.shape),
            "ward": self.ward,
            "label": self.label,
            "buildings": [_lists(b) for b in self.buildings],
            "within_city": self.within_city,
            "within_walls": self.within_walls,
        }


@dataclass(frozen=True)
class WallSnapshot:
    shape: Coords
    gates: Coords
    towers: Coords
    real: bool

    @classmethod
    def from_wall(cls, wall):
        return cls(
            shape=_coords(wall.shape),
            gates=_points(wall.gates),
            towers=_points(wall.towers),
            real=wall.real,
        )

    def to_dict(self):
        return {
            "shape": _lists(self.shape),
            "gates": _lists(self.gates),
            "towers": _lists(self.towers),
            "real": self.real,
        }


@dataclass(frozen=True)
class CitySnapshot:
    """Everything a renderer needs, copied out of a finished Model"""

    seed: int
    n_patches: int
    city_radius: float
    center: Tuple[float, float]
    patches: Tuple[PatchSnapshot, ...]
    arteries: Tuple[Coords, ...]
    streets: Tuple[Coords, ...]
    roads: Tuple[Coords, ...]
    border: WallSnapshot
    wall: Optional[WallSnapshot]
    citadel: Optional[WallSnapshot]
    plaza: Optional[Coords]

    @classmethod
    def from_model(cls, model):
        patches = []
        for p in model.patches:
            ward = p.ward
            patches.append(PatchSnapshot(
                shape=_coords(p.shape),
                ward=ward.kind.value if ward else None,
                label=ward.get_label() if ward else None,
                buildings=tuple(_coords(b) for b in ward.geometry) if ward else (),
                within_city=p.within_city,
                within_walls=p.within_walls,
            ))

        citadel = None
        if model.citadel is not None:
            citadel = WallSnapshot.from_wall(model.citadel.ward.wall)

        return cls(
            seed=model.seed,
            n_patches=model.n_patches,
            city_radius=model.city_radius,
            center=model.center.coords(),
            patches=tuple(patches),
            arteries=tuple(_coords(a) for a in model.arteries),
            streets=tuple(_coords(s) for s in model.streets),
            roads=tuple(_coords(r) for r in model.roads),
            border=WallSnapshot.from_wall(model.border),
            wall=WallSnapshot.from_wall(model.wall) if model.wall else None,
            citadel=citadel,
            plaza=_coords(model.plaza.shape) if model.plaza else None,
        )

    @property
    def size_class(self):
        return size_class(self.n_patches)

    def to_dict(self):
        """Convert to dictionary for JSON export"""
        return {
            "seed": self.seed,
            "n_patches": self.n_patches,
            "size_class": self.size_class,
            "city_radius": self.city_radius,
            "center": list(self.center),
            "patches": [p.to_dict() for p in self.patches],
            "arteries": [_lists(a) for a in self.arteries],
            "streets": [_lists(s) for s in self.streets],
            "roads": [_lists(r) for r in self.roads],
            "border": self.border.to_dict(),
            "wall": self.wall.to_dict() if self.wall else None,
            "citadel": self.citadel.to_dict() if self.citadel else None,
            "plaza": _lists(self.plaza) if self.plaza else None,
        }
