"""
Medieval Fantasy City Generator
Procedural town layouts: patches, walls, streets, wards and buildings.
"""

__version__ = "1.0.0"

# Core classes
from .model import Model, Phase
from .patch import Patch
from .polygon import Polygon
from .point import Point
from .voronoi import Voronoi
from .graph import Graph, Node
from .curtain_wall import CurtainWall
from .topology import Topology
from .random import Random
from .cutter import Cutter
from .errors import GenerationError, GeometryFailure, PathNotFound, ExhaustedRetries
from .snapshot import CitySnapshot, PatchSnapshot, WallSnapshot, size_class

# Ward types
from .ward import (
    WardKind,
    Ward,
    CommonWard,
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

__all__ = [
    # Core
    'Model',
    'Phase',
    'Patch',
    'Polygon',
    'Point',
    'Voronoi',
    'Graph',
    'Node',
    'CurtainWall',
    'Topology',
    'Random',
    'Cutter',
    # Errors
    'GenerationError',
    'GeometryFailure',
    'PathNotFound',
    'ExhaustedRetries',
    # Output
    'CitySnapshot',
    'PatchSnapshot',
    'WallSnapshot',
    'size_class',
    # Wards
    'WardKind',
    'Ward',
    'CommonWard',
    'CraftsmenWard',
    'MerchantWard',
    'Slum',
    'Market',
    'Castle',
    'GateWard',
    'AdministrationWard',
    'MilitaryWard',
    'PatriciateWard',
    'Park',
    'Cathedral',
    'Farm',
]
