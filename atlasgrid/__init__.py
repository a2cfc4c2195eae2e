"""
Atlasgrid - grid reference labels and overlay geometry for atlas sheets.

This package divides a sheet extent into rows and columns, labels them in a
street-atlas style ("C7") and produces the grid overlay as GeoJSON.

Example usage::

    from atlasgrid import Extent, Grating, generate_grid

    # Divide a sheet into 3 rows and 3 columns
    grating = Grating(Extent(0, 0, 9, 3), rows=3, cols=3)
    print(grating.label_for_row(0), grating.label_for_col(0))

    # Grid cells as a GeoJSON FeatureCollection
    collection = generate_grid((0, 0, 9, 3), rows=3, cols=3, rectangle=True)
"""

from atlasgrid.config import GratingConfig, load_config
from atlasgrid.core.alphabet import ALPHABET, decode, encode
from atlasgrid.core.extent import Extent
from atlasgrid.core.grating import Grating
from atlasgrid.exceptions import AtlasGridError, InvalidDimension, ValidationError
from atlasgrid.geometry.export import to_json, write_geojson
from atlasgrid.geometry.generator import generate_grid, grid_features
from atlasgrid.geometry.measure import cell_ground_size

__version__ = "0.1.0"

__all__ = [
    # Core
    "ALPHABET",
    "encode",
    "decode",
    "Extent",
    "Grating",
    # Geometry
    "generate_grid",
    "grid_features",
    "cell_ground_size",
    "to_json",
    "write_geojson",
    # Config
    "GratingConfig",
    "load_config",
    # Exceptions
    "AtlasGridError",
    "InvalidDimension",
    "ValidationError",
    # Version
    "__version__",
]
