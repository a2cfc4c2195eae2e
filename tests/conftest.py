"""
Pytest configuration and shared fixtures.

This module contains pytest fixtures and configuration that are shared
across all test modules.
"""

import pytest

from atlasgrid.core.extent import Extent
from atlasgrid.core.grating import Grating


@pytest.fixture
def square_extent() -> Extent:
    """
    Provide a 9 x 3 planar extent.

    Returns
    -------
    Extent
        Extent (0, 0, 9, 3) without CRS
    """
    return Extent(0, 0, 9, 3)


@pytest.fixture
def bellingham_extent() -> Extent:
    """
    Provide a small geographic extent (Bellingham, WA).

    Returns
    -------
    Extent
        Extent in EPSG:4326 (lon/lat)
    """
    return Extent(-122.48015, 48.753224, -122.38391, 48.781091, "EPSG:4326")


@pytest.fixture
def grating_3x3(square_extent) -> Grating:
    """Provide a 3 x 3 grating over the square extent."""
    return Grating(square_extent, rows=3, cols=3)


@pytest.fixture
def config_file(tmp_path):
    """
    Write a sample sheet configuration file.

    Returns
    -------
    Path
        Path to the TOML file
    """
    path = tmp_path / "atlas.toml"
    path.write_text(
        """
[defaults]
flip_y_label = true

[sheets.City]
rows = 4
cols = 5

[sheets.overview]
cell_width = 2.0
cell_height = 1.5
rectangle = false
boundary_label = "upper"
""",
        encoding="utf-8",
    )
    return path
