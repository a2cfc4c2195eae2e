"""
Geometry module for Atlasgrid.

This module turns gratings into GeoJSON overlays and measures grid cells.
"""

from atlasgrid.geometry.generator import generate_grid, grid_features

__all__ = ["generate_grid", "grid_features"]
