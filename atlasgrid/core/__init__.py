"""
Core module for Atlasgrid.

This module contains the label alphabet, the sheet extent and the Grating
which resolves grid reference labels.
"""

from atlasgrid.core.extent import Extent
from atlasgrid.core.grating import Grating

__all__ = ["Extent", "Grating"]
