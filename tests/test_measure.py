"""
Unit tests for cell ground measurement.
"""

import pytest

from atlasgrid.core.extent import Extent
from atlasgrid.core.grating import Grating
from atlasgrid.exceptions import ValidationError
from atlasgrid.geometry.measure import cell_ground_size


class TestCellGroundSize:
    """Tests for cell_ground_size()."""

    def test_projected_metres(self):
        """Test cell size in a metric projected CRS."""
        grating = Grating(Extent(0, 0, 9000, 3000, "EPSG:2180"), rows=3, cols=3)
        width, height = cell_ground_size(grating)

        assert width == pytest.approx(3000.0)
        assert height == pytest.approx(1000.0)

    def test_geographic_degree_at_equator(self):
        """Test geodesic cell size of a 1 x 1 degree cell at the equator."""
        grating = Grating(Extent(0, -0.5, 1, 0.5, "EPSG:4326"), rows=1, cols=1)
        width, height = cell_ground_size(grating)

        assert width == pytest.approx(111_319.5, rel=1e-3)
        assert height == pytest.approx(110_574.0, rel=1e-3)

    def test_geographic_width_shrinks_with_latitude(self, bellingham_extent):
        """Test that cells far from the equator are narrower than tall in degrees."""
        grating = Grating(bellingham_extent, rows=3, cols=3)
        width, height = cell_ground_size(grating)

        degree_width = grating.cell_width * 111_319.5
        assert width < degree_width
        assert height > 0

    def test_missing_crs(self, grating_3x3):
        """Test that an extent without CRS cannot be measured."""
        with pytest.raises(ValidationError, match="no coordinate reference system"):
            cell_ground_size(grating_3x3)

    def test_invalid_crs(self):
        """Test that an unknown CRS raises ValidationError."""
        grating = Grating(Extent(0, 0, 1, 1, "EPSG:not-a-code"), rows=1, cols=1)
        with pytest.raises(ValidationError, match="Unsupported"):
            cell_ground_size(grating)
