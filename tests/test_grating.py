"""
Unit tests for the grating module.

This module contains tests for the Grating class, verifying label
resolution, orientation flags, out-of-range handling and cell lookup.
"""

import numpy as np
import pytest

from atlasgrid.core.alphabet import EXCLUDED
from atlasgrid.core.extent import Extent
from atlasgrid.core.grating import Grating
from atlasgrid.exceptions import InvalidDimension

UNIT = Extent(0, 0, 1, 1)


def make_grating(rows, cols=1, **kwargs) -> Grating:
    return Grating(UNIT, rows=rows, cols=cols, **kwargs)


class TestLabelForRow:
    """Tests for label_for_row()."""

    def test_11_rows(self):
        """Test labels of 11 rows, descending from row 0."""
        grating = make_grating(11)
        labels = [grating.label_for_row(r) for r in range(11)]
        assert labels == "M K J H G F E D C B A".split()

    def test_23_rows(self):
        """Test that labels roll over to two letters past Z."""
        grating = make_grating(23)
        labels = [grating.label_for_row(r) for r in range(23)]
        assert labels == (
            "AB AA Z Y X W V U T R P N M K J H G F E D C B A".split()
        )

    def test_10_rows_flipped(self):
        """Test ascending labels with flip_y_label."""
        grating = make_grating(10, flip_y_label=True)
        labels = [grating.label_for_row(r) for r in range(11)]
        assert labels == ["A", "B", "C", "D", "E", "F", "G", "H", "J", "K", ""]

    def test_10_rows_not_flipped(self):
        """Test descending labels without flip_y_label."""
        grating = make_grating(10)
        labels = [grating.label_for_row(r) for r in range(10)]
        assert labels == "K J H G F E D C B A".split()

    @pytest.mark.parametrize("row", [10, 11, 100, -1, -10])
    def test_out_of_range(self, row):
        """Test that rows outside the grating have an empty label."""
        assert make_grating(10).label_for_row(row) == ""
        assert make_grating(10, flip_y_label=True).label_for_row(row) == ""

    @pytest.mark.parametrize("rows", [1, 2, 20, 21, 22, 50, 500])
    def test_labels_unique_and_clean(self, rows):
        """Test that row labels are non-empty, unique and avoid confusable letters."""
        labels = make_grating(rows).row_labels()
        assert all(labels)
        assert len(set(labels)) == rows
        assert not any(set(label) & EXCLUDED for label in labels)

    @pytest.mark.parametrize("rows", [1, 7, 21, 22, 60])
    def test_mirror_law(self, rows):
        """Test that flipping mirrors the labels."""
        normal = make_grating(rows)
        flipped = make_grating(rows, flip_y_label=True)
        for r in range(rows):
            assert normal.label_for_row(r) == flipped.label_for_row(rows - 1 - r)

    @pytest.mark.parametrize("row", [0.5, 1.0, None, "1", True])
    def test_non_integer_row(self, row):
        """Test that non-integer rows have an empty label."""
        assert make_grating(10).label_for_row(row) == ""
        assert make_grating(10, flip_y_label=True).label_for_row(row) == ""

    def test_numpy_integer_row(self):
        """Test that numpy integers are accepted as row indices."""
        assert make_grating(11).label_for_row(np.int64(0)) == "M"

    def test_single_row(self):
        """Test that a single row is always "A"."""
        assert make_grating(1).label_for_row(0) == "A"
        assert make_grating(1, flip_y_label=True).label_for_row(0) == "A"


class TestLabelForCol:
    """Tests for label_for_col()."""

    def test_columns_numbered_from_one(self):
        """Test default column numbering."""
        grating = make_grating(1, cols=4)
        assert grating.col_labels() == ["1", "2", "3", "4"]

    def test_columns_flipped(self):
        """Test reversed column numbering."""
        grating = make_grating(1, cols=4, flip_x_label=True)
        assert grating.col_labels() == ["4", "3", "2", "1"]

    @pytest.mark.parametrize("col", [-1, 4, 5])
    def test_out_of_range(self, col):
        """Test that columns outside the grating have an empty label."""
        assert make_grating(1, cols=4).label_for_col(col) == ""

    @pytest.mark.parametrize("col", [0.5, None, "0", False])
    def test_non_integer_col(self, col):
        """Test that non-integer columns have an empty label."""
        grating = make_grating(1, cols=4)
        assert grating.label_for_col(col) == ""
        assert grating.reference(0, col) == ""


class TestReference:
    """Tests for reference() and point lookup."""

    def test_reference(self, grating_3x3):
        """Test combined row and column reference."""
        assert grating_3x3.reference(0, 0) == "C1"
        assert grating_3x3.reference(2, 2) == "A3"

    def test_reference_out_of_range(self, grating_3x3):
        """Test that an out-of-range index gives an empty reference."""
        assert grating_3x3.reference(3, 0) == ""
        assert grating_3x3.reference(0, -1) == ""

    def test_locate_inside(self, grating_3x3):
        """Test locating points inside cells."""
        assert grating_3x3.locate(0.5, 0.5) == (0, 0)
        assert grating_3x3.locate(4.5, 1.5) == (1, 1)
        assert grating_3x3.locate(8.9, 2.9) == (2, 2)

    def test_locate_edges(self, grating_3x3):
        """Test that shared edges belong to the higher cell and max edge to the last."""
        assert grating_3x3.locate(3.0, 1.0) == (1, 1)
        assert grating_3x3.locate(9.0, 3.0) == (2, 2)
        assert grating_3x3.locate(0.0, 0.0) == (0, 0)

    def test_locate_outside(self, grating_3x3):
        """Test points outside the extent."""
        assert grating_3x3.locate(-0.1, 1.0) is None
        assert grating_3x3.locate(1.0, 3.1) is None
        assert grating_3x3.reference_for_point(10, 10) == ""

    def test_reference_for_point(self, grating_3x3):
        """Test reference of a point."""
        assert grating_3x3.reference_for_point(7.0, 0.2) == "C3"


class TestGeometry:
    """Tests for edges and cell extents."""

    def test_edges_match_extent(self):
        """Test that the outer edges equal the extent bounds exactly."""
        extent = Extent(-122.48015, 48.753224, -122.38391, 48.781091)
        grating = Grating(extent, rows=7, cols=3)

        assert len(grating.row_edges) == 8
        assert len(grating.col_edges) == 4
        assert grating.row_edges[0] == extent.min_y
        assert grating.row_edges[-1] == extent.max_y
        assert grating.col_edges[0] == extent.min_x
        assert grating.col_edges[-1] == extent.max_x

    def test_edges_increasing(self, grating_3x3):
        """Test edge values."""
        assert grating_3x3.row_edges == pytest.approx([0, 1, 2, 3])
        assert grating_3x3.col_edges == pytest.approx([0, 3, 6, 9])

    def test_cell_size(self, grating_3x3):
        """Test cell width and height."""
        assert grating_3x3.cell_width == pytest.approx(3.0)
        assert grating_3x3.cell_height == pytest.approx(1.0)

    def test_cell_extent(self, grating_3x3):
        """Test extent of a single cell."""
        cell = grating_3x3.cell_extent(1, 2)
        assert cell.bounds == pytest.approx((6.0, 1.0, 9.0, 2.0))

    def test_cell_extent_out_of_range(self, grating_3x3):
        """Test that an out-of-range cell raises IndexError."""
        with pytest.raises(IndexError):
            grating_3x3.cell_extent(3, 0)


class TestConstruction:
    """Tests for Grating construction and validation."""

    def test_accepts_tuple_extent(self):
        """Test that a 4-tuple is accepted as extent."""
        grating = Grating((9, 3, 0, 0), rows=3, cols=3)
        assert grating.extent == Extent(0, 0, 9, 3)

    @pytest.mark.parametrize("rows, cols", [(0, 3), (3, 0), (-1, 3), (3, -2)])
    def test_non_positive_counts(self, rows, cols):
        """Test that non-positive counts raise InvalidDimension."""
        with pytest.raises(InvalidDimension, match=">= 1"):
            Grating(UNIT, rows=rows, cols=cols)

    @pytest.mark.parametrize("rows", [1.5, "3", None, True])
    def test_non_integer_counts(self, rows):
        """Test that non-integer counts raise InvalidDimension."""
        with pytest.raises(InvalidDimension, match="integer"):
            Grating(UNIT, rows=rows, cols=1)

    @pytest.mark.parametrize(
        "bounds", [(0, 0, 0, 5), (0, 0, 5, 0), (1, 1, 1, 1)]
    )
    def test_degenerate_extent(self, bounds):
        """Test that a degenerate extent raises InvalidDimension."""
        with pytest.raises(InvalidDimension, match="degenerate"):
            Grating(bounds, rows=2, cols=2)

    def test_invalid_extent(self):
        """Test that a malformed extent raises InvalidDimension."""
        with pytest.raises(InvalidDimension):
            Grating((0, 0, 1), rows=2, cols=2)

    def test_non_finite_extent(self):
        """Test that infinite bounds are rejected."""
        with pytest.raises(InvalidDimension, match="finite"):
            Grating((0, 0, float("inf"), 1), rows=2, cols=2)

    def test_error_carries_dimensions(self):
        """Test that InvalidDimension carries rows and cols when known."""
        with pytest.raises(InvalidDimension) as exc_info:
            Grating((0, 0, 0, 1), rows=2, cols=5)
        assert exc_info.value.rows == 2
        assert exc_info.value.cols == 5

    def test_from_cell_size(self):
        """Test building from a requested cell size."""
        grating = Grating.from_cell_size(Extent(0, 0, 10, 4), 3, 2)
        assert grating.rows == 2
        assert grating.cols == 4

    def test_from_cell_size_larger_than_extent(self):
        """Test that a huge cell gives a single cell."""
        grating = Grating.from_cell_size(Extent(0, 0, 10, 4), 100, 100)
        assert (grating.rows, grating.cols) == (1, 1)

    @pytest.mark.parametrize(
        "bounds, match",
        [
            ((0, 0, float("inf"), 4), "finite"),
            ((0, float("-inf"), 10, 4), "finite"),
            ((0, 0, float("nan"), 4), "finite"),
            ((0, 0, 10, 0), "degenerate"),
        ],
    )
    def test_from_cell_size_invalid_extent(self, bounds, match):
        """Test that unusable extents raise InvalidDimension before counting cells."""
        with pytest.raises(InvalidDimension, match=match):
            Grating.from_cell_size(bounds, 2, 1.5)

    @pytest.mark.parametrize("width, height", [(0, 1), (1, 0), (-1, 1)])
    def test_from_cell_size_invalid(self, width, height):
        """Test that non-positive cell sizes raise InvalidDimension."""
        with pytest.raises(InvalidDimension, match="Cell size"):
            Grating.from_cell_size(Extent(0, 0, 10, 4), width, height)


class TestImmutability:
    """Tests for value semantics."""

    def test_cannot_set_attributes(self, grating_3x3):
        """Test that attributes cannot be changed."""
        with pytest.raises(AttributeError):
            grating_3x3.rows = 5
        with pytest.raises(AttributeError):
            grating_3x3._rows = 5
        assert grating_3x3.rows == 3

    def test_equality_and_hash(self, square_extent):
        """Test value equality."""
        a = Grating(square_extent, 3, 3)
        b = Grating(square_extent, 3, 3)
        c = Grating(square_extent, 3, 3, flip_y_label=True)

        assert a == b
        assert hash(a) == hash(b)
        assert a != c
        assert a != "grating"

    def test_repr(self, grating_3x3):
        """Test representation for debugging."""
        text = repr(grating_3x3)
        assert "Grating" in text
        assert "rows=3" in text
