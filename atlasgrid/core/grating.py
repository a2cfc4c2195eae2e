"""
Grating - grid reference lattice of a single sheet.

This module provides the Grating class which divides a sheet extent into
rows and columns and resolves grid reference labels (e.g. "C7") for them.
"""

import logging
import math
from typing import List, Optional, Sequence, Tuple, Union

import numpy as np

from atlasgrid.core import alphabet
from atlasgrid.core.extent import Extent
from atlasgrid.exceptions import InvalidDimension

logger = logging.getLogger(__name__)

ExtentLike = Union[Extent, Sequence[float]]


def _as_extent(extent: ExtentLike) -> Extent:
    if isinstance(extent, Extent):
        return extent
    try:
        min_x, min_y, max_x, max_y = extent
    except (TypeError, ValueError):
        raise InvalidDimension(
            f"Extent must be an Extent or (min_x, min_y, max_x, max_y), got: {extent!r}"
        ) from None
    return Extent(min_x, min_y, max_x, max_y)


def _validate_count(name: str, value: int) -> int:
    if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
        raise InvalidDimension(f"{name} must be an integer, got: {type(value)}")
    if value < 1:
        raise InvalidDimension(f"{name} must be >= 1, got: {value}")
    return int(value)


def _validate_extent(
    extent: Extent, rows: Optional[int] = None, cols: Optional[int] = None
) -> Extent:
    if not all(math.isfinite(v) for v in extent.bounds):
        raise InvalidDimension(
            f"Extent bounds must be finite, got: {extent.bounds}",
            rows=rows,
            cols=cols,
        )
    if extent.is_degenerate:
        raise InvalidDimension(
            f"Extent is degenerate (width={extent.width}, height={extent.height})",
            rows=rows,
            cols=cols,
        )
    return extent


def _is_index(value) -> bool:
    return not isinstance(value, bool) and isinstance(value, (int, np.integer))


class Grating:
    """
    Grid lattice over a sheet extent.

    Rows are counted along Y starting at ``min_y``, columns along X starting
    at ``min_x``. Rows are labelled with letters from the reduced alphabet,
    columns with numbers. A Grating never changes after construction.

    Attributes
    ----------
    extent : Extent
        Divided extent.
    rows : int
        Number of divisions along Y.
    cols : int
        Number of divisions along X.
    flip_y_label : bool
        If False, row 0 gets the last letter and the last row gets "A".
        If True, row 0 gets "A".
    flip_x_label : bool
        If False, column 0 gets "1". If True, the last column gets "1".

    Examples
    --------
    >>> grating = Grating(Extent(0, 0, 9, 3), rows=3, cols=3)
    >>> grating.label_for_row(0), grating.label_for_col(0)
    ('C', '1')
    >>> grating.reference(0, 2)
    'C3'
    """

    __slots__ = ("_extent", "_rows", "_cols", "_flip_y_label", "_flip_x_label")

    def __init__(
        self,
        extent: ExtentLike,
        rows: int,
        cols: int,
        flip_y_label: bool = False,
        flip_x_label: bool = False,
    ):
        """
        Initialize the grating.

        Parameters
        ----------
        extent : Extent or sequence of 4 floats
            Sheet extent (min_x, min_y, max_x, max_y).
        rows : int
            Number of rows, >= 1.
        cols : int
            Number of columns, >= 1.
        flip_y_label : bool, optional
            Label rows in ascending order starting at row 0 (default: False).
        flip_x_label : bool, optional
            Label columns in ascending order starting at the last column
            (default: False).

        Raises
        ------
        InvalidDimension
            If rows or cols are not positive integers or the extent is
            degenerate.
        """
        extent = _as_extent(extent)
        rows = _validate_count("rows", rows)
        cols = _validate_count("cols", cols)
        _validate_extent(extent, rows, cols)

        object.__setattr__(self, "_extent", extent)
        object.__setattr__(self, "_rows", rows)
        object.__setattr__(self, "_cols", cols)
        object.__setattr__(self, "_flip_y_label", bool(flip_y_label))
        object.__setattr__(self, "_flip_x_label", bool(flip_x_label))

        logger.debug("Created %r", self)

    @classmethod
    def from_cell_size(
        cls,
        extent: ExtentLike,
        cell_width: float,
        cell_height: float,
        flip_y_label: bool = False,
        flip_x_label: bool = False,
    ) -> "Grating":
        """
        Build a grating from a requested cell size.

        Counts are rounded up so cells are never larger than requested;
        cells are then stretched to divide the extent exactly.

        Parameters
        ----------
        extent : Extent or sequence of 4 floats
            Sheet extent.
        cell_width, cell_height : float
            Requested cell size in extent units.

        Returns
        -------
        Grating

        Raises
        ------
        InvalidDimension
            If a cell size is not positive or the extent is degenerate or
            not finite.

        Examples
        --------
        >>> Grating.from_cell_size(Extent(0, 0, 10, 4), 3, 2).cols
        4
        """
        extent = _validate_extent(_as_extent(extent))
        if not cell_width > 0 or not cell_height > 0:
            raise InvalidDimension(
                f"Cell size must be positive, got: {cell_width} x {cell_height}"
            )

        rows = max(1, math.ceil(extent.height / cell_height))
        cols = max(1, math.ceil(extent.width / cell_width))
        return cls(extent, rows, cols, flip_y_label, flip_x_label)

    def __setattr__(self, name, value):
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __delattr__(self, name):
        raise AttributeError(f"{type(self).__name__} is immutable")

    @property
    def extent(self) -> Extent:
        """Return the divided extent."""
        return self._extent

    @property
    def rows(self) -> int:
        """Return the number of rows."""
        return self._rows

    @property
    def cols(self) -> int:
        """Return the number of columns."""
        return self._cols

    @property
    def flip_y_label(self) -> bool:
        """Return True if rows are labelled ascending from row 0."""
        return self._flip_y_label

    @property
    def flip_x_label(self) -> bool:
        """Return True if columns are labelled ascending from the last column."""
        return self._flip_x_label

    @property
    def cell_width(self) -> float:
        """Return cell size along X."""
        return self._extent.width / self._cols

    @property
    def cell_height(self) -> float:
        """Return cell size along Y."""
        return self._extent.height / self._rows

    # =========================================================================
    # Labels
    # =========================================================================

    def label_for_row(self, row: int) -> str:
        """
        Return the letter label of a row.

        Parameters
        ----------
        row : int
            Zero-based row index.

        Returns
        -------
        str
            Row label, or an empty string if the row is out of range
            or not an integer.

        Examples
        --------
        >>> grating = Grating(Extent(0, 0, 1, 1), rows=11, cols=1)
        >>> grating.label_for_row(0), grating.label_for_row(10), grating.label_for_row(11)
        ('M', 'A', '')
        """
        if not _is_index(row) or row < 0 or row >= self._rows:
            return ""

        if self._flip_y_label:
            position = row + 1
        else:
            position = self._rows - row

        return alphabet.encode(int(position))

    def label_for_col(self, col: int) -> str:
        """
        Return the numeric label of a column.

        Parameters
        ----------
        col : int
            Zero-based column index.

        Returns
        -------
        str
            Column label, or an empty string if the column is out of range
            or not an integer.
        """
        if not _is_index(col) or col < 0 or col >= self._cols:
            return ""

        if self._flip_x_label:
            position = self._cols - col
        else:
            position = col + 1

        return str(int(position))

    def row_labels(self) -> List[str]:
        """Return labels of all rows, indexed by row."""
        return [self.label_for_row(r) for r in range(self._rows)]

    def col_labels(self) -> List[str]:
        """Return labels of all columns, indexed by column."""
        return [self.label_for_col(c) for c in range(self._cols)]

    def reference(self, row: int, col: int) -> str:
        """
        Return the grid reference of a cell (e.g. "C7").

        Returns an empty string if either index is out of range.
        """
        row_label = self.label_for_row(row)
        col_label = self.label_for_col(col)
        if not row_label or not col_label:
            return ""
        return f"{row_label}{col_label}"

    # =========================================================================
    # Geometria siatki
    # =========================================================================

    @property
    def row_edges(self) -> List[float]:
        """
        Return the ``rows + 1`` Y coordinates bounding the rows.

        The first and last values are exactly ``min_y`` and ``max_y``.
        """
        return np.linspace(
            self._extent.min_y, self._extent.max_y, self._rows + 1
        ).tolist()

    @property
    def col_edges(self) -> List[float]:
        """
        Return the ``cols + 1`` X coordinates bounding the columns.

        The first and last values are exactly ``min_x`` and ``max_x``.
        """
        return np.linspace(
            self._extent.min_x, self._extent.max_x, self._cols + 1
        ).tolist()

    def cell_extent(self, row: int, col: int) -> Extent:
        """
        Return the extent of a single cell.

        Raises
        ------
        IndexError
            If row or col is out of range.
        """
        if not 0 <= row < self._rows or not 0 <= col < self._cols:
            raise IndexError(
                f"Cell ({row}, {col}) out of range for {self._rows}x{self._cols} grating"
            )

        y = self.row_edges
        x = self.col_edges
        return Extent(x[col], y[row], x[col + 1], y[row + 1], self._extent.crs)

    def locate(self, x: float, y: float) -> Optional[Tuple[int, int]]:
        """
        Find the cell containing a point.

        Cells are half-open; a point on a shared edge belongs to the
        higher-indexed cell, and the maximum edge belongs to the last cell.

        Returns
        -------
        tuple of (int, int) or None
            (row, col) of the cell, or None if the point is outside the extent.
        """
        if not self._extent.contains(x, y):
            return None

        row = int(np.searchsorted(self.row_edges, y, side="right")) - 1
        col = int(np.searchsorted(self.col_edges, x, side="right")) - 1
        return (min(row, self._rows - 1), min(col, self._cols - 1))

    def reference_for_point(self, x: float, y: float) -> str:
        """Return the grid reference of the cell containing a point, or ""."""
        cell = self.locate(x, y)
        if cell is None:
            return ""
        return self.reference(*cell)

    def __repr__(self) -> str:
        """Return representation for debugging."""
        return (
            f"Grating(extent={self._extent.bounds}, rows={self._rows}, "
            f"cols={self._cols}, flip_y_label={self._flip_y_label}, "
            f"flip_x_label={self._flip_x_label})"
        )

    def __eq__(self, other: object) -> bool:
        """Compare two gratings by value."""
        if not isinstance(other, Grating):
            return NotImplemented
        return (
            self._extent == other._extent
            and self._rows == other._rows
            and self._cols == other._cols
            and self._flip_y_label == other._flip_y_label
            and self._flip_x_label == other._flip_x_label
        )

    def __hash__(self) -> int:
        """Return hash of the grating."""
        return hash(
            (
                self._extent,
                self._rows,
                self._cols,
                self._flip_y_label,
                self._flip_x_label,
            )
        )
