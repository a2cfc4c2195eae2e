"""
Grid overlay geometry as GeoJSON.

This module turns a Grating into a GeoJSON FeatureCollection, either as
cell polygons (rectangle mode) or as boundary lines (line mode).
"""

import logging
from typing import Any, Dict, List

from shapely.geometry import LineString, box, mapping

from atlasgrid.core.extent import Extent
from atlasgrid.core.grating import ExtentLike, Grating
from atlasgrid.exceptions import ValidationError

logger = logging.getLogger(__name__)

# Reguły etykietowania linii wspólnych dla dwóch komórek
BOUNDARY_LOWER = "lower"
BOUNDARY_UPPER = "upper"
BOUNDARY_LABELS = (BOUNDARY_LOWER, BOUNDARY_UPPER)

Feature = Dict[str, Any]
FeatureCollection = Dict[str, Any]


def generate_grid(
    extent: ExtentLike,
    rows: int,
    cols: int,
    flipped: bool = False,
    rectangle: bool = True,
    boundary_label: str = BOUNDARY_LOWER,
    flip_x_label: bool = False,
) -> FeatureCollection:
    """
    Generate grid overlay features for an extent.

    Parameters
    ----------
    extent : Extent or sequence of 4 floats
        Sheet extent (min_x, min_y, max_x, max_y).
    rows, cols : int
        Number of rows and columns, >= 1.
    flipped : bool, optional
        Row label orientation, see ``Grating.flip_y_label`` (default: False).
    rectangle : bool, optional
        True for cell polygons, False for boundary lines (default: True).
    boundary_label : str, optional
        Which neighbour labels a shared line in line mode: "lower" or
        "upper" (default: "lower").
    flip_x_label : bool, optional
        Column label orientation, see ``Grating.flip_x_label``.

    Returns
    -------
    dict
        GeoJSON FeatureCollection.

    Raises
    ------
    InvalidDimension
        If rows or cols are not positive or the extent is degenerate.
    ValidationError
        If boundary_label is unknown.

    Examples
    --------
    >>> fc = generate_grid((0, 0, 9, 3), rows=3, cols=3)
    >>> len(fc["features"])
    9
    """
    grating = Grating(
        extent, rows, cols, flip_y_label=flipped, flip_x_label=flip_x_label
    )
    return grid_features(grating, rectangle=rectangle, boundary_label=boundary_label)


def grid_features(
    grating: Grating,
    rectangle: bool = True,
    boundary_label: str = BOUNDARY_LOWER,
) -> FeatureCollection:
    """
    Build the GeoJSON FeatureCollection for an existing grating.

    See ``generate_grid`` for the meaning of the parameters.
    """
    if boundary_label not in BOUNDARY_LABELS:
        raise ValidationError(
            f"Invalid boundary label rule: '{boundary_label}'. "
            f"Allowed values: {', '.join(BOUNDARY_LABELS)}"
        )

    if rectangle:
        features = _cell_features(grating)
    else:
        features = _line_features(grating, boundary_label)

    logger.debug(
        "Generated %d %s features for %dx%d grating",
        len(features),
        "cell" if rectangle else "line",
        grating.rows,
        grating.cols,
    )

    return {
        "type": "FeatureCollection",
        "bbox": list(grating.extent.bounds),
        "features": features,
    }


def _feature(geometry, properties: Dict[str, Any]) -> Feature:
    return {
        "type": "Feature",
        "geometry": mapping(geometry),
        "properties": properties,
    }


def _cell_features(grating: Grating) -> List[Feature]:
    """Return one polygon per cell, row by row."""
    y = grating.row_edges
    x = grating.col_edges
    row_labels = grating.row_labels()
    col_labels = grating.col_labels()

    features = []
    for row in range(grating.rows):
        for col in range(grating.cols):
            # ccw=True - pierścień zewnętrzny przeciwnie do ruchu wskazówek zegara (RFC 7946)
            cell = box(x[col], y[row], x[col + 1], y[row + 1], ccw=True)
            features.append(
                _feature(
                    cell,
                    {
                        "row": row,
                        "col": col,
                        "row_label": row_labels[row],
                        "col_label": col_labels[col],
                        "reference": f"{row_labels[row]}{col_labels[col]}",
                    },
                )
            )

    return features


def _boundary_owner(boundary: int, count: int, rule: str) -> int:
    """Return the index of the cell whose label a boundary line carries."""
    if rule == BOUNDARY_UPPER:
        return min(boundary, count - 1)
    return max(boundary - 1, 0)


def _line_features(grating: Grating, rule: str) -> List[Feature]:
    """Return horizontal boundary lines followed by vertical ones."""
    extent: Extent = grating.extent
    features = []

    for boundary, y in enumerate(grating.row_edges):
        row = _boundary_owner(boundary, grating.rows, rule)
        line = LineString([(extent.min_x, y), (extent.max_x, y)])
        features.append(
            _feature(
                line,
                {
                    "orientation": "horizontal",
                    "boundary": boundary,
                    "row": row,
                    "row_label": grating.label_for_row(row),
                },
            )
        )

    for boundary, x in enumerate(grating.col_edges):
        col = _boundary_owner(boundary, grating.cols, rule)
        line = LineString([(x, extent.min_y), (x, extent.max_y)])
        features.append(
            _feature(
                line,
                {
                    "orientation": "vertical",
                    "boundary": boundary,
                    "col": col,
                    "col_label": grating.label_for_col(col),
                },
            )
        )

    return features
