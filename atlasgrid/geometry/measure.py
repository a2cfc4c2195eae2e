"""
Ground size of grid cells.

Used for the sheet legend ("grid cell = 1.2 km"). Lengths are measured in
the extent's own reference system; coordinates are never reprojected.
"""

import logging
from typing import Tuple

from pyproj import CRS
from pyproj.exceptions import CRSError

from atlasgrid.core.grating import Grating
from atlasgrid.exceptions import ValidationError

logger = logging.getLogger(__name__)


def _crs_for(grating: Grating) -> CRS:
    crs = grating.extent.crs
    if not crs:
        raise ValidationError(
            "Extent has no coordinate reference system, cannot measure cells"
        )
    try:
        return CRS.from_user_input(crs)
    except CRSError as e:
        raise ValidationError(f"Unsupported coordinate reference system: {crs}") from e


def cell_ground_size(grating: Grating) -> Tuple[float, float]:
    """
    Return the size of one cell in metres.

    For a geographic CRS the width and height are geodesic distances on the
    CRS ellipsoid, measured through the centre of the extent. For a projected
    CRS they are the cell size multiplied by the axis unit factor.

    Parameters
    ----------
    grating : Grating
        Grating whose extent carries a CRS.

    Returns
    -------
    tuple of (float, float)
        (width_m, height_m)

    Raises
    ------
    ValidationError
        If the extent has no CRS or the CRS cannot be used.

    Examples
    --------
    >>> grating = Grating(Extent(0, 0, 9000, 3000, "EPSG:2180"), 3, 3)
    >>> cell_ground_size(grating)
    (3000.0, 1000.0)
    """
    crs = _crs_for(grating)
    extent = grating.extent

    if crs.is_geographic:
        geod = crs.get_geod()
        if geod is None:
            raise ValidationError(f"No ellipsoid defined for {extent.crs}")

        mid_x = (extent.min_x + extent.max_x) / 2.0
        mid_y = (extent.min_y + extent.max_y) / 2.0
        half_w = grating.cell_width / 2.0
        half_h = grating.cell_height / 2.0

        _, _, width = geod.inv(mid_x - half_w, mid_y, mid_x + half_w, mid_y)
        _, _, height = geod.inv(mid_x, mid_y - half_h, mid_x, mid_y + half_h)
        return (float(width), float(height))

    if not crs.axis_info:
        raise ValidationError(f"No axis units defined for {extent.crs}")

    factor = crs.axis_info[0].unit_conversion_factor
    logger.debug("Axis unit factor for %s: %s", extent.crs, factor)
    return (grating.cell_width * factor, grating.cell_height * factor)
