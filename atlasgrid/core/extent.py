"""
Axis-aligned extent of a sheet.

The extent is assumed to already be in the rendering coordinate system;
nothing here reprojects coordinates.
"""

from dataclasses import dataclass
from typing import Optional, Tuple

from atlasgrid.exceptions import ValidationError


@dataclass(frozen=True)
class Extent:
    """
    Bounding box with coordinates and optional reference system.

    Reversed bounds are swapped on construction, so ``min_x <= max_x`` and
    ``min_y <= max_y`` always hold.

    Attributes
    ----------
    min_x, min_y, max_x, max_y : float
        Bounds of the rectangle.
    crs : str, optional
        Coordinate reference system identifier (e.g. "EPSG:4326").

    Examples
    --------
    >>> Extent(9, 3, 0, 0).bounds
    (0.0, 0.0, 9.0, 3.0)
    """

    min_x: float
    min_y: float
    max_x: float
    max_y: float
    crs: Optional[str] = None

    def __post_init__(self):
        min_x, max_x = sorted((float(self.min_x), float(self.max_x)))
        min_y, max_y = sorted((float(self.min_y), float(self.max_y)))
        # frozen dataclass - normalizacja przez object.__setattr__
        object.__setattr__(self, "min_x", min_x)
        object.__setattr__(self, "min_y", min_y)
        object.__setattr__(self, "max_x", max_x)
        object.__setattr__(self, "max_y", max_y)

    @classmethod
    def parse(cls, text: str, crs: Optional[str] = None) -> "Extent":
        """
        Parse an extent from "min_x,min_y,max_x,max_y" text.

        Parameters
        ----------
        text : str
            Four comma separated numbers.
        crs : str, optional
            Coordinate reference system of the values.

        Returns
        -------
        Extent

        Raises
        ------
        ValidationError
            If the text does not hold exactly four numbers.
        """
        parts = [p.strip() for p in str(text).split(",")]
        if len(parts) != 4:
            raise ValidationError(
                f"Invalid bbox: '{text}'. Expected 4 values: min_x,min_y,max_x,max_y"
            )
        try:
            values = [float(p) for p in parts]
        except ValueError:
            raise ValidationError(
                f"Invalid bbox: '{text}'. All values must be numbers"
            ) from None

        return cls(values[0], values[1], values[2], values[3], crs)

    @property
    def width(self) -> float:
        """Return extent size along X."""
        return self.max_x - self.min_x

    @property
    def height(self) -> float:
        """Return extent size along Y."""
        return self.max_y - self.min_y

    @property
    def bounds(self) -> Tuple[float, float, float, float]:
        """Return (min_x, min_y, max_x, max_y)."""
        return (self.min_x, self.min_y, self.max_x, self.max_y)

    @property
    def is_degenerate(self) -> bool:
        """Return True if the extent has zero width or height."""
        return self.width == 0 or self.height == 0

    def contains(self, x: float, y: float) -> bool:
        """Return True if the point lies inside or on the edge of the extent."""
        return self.min_x <= x <= self.max_x and self.min_y <= y <= self.max_y
