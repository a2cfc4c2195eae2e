"""
Grid configuration for atlas sheets.

Sheets are described in a TOML file; each ``[sheets.<name>]`` table holds the
grid options of one sheet and inherits missing keys from ``[defaults]``::

    [defaults]
    flip_y_label = true

    [sheets.city]
    rows = 8
    cols = 6

    [sheets.overview]
    cell_width = 0.05
    cell_height = 0.05
    rectangle = false
"""

import logging
import tomllib
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

from atlasgrid.core.grating import ExtentLike, Grating
from atlasgrid.exceptions import ValidationError
from atlasgrid.geometry.generator import BOUNDARY_LABELS, BOUNDARY_LOWER

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GratingConfig:
    """
    Grid options of one sheet.

    Attributes
    ----------
    rows, cols : int
        Number of rows and columns (ignored when both cell sizes are set).
    flip_y_label : bool
        Row label orientation.
    flip_x_label : bool
        Column label orientation.
    rectangle : bool
        True for cell polygons, False for boundary lines.
    boundary_label : str
        Shared line labelling rule in line mode ("lower" or "upper").
    cell_width, cell_height : float, optional
        Requested cell size in extent units.
    """

    rows: int = 1
    cols: int = 1
    flip_y_label: bool = False
    flip_x_label: bool = False
    rectangle: bool = True
    boundary_label: str = BOUNDARY_LOWER
    cell_width: Optional[float] = None
    cell_height: Optional[float] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "GratingConfig":
        """
        Create configuration from a mapping, validating values.

        Unknown keys are ignored with a warning.

        Raises
        ------
        ValidationError
            If a value has the wrong type or is out of range.
        """
        known = {f.name for f in fields(cls)}
        for key in data:
            if key not in known:
                logger.warning("Ignoring unknown grid option: %s", key)

        values = {k: v for k, v in data.items() if k in known}

        for key in ("rows", "cols"):
            if key in values:
                value = values[key]
                if isinstance(value, bool) or not isinstance(value, int) or value < 1:
                    raise ValidationError(
                        f"Invalid {key}: {value!r}. Must be an integer >= 1"
                    )

        for key in ("flip_y_label", "flip_x_label", "rectangle"):
            if key in values and not isinstance(values[key], bool):
                raise ValidationError(f"Invalid {key}: {values[key]!r}. Must be a boolean")

        if values.get("boundary_label", BOUNDARY_LOWER) not in BOUNDARY_LABELS:
            raise ValidationError(
                f"Invalid boundary_label: {values['boundary_label']!r}. "
                f"Allowed values: {', '.join(BOUNDARY_LABELS)}"
            )

        for key in ("cell_width", "cell_height"):
            if key in values:
                value = values[key]
                if (
                    isinstance(value, bool)
                    or not isinstance(value, (int, float))
                    or value <= 0
                ):
                    raise ValidationError(
                        f"Invalid {key}: {value!r}. Must be a positive number"
                    )
                values[key] = float(value)

        return cls(**values)

    @property
    def uses_cell_size(self) -> bool:
        """Return True if the grid is derived from cell size."""
        return self.cell_width is not None and self.cell_height is not None

    def build(self, extent: ExtentLike) -> Grating:
        """Create the grating of this sheet for an extent."""
        if self.uses_cell_size:
            return Grating.from_cell_size(
                extent,
                self.cell_width,
                self.cell_height,
                flip_y_label=self.flip_y_label,
                flip_x_label=self.flip_x_label,
            )
        return Grating(
            extent,
            self.rows,
            self.cols,
            flip_y_label=self.flip_y_label,
            flip_x_label=self.flip_x_label,
        )


def parse_config(data: Mapping[str, Any]) -> Dict[str, GratingConfig]:
    """
    Build sheet configurations from an already parsed document.

    Returns
    -------
    dict
        Sheet name (lower-case) to GratingConfig.

    Raises
    ------
    ValidationError
        If no sheets are configured or a sheet is invalid.
    """
    defaults = data.get("defaults", {})
    sheets = data.get("sheets", {})

    if not isinstance(defaults, Mapping) or not isinstance(sheets, Mapping):
        raise ValidationError("'defaults' and 'sheets' must be tables")
    if not sheets:
        raise ValidationError("No sheets configured")

    configs = {}
    for name, options in sheets.items():
        if not isinstance(options, Mapping):
            raise ValidationError(f"Sheet '{name}' must be a table")

        key = str(name).lower()
        if key in configs:
            raise ValidationError(f"Sheet '{name}' is already configured")

        try:
            configs[key] = GratingConfig.from_dict({**defaults, **options})
        except ValidationError as e:
            raise ValidationError(f"Sheet '{name}': {e}") from e

    return configs


def load_config(path: str | Path) -> Dict[str, GratingConfig]:
    """
    Load sheet grid configurations from a TOML file.

    Parameters
    ----------
    path : str or Path
        Path to the configuration file.

    Returns
    -------
    dict
        Sheet name (lower-case) to GratingConfig.

    Raises
    ------
    ValidationError
        If the file is missing, is not valid TOML, or holds invalid options.
    """
    path = Path(path)
    try:
        with open(path, "rb") as f:
            data = tomllib.load(f)
    except FileNotFoundError:
        raise ValidationError(f"Config file not found: {path}") from None
    except tomllib.TOMLDecodeError as e:
        raise ValidationError(f"Unable to parse config ({path}): {e}") from e

    configs = parse_config(data)
    logger.info("Loaded %d sheet grid(s) from %s", len(configs), path)
    return configs
