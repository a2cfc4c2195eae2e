"""
Serialization of grid feature collections.

This module writes GeoJSON produced by the generator to text or files.
"""

import json
import logging
from pathlib import Path
from typing import Optional

from atlasgrid.geometry.generator import FeatureCollection

logger = logging.getLogger(__name__)


def to_json(collection: FeatureCollection, indent: Optional[int] = None) -> str:
    """Return the feature collection as a GeoJSON string."""
    return json.dumps(collection, indent=indent, ensure_ascii=False)


def write_geojson(
    collection: FeatureCollection,
    path: str | Path,
    indent: Optional[int] = None,
) -> Path:
    """
    Write a feature collection to a file atomically.

    Uses a temporary file and atomic rename to prevent partial files.

    Parameters
    ----------
    collection : dict
        GeoJSON FeatureCollection.
    path : str or Path
        Target file. Parent directories are created if needed.
    indent : int, optional
        JSON indentation (default: compact output).

    Returns
    -------
    Path
        Path to the written file
    """
    target_path = Path(path)
    target_path.parent.mkdir(parents=True, exist_ok=True)

    temp_path = target_path.with_suffix(target_path.suffix + ".tmp")

    try:
        with open(temp_path, "w", encoding="utf-8") as f:
            f.write(to_json(collection, indent=indent))

        # Atomic rename
        temp_path.replace(target_path)

    except Exception:
        # Clean up temp file on error
        if temp_path.exists():
            temp_path.unlink()
        raise

    logger.info(
        "Wrote %d features to %s", len(collection.get("features", [])), target_path
    )
    return target_path
