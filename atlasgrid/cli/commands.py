"""
Command-line interface for Atlasgrid.

This module provides CLI commands for listing grid labels, generating
grid overlay GeoJSON and finding the grid reference of a point.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional

from atlasgrid.config import GratingConfig, load_config
from atlasgrid.core.extent import Extent
from atlasgrid.core.grating import Grating
from atlasgrid.exceptions import AtlasGridError, ValidationError
from atlasgrid.geometry.export import to_json, write_geojson
from atlasgrid.geometry.generator import BOUNDARY_LABELS, grid_features

logger = logging.getLogger(__name__)


def _add_grid_arguments(parser: argparse.ArgumentParser) -> None:
    """Add the arguments shared by commands that build a grating."""
    parser.add_argument(
        "--bbox",
        required=True,
        metavar="BBOX",
        help="Sheet extent: min_x,min_y,max_x,max_y",
    )
    parser.add_argument(
        "--crs",
        metavar="CRS",
        help="Coordinate reference system of the bbox (e.g., EPSG:4326)",
    )
    parser.add_argument(
        "--rows",
        type=int,
        help="Number of grid rows",
    )
    parser.add_argument(
        "--cols",
        type=int,
        help="Number of grid columns",
    )
    parser.add_argument(
        "--flip-y",
        action="store_true",
        help="Label rows ascending from the bottom row",
    )
    parser.add_argument(
        "--flip-x",
        action="store_true",
        help="Number columns ascending from the right-most column",
    )
    parser.add_argument(
        "--config",
        metavar="FILE",
        help="TOML file with sheet grid configuration",
    )
    parser.add_argument(
        "--sheet",
        metavar="NAME",
        help="Sheet name from the configuration file",
    )


def create_parser() -> argparse.ArgumentParser:
    """
    Create and configure the argument parser.

    Returns
    -------
    argparse.ArgumentParser
        Configured argument parser
    """
    parser = argparse.ArgumentParser(
        prog="atlasgrid",
        description="Grid reference labels and overlay geometry for atlas sheets",
        epilog="Example: atlasgrid grid --bbox 0,0,9,3 --rows 3 --cols 3",
    )

    parser.add_argument(
        "--version",
        action="version",
        version="%(prog)s 0.1.0",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable debug logging",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Labels command
    labels_parser = subparsers.add_parser(
        "labels",
        help="List row and column labels",
        description="List labels of all rows (and columns) of a grid",
    )
    labels_parser.add_argument(
        "--rows",
        type=int,
        required=True,
        help="Number of grid rows",
    )
    labels_parser.add_argument(
        "--cols",
        type=int,
        default=0,
        help="Number of grid columns (default: rows only)",
    )
    labels_parser.add_argument(
        "--flip-y",
        action="store_true",
        help="Label rows ascending from row 0",
    )
    labels_parser.add_argument(
        "--flip-x",
        action="store_true",
        help="Number columns ascending from the last column",
    )

    # Grid command
    grid_parser = subparsers.add_parser(
        "grid",
        help="Generate grid overlay GeoJSON",
        description="Generate grid cells or grid lines as a GeoJSON FeatureCollection",
    )
    _add_grid_arguments(grid_parser)
    grid_parser.add_argument(
        "--lines",
        action="store_true",
        help="Emit boundary lines instead of cell polygons",
    )
    grid_parser.add_argument(
        "--boundary-label",
        choices=BOUNDARY_LABELS,
        help="Which neighbour labels a shared line (default: lower)",
    )
    grid_parser.add_argument(
        "--output",
        "-o",
        metavar="FILE",
        help="Output file (default: standard output)",
    )
    grid_parser.add_argument(
        "--indent",
        type=int,
        help="JSON indentation",
    )

    # Locate command
    locate_parser = subparsers.add_parser(
        "locate",
        help="Print the grid reference of a point",
        description="Find the grid cell containing a point",
    )
    _add_grid_arguments(locate_parser)
    locate_parser.add_argument("x", type=float, help="Point X coordinate")
    locate_parser.add_argument("y", type=float, help="Point Y coordinate")

    return parser


def resolve_config(args: argparse.Namespace, extent: Extent) -> GratingConfig:
    """
    Combine configuration file options with command-line options.

    Command-line values take precedence over the configuration file. When a
    sheet sized by cell size gets only one count on the command line, the
    other count is derived from the cell size over the extent.

    Raises
    ------
    ValidationError
        If the sheet is unknown or rows/cols are missing.
    """
    options = {}

    if args.config:
        configs = load_config(args.config)
        if not args.sheet:
            raise ValidationError("--sheet is required with --config")
        name = args.sheet.lower()
        if name not in configs:
            raise ValidationError(
                f"Unknown sheet: '{args.sheet}'. "
                f"Configured: {', '.join(sorted(configs))}"
            )
        base = configs[name]
        options = {
            "rows": base.rows,
            "cols": base.cols,
            "flip_y_label": base.flip_y_label,
            "flip_x_label": base.flip_x_label,
            "rectangle": base.rectangle,
            "boundary_label": base.boundary_label,
        }
        if base.uses_cell_size:
            options["cell_width"] = base.cell_width
            options["cell_height"] = base.cell_height
    elif args.rows is None or args.cols is None:
        raise ValidationError("--rows and --cols are required without --config")

    if args.rows is not None or args.cols is not None:
        if "cell_width" in options:
            derived = base.build(extent)
            options["rows"] = derived.rows
            options["cols"] = derived.cols
            del options["cell_width"]
            del options["cell_height"]
        if args.rows is not None:
            options["rows"] = args.rows
        if args.cols is not None:
            options["cols"] = args.cols
    if args.flip_y:
        options["flip_y_label"] = True
    if args.flip_x:
        options["flip_x_label"] = True
    if getattr(args, "lines", False):
        options["rectangle"] = False
    if getattr(args, "boundary_label", None):
        options["boundary_label"] = args.boundary_label

    return GratingConfig.from_dict(options)


def format_labels(grating: Grating, with_cols: bool = True) -> str:
    """
    Format row and column labels for display.

    Parameters
    ----------
    grating : Grating
        Grating to describe
    with_cols : bool
        Include column labels

    Returns
    -------
    str
        Formatted labels string
    """
    lines = [f"Rows ({grating.rows}):"]
    for row, label in enumerate(grating.row_labels()):
        lines.append(f"  {row:>4}  {label}")

    if with_cols:
        lines.append("")
        lines.append(f"Columns ({grating.cols}):")
        for col, label in enumerate(grating.col_labels()):
            lines.append(f"  {col:>4}  {label}")

    return "\n".join(lines)


def cmd_labels(args: argparse.Namespace) -> int:
    """
    Execute the labels command.

    Parameters
    ----------
    args : argparse.Namespace
        Parsed command-line arguments

    Returns
    -------
    int
        Exit code (0 for success, 1 for error)
    """
    grating = Grating(
        (0.0, 0.0, 1.0, 1.0),
        args.rows,
        max(args.cols, 1),
        flip_y_label=args.flip_y,
        flip_x_label=args.flip_x,
    )
    print(format_labels(grating, with_cols=args.cols > 0))
    return 0


def cmd_grid(args: argparse.Namespace) -> int:
    """Execute the grid command."""
    extent = Extent.parse(args.bbox, crs=args.crs)
    config = resolve_config(args, extent)
    grating = config.build(extent)

    collection = grid_features(
        grating,
        rectangle=config.rectangle,
        boundary_label=config.boundary_label,
    )

    if args.output:
        path = write_geojson(collection, Path(args.output), indent=args.indent)
        print(f"Wrote {len(collection['features'])} features to {path}")
    else:
        print(to_json(collection, indent=args.indent))

    return 0


def cmd_locate(args: argparse.Namespace) -> int:
    """Execute the locate command."""
    extent = Extent.parse(args.bbox, crs=args.crs)
    grating = resolve_config(args, extent).build(extent)

    reference = grating.reference_for_point(args.x, args.y)
    if not reference:
        print(f"Point ({args.x}, {args.y}) is outside the sheet", file=sys.stderr)
        return 1

    print(reference)
    return 0


def main(args: Optional[list[str]] = None) -> int:
    """
    Main entry point for the CLI.

    Parameters
    ----------
    args : list[str], optional
        Command-line arguments (defaults to sys.argv[1:])

    Returns
    -------
    int
        Exit code (0 for success, non-zero for error)
    """
    parser = create_parser()
    parsed_args = parser.parse_args(args)

    if parsed_args.verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s %(name)s %(levelname)s: %(message)s",
        )

    if parsed_args.command is None:
        parser.print_help()
        return 0

    commands = {
        "labels": cmd_labels,
        "grid": cmd_grid,
        "locate": cmd_locate,
    }

    command = commands.get(parsed_args.command)
    if command is None:
        # Unknown command (shouldn't happen with argparse)
        print(f"Unknown command: {parsed_args.command}", file=sys.stderr)
        return 1

    try:
        return command(parsed_args)
    except AtlasGridError as e:
        logger.debug("Command %s failed", parsed_args.command, exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
