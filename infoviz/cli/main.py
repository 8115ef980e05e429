"""
Command-line interface for the stacked area layout.
Reads series data from JSON, runs the layout and writes the polygons as JSON.
"""
import argparse
import json
import logging
import sys
from typing import Any, Dict, List, Optional, Tuple

from ..core.errors import InfovizError, LayoutDataError
from ..core.geometry_models import Rectangle
from ..core.stacked_layout import StackedAreaChart
from ..core.stacked_models import (
    DEFAULT_PADDING,
    DEFAULT_THRESHOLD,
    Orientation,
    VisualItem,
    VisualTable,
)
from ..utils.log import setup_logging

DEFAULT_BOUNDS = (0.0, 0.0, 800.0, 600.0)


def create_parser() -> argparse.ArgumentParser:
    """
    Create argument parser for CLI.

    Returns:
        Configured ArgumentParser
    """
    parser = argparse.ArgumentParser(
        prog="stacked-area",
        description="Compute stacked area chart polygons from series data",
        epilog="Input: {\"columns\": [...], \"items\": [{\"name\": ..., \"values\": {...}}]}"
    )

    parser.add_argument(
        "input",
        help="JSON file with columns and items ('-' for stdin)"
    )

    parser.add_argument(
        "--output", "-o",
        metavar="FILE",
        help="Write layout JSON to FILE instead of stdout"
    )

    parser.add_argument(
        "--orientation",
        choices=[o.value for o in Orientation],
        default=Orientation.BOTTOM_TOP.value,
        help="Direction in which the stack grows (default: bottom_top)"
    )

    parser.add_argument(
        "--normalized",
        action="store_true",
        help="Scale every column independently to the full height"
    )

    parser.add_argument(
        "--padding",
        type=float,
        default=DEFAULT_PADDING,
        help=f"Headroom above the tallest column, 0-1 (default: {DEFAULT_PADDING})"
    )

    parser.add_argument(
        "--threshold",
        type=float,
        default=DEFAULT_THRESHOLD,
        help=f"Hide layers spanning less than this (default: {DEFAULT_THRESHOLD})"
    )

    parser.add_argument(
        "--bounds",
        type=float,
        nargs=4,
        metavar=("X", "Y", "WIDTH", "HEIGHT"),
        help="Layout bounds; overrides the input's 'bounds' (default: 0 0 800 600)"
    )

    parser.add_argument(
        "--field",
        default="polygon",
        help="Polygon slot name (default: polygon)"
    )

    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable debug logging"
    )

    return parser


def _parse_bounds(raw: Any) -> Tuple[float, float, float, float]:
    if not isinstance(raw, (list, tuple)) or len(raw) != 4:
        raise LayoutDataError(f"'bounds' must be [x, y, width, height], got {raw!r}")
    if not all(isinstance(v, (int, float)) and not isinstance(v, bool) for v in raw):
        raise LayoutDataError(f"'bounds' must hold 4 numbers, got {raw!r}")
    x, y, width, height = raw
    return float(x), float(y), float(width), float(height)


def load_columns(data: Dict[str, Any]) -> List[str]:
    """
    Read the ordered column names from a parsed input document.

    Args:
        data: Parsed JSON object

    Returns:
        Column names, in time order
    """
    columns = data.get("columns", [])
    if not isinstance(columns, list) or not all(isinstance(c, str) for c in columns):
        raise LayoutDataError(f"'columns' must be a list of column names, got {columns!r}")
    return columns


def load_table(data: Dict[str, Any], bounds: Optional[List[float]] = None) -> VisualTable:
    """
    Build a VisualTable from a parsed input document.

    Args:
        data: Parsed JSON with "items" and optional "bounds"
        bounds: (x, y, width, height) taking precedence over the document

    Returns:
        VisualTable holding one item per input entry, in input order
    """
    if not isinstance(data, dict):
        raise LayoutDataError(f"Input must be a JSON object, got {type(data).__name__}")

    x, y, width, height = _parse_bounds(bounds or data.get("bounds") or DEFAULT_BOUNDS)
    table = VisualTable(Rectangle.from_bounds(x, y, width, height))

    entries = data.get("items", [])
    if not isinstance(entries, list):
        raise LayoutDataError("'items' must be a list of item entries")

    for entry in entries:
        if not isinstance(entry, dict):
            raise LayoutDataError(f"Item entry must be an object: {entry!r}")
        if "values" not in entry:
            raise LayoutDataError(f"Item entry without 'values': {entry!r}")
        if not isinstance(entry["values"], dict):
            raise LayoutDataError(f"Item 'values' must be an object: {entry['values']!r}")
        table.add_item(VisualItem(
            values=dict(entry["values"]),
            name=entry.get("name"),
            visible=bool(entry.get("visible", True)),
        ))

    return table


def layout_to_dict(layout: StackedAreaChart) -> Dict[str, Any]:
    """
    Serialize the result of a layout run.

    Args:
        layout: Layout after run()

    Returns:
        Dictionary with the range model and per-item polygons
    """
    items = []
    for item in layout.group.items():
        items.append({
            "name": item.name,
            "visible": item.visible,
            "current": item.get_polygon(layout.field),
            "start": item.get_polygon(layout.start_field),
            "end": item.get_polygon(layout.end_field),
        })

    return {
        "orientation": layout.orientation.value,
        "normalized": layout.normalized,
        "columns": layout.columns,
        "range": list(layout.range_model.as_tuple()),
        "items": items,
    }


def main(argv: Optional[list] = None):
    """
    Main CLI entry point.

    Args:
        argv: Command line arguments (for testing)
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    setup_logging(logging.DEBUG if args.verbose else logging.WARNING)

    try:
        if args.input == "-":
            data = json.load(sys.stdin)
        else:
            with open(args.input) as f:
                data = json.load(f)

        table = load_table(data, args.bounds)
        layout = StackedAreaChart(table, args.field, load_columns(data), args.threshold)
        layout.orientation = args.orientation
        layout.normalized = args.normalized
        layout.padding = args.padding
        layout.run()

        result = json.dumps(layout_to_dict(layout), indent=2)

        if args.output:
            with open(args.output, 'w') as f:
                f.write(result)
            visible = sum(1 for item in table.items() if item.visible)
            print(f"✓ Laid out {len(table)} items ({visible} visible) to {args.output}")
        else:
            print(result)

    except (OSError, json.JSONDecodeError) as e:
        print(f"ERROR: Could not read input: {e}", file=sys.stderr)
        sys.exit(1)

    except InfovizError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        sys.exit(1)

    except Exception as e:
        print(f"UNEXPECTED ERROR: {e}", file=sys.stderr)
        import traceback
        traceback.print_exc()
        sys.exit(1)


if __name__ == '__main__':
    main()
