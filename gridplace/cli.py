#!/usr/bin/env python3
"""
GridPlace CLI

Command-line interface for the grid layout engine. Layouts are read from a
YAML (or JSON) document holding either a bare list of items or a mapping
with an `items:` list and an optional `config:` block.

Usage:
    gridplace compact <layout.yaml> [options]
    gridplace move <layout.yaml> <item> <x> <y> [options]
    gridplace validate <layout.yaml>
    gridplace position <layout.yaml> [--width PX]
    gridplace presets
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import yaml

from .config import GridConfig, config_from_dict, get_preset, list_presets
from .layout.abstraction import LayoutItem, Layout
from .layout.validation import validate_layout
from .placement.collision import collides
from .placement.compactor import compact, correct_bounds
from .api.session import GridSession

logger = logging.getLogger(__name__)


def load_layout_document(path: str) -> Tuple[List[Dict[str, Any]], GridConfig]:
    """
    Load a layout document.

    Returns:
        Tuple of (raw item mappings, grid config)

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If the document shape is not recognised
    """
    doc_path = Path(path)
    if not doc_path.exists():
        raise FileNotFoundError(f"Layout file not found: {doc_path}")

    with open(doc_path, "r") as f:
        data = yaml.safe_load(f)

    if data is None:
        return [], GridConfig()
    if isinstance(data, list):
        return data, GridConfig()
    if isinstance(data, dict):
        config = config_from_dict(data.get("config") or {})
        return data.get("items") or [], config
    raise ValueError(f"Layout document must be a list or a mapping: {doc_path}")


def items_from_raw(raw_items: List[Any]) -> Layout:
    """Validate raw item mappings and convert them to layout items."""
    validate_layout(raw_items, "items")
    return [LayoutItem.from_dict(item) for item in raw_items]


def dump_layout(layout: Layout) -> str:
    return yaml.safe_dump(
        {"items": [item.to_dict() for item in layout]},
        sort_keys=False,
        default_flow_style=None,
    )


def cmd_compact(args):
    """Compact a layout and print the result."""
    raw_items, config = load_layout_document(args.layout)
    layout = items_from_raw(raw_items)

    mode = args.mode if args.mode is not None else config.effective_compact_type
    cols = args.cols or config.cols

    corrected = correct_bounds(layout, cols)
    if args.allow_overlap:
        result = corrected
    else:
        result = compact(corrected, mode, cols)

    print(dump_layout(result), end="")
    return 0


def cmd_move(args):
    """Drag one item to a grid position and print the resulting layout."""
    raw_items, config = load_layout_document(args.layout)
    if args.prevent_collision:
        config.prevent_collision = True

    session = GridSession(config, items_from_raw(raw_items))
    changed = session.drag(args.item, args.x, args.y)
    if not changed:
        logger.info("Move of %s left the layout unchanged", args.item)

    print(dump_layout(session.layout), end="")
    return 0


def cmd_validate(args):
    """Validate a layout: field types, bounds and overlaps."""
    raw_items, config = load_layout_document(args.layout)
    layout = items_from_raw(raw_items)

    issues = []
    seen = set()
    for item in layout:
        if item.i in seen:
            issues.append(f"Duplicate item id: {item.i}")
        seen.add(item.i)
        if item.x < 0 or item.y < 0:
            issues.append(f"{item.i}: negative position ({item.x}, {item.y})")
        if item.x + item.w > config.cols:
            issues.append(f"{item.i}: overflows {config.cols} columns (x={item.x}, w={item.w})")

    for index, item in enumerate(layout):
        for other in layout[index + 1:]:
            if collides(item, other):
                issues.append(f"Overlap: {item.i} and {other.i}")

    if issues:
        print(f"Layout has {len(issues)} issue(s):")
        for issue in issues:
            print(f"  - {issue}")
        return 1

    print(f"Layout OK: {len(layout)} items, {config.cols} columns")
    return 0


def cmd_position(args):
    """Print the pixel rectangle of every item."""
    raw_items, config = load_layout_document(args.layout)
    session = GridSession(config, items_from_raw(raw_items), container_width=args.width)

    positions = {}
    for item in session.layout:
        pos = session.item_position(item.i)
        positions[item.i] = {
            "top": pos.top,
            "left": pos.left,
            "width": pos.width,
            "height": pos.height,
        }

    print(yaml.safe_dump({"positions": positions}, sort_keys=False), end="")
    return 0


def cmd_presets(args):
    """List available grid presets."""
    for name in list_presets():
        preset = get_preset(name)
        print(f"{name:10s} {preset.description}")
    return 0


def main(argv: Optional[List[str]] = None):
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="GridPlace - Grid Layout Engine",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  gridplace compact dashboard.yaml
  gridplace compact dashboard.yaml --mode horizontal --cols 6
  gridplace move dashboard.yaml chart 4 0 --prevent-collision
  gridplace validate dashboard.yaml
  gridplace position dashboard.yaml --width 996
        """,
    )

    parser.add_argument('--version', action='version', version='gridplace 0.1.0')
    parser.add_argument('-v', '--verbose', action='store_true', help='Verbose (debug) logging')

    subparsers = parser.add_subparsers(dest='command', help='Available commands')

    # Compact command
    compact_parser = subparsers.add_parser('compact', help='Compact a layout')
    compact_parser.add_argument('layout', help='Path to layout YAML/JSON file')
    compact_parser.add_argument('--mode', choices=['vertical', 'horizontal', 'none'],
                                help='Compaction mode (default: from config)')
    compact_parser.add_argument('--cols', type=int, help='Column count (default: from config)')
    compact_parser.add_argument('--allow-overlap', action='store_true',
                                help='Only correct bounds, do not compact')

    # Move command
    move_parser = subparsers.add_parser('move', help='Move one item and resolve collisions')
    move_parser.add_argument('layout', help='Path to layout YAML/JSON file')
    move_parser.add_argument('item', help='Item id')
    move_parser.add_argument('x', type=float, help='Target column')
    move_parser.add_argument('y', type=float, help='Target row')
    move_parser.add_argument('--prevent-collision', action='store_true',
                             help='Refuse the move if it would collide')

    # Validate command
    validate_parser = subparsers.add_parser('validate', help='Validate a layout')
    validate_parser.add_argument('layout', help='Path to layout YAML/JSON file')

    # Position command
    position_parser = subparsers.add_parser('position', help='Print pixel rectangles')
    position_parser.add_argument('layout', help='Path to layout YAML/JSON file')
    position_parser.add_argument('--width', type=float, default=1200.0,
                                 help='Container width in px (default: 1200)')

    # Presets command
    subparsers.add_parser('presets', help='List grid presets')

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format='%(asctime)s %(levelname)s [%(name)s] %(message)s',
        datefmt='%H:%M:%S',
    )

    if not args.command:
        parser.print_help()
        return 1

    # Dispatch command
    commands = {
        'compact': cmd_compact,
        'move': cmd_move,
        'validate': cmd_validate,
        'position': cmd_position,
        'presets': cmd_presets,
    }

    try:
        return commands[args.command](args)
    except (FileNotFoundError, ValueError, KeyError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == '__main__':
    sys.exit(main())
