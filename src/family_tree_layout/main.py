"""
Lay out a family tree from a JSON export, a GEDCOM file or a SQLite snapshot.

1) Load people and relationships.
2) Optionally validate the data (cycles, impossible ages, dangling links).
3) Assign generations and positions, style the relationship edges.
4) Write the layout as JSON and optionally render it.
"""

import argparse
import json
import logging
from pathlib import Path
import sys

from family_tree_layout.database import load_database
from family_tree_layout.layout import LayoutConfig, calculate_layout
from family_tree_layout.models import Person, Relationship
from family_tree_layout.parsing import load_gedcom, load_json
from family_tree_layout.plotting import plot_layout
from family_tree_layout.validation import validate_family

logger = logging.getLogger("family_tree_layout")

MAX_WARNINGS_SHOWN = 10


def load_input(path: Path) -> tuple[list[Person], list[Relationship]]:
    """Pick a loader by file extension."""
    ext = path.suffix.lower()
    if ext == ".json":
        return load_json(path)
    if ext == ".ged":
        return load_gedcom(path)
    if ext in (".db", ".sqlite", ".sqlite3"):
        return load_database(path)
    raise ValueError(f"Unsupported input format: {path.suffix or path.name}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Compute a family tree layout.")
    parser.add_argument("input", type=Path, help="People and relationships (.json, .ged or .db)")
    parser.add_argument(
        "-o",
        "--output",
        type=Path,
        default=None,
        help="Path to write the layout JSON (default: stdout)",
    )
    parser.add_argument("--plot", type=Path, default=None, help="Render the layout (.dot, .png, .svg, .pdf)")
    parser.add_argument("--validate", action="store_true", help="Report data quality warnings")
    parser.add_argument("--horizontal-spacing", type=float, default=LayoutConfig.horizontal_spacing)
    parser.add_argument("--vertical-spacing", type=float, default=LayoutConfig.vertical_spacing)
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stderr,
    )

    try:
        config = LayoutConfig(args.horizontal_spacing, args.vertical_spacing)
        logger.info("Loading %s", args.input)
        people, relationships = load_input(args.input)
    except (OSError, ValueError) as e:
        logger.error("Could not load %s: %s", args.input, e)
        return 1
    logger.info("Found %d people and %d relationships", len(people), len(relationships))

    if args.validate:
        warnings = validate_family(people, relationships)
        if warnings:
            logger.warning("Found %d validation warnings:", len(warnings))
            for w in warnings[:MAX_WARNINGS_SHOWN]:
                logger.warning("  - %s", w)
            if len(warnings) > MAX_WARNINGS_SHOWN:
                logger.warning("  ... and %d more", len(warnings) - MAX_WARNINGS_SHOWN)
        else:
            logger.info("No validation issues found")

    layout = calculate_layout(people, relationships, config)
    output = json.dumps(layout.to_dict(), indent=2)

    if args.output:
        args.output.write_text(output + "\n", encoding="utf-8")
        logger.info("Layout written to %s", args.output)
    else:
        print(output)

    if args.plot:
        plot_layout(layout, args.plot)

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
