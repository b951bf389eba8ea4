"""
Command-line interface for Perfboard Designer batch operations.

Validate, inspect and render board files, and merge component libraries
into them, without opening the editor.

Usage::

    python -m cli validate board.json
    python -m cli info board.json
    python -m cli info board.json --json
    python -m cli render board.json --output board.png
    python -m cli import-library board.json parts.json --output merged.json
"""

import argparse
import json
import logging
import os
import sys
from collections import Counter
from pathlib import Path

from controllers.file_controller import validate_library_data, validate_scene_data
from controllers.scene_controller import SceneController
from models.scene import SceneModel

logger = logging.getLogger(__name__)


def try_load_scene(filepath: str) -> tuple[SceneModel | None, str]:
    """Load and validate a board JSON file without exiting.

    Returns:
        (model, "") on success, or (None, error_message) on failure.
    """
    path = Path(filepath)
    if not path.exists():
        return None, f"file not found: {filepath}"

    try:
        data = json.loads(path.read_text())
    except json.JSONDecodeError as e:
        return None, f"invalid JSON in {filepath}: {e}"
    except OSError as e:
        return None, f"could not read {filepath}: {e}"

    try:
        validate_scene_data(data)
    except ValueError as e:
        return None, f"invalid board file: {e}"

    return SceneModel.from_dict(data), ""


def load_scene(filepath: str) -> SceneModel:
    """Load and validate a board JSON file.

    Raises:
        SystemExit: On file read or validation errors.
    """
    model, error = try_load_scene(filepath)
    if model is None:
        print(f"Error: {error}", file=sys.stderr)
        sys.exit(1)
    return model


def scene_summary(model: SceneModel) -> dict:
    """Counts describing a board, as printed by the info command."""
    wire_types = Counter(w.wire_type for w in model.wires)
    pins = sum(
        1 for c in model.components if not c.is_board
        for name in c.pins_top + c.pins_bottom if name
    )
    return {
        "grid": {"w": model.grid_width, "h": model.grid_height},
        "components": len([c for c in model.components if not c.is_board]),
        "boards": len([c for c in model.components if c.is_board]),
        "pins": pins,
        "wires": {"front": wire_types.get("front", 0), "back": wire_types.get("back", 0)},
    }


def cmd_validate(args: argparse.Namespace) -> int:
    """Check that a board file loads."""
    model, error = try_load_scene(args.scene)
    if model is None:
        print(f"Board has errors: {args.scene}", file=sys.stderr)
        print(f"  - {error}", file=sys.stderr)
        return 1
    print(f"Board is valid: {args.scene}")
    return 0


def cmd_info(args: argparse.Namespace) -> int:
    """Print a summary of a board file."""
    model = load_scene(args.scene)
    summary = scene_summary(model)

    if args.json:
        print(json.dumps(summary, indent=2))
        return 0

    print(f"Board:      {summary['grid']['w']} x {summary['grid']['h']}")
    print(f"Components: {summary['components']} ({summary['pins']} pins)")
    print(f"Substrates: {summary['boards']}")
    print(f"Wires:      {summary['wires']['front']} front, {summary['wires']['back']} back")
    for component in model.components:
        kind = "board" if component.is_board else "part"
        label = component.label or "-"
        print(f"  {component.component_id:<6} {kind:<5} {label:<16} "
              f"at ({component.x}, {component.y}) {component.w}x{component.h}")
    return 0


def cmd_render(args: argparse.Namespace) -> int:
    """Render a board file to PNG."""
    model = load_scene(args.scene)

    # Rendering needs a Qt application but never a display
    os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")
    from PyQt6.QtGui import QGuiApplication

    from GUI.board_renderer import BoardRenderer

    app = QGuiApplication.instance() or QGuiApplication([])  # noqa: F841

    if not BoardRenderer().export_image(model, args.output):
        print(f"Error: could not write {args.output}", file=sys.stderr)
        return 1
    print(f"Image written to {args.output}", file=sys.stderr)
    return 0


def cmd_import_library(args: argparse.Namespace) -> int:
    """Add a component library to a board and write the result."""
    model = load_scene(args.scene)

    try:
        records = json.loads(Path(args.library).read_text())
        validate_library_data(records)
    except (OSError, json.JSONDecodeError, ValueError) as e:
        print(f"Error: invalid library {args.library}: {e}", file=sys.stderr)
        return 1

    controller = SceneController(model)
    added = controller.import_library(records)
    output_text = controller.serialize()

    if args.output:
        Path(args.output).write_text(output_text)
        print(f"Added {len(added)} components, written to {args.output}", file=sys.stderr)
    else:
        print(output_text)
    return 0


def build_parser() -> argparse.ArgumentParser:
    """Build the CLI argument parser."""
    parser = argparse.ArgumentParser(
        prog="perfboard-cli",
        description="Perfboard Designer batch operations: validate, inspect and render board files.",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    # validate
    val_parser = subparsers.add_parser("validate", help="Check that a board file loads")
    val_parser.add_argument("scene", help="Path to board JSON file")

    # info
    info_parser = subparsers.add_parser("info", help="Summarize a board file")
    info_parser.add_argument("scene", help="Path to board JSON file")
    info_parser.add_argument("--json", action="store_true", help="Print the summary as JSON")

    # render
    render_parser = subparsers.add_parser("render", help="Render a board file to PNG")
    render_parser.add_argument("scene", help="Path to board JSON file")
    render_parser.add_argument("--output", "-o", required=True, help="PNG file to write")

    # import-library
    lib_parser = subparsers.add_parser("import-library", help="Add library components to a board")
    lib_parser.add_argument("scene", help="Path to board JSON file")
    lib_parser.add_argument("library", help="Path to component library JSON file")
    lib_parser.add_argument("--output", "-o", help="Write the merged board to file instead of stdout")

    return parser


def main(argv=None) -> int:
    """CLI entry point. Returns exit code."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    handlers = {
        "validate": cmd_validate,
        "info": cmd_info,
        "render": cmd_render,
        "import-library": cmd_import_library,
    }

    handler = handlers.get(args.command)
    if handler is None:
        parser.print_help()
        return 1

    return handler(args)


if __name__ == "__main__":
    sys.exit(main())
