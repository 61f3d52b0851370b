"""
Tour Grid Solver - Entry Point

Completes a jump-move tour from the command line and prints the result.

Example:
    python main.py --size 5 --variant knight --start 0 0
    python main.py --size 6 --path "0,0 1,2 2,4" --image tour.png
    python main.py --size 8 --start 0 0 --tie-break random --seed 7 --save-settings
"""

import sys
import logging
import argparse
from typing import List, Optional

from tourgrid.render import format_grid, save_debug_image, save_tour_image
from tourgrid.settings import create_solver_from_settings, load_settings, save_settings
from tourgrid.solver import (
    Position,
    TourError,
    TourGrid,
    get_tie_break_names,
    get_variant_names,
    is_legal_move,
)


logger = logging.getLogger(__name__)

EXIT_SOLVED = 0
EXIT_NO_SOLUTION = 1
EXIT_BAD_INPUT = 2


def configure_logging(debug: bool = False, log_file: Optional[str] = None) -> None:
    """Configure logging - output to console and optionally to a file."""
    handlers: List[logging.Handler] = [logging.StreamHandler()]
    if log_file:
        handlers.append(logging.FileHandler(log_file, mode='w', encoding='utf-8'))

    logging.basicConfig(
        level=logging.DEBUG if debug else logging.WARNING,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
        handlers=handlers,
        force=True,
    )


def parse_path(text: str) -> List[Position]:
    """
    Parse "r,c r,c ..." into positions.

    Raises:
        ValueError: On malformed pairs
    """
    positions = []
    for token in text.replace(";", " ").split():
        parts = token.split(",")
        if len(parts) != 2:
            raise ValueError(f"Bad path entry {token!r}, expected row,col")
        positions.append(Position(int(parts[0]), int(parts[1])))
    return positions


def parse_args(argv: Optional[List[str]] = None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Tour Grid Solver - complete a knight/square jump tour"
    )
    parser.add_argument("--size", "-n", type=int, help="Board side length N")
    parser.add_argument("--variant", "-v", choices=get_variant_names(),
                        help="Move variant")
    parser.add_argument("--start", "-s", type=int, nargs=2, metavar=("ROW", "COL"),
                        help="Current position (defaults to the last path cell)")
    parser.add_argument("--path", "-p", default="",
                        help='Moves already played, e.g. "0,0 1,2 2,4"')
    parser.add_argument("--node-limit", type=int, help="Search node budget")
    parser.add_argument("--tie-break", choices=get_tie_break_names(),
                        help="Ordering of equal-degree candidates")
    parser.add_argument("--seed", type=int, help="Seed for the random tie-break")
    parser.add_argument("--image", help="Save the completed grid as PNG")
    parser.add_argument("--save-settings", action="store_true",
                        help="Persist the effective options to config.json")
    parser.add_argument("--debug", "-d", action="store_true",
                        help="Debug logging and a debug image per solve")
    parser.add_argument("--log-file", help="Also write the log to this file")
    return parser.parse_args(argv)


def merge_settings(settings: dict, args) -> dict:
    """CLI values override saved settings."""
    merged = dict(settings)
    overrides = {
        "board_size": args.size,
        "move_variant": args.variant,
        "node_limit": args.node_limit,
        "tie_break": args.tie_break,
        "tie_break_seed": args.seed,
    }
    for key, value in overrides.items():
        if value is not None:
            merged[key] = value
    if args.debug:
        merged["debug_enabled"] = True
    return merged


def build_grid(size: int, path: List[Position], variant: str) -> TourGrid:
    """
    Replay the played path into a grid, checking each jump.

    Raises:
        TourError: If a jump is not a legal move for the variant
    """
    for prev, nxt in zip(path, path[1:]):
        if not is_legal_move(prev, nxt, variant):
            raise TourError(f"Illegal {variant} move {prev} -> {nxt}")
    return TourGrid.from_path(size, path)


def run(args, settings: dict) -> int:
    """
    Solve once and print the outcome.

    Returns:
        Exit code
    """
    try:
        path = parse_path(args.path)
        grid = build_grid(int(settings["board_size"]), path, settings["move_variant"])
        solver = create_solver_from_settings(settings)
        if args.start is not None:
            start = Position(*args.start)
        else:
            start = path[-1] if path else None
        result = solver.solve(grid, start)
    except ValueError as e:
        # TourError and settings errors are ValueErrors
        logger.error(f"Invalid input: {e}")
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_BAD_INPUT

    m = result.metrics
    print(result.summary())
    print(f"nodes={m.nodes_visited} max_depth={m.max_depth} "
          f"time={m.computation_time_ms:.1f}ms tie_break={m.tie_break}")

    if not result.success:
        detail = result.describe()
        if detail:
            print(f"({detail})")
        return EXIT_NO_SOLUTION

    completed = result.apply_to(grid)
    print(format_grid(completed))

    if args.image:
        written = save_tour_image(completed, args.image, highlight=[result.start])
        print(f"Image saved: {written}")
    if settings.get("debug_enabled"):
        written = save_debug_image(completed, highlight=[result.start])
        logger.info(f"Debug image saved: {written}")

    return EXIT_SOLVED


def main(argv: Optional[List[str]] = None) -> int:
    """Entry point for the Tour Grid Solver CLI."""
    args = parse_args(argv)
    configure_logging(args.debug, args.log_file)

    # Load persistent settings, CLI values take precedence
    settings = merge_settings(load_settings(), args)

    if args.save_settings:
        save_settings(settings)

    return run(args, settings)


if __name__ == "__main__":
    sys.exit(main())
