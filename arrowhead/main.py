from __future__ import annotations

import argparse
import logging
import sys
from typing import Callable, List, Optional

from arrowhead import config
from arrowhead.graphics.canvas import SegmentCanvas
from arrowhead.logging_config import setup_logging
from arrowhead.patterns.library import find_generator, load_menu

logger = logging.getLogger("arrowhead.main")


def run_headless(
    cfg: config.AppConfig,
    name: str,
    generations: int,
    emit: Callable[[str], None] = print,
) -> List[int]:
    """Run one fractal for a number of generations without a window; return counts per generation."""
    canvas = SegmentCanvas(min_split_length=cfg.min_split_length)
    gen = find_generator(load_menu(canvas, cfg), name)
    gen.setup()
    counts = [canvas.count()]
    emit(f"generation=0 segments={counts[0]}")
    for _ in range(generations):
        gen.iterate()
        counts.append(canvas.count())
        emit(f"generation={gen.generation} segments={canvas.count()}")
    return counts


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="arrowhead",
        description="Iterative line-segment fractals (Koch, Sierpinski, trees, dragons, ...)",
    )
    parser.add_argument("--config", "-c", default=None, help="Path to YAML configuration file")
    parser.add_argument(
        "--log-level",
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Override the configured log level",
    )
    parser.add_argument("--log-file", default=None, help="Also write logs to this file")
    parser.add_argument(
        "--headless",
        metavar="NAME",
        default=None,
        help="Run the named fractal without a window and print segment counts",
    )
    parser.add_argument(
        "--generations",
        "-n",
        type=int,
        default=3,
        help="Generations to run in headless mode (default: 3)",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        cfg = config.load_config(args.config)
        setup_logging(args.log_level or cfg.log_level, args.log_file or cfg.log_file)
    except (FileNotFoundError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if args.generations < 0:
        print("Error: --generations must be non-negative", file=sys.stderr)
        return 2

    if args.headless:
        try:
            run_headless(cfg, args.headless, args.generations)
        except (FileNotFoundError, ValueError, KeyError) as e:
            logger.error("%s", e)
            return 1
        return 0

    # imported here so headless runs never open a display
    from arrowhead.render.viewer import FractalViewer

    viewer = FractalViewer(cfg)
    viewer.run()
    return 0


if __name__ == "__main__":
    sys.exit(main())
