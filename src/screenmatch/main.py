"""Command-line entry point.

Registers templates from image files, matches them against a screenshot
file or a live capture, and prints one line per template.

    screenmatch -t 1=button.png -t 2=icon.png screenshot.png
    screenmatch --strategy feature -t 7=logo.png --live

With --strategy feature only the last template stays active (single slot).

Exit status: 0 if any template matched, 1 if none did, 2 on usage or IO errors.
"""
from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional, Sequence, Tuple

from .core.config import ConfigManager
from .core.logging_setup import _level_from_str, setup_logging
from .engine import STRATEGIES, VisionEngine
from .io.pixels import PixelBufferError, load_rgba
from .vision.results import MatchResult


def _template_arg(value: str) -> Tuple[int, str]:
    tid, sep, path = value.partition("=")
    if not sep or not path:
        raise argparse.ArgumentTypeError(f"expected ID=PATH, got {value!r}")
    try:
        return int(tid), path
    except ValueError:
        raise argparse.ArgumentTypeError(f"template id must be an integer, got {tid!r}") from None


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="screenmatch", description="Locate template images on a screen.")
    p.add_argument("screen", nargs="?", help="screenshot file to search (omit with --live)")
    p.add_argument(
        "-t", "--template", action="append", type=_template_arg, default=[], metavar="ID=PATH",
        help="template image to register; repeatable",
    )
    p.add_argument("--strategy", choices=STRATEGIES, default=None, help="matching strategy (default from config)")
    p.add_argument("--live", action="store_true", help="capture the configured monitor instead of reading a file")
    p.add_argument("--config", default=None, help="path to config.ini")
    p.add_argument("--log-level", default=None, help="override configured log level")
    p.add_argument("--no-log-files", action="store_true", help="log to the console only")
    return p


def format_result(r: MatchResult) -> str:
    state = "MATCHED" if r.matched else "no match"
    cx, cy = r.center
    return (
        f"id={r.id} {state} score={r.score:.3f} "
        f"rect=({r.x},{r.y},{r.width},{r.height}) center=({cx},{cy})"
    )


def _grab_live(config_manager: ConfigManager):
    from .io.capture import ScreenCapture

    cap = ScreenCapture(monitor=config_manager.get_int("capture_monitor", 1))
    try:
        return cap.grab()
    finally:
        cap.close()


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if not args.template:
        parser.error("at least one --template ID=PATH is required")
    if bool(args.screen) == bool(args.live):
        parser.error("give either a screenshot path or --live")

    config_manager = ConfigManager(args.config)
    if args.no_log_files:
        logging.basicConfig(
            level=_level_from_str(args.log_level or config_manager.get("log_level")),
            format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        )
    else:
        setup_logging(config_manager, level=args.log_level)

    engine = VisionEngine(strategy=args.strategy, config_manager=config_manager)
    engine.init()
    loaded = [tid for tid, path in args.template if engine.add_template_file(tid, path)]
    if not loaded:
        print("No template could be loaded.", file=sys.stderr)
        return 2

    try:
        screen = _grab_live(config_manager) if args.live else load_rgba(args.screen)
    except PixelBufferError as exc:
        print(f"Cannot read screen: {exc}", file=sys.stderr)
        return 2

    results: List[MatchResult] = engine.match(screen)
    for r in results:
        print(format_result(r))
    return 0 if any(r.matched for r in results) else 1


if __name__ == "__main__":
    raise SystemExit(main())
