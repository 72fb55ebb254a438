"""Dump the structure of a Glulx game file (.ulx or .gblorb).

Usage:
    python -m scripts.dump_blorb GAME [--exec-id N] [--require-debug-header]
                                      [--verify-checksum] [--verbose]
"""

import argparse
import logging
import sys
from pathlib import Path

from blorb_reader.models.errors import BlorbError, MissingExecutable
from blorb_reader.models.glulx import GlulxImage
from blorb_reader.models.reader_config import ReaderConfig
from blorb_reader.parser.game_loader import GAME_SUFFIXES, load_game
from blorb_reader.parser.game_type import BlorbGame, GameType


log = logging.getLogger(__name__)


def setup_logging(verbose: bool = False) -> None:
    log_fmt = "[%(asctime)s] %(levelname)s: %(message)s"
    datefmt = "%Y-%m-%d %H:%M:%S"
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level, format=log_fmt, datefmt=datefmt,
        handlers=[logging.StreamHandler(sys.stderr)],
    )


def format_image(image: GlulxImage) -> list[str]:
    lines = [f"  {image.header}"]
    if image.debugging_header is not None:
        lines.append(f"  {image.debugging_header}")
    else:
        lines.append("  (no debugging header)")
    return lines


def format_game(game: GameType) -> list[str]:
    if not isinstance(game, BlorbGame):
        return ["Bare Glulx image", *format_image(game.get_exec())]

    lines = [f"Blorb container, {len(game.reader)} resources"]
    for category, resource_id, chunk in game.reader.index.entries():
        lines.append(f"  {category.tag:<4} #{resource_id:<4} {chunk}  @ {chunk.offset}")
    image = game.get_exec()
    lines.append(f"Executable #{game.config.executable_id}:")
    lines.extend(format_image(image))
    return lines


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Dump a Glulx or Blorb game file")
    parser.add_argument("game", type=Path, help="Path to a .ulx or .gblorb file")
    parser.add_argument("--exec-id", type=int, default=0,
                        help="Blorb executable resource id (default: 0)")
    parser.add_argument("--require-debug-header", action="store_true",
                        help="Fail if the Glulx image has no Info block")
    parser.add_argument("--verify-checksum", action="store_true",
                        help="Fail if the Glulx header checksum is wrong")
    parser.add_argument("--verbose", action="store_true",
                        help="Log debug output")
    args = parser.parse_args(argv)
    setup_logging(args.verbose)

    config = ReaderConfig(
        executable_id=args.exec_id,
        require_debug_header=args.require_debug_header,
        verify_checksum=args.verify_checksum,
    )
    if args.game.suffix.lower() not in GAME_SUFFIXES:
        log.debug("Unusual suffix %r, identifying by content", args.game.suffix)

    try:
        game = load_game(args.game, config)
        log.debug("Identified %s as %s", args.game, type(game).__name__)
        lines = format_game(game)
    except FileNotFoundError as exc:
        print(f"Error: {exc}")
        raise SystemExit(1)
    except (BlorbError, MissingExecutable) as exc:
        log.error("Could not read %s: %s", args.game, exc)
        raise SystemExit(1)

    for line in lines:
        print(line)


if __name__ == "__main__":
    main()
