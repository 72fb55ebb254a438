"""Load game files from disk for the parsers."""

from pathlib import Path

from blorb_reader.models.reader_config import ReaderConfig
from blorb_reader.parser.game_type import GameType, identify


GAME_SUFFIXES: tuple[str, ...] = (".ulx", ".gblorb", ".glb", ".blb", ".blorb")


def load_game_bytes(path: Path) -> bytes:
    if not path.exists():
        raise FileNotFoundError(f"Game file not found: {path}")
    return path.read_bytes()


def load_game(path: Path, config: ReaderConfig | None = None) -> GameType:
    """Read *path* and identify it. The returned views borrow the file bytes."""
    return identify(load_game_bytes(path), config)
