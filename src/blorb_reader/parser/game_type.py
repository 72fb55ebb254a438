"""Tell bare Glulx images and Blorb-wrapped games apart."""

from dataclasses import dataclass, field

from blorb_reader.models.errors import (
    BlorbError,
    ChecksumMismatch,
    MissingExecutable,
    UnknownFileType,
)
from blorb_reader.models.glulx import GlulxImage
from blorb_reader.models.reader_config import ReaderConfig
from blorb_reader.parser.blorb_reader import BlorbReader
from blorb_reader.parser.glulx_reader import read_glulx_image


@dataclass(frozen=True, slots=True)
class BareGlulxGame:
    """A .ulx file: the buffer is the Glulx image itself."""
    image: GlulxImage

    def get_exec(self) -> GlulxImage:
        return self.image


@dataclass(frozen=True, slots=True)
class BlorbGame:
    """A .gblorb file: the Glulx image is one of the container's resources."""
    reader: BlorbReader
    config: ReaderConfig = field(default_factory=ReaderConfig)

    def get_exec(self) -> GlulxImage:
        """Return the game program.

        Raises:
            MissingExecutable: If the container has no Glulx executable at
                ``config.executable_id``. Such a file cannot be played.
        """
        image = self.reader.get_exec(self.config.executable_id)
        if image is None:
            raise MissingExecutable(self.config.executable_id)
        return image


GameType = BareGlulxGame | BlorbGame


def identify(data, config: ReaderConfig | None = None) -> GameType:
    """Work out what kind of game file *data* holds.

    A bare Glulx image is tried first, then a Blorb container.

    Raises:
        UnknownFileType: If *data* is neither. The container error is chained
            as ``__cause__``.
        ChecksumMismatch: If checksum verification is on and the Glulx image
            (bare or inside the container) does not sum to its stored value.
    """
    config = config or ReaderConfig()
    try:
        return BareGlulxGame(read_glulx_image(data, config))
    except ChecksumMismatch:
        raise
    except BlorbError:
        pass
    try:
        return BlorbGame(BlorbReader(data, config), config)
    except ChecksumMismatch:
        raise
    except BlorbError as exc:
        raise UnknownFileType() from exc
