"""Blorb container reader.

Navigates the file structure:
  FORM envelope -> IFRS -> RIdx resource index -> resource chunks

The whole file must already be in memory. Every chunk handed out is a view
over the caller's buffer; nothing is copied.
"""

from blorb_reader.models.chunk_types import ChunkType
from blorb_reader.models.chunks import Chunk, ResourceIndex
from blorb_reader.models.errors import InvalidLength, UnexpectedStartingIdentifier
from blorb_reader.models.glulx import GlulxImage
from blorb_reader.models.reader_config import ReaderConfig
from blorb_reader.parser.binary_reader import BinaryReader
from blorb_reader.parser.resource_index import build_index


class BlorbReader:
    """A validated Blorb file and its resource index."""

    __slots__ = ("_index",)

    def __init__(self, data, config: ReaderConfig | None = None) -> None:
        """Validate the FORM/IFRS envelope and index the resources.

        Raises:
            UnexpectedStartingIdentifier: If the file doesn't start with
                "FORM" or the form type isn't "IFRS".
            InvalidLength: If the FORM length doesn't match the buffer size.
        """
        data = memoryview(data).cast("B")
        reader = BinaryReader(data)

        if reader.uint32() != ChunkType.FORM:
            raise UnexpectedStartingIdentifier(ChunkType.FORM)
        declared = reader.uint32()
        if declared != len(data) - 8:
            raise InvalidLength(len(data) - 8, declared)
        if reader.uint32() != ChunkType.IFRS:
            raise UnexpectedStartingIdentifier(ChunkType.IFRS)

        self._index = build_index(reader.view(), config)

    @property
    def index(self) -> ResourceIndex:
        return self._index

    def get(self, category: ChunkType, resource_id: int) -> Chunk | None:
        return self._index.get(category, resource_id)

    def get_exec(self, resource_id: int) -> GlulxImage | None:
        """Return the Glulx image stored as executable *resource_id*, if any.

        Executables in other formats (e.g. ZCOD) give None.
        """
        chunk = self._index.get(ChunkType.EXECUTABLE, resource_id)
        if chunk is None or not isinstance(chunk.payload, GlulxImage):
            return None
        return chunk.payload

    def get_image(self, resource_id: int) -> Chunk | None:
        chunk = self._index.get(ChunkType.PICTURE, resource_id)
        # A picture entry pointing at an executable means the index is corrupt.
        if chunk is None or chunk.is_executable:
            return None
        return chunk

    def get_sound(self, resource_id: int) -> Chunk | None:
        return self._index.get(ChunkType.SOUND, resource_id)

    def get_data(self, resource_id: int) -> Chunk | None:
        return self._index.get(ChunkType.DATA, resource_id)

    def resource_ids(self, category: ChunkType) -> list[int]:
        return self._index.ids(category)

    def __len__(self) -> int:
        return len(self._index)

    def __str__(self) -> str:
        parts = []
        for category, resource_id, chunk in self._index.entries():
            parts.append(f"{category.tag}#{resource_id}: {chunk}")
        return "BlorbReader{ " + ", ".join(parts) + " }"
