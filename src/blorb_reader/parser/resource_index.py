"""Blorb resource index ("RIdx") builder.

Layout, starting right after the FORM/length/IFRS envelope:
  "RIdx" + index length(4) + entry count(4)
  then per entry: usage tag(4) + resource id(i32) + chunk address(4)

Chunk addresses count from the start of the file, which is 12 bytes before
the index, so every address is shifted by 12 before slicing.
"""

from blorb_reader.models.chunk_types import RESOURCE_CATEGORIES, ChunkType
from blorb_reader.models.chunks import Chunk, ResourceIndex
from blorb_reader.models.errors import (
    InvalidLength,
    UnexpectedStartingIdentifier,
    UnknownIdentifier,
)
from blorb_reader.models.reader_config import ReaderConfig
from blorb_reader.parser.binary_reader import BinaryReader
from blorb_reader.parser.chunk_parser import parse_chunk


# Sizes in bytes
ENVELOPE_SIZE = 12        # "FORM" + length + "IFRS"
INDEX_HEADER_SIZE = 12    # "RIdx" + length + count
INDEX_ENTRY_SIZE = 12


def _read_category(reader: BinaryReader) -> ChunkType:
    raw = reader.uint32()
    category = ChunkType.from_tag(raw)
    if category not in RESOURCE_CATEGORIES:
        raise UnknownIdentifier(raw)
    return category


def build_index(data, config: ReaderConfig | None = None) -> ResourceIndex:
    """Build the (category, id) -> Chunk lookup from the data after the envelope.

    Entries are applied in table order, so a repeated id replaces the earlier one.

    Raises:
        UnexpectedStartingIdentifier: If *data* does not start with "RIdx".
        UnknownIdentifier: If an entry's usage is not Pict, Snd, Data or Exec.
        InvalidLength: If the table or a referenced chunk runs past the buffer.
    """
    data = memoryview(data).cast("B")
    reader = BinaryReader(data)
    if reader.uint32() != ChunkType.RESOURCE_INDEX:
        raise UnexpectedStartingIdentifier(ChunkType.RESOURCE_INDEX)
    reader.skip(4)  # index length; the entry count is authoritative
    count = reader.uint32()

    table = reader.slice(count * INDEX_ENTRY_SIZE)
    buckets: dict[ChunkType, dict[int, Chunk]] = {
        category: {} for category in RESOURCE_CATEGORIES
    }
    for _ in range(count):
        category = _read_category(table)
        resource_id = table.int32()
        address = table.uint32()

        start = address - ENVELOPE_SIZE
        if start < 0 or start > len(data):
            raise InvalidLength(len(data) + ENVELOPE_SIZE, address)
        chunk = parse_chunk(data[start:], config, position=address)
        buckets[category][resource_id] = chunk

    return ResourceIndex(buckets)
