"""Glulx image header reader.

Layout (all big-endian u32 unless noted):
  0  "Glul" magic        20 stack size
  4  version             24 start function address
  8  RAM start           28 string decoding table address
  12 extended mem start  32 checksum
  16 end of memory

Inform games follow this with a 24-byte "Info" block: magic, memory layout
version, Inform version, Glulx back-end version, release number (u16) and a
6-byte serial number.
"""

from blorb_reader.models.chunk_types import ChunkType
from blorb_reader.models.errors import (
    ChecksumMismatch,
    InvalidLength,
    UnexpectedStartingIdentifier,
)
from blorb_reader.models.glulx import (
    DEBUGGING_HEADER_SIZE,
    GLULX_MAGIC,
    HEADER_SIZE,
    INFO_MAGIC,
    GlulxDebuggingHeader,
    GlulxHeader,
    GlulxImage,
)
from blorb_reader.models.reader_config import ReaderConfig
from blorb_reader.parser.binary_reader import BinaryReader, read_be_u32


def parse_header(data) -> GlulxHeader:
    """Parse the 36-byte Glulx header at the start of *data*.

    Raises:
        InvalidLength: If fewer than 36 bytes are available.
        UnexpectedStartingIdentifier: If the magic number is not "Glul".
    """
    if len(data) < HEADER_SIZE:
        raise InvalidLength(len(data), HEADER_SIZE)
    reader = BinaryReader(data)
    magic_num = reader.uint32()
    if magic_num != GLULX_MAGIC:
        raise UnexpectedStartingIdentifier(ChunkType.EXEC_GLUL)
    return GlulxHeader(
        magic_num=magic_num,
        version=reader.uint32(),
        ram_start=reader.uint32(),
        ext_start=reader.uint32(),
        end_mem=reader.uint32(),
        stack_size=reader.uint32(),
        start_function_address=reader.uint32(),
        decoding_table_address=reader.uint32(),
        checksum=reader.uint32(),
    )


def parse_debug_header(data) -> GlulxDebuggingHeader:
    """Parse the "Info" block that starts at *data* (offset 36 of the image)."""
    if len(data) < DEBUGGING_HEADER_SIZE:
        raise InvalidLength(len(data), DEBUGGING_HEADER_SIZE)
    reader = BinaryReader(data)
    magic = reader.uint32()
    if magic != INFO_MAGIC:
        raise UnexpectedStartingIdentifier(ChunkType.INFO)
    return GlulxDebuggingHeader(
        id=magic,
        memory_layout=reader.uint32(),
        inform_version=reader.uint32(),
        glulx_compiler_version=reader.uint32(),
        game_version=reader.uint16(),
        game_serial_number=bytes(reader.bytes(6)),
    )


def _has_debug_header(after_header: memoryview) -> bool:
    return len(after_header) >= 4 and read_be_u32(after_header) == INFO_MAGIC


def read_glulx_image(data, config: ReaderConfig | None = None) -> GlulxImage:
    """Parse a whole Glulx image: header, optional "Info" block, memory view.

    The debugging header is read when the bytes after the main header carry
    the "Info" magic. With ``config.require_debug_header`` it must be there.
    """
    config = config or ReaderConfig()
    memory = memoryview(data).cast("B")
    header = parse_header(memory)

    after_header = memory[HEADER_SIZE:]
    debugging_header = None
    if config.require_debug_header or _has_debug_header(after_header):
        debugging_header = parse_debug_header(after_header)

    image = GlulxImage(header=header, debugging_header=debugging_header, memory=memory)
    if config.verify_checksum:
        computed = image.compute_checksum()
        if computed != header.checksum:
            raise ChecksumMismatch(header.checksum, computed)
    return image
