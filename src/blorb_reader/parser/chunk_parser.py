"""IFF-style chunk parser.

A chunk is: tag(4) + payload length(4) + payload. The length counts only the
payload, not the 8-byte header.
"""

from blorb_reader.models.chunk_types import PICTURE_FORMATS, ChunkType
from blorb_reader.models.chunks import Chunk, ChunkPayload, PictureHandle, RawPayload
from blorb_reader.models.errors import InvalidLength
from blorb_reader.models.reader_config import ReaderConfig
from blorb_reader.parser.binary_reader import BinaryReader
from blorb_reader.parser.glulx_reader import read_glulx_image


CHUNK_HEADER_SIZE = 8


def _picture(kind: ChunkType, data: memoryview, config: ReaderConfig) -> ChunkPayload:
    return PictureHandle(format=kind, data=data)


def _glulx(kind: ChunkType, data: memoryview, config: ReaderConfig) -> ChunkPayload:
    return read_glulx_image(data, config)


# Kinds whose payload gets a typed view. Everything else stays raw bytes.
_PAYLOAD_DECODERS = {
    **{kind: _picture for kind in PICTURE_FORMATS},
    ChunkType.EXEC_GLUL: _glulx,
}


def decode_payload(
    kind: ChunkType, data: memoryview, config: ReaderConfig | None = None
) -> ChunkPayload:
    decoder = _PAYLOAD_DECODERS.get(kind)
    if decoder is None:
        return RawPayload(data)
    return decoder(kind, data, config or ReaderConfig())


def parse_chunk(data, config: ReaderConfig | None = None, *, position: int = 0) -> Chunk:
    """Parse the chunk that starts at the beginning of *data*.

    Bytes past the chunk's declared length are ignored. *position* is only
    recorded on the result (the chunk's offset within the whole file).

    Raises:
        InvalidLength: If *data* is shorter than the 8-byte header or than
            the declared payload.
        UnknownIdentifier: If the tag is not a recognized chunk type.
    """
    if len(data) < CHUNK_HEADER_SIZE:
        raise InvalidLength(len(data), CHUNK_HEADER_SIZE)

    reader = BinaryReader(data)
    kind = ChunkType.from_tag(reader.uint32())
    length = reader.uint32()
    if length > reader.remaining:
        raise InvalidLength(reader.remaining, length)
    payload_data = reader.bytes(length)

    return Chunk(
        kind=kind,
        data=payload_data,
        payload=decode_payload(kind, payload_data, config),
        offset=position,
    )
