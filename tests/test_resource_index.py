"""Tests for build_index: synthetic RIdx tables."""

import struct

import pytest

from blorb_reader.models.chunk_types import RESOURCE_CATEGORIES, ChunkType
from blorb_reader.models.errors import (
    InvalidLength,
    UnexpectedStartingIdentifier,
    UnknownIdentifier,
)
from blorb_reader.parser.resource_index import build_index


def _chunk(tag: bytes, payload: bytes) -> bytes:
    return tag + struct.pack(">I", len(payload)) + payload


def _build_index_data(entries: list[tuple[bytes, int, bytes]]) -> bytes:
    """Build the bytes after the FORM envelope: RIdx table + chunks.

    Addresses are file offsets, i.e. they include the 12-byte envelope.
    """
    table_size = 12 + 12 * len(entries)
    address = 12 + table_size
    table = b""
    chunks = b""
    for usage, resource_id, chunk in entries:
        table += struct.pack(">4siI", usage, resource_id, address + len(chunks))
        chunks += chunk
    header = b"RIdx" + struct.pack(">II", 4 + 12 * len(entries), len(entries))
    return header + table + chunks


def test_empty_index_has_all_categories():
    index = build_index(_build_index_data([]))
    assert set(index.resources) == RESOURCE_CATEGORIES
    assert all(bucket == {} for bucket in index.resources.values())
    assert len(index) == 0


def test_entries_land_in_their_categories():
    index = build_index(_build_index_data([
        (b"Pict", 1, _chunk(b"JPEG", b"jpeg")),
        (b"Snd ", 3, _chunk(b"SONG", b"song")),
        (b"Data", 5, _chunk(b"TEXT", b"text")),
    ]))
    assert len(index) == 3
    assert bytes(index.get(ChunkType.PICTURE, 1).data) == b"jpeg"
    assert bytes(index.get(ChunkType.SOUND, 3).data) == b"song"
    assert bytes(index.get(ChunkType.DATA, 5).data) == b"text"
    assert index.get(ChunkType.PICTURE, 3) is None
    assert index.get(ChunkType.TEXT, 1) is None


def test_entry_order_does_not_matter():
    entries = [
        (b"Data", 1, _chunk(b"TEXT", b"one")),
        (b"Data", 2, _chunk(b"TEXT", b"two")),
        (b"Pict", 1, _chunk(b"PNG ", b"pic")),
    ]
    forward = build_index(_build_index_data(entries))
    backward = build_index(_build_index_data(entries[::-1]))
    for category, resource_id in ((ChunkType.DATA, 1), (ChunkType.DATA, 2), (ChunkType.PICTURE, 1)):
        assert bytes(forward.get(category, resource_id).data) == bytes(
            backward.get(category, resource_id).data
        )


def test_duplicate_id_last_entry_wins():
    index = build_index(_build_index_data([
        (b"Data", 7, _chunk(b"TEXT", b"first")),
        (b"Data", 7, _chunk(b"TEXT", b"second")),
    ]))
    assert len(index) == 1
    assert bytes(index.get(ChunkType.DATA, 7).data) == b"second"


def test_negative_ids():
    index = build_index(_build_index_data([(b"Data", -1, _chunk(b"TEXT", b"neg"))]))
    assert bytes(index.get(ChunkType.DATA, -1).data) == b"neg"


def test_address_is_shifted_by_envelope():
    data = _build_index_data([(b"Data", 0, _chunk(b"TEXT", b"payload"))])
    address = struct.unpack_from(">I", data, 12 + 8)[0]
    assert address == 36
    chunk = build_index(data).get(ChunkType.DATA, 0)
    assert chunk.offset == address
    assert data[address - 12 : address - 12 + 4] == b"TEXT"


def test_ids_and_entries():
    index = build_index(_build_index_data([
        (b"Pict", 9, _chunk(b"PNG ", b"a")),
        (b"Pict", 2, _chunk(b"PNG ", b"b")),
    ]))
    assert index.ids(ChunkType.PICTURE) == [2, 9]
    assert [(c, i) for c, i, _ in index.entries()] == [
        (ChunkType.PICTURE, 2), (ChunkType.PICTURE, 9),
    ]


def test_wrong_starting_tag():
    data = b"RIDX" + _build_index_data([])[4:]
    with pytest.raises(UnexpectedStartingIdentifier) as excinfo:
        build_index(data)
    assert excinfo.value.expected is ChunkType.RESOURCE_INDEX


def test_non_resource_category_rejected():
    data = _build_index_data([(b"TEXT", 0, _chunk(b"TEXT", b""))])
    with pytest.raises(UnknownIdentifier) as excinfo:
        build_index(data)
    assert excinfo.value.value == int.from_bytes(b"TEXT", "big")


def test_unknown_category_rejected():
    data = _build_index_data([(b"Huh?", 0, _chunk(b"TEXT", b""))])
    with pytest.raises(UnknownIdentifier):
        build_index(data)


def test_address_inside_envelope_rejected():
    data = b"RIdx" + struct.pack(">II", 16, 1) + struct.pack(">4siI", b"Data", 0, 4)
    with pytest.raises(InvalidLength):
        build_index(data)


def test_address_past_end_rejected():
    data = b"RIdx" + struct.pack(">II", 16, 1) + struct.pack(">4siI", b"Data", 0, 5000)
    with pytest.raises(InvalidLength):
        build_index(data)


def test_count_larger_than_table():
    data = b"RIdx" + struct.pack(">II", 4, 3)
    with pytest.raises(InvalidLength):
        build_index(data)


def test_index_is_read_only():
    index = build_index(_build_index_data([(b"Data", 1, _chunk(b"TEXT", b"keep"))]))
    with pytest.raises(TypeError):
        index.resources[ChunkType.DATA][2] = index.get(ChunkType.DATA, 1)
    with pytest.raises(AttributeError):
        index.resources[ChunkType.DATA].clear()
    with pytest.raises(TypeError):
        del index.resources[ChunkType.PICTURE]
    assert bytes(index.get(ChunkType.DATA, 1).data) == b"keep"


def test_huge_count_is_rejected_before_reading_entries():
    data = b"RIdx" + struct.pack(">II", 4, 0xFFFFFFFF)
    with pytest.raises(InvalidLength) as excinfo:
        build_index(data)
    assert excinfo.value.expected == 0xFFFFFFFF * 12


def test_wrong_starting_tag_message_names_the_tag():
    with pytest.raises(UnexpectedStartingIdentifier, match="expected 'RIdx'"):
        build_index(b"XXXX" + b"\x00" * 8)
