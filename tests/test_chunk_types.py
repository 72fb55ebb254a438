"""Tests for the ChunkType registry."""

import pytest

from blorb_reader.models.chunk_types import (
    EXECUTABLE_FORMATS,
    METADATA_TYPES,
    PICTURE_FORMATS,
    RESOURCE_CATEGORIES,
    ChunkType,
)
from blorb_reader.models.errors import BlorbError, UnknownIdentifier


@pytest.mark.parametrize("text", [
    "FORM", "IFRS", "RIdx", "Pict", "Snd ", "Exec", "Data", "PNG ", "JPEG",
    "MOD ", "SONG", "ZCOD", "GLUL", "TEXT", "Plte", "Reso", "Loop", "RelN",
    "IFhd", "AUTH", "(c)_", "ANNO", "Info",
])
def test_every_tag_round_trips_through_its_ascii_text(text):
    value = int.from_bytes(text.encode("ascii"), "big")
    kind = ChunkType.from_tag(value)
    assert kind == value
    assert kind.tag == text


def test_known_values():
    assert ChunkType.FORM == 0x464F524D
    assert ChunkType.from_tag(0x52496478) is ChunkType.RESOURCE_INDEX
    assert ChunkType.from_tag(0x474C554C) is ChunkType.EXEC_GLUL


@pytest.mark.parametrize("value", [0, 0xFFFFFFFF, int.from_bytes(b"Glul", "big"),
                                   int.from_bytes(b"form", "big")])
def test_unknown_tag_raises(value):
    with pytest.raises(UnknownIdentifier) as excinfo:
        ChunkType.from_tag(value)
    assert excinfo.value.value == value


def test_unknown_identifier_is_a_value_error():
    with pytest.raises(ValueError, match="Unknown identifier 0x00000000"):
        ChunkType.from_tag(0)
    assert issubclass(UnknownIdentifier, BlorbError)


def test_category_sets():
    assert RESOURCE_CATEGORIES == {
        ChunkType.PICTURE, ChunkType.SOUND, ChunkType.DATA, ChunkType.EXECUTABLE,
    }
    assert PICTURE_FORMATS == {ChunkType.PICTURE_PNG, ChunkType.PICTURE_JPEG}
    assert ChunkType.EXEC_GLUL in EXECUTABLE_FORMATS
    assert ChunkType.AUTHOR in METADATA_TYPES
    assert not RESOURCE_CATEGORIES & METADATA_TYPES
