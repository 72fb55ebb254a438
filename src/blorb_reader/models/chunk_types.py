"""Blorb chunk type identifiers.

Each chunk in a Blorb file starts with a 4-byte ASCII tag. The enum value is
that tag read as a big-endian u32, so "FORM" is 0x464F524D.
"""

from enum import IntEnum

from blorb_reader.models.errors import UnknownIdentifier


class ChunkType(IntEnum):
    """The closed set of chunk tags this reader understands."""
    # Envelope
    FORM = 0x464F524D            # FORM
    IFRS = 0x49465253            # IFRS
    RESOURCE_INDEX = 0x52496478  # RIdx

    # Resource categories (resource index usage field)
    PICTURE = 0x50696374         # Pict
    SOUND = 0x536E6420           # "Snd "
    EXECUTABLE = 0x45786563      # Exec
    DATA = 0x44617461            # Data

    # Chunk encodings
    PICTURE_PNG = 0x504E4720     # "PNG "
    PICTURE_JPEG = 0x4A504547    # JPEG
    SOUND_MOD = 0x4D4F4420       # "MOD "
    SOUND_SONG = 0x534F4E47      # SONG
    EXEC_ZCOD = 0x5A434F44       # ZCOD
    EXEC_GLUL = 0x474C554C       # GLUL
    TEXT = 0x54455854            # TEXT

    # Optional metadata
    COLOR_PALETTE = 0x506C7465   # Plte
    RESOLUTION = 0x5265736F      # Reso
    LOOP = 0x4C6F6F70            # Loop
    RELEASE_NUMBER = 0x52656C4E  # RelN
    IF_HEADER = 0x49466864       # IFhd
    AUTHOR = 0x41555448          # AUTH
    COPYRIGHT = 0x2863295F       # (c)_
    ANNOTATION = 0x414E4E4F      # ANNO
    INFO = 0x496E666F            # Info

    @classmethod
    def from_tag(cls, value: int) -> "ChunkType":
        """Map a raw big-endian tag to its ChunkType.

        Raises:
            UnknownIdentifier: If *value* is not one of the recognized tags.
        """
        try:
            return cls(value)
        except ValueError:
            raise UnknownIdentifier(value) from None

    @property
    def tag(self) -> str:
        """The 4-character ASCII form of the tag (e.g. 'RIdx')."""
        return self.value.to_bytes(4, "big").decode("ascii")


RESOURCE_CATEGORIES: frozenset[ChunkType] = frozenset({
    ChunkType.PICTURE,
    ChunkType.SOUND,
    ChunkType.DATA,
    ChunkType.EXECUTABLE,
})

PICTURE_FORMATS: frozenset[ChunkType] = frozenset({
    ChunkType.PICTURE_PNG,
    ChunkType.PICTURE_JPEG,
})

EXECUTABLE_FORMATS: frozenset[ChunkType] = frozenset({
    ChunkType.EXEC_GLUL,
    ChunkType.EXEC_ZCOD,
})

METADATA_TYPES: frozenset[ChunkType] = frozenset({
    ChunkType.COLOR_PALETTE,
    ChunkType.RESOLUTION,
    ChunkType.LOOP,
    ChunkType.RELEASE_NUMBER,
    ChunkType.IF_HEADER,
    ChunkType.AUTHOR,
    ChunkType.COPYRIGHT,
    ChunkType.ANNOTATION,
})
