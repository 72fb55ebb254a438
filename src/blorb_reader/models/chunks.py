"""Blorb chunk and resource index data classes."""

import io
from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from PIL import Image

from blorb_reader.models.chunk_types import PICTURE_FORMATS, RESOURCE_CATEGORIES, ChunkType
from blorb_reader.models.errors import UnknownIdentifier
from blorb_reader.models.glulx import GlulxImage


@dataclass(frozen=True, slots=True)
class RawPayload:
    """Chunk contents with no structure this reader interprets."""
    data: memoryview


@dataclass(frozen=True, slots=True)
class PictureHandle:
    """A PNG or JPEG payload waiting to be decoded.

    Decoding is left to Pillow; nothing is read until open() is called.
    """
    format: ChunkType   # PICTURE_PNG or PICTURE_JPEG
    data: memoryview

    def __post_init__(self) -> None:
        if self.format not in PICTURE_FORMATS:
            raise UnknownIdentifier(int(self.format))

    def open(self) -> Image.Image:
        return Image.open(io.BytesIO(self.data))


ChunkPayload = RawPayload | PictureHandle | GlulxImage


@dataclass(frozen=True, slots=True)
class Chunk:
    """A parsed chunk: its type, payload view and decoded payload."""
    kind: ChunkType
    data: memoryview         # payload bytes (header excluded)
    payload: ChunkPayload
    offset: int = 0          # offset of the chunk header in the parsed buffer

    @property
    def is_executable(self) -> bool:
        return isinstance(self.payload, GlulxImage)

    def __str__(self) -> str:
        return f"Chunk type: {self.kind.tag!r} ({len(self.data)} bytes)"


@dataclass(frozen=True, slots=True)
class ResourceIndex:
    """Resource category -> {resource id -> Chunk}.

    All four categories are always present, possibly empty. The buckets are
    read-only views; the index cannot change once built.
    """
    resources: Mapping[ChunkType, Mapping[int, Chunk]] = field(default_factory=dict)

    def __post_init__(self) -> None:
        buckets = {
            category: MappingProxyType(dict(self.resources.get(category, {})))
            for category in RESOURCE_CATEGORIES
        }
        object.__setattr__(self, "resources", MappingProxyType(buckets))

    def get(self, category: ChunkType, resource_id: int) -> Chunk | None:
        bucket = self.resources.get(category)
        if bucket is None:
            return None
        return bucket.get(resource_id)

    def ids(self, category: ChunkType) -> list[int]:
        return sorted(self.resources.get(category, {}))

    def entries(self) -> Iterator[tuple[ChunkType, int, Chunk]]:
        """Yield (category, id, chunk) for every indexed resource."""
        for category in sorted(self.resources):
            bucket = self.resources[category]
            for resource_id in sorted(bucket):
                yield category, resource_id, bucket[resource_id]

    def __len__(self) -> int:
        return sum(len(bucket) for bucket in self.resources.values())
