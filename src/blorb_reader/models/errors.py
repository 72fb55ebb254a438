"""Exceptions raised while reading Blorb containers and Glulx images.

Every parse failure is a ``BlorbError``, which is a ``ValueError``: malformed
input is a bad value, and callers that already guard with ``except ValueError``
keep working.
"""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from blorb_reader.models.chunk_types import ChunkType


class BlorbError(ValueError):
    """Base class for malformed-input errors."""


class UnexpectedStartingIdentifier(BlorbError):
    """A tag at a fixed position did not match the required value."""

    def __init__(self, expected: "ChunkType") -> None:
        self.expected = expected
        super().__init__(f"Unexpected starting identifier, expected {expected.tag!r}")


class InvalidLength(BlorbError):
    """A declared or required length does not match the available bytes."""

    def __init__(self, actual: int, expected: int) -> None:
        self.actual = actual
        self.expected = expected
        super().__init__(
            f"Invalid length: actual length {actual}, expected length {expected}"
        )


class UnknownIdentifier(BlorbError):
    """A 4-byte tag is not one of the recognized chunk types."""

    def __init__(self, value: int) -> None:
        self.value = value
        super().__init__(f"Unknown identifier 0x{value:08X}")


class InvalidConversion(BlorbError):
    """A byte range could not be read as the requested integer type."""

    def __init__(self, detail: str = "") -> None:
        message = "Invalid conversion"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)


class UnknownFileType(BlorbError):
    """The buffer is neither a bare Glulx image nor a Blorb container."""

    def __init__(self) -> None:
        super().__init__("Unknown file type: not a Glulx image or Blorb file")


class MissingExecutable(RuntimeError):
    """A Blorb game has no executable resource at the requested id.

    Not a ``BlorbError``: the container parsed fine, but it cannot be played.
    """

    def __init__(self, resource_id: int) -> None:
        self.resource_id = resource_id
        super().__init__(f"Blorb file has no executable resource with id {resource_id}")


class ChecksumMismatch(BlorbError):
    """A Glulx image's stored checksum does not match its contents."""

    def __init__(self, stored: int, computed: int) -> None:
        self.stored = stored
        self.computed = computed
        super().__init__(
            f"Checksum mismatch: header says 0x{stored:08X}, image sums to 0x{computed:08X}"
        )
