"""Big-endian integer decoders and a bounded cursor over a byte buffer."""

import struct

from blorb_reader.models.errors import InvalidLength


def _unpack(fmt: struct.Struct, data, offset: int) -> int:
    available = len(data) - offset
    if offset < 0 or available < fmt.size:
        raise InvalidLength(max(available, 0), fmt.size)
    return fmt.unpack_from(data, offset)[0]


_U16 = struct.Struct(">H")
_U32 = struct.Struct(">I")
_I32 = struct.Struct(">i")


def read_be_u16(data, offset: int = 0) -> int:
    return _unpack(_U16, data, offset)


def read_be_u32(data, offset: int = 0) -> int:
    return _unpack(_U32, data, offset)


def read_be_i32(data, offset: int = 0) -> int:
    return _unpack(_I32, data, offset)


class BinaryReader:
    """Wraps a buffer with big-endian typed reads and a moving cursor.

    Reads never copy: bytes(size) and view() hand back memoryview slices of
    the wrapped buffer. slice(size) returns a new BinaryReader bounded to the
    next `size` bytes, so nested structures cannot overrun their parent.
    """

    __slots__ = ("_data", "_pos", "_end")

    def __init__(self, data, offset: int = 0, end: int | None = None) -> None:
        self._data = memoryview(data).cast("B")
        self._pos = offset
        self._end = end if end is not None else len(self._data)

    @property
    def position(self) -> int:
        return self._pos

    @property
    def remaining(self) -> int:
        return self._end - self._pos

    def _require(self, size: int) -> None:
        if size < 0 or self._pos + size > self._end:
            raise InvalidLength(self.remaining, size)

    def uint16(self) -> int:
        self._require(2)
        value = read_be_u16(self._data, self._pos)
        self._pos += 2
        return value

    def uint32(self) -> int:
        self._require(4)
        value = read_be_u32(self._data, self._pos)
        self._pos += 4
        return value

    def int32(self) -> int:
        self._require(4)
        value = read_be_i32(self._data, self._pos)
        self._pos += 4
        return value

    def bytes(self, size: int) -> memoryview:
        self._require(size)
        chunk = self._data[self._pos : self._pos + size]
        self._pos += size
        return chunk

    def skip(self, size: int) -> None:
        self._require(size)
        self._pos += size

    def slice(self, size: int) -> "BinaryReader":
        """Return a new BinaryReader bounded to the next `size` bytes.

        Advances this reader's cursor past the sliced region.
        """
        self._require(size)
        sub = BinaryReader(self._data, self._pos, self._pos + size)
        self._pos += size
        return sub

    def view(self) -> memoryview:
        """Everything from the cursor to the end bound, without moving."""
        return self._data[self._pos : self._end]
