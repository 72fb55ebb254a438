"""Glulx executable image data classes."""

import struct
from dataclasses import dataclass

from blorb_reader.models.errors import InvalidLength


HEADER_SIZE = 36
DEBUGGING_HEADER_SIZE = 24

GLULX_MAGIC = 0x476C756C   # "Glul"
INFO_MAGIC = 0x496E666F    # "Info"

_CHECKSUM_OFFSET = 32


def _u32_text(value: int) -> str:
    return value.to_bytes(4, "big").decode("latin-1")


@dataclass(frozen=True, slots=True)
class GlulxHeader:
    """The fixed 36-byte header at the start of every Glulx image."""
    magic_num: int
    version: int                  # major << 16 | minor << 8 | subminor
    ram_start: int
    ext_start: int
    end_mem: int
    stack_size: int
    start_function_address: int
    decoding_table_address: int
    checksum: int

    @property
    def magic_text(self) -> str:
        return _u32_text(self.magic_num)

    @property
    def version_tuple(self) -> tuple[int, int, int]:
        return (self.version >> 16, (self.version >> 8) & 0xFF, self.version & 0xFF)

    def __str__(self) -> str:
        major, minor, subminor = self.version_tuple
        return (
            f"GlulxHeader {{ magic_num: {self.magic_text}, "
            f"version: {major}.{minor}.{subminor}, ram_start: {self.ram_start}, "
            f"ext_start: {self.ext_start}, end_mem: {self.end_mem}, "
            f"stack_size: {self.stack_size}, "
            f"start_function_address: {self.start_function_address}, "
            f"decoding_table_address: {self.decoding_table_address}, "
            f"checksum: {self.checksum} }}"
        )


@dataclass(frozen=True, slots=True)
class GlulxDebuggingHeader:
    """Inform's 24-byte "Info" block that may follow the Glulx header."""
    id: int
    memory_layout: int
    inform_version: int           # 4 ASCII bytes, e.g. "6.36"
    glulx_compiler_version: int   # 4 ASCII bytes
    game_version: int             # release number
    game_serial_number: bytes     # 6 bytes, usually a YYMMDD date

    @property
    def inform_version_text(self) -> str:
        return _u32_text(self.inform_version)

    @property
    def glulx_compiler_version_text(self) -> str:
        return _u32_text(self.glulx_compiler_version)

    @property
    def serial_text(self) -> str:
        return self.game_serial_number.decode("latin-1")

    def __str__(self) -> str:
        return (
            f"GlulxDebuggingHeader {{ id: {_u32_text(self.id)}, "
            f"memory_layout: {self.memory_layout}, "
            f"inform_version: {self.inform_version_text}, "
            f"glulx_compiler_version: {self.glulx_compiler_version_text}, "
            f"game_version: {self.game_version}, "
            f"game_serial_number: {self.serial_text} }}"
        )


@dataclass(frozen=True, slots=True)
class GlulxImage:
    """A parsed Glulx image: headers plus a view over the whole image.

    `memory` is a memoryview of the caller's buffer. It is kept for the
    interpreter that eventually runs the game and is never copied here.
    """
    header: GlulxHeader
    debugging_header: GlulxDebuggingHeader | None
    memory: memoryview

    def compute_checksum(self) -> int:
        """Sum of all big-endian words in ROM and RAM up to ext_start, mod 2**32.

        The stored checksum word itself counts as zero.
        """
        end = self.header.ext_start
        if len(self.memory) < end:
            raise InvalidLength(len(self.memory), end)
        end -= end % 4
        total = 0
        for (word,) in struct.iter_unpack(">I", self.memory[:end]):
            total += word
        if end > _CHECKSUM_OFFSET:
            total -= self.header.checksum
        return total & 0xFFFFFFFF

    def verify_checksum(self) -> bool:
        return self.compute_checksum() == self.header.checksum
