"""Enumerations and tagged offsets used by structure items."""

from dataclasses import dataclass
from enum import StrEnum


class DataType(StrEnum):
    """How the bits of an item are interpreted."""

    INT = "INT"
    UINT = "UINT"
    FLOAT = "FLOAT"
    STRING = "STRING"
    BLOCK = "BLOCK"
    DERIVED = "DERIVED"  # Computed, never physically packed


class Endianness(StrEnum):
    """Byte order of an item."""

    BIG_ENDIAN = "BIG_ENDIAN"
    LITTLE_ENDIAN = "LITTLE_ENDIAN"


class Overflow(StrEnum):
    """Policy for values that do not fit in the item's bit size."""

    ERROR = "ERROR"
    ERROR_ALLOW_HEX = "ERROR_ALLOW_HEX"
    TRUNCATE = "TRUNCATE"
    SATURATE = "SATURATE"


# Types whose bit_offset must fall on a byte boundary
BYTE_ALIGNED_TYPES = frozenset([DataType.FLOAT, DataType.STRING, DataType.BLOCK])

# Types that always occupy a positive number of bits
SIZED_TYPES = frozenset([DataType.INT, DataType.UINT, DataType.FLOAT])

FLOAT_BIT_SIZES = (32, 64)


@dataclass(frozen=True, slots=True)
class Absolute:
    """Offset measured from the start of the structure."""

    bits: int

    @property
    def sort_key(self) -> tuple[int, int]:
        return (0, self.bits)

    def to_bits(self) -> int:
        return self.bits


@dataclass(frozen=True, slots=True)
class FromEnd:
    """Offset measured back from the end of the structure.

    ``bits`` is the distance from the end, so a signed bit_offset of -16
    is ``FromEnd(16)``. Every from-end offset sorts after every absolute
    offset, and the one farthest from the end sorts first.
    """

    bits: int

    @property
    def sort_key(self) -> tuple[int, int]:
        return (1, -self.bits)

    def to_bits(self) -> int:
        return -self.bits


BitOffset = Absolute | FromEnd


def offset_from_bits(bit_offset: int) -> BitOffset:
    """Tag a signed bit offset as absolute or from-end."""
    if bit_offset < 0:
        return FromEnd(-bit_offset)
    return Absolute(bit_offset)


def type_names(enum_type: type[StrEnum]) -> list[str]:
    """Return the symbolic names of an enum in declaration order."""
    return [member.name for member in enum_type]
