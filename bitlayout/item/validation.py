"""Invariant checks for structure item attributes.

Every check is a pure function of the candidate attribute values. A check
either returns the normalized value or raises; nothing is committed here.
"""

from enum import StrEnum
from typing import Any, TypeVar

from .types import (
    BYTE_ALIGNED_TYPES,
    FLOAT_BIT_SIZES,
    SIZED_TYPES,
    DataType,
    Endianness,
    Overflow,
    type_names,
)


class ValidationError(ValueError):
    """Raised when a structure item attribute violates a layout rule."""


class ItemTypeError(ValidationError, TypeError):
    """Raised when a structure item attribute has the wrong Python type."""


TEnum = TypeVar("TEnum", bound=StrEnum)


def _is_int(value: Any) -> bool:
    # bool is an int subclass but never a valid offset or size
    return isinstance(value, int) and not isinstance(value, bool)


def _one_of(names: list[str]) -> str:
    if len(names) == 2:
        return f"{names[0]} or {names[1]}"
    return ", ".join(names[:-1]) + f", or {names[-1]}"


def _coerce(enum_type: type[TEnum], value: Any, name: str, label: str) -> TEnum:
    try:
        return enum_type(value)
    except (ValueError, TypeError):
        raise ValidationError(
            f"{name}: unknown {label}: {value} - Must be {_one_of(type_names(enum_type))}"
        ) from None


def check_name(name: Any) -> str:
    if not isinstance(name, str):
        raise ItemTypeError(f"name must be a str but is a {type(name).__name__}")
    if not name:
        raise ValidationError("name must contain at least one character")
    return name


def check_endianness(name: str, endianness: Any) -> Endianness:
    return _coerce(Endianness, endianness, name, "endianness")


def check_data_type(name: str, data_type: Any) -> DataType:
    return _coerce(DataType, data_type, name, "data_type")


def check_overflow(name: str, overflow: Any) -> Overflow:
    return _coerce(Overflow, overflow, name, "overflow type")


def check_bit_offset(name: str, bit_offset: Any, data_type: DataType) -> int:
    if not _is_int(bit_offset):
        raise ItemTypeError(
            f"{name}: bit_offset must be an int but is a {type(bit_offset).__name__}"
        )
    if data_type in BYTE_ALIGNED_TYPES and bit_offset % 8 != 0:
        raise ValidationError(
            f"{name}: bit_offset for FLOAT, STRING, and BLOCK items must be byte aligned"
        )
    if data_type == DataType.DERIVED and bit_offset != 0:
        raise ValidationError(f"{name}: DERIVED items must have bit_offset of zero")
    return bit_offset


def check_bit_size(name: str, bit_size: Any, data_type: DataType) -> int:
    if not _is_int(bit_size):
        raise ItemTypeError(f"{name}: bit_size must be an int but is a {type(bit_size).__name__}")
    if data_type in SIZED_TYPES and bit_size <= 0:
        raise ValidationError(
            f"{name}: bit_size cannot be negative or zero for INT, UINT, and FLOAT items: "
            f"{bit_size}"
        )
    if data_type == DataType.FLOAT and bit_size not in FLOAT_BIT_SIZES:
        raise ValidationError(
            f"{name}: bit_size for FLOAT items must be 32 or 64. Given: {bit_size}"
        )
    if data_type == DataType.DERIVED and bit_size != 0:
        raise ValidationError(f"{name}: DERIVED items must have bit_size of zero")
    return bit_size


def check_array_size(name: str, array_size: Any, bit_size: int) -> int | None:
    if array_size is None:
        return None
    if not _is_int(array_size):
        raise ItemTypeError(
            f"{name}: array_size must be an int but is a {type(array_size).__name__}"
        )
    # Negative sizes take the remaining bits and are resolved by the packet
    if array_size > 0 and (bit_size == 0 or array_size % bit_size != 0):
        raise ValidationError(f"{name}: array_size must be a multiple of bit_size")
    return array_size


def validate(
    name: Any,
    bit_offset: Any,
    bit_size: Any,
    data_type: Any,
    endianness: Any,
    array_size: Any,
    overflow: Any = Overflow.ERROR,
) -> dict[str, Any]:
    """Check a complete candidate state and return it normalized.

    Raises:
        ItemTypeError: An attribute has the wrong Python type.
        ValidationError: An attribute is outside its legal set or
            inconsistent with another attribute.
    """
    name = check_name(name)
    endianness = check_endianness(name, endianness)
    data_type = check_data_type(name, data_type)
    bit_offset = check_bit_offset(name, bit_offset, data_type)
    bit_size = check_bit_size(name, bit_size, data_type)
    array_size = check_array_size(name, array_size, bit_size)
    overflow = check_overflow(name, overflow)

    return {
        "name": name,
        "bit_offset": bit_offset,
        "bit_size": bit_size,
        "data_type": data_type,
        "endianness": endianness,
        "array_size": array_size,
        "overflow": overflow,
    }
