"""Structure item: the layout of one field inside a packed binary packet."""

import logging
from collections.abc import Mapping
from copy import copy
from dataclasses import dataclass
from typing import Any, ClassVar, Self

from dataclasses_json import DataClassJsonMixin

from .types import BitOffset, DataType, Endianness, Overflow, offset_from_bits
from .validation import ValidationError, validate

logger = logging.getLogger(__name__)

FIELD_NAMES = (
    "name",
    "bit_offset",
    "bit_size",
    "data_type",
    "endianness",
    "array_size",
    "overflow",
)

_REQUIRED_KEYS = frozenset(FIELD_NAMES[:5])


@dataclass(eq=False)
class StructureItem(DataClassJsonMixin):
    """Describes where a single item lives in a packed structure.

    A negative bit_offset is measured from the end of the structure. A
    negative array_size means the array takes the remaining bits, which
    the owning packet resolves.

    Every attribute assignment is revalidated against the complete item
    and either commits entirely or raises, leaving the item unchanged:

        item = StructureItem("temp", 0, 16, DataType.UINT, Endianness.BIG_ENDIAN, None)
        item.bit_size = 12       # ok
        item.bit_size = 0        # raises ValidationError, bit_size stays 12

    Note:
        Comparison is positional. Two items are equal when they share
        bit_offset and bit_size, whatever their name or type. Use
        to_hash() to compare full values.
    """

    name: str
    bit_offset: int
    bit_size: int
    data_type: DataType
    endianness: Endianness
    array_size: int | None
    overflow: Overflow = Overflow.ERROR

    _validated: ClassVar[bool] = False

    def __post_init__(self) -> None:
        state = validate(**self._state())
        self.__dict__.update(state)
        object.__setattr__(self, "_validated", True)

    def __setattr__(self, attr: str, value: Any) -> None:
        if self._validated and attr in FIELD_NAMES:
            self.update(**{attr: value})
        else:
            object.__setattr__(self, attr, value)

    def _state(self) -> dict[str, Any]:
        return {attr: getattr(self, attr) for attr in FIELD_NAMES}

    def update(self, **changes: Any) -> None:
        """Apply one or more attribute changes atomically.

        Needed when a change is only legal together with others, such as
        turning a packed item into a DERIVED one:

            item.update(data_type=DataType.DERIVED, bit_offset=0, bit_size=0)
        """
        unknown = sorted(set(changes) - set(FIELD_NAMES))
        if unknown:
            raise TypeError(f"{self.name}: unknown attributes: {', '.join(unknown)}")

        candidate = self._state()
        candidate.update(changes)
        try:
            state = validate(**candidate)
        except ValidationError as e:
            logger.debug("%s: rejected change %r: %s", self.name, changes, e)
            raise

        for attr in changes:
            if state[attr] != getattr(self, attr):
                logger.debug("%s: %s %r -> %r", self.name, attr, getattr(self, attr), state[attr])
        self.__dict__.update(state)

    @property
    def offset(self) -> BitOffset:
        """The bit offset tagged as Absolute or FromEnd."""
        return offset_from_bits(self.bit_offset)

    @property
    def is_array(self) -> bool:
        return self.array_size is not None

    @property
    def is_derived(self) -> bool:
        return self.data_type == DataType.DERIVED

    def _sort_key(self) -> tuple[int, int, int]:
        return (*self.offset.sort_key, self.bit_size)

    # Ordering: absolute offsets first, then from-end offsets, ties broken by
    # bit_size so a zero sized item sorts before a sized one at the same offset.

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, StructureItem):
            return NotImplemented
        return self.bit_offset == other.bit_offset and self.bit_size == other.bit_size

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, StructureItem):
            return NotImplemented
        return self._sort_key() < other._sort_key()

    def __le__(self, other: object) -> bool:
        if not isinstance(other, StructureItem):
            return NotImplemented
        return self._sort_key() <= other._sort_key()

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, StructureItem):
            return NotImplemented
        return self._sort_key() > other._sort_key()

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, StructureItem):
            return NotImplemented
        return self._sort_key() >= other._sort_key()

    # Mutable with positional equality
    __hash__ = None  # type: ignore[assignment]

    def clone(self) -> Self:
        """Return an independent copy of this item."""
        return copy(self)

    def to_hash(self) -> dict[str, Any]:
        """Snapshot the item as a plain mapping with enum names as strings."""
        return {
            "name": self.name,
            "bit_offset": self.bit_offset,
            "bit_size": self.bit_size,
            "data_type": self.data_type.name,
            "endianness": self.endianness.name,
            "array_size": self.array_size,
            "overflow": self.overflow.name,
        }

    @classmethod
    def from_hash(cls, data: Mapping[str, Any]) -> Self:
        """Build a validated item from a to_hash() style mapping."""
        unknown = sorted(set(data) - set(FIELD_NAMES))
        if unknown:
            raise ValidationError(f"unknown structure item keys: {', '.join(unknown)}")
        missing = sorted(_REQUIRED_KEYS - set(data))
        if missing:
            raise ValidationError(f"missing structure item keys: {', '.join(missing)}")

        return cls(
            data["name"],
            data["bit_offset"],
            data["bit_size"],
            data["data_type"],
            data["endianness"],
            data.get("array_size"),
            data.get("overflow", Overflow.ERROR),
        )
