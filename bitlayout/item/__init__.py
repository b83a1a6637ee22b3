"""Field descriptors for packed binary structures."""

from .structure_item import FIELD_NAMES as FIELD_NAMES
from .structure_item import StructureItem as StructureItem
from .types import Absolute as Absolute
from .types import BitOffset as BitOffset
from .types import DataType as DataType
from .types import Endianness as Endianness
from .types import FromEnd as FromEnd
from .types import Overflow as Overflow
from .types import offset_from_bits as offset_from_bits
from .validation import ItemTypeError as ItemTypeError
from .validation import ValidationError as ValidationError
from .validation import validate as validate
