"""
PrettyVal Shape Classifier

Maps arbitrary runtime values to the structural category that drives rendering
dispatch, and provides the introspection helpers the renderer relies on:
boxed reference unwrapping, byte views of raw byte sequences and record field
discovery.
"""

# Standard library -----------------------------------------------------------------------------------------------------
import array
import collections.abc as abc
import ctypes
import dataclasses
import datetime as dt
import types
import weakref

from enum import Enum, unique
from typing import Any, Generic, TypeVar


# Classes --------------------------------------------------------------------------------------------------------------

@unique
class Shape(str, Enum):
    """
    Structural categories of runtime values.

    Members are str subclasses, so they compare equal to their plain string values.
    """
    ABSENT = "absent"
    SIGNED_INTEGER = "signed-integer"
    UNSIGNED_INTEGER = "unsigned-integer"
    RAW_BYTE = "raw-byte"
    FLOAT = "float"
    STRING = "string"
    BOOLEAN = "boolean"
    MAPPING = "mapping"
    SEQUENCE = "sequence"
    BOXED = "boxed"
    RECORD = "record"
    TIMESTAMP = "timestamp"
    STRINGABLE = "stringable"
    UNSUPPORTED = "unsupported"


T = TypeVar("T")


class Box(Generic[T]):
    """
    Nullable reference holding at most one value.

    An empty box (holding None) renders as the nil marker; a filled box renders
    exactly like the value it holds.

    Examples:
        >>> Box(5).value
        5
        >>> Box().is_empty
        True
    """
    __slots__ = ("value",)

    def __init__(self, value: T | None = None) -> None:
        self.value = value

    def __repr__(self) -> str:
        return f"Box({self.value!r})"

    @property
    def is_empty(self) -> bool:
        """True when the box holds nothing."""
        return self.value is None


PRIMITIVE_SHAPES = frozenset({
    Shape.SIGNED_INTEGER,
    Shape.UNSIGNED_INTEGER,
    Shape.RAW_BYTE,
    Shape.FLOAT,
    Shape.STRING,
    Shape.BOOLEAN,
})

CONTAINER_SHAPES = frozenset({Shape.MAPPING, Shape.SEQUENCE})

# ctypes aliases (c_int32, c_uint8, c_size_t, ...) resolve to the classes below
_CTYPES_SHAPES: dict[type, Shape] = {
    ctypes.c_bool: Shape.BOOLEAN,
    ctypes.c_ubyte: Shape.RAW_BYTE,
    ctypes.c_byte: Shape.SIGNED_INTEGER,
    ctypes.c_short: Shape.SIGNED_INTEGER,
    ctypes.c_int: Shape.SIGNED_INTEGER,
    ctypes.c_long: Shape.SIGNED_INTEGER,
    ctypes.c_longlong: Shape.SIGNED_INTEGER,
    ctypes.c_ushort: Shape.UNSIGNED_INTEGER,
    ctypes.c_uint: Shape.UNSIGNED_INTEGER,
    ctypes.c_ulong: Shape.UNSIGNED_INTEGER,
    ctypes.c_ulonglong: Shape.UNSIGNED_INTEGER,
    ctypes.c_float: Shape.FLOAT,
    ctypes.c_double: Shape.FLOAT,
    ctypes.c_longdouble: Shape.FLOAT,
}

_BYTE_FORMATS = ("B", "c")

_CTYPES_BYTE_TYPES = (ctypes.c_ubyte, ctypes.c_char)

_UNSUPPORTED_TYPES = (
    complex,
    type,
    types.ModuleType,
    type(Ellipsis),
    type(NotImplemented),
)


# Methods --------------------------------------------------------------------------------------------------------------


def classify(value: Any) -> Shape:
    """
    Determine the structural category of a value.

    Dispatch Logic:
        - None → ABSENT
        - Box, weakref.ref → BOXED
        - bool, int, float, str and ctypes simple numbers → scalar shapes
        - ctypes arrays → SEQUENCE, ctypes structures and unions → RECORD
        - complex, classes, modules, Ellipsis → UNSUPPORTED
        - Mapping → MAPPING
        - named tuples → RECORD (before the generic sequence check)
        - Sequence, Set, array, memoryview, bytes → SEQUENCE
        - date, datetime → TIMESTAMP
        - callables and iterators → UNSUPPORTED
        - objects overriding __str__ → STRINGABLE
        - dataclasses and objects with __dict__ or __slots__ → RECORD
        - anything else → UNSUPPORTED

    Examples:
        >>> classify(None)
        <Shape.ABSENT: 'absent'>
        >>> classify(True)
        <Shape.BOOLEAN: 'boolean'>
        >>> classify(b"abc")
        <Shape.SEQUENCE: 'sequence'>
        >>> classify(ctypes.c_uint8(7))
        <Shape.RAW_BYTE: 'raw-byte'>
    """
    if value is None:
        return Shape.ABSENT

    if isinstance(value, (Box, weakref.ref)):
        return Shape.BOXED

    # bool comes before int (is subclass of int)
    if isinstance(value, bool):
        return Shape.BOOLEAN
    if isinstance(value, int):
        return Shape.SIGNED_INTEGER
    if isinstance(value, float):
        return Shape.FLOAT
    if isinstance(value, str):
        return Shape.STRING

    if isinstance(value, ctypes._SimpleCData):
        for base in type(value).__mro__:
            if base in _CTYPES_SHAPES:
                return _CTYPES_SHAPES[base]
        return Shape.UNSUPPORTED
    if isinstance(value, ctypes.Array):
        return Shape.SEQUENCE
    if isinstance(value, (ctypes.Structure, ctypes.Union)):
        return Shape.RECORD

    if isinstance(value, _UNSUPPORTED_TYPES):
        return Shape.UNSUPPORTED

    if isinstance(value, abc.Mapping):
        return Shape.MAPPING

    if _is_namedtuple(value):
        return Shape.RECORD

    if isinstance(value, memoryview):
        return Shape.SEQUENCE if value.ndim >= 1 else Shape.UNSUPPORTED
    if isinstance(value, (abc.Sequence, abc.Set, array.array)):
        return Shape.SEQUENCE

    if isinstance(value, dt.date):
        return Shape.TIMESTAMP

    if callable(value) or isinstance(value, (abc.Iterator, types.CoroutineType)):
        return Shape.UNSUPPORTED

    if type(value).__str__ is not object.__str__:
        return Shape.STRINGABLE

    if _has_fields_storage(value):
        return Shape.RECORD

    return Shape.UNSUPPORTED


def is_primitive(value: Any) -> bool:
    """
    Check if a value renders as a single scalar token.

    True for booleans, integers, raw bytes, floats and strings, and for boxed
    references to any of those. An empty box is not primitive.
    """
    shape = classify(value)
    if shape is Shape.BOXED:
        return is_primitive(unbox(value))
    return shape in PRIMITIVE_SHAPES


def is_empty(value: Any) -> bool:
    """
    Check if a value is a zero-length mapping or sequence, looking through boxed references.

    Records are never empty in this sense, even without fields.
    """
    shape = classify(value)
    if shape is Shape.BOXED:
        return is_empty(unbox(value))
    if shape in CONTAINER_SHAPES:
        return len(value) == 0
    return False


def unbox(value: Any) -> Any:
    """
    Return the value held by a boxed reference.

    Empty boxes and dead weak references yield None. Non-boxed values are
    returned unchanged.
    """
    if isinstance(value, Box):
        return value.value
    if isinstance(value, weakref.ref):
        return value()
    return value


def resolve(value: Any) -> Any:
    """Unwrap nested boxed references until a non-boxed value (or None) is reached."""
    while classify(value) is Shape.BOXED:
        value = unbox(value)
    return value


def scalar_value(value: Any) -> Any:
    """Return the Python value of a ctypes simple number, or the value itself."""
    if isinstance(value, ctypes._SimpleCData):
        return value.value
    return value


def byte_view(value: Any) -> bytes | None:
    """
    Return the raw bytes of a byte sequence, or None for any other value.

    Byte sequences are bytes, bytearray, memoryview with a byte format,
    array('B'), ctypes arrays of c_ubyte or c_char, and non-empty sequences
    whose elements are all raw bytes.

    Examples:
        >>> byte_view(bytearray(b"ab"))
        b'ab'
        >>> byte_view(array.array("B", [1, 2]))
        b'\\x01\\x02'
        >>> byte_view([ctypes.c_uint8(1), ctypes.c_uint8(2)])
        b'\\x01\\x02'
        >>> byte_view([1, 2]) is None
        True
    """
    if isinstance(value, (bytes, bytearray)):
        return bytes(value)
    if isinstance(value, memoryview) and value.format in _BYTE_FORMATS:
        return value.tobytes()
    if isinstance(value, array.array) and value.typecode == "B":
        return value.tobytes()
    if isinstance(value, ctypes.Array) and value._type_ in _CTYPES_BYTE_TYPES:
        return bytes(value)
    if isinstance(value, abc.Sequence) and not isinstance(value, str) and len(value) > 0:
        if all(classify(item) is Shape.RAW_BYTE for item in value):
            return bytes(scalar_value(item) for item in value)
    return None


def sequence_items(value: Any) -> list[Any]:
    """
    List the elements of a sequence-shaped value in iteration order.

    Byte sequences yield their byte values as ints.
    """
    data = byte_view(value)
    if data is not None:
        return list(data)
    if isinstance(value, memoryview):
        return value.tolist()
    return list(value)


def record_fields(value: Any) -> list[tuple[str, Any]]:
    """
    List the (name, value) pairs of a record in declaration order.

    Dataclasses report their fields, named tuples their `_fields`, ctypes
    structures and unions their `_fields_`; other objects report their
    populated `__slots__` followed by their instance `__dict__`.

    Examples:
        >>> from collections import namedtuple
        >>> Point = namedtuple("Point", "x y")
        >>> record_fields(Point(1, 2))
        [('x', 1), ('y', 2)]
    """
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return [(f.name, getattr(value, f.name)) for f in dataclasses.fields(value)]

    if _is_namedtuple(value):
        return list(zip(type(value)._fields, value))

    if isinstance(value, (ctypes.Structure, ctypes.Union)):
        return [(name, getattr(value, name)) for name in _ctypes_field_names(type(value))]

    fields = []
    for name in _slot_names(type(value)):
        # Unassigned slots raise AttributeError
        if hasattr(value, name):
            fields.append((name, getattr(value, name)))

    instance_dict = getattr(value, "__dict__", None)
    if isinstance(instance_dict, dict):
        fields.extend(instance_dict.items())
    return fields


def public_only(record: Any, name: str) -> bool:
    """
    Field filter accepting only names without a leading underscore.

    Pass as `PrettyOptions.field_filter` to render records exposing private
    fields as `protected`.
    """
    return not name.startswith("_")


# Private Methods ------------------------------------------------------------------------------------------------------


def _has_fields_storage(value: Any) -> bool:
    if dataclasses.is_dataclass(value) or type(value) is object:
        return True
    if isinstance(getattr(value, "__dict__", None), dict):
        return True
    return any("__slots__" in vars(klass) for klass in type(value).__mro__[:-1])


def _ctypes_field_names(cls: type) -> list[str]:
    """Collect `_fields_` names of a ctypes structure, base structures first."""
    names: list[str] = []
    for klass in reversed(cls.__mro__):
        for spec in vars(klass).get("_fields_", ()):
            names.append(spec[0])
    return names


def _is_namedtuple(value: Any) -> bool:
    return isinstance(value, tuple) and isinstance(getattr(type(value), "_fields", None), tuple)


def _slot_names(cls: type) -> list[str]:
    """Collect slot attribute names along the MRO, base classes first, with private names mangled."""
    names: list[str] = []
    for klass in reversed(cls.__mro__):
        slots = vars(klass).get("__slots__", ())
        if isinstance(slots, str):
            slots = (slots,)
        for name in slots:
            if name in ("__dict__", "__weakref__"):
                continue
            if name.startswith("__") and not name.endswith("__"):
                name = f"_{klass.__name__.lstrip('_')}{name}"
            if name not in names:
                names.append(name)
    return names
