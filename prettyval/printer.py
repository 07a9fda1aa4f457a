"""
PrettyVal Printer: recursive, optionally colorized pretty printing of arbitrary values.

The Printer classifies a value by shape, writes scalars as single tokens and
renders mappings, sequences and records as indented blocks, descending one
nesting level per child. Raw byte sequences are shown as hex dumps.

Module level functions render with either explicit options or the process-wide
default options managed by configure() and get_options().

Examples:
    >>> print(render({"b": 2.5, "a": None}))
    {
      "a": nil,
      "b": 2.5
    }
    >>> render({"b": [1, 2], "a": None}, options=PrettyOptions.compact())
    '{"a": nil, "b": [1, 2]}'
"""

# Standard library -----------------------------------------------------------------------------------------------------
import io
import logging
import numbers
import sys

from dataclasses import dataclass, replace
from decimal import Decimal
from enum import Enum, unique
from typing import Any, Callable, Literal

# Local ----------------------------------------------------------------------------------------------------------------
from .hexdump import ROW_BYTES, TextSink, hex_dump
from .shapes import (
    PRIMITIVE_SHAPES,
    Shape,
    byte_view,
    classify,
    is_empty,
    is_primitive,
    record_fields,
    resolve,
    scalar_value,
    sequence_items,
    unbox,
)
from .theme import DEFAULT_THEME, DEFAULT_TIME_LAYOUT, Category, Theme
from .tools import format_byte, format_float, quote
from .utils import class_name, fmt_type

logger = logging.getLogger(__name__)
logger.addHandler(logging.NullHandler())

DEFAULT_INDENT = "  "
DEFAULT_NIL = "nil"
PROTECTED = "protected"
UNSUPPORTED_PREFIX = "unsupported:"

Fallback = Callable[[Any], str]
FieldFilter = Callable[[Any, str], bool]
Preset = Literal["default", "compact", "colored"]


# Classes --------------------------------------------------------------------------------------------------------------

@unique
class SortMode(str, Enum):
    """
    Mapping key order:
        - "none": native iteration order
        - "asc": natural order of the key types, ascending
        - "desc": exact reverse of "asc"
    """
    NONE = "none"
    ASC = "asc"
    DESC = "desc"


@dataclass(frozen=True)
class PrettyOptions:
    """
    Formatting options of a Printer.

    Instances are immutable and validated on construction; use merge() to derive
    modified copies. Safe to share between printers and threads.

    Attributes:
        indent: Indentation unit repeated once per nesting level.
        nil: Marker written for None and empty boxed references.
        compact_sequence: Write sequences on one line, elements separated by ", ".
            Byte sequences are then listed byte by byte instead of hex dumped.
        compact_mapping: Write mappings on one line, pairs separated by ", ".
        max_level: Nesting level at which non-scalar values are written as str(value)
            instead of being expanded. 0 means unlimited.
        sort_keys: Mapping key order, see SortMode.
        hexadecimal: Write raw bytes as 0x-prefixed hex instead of decimal.
        fallback: Called with values of unsupported shape; its result is written verbatim.
        field_filter: Called as field_filter(record, field_name); a record with any
            rejected field is written as "protected". None accepts every field.
        theme: Colors of scalar output and the timestamp layout. None writes plain text.

    Examples:
        >>> PrettyOptions(sort_keys="desc").sort_keys
        <SortMode.DESC: 'desc'>
        >>> PrettyOptions().merge(indent="    ").indent
        '    '
    """
    indent: str = DEFAULT_INDENT
    nil: str = DEFAULT_NIL
    compact_sequence: bool = False
    compact_mapping: bool = False
    max_level: int = 0
    sort_keys: SortMode = SortMode.ASC
    hexadecimal: bool = True
    fallback: Fallback | None = None
    field_filter: FieldFilter | None = None
    theme: Theme | None = None

    def __post_init__(self) -> None:
        """Validate field types and ranges, coerce sort_keys strings to SortMode."""
        for name in ("indent", "nil"):
            val = getattr(self, name)
            if not isinstance(val, str):
                raise TypeError(f"PrettyOptions.{name} must be a str, got {fmt_type(val)}")

        for name in ("compact_sequence", "compact_mapping", "hexadecimal"):
            val = getattr(self, name)
            if not isinstance(val, bool):
                raise TypeError(f"PrettyOptions.{name} must be a bool, got {fmt_type(val)}")

        if isinstance(self.max_level, bool) or not isinstance(self.max_level, int):
            raise TypeError(f"PrettyOptions.max_level must be an int, got {fmt_type(self.max_level)}")
        if self.max_level < 0:
            raise ValueError(f"PrettyOptions.max_level must be >= 0, but got {self.max_level}")

        if not isinstance(self.sort_keys, (SortMode, str)):
            raise TypeError(f"PrettyOptions.sort_keys must be a SortMode or str, got {fmt_type(self.sort_keys)}")
        try:
            object.__setattr__(self, "sort_keys", SortMode(self.sort_keys))
        except ValueError:
            raise ValueError(
                f"PrettyOptions.sort_keys must be one of {[m.value for m in SortMode]}, "
                f"but got {self.sort_keys!r}"
            ) from None

        for name in ("fallback", "field_filter"):
            val = getattr(self, name)
            if val is not None and not callable(val):
                raise TypeError(f"PrettyOptions.{name} must be callable or None, got {fmt_type(val)}")

        if self.theme is not None and not isinstance(self.theme, Theme):
            raise TypeError(f"PrettyOptions.theme must be a Theme or None, got {fmt_type(self.theme)}")

    # Class Methods ------------------------------------

    @classmethod
    def compact(cls) -> "PrettyOptions":
        """Create options writing mappings and sequences on a single line."""
        return cls(compact_sequence=True, compact_mapping=True)

    @classmethod
    def colored(cls, theme: Theme | None = None) -> "PrettyOptions":
        """Create options painting scalars with `theme`, the default color theme if not given."""
        return cls(theme=DEFAULT_THEME if theme is None else theme)

    # Methods and Properties ---------------------

    def merge(self, **kwargs: Any) -> "PrettyOptions":
        """
        Return a validated copy with the given fields replaced.

        Raises:
            TypeError: On unknown field names or invalid field types.
            ValueError: On out of range field values.
        """
        return replace(self, **kwargs)

    @property
    def time_layout(self) -> str:
        """strftime layout of timestamps, taken from the theme when one is set."""
        if self.theme is None:
            return DEFAULT_TIME_LAYOUT
        return self.theme.time_layout


class Printer:
    """
    Recursive pretty printer writing to text sinks.

    A Printer holds only its immutable options, so one instance may serve any
    number of calls. Input values are read, never modified.

    Cyclic structures are not detected: without max_level they recurse until
    Python raises RecursionError.

    Examples:
        >>> Printer(PrettyOptions.compact()).format([1, "a", None])
        '[1, "a", nil]'
        >>> Printer(PrettyOptions.compact()).format(b"\\x00AB")
        '[0x0, 0x41, 0x42]'
    """

    def __init__(self, options: PrettyOptions | None = None) -> None:
        if options is None:
            options = PrettyOptions()
        if not isinstance(options, PrettyOptions):
            raise TypeError(f"options must be a PrettyOptions or None, got {fmt_type(options)}")
        self.options = options

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.options!r})"

    # Entry points -------------------------------------

    def print(self, out: TextSink, value: Any) -> None:
        """Write the rendering of `value` to `out`, without trailing newline."""
        self.write_value(out, value, 0)

    def println(self, out: TextSink, value: Any) -> None:
        """Write the rendering of `value` to `out`, followed by a newline."""
        self.write_value(out, value, 0)
        out.write("\n")

    def format(self, value: Any) -> str:
        """Return the rendering of `value`, without trailing newline."""
        buf = io.StringIO()
        self.print(buf, value)
        return buf.getvalue()

    def format_line(self, value: Any) -> str:
        """Return the rendering of `value` followed by a newline."""
        buf = io.StringIO()
        self.println(buf, value)
        return buf.getvalue()

    # Rendering ----------------------------------------

    def write_value(self, out: TextSink, value: Any, level: int = 0) -> None:
        """
        Write `value` to `out` as rendered at nesting `level`.

        The level sets the indentation of multi-line blocks and is checked
        against max_level before expanding mappings, sequences and records.
        Empty containers and records without fields stay `[]` or `{}` at any level.
        """
        opt = self.options
        shape = classify(value)

        if shape is Shape.ABSENT:
            self._write_styled(out, Category.NIL, opt.nil)
            return

        # Unwrapping does not count as a nesting level
        if shape is Shape.BOXED:
            self.write_value(out, unbox(value), level)
            return

        if shape in PRIMITIVE_SHAPES:
            self._write_scalar(out, shape, scalar_value(value))
            return

        if 0 < opt.max_level <= level and not _is_blank(value, shape):
            logger.debug("Nesting level %d reached, writing %s as text", level, class_name(value))
            out.write(str(value))
            return

        if shape is Shape.MAPPING:
            self._write_mapping(out, value, level)
        elif shape is Shape.SEQUENCE:
            self._write_sequence(out, value, level)
        elif shape is Shape.RECORD:
            self._write_record(out, value, level)
        elif shape is Shape.TIMESTAMP:
            self._write_styled(out, Category.TIMESTAMP, value.strftime(opt.time_layout))
        elif shape is Shape.STRINGABLE:
            out.write(str(value))
        else:
            self._write_unsupported(out, value)

    def _write_scalar(self, out: TextSink, shape: Shape, value: Any) -> None:
        if shape is Shape.BOOLEAN:
            self._write_styled(out, Category.BOOLEAN, "true" if value else "false")
        elif shape is Shape.RAW_BYTE:
            self._write_styled(out, Category.INTEGER, format_byte(value, self.options.hexadecimal))
        elif shape is Shape.FLOAT:
            self._write_styled(out, Category.FLOAT, format_float(value))
        elif shape is Shape.STRING:
            self._write_styled(out, Category.STRING, quote(value))
        else:
            # int() drops IntEnum names and bool-like subclasses
            self._write_styled(out, Category.INTEGER, str(int(value)))

    def _write_mapping(self, out: TextSink, mapping: Any, level: int) -> None:
        if len(mapping) == 0:
            out.write("{}")
            return

        opt = self.options
        compact = opt.compact_mapping
        cur = opt.indent * level
        nxt = opt.indent * (level + 1)

        items = ordered_items(mapping, opt.sort_keys)
        last = len(items) - 1

        out.write("{" if compact else "{\n")
        for i, (key, item) in enumerate(items):
            if not compact:
                out.write(nxt)
            self.write_value(out, key, level)
            out.write(": ")
            if not compact and _breaks_line(item):
                # Nested structure starts on its own line, one unit deeper than the key
                out.write("\n" + nxt + opt.indent)
                self.write_value(out, item, level + 2)
            else:
                self.write_value(out, item, level + 1)
            if i < last:
                out.write(", " if compact else ",\n")
            elif not compact:
                out.write("\n")
        if not compact:
            out.write(cur)
        out.write("}")

    def _write_sequence(self, out: TextSink, seq: Any, level: int) -> None:
        data = byte_view(seq)
        items = list(data) if data is not None else sequence_items(seq)
        if not items:
            out.write("[]")
            return

        opt = self.options
        compact = opt.compact_sequence
        cur = opt.indent * level
        nxt = opt.indent * (level + 1)

        out.write("[" if compact else "[\n")
        if data is not None and not compact:
            hex_dump(out, data, ROW_BYTES, nxt)
        else:
            last = len(items) - 1
            for i, item in enumerate(items):
                if not compact:
                    out.write(nxt)
                if data is not None:
                    self._write_scalar(out, Shape.RAW_BYTE, item)
                else:
                    self.write_value(out, item, level + 1)
                if i < last:
                    out.write(", " if compact else ",\n")
                elif not compact:
                    out.write("\n")
        if not compact:
            out.write(cur)
        out.write("]")

    def _write_record(self, out: TextSink, record: Any, level: int) -> None:
        opt = self.options
        fields = record_fields(record)

        if opt.field_filter is not None and not all(opt.field_filter(record, name) for name, _ in fields):
            logger.debug("Record %s has inaccessible fields, writing %r", class_name(record), PROTECTED)
            out.write(PROTECTED)
            return

        if not fields:
            out.write("{}")
            return

        cur = opt.indent * level
        nxt = opt.indent * (level + 1)
        last = len(fields) - 1

        out.write("{\n")
        for i, (name, item) in enumerate(fields):
            out.write(f"{nxt}{name}: ")
            self.write_value(out, item, level + 1)
            out.write(",\n" if i < last else "\n")
        out.write(cur + "}")

    def _write_unsupported(self, out: TextSink, value: Any) -> None:
        if self.options.fallback is not None:
            out.write(self.options.fallback(value))
            return
        logger.debug("No renderer for %s, writing %r marker", class_name(value), UNSUPPORTED_PREFIX)
        out.write(UNSUPPORTED_PREFIX + str(value))

    def _write_styled(self, out: TextSink, category: Category, text: str) -> None:
        theme = self.options.theme
        out.write(text if theme is None or theme.is_plain else theme.paint(category, text))


# Methods --------------------------------------------------------------------------------------------------------------


def ordered_items(mapping: Any, mode: SortMode | str = SortMode.ASC) -> list[tuple[Any, Any]]:
    """
    List the (key, value) pairs of a mapping in the order given by `mode`.

    Ascending order compares keys by type group first: booleans, numbers
    (NaN first), strings, bytes, tuples (element-wise), then any other key
    by class name and str(). Descending order is the exact reverse.

    Examples:
        >>> ordered_items({"b": 1, 2: 2, "a": 3})
        [(2, 2), ('a', 3), ('b', 1)]
        >>> ordered_items({"b": 1, "a": 3}, mode="desc")
        [('b', 1), ('a', 3)]
        >>> ordered_items({"b": 1, "a": 3}, mode="none")
        [('b', 1), ('a', 3)]
    """
    mode = SortMode(mode)
    items = list(mapping.items())
    if mode is SortMode.NONE:
        return items

    items.sort(key=lambda kv: key_order(kv[0]))
    if mode is SortMode.DESC:
        items.reverse()
    return items


def key_order(key: Any) -> tuple:
    """Sort key giving mapping keys of mixed types a total, natural order."""
    if key is None:
        return (0,)
    if isinstance(key, bool):
        return (1, int(key))
    if isinstance(key, (numbers.Real, Decimal)):
        if key != key:  # NaN
            return (2, 0, 0)
        return (2, 1, key)
    if isinstance(key, str):
        return (3, key)
    if isinstance(key, (bytes, bytearray)):
        return (4, bytes(key))
    if isinstance(key, tuple):
        return (5, tuple(key_order(k) for k in key))
    return (6, class_name(key, fully_qualified=True), str(key))


def get_options() -> PrettyOptions:
    """Return the process-wide default options."""
    return _options


def configure(preset: Preset | None = None, **kwargs: Any) -> PrettyOptions:
    """
    Replace the process-wide default options.

    Args:
        preset: Base options to start from: "default", "compact" or "colored".
            None keeps the current default options as base.
        **kwargs: PrettyOptions fields merged into the base.

    Returns:
        The new default options.

    Raises:
        ValueError: If preset is unknown.

    Examples:
        >>> configure(preset="compact", sort_keys="desc").sort_keys
        <SortMode.DESC: 'desc'>
    """
    global _options

    if preset is None:
        base = _options
    elif preset == "default":
        base = PrettyOptions()
    elif preset == "compact":
        base = PrettyOptions.compact()
    elif preset == "colored":
        base = PrettyOptions.colored()
    else:
        raise ValueError(f"preset must be one of 'default', 'compact', 'colored' or None, but got {preset!r}")

    _options = base.merge(**kwargs) if kwargs else base
    return _options


def no_color() -> PrettyOptions:
    """Remove the theme from the process-wide default options."""
    return configure(theme=None)


def render(value: Any, options: PrettyOptions | None = None) -> str:
    """Render `value` as text without trailing newline, using `options` or the default options."""
    return Printer(_resolve_options(options)).format(value)


def render_line(value: Any, options: PrettyOptions | None = None) -> str:
    """Render `value` as text followed by a newline, using `options` or the default options."""
    return Printer(_resolve_options(options)).format_line(value)


def pprint(value: Any, *, file: TextSink | None = None, options: PrettyOptions | None = None) -> None:
    """Write the rendering of `value` to `file` (stdout by default), without trailing newline."""
    out = sys.stdout if file is None else file
    Printer(_resolve_options(options)).print(out, value)


def pprint_line(value: Any, *, file: TextSink | None = None, options: PrettyOptions | None = None) -> None:
    """Write the rendering of `value` to `file` (stdout by default), followed by a newline."""
    out = sys.stdout if file is None else file
    Printer(_resolve_options(options)).println(out, value)


# Private Methods ------------------------------------------------------------------------------------------------------


def _breaks_line(value: Any) -> bool:
    """Check if a mapping value is a non-empty structure written on the line after its key."""
    if is_primitive(value) or is_empty(value):
        return False
    value = resolve(value)
    shape = classify(value)
    if shape is Shape.RECORD:
        return bool(record_fields(value))
    return shape in (Shape.MAPPING, Shape.SEQUENCE)


def _is_blank(value: Any, shape: Shape) -> bool:
    """Check if a value renders as [] or {} at any level: an empty container or a record without fields."""
    if shape is Shape.RECORD:
        return not record_fields(value)
    return is_empty(value)


def _resolve_options(options: PrettyOptions | None) -> PrettyOptions:
    return _options if options is None else options


_options = PrettyOptions()
