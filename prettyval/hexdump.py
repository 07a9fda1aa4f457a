"""
Hex dump rendering of raw byte sequences.

Each row shows the decimal offset of its first byte, the bytes as two-digit
lowercase hex groups and a printable-ASCII preview of the same bytes:

    0000 01  02  03  41    '...A'
"""

# Standard library -----------------------------------------------------------------------------------------------------
import math
from typing import Iterator, Protocol

# Local ----------------------------------------------------------------------------------------------------------------
from .tools import printable_ascii
from .utils import fmt_type

# Constants ------------------------------------------------------------------------------------------------------------

ROW_BYTES = 16
BLANK_GROUP = "    "


# Classes --------------------------------------------------------------------------------------------------------------

class TextSink(Protocol):
    """Anything that accepts text, written in order."""

    def write(self, s: str, /) -> object: ...


# Methods --------------------------------------------------------------------------------------------------------------


def hex_dump(out: TextSink, data: bytes | bytearray, group_size: int = ROW_BYTES, indent: str = "") -> None:
    """
    Write `data` to `out` as hex dump rows of `group_size` bytes.

    Args:
        out: Text sink receiving the rows; every row ends with a newline.
        data: Raw bytes to dump.
        group_size: Number of bytes per row.
        indent: Prefix written at the start of every row.

    Raises:
        TypeError: If `group_size` is not an int.
        ValueError: If `group_size` is less than 1.

    Examples:
        >>> import io
        >>> buf = io.StringIO()
        >>> hex_dump(buf, b"Hi!", group_size=4)
        >>> buf.getvalue()
        "0000 48  69  21        'Hi!'\\n"
    """
    for row in hex_rows(data, group_size=group_size, indent=indent):
        out.write(row)


def hex_rows(data: bytes | bytearray, group_size: int = ROW_BYTES, indent: str = "") -> Iterator[str]:
    """Yield the hex dump rows of `data`, `ceil(len(data) / group_size)` of them, newline included."""
    if isinstance(group_size, bool) or not isinstance(group_size, int):
        raise TypeError(f"group_size must be an int, got {fmt_type(group_size)}")
    if group_size < 1:
        raise ValueError(f"group_size must be >= 1, but got {group_size}")

    data = bytes(data)
    for row in range(row_count(len(data), group_size)):
        offset = row * group_size
        chunk = data[offset : offset + group_size]
        groups = "".join(f"{b:02x}  " for b in chunk)
        padding = BLANK_GROUP * (group_size - len(chunk))
        yield f"{indent}{offset:04d} {groups}{padding}  '{printable_ascii(chunk)}'\n"


def row_count(length: int, group_size: int = ROW_BYTES) -> int:
    """Number of hex dump rows needed for `length` bytes."""
    return math.ceil(length / group_size)
