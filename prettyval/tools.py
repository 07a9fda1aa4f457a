#
# PrettyVal Scalar Text Tools
#

# Standard library -----------------------------------------------------------------------------------------------------
import math
from decimal import Decimal

# Local ----------------------------------------------------------------------------------------------------------------
from .utils import fmt_type

# Constants ------------------------------------------------------------------------------------------------------------

PRINTABLE_MIN = 32
PRINTABLE_MAX = 126

_ESCAPES = {
    "\a": "\\a",
    "\b": "\\b",
    "\f": "\\f",
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
    "\v": "\\v",
    "\\": "\\\\",
    '"': '\\"',
}


# Methods --------------------------------------------------------------------------------------------------------------


def format_byte(value: int, hexadecimal: bool = False) -> str:
    """Format a single byte value as decimal digits or as `0x`-prefixed lowercase hex without padding.

    Examples:
        >>> format_byte(10)
        '10'
        >>> format_byte(10, hexadecimal=True)
        '0xa'
    """
    if hexadecimal:
        return f"0x{value:x}"
    return str(value)


def format_float(value: float) -> str:
    """Format a float as the shortest decimal text that reads back to the same value.

    Never uses exponent notation and never pads with trailing zeros, so integral
    floats lose their fractional part. Infinities and NaN are spelled `+Inf`,
    `-Inf` and `NaN`.

    Args:
        value: The float to format.

    Returns:
        Decimal text of the float.

    Examples:
        >>> format_float(1.2)
        '1.2'
        >>> format_float(3.0)
        '3'
        >>> format_float(1e21)
        '1000000000000000000000'
        >>> format_float(1e-7)
        '0.0000001'
        >>> format_float(float("-inf"))
        '-Inf'
    """
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "+Inf" if value > 0 else "-Inf"

    # repr() gives the shortest round-trip digits, Decimal expands the exponent
    text = format(Decimal(repr(float(value))), "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def printable_ascii(data: bytes | bytearray, replacement: str = ".") -> str:
    """Render each byte as one character, replacing bytes outside printable ASCII.

    Bytes in the inclusive range 32..126 are kept as their ASCII character,
    every other byte becomes `replacement`.

    Args:
        data: The bytes to preview.
        replacement: A single character used for non-printable bytes.

    Returns:
        A str with exactly one character per input byte.

    Raises:
        TypeError: If `data` is not bytes-like or `replacement` is not a str.
        ValueError: If `replacement` is not a single character.

    Examples:
        >>> printable_ascii(b"Hi\\x00\\xff!")
        'Hi..!'
    """
    if not isinstance(data, (bytes, bytearray)):
        raise TypeError(f"data must be bytes or bytearray, not {fmt_type(data)}")
    if not isinstance(replacement, str):
        raise TypeError(f"replacement must be str, not {fmt_type(replacement)}")
    if len(replacement) != 1:
        raise ValueError("replacement must be a single character")

    return "".join(chr(b) if PRINTABLE_MIN <= b <= PRINTABLE_MAX else replacement for b in data)


def quote(text: str) -> str:
    """Return a double-quoted, escaped literal for `text`.

    Quote and backslash characters and the common control characters get their
    short escapes; any other non-printable character is written as `\\xNN`,
    `\\uNNNN` or `\\UNNNNNNNN` with lowercase hex digits. Printable non-ASCII
    characters are kept as is.

    Examples:
        >>> quote('say "hi"')
        '"say \\\\"hi\\\\""'
        >>> quote("tab\\there")
        '"tab\\\\there"'
        >>> quote("\\x00")
        '"\\\\x00"'
        >>> quote("Grüße")
        '"Grüße"'
    """
    parts = ['"']
    for ch in text:
        escaped = _ESCAPES.get(ch)
        if escaped is not None:
            parts.append(escaped)
        elif ch.isprintable():
            parts.append(ch)
        else:
            code = ord(ch)
            if code < 0x80:
                parts.append(f"\\x{code:02x}")
            elif code <= 0xFFFF:
                parts.append(f"\\u{code:04x}")
            else:
                parts.append(f"\\U{code:08x}")
    parts.append('"')
    return "".join(parts)
