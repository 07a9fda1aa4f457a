#
# PrettyVal - Hex Dump Tests
#

# Standard library -----------------------------------------------------------------------------------------------------
import math

# Third-party ----------------------------------------------------------------------------------------------------------
import pytest

# Local ----------------------------------------------------------------------------------------------------------------
from prettyval.hexdump import ROW_BYTES, hex_dump, hex_rows, row_count


# Tests ----------------------------------------------------------------------------------------------------------------

ROW_0000 = "0000 01  02  03  04  05  06  07  08  09  0a  0b  0c  0d  0e  0f  10    '................'"
ROW_0016 = "0016 11" + " " * 64 + "'.'"


class TestHexDump:
    def test_seventeen_bytes(self, sink):
        """Full row followed by a padded single-byte row."""
        hex_dump(sink, bytes(range(1, 18)), 16, "")
        assert sink.getvalue() == ROW_0000 + "\n" + ROW_0016 + "\n"

    def test_indent_prefixes_every_row(self, sink):
        hex_dump(sink, bytes(range(1, 18)), 16, "    ")
        assert sink.getvalue() == "    " + ROW_0000 + "\n" + "    " + ROW_0016 + "\n"

    def test_exact_multiple_has_no_empty_row(self, sink):
        hex_dump(sink, b"A" * 16)
        assert sink.getvalue() == "0000 " + "41  " * 16 + "  '" + "A" * 16 + "'\n"

    def test_printable_preview(self, sink):
        hex_dump(sink, b"Hi!", group_size=4)
        assert sink.getvalue() == "0000 48  69  21        'Hi!'\n"

    def test_empty_writes_nothing(self, sink):
        hex_dump(sink, b"")
        assert sink.getvalue() == ""

    def test_bytearray(self, sink):
        hex_dump(sink, bytearray(b"\xff"))
        assert sink.getvalue() == "0000 ff" + " " * 64 + "'.'\n"

    @pytest.mark.parametrize(
        "group_size, exc",
        [
            pytest.param(0, ValueError, id="zero"),
            pytest.param(-4, ValueError, id="negative"),
            pytest.param(1.5, TypeError, id="float"),
            pytest.param(True, TypeError, id="bool"),
        ],
    )
    def test_invalid_group_size(self, sink, group_size, exc):
        with pytest.raises(exc):
            hex_dump(sink, b"abc", group_size=group_size)


class TestHexRows:
    @pytest.mark.parametrize("length", [1, 15, 16, 17, 31, 32, 33, 100, 256])
    def test_row_layout(self, length):
        """Row count, offsets, preview width and column alignment for any length."""
        data = bytes(i % 256 for i in range(length))
        rows = list(hex_rows(data))

        assert len(rows) == math.ceil(length / ROW_BYTES) == row_count(length)

        for i, row in enumerate(rows):
            assert row.endswith("'\n")
            assert row.startswith(f"{i * ROW_BYTES:04d} ")
            chunk = data[i * ROW_BYTES : (i + 1) * ROW_BYTES]
            preview = row[row.index("'") + 1 : -2]
            assert len(preview) == len(chunk)
            assert preview == "".join(chr(b) if 32 <= b <= 126 else "." for b in chunk)

        # Preview column starts at the same position on every row
        assert len({row.index("'") for row in rows}) == 1

    def test_last_row_width(self):
        rows = list(hex_rows(bytes(40)))
        assert rows[-1].count("00  ") == 40 % ROW_BYTES
