"""Unit tests for the bounded write cursor."""

import pytest

from at_commands.core.cursor import Cursor


class TestCursor:
    """Test Cursor writes and bounds."""

    def test_initial_state(self):
        cursor = Cursor(bytearray(8))

        assert cursor.capacity == 8
        assert cursor.position == 0
        assert cursor.remaining == 8
        assert bytes(cursor.written()) == b""

    def test_write_advances(self):
        cursor = Cursor(bytearray(8))

        assert cursor.try_write(b"AT")
        assert cursor.try_write(b"+X")

        assert cursor.position == 4
        assert cursor.remaining == 4
        assert bytes(cursor.written()) == b"AT+X"

    def test_exact_fit(self):
        cursor = Cursor(bytearray(4))

        assert cursor.try_write(b"ATZ!")
        assert cursor.remaining == 0
        assert cursor.try_write(b"")

    def test_write_is_all_or_nothing(self):
        """Test a write that does not fit leaves buffer and position alone."""
        buffer = bytearray(b"....")
        cursor = Cursor(buffer)
        cursor.try_write(b"AT")

        assert not cursor.try_write(b"+CGMI")

        assert cursor.position == 2
        assert buffer == bytearray(b"AT..")

    def test_fits(self):
        cursor = Cursor(bytearray(3))

        assert cursor.fits(3)
        assert not cursor.fits(4)

    def test_written_shares_memory(self):
        buffer = bytearray(4)
        cursor = Cursor(buffer)
        cursor.try_write(b"AT")

        view = cursor.written()
        buffer[0] = ord("a")

        assert bytes(view) == b"aT"

    def test_memoryview_slice(self):
        """Test a cursor over part of a larger buffer."""
        backing = bytearray(10)
        cursor = Cursor(memoryview(backing)[2:5])

        assert cursor.capacity == 3
        assert cursor.try_write(b"abc")
        assert backing == bytearray(b"\x00\x00abc\x00\x00\x00\x00\x00")

    def test_read_only_buffer(self):
        with pytest.raises(TypeError):
            Cursor(b"immutable")
