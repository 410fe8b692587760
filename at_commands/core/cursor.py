"""Bounded write cursor over a caller-owned buffer."""

from typing import Union

from at_commands.core.codec import BytesLike

WritableBuffer = Union[bytearray, memoryview]


class Cursor:
    """Tracks the write position within a fixed-capacity buffer.

    Writes are all-or-nothing: a write that would run past the end of the
    buffer leaves both the buffer and the position untouched.

    Example:
        >>> buffer = bytearray(4)
        >>> cursor = Cursor(buffer)
        >>> cursor.try_write(b"AT")
        True
        >>> cursor.try_write(b"+CGMI")
        False
        >>> bytes(cursor.written())
        b'AT'
    """

    def __init__(self, buffer: WritableBuffer):
        """Bind the cursor to a writable buffer.

        Args:
            buffer: bytearray or writable memoryview the frame is written to

        Raises:
            TypeError: If the buffer is read-only
        """
        view = memoryview(buffer)
        if view.readonly:
            raise TypeError("Cursor requires a writable buffer")
        self._view = view.cast('B') if view.format != 'B' or view.ndim != 1 else view
        self._position = 0

    @property
    def capacity(self) -> int:
        return self._view.nbytes

    @property
    def position(self) -> int:
        return self._position

    @property
    def remaining(self) -> int:
        return self.capacity - self._position

    def fits(self, length: int) -> bool:
        """Check whether ``length`` more bytes fit in the buffer."""
        return length <= self.remaining

    def try_write(self, data: BytesLike) -> bool:
        """Copy ``data`` at the current position and advance past it.

        Args:
            data: Bytes to append

        Returns:
            True if the data was written, False if it would not fit (nothing
            is written in that case)
        """
        length = len(data)
        if not self.fits(length):
            return False
        end = self._position + length
        self._view[self._position:end] = data
        self._position = end
        return True

    def written(self) -> memoryview:
        """View of the bytes written so far, backed by the caller's buffer."""
        return self._view[:self._position]
