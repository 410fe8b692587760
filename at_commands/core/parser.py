"""Command parser: extracts typed values from a received AT frame.

The parser walks its input once, front to back. Each ``expect_*`` call
consumes the next piece of the frame and returns the parser, so expectations
can be chained. The first failure is recorded, every later call becomes a
no-op, and ``finish()`` raises the recorded error or returns the extracted
values as a tuple.

Example:
    >>> CommandParser.parse(b'+SYSGPIOREAD:654,"true",-65154\\r\\nOK\\r\\n') \\
    ...     .expect_identifier(b"+SYSGPIOREAD:") \\
    ...     .expect_int_parameter() \\
    ...     .expect_string_parameter() \\
    ...     .expect_int_parameter() \\
    ...     .expect_identifier(b"\\r\\nOK\\r\\n") \\
    ...     .finish()
    (654, 'true', -65154)
"""

import logging
from typing import Any, List, Optional, Tuple

from at_commands.core.codec import (
    BytesLike,
    QUOTE,
    SEPARATOR,
    SIGNS,
    SPACE,
    TextLike,
    as_bytes,
    decode_int,
    decode_text,
    is_control,
    is_digit,
)
from at_commands.core.exceptions import (
    ParseError,
    UnexpectedIdentifierError,
    UnexpectedDataError,
    IncorrectFormatError,
    NoMoreDataError,
)
from at_commands.core.state import ComponentState

logger = logging.getLogger(__name__)

_SPACE = ord(SPACE)
_COMMA = ord(SEPARATOR)
_QUOTE = ord(QUOTE)


class CommandParser:
    """Chainable parser over a received frame.

    Leading spaces are skipped before every expectation, and a single ``,``
    separator is consumed after every parameter.
    """

    def __init__(self, data: BytesLike):
        """Start parsing ``data``. Prefer ``CommandParser.parse()``."""
        self._data = bytes(data)
        self._index = 0
        self._values: List[Any] = []
        self._error: Optional[ParseError] = None

    @classmethod
    def parse(cls, data: BytesLike) -> 'CommandParser':
        """Start parsing a received frame."""
        return cls(data)

    @property
    def position(self) -> int:
        """Offset of the next unconsumed byte."""
        return self._index

    @property
    def remaining(self) -> bytes:
        return self._data[self._index:]

    @property
    def error(self) -> Optional[ParseError]:
        return self._error

    @property
    def state(self) -> ComponentState:
        return ComponentState.ERRORED if self._error is not None else ComponentState.ACTIVE

    def _fail(self, error: ParseError) -> 'CommandParser':
        self._error = error
        logger.debug("Parse failed: %s", error)
        return self

    def _peek(self) -> Optional[int]:
        if self._index < len(self._data):
            return self._data[self._index]
        return None

    def _skip_spaces(self) -> None:
        while self._peek() == _SPACE:
            self._index += 1

    def _at_field_boundary(self) -> bool:
        """True when the current field is empty."""
        byte = self._peek()
        return byte is None or byte == _COMMA or is_control(byte)

    def _accept(self, value: Any) -> 'CommandParser':
        self._values.append(value)
        self._skip_spaces()
        if self._peek() == _COMMA:
            self._index += 1
        return self

    def _accept_absent(self) -> 'CommandParser':
        return self._accept(None)

    def expect_identifier(self, identifier: TextLike) -> 'CommandParser':
        """Require the next bytes to equal ``identifier``.

        The identifier does not produce a value. On mismatch, or when fewer
        bytes remain than the identifier is long, UnexpectedIdentifierError is
        recorded and nothing is consumed.
        """
        if self._error is not None:
            return self

        self._skip_spaces()
        literal = as_bytes(identifier)
        if not self._data.startswith(literal, self._index):
            return self._fail(UnexpectedIdentifierError(literal, self._index))

        self._index += len(literal)
        return self

    def _read_int(self) -> 'CommandParser':
        start = self._index
        if self._peek() is None:
            return self._fail(NoMoreDataError(start))

        end = start
        if self._data[end] in SIGNS:
            end += 1
        while end < len(self._data) and is_digit(self._data[end]):
            end += 1

        value = decode_int(self._data[start:end])
        if value is None:
            return self._fail(IncorrectFormatError("Expected integer parameter", start))

        self._index = end
        return self._accept(value)

    def expect_int_parameter(self) -> 'CommandParser':
        """Read a signed decimal integer.

        A leading ``+`` is accepted and ignored. Records IncorrectFormatError
        when there are no digits or the value does not fit in 32 bits, and
        NoMoreDataError when the input is exhausted.
        """
        if self._error is not None:
            return self
        self._skip_spaces()
        return self._read_int()

    def expect_optional_int_parameter(self) -> 'CommandParser':
        """Read an integer, or None when the field is empty."""
        if self._error is not None:
            return self
        self._skip_spaces()
        if self._at_field_boundary():
            return self._accept_absent()
        return self._read_int()

    def _read_string(self) -> 'CommandParser':
        start = self._index
        byte = self._peek()
        if byte is None:
            return self._fail(NoMoreDataError(start))
        if byte != _QUOTE:
            if self._at_field_boundary():
                return self._fail(IncorrectFormatError("Empty string parameter", start))
            return self._fail(UnexpectedDataError("Expected opening quote", start))

        closing = self._data.find(QUOTE, start + 1)
        if closing < 0:
            return self._fail(IncorrectFormatError("Unterminated string parameter", start))

        text = decode_text(self._data[start + 1:closing])
        if text is None:
            return self._fail(UnexpectedDataError("String parameter is not valid UTF-8", start))

        self._index = closing + 1
        return self._accept(text)

    def expect_string_parameter(self) -> 'CommandParser':
        """Read a double-quoted string.

        The string ends at the next ``"``; there is no escape processing.
        """
        if self._error is not None:
            return self
        self._skip_spaces()
        return self._read_string()

    def expect_optional_string_parameter(self) -> 'CommandParser':
        """Read a double-quoted string, or None when the field is empty."""
        if self._error is not None:
            return self
        self._skip_spaces()
        if self._at_field_boundary():
            return self._accept_absent()
        return self._read_string()

    def expect_raw_string(self) -> 'CommandParser':
        """Read unquoted text up to the next ``,``, control character or end.

        Useful for responses like ``+STATUS: READY\\r\\n``.
        """
        if self._error is not None:
            return self
        self._skip_spaces()

        start = end = self._index
        while end < len(self._data) and self._data[end] != _COMMA and not is_control(self._data[end]):
            end += 1

        text = decode_text(self._data[start:end])
        if text is None:
            return self._fail(UnexpectedDataError("Raw string is not valid UTF-8", start))

        self._index = end
        return self._accept(text)

    def finish(self) -> Tuple[Any, ...]:
        """Finish parsing and get the results.

        Returns:
            Tuple of the extracted values in the order they were expected

        Raises:
            ParseError: The first error recorded by the chain
        """
        if self._error is not None:
            raise self._error
        return tuple(self._values)
