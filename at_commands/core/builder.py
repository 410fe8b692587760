"""Command builder: serializes AT commands into a caller-supplied buffer.

The builder is a chainable state machine. Every method returns the builder so
calls can be chained; a write that does not fit in the buffer is recorded
instead of raised, all later writes become no-ops, and the error is raised by
``finish()``. Nothing is ever written past the end of the buffer.
"""

import logging
from enum import Enum
from typing import Optional

from at_commands.core.codec import (
    Parameter,
    TextLike,
    as_bytes,
    SEPARATOR,
)
from at_commands.core.cursor import Cursor, WritableBuffer
from at_commands.core.exceptions import BufferOverflowError, CommandStateError
from at_commands.core.state import ComponentState

logger = logging.getLogger(__name__)

AT_PREFIX = b"AT"
DEFAULT_TERMINATOR = b"\r\n"


class CommandMode(Enum):
    """AT command forms.

    - SET: ``AT+NAME=<p1>,<p2>``
    - QUERY: ``AT+NAME?``
    - EXECUTE: ``AT+NAME`` (parameters, if any, follow the name directly)
    - TEST: ``AT+NAME=?``
    """
    SET = "set"
    QUERY = "query"
    EXECUTE = "execute"
    TEST = "test"

    @property
    def accepts_parameters(self) -> bool:
        return self in (CommandMode.SET, CommandMode.EXECUTE)


# Written in front of the first parameter
_FIRST_SEPARATOR = {
    CommandMode.SET: b"=",
    CommandMode.EXECUTE: b"",
}

# Written at finish, before the terminator
_FINAL_MARKER = {
    CommandMode.QUERY: b"?",
    CommandMode.TEST: b"=?",
}


class CommandBuilder:
    """Builder for AT command frames.

    Can build:
    * a set command in the form ``AT{name}={param},{param}``
    * a query command in the form ``AT{name}?``
    * an execute command in the form ``AT{name}``
    * a test command in the form ``AT{name}=?``

    Example:
        >>> buffer = bytearray(128)
        >>> frame = CommandBuilder.create_query(buffer, True).named("+MYQUERY").finish()
        >>> bytes(frame)
        b'AT+MYQUERY?\\r\\n'
        >>> frame = (CommandBuilder.create_set(buffer, False)
        ...          .named("+MYSET")
        ...          .with_int_parameter(42)
        ...          .finish())
        >>> bytes(frame)
        b'+MYSET=42\\r\\n'

    The returned frame is a memoryview into ``buffer``; copy it with
    ``bytes()`` before reusing the buffer.
    """

    def __init__(self, buffer: WritableBuffer, mode: CommandMode, with_prefix: bool = True):
        """Bind a builder to a buffer.

        Prefer the ``create_*`` class methods.

        Args:
            buffer: Writable buffer the frame is built in; its length is the
                maximum frame size
            mode: Command form to build
            with_prefix: Write the ``AT`` prefix
        """
        self._cursor = Cursor(buffer)
        self._mode = mode
        self._required = 0
        self._error: Optional[BufferOverflowError] = None
        self._named = False
        self._finished = False
        self._parameter_count = 0

        if with_prefix:
            self._append(AT_PREFIX)

    @classmethod
    def create_set(cls, buffer: WritableBuffer, with_prefix: bool = True) -> 'CommandBuilder':
        """Create a builder for a set command (``AT+NAME=...``)."""
        return cls(buffer, CommandMode.SET, with_prefix)

    @classmethod
    def create_query(cls, buffer: WritableBuffer, with_prefix: bool = True) -> 'CommandBuilder':
        """Create a builder for a query command (``AT+NAME?``)."""
        return cls(buffer, CommandMode.QUERY, with_prefix)

    @classmethod
    def create_execute(cls, buffer: WritableBuffer, with_prefix: bool = True) -> 'CommandBuilder':
        """Create a builder for an execute command (``AT+NAME``)."""
        return cls(buffer, CommandMode.EXECUTE, with_prefix)

    @classmethod
    def create_test(cls, buffer: WritableBuffer, with_prefix: bool = True) -> 'CommandBuilder':
        """Create a builder for a test command (``AT+NAME=?``)."""
        return cls(buffer, CommandMode.TEST, with_prefix)

    @property
    def mode(self) -> CommandMode:
        return self._mode

    @property
    def capacity(self) -> int:
        return self._cursor.capacity

    @property
    def position(self) -> int:
        return self._cursor.position

    @property
    def state(self) -> ComponentState:
        return ComponentState.ERRORED if self._error is not None else ComponentState.ACTIVE

    @property
    def error(self) -> Optional[BufferOverflowError]:
        """The recorded error, or None.

        The same instance is returned on every access. Its ``required`` counts
        every byte requested so far, including those not written after the
        overflow.
        """
        return self._error

    def _append(self, data: bytes) -> None:
        self._required += len(data)
        if self._error is not None:
            self._error.required = self._required
            return
        if not self._cursor.try_write(data):
            self._error = BufferOverflowError(capacity=self._cursor.capacity, required=self._required)
            logger.debug(
                "Buffer overflow at position %d writing %d bytes (capacity %d)",
                self._cursor.position, len(data), self._cursor.capacity
            )

    def _check_open(self) -> None:
        if self._finished:
            raise CommandStateError("Builder has already been finished")

    def named(self, identifier: TextLike) -> 'CommandBuilder':
        """Set the name of the command, e.g. ``"+CGMI"``.

        Must be called exactly once, before any parameter.
        """
        self._check_open()
        if self._named:
            raise CommandStateError("Command has already been named")
        self._named = True
        self._append(as_bytes(identifier))
        return self

    def with_parameter(self, parameter: Parameter) -> 'CommandBuilder':
        """Add a parameter of any kind.

        An absent parameter writes only its separator, leaving an empty field.

        Raises:
            CommandStateError: Command not named yet, or its mode takes no
                parameters
        """
        self._check_open()
        if not self._named:
            raise CommandStateError("Parameters must follow named()")
        if not self._mode.accepts_parameters:
            raise CommandStateError(f"A {self._mode.value} command takes no parameters")

        if self._parameter_count == 0:
            self._append(_FIRST_SEPARATOR[self._mode])
        else:
            self._append(SEPARATOR)
        self._parameter_count += 1

        if not parameter.is_absent:
            self._append(parameter.encode())
        return self

    def with_int_parameter(self, value: int) -> 'CommandBuilder':
        """Add an integer parameter.

        Raises:
            ValueError: If the value is outside the signed 32-bit range
            TypeError: If the value is a bool or not an int
        """
        return self.with_parameter(Parameter.integer(value))

    def with_string_parameter(self, value: TextLike) -> 'CommandBuilder':
        """Add a quoted string parameter.

        Quotes and control characters inside ``value`` are written unescaped.
        """
        return self.with_parameter(Parameter.text(value))

    def with_raw_parameter(self, value: TextLike) -> 'CommandBuilder':
        """Add an unformatted parameter, written exactly as given."""
        return self.with_parameter(Parameter.raw(value))

    def with_optional_int_parameter(self, value: Optional[int]) -> 'CommandBuilder':
        """Add an integer parameter, or an empty field when ``value`` is None."""
        return self.with_parameter(Parameter.optional_integer(value))

    def with_optional_string_parameter(self, value: Optional[TextLike]) -> 'CommandBuilder':
        """Add a string parameter, or an empty field when ``value`` is None."""
        return self.with_parameter(Parameter.optional_text(value))

    def with_empty_parameter(self) -> 'CommandBuilder':
        """Add an empty field, representing an unset optional parameter."""
        return self.with_parameter(Parameter.absent())

    def finish(self) -> memoryview:
        """Finish the command with the default ``\\r\\n`` terminator.

        See finish_with().
        """
        return self.finish_with(DEFAULT_TERMINATOR)

    def finish_with(self, terminator: TextLike) -> memoryview:
        """Finish the command with a custom terminator.

        Writes the mode marker for query and test commands (and ``=`` for a
        set command without parameters) followed by ``terminator``.

        Args:
            terminator: Bytes that end the frame, e.g. ``b"\\r"`` or ``b"\\0"``

        Returns:
            memoryview of the built command, sharing memory with the buffer
            and exactly as long as the command

        Raises:
            BufferOverflowError: The buffer was too small; ``required`` holds
                the size that would have worked
            CommandStateError: The command was never named, or the builder was
                already finished
        """
        self._check_open()
        if not self._named:
            raise CommandStateError("Command must be named before it is finished")

        marker = _FINAL_MARKER.get(self._mode, b"")
        if self._mode is CommandMode.SET and self._parameter_count == 0:
            marker = _FIRST_SEPARATOR[CommandMode.SET]
        self._append(marker)
        self._append(as_bytes(terminator))
        self._finished = True

        error = self.error
        if error is not None:
            logger.debug("Command build failed: %s", error)
            raise error

        frame = self._cursor.written()
        logger.debug("Built %s command %r", self._mode.value, bytes(frame))
        return frame
