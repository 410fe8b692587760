"""Custom exception hierarchy for at-commands.

Frame errors (buffer overflow, parse failures) are recorded by the builder and
parser when they happen and raised only from their ``finish`` methods. Misuse
of a builder chain is raised immediately as CommandStateError.
"""

from typing import Optional


class ATCommandsError(Exception):
    """Base exception for all at-commands errors.

    All custom exceptions inherit from this base class to allow
    catching all library errors with a single except clause.
    """
    pass


class BuilderError(ATCommandsError):
    """Error raised while building a command frame."""
    pass


class BufferOverflowError(BuilderError):
    """The command does not fit in the destination buffer.

    Attributes:
        capacity: Size of the destination buffer in bytes
        required: Bytes the complete frame needs (the buffer size that would
            have succeeded), if known
    """

    def __init__(self, capacity: int, required: Optional[int] = None):
        """Initialize BufferOverflowError.

        Args:
            capacity: Size of the destination buffer in bytes
            required: Bytes needed for the complete frame
        """
        super().__init__("Command does not fit in buffer")
        self.capacity = capacity
        self.required = required

    def __str__(self) -> str:
        """Format error message with size context."""
        base_msg = super().__str__()
        if self.required is not None:
            return f"{base_msg} (capacity: {self.capacity}, required: {self.required})"
        return f"{base_msg} (capacity: {self.capacity})"


class CommandStateError(BuilderError):
    """Builder methods called in an order the command grammar does not allow.

    Raised immediately (not deferred) for programming errors such as adding a
    parameter before ``named()`` or adding parameters to a query command.
    """
    pass


class ParseError(ATCommandsError):
    """Base class for errors found while parsing a received frame.

    Attributes:
        position: Offset into the input up to which it parsed correctly
    """

    def __init__(self, message: str, position: int):
        """Initialize ParseError.

        Args:
            message: Human-readable error description
            position: Offset into the input where parsing failed
        """
        super().__init__(message)
        self.position = position

    def __str__(self) -> str:
        """Format error message with input position."""
        return f"{super().__str__()} (position: {self.position})"


class UnexpectedIdentifierError(ParseError):
    """Input did not contain the expected identifier literal.

    Attributes:
        expected: The literal bytes that were expected
    """

    def __init__(self, expected: bytes, position: int):
        super().__init__(f"Expected identifier {expected!r}", position)
        self.expected = expected


class UnexpectedDataError(ParseError):
    """A parameter's bytes do not have the expected shape."""
    pass


class IncorrectFormatError(UnexpectedDataError):
    """A parameter field is malformed (no digits, out of range, unterminated)."""
    pass


class NoMoreDataError(ParseError):
    """Input ended before a parameter expectation could be satisfied."""

    def __init__(self, position: int):
        super().__init__("No more data", position)


class ConfigError(ATCommandsError):
    """Configuration could not be loaded or failed validation.

    Attributes:
        errors: List of individual validation problems
    """

    def __init__(self, message: str, errors: Optional[list] = None):
        super().__init__(message)
        self.errors = errors or []

    def __str__(self) -> str:
        base_msg = super().__str__()
        if not self.errors:
            return base_msg
        error_list = '\n  - '.join(self.errors)
        return f"{base_msg}\n  - {error_list}"
