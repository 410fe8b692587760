"""Core encoding and decoding components.

This package provides the command builder and parser together with the
parameter codec and buffer cursor they share.
"""

from at_commands.core.state import ComponentState
from at_commands.core.codec import Parameter, ParameterKind, encode_int, decode_int
from at_commands.core.cursor import Cursor
from at_commands.core.builder import CommandBuilder, CommandMode, DEFAULT_TERMINATOR
from at_commands.core.parser import CommandParser
from at_commands.core.exceptions import (
    ATCommandsError,
    BuilderError,
    BufferOverflowError,
    CommandStateError,
    ParseError,
    UnexpectedIdentifierError,
    UnexpectedDataError,
    IncorrectFormatError,
    NoMoreDataError,
    ConfigError,
)

__all__ = [
    'ComponentState',
    'Parameter',
    'ParameterKind',
    'encode_int',
    'decode_int',
    'Cursor',
    'CommandBuilder',
    'CommandMode',
    'DEFAULT_TERMINATOR',
    'CommandParser',
    'ATCommandsError',
    'BuilderError',
    'BufferOverflowError',
    'CommandStateError',
    'ParseError',
    'UnexpectedIdentifierError',
    'UnexpectedDataError',
    'IncorrectFormatError',
    'NoMoreDataError',
    'ConfigError',
]
