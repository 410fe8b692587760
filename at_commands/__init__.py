"""at-commands - AT command builder and parser.

This package provides:
- A chainable command builder writing into a fixed-size caller buffer
- A chainable response parser extracting typed parameter values
- Deferred error reporting for both, surfaced by ``finish()``
"""

from at_commands.core import (
    ComponentState,
    Parameter,
    ParameterKind,
    CommandBuilder,
    CommandMode,
    CommandParser,
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

__version__ = "0.1.0"

__all__ = [
    "CommandBuilder",
    "CommandMode",
    "CommandParser",
    "ComponentState",
    "Parameter",
    "ParameterKind",
    # Exceptions
    "ATCommandsError",
    "BuilderError",
    "BufferOverflowError",
    "CommandStateError",
    "ParseError",
    "UnexpectedIdentifierError",
    "UnexpectedDataError",
    "IncorrectFormatError",
    "NoMoreDataError",
    "ConfigError",
]
