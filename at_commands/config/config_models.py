"""Configuration data models for at-commands.

This module defines immutable configuration dataclasses with sensible defaults
for zero-config operation. All dataclasses are frozen for immutability.
"""

from dataclasses import dataclass, field, asdict
from enum import Enum
from typing import Optional, Dict, Any


class LogLevel(Enum):
    """Logging level."""
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"


def decode_escapes(value: str) -> bytes:
    """Turn a string containing backslash escapes into bytes.

    Used for terminators and literals coming from YAML, environment variables
    or the command line, where CR and LF are typed as backslash-r and
    backslash-n. Non-ASCII text is kept as UTF-8.

    Raises:
        ValueError: Trailing backslash, truncated escape, or an escape
            that does not name a single byte (e.g. ``\\u4e00``)
    """
    try:
        return value.encode('utf-8').decode('unicode_escape').encode('latin-1')
    except UnicodeError as e:
        raise ValueError(f"Invalid escape sequence in {value!r}") from e


@dataclass(frozen=True)
class FramingConfig:
    """Command frame defaults."""
    at_prefix: bool = True
    terminator: str = "\\r\\n"  # backslash escapes, decoded by terminator_bytes()
    buffer_size: int = 256

    def terminator_bytes(self) -> bytes:
        return decode_escapes(self.terminator)


@dataclass(frozen=True)
class LoggingConfig:
    """Communication logging configuration."""
    level: LogLevel = LogLevel.INFO
    log_to_file: bool = False
    log_to_console: bool = False
    log_file_path: Optional[str] = None
    max_file_size_mb: int = 10
    backup_count: int = 5


@dataclass(frozen=True)
class Config:
    """Complete configuration object with all sections."""
    framing: FramingConfig = field(default_factory=FramingConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary.

        Returns:
            Dictionary representation with nested sections.
        """
        def convert_value(obj: Any) -> Any:
            if isinstance(obj, Enum):
                return obj.value
            elif isinstance(obj, dict):
                return {k: convert_value(v) for k, v in obj.items()}
            return obj

        return convert_value(asdict(self))
