"""Parameter codec: conversions between values and their AT wire form.

Integers are signed 32-bit decimal ASCII, text is wrapped in double quotes and
raw parameters are written as-is. Quoted text has no escape mechanism: a ``"``
inside a text parameter ends the string on the receiving side. This matches
what AT devices accept and is deliberately left unchanged.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union

BytesLike = Union[bytes, bytearray, memoryview]
TextLike = Union[str, bytes, bytearray, memoryview]

INT32_MIN = -2 ** 31
INT32_MAX = 2 ** 31 - 1
# Sign plus ten digits
MAX_INT_DIGITS = 11

SIGNS = b"+-"
QUOTE = b'"'
SEPARATOR = b","
SPACE = b" "


def as_bytes(value: TextLike) -> bytes:
    """Convert ``str`` (UTF-8) or any bytes-like object to ``bytes``."""
    if isinstance(value, str):
        return value.encode('utf-8')
    return bytes(value)


def is_digit(byte: int) -> bool:
    return 0x30 <= byte <= 0x39


def is_control(byte: int) -> bool:
    """ASCII control characters (CR, LF, NUL, ...) end unquoted fields."""
    return byte < 0x20 or byte == 0x7F


def encode_int(value: int) -> bytes:
    """Encode a signed 32-bit integer as decimal ASCII.

    Negative numbers get a leading ``-``; there is never a ``+`` sign or zero
    padding.

    Args:
        value: Integer in the signed 32-bit range

    Returns:
        ASCII digits, e.g. ``b"-42"``

    Raises:
        ValueError: If the value is outside the signed 32-bit range

    Example:
        >>> encode_int(-65154)
        b'-65154'
    """
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"Integer parameter must be int, got {type(value).__name__}")
    if not INT32_MIN <= value <= INT32_MAX:
        raise ValueError(f"Integer parameter {value} is outside the signed 32-bit range")
    return str(value).encode('ascii')


def decode_int(data: BytesLike) -> Optional[int]:
    """Decode an ASCII decimal integer with an optional leading sign.

    Args:
        data: The integer field, e.g. ``b"+20"`` or ``b"-65154"``

    Returns:
        The integer, or None if the field is empty, contains anything other
        than one sign and digits, or does not fit in a signed 32-bit integer
    """
    data = bytes(data)
    if not data or len(data) > MAX_INT_DIGITS:
        return None

    negative = data[0] == ord('-')
    digits = data[1:] if data[0] in SIGNS else data
    if not digits or not all(is_digit(byte) for byte in digits):
        return None

    value = int(digits)
    if negative:
        value = -value
    if not INT32_MIN <= value <= INT32_MAX:
        return None
    return value


def encode_text(text: TextLike) -> bytes:
    """Wrap text in double quotes.

    Embedded quotes and control characters are not escaped.
    """
    return QUOTE + as_bytes(text) + QUOTE


def decode_text(data: BytesLike) -> Optional[str]:
    """Decode the body of a string field as UTF-8; None if it is not valid."""
    try:
        return bytes(data).decode('utf-8')
    except UnicodeDecodeError:
        return None


class ParameterKind(Enum):
    """Kind of value a parameter carries on the wire."""
    INTEGER = "integer"
    TEXT = "text"
    RAW = "raw"
    ABSENT = "absent"


@dataclass(frozen=True)
class Parameter:
    """A single positional command parameter.

    Attributes:
        kind: Which wire encoding applies
        value: int for INTEGER, bytes for TEXT and RAW, None for ABSENT

    Example:
        >>> Parameter.integer(42).encode()
        b'42'
        >>> Parameter.text("true").encode()
        b'"true"'
        >>> Parameter.absent().encode()
        b''
    """

    kind: ParameterKind
    value: Union[int, bytes, None] = None

    @classmethod
    def integer(cls, value: int) -> 'Parameter':
        encode_int(value)
        return cls(ParameterKind.INTEGER, value)

    @classmethod
    def text(cls, value: TextLike) -> 'Parameter':
        return cls(ParameterKind.TEXT, as_bytes(value))

    @classmethod
    def raw(cls, value: TextLike) -> 'Parameter':
        return cls(ParameterKind.RAW, as_bytes(value))

    @classmethod
    def absent(cls) -> 'Parameter':
        return cls(ParameterKind.ABSENT)

    @classmethod
    def optional_integer(cls, value: Optional[int]) -> 'Parameter':
        return cls.absent() if value is None else cls.integer(value)

    @classmethod
    def optional_text(cls, value: Optional[TextLike]) -> 'Parameter':
        return cls.absent() if value is None else cls.text(value)

    @property
    def is_absent(self) -> bool:
        return self.kind is ParameterKind.ABSENT

    def encode(self) -> bytes:
        """Wire form of the parameter, without any separator."""
        if self.kind is ParameterKind.INTEGER:
            return encode_int(self.value)
        if self.kind is ParameterKind.TEXT:
            return encode_text(self.value)
        if self.kind is ParameterKind.RAW:
            return bytes(self.value)
        return b""
