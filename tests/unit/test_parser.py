"""Unit tests for CommandParser.

Tests response parsing including:
- Identifiers, integers, quoted and raw strings
- Optional parameters and empty fields
- Whitespace handling
- Error kinds and positions
- Sticky error state
"""

import pytest

from at_commands.core.parser import CommandParser
from at_commands.core.exceptions import (
    ParseError,
    UnexpectedIdentifierError,
    UnexpectedDataError,
    IncorrectFormatError,
    NoMoreDataError,
)
from at_commands.core.state import ComponentState


class TestSuccessfulParsing:
    """Test well-formed responses."""

    def test_full_response(self):
        """Test data line followed by OK."""
        result = (CommandParser.parse(b'+SYSGPIOREAD:654,"true",-65154\r\nOK\r\n')
                  .expect_identifier(b"+SYSGPIOREAD:")
                  .expect_int_parameter()
                  .expect_string_parameter()
                  .expect_int_parameter()
                  .expect_identifier(b"\r\nOK\r\n")
                  .finish())

        assert result == (654, "true", -65154)

    def test_positive_sign(self):
        """Test a leading '+' is accepted and dropped."""
        (value,) = (CommandParser.parse(b"OK+RP:+20dBm\r\n")
                    .expect_identifier(b"OK+RP:")
                    .expect_int_parameter()
                    .expect_identifier(b"dBm\r\n")
                    .finish())

        assert value == 20

    def test_whitespace(self):
        """Test spaces around parameters are skipped."""
        result = (CommandParser.parse(b'+SYSGPIOREAD: 654, "true", -65154 \r\nOK\r\n')
                  .expect_identifier(b"+SYSGPIOREAD:")
                  .expect_int_parameter()
                  .expect_string_parameter()
                  .expect_int_parameter()
                  .expect_identifier(b"\r\nOK\r\n")
                  .finish())

        assert result == (654, "true", -65154)

    def test_raw_string(self):
        """Test raw string stops at the line end."""
        (status,) = (CommandParser.parse(b"+STATUS: READY\r\nOK\r\n")
                     .expect_identifier(b"+STATUS: ")
                     .expect_raw_string()
                     .expect_identifier(b"\r\nOK\r\n")
                     .finish())

        assert status == "READY"

    def test_raw_string_stops_at_comma(self):
        """Test raw strings are separated by commas."""
        result = (CommandParser.parse(b"+COPS: 0,0,Operator,7")
                  .expect_identifier("+COPS:")
                  .expect_int_parameter()
                  .expect_int_parameter()
                  .expect_raw_string()
                  .expect_int_parameter()
                  .finish())

        assert result == (0, 0, "Operator", 7)

    def test_raw_string_at_end(self):
        """Test raw string running to the end of input."""
        (text,) = CommandParser.parse(b"+X:abc def").expect_identifier(b"+X:").expect_raw_string().finish()

        assert text == "abc def"

    def test_string_quotes_are_not_escapes(self):
        """Test a string ends at the first closing quote."""
        result = (CommandParser.parse(b'+X:"a\\",b"')
                  .expect_identifier(b"+X:")
                  .expect_string_parameter()
                  .finish())

        assert result == ("a\\",)

    def test_utf8_string(self):
        """Test strings are decoded as UTF-8."""
        (text,) = (CommandParser.parse('+X:"café"'.encode('utf-8'))
                   .expect_identifier(b"+X:")
                   .expect_string_parameter()
                   .finish())

        assert text == "café"

    def test_int_extremes(self):
        """Test the signed 32-bit limits."""
        result = (CommandParser.parse(b"-2147483648,2147483647")
                  .expect_int_parameter()
                  .expect_int_parameter()
                  .finish())

        assert result == (-2147483648, 2147483647)

    def test_no_expectations(self):
        """Test finish with nothing expected returns an empty tuple."""
        assert CommandParser.parse(b"anything").finish() == ()

    def test_accepts_bytearray_and_memoryview(self):
        """Test any bytes-like input."""
        data = bytearray(b"+X:1")
        assert CommandParser.parse(data).expect_identifier(b"+X:").expect_int_parameter().finish() == (1,)
        assert CommandParser.parse(memoryview(data)).expect_identifier(b"+X:").expect_int_parameter().finish() == (1,)


class TestOptionalParameters:
    """Test optional parameter expectations."""

    def test_optional_int_empty(self):
        """Test an empty field yields None."""
        result = (CommandParser.parse(b"+X=,5\r\n")
                  .expect_identifier(b"+X=")
                  .expect_optional_int_parameter()
                  .expect_int_parameter()
                  .finish())

        assert result == (None, 5)

    def test_optional_int_present(self):
        """Test a present optional integer."""
        result = (CommandParser.parse(b"+X=3,5")
                  .expect_identifier(b"+X=")
                  .expect_optional_int_parameter()
                  .expect_optional_int_parameter()
                  .finish())

        assert result == (3, 5)

    def test_optional_string(self):
        """Test optional strings, absent and present."""
        result = (CommandParser.parse(b'+HTTPCLIENT=2,1,"http://localpc/ip",,,1')
                  .expect_identifier(b"+HTTPCLIENT=")
                  .expect_int_parameter()
                  .expect_int_parameter()
                  .expect_optional_string_parameter()
                  .expect_optional_string_parameter()
                  .expect_optional_int_parameter()
                  .expect_int_parameter()
                  .finish())

        assert result == (2, 1, "http://localpc/ip", None, None, 1)

    def test_optional_before_terminator(self):
        """Test an empty last field before the line end."""
        result = (CommandParser.parse(b"+X:1,\r\nOK\r\n")
                  .expect_identifier(b"+X:")
                  .expect_int_parameter()
                  .expect_optional_int_parameter()
                  .expect_identifier(b"\r\nOK\r\n")
                  .finish())

        assert result == (1, None)

    def test_optional_at_end_of_input(self):
        """Test an optional field at the end of input."""
        result = CommandParser.parse(b"+X:").expect_identifier(b"+X:").expect_optional_string_parameter().finish()

        assert result == (None,)

    def test_required_int_on_empty_field(self):
        """Test a required integer on an empty field is a format error."""
        parser = CommandParser.parse(b"+X=,5").expect_identifier(b"+X=").expect_int_parameter()

        with pytest.raises(IncorrectFormatError):
            parser.finish()

    def test_required_string_on_empty_field(self):
        """Test a required string on an empty field is a format error."""
        parser = CommandParser.parse(b"+X=,5").expect_identifier(b"+X=").expect_string_parameter()

        with pytest.raises(IncorrectFormatError):
            parser.finish()


class TestErrors:
    """Test error kinds."""

    def test_identifier_mismatch(self):
        """Test a wrong identifier."""
        parser = CommandParser.parse(b"+CSQ: 20,99").expect_identifier(b"+CREG:")

        with pytest.raises(UnexpectedIdentifierError) as exc_info:
            parser.finish()

        assert exc_info.value.expected == b"+CREG:"
        assert exc_info.value.position == 0

    def test_identifier_mismatch_consumes_nothing(self):
        """Test a failed identifier leaves the input in place."""
        parser = CommandParser.parse(b"+X:1,+Y").expect_identifier(b"+X:").expect_int_parameter()
        position = parser.position

        parser.expect_identifier(b"+Z")

        assert parser.position == position
        assert parser.remaining == b"+Y"

    def test_identifier_longer_than_input(self):
        """Test an identifier longer than the remaining input."""
        with pytest.raises(UnexpectedIdentifierError):
            CommandParser.parse(b"+AB").expect_identifier(b"+ABC").finish()

    def test_int_no_digits(self):
        """Test letters where an integer is expected."""
        with pytest.raises(IncorrectFormatError) as exc_info:
            CommandParser.parse(b"+X:abc").expect_identifier(b"+X:").expect_int_parameter().finish()

        assert exc_info.value.position == 3

    def test_int_sign_only(self):
        """Test a lone sign is not an integer."""
        with pytest.raises(IncorrectFormatError):
            CommandParser.parse(b"-,1").expect_int_parameter().finish()

    def test_int_overflow(self):
        """Test values beyond 32 bits are a format error."""
        with pytest.raises(IncorrectFormatError):
            CommandParser.parse(b"2147483648").expect_int_parameter().finish()

    def test_int_no_more_data(self):
        """Test an integer expected at the end of input."""
        with pytest.raises(NoMoreDataError):
            CommandParser.parse(b"+X:").expect_identifier(b"+X:").expect_int_parameter().finish()

    def test_string_no_more_data(self):
        """Test a string expected at the end of input."""
        with pytest.raises(NoMoreDataError):
            CommandParser.parse(b"+X: ").expect_identifier(b"+X:").expect_string_parameter().finish()

    def test_unterminated_string(self):
        """Test a string without closing quote."""
        with pytest.raises(IncorrectFormatError):
            CommandParser.parse(b'+X:"abc').expect_identifier(b"+X:").expect_string_parameter().finish()

    def test_string_without_quote(self):
        """Test unquoted text where a string is expected."""
        with pytest.raises(UnexpectedDataError) as exc_info:
            CommandParser.parse(b"+X:abc").expect_identifier(b"+X:").expect_string_parameter().finish()

        assert not isinstance(exc_info.value, IncorrectFormatError)

    def test_invalid_utf8_string(self):
        """Test strings that are not UTF-8."""
        with pytest.raises(UnexpectedDataError):
            CommandParser.parse(b'"\xff\xfe"').expect_string_parameter().finish()

    def test_errors_share_base(self):
        """Test every parse error is a ParseError."""
        for error_class in (UnexpectedIdentifierError, UnexpectedDataError, IncorrectFormatError, NoMoreDataError):
            assert issubclass(error_class, ParseError)


class TestStickyError:
    """Test the errored state."""

    def test_first_error_is_kept(self):
        """Test later failures do not replace the first error."""
        parser = (CommandParser.parse(b"+X:abc")
                  .expect_identifier(b"+Y:")
                  .expect_int_parameter()
                  .expect_string_parameter())

        with pytest.raises(UnexpectedIdentifierError):
            parser.finish()

    def test_no_consumption_after_error(self):
        """Test calls after an error are no-ops."""
        parser = CommandParser.parse(b"+X:1,2").expect_identifier(b"+Y:")
        error = parser.error

        parser.expect_identifier(b"+X:").expect_int_parameter()

        assert parser.position == 0
        assert parser.error is error
        assert parser.state is ComponentState.ERRORED

    def test_active_state(self):
        """Test a fresh parser is ACTIVE without error."""
        parser = CommandParser.parse(b"OK")

        assert parser.state is ComponentState.ACTIVE
        assert parser.error is None

    def test_chain_returns_same_parser(self):
        """Test chain methods return the parser itself."""
        parser = CommandParser.parse(b"+X:1")

        assert parser.expect_identifier(b"+X:") is parser
        assert parser.expect_int_parameter() is parser
