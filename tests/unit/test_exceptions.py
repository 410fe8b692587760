"""Unit tests for the exception hierarchy."""

import pytest

from at_commands.core.exceptions import (
    ATCommandsError,
    BuilderError,
    BufferOverflowError,
    CommandStateError,
    ConfigError,
    ParseError,
    UnexpectedIdentifierError,
    UnexpectedDataError,
    IncorrectFormatError,
    NoMoreDataError,
)


class TestHierarchy:
    """Test exception inheritance."""

    @pytest.mark.parametrize("error_class", [
        BuilderError, BufferOverflowError, CommandStateError, ConfigError,
        ParseError, UnexpectedIdentifierError, UnexpectedDataError,
        IncorrectFormatError, NoMoreDataError,
    ])
    def test_all_derive_from_base(self, error_class):
        assert issubclass(error_class, ATCommandsError)

    def test_builder_errors(self):
        assert issubclass(BufferOverflowError, BuilderError)
        assert issubclass(CommandStateError, BuilderError)

    def test_format_error_is_data_error(self):
        assert issubclass(IncorrectFormatError, UnexpectedDataError)
        assert not issubclass(NoMoreDataError, UnexpectedDataError)


class TestMessages:
    """Test error formatting."""

    def test_buffer_overflow(self):
        error = BufferOverflowError(capacity=5, required=13)

        assert error.capacity == 5
        assert error.required == 13
        assert str(error) == "Command does not fit in buffer (capacity: 5, required: 13)"

    def test_buffer_overflow_without_required(self):
        assert str(BufferOverflowError(capacity=5)) == "Command does not fit in buffer (capacity: 5)"

    def test_parse_error_position(self):
        error = IncorrectFormatError("Expected integer parameter", 3)

        assert error.position == 3
        assert str(error) == "Expected integer parameter (position: 3)"

    def test_unexpected_identifier(self):
        error = UnexpectedIdentifierError(b"+CREG:", 0)

        assert error.expected == b"+CREG:"
        assert "+CREG:" in str(error)

    def test_no_more_data(self):
        assert str(NoMoreDataError(7)) == "No more data (position: 7)"

    def test_config_error_lists_problems(self):
        error = ConfigError("Configuration validation failed", ["a", "b"])

        assert error.errors == ["a", "b"]
        assert str(error) == "Configuration validation failed\n  - a\n  - b"

    def test_config_error_without_problems(self):
        error = ConfigError("Configuration file not found: x.yaml")

        assert error.errors == []
        assert str(error) == "Configuration file not found: x.yaml"
