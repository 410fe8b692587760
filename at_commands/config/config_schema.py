"""JSON Schema validation for at-commands configuration.

Provides the schema definition and validation with readable error messages.
"""

from typing import List, Tuple, Dict, Any
import jsonschema
from jsonschema import Draft7Validator

from at_commands.config.config_models import decode_escapes


class ConfigSchema:
    """Configuration schema validator using JSON Schema Draft 7.

    Example:
        >>> is_valid, errors = ConfigSchema.validate_config(config_dict)
        >>> if not is_valid:
        >>>     for error in errors:
        >>>         print(error)
    """

    @staticmethod
    def get_schema() -> Dict[str, Any]:
        """Get JSON Schema Draft 7 for configuration validation."""
        return {
            "$schema": "http://json-schema.org/draft-07/schema#",
            "title": "at-commands Configuration",
            "type": "object",
            "properties": {
                "framing": {
                    "type": "object",
                    "description": "Command frame defaults",
                    "properties": {
                        "at_prefix": {
                            "type": "boolean",
                            "description": "Write the AT prefix in front of commands"
                        },
                        "terminator": {
                            "type": "string",
                            "description": "Frame terminator, backslash escapes allowed",
                            "minLength": 1
                        },
                        "buffer_size": {
                            "type": "integer",
                            "description": "Size of the command buffer in bytes",
                            "minimum": 1,
                            "maximum": 65536
                        }
                    },
                    "additionalProperties": False
                },
                "logging": {
                    "type": "object",
                    "description": "Communication logging settings",
                    "properties": {
                        "level": {
                            "type": "string",
                            "enum": ["DEBUG", "INFO", "WARNING", "ERROR"]
                        },
                        "log_to_file": {"type": "boolean"},
                        "log_to_console": {"type": "boolean"},
                        "log_file_path": {
                            "type": ["string", "null"],
                            "minLength": 1
                        },
                        "max_file_size_mb": {
                            "type": "integer",
                            "minimum": 1,
                            "maximum": 1024
                        },
                        "backup_count": {
                            "type": "integer",
                            "minimum": 0,
                            "maximum": 100
                        }
                    },
                    "additionalProperties": False
                }
            },
            "additionalProperties": False
        }

    @staticmethod
    def validate_config(config: Dict[str, Any]) -> Tuple[bool, List[str]]:
        """Validate configuration dictionary against schema.

        Args:
            config: Configuration dictionary to validate.

        Returns:
            Tuple of (is_valid, error_messages).

        Example:
            >>> is_valid, errors = ConfigSchema.validate_config({"framing": {"buffer_size": 0}})
            >>> assert not is_valid
        """
        validator = Draft7Validator(ConfigSchema.get_schema())
        errors = [ConfigSchema._format_error(error) for error in validator.iter_errors(config)]
        errors.extend(ConfigSchema._custom_validation(config))
        return len(errors) == 0, errors

    @staticmethod
    def _format_error(error: jsonschema.exceptions.ValidationError) -> str:
        """Format validation error with section and field name.

        Example:
            "Section 'framing', field 'buffer_size': Value must be >= 1, got 0"
        """
        path_parts = list(error.path)
        if len(path_parts) == 0:
            section, field = "root", "configuration"
        elif len(path_parts) == 1:
            section, field = path_parts[0], "section"
        else:
            section = path_parts[0]
            field = ".".join(str(p) for p in path_parts[1:])

        prefix = f"Section '{section}', field '{field}'"
        if error.validator == "type":
            return f"{prefix}: Expected type {error.validator_value}, got {type(error.instance).__name__}"
        if error.validator == "enum":
            return f"{prefix}: Expected one of {error.validator_value}, got {error.instance}"
        if error.validator == "minimum":
            return f"{prefix}: Value must be >= {error.validator_value}, got {error.instance}"
        if error.validator == "maximum":
            return f"{prefix}: Value must be <= {error.validator_value}, got {error.instance}"
        return f"{prefix}: {error.message}"

    @staticmethod
    def _custom_validation(config: Dict[str, Any]) -> List[str]:
        """Checks JSON Schema cannot express."""
        errors = []

        framing = config.get('framing')
        terminator = framing.get('terminator') if isinstance(framing, dict) else None
        if isinstance(terminator, str):
            try:
                decode_escapes(terminator)
            except ValueError:
                errors.append(
                    f"Section 'framing', field 'terminator': Invalid escape sequence in {terminator!r}"
                )

        logging_section = config.get('logging')
        if isinstance(logging_section, dict) and logging_section.get('log_to_file') and not logging_section.get('log_file_path'):
            errors.append("Section 'logging', field 'log_file_path': Required when log_to_file is true")

        return errors
