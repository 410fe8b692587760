"""at-commands command-line interface.

Builds command frames and parses response frames from the shell, using the
same builder and parser the library exposes.
"""

import argparse
import json
import sys
from pathlib import Path
from typing import List, Optional

from at_commands.config import ConfigManager, Config, LogLevel, decode_escapes
from at_commands.core import (
    ATCommandsError,
    CommandBuilder,
    CommandMode,
    CommandParser,
    Parameter,
)
from at_commands.logging import CommunicationLogger, frame_to_text


def _int_parameter(value: str) -> Parameter:
    try:
        return Parameter.integer(int(value))
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e)) from e


def _string_parameter(value: str) -> Parameter:
    return Parameter.text(decode_escapes(value))


def _raw_parameter(value: str) -> Parameter:
    return Parameter.raw(decode_escapes(value))


def apply_expectation(parser: CommandParser, token: str) -> CommandParser:
    """Apply one expectation token to a parser.

    Tokens:
        id:<literal>  expect_identifier (backslash escapes decoded)
        int / int?    expect_int_parameter / expect_optional_int_parameter
        string / string?
                      expect_string_parameter / expect_optional_string_parameter
        raw           expect_raw_string

    Raises:
        ValueError: Unknown token, or an invalid escape in an id: literal
    """
    if token.startswith("id:"):
        return parser.expect_identifier(decode_escapes(token[3:]))
    if token == "int":
        return parser.expect_int_parameter()
    if token == "int?":
        return parser.expect_optional_int_parameter()
    if token == "string":
        return parser.expect_string_parameter()
    if token == "string?":
        return parser.expect_optional_string_parameter()
    if token == "raw":
        return parser.expect_raw_string()
    raise ValueError(f"Unknown expectation: {token!r}")


def build_command(args: argparse.Namespace, config: Config, logger: CommunicationLogger) -> int:
    """Build a command frame and print it.

    Returns:
        Exit code (0 for success, 1 for error)
    """
    buffer = bytearray(args.buffer_size or config.framing.buffer_size)
    with_prefix = config.framing.at_prefix and not args.no_prefix

    try:
        if args.terminator is not None:
            terminator = decode_escapes(args.terminator)
        else:
            terminator = config.framing.terminator_bytes()
        builder = CommandBuilder(buffer, CommandMode(args.mode), with_prefix)
        builder.named(decode_escapes(args.name))
        for parameter in args.parameters or []:
            builder.with_parameter(parameter)
        frame = bytes(builder.finish_with(terminator))
    except (ATCommandsError, ValueError) as e:
        logger.log_error(source="CommandBuilder", error=str(e), details={"name": args.name})
        print(f"Error: {e}", file=sys.stderr)
        return 1

    logger.log_command(frame)
    print(frame.hex(' ') if args.hex else frame_to_text(frame))
    return 0


def parse_response(args: argparse.Namespace, logger: CommunicationLogger) -> int:
    """Parse a response frame and print the extracted values as JSON.

    Returns:
        Exit code (0 for success, 1 for error)
    """
    try:
        frame = decode_escapes(args.frame)
        parser = CommandParser.parse(frame)
        for token in args.expectations:
            parser = apply_expectation(parser, token)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    try:
        values = parser.finish()
    except ATCommandsError as e:
        logger.log_error(source="CommandParser", error=str(e), response=frame)
        print(f"Error: {e}", file=sys.stderr)
        return 1

    logger.log_response(frame, values)
    print(json.dumps(list(values)))
    return 0


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser with build and parse subcommands."""
    parser = argparse.ArgumentParser(
        prog="at-commands",
        description="Build and parse AT command frames",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=r"""
Examples:
  %(prog)s build --mode query --name +MYQUERY                 # AT+MYQUERY?\r\n
  %(prog)s build --mode set --name +MYSET --int 42 --no-prefix
  %(prog)s build --mode set --name +X --empty --int 5         # AT+X=,5\r\n
  %(prog)s build --mode test --name +CGDCONT --terminator '\r'
  %(prog)s parse '+SYSGPIOREAD:654,"true",-65154\r\nOK\r\n' \
      id:+SYSGPIOREAD: int string int 'id:\r\nOK\r\n'

  # Logging examples:
  %(prog)s --verbose build --mode execute --name +CGMI
  %(prog)s --log-file ~/at.log --log-level DEBUG parse 'OK\r\n' 'id:OK\r\n'
        """
    )

    parser.add_argument('--config', type=Path, help='Path to configuration YAML file')
    parser.add_argument(
        '--log-level',
        choices=[level.value for level in LogLevel],
        type=str.upper,
        help='Communication log level (overrides config)'
    )
    parser.add_argument('--log-file', help='Write the communication log to this file')
    parser.add_argument(
        '--verbose', '-v',
        action='store_true',
        help='Print the communication log to stderr'
    )

    subparsers = parser.add_subparsers(dest='action', required=True)

    build = subparsers.add_parser('build', help='Build a command frame')
    build.add_argument(
        '--mode',
        choices=[mode.value for mode in CommandMode],
        default=CommandMode.SET.value,
        help='Command form (default: set)'
    )
    build.add_argument('--name', required=True, help='Command identifier, e.g. +CGMI')
    build.add_argument(
        '--int', dest='parameters', action='append', type=_int_parameter,
        metavar='N', help='Add an integer parameter'
    )
    build.add_argument(
        '--string', dest='parameters', action='append', type=_string_parameter,
        metavar='TEXT', help='Add a quoted string parameter'
    )
    build.add_argument(
        '--raw', dest='parameters', action='append', type=_raw_parameter,
        metavar='TEXT', help='Add an unquoted parameter'
    )
    build.add_argument(
        '--empty', dest='parameters', action='append_const', const=Parameter.absent(),
        help='Add an empty (omitted optional) parameter'
    )
    build.add_argument('--no-prefix', action='store_true', help='Do not write the AT prefix')
    build.add_argument('--terminator', help=r'Frame terminator (default from config, \r\n)')
    build.add_argument('--buffer-size', type=int, help='Command buffer size in bytes')
    build.add_argument('--hex', action='store_true', help='Print the frame as hex bytes')

    parse = subparsers.add_parser('parse', help='Parse a response frame')
    parse.add_argument('frame', help=r'Received frame, backslash escapes allowed (\r, \n)')
    parse.add_argument(
        'expectations',
        nargs='+',
        metavar='EXPECTATION',
        help='id:<literal>, int, int?, string, string? or raw'
    )

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    args = create_parser().parse_args(argv)

    try:
        config = ConfigManager(args.config).load()
    except ATCommandsError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    log_file = args.log_file or (config.logging.log_file_path if config.logging.log_to_file else None)
    logger = CommunicationLogger(
        log_level=args.log_level or config.logging.level,
        enable_file=log_file is not None,
        enable_console=args.verbose or config.logging.log_to_console,
        log_file_path=log_file,
        max_file_size_mb=config.logging.max_file_size_mb,
        backup_count=config.logging.backup_count
    )

    with logger:
        if args.action == 'build':
            return build_command(args, config, logger)
        return parse_response(args, logger)


if __name__ == '__main__':
    sys.exit(main())
