"""Main CLI entry point for cmdexpand."""

import argparse
import sys
from typing import Optional

from .commands import expand_command, prepare_command, run_job


def _add_logging_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        '--debug',
        action='store_true',
        help='Enable debug logging'
    )
    parser.add_argument(
        '--quiet',
        action='store_true',
        help='Suppress non-error output'
    )
    parser.add_argument(
        '--log-level',
        choices=['debug', 'info', 'warn', 'error'],
        default='warn',
        help='Set log level'
    )


def _add_env_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        '--env',
        action='append',
        metavar='KEY=VALUE',
        help='Environment declaration (can be specified multiple times)'
    )
    parser.add_argument(
        '--env-file',
        type=str,
        help='Path to JSON file containing environment values'
    )
    parser.add_argument(
        '--inherit-env',
        action='store_true',
        help='Seed the environment from the current process environment'
    )
    parser.add_argument(
        '--format',
        choices=['lines', 'json'],
        default='lines',
        help='Output format for expanded tokens'
    )


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the cmdexpand CLI."""
    parser = argparse.ArgumentParser(
        prog='cmdexpand',
        description='Shell-like argument expansion for CI commands'
    )

    subparsers = parser.add_subparsers(dest='command', help='Commands')

    expand_parser = subparsers.add_parser('expand', help='Expand a command string into arguments')
    expand_parser.add_argument(
        'text',
        type=str,
        help='Command string to expand'
    )
    _add_env_arguments(expand_parser)
    _add_logging_arguments(expand_parser)

    prepare_parser = subparsers.add_parser('prepare', help='Prepare command tokens from KEY=VALUE declarations')
    prepare_parser.add_argument(
        'tokens',
        nargs='+',
        help='Command tokens'
    )
    prepare_parser.add_argument(
        '--simple',
        action='store_true',
        help='Use direct $KEY substitution instead of the quote-aware parser'
    )
    _add_env_arguments(prepare_parser)
    _add_logging_arguments(prepare_parser)

    run_parser = subparsers.add_parser('run', help='Run a job file')
    run_parser.add_argument(
        'job',
        type=str,
        help='Path to job YAML file'
    )
    run_parser.add_argument(
        '--dry-run',
        action='store_true',
        help='Print the prepared command without executing it'
    )
    run_parser.add_argument(
        '--format',
        choices=['text', 'json'],
        default='text',
        help='Output format'
    )
    _add_logging_arguments(run_parser)

    return parser


def main(args: Optional[list] = None) -> int:
    """Main entry point for the CLI."""
    parser = create_parser()
    parsed_args = parser.parse_args(args)

    if not parsed_args.command:
        parser.print_help()
        return 1

    if parsed_args.command == 'expand':
        return expand_command(parsed_args)
    elif parsed_args.command == 'prepare':
        return prepare_command(parsed_args)
    elif parsed_args.command == 'run':
        return run_job(parsed_args)
    else:
        parser.print_help()
        return 1


if __name__ == '__main__':
    sys.exit(main())
