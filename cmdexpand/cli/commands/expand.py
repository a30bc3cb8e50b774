"""Expand command: print the argv a command string expands to."""

import logging
from argparse import Namespace

from cmdexpand.exceptions import ParseFailure
from cmdexpand.exec.preparer import parse_env_declarations
from cmdexpand.variables.expander import Expander

from .common import collect_env_declarations, print_tokens, setup_logging


logger = logging.getLogger(__name__)


def expand_command(args: Namespace) -> int:
    """Expand args.text strictly; exit 2 on any parse failure."""
    setup_logging(args)

    try:
        env = parse_env_declarations(collect_env_declarations(args))
    except (OSError, ValueError) as e:
        logger.error(str(e))
        return 1

    try:
        tokens = Expander().expand(args.text, env)
    except ParseFailure as e:
        logger.error(f"Expansion failed: {e.message}")
        return e.exit_code

    print_tokens(tokens, args.format)
    return 0
