"""Prepare command: rewrite command tokens from KEY=VALUE declarations."""

import logging
from argparse import Namespace

from cmdexpand.exec.preparer import prepare_commands

from .common import collect_env_declarations, print_tokens, setup_logging


logger = logging.getLogger(__name__)


def prepare_command(args: Namespace) -> int:
    """Prepare args.tokens leniently; never fails on expansion problems."""
    setup_logging(args)

    try:
        declarations = collect_env_declarations(args)
    except (OSError, ValueError) as e:
        logger.error(str(e))
        return 1

    tokens = prepare_commands(args.tokens, declarations, use_advanced_parser=not args.simple)
    print_tokens(tokens, args.format)
    return 0
