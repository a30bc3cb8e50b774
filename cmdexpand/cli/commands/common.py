"""Helpers shared by the CLI commands."""

import json
import logging
import os
from argparse import Namespace
from pathlib import Path
from typing import Dict, List


def setup_logging(args: Namespace) -> None:
    """Configure logging from --log-level, --debug and --quiet."""
    level_name = getattr(args, 'log_level', 'info') or 'info'
    if level_name == 'warn':
        level_name = 'warning'
    log_level = getattr(logging, level_name.upper())
    if getattr(args, 'debug', False):
        log_level = logging.DEBUG
    elif getattr(args, 'quiet', False):
        log_level = logging.ERROR

    logging.basicConfig(
        level=log_level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )


def collect_env_declarations(args: Namespace) -> List[str]:
    """
    Gather KEY=VALUE declarations from the command line.

    Order of precedence (later wins): process environment (with
    --inherit-env), --env-file, then --env flags.
    """
    declarations: List[str] = []

    if getattr(args, 'inherit_env', False):
        declarations.extend(f"{key}={value}" for key, value in os.environ.items())

    env_file = getattr(args, 'env_file', None)
    if env_file:
        for key, value in load_env_file(Path(env_file)).items():
            declarations.append(f"{key}={value}")

    declarations.extend(getattr(args, 'env', None) or [])
    return declarations


def load_env_file(env_file: Path) -> Dict[str, str]:
    """Load a JSON object of environment values, stringifying scalars."""
    if not env_file.exists():
        raise FileNotFoundError(f"Env file not found: {env_file}")

    with open(env_file, 'r') as f:
        data = json.load(f)
    if not isinstance(data, dict):
        raise ValueError(f"Env file must contain a JSON object, got {type(data).__name__}")

    env = {}
    for key, value in data.items():
        if isinstance(value, bool):
            env[str(key)] = 'true' if value else 'false'
        elif value is None:
            env[str(key)] = ''
        else:
            env[str(key)] = str(value)
    return env


def print_tokens(tokens: List[str], output_format: str) -> None:
    """Write tokens to stdout, one per line or as a JSON array."""
    if output_format == 'json':
        print(json.dumps(tokens))
    else:
        for token in tokens:
            print(token)
