"""
Execution module for cmdexpand.
Handles command preparation and process launching.
"""

from .preparer import CommandPreparer, parse_env_declarations, prepare_commands, evaluate
from .launcher import CommandLauncher, LaunchResult

__all__ = [
    "CommandPreparer",
    "parse_env_declarations",
    "prepare_commands",
    "evaluate",
    "CommandLauncher",
    "LaunchResult",
]
