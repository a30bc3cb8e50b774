"""CLI command handlers."""

from .expand import expand_command
from .prepare import prepare_command
from .run import run_job

__all__ = ['expand_command', 'prepare_command', 'run_job']
