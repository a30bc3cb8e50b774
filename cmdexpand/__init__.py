"""Shell-like argument expansion and command preparation for CI job runners."""

from .exceptions import (
    ParseFailure,
    UndefinedVariableError,
    CyclicReferenceError,
    UnterminatedQuoteError,
    BadSubstitutionError,
    ResolutionDepthError,
)
from .variables import Expander, VariableResolver, expand, expand_all
from .exec import CommandPreparer, prepare_commands, evaluate, parse_env_declarations

__version__ = "0.1.0"

__all__ = [
    'ParseFailure',
    'UndefinedVariableError',
    'CyclicReferenceError',
    'UnterminatedQuoteError',
    'BadSubstitutionError',
    'ResolutionDepthError',
    'Expander',
    'VariableResolver',
    'expand',
    'expand_all',
    'CommandPreparer',
    'prepare_commands',
    'evaluate',
    'parse_env_declarations',
]
