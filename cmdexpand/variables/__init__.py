"""
Variable resolution and expansion module.
Implements quote-aware $name expansion and direct $KEY substitution.
"""

from .resolver import VariableResolver
from .expander import Expander, QuoteState, expand, expand_all
from .substitution import substitute_direct, substitute_tokens

__all__ = [
    'VariableResolver',
    'Expander',
    'QuoteState',
    'expand',
    'expand_all',
    'substitute_direct',
    'substitute_tokens',
]
