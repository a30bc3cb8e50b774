"""
Direct $KEY substitution.

Replaces $KEY or ${KEY} tokens with the provided values using Python's
string.Template.safe_substitute: no quote handling, no recursion, and
unprovided tokens remain unchanged. Names follow the advanced parser
(letters, digits, underscore, so `$1` is a name too) and `$$` has no escape
meaning, so text without a provided key is never rewritten.
"""

from string import Template
from typing import List, Mapping, Sequence


class DirectTemplate(Template):
    """Template whose only rewrite is a provided $KEY or ${KEY}."""

    pattern = r'''
    \$(?:
      (?P<escaped>(?!))                 |
      (?P<named>[_a-z0-9]+)             |
      {(?P<braced>[_a-z0-9]+)}          |
      (?P<invalid>)
    )
    '''


def substitute_direct(text: str, env: Mapping[str, str]) -> str:
    """Substitute $KEY references in text, leaving unknown ones literal."""
    return DirectTemplate(text).safe_substitute(env)


def substitute_tokens(tokens: Sequence[str], env: Mapping[str, str]) -> List[str]:
    """
    Apply direct substitution to each token.

    Tokens that become empty are dropped so an empty value never yields a
    spurious empty argument.
    """
    result = []
    for token in tokens:
        value = substitute_direct(token, env)
        if value:
            result.append(value)
    return result
