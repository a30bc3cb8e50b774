"""
Command preparation from KEY=VALUE environment declarations.

Unlike Expander.expand(), preparation is lenient: malformed declarations are
dropped and tokens that fail to expand are omitted instead of failing the
whole command.
"""

import logging
from typing import Dict, Iterable, List, Mapping, Optional, Sequence

from ..exceptions import ParseFailure
from ..variables.expander import Expander
from ..variables.substitution import substitute_direct, substitute_tokens


logger = logging.getLogger(__name__)


def parse_env_declarations(declarations: Optional[Iterable[str]]) -> Dict[str, str]:
    """
    Build an environment from KEY=VALUE declarations.

    Each entry is split on the first '='. Entries without '=' or with an
    empty key are discarded. Later entries override earlier ones.
    """
    env: Dict[str, str] = {}
    for declaration in declarations or []:
        if '=' not in declaration:
            logger.debug(f"Discarding environment declaration without '=': {declaration!r}")
            continue
        key, value = declaration.split('=', 1)
        if not key:
            logger.debug(f"Discarding environment declaration with empty key: {declaration!r}")
            continue
        env[key] = value
    return env


class CommandPreparer:
    """Rewrites command tokens using an environment built from declarations."""

    def __init__(self, expander: Optional[Expander] = None):
        self.expander = expander or Expander()

    def prepare(
        self,
        tokens: Sequence[str],
        env_declarations: Optional[Iterable[str]] = None,
        use_advanced_parser: bool = True
    ) -> List[str]:
        """
        Prepare a command token list.

        Args:
            tokens: Already split command tokens
            env_declarations: KEY=VALUE strings
            use_advanced_parser: Route tokens through the quote-aware
                Expander instead of direct substitution

        Returns:
            Prepared tokens in input order, without empty entries
        """
        env = parse_env_declarations(env_declarations)
        return self.prepare_with_env(tokens, env, use_advanced_parser)

    def prepare_with_env(
        self,
        tokens: Sequence[str],
        env: Mapping[str, str],
        use_advanced_parser: bool = True
    ) -> List[str]:
        """Prepare tokens against an already built environment."""
        if not use_advanced_parser:
            return substitute_tokens(tokens, env)

        result: List[str] = []
        for token in tokens:
            try:
                expanded = self.expander.expand(token, env)
            except ParseFailure as e:
                logger.warning(f"Omitting command token {token!r}: {e.message}")
                continue
            result.extend(expanded)
        return result

    def evaluate(
        self,
        text: str,
        env: Mapping[str, str],
        use_advanced_parser: bool = True
    ) -> str:
        """
        Render text to a single string.

        The advanced form joins the expanded tokens with single spaces and
        raises ParseFailure like expand(); the simple form cannot fail.
        """
        if use_advanced_parser:
            return ' '.join(self.expander.expand(text, env))
        return substitute_direct(text, env)


_default_preparer = CommandPreparer()


def prepare_commands(
    tokens: Sequence[str],
    env_declarations: Optional[Iterable[str]] = None,
    use_advanced_parser: bool = True
) -> List[str]:
    """Prepare command tokens with a shared default CommandPreparer."""
    return _default_preparer.prepare(tokens, env_declarations, use_advanced_parser)


def evaluate(text: str, env: Mapping[str, str], use_advanced_parser: bool = True) -> str:
    """Render text to a single string with a shared default CommandPreparer."""
    return _default_preparer.evaluate(text, env, use_advanced_parser)
