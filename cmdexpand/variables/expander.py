"""
Shell-like argument expansion.

Expansion runs in two passes over the input:

1. Substitution: $name and ${name} references are replaced by their
   recursively expanded values. Single-quoted spans are copied verbatim.
2. Tokenization: the substituted text is split on unquoted whitespace and
   quote characters are removed.

Because substitution happens before tokenization, quote characters and
whitespace carried by a value take part in word splitting exactly where the
value lands: unquoted "a b" becomes two arguments, "$VAR" keeps one.
"""

import logging
import re
from enum import Enum
from typing import Iterable, List, Mapping, Optional, Sequence

from ..exceptions import BadSubstitutionError, ResolutionDepthError, UnterminatedQuoteError
from .resolver import VariableResolver


logger = logging.getLogger(__name__)


class QuoteState(Enum):
    """Quote context of the scanner."""
    UNQUOTED = "unquoted"
    SINGLE = "single"
    DOUBLE = "double"


SINGLE_QUOTE = "'"
DOUBLE_QUOTE = '"'
WHITESPACE = frozenset(" \t\r\n")


class Expander:
    """
    Expands command strings into argv lists.

    Instances keep no state between calls; expand() is reentrant.
    """

    NAME_PATTERN = re.compile(r'\w+', re.ASCII)
    BRACED_PATTERN = re.compile(r'\{(\w+)\}', re.ASCII)
    MAX_DEPTH = 100

    def __init__(self, resolver: Optional[VariableResolver] = None, max_depth: int = MAX_DEPTH):
        self.resolver = resolver or VariableResolver()
        self.max_depth = max_depth

    def expand(self, text: str, env: Mapping[str, str]) -> List[str]:
        """
        Expand a command string into an ordered list of arguments.

        Args:
            text: Raw command-line-like string
            env: Environment mapping; never mutated

        Returns:
            List of non-empty argument tokens

        Raises:
            ParseFailure: On undefined, cyclic or too deeply nested references, malformed
                ${...} references or unterminated quotes
        """
        substituted = self.substitute(text, env)
        tokens = self.tokenize(substituted)
        logger.debug(f"Expanded {text!r} -> {tokens!r}")
        return tokens

    def expand_all(self, tokens: Iterable[str], env: Mapping[str, str]) -> List[str]:
        """Expand each token in order and concatenate the results."""
        result: List[str] = []
        for token in tokens:
            result.extend(self.expand(token, env))
        return result

    def substitute(
        self,
        text: str,
        env: Mapping[str, str],
        chain: Sequence[str] = ()
    ) -> str:
        """
        Replace variable references in text, leaving quotes in place.

        Values are expanded recursively with the referencing name added to
        the chain, at most max_depth levels deep. Quote balance is not
        checked here; tokenize() reports unterminated quotes on the final text.
        """
        out: List[str] = []
        state = QuoteState.UNQUOTED
        i = 0
        length = len(text)

        while i < length:
            char = text[i]

            if state is QuoteState.SINGLE:
                if char == SINGLE_QUOTE:
                    state = QuoteState.UNQUOTED
                out.append(char)
                i += 1
                continue

            if char == SINGLE_QUOTE and state is QuoteState.UNQUOTED:
                state = QuoteState.SINGLE
            elif char == DOUBLE_QUOTE:
                if state is QuoteState.DOUBLE:
                    state = QuoteState.UNQUOTED
                else:
                    state = QuoteState.DOUBLE
            elif char == '$':
                name, end = self._read_reference(text, i)
                if name is not None:
                    raw = self.resolver.resolve(name, env, chain)
                    if len(chain) >= self.max_depth:
                        raise ResolutionDepthError(name, self.max_depth)
                    out.append(self.substitute(raw, env, tuple(chain) + (name,)))
                    i = end
                    continue
            out.append(char)
            i += 1

        return ''.join(out)

    def _read_reference(self, text: str, start: int):
        """
        Parse a reference beginning with the '$' at text[start].

        Returns:
            (name, end) where end is the index just past the reference, or
            (None, start) when the '$' is literal
        """
        pos = start + 1
        if pos < len(text) and text[pos] == '{':
            match = self.BRACED_PATTERN.match(text, pos)
            if not match:
                close = text.find('}', pos)
                fragment = text[start:close + 1] if close != -1 else text[start:]
                raise BadSubstitutionError(fragment, start)
            return match.group(1), match.end()

        match = self.NAME_PATTERN.match(text, pos)
        if not match:
            return None, start
        return match.group(0), match.end()

    def tokenize(self, text: str) -> List[str]:
        """
        Split text on unquoted whitespace and remove quote characters.

        Empty words are dropped, so '""' alone produces no token.

        Raises:
            UnterminatedQuoteError: If a quote span is left open
        """
        tokens: List[str] = []
        current: List[str] = []
        state = QuoteState.UNQUOTED
        quote_start = 0

        for i, char in enumerate(text):
            if state is QuoteState.SINGLE:
                if char == SINGLE_QUOTE:
                    state = QuoteState.UNQUOTED
                else:
                    current.append(char)
            elif state is QuoteState.DOUBLE:
                if char == DOUBLE_QUOTE:
                    state = QuoteState.UNQUOTED
                else:
                    current.append(char)
            elif char == SINGLE_QUOTE:
                state = QuoteState.SINGLE
                quote_start = i
            elif char == DOUBLE_QUOTE:
                state = QuoteState.DOUBLE
                quote_start = i
            elif char in WHITESPACE:
                if current:
                    tokens.append(''.join(current))
                    current = []
            else:
                current.append(char)

        if state is QuoteState.SINGLE:
            raise UnterminatedQuoteError("single", quote_start)
        if state is QuoteState.DOUBLE:
            raise UnterminatedQuoteError("double", quote_start)

        if current:
            tokens.append(''.join(current))
        return tokens


_default_expander = Expander()


def expand(text: str, env: Mapping[str, str]) -> List[str]:
    """Expand a command string with a shared default Expander."""
    return _default_expander.expand(text, env)


def expand_all(tokens: Iterable[str], env: Mapping[str, str]) -> List[str]:
    """Expand a list of command tokens with a shared default Expander."""
    return _default_expander.expand_all(tokens, env)
