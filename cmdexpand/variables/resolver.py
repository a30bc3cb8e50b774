"""
Variable resolution with cycle detection.
Looks up raw values for $name references in a caller-supplied environment.
"""

from typing import Mapping, Optional, Sequence

from ..exceptions import CyclicReferenceError, UndefinedVariableError


class VariableResolver:
    """
    Resolves variable names against an environment mapping.

    The resolver holds no per-call state: the resolution chain is passed in
    by the caller, so a single instance can be shared between threads.
    """

    def resolve(
        self,
        name: str,
        env: Mapping[str, str],
        chain: Sequence[str] = ()
    ) -> str:
        """
        Resolve a variable to its raw (unexpanded) value.

        Args:
            name: Variable name, case-sensitive
            env: Environment mapping; never mutated
            chain: Names currently being resolved on this substitution path,
                outermost first

        Returns:
            The raw value. The caller rescans it for further references with
            `name` appended to the chain.

        Raises:
            CyclicReferenceError: If name is already in the chain
            UndefinedVariableError: If name is not in the environment
        """
        if name in chain:
            raise CyclicReferenceError(name, chain)

        value = self.lookup(name, env)
        if value is None:
            raise UndefinedVariableError(name)
        return value

    def lookup(self, name: str, env: Mapping[str, str]) -> Optional[str]:
        """Return the raw value for name, or None when it is undefined."""
        if name not in env:
            return None

        value = env[name]
        if value is None:
            return None
        # Job files and JSON env files may carry non-string scalars
        if isinstance(value, bool):
            return 'true' if value else 'false'
        return str(value)
