"""cmdexpand exceptions."""

from typing import Iterable, List, Optional
from dataclasses import dataclass


class ParseFailure(Exception):
    """Raised when a command string cannot be expanded.

    No partial token list is ever returned alongside this exception.
    """

    exit_code = 2

    def __init__(self, message: str, name: Optional[str] = None):
        self.message = message
        self.name = name
        super().__init__(message)


class UndefinedVariableError(ParseFailure):
    """Raised when a referenced variable has no entry in the environment."""

    def __init__(self, name: str):
        super().__init__(f"Undefined variable: {name}", name=name)


class CyclicReferenceError(ParseFailure):
    """Raised when resolving a variable re-enters itself."""

    def __init__(self, name: str, chain: Iterable[str] = ()):
        self.chain = list(chain)
        path = " -> ".join(self.chain + [name])
        super().__init__(f"Cyclic variable reference: {path}", name=name)


class ResolutionDepthError(ParseFailure):
    """Raised when a chain of indirections nests deeper than allowed."""

    def __init__(self, name: str, max_depth: int):
        self.max_depth = max_depth
        super().__init__(f"Variable {name} nested more than {max_depth} levels deep", name=name)


class UnterminatedQuoteError(ParseFailure):
    """Raised when a quote span is opened but never closed."""

    def __init__(self, quote: str, position: int):
        self.quote = quote
        self.position = position
        super().__init__(f"Unterminated {quote} quote starting at position {position}")


class BadSubstitutionError(ParseFailure):
    """Raised for malformed ${...} references."""

    def __init__(self, text: str, position: int):
        self.position = position
        super().__init__(f"Bad substitution at position {position}: {text}")


@dataclass
class ValidationError:
    """Single job file validation error."""
    message: str
    path: str = ""
    exit_code: int = 2


class JobValidationError(Exception):
    """Raised when job file validation fails.

    The loader collects every error before raising so the CLI can report
    them all and map to the validation exit code.
    """

    def __init__(self, errors: List[ValidationError]):
        self.errors = errors
        self.exit_code = 2

        messages = []
        for error in errors:
            if error.path:
                messages.append(f"Validation error at {error.path}: {error.message}")
            else:
                messages.append(f"Validation error: {error.message}")

        super().__init__("\n".join(messages))
