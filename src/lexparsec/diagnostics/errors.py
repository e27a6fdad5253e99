"""lexparsec exception hierarchy.

Running a parser never raises: failures are values. These exceptions exist
for the API edges only - Failure.unwrap() and construction-time validation
of grammar pieces.

Python 3.13+. Zero external dependencies.
"""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from lexparsec.syntax.result import FailureReason

__all__ = ["GrammarDefinitionError", "LexParsecError", "ParseFailedError"]


class LexParsecError(Exception):
    """Base exception for all lexparsec errors."""


class ParseFailedError(LexParsecError):
    """A Failure was unwrapped.

    Attributes:
        reason: The FailureReason of the unwrapped Failure
    """

    def __init__(self, reason: "FailureReason") -> None:
        """Initialize ParseFailedError.

        Args:
            reason: Reason carried by the failed result
        """
        super().__init__(reason.format_error())
        self.reason = reason


class GrammarDefinitionError(LexParsecError, ValueError):
    """Invalid grammar building block.

    Raised while BUILDING parsers (bad LanguageDefinition fields, negative
    repetition counts, empty literals), never while running them.
    """
