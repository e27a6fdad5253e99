"""Failure codes and categories.

Python 3.13+. Zero external dependencies.
"""

from enum import Enum, StrEnum

__all__ = ["FailureCategory", "FailureCode"]


class FailureCategory(StrEnum):
    """Error categorization for FailureReason.

    Categories:
        STRUCTURAL: Next character(s) did not meet a combinator's precondition
        EXHAUSTION: many1/sep_by1 style combinator matched zero times
        ALTERNATIVE: Every branch of a choice failed
        LEXER: Unterminated comment or string, reserved word, bad escape
        LITERAL: Malformed numeric literal
        ENGINE: Driver-level limits (input size, recursion depth)
    """

    STRUCTURAL = "structural"
    EXHAUSTION = "exhaustion"
    ALTERNATIVE = "alternative"
    LEXER = "lexer"
    LITERAL = "literal"
    ENGINE = "engine"


class FailureCode(Enum):
    """Failure codes with unique identifiers.

    Organized by category:
        1000-1999: Structural failures
        2000-2999: Exhaustion and alternative failures
        3000-3999: Lexer failures
        4000-4999: Malformed literals
        5000-5999: Engine limits
    """

    # Structural failures (1000-1999)
    UNEXPECTED_CHAR = 1001
    UNEXPECTED_EOF = 1002
    EXPECTED_EOF = 1003
    PREDICATE_REJECTED = 1004
    USER_FAILURE = 1005

    # Exhaustion / alternatives (2000-2999)
    EXHAUSTED = 2001
    NO_ALTERNATIVE = 2002

    # Lexer failures (3000-3999)
    UNTERMINATED_COMMENT = 3001
    UNTERMINATED_STRING = 3002
    RESERVED_WORD = 3003
    MALFORMED_ESCAPE = 3004

    # Malformed literals (4000-4999)
    MALFORMED_NUMBER = 4001

    # Engine limits (5000-5999)
    DEPTH_EXCEEDED = 5001
    SOURCE_TOO_LARGE = 5002

    @property
    def category(self) -> FailureCategory:
        """Category derived from the code's numeric range."""
        if self is FailureCode.NO_ALTERNATIVE:
            return FailureCategory.ALTERNATIVE
        return _CATEGORY_BY_RANGE[self.value // 1000]


_CATEGORY_BY_RANGE: dict[int, FailureCategory] = {
    1: FailureCategory.STRUCTURAL,
    2: FailureCategory.EXHAUSTION,
    3: FailureCategory.LEXER,
    4: FailureCategory.LITERAL,
    5: FailureCategory.ENGINE,
}
