"""Failure reason templates.

Centralized failure construction for testable, consistent messages.
Python 3.13+. Zero external dependencies.
"""

from collections.abc import Iterable

from lexparsec.diagnostics.codes import FailureCode
from lexparsec.syntax.cursor import Cursor
from lexparsec.syntax.result import FailureReason

__all__ = ["ErrorTemplate", "describe_char"]


def describe_char(ch: str | None) -> str:
    """Render a character (or end of input) for a failure message."""
    if ch is None:
        return "end of input"
    return repr(ch)


class ErrorTemplate:
    """Centralized failure reason templates.

    All FailureReasons are created here. Combinators never build message
    strings inline, which keeps messages consistent and testable.
    """

    @staticmethod
    def unexpected_eof(cursor: Cursor, expected: tuple[str, ...] = ()) -> FailureReason:
        """Input ended where a character was required."""
        return FailureReason(
            code=FailureCode.UNEXPECTED_EOF,
            message="Unexpected end of input",
            cursor=cursor,
            expected=expected,
        )

    @staticmethod
    def unexpected_char(cursor: Cursor, expected: tuple[str, ...] = ()) -> FailureReason:
        """Next character does not match.

        Falls back to unexpected_eof when the cursor is at end of input.
        """
        if cursor.is_eof:
            return ErrorTemplate.unexpected_eof(cursor, expected)
        return FailureReason(
            code=FailureCode.UNEXPECTED_CHAR,
            message=f"Unexpected {describe_char(cursor.current)}",
            cursor=cursor,
            expected=expected,
        )

    @staticmethod
    def predicate_rejected(cursor: Cursor, expected: tuple[str, ...] = ()) -> FailureReason:
        """A satisfy() predicate returned False for the next character."""
        if cursor.is_eof:
            return ErrorTemplate.unexpected_eof(cursor, expected)
        return FailureReason(
            code=FailureCode.PREDICATE_REJECTED,
            message=f"Predicate rejected character {describe_char(cursor.current)}",
            cursor=cursor,
            expected=expected,
        )

    @staticmethod
    def expected_eof(cursor: Cursor) -> FailureReason:
        """Input remains where end of input was required."""
        return FailureReason(
            code=FailureCode.EXPECTED_EOF,
            message=f"Expected end of input, found {describe_char(cursor.head)}",
            cursor=cursor,
            expected=("end of input",),
        )

    @staticmethod
    def user_failure(cursor: Cursor, message: str | None = None) -> FailureReason:
        """Explicit fail()/pzero() from a grammar author."""
        return FailureReason(
            code=FailureCode.USER_FAILURE,
            message=message if message is not None else "No parse",
            cursor=cursor,
        )

    @staticmethod
    def exhausted(cursor: Cursor, what: str, cause: FailureReason) -> FailureReason:
        """A one-or-more combinator matched zero times."""
        return FailureReason(
            code=FailureCode.EXHAUSTED,
            message=f"Expected at least one {what}",
            cursor=cursor,
            expected=cause.expected,
            causes=(cause,),
        )

    @staticmethod
    def no_alternative(cursor: Cursor, causes: Iterable[FailureReason]) -> FailureReason:
        """Every branch of a choice failed."""
        causes = tuple(causes)
        expected: list[str] = []
        for cause in causes:
            for item in cause.expected:
                if item not in expected:
                    expected.append(item)
        return FailureReason(
            code=FailureCode.NO_ALTERNATIVE,
            message="No alternative matched",
            cursor=cursor,
            expected=tuple(expected),
            causes=causes,
        )

    @staticmethod
    def labelled(reason: FailureReason, cursor: Cursor, label: str) -> FailureReason:
        """Replace a failure's expectation with a grammar-level name."""
        return FailureReason(
            code=reason.code,
            message=f"Expected {label}",
            cursor=cursor,
            expected=(label,),
            causes=(reason,),
        )

    @staticmethod
    def unexpected_match(cursor: Cursor, what: str) -> FailureReason:
        """not_followed_by() saw the thing it must not see."""
        return FailureReason(
            code=FailureCode.UNEXPECTED_CHAR,
            message=f"Unexpected {what}",
            cursor=cursor,
        )

    @staticmethod
    def unterminated_comment(cursor: Cursor, start: str, end: str) -> FailureReason:
        """Block comment opened at cursor never closed."""
        return FailureReason(
            code=FailureCode.UNTERMINATED_COMMENT,
            message=f"Unterminated block comment starting with {start!r}",
            cursor=cursor,
            expected=(repr(end),),
        )

    @staticmethod
    def unterminated_string(cursor: Cursor, quote: str) -> FailureReason:
        """String or character literal ran into end of input."""
        return FailureReason(
            code=FailureCode.UNTERMINATED_STRING,
            message="Unterminated literal",
            cursor=cursor,
            expected=(repr(quote),),
        )

    @staticmethod
    def reserved_word(cursor: Cursor, word: str) -> FailureReason:
        """Identifier-shaped text is a reserved word."""
        return FailureReason(
            code=FailureCode.RESERVED_WORD,
            message=f"Reserved word {word!r} cannot be used as an identifier",
            cursor=cursor,
            expected=("identifier",),
        )

    @staticmethod
    def reserved_operator(cursor: Cursor, op: str) -> FailureReason:
        """Operator-shaped text is a reserved operator."""
        return FailureReason(
            code=FailureCode.RESERVED_WORD,
            message=f"Reserved operator {op!r} cannot be used as an operator",
            cursor=cursor,
            expected=("operator",),
        )

    @staticmethod
    def wrong_word(cursor: Cursor, expected_word: str, found: str) -> FailureReason:
        """reserved()/reserved_op() found a different token."""
        return FailureReason(
            code=FailureCode.UNEXPECTED_CHAR,
            message=f"Expected {expected_word!r}, found {found!r}",
            cursor=cursor,
            expected=(repr(expected_word),),
        )

    @staticmethod
    def malformed_escape(cursor: Cursor, detail: str) -> FailureReason:
        """Invalid escape sequence inside a literal."""
        return FailureReason(
            code=FailureCode.MALFORMED_ESCAPE,
            message=f"Invalid escape sequence: {detail}",
            cursor=cursor,
        )

    @staticmethod
    def malformed_number(
        cursor: Cursor, detail: str, expected: tuple[str, ...] = ("0-9",)
    ) -> FailureReason:
        """Numeric literal with missing digits (fraction, exponent or radix body)."""
        return FailureReason(
            code=FailureCode.MALFORMED_NUMBER,
            message=f"Malformed number: {detail}",
            cursor=cursor,
            expected=expected,
        )

    @staticmethod
    def depth_exceeded(cursor: Cursor) -> FailureReason:
        """Grammar recursion exhausted the interpreter stack."""
        return FailureReason(
            code=FailureCode.DEPTH_EXCEEDED,
            message="Maximum recursion depth exceeded while parsing",
            cursor=cursor,
        )

    @staticmethod
    def source_too_large(cursor: Cursor, size: int, limit: int) -> FailureReason:
        """Input longer than the configured maximum."""
        return FailureReason(
            code=FailureCode.SOURCE_TOO_LARGE,
            message=(
                f"Source size ({size:,} characters) exceeds maximum ({limit:,} characters)"
            ),
            cursor=cursor,
        )
