"""Result algebra: Success, Failure and FailureReason.

Every parser returns exactly one Result. Failure is a value, never an
exception: the only place a failure turns into an exception is an explicit
unwrap() call at the caller's API edge.

Design:
    - Success carries the parsed value AND the cursor after it
    - Failure carries only a reason; it has no cursor to continue from,
      so a failed branch can never leak partial consumption
    - Both are frozen; consume them with match:

        match parser(cursor):
            case Success(value, rest):
                ...
            case Failure(reason):
                ...

Python 3.13+.
"""

from dataclasses import dataclass, field
from typing import Literal, NoReturn

from lexparsec.diagnostics.codes import FailureCode
from lexparsec.diagnostics.errors import ParseFailedError
from lexparsec.syntax.cursor import Cursor

__all__ = ["Failure", "FailureReason", "Result", "Success"]


@dataclass(frozen=True, slots=True)
class FailureReason:
    """Why a parser failed, and where.

    Attributes:
        code: Identifying marker (see FailureCode)
        message: Human-readable description
        cursor: Position at which the failure was detected
        expected: What would have been accepted instead (may be empty)
        causes: Sub-reasons aggregated by choice (empty otherwise)

    Example:
        >>> reason = FailureReason(
        ...     FailureCode.UNEXPECTED_CHAR, "Unexpected 'x'", Cursor("ax", 1), ("'b'",)
        ... )
        >>> reason.format_error()
        "1:2: Unexpected 'x' (expected: 'b')"
    """

    code: FailureCode
    message: str
    cursor: Cursor
    expected: tuple[str, ...] = field(default_factory=tuple)
    causes: tuple["FailureReason", ...] = field(default_factory=tuple)

    @property
    def pos(self) -> int:
        """Character offset of the failure."""
        return self.cursor.pos

    def format_error(self) -> str:
        """Format as 'line:col: message (expected: ...)'."""
        line, col = self.cursor.compute_line_col()
        error_msg = f"{line}:{col}: {self.message}"
        if self.expected:
            error_msg += f" (expected: {', '.join(self.expected)})"
        return error_msg

    def format_with_context(self, context_lines: int = 2) -> str:
        """Format with surrounding source lines and a caret under the failure.

        Example:
            >>> source = "a = 1\\nb = ?\\nc = 3"
            >>> reason = FailureReason(
            ...     FailureCode.UNEXPECTED_CHAR, "Unexpected '?'", Cursor(source, 10)
            ... )
            >>> print(reason.format_with_context())
            2:5: Unexpected '?'
            <BLANKLINE>
               1 | a = 1
               2 | b = ?
                 |     ^
               3 | c = 3
        """
        line, col = self.cursor.compute_line_col()
        lines = self.cursor.source.split("\n")

        result_lines = [self.format_error(), ""]
        start_line = max(1, line - context_lines)
        end_line = min(len(lines), line + context_lines)

        for i in range(start_line, end_line + 1):
            line_num_str = f"{i:4} | "
            result_lines.append(line_num_str + lines[i - 1])
            if i == line:
                result_lines.append("     | " + " " * (col - 1) + "^")

        return "\n".join(result_lines)

    def flatten(self) -> tuple["FailureReason", ...]:
        """This reason followed by every nested cause, depth first."""
        stack: list[FailureReason] = [self]
        ordered: list[FailureReason] = []
        while stack:
            reason = stack.pop()
            ordered.append(reason)
            stack.extend(reversed(reason.causes))
        return tuple(ordered)

    def furthest(self) -> "FailureReason":
        """Cause detected furthest into the input (first one wins ties).

        Useful for reporting after a choice, where the aggregate reason
        sits at the choice's starting position.
        """
        best = self
        for reason in self.flatten():
            if reason.pos > best.pos:
                best = reason
        return best


@dataclass(frozen=True, slots=True)
class Success[T]:
    """Parsed value plus the cursor after the consumed input.

    Example:
        >>> result = Success("h", Cursor("hello", 1))
        >>> result.value, result.remaining
        ('h', 'ello')
    """

    value: T
    cursor: Cursor

    @property
    def remaining(self) -> str:
        """Unconsumed input."""
        return self.cursor.remaining

    def unwrap(self) -> T:
        """Return the parsed value."""
        return self.value

    def __bool__(self) -> Literal[True]:
        return True


@dataclass(frozen=True, slots=True)
class Failure:
    """Failed parse. Carries no cursor: callers retry from their own."""

    reason: FailureReason

    def unwrap(self) -> NoReturn:
        """Raise ParseFailedError carrying this failure's reason."""
        raise ParseFailedError(self.reason)

    def __bool__(self) -> Literal[False]:
        return False


type Result[T] = Success[T] | Failure
