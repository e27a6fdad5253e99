"""Standard combinator library.

Choice & Backtracking:
    choice, option, optional, attempt, look_ahead, not_followed_by

Repetition & Separation:
    many, many1, skip_many, skip_many1, count, sep_by, sep_by1, end_by,
    end_by1, sep_end_by, sep_end_by1, many_till, many1_till, between,
    chainl1, chainr1

Capture:
    capture

Backtracking Policy:
    A failed branch never affects its caller's position: Failure carries no
    cursor, so every combinator retries from the cursor it was given. There
    is no committed choice; pathological grammars may backtrack
    exponentially.

Termination:
    Every repetition is an explicit loop, never recursion. A loop body that
    succeeds WITHOUT consuming input ends the loop (its value is not
    collected), so many(optional(p)) terminates instead of spinning.
"""

from collections.abc import Callable, Sequence
from typing import Any

from lexparsec.diagnostics.errors import GrammarDefinitionError
from lexparsec.diagnostics.templates import ErrorTemplate
from lexparsec.syntax.cursor import Cursor
from lexparsec.syntax.parser.core import Parser, parse
from lexparsec.syntax.parser.primitives import eof
from lexparsec.syntax.result import Failure, FailureReason, Result, Success

__all__ = [
    "attempt",
    "between",
    "capture",
    "chainl1",
    "chainr1",
    "choice",
    "count",
    "end_by",
    "end_by1",
    "look_ahead",
    "many",
    "many1",
    "many1_till",
    "many_till",
    "not_followed_by",
    "option",
    "optional",
    "parse_all",
    "sep_by",
    "sep_by1",
    "sep_end_by",
    "sep_end_by1",
    "skip_many",
    "skip_many1",
]


# ============================================================================
# CHOICE & BACKTRACKING
# ============================================================================


def choice[T](parsers: Sequence[Parser[T]]) -> Parser[T]:
    """Try each parser against the SAME input; the first success wins.

    If every branch fails the result is a NO_ALTERNATIVE failure whose
    causes are the branch failures, in order. An empty list always fails.
    """
    branches = tuple(parsers)

    def run(cursor: Cursor) -> Result[T]:
        reasons: list[FailureReason] = []
        for branch in branches:
            match branch(cursor):
                case Success() as success:
                    return success
                case Failure(reason):
                    reasons.append(reason)
        return Failure(ErrorTemplate.no_alternative(cursor, reasons))

    return Parser(run, f"choice({', '.join(b.name for b in branches)})")


def option[T, D](default: D, parser: Parser[T]) -> Parser[T | D]:
    """Parser's value, or default (consuming nothing) if parser fails."""

    def run(cursor: Cursor) -> Result[T | D]:
        match parser(cursor):
            case Success() as success:
                return success
            case Failure():
                return Success(default, cursor)

    return Parser(run, f"option({parser.name})")


def optional[T](parser: Parser[T]) -> Parser[T | None]:
    """Parser's value, or None if it fails."""
    return option(None, parser)


def attempt[T](parser: Parser[T]) -> Parser[T]:
    """Parsec's `try`. Every combinator here already backtracks, so this is
    the identity; it exists so grammars ported from Parsec read the same.
    """
    return parser


def look_ahead[T](parser: Parser[T]) -> Parser[T]:
    """Run parser and succeed with its value WITHOUT consuming input."""

    def run(cursor: Cursor) -> Result[T]:
        match parser(cursor):
            case Success(value, _):
                return Success(value, cursor)
            case Failure() as failure:
                return failure

    return Parser(run, f"look_ahead({parser.name})")


def not_followed_by(parser: Parser[Any]) -> Parser[None]:
    """Succeed (consuming nothing) only if parser FAILS here."""

    def run(cursor: Cursor) -> Result[None]:
        match parser(cursor):
            case Success():
                return Failure(ErrorTemplate.unexpected_match(cursor, parser.name))
            case Failure():
                return Success(None, cursor)

    return Parser(run, f"not_followed_by({parser.name})")


# ============================================================================
# REPETITION
# ============================================================================


def _repeat[T](parser: Parser[T], cursor: Cursor) -> tuple[list[T], Cursor]:
    """Run parser until it fails or stops consuming; return values and cursor."""
    values: list[T] = []
    while True:
        match parser(cursor):
            case Success(value, rest) if rest.pos > cursor.pos:
                values.append(value)
                cursor = rest
            case _:
                return values, cursor


def many[T](parser: Parser[T]) -> Parser[list[T]]:
    """Zero or more repetitions, collected in order. Never fails."""

    def run(cursor: Cursor) -> Result[list[T]]:
        values, rest = _repeat(parser, cursor)
        return Success(values, rest)

    return Parser(run, f"many({parser.name})")


def many1[T](parser: Parser[T]) -> Parser[list[T]]:
    """One or more repetitions.

    With zero matches, fails with EXHAUSTED; the first attempt's reason is
    kept as the cause.
    """

    def run(cursor: Cursor) -> Result[list[T]]:
        match parser(cursor):
            case Success(first, rest):
                values, end = _repeat(parser, rest)
                return Success([first, *values], end)
            case Failure(reason):
                return Failure(ErrorTemplate.exhausted(cursor, parser.name, reason))

    return Parser(run, f"many1({parser.name})")


def skip_many(parser: Parser[Any]) -> Parser[None]:
    """Zero or more repetitions, values discarded."""
    return many(parser).map(lambda _: None).named(f"skip_many({parser.name})")


def skip_many1(parser: Parser[Any]) -> Parser[None]:
    """One or more repetitions, values discarded."""
    return many1(parser).map(lambda _: None).named(f"skip_many1({parser.name})")


def count[T](n: int, parser: Parser[T]) -> Parser[list[T]]:
    """Exactly n repetitions (n == 0 succeeds with an empty list).

    Raises:
        GrammarDefinitionError: If n is negative
    """
    if n < 0:
        msg = f"count() expects n >= 0, got {n}"
        raise GrammarDefinitionError(msg)

    def run(cursor: Cursor) -> Result[list[T]]:
        values: list[T] = []
        for _ in range(n):
            match parser(cursor):
                case Success(value, rest):
                    values.append(value)
                    cursor = rest
                case Failure() as failure:
                    return failure
        return Success(values, cursor)

    return Parser(run, f"count({n}, {parser.name})")


# ============================================================================
# SEPARATION
# ============================================================================


def sep_by1[T](item: Parser[T], sep: Parser[Any]) -> Parser[list[T]]:
    """One or more items separated by sep.

    Algorithm: parse one item, then repeatedly attempt sep followed by item,
    restoring the input when that pair fails. A trailing separator is left
    unconsumed.
    """
    pair = sep.then(item)

    def run(cursor: Cursor) -> Result[list[T]]:
        match item(cursor):
            case Success(first, rest):
                values, end = _repeat(pair, rest)
                return Success([first, *values], end)
            case Failure(reason):
                return Failure(ErrorTemplate.exhausted(cursor, item.name, reason))

    return Parser(run, f"sep_by1({item.name}, {sep.name})")


def sep_by[T](item: Parser[T], sep: Parser[Any]) -> Parser[list[T]]:
    """Zero or more items separated by sep."""
    return option([], sep_by1(item, sep)).named(f"sep_by({item.name}, {sep.name})")


def end_by1[T](item: Parser[T], sep: Parser[Any]) -> Parser[list[T]]:
    """One or more items, each FOLLOWED by sep (e.g. statements ending in ';')."""
    return many1(item.skip(sep)).named(f"end_by1({item.name}, {sep.name})")


def end_by[T](item: Parser[T], sep: Parser[Any]) -> Parser[list[T]]:
    """Zero or more items, each followed by sep."""
    return many(item.skip(sep)).named(f"end_by({item.name}, {sep.name})")


def sep_end_by1[T](item: Parser[T], sep: Parser[Any]) -> Parser[list[T]]:
    """One or more items separated by sep, with an optional trailing sep."""

    def run(cursor: Cursor) -> Result[list[T]]:
        match item(cursor):
            case Success(first, rest):
                values = [first]
                cursor = rest
            case Failure(reason):
                return Failure(ErrorTemplate.exhausted(cursor, item.name, reason))
        while True:
            match sep(cursor):
                case Success(_, after_sep):
                    cursor = after_sep
                case Failure():
                    return Success(values, cursor)
            match item(cursor):
                case Success(value, rest) if rest.pos > cursor.pos:
                    values.append(value)
                    cursor = rest
                case _:
                    return Success(values, cursor)

    return Parser(run, f"sep_end_by1({item.name}, {sep.name})")


def sep_end_by[T](item: Parser[T], sep: Parser[Any]) -> Parser[list[T]]:
    """Zero or more items separated by sep, with an optional trailing sep."""
    return option([], sep_end_by1(item, sep)).named(f"sep_end_by({item.name}, {sep.name})")


def between[T](open_: Parser[Any], close: Parser[Any], parser: Parser[T]) -> Parser[T]:
    """open_, then parser, then close; value of parser."""
    return open_.then(parser).skip(close).named(f"between({parser.name})")


# ============================================================================
# TERMINATED REPETITION
# ============================================================================


def many_till[T](parser: Parser[T], end: Parser[Any]) -> Parser[list[T]]:
    """Collect parser values until end matches; end's match is consumed.

    Each round first tries end at the current position. If end fails,
    parser runs once; its failure is the overall failure (e.g. input
    exhausted before the terminator).

    Example:
        >>> from lexparsec.syntax.parser.primitives import any_char, char
        >>> result = many_till(any_char(), char(".")).parse("abc.")
        >>> "".join(result.value), result.remaining
        ('abc', '')
    """

    def run(cursor: Cursor) -> Result[list[T]]:
        values: list[T] = []
        while True:
            match end(cursor):
                case Success(_, rest):
                    return Success(values, rest)
                case Failure(end_reason):
                    pass
            match parser(cursor):
                case Success(value, rest) if rest.pos > cursor.pos:
                    values.append(value)
                    cursor = rest
                case Success():
                    # No progress and no terminator: end can never match
                    return Failure(end_reason)
                case Failure() as failure:
                    return failure

    return Parser(run, f"many_till({parser.name}, {end.name})")


def many1_till[T](parser: Parser[T], end: Parser[Any]) -> Parser[list[T]]:
    """Like many_till, but parser must match at least once before end."""

    def run(cursor: Cursor) -> Result[list[T]]:
        match parser(cursor):
            case Success(first, rest):
                pass
            case Failure(reason):
                return Failure(ErrorTemplate.exhausted(cursor, parser.name, reason))
        match many_till(parser, end)(rest):
            case Success(values, after):
                return Success([first, *values], after)
            case Failure() as failure:
                return failure

    return Parser(run, f"many1_till({parser.name}, {end.name})")


# ============================================================================
# OPERATOR CHAINS
# ============================================================================


def chainl1[T](parser: Parser[T], op: Parser[Callable[[T, T], T]]) -> Parser[T]:
    """One or more operands joined by left-associative operators.

    op yields the binary function to apply, e.g. for "1-2-3": (1 - 2) - 3.
    A dangling operator (op matched, operand failed) is left unconsumed.
    """

    def run(cursor: Cursor) -> Result[T]:
        match parser(cursor):
            case Success(acc, rest):
                cursor = rest
            case Failure() as failure:
                return failure
        while True:
            match op(cursor):
                case Success(func, after_op):
                    pass
                case Failure():
                    return Success(acc, cursor)
            match parser(after_op):
                case Success(operand, rest) if rest.pos > cursor.pos:
                    acc = func(acc, operand)
                    cursor = rest
                case _:
                    return Success(acc, cursor)

    return Parser(run, f"chainl1({parser.name})")


def chainr1[T](parser: Parser[T], op: Parser[Callable[[T, T], T]]) -> Parser[T]:
    """One or more operands joined by right-associative operators.

    For "2^3^2" with a power op: 2 ^ (3 ^ 2). Operands are collected in a
    loop and folded from the right, so long chains do not recurse.
    """

    def run(cursor: Cursor) -> Result[T]:
        match parser(cursor):
            case Success(first, rest):
                cursor = rest
            case Failure() as failure:
                return failure
        operands: list[T] = [first]
        funcs: list[Callable[[T, T], T]] = []
        while True:
            match op(cursor):
                case Success(func, after_op):
                    pass
                case Failure():
                    break
            match parser(after_op):
                case Success(operand, rest) if rest.pos > cursor.pos:
                    operands.append(operand)
                    funcs.append(func)
                    cursor = rest
                case _:
                    break
        acc = operands[-1]
        for func, left in zip(reversed(funcs), reversed(operands[:-1]), strict=True):
            acc = func(left, acc)
        return Success(acc, cursor)

    return Parser(run, f"chainr1({parser.name})")


# ============================================================================
# CAPTURE
# ============================================================================


def capture(parser: Parser[Any]) -> Parser[str]:
    """Run parser; succeed with the exact input text it consumed.

    Example:
        >>> from lexparsec.syntax.parser.primitives import one_of
        >>> result = capture(one_of("stuv")).parse("test")
        >>> result.value, result.remaining
        ('t', 'est')
    """

    def run(cursor: Cursor) -> Result[str]:
        match parser(cursor):
            case Success(_, rest):
                return Success(cursor.slice_to(rest.pos), rest)
            case Failure() as failure:
                return failure

    return Parser(run, f"capture({parser.name})")


def parse_all[T](source: str | Cursor, parser: Parser[T], **kwargs: Any) -> Result[T]:
    """parse(), additionally requiring the parser to consume ALL input.

    Keyword arguments are passed through to parse().
    """
    return parse(source, parser.skip(eof()), **kwargs)
