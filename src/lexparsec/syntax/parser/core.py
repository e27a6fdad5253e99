"""Parser abstraction, monadic composition and the parse() driver.

Architecture:
    A Parser[T] wraps a pure function Cursor -> Result[T]. Combinators are
    plain functions that build new Parser values from existing ones; nothing
    runs until parse() (or Parser.parse) is called with an input.

    Because Cursor is immutable and Failure carries no cursor, every parser
    automatically "restores" its input on failure: the caller still holds
    the cursor it started from. Backtracking is therefore unconditional and
    free - choice() simply calls the next branch with the same cursor.

Composition Primitives:
    pure(v)        succeed with v, consume nothing (Parsec's return)
    fail(msg)      fail, consume nothing
    bind(p, f)     run p, feed its value to f, run the parser f returns
    do(parsers)    run in order, keep the LAST value

Recursion:
    do() is a loop. bind() nests one Python frame per link, so very long
    bind chains and deeply recursive grammars (via lazy()/forward()) are
    bounded by the interpreter recursion limit; parse() converts the
    resulting RecursionError into a DEPTH_EXCEEDED failure.
"""

import logging
import sys
from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass, field, replace
from typing import Any

from lexparsec.constants import MAX_SOURCE_SIZE
from lexparsec.diagnostics.errors import GrammarDefinitionError
from lexparsec.diagnostics.templates import ErrorTemplate
from lexparsec.syntax.cursor import Cursor
from lexparsec.syntax.result import Failure, Result, Success

__all__ = [
    "Forward",
    "Parser",
    "bind",
    "do",
    "fail",
    "forward",
    "lazy",
    "parse",
    "pure",
    "pzero",
    "return_",
    "sequence",
]

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Parser[T]:
    """Immutable, shareable parser value.

    Calling a parser with a Cursor runs it and returns a Result. Parsers
    hold no state between runs; the same parser may be used concurrently
    from several threads.

    Operators:
        p | q     choice([p, q])
        p >> q    run p then q, keep q's value
        p << q    run p then q, keep p's value

    Example:
        >>> from lexparsec.syntax.parser.primitives import char
        >>> ab = char("a") >> char("b")
        >>> ab.parse("abc").value
        'b'
    """

    fn: Callable[[Cursor], Result[T]]
    name: str = "parser"

    def __call__(self, cursor: Cursor) -> Result[T]:
        return self.fn(cursor)

    def __repr__(self) -> str:
        return f"<Parser {self.name}>"

    def parse(self, source: "str | Cursor") -> Result[T]:
        """Run against source (see the module-level parse())."""
        return parse(source, self)

    def named(self, name: str) -> "Parser[T]":
        """Copy of this parser with a different display name."""
        return replace(self, name=name)

    def bind[U](self, f: Callable[[T], "Parser[U]"]) -> "Parser[U]":
        """Method form of bind(self, f)."""
        return bind(self, f)

    def map[U](self, f: Callable[[T], U]) -> "Parser[U]":
        """Transform the parsed value with f, leaving consumption unchanged."""

        def run(cursor: Cursor) -> Result[U]:
            match self(cursor):
                case Success(value, rest):
                    return Success(f(value), rest)
                case Failure() as failure:
                    return failure

        return Parser(run, f"map({self.name})")

    def then[U](self, other: "Parser[U]") -> "Parser[U]":
        """Run self then other; keep other's value."""

        def run(cursor: Cursor) -> Result[U]:
            match self(cursor):
                case Success(_, rest):
                    return other(rest)
                case Failure() as failure:
                    return failure

        return Parser(run, f"{self.name} >> {other.name}")

    def skip(self, other: "Parser[Any]") -> "Parser[T]":
        """Run self then other; keep self's value."""

        def run(cursor: Cursor) -> Result[T]:
            match self(cursor):
                case Success(value, rest):
                    match other(rest):
                        case Success(_, after):
                            return Success(value, after)
                        case Failure() as failure:
                            return failure
                case Failure() as failure:
                    return failure

        return Parser(run, f"{self.name} << {other.name}")

    def label(self, name: str) -> "Parser[T]":
        """Name what this parser expects, for failure messages.

        Only failures detected at the starting position are relabelled;
        a failure deeper in the input already says more than the label.
        """

        def run(cursor: Cursor) -> Result[T]:
            result = self(cursor)
            if isinstance(result, Failure) and result.reason.pos == cursor.pos:
                return Failure(ErrorTemplate.labelled(result.reason, cursor, name))
            return result

        return Parser(run, name)

    def __or__[U](self, other: "Parser[U]") -> "Parser[T | U]":
        from lexparsec.syntax.parser.combinators import choice  # noqa: PLC0415 - circular

        return choice([self, other])

    def __rshift__[U](self, other: "Parser[U]") -> "Parser[U]":
        return self.then(other)

    def __lshift__(self, other: "Parser[Any]") -> "Parser[T]":
        return self.skip(other)


@dataclass(frozen=True, slots=True, eq=False, repr=False)
class Forward[T](Parser[T]):
    """Parser defined after it is referenced, for recursive grammars.

    Example:
        >>> from lexparsec.syntax.parser.primitives import char
        >>> from lexparsec.syntax.parser.combinators import choice
        >>> nested = forward("nested")
        >>> nested.define(choice([char("(") >> nested << char(")"), pure("x")]))
        >>> nested.parse("(())").value
        'x'
    """

    cell: list[Parser[T]] = field(default_factory=list)

    def define(self, parser: Parser[T]) -> None:
        """Bind the forward reference to its definition (exactly once).

        Raises:
            GrammarDefinitionError: If already defined
        """
        if self.cell:
            msg = f"Forward parser '{self.name}' is already defined"
            raise GrammarDefinitionError(msg)
        self.cell.append(parser)


def forward[T](name: str = "forward") -> Forward[T]:
    """Create an undefined Forward parser; call .define() before running it."""
    cell: list[Parser[T]] = []

    def run(cursor: Cursor) -> Result[T]:
        if not cell:
            msg = f"Forward parser '{name}' was run before define()"
            raise GrammarDefinitionError(msg)
        return cell[0](cursor)

    return Forward(run, name, cell)


def lazy[T](factory: Callable[[], Parser[T]], name: str = "lazy") -> Parser[T]:
    """Defer building a parser until it runs.

    Lets grammar functions refer to each other recursively:

        def expr() -> Parser[int]:
            return choice([number(defn), parens(defn, lazy(expr))])
    """

    def run(cursor: Cursor) -> Result[T]:
        return factory()(cursor)

    return Parser(run, name)


def pure[T](value: T) -> Parser[T]:
    """Always succeed with value, consuming nothing."""

    def run(cursor: Cursor) -> Result[T]:
        return Success(value, cursor)

    return Parser(run, f"pure({value!r})")


# Parsec spells it `return`; Python reserves the word.
return_ = pure


def fail(message: str | None = None) -> Parser[Any]:
    """Always fail with message (default "No parse"), consuming nothing."""

    def run(cursor: Cursor) -> Result[Any]:
        return Failure(ErrorTemplate.user_failure(cursor, message))

    return Parser(run, "fail")


def pzero() -> Parser[Any]:
    """Always fail with the default reason."""
    return fail()


def bind[T, U](parser: Parser[T], f: Callable[[T], Parser[U]]) -> Parser[U]:
    """Run parser; on success run f(value) on the remainder.

    On failure f is never called and the failure is returned unchanged.

    Example:
        >>> from lexparsec.syntax.parser.primitives import any_char
        >>> twice = bind(any_char(), lambda c: pure(c * 2))
        >>> twice.parse("ab").value
        'aa'
    """

    def run(cursor: Cursor) -> Result[U]:
        match parser(cursor):
            case Success(value, rest):
                return f(value)(rest)
            case Failure() as failure:
                return failure

    return Parser(run, f"bind({parser.name})")


def do(parsers: Sequence[Parser[Any]]) -> Parser[Any]:
    """Run parsers in order on successive remainders; keep the LAST value.

    Fails immediately with the first sub-failure.

    Raises:
        GrammarDefinitionError: If parsers is empty
    """
    steps = tuple(parsers)
    if not steps:
        msg = "do() requires at least one parser"
        raise GrammarDefinitionError(msg)

    def run(cursor: Cursor) -> Result[Any]:
        value: Any = None
        for step in steps:
            match step(cursor):
                case Success(value, rest):
                    cursor = rest
                case Failure() as failure:
                    return failure
        return Success(value, cursor)

    return Parser(run, f"do({', '.join(step.name for step in steps)})")


def sequence(parsers: Sequence[Parser[Any]]) -> Parser[tuple[Any, ...]]:
    """Run parsers in order; succeed with the tuple of ALL values."""
    steps = tuple(parsers)

    def run(cursor: Cursor) -> Result[tuple[Any, ...]]:
        values: list[Any] = []
        for step in steps:
            match step(cursor):
                case Success(value, rest):
                    values.append(value)
                    cursor = rest
                case Failure() as failure:
                    return failure
        return Success(tuple(values), cursor)

    return Parser(run, f"sequence({', '.join(step.name for step in steps)})")


def _to_cursor(source: "str | Cursor | Iterable[str]") -> Cursor:
    if isinstance(source, Cursor):
        return source
    if isinstance(source, str):
        return Cursor(source, 0)
    return Cursor("".join(source), 0)


def parse[T](
    source: "str | Cursor | Iterable[str]",
    parser: Parser[T],
    *,
    max_source_size: int | None = None,
) -> Result[T]:
    """Run parser against source.

    Args:
        source: Input text, a Cursor to resume from, or an iterable of
            characters (joined into a string)
        parser: Parser to run
        max_source_size: Maximum input length in characters (default:
            constants.MAX_SOURCE_SIZE). 0 disables the check.

    Returns:
        Success(value, cursor) or Failure(reason). Never raises for
        malformed input: oversized input and interpreter stack exhaustion
        become SOURCE_TOO_LARGE / DEPTH_EXCEEDED failures.

    Example:
        >>> from lexparsec.syntax.parser.primitives import char
        >>> result = parse("ab", char("a"))
        >>> result.value, result.remaining
        ('a', 'b')
    """
    cursor = _to_cursor(source)
    limit = MAX_SOURCE_SIZE if max_source_size is None else max_source_size
    size = len(cursor.source) - cursor.pos

    if limit > 0 and size > limit:
        logger.warning(
            "Refusing to parse %d characters with %s: limit is %d",
            size,
            parser.name,
            limit,
        )
        return Failure(ErrorTemplate.source_too_large(cursor, size, limit))

    logger.debug("Running %s on %d characters", parser.name, size)
    try:
        result = parser(cursor)
    except RecursionError:
        logger.warning(
            "Recursion limit (%d) exceeded while running %s. "
            "Consider restructuring the grammar with many()/chainl1() "
            "or increasing sys.setrecursionlimit().",
            sys.getrecursionlimit(),
            parser.name,
        )
        return Failure(ErrorTemplate.depth_exceeded(cursor))

    match result:
        case Success(_, rest):
            logger.debug("%s consumed %d characters", parser.name, rest.pos - cursor.pos)
        case Failure(reason):
            logger.debug("%s failed: %s", parser.name, reason.format_error())
    return result
