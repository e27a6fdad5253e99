"""Primitive character-level parsers.

Every other combinator is built from these plus bind/pure/fail. Each
primitive inspects at most the characters it consumes and never mutates
its input cursor.

Examples:
    any_char()        next character, fails at end of input
    one_of("+-")      next character if it is '+' or '-'
    none_of("\\"")     next character unless it is a double quote
    string("let")     exact literal text
    eof()             succeeds with EOF only at end of input
"""

import re
from collections.abc import Callable, Iterable
from enum import Enum

from lexparsec.constants import ASCII_DIGITS, DEFAULT_WHITESPACE, HEX_DIGITS, OCT_DIGITS
from lexparsec.diagnostics.errors import GrammarDefinitionError
from lexparsec.diagnostics.templates import ErrorTemplate
from lexparsec.syntax.cursor import Cursor
from lexparsec.syntax.parser.core import Parser
from lexparsec.syntax.result import Failure, Result, Success

__all__ = [
    "EOF",
    "EndOfInput",
    "alpha_num",
    "any_char",
    "char",
    "digit",
    "eof",
    "hex_digit",
    "letter",
    "newline",
    "none_of",
    "oct_digit",
    "one_of",
    "regex",
    "satisfy",
    "space",
    "spaces",
    "string",
]


class EndOfInput(Enum):
    """Sentinel type for the value produced by eof()."""

    EOF = "EOF"

    def __repr__(self) -> str:
        return "EOF"


EOF = EndOfInput.EOF


def _charset_label(chars: str) -> str:
    return f"one of {chars!r}"


def satisfy(predicate: Callable[[str], bool], expected: str = "matching character") -> Parser[str]:
    """Consume the next character if predicate accepts it.

    Args:
        predicate: Test applied to the next character
        expected: Description used in the failure reason
    """

    def run(cursor: Cursor) -> Result[str]:
        ch = cursor.head
        if ch is not None and predicate(ch):
            return Success(ch, cursor.advance())
        return Failure(ErrorTemplate.predicate_rejected(cursor, (expected,)))

    return Parser(run, f"satisfy({expected})")


def any_char() -> Parser[str]:
    """Consume any single character; fail only at end of input."""

    def run(cursor: Cursor) -> Result[str]:
        if cursor.is_eof:
            return Failure(ErrorTemplate.unexpected_eof(cursor, ("any character",)))
        return Success(cursor.current, cursor.advance())

    return Parser(run, "any_char")


def char(c: str) -> Parser[str]:
    """Consume exactly the character c.

    Raises:
        GrammarDefinitionError: If c is not a single character
    """
    if len(c) != 1:
        msg = f"char() expects a single character, got {c!r}"
        raise GrammarDefinitionError(msg)
    expected = (repr(c),)

    def run(cursor: Cursor) -> Result[str]:
        if cursor.head == c:
            return Success(c, cursor.advance())
        return Failure(ErrorTemplate.unexpected_char(cursor, expected))

    return Parser(run, f"char({c!r})")


def one_of(chars: Iterable[str]) -> Parser[str]:
    """Consume the next character if it is a member of chars."""
    display = "".join(chars) if not isinstance(chars, str) else chars
    members = frozenset(display)
    expected = (_charset_label(display),)

    def run(cursor: Cursor) -> Result[str]:
        ch = cursor.head
        if ch is not None and ch in members:
            return Success(ch, cursor.advance())
        return Failure(ErrorTemplate.unexpected_char(cursor, expected))

    return Parser(run, f"one_of({display!r})")


def none_of(chars: Iterable[str]) -> Parser[str]:
    """Consume the next character if it is NOT a member of chars.

    Fails at end of input.
    """
    display = "".join(chars) if not isinstance(chars, str) else chars
    members = frozenset(display)
    expected = (f"none of {display!r}",)

    def run(cursor: Cursor) -> Result[str]:
        ch = cursor.head
        if ch is not None and ch not in members:
            return Success(ch, cursor.advance())
        return Failure(ErrorTemplate.unexpected_char(cursor, expected))

    return Parser(run, f"none_of({display!r})")


def string(text: str, *, case_sensitive: bool = True) -> Parser[str]:
    """Consume the literal text.

    With case_sensitive=False the input may differ in case; the value is
    the text as it appears in the INPUT.

    Raises:
        GrammarDefinitionError: If text is empty
    """
    if not text:
        msg = "string() expects a non-empty literal"
        raise GrammarDefinitionError(msg)
    expected = (repr(text),)

    def run(cursor: Cursor) -> Result[str]:
        if cursor.startswith(text, case_sensitive=case_sensitive):
            matched = cursor.slice_ahead(len(text))
            return Success(matched, cursor.advance(len(text)))
        # Report at the first mismatching character
        offset = 0
        while offset < len(text):
            ch = cursor.peek(offset)
            if ch is None:
                break
            if case_sensitive and ch != text[offset]:
                break
            if not case_sensitive and ch.casefold() != text[offset].casefold():
                break
            offset += 1
        return Failure(ErrorTemplate.unexpected_char(cursor.advance(offset), expected))

    return Parser(run, f"string({text!r})")


def eof() -> Parser[EndOfInput]:
    """Succeed with EOF at end of input; never consumes."""

    def run(cursor: Cursor) -> Result[EndOfInput]:
        if cursor.is_eof:
            return Success(EOF, cursor)
        return Failure(ErrorTemplate.expected_eof(cursor))

    return Parser(run, "eof")


def regex(pattern: str | re.Pattern[str], flags: int = 0) -> Parser[str]:
    """Match a regular expression anchored at the cursor; value is the match.

    A zero-length match succeeds without consuming.
    """
    compiled = re.compile(pattern, flags) if isinstance(pattern, str) else pattern
    expected = (f"/{compiled.pattern}/",)

    def run(cursor: Cursor) -> Result[str]:
        match_obj = compiled.match(cursor.source, cursor.pos)
        if match_obj is None:
            return Failure(ErrorTemplate.unexpected_char(cursor, expected))
        return Success(match_obj.group(0), Cursor(cursor.source, match_obj.end()))

    return Parser(run, f"regex({compiled.pattern!r})")


def digit() -> Parser[str]:
    """ASCII decimal digit."""
    return one_of(ASCII_DIGITS).named("digit")


def hex_digit() -> Parser[str]:
    """Hexadecimal digit (either case)."""
    return one_of(HEX_DIGITS).named("hex_digit")


def oct_digit() -> Parser[str]:
    """Octal digit."""
    return one_of(OCT_DIGITS).named("oct_digit")


def letter() -> Parser[str]:
    """Unicode letter (str.isalpha)."""
    return satisfy(str.isalpha, "letter")


def alpha_num() -> Parser[str]:
    """Unicode letter or digit (str.isalnum)."""
    return satisfy(str.isalnum, "letter or digit")


def space() -> Parser[str]:
    """One whitespace character from the default whitespace set."""
    return satisfy(DEFAULT_WHITESPACE.__contains__, "whitespace")


def newline() -> Parser[str]:
    """A single '\\n'."""
    return char("\n")


def spaces() -> Parser[None]:
    """Skip zero or more default whitespace characters; never fails."""

    def run(cursor: Cursor) -> Result[None]:
        return Success(None, cursor.skip_while(DEFAULT_WHITESPACE))

    return Parser(run, "spaces")
