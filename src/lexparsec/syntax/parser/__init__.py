"""Combinator engine.

Module Organization:
- core.py: Parser abstraction, pure/fail/bind/do, lazy/forward, parse() driver
- primitives.py: Character-level consumers (any_char, one_of, string, eof, ...)
- combinators.py: Choice, repetition, separation, capture

Public API:
    Parser: Parser value type
    parse: Run a parser against an input
    (plus every constructor listed in the submodules' __all__)
"""

from lexparsec.syntax.parser.combinators import (
    attempt,
    between,
    capture,
    chainl1,
    chainr1,
    choice,
    count,
    end_by,
    end_by1,
    look_ahead,
    many,
    many1,
    many1_till,
    many_till,
    not_followed_by,
    option,
    optional,
    parse_all,
    sep_by,
    sep_by1,
    sep_end_by,
    sep_end_by1,
    skip_many,
    skip_many1,
)
from lexparsec.syntax.parser.core import (
    Forward,
    Parser,
    bind,
    do,
    fail,
    forward,
    lazy,
    parse,
    pure,
    pzero,
    return_,
    sequence,
)
from lexparsec.syntax.parser.primitives import (
    EOF,
    EndOfInput,
    alpha_num,
    any_char,
    char,
    digit,
    eof,
    hex_digit,
    letter,
    newline,
    none_of,
    oct_digit,
    one_of,
    regex,
    satisfy,
    space,
    spaces,
    string,
)

__all__ = [
    "EOF",
    "EndOfInput",
    "Forward",
    "Parser",
    "alpha_num",
    "any_char",
    "attempt",
    "between",
    "bind",
    "capture",
    "chainl1",
    "chainr1",
    "char",
    "choice",
    "count",
    "digit",
    "do",
    "end_by",
    "end_by1",
    "eof",
    "fail",
    "forward",
    "hex_digit",
    "lazy",
    "letter",
    "look_ahead",
    "many",
    "many1",
    "many1_till",
    "many_till",
    "newline",
    "none_of",
    "not_followed_by",
    "oct_digit",
    "one_of",
    "option",
    "optional",
    "parse",
    "parse_all",
    "pure",
    "pzero",
    "regex",
    "return_",
    "satisfy",
    "sep_by",
    "sep_by1",
    "sep_end_by",
    "sep_end_by1",
    "sequence",
    "skip_many",
    "skip_many1",
    "space",
    "spaces",
    "string",
]
