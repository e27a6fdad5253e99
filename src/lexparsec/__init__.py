"""lexparsec - Parsec-style parser combinators with a layered lexer.

Parsers are immutable values wrapping a function from an input Cursor to a
Result. Small primitives (any_char, one_of, string, eof) compose through
bind/do/choice/many into full grammars; the lexer layer adds token-level
helpers driven by a declarative LanguageDefinition.

Public API:
    Parser - Parser value type; combine with |, >>, <<, .map, .bind
    parse - Run a parser against a string (never raises on bad input)
    parse_all - parse(), requiring all input to be consumed
    Success / Failure / FailureReason - Result algebra
    LanguageDefinition - Lexical conventions (comments, identifiers, keywords)
    TokenParser - Token helpers bound to one LanguageDefinition

Exceptions:
    LexParsecError - Base exception class
    ParseFailedError - Raised by Failure.unwrap()
    GrammarDefinitionError - Invalid grammar construction

Submodules:
    lexparsec.syntax.parser - Full combinator library
    lexparsec.lexer - Language definitions and token helpers
    lexparsec.diagnostics - Failure codes, templates and formatting
"""

# Essential Public API
from .enums import OutputFormat, TokenKind
from .diagnostics import (
    FailureCode,
    FailureFormatter,
    GrammarDefinitionError,
    LexParsecError,
    ParseFailedError,
)
from .lexer import (
    EMPTY_DEF,
    HASKELL_STYLE,
    JAVA_STYLE,
    LISP_STYLE,
    LanguageDefinition,
    Token,
    TokenParser,
    lexeme,
    whitespace,
)
from .syntax import Cursor, Failure, FailureReason, Result, Success
from .syntax.parser import EOF, Parser, parse, parse_all

# Version information - Auto-populated from package metadata
# SINGLE SOURCE OF TRUTH: pyproject.toml [project] version
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _get_version

try:
    __version__ = _get_version("lexparsec")
except PackageNotFoundError:
    # Development mode: package not installed yet
    __version__ = "0.0.0+dev"

__all__ = [
    "EMPTY_DEF",
    "EOF",
    "HASKELL_STYLE",
    "JAVA_STYLE",
    "LISP_STYLE",
    "Cursor",
    "Failure",
    "FailureCode",
    "FailureFormatter",
    "FailureReason",
    "GrammarDefinitionError",
    "LanguageDefinition",
    "LexParsecError",
    "OutputFormat",
    "ParseFailedError",
    "Parser",
    "Result",
    "Success",
    "Token",
    "TokenKind",
    "TokenParser",
    "__version__",
    "lexeme",
    "parse",
    "parse_all",
    "whitespace",
]
