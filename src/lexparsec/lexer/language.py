"""Declarative language definitions for the lexer layer.

A LanguageDefinition describes the lexical conventions of one grammar:
comment markers, insignificant whitespace, identifier shape, reserved
words and operators, and case sensitivity. It is an explicit value passed
to every lexer-level constructor, never global state, so any number of
grammars can coexist in one process.

Presets:
    EMPTY_DEF       no comments, default whitespace and identifiers
    JAVA_STYLE      /* */ and // comments, non-nesting
    HASKELL_STYLE   {- -} and -- comments, nesting
    LISP_STYLE      #| |# and ; comments, nesting, case-insensitive

Customize a preset with dataclasses.replace(); validation runs again.

Python 3.13+.
"""

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field

from lexparsec.constants import DEFAULT_OP_CHARS, DEFAULT_WHITESPACE
from lexparsec.diagnostics.errors import GrammarDefinitionError

__all__ = [
    "EMPTY_DEF",
    "HASKELL_STYLE",
    "JAVA_STYLE",
    "LISP_STYLE",
    "CharPredicate",
    "LanguageDefinition",
    "chars_predicate",
]

logger = logging.getLogger(__name__)

type CharPredicate = Callable[[str], bool]


def chars_predicate(chars: Iterable[str]) -> CharPredicate:
    """Membership predicate over a fixed character set."""
    members = frozenset(chars)
    return members.__contains__


def _default_ident_start(ch: str) -> bool:
    return ch.isalpha() or ch == "_"


def _default_ident_letter(ch: str) -> bool:
    return ch.isalnum() or ch in ("_", "'")


def _as_predicate(value: CharPredicate | str | Iterable[str]) -> CharPredicate:
    if callable(value):
        return value
    return chars_predicate(value)


@dataclass(frozen=True, slots=True)
class LanguageDefinition:
    """Lexical conventions of a grammar.

    Attributes:
        comment_start: Block comment opener ("" = no block comments)
        comment_end: Block comment closer ("" = no block comments)
        comment_line: Line comment marker ("" = no line comments)
        nested_comments: Whether block comments nest
        whitespace_chars: Characters skipped as insignificant
        ident_start: Predicate (or character set) for an identifier's first char
        ident_letter: Predicate (or character set) for later identifier chars
        op_start: Characters that may begin an operator
        op_letter: Characters usable in operator symbols
        reserved_names: Words that are never identifiers
        reserved_op_names: Operator spellings that are never plain operators
        case_sensitive: Whether identifier/keyword comparison is exact
        name: Display name for logs and parser names

    Reserved names are stored case-folded when case_sensitive is False.

    Raises:
        GrammarDefinitionError: On inconsistent comment markers, an empty
            whitespace set, or non-single-character set members

    Example:
        >>> defn = LanguageDefinition(comment_line="#", reserved_names={"if", "else"})
        >>> defn.is_reserved("if")
        True
    """

    comment_start: str = ""
    comment_end: str = ""
    comment_line: str = ""
    nested_comments: bool = True
    whitespace_chars: frozenset[str] = DEFAULT_WHITESPACE
    ident_start: CharPredicate = _default_ident_start
    ident_letter: CharPredicate = _default_ident_letter
    op_start: frozenset[str] = DEFAULT_OP_CHARS
    op_letter: frozenset[str] = DEFAULT_OP_CHARS
    reserved_names: frozenset[str] = field(default_factory=frozenset)
    reserved_op_names: frozenset[str] = field(default_factory=frozenset)
    case_sensitive: bool = True
    name: str = "language"

    def __post_init__(self) -> None:
        """Normalize field types and validate invariants."""
        if bool(self.comment_start) != bool(self.comment_end):
            msg = (
                f"{self.name}: comment_start and comment_end must both be set or both "
                f"be empty (got {self.comment_start!r}, {self.comment_end!r})"
            )
            raise GrammarDefinitionError(msg)
        if self.nested_comments and self.comment_start and self.comment_start == self.comment_end:
            msg = f"{self.name}: nested block comments need distinct start and end markers"
            raise GrammarDefinitionError(msg)

        for attr in ("whitespace_chars", "op_start", "op_letter"):
            chars = frozenset(getattr(self, attr))
            if any(len(ch) != 1 for ch in chars):
                msg = f"{self.name}: {attr} must contain single characters"
                raise GrammarDefinitionError(msg)
            object.__setattr__(self, attr, chars)
        if not self.whitespace_chars:
            msg = f"{self.name}: whitespace_chars must not be empty"
            raise GrammarDefinitionError(msg)

        object.__setattr__(self, "ident_start", _as_predicate(self.ident_start))
        object.__setattr__(self, "ident_letter", _as_predicate(self.ident_letter))

        reserved = frozenset(self.reserved_names)
        if not self.case_sensitive:
            reserved = frozenset(word.casefold() for word in reserved)
        object.__setattr__(self, "reserved_names", reserved)
        object.__setattr__(self, "reserved_op_names", frozenset(self.reserved_op_names))

        for word in sorted(reserved):
            if not self.is_identifier_shaped(word):
                logger.warning(
                    "%s: reserved name %r is not identifier-shaped and will never match",
                    self.name,
                    word,
                )
        for op in sorted(self.reserved_op_names):
            if not op or any(ch not in self.op_letter for ch in op[1:]) or op[0] not in self.op_start:
                logger.warning(
                    "%s: reserved operator %r is not operator-shaped and will never match",
                    self.name,
                    op,
                )

    def normalize(self, text: str) -> str:
        """Comparison key for identifiers and keywords."""
        return text if self.case_sensitive else text.casefold()

    def is_reserved(self, text: str) -> bool:
        """True if text is a reserved word (respecting case sensitivity)."""
        return self.normalize(text) in self.reserved_names

    def is_reserved_op(self, text: str) -> bool:
        """True if text is a reserved operator."""
        return text in self.reserved_op_names

    def is_identifier_shaped(self, text: str) -> bool:
        """True if text has the form start-char followed by letter-chars."""
        return (
            bool(text)
            and self.ident_start(text[0])
            and all(self.ident_letter(ch) for ch in text[1:])
        )

    @property
    def has_block_comments(self) -> bool:
        return bool(self.comment_start)

    @property
    def has_line_comments(self) -> bool:
        return bool(self.comment_line)


EMPTY_DEF = LanguageDefinition(name="empty")

JAVA_STYLE = LanguageDefinition(
    comment_start="/*",
    comment_end="*/",
    comment_line="//",
    nested_comments=False,
    ident_letter=lambda ch: ch.isalnum() or ch == "_",
    name="java_style",
)

HASKELL_STYLE = LanguageDefinition(
    comment_start="{-",
    comment_end="-}",
    comment_line="--",
    nested_comments=True,
    reserved_names=frozenset(
        {"case", "class", "data", "default", "deriving", "do", "else", "if", "import",
         "in", "infix", "infixl", "infixr", "instance", "let", "module", "newtype",
         "of", "then", "type", "where"}
    ),
    reserved_op_names=frozenset({"::", "..", "=", "\\", "|", "<-", "->", "@", "~", "=>"}),
    name="haskell_style",
)

_LISP_SYMBOL_CHARS = "!$%&*/:<=>?^_~+-."

LISP_STYLE = LanguageDefinition(
    comment_start="#|",
    comment_end="|#",
    comment_line=";",
    nested_comments=True,
    ident_start=lambda ch: ch.isalpha() or ch in _LISP_SYMBOL_CHARS,
    ident_letter=lambda ch: ch.isalnum() or ch in _LISP_SYMBOL_CHARS,
    op_start=frozenset("'`,@"),
    op_letter=frozenset("@"),
    case_sensitive=False,
    name="lisp_style",
)
