"""Layered lexer: language definitions, whitespace handling, token helpers.

Module Organization:
- language.py: LanguageDefinition and the EMPTY_DEF / JAVA_STYLE /
  HASKELL_STYLE / LISP_STYLE presets
- whitespace.py: whitespace() and lexeme(), comment skipping
- tokens.py: identifier, reserved, operator, number, string_literal, ...
  plus the Token stream (any_token, tokenize) and the TokenParser bundle

Every helper takes the LanguageDefinition explicitly; there is no global
lexer state.
"""

from .language import (
    EMPTY_DEF,
    HASKELL_STYLE,
    JAVA_STYLE,
    LISP_STYLE,
    CharPredicate,
    LanguageDefinition,
    chars_predicate,
)
from .tokens import (
    Token,
    TokenParser,
    angles,
    any_token,
    braces,
    brackets,
    char_literal,
    colon,
    comma,
    comma_sep,
    comma_sep1,
    decode_escape,
    dot,
    float_,
    identifier,
    integer,
    natural,
    number,
    operator,
    parens,
    reserved,
    reserved_op,
    semi,
    semi_sep,
    semi_sep1,
    string_literal,
    symbol,
    tokenize,
)
from .whitespace import lexeme, skip_block_comment, skip_line_comment, whitespace

__all__ = [
    "EMPTY_DEF",
    "HASKELL_STYLE",
    "JAVA_STYLE",
    "LISP_STYLE",
    "CharPredicate",
    "LanguageDefinition",
    "Token",
    "TokenParser",
    "angles",
    "any_token",
    "braces",
    "brackets",
    "char_literal",
    "chars_predicate",
    "colon",
    "comma",
    "comma_sep",
    "comma_sep1",
    "decode_escape",
    "dot",
    "float_",
    "identifier",
    "integer",
    "lexeme",
    "natural",
    "number",
    "operator",
    "parens",
    "reserved",
    "reserved_op",
    "semi",
    "semi_sep",
    "semi_sep1",
    "skip_block_comment",
    "skip_line_comment",
    "string_literal",
    "symbol",
    "tokenize",
    "whitespace",
]
