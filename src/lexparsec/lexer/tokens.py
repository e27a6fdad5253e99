"""Token-level helpers built on lexeme().

Every helper here consumes trailing whitespace/comments (per the given
LanguageDefinition) after a successful match, so grammars built from them
never mention whitespace except once at the very start of the input.

Helpers:
    identifier      identifier text, reserved words rejected
    reserved        one specific reserved word
    operator        operator text, reserved operators rejected
    reserved_op     one specific reserved operator
    number          [+-]? digits (. digits)? ([eE] [+-]? digits)? -> int | float
    natural         decimal, 0x.., 0o.., 0b.. -> int
    integer         signed natural
    float_          number that must have a fraction or exponent
    string_literal  "..." with escapes decoded
    char_literal    '.' with escapes decoded
    symbol          literal punctuation / operator text

Token stream:
    any_token / tokenize produce Token values tagged with a TokenKind.

Escape Sequences:
    \\n \\t \\r \\b \\f \\0 \\\\ \\" \\'   single characters
    \\uXXXX                      BMP code point (4 hex digits)
    \\UXXXXXX                    any code point (6 hex digits), no surrogates
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from lexparsec.constants import (
    ASCII_DIGITS,
    BIN_DIGITS,
    ESCAPE_SEQUENCES,
    HEX_DIGITS,
    MAX_UNICODE_CODE_POINT,
    OCT_DIGITS,
    SURROGATE_RANGE_END,
    SURROGATE_RANGE_START,
    UNICODE_ESCAPE_LEN_LONG,
    UNICODE_ESCAPE_LEN_SHORT,
)
from lexparsec.diagnostics.templates import ErrorTemplate
from lexparsec.enums import TokenKind
from lexparsec.lexer.language import LanguageDefinition
from lexparsec.lexer.whitespace import lexeme, whitespace
from lexparsec.syntax.cursor import Cursor
from lexparsec.syntax.parser.combinators import (
    between,
    capture,
    choice,
    many_till,
    option,
    sep_by,
    sep_by1,
    skip_many,
)
from lexparsec.syntax.parser.core import Parser, bind, pure, sequence
from lexparsec.syntax.parser.primitives import char, one_of, satisfy, string
from lexparsec.syntax.result import Failure, FailureReason, Result, Success

__all__ = [
    "Token",
    "TokenParser",
    "angles",
    "any_token",
    "braces",
    "brackets",
    "char_literal",
    "colon",
    "comma",
    "comma_sep",
    "comma_sep1",
    "decode_escape",
    "dot",
    "float_",
    "identifier",
    "integer",
    "natural",
    "number",
    "operator",
    "parens",
    "reserved",
    "reserved_op",
    "semi",
    "semi_sep",
    "semi_sep1",
    "string_literal",
    "symbol",
    "tokenize",
]

logger = logging.getLogger(__name__)

# (prefix, digit set, base, expected display) for natural(); prefixes are
# matched case-insensitively
_RADIX_PREFIXES: tuple[tuple[str, str, int, str], ...] = (
    ("0x", HEX_DIGITS, 16, "0-9a-fA-F"),
    ("0o", OCT_DIGITS, 8, "0-7"),
    ("0b", BIN_DIGITS, 2, "0-1"),
)

# Identifier-start characters that begin a number when a digit follows
# (Lisp "-5", "+3", ".5")
_NUMERIC_LEADERS = frozenset("+-.")


@dataclass(frozen=True, slots=True)
class Token:
    """Tagged token produced by any_token()/tokenize().

    Attributes:
        kind: What sort of token this is
        value: Decoded value (str for text tokens, int | float for numbers)
        start: Offset of the token's first character
        end: Offset just past the token (before trailing whitespace)
    """

    kind: TokenKind
    value: Any
    start: int
    end: int


# ============================================================================
# RAW (NON-LEXEME) RECOGNIZERS
# ============================================================================


def _ident_text(defn: LanguageDefinition) -> Parser[str]:
    first = satisfy(defn.ident_start, "identifier")
    rest = skip_many(satisfy(defn.ident_letter, "identifier character"))
    text = capture(first.then(rest))

    def run(cursor: Cursor) -> Result[str]:
        if _numeric_start(defn, cursor):
            return Failure(ErrorTemplate.unexpected_char(cursor, ("identifier",)))
        return text(cursor)

    return Parser(run, "identifier text")


def _op_text(defn: LanguageDefinition) -> Parser[str]:
    first = satisfy(defn.op_start.__contains__, "operator")
    rest = skip_many(satisfy(defn.op_letter.__contains__, "operator character"))
    return capture(first.then(rest)).named("operator text")


def _required_digits(digits: str, detail: str) -> Parser[str]:
    """One or more of digits; absence is a MALFORMED_NUMBER failure."""

    def run(cursor: Cursor) -> Result[str]:
        end = cursor.skip_while(digits)
        if end.pos == cursor.pos:
            return Failure(ErrorTemplate.malformed_number(cursor, detail))
        return Success(cursor.slice_to(end.pos), end)

    return Parser(run, "digits")


def _number_text(*, signed: bool) -> Parser[tuple[str, bool]]:
    """Numeric literal text plus whether it is floating-point.

    Once a '.' or exponent marker is seen its digits are mandatory: the
    whole literal fails rather than falling back to a shorter number.
    """
    sign = option("", one_of("+-")) if signed else pure("")
    integral = _required_digits(ASCII_DIGITS, "expected digits")

    def assemble(parts: tuple[Any, ...]) -> tuple[str, bool]:
        sign_text, int_text, frac_text, exp_text = parts
        return sign_text + int_text + frac_text + exp_text, bool(frac_text or exp_text)

    return sequence([sign, integral, _fraction_text(), _exponent_text()]).map(assemble).named("number")


def _fraction_text() -> Parser[str]:
    """'.' and its digits, or "" when there is no '.'."""
    return bind(
        option("", char(".")),
        lambda dot: (
            _required_digits(ASCII_DIGITS, "expected digits after '.'").map(lambda d: "." + d)
            if dot
            else pure("")
        ),
    )


def _exponent_text() -> Parser[str]:
    """Exponent marker, optional sign and digits, or "" when absent."""
    return bind(
        option("", one_of("eE")),
        lambda e: (
            sequence(
                [option("", one_of("+-")), _required_digits(ASCII_DIGITS, "expected exponent digits")]
            ).map(lambda parts: e + "".join(parts))
            if e
            else pure("")
        ),
    )


def _bare_fraction_text() -> Parser[tuple[str, bool]]:
    """Float with no integral digits (".5", ".5e3"), read as "0.5"."""
    return (
        sequence([_fraction_text(), _exponent_text()])
        .map(lambda parts: ("0" + "".join(parts), True))
        .named("number")
    )


def _numeric_start(defn: LanguageDefinition, cursor: Cursor) -> bool:
    """True where an identifier-start character actually begins a number.

    Only relevant to languages whose identifiers may start with a sign or
    dot (LISP_STYLE): "-5" is a number there, "-" and "-x" are symbols.
    """
    ch = cursor.head
    nxt = cursor.peek(1)
    return (
        ch is not None
        and ch in _NUMERIC_LEADERS
        and nxt is not None
        and nxt in ASCII_DIGITS
        and defn.ident_start(ch)
    )


def _number_value(text_and_kind: tuple[str, bool]) -> int | float:
    text, is_float = text_and_kind
    return float(text) if is_float else int(text)


def _natural_raw() -> Parser[int]:
    def run(cursor: Cursor) -> Result[int]:
        for prefix, digits, base, display in _RADIX_PREFIXES:
            if cursor.startswith(prefix, case_sensitive=False):
                body = cursor.advance(len(prefix))
                end = body.skip_while(digits)
                if end.pos == body.pos:
                    return Failure(
                        ErrorTemplate.malformed_number(
                            body, f"expected base-{base} digits after {prefix!r}", (display,)
                        )
                    )
                return Success(int(body.slice_to(end.pos), base), end)
        end = cursor.skip_while(ASCII_DIGITS)
        if end.pos == cursor.pos:
            return Failure(ErrorTemplate.unexpected_char(cursor, ("digit",)))
        return Success(int(cursor.slice_to(end.pos)), end)

    return Parser(run, "natural")


def decode_escape(cursor: Cursor) -> tuple[str, Cursor] | FailureReason:
    """Decode the escape sequence starting just AFTER a backslash.

    Returns:
        (decoded character, cursor after the sequence), or the reason the
        sequence is invalid
    """
    if cursor.is_eof:
        return ErrorTemplate.unterminated_string(cursor, "\\")

    escape_ch = cursor.current
    if escape_ch in ESCAPE_SEQUENCES:
        return (ESCAPE_SEQUENCES[escape_ch], cursor.advance())

    if escape_ch in ("u", "U"):
        length = UNICODE_ESCAPE_LEN_SHORT if escape_ch == "u" else UNICODE_ESCAPE_LEN_LONG
        body = cursor.advance()
        hex_digits = body.slice_ahead(length)
        if len(hex_digits) < length or not all(c in HEX_DIGITS for c in hex_digits):
            return ErrorTemplate.malformed_escape(
                body, f"\\{escape_ch} needs {length} hex digits"
            )
        code_point = int(hex_digits, 16)
        if code_point > MAX_UNICODE_CODE_POINT:
            return ErrorTemplate.malformed_escape(
                body, f"U+{hex_digits} is beyond U+10FFFF"
            )
        if SURROGATE_RANGE_START <= code_point <= SURROGATE_RANGE_END:
            return ErrorTemplate.malformed_escape(
                body, f"U+{hex_digits} is a surrogate code point"
            )
        return (chr(code_point), body.advance(length))

    return ErrorTemplate.malformed_escape(cursor, f"\\{escape_ch}")


def _literal_char(quote: str) -> Parser[str]:
    """One (possibly escaped) character inside a quoted literal."""

    def run(cursor: Cursor) -> Result[str]:
        if cursor.is_eof:
            return Failure(ErrorTemplate.unterminated_string(cursor, quote))
        ch = cursor.current
        if ch != "\\":
            return Success(ch, cursor.advance())
        decoded = decode_escape(cursor.advance())
        if isinstance(decoded, FailureReason):
            return Failure(decoded)
        return Success(decoded[0], decoded[1])

    return Parser(run, "literal character")


def _string_raw(quote: str) -> Parser[str]:
    body = many_till(_literal_char(quote), char(quote))
    return char(quote).then(body).map("".join).named("string literal")


def _char_raw() -> Parser[str]:
    return between(char("'"), char("'"), _literal_char("'")).named("character literal")


# ============================================================================
# LEXEME HELPERS
# ============================================================================


def identifier(defn: LanguageDefinition) -> Parser[str]:
    """Identifier text; fails with RESERVED_WORD on a reserved word.

    Example:
        >>> from lexparsec.lexer.language import LanguageDefinition
        >>> defn = LanguageDefinition(reserved_names={"if"})
        >>> identifier(defn).parse("iffy x").value
        'iffy'
        >>> bool(identifier(defn).parse("if x"))
        False
    """
    raw = _ident_text(defn)

    def run(cursor: Cursor) -> Result[str]:
        match raw(cursor):
            case Success(text, _) if defn.is_reserved(text):
                return Failure(ErrorTemplate.reserved_word(cursor, text))
            case result:
                return result

    return lexeme(defn, Parser(run, "identifier"))


def reserved(defn: LanguageDefinition, name: str) -> Parser[str]:
    """The reserved word name, as a whole identifier-shaped token.

    "let" does not match the start of "letter". Comparison follows
    defn.case_sensitive; the value is the text as written in the input.
    """
    raw = _ident_text(defn)
    key = defn.normalize(name)

    def run(cursor: Cursor) -> Result[str]:
        match raw(cursor):
            case Success(text, _) as success if defn.normalize(text) == key:
                return success
            case Success(text, _):
                return Failure(ErrorTemplate.wrong_word(cursor, name, text))
            case Failure():
                return Failure(ErrorTemplate.unexpected_char(cursor, (repr(name),)))

    return lexeme(defn, Parser(run, f"reserved({name!r})"))


def operator(defn: LanguageDefinition) -> Parser[str]:
    """Operator text built from defn's operator characters, not reserved."""
    raw = _op_text(defn)

    def run(cursor: Cursor) -> Result[str]:
        match raw(cursor):
            case Success(text, _) if defn.is_reserved_op(text):
                return Failure(ErrorTemplate.reserved_operator(cursor, text))
            case result:
                return result

    return lexeme(defn, Parser(run, "operator"))


def reserved_op(defn: LanguageDefinition, name: str) -> Parser[str]:
    """The reserved operator name, as a whole operator-shaped token.

    "=" does not match the start of "==".
    """
    raw = _op_text(defn)

    def run(cursor: Cursor) -> Result[str]:
        match raw(cursor):
            case Success(text, _) as success if text == name:
                return success
            case Success(text, _):
                return Failure(ErrorTemplate.wrong_word(cursor, name, text))
            case Failure():
                return Failure(ErrorTemplate.unexpected_char(cursor, (repr(name),)))

    return lexeme(defn, Parser(run, f"reserved_op({name!r})"))


def number(defn: LanguageDefinition, *, signed: bool = True) -> Parser[int | float]:
    """Numeric literal: int without fraction/exponent, float otherwise.

    Example:
        >>> from lexparsec.lexer.language import EMPTY_DEF
        >>> result = number(EMPTY_DEF).parse("10+20")
        >>> result.value, result.remaining
        (10, '+20')
        >>> number(EMPTY_DEF).parse("-2.5e3").value
        -2500.0
    """
    return lexeme(defn, _number_text(signed=signed).map(_number_value).named("number"))


def natural(defn: LanguageDefinition) -> Parser[int]:
    """Non-negative integer: decimal, or 0x / 0o / 0b prefixed."""
    return lexeme(defn, _natural_raw())


def integer(defn: LanguageDefinition) -> Parser[int]:
    """Optionally signed natural; the sign may be followed by whitespace."""
    sign = lexeme(defn, option("", one_of("+-")))
    return bind(sign, lambda s: natural(defn).map(lambda n: -n if s == "-" else n)).named("integer")


def float_(defn: LanguageDefinition) -> Parser[float]:
    """Numeric literal that has a fraction or exponent."""
    raw = _number_text(signed=True)

    def run(cursor: Cursor) -> Result[float]:
        match raw(cursor):
            case Success((text, True), rest):
                return Success(float(text), rest)
            case Success():
                return Failure(ErrorTemplate.malformed_number(cursor, "expected fraction or exponent"))
            case Failure() as failure:
                return failure

    return lexeme(defn, Parser(run, "float"))


def string_literal(defn: LanguageDefinition, quote: str = '"') -> Parser[str]:
    """Quoted string with escapes decoded.

    Input exhausted before the closing quote is an UNTERMINATED_STRING
    failure; an unknown escape is MALFORMED_ESCAPE.
    """
    return lexeme(defn, _string_raw(quote))


def char_literal(defn: LanguageDefinition) -> Parser[str]:
    """Single-quoted character with escapes decoded."""
    return lexeme(defn, _char_raw())


def symbol(defn: LanguageDefinition, text: str) -> Parser[str]:
    """Literal operator or punctuation text, then trailing whitespace.

    Text is matched as written; it is not checked for a delimiter, so
    symbol(defn, "=") also matches the start of "==". Text that starts
    like an operator but leaves defn's operator characters is logged,
    since operator() and tokenize() would split it differently.
    """
    if text and text[0] in defn.op_start and any(ch not in defn.op_letter for ch in text[1:]):
        logger.warning(
            "%s: symbol %r mixes operator and non-operator characters",
            defn.name,
            text,
        )
    return lexeme(defn, string(text))


def parens[T](defn: LanguageDefinition, parser: Parser[T]) -> Parser[T]:
    """parser between '(' and ')'."""
    return between(symbol(defn, "("), symbol(defn, ")"), parser)


def braces[T](defn: LanguageDefinition, parser: Parser[T]) -> Parser[T]:
    """parser between '{' and '}'."""
    return between(symbol(defn, "{"), symbol(defn, "}"), parser)


def brackets[T](defn: LanguageDefinition, parser: Parser[T]) -> Parser[T]:
    """parser between '[' and ']'."""
    return between(symbol(defn, "["), symbol(defn, "]"), parser)


def angles[T](defn: LanguageDefinition, parser: Parser[T]) -> Parser[T]:
    """parser between '<' and '>'."""
    return between(symbol(defn, "<"), symbol(defn, ">"), parser)


def semi(defn: LanguageDefinition) -> Parser[str]:
    return symbol(defn, ";")


def comma(defn: LanguageDefinition) -> Parser[str]:
    return symbol(defn, ",")


def colon(defn: LanguageDefinition) -> Parser[str]:
    return symbol(defn, ":")


def dot(defn: LanguageDefinition) -> Parser[str]:
    return symbol(defn, ".")


def comma_sep[T](defn: LanguageDefinition, parser: Parser[T]) -> Parser[list[T]]:
    return sep_by(parser, comma(defn))


def comma_sep1[T](defn: LanguageDefinition, parser: Parser[T]) -> Parser[list[T]]:
    return sep_by1(parser, comma(defn))


def semi_sep[T](defn: LanguageDefinition, parser: Parser[T]) -> Parser[list[T]]:
    return sep_by(parser, semi(defn))


def semi_sep1[T](defn: LanguageDefinition, parser: Parser[T]) -> Parser[list[T]]:
    return sep_by1(parser, semi(defn))


# ============================================================================
# TOKEN STREAM
# ============================================================================


def _tagged(kind: TokenKind | Callable[[Any], TokenKind], raw: Parser[Any]) -> Parser[Token]:
    def run(cursor: Cursor) -> Result[Token]:
        match raw(cursor):
            case Success(value, rest):
                tag = kind(value) if callable(kind) else kind
                return Success(Token(tag, value, cursor.pos, rest.pos), rest)
            case Failure() as failure:
                return failure

    return Parser(run, f"token({raw.name})")


def any_token(defn: LanguageDefinition) -> Parser[Token]:
    """One Token of any kind, then trailing whitespace.

    Dispatch is on the first character, so a malformed literal is reported
    as such instead of being re-read as punctuation:
        digit          NUMBER (unsigned; a sign is an operator token;
                       0x / 0o / 0b prefixes read as natural())
        [+-.] digit    NUMBER, only where the sign or dot may start an
                       identifier (LISP_STYLE "-5", ".5")
        '"'            STRING
        ident start    IDENTIFIER or RESERVED
        operator start OPERATOR or RESERVED_OP
        "'"            CHAR, falling back to operator/symbol
        other          single-character SYMBOL
    """
    number_tok = _tagged(TokenKind.NUMBER, _number_text(signed=False).map(_number_value))
    radix_tok = _tagged(TokenKind.NUMBER, _natural_raw())
    signed_tok = _tagged(TokenKind.NUMBER, _number_text(signed=True).map(_number_value))
    bare_fraction_tok = _tagged(TokenKind.NUMBER, _bare_fraction_text().map(_number_value))
    string_tok = _tagged(TokenKind.STRING, _string_raw('"'))
    char_tok = _tagged(TokenKind.CHAR, _char_raw())
    ident_tok = _tagged(
        lambda text: TokenKind.RESERVED if defn.is_reserved(text) else TokenKind.IDENTIFIER,
        _ident_text(defn),
    )
    op_tok = _tagged(
        lambda text: TokenKind.RESERVED_OP if defn.is_reserved_op(text) else TokenKind.OPERATOR,
        _op_text(defn),
    )
    symbol_tok = _tagged(TokenKind.SYMBOL, satisfy(lambda ch: True, "symbol"))
    quote_tok = choice([char_tok, op_tok, symbol_tok])

    def run(cursor: Cursor) -> Result[Token]:
        ch = cursor.head
        if ch is None:
            return Failure(ErrorTemplate.unexpected_eof(cursor, ("token",)))
        if ch in ASCII_DIGITS:
            radix = any(cursor.startswith(p, case_sensitive=False) for p, *_ in _RADIX_PREFIXES)
            selected = radix_tok if radix else number_tok
        elif _numeric_start(defn, cursor):
            selected = bare_fraction_tok if ch == "." else signed_tok
        elif ch == '"':
            selected = string_tok
        elif ch == "'":
            selected = quote_tok
        elif defn.ident_start(ch):
            selected = ident_tok
        elif ch in defn.op_start:
            selected = op_tok
        else:
            selected = symbol_tok
        return selected(cursor)

    return lexeme(defn, Parser(run, "any_token"))


def tokenize(defn: LanguageDefinition) -> Parser[list[Token]]:
    """Leading whitespace, then Tokens up to end of input.

    The first token failure (unterminated string or comment, malformed
    number) is the overall failure.

    Example:
        >>> from lexparsec.lexer.language import JAVA_STYLE
        >>> tokens = tokenize(JAVA_STYLE).parse("x = 42; // done").value
        >>> [(t.kind.value, t.value) for t in tokens]
        [('identifier', 'x'), ('operator', '='), ('number', 42), ('symbol', ';')]
    """
    leading = whitespace(defn)
    token = any_token(defn)

    def run(cursor: Cursor) -> Result[list[Token]]:
        match leading(cursor):
            case Success(_, rest):
                cursor = rest
            case Failure() as failure:
                return failure
        tokens: list[Token] = []
        while not cursor.is_eof:
            match token(cursor):
                case Success(tok, rest):
                    tokens.append(tok)
                    cursor = rest
                case Failure() as failure:
                    return failure
        return Success(tokens, cursor)

    return Parser(run, f"tokenize({defn.name})")


# ============================================================================
# BUNDLED TOKEN PARSER
# ============================================================================


@dataclass(frozen=True, slots=True)
class TokenParser:
    """Token helpers pre-bound to one LanguageDefinition.

    Example:
        >>> from lexparsec.lexer.language import HASKELL_STYLE
        >>> tok = TokenParser(HASKELL_STYLE)
        >>> tok.parens(tok.identifier()).parse("( x ) -- done").value
        'x'
    """

    defn: LanguageDefinition

    def whitespace(self) -> Parser[None]:
        return whitespace(self.defn)

    def lexeme[T](self, parser: Parser[T]) -> Parser[T]:
        return lexeme(self.defn, parser)

    def identifier(self) -> Parser[str]:
        return identifier(self.defn)

    def reserved(self, name: str) -> Parser[str]:
        return reserved(self.defn, name)

    def operator(self) -> Parser[str]:
        return operator(self.defn)

    def reserved_op(self, name: str) -> Parser[str]:
        return reserved_op(self.defn, name)

    def number(self, *, signed: bool = True) -> Parser[int | float]:
        return number(self.defn, signed=signed)

    def natural(self) -> Parser[int]:
        return natural(self.defn)

    def integer(self) -> Parser[int]:
        return integer(self.defn)

    def float_(self) -> Parser[float]:
        return float_(self.defn)

    def string_literal(self, quote: str = '"') -> Parser[str]:
        return string_literal(self.defn, quote)

    def char_literal(self) -> Parser[str]:
        return char_literal(self.defn)

    def symbol(self, text: str) -> Parser[str]:
        return symbol(self.defn, text)

    def parens[T](self, parser: Parser[T]) -> Parser[T]:
        return parens(self.defn, parser)

    def braces[T](self, parser: Parser[T]) -> Parser[T]:
        return braces(self.defn, parser)

    def brackets[T](self, parser: Parser[T]) -> Parser[T]:
        return brackets(self.defn, parser)

    def comma_sep[T](self, parser: Parser[T]) -> Parser[list[T]]:
        return comma_sep(self.defn, parser)

    def semi_sep[T](self, parser: Parser[T]) -> Parser[list[T]]:
        return semi_sep(self.defn, parser)

    def tokenize(self) -> Parser[list[Token]]:
        return tokenize(self.defn)
