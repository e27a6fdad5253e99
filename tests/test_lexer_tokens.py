"""Tests for the token-level helpers and the token stream."""

from __future__ import annotations

import logging

import pytest
from hypothesis import event, given
from hypothesis import strategies as st

from lexparsec.diagnostics import FailureCode
from lexparsec.enums import TokenKind
from lexparsec.lexer.language import (
    EMPTY_DEF,
    HASKELL_STYLE,
    JAVA_STYLE,
    LISP_STYLE,
    LanguageDefinition,
)
from lexparsec.lexer.tokens import (
    Token,
    TokenParser,
    angles,
    any_token,
    braces,
    brackets,
    char_literal,
    comma_sep,
    comma_sep1,
    decode_escape,
    float_,
    identifier,
    integer,
    natural,
    number,
    operator,
    parens,
    reserved,
    reserved_op,
    semi_sep,
    semi_sep1,
    string_literal,
    symbol,
    tokenize,
)
from lexparsec.syntax.cursor import Cursor
from lexparsec.syntax.result import Failure, FailureReason

KEYWORDS = LanguageDefinition(
    comment_line="#",
    reserved_names=frozenset({"if", "then", "else"}),
    reserved_op_names=frozenset({"=", "->"}),
    name="keywords",
)

# ============================================================================
# IDENTIFIERS AND RESERVED WORDS
# ============================================================================


class TestIdentifier:
    """Test identifier() and reserved()."""

    def test_identifier_with_trailing_whitespace(self) -> None:
        """identifier consumes the name and trailing whitespace."""
        result = identifier(KEYWORDS).parse("count_1  # note\n+")

        assert result.value == "count_1"
        assert result.remaining == "+"

    def test_identifier_rejects_reserved_word(self) -> None:
        """A reserved word is not an identifier."""
        result = identifier(KEYWORDS).parse("if x")

        assert isinstance(result, Failure)
        assert result.reason.code is FailureCode.RESERVED_WORD
        assert result.reason.pos == 0

    def test_identifier_with_reserved_prefix(self) -> None:
        """A word that merely starts with a reserved word is fine."""
        assert identifier(KEYWORDS).parse("iffy").value == "iffy"

    def test_identifier_must_start_correctly(self) -> None:
        """Digits cannot start an identifier."""
        assert not identifier(KEYWORDS).parse("1abc")

    def test_reserved(self) -> None:
        """reserved matches the whole word."""
        result = reserved(KEYWORDS, "then").parse("then 1")

        assert result.value == "then"
        assert result.remaining == "1"

    def test_reserved_is_not_a_prefix_match(self) -> None:
        """'if' does not match the start of 'iffy'."""
        result = reserved(KEYWORDS, "if").parse("iffy")

        assert isinstance(result, Failure)
        assert result.reason.expected == ("'if'",)

    def test_reserved_on_non_identifier(self) -> None:
        """Input that is not identifier-shaped fails."""
        assert not reserved(KEYWORDS, "if").parse("(if)")

    def test_case_insensitive_reserved(self) -> None:
        """Case-insensitive languages match reserved words in any case."""
        defn = LanguageDefinition(reserved_names=frozenset({"define"}), case_sensitive=False)

        assert reserved(defn, "define").parse("DEFINE x").value == "DEFINE"
        assert not identifier(defn).parse("Define")

    def test_lisp_identifiers(self) -> None:
        """LISP_STYLE identifiers include symbol characters."""
        assert identifier(LISP_STYLE).parse("set-car! x").value == "set-car!"

    def test_lisp_signed_number_is_not_identifier(self) -> None:
        """A sign or dot followed by a digit starts a number, not an identifier."""
        for source in ("-5", "+3", ".5"):
            result = identifier(LISP_STYLE).parse(source)

            assert isinstance(result, Failure)
            assert result.reason.pos == 0

        assert identifier(LISP_STYLE).parse("-x").value == "-x"
        assert identifier(LISP_STYLE).parse("- 5").value == "-"


# ============================================================================
# OPERATORS AND SYMBOLS
# ============================================================================


class TestOperators:
    """Test operator(), reserved_op() and symbol()."""

    def test_operator(self) -> None:
        """operator reads the longest run of operator characters."""
        result = operator(KEYWORDS).parse(">>= x")

        assert result.value == ">>="
        assert result.remaining == "x"

    def test_operator_rejects_reserved(self) -> None:
        """A reserved operator is not a plain operator."""
        result = operator(KEYWORDS).parse("-> x")

        assert isinstance(result, Failure)
        assert result.reason.code is FailureCode.RESERVED_WORD

    def test_reserved_op(self) -> None:
        """reserved_op matches the whole operator."""
        assert reserved_op(KEYWORDS, "=").parse("= 1").remaining == "1"

    def test_reserved_op_is_not_a_prefix_match(self) -> None:
        """'=' does not match the start of '=='."""
        assert not reserved_op(KEYWORDS, "=").parse("== 1")

    def test_symbol(self) -> None:
        """symbol matches literal text and skips whitespace."""
        result = symbol(JAVA_STYLE, "(").parse("(  /* c */ x")

        assert result.value == "("
        assert result.remaining == "x"

    def test_symbol_outside_operator_set_logged(self, caplog: pytest.LogCaptureFixture) -> None:
        """Text starting as an operator but leaving the operator set is logged."""
        with caplog.at_level(logging.WARNING, logger="lexparsec.lexer.tokens"):
            mixed = symbol(KEYWORDS, "=x")
            symbol(KEYWORDS, "->")
            symbol(KEYWORDS, "(")

        assert "keywords: symbol '=x'" in caplog.text
        assert "'->'" not in caplog.text
        assert "'('" not in caplog.text
        assert mixed.parse("=x 1").remaining == "1"


# ============================================================================
# NUMBERS
# ============================================================================


class TestNumber:
    """Test number(), natural(), integer() and float_()."""

    @pytest.mark.parametrize(
        ("source", "expected"),
        [
            ("42", 42),
            ("-7", -7),
            ("+3", 3),
            ("3.25", 3.25),
            ("1e3", 1000.0),
            ("2.5E-1", 0.25),
            ("007", 7),
        ],
    )
    def test_number_values(self, source: str, expected: float) -> None:
        """number yields int or float depending on the literal."""
        result = number(EMPTY_DEF).parse(source)

        assert result.value == expected
        assert type(result.value) is type(expected)

    def test_number_leaves_operator(self) -> None:
        """10+20 reads 10 and leaves +20."""
        result = number(EMPTY_DEF).parse("10+20")

        assert result.value == 10
        assert result.remaining == "+20"

    @pytest.mark.parametrize("source", ["1.", "1.x", "1e", "1e+", "2.5e"])
    def test_malformed_number(self, source: str) -> None:
        """A started fraction or exponent must have digits."""
        result = number(EMPTY_DEF).parse(source)

        assert isinstance(result, Failure)
        assert result.reason.code is FailureCode.MALFORMED_NUMBER

    def test_number_requires_digits(self) -> None:
        """A lone sign is not a number."""
        assert not number(EMPTY_DEF).parse("-x")

    def test_unsigned_number(self) -> None:
        """signed=False leaves a leading sign alone."""
        assert not number(EMPTY_DEF, signed=False).parse("-1")

    @pytest.mark.parametrize(
        ("source", "expected"),
        [("0", 0), ("123", 123), ("0x1F", 31), ("0XfF", 255), ("0o17", 15), ("0b101", 5)],
    )
    def test_natural(self, source: str, expected: int) -> None:
        """natural reads decimal and prefixed literals."""
        assert natural(EMPTY_DEF).parse(source).value == expected

    def test_natural_missing_digits_after_prefix(self) -> None:
        """A radix prefix must be followed by digits of that base."""
        result = natural(EMPTY_DEF).parse("0b2")

        assert isinstance(result, Failure)
        assert result.reason.code is FailureCode.MALFORMED_NUMBER
        assert result.reason.pos == 2
        assert result.reason.expected == ("0-1",)

    def test_radix_failure_names_its_digits(self) -> None:
        """Each radix prefix reports the digits it accepts."""
        hex_result = natural(EMPTY_DEF).parse("0xg")
        oct_result = natural(EMPTY_DEF).parse("0o9")

        assert isinstance(hex_result, Failure)
        assert isinstance(oct_result, Failure)
        assert hex_result.reason.expected == ("0-9a-fA-F",)
        assert oct_result.reason.expected == ("0-7",)

    def test_natural_rejects_non_digit(self) -> None:
        """natural needs at least one digit."""
        result = natural(EMPTY_DEF).parse("x")

        assert isinstance(result, Failure)
        assert result.reason.expected == ("digit",)

    def test_integer_sign(self) -> None:
        """integer accepts a sign, even separated by whitespace."""
        assert integer(EMPTY_DEF).parse("- 0x10").value == -16
        assert integer(EMPTY_DEF).parse("+5").value == 5
        assert integer(EMPTY_DEF).parse("5").value == 5

    def test_float(self) -> None:
        """float_ requires a fraction or exponent."""
        assert float_(EMPTY_DEF).parse("1.5 x").value == 1.5
        result = float_(EMPTY_DEF).parse("15")
        assert isinstance(result, Failure)
        assert result.reason.code is FailureCode.MALFORMED_NUMBER

    @given(value=st.integers(min_value=-(10**12), max_value=10**12))
    def test_number_reads_any_int(self, value: int) -> None:
        """PROPERTY: str(int) reads back as the same int."""
        assert number(EMPTY_DEF).parse(str(value)).value == value
        event(f"negative={value < 0}")

    @given(value=st.floats(allow_nan=False, allow_infinity=False))
    def test_number_reads_any_float_repr(self, value: float) -> None:
        """PROPERTY: repr(float) reads back as the same float."""
        assert number(EMPTY_DEF).parse(repr(value)).value == value


# ============================================================================
# STRING AND CHARACTER LITERALS
# ============================================================================


class TestLiterals:
    """Test string_literal(), char_literal() and escape decoding."""

    def test_plain_string(self) -> None:
        """The quotes are removed."""
        result = string_literal(EMPTY_DEF).parse('"hello world"  next')

        assert result.value == "hello world"
        assert result.remaining == "next"

    def test_empty_string(self) -> None:
        """An empty literal is valid."""
        assert string_literal(EMPTY_DEF).parse('""').value == ""

    def test_escapes(self) -> None:
        """Escape sequences are decoded."""
        source = r'"a\nb\t\"q\"\\\u00e9\U01F600"'

        assert string_literal(EMPTY_DEF).parse(source).value == 'a\nb\t"q"\\é\U0001f600'

    def test_single_quoted_string(self) -> None:
        """Another quote character may be chosen."""
        assert string_literal(EMPTY_DEF, "'").parse("'it\\'s'").value == "it's"

    def test_unterminated_string(self) -> None:
        """Input ending inside a literal is UNTERMINATED_STRING."""
        result = string_literal(EMPTY_DEF).parse('"abc')

        assert isinstance(result, Failure)
        assert result.reason.code is FailureCode.UNTERMINATED_STRING

    def test_unknown_escape(self) -> None:
        """An unknown escape is MALFORMED_ESCAPE."""
        result = string_literal(EMPTY_DEF).parse(r'"a\qb"')

        assert isinstance(result, Failure)
        assert result.reason.code is FailureCode.MALFORMED_ESCAPE
        assert result.reason.pos == 3

    def test_char_literal(self) -> None:
        """char_literal reads one, possibly escaped, character."""
        assert char_literal(EMPTY_DEF).parse("'x' y").value == "x"
        assert char_literal(EMPTY_DEF).parse(r"'\n'").value == "\n"
        assert not char_literal(EMPTY_DEF).parse("'xy'")


class TestDecodeEscape:
    """Test decode_escape() directly."""

    def test_simple_escape(self) -> None:
        """A single-character escape advances by one."""
        decoded = decode_escape(Cursor("tabc"))

        assert not isinstance(decoded, FailureReason)
        assert decoded[0] == "\t"
        assert decoded[1].pos == 1

    @pytest.mark.parametrize(
        "body",
        ["u12", "uZZZZ", "U11FFFF", "uD800", "x41"],
    )
    def test_invalid_escapes(self, body: str) -> None:
        """Short, non-hex, out-of-range, surrogate and unknown escapes fail."""
        decoded = decode_escape(Cursor(body))

        assert isinstance(decoded, FailureReason)
        assert decoded.code is FailureCode.MALFORMED_ESCAPE

    def test_backslash_at_eof(self) -> None:
        """A backslash ending the input leaves the literal unterminated."""
        decoded = decode_escape(Cursor(""))

        assert isinstance(decoded, FailureReason)
        assert decoded.code is FailureCode.UNTERMINATED_STRING


# ============================================================================
# BRACKETS AND SEPARATED LISTS
# ============================================================================


class TestBracketsAndLists:
    """Test parens/braces/brackets/angles and the separated-list helpers."""

    def test_brackets_family(self) -> None:
        """Each bracket helper wraps its parser with lexeme delimiters."""
        value = natural(EMPTY_DEF)

        assert parens(EMPTY_DEF, value).parse("( 1 )").value == 1
        assert braces(EMPTY_DEF, value).parse("{ 2 }").value == 2
        assert brackets(EMPTY_DEF, value).parse("[3]").value == 3
        assert angles(EMPTY_DEF, value).parse("< 4 >").value == 4

    def test_comma_sep(self) -> None:
        """comma_sep reads a possibly empty list."""
        value = natural(EMPTY_DEF)

        assert comma_sep(EMPTY_DEF, value).parse("1 , 2,3").value == [1, 2, 3]
        assert comma_sep(EMPTY_DEF, value).parse("").value == []
        assert not comma_sep1(EMPTY_DEF, value).parse("")

    def test_semi_sep(self) -> None:
        """semi_sep reads ';'-separated items."""
        value = identifier(EMPTY_DEF)

        assert semi_sep(EMPTY_DEF, value).parse("a; b ;c").value == ["a", "b", "c"]
        assert semi_sep1(EMPTY_DEF, value).parse("a").value == ["a"]

    def test_list_literal(self) -> None:
        """Brackets around a comma-separated list."""
        value = number(EMPTY_DEF)
        list_literal = brackets(EMPTY_DEF, comma_sep(EMPTY_DEF, value))

        assert list_literal.parse("[1, 2.5, -3]").value == [1, 2.5, -3]


# ============================================================================
# TOKEN STREAM
# ============================================================================


class TestTokenize:
    """Test any_token() and tokenize()."""

    def test_any_token_span_excludes_whitespace(self) -> None:
        """Token spans cover the token text only."""
        result = any_token(EMPTY_DEF).parse("abc   x")

        assert result.value == Token(TokenKind.IDENTIFIER, "abc", 0, 3)
        assert result.remaining == "x"

    def test_tokenize_java(self) -> None:
        """A Java-like line becomes tagged tokens; comments vanish."""
        result = tokenize(JAVA_STYLE).parse(' /* c */ x = "s" + 4.5; // end')

        kinds = [(t.kind, t.value) for t in result.value]
        assert kinds == [
            (TokenKind.IDENTIFIER, "x"),
            (TokenKind.OPERATOR, "="),
            (TokenKind.STRING, "s"),
            (TokenKind.OPERATOR, "+"),
            (TokenKind.NUMBER, 4.5),
            (TokenKind.SYMBOL, ";"),
        ]

    def test_tokenize_reserved(self) -> None:
        """Reserved words and operators are tagged as such."""
        tokens = tokenize(KEYWORDS).parse("if a -> b").value

        assert [t.kind for t in tokens] == [
            TokenKind.RESERVED,
            TokenKind.IDENTIFIER,
            TokenKind.RESERVED_OP,
            TokenKind.IDENTIFIER,
        ]

    def test_tokenize_sign_is_operator(self) -> None:
        """In a token stream a minus sign is an operator, not part of a number."""
        tokens = tokenize(EMPTY_DEF).parse("a-1").value

        assert [t.value for t in tokens] == ["a", "-", 1]

    def test_tokenize_lisp_signed_numbers(self) -> None:
        """In LISP_STYLE a sign before a digit is part of the number."""
        tokens = tokenize(LISP_STYLE).parse("(- -5 x +3 .5)").value

        assert [(t.kind, t.value) for t in tokens] == [
            (TokenKind.SYMBOL, "("),
            (TokenKind.IDENTIFIER, "-"),
            (TokenKind.NUMBER, -5),
            (TokenKind.IDENTIFIER, "x"),
            (TokenKind.NUMBER, 3),
            (TokenKind.NUMBER, 0.5),
            (TokenKind.SYMBOL, ")"),
        ]
        assert tokens[2] == Token(TokenKind.NUMBER, -5, 3, 5)

    def test_tokenize_radix_literal(self) -> None:
        """Prefixed naturals are single NUMBER tokens."""
        tokens = tokenize(EMPTY_DEF).parse("0x1F 0b11 10").value

        assert [(t.kind, t.value) for t in tokens] == [
            (TokenKind.NUMBER, 31),
            (TokenKind.NUMBER, 3),
            (TokenKind.NUMBER, 10),
        ]

    def test_tokenize_char_literal(self) -> None:
        """Character literals are recognized."""
        tokens = tokenize(EMPTY_DEF).parse("'a' 'b'").value

        assert [(t.kind, t.value) for t in tokens] == [(TokenKind.CHAR, "a"), (TokenKind.CHAR, "b")]

    def test_tokenize_lisp_quote_falls_back(self) -> None:
        """A quote that does not start a character literal is an operator."""
        tokens = tokenize(LISP_STYLE).parse("'(a b)").value

        assert tokens[0] == Token(TokenKind.OPERATOR, "'", 0, 1)
        assert tokens[1].kind is TokenKind.SYMBOL

    def test_tokenize_empty(self) -> None:
        """Empty or whitespace-only input has no tokens."""
        assert tokenize(HASKELL_STYLE).parse("").value == []
        assert tokenize(HASKELL_STYLE).parse("  -- only a comment").value == []

    def test_tokenize_unterminated_string(self) -> None:
        """A broken literal is reported, not re-read as punctuation."""
        result = tokenize(EMPTY_DEF).parse('x "abc')

        assert isinstance(result, Failure)
        assert result.reason.code is FailureCode.UNTERMINATED_STRING

    def test_tokenize_unterminated_comment(self) -> None:
        """An unterminated comment between tokens is reported."""
        result = tokenize(JAVA_STYLE).parse("a /* b")

        assert isinstance(result, Failure)
        assert result.reason.code is FailureCode.UNTERMINATED_COMMENT
        assert result.reason.pos == 2

    def test_tokenize_malformed_number(self) -> None:
        """A malformed number fails the stream."""
        result = tokenize(EMPTY_DEF).parse("x = 1.")

        assert isinstance(result, Failure)
        assert result.reason.code is FailureCode.MALFORMED_NUMBER

    @given(words=st.lists(st.from_regex(r"[a-z_][a-z0-9_]{0,8}", fullmatch=True), max_size=10))
    def test_identifiers_round_trip(self, words: list[str]) -> None:
        """PROPERTY: space-joined identifiers tokenize back to the same words."""
        tokens = tokenize(EMPTY_DEF).parse(" ".join(words)).value

        assert [t.value for t in tokens] == words
        assert all(t.kind is TokenKind.IDENTIFIER for t in tokens)
        event(f"count={min(len(words), 5)}")


# ============================================================================
# TOKEN PARSER BUNDLE
# ============================================================================


class TestTokenParser:
    """Test the TokenParser convenience bundle."""

    def test_bound_helpers(self) -> None:
        """Methods delegate to the module-level helpers with the bound definition."""
        tok = TokenParser(HASKELL_STYLE)
        binding = tok.reserved("let").then(tok.identifier()).skip(tok.reserved_op("="))

        result = binding.parse("let x = 1")

        assert result.value == "x"
        assert result.remaining == "1"

    def test_whitespace_and_lexeme(self) -> None:
        """whitespace and lexeme are available on the bundle."""
        tok = TokenParser(JAVA_STYLE)

        assert tok.whitespace().parse("/* */ x").remaining == "x"
        assert tok.lexeme(tok.symbol("x")).parse("x  ").remaining == ""

    def test_literal_helpers(self) -> None:
        """Numbers and literals through the bundle."""
        tok = TokenParser(EMPTY_DEF)

        assert tok.natural().parse("0x10").value == 16
        assert tok.integer().parse("-3").value == -3
        assert tok.float_().parse("2.0").value == 2.0
        assert tok.number().parse("7").value == 7
        assert tok.string_literal().parse('"a"').value == "a"
        assert tok.char_literal().parse("'a'").value == "a"
        assert tok.operator().parse("<=").value == "<="

    def test_grouping_helpers(self) -> None:
        """Grouping and list helpers through the bundle."""
        tok = TokenParser(EMPTY_DEF)
        items = tok.brackets(tok.comma_sep(tok.natural()))

        assert items.parse("[1,2]").value == [1, 2]
        assert tok.parens(tok.natural()).parse("(1)").value == 1
        assert tok.braces(tok.semi_sep(tok.natural())).parse("{1;2}").value == [1, 2]

    def test_tokenize(self) -> None:
        """tokenize through the bundle."""
        tokens = TokenParser(EMPTY_DEF).tokenize().parse("a b").value

        assert len(tokens) == 2
