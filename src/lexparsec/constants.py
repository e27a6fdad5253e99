"""Shared constants for lexparsec.

This module provides centralized configuration constants used across
the engine and the lexer layer. Placing constants here avoids circular
imports and provides a single source of truth.

Constants are grouped by domain:
- Input limits: DoS prevention via size constraints
- Lexer defaults: Whitespace and operator character sets
- Escape sequences: Decoding table for string and character literals

Python 3.13+. Zero external dependencies.
"""

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Input limits
    "MAX_SOURCE_SIZE",
    # Lexer defaults
    "DEFAULT_WHITESPACE",
    "DEFAULT_OP_CHARS",
    "ASCII_DIGITS",
    "HEX_DIGITS",
    "OCT_DIGITS",
    "BIN_DIGITS",
    # Escape sequences
    "ESCAPE_SEQUENCES",
    "UNICODE_ESCAPE_LEN_SHORT",
    "UNICODE_ESCAPE_LEN_LONG",
    "MAX_UNICODE_CODE_POINT",
    "SURROGATE_RANGE_START",
    "SURROGATE_RANGE_END",
]

# ============================================================================
# INPUT LIMITS
# ============================================================================

# Default maximum source size in characters (10 MB of text).
# parse() refuses larger inputs with a SOURCE_TOO_LARGE failure instead of
# letting an unconditionally-backtracking grammar chew through them.
# Pass max_source_size=0 to parse() to disable the check.
MAX_SOURCE_SIZE: int = 10 * 1024 * 1024

# ============================================================================
# LEXER DEFAULTS
# ============================================================================

# Insignificant characters skipped by whitespace() unless a language
# definition says otherwise.
DEFAULT_WHITESPACE: frozenset[str] = frozenset({" ", "\t", "\n", "\r", "\f", "\v"})

# Characters usable in operator symbols (Parsec's default opLetter set).
DEFAULT_OP_CHARS: frozenset[str] = frozenset(":!#$%&*+./<=>?@\\^|-~")

# ASCII digits only - str.isdigit() accepts Unicode digits like ² which
# int() then rejects.
ASCII_DIGITS: str = "0123456789"
HEX_DIGITS: str = "0123456789abcdefABCDEF"
OCT_DIGITS: str = "01234567"
BIN_DIGITS: str = "01"

# ============================================================================
# ESCAPE SEQUENCES
# ============================================================================

# Single-character escapes recognized after a backslash in string and
# character literals.
ESCAPE_SEQUENCES: dict[str, str] = {
    "n": "\n",
    "t": "\t",
    "r": "\r",
    "b": "\b",
    "f": "\f",
    "0": "\0",
    "\\": "\\",
    '"': '"',
    "'": "'",
}

# \uXXXX = 4 hex digits (BMP characters U+0000 to U+FFFF)
UNICODE_ESCAPE_LEN_SHORT: int = 4

# \UXXXXXX = 6 hex digits (full Unicode range U+0000 to U+10FFFF)
UNICODE_ESCAPE_LEN_LONG: int = 6

# Maximum valid Unicode code point per Unicode Standard.
MAX_UNICODE_CODE_POINT: int = 0x10FFFF

# UTF-16 surrogate code point range (D800-DFFF), invalid in isolation.
SURROGATE_RANGE_START: int = 0xD800
SURROGATE_RANGE_END: int = 0xDFFF
