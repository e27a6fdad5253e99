"""Enumerations for lexparsec type-safe constants.

Uses StrEnum (Python 3.11+) for automatic string conversion.
StrEnum members are strings themselves, eliminating boilerplate __str__ methods.

Python 3.13+.
"""

from enum import StrEnum

__all__ = ["OutputFormat", "TokenKind"]


class TokenKind(StrEnum):
    """Kind tag of a Token produced by the token-level helpers.

    StrEnum provides automatic string conversion: str(TokenKind.NUMBER) == "number"
    """

    IDENTIFIER = "identifier"
    """Identifier that is not a reserved word: foo, bar_1"""

    RESERVED = "reserved"
    """Reserved word from the language definition: if, lambda"""

    NUMBER = "number"
    """Numeric literal, value is int or float: 42, 3.5e2"""

    STRING = "string"
    """Decoded string literal: "a\\nb" -> 'a\\nb'"""

    CHAR = "char"
    """Decoded character literal: 'x'"""

    OPERATOR = "operator"
    """Operator built from operator characters: +, ->, >>="""

    RESERVED_OP = "reserved_op"
    """Reserved operator from the language definition: =, ::"""

    SYMBOL = "symbol"
    """Punctuation that is neither operator nor identifier: (, ), ;"""


class OutputFormat(StrEnum):
    """Output format options for failure formatting."""

    RUST = "rust"  # Rust compiler-style output (default)
    SIMPLE = "simple"  # Single-line format
    JSON = "json"  # JSON format for tooling integration
