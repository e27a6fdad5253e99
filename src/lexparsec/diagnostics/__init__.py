"""Diagnostic system for parse failures.

Provides failure codes, failure-reason templates, the exception types used
at API edges, and a formatter for human and tool output.

Python 3.13+. Zero external dependencies.
"""

from .codes import FailureCategory, FailureCode
from .errors import GrammarDefinitionError, LexParsecError, ParseFailedError
from .formatter import FailureFormatter

# templates imports lexparsec.syntax, which imports codes and errors above
from .templates import ErrorTemplate, describe_char  # noqa: I001

__all__ = [
    "ErrorTemplate",
    "FailureCategory",
    "FailureCode",
    "FailureFormatter",
    "GrammarDefinitionError",
    "LexParsecError",
    "ParseFailedError",
    "describe_char",
]
