"""Input representation, result algebra and the combinator engine.

Submodules:
    cursor: Immutable Cursor over the input string
    result: Success / Failure / FailureReason
    parser: Parser abstraction, primitives and combinators

The parser subpackage is not imported here: diagnostics.templates depends
on cursor and result, and the parser depends on diagnostics.templates.

Python 3.13+.
"""

from .cursor import Cursor
from .result import Failure, FailureReason, Result, Success

__all__ = ["Cursor", "Failure", "FailureReason", "Result", "Success"]
