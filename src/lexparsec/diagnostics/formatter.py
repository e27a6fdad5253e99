"""Failure formatting service.

Renders FailureReasons for humans (Rust-compiler style, single line) or
tools (JSON). Python 3.13+. Zero external dependencies.
"""

import json
from collections.abc import Iterable
from dataclasses import dataclass
from typing import TYPE_CHECKING

from lexparsec.enums import OutputFormat

if TYPE_CHECKING:
    from lexparsec.syntax.result import FailureReason

__all__ = ["FailureFormatter"]

# Control characters escaped in rendered messages (log injection prevention).
_CONTROL_ESCAPES: dict[int, str] = {
    code: f"\\x{code:02x}" for code in range(0x20) if code not in (0x09,)
}
_CONTROL_ESCAPES[0x7F] = "\\x7f"


@dataclass(frozen=True, slots=True)
class FailureFormatter:
    """Failure formatting service.

    Attributes:
        output_format: Output style (rust, simple, json)
        sanitize: Truncate long content
        color: Enable ANSI color codes (for terminal output)
        max_content_length: Maximum content length when sanitizing
        show_causes: Include nested causes (rust and json formats)

    Example:
        >>> from lexparsec.syntax.parser import char, parse
        >>> failure = parse("x", char("a"))
        >>> print(FailureFormatter().format(failure.reason))
        error[UNEXPECTED_CHAR]: Unexpected 'x'
          --> line 1, column 1
          = expected: 'a'

        >>> print(FailureFormatter(output_format=OutputFormat.SIMPLE).format(failure.reason))
        UNEXPECTED_CHAR: 1:1: Unexpected 'x'
    """

    output_format: OutputFormat = OutputFormat.RUST
    sanitize: bool = False
    color: bool = False
    max_content_length: int = 100
    show_causes: bool = True

    def format(self, reason: "FailureReason") -> str:
        """Format a single failure reason."""
        match self.output_format:
            case OutputFormat.RUST:
                return self._format_rust(reason, depth=0)
            case OutputFormat.SIMPLE:
                return self._format_simple(reason)
            case OutputFormat.JSON:
                return json.dumps(self._to_json(reason), ensure_ascii=False)

    def format_all(self, reasons: Iterable["FailureReason"]) -> str:
        """Format several reasons separated by blank lines."""
        return "\n\n".join(self.format(r) for r in reasons)

    def _format_rust(self, reason: "FailureReason", depth: int) -> str:
        indent = "  " * depth
        label = "error" if depth == 0 else "cause"
        if self.color:
            label = f"\033[1;31m{label}\033[0m"
        line, column = reason.cursor.compute_line_col()

        parts = [f"{indent}{label}[{reason.code.name}]: {self._clean(reason.message)}"]
        parts.append(f"{indent}  --> line {line}, column {column}")
        if reason.expected:
            expected = self._clean(", ".join(reason.expected))
            parts.append(f"{indent}  = expected: {expected}")
        if self.show_causes:
            parts.extend(self._format_rust(cause, depth + 1) for cause in reason.causes)
        return "\n".join(parts)

    def _format_simple(self, reason: "FailureReason") -> str:
        return f"{reason.code.name}: {self._clean(reason.format_error())}"

    def _to_json(self, reason: "FailureReason") -> dict[str, object]:
        line, column = reason.cursor.compute_line_col()
        data: dict[str, object] = {
            "code": reason.code.name,
            "code_value": reason.code.value,
            "category": str(reason.code.category),
            "message": self._maybe_sanitize(reason.message),
            "pos": reason.pos,
            "line": line,
            "column": column,
            "expected": list(reason.expected),
        }
        if self.show_causes and reason.causes:
            data["causes"] = [self._to_json(cause) for cause in reason.causes]
        return data

    def _clean(self, text: str) -> str:
        return self._maybe_sanitize(text).translate(_CONTROL_ESCAPES)

    def _maybe_sanitize(self, text: str) -> str:
        """Truncate text if sanitization is enabled."""
        if self.sanitize and len(text) > self.max_content_length:
            return text[: self.max_content_length] + "..."
        return text
