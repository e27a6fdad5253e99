"""Immutable input cursor for combinator parsing.

The whole input is held in memory; a Cursor is a (source, offset) pair.
Consuming input never mutates a cursor - advance() returns a NEW cursor,
so backtracking is simply reusing an older one.

Design Philosophy:
    - Cursor is immutable (frozen dataclass)
    - EOF is a state (is_eof), not a return value of current
    - head is the None-returning lookahead for callers that prefer it
    - Line:column computed on-demand (O(n), only for failure reports)

Line Ending Support:
    \\n is the line delimiter. CRLF input reports correct lines because
    the \\n is still present. CR-only input reports everything on line 1.

Python 3.13+. Zero external dependencies.
"""

from dataclasses import dataclass

__all__ = ["Cursor"]


@dataclass(frozen=True, slots=True)
class Cursor:
    """Immutable position in a source string.

    Example:
        >>> cursor = Cursor("hello", 0)
        >>> cursor.current
        'h'
        >>> rest = cursor.advance()
        >>> rest.current
        'e'
        >>> cursor.current  # Original unchanged
        'h'
        >>> rest.remaining
        'ello'
        >>> Cursor("hi", 2).is_eof
        True
    """

    source: str
    pos: int = 0

    @property
    def is_eof(self) -> bool:
        """True when no characters remain."""
        return self.pos >= len(self.source)

    @property
    def current(self) -> str:
        """Next character.

        Raises:
            EOFError: If at end of input. Check is_eof first, or use head.
        """
        if self.is_eof:
            msg = f"Unexpected EOF at position {self.pos}"
            raise EOFError(msg)
        return self.source[self.pos]

    @property
    def head(self) -> str | None:
        """Next character, or None at end of input."""
        if self.is_eof:
            return None
        return self.source[self.pos]

    @property
    def rest(self) -> "Cursor":
        """Cursor after consuming one character (unchanged at EOF)."""
        return self.advance()

    @property
    def remaining(self) -> str:
        """Unconsumed suffix of the source."""
        return self.source[self.pos :]

    def peek(self, offset: int = 0) -> str | None:
        """Character at pos + offset without advancing, None beyond EOF."""
        target_pos = self.pos + offset
        if target_pos >= len(self.source):
            return None
        return self.source[target_pos]

    def advance(self, count: int = 1) -> "Cursor":
        """Return new cursor advanced by count positions, clamped to EOF.

        Example:
            >>> cursor = Cursor("hello", 0)
            >>> cursor.advance(3).pos
            3
            >>> cursor.advance(99).pos
            5
        """
        new_pos = min(self.pos + count, len(self.source))
        return Cursor(self.source, new_pos)

    def startswith(self, text: str, *, case_sensitive: bool = True) -> bool:
        """Check whether the unconsumed input begins with text."""
        if case_sensitive:
            return self.source.startswith(text, self.pos)
        candidate = self.slice_ahead(len(text))
        return len(candidate) == len(text) and candidate.casefold() == text.casefold()

    def slice_to(self, end_pos: int) -> str:
        """Source substring from this cursor's position to end_pos (exclusive).

        Usage:
            Store the starting cursor, advance, then slice:

            >>> start = Cursor("hello world", 0)
            >>> end = start.advance(5)
            >>> start.slice_to(end.pos)
            'hello'
        """
        return self.source[self.pos : end_pos]

    def slice_ahead(self, n: int) -> str:
        """Up to n characters from the current position, without advancing."""
        return self.source[self.pos : self.pos + n]

    def skip_while(self, chars: str | frozenset[str]) -> "Cursor":
        """Return a cursor past every consecutive character found in chars."""
        c = self
        while not c.is_eof and c.current in chars:
            c = c.advance()
        return c

    def skip_to_line_end(self) -> "Cursor":
        """Advance to the next \\n or \\r without consuming it."""
        cursor = self
        while not cursor.is_eof and cursor.current not in ("\n", "\r"):
            cursor = cursor.advance()
        return cursor

    def compute_line_col(self) -> tuple[int, int]:
        """Compute (line, column) for the current position, both 1-indexed.

        O(n) in the position: call for failure reporting only.

        Example:
            >>> Cursor("line1\\nline2", 8).compute_line_col()
            (2, 3)
        """
        line = self.source.count("\n", 0, self.pos) + 1
        last_newline = self.source.rfind("\n", 0, self.pos)
        col = self.pos - last_newline if last_newline >= 0 else self.pos + 1
        return (line, col)
