"""Whitespace and comment skipping driven by a LanguageDefinition.

whitespace(defn) repeatedly skips, in any order, until none applies:
    - a run of characters from defn.whitespace_chars
    - a line comment: defn.comment_line up to (not including) the line end
    - a block comment: defn.comment_start ... defn.comment_end, honoring
      nesting when defn.nested_comments is set

An unterminated block comment is a failure, never silently skipped.
Zero skips is success, so whitespace() never fails on empty input.

lexeme(defn, p) is the single integration point between raw combinators
and token-aware ones: it runs p, then whitespace(defn).
"""

from lexparsec.diagnostics.templates import ErrorTemplate
from lexparsec.lexer.language import LanguageDefinition
from lexparsec.syntax.cursor import Cursor
from lexparsec.syntax.parser.core import Parser
from lexparsec.syntax.result import Failure, Result, Success

__all__ = ["lexeme", "skip_block_comment", "skip_line_comment", "whitespace"]


def skip_line_comment(cursor: Cursor, defn: LanguageDefinition) -> Cursor:
    """Skip a line comment starting at cursor.

    Stops AT the line ending (or EOF); the line ending itself is ordinary
    whitespace if the language says so.
    """
    return cursor.advance(len(defn.comment_line)).skip_to_line_end()


def skip_block_comment(cursor: Cursor, defn: LanguageDefinition) -> Result[None]:
    """Skip a block comment starting at cursor.

    Iterative: nesting is tracked with a depth counter, not recursion.

    Returns:
        Success(None, cursor after the closing marker), or an
        UNTERMINATED_COMMENT failure reported at the opening marker
    """
    start, end = defn.comment_start, defn.comment_end
    opening = cursor
    cursor = cursor.advance(len(start))
    depth = 1

    while not cursor.is_eof:
        if cursor.startswith(end):
            cursor = cursor.advance(len(end))
            depth -= 1
            if depth == 0:
                return Success(None, cursor)
        elif defn.nested_comments and cursor.startswith(start):
            cursor = cursor.advance(len(start))
            depth += 1
        else:
            cursor = cursor.advance()

    return Failure(ErrorTemplate.unterminated_comment(opening, start, end))


def _skip_insignificant(cursor: Cursor, defn: LanguageDefinition) -> Result[None]:
    while not cursor.is_eof:
        if cursor.current in defn.whitespace_chars:
            cursor = cursor.skip_while(defn.whitespace_chars)
            continue

        block = defn.has_block_comments and cursor.startswith(defn.comment_start)
        line = defn.has_line_comments and cursor.startswith(defn.comment_line)

        # Both markers match (e.g. "--" vs "--|"): the longer one wins
        if block and line:
            block = len(defn.comment_start) >= len(defn.comment_line)
            line = not block

        if block:
            match skip_block_comment(cursor, defn):
                case Success(_, rest):
                    cursor = rest
                case Failure() as failure:
                    return failure
        elif line:
            cursor = skip_line_comment(cursor, defn)
        else:
            break

    return Success(None, cursor)


def whitespace(defn: LanguageDefinition) -> Parser[None]:
    """Skip insignificant whitespace and comments; never fails except on an
    unterminated block comment.

    Example:
        >>> from lexparsec.lexer.language import JAVA_STYLE
        >>> result = whitespace(JAVA_STYLE).parse("  // note\\n /* x */ y")
        >>> result.remaining
        'y'
    """

    def run(cursor: Cursor) -> Result[None]:
        return _skip_insignificant(cursor, defn)

    return Parser(run, f"whitespace({defn.name})")


def lexeme[T](defn: LanguageDefinition, parser: Parser[T]) -> Parser[T]:
    """Run parser, then skip trailing whitespace/comments.

    Succeeds with parser's value and the post-whitespace remainder. A
    failure of parser, or an unterminated comment after it, is returned
    unchanged.

    Example:
        >>> from lexparsec.lexer.language import EMPTY_DEF
        >>> from lexparsec.syntax.parser.primitives import char
        >>> result = lexeme(EMPTY_DEF, char("a")).parse("a   ")
        >>> result.value, result.remaining
        ('a', '')
    """

    def run(cursor: Cursor) -> Result[T]:
        match parser(cursor):
            case Success(value, rest):
                match _skip_insignificant(rest, defn):
                    case Success(_, after):
                        return Success(value, after)
                    case Failure() as failure:
                        return failure
            case Failure() as failure:
                return failure

    return Parser(run, f"lexeme({parser.name})")
