"""Error types with formatted source context."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto

from lexpr.tokens import Position, Span, Token, TokenType


class ErrorKind(Enum):
    # Lexical
    UNEXPECTED_CHARACTER = auto()
    INVALID_ESCAPE_SEQUENCE = auto()
    UNTERMINATED_STRING = auto()
    MULTIPLE_DECIMAL_POINTS = auto()
    FAILED_TO_PARSE_NUMBER = auto()

    # Syntactic
    UNEXPECTED_TOKEN = auto()
    UNEXPECTED_EOF = auto()


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """A returned (not raised) description of the first failure in a source."""

    kind: ErrorKind
    message: str
    span: Span
    expected: TokenType | None = None

    def format(self, source: str, filename: str = "input.lexpr") -> str:
        return _format_snippet(self.message, self.span, source, filename)


def _format_snippet(message: str, span: Span, source: str, filename: str) -> str:
    lines = source.splitlines(keepends=True)
    line_idx = span.start.line - 1
    col = span.start.column

    # Build the source line (strip trailing newline for display)
    if 0 <= line_idx < len(lines):
        source_line = lines[line_idx].rstrip("\n").rstrip("\r")
    else:
        source_line = ""

    # Underline the full span when on one line, otherwise to end of line
    if span.end.line == span.start.line:
        underline_len = max(1, span.end.column - col)
    else:
        underline_len = max(1, len(source_line) - col + 1)

    pad = " " * (col - 1)
    carets = "^" * underline_len

    line_num = str(span.start.line)
    gutter_width = len(line_num) + 1

    blank_gutter = " " * gutter_width + "|"
    line_gutter = f"{line_num:>{gutter_width - 1}} |"

    return (
        f"error: {message}\n"
        f"{' ' * gutter_width}--> {filename}:{span.start.line}:{col}\n"
        f"{blank_gutter}\n"
        f"{line_gutter} {source_line}\n"
        f"{blank_gutter} {pad}{carets}"
    )


class LexError(Exception):
    """Raised on the first lexing error, with position and source context."""

    def __init__(self, kind: ErrorKind, message: str, position: Position, source: str) -> None:
        self.kind = kind
        self.message = message
        self.position = position
        self.source = source
        super().__init__(self.format())

    @property
    def span(self) -> Span:
        return Span.at(self.position)

    def format(self, filename: str = "input.lexpr") -> str:
        return _format_snippet(self.message, self.span, self.source, filename)

    def to_diagnostic(self) -> Diagnostic:
        return Diagnostic(self.kind, self.message, self.span)


class ParseError(Exception):
    """Raised on the first parse error, with span and source context.

    ``token`` is the offending token (``None`` at end of input) and
    ``expected`` the token type the grammar demanded, when it had a fixed one.
    """

    def __init__(
        self,
        kind: ErrorKind,
        message: str,
        span: Span,
        source: str,
        token: Token | None = None,
        expected: TokenType | None = None,
    ) -> None:
        self.kind = kind
        self.message = message
        self.span = span
        self.source = source
        self.token = token
        self.expected = expected
        super().__init__(self.format())

    def format(self, filename: str = "input.lexpr") -> str:
        return _format_snippet(self.message, self.span, self.source, filename)

    def to_diagnostic(self) -> Diagnostic:
        return Diagnostic(self.kind, self.message, self.span, self.expected)
