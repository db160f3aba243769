"""Token types, source positions, and character classification helpers."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto


class TokenType(Enum):
    # Content
    IDENTIFIER = auto()  # (alnum | _)+ not starting with a digit
    OPERATOR = auto()  # run of non-whitespace, non-punctuation chars
    STRING = auto()  # "..." whose value is the decoded text
    NUMBER = auto()  # digits with at most one '.', value is a float

    # Punctuation (single-character)
    LPAREN = auto()  # (
    RPAREN = auto()  # )
    LBRACE = auto()  # {
    RBRACE = auto()  # }
    LBRACKET = auto()  # [
    RBRACKET = auto()  # ]
    COLON = auto()  # :
    DOT = auto()  # .
    COMMA = auto()  # ,

    EOF = auto()

    @property
    def label(self) -> str:
        """Human-readable description used in diagnostics."""
        return _LABELS[self]


_LABELS: dict[TokenType, str] = {
    TokenType.IDENTIFIER: "identifier",
    TokenType.OPERATOR: "operator",
    TokenType.STRING: "string literal",
    TokenType.NUMBER: "number literal",
    TokenType.LPAREN: "'('",
    TokenType.RPAREN: "')'",
    TokenType.LBRACE: "'{'",
    TokenType.RBRACE: "'}'",
    TokenType.LBRACKET: "'['",
    TokenType.RBRACKET: "']'",
    TokenType.COLON: "':'",
    TokenType.DOT: "'.'",
    TokenType.COMMA: "','",
    TokenType.EOF: "end of input",
}

PUNCTUATION: dict[str, TokenType] = {
    "(": TokenType.LPAREN,
    ")": TokenType.RPAREN,
    "{": TokenType.LBRACE,
    "}": TokenType.RBRACE,
    "[": TokenType.LBRACKET,
    "]": TokenType.RBRACKET,
    ".": TokenType.DOT,
    ":": TokenType.COLON,
    ",": TokenType.COMMA,
}


@dataclass(frozen=True, slots=True)
class Position:
    """Source position, 1-based line and column, 0-based code point offset."""

    line: int
    column: int
    offset: int


@dataclass(frozen=True, slots=True)
class Span:
    """Half-open source range from start to end position."""

    start: Position
    end: Position

    @classmethod
    def at(cls, position: Position) -> Span:
        """Empty span at a single position (used for end of input)."""
        return cls(position, position)

    def join(self, other: Span) -> Span:
        """Smallest span covering both, by component-wise min/max."""
        start = Position(
            min(self.start.line, other.start.line),
            min(self.start.column, other.start.column),
            min(self.start.offset, other.start.offset),
        )
        end = Position(
            max(self.end.line, other.end.line),
            max(self.end.column, other.end.column),
            max(self.end.offset, other.end.offset),
        )
        return Span(start, end)

    def contains(self, other: Span) -> bool:
        return self.start.offset <= other.start.offset and other.end.offset <= self.end.offset


@dataclass(frozen=True, slots=True)
class Token:
    """A single lexer token with decoded value and original source text."""

    type: TokenType
    value: str | float
    raw: str
    span: Span


def is_punctuation(ch: str) -> bool:
    """Return True if ch is one of the nine reserved punctuation characters."""
    return ch in PUNCTUATION


def is_ident_char(ch: str) -> bool:
    """Return True if ch may appear in an identifier."""
    return ch.isalnum() or ch == "_"


def is_digit(ch: str) -> bool:
    """Return True if ch is an ASCII decimal digit."""
    return "0" <= ch <= "9"


def is_operator_char(ch: str) -> bool:
    """Return True if ch may continue an operator run."""
    return not ch.isspace() and not is_punctuation(ch)


# Escapes shared by the lexer (decoding) and the renderers (encoding)
STRING_ESCAPES: dict[str, str] = {"n": "\n", "t": "\t", "\\": "\\", '"': '"'}
_REVERSE_ESCAPES: dict[str, str] = {v: f"\\{k}" for k, v in STRING_ESCAPES.items()}


def quote_string(value: str) -> str:
    """Render a decoded string as a quoted literal with escapes."""
    return '"' + "".join(_REVERSE_ESCAPES.get(ch, ch) for ch in value) + '"'


def render_token(token: Token) -> str:
    """Canonical source rendering of a token; lexing it yields an equal token."""
    from lexpr.sexpr import format_number

    if token.type == TokenType.STRING:
        return quote_string(str(token.value))
    if token.type == TokenType.NUMBER:
        assert isinstance(token.value, float)
        return format_number(token.value)
    if token.type == TokenType.EOF:
        return ""
    return str(token.value)
