"""lexpr lexer: converts source text into a lazy token stream."""

from __future__ import annotations

import math
from collections.abc import Iterator

from lexpr.errors import ErrorKind, LexError
from lexpr.tokens import (
    PUNCTUATION,
    STRING_ESCAPES,
    Position,
    Span,
    Token,
    TokenType,
    is_digit,
    is_ident_char,
    is_operator_char,
)


class Lexer:
    """Tokenize lexpr source text on demand, with one token of look-ahead."""

    def __init__(self, source: str, filename: str = "input.lexpr") -> None:
        self._source = source
        self._filename = filename
        self._pos = 0
        self._line = 1
        self._col = 1
        self._peeked: Token | None = None

    @property
    def source(self) -> str:
        return self._source

    @property
    def filename(self) -> str:
        return self._filename

    def next_token(self) -> Token:
        """Consume and return the next token; EOF repeats once reached."""
        if self._peeked is not None:
            tok = self._peeked
            self._peeked = None
            return tok
        return self._lex_token()

    def peek_token(self) -> Token:
        """Return the token next_token() would return, without consuming it."""
        if self._peeked is None:
            self._peeked = self._lex_token()
        return self._peeked

    def __iter__(self) -> Iterator[Token]:
        while True:
            tok = self.next_token()
            if tok.type == TokenType.EOF:
                return
            yield tok

    # ------------------------------------------------------------------
    # Position helpers
    # ------------------------------------------------------------------

    def _current_pos(self) -> Position:
        return Position(self._line, self._col, self._pos)

    def _peek(self, offset: int = 0) -> str:
        idx = self._pos + offset
        if idx < len(self._source):
            return self._source[idx]
        return ""

    def _at_end(self) -> bool:
        return self._pos >= len(self._source)

    def _advance(self) -> str:
        ch = self._source[self._pos]
        self._pos += 1
        if ch == "\n":
            self._line += 1
            self._col = 1
        else:
            self._col += 1
        return ch

    def _make(self, tt: TokenType, value: str | float, start: Position) -> Token:
        end = self._current_pos()
        raw = self._source[start.offset : end.offset]
        return Token(tt, value, raw, Span(start, end))

    def _error(self, kind: ErrorKind, message: str, pos: Position | None = None) -> LexError:
        if pos is None:
            pos = self._current_pos()
        return LexError(kind, message, pos, self._source)

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------

    def _skip_whitespace(self) -> None:
        while not self._at_end() and self._peek().isspace():
            self._advance()

    def _lex_token(self) -> Token:
        self._skip_whitespace()
        start = self._current_pos()

        if self._at_end():
            return Token(TokenType.EOF, "", "", Span.at(start))

        ch = self._peek()

        if ch in PUNCTUATION:
            self._advance()
            return self._make(PUNCTUATION[ch], ch, start)

        if ch == '"':
            return self._lex_string()

        if is_digit(ch):
            return self._lex_number()

        if is_ident_char(ch):
            return self._lex_identifier()

        return self._lex_operator()

    def _lex_identifier(self) -> Token:
        start = self._current_pos()
        chars = []
        while not self._at_end() and is_ident_char(self._peek()):
            chars.append(self._advance())
        return self._make(TokenType.IDENTIFIER, "".join(chars), start)

    def _lex_operator(self) -> Token:
        start = self._current_pos()
        chars = []
        while not self._at_end():
            ch = self._peek()
            if not is_operator_char(ch):
                break
            chars.append(self._advance())
        return self._make(TokenType.OPERATOR, "".join(chars), start)

    # ------------------------------------------------------------------
    # Literals
    # ------------------------------------------------------------------

    def _lex_string(self) -> Token:
        start = self._current_pos()
        self._advance()  # consume opening quote

        chars = []
        while not self._at_end():
            ch = self._peek()
            if ch == '"':
                self._advance()
                return self._make(TokenType.STRING, "".join(chars), start)
            if ch == "\\":
                esc_start = self._current_pos()
                self._advance()  # consume backslash
                if self._at_end():
                    break
                esc = self._peek()
                if esc not in STRING_ESCAPES:
                    raise self._error(
                        ErrorKind.INVALID_ESCAPE_SEQUENCE,
                        f"invalid escape sequence '\\{esc}' in string literal",
                        esc_start,
                    )
                self._advance()
                chars.append(STRING_ESCAPES[esc])
                continue
            chars.append(self._advance())

        raise self._error(ErrorKind.UNTERMINATED_STRING, "unterminated string literal", start)

    def _lex_number(self) -> Token:
        start = self._current_pos()
        chars = []
        seen_point = False
        while not self._at_end():
            ch = self._peek()
            if is_digit(ch):
                chars.append(self._advance())
            elif ch == ".":
                if seen_point:
                    raise self._error(
                        ErrorKind.MULTIPLE_DECIMAL_POINTS,
                        "number literal has more than one decimal point",
                    )
                seen_point = True
                chars.append(self._advance())
            else:
                break

        text = "".join(chars)
        try:
            value = float(text)
        except ValueError:
            raise self._error(
                ErrorKind.FAILED_TO_PARSE_NUMBER,
                f"failed to parse number literal '{text}'",
                start,
            ) from None
        if math.isinf(value):
            raise self._error(
                ErrorKind.FAILED_TO_PARSE_NUMBER,
                f"number literal '{text}' is out of range",
                start,
            )
        return self._make(TokenType.NUMBER, value, start)


def tokenize(source: str, filename: str = "input.lexpr") -> list[Token]:
    """Convenience function: tokenize source text and return the list ending in EOF."""
    lexer = Lexer(source, filename)
    tokens = list(lexer)
    tokens.append(lexer.next_token())
    return tokens
