"""lexpr parser: converts a token stream into a concrete syntax tree."""

from __future__ import annotations

from lexpr.cst import (
    AlphanumericCall,
    Atom,
    Group,
    LeftChain,
    LeftTerm,
    ListExpr,
    MixfixCall,
    Name,
    Number,
    Operator,
    RightChain,
    RightTerm,
    String,
    Term,
)
from lexpr.errors import Diagnostic, ErrorKind, LexError, ParseError
from lexpr.lexer import Lexer
from lexpr.sexpr import SList
from lexpr.tokens import Span, Token, TokenType


class Parser:
    """Recursive descent parser over a lazily lexed token stream.

    Each ``parse_*`` method handles one grammar stratum and calls only the
    stratum directly below it (plus itself for the associative tails)::

        list      := right ("," right)*
        right     := left (":" right)?
        left      := mixfix ("." mixfix)*
        mixfix    := (OPERATOR | alnum)+
        alnum     := atom atom*
        atom      := IDENTIFIER | STRING | NUMBER | open list? close
    """

    def __init__(self, lexer: Lexer) -> None:
        self._lexer = lexer

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------

    def _peek(self) -> Token:
        return self._lexer.peek_token()

    def _at(self, *types: TokenType) -> bool:
        return self._peek().type in types

    def _advance(self) -> Token:
        return self._lexer.next_token()

    def _expect(self, tt: TokenType) -> Token:
        tok = self._peek()
        if tok.type != tt:
            raise self._unexpected(tok, tt)
        return self._advance()

    # ------------------------------------------------------------------
    # Strata
    # ------------------------------------------------------------------

    def parse(self) -> ListExpr:
        """Parse a whole source: a top-level list followed by end of input."""
        if self._at(TokenType.EOF):
            return ListExpr((), self._peek().span)
        items = self.parse_list()
        self._expect(TokenType.EOF)
        return items

    def parse_list(self) -> ListExpr:
        items = [self.parse_right_assoc_chain()]
        while self._at(TokenType.COMMA):
            self._advance()
            items.append(self.parse_right_assoc_chain())
        return ListExpr(tuple(items), items[0].span.join(items[-1].span))

    def parse_right_assoc_chain(self) -> RightTerm:
        left = self.parse_left_assoc_chain()
        if not self._at(TokenType.COLON):
            return left
        colon = self._advance()
        right = self.parse_right_assoc_chain()
        return RightChain(left, colon, right)

    def parse_left_assoc_chain(self) -> LeftTerm:
        acc: LeftTerm = self.parse_operator_mixfix_call()
        while self._at(TokenType.DOT):
            dot = self._advance()
            acc = LeftChain(acc, dot, self.parse_operator_mixfix_call())
        return acc

    def parse_operator_mixfix_call(self) -> MixfixCall:
        parts = [self._parse_mixfix_part()]
        while not self._at(*_MIXFIX_STOP):
            parts.append(self._parse_mixfix_part())
        return MixfixCall(tuple(parts))

    def _parse_mixfix_part(self) -> Operator | Term:
        if self._at(TokenType.OPERATOR):
            tok = self._advance()
            return Operator(str(tok.value), tok.span)
        return self.parse_alphanumeric_call()

    def parse_alphanumeric_call(self) -> Term:
        head = self.parse_atomic_expr()
        args: list[Atom] = []
        while self._at(*_ATOM_START):
            args.append(self.parse_atomic_expr())
        if not args:
            return head
        return AlphanumericCall(head, tuple(args))

    def parse_atomic_expr(self) -> Atom:
        tok = self._peek()

        if tok.type == TokenType.EOF:
            raise self._unexpected(tok)

        if tok.type == TokenType.IDENTIFIER:
            self._advance()
            return Name(str(tok.value), tok.span)

        if tok.type == TokenType.STRING:
            self._advance()
            return String(str(tok.value), tok.span)

        if tok.type == TokenType.NUMBER:
            self._advance()
            assert isinstance(tok.value, float)
            return Number(tok.value, tok.span)

        if tok.type in _MATCHING_CLOSER:
            return self._parse_group()

        raise self._unexpected(tok)

    def _parse_group(self) -> Group:
        open_tok = self._advance()
        closer = _MATCHING_CLOSER[open_tok.type]

        if self._at(*_CLOSERS, TokenType.EOF):
            # Empty or unclosed group; _expect reports a wrong closer or EOF
            items = ListExpr((), Span.at(self._peek().span.start))
        else:
            items = self.parse_list()

        close_tok = self._expect(closer)
        return Group(open_tok, items, close_tok)

    # ------------------------------------------------------------------
    # Errors
    # ------------------------------------------------------------------

    def _unexpected(self, tok: Token, expected: TokenType | None = None) -> ParseError:
        suffix = f", expected {expected.label}" if expected is not None else ""
        if tok.type == TokenType.EOF:
            return ParseError(
                ErrorKind.UNEXPECTED_EOF,
                f"unexpected end of input{suffix}",
                tok.span,
                self._lexer.source,
                expected=expected,
            )
        return ParseError(
            ErrorKind.UNEXPECTED_TOKEN,
            f"unexpected {_describe(tok)}{suffix}",
            tok.span,
            self._lexer.source,
            token=tok,
            expected=expected,
        )


# Module-level constants
_MATCHING_CLOSER: dict[TokenType, TokenType] = {
    TokenType.LPAREN: TokenType.RPAREN,
    TokenType.LBRACE: TokenType.RBRACE,
    TokenType.LBRACKET: TokenType.RBRACKET,
}
_CLOSERS: frozenset[TokenType] = frozenset(_MATCHING_CLOSER.values())
_ATOM_START: frozenset[TokenType] = frozenset(
    {TokenType.IDENTIFIER, TokenType.STRING, TokenType.NUMBER, *_MATCHING_CLOSER}
)
_MIXFIX_STOP: frozenset[TokenType] = frozenset(
    {TokenType.COMMA, TokenType.DOT, TokenType.COLON, TokenType.EOF, *_CLOSERS}
)
_CONTENT: frozenset[TokenType] = frozenset(
    {TokenType.IDENTIFIER, TokenType.OPERATOR, TokenType.STRING, TokenType.NUMBER}
)


def _describe(tok: Token) -> str:
    if tok.type in _CONTENT:
        return f"{tok.type.label} '{tok.raw}'"
    return tok.type.label


def parse_cst(source: str, filename: str = "input.lexpr") -> ListExpr:
    """Parse source text and return the concrete syntax tree."""
    return Parser(Lexer(source, filename)).parse()


def parse(source: str, filename: str = "input.lexpr") -> SList:
    """Convenience function: parse source text and return its S-expression."""
    from lexpr.lower import lower

    return lower(parse_cst(source, filename))


def try_parse(source: str, filename: str = "input.lexpr") -> SList | Diagnostic:
    """Like parse(), but return the first failure as a Diagnostic value."""
    try:
        return parse(source, filename)
    except (LexError, ParseError) as exc:
        return exc.to_diagnostic()
