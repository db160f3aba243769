"""Minimal LSP server for lexpr, diagnostics only."""

from __future__ import annotations

from lsprotocol.types import (
    TEXT_DOCUMENT_DID_CHANGE,
    TEXT_DOCUMENT_DID_OPEN,
    Diagnostic,
    DiagnosticSeverity,
    DidChangeTextDocumentParams,
    DidOpenTextDocumentParams,
    Position,
    PublishDiagnosticsParams,
    Range,
    TextDocumentSyncKind,
)
from pygls.lsp.server import LanguageServer

from lexpr import __version__
from lexpr.errors import LexError, ParseError
from lexpr.parser import parse
from lexpr.tokens import Span

server = LanguageServer(
    "lexpr-lsp", __version__, text_document_sync_kind=TextDocumentSyncKind.Full
)


def _to_range(span: Span, *, min_width: int = 0) -> Range:
    """Convert a 1-based span to a 0-based LSP range."""
    start_line = span.start.line - 1
    start_col = span.start.column - 1
    end_line = span.end.line - 1
    end_col = span.end.column - 1
    if end_line == start_line:
        end_col = max(end_col, start_col + min_width)
    return Range(
        start=Position(line=start_line, character=start_col),
        end=Position(line=end_line, character=end_col),
    )


def _validate(ls: LanguageServer, uri: str) -> None:
    """Parse the document and publish its diagnostics."""
    doc = ls.workspace.get_text_document(uri)
    source = doc.source
    filename = uri.rsplit("/", 1)[-1] if "/" in uri else uri
    diagnostics: list[Diagnostic] = []

    try:
        parse(source, filename)
    except LexError as exc:
        # Lex errors carry a position; underline one character
        diagnostics.append(
            Diagnostic(
                range=_to_range(exc.span, min_width=1),
                message=exc.message,
                severity=DiagnosticSeverity.Error,
                source="lexpr",
            )
        )
    except ParseError as exc:
        diagnostics.append(
            Diagnostic(
                range=_to_range(exc.span),
                message=exc.message,
                severity=DiagnosticSeverity.Error,
                source="lexpr",
            )
        )

    ls.text_document_publish_diagnostics(
        PublishDiagnosticsParams(uri=uri, diagnostics=diagnostics)
    )


@server.feature(TEXT_DOCUMENT_DID_OPEN)
def did_open(ls: LanguageServer, params: DidOpenTextDocumentParams) -> None:
    _validate(ls, params.text_document.uri)


@server.feature(TEXT_DOCUMENT_DID_CHANGE)
def did_change(ls: LanguageServer, params: DidChangeTextDocumentParams) -> None:
    _validate(ls, params.text_document.uri)


def main() -> None:
    server.start_io()
