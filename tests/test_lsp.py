"""Tests for the LSP server: diagnostic generation."""

from __future__ import annotations

import pytest
from lsprotocol.types import (
    DiagnosticSeverity,
    PublishDiagnosticsParams,
    TextDocumentItem,
    TextDocumentSyncKind,
)
from pygls.lsp.server import LanguageServer
from pygls.workspace import Workspace

from lexpr.lsp import _to_range, _validate
from lexpr.tokens import Position, Span

URI = "file:///test.lexpr"


@pytest.fixture
def lsp_env():
    """Create a LanguageServer with an initialized workspace and captured diagnostics."""
    ls = LanguageServer("test", "v0", text_document_sync_kind=TextDocumentSyncKind.Full)
    ws = Workspace(None)
    ls.protocol._workspace = ws

    published: list[PublishDiagnosticsParams] = []
    ls.text_document_publish_diagnostics = lambda params: published.append(params)

    def put(source: str, uri: str = URI) -> None:
        ws.put_text_document(
            TextDocumentItem(uri=uri, language_id="lexpr", version=0, text=source)
        )

    return ls, published, put


class TestLexErrors:
    def test_invalid_escape(self, lsp_env) -> None:
        ls, published, put = lsp_env
        put(r'f "a\qb"')
        _validate(ls, URI)

        assert len(published) == 1
        diags = published[0].diagnostics
        assert len(diags) == 1
        d = diags[0]
        assert d.severity == DiagnosticSeverity.Error
        assert d.source == "lexpr"
        # the backslash is at column 5 (1-based), character 4 (0-based)
        assert d.range.start.line == 0
        assert d.range.start.character == 4
        assert d.range.end.character == 5

    def test_unterminated_string(self, lsp_env) -> None:
        ls, published, put = lsp_env
        put('x\n  "never closed')
        _validate(ls, URI)

        d = published[0].diagnostics[0]
        assert d.range.start.line == 1
        assert d.range.start.character == 2


class TestParseErrors:
    def test_mismatched_bracket(self, lsp_env) -> None:
        ls, published, put = lsp_env
        put("(a\nb]")
        _validate(ls, URI)

        assert len(published) == 1
        diags = published[0].diagnostics
        assert len(diags) == 1
        d = diags[0]
        assert d.severity == DiagnosticSeverity.Error
        assert d.message == "unexpected ']', expected ')'"
        assert d.range.start.line == 1
        assert d.range.start.character == 1
        assert d.range.end.character == 2

    def test_unclosed_at_eof(self, lsp_env) -> None:
        ls, published, put = lsp_env
        put("{a")
        _validate(ls, URI)

        d = published[0].diagnostics[0]
        assert "end of input" in d.message
        assert d.range.start.character == 2


class TestClean:
    def test_valid_document_clears_diagnostics(self, lsp_env) -> None:
        ls, published, put = lsp_env
        put("n *: n - 1 .factorial")
        _validate(ls, URI)

        assert len(published) == 1
        assert published[0].uri == URI
        assert published[0].diagnostics == []

    def test_empty_document(self, lsp_env) -> None:
        ls, published, put = lsp_env
        put("")
        _validate(ls, URI)
        assert published[0].diagnostics == []


class TestToRange:
    def test_zero_based(self) -> None:
        r = _to_range(Span(Position(3, 4, 20), Position(3, 7, 23)))
        assert (r.start.line, r.start.character) == (2, 3)
        assert (r.end.line, r.end.character) == (2, 6)

    def test_min_width(self) -> None:
        r = _to_range(Span.at(Position(1, 1, 0)), min_width=1)
        assert r.end.character == 1
