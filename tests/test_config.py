"""Tests for TOML config file loading."""

from __future__ import annotations

from pathlib import Path

from lexpr.cli import build_parser, load_config, main, resolve_options


class TestLoadConfig:
    def test_missing_config_returns_empty(self, tmp_path: Path) -> None:
        assert load_config(None, tmp_path) == {}

    def test_explicit_path(self, tmp_path: Path) -> None:
        cfg = tmp_path / "custom.toml"
        cfg.write_text("[output]\ntokens = true\n")
        result = load_config(cfg, tmp_path)
        assert result["output"] == {"tokens": True}

    def test_auto_discover_lexpr_toml(self, tmp_path: Path) -> None:
        cfg = tmp_path / "lexpr.toml"
        cfg.write_text("[debug]\ncst = true\n")
        result = load_config(None, tmp_path)
        assert result["debug"] == {"cst": True}


class TestConfigMerge:
    def _resolve(self, *argv: str):
        return resolve_options(build_parser().parse_args(list(argv)))

    def test_defaults_without_config(self, tmp_path: Path) -> None:
        src = tmp_path / "prog.lexpr"
        src.write_text("")
        opts = self._resolve(str(src))
        assert opts.tokens is False
        assert opts.debug is False
        assert opts.output_file is None

    def test_config_tokens_and_debug(self, tmp_path: Path) -> None:
        (tmp_path / "lexpr.toml").write_text("[output]\ntokens = true\n\n[debug]\ncst = true\n")
        src = tmp_path / "prog.lexpr"
        src.write_text("")
        opts = self._resolve(str(src))
        assert opts.tokens is True
        assert opts.debug is True

    def test_config_output_file(self, tmp_path: Path) -> None:
        (tmp_path / "lexpr.toml").write_text('[output]\nfile = "from-config.sexpr"\n')
        src = tmp_path / "prog.lexpr"
        src.write_text("")
        opts = self._resolve(str(src))
        assert opts.output_file == Path("from-config.sexpr")

    def test_cli_overrides_config_output(self, tmp_path: Path) -> None:
        (tmp_path / "lexpr.toml").write_text('[output]\nfile = "from-config.sexpr"\n')
        src = tmp_path / "prog.lexpr"
        src.write_text("")
        opts = self._resolve(str(src), "-o", "cli.sexpr")
        assert opts.output_file == Path("cli.sexpr")

    def test_explicit_config_flag(self, tmp_path: Path) -> None:
        cfg = tmp_path / "other.toml"
        cfg.write_text("[output]\ntokens = true\n")
        src = tmp_path / "prog.lexpr"
        src.write_text("")
        opts = self._resolve(str(src), "--config", str(cfg))
        assert opts.tokens is True

    def test_expr_discovers_in_cwd(self, tmp_path: Path, monkeypatch) -> None:
        monkeypatch.chdir(tmp_path)
        (tmp_path / "lexpr.toml").write_text("[debug]\ncst = true\n")
        opts = self._resolve("-e", "x")
        assert opts.debug is True

    def test_non_table_sections_ignored(self, tmp_path: Path) -> None:
        (tmp_path / "lexpr.toml").write_text('output = "nope"\n')
        src = tmp_path / "prog.lexpr"
        src.write_text("")
        opts = self._resolve(str(src))
        assert opts.output_file is None


class TestInvalidConfig:
    def test_invalid_toml_returns_2(self, tmp_path: Path, capsys) -> None:
        (tmp_path / "lexpr.toml").write_text("[output\n")
        src = tmp_path / "prog.lexpr"
        src.write_text("x")
        assert main([str(src)]) == 2
        assert "invalid config" in capsys.readouterr().err
