"""Command-line interface for lexpr."""

from __future__ import annotations

import argparse
import io
import sys
import time
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from lexpr.errors import LexError, ParseError

STDIN = "-"


@dataclass(frozen=True, slots=True)
class CliOptions:
    """Parsed CLI options."""

    input_file: Path | None
    expr: str | None
    output_file: Path | None
    tokens: bool
    watch: bool
    debug: bool


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser (separate function for testability)."""
    p = argparse.ArgumentParser(
        prog="lexpr",
        description="Parse lexpr source and print its S-expression",
    )
    p.add_argument("input", nargs="?", help="Input file ('-' for stdin)")
    p.add_argument("-e", "--expr", metavar="SOURCE", help="Parse SOURCE instead of a file")
    p.add_argument("-o", "--output", help="Output file (default: stdout)")
    p.add_argument(
        "--tokens",
        action="store_true",
        default=None,
        help="Print the token stream instead of the S-expression",
    )
    p.add_argument(
        "--config",
        metavar="FILE",
        help="Config file (default: auto-discover lexpr.toml)",
    )
    p.add_argument("--watch", action="store_true", help="Watch for changes and reparse")
    p.add_argument("--debug", action="store_true", default=None, help="Dump CST to stderr")
    return p


def load_config(config_path: Path | None, input_dir: Path) -> dict[str, Any]:
    """Load a TOML config file, returning an empty dict on missing/absent file."""
    path = config_path if config_path is not None else input_dir / "lexpr.toml"

    if not path.is_file():
        return {}

    with open(path, "rb") as f:
        return tomllib.load(f)


def _table(config: dict[str, Any], name: str) -> dict[str, Any]:
    value = config.get(name)
    return value if isinstance(value, dict) else {}


def resolve_options(args: argparse.Namespace) -> CliOptions:
    """Merge config file and CLI args into CliOptions.

    Precedence: config file < CLI flags.
    """
    if args.input is None and args.expr is None:
        raise argparse.ArgumentTypeError("no input: give a file, '-' or --expr")
    if args.input is not None and args.expr is not None:
        raise argparse.ArgumentTypeError("give either an input file or --expr, not both")

    input_file = Path(args.input) if args.input is not None else None
    if input_file is not None and args.input != STDIN:
        input_dir = input_file.parent
        if not input_dir.parts:
            input_dir = Path(".")
    else:
        input_dir = Path(".")

    if args.watch and (input_file is None or args.input == STDIN):
        raise argparse.ArgumentTypeError("--watch needs an input file")

    config_path = Path(args.config) if args.config else None
    config = load_config(config_path, input_dir)
    cfg_output = _table(config, "output")
    cfg_debug = _table(config, "debug")

    output_file: Path | None = None
    if isinstance(cfg_output.get("file"), str):
        output_file = Path(cfg_output["file"])
    if args.output:
        output_file = Path(args.output)

    tokens = bool(cfg_output.get("tokens", False))
    if args.tokens is not None:
        tokens = args.tokens

    debug = bool(cfg_debug.get("cst", False))
    if args.debug is not None:
        debug = args.debug

    return CliOptions(
        input_file=input_file,
        expr=args.expr,
        output_file=output_file,
        tokens=tokens,
        watch=args.watch,
        debug=debug,
    )


def read_source(options: CliOptions) -> tuple[str, str]:
    """Return (source, filename) for the configured input."""
    if options.expr is not None:
        return options.expr, "<expr>"
    assert options.input_file is not None
    if str(options.input_file) == STDIN:
        return sys.stdin.read(), "<stdin>"
    return options.input_file.read_text(encoding="utf-8"), str(options.input_file)


def process(options: CliOptions) -> str:
    """Read and parse the input, returning the text to output."""
    from lexpr.debug import dump_cst, dump_tokens
    from lexpr.lexer import tokenize
    from lexpr.lower import lower
    from lexpr.parser import parse_cst
    from lexpr.sexpr import stringify

    source, filename = read_source(options)

    if options.tokens:
        buf = io.StringIO()
        dump_tokens(tokenize(source, filename), file=buf)
        return buf.getvalue()

    cst = parse_cst(source, filename)
    if options.debug:
        dump_cst(cst)
    return stringify(lower(cst)) + "\n"


def _write(options: CliOptions, text: str) -> None:
    if options.output_file:
        options.output_file.write_text(text, encoding="utf-8")
    else:
        sys.stdout.write(text)
        sys.stdout.flush()


def _report(exc: LexError | ParseError, options: CliOptions) -> None:
    if options.input_file is None:
        filename = "<expr>"
    elif str(options.input_file) == STDIN:
        filename = "<stdin>"
    else:
        filename = str(options.input_file)
    print(exc.format(filename), file=sys.stderr)


def watch_loop(options: CliOptions) -> None:
    """Poll input file for changes, reparse on each modification."""
    assert options.input_file is not None
    last_mtime = 0.0
    print(f"Watching {options.input_file} for changes...", file=sys.stderr)
    try:
        while True:
            try:
                mtime = options.input_file.stat().st_mtime
            except OSError:
                time.sleep(0.5)
                continue
            if mtime != last_mtime:
                last_mtime = mtime
                try:
                    _write(options, process(options))
                    print(f"Parsed {options.input_file}", file=sys.stderr)
                except (LexError, ParseError) as exc:
                    _report(exc, options)
            time.sleep(0.5)
    except KeyboardInterrupt:
        pass


def main(argv: list[str] | None = None) -> int:
    """CLI entry point. Returns exit code (0/1/2). Does not call sys.exit()."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        options = resolve_options(args)
    except argparse.ArgumentTypeError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2
    except tomllib.TOMLDecodeError as exc:
        print(f"error: invalid config file: {exc}", file=sys.stderr)
        return 2

    if options.watch:
        watch_loop(options)
        return 0

    try:
        _write(options, process(options))
    except (LexError, ParseError) as exc:
        _report(exc, options)
        return 1
    except OSError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    return 0
