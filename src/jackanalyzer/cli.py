"""Command-line interface for the Jack syntax analyzer."""

from __future__ import annotations

import argparse
import sys
import time
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from jackanalyzer.errors import ParseError

SOURCE_SUFFIX = ".jack"
CONFIG_NAME = "jackanalyzer.toml"
DEFAULT_SUFFIX = ".xml"
DEFAULT_INDENT = 2


@dataclass(frozen=True, slots=True)
class CliOptions:
    """Parsed CLI options."""

    input_path: Path
    output_dir: Path | None
    suffix: str
    indent: int
    tokens: bool
    watch: bool
    debug: bool


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser (separate function for testability)."""
    p = argparse.ArgumentParser(
        prog="jackanalyzer",
        description="Jack syntax analyzer: writes a parse tree for each .jack file",
    )
    p.add_argument("input", help="Input .jack file or directory of .jack files")
    p.add_argument(
        "-o",
        "--output-dir",
        metavar="DIR",
        help="Directory for output files (default: beside each source file)",
    )
    p.add_argument(
        "--suffix",
        metavar="SUFFIX",
        help=f"Output file suffix (default: {DEFAULT_SUFFIX})",
    )
    p.add_argument(
        "--indent",
        type=int,
        default=None,
        metavar="N",
        help=f"Spaces per nesting level (default: {DEFAULT_INDENT})",
    )
    p.add_argument(
        "--tokens",
        action="store_true",
        default=None,
        help="Also write the flat token listing to <name>T<suffix>",
    )
    p.add_argument(
        "--config",
        metavar="FILE",
        help=f"Config file (default: auto-discover {CONFIG_NAME})",
    )
    p.add_argument("--watch", action="store_true", help="Watch for changes and re-analyze")
    p.add_argument("--debug", action="store_true", help="Dump tokens to stderr")
    return p


def parse_suffix_arg(s: str) -> str:
    """Validate an output suffix such as ``.xml``."""
    if not s.startswith(".") or len(s) < 2 or "/" in s or "\\" in s:
        raise argparse.ArgumentTypeError(f"invalid suffix (expected e.g. .xml): {s}")
    if s.lower() == SOURCE_SUFFIX:
        raise argparse.ArgumentTypeError(f"output suffix would overwrite the source: {s}")
    return s


def load_config(config_path: Path | None, input_dir: Path) -> dict[str, Any]:
    """Load a TOML config file, returning an empty dict on missing/absent file."""
    path = config_path if config_path is not None else input_dir / CONFIG_NAME

    if not path.is_file():
        return {}

    with open(path, "rb") as f:
        return tomllib.load(f)


def resolve_options(args: argparse.Namespace) -> CliOptions:
    """Merge config file and CLI args into CliOptions.

    Precedence: defaults < config file < CLI flags. A relative
    ``[output] directory`` in the config is taken relative to the input.
    """
    input_path = Path(args.input)
    input_dir = input_path if input_path.is_dir() else input_path.parent
    if not input_dir.parts:
        input_dir = Path(".")

    config_path = Path(args.config) if args.config else None
    config = load_config(config_path, input_dir)

    cfg_output = config.get("output")
    if not isinstance(cfg_output, dict):
        cfg_output = {}

    # Output directory: config < CLI
    output_dir: Path | None = None
    cfg_dir = cfg_output.get("directory")
    if isinstance(cfg_dir, str):
        output_dir = input_dir / cfg_dir
    if args.output_dir:
        output_dir = Path(args.output_dir)

    # Suffix: default < config < CLI
    suffix = DEFAULT_SUFFIX
    cfg_suffix = cfg_output.get("suffix")
    if isinstance(cfg_suffix, str):
        suffix = parse_suffix_arg(cfg_suffix)
    if args.suffix is not None:
        suffix = parse_suffix_arg(args.suffix)

    # Indent: default < config < CLI
    indent = DEFAULT_INDENT
    cfg_indent = cfg_output.get("indent")
    if isinstance(cfg_indent, int) and not isinstance(cfg_indent, bool):
        indent = cfg_indent
    if args.indent is not None:
        indent = args.indent
    if indent < 0:
        raise argparse.ArgumentTypeError(f"indent must not be negative: {indent}")

    # Token listing: config < CLI
    tokens = False
    cfg_tokens = cfg_output.get("tokens")
    if isinstance(cfg_tokens, bool):
        tokens = cfg_tokens
    if args.tokens is not None:
        tokens = args.tokens

    return CliOptions(
        input_path=input_path,
        output_dir=output_dir,
        suffix=suffix,
        indent=indent,
        tokens=tokens,
        watch=args.watch,
        debug=args.debug,
    )


def discover_units(path: Path) -> list[Path]:
    """Return the .jack files to analyze: *path* itself, or a directory's entries.

    Files without the .jack suffix are skipped, also when named directly.
    """
    if path.is_dir():
        return sorted(p for p in path.iterdir() if p.is_file() and _is_source(p))
    return [path] if _is_source(path) else []


def _is_source(path: Path) -> bool:
    return path.suffix.lower() == SOURCE_SUFFIX


def output_path(unit: Path, options: CliOptions, marker: str = "") -> Path:
    """Same base name as *unit*, with the configured suffix and directory."""
    directory = options.output_dir if options.output_dir is not None else unit.parent
    return directory / f"{unit.stem}{marker}{options.suffix}"


def compile_source(source: str, options: CliOptions) -> tuple[str, str | None]:
    """Tokenize and parse source, returning (tree, token listing or None)."""
    from jackanalyzer.debug import dump_tokens, format_tokens
    from jackanalyzer.lexer import tokenize
    from jackanalyzer.parser import Parser

    tokens = tokenize(source)
    if options.debug:
        dump_tokens(tokens, file=sys.stderr)

    tree = Parser(tokens, source, options.indent).parse()
    listing = format_tokens(tokens) if options.tokens else None
    return tree, listing


def analyze_unit(unit: Path, options: CliOptions) -> int:
    """Analyze one compilation unit. Returns its exit code (0/1/2)."""
    print(f"Analyzing {unit}", file=sys.stderr)
    try:
        source = unit.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        print(f"error: cannot read {unit}: {exc}", file=sys.stderr)
        return 2

    try:
        tree, listing = compile_source(source, options)
    except ParseError as exc:
        print(exc.format(str(unit)), file=sys.stderr)
        return 1

    target = output_path(unit, options)
    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(tree, encoding="utf-8")
        if listing is not None:
            output_path(unit, options, "T").write_text(listing, encoding="utf-8")
    except OSError as exc:
        print(f"error: cannot write {target}: {exc}", file=sys.stderr)
        return 2

    print(f"Wrote {target}", file=sys.stderr)
    return 0


def analyze_all(options: CliOptions) -> int:
    """Analyze every discovered unit; one failure does not stop the batch."""
    units = discover_units(options.input_path)
    status = 0
    for unit in units:
        status = max(status, analyze_unit(unit, options))
    return status


def watch_loop(options: CliOptions) -> None:
    """Poll discovered units for changes, re-analyzing each modified one."""
    last_mtimes: dict[Path, float] = {}
    print(f"Watching {options.input_path} for changes...", file=sys.stderr)
    try:
        while True:
            for unit in discover_units(options.input_path):
                try:
                    mtime = unit.stat().st_mtime
                except OSError:
                    continue
                if last_mtimes.get(unit) != mtime:
                    last_mtimes[unit] = mtime
                    analyze_unit(unit, options)
            time.sleep(0.5)
    except KeyboardInterrupt:
        pass


def main(argv: list[str] | None = None) -> int:
    """CLI entry point. Returns exit code (0/1/2). Does not call sys.exit()."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        options = resolve_options(args)
    except (argparse.ArgumentTypeError, tomllib.TOMLDecodeError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    if not options.input_path.exists():
        print(f"error: no such file or directory: {options.input_path}", file=sys.stderr)
        return 2

    if options.watch:
        watch_loop(options)
        return 0

    return analyze_all(options)
