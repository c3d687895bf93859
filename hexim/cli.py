"""Command-line front door for hexim.

Parses CLI options, resolves the input source (file path or fresh buffer
length), and dispatches into dump mode or the interactive session.
"""

from __future__ import annotations

import argparse
import logging
import shutil
import sys
from pathlib import Path

from .buffer import ByteBuffer
from .config import load_fallback_size, load_theme_name, save_theme_name
from .dump import DEFAULT_STYLE, print_dump
from .errors import ConfigurationError, LoadError, TerminalUnavailable
from .layout import columns_for_width
from .logging_config import setup_logging
from .runtime import run_session
from .theme import available_theme_names, normalize_theme_name, resolve_theme

logger = logging.getLogger(__name__)

MISSING_INPUT_MESSAGE = "Error: input file is required unless using --create\nUsage: see --help for usage"


def _non_negative_int(value: str) -> int:
    """argparse type for buffer lengths."""
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid integer value: {value!r}") from exc
    if parsed < 0:
        raise argparse.ArgumentTypeError("value must be >= 0")
    return parsed


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="hexim", description="A terminal hex viewer and editor.")
    parser.add_argument("input_pos", nargs="?", default=None, metavar="PATH", help="Input file (positional).")
    parser.add_argument("-i", "--input", dest="input_flag", metavar="PATH", default=None, help="Input file (flag).")
    parser.add_argument(
        "-c",
        "--create",
        type=_non_negative_int,
        default=None,
        metavar="LENGTH",
        help="Create a new zero-filled buffer with the given length.",
    )
    parser.add_argument("-r", "--read-only", action="store_true", help="Enable read-only mode.")
    parser.add_argument("-d", "--dump", action="store_true", help="Dump the hex grid to stdout and exit.")
    parser.add_argument("--no-color", action="store_true", help="Disable color output.")
    parser.add_argument(
        "--theme",
        default=None,
        help=f"UI theme name ({', '.join(available_theme_names())}); remembered for later sessions.",
    )
    parser.add_argument("--style", default=DEFAULT_STYLE, help="Pygments style name for --dump coloring.")
    parser.add_argument("--log-file", default=None, metavar="PATH", help="Append debug logs to PATH.")
    return parser


def _check_conflicts(parser: argparse.ArgumentParser, args: argparse.Namespace) -> None:
    if args.input_pos is not None and args.input_flag is not None:
        parser.error("a positional input file cannot be combined with --input")
    if args.create is not None:
        if args.input_pos is not None or args.input_flag is not None:
            parser.error("--create cannot be combined with an input file")
        if args.read_only:
            parser.error("--create cannot be combined with --read-only")
        if args.dump:
            parser.error("--create cannot be combined with --dump")
    if args.read_only and args.dump:
        parser.error("--read-only cannot be combined with --dump")


def resolve_source(args: argparse.Namespace) -> Path | int:
    """Return the input path or the requested buffer length."""
    input_path = args.input_flag if args.input_flag is not None else args.input_pos
    if input_path is not None:
        return Path(input_path)
    if args.create is not None:
        return args.create
    raise ConfigurationError(MISSING_INPUT_MESSAGE)


def _dump_columns() -> int:
    term = shutil.get_terminal_size(load_fallback_size())
    return columns_for_width(term.columns)


def main(argv: list[str] | None = None) -> None:
    """Parse arguments and run dump mode or the interactive editor.

    Exits with status 1 (via ``SystemExit`` with a message) when no input
    source is given, the input file cannot be read, or stdin is not a
    terminal.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    _check_conflicts(parser, args)
    setup_logging(log_file=args.log_file)

    try:
        source = resolve_source(args)
    except ConfigurationError as exc:
        raise SystemExit(str(exc)) from exc

    if isinstance(source, Path):
        try:
            buffer = ByteBuffer.load(source, read_only=args.read_only)
        except LoadError as exc:
            logger.error("could not load %s", source)
            raise SystemExit(f"Error: {exc}") from exc
    else:
        buffer = ByteBuffer.create(source, read_only=args.read_only)

    if args.dump:
        color = not args.no_color and sys.stdout.isatty()
        print_dump(bytes(buffer.working), _dump_columns(), color=color, style=args.style)
        return

    if args.theme is not None:
        theme_name = normalize_theme_name(args.theme)
        save_theme_name(theme_name)
    else:
        theme_name = load_theme_name()
    try:
        run_session(
            buffer,
            theme=resolve_theme(theme_name, no_color=args.no_color),
            fallback_size=load_fallback_size(),
        )
    except TerminalUnavailable as exc:
        raise SystemExit(f"Error: {exc}") from exc


if __name__ == "__main__":
    main()
