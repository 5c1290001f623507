"""CLI entry point.

Usage:
    python -m replyclaw extract MESSAGE.txt              # print the reply
    python -m replyclaw extract MESSAGE.html             # HTML picked from suffix
    python -m replyclaw extract - --mime-type text/html  # read stdin
    python -m replyclaw markers MESSAGE.txt              # show line markers
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from rich.logging import RichHandler
from rich.markup import escape

from . import config
from .display import console, display_markers, display_reply
from .extractor import InvalidMimeTypeError, extract_from
from .link_guard import preprocess
from .text_extractor import find_quotation, get_delimiter, mark_message_lines, split_lines

_HTML_SUFFIXES = {".htm", ".html"}


def _read_message(path: str) -> str:
    if path == "-":
        return sys.stdin.read()
    return Path(path).read_text(encoding="utf-8", errors="replace")


def _guess_mime_type(path: str) -> str:
    if Path(path).suffix.lower() in _HTML_SUFFIXES:
        return "text/html"
    return config.DEFAULT_MIME_TYPE


# ---------------------------------------------------------------------------
# Subcommand: extract
# ---------------------------------------------------------------------------

def cmd_extract(args: argparse.Namespace) -> None:
    """Print the newest message of a body, without quotations."""
    message = _read_message(args.path)
    mime_type = args.mime_type or _guess_mime_type(args.path)

    try:
        reply = extract_from(message, mime_type)
    except InvalidMimeTypeError as exc:
        console.print(f"[red]{escape(str(exc))}[/red]")
        sys.exit(2)

    display_reply(reply)


# ---------------------------------------------------------------------------
# Subcommand: markers
# ---------------------------------------------------------------------------

def cmd_markers(args: argparse.Namespace) -> None:
    """Show how each line of a plain-text body was classified."""
    message = _read_message(args.path)

    lines = split_lines(preprocess(message, get_delimiter(message)))
    markers = mark_message_lines(lines)
    display_markers(lines, markers, find_quotation(lines, markers))


# ---------------------------------------------------------------------------
# Argument parser
# ---------------------------------------------------------------------------

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="python -m replyclaw",
        description="Extract the reply from an email message body",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    # extract
    ex = sub.add_parser("extract", help="Print the reply without quoted messages")
    ex.add_argument("path", help="Message body file, or - for stdin")
    ex.add_argument(
        "--mime-type",
        help="text/plain or text/html (default: guessed from the file suffix)",
    )

    # markers
    mk = sub.add_parser("markers", help="Show line markers of a plain-text body")
    mk.add_argument("path", help="Message body file, or - for stdin")

    return parser


def main(argv: list[str] | None = None) -> None:
    logging.basicConfig(
        level=config.LOG_LEVEL,
        format="%(message)s",
        handlers=[RichHandler(console=console, rich_tracebacks=True, show_path=False)],
    )

    parser = build_parser()
    args = parser.parse_args(argv)

    commands = {
        "extract": cmd_extract,
        "markers": cmd_markers,
    }

    try:
        commands[args.command](args)
    except OSError as exc:
        console.print(f"[red]Cannot read {escape(args.path)}: {escape(str(exc.strerror or exc))}[/red]")
        sys.exit(1)


if __name__ == "__main__":
    main()
