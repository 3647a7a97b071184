#!/usr/bin/env python3
"""Command-line interface for semloc."""

from __future__ import annotations

import argparse
import logging
import sys
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path
from typing import NoReturn

from justhtml import JustHTML

from . import find_element, find_elements
from .errors import LocatorError, NoSuchElementError
from .naming import text_content
from .options import SearchOptions


def _get_version() -> str:
    try:
        return version("semloc")
    except PackageNotFoundError:  # pragma: no cover
        return "dev"


def _parse_args(argv: list[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="semloc",
        description="Find elements in an HTML document by semantic locator.",
        epilog=(
            "Examples:\n"
            "  semloc page.html \"{button 'Save'}\"\n"
            "  curl -s https://example.com | semloc - '{link}' --format text\n"
            "  semloc page.html '{list} outer {listitem}'\n"
            "  semloc page.html \"{checkbox 'Remember me' checked:true}\" --first\n"
            "\n"
            "If you don't have the 'semloc' command available, use:\n"
            "  python -m semloc ...\n"
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "path",
        nargs="?",
        help="HTML file to search, or '-' to read from stdin",
    )
    parser.add_argument(
        "locator",
        nargs="?",
        help="Semantic locator, e.g. \"{button 'OK'}\"",
    )
    parser.add_argument(
        "--format",
        choices=["html", "text"],
        default="html",
        help="Output format (default: html)",
    )
    parser.add_argument(
        "--first",
        action="store_true",
        help="Only output the first match, explaining on stderr if there is none",
    )
    parser.add_argument(
        "--include-hidden",
        action="store_true",
        help="Also match elements hidden from assistive technology",
    )
    parser.add_argument(
        "--include-presentational",
        action="store_true",
        help="Also match elements with role=presentation or role=none",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Log each search step to stderr",
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"semloc {_get_version()}",
    )

    args = parser.parse_args(argv)

    if not args.path or not args.locator:
        parser.print_help(sys.stderr)
        raise SystemExit(1)

    return args


def _read_html(path: str) -> str:
    if path == "-":
        return sys.stdin.read()

    return Path(path).read_text()


def main(argv: list[str] | None = None) -> NoReturn | None:
    args = _parse_args(sys.argv[1:] if argv is None else argv)
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    doc = JustHTML(_read_html(args.path))
    options = SearchOptions(include_hidden=args.include_hidden, include_presentational=args.include_presentational)

    try:
        if args.first:
            nodes = [find_element(args.locator, doc, options)]
        else:
            nodes = find_elements(args.locator, doc, options)
    except LocatorError as e:
        print(str(e), file=sys.stderr)
        raise SystemExit(2) from e
    except NoSuchElementError as e:
        print(str(e), file=sys.stderr)
        raise SystemExit(1) from e

    if not nodes:
        raise SystemExit(1)

    if args.format == "html":
        outputs = [node.to_html() for node in nodes]
    else:
        outputs = [text_content(node) for node in nodes]
    sys.stdout.write("\n".join(outputs))
    sys.stdout.write("\n")
    return None


if __name__ == "__main__":
    main()
