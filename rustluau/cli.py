"""Command-line driver: translate a Rust file and print the Luau tree as JSON."""

from __future__ import annotations

import argparse
import json
import logging
import sys

from .api import ast_stats, dump_ast
from .errors import TranslationError

logger = logging.getLogger(__name__)


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="rustluau", description="Rust to Luau AST translator"
    )
    parser.add_argument("file", help="Rust source file to translate ('-' for stdin)")
    parser.add_argument(
        "--function", "-f", default="", help="Translate only this function"
    )
    parser.add_argument(
        "--stats", action="store_true", help="Print node-kind counts instead of the tree"
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Enable debug logging"
    )
    return parser


def _read_source(path: str) -> str:
    if path == "-":
        return sys.stdin.read()
    with open(path, encoding="utf-8") as f:
        return f.read()


def main(argv: list[str] | None = None) -> int:
    args = build_arg_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        source = _read_source(args.file)
        if args.stats:
            output = json.dumps(ast_stats(source), indent=2, sort_keys=True)
        else:
            output = dump_ast(source, function_name=args.function)
    except OSError as exc:
        logger.error("Cannot read %s: %s", args.file, exc)
        return 1
    except (TranslationError, ValueError) as exc:
        logger.error("Translation failed: %s", exc)
        return 1

    print(output)
    return 0


if __name__ == "__main__":
    sys.exit(main())
