"""Command line entry point for the tinyinfer read-evaluate loop."""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Sequence

from tinyinfer.repl import ReplConfig, repl

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tinyinfer",
        description="Read expressions line by line, infer variable types and evaluate.",
    )
    parser.add_argument("--prompt", default="> ", help="Prompt shown on a terminal.")
    parser.add_argument(
        "--no-eval",
        dest="evaluate",
        action="store_false",
        help="Only report inferred types, never evaluate.",
    )
    parser.add_argument(
        "--show-ast",
        action="store_true",
        help="Print the parsed expression before the inferred types.",
    )
    parser.add_argument(
        "--log-level",
        choices=LOG_LEVELS,
        default="WARNING",
        help="Logging level for diagnostics written to stderr.",
    )
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(list(argv) if argv is not None else None)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )
    config = ReplConfig(
        prompt=args.prompt, evaluate=args.evaluate, show_ast=args.show_ast
    )
    try:
        repl(config)
    except KeyboardInterrupt:
        return 130
    return 0


if __name__ == "__main__":
    sys.exit(main())
