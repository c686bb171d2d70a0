"""Command line interface for the slimpdf toolkit."""

from __future__ import annotations

import argparse
import logging
from typing import Sequence

from ..compress.utils import get_logger
from .commands import compress, info

COMMAND_MODULES = [compress, info]


def _create_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="slimpdf", description="slimpdf CLI")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command")
    subparsers.required = True
    for module in COMMAND_MODULES:
        module.configure_parser(subparsers)
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    parser = _create_parser()
    args = parser.parse_args(argv)
    level = logging.DEBUG if args.verbose else logging.WARNING
    for name in ("slimpdf.compress", "slimpdf.cli"):
        get_logger(name).setLevel(level)
    return args.handler(args)


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
