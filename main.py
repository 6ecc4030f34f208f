#!/usr/bin/env python3
from __future__ import annotations
import argparse
import logging
import sys
from typing import Dict, List, Optional

from config import SUPPORTED_WIDTHS, settings
from decimal_parser import parse as parse_decimal, to_decimal
from errors import RationalError
from parser import evaluate

logger = logging.getLogger(__name__)


def _parse_vars(items: List[str]) -> Dict[str, object]:
    env: Dict[str, object] = {}
    for item in items:
        name, sep, value = item.partition("=")
        if not sep or not name:
            raise argparse.ArgumentTypeError(f"expected NAME=LITERAL, got {item!r}")
        env[name.strip()] = parse_decimal(value.strip())
    return env


def build_arg_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="rational-eval",
        description="Evaluate arithmetic over exact decimal literals, e.g. '0.(3) + 1.5'.",
    )
    ap.add_argument("expressions", nargs="+", metavar="EXPR")
    ap.add_argument("--decimal", action="store_true", help="print results as repeating decimals")
    ap.add_argument("--var", action="append", default=[], metavar="NAME=LITERAL", help="bind a variable")
    ap.add_argument("--int-bits", type=int, choices=SUPPORTED_WIDTHS, default=None,
                    help="fail instead of exceeding a signed integer of this width")
    ap.add_argument("-v", "--verbose", action="store_true")
    return ap


def main(argv: Optional[List[str]] = None) -> int:
    args = build_arg_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s: %(message)s",
    )
    changes = {} if args.int_bits is None else {"int_bits": args.int_bits}
    try:
        with settings(**changes):
            env = _parse_vars(args.var)
            for expr in args.expressions:
                value = evaluate(expr, env)
                print(to_decimal(value) if args.decimal else value.to_string())
    except (RationalError, argparse.ArgumentTypeError) as e:
        logger.error("%s", e)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
