from __future__ import annotations

import argparse
from typing import Tuple


def parse_filter(expr: str) -> Tuple[str, str, str]:
    """
    Parse a filter expression into (field, operator, value).

    ``age=30`` filters on equality, ``age__gt=30`` applies the ``gt`` lookup.
    The value may itself contain ``=``; only the first one splits.
    """
    if "=" not in expr:
        raise argparse.ArgumentTypeError(f"expected FIELD[__OP]=VALUE, got {expr!r}")
    key, value = expr.split("=", 1)
    key = key.strip()
    name, _, op = key.partition("__")
    if not name:
        raise argparse.ArgumentTypeError(f"missing field name in {expr!r}")
    return name, op, value


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="skylark-query", description="Skylark API read queries")
    ap.add_argument("collection", help="Collection name, e.g. users")
    ap.add_argument("--id", default="", help="Fetch a single resource by id")
    ap.add_argument("--endpoint", default=None, help="Base URL; defaults to $SKYLARK_ENDPOINT")
    ap.add_argument("--field", action="append", default=[], help="Field to return; can repeat")
    ap.add_argument("--expand", action="append", default=[], help="Related field to embed; can repeat")
    ap.add_argument(
        "--filter",
        action="append",
        default=[],
        type=parse_filter,
        help="FIELD=VALUE or FIELD__OP=VALUE (op: gt, gte, lt, lte, in, contains); can repeat",
    )
    ap.add_argument("--order", default=None, help="Field to order results by")
    ap.add_argument("--timeout", type=float, default=None, help="Overall deadline in seconds")
    ap.add_argument("--url-only", action="store_true", help="Print the request URL instead of executing it")
    return ap
