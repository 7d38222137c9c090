from __future__ import annotations

import json
import sys
from typing import Optional, Sequence

import requests
from pydantic import ValidationError

from ..application.client import SkylarkClient
from ..application.dto import QueryRequest
from ..application.use_cases.run_query import RunQueryUseCase
from ..domain.errors import SkylarkError
from ..infrastructure.logging import get_logger
from .parsers import build_parser

logger = get_logger("skylark_client.cli")


def _to_query(ns) -> QueryRequest:
    return QueryRequest(
        collection=ns.collection,
        id=ns.id or "",
        fields=list(ns.field or []),
        expand=list(ns.expand or []),
        filters=list(ns.filter or []),
        order=ns.order,
        timeout=ns.timeout,
    )


def run(argv: Optional[Sequence[str]] = None, client: Optional[SkylarkClient] = None) -> int:
    ns = build_parser().parse_args(argv)
    client = client or SkylarkClient(endpoint=ns.endpoint)
    use_case = RunQueryUseCase(client)
    query = _to_query(ns)

    try:
        if ns.url_only:
            print(use_case.build(query).render_url())
            return 0
        logger.info("Query request | collection=%s | id=%s", query.collection, query.id or "-")
        result = use_case.execute(query)
    except (SkylarkError, requests.RequestException, json.JSONDecodeError, ValidationError) as exc:
        logger.error("Query failed | collection=%s | error=%s", query.collection, exc)
        return 1

    print(json.dumps(result, indent=2))
    return 0


def main() -> int:
    return run(sys.argv[1:])


if __name__ == "__main__":
    raise SystemExit(main())
