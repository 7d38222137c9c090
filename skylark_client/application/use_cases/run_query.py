from __future__ import annotations

from typing import Any

from ..client import SkylarkClient
from ..dto import QueryRequest
from ..request import Request
from ...domain.context import Context
from ...domain.models import Field, Filter


class RunQueryUseCase:
    """Use-case: translate a QueryRequest into a Request and execute it."""

    def __init__(self, client: SkylarkClient) -> None:
        self._client = client

    def build(self, req: QueryRequest) -> Request:
        request = self._client.request(req.collection, req.id)
        for name in req.fields:
            request.add_field(Field(name))
        for name in req.expand:
            request.expand(Field(name))
        for name, op, value in req.filters:
            request.with_filter(name, Filter(value=value, operator=op))
        if req.order:
            request.order_by(Field(req.order))
        if req.timeout is not None:
            request.with_context(Context.with_timeout(req.timeout))
        return request

    def execute(self, req: QueryRequest) -> Any:
        return self.build(req).execute(req.destination)
