from __future__ import annotations

import json
import re
from typing import Any, Dict, Optional
from urllib.parse import urlencode, urlsplit

from pydantic import TypeAdapter

from ..domain.context import Context
from ..domain.errors import ApiError, BodyReadError, ContractError, RequestBuildError
from ..domain.interfaces import Transport, TransportResponse
from ..domain.models import Field, Filter
from ..infrastructure.http.transport import default_transport
from ..infrastructure.logging import get_logger
from ..infrastructure.timeouts import call_timeout, run_with_context

logger = get_logger("skylark_client.request")

_BAD_ESCAPE = re.compile(r"%(?![0-9A-Fa-f]{2})")


def _check_url(raw: str) -> str:
    """Reject strings that do not parse as a URL reference (absolute or relative)."""
    if any(ord(ch) < 0x20 or ord(ch) == 0x7F for ch in raw):
        raise RequestBuildError(f"parse {raw!r}: invalid character in URL")
    try:
        parts = urlsplit(raw)
        _ = parts.port
    except ValueError as exc:
        raise RequestBuildError(f"parse {raw!r}: {exc}") from exc
    if _BAD_ESCAPE.search(parts.path):
        raise RequestBuildError(f"parse {raw!r}: invalid URL escape")
    return raw


def _close(res: TransportResponse) -> None:
    res.close()


class Request:
    """A read query against one collection (or one resource) of the Skylark API.

    Configuration calls mutate the request and return it, so they chain:

        Request(endpoint, "users").add_field(Field("name")).with_filter("age", Filter.greater_than(30))

    A Request is meant to be built and executed by a single caller; it holds
    no locks.
    """

    def __init__(self, endpoint: str, collection: str, id: str = "", transport: Optional[Transport] = None) -> None:
        self._endpoint = endpoint
        self._collection = collection
        self.id = id
        self.fields: Dict[str, Field] = {}
        self._aux: Dict[str, str] = {}
        self._ctx = Context.background()
        self._transport = transport or default_transport()

    @property
    def endpoint(self) -> str:
        return self._endpoint

    @property
    def collection(self) -> str:
        return self._collection

    @property
    def context(self) -> Context:
        return self._ctx

    @property
    def auxiliary_params(self) -> Dict[str, str]:
        return dict(self._aux)

    def add_field(self, field: Field) -> "Request":
        """Select a field; once any field is selected only selected fields are returned."""
        self.fields[field.name] = field
        return self

    def expand(self, field: Field) -> "Request":
        """Embed a related field without listing it among the selected fields."""
        field.is_expanded = True
        field.is_included = False
        return self.add_field(field)

    def order_by(self, field: Field) -> "Request":
        self._aux["order"] = field.name
        return self

    def with_filter(self, field_name: str, flt: Filter) -> "Request":
        """Filter on ``field_name``; the field does not have to be selected."""
        self._aux[flt.key_for(field_name)] = flt.value
        return self

    def with_context(self, ctx: Context) -> "Request":
        if not isinstance(ctx, Context):
            raise ContractError("nil context")
        self._ctx = ctx
        return self

    def query_params(self) -> Dict[str, str]:
        params: Dict[str, str] = {}
        for field in self.fields.values():
            params = field.contribute(params)
        params.update(self._aux)
        return params

    def render_url(self) -> str:
        raw = self._endpoint + self._collection + "/"
        if self.id:
            raw += self.id + "/"
        params = self.query_params()
        if params:
            raw += "?" + urlencode(sorted(params.items()))
        return _check_url(raw)

    def execute(self, destination: Any = None) -> Any:
        """
        Issue the GET and decode the JSON body.

        Args:
            destination: Type to validate the body into (pydantic model,
                dataclass, ``list[...]``, ...). None returns plain JSON values.

        Returns:
            The decoded body.

        Raises:
            RequestBuildError: The URL could not be assembled.
            Cancelled, DeadlineExceeded: The context finished first.
            ApiError: Non-2xx status; the message is the raw response body.
            BodyReadError: The response body could not be read.
        """
        url = self.render_url()
        ctx = self._ctx
        timeout = call_timeout(ctx)
        logger.debug("GET %s | timeout=%s", url, timeout)

        res = run_with_context(ctx, lambda: self._transport.get(url, timeout), on_abandon=_close)
        try:
            logger.debug("GET %s | status=%d", url, res.status_code)
            if res.status_code < 200 or res.status_code >= 300:
                try:
                    message = run_with_context(ctx, res.read)
                except Exception as exc:
                    raise BodyReadError(f"unable to read error message from server: {exc}") from exc
                raise ApiError(message.decode("utf-8", errors="replace"), status_code=res.status_code)

            try:
                body = run_with_context(ctx, res.read)
            except Exception as exc:
                raise BodyReadError(f"unable to read response body: {exc}") from exc
        finally:
            res.close()

        if destination is None:
            return json.loads(body)
        return TypeAdapter(destination).validate_json(body)
