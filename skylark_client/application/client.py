from __future__ import annotations

from typing import Any, Optional

from .request import Request
from ..domain.interfaces import Transport
from ..infrastructure.config import skylark_endpoint
from ..infrastructure.http.transport import default_transport


class SkylarkClient:
    """Entry point that hands out Requests sharing one endpoint and transport."""

    def __init__(self, endpoint: Optional[str] = None, transport: Optional[Transport] = None) -> None:
        base = endpoint or skylark_endpoint()
        self.endpoint = base if base.endswith("/") else base + "/"
        self.transport = transport or default_transport()

    def request(self, collection: str, id: str = "") -> Request:
        return Request(self.endpoint, collection, id, transport=self.transport)

    def get(self, collection: str, id: str, destination: Any = None) -> Any:
        """Fetch a single resource by id."""
        return self.request(collection, id).execute(destination)
