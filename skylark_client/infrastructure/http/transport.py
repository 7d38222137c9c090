from __future__ import annotations

import threading
from typing import Dict, Optional

import requests

from ...domain.interfaces import Transport, TransportResponse
from ..config import http_timeout, user_agent


class RequestsResponse(TransportResponse):
    """Streams the body of a ``requests.Response`` on demand."""

    def __init__(self, response: requests.Response) -> None:
        self._response = response
        self.status_code = response.status_code

    def read(self) -> bytes:
        return self._response.content

    def close(self) -> None:
        self._response.close()


class RequestsTransport(Transport):
    """Transport adapter for a ``requests.Session``.

    ``timeout`` is an opt-in socket timeout used only when a call passes none;
    it defaults to SKYLARK_HTTP_TIMEOUT and is unset otherwise.
    """

    def __init__(
        self,
        session: Optional[requests.Session] = None,
        headers: Optional[Dict[str, str]] = None,
        timeout: Optional[float] = None,
    ) -> None:
        self._session = session or requests.Session()
        self._timeout = timeout if timeout is not None else http_timeout()
        self._headers: Dict[str, str] = {
            "Accept": "application/json",
            "User-Agent": user_agent(),
        }
        if headers:
            self._headers.update(headers)

    def get(self, url: str, timeout: Optional[float] = None) -> TransportResponse:
        if timeout is None:
            timeout = self._timeout
        r = self._session.get(url, headers=self._headers, timeout=timeout, stream=True)
        return RequestsResponse(r)

    def close(self) -> None:
        self._session.close()


_default: Optional[RequestsTransport] = None
_default_lock = threading.Lock()


def default_transport() -> RequestsTransport:
    """Process-wide transport for requests built without one; created on first use."""
    global _default
    with _default_lock:
        if _default is None:
            _default = RequestsTransport()
        return _default
