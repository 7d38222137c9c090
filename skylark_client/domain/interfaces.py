from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional


class TransportResponse(ABC):
    """An HTTP response whose body has not been consumed yet."""

    status_code: int

    @abstractmethod
    def read(self) -> bytes:
        """Read the entire body.

        Raises:
            Exception: Connection failures while streaming surface to the caller.
        """
        raise NotImplementedError

    @abstractmethod
    def close(self) -> None:
        """Release the underlying connection."""
        raise NotImplementedError


class Transport(ABC):
    """Port for issuing HTTP GET requests (e.g., requests.Session)."""

    @abstractmethod
    def get(self, url: str, timeout: Optional[float] = None) -> TransportResponse:
        """Issue a GET and return the response once headers arrive.

        Raises:
            Exception: DNS/connection/timeout failures surface unchanged.
        """
        raise NotImplementedError
