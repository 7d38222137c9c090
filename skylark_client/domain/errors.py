from __future__ import annotations

from typing import Optional


class SkylarkError(RuntimeError):
    """Base class for failures raised by the Skylark client."""


class ContractError(ValueError):
    """Raised when a caller violates a documented contract (e.g., passing no context)."""


class RequestBuildError(SkylarkError):
    """Raised when the request components do not form a parseable URL."""


class ApiError(SkylarkError):
    """Raised for a non-2xx response; the message is the raw response body."""

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class BodyReadError(SkylarkError):
    """Raised when the response body could not be read."""


class Cancelled(SkylarkError):
    """Raised when the request context was canceled."""


class DeadlineExceeded(SkylarkError):
    """Raised when the request context's deadline passed."""
