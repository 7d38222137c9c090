from __future__ import annotations

import os
from typing import Optional


def env_str(name: str, default: str) -> str:
    return os.getenv(name, default).strip() or default


def skylark_endpoint() -> str:
    """
    Base URL that collection names are appended to.
    Always ends with a slash so ``endpoint + collection`` forms a path segment.
    """
    base = env_str("SKYLARK_ENDPOINT", "http://localhost:8000/api/")
    return base if base.endswith("/") else base + "/"


def user_agent() -> str:
    return env_str("SKYLARK_USER_AGENT", "skylark-client/0.1")


def http_timeout() -> Optional[float]:
    """
    Opt-in socket timeout for the default transport.
    None (no timeout) unless SKYLARK_HTTP_TIMEOUT holds a positive number.
    """
    try:
        value = float(env_str("SKYLARK_HTTP_TIMEOUT", "0"))
    except Exception:
        return None
    return value if value > 0 else None


def log_level() -> str:
    return env_str("SKYLARK_LOG_LEVEL", "INFO").upper()
