"""
Pytest configuration and fixtures for Skylark client tests.

Provides an in-memory transport so requests can be executed without a network.
"""

import os
import threading
from typing import List, Optional

import pytest

from skylark_client.domain.interfaces import Transport, TransportResponse


class FakeResponse(TransportResponse):
    """Canned response that records whether it was closed."""

    def __init__(self, status_code: int = 200, body: bytes = b"{}", read_error: Optional[Exception] = None):
        self.status_code = status_code
        self._body = body
        self._read_error = read_error
        self.closed = False

    def read(self) -> bytes:
        if self._read_error is not None:
            raise self._read_error
        return self._body

    def close(self) -> None:
        self.closed = True


class FakeTransport(Transport):
    """Transport returning a queued response and recording requested URLs."""

    def __init__(self, response: Optional[FakeResponse] = None, error: Optional[Exception] = None):
        self.response = response or FakeResponse()
        self.error = error
        self.calls: List[str] = []
        self.timeouts: List[Optional[float]] = []

    def get(self, url: str, timeout: Optional[float] = None) -> TransportResponse:
        self.calls.append(url)
        self.timeouts.append(timeout)
        if self.error is not None:
            raise self.error
        return self.response


class BlockingTransport(FakeTransport):
    """Transport whose GET blocks until released, simulating a slow server."""

    def __init__(self, response: Optional[FakeResponse] = None):
        super().__init__(response)
        self.release = threading.Event()
        self.started = threading.Event()

    def get(self, url: str, timeout: Optional[float] = None) -> TransportResponse:
        self.calls.append(url)
        self.started.set()
        self.release.wait(5)
        return self.response


@pytest.fixture
def fake_transport():
    """Transport answering 200 with an empty JSON object."""
    return FakeTransport()


@pytest.fixture
def transport_factory():
    """Factory for transports with a specific status/body."""
    def make(status_code: int = 200, body: bytes = b"{}", read_error: Optional[Exception] = None):
        return FakeTransport(FakeResponse(status_code, body, read_error))
    return make


@pytest.fixture
def blocking_transport():
    transport = BlockingTransport()
    yield transport
    transport.release.set()


@pytest.fixture
def clean_environment():
    """Clean environment variables for testing."""
    env_vars_to_clean = [
        'SKYLARK_ENDPOINT',
        'SKYLARK_HTTP_TIMEOUT',
        'SKYLARK_USER_AGENT',
        'SKYLARK_LOG_LEVEL',
    ]

    original_env = {}
    for var in env_vars_to_clean:
        if var in os.environ:
            original_env[var] = os.environ[var]
            del os.environ[var]

    yield

    for var in env_vars_to_clean:
        os.environ.pop(var, None)
    for var, value in original_env.items():
        os.environ[var] = value


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line(
        "markers", "unit: mark test as unit test"
    )
    config.addinivalue_line(
        "markers", "integration: mark test as integration test"
    )
    config.addinivalue_line(
        "markers", "cli: mark test as CLI command test"
    )
