"""Unit test fixtures (mocks and stubs).

Provides mock objects for testing without a remote API.
"""

from unittest.mock import AsyncMock

import pytest

from remote_reconciler.client.base_client import BaseRemoteClient
from remote_reconciler.client.exceptions import RemoteAPIError, RemoteConnectionError
from remote_reconciler.models.remote import RemoteResource


@pytest.fixture
def mock_remote_client():
    """Mock BaseRemoteClient; every operation is an AsyncMock."""
    return AsyncMock(spec=BaseRemoteClient)


@pytest.fixture
def api_error():
    """Factory fixture to create RemoteAPIError with a given status.

    Usage:
        def test_something(api_error):
            error = api_error(429, retry_after=45)
    """
    def _create(status_code: int, message: str = "", retry_after: float | None = None) -> RemoteAPIError:
        return RemoteAPIError(
            message or f"remote call returned {status_code}",
            status_code=status_code,
            retry_after=retry_after,
        )

    return _create


@pytest.fixture
def connection_error():
    """Transport-level failure (no HTTP status)."""
    return RemoteConnectionError("Network error: connection refused")


@pytest.fixture
def remote_resource():
    """Factory fixture to create RemoteResource snapshots."""
    def _create(resource_id: str = "PX00001", **attributes) -> RemoteResource:
        return RemoteResource(id=resource_id, attributes=attributes)

    return _create
