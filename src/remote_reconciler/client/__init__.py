"""
Remote API client abstraction and implementation.

Components:
- BaseRemoteClient: Abstract base class for remote clients
- HTTPRemoteClient: httpx implementation for the PagerDuty-style REST API
- exceptions: Raw (unclassified) client errors
"""

from remote_reconciler.client.base_client import BaseRemoteClient
from remote_reconciler.client.exceptions import (
    RemoteAPIError,
    RemoteClientError,
    RemoteConnectionError,
    RemoteTimeoutError,
)
from remote_reconciler.client.http_client import HTTPRemoteClient

__all__ = [
    "BaseRemoteClient",
    "HTTPRemoteClient",
    "RemoteClientError",
    "RemoteAPIError",
    "RemoteConnectionError",
    "RemoteTimeoutError",
]
