"""
Abstract base client for the remote API.

Defines the typed operations every remote client implementation must offer.
The reconcilers only depend on this interface, so tests and alternative
transports can be injected without touching the engine.
"""

from abc import ABC, abstractmethod
from typing import Any, Mapping, Optional

import structlog

from remote_reconciler.models.remote import RemoteResource, ResourceEndpoint


logger = structlog.get_logger(__name__)


class BaseRemoteClient(ABC):
    """
    Abstract base class for remote API clients.

    Responsibilities:
    - Send list/get/create/update/delete requests
    - Unwrap response envelopes into RemoteResource snapshots
    - Raise RemoteClientError subclasses exposing the HTTP status

    Does NOT handle:
    - Retries (that's RetryController's job)
    - Error classification (that's classifier.classify's job)
    - Local state (that's the reconcilers' job)
    """

    @abstractmethod
    async def list(
        self, endpoint: ResourceEndpoint, params: Optional[Mapping[str, Any]] = None
    ) -> list[RemoteResource]:
        """
        List resources of a collection, optionally filtered.

        Args:
            endpoint: Collection to list
            params: Query parameters (e.g., {"query": "Primary"})

        Returns:
            Resources in the order returned by the API
        """
        pass

    @abstractmethod
    async def get(self, endpoint: ResourceEndpoint, resource_id: str) -> RemoteResource:
        """Fetch a single resource by identity."""
        pass

    @abstractmethod
    async def create(
        self, endpoint: ResourceEndpoint, payload: Mapping[str, Any]
    ) -> RemoteResource:
        """Create a resource and return the server representation."""
        pass

    @abstractmethod
    async def update(
        self, endpoint: ResourceEndpoint, resource_id: str, payload: Mapping[str, Any]
    ) -> RemoteResource:
        """Update a resource and return the server representation."""
        pass

    @abstractmethod
    async def delete(self, endpoint: ResourceEndpoint, resource_id: str) -> None:
        """Delete a resource."""
        pass

    async def close(self) -> None:
        """
        Close client connections and cleanup resources.

        Default implementation does nothing. Subclasses holding persistent
        connections should override.
        """
        logger.debug("Closing remote client", client_class=self.__class__.__name__)

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()
