"""
Search/lookup reconciler.

Resolves a read-only resource by a non-unique filter (usually its name).
The remote query may be a substring search, so the listing is scanned for
an exact, case-sensitive match on the discriminating field.
"""

from abc import ABC, abstractmethod
from typing import ClassVar, Generic, Iterable, Optional, TypeVar

import structlog

from remote_reconciler.client.base_client import BaseRemoteClient
from remote_reconciler.config import Settings, get_settings
from remote_reconciler.exceptions import RemoteError
from remote_reconciler.models.enums import ErrorKind, LifecycleState
from remote_reconciler.models.remote import RemoteResource, ResourceEndpoint
from remote_reconciler.models.state import LocalState
from remote_reconciler.monitoring.metrics import remote_operations_total
from remote_reconciler.retry.controller import RetryController
from remote_reconciler.retry.policy import RetryPolicy

logger = structlog.get_logger(__name__)

StateT = TypeVar("StateT", bound=LocalState)


def select_exact(
    candidates: Iterable[RemoteResource], field: str, value: str
) -> Optional[RemoteResource]:
    """First candidate whose `field` equals `value` exactly, or None."""
    for candidate in candidates:
        if candidate.get(field) == value:
            return candidate
    return None


class LookupReconciler(ABC, Generic[StateT]):
    """
    Read-only reconciler resolving a resource by filter.

    Subclasses declare:
        resource_type: Name used in logs and metrics
        noun: Human name used in "not found" messages ("schedule")
        filter_field: Discriminating field compared exactly (default "name")
        query_param: Listing query parameter carrying the filter

    and implement endpoint() and fields_from_remote().
    """

    resource_type: ClassVar[str] = "resource"
    noun: ClassVar[str] = "resource"
    filter_field: ClassVar[str] = "name"
    query_param: ClassVar[str] = "query"

    def __init__(
        self,
        client: BaseRemoteClient,
        settings: Optional[Settings] = None,
        controller: Optional[RetryController] = None,
    ):
        self.client = client
        self.settings = settings or get_settings()
        self.controller = controller or RetryController()
        self.policy = RetryPolicy.lookup(self.settings)

    @abstractmethod
    def endpoint(self) -> ResourceEndpoint:
        """Collection to search."""

    @abstractmethod
    def fields_from_remote(self, remote: RemoteResource) -> dict:
        """Local field values carried by the matched resource."""

    async def find(self, value: str) -> RemoteResource:
        """
        List with the filter and return the exact match.

        Raises:
            RemoteError: NOT_FOUND (not retried) when nothing matches exactly,
                or the listing failure once the retry window closes
        """
        endpoint = self.endpoint()

        async def attempt() -> RemoteResource:
            candidates = await self.client.list(endpoint, {self.query_param: value})
            match = select_exact(candidates, self.filter_field, value)
            if match is None:
                raise RemoteError(
                    ErrorKind.NOT_FOUND,
                    f"Unable to locate any {self.noun} with the {self.filter_field}: {value}",
                    details={"filter": value, "candidates": len(candidates)},
                )
            return match

        return await self.controller.run(
            self.policy,
            attempt,
            operation=f"lookup {self.resource_type}",
        )

    async def find_by_filter(self, value: str) -> str:
        """Identity of the resource whose filter field equals `value`."""
        return (await self.find(value)).id

    async def read(self, state: StateT) -> None:
        """Resolve `state` by its filter field and populate it."""
        value = state.get(self.filter_field)
        logger.info("Looking up remote resource", resource=self.resource_type, filter=value)
        try:
            remote = await self.find(value)
        except RemoteError:
            remote_operations_total.labels(
                resource=self.resource_type, operation="lookup", outcome="error"
            ).inc()
            raise

        state.set_identity(remote.id)
        state.merge_remote(self.fields_from_remote(remote))
        state.transition(LifecycleState.PRESENT)
        remote_operations_total.labels(
            resource=self.resource_type, operation="lookup", outcome="success"
        ).inc()
