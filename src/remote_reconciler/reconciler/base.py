"""
Generic resource reconciler.

Every resource type instantiates the same lifecycle state machine:

    ABSENT --create--> CREATING --fetch--> PRESENT --delete--> DELETED
                                           PRESENT --update--> PRESENT
    DELETED --create--> CREATING (new instance, same local state slot)

Resource types only supply the mechanical parts (endpoint, payload,
field mapping, validation); sequencing, retries and write-back live here.
"""

from abc import ABC, abstractmethod
from typing import Any, ClassVar, Generic, Optional, TypeVar

import httpx
import structlog

from remote_reconciler.classifier import classify
from remote_reconciler.client.base_client import BaseRemoteClient
from remote_reconciler.client.exceptions import RemoteClientError
from remote_reconciler.config import Settings, get_settings
from remote_reconciler.exceptions import RemoteError, ValidationError
from remote_reconciler.models.enums import ErrorKind, LifecycleState, ReadErrorPolicy
from remote_reconciler.models.remote import RemoteResource, ResourceEndpoint
from remote_reconciler.models.state import LocalState
from remote_reconciler.monitoring.metrics import remote_operations_total
from remote_reconciler.reconciler.importer import Importer
from remote_reconciler.retry.controller import RetryController
from remote_reconciler.retry.policy import RetryPolicy

logger = structlog.get_logger(__name__)

StateT = TypeVar("StateT", bound=LocalState)

REMOTE_FAILURES = (RemoteClientError, RemoteError, httpx.HTTPError)


class ResourceReconciler(ABC, Generic[StateT]):
    """
    Drives one resource instance through create/read/update/delete.

    Subclasses declare:
        resource_type: Name used in logs, metrics and error messages
        transient_create_statuses: HTTP statuses retried briefly on create
        import_arity: Number of components in the composite import ID
        import_format: Human-readable import ID format for error messages

    and implement endpoint(), build_payload(), fields_from_remote() and
    state_from_import(). validate() / validate_create() are optional hooks.

    Attributes:
        client: Remote client (shared, read-only)
        settings: Application settings
        controller: Retry controller
        read_policy: Policy for fetches (2-minute window by default)
        create_policy: Policy for the create call (1-minute window by default)
    """

    resource_type: ClassVar[str] = "resource"
    transient_create_statuses: ClassVar[frozenset[int]] = frozenset()
    import_arity: ClassVar[int] = 1
    import_format: ClassVar[str] = "<id>"

    def __init__(
        self,
        client: BaseRemoteClient,
        settings: Optional[Settings] = None,
        controller: Optional[RetryController] = None,
    ):
        self.client = client
        self.settings = settings or get_settings()
        self.controller = controller or RetryController()
        self.read_policy = RetryPolicy.read(self.settings)
        self.create_policy = RetryPolicy.create(self.settings)

    # --- resource-specific hooks ---------------------------------------------

    @abstractmethod
    def endpoint(self, state: StateT) -> ResourceEndpoint:
        """Collection the instance lives in."""

    @abstractmethod
    def build_payload(self, state: StateT) -> dict[str, Any]:
        """Remote-shaped request body built from local state."""

    @abstractmethod
    def fields_from_remote(self, remote: RemoteResource) -> dict[str, Any]:
        """Local field values carried by a remote representation."""

    @abstractmethod
    def state_from_import(self, ids: tuple[str, ...]) -> StateT:
        """New local state identified by the decomposed import ID."""

    def validate(self, state: StateT) -> None:
        """Cross-field checks run before create and update. Raise ValidationError."""

    def validate_create(self, state: StateT) -> None:
        """Checks run only before create. Defaults to validate()."""
        self.validate(state)

    # --- helpers ---------------------------------------------------------------

    def _record(self, operation: str, outcome: str) -> None:
        remote_operations_total.labels(
            resource=self.resource_type, operation=operation, outcome=outcome
        ).inc()

    def _require_identity(self, state: StateT, operation: str) -> str:
        if not state.identity:
            raise ValidationError(
                f"Cannot {operation} {self.resource_type} without an identity",
                field="id",
            )
        return state.identity

    def importer(self) -> Importer:
        def locate(ids: tuple[str, ...]) -> tuple[ResourceEndpoint, str]:
            state = self.state_from_import(ids)
            return self.endpoint(state), state.identity

        return Importer(
            client=self.client,
            locate=locate,
            arity=self.import_arity,
            id_format=self.import_format,
            resource_type=self.resource_type,
            delimiter=self.settings.IMPORT_ID_DELIMITER,
        )

    # --- lifecycle operations ----------------------------------------------------

    async def create(self, state: StateT) -> str:
        """
        Create the remote resource and populate computed fields.

        Validation runs before any network call. The create call is only
        retried for the resource's known-transient statuses. Once the remote
        resource exists, the follow-up fetch fails hard: any error is raised
        rather than leaving a half-populated state behind.

        Returns:
            The identity assigned by the remote API

        Raises:
            ValidationError: Local precondition violated (no network call made)
            RemoteError: Create or follow-up fetch failed
        """
        try:
            self.validate_create(state)
            payload = self.build_payload(state)
            endpoint = self.endpoint(state)

            logger.info(
                "Creating remote resource",
                resource=self.resource_type,
                name=payload.get("name"),
                path=endpoint.path,
            )
            state.transition(LifecycleState.CREATING)

            try:
                remote = await self.controller.run(
                    self.create_policy,
                    lambda: self.client.create(endpoint, payload),
                    operation=f"create {self.resource_type}",
                    conflict_statuses=self.transient_create_statuses,
                )
            except RemoteError:
                state.transition(LifecycleState.ABSENT)
                raise

            if not remote.id:
                state.transition(LifecycleState.ABSENT)
                raise RemoteError(
                    ErrorKind.PERMANENT,
                    f"Create {self.resource_type} returned no identity",
                    details={"path": endpoint.path},
                )

            state.set_identity(remote.id)
            # The resource now exists remotely: a failing fetch must surface
            await self.fetch(state, ReadErrorPolicy.FAIL_HARD)

        except REMOTE_FAILURES:
            self._record("create", "error")
            raise

        self._record("create", "success")
        logger.info("Created remote resource", resource=self.resource_type, id=state.identity)
        return state.identity

    async def read(self, state: StateT) -> None:
        """
        Refresh local state from the remote resource.

        A resource deleted out-of-band (NOT_FOUND) clears the identity and
        is not an error.
        """
        logger.info("Reading remote resource", resource=self.resource_type, id=state.identity)
        try:
            await self.fetch(state, ReadErrorPolicy.SWALLOW_NOT_FOUND)
        except REMOTE_FAILURES:
            self._record("read", "error")
            raise
        self._record("read", "success" if state.identity else "gone")

    async def fetch(self, state: StateT, error_policy: ReadErrorPolicy) -> None:
        """
        Fetch the remote resource by identity under the read policy.

        Args:
            state: Local state to populate
            error_policy: SWALLOW_NOT_FOUND (plain read) or FAIL_HARD (after create)

        Raises:
            RemoteError: Retry window closed on a failure (or a non-swallowed one)
        """
        identity = self._require_identity(state, "read")
        endpoint = self.endpoint(state)

        async def attempt() -> Optional[RemoteResource]:
            try:
                return await self.client.get(endpoint, identity)
            except REMOTE_FAILURES as exc:
                if (
                    error_policy is ReadErrorPolicy.SWALLOW_NOT_FOUND
                    and classify(exc).is_not_found
                ):
                    return None
                raise

        remote = await self.controller.run(
            self.read_policy,
            attempt,
            operation=f"read {self.resource_type}",
        )

        if remote is None:
            logger.warning(
                "Remote resource no longer exists, removing from state",
                resource=self.resource_type,
                id=identity,
            )
            state.clear_identity()
            state.transition(LifecycleState.ABSENT)
            return

        written = state.merge_remote(self.fields_from_remote(remote))
        state.transition(LifecycleState.PRESENT)
        logger.debug(
            "Local state refreshed",
            resource=self.resource_type,
            id=identity,
            fields=written,
        )

    async def update(self, state: StateT) -> None:
        """
        Push local state to the remote resource.

        Single call, not retried; any error propagates unchanged.
        """
        identity = self._require_identity(state, "update")
        self.validate(state)
        payload = self.build_payload(state)

        logger.info("Updating remote resource", resource=self.resource_type, id=identity)
        try:
            await self.client.update(self.endpoint(state), identity, payload)
        except REMOTE_FAILURES:
            self._record("update", "error")
            raise
        self._record("update", "success")

    async def delete(self, state: StateT) -> None:
        """
        Delete the remote resource and clear the local identity.

        Single call, not retried. A resource that is already gone counts as
        deleted.
        """
        identity = state.identity
        if identity:
            logger.info("Deleting remote resource", resource=self.resource_type, id=identity)
            try:
                await self.client.delete(self.endpoint(state), identity)
            except REMOTE_FAILURES as exc:
                if not classify(exc).is_not_found:
                    self._record("delete", "error")
                    raise
                logger.info(
                    "Remote resource already absent, treating delete as done",
                    resource=self.resource_type,
                    id=identity,
                )

        state.clear_identity()
        state.transition(LifecycleState.DELETED)
        self._record("delete", "success")

    async def import_state(self, raw_id: str) -> StateT:
        """
        Import an existing remote resource.

        Validates and decomposes `raw_id`, checks the resource exists, then
        reads it into a new local state.

        Raises:
            ValidationError: Malformed import ID
            RemoteError: NOT_FOUND when the resource disappeared between the
                existence check and the read
        """
        try:
            ids = await self.importer().import_id(raw_id)
        except REMOTE_FAILURES:
            self._record("import", "error")
            raise
        state = self.state_from_import(ids)
        await self.read(state)
        if not state.identity:
            self._record("import", "gone")
            raise RemoteError(
                ErrorKind.NOT_FOUND,
                f"Cannot import {self.resource_type} {raw_id}: resource no longer exists",
                details={"import_id": raw_id},
            )
        self._record("import", "success")
        return state
