"""
Composite import ID handling.

Sub-resources are addressed by several IDs joined with a delimiter, e.g.
``<service_id>.<integration_id>``. The shape is validated before any network
call; a single direct (non-retried) GET then confirms the resource exists.
"""

from typing import Callable

import structlog

from remote_reconciler.client.base_client import BaseRemoteClient
from remote_reconciler.exceptions import ValidationError
from remote_reconciler.models.remote import ResourceEndpoint

logger = structlog.get_logger(__name__)

Locator = Callable[[tuple[str, ...]], tuple[ResourceEndpoint, str]]


class Importer:
    """
    Parses and verifies externally supplied import IDs.

    Attributes:
        client: Remote client used for the existence check
        locate: Maps decomposed IDs to (endpoint, resource_id)
        arity: Expected number of components. With arity 1 the raw ID is
            passed through unsplit.
        id_format: Expected format, quoted in validation errors
        resource_type: Resource type name for messages
        delimiter: Component separator
    """

    def __init__(
        self,
        client: BaseRemoteClient,
        locate: Locator,
        arity: int,
        id_format: str,
        resource_type: str,
        delimiter: str = ".",
    ):
        if arity < 1:
            raise ValueError("arity must be >= 1")
        self.client = client
        self.locate = locate
        self.arity = arity
        self.id_format = id_format
        self.resource_type = resource_type
        self.delimiter = delimiter

    def parse(self, raw_id: str) -> tuple[str, ...]:
        """
        Split and validate a raw import ID. Makes no network call.

        Raises:
            ValidationError: Wrong component count or empty component
        """
        if self.arity == 1:
            parts = [raw_id]
        else:
            parts = raw_id.split(self.delimiter)

        if len(parts) != self.arity or not all(parts):
            raise ValidationError(
                f"Error importing {self.resource_type}. "
                f"Expecting an import ID formed as '{self.id_format}'",
                field="id",
                details={"import_id": raw_id, "expected_components": self.arity},
            )
        return tuple(parts)

    async def import_id(self, raw_id: str) -> tuple[str, ...]:
        """
        Validate `raw_id` and confirm the resource exists.

        Returns:
            The decomposed IDs (e.g. (service_id, integration_id))

        Raises:
            ValidationError: Malformed import ID
            RemoteClientError: Existence check failed (propagated as-is)
        """
        ids = self.parse(raw_id)
        endpoint, resource_id = self.locate(ids)

        logger.info(
            "Importing remote resource",
            resource=self.resource_type,
            import_id=raw_id,
            path=endpoint.path,
        )
        await self.client.get(endpoint, resource_id)
        return ids
