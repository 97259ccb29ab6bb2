"""
Remote-side data models.

These models describe what the remote API returns and where it lives. They
are transient snapshots: a RemoteResource is built fresh from every response
and never cached across calls.
"""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


class ResourceEndpoint(BaseModel):
    """
    Location and JSON envelope of one remote collection.

    The remote API wraps single objects in a singular key and listings in a
    plural key, e.g. ``{"integration": {...}}`` and ``{"integrations": [...]}``.
    """

    model_config = ConfigDict(frozen=True)

    path: str = Field(..., description="Collection path, e.g. 'services/PX1/integrations'")
    envelope: str = Field(..., description="Key wrapping a single object")
    collection_key: str = Field(..., description="Key wrapping a listing")

    def item_path(self, resource_id: str) -> str:
        return f"{self.path.rstrip('/')}/{resource_id}"


class RemoteResource(BaseModel):
    """Server-side representation of a resource: identity plus attributes."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., description="Remote identity")
    attributes: dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> "RemoteResource":
        attributes = dict(payload)
        identity = attributes.pop("id", "") or ""
        return cls(id=str(identity), attributes=attributes)

    def get(self, name: str, default: Any = None) -> Any:
        return self.attributes.get(name, default)

    def reference_id(self, name: str) -> Optional[str]:
        """ID of a nested reference object such as ``{"service": {"id": ...}}``."""
        reference = self.attributes.get(name)
        if isinstance(reference, dict):
            return reference.get("id")
        return None
