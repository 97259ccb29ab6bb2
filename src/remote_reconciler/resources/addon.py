"""Full-page add-on resource (``addons``)."""

from typing import Any

from remote_reconciler.exceptions import ValidationError
from remote_reconciler.models.remote import RemoteResource, ResourceEndpoint
from remote_reconciler.models.state import LocalState
from remote_reconciler.reconciler.base import ResourceReconciler

ADDON_TYPE = "full_page_addon"

ADDONS_ENDPOINT = ResourceEndpoint(path="addons", envelope="addon", collection_key="addons")


class AddonState(LocalState):
    name: str = ""
    src: str = ""


class AddonReconciler(ResourceReconciler[AddonState]):
    """
    Reconciler for add-ons.

    Creates are not retried (no known-transient statuses); the fetch that
    follows a create still rides out eventual consistency. Imported by plain
    add-on ID.
    """

    resource_type = "addon"

    def endpoint(self, state: AddonState) -> ResourceEndpoint:
        return ADDONS_ENDPOINT

    def validate(self, state: AddonState) -> None:
        for field in ("name", "src"):
            if not state.get(field):
                raise ValidationError(f"{field} attribute is required", field=field)

    def build_payload(self, state: AddonState) -> dict[str, Any]:
        return {"name": state.name, "src": state.src, "type": ADDON_TYPE}

    def fields_from_remote(self, remote: RemoteResource) -> dict[str, Any]:
        return {"name": remote.get("name"), "src": remote.get("src")}

    def state_from_import(self, ids: tuple[str, ...]) -> AddonState:
        return AddonState(id=ids[0])
