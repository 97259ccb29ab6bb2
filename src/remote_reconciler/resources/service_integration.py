"""
Service integration resource.

An integration hangs off a service (``services/{service}/integrations``), so
it is imported with a two-part ID ``<service_id>.<integration_id>``. Right
after a service is created the API may reject integration creates with a
400 until the service has propagated, so 400 is retried briefly on create.
"""

from typing import Any, Optional

from pydantic import Field

from remote_reconciler.exceptions import ValidationError
from remote_reconciler.models.remote import RemoteResource, ResourceEndpoint
from remote_reconciler.models.state import LocalState
from remote_reconciler.reconciler.base import ResourceReconciler

GENERIC_EMAIL_TYPE = "generic_email_inbound_integration"

ERR_EMAIL_INTEGRATION_MUST_HAVE_EMAIL = (
    "integration_email attribute must be set for an integration type "
    "generic_email_inbound_integration"
)

INTEGRATION_TYPES = (
    "aws_cloudwatch_inbound_integration",
    "cloudkick_inbound_integration",
    "event_transformer_api_inbound_integration",
    "events_api_v2_inbound_integration",
    "generic_email_inbound_integration",
    "generic_events_api_inbound_integration",
    "keynote_inbound_integration",
    "nagios_inbound_integration",
    "pingdom_inbound_integration",
    "sql_monitor_inbound_integration",
)


class ServiceIntegrationState(LocalState):
    """Local state of a service integration."""

    service: str = Field(default="", description="Parent service ID (required)")
    name: Optional[str] = None
    type: Optional[str] = Field(default=None, description="Integration type (conflicts with vendor)")
    vendor: Optional[str] = Field(default=None, description="Vendor ID (conflicts with type)")
    integration_key: Optional[str] = None
    integration_email: Optional[str] = None
    html_url: Optional[str] = Field(default=None, description="Computed by the API")


class ServiceIntegrationReconciler(ResourceReconciler[ServiceIntegrationState]):
    """Reconciler for ``services/{service}/integrations``."""

    resource_type = "service_integration"
    transient_create_statuses = frozenset({400})
    import_arity = 2
    import_format = "<service_id>.<integration_id>"

    def endpoint(self, state: ServiceIntegrationState) -> ResourceEndpoint:
        return ResourceEndpoint(
            path=f"services/{state.service}/integrations",
            envelope="integration",
            collection_key="integrations",
        )

    def validate(self, state: ServiceIntegrationState) -> None:
        if not state.service:
            raise ValidationError("service attribute is required", field="service")
        if state.type == GENERIC_EMAIL_TYPE and not state.integration_email:
            raise ValidationError(ERR_EMAIL_INTEGRATION_MUST_HAVE_EMAIL, field="integration_email")

    def validate_create(self, state: ServiceIntegrationState) -> None:
        # type and vendor are both computed after a read; only the values
        # the caller declared are constrained
        declared_type = state.declared("type")
        if declared_type and state.declared("vendor"):
            raise ValidationError('"type": conflicts with vendor', field="type")
        if declared_type and declared_type not in INTEGRATION_TYPES:
            raise ValidationError(
                f"type must be one of {', '.join(INTEGRATION_TYPES)}, got: {declared_type}",
                field="type",
            )
        self.validate(state)

    def build_payload(self, state: ServiceIntegrationState) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "name": state.name or "",
            "type": state.get_or_default("type", "service_integration"),
            "service": {"type": "service", "id": state.service},
        }
        if state.get_or_default("integration_key"):
            payload["integration_key"] = state.integration_key
        if state.get_or_default("integration_email"):
            payload["integration_email"] = state.integration_email
        if state.get_or_default("vendor"):
            payload["vendor"] = {"type": "vendor", "id": state.vendor}
        return payload

    def fields_from_remote(self, remote: RemoteResource) -> dict[str, Any]:
        return {
            "name": remote.get("name"),
            "type": remote.get("type"),
            "service": remote.reference_id("service"),
            "vendor": remote.reference_id("vendor"),
            "integration_key": remote.get("integration_key"),
            "integration_email": remote.get("integration_email"),
            "html_url": remote.get("html_url"),
        }

    def state_from_import(self, ids: tuple[str, ...]) -> ServiceIntegrationState:
        service_id, integration_id = ids
        return ServiceIntegrationState(id=integration_id, service=service_id)
