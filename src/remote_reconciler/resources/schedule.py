"""
Schedule lookup (read-only).

Resolves an on-call schedule by exact name. The API's ``query`` parameter
is a substring search, so "OnCallRotationA" also returns "OnCallRotationAB";
only the exact match is selected.
"""

from typing import Any

from remote_reconciler.models.remote import RemoteResource, ResourceEndpoint
from remote_reconciler.models.state import LocalState
from remote_reconciler.reconciler.lookup import LookupReconciler

SCHEDULES_ENDPOINT = ResourceEndpoint(
    path="schedules", envelope="schedule", collection_key="schedules"
)


class ScheduleState(LocalState):
    name: str = ""


class ScheduleLookup(LookupReconciler[ScheduleState]):
    resource_type = "schedule"
    noun = "schedule"

    def endpoint(self) -> ResourceEndpoint:
        return SCHEDULES_ENDPOINT

    def fields_from_remote(self, remote: RemoteResource) -> dict[str, Any]:
        return {"name": remote.get("name")}
