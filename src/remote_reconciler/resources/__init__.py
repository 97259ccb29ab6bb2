"""
Concrete resource types.

Each module pairs a typed LocalState record with the reconciler that maps it
to the remote API.
"""

from remote_reconciler.resources.addon import AddonReconciler, AddonState
from remote_reconciler.resources.schedule import ScheduleLookup, ScheduleState
from remote_reconciler.resources.service_integration import (
    ServiceIntegrationReconciler,
    ServiceIntegrationState,
)

__all__ = [
    "AddonReconciler",
    "AddonState",
    "ScheduleLookup",
    "ScheduleState",
    "ServiceIntegrationReconciler",
    "ServiceIntegrationState",
]
