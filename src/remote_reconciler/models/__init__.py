"""
Data models for the Remote State Reconciler.

Exports:
- Enums (ErrorKind, ReadErrorPolicy, LifecycleState)
- Local state (LocalState)
- Remote models (RemoteResource, ResourceEndpoint)
"""

from remote_reconciler.models.enums import (
    ErrorKind,
    LifecycleState,
    ReadErrorPolicy,
)
from remote_reconciler.models.remote import RemoteResource, ResourceEndpoint
from remote_reconciler.models.state import LocalState

__all__ = [
    "ErrorKind",
    "LifecycleState",
    "ReadErrorPolicy",
    "LocalState",
    "RemoteResource",
    "ResourceEndpoint",
]
