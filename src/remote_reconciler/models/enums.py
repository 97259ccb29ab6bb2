"""
Enumerations for the reconciler data models.

All enums are closed taxonomies - no values outside these sets are permitted.
"""

from enum import Enum


class ErrorKind(str, Enum):
    """
    Classification of a failed remote operation.

    The kind, not the HTTP status, drives retry decisions:
    - RATE_LIMITED: retryable, mandatory long fixed delay
    - NOT_FOUND: terminal; on plain read it means "resource gone"
    - CONFLICT: eventual-consistency gap, retryable with a short delay
    - TRANSIENT_SERVER: 5xx / transport failure, retryable within the window
    - PERMANENT: non-retryable, surfaced immediately
    - VALIDATION: local precondition violated, never reaches the network
    """

    RATE_LIMITED = "rate_limited"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    TRANSIENT_SERVER = "transient_server"
    PERMANENT = "permanent"
    VALIDATION = "validation"


class ReadErrorPolicy(str, Enum):
    """
    How a read reacts to a failed fetch.

    SWALLOW_NOT_FOUND is used by plain reads: a NOT_FOUND clears the local
    identity and the read succeeds. FAIL_HARD is used right after a create:
    every error keeps the retry loop going and the last one is raised.
    """

    SWALLOW_NOT_FOUND = "swallow_not_found"
    FAIL_HARD = "fail_hard"


class LifecycleState(str, Enum):
    """
    Lifecycle of a single resource instance.

    ABSENT -> CREATING -> PRESENT -> DELETED. DELETED may go back to
    CREATING through a fresh create reusing the same local state slot.
    """

    ABSENT = "absent"
    CREATING = "creating"
    PRESENT = "present"
    DELETED = "deleted"
