"""
Reconciler exceptions.

These are the classified errors that leave the engine. The retry controller
and the reconcilers raise them; the orchestrator decides how to present them.
Raw transport failures live in ``remote_reconciler.client.exceptions`` and are
turned into RemoteError by the classifier.
"""

from typing import Any, Optional

from remote_reconciler.models.enums import ErrorKind


class ReconcilerError(Exception):
    """
    Base exception for all reconciler errors.

    Allows catching any engine error with a single except clause.
    """

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class RemoteError(ReconcilerError):
    """
    A classified remote failure.

    Attributes:
        kind: Classification driving retry decisions
        http_status: HTTP status of the failed call, None for transport or
            local failures
        retry_after: Server-supplied retry hint in seconds (429 responses)
    """

    def __init__(
        self,
        kind: ErrorKind,
        message: str,
        http_status: Optional[int] = None,
        retry_after: Optional[float] = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message, details)
        self.kind = kind
        self.http_status = http_status
        self.retry_after = retry_after

    @property
    def is_not_found(self) -> bool:
        return self.kind == ErrorKind.NOT_FOUND

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(kind={self.kind.value}, "
            f"http_status={self.http_status}, message={self.message!r})"
        )


class ValidationError(RemoteError):
    """
    A local precondition was violated.

    Raised before any network call (cross-field constraints, malformed
    import IDs). Never retried.
    """

    def __init__(self, message: str, field: Optional[str] = None, details: dict[str, Any] | None = None):
        details = dict(details or {})
        if field:
            details["field"] = field
        super().__init__(ErrorKind.VALIDATION, message, details=details)
        self.field = field
