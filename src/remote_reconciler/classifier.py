"""
Error classifier.

Maps the raw error surfaced by the remote client to a RemoteError kind:

    429                        -> RATE_LIMITED
    404                        -> NOT_FOUND
    status in conflict_statuses -> CONFLICT   (resource-specific, e.g. 400 while
                                              a parent is still propagating)
    5xx, no response           -> TRANSIENT_SERVER
    anything else              -> PERMANENT

The mapping is resource agnostic; whether a NOT_FOUND means "gone" or "not
visible yet" is decided by the caller's read error policy.
"""

from typing import Collection

import httpx

from remote_reconciler.client.exceptions import RemoteClientError
from remote_reconciler.exceptions import RemoteError
from remote_reconciler.models.enums import ErrorKind


def kind_for_status(status_code: int | None, conflict_statuses: Collection[int] = ()) -> ErrorKind:
    if status_code is None:
        return ErrorKind.TRANSIENT_SERVER
    if status_code == 429:
        return ErrorKind.RATE_LIMITED
    if status_code == 404:
        return ErrorKind.NOT_FOUND
    if status_code in conflict_statuses:
        return ErrorKind.CONFLICT
    if status_code >= 500:
        return ErrorKind.TRANSIENT_SERVER
    return ErrorKind.PERMANENT


def classify(err: BaseException, *, conflict_statuses: Collection[int] = ()) -> RemoteError:
    """
    Classify an error raised by a remote operation.

    Args:
        err: Raw error (RemoteClientError, httpx error, or an already
            classified RemoteError which is returned unchanged)
        conflict_statuses: Statuses the calling resource type knows to be
            eventual-consistency signals

    Returns:
        RemoteError with kind, http_status, message and retry hint
    """
    if isinstance(err, RemoteError):
        return err

    if isinstance(err, RemoteClientError):
        return RemoteError(
            kind_for_status(err.status_code, conflict_statuses),
            err.message,
            http_status=err.status_code,
            retry_after=err.retry_after,
            details=err.details,
        )

    if isinstance(err, httpx.HTTPStatusError):
        status_code = err.response.status_code
        return RemoteError(
            kind_for_status(status_code, conflict_statuses),
            str(err),
            http_status=status_code,
        )

    if isinstance(err, httpx.TransportError):
        return RemoteError(
            ErrorKind.TRANSIENT_SERVER,
            f"Network error: {err}",
            details={"error_type": type(err).__name__},
        )

    return RemoteError(
        ErrorKind.PERMANENT,
        str(err) or type(err).__name__,
        details={"error_type": type(err).__name__},
    )
