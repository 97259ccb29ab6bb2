"""
Custom exceptions for the remote client layer.

These exceptions carry the raw facts of a failed call (HTTP status, response
body, Retry-After hint). They are deliberately unclassified: the error
classifier turns them into RemoteError kinds that the retry controller acts on.
"""

from typing import Optional


class RemoteClientError(Exception):
    """
    Base exception for all remote client errors.

    Attributes:
        message: Human-readable description
        status_code: HTTP status, None when no response was received
        details: Structured data for logging (method, path, body excerpt)
        retry_after: Value of the Retry-After header in seconds, if any
    """

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        details: dict | None = None,
        retry_after: Optional[float] = None,
    ):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        self.retry_after = retry_after


class RemoteAPIError(RemoteClientError):
    """
    Raised when the remote API answers with a non-2xx status.

    Always has a status_code.
    """
    pass


class RemoteConnectionError(RemoteClientError):
    """
    Raised when the remote API cannot be reached.

    Includes DNS failures, refused connections and dropped sockets.
    """
    pass


class RemoteTimeoutError(RemoteConnectionError):
    """
    Raised when a request exceeds the configured timeout.

    Separate from generic connection errors to allow specific logging.
    """
    pass
