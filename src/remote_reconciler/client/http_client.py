"""
HTTP client for the PagerDuty-style REST API.

Communicates with the remote API using httpx AsyncClient. Supports:
- Envelope wrapping/unwrapping of request and response bodies
- Offset pagination on listings
- Connection pooling via a persistent AsyncClient
- Raw error surfacing (status, body, Retry-After) for the classifier

Retries are NOT performed here; see remote_reconciler.retry.
"""

import time
from typing import Any, Mapping, Optional

import httpx
import structlog

from remote_reconciler.client.base_client import BaseRemoteClient
from remote_reconciler.client.exceptions import (
    RemoteAPIError,
    RemoteConnectionError,
    RemoteTimeoutError,
)
from remote_reconciler.config import Settings
from remote_reconciler.models.remote import RemoteResource, ResourceEndpoint
from remote_reconciler.monitoring.metrics import remote_call_latency_seconds


logger = structlog.get_logger(__name__)

ACCEPT_HEADER = "application/vnd.pagerduty+json;version=2"
PAGE_LIMIT = 100


def _parse_retry_after(value: Optional[str]) -> Optional[float]:
    if not value:
        return None
    try:
        return max(float(value), 0.0)
    except ValueError:
        return None


def _error_message(response: httpx.Response) -> str:
    """Extract the API error message from ``{"error": {"message": ...}}``."""
    try:
        body = response.json()
    except ValueError:
        return response.text[:200] or response.reason_phrase
    error = body.get("error") if isinstance(body, dict) else None
    if isinstance(error, dict):
        message = error.get("message", "")
        errors = error.get("errors") or []
        if errors:
            message = f"{message}: {', '.join(str(e) for e in errors)}"
        return message or response.reason_phrase
    return response.reason_phrase


class HTTPRemoteClient(BaseRemoteClient):
    """
    Remote client using httpx for async HTTP communication.

    API conventions:
    - GET    /{collection}?query=...&offset=...  -> {"<plural>": [...], "more": bool}
    - GET    /{collection}/{id}                  -> {"<singular>": {...}}
    - POST   /{collection}        {"<singular>": {...}}
    - PUT    /{collection}/{id}   {"<singular>": {...}}
    - DELETE /{collection}/{id}
    """

    def __init__(
        self,
        base_url: str = "https://api.pagerduty.com",
        token: str = "",
        timeout: float = 30.0,
        user_agent: str = "remote-reconciler/0.1.0",
        connection_limits: Optional[httpx.Limits] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize the HTTP client.

        Args:
            base_url: Remote API base URL
            token: API token, sent as ``Authorization: Token token=<token>``
            timeout: Request timeout in seconds
            user_agent: User-Agent header value
            connection_limits: httpx connection pool limits (default: 10 max connections)
            transport: Optional httpx transport (used by tests)
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._token = token
        self._user_agent = user_agent
        self._connection_limits = connection_limits or httpx.Limits(
            max_keepalive_connections=5,
            max_connections=10,
            keepalive_expiry=30.0,
        )
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

        logger.info(
            "Remote client initialized",
            base_url=self.base_url,
            timeout=timeout,
            connection_limits=str(self._connection_limits),
        )

    @classmethod
    def from_settings(cls, settings: Settings, **kwargs) -> "HTTPRemoteClient":
        return cls(
            base_url=settings.API_BASE_URL,
            token=settings.API_TOKEN,
            timeout=settings.HTTP_TIMEOUT,
            user_agent=settings.USER_AGENT,
            connection_limits=httpx.Limits(
                max_keepalive_connections=settings.HTTP_MAX_CONNECTIONS // 2 or 1,
                max_connections=settings.HTTP_MAX_CONNECTIONS,
            ),
            **kwargs,
        )

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create the async HTTP client."""
        if self._client is None or self._client.is_closed:
            headers = {
                "Accept": ACCEPT_HEADER,
                "Content-Type": "application/json",
                "User-Agent": self._user_agent,
            }
            if self._token:
                headers["Authorization"] = f"Token token={self._token}"
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                headers=headers,
                timeout=httpx.Timeout(self.timeout),
                limits=self._connection_limits,
                transport=self._transport,
            )
            logger.debug("Created new httpx AsyncClient")
        return self._client

    async def _request(
        self,
        method: str,
        path: str,
        *,
        operation: str,
        json: Optional[Mapping[str, Any]] = None,
        params: Optional[Mapping[str, Any]] = None,
    ) -> Optional[dict[str, Any]]:
        start_time = time.time()
        client = await self._get_client()

        try:
            response = await client.request(method, path, json=json, params=params)
            response.raise_for_status()

        except httpx.TimeoutException as e:
            remote_call_latency_seconds.labels(method=operation, success="false").observe(
                time.time() - start_time
            )
            logger.warning("Remote request timeout", method=method, path=path, timeout=self.timeout)
            raise RemoteTimeoutError(
                f"Request timeout after {self.timeout}s",
                details={"method": method, "path": path, "error": str(e)},
            ) from e

        except httpx.HTTPStatusError as e:
            remote_call_latency_seconds.labels(method=operation, success="false").observe(
                time.time() - start_time
            )
            status_code = e.response.status_code
            message = _error_message(e.response)
            logger.warning(
                "Remote API error",
                method=method,
                path=path,
                status_code=status_code,
                error=message,
            )
            raise RemoteAPIError(
                f"{method} {path} returned {status_code}: {message}",
                status_code=status_code,
                details={"method": method, "path": path, "body": e.response.text[:500]},
                retry_after=_parse_retry_after(e.response.headers.get("Retry-After")),
            ) from e

        except httpx.TransportError as e:
            remote_call_latency_seconds.labels(method=operation, success="false").observe(
                time.time() - start_time
            )
            logger.warning("Remote network error", method=method, path=path, error=str(e))
            raise RemoteConnectionError(
                f"Network error: {str(e)}",
                details={"method": method, "path": path, "error_type": type(e).__name__},
            ) from e

        remote_call_latency_seconds.labels(method=operation, success="true").observe(
            time.time() - start_time
        )
        logger.debug(
            "Remote request succeeded",
            method=method,
            path=path,
            status_code=response.status_code,
            latency_ms=int((time.time() - start_time) * 1000),
        )

        if response.status_code == 204 or not response.content:
            return None
        try:
            return response.json()
        except ValueError as e:
            raise RemoteAPIError(
                f"Invalid JSON response from {method} {path}",
                status_code=response.status_code,
                details={"parse_error": str(e)},
            ) from e

    @staticmethod
    def _unwrap(data: Optional[dict[str, Any]], key: str, method: str, path: str) -> Any:
        if not data or key not in data:
            raise RemoteAPIError(
                f"{method} {path}: response has no '{key}' member",
                status_code=200,
                details={"method": method, "path": path},
            )
        return data[key]

    async def list(
        self, endpoint: ResourceEndpoint, params: Optional[Mapping[str, Any]] = None
    ) -> list[RemoteResource]:
        query = dict(params or {})
        query.setdefault("limit", PAGE_LIMIT)
        offset = 0
        resources: list[RemoteResource] = []

        while True:
            query["offset"] = offset
            data = await self._request("GET", endpoint.path, operation="list", params=query)
            items = self._unwrap(data, endpoint.collection_key, "GET", endpoint.path)
            resources.extend(RemoteResource.from_payload(item) for item in items)
            if not data.get("more") or not items:
                break
            offset += len(items)

        logger.debug("Listed remote resources", path=endpoint.path, count=len(resources))
        return resources

    async def get(self, endpoint: ResourceEndpoint, resource_id: str) -> RemoteResource:
        path = endpoint.item_path(resource_id)
        data = await self._request("GET", path, operation="get")
        return RemoteResource.from_payload(self._unwrap(data, endpoint.envelope, "GET", path))

    async def create(
        self, endpoint: ResourceEndpoint, payload: Mapping[str, Any]
    ) -> RemoteResource:
        data = await self._request(
            "POST", endpoint.path, operation="create", json={endpoint.envelope: dict(payload)}
        )
        return RemoteResource.from_payload(
            self._unwrap(data, endpoint.envelope, "POST", endpoint.path)
        )

    async def update(
        self, endpoint: ResourceEndpoint, resource_id: str, payload: Mapping[str, Any]
    ) -> RemoteResource:
        path = endpoint.item_path(resource_id)
        data = await self._request(
            "PUT", path, operation="update", json={endpoint.envelope: dict(payload)}
        )
        return RemoteResource.from_payload(self._unwrap(data, endpoint.envelope, "PUT", path))

    async def delete(self, endpoint: ResourceEndpoint, resource_id: str) -> None:
        await self._request("DELETE", endpoint.item_path(resource_id), operation="delete")

    async def close(self) -> None:
        """Close the HTTP client connection."""
        if self._client and not self._client.is_closed:
            await self._client.aclose()
            logger.debug("Closed remote client connection")

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(base_url={self.base_url}, timeout={self.timeout}s)"
