"""Integration test fixtures (in-memory remote API).

The real HTTPRemoteClient talks to FakePagerDutyAPI through
httpx.MockTransport, so the whole stack (HTTP client, classifier, retry
controller, reconcilers) runs without a network.
"""

import itertools
import json

import httpx
import pytest
import pytest_asyncio

from remote_reconciler.client.http_client import HTTPRemoteClient


class FakePagerDutyAPI:
    """In-memory PagerDuty-style API with scriptable misbehaviour.

    Knobs:
        create_rejections: Number of upcoming integration creates answered
            with 400 (parent service still propagating)
        visibility_lag: Number of GETs answering 404 for a freshly created
            integration
        rate_limit_next: Number of upcoming requests answered with 429
    """

    def __init__(self):
        self.services = {"PSVC001"}
        self.integrations: dict[str, dict] = {}
        self.schedules: list[dict] = []
        self.requests: list[tuple[str, str]] = []
        self.create_rejections = 0
        self.visibility_lag = 0
        self.rate_limit_next = 0
        self._ids = itertools.count(1)
        self._lagging: dict[str, int] = {}

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append((request.method, request.url.path))

        if self.rate_limit_next:
            self.rate_limit_next -= 1
            return httpx.Response(
                429, json={"error": {"message": "Rate Limit Exceeded", "code": 2020}}
            )

        parts = request.url.path.strip("/").split("/")
        if parts[0] == "schedules" and request.method == "GET":
            return self._list_schedules(request)
        if len(parts) >= 3 and parts[0] == "services" and parts[2] == "integrations":
            return self._integrations(request, parts[1], parts[3] if len(parts) > 3 else None)
        return _error(404, "Not Found")

    def _list_schedules(self, request: httpx.Request) -> httpx.Response:
        query = request.url.params.get("query", "")
        matches = [s for s in self.schedules if query.lower() in s["name"].lower()]
        return httpx.Response(200, json={"schedules": matches, "more": False})

    def _integrations(self, request: httpx.Request, service_id: str, integration_id):
        if service_id not in self.services:
            return _error(404, "Not Found")

        if integration_id is None:
            if request.method != "POST":
                return _error(405, "Method Not Allowed")
            if self.create_rejections:
                self.create_rejections -= 1
                return _error(400, "Invalid Input Provided", ["Service not found"])
            body = json.loads(request.content)["integration"]
            integration_id = f"PQ{next(self._ids):05d}"
            record = {
                "id": integration_id,
                "name": body.get("name", ""),
                "type": body.get("type"),
                "service": {"id": service_id, "type": "service_reference"},
                "integration_key": body.get("integration_key") or f"key-{integration_id}",
                "integration_email": body.get("integration_email"),
                "html_url": f"https://example.pagerduty.test/services/{service_id}/integrations/{integration_id}",
                "vendor": body.get("vendor"),
            }
            self.integrations[integration_id] = record
            self._lagging[integration_id] = self.visibility_lag
            return httpx.Response(201, json={"integration": record})

        record = self.integrations.get(integration_id)
        if record is None or record["service"]["id"] != service_id:
            return _error(404, "Not Found")

        if request.method == "GET":
            if self._lagging.get(integration_id):
                self._lagging[integration_id] -= 1
                return _error(404, "Not Found")
            return httpx.Response(200, json={"integration": record})
        if request.method == "PUT":
            body = json.loads(request.content)["integration"]
            record.update(name=body.get("name", record["name"]))
            return httpx.Response(200, json={"integration": record})
        if request.method == "DELETE":
            del self.integrations[integration_id]
            return httpx.Response(204)
        return _error(405, "Method Not Allowed")

    def count(self, method: str) -> int:
        return sum(1 for m, _ in self.requests if m == method)


def _error(status_code: int, message: str, errors=None) -> httpx.Response:
    body = {"error": {"message": message, "code": 2000 + status_code}}
    if errors:
        body["error"]["errors"] = errors
    return httpx.Response(status_code, json=body)


@pytest.fixture
def fake_api() -> FakePagerDutyAPI:
    return FakePagerDutyAPI()


@pytest_asyncio.fixture
async def http_client(fake_api, test_settings):
    """Real HTTPRemoteClient wired to the in-memory API."""
    client = HTTPRemoteClient.from_settings(
        test_settings, transport=httpx.MockTransport(fake_api.handler)
    )
    yield client
    await client.close()
