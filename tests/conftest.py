"""
Shared pytest fixtures for ovh-async tests.
"""

from typing import Any, Callable, Union

import httpx
import pytest

from ovh_async.client import OvhClient

SERVER_TIME = 1_700_000_000


class FakeOvhApi:
    """
    In-memory stand-in for the OVH API, used as an httpx.MockTransport handler.

    Routes are keyed by (method, path) with the "/1.0" prefix stripped.
    Unknown routes answer 404 like the real API.
    """

    def __init__(self):
        self.routes: dict[tuple[str, str], tuple[int, Any]] = {}
        self.requests: list[httpx.Request] = []
        self.server_time = SERVER_TIME

    def add(self, method: str, path: str, payload: Union[Any, Callable] = None, status: int = 200) -> None:
        self.routes[(method, path)] = (status, payload)

    def api_requests(self) -> list[httpx.Request]:
        """Requests sent to anything but /auth/time."""
        return [r for r in self.requests if not r.url.path.endswith("/auth/time")]

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path.removeprefix("/1.0")

        if path == "/auth/time":
            return httpx.Response(200, text=str(self.server_time))

        route = self.routes.get((request.method, path))
        if route is None:
            return httpx.Response(
                404,
                json={"message": f"The requested object ({path}) does not exist"},
                headers={"X-Ovh-QueryID": "EU.ext-1.abcd"},
            )

        status, payload = route
        if callable(payload):
            payload = payload(request)
        if isinstance(payload, httpx.Response):
            return payload
        if payload is None:
            return httpx.Response(status)
        return httpx.Response(status, json=payload)


@pytest.fixture
def fake_api():
    """
    Fake OVH API with no route registered.

    Returns:
        FakeOvhApi: The request handler, to register routes on and inspect requests
    """
    return FakeOvhApi()


@pytest.fixture
def ovh_client(fake_api):
    """
    OVH client whose HTTP traffic goes to the fake API.

    Returns:
        OvhClient: Client on the ovh-eu endpoint
    """
    http_client = httpx.AsyncClient(transport=httpx.MockTransport(fake_api))
    return OvhClient(
        "ovh-eu",
        "app_key_1234",
        "app_secret",
        "consumer_key",
        http_client=http_client,
    )


@pytest.fixture
def sample_dns_records():
    """
    Sample DNS record payloads as returned by /domain/zone/{zone}/record/{id}.

    Returns:
        list[dict]: List of DNS record dictionaries
    """
    return [
        {"id": 1, "zone": "example.com", "fieldType": "A", "subDomain": "www", "target": "1.2.3.4", "ttl": 3600},
        {"id": 2, "zone": "example.com", "fieldType": "AAAA", "subDomain": "www", "target": "::1", "ttl": 3600},
        {"id": 3, "zone": "example.com", "fieldType": "MX", "subDomain": "", "target": "10 mail.example.com.", "ttl": 0},
    ]


@pytest.fixture
def tmp_env_file(tmp_path):
    """
    Create a temporary .env file with valid credentials.

    Returns:
        Path: Path to the temporary .env file
    """
    env_file = tmp_path / ".env"
    env_file.write_text(
        "OVH_ENDPOINT=ovh-eu\n"
        "OVH_APPLICATION_KEY=test_app_key_1234\n"
        "OVH_APPLICATION_SECRET=test_secret\n"
        "OVH_CONSUMER_KEY=test_consumer_key\n"
    )
    return env_file


@pytest.fixture
def clean_ovh_env(monkeypatch):
    """Remove OVH_* variables so host settings cannot leak into tests."""
    for name in ("OVH_ENDPOINT", "OVH_APPLICATION_KEY", "OVH_APPLICATION_SECRET", "OVH_CONSUMER_KEY"):
        monkeypatch.delenv(name, raising=False)
