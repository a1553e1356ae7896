import json
from collections import deque
from typing import Any, Deque, List, Optional

import pytest
from typer.testing import CliRunner

from cmsclient.client import DeliveryClient, ManagementClient
from cmsclient.domain.interfaces.http_transport import HttpTransport
from cmsclient.domain.models.http import ApiRequest, HttpResponse
from cmsclient.infrastructure.config.settings import clear_test_config
from cmsclient.infrastructure.resilience.rate_limiter import NoOpRateLimiter


def json_response(body: Any = None, status_code: int = 200) -> HttpResponse:
    """Builds an HttpResponse with a JSON body (None means an empty body)."""
    content = b"" if body is None else json.dumps(body).encode("utf-8")
    return HttpResponse(status_code=status_code, headers={"content-type": "application/json"}, content=content)


def sys_block(resource_id: str, resource_type: str, version: int = 1, space_id: str = "space123", **extra: Any) -> dict:
    block = {
        "id": resource_id,
        "type": resource_type,
        "version": version,
        "space": {"sys": {"type": "Link", "linkType": "Space", "id": space_id}},
    }
    block.update(extra)
    return block


class RecordingTransport(HttpTransport):
    """In-memory transport: records every request and replays queued responses."""

    def __init__(self, *responses: HttpResponse):
        self.requests: List[ApiRequest] = []
        self.responses: Deque[HttpResponse] = deque(responses)
        self.error: Optional[Exception] = None
        self.closed = False

    def queue(self, body: Any = None, status_code: int = 200) -> "RecordingTransport":
        self.responses.append(json_response(body, status_code))
        return self

    def send(self, request: ApiRequest) -> HttpResponse:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        if self.responses:
            return self.responses.popleft()
        return json_response(None, 204)

    def close(self) -> None:
        self.closed = True

    @property
    def last(self) -> ApiRequest:
        return self.requests[-1]


@pytest.fixture
def make_sys():
    """Factory for `sys` blocks of server responses."""
    return sys_block


@pytest.fixture
def make_response():
    return json_response


@pytest.fixture
def transport() -> RecordingTransport:
    return RecordingTransport()


@pytest.fixture
def management(transport: RecordingTransport) -> ManagementClient:
    """A management client wired to the recording transport, without throttling."""
    return ManagementClient("mgmt-token", transport=transport, rate_limiter=NoOpRateLimiter())


@pytest.fixture
def delivery(transport: RecordingTransport) -> DeliveryClient:
    return DeliveryClient("cda-token", transport=transport, rate_limiter=NoOpRateLimiter())


@pytest.fixture(scope="session")
def runner():
    """Provides a Typer CliRunner instance."""
    return CliRunner()


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch):
    """Keeps real tokens and config overrides from leaking into tests."""
    for name in ("CONTENTFUL_MANAGEMENT_TOKEN", "CONTENTFUL_DELIVERY_TOKEN"):
        monkeypatch.delenv(name, raising=False)
    clear_test_config()
    yield
    clear_test_config()
