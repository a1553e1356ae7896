from unittest.mock import MagicMock

import pytest

from cmsclient.core.pipeline import RequestPipeline
from cmsclient.domain.interfaces.rate_limiter import RateLimiter
from cmsclient.domain.models.errors import ApiError, TransportError
from cmsclient.domain.models.space import Space
from cmsclient.infrastructure.http.request_builder import MANAGEMENT_SURFACE, RequestBuilder


@pytest.fixture
def rate_limiter():
    return MagicMock(spec=RateLimiter)


@pytest.fixture
def pipeline(transport, rate_limiter):
    return RequestPipeline(RequestBuilder(MANAGEMENT_SURFACE, "token", "v1"), transport, rate_limiter)


def test_execute_acquires_builds_sends_and_decodes(pipeline, transport, rate_limiter):
    transport.queue({"name": "Blog", "sys": {"id": "s1", "type": "Space", "version": 3}})

    space = pipeline.execute("GET", "spaces/s1", Space.from_dict)

    rate_limiter.acquire.assert_called_once()
    assert transport.last.url == "https://api.contentful.com/spaces/s1"
    assert space.name == "Blog"
    assert space.version == 3


def test_rate_limit_acquired_before_dispatch(pipeline, transport, rate_limiter):
    order = []
    rate_limiter.acquire.side_effect = lambda: order.append("acquire")
    original_send = transport.send

    def send(request):
        order.append("send")
        return original_send(request)

    transport.send = send
    pipeline.execute("DELETE", "spaces/s1")
    assert order == ["acquire", "send"]


def test_api_error_is_raised(pipeline, transport):
    transport.queue({"message": "Version mismatch", "requestId": "r1", "sys": {"type": "Error", "id": "VersionMismatch"}}, 409)

    with pytest.raises(ApiError) as excinfo:
        pipeline.execute("PUT", "spaces/s1", Space.from_dict, version=1)

    assert excinfo.value.sys_id == "VersionMismatch"
    assert excinfo.value.status_code == 409


def test_transport_error_propagates_unchanged(pipeline, transport):
    error = TransportError("boom")
    transport.error = error

    with pytest.raises(TransportError) as excinfo:
        pipeline.execute("GET", "spaces")

    assert excinfo.value is error
    assert len(transport.requests) == 1


def test_nothing_is_retried(pipeline, transport):
    transport.queue({"message": "Rate limit exceeded", "requestId": "r"}, 429)
    with pytest.raises(ApiError):
        pipeline.execute("GET", "spaces")
    assert len(transport.requests) == 1


def test_delete_without_body_returns_none(pipeline, transport):
    assert pipeline.execute("DELETE", "spaces/s1") is None
