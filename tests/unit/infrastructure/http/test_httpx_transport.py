import json

import httpx
import pytest

from cmsclient.domain.models.errors import TransportError
from cmsclient.domain.models.http import ApiRequest
from cmsclient.infrastructure.http.httpx_transport import HttpxTransport


def make_transport(handler):
    client = httpx.Client(transport=httpx.MockTransport(handler))
    return HttpxTransport(http_client=client), client


def test_send_forwards_method_url_params_headers_and_body():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["method"] = request.method
        seen["url"] = str(request.url)
        seen["auth"] = request.headers["Authorization"]
        seen["body"] = json.loads(request.content)
        return httpx.Response(201, json={"sys": {"id": "e1"}})

    transport, _ = make_transport(handler)
    response = transport.send(ApiRequest(
        method="POST",
        url="https://api.contentful.com/spaces/s/entries",
        params=[("include", "all"), ("limit", "100")],
        headers={"Authorization": "Bearer t"},
        json={"fields": {"title": {"en-US": "Hi"}}},
    ))

    assert seen == {
        "method": "POST",
        "url": "https://api.contentful.com/spaces/s/entries?include=all&limit=100",
        "auth": "Bearer t",
        "body": {"fields": {"title": {"en-US": "Hi"}}},
    }
    assert response.status_code == 201
    assert json.loads(response.content) == {"sys": {"id": "e1"}}


def test_error_statuses_are_returned_not_raised():
    transport, _ = make_transport(lambda request: httpx.Response(404, json={"message": "nope"}))
    response = transport.send(ApiRequest(method="GET", url="https://api.contentful.com/spaces/x"))
    assert response.status_code == 404
    assert not response.is_success


def test_connection_failures_become_transport_errors():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    transport, _ = make_transport(handler)
    with pytest.raises(TransportError) as excinfo:
        transport.send(ApiRequest(method="GET", url="https://api.contentful.com/spaces"))

    assert isinstance(excinfo.value.__cause__, httpx.ConnectError)
    assert excinfo.value.original_exception is excinfo.value.__cause__


def test_timeouts_become_transport_errors():
    def handler(request):
        raise httpx.ReadTimeout("timed out", request=request)

    transport, _ = make_transport(handler)
    with pytest.raises(TransportError):
        transport.send(ApiRequest(method="GET", url="https://cdn.contentful.com/spaces/s", timeout=0.1))


def test_injected_client_is_not_closed():
    transport, client = make_transport(lambda request: httpx.Response(204))
    transport.close()
    assert not client.is_closed


def test_owned_client_is_closed():
    transport = HttpxTransport(timeout=5)
    transport.close()
    assert transport._client.is_closed


@pytest.mark.parametrize("error", [
    httpx.TooManyRedirects("redirect loop"),
    httpx.RemoteProtocolError("peer closed connection"),
    httpx.InvalidURL("bad host"),
])
def test_other_httpx_failures_become_transport_errors(error):
    def handler(request):
        raise error

    transport, _ = make_transport(handler)
    with pytest.raises(TransportError) as excinfo:
        transport.send(ApiRequest(method="GET", url="https://api.contentful.com/spaces/s"))

    assert excinfo.value.original_exception is error


def test_undecodable_content_encoding_becomes_transport_error():
    transport, _ = make_transport(
        lambda request: httpx.Response(200, headers={"Content-Encoding": "gzip"}, content=b"not gzip at all")
    )
    with pytest.raises(TransportError) as excinfo:
        transport.send(ApiRequest(method="GET", url="https://api.contentful.com/spaces/s"))

    assert isinstance(excinfo.value.__cause__, httpx.DecodingError)
