import httpx
import pytest

from cmsclient.client import DeliveryClient, ManagementClient
from cmsclient.core.services import AssetReader, EntryReader, EntryService, SpaceReader
from cmsclient.domain.models.errors import CmsClientError, TransportError, ValidationError
from cmsclient.infrastructure.config.settings import set_config_for_testing
from cmsclient.infrastructure.http.httpx_transport import HttpxTransport
from cmsclient.infrastructure.resilience.rate_limiter import NoOpRateLimiter, SlidingWindowRateLimiter


def test_management_client_exposes_services(management):
    assert isinstance(management.entries, EntryService)
    for name in ("spaces", "content_types", "entries", "assets", "locales", "api_keys"):
        assert hasattr(management, name)
    assert management.surface.base_url == "https://api.contentful.com"


def test_delivery_client_is_read_only(delivery):
    assert type(delivery.spaces) is SpaceReader
    assert type(delivery.entries) is EntryReader
    assert type(delivery.assets) is AssetReader
    assert not hasattr(delivery, "locales")
    assert not hasattr(delivery.entries, "publish_entry")


def test_delivery_entry_query_forces_all_locales(delivery, transport):
    transport.queue({"total": 0, "skip": 0, "limit": 100, "items": []})

    delivery.entries.query_entries("space123", {"content_type": "post", "locale": "de-DE"}, 500, 10)

    request = transport.last
    assert request.url == "https://cdn.contentful.com/spaces/space123/entries"
    assert request.headers["Authorization"] == "Bearer cda-token"
    assert request.headers["Content-Type"] == "application/vnd.contentful.delivery.v1+json"
    assert request.params == [("content_type", "post"), ("limit", "100"), ("skip", "10"), ("locale", "*")]


@pytest.mark.parametrize("body, call", [
    ({"sys": {"id": "e", "type": "Entry"}}, lambda c: c.entries.fetch_entry("s", "e")),
    ({"sys": {"id": "a", "type": "Asset"}}, lambda c: c.assets.fetch_asset("s", "a")),
    ({"total": 0, "skip": 0, "limit": 100, "items": []}, lambda c: c.assets.fetch_assets("s")),
])
def test_delivery_single_reads_force_all_locales(delivery, transport, body, call):
    transport.queue(body)
    call(delivery)
    assert transport.last.params[-1] == ("locale", "*")


def test_delivery_space_read_has_no_locale(delivery, transport):
    transport.queue({"name": "Blog", "sys": {"id": "s", "type": "Space"}})
    delivery.spaces.fetch_space("s")
    assert transport.last.params == []


def test_delivery_page_ceiling_is_configurable(transport):
    transport.queue({"total": 0, "skip": 0, "limit": 1000, "items": []})
    client = DeliveryClient("cda", transport=transport, max_page_size=1000)
    client.entries.query_entries("s", limit=5000)
    assert ("limit", "1000") in transport.last.params


@pytest.mark.parametrize("size", [0, 1001])
def test_delivery_page_ceiling_bounds(transport, size):
    with pytest.raises(ValidationError):
        DeliveryClient("cda", transport=transport, max_page_size=size)


def test_missing_token_is_rejected(transport):
    with pytest.raises(ValidationError):
        ManagementClient("", transport=transport)


def test_default_rate_limiter(transport):
    client = ManagementClient("t", transport=transport)
    limiter = client.pipeline.rate_limiter
    assert isinstance(limiter, SlidingWindowRateLimiter)
    assert (limiter.max_requests, limiter.time_window) == (10, 1.0)


def test_injected_transport_is_not_closed(transport):
    with ManagementClient("t", transport=transport):
        pass
    assert not transport.closed


def test_owned_transport_is_closed(mocker):
    close = mocker.patch("cmsclient.client.HttpxTransport.close")
    with ManagementClient("t"):
        pass
    close.assert_called_once()


def test_from_config(transport):
    set_config_for_testing({
        "management.access_token": "from-yaml",
        "api.rate_limit.requests": 4,
        "api.rate_limit.window_seconds": 2.0,
        "api.timeout_seconds": 7,
    })

    client = ManagementClient.from_config(transport=transport)

    assert client.pipeline.builder.access_token == "from-yaml"
    assert client.pipeline.builder.timeout == 7.0
    assert client.pipeline.rate_limiter.max_requests == 4
    assert client.pipeline.rate_limiter.time_window == 2.0


def test_delivery_from_config_uses_page_size(transport):
    set_config_for_testing({"CONTENTFUL_DELIVERY_TOKEN": "cda", "delivery.max_page_size": 5000})
    client = DeliveryClient.from_config(transport=transport)
    assert client.surface.max_page_size == 1000


def test_from_config_without_token(mocker):
    mocker.patch("cmsclient.client.settings.get_management_token", return_value=None)
    with pytest.raises(ValidationError, match="CONTENTFUL_MANAGEMENT_TOKEN"):
        ManagementClient.from_config()


def test_redirect_loops_surface_as_client_errors():
    def handler(request):
        raise httpx.TooManyRedirects("loop", request=request)

    http_client = httpx.Client(transport=httpx.MockTransport(handler))
    client = ManagementClient("t", transport=HttpxTransport(http_client=http_client), rate_limiter=NoOpRateLimiter())

    with pytest.raises(CmsClientError) as excinfo:
        client.spaces.fetch_space("s")

    assert isinstance(excinfo.value, TransportError)
