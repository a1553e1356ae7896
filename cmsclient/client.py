"""Client facades for the two API surfaces.

Each client owns one request pipeline (builder + transport + rate limiter)
and exposes the endpoint services for its surface as attributes:

    with ManagementClient(token) as client:
        space = client.spaces.fetch_space("space123")
        page = client.entries.query_entries(space.id, {"content_type": "post"})

Clients are safe to share between threads.
"""

import logging
from typing import Optional

from cmsclient.core.pipeline import RequestPipeline
from cmsclient.core.services import (
    ApiKeyService,
    AssetReader,
    AssetService,
    ContentTypeReader,
    ContentTypeService,
    EntryReader,
    EntryService,
    LocaleService,
    SpaceReader,
    SpaceService,
)
from cmsclient.domain.interfaces.http_transport import HttpTransport
from cmsclient.domain.interfaces.rate_limiter import RateLimiter
from cmsclient.domain.models.errors import ValidationError
from cmsclient.infrastructure.config import settings
from cmsclient.infrastructure.http.httpx_transport import HttpxTransport
from cmsclient.infrastructure.http.request_builder import (
    DELIVERY_PAGE_SIZE_CEILING,
    DELIVERY_SURFACE,
    MANAGEMENT_SURFACE,
    ApiSurface,
    RequestBuilder,
)
from cmsclient.infrastructure.resilience.rate_limiter import SlidingWindowRateLimiter

logger = logging.getLogger(__name__)

DEFAULT_API_VERSION = "v1"


class _BaseClient:
    """Wires the pipeline shared by every service of one surface."""

    def __init__(
        self,
        surface: ApiSurface,
        access_token: str,
        version: str = DEFAULT_API_VERSION,
        *,
        transport: Optional[HttpTransport] = None,
        rate_limiter: Optional[RateLimiter] = None,
        timeout: Optional[float] = None,
    ):
        builder = RequestBuilder(surface, access_token, version, timeout=timeout)
        self._owns_transport = transport is None
        self.pipeline = RequestPipeline(
            builder=builder,
            transport=transport or HttpxTransport(timeout=timeout),
            rate_limiter=rate_limiter or SlidingWindowRateLimiter(),
        )
        logger.debug(f"{type(self).__name__} ready: {surface.base_url} ({version}, page size {surface.max_page_size})")

    @property
    def surface(self) -> ApiSurface:
        return self.pipeline.builder.surface

    def close(self) -> None:
        """Closes the transport if the client created it."""
        if self._owns_transport:
            self.pipeline.transport.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.close()


class ManagementClient(_BaseClient):
    """Read-write client for the management surface."""

    def __init__(
        self,
        access_token: str,
        version: str = DEFAULT_API_VERSION,
        *,
        transport: Optional[HttpTransport] = None,
        rate_limiter: Optional[RateLimiter] = None,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
    ):
        super().__init__(
            MANAGEMENT_SURFACE.with_overrides(base_url=base_url),
            access_token,
            version,
            transport=transport,
            rate_limiter=rate_limiter,
            timeout=timeout,
        )
        self.spaces = SpaceService(self.pipeline)
        self.content_types = ContentTypeService(self.pipeline)
        self.entries = EntryService(self.pipeline)
        self.assets = AssetService(self.pipeline)
        self.locales = LocaleService(self.pipeline)
        self.api_keys = ApiKeyService(self.pipeline)

    @classmethod
    def from_config(cls, **overrides) -> "ManagementClient":
        """Builds a client from the management token and api.* settings."""
        token = overrides.pop("access_token", None) or settings.get_management_token()
        if not token:
            raise ValidationError(
                "No management access token configured. Set CONTENTFUL_MANAGEMENT_TOKEN "
                "or management.access_token."
            )
        return cls(token, **_config_kwargs(overrides))


class DeliveryClient(_BaseClient):
    """Read-only client for published content.

    Entry and asset reads always request every locale (`locale=*`), so
    fields come back in the same {field: {locale: value}} shape as on the
    management surface.
    """

    def __init__(
        self,
        access_token: str,
        version: str = DEFAULT_API_VERSION,
        *,
        transport: Optional[HttpTransport] = None,
        rate_limiter: Optional[RateLimiter] = None,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        max_page_size: int = DELIVERY_SURFACE.max_page_size,
    ):
        if max_page_size <= 0 or max_page_size > DELIVERY_PAGE_SIZE_CEILING:
            raise ValidationError(
                f"max_page_size must be between 1 and {DELIVERY_PAGE_SIZE_CEILING} (got {max_page_size})"
            )
        super().__init__(
            DELIVERY_SURFACE.with_overrides(base_url=base_url, max_page_size=max_page_size),
            access_token,
            version,
            transport=transport,
            rate_limiter=rate_limiter,
            timeout=timeout,
        )
        self.spaces = SpaceReader(self.pipeline)
        self.content_types = ContentTypeReader(self.pipeline)
        self.entries = EntryReader(self.pipeline)
        self.assets = AssetReader(self.pipeline)

    @classmethod
    def from_config(cls, **overrides) -> "DeliveryClient":
        """Builds a client from the delivery token, api.* and delivery.* settings."""
        token = overrides.pop("access_token", None) or settings.get_delivery_token()
        if not token:
            raise ValidationError(
                "No delivery access token configured. Set CONTENTFUL_DELIVERY_TOKEN "
                "or delivery.access_token."
            )
        overrides.setdefault("max_page_size", settings.get_delivery_max_page_size())
        return cls(token, **_config_kwargs(overrides))


def _config_kwargs(overrides: dict) -> dict:
    if "rate_limiter" not in overrides:
        max_requests, window = settings.get_rate_limit()
        overrides["rate_limiter"] = SlidingWindowRateLimiter(max_requests=max_requests, time_window=window)
    overrides.setdefault("version", settings.get_api_version())
    overrides.setdefault("timeout", settings.get_request_timeout())
    return overrides
