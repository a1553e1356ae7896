"""Builds transport-ready requests for either API surface.

Given a resource path, a verb, optional query parameters and an optional JSON
body, the builder adds the bearer token, the versioned vendor media type of the
surface in use, and the resource version header for optimistic concurrency.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional

from cmsclient.domain.models.errors import ValidationError
from cmsclient.domain.models.http import ApiRequest, QueryParams

logger = logging.getLogger(__name__)

VERSION_HEADER = "X-Contentful-Version"
CONTENT_TYPE_ID_HEADER = "X-Contentful-Content-Type"

MANAGEMENT_MAX_PAGE_SIZE = 100
DELIVERY_MAX_PAGE_SIZE = 100
# Hard upper bound the delivery surface accepts for `limit`.
DELIVERY_PAGE_SIZE_CEILING = 1000

# Query keys owned by the builder; caller-supplied values for them are overridden.
RESERVED_QUERY_KEYS = ("limit", "skip")


@dataclass(frozen=True)
class ApiSurface:
    """One of the two API surfaces and its surface-specific request rules."""
    name: str
    base_url: str
    max_page_size: int
    localized_query: Dict[str, str] = field(default_factory=dict)

    def media_type(self, version: str) -> str:
        return f"application/vnd.contentful.{self.name}.{version}+json"

    def with_overrides(self, base_url: Optional[str] = None, max_page_size: Optional[int] = None) -> "ApiSurface":
        return ApiSurface(
            name=self.name,
            base_url=base_url or self.base_url,
            max_page_size=max_page_size or self.max_page_size,
            localized_query=dict(self.localized_query),
        )


DELIVERY_SURFACE = ApiSurface(
    name="delivery",
    base_url="https://cdn.contentful.com",
    max_page_size=DELIVERY_MAX_PAGE_SIZE,
    localized_query={"locale": "*"},
)

MANAGEMENT_SURFACE = ApiSurface(
    name="management",
    base_url="https://api.contentful.com",
    max_page_size=MANAGEMENT_MAX_PAGE_SIZE,
)


def content_type_header(surface: ApiSurface, version: str) -> str:
    return surface.media_type(version)


def authorization_header(access_token: str) -> str:
    return f"Bearer {access_token}"


def require_id(value: Optional[str], description: str, operation: str) -> str:
    """Rejects a missing or blank identifier before anything touches the network."""
    if value is None or not str(value).strip():
        raise ValidationError(f"{operation} failed. {description} is not valid!")
    return str(value)


@dataclass(frozen=True)
class PageRequest:
    """Validated pagination arguments of a list/query call."""
    limit: int
    skip: int


class RequestBuilder:
    """Produces ApiRequest objects for one surface, token and API version."""

    def __init__(self, surface: ApiSurface, access_token: str, version: str, timeout: Optional[float] = None):
        if not access_token:
            raise ValidationError("An access token is required.")
        if not version:
            raise ValidationError("An API version is required.")
        self.surface = surface
        self.access_token = access_token
        self.version = version
        self.timeout = timeout

    def page(self, limit: int, skip: int = 0, operation: str = "List") -> PageRequest:
        """Validates and clamps pagination arguments.

        Args:
            limit: Requested page size. Must be positive; values above the
                surface's maximum are clamped to it.
            skip: Offset into the collection. Must not be negative.
            operation: Name used in validation messages.

        Raises:
            ValidationError: On a non-positive limit or negative skip.
        """
        if skip is None or skip < 0:
            raise ValidationError(f"{operation} failed. Skip cannot be negative")
        return PageRequest(limit=self.clamp_page_size(limit, operation), skip=skip)

    def clamp_page_size(self, limit: int, operation: str = "List") -> int:
        if limit is None or limit <= 0:
            raise ValidationError(f"{operation} failed. Limit must be greater than 0")
        if limit > self.surface.max_page_size:
            logger.debug(f"{operation}: clamping limit {limit} to {self.surface.max_page_size}")
            return self.surface.max_page_size
        return limit

    def headers(self, version: Optional[int] = None, extra: Optional[Mapping[str, str]] = None) -> Dict[str, str]:
        headers = {
            "Authorization": authorization_header(self.access_token),
            "Content-Type": content_type_header(self.surface, self.version),
        }
        if version is not None:
            headers[VERSION_HEADER] = str(version)
        if extra:
            headers.update(extra)
        return headers

    def query(
        self,
        params: Optional[Mapping[str, Any]] = None,
        page: Optional[PageRequest] = None,
        localized: bool = False,
    ) -> QueryParams:
        """Orders query pairs: caller params, then pagination, then surface defaults."""
        overridden = set()
        if page is not None:
            overridden.update(RESERVED_QUERY_KEYS)
        if localized:
            overridden.update(self.surface.localized_query)

        pairs: QueryParams = [
            (str(key), str(value))
            for key, value in (params or {}).items()
            if key not in overridden
        ]
        if page is not None:
            pairs.append(("limit", str(page.limit)))
            pairs.append(("skip", str(page.skip)))
        if localized:
            pairs.extend(self.surface.localized_query.items())
        return pairs

    def build(
        self,
        method: str,
        path: str,
        *,
        params: Optional[Mapping[str, Any]] = None,
        page: Optional[PageRequest] = None,
        body: Optional[Any] = None,
        version: Optional[int] = None,
        headers: Optional[Mapping[str, str]] = None,
        localized: bool = False,
    ) -> ApiRequest:
        """Builds the request for `method` on `path` (relative to the surface base URL)."""
        url = f"{self.surface.base_url.rstrip('/')}/{path.lstrip('/')}"
        return ApiRequest(
            method=method.upper(),
            url=url,
            params=self.query(params, page, localized),
            headers=self.headers(version, headers),
            json=body,
            timeout=self.timeout,
        )
