"""Shared plumbing for endpoint services: argument checks and page decoding."""

from typing import Any, Callable, Dict, Optional, TypeVar
from urllib.parse import quote

from cmsclient.core.pipeline import RequestPipeline
from cmsclient.domain.models.common import Page, Pagination
from cmsclient.domain.models.errors import ValidationError
from cmsclient.infrastructure.http.request_builder import require_id

T = TypeVar("T")

DEFAULT_PAGE_SIZE = 100


def require_resource(resource: Optional[Any], description: str, operation: str) -> Any:
    if resource is None:
        raise ValidationError(f"{operation} failed. {description} must not be None!")
    return resource


def require_version(version: Optional[int], operation: str) -> int:
    """The version is echoed back as the concurrency token; resources start at 1."""
    if version is None or version < 1:
        raise ValidationError(f"{operation} failed. A current resource version is required (got {version!r})")
    return version


def page_decoder(
    item_decoder: Callable[[Dict[str, Any]], T],
    includes_decoder: Optional[Callable[[Optional[Dict[str, Any]]], Any]] = None,
) -> Callable[[Dict[str, Any]], Page[T]]:
    """Builds a decoder for collection bodies ({total, skip, limit, items[, includes]})."""

    def decode(body: Dict[str, Any]) -> Page[T]:
        return Page(
            items=[item_decoder(item) for item in body.get("items", [])],
            pagination=Pagination.from_dict(body),
            includes=includes_decoder(body.get("includes")) if includes_decoder else None,
        )

    return decode


class BaseService:
    """Base for the per-resource services; holds the pipeline they all share."""

    def __init__(self, pipeline: RequestPipeline):
        self.pipeline = pipeline

    @staticmethod
    def _space_path(space_id: str, *parts: str) -> str:
        return "/".join(quote(part, safe="") for part in ("spaces", space_id) + parts)

    @staticmethod
    def _require_id(value: Optional[str], description: str, operation: str) -> str:
        return require_id(value, description, operation)
