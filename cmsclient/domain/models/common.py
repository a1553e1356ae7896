"""Defines common Value Objects shared by every resource of the CMS data model.

Includes the system metadata envelope (`sys`), typed links between resources,
pagination data for collection responses and small parsing helpers.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Generic, List, Optional, Protocol, TypeVar

# === Link Types ===

LINK_TYPE = "Link"
SPACE_LINK = "Space"
ENTRY_LINK = "Entry"
ASSET_LINK = "Asset"
CONTENT_TYPE_LINK = "ContentType"
LOCALE_LINK = "Locale"

T = TypeVar("T")


def parse_datetime(value: Optional[str]) -> Optional[datetime]:
    """Parses an ISO-8601 timestamp as returned by the API (trailing 'Z' allowed)."""
    if not value:
        return None
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    return datetime.fromisoformat(value)


def format_datetime(value: Optional[datetime]) -> Optional[str]:
    if value is None:
        return None
    return value.isoformat().replace("+00:00", "Z")


@dataclass(frozen=True)
class Link:
    """A typed reference to another resource, e.g. {"sys": {"type": "Link", "linkType": "Asset", "id": "x"}}."""
    id: str
    link_type: str
    type: str = LINK_TYPE

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> Optional["Link"]:
        if not data:
            return None
        sys = data.get("sys", data)
        return cls(
            id=sys.get("id", ""),
            link_type=sys.get("linkType", ""),
            type=sys.get("type", LINK_TYPE),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {"sys": {"type": self.type, "linkType": self.link_type, "id": self.id}}


class Linkable(Protocol):
    """Capability of resources that can be referenced through a Link."""

    def as_link(self) -> Link:
        ...


@dataclass
class SystemMetadata:
    """System managed metadata attached to every resource.

    Only `id` may be chosen by the caller on creation (and not for spaces). The
    `version` is the optimistic-concurrency token that must be echoed back on
    every update, publish, unpublish, archive and unarchive call.
    """
    id: str = ""
    type: str = ""
    version: int = 0
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    space: Optional[Link] = None
    content_type: Optional[Link] = None
    first_published_at: Optional[datetime] = None
    published_at: Optional[datetime] = None
    published_version: int = 0
    archived_at: Optional[datetime] = None
    revision: int = 0

    @property
    def space_id(self) -> str:
        return self.space.id if self.space else ""

    @property
    def content_type_id(self) -> str:
        return self.content_type.id if self.content_type else ""

    @property
    def is_published(self) -> bool:
        return self.published_version > 0 or self.published_at is not None

    @property
    def is_archived(self) -> bool:
        return self.archived_at is not None

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "SystemMetadata":
        data = data or {}
        return cls(
            id=data.get("id", ""),
            type=data.get("type", ""),
            version=data.get("version", 0) or 0,
            created_at=parse_datetime(data.get("createdAt")),
            updated_at=parse_datetime(data.get("updatedAt")),
            space=Link.from_dict(data.get("space")),
            content_type=Link.from_dict(data.get("contentType")),
            first_published_at=parse_datetime(data.get("firstPublishedAt")),
            published_at=parse_datetime(data.get("publishedAt")),
            published_version=data.get("publishedVersion", 0) or 0,
            archived_at=parse_datetime(data.get("archivedAt")),
            revision=data.get("revision", 0) or 0,
        )

    def to_dict(self) -> Dict[str, Any]:
        """Serializes the non-empty fields, mirroring the API's omitempty behaviour."""
        data: Dict[str, Any] = {}
        if self.id:
            data["id"] = self.id
        if self.type:
            data["type"] = self.type
        if self.version:
            data["version"] = self.version
        if self.space:
            data["space"] = self.space.to_dict()
        if self.content_type:
            data["contentType"] = self.content_type.to_dict()
        for key, value in (
            ("createdAt", self.created_at),
            ("updatedAt", self.updated_at),
            ("firstPublishedAt", self.first_published_at),
            ("publishedAt", self.published_at),
            ("archivedAt", self.archived_at),
        ):
            if value is not None:
                data[key] = format_datetime(value)
        if self.published_version:
            data["publishedVersion"] = self.published_version
        if self.revision:
            data["revision"] = self.revision
        return data


@dataclass
class Pagination:
    """Pagination data returned alongside every collection response."""
    total: int = 0
    skip: int = 0
    limit: int = 0

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Pagination":
        return cls(
            total=data.get("total", 0) or 0,
            skip=data.get("skip", 0) or 0,
            limit=data.get("limit", 0) or 0,
        )


@dataclass
class Page(Generic[T]):
    """One page of a collection: typed items plus the pagination they came with."""
    items: List[T] = field(default_factory=list)
    pagination: Pagination = field(default_factory=Pagination)
    includes: Optional[Any] = None

    def __iter__(self):
        return iter(self.items)

    def __len__(self) -> int:
        return len(self.items)

    @property
    def has_more(self) -> bool:
        return self.pagination.skip + len(self.items) < self.pagination.total
