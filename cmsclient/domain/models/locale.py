"""Locale: a translation/region code scoped to a space."""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from .common import Link, LOCALE_LINK, SystemMetadata
from .errors import ValidationError


@dataclass
class Locale:
    """Allows translated content for both entries and assets.

    Two locales of one space cannot share a code, and deleting a locale removes
    all content stored for it.
    """
    name: str = ""
    code: str = ""
    default: bool = False
    optional: bool = False
    fallback_code: Optional[str] = None
    content_management_api: bool = True
    content_delivery_api: bool = True
    metadata: SystemMetadata = field(default_factory=SystemMetadata)

    @property
    def id(self) -> str:
        return self.metadata.id

    @property
    def version(self) -> int:
        return self.metadata.version

    @property
    def space_id(self) -> str:
        return self.metadata.space_id

    def validate(self) -> None:
        if not self.name:
            raise ValidationError("Locale name cannot be empty")
        if not self.code:
            raise ValidationError("Locale code cannot be empty")

    def as_link(self) -> Link:
        return Link(id=self.id, link_type=LOCALE_LINK)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Locale":
        return cls(
            name=data.get("name", ""),
            code=data.get("code", ""),
            default=bool(data.get("default", False)),
            optional=bool(data.get("optional", False)),
            fallback_code=data.get("fallbackCode"),
            content_management_api=bool(data.get("contentManagementApi", True)),
            content_delivery_api=bool(data.get("contentDeliveryApi", True)),
            metadata=SystemMetadata.from_dict(data.get("sys")),
        )

    def to_dict(self) -> Dict[str, Any]:
        body: Dict[str, Any] = {
            "name": self.name,
            "code": self.code,
            "optional": self.optional,
            "contentManagementApi": self.content_management_api,
            "contentDeliveryApi": self.content_delivery_api,
        }
        if self.default:
            body["default"] = True
        if self.fallback_code:
            body["fallbackCode"] = self.fallback_code
        return body
