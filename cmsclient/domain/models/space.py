"""Space: the top-level container for content types, entries, assets and locales."""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from .common import Link, SPACE_LINK, SystemMetadata
from .errors import ValidationError


@dataclass
class Space:
    """A space. Deleting one removes all of its content server-side."""
    name: str = ""
    default_locale: Optional[str] = None
    metadata: SystemMetadata = field(default_factory=SystemMetadata)

    @property
    def id(self) -> str:
        return self.metadata.id

    @property
    def version(self) -> int:
        return self.metadata.version

    def validate(self) -> None:
        if not self.name:
            raise ValidationError("Space must specify a valid name")

    def as_link(self) -> Link:
        return Link(id=self.id, link_type=SPACE_LINK)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Space":
        return cls(
            name=data.get("name", ""),
            default_locale=data.get("defaultLocale"),
            metadata=SystemMetadata.from_dict(data.get("sys")),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Request body for create/update; `sys` is server managed and never sent."""
        body: Dict[str, Any] = {"name": self.name}
        if self.default_locale:
            body["defaultLocale"] = self.default_locale
        return body
