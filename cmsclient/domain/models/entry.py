"""Entries: content records conforming to a content type.

Entry fields map a field id to a per-locale mapping of values, e.g.
{"title": {"en-US": "Hello", "de-DE": "Hallo"}}.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .asset import Asset
from .common import ENTRY_LINK, Link, SystemMetadata
from .errors import ValidationError

EntryFields = Dict[str, Dict[str, Any]]


@dataclass
class NewEntry:
    """Fields of an entry that does not exist yet.

    When `entry_id` is set the entry is created under that identifier,
    otherwise the server assigns one.
    """
    fields: EntryFields = field(default_factory=dict)
    entry_id: Optional[str] = None

    def validate(self) -> None:
        if not self.fields:
            raise ValidationError("NewEntry.fields cannot be empty!")

    def to_dict(self) -> Dict[str, Any]:
        return {"fields": self.fields}


@dataclass
class Entry:
    """An entry; `metadata.space` and `metadata.content_type` link it to its parents."""
    fields: EntryFields = field(default_factory=dict)
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

    @property
    def content_type_id(self) -> str:
        return self.metadata.content_type_id

    def get_field(self, name: str, locale: str) -> Any:
        return self.fields.get(name, {}).get(locale)

    def set_field(self, name: str, locale: str, value: Any) -> None:
        self.fields.setdefault(name, {})[locale] = value

    def validate(self) -> None:
        """Raises ValidationError unless the entry can be addressed and carries fields."""
        if not self.space_id:
            raise ValidationError("Entry must have a valid Space associated with it!")
        if not self.id:
            raise ValidationError("Entry.metadata.id cannot be empty!")
        if not self.fields:
            raise ValidationError("Entry.fields cannot be empty!")

    def as_link(self) -> Link:
        return Link(id=self.id, link_type=ENTRY_LINK)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Entry":
        return cls(
            fields=data.get("fields") or {},
            metadata=SystemMetadata.from_dict(data.get("sys")),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {"fields": self.fields}


@dataclass
class Includes:
    """Linked resources resolved by the server alongside an entry query."""
    entries: List[Entry] = field(default_factory=list)
    assets: List[Asset] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "Includes":
        data = data or {}
        return cls(
            entries=[Entry.from_dict(e) for e in data.get("Entry", [])],
            assets=[Asset.from_dict(a) for a in data.get("Asset", [])],
        )

    def resolve(self, link: Link) -> Optional[Any]:
        """Returns the included entry or asset a link points to, if it was included."""
        pool = self.entries if link.link_type == ENTRY_LINK else self.assets
        return next((item for item in pool if item.id == link.id), None)
