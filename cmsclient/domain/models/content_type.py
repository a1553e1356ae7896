"""Content types: the schemas that define which fields an entry may carry.

Every entry only contains values for the fields of its content type, and each
value must match the field's data type. A content type holds at most 50 fields.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

from .common import CONTENT_TYPE_LINK, Link, SystemMetadata
from .errors import ValidationError

MAX_FIELDS = 50


class FieldType(str, Enum):
    """Field types; each maps onto a JSON type, though there are more field types."""
    SYMBOL = "Symbol"      # short text, 1 to 256 characters
    TEXT = "Text"          # long text, up to 50,000 characters
    RICH_TEXT = "RichText"
    INTEGER = "Integer"
    NUMBER = "Number"
    DATE = "Date"          # ISO-8601, time portion optional
    BOOLEAN = "Boolean"
    OBJECT = "Object"
    LOCATION = "Location"
    LINK = "Link"
    ARRAY = "Array"


@dataclass
class FieldValidation:
    """One validation rule of a field. Unset members are omitted on the wire."""
    size: Optional[Dict[str, float]] = None
    range: Optional[Dict[str, float]] = None
    date_range: Optional[Dict[str, str]] = None
    regexp: Optional[Dict[str, str]] = None
    in_values: Optional[List[Any]] = None
    link_content_type: Optional[List[str]] = None
    link_mimetype_group: Optional[List[str]] = None
    unique: Optional[bool] = None
    message: Optional[str] = None

    _WIRE_NAMES = (
        ("size", "size"),
        ("range", "range"),
        ("date_range", "dateRange"),
        ("regexp", "regexp"),
        ("in_values", "in"),
        ("link_content_type", "linkContentType"),
        ("link_mimetype_group", "linkMimetypeGroup"),
        ("unique", "unique"),
        ("message", "message"),
    )

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "FieldValidation":
        kwargs = {attr: data[wire] for attr, wire in cls._WIRE_NAMES if wire in data}
        return cls(**kwargs)

    def to_dict(self) -> Dict[str, Any]:
        return {
            wire: getattr(self, attr)
            for attr, wire in self._WIRE_NAMES
            if getattr(self, attr) is not None
        }


@dataclass
class Field:
    """A single field of a content type."""
    id: str
    name: str
    type: FieldType
    localized: bool = False
    required: bool = False
    disabled: bool = False
    # Omitted fields stay visible on the management surface only.
    omitted: bool = False
    link_type: Optional[str] = None
    items: Optional[Dict[str, Any]] = None
    validations: List[FieldValidation] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Field":
        return cls(
            id=data.get("id", ""),
            name=data.get("name", ""),
            type=FieldType(data.get("type", FieldType.SYMBOL.value)),
            localized=bool(data.get("localized", False)),
            required=bool(data.get("required", False)),
            disabled=bool(data.get("disabled", False)),
            omitted=bool(data.get("omitted", False)),
            link_type=data.get("linkType"),
            items=data.get("items"),
            validations=[FieldValidation.from_dict(v) for v in data.get("validations", [])],
        )

    def to_dict(self) -> Dict[str, Any]:
        body: Dict[str, Any] = {
            "id": self.id,
            "name": self.name,
            "type": self.type.value,
            "localized": self.localized,
            "required": self.required,
            "disabled": self.disabled,
            "omitted": self.omitted,
            "validations": [v.to_dict() for v in self.validations],
        }
        if self.link_type:
            body["linkType"] = self.link_type
        if self.items:
            body["items"] = self.items
        return body


@dataclass
class ContentType:
    """Schema for the entries of a space."""
    name: str = ""
    fields: List[Field] = field(default_factory=list)
    description: Optional[str] = None
    display_field: Optional[str] = None
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

    def field_by_id(self, field_id: str) -> Optional[Field]:
        return next((f for f in self.fields if f.id == field_id), None)

    def validate(self) -> None:
        """Checks the schema rules that can be verified without the server."""
        if not self.name:
            raise ValidationError("ContentType.name cannot be empty!")
        if len(self.fields) > MAX_FIELDS:
            raise ValidationError(f"ContentType cannot have more than {MAX_FIELDS} fields (got {len(self.fields)})")

        seen = set()
        for f in self.fields:
            if not f.id:
                raise ValidationError(f"Field '{f.name}' must have an id")
            if f.id in seen:
                raise ValidationError(f"Duplicate field id '{f.id}'")
            seen.add(f.id)
            if f.type == FieldType.LINK and not f.link_type:
                raise ValidationError(f"Link field '{f.id}' must specify a link type")
            if f.type == FieldType.ARRAY and not f.items:
                raise ValidationError(f"Array field '{f.id}' must specify its items")

        if self.display_field and self.display_field not in seen:
            raise ValidationError(f"Display field '{self.display_field}' is not a field of the content type")

    def as_link(self) -> Link:
        return Link(id=self.id, link_type=CONTENT_TYPE_LINK)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ContentType":
        return cls(
            name=data.get("name", ""),
            fields=[Field.from_dict(f) for f in data.get("fields", [])],
            description=data.get("description"),
            display_field=data.get("displayField"),
            metadata=SystemMetadata.from_dict(data.get("sys")),
        )

    def to_dict(self) -> Dict[str, Any]:
        body: Dict[str, Any] = {
            "name": self.name,
            "fields": [f.to_dict() for f in self.fields],
        }
        if self.description:
            body["description"] = self.description
        if self.display_field:
            body["displayField"] = self.display_field
        return body
