"""Assets: files (images, video, audio, PDFs, ...) with per-locale metadata.

Assets can be localized by providing a separate file per locale; assets that are
not localized provide a single file under the default locale. A new asset only
points at an upload URL; it must be processed before it can be published.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from .common import ASSET_LINK, Link, SystemMetadata
from .errors import ValidationError


@dataclass
class ImageDimensions:
    width: int = 0
    height: int = 0


@dataclass
class AssetDetails:
    size: int = 0
    image: Optional[ImageDimensions] = None

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> Optional["AssetDetails"]:
        if not data:
            return None
        image = data.get("image")
        return cls(
            size=data.get("size", 0) or 0,
            image=ImageDimensions(image.get("width", 0), image.get("height", 0)) if image else None,
        )

    def to_dict(self) -> Dict[str, Any]:
        body: Dict[str, Any] = {"size": self.size}
        if self.image:
            body["image"] = {"width": self.image.width, "height": self.image.height}
        return body


@dataclass
class AssetFile:
    """File metadata for one locale; `url` appears once processing has finished."""
    content_type: str = ""
    file_name: str = ""
    url: Optional[str] = None
    upload: Optional[str] = None
    details: Optional[AssetDetails] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AssetFile":
        return cls(
            content_type=data.get("contentType", ""),
            file_name=data.get("fileName", ""),
            url=data.get("url"),
            upload=data.get("upload"),
            details=AssetDetails.from_dict(data.get("details")),
        )

    def to_dict(self) -> Dict[str, Any]:
        body: Dict[str, Any] = {"contentType": self.content_type, "fileName": self.file_name}
        if self.url:
            body["url"] = self.url
        if self.upload:
            body["upload"] = self.upload
        if self.details:
            body["details"] = self.details.to_dict()
        return body


@dataclass
class AssetFields:
    title: Dict[str, str] = field(default_factory=dict)
    description: Dict[str, str] = field(default_factory=dict)
    file: Dict[str, AssetFile] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "AssetFields":
        data = data or {}
        return cls(
            title=dict(data.get("title") or {}),
            description=dict(data.get("description") or {}),
            file={locale: AssetFile.from_dict(f) for locale, f in (data.get("file") or {}).items()},
        )

    def to_dict(self) -> Dict[str, Any]:
        body: Dict[str, Any] = {
            "title": self.title,
            "file": {locale: f.to_dict() for locale, f in self.file.items()},
        }
        if self.description:
            body["description"] = self.description
        return body


@dataclass
class Asset:
    fields: AssetFields = field(default_factory=AssetFields)
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

    def is_processed(self, locale: str) -> bool:
        """True once the server has ingested the upload for `locale` and exposes a URL."""
        asset_file = self.fields.file.get(locale)
        return bool(asset_file and asset_file.url)

    def validate(self) -> None:
        if not self.id:
            raise ValidationError("Asset validation failed. metadata.id cannot be empty!")
        if not self.space_id:
            raise ValidationError("Asset validation failed. metadata.space cannot be empty!")

    def as_link(self) -> Link:
        return Link(id=self.id, link_type=ASSET_LINK)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Asset":
        return cls(
            fields=AssetFields.from_dict(data.get("fields")),
            metadata=SystemMetadata.from_dict(data.get("sys")),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {"fields": self.fields.to_dict()}


@dataclass
class FileUpload:
    """A file to be ingested: its MIME type, name and a publicly reachable upload URL."""
    content_type: str
    file_name: str
    upload: str

    def to_dict(self) -> Dict[str, Any]:
        return {"contentType": self.content_type, "fileName": self.file_name, "upload": self.upload}


@dataclass
class NewAsset:
    """Everything needed to create an asset prior to processing."""
    space_id: str
    title: Dict[str, str] = field(default_factory=dict)
    file: Dict[str, FileUpload] = field(default_factory=dict)
    description: Dict[str, str] = field(default_factory=dict)

    def validate(self) -> None:
        if not self.space_id:
            raise ValidationError("NewAsset validation failed. space_id cannot be empty!")
        if not self.file:
            raise ValidationError("NewAsset validation failed. file cannot be empty!")
        if not self.title:
            raise ValidationError("NewAsset validation failed. title cannot be empty!")
        for locale, upload in self.file.items():
            if not upload.file_name:
                raise ValidationError(f"NewAsset validation failed. file name for '{locale}' cannot be empty")
            if not upload.content_type:
                raise ValidationError(f"NewAsset validation failed. content type for '{locale}' cannot be empty")
            if not upload.upload:
                raise ValidationError(f"NewAsset validation failed. upload URL for '{locale}' cannot be empty")

    def to_dict(self) -> Dict[str, Any]:
        fields: Dict[str, Any] = {
            "title": self.title,
            "file": {locale: upload.to_dict() for locale, upload in self.file.items()},
        }
        if self.description:
            fields["description"] = self.description
        return {"fields": fields}
