"""Domain models for the CMS data model (spaces, content types, entries, assets, locales)."""

from .api_key import ApiKey
from .asset import Asset, AssetDetails, AssetFields, AssetFile, FileUpload, ImageDimensions, NewAsset
from .common import Link, Linkable, Page, Pagination, SystemMetadata
from .content_type import ContentType, Field, FieldType, FieldValidation
from .entry import Entry, Includes, NewEntry
from .errors import ApiError, CmsClientError, ResponseDecodeError, TransportError, ValidationError
from .locale import Locale
from .space import Space

__all__ = [
    "ApiError",
    "ApiKey",
    "Asset",
    "AssetDetails",
    "AssetFields",
    "AssetFile",
    "CmsClientError",
    "ContentType",
    "Entry",
    "Field",
    "FieldType",
    "FieldValidation",
    "FileUpload",
    "ImageDimensions",
    "Includes",
    "Link",
    "Linkable",
    "Locale",
    "NewAsset",
    "NewEntry",
    "Page",
    "Pagination",
    "ResponseDecodeError",
    "Space",
    "SystemMetadata",
    "TransportError",
    "ValidationError",
]
