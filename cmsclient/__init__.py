"""Typed client for the Contentful delivery and management REST APIs."""

from cmsclient.client import DeliveryClient, ManagementClient
from cmsclient.domain.models import (
    ApiError,
    ApiKey,
    Asset,
    CmsClientError,
    ContentType,
    Entry,
    Field,
    FieldType,
    FileUpload,
    Link,
    Locale,
    NewAsset,
    NewEntry,
    Page,
    ResponseDecodeError,
    Space,
    TransportError,
    ValidationError,
)

__version__ = "0.1.0"

__all__ = [
    "ApiError",
    "ApiKey",
    "Asset",
    "CmsClientError",
    "ContentType",
    "DeliveryClient",
    "Entry",
    "Field",
    "FieldType",
    "FileUpload",
    "Link",
    "Locale",
    "ManagementClient",
    "NewAsset",
    "NewEntry",
    "Page",
    "ResponseDecodeError",
    "Space",
    "TransportError",
    "ValidationError",
]
