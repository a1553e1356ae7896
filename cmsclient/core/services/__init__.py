"""Endpoint services: one thin, validated wrapper per resource operation.

Reader classes hold the operations shared by both surfaces; the management
services extend them with the write operations.
"""

from .api_keys import ApiKeyService
from .assets import AssetReader, AssetService
from .content_types import ContentTypeReader, ContentTypeService
from .entries import EntryReader, EntryService
from .locales import LocaleService
from .spaces import SpaceReader, SpaceService

__all__ = [
    "ApiKeyService",
    "AssetReader",
    "AssetService",
    "ContentTypeReader",
    "ContentTypeService",
    "EntryReader",
    "EntryService",
    "LocaleService",
    "SpaceReader",
    "SpaceService",
]
