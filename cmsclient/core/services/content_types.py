"""Endpoint methods for content types.

Lifecycle: created/updated (version increments) -> activated -> deactivated ->
deleted. A content type can only be deleted once it is deactivated; the server
enforces that.
"""

import logging
from typing import Dict, Optional

from cmsclient.core.services.base import DEFAULT_PAGE_SIZE, BaseService, page_decoder, require_resource, require_version
from cmsclient.domain.models.common import Page
from cmsclient.domain.models.content_type import ContentType

logger = logging.getLogger(__name__)

# Published (activated) content is selected with a query flag, never a separate path.
PUBLISHED_FILTER = {"sys.publishedAt[exists]": "true"}


class ContentTypeReader(BaseService):

    def fetch_content_types(
        self, space_id: str, limit: int = DEFAULT_PAGE_SIZE, skip: int = 0
    ) -> Page[ContentType]:
        return self._fetch_content_types(space_id, limit, skip, None)

    def _fetch_content_types(
        self, space_id: str, limit: int, skip: int, params: Optional[Dict[str, str]]
    ) -> Page[ContentType]:
        space_id = self._require_id(space_id, "Space identifier", "FetchContentTypes")
        page = self.pipeline.page(limit, skip, "FetchContentTypes")
        return self.pipeline.execute(
            "GET",
            self._space_path(space_id, "content_types"),
            page_decoder(ContentType.from_dict),
            params=params,
            page=page,
        )

    def fetch_content_type(self, space_id: str, content_type_id: str) -> ContentType:
        space_id = self._require_id(space_id, "Space identifier", "FetchContentType")
        content_type_id = self._require_id(content_type_id, "Content type identifier", "FetchContentType")
        return self.pipeline.execute(
            "GET", self._space_path(space_id, "content_types", content_type_id), ContentType.from_dict
        )


class ContentTypeService(ContentTypeReader):

    def fetch_content_types(
        self, space_id: str, limit: int = DEFAULT_PAGE_SIZE, skip: int = 0, published: bool = False
    ) -> Page[ContentType]:
        """Returns the content types of a space.

        Args:
            space_id: The space to list.
            limit: Page size, clamped to the surface maximum.
            skip: Offset into the collection.
            published: Only return activated content types.
        """
        return self._fetch_content_types(space_id, limit, skip, PUBLISHED_FILTER if published else None)

    def _path(self, content_type: ContentType, operation: str, *suffix: str) -> str:
        space_id = self._require_id(content_type.space_id, "Space identifier", operation)
        content_type_id = self._require_id(content_type.id, "Content type identifier", operation)
        return self._space_path(space_id, "content_types", content_type_id, *suffix)

    def create_content_type(self, content_type: ContentType) -> ContentType:
        """Creates a content type under the id in `content_type.metadata.id`."""
        require_resource(content_type, "Content type", "CreateContentType")
        path = self._path(content_type, "CreateContentType")
        content_type.validate()
        logger.info(f"Creating content type '{content_type.id}' in space {content_type.space_id}")
        return self.pipeline.execute("PUT", path, ContentType.from_dict, body=content_type.to_dict())

    def update_content_type(self, content_type: ContentType) -> ContentType:
        require_resource(content_type, "Content type", "UpdateContentType")
        path = self._path(content_type, "UpdateContentType")
        version = require_version(content_type.version, "UpdateContentType")
        content_type.validate()
        return self.pipeline.execute(
            "PUT", path, ContentType.from_dict, body=content_type.to_dict(), version=version
        )

    def delete_content_type(self, content_type: ContentType) -> None:
        require_resource(content_type, "Content type", "DeleteContentType")
        path = self._path(content_type, "DeleteContentType")
        self.pipeline.execute("DELETE", path)

    def activate_content_type(self, content_type: ContentType) -> ContentType:
        """Publishes the content type so entries can be created for it."""
        require_resource(content_type, "Content type", "ActivateContentType")
        path = self._path(content_type, "ActivateContentType", "published")
        version = require_version(content_type.version, "ActivateContentType")
        return self.pipeline.execute("PUT", path, ContentType.from_dict, version=version)

    def deactivate_content_type(self, content_type: ContentType) -> ContentType:
        require_resource(content_type, "Content type", "DeactivateContentType")
        path = self._path(content_type, "DeactivateContentType", "published")
        version = require_version(content_type.version, "DeactivateContentType")
        return self.pipeline.execute("DELETE", path, ContentType.from_dict, version=version)
