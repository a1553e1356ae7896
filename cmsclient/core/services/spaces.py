"""Endpoint methods for spaces."""

import logging

from cmsclient.core.services.base import DEFAULT_PAGE_SIZE, BaseService, page_decoder, require_resource, require_version
from cmsclient.domain.models.common import Page
from cmsclient.domain.models.space import Space

logger = logging.getLogger(__name__)


class SpaceReader(BaseService):
    """Read access available on both surfaces."""

    def fetch_space(self, space_id: str) -> Space:
        """Returns the space with the given identifier."""
        space_id = self._require_id(space_id, "Space identifier", "FetchSpace")
        return self.pipeline.execute("GET", self._space_path(space_id), Space.from_dict)


class SpaceService(SpaceReader):
    """Full space management."""

    def fetch_spaces(self, limit: int = DEFAULT_PAGE_SIZE, skip: int = 0) -> Page[Space]:
        """Returns the spaces the access token can see."""
        page = self.pipeline.page(limit, skip, "FetchSpaces")
        return self.pipeline.execute("GET", "spaces", page_decoder(Space.from_dict), page=page)

    def create_space(self, space: Space) -> Space:
        require_resource(space, "Space", "CreateSpace")
        space.validate()
        logger.info(f"Creating space '{space.name}'")
        return self.pipeline.execute("POST", "spaces", Space.from_dict, body=space.to_dict())

    def update_space(self, space: Space) -> Space:
        """Renames a space. Fails server-side if `space.version` is stale."""
        require_resource(space, "Space", "UpdateSpace")
        space_id = self._require_id(space.id, "Space identifier", "UpdateSpace")
        version = require_version(space.version, "UpdateSpace")
        space.validate()
        return self.pipeline.execute(
            "PUT", self._space_path(space_id), Space.from_dict, body=space.to_dict(), version=version
        )

    def delete_space(self, space_id: str) -> None:
        """Deletes a space and, server-side, everything in it."""
        space_id = self._require_id(space_id, "Space identifier", "DeleteSpace")
        logger.info(f"Deleting space {space_id}")
        self.pipeline.execute("DELETE", self._space_path(space_id))
