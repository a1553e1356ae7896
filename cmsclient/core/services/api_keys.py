"""Endpoint methods for delivery API keys (management surface only)."""

from typing import Optional

from cmsclient.core.services.base import DEFAULT_PAGE_SIZE, BaseService, page_decoder
from cmsclient.domain.models.api_key import ApiKey
from cmsclient.domain.models.common import Page


class ApiKeyService(BaseService):

    def fetch_api_keys(self, space_id: str, limit: int = DEFAULT_PAGE_SIZE, skip: int = 0) -> Page[ApiKey]:
        space_id = self._require_id(space_id, "Space identifier", "FetchApiKeys")
        page = self.pipeline.page(limit, skip, "FetchApiKeys")
        return self.pipeline.execute(
            "GET", self._space_path(space_id, "api_keys"), page_decoder(ApiKey.from_dict), page=page
        )

    def create_api_key(self, space_id: str, name: str, description: Optional[str] = None) -> ApiKey:
        """Creates a delivery API key named `name` for the space."""
        space_id = self._require_id(space_id, "Space identifier", "CreateApiKey")
        name = self._require_id(name, "Key name", "CreateApiKey")
        body = ApiKey(name=name, description=description).to_dict()
        return self.pipeline.execute("POST", self._space_path(space_id, "api_keys"), ApiKey.from_dict, body=body)
