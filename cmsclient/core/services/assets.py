"""Endpoint methods for assets.

Assets follow the entry lifecycle plus a `process` step: the uploaded file is
ingested asynchronously by the server and must be processed before publishing.
`process_asset` returns as soon as the server accepted the request; poll
`fetch_asset` and check `Asset.is_processed(locale)` to observe completion.
"""

import logging

from cmsclient.core.services.base import DEFAULT_PAGE_SIZE, BaseService, page_decoder, require_resource, require_version
from cmsclient.core.services.content_types import PUBLISHED_FILTER
from cmsclient.domain.models.asset import Asset, NewAsset
from cmsclient.domain.models.common import Page

logger = logging.getLogger(__name__)


class AssetReader(BaseService):

    def fetch_assets(self, space_id: str, limit: int = DEFAULT_PAGE_SIZE, skip: int = 0) -> Page[Asset]:
        return self._fetch_assets(space_id, limit, skip, published=False)

    def _fetch_assets(self, space_id: str, limit: int, skip: int, published: bool) -> Page[Asset]:
        space_id = self._require_id(space_id, "Space identifier", "FetchAssets")
        page = self.pipeline.page(limit, skip, "FetchAssets")
        return self.pipeline.execute(
            "GET",
            self._space_path(space_id, "assets"),
            page_decoder(Asset.from_dict),
            params=PUBLISHED_FILTER if published else None,
            page=page,
            localized=True,
        )

    def fetch_asset(self, space_id: str, asset_id: str) -> Asset:
        space_id = self._require_id(space_id, "Space identifier", "FetchAsset")
        asset_id = self._require_id(asset_id, "Asset identifier", "FetchAsset")
        return self.pipeline.execute(
            "GET", self._space_path(space_id, "assets", asset_id), Asset.from_dict, localized=True
        )


class AssetService(AssetReader):

    def fetch_assets(
        self, space_id: str, limit: int = DEFAULT_PAGE_SIZE, skip: int = 0, published: bool = False
    ) -> Page[Asset]:
        """Returns the assets of a space, optionally only published ones."""
        return self._fetch_assets(space_id, limit, skip, published)

    def _path(self, asset: Asset, operation: str, *suffix: str) -> str:
        require_resource(asset, "Asset", operation)
        asset.validate()
        return self._space_path(asset.space_id, "assets", asset.id, *suffix)

    def _transition(self, asset: Asset, method: str, suffix: str, operation: str) -> Asset:
        path = self._path(asset, operation, suffix)
        version = require_version(asset.version, operation)
        logger.info(f"{operation}: asset {asset.id} (version {version})")
        return self.pipeline.execute(method, path, Asset.from_dict, version=version)

    def create_asset(self, asset: NewAsset) -> Asset:
        """Creates an asset pointing at its upload URL(s). It still needs processing."""
        require_resource(asset, "Asset", "CreateAsset")
        asset.validate()
        return self.pipeline.execute(
            "POST", self._space_path(asset.space_id, "assets"), Asset.from_dict, body=asset.to_dict()
        )

    def update_asset(self, asset: Asset) -> Asset:
        path = self._path(asset, "UpdateAsset")
        version = require_version(asset.version, "UpdateAsset")
        return self.pipeline.execute("PUT", path, Asset.from_dict, body=asset.to_dict(), version=version)

    def process_asset(self, asset: Asset, locale: str) -> None:
        """Asks the server to ingest the file uploaded for `locale`."""
        locale = self._require_id(locale, "Locale code", "ProcessAsset")
        path = self._path(asset, "ProcessAsset", "files", locale, "process")
        version = require_version(asset.version, "ProcessAsset")
        logger.info(f"Processing asset {asset.id} for locale {locale}")
        self.pipeline.execute("PUT", path, version=version)

    def publish_asset(self, asset: Asset) -> Asset:
        return self._transition(asset, "PUT", "published", "PublishAsset")

    def unpublish_asset(self, asset: Asset) -> Asset:
        return self._transition(asset, "DELETE", "published", "UnpublishAsset")

    def archive_asset(self, asset: Asset) -> Asset:
        """Archives the asset. A published asset must be unpublished first."""
        return self._transition(asset, "PUT", "archived", "ArchiveAsset")

    def unarchive_asset(self, asset: Asset) -> Asset:
        return self._transition(asset, "DELETE", "archived", "UnarchiveAsset")

    def delete_asset(self, asset: Asset) -> None:
        path = self._path(asset, "DeleteAsset")
        logger.info(f"Deleting asset {asset.id}")
        self.pipeline.execute("DELETE", path)
