"""Command Handler: Orchestrates CLI command execution.

Receives commands from the main entry point (main.py), delegates the work to
the management or delivery client and renders the result through the
UserInterface. This is the only layer that catches CmsClientError; every
handler returns True on success and False after displaying the error.
"""

import logging
from typing import Any, Callable, Dict, Iterable, List, Optional, Sequence

from cmsclient.client import DeliveryClient, ManagementClient
from cmsclient.domain.interfaces.user_interface import UserInterface
from cmsclient.domain.models.common import Page
from cmsclient.domain.models.errors import ApiError, CmsClientError

logger = logging.getLogger(__name__)

ClientFactory = Callable[[], Any]


def _first_value(localized: Optional[Dict[str, Any]]) -> Any:
    """Returns one representative value of a {locale: value} mapping."""
    if not localized:
        return None
    return next(iter(localized.values()))


def _footer(page: Page) -> str:
    pagination = page.pagination
    return f"Showing {len(page)} of {pagination.total} (skip={pagination.skip}, limit={pagination.limit})"


class CommandHandler:
    """Handles incoming commands and delegates to the API clients.

    Clients are created lazily through the factories, so a command that only
    needs the delivery surface does not require a management token.
    """

    def __init__(
        self,
        ui: UserInterface,
        management_factory: ClientFactory = ManagementClient.from_config,
        delivery_factory: ClientFactory = DeliveryClient.from_config,
    ):
        self.ui = ui
        self._management_factory = management_factory
        self._delivery_factory = delivery_factory
        self._management: Optional[ManagementClient] = None
        self._delivery: Optional[DeliveryClient] = None

    @property
    def management(self) -> ManagementClient:
        if self._management is None:
            self._management = self._management_factory()
        return self._management

    @property
    def delivery(self) -> DeliveryClient:
        if self._delivery is None:
            self._delivery = self._delivery_factory()
        return self._delivery

    def close(self) -> None:
        for client in (self._management, self._delivery):
            if client is not None:
                client.close()

    def _run(self, description: str, action: Callable[[], None]) -> bool:
        try:
            action()
            return True
        except ApiError as e:
            logger.info(f"{description} rejected by the API (status {e.status_code}): {e}")
            self.ui.display_error(f"{description} failed: {e}")
        except CmsClientError as e:
            logger.info(f"{description} failed: {e}")
            self.ui.display_error(f"{description} failed: {e}")
        return False

    def _table(self, title: str, columns: Sequence[str], rows: Iterable[Sequence[Any]], page: Page) -> None:
        self.ui.display_table(title, columns, list(rows), footer=_footer(page))

    # --- Spaces ---

    def handle_spaces(self, limit: int, skip: int) -> bool:
        def action() -> None:
            page = self.management.spaces.fetch_spaces(limit=limit, skip=skip)
            rows = ((s.id, s.name, s.version) for s in page)
            self._table("Spaces", ["ID", "Name", "Version"], rows, page)

        return self._run("Listing spaces", action)

    def handle_space(self, space_id: str, delivery: bool = False) -> bool:
        def action() -> None:
            client = self.delivery if delivery else self.management
            space = client.spaces.fetch_space(space_id)
            self.ui.display_resource(f"Space {space.id}", {"sys": space.metadata.to_dict(), **space.to_dict()})

        return self._run(f"Fetching space {space_id}", action)

    # --- Content types ---

    def handle_content_types(self, space_id: str, limit: int, skip: int, delivery: bool = False) -> bool:
        def action() -> None:
            client = self.delivery if delivery else self.management
            page = client.content_types.fetch_content_types(space_id, limit=limit, skip=skip)
            rows = ((ct.id, ct.name, len(ct.fields), ct.display_field) for ct in page)
            self._table("Content types", ["ID", "Name", "Fields", "Display field"], rows, page)

        return self._run(f"Listing content types of {space_id}", action)

    # --- Entries ---

    def handle_entries(
        self,
        space_id: str,
        params: Optional[Dict[str, str]] = None,
        limit: int = 100,
        skip: int = 0,
        delivery: bool = False,
    ) -> bool:
        def action() -> None:
            client = self.delivery if delivery else self.management
            page = client.entries.query_entries(space_id, params, limit=limit, skip=skip)
            rows = (
                (e.id, e.content_type_id, e.version, e.metadata.is_published, ", ".join(sorted(e.fields)))
                for e in page
            )
            self._table("Entries", ["ID", "Content type", "Version", "Published", "Fields"], rows, page)

        return self._run(f"Querying entries of {space_id}", action)

    def handle_entry(self, space_id: str, entry_id: str, delivery: bool = False) -> bool:
        def action() -> None:
            client = self.delivery if delivery else self.management
            entry = client.entries.fetch_entry(space_id, entry_id)
            self.ui.display_resource(f"Entry {entry.id}", {"sys": entry.metadata.to_dict(), **entry.to_dict()})

        return self._run(f"Fetching entry {entry_id}", action)

    def handle_publish_entry(self, space_id: str, entry_id: str) -> bool:
        def action() -> None:
            entry = self.management.entries.fetch_entry(space_id, entry_id)
            published = self.management.entries.publish_entry(entry)
            self.ui.display_info(f"Entry {published.id} published (version {published.version}).")

        return self._run(f"Publishing entry {entry_id}", action)

    def handle_unpublish_entry(self, space_id: str, entry_id: str) -> bool:
        def action() -> None:
            entry = self.management.entries.fetch_entry(space_id, entry_id)
            unpublished = self.management.entries.unpublish_entry(entry)
            self.ui.display_info(f"Entry {unpublished.id} unpublished (version {unpublished.version}).")

        return self._run(f"Unpublishing entry {entry_id}", action)

    # --- Assets ---

    def handle_assets(self, space_id: str, limit: int, skip: int, delivery: bool = False) -> bool:
        def action() -> None:
            client = self.delivery if delivery else self.management
            page = client.assets.fetch_assets(space_id, limit=limit, skip=skip)
            rows = (
                (
                    a.id,
                    _first_value(a.fields.title),
                    getattr(_first_value(a.fields.file), "file_name", None),
                    a.version,
                )
                for a in page
            )
            self._table("Assets", ["ID", "Title", "File", "Version"], rows, page)

        return self._run(f"Listing assets of {space_id}", action)

    def handle_asset(self, space_id: str, asset_id: str, delivery: bool = False) -> bool:
        def action() -> None:
            client = self.delivery if delivery else self.management
            asset = client.assets.fetch_asset(space_id, asset_id)
            self.ui.display_resource(f"Asset {asset.id}", {"sys": asset.metadata.to_dict(), **asset.to_dict()})

        return self._run(f"Fetching asset {asset_id}", action)

    def handle_process_asset(self, space_id: str, asset_id: str, locale: str) -> bool:
        def action() -> None:
            asset = self.management.assets.fetch_asset(space_id, asset_id)
            self.management.assets.process_asset(asset, locale)
            self.ui.display_info(
                f"Processing of asset {asset_id} ({locale}) requested. Fetch the asset to check completion."
            )

        return self._run(f"Processing asset {asset_id}", action)

    # --- Locales & API keys ---

    def handle_locales(self, space_id: str) -> bool:
        def action() -> None:
            page = self.management.locales.fetch_locales(space_id)
            rows: List[Sequence[Any]] = [
                (loc.code, loc.name, loc.default, loc.optional, loc.fallback_code) for loc in page
            ]
            self._table("Locales", ["Code", "Name", "Default", "Optional", "Fallback"], rows, page)

        return self._run(f"Listing locales of {space_id}", action)

    def handle_api_keys(self, space_id: str, limit: int, skip: int) -> bool:
        def action() -> None:
            page = self.management.api_keys.fetch_api_keys(space_id, limit=limit, skip=skip)
            rows = ((k.id, k.name, k.description) for k in page)
            self._table("API keys", ["ID", "Name", "Description"], rows, page)

        return self._run(f"Listing API keys of {space_id}", action)

    def handle_create_api_key(self, space_id: str, name: str, description: Optional[str] = None) -> bool:
        def action() -> None:
            key = self.management.api_keys.create_api_key(space_id, name, description)
            self.ui.display_resource(f"API key {key.id}", {"name": key.name, "accessToken": key.access_token})

        return self._run(f"Creating API key '{name}'", action)
