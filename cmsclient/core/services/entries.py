"""Endpoint methods for entries.

Lifecycle: created -> updated* -> published <-> unpublished, with archived <->
unarchived as an orthogonal branch. An entry must be unpublished before it can
be archived; transition legality is enforced by the server, the client only
checks that identifiers, version and fields are present.
"""

import logging
from typing import Any, Mapping, Optional

from cmsclient.core.services.base import DEFAULT_PAGE_SIZE, BaseService, page_decoder, require_resource, require_version
from cmsclient.domain.models.common import Page
from cmsclient.domain.models.content_type import ContentType
from cmsclient.domain.models.entry import Entry, Includes, NewEntry
from cmsclient.infrastructure.http.request_builder import CONTENT_TYPE_ID_HEADER

logger = logging.getLogger(__name__)


class EntryReader(BaseService):

    def query_entries(
        self,
        space_id: str,
        params: Optional[Mapping[str, Any]] = None,
        limit: int = DEFAULT_PAGE_SIZE,
        skip: int = 0,
    ) -> Page[Entry]:
        """Returns the entries of a space matching `params`.

        Args:
            space_id: The space to query.
            params: Filter key/value pairs, passed through verbatim
                (e.g. {"content_type": "post", "include": "2"}).
            limit: Page size; clamped to the surface maximum, must be positive.
            skip: Offset into the result set.

        Returns:
            A Page of entries; `page.includes` holds linked entries and assets.
        """
        space_id = self._require_id(space_id, "Space identifier", "QueryEntries")
        page = self.pipeline.page(limit, skip, "QueryEntries")
        return self.pipeline.execute(
            "GET",
            self._space_path(space_id, "entries"),
            page_decoder(Entry.from_dict, Includes.from_dict),
            params=params,
            page=page,
            localized=True,
        )

    def fetch_entry(self, space_id: str, entry_id: str) -> Entry:
        space_id = self._require_id(space_id, "Space identifier", "FetchEntry")
        entry_id = self._require_id(entry_id, "Entry identifier", "FetchEntry")
        return self.pipeline.execute(
            "GET", self._space_path(space_id, "entries", entry_id), Entry.from_dict, localized=True
        )


class EntryService(EntryReader):

    def _path(self, entry: Entry, operation: str, *suffix: str) -> str:
        require_resource(entry, "Entry", operation)
        space_id = self._require_id(entry.space_id, "Space identifier", operation)
        entry_id = self._require_id(entry.id, "Entry identifier", operation)
        return self._space_path(space_id, "entries", entry_id, *suffix)

    def _transition(self, entry: Entry, method: str, suffix: str, operation: str) -> Entry:
        path = self._path(entry, operation, suffix)
        version = require_version(entry.version, operation)
        logger.info(f"{operation}: entry {entry.id} (version {version})")
        return self.pipeline.execute(method, path, Entry.from_dict, version=version)

    def create_entry(self, entry: NewEntry, content_type: ContentType) -> Entry:
        """Creates an entry of `content_type` in the content type's space.

        The server assigns the identifier unless `entry.entry_id` is set, in
        which case the entry is PUT under that identifier.
        """
        require_resource(entry, "Entry", "CreateEntry")
        require_resource(content_type, "Content type", "CreateEntry")
        entry.validate()
        space_id = self._require_id(content_type.space_id, "Space identifier", "CreateEntry")
        content_type_id = self._require_id(content_type.id, "Content type identifier", "CreateEntry")
        if entry.entry_id:
            method, path = "PUT", self._space_path(space_id, "entries", entry.entry_id)
        else:
            method, path = "POST", self._space_path(space_id, "entries")
        return self.pipeline.execute(
            method,
            path,
            Entry.from_dict,
            body=entry.to_dict(),
            headers={CONTENT_TYPE_ID_HEADER: content_type_id},
        )

    def update_entry(self, entry: Entry) -> Entry:
        """Saves the entry's fields. Rejected by the server if `entry.version` is stale."""
        path = self._path(entry, "UpdateEntry")
        version = require_version(entry.version, "UpdateEntry")
        entry.validate()
        return self.pipeline.execute("PUT", path, Entry.from_dict, body=entry.to_dict(), version=version)

    def delete_entry(self, entry: Entry) -> None:
        path = self._path(entry, "DeleteEntry")
        logger.info(f"Deleting entry {entry.id}")
        self.pipeline.execute("DELETE", path)

    def publish_entry(self, entry: Entry) -> Entry:
        """Makes the entry available on the delivery surface."""
        return self._transition(entry, "PUT", "published", "PublishEntry")

    def unpublish_entry(self, entry: Entry) -> Entry:
        return self._transition(entry, "DELETE", "published", "UnpublishEntry")

    def archive_entry(self, entry: Entry) -> Entry:
        """Archives the entry. Only unpublished entries can be archived."""
        return self._transition(entry, "PUT", "archived", "ArchiveEntry")

    def unarchive_entry(self, entry: Entry) -> Entry:
        return self._transition(entry, "DELETE", "archived", "UnarchiveEntry")
