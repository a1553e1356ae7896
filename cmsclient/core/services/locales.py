"""Endpoint methods for locales (management surface only)."""

import logging

from cmsclient.core.services.base import DEFAULT_PAGE_SIZE, BaseService, page_decoder, require_resource, require_version
from cmsclient.domain.models.common import Page
from cmsclient.domain.models.locale import Locale

logger = logging.getLogger(__name__)


class LocaleService(BaseService):

    def fetch_locales(self, space_id: str, limit: int = DEFAULT_PAGE_SIZE, skip: int = 0) -> Page[Locale]:
        space_id = self._require_id(space_id, "Space identifier", "FetchLocales")
        page = self.pipeline.page(limit, skip, "FetchLocales")
        return self.pipeline.execute(
            "GET", self._space_path(space_id, "locales"), page_decoder(Locale.from_dict), page=page
        )

    def fetch_locale(self, space_id: str, locale_id: str) -> Locale:
        space_id = self._require_id(space_id, "Space identifier", "FetchLocale")
        locale_id = self._require_id(locale_id, "Locale identifier", "FetchLocale")
        return self.pipeline.execute("GET", self._space_path(space_id, "locales", locale_id), Locale.from_dict)

    def create_locale(self, space_id: str, locale: Locale) -> Locale:
        """Creates a locale. Two locales of one space cannot share a code."""
        space_id = self._require_id(space_id, "Space identifier", "CreateLocale")
        require_resource(locale, "Locale", "CreateLocale")
        locale.validate()
        logger.info(f"Creating locale {locale.code} in space {space_id}")
        return self.pipeline.execute(
            "POST", self._space_path(space_id, "locales"), Locale.from_dict, body=locale.to_dict()
        )

    def update_locale(self, locale: Locale) -> Locale:
        require_resource(locale, "Locale", "UpdateLocale")
        space_id = self._require_id(locale.space_id, "Space identifier", "UpdateLocale")
        locale_id = self._require_id(locale.id, "Locale identifier", "UpdateLocale")
        version = require_version(locale.version, "UpdateLocale")
        locale.validate()
        return self.pipeline.execute(
            "PUT",
            self._space_path(space_id, "locales", locale_id),
            Locale.from_dict,
            body=locale.to_dict(),
            version=version,
        )

    def delete_locale(self, space_id: str, locale_id: str) -> None:
        """Deletes a locale together with all content stored for it. Not recoverable."""
        space_id = self._require_id(space_id, "Space identifier", "DeleteLocale")
        locale_id = self._require_id(locale_id, "Locale identifier", "DeleteLocale")
        logger.info(f"Deleting locale {locale_id} from space {space_id}")
        self.pipeline.execute("DELETE", self._space_path(space_id, "locales", locale_id))
