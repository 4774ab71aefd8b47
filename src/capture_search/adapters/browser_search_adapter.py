from __future__ import annotations

import logging
import webbrowser
from collections.abc import Callable
from urllib.parse import quote

from capture_search.domain.errors import SearchError, SearchFailure
from capture_search.domain.models import SearchOutcome
from capture_search.domain.user_settings import UserSettings, build_search_url
from capture_search.ports.search_port import SearchPort

logger = logging.getLogger(__name__)


class BrowserSearchAdapter(SearchPort):
    """Opens the configured reverse image search for a hosted image in the default browser."""

    def __init__(
        self,
        settings_provider: Callable[[], UserSettings],
        open_browser: bool = True,
    ) -> None:
        self._settings_provider = settings_provider
        self._open_browser = open_browser

    def build_target(self, image_url: str, query: str | None = None) -> str:
        template = self._settings_provider().image_search_url_template
        target = build_search_url(template, image_url)
        if query and query.strip():
            separator = "&" if "?" in target else "?"
            target = f"{target}{separator}q={quote(query.strip())}"
        return target

    def search(self, image_url: str, query: str | None = None) -> SearchOutcome:
        target = self.build_target(image_url, query)
        logger.debug("Search URL: %s", target)
        if not self._open_browser:
            return SearchOutcome.launched(target)
        try:
            opened = webbrowser.open(target)
        except webbrowser.Error as exc:
            raise SearchError(SearchFailure.SEARCH_FAILED, f"Could not open a browser: {exc}") from exc
        if not opened:
            logger.warning("No browser accepted the search URL")
            return SearchOutcome.failed(SearchFailure.SEARCH_FAILED)
        logger.info("Opened reverse image search")
        return SearchOutcome.launched(target)
