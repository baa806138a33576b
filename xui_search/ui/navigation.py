"""Routing a picked result to the panel's inbound detail view."""

import logging
import webbrowser

from xui_search.config.constants import DETAIL_VIEW_PATH
from xui_search.config.settings import PanelSettings

logger = logging.getLogger(__name__)


def inbound_detail_url(settings: PanelSettings, inbound_id: int) -> str:
    """URL of the inbound list page focused on one inbound."""
    return f"{settings.base_url}{DETAIL_VIEW_PATH}?id={inbound_id}"


class BrowserNavigator:
    """Opens inbound detail pages in the user's web browser."""

    def __init__(self, settings: PanelSettings):
        self.settings = settings
        self.last_url: str | None = None

    def __call__(self, inbound_id: int) -> None:
        url = inbound_detail_url(self.settings, inbound_id)
        self.last_url = url
        logger.info(f"Opening inbound {inbound_id}: {url}")
        if not webbrowser.open(url):
            logger.warning(f"No browser available to open {url}")
