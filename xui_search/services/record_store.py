"""
Access to the panel's inbound collection.

One POST to ``<base>xray/inbounds`` returns every inbound wrapped in the
panel's envelope::

    {"success": true, "msg": "", "obj": [{...}, ...]}

Any failure to get a success envelope is a RemoteFailure. ``fetch_all``
logs it and returns an empty list so a broken panel reads as "no results".
"""

import asyncio
import logging
from typing import Any

import requests

from xui_search.config.constants import INBOUNDS_ENDPOINT, LOGIN_ENDPOINT
from xui_search.config.settings import PanelSettings
from xui_search.exceptions import (
    MalformedRecord,
    RemoteAuthenticationError,
    RemoteConnectionError,
    RemoteFailure,
)
from xui_search.models.records import InboundRecord

logger = logging.getLogger(__name__)


class RecordStore:
    """Fetches inbound snapshots from the panel. Nothing is cached."""

    def __init__(self, settings: PanelSettings, session: requests.Session | None = None):
        self.settings = settings
        self._session = session or requests.Session()
        self._logged_in = False

    @property
    def inbounds_url(self) -> str:
        return self.settings.base_url + INBOUNDS_ENDPOINT

    @property
    def login_url(self) -> str:
        return self.settings.base_url + LOGIN_ENDPOINT

    def close(self) -> None:
        """Release the HTTP session."""
        self._session.close()

    async def fetch_all(self) -> list[InboundRecord]:
        """
        Fetch and decode every inbound.

        Returns:
            Inbounds in panel order; [] if the panel could not be read.
            Objects that fail to decode are logged and skipped.
        """
        try:
            raw_inbounds = await self.fetch_raw()
        except RemoteFailure as e:
            logger.warning(f"Inbound fetch failed, treating as empty: {e}")
            return []

        records = []
        for raw in raw_inbounds:
            try:
                records.append(InboundRecord.from_dict(raw))
            except MalformedRecord as e:
                logger.warning(f"Skipping inbound: {e}")
        return records

    async def fetch_raw(self) -> list[Any]:
        """
        Fetch the undecoded ``obj`` list.

        Raises:
            RemoteFailure: On transport errors, HTTP errors, non-JSON bodies
                or a failure envelope.
        """
        # requests blocks, keep the event loop free
        return await asyncio.to_thread(self._fetch_raw_sync)

    def _fetch_raw_sync(self) -> list[Any]:
        if self.settings.has_credentials and not self._logged_in:
            self._login_sync()

        envelope = self._post_sync(self.inbounds_url)
        inbounds = envelope.get("obj")
        if inbounds is None:
            return []
        if not isinstance(inbounds, list):
            raise RemoteFailure("Inbound list is not an array", url=self.inbounds_url)

        logger.debug(f"Fetched {len(inbounds)} inbounds")
        return inbounds

    def _login_sync(self) -> None:
        try:
            self._post_sync(
                self.login_url,
                data={"username": self.settings.username, "password": self.settings.password},
            )
        except RemoteFailure as e:
            raise RemoteAuthenticationError(e.message, url=self.login_url) from e
        self._logged_in = True
        logger.info(f"Logged in to panel at {self.settings.base_url}")

    def _post_sync(self, url: str, data: dict[str, Any] | None = None) -> dict[str, Any]:
        """POST and unwrap the panel envelope."""
        try:
            response = self._session.post(url, data=data, timeout=self.settings.timeout)
        except requests.RequestException as e:
            raise RemoteConnectionError(f"Could not reach panel: {e}", url=url) from e

        if not response.ok:
            # An expired session makes later requests fail, so log in again next time
            self._logged_in = False
            raise RemoteFailure(f"Panel returned HTTP {response.status_code}", url=url)

        try:
            envelope = response.json()
        except ValueError as e:
            raise RemoteFailure("Panel response is not JSON", url=url) from e

        if not isinstance(envelope, dict) or not envelope.get("success"):
            msg = envelope.get("msg", "") if isinstance(envelope, dict) else ""
            raise RemoteFailure(f"Panel reported failure: {msg or 'no message'}", url=url)

        return envelope
