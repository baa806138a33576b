"""Shared pytest fixtures for xui-search tests."""

import json
from typing import Any

import pytest

from xui_search.config.settings import PanelSettings
from xui_search.models.records import InboundRecord
from xui_search.search.engine import SearchEngine


def make_inbound(
    inbound_id: int = 1,
    remark: str = "VLESS-Primary",
    protocol: str = "vless",
    port: int = 443,
    clients: list[dict[str, Any]] | None = None,
    settings: str | None = None,
) -> InboundRecord:
    """Build an inbound; ``clients`` is serialized into the settings blob."""
    if settings is None:
        settings = json.dumps({"clients": clients or []})
    return InboundRecord(
        id=inbound_id, remark=remark, protocol=protocol, port=port, settings=settings
    )


class FakeStore:
    """In-memory inbound source that counts fetches."""

    def __init__(self, inbounds: list[InboundRecord] | None = None):
        self.inbounds = inbounds or []
        self.fetch_count = 0
        self.closed = False

    async def fetch_all(self) -> list[InboundRecord]:
        self.fetch_count += 1
        return list(self.inbounds)

    def close(self) -> None:
        self.closed = True


@pytest.fixture
def settings() -> PanelSettings:
    return PanelSettings(
        panel_url="http://panel.test:54321",
        base_path="/secret/",
        username=None,
        password=None,
        timeout=5.0,
        debounce_ms=0,
        log_level="INFO",
    )


@pytest.fixture
def primary_inbound() -> InboundRecord:
    return make_inbound(clients=[{"id": "abc", "email": "alice@x.com"}])


@pytest.fixture
def store(primary_inbound) -> FakeStore:
    return FakeStore([primary_inbound])


@pytest.fixture
def engine(store) -> SearchEngine:
    return SearchEngine(store)
