"""Pilot-based tests for the search overlay and the hosting app."""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest
from textual.widgets import Input, ListItem

from xui_search.models.results import ClientMatch
from xui_search.search.engine import SearchEngine
from xui_search.ui.app import XuiSearchApp
from xui_search.ui.search import InboundSearchScreen, SearchResultsView, SearchSession
from xui_search.ui.search.results_view import SearchResultRow

from conftest import FakeStore, make_inbound

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _make_app(store: FakeStore) -> tuple[XuiSearchApp, MagicMock]:
    navigate = MagicMock()
    session = SearchSession(SearchEngine(store))
    return XuiSearchApp(session, navigate=navigate, panel_label="http://panel.test/"), navigate


async def _search(app: XuiSearchApp, pilot, query: str) -> None:
    app.screen.query_one("#search-input", Input).value = query
    await pilot.pause()
    await app.workers.wait_for_complete()
    await pilot.pause()


@pytest.fixture()
def store() -> FakeStore:
    return FakeStore(
        [
            make_inbound(1, remark="VLESS-Primary", clients=[{"id": "abc", "email": "alice@x.com"}]),
            make_inbound(2, remark="Office", protocol="vmess", port=8443),
        ]
    )


# ---------------------------------------------------------------------------
# Tests: Opening and closing
# ---------------------------------------------------------------------------


class TestOpenClose:
    @pytest.mark.asyncio
    async def test_shortcut_opens_overlay(self, store) -> None:
        app, _ = _make_app(store)
        async with app.run_test() as pilot:
            await pilot.press("ctrl+f")
            await pilot.pause()
            assert isinstance(app.screen, InboundSearchScreen)
            assert app.session.is_visible
            assert app.screen.query_one("#search-input", Input).has_focus

    @pytest.mark.asyncio
    async def test_button_opens_overlay(self, store) -> None:
        app, _ = _make_app(store)
        async with app.run_test() as pilot:
            await pilot.click("#search-button")
            await pilot.pause()
            assert isinstance(app.screen, InboundSearchScreen)

    @pytest.mark.asyncio
    async def test_escape_closes_and_clears(self, store) -> None:
        app, _ = _make_app(store)
        async with app.run_test() as pilot:
            await pilot.press("ctrl+f")
            await pilot.pause()
            await _search(app, pilot, "alice")

            await pilot.press("escape")
            await pilot.pause()

            assert not isinstance(app.screen, InboundSearchScreen)
            assert not app.session.is_visible
            assert app.session.state.query == ""
            assert app.session.state.results == []

    @pytest.mark.asyncio
    async def test_reopen_starts_empty(self, store) -> None:
        app, _ = _make_app(store)
        async with app.run_test() as pilot:
            await pilot.press("ctrl+f")
            await pilot.pause()
            await _search(app, pilot, "alice")
            await pilot.press("escape")
            await pilot.pause()

            await pilot.press("ctrl+f")
            await pilot.pause()

            results = app.screen.query_one("#search-results", SearchResultsView)
            assert results.entries == []
            assert app.screen.query_one("#search-input", Input).value == ""


# ---------------------------------------------------------------------------
# Tests: Searching
# ---------------------------------------------------------------------------


class TestSearching:
    @pytest.mark.asyncio
    async def test_results_rendered(self, store) -> None:
        app, _ = _make_app(store)
        async with app.run_test(size=(120, 40)) as pilot:
            await pilot.press("ctrl+f")
            await pilot.pause()
            await _search(app, pilot, "alice")

            results = app.screen.query_one("#search-results", SearchResultsView)
            assert len(results.entries) == 1
            assert isinstance(results.entries[0], ClientMatch)
            assert results.entries[0].parent_inbound_id == 1

    @pytest.mark.asyncio
    async def test_short_query_does_not_fetch(self, store) -> None:
        app, _ = _make_app(store)
        async with app.run_test() as pilot:
            await pilot.press("ctrl+f")
            await pilot.pause()
            await _search(app, pilot, "a")

            assert store.fetch_count == 0
            assert app.screen.query_one("#search-results", SearchResultsView).entries == []

    @pytest.mark.asyncio
    async def test_no_results_placeholder(self) -> None:
        app, _ = _make_app(FakeStore([]))
        async with app.run_test() as pilot:
            await pilot.press("ctrl+f")
            await pilot.pause()
            await _search(app, pilot, "anything")

            placeholder = app.screen.query_one("#no-results", ListItem)
            assert placeholder is not None
            assert app.screen.query_one("#search-results", SearchResultsView).entries == []

    @pytest.mark.asyncio
    async def test_new_query_replaces_results(self, store) -> None:
        app, _ = _make_app(store)
        async with app.run_test() as pilot:
            await pilot.press("ctrl+f")
            await pilot.pause()
            await _search(app, pilot, "alice")
            await _search(app, pilot, "office")

            entries = app.screen.query_one("#search-results", SearchResultsView).entries
            assert [e.target_id for e in entries] == [2]


# ---------------------------------------------------------------------------
# Tests: Selection
# ---------------------------------------------------------------------------


class TestSelection:
    @pytest.mark.asyncio
    async def test_enter_on_result_closes_then_navigates(self, store) -> None:
        app, navigate = _make_app(store)
        async with app.run_test() as pilot:
            await pilot.press("ctrl+f")
            await pilot.pause()
            await _search(app, pilot, "alice")

            results = app.screen.query_one("#search-results", SearchResultsView)
            results.focus()
            await pilot.pause()
            await pilot.press("enter")
            await pilot.pause()
            await pilot.pause()

            navigate.assert_called_once_with(1)
            assert not isinstance(app.screen, InboundSearchScreen)
            assert app.last_opened == 1

    @pytest.mark.asyncio
    async def test_rows_hold_entries(self, store) -> None:
        app, _ = _make_app(store)
        async with app.run_test() as pilot:
            await pilot.press("ctrl+f")
            await pilot.pause()
            await _search(app, pilot, "443")

            rows = list(app.screen.query(SearchResultRow))
            assert [row.entry.target_id for row in rows] == [1, 2]
