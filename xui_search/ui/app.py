"""
Hosting shell for the inbound search overlay.

The app owns one SearchSession, built by ``create_app`` and handed to every
search overlay it opens.
"""

import logging
from collections.abc import Callable

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Vertical
from textual.widgets import Button, Footer, Static

from xui_search.config.settings import PanelSettings
from xui_search.search.engine import SearchEngine
from xui_search.services.record_store import RecordStore

from .navigation import BrowserNavigator
from .search import InboundSearchScreen, SearchSession

logger = logging.getLogger(__name__)


class XuiSearchApp(App):
    """Panel shell: a search button, a shortcut and the last opened inbound."""

    TITLE = "xui-search"

    BINDINGS = [
        Binding("ctrl+f", "open_search", "Search", priority=True),
        Binding("slash", "open_search", "Search", show=False),
        Binding("q", "quit", "Quit"),
    ]

    CSS = """
    #shell {
        align: center middle;
        height: 1fr;
    }

    #search-button {
        margin: 1 0;
    }

    #panel-label, #last-opened {
        width: auto;
        color: $text-muted;
    }
    """

    def __init__(
        self,
        session: SearchSession,
        navigate: Callable[[int], None] | None = None,
        panel_label: str = "",
        debounce_ms: int = 0,
    ):
        super().__init__()
        self.session = session
        self.debounce_ms = debounce_ms
        self.panel_label = panel_label
        self._navigate = navigate
        self.session.navigate = self._on_navigate
        self.last_opened: int | None = None
        self._last_opened_label = Static("Ctrl+F to search inbounds and clients", id="last-opened")

    def compose(self) -> ComposeResult:
        with Vertical(id="shell"):
            yield Static(f"Panel: {self.panel_label}", id="panel-label", markup=False)
            yield Button("🔍 Search", id="search-button")
            yield self._last_opened_label
        yield Footer()

    async def on_mount(self) -> None:
        await self.session.init()

    async def on_unmount(self) -> None:
        await self.session.dispose()

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "search-button":
            self.action_open_search()

    def action_open_search(self) -> None:
        """Push the search overlay unless it is already showing."""
        if isinstance(self.screen, InboundSearchScreen):
            return
        self.push_screen(InboundSearchScreen(self.session, debounce_ms=self.debounce_ms))

    def _on_navigate(self, inbound_id: int) -> None:
        self.last_opened = inbound_id
        self._last_opened_label.update(f"Opened inbound #{inbound_id}")
        if self._navigate:
            self._navigate(inbound_id)
        self.notify(f"Opening inbound #{inbound_id}", timeout=2)


def create_app(settings: PanelSettings) -> XuiSearchApp:
    """Wire store, engine, session and navigator for the given panel."""
    store = RecordStore(settings)
    session = SearchSession(SearchEngine(store))
    return XuiSearchApp(
        session,
        navigate=BrowserNavigator(settings),
        panel_label=settings.base_url,
        debounce_ms=settings.debounce_ms,
    )
