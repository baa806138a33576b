"""
Inbound Search Screen - modal overlay for searching inbounds and clients.

Features:
- Live search with trailing debounce and a minimum query length
- Inbound and client results with highlighted matches
- Enter on a result closes the overlay and opens the inbound
"""

import logging

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.screen import ModalScreen
from textual.timer import Timer
from textual.widgets import Input, LoadingIndicator, Static

from .results_view import SearchResultsView
from .search_session import SearchSession, SearchStateVM

logger = logging.getLogger(__name__)


class InboundSearchScreen(ModalScreen):
    """
    Search modal overlay.

    Layout:
    - Search input with a loading indicator
    - Result list
    - Status / key hints line
    """

    CSS = """
    InboundSearchScreen {
        align: center top;
        padding-top: 3;
    }

    #search-container {
        width: 80;
        height: auto;
        max-height: 30;
        background: $surface;
        border: solid $primary;
    }

    #search-bar {
        height: 3;
    }

    #search-input {
        width: 1fr;
        border: none;
        border-bottom: solid $primary-darken-1;
        background: $surface-darken-1;
        padding: 0 1;
    }

    #search-input:focus {
        border-bottom: solid $primary;
    }

    #search-loading {
        width: 6;
        height: 3;
        display: none;
    }

    #search-loading.active {
        display: block;
    }

    #search-results {
        height: auto;
        max-height: 22;
        padding: 0;
    }

    #search-status {
        height: 1;
        background: $surface-darken-1;
        color: $text-muted;
        padding: 0 1;
    }
    """

    BINDINGS = [
        Binding("escape", "close_search", "Close", show=False),
        Binding("ctrl+k", "close_search", "Close", show=False),
        Binding("down", "focus_results", "Results", show=False),
    ]

    def __init__(self, session: SearchSession, debounce_ms: int = 0, **kwargs):
        super().__init__(**kwargs)
        self.session = session
        self.debounce_ms = debounce_ms
        self._debounce_timer: Timer | None = None
        self._previous_listener = None
        self._dismissing = False

    def compose(self) -> ComposeResult:
        with Vertical(id="search-container"):
            with Horizontal(id="search-bar"):
                yield Input(placeholder="Search remark, protocol, port, client...", id="search-input")
                yield LoadingIndicator(id="search-loading")
            yield SearchResultsView(id="search-results")
            yield Static("", id="search-status")

    async def on_mount(self) -> None:
        """Attach to the session and open it."""
        self._previous_listener = self.session.on_state_update
        self.session.on_state_update = self._on_state_update
        self.query_one("#search-input", Input).focus()
        await self.session.open()

    def on_unmount(self) -> None:
        self._cancel_debounce()
        self.session.on_state_update = self._previous_listener

    async def _on_state_update(self, state: SearchStateVM) -> None:
        """Handle state updates from the session."""
        try:
            await self._render_state(state)
        except Exception as e:
            logger.error(f"Error rendering search state: {e}")

    async def _render_state(self, state: SearchStateVM) -> None:
        if not self.is_attached:
            return

        loading = self.query_one("#search-loading", LoadingIndicator)
        loading.set_class(state.is_searching, "active")
        self.query_one("#search-status", Static).update(
            f"{state.status_text} │ ↑↓ Navigate │ Enter Open │ Esc Close"
        )

        if state.is_searching:
            return

        results_view = self.query_one("#search-results", SearchResultsView)
        if state.has_searched:
            await results_view.render_entries(state.results)
        else:
            await results_view.clear_entries()

        if not state.visible and not self._dismissing:
            self._dismissing = True
            self.dismiss()

    def _cancel_debounce(self) -> None:
        if self._debounce_timer:
            self._debounce_timer.stop()
            self._debounce_timer = None

    def on_input_changed(self, event: Input.Changed) -> None:
        """Feed query changes to the session, optionally debounced."""
        if event.input.id != "search-input":
            return

        value = event.value
        self._cancel_debounce()

        if self.debounce_ms <= 0:
            self._start_search(value)
            return

        def do_search() -> None:
            self._debounce_timer = None
            self._start_search(value)

        self._debounce_timer = self.set_timer(self.debounce_ms / 1000, do_search)

    def _start_search(self, value: str) -> None:
        # Off the message loop: input events keep arriving during a cycle
        self.run_worker(self._safe_search(value), group="search")

    async def _safe_search(self, value: str) -> None:
        """Run a search step, keeping the overlay alive on errors."""
        try:
            await self.session.on_input_changed(value)
        except Exception as e:
            logger.error(f"Search error: {e}")
            self.notify(f"Search error: {e}", severity="error", timeout=3)

    def on_input_submitted(self, event: Input.Submitted) -> None:
        """Enter in the input moves focus to the results."""
        if event.input.id == "search-input":
            self.action_focus_results()

    def action_focus_results(self) -> None:
        results_view = self.query_one("#search-results", SearchResultsView)
        if results_view.entries:
            results_view.focus()

    async def on_search_results_view_entry_selected(
        self, event: SearchResultsView.EntrySelected
    ) -> None:
        """Close first, then navigate."""
        self._cancel_debounce()
        await self.session.select(event.entry)

    async def action_close_search(self) -> None:
        self._cancel_debounce()
        await self.session.close()
