"""
Result list for the inbound search surface.

One row per result entry, an icon per variant, the highlighted label on the
first line and the inbound details dimmed on the second.
"""

import logging

from rich.markup import escape
from textual.app import ComposeResult
from textual.message import Message
from textual.widgets import ListItem, ListView, Static

from xui_search.config.constants import NO_RESULTS_TEXT
from xui_search.models.results import ClientMatch, InboundMatch, ResultEntry, ResultKind

logger = logging.getLogger(__name__)

_ICONS = {
    ResultKind.INBOUND: "📡",
    ResultKind.CLIENT: "👤",
}


def entry_icon(entry: ResultEntry) -> str:
    return _ICONS[entry.kind]


def format_secondary(entry: ResultEntry) -> str:
    """Second line of a row, as plain text."""
    if isinstance(entry, InboundMatch):
        return f"{entry.protocol} | port: {entry.port}"
    if isinstance(entry, ClientMatch):
        return f"inbound: {entry.parent_inbound_remark}"
    raise TypeError(f"Unknown result entry: {entry!r}")


def format_row(entry: ResultEntry) -> str:
    """Full row markup; the highlighted text is already escaped."""
    return (
        f"{entry_icon(entry)} {entry.highlighted_text}\n"
        f"[dim]{escape(format_secondary(entry))}[/dim]"
    )


class SearchResultRow(ListItem):
    """Widget for a single search result."""

    DEFAULT_CSS = """
    SearchResultRow {
        height: 2;
        padding: 0 1;
    }
    """

    def __init__(self, entry: ResultEntry, **kwargs):
        super().__init__(**kwargs)
        self.entry = entry

    def compose(self) -> ComposeResult:
        yield Static(format_row(self.entry))


class SearchResultsView(ListView):
    """Renders result entries and reports which one was picked."""

    class EntrySelected(Message):
        """Posted when a result row is activated."""

        def __init__(self, entry: ResultEntry):
            super().__init__()
            self.entry = entry

    async def render_entries(self, entries: list[ResultEntry]) -> None:
        """Replace the rows; an empty list shows the no-results placeholder."""
        await self.clear()

        if not entries:
            await self.append(ListItem(Static(f"[dim]{NO_RESULTS_TEXT}[/dim]"), id="no-results"))
            return

        await self.extend(SearchResultRow(entry) for entry in entries)
        self.index = 0

    async def clear_entries(self) -> None:
        await self.clear()

    @property
    def entries(self) -> list[ResultEntry]:
        return [row.entry for row in self.query(SearchResultRow)]

    def on_list_view_selected(self, event: ListView.Selected) -> None:
        if isinstance(event.item, SearchResultRow):
            event.stop()
            self.post_message(self.EntrySelected(event.item.entry))
