"""
Controller for the inbound search surface.

Owns visibility, the query buffer and the result list, and drives the
search engine. It has no Textual dependency so it can be driven directly.
"""

import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field

from xui_search.config.constants import MIN_QUERY_LENGTH
from xui_search.models.results import ResultEntry
from xui_search.search.engine import SearchEngine

logger = logging.getLogger(__name__)


@dataclass
class SearchStateVM:
    """Complete search state for the UI."""

    visible: bool = False
    query: str = ""
    results: list[ResultEntry] = field(default_factory=list)
    is_searching: bool = False
    has_searched: bool = False  # False until a cycle's results were applied
    status_text: str = ""
    # Bumped whenever results are cleared; late cycles from an older
    # generation are dropped
    generation: int = 0


class SearchSession:
    """
    Hidden/Visible state machine around the search engine.

    - open(): Hidden -> Visible
    - close(): Visible -> Hidden, clears query and results
    - on_input_changed(): gates by length and the engine's busy flag
    - select(): closes, then navigates to the entry's inbound
    """

    def __init__(
        self,
        engine: SearchEngine,
        on_state_update: Callable[[SearchStateVM], Awaitable[None]] | None = None,
        navigate: Callable[[int], None] | None = None,
    ):
        self.engine = engine
        self.on_state_update = on_state_update
        self.navigate = navigate
        self._state = SearchStateVM()

    @property
    def state(self) -> SearchStateVM:
        """Get current state."""
        return self._state

    @property
    def is_visible(self) -> bool:
        return self._state.visible

    async def _notify_update(self) -> None:
        """Notify listeners of state change."""
        if self.on_state_update:
            await self.on_state_update(self._state)

    async def init(self) -> None:
        """Start hidden with an empty result list."""
        self._state = SearchStateVM()
        await self._notify_update()

    async def dispose(self) -> None:
        """Hide the surface and release the record store's resources."""
        if self._state.visible:
            await self.close()
        close_store = getattr(self.engine.store, "close", None)
        if close_store is not None:
            close_store()

    async def open(self) -> None:
        """Show the search surface."""
        if self._state.visible:
            return
        self._state.visible = True
        self._state.status_text = f"Type {MIN_QUERY_LENGTH}+ chars to search"
        logger.debug("Search opened")
        await self._notify_update()

    async def close(self) -> None:
        """Hide the search surface and forget the query and results."""
        if not self._state.visible:
            return
        self._state.visible = False
        self._clear()
        logger.debug("Search closed")
        await self._notify_update()

    def _clear(self) -> None:
        self._state.query = ""
        self._state.results = []
        self._state.has_searched = False
        self._state.status_text = f"Type {MIN_QUERY_LENGTH}+ chars to search"
        self._state.generation += 1

    async def on_input_changed(self, value: str) -> None:
        """
        Handle a change of the query text.

        Short queries clear the results without a fetch. While a cycle is
        in flight new queries are buffered in the state but not searched.
        """
        if not self._state.visible:
            return

        if len(value) < MIN_QUERY_LENGTH:
            self._clear()
            self._state.query = value
            await self._notify_update()
            return

        self._state.query = value

        # is_searching is set before the first await, so a trigger arriving
        # while the listener is being notified is dropped too
        if self._state.is_searching or self.engine.is_busy:
            logger.debug(f"Search busy, dropping {value!r}")
            return

        await self._run_cycle(value)

    async def _run_cycle(self, query: str) -> None:
        generation = self._state.generation
        self._state.is_searching = True
        await self._notify_update()

        try:
            results = await self.engine.run_cycle(query)
        finally:
            self._state.is_searching = False

        if not self._state.visible or self._state.generation != generation:
            logger.debug(f"Discarding stale results for {query!r}")
            await self._notify_update()
            return

        self._state.results = results
        self._state.has_searched = True
        self._state.status_text = f"{len(results)} results" if results else "No matches"
        await self._notify_update()

    async def select(self, entry: ResultEntry) -> None:
        """Close the surface, then navigate to the entry's inbound."""
        await self.close()
        if self.navigate:
            self.navigate(entry.target_id)
