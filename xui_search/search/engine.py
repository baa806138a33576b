"""
Search engine: one fetch-match-highlight cycle over the inbound collection.

Inbounds and their nested clients are separate searchable entities. Result
order follows the panel's inbound order; an inbound's own match comes
before its clients' matches, which keep client order.
"""

import logging
from typing import Protocol

from xui_search.config.constants import UNNAMED_LABEL
from xui_search.exceptions import ConcurrentCycleRejected, MalformedSettings
from xui_search.models.records import InboundRecord, parse_clients
from xui_search.models.results import ClientMatch, InboundMatch, ResultEntry

from .highlighter import RICH_MARKER, HighlightMarker, highlight
from .matcher import match_client, match_inbound, matched_client_fields, matched_inbound_fields

logger = logging.getLogger(__name__)


class InboundSource(Protocol):
    """Anything that can produce the current inbound snapshot."""

    async def fetch_all(self) -> list[InboundRecord]: ...


class SearchEngine:
    """
    Runs search cycles against an inbound source.

    At most one cycle is in flight. Callers check ``is_busy`` before calling
    ``run_cycle``; a call made while busy raises ConcurrentCycleRejected.
    """

    def __init__(self, store: InboundSource, marker: HighlightMarker = RICH_MARKER):
        self.store = store
        self.marker = marker
        self._busy = False

    @property
    def is_busy(self) -> bool:
        return self._busy

    async def run_cycle(self, query: str) -> list[ResultEntry]:
        """
        Fetch the inbounds and return every matching inbound and client.

        Raises:
            ConcurrentCycleRejected: If another cycle has not finished yet.
        """
        if self._busy:
            raise ConcurrentCycleRejected(query=query)

        self._busy = True
        try:
            query_lower = query.lower()
            inbounds = await self.store.fetch_all()
            results: list[ResultEntry] = []
            for inbound in inbounds:
                results.extend(self.match_record(inbound, query_lower))
            logger.debug(f"Cycle for {query!r}: {len(results)} results from {len(inbounds)} inbounds")
            return results
        finally:
            self._busy = False

    def match_record(self, inbound: InboundRecord, query_lower: str) -> list[ResultEntry]:
        """Results contributed by one inbound: itself first, then its clients."""
        entries: list[ResultEntry] = []
        remark_display = inbound.remark or UNNAMED_LABEL

        if match_inbound(inbound, query_lower):
            entries.append(
                InboundMatch(
                    id=inbound.id,
                    remark_display=remark_display,
                    protocol=inbound.protocol,
                    port=inbound.port,
                    highlighted_text=highlight(remark_display, query_lower, self.marker),
                    matched_fields=tuple(matched_inbound_fields(inbound, query_lower)),
                )
            )

        try:
            clients = parse_clients(inbound.settings)
        except MalformedSettings as e:
            logger.warning(f"Skipping clients of inbound {inbound.id}: {e}")
            return entries

        for client in clients:
            if not match_client(client, query_lower):
                continue
            label = client.email or client.id
            entries.append(
                ClientMatch(
                    parent_inbound_id=inbound.id,
                    parent_inbound_remark=remark_display,
                    client_label=label,
                    client_id=client.id,
                    highlighted_text=highlight(label, query_lower, self.marker),
                    matched_fields=tuple(matched_client_fields(client, query_lower)),
                )
            )

        return entries
