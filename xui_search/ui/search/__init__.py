"""
Inbound search surface.

Provides:
- InboundSearchScreen: modal overlay with input and result list
- SearchSession: visibility, query gating and result lifecycle
- SearchResultsView: result rendering and selection
"""

from .results_view import SearchResultsView
from .search_screen import InboundSearchScreen
from .search_session import SearchSession, SearchStateVM

__all__ = [
    "InboundSearchScreen",
    "SearchResultsView",
    "SearchSession",
    "SearchStateVM",
]
