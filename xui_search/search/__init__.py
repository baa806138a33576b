"""Matching, highlighting and the search engine."""

from .engine import SearchEngine
from .highlighter import HTML_MARKER, RICH_MARKER, highlight
from .matcher import match_client, match_inbound

__all__ = [
    "HTML_MARKER",
    "RICH_MARKER",
    "SearchEngine",
    "highlight",
    "match_client",
    "match_inbound",
]
