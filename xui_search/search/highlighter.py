"""
Match highlighting for search results.

The query is compared case-insensitively but the matched span keeps the
casing it has in the source text. Everything outside and inside the marker
is escaped for the target markup, so record values are never interpreted.
"""

import html
import re
from collections.abc import Callable
from dataclasses import dataclass

from rich.markup import escape as rich_escape
from rich.text import Text


@dataclass(frozen=True)
class HighlightMarker:
    """Opening/closing tags plus the escape functions for one markup flavour."""

    open: str
    close: str
    # Escape for a segment that is directly followed by a tag
    escape: Callable[[str], str]
    # Escape for the trailing segment, which is not followed by a tag
    escape_tail: Callable[[str], str] | None = None


def _rich_escape_tail(value: str) -> str:
    # The sentinel stops escape() from doubling a trailing backslash
    return rich_escape(value + "x")[:-1]


def _rich_escape_before_tag(value: str) -> str:
    # Rich halves a backslash run in front of a tag and an odd run escapes
    # the tag itself, so the trailing run is doubled
    escaped = _rich_escape_tail(value)
    run = len(escaped) - len(escaped.rstrip("\\"))
    return escaped + "\\" * run


# Rich console markup, used by the TUI and the CLI
RICH_MARKER = HighlightMarker(
    open="[reverse bold]",
    close="[/reverse bold]",
    escape=_rich_escape_before_tag,
    escape_tail=_rich_escape_tail,
)

# The panel's web rendering
HTML_MARKER = HighlightMarker(
    open='<span class="search-highlight">',
    close="</span>",
    escape=lambda value: html.escape(value, quote=True),
)


def highlight(text: str, query_lower: str, marker: HighlightMarker = RICH_MARKER) -> str:
    """
    Wrap every occurrence of the query in ``text`` with the marker.

    Args:
        text: Field value to render
        query_lower: Lower-cased query; treated literally, never as a pattern
        marker: Markup flavour to produce

    Returns:
        Escaped markup; "" for empty text
    """
    if not text:
        return ""
    if not query_lower:
        return (marker.escape_tail or marker.escape)(text)

    pattern = re.compile(re.escape(query_lower), re.IGNORECASE)
    parts: list[str] = []
    last = 0
    for match in pattern.finditer(text):
        parts.append(marker.escape(text[last:match.start()]))
        parts.append(f"{marker.open}{marker.escape(match.group(0))}{marker.close}")
        last = match.end()
    escape_tail = marker.escape_tail or marker.escape
    parts.append(escape_tail(text[last:]))
    return "".join(parts)


def plain(markup: str) -> str:
    """Strip Rich markup produced by ``highlight`` back to plain text."""
    return Text.from_markup(markup).plain
