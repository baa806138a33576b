"""Tests for match highlighting."""

import pytest
from rich.text import Text

from xui_search.search.highlighter import HTML_MARKER, RICH_MARKER, highlight, plain


class TestHighlightHtml:
    def test_wraps_match(self):
        assert highlight("alice@x.com", "alice", HTML_MARKER) == (
            '<span class="search-highlight">alice</span>@x.com'
        )

    def test_preserves_original_casing(self):
        assert highlight("VLESS-Primary", "vless", HTML_MARKER) == (
            '<span class="search-highlight">VLESS</span>-Primary'
        )

    def test_all_non_overlapping_occurrences(self):
        assert highlight("aaaa", "aa", HTML_MARKER) == (
            '<span class="search-highlight">aa</span><span class="search-highlight">aa</span>'
        )

    def test_escapes_markup_in_value(self):
        result = highlight("<script>alert(1)</script>", "alert", HTML_MARKER)
        assert "<script>" not in result
        assert "&lt;script&gt;" in result
        assert '<span class="search-highlight">alert</span>' in result

    @pytest.mark.parametrize("query", ["a.c", "(x", "[a]", "*", "\\d"])
    def test_query_is_literal(self, query):
        text = f"foo{query}bar abc"
        result = highlight(text, query, HTML_MARKER)
        assert result.count('<span class="search-highlight">') == 1

    def test_empty_text(self):
        assert highlight("", "abc", HTML_MARKER) == ""

    def test_no_occurrence_is_plain_escaped(self):
        assert highlight("a&b", "zz", HTML_MARKER) == "a&amp;b"


class TestHighlightRich:
    def test_wraps_match(self):
        assert highlight("VLESS-Primary", "vless") == "[reverse bold]VLESS[/reverse bold]-Primary"

    @pytest.mark.parametrize(
        "value, query",
        [
            ("VLESS-Primary", "primary"),
            ("alice@x.com", "x.c"),
            ("[bold]sneaky[/bold]", "sneaky"),
            ("ends with \\", "ends"),
            ("Mixed Case mixed", "mixed"),
            ("x\\\\al", "al"),
            ("al\\\\al", "al"),
            ("x\\\\\\al", "al"),
            ("a\\b a\\b", "a\\"),
            ("[x]\\\\[bold]", "x"),
        ],
    )
    def test_plain_text_round_trip(self, value, query):
        assert plain(highlight(value, query.lower())) == value

    def test_markup_in_value_is_not_interpreted(self):
        result = highlight("[red]x[/red] ab", "ab")
        assert plain(result) == "[red]x[/red] ab"

    def test_empty_query_returns_escaped_text(self):
        assert plain(highlight("[b]x[/b]", "")) == "[b]x[/b]"

    def test_matched_span_keeps_casing(self):
        text = Text.from_markup(highlight("My OFFICE", "office"))
        spans = [text.plain[span.start:span.end] for span in text.spans]
        assert spans == ["OFFICE"]

    def test_default_marker_is_rich(self):
        assert highlight("ab", "a") == highlight("ab", "a", RICH_MARKER)

    @pytest.mark.parametrize("backslashes", [1, 2, 3, 4])
    def test_backslashes_before_match_keep_highlight(self, backslashes):
        value = "x" + "\\" * backslashes + "al"
        text = Text.from_markup(highlight(value, "al"))
        assert text.plain == value
        assert [text.plain[span.start:span.end] for span in text.spans] == ["al"]
