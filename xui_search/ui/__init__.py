"""Textual UI for xui-search."""
