"""Utility helpers for xui-search."""
