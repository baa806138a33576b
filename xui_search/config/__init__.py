"""Configuration for xui-search."""

from .settings import PanelSettings, get_env_info, load_settings, normalize_base_path

__all__ = [
    "PanelSettings",
    "get_env_info",
    "load_settings",
    "normalize_base_path",
]
