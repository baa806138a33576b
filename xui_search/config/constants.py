"""
Centralized constants for xui-search.

Labels, limits and environment variable definitions used across the
search pipeline and the TUI live here.
"""

from pathlib import Path

# =============================================================================
# PATHS
# =============================================================================

XUI_SEARCH_CONFIG_DIR = Path.home() / ".config" / "xui-search"

# =============================================================================
# SEARCH
# =============================================================================

# Queries shorter than this clear the results without touching the panel
MIN_QUERY_LENGTH = 2

# Display label for inbounds/clients without a remark or email
UNNAMED_LABEL = "unnamed"

# Placeholder row shown when a cycle produced nothing
NO_RESULTS_TEXT = "No results"

# =============================================================================
# PANEL
# =============================================================================

DEFAULT_PANEL_URL = "http://127.0.0.1:54321"
DEFAULT_BASE_PATH = "/"
INBOUNDS_ENDPOINT = "xray/inbounds"
LOGIN_ENDPOINT = "login"
DETAIL_VIEW_PATH = "xray/inbounds"

DEFAULT_FETCH_TIMEOUT = 10.0  # seconds
DEFAULT_DEBOUNCE_MS = 150

# =============================================================================
# ENVIRONMENT VARIABLES
# =============================================================================

ENV_VAR_DEFINITIONS: dict[str, dict] = {
    "XUI_PANEL_URL": {
        "description": "Scheme, host and port of the panel",
        "default": DEFAULT_PANEL_URL,
        "valid_values": None,
    },
    "XUI_BASE_PATH": {
        "description": "Web base path the panel is served under",
        "default": DEFAULT_BASE_PATH,
        "valid_values": None,
    },
    "XUI_USERNAME": {
        "description": "Panel login user (login is skipped when unset)",
        "default": None,
        "valid_values": None,
    },
    "XUI_PASSWORD": {
        "description": "Panel login password",
        "default": None,
        "valid_values": None,
        "sensitive": True,
    },
    "XUI_SEARCH_TIMEOUT": {
        "description": "Seconds to wait for the inbound list",
        "default": str(DEFAULT_FETCH_TIMEOUT),
        "valid_values": None,
    },
    "XUI_SEARCH_DEBOUNCE_MS": {
        "description": "Trailing delay before a keystroke starts a search (0 disables)",
        "default": str(DEFAULT_DEBOUNCE_MS),
        "valid_values": None,
    },
    "XUI_SEARCH_LOG_LEVEL": {
        "description": "Log level for xui-search loggers",
        "default": "INFO",
        "valid_values": ["DEBUG", "INFO", "WARNING", "ERROR"],
    },
}
