"""Configuration utilities for xui-search."""

import os
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from ..exceptions import ConfigurationError
from .constants import ENV_VAR_DEFINITIONS


@dataclass(frozen=True)
class PanelSettings:
    """Resolved connection and search settings."""

    panel_url: str
    base_path: str
    username: Optional[str]
    password: Optional[str]
    timeout: float
    debounce_ms: int
    log_level: str

    @property
    def base_url(self) -> str:
        """Panel URL joined with the base path, always ending in a slash."""
        return self.panel_url.rstrip("/") + self.base_path

    @property
    def has_credentials(self) -> bool:
        return bool(self.username and self.password)


def normalize_base_path(path: str) -> str:
    """Return the base path with exactly one leading and one trailing slash."""
    stripped = path.strip().strip("/")
    if not stripped:
        return "/"
    return f"/{stripped}/"


def validate_env_var(name: str, value: Optional[str]) -> Tuple[bool, Optional[str]]:
    """Validate a single environment variable value.

    Args:
        name: The environment variable name.
        value: The current value (or None if not set).

    Returns:
        Tuple of (is_valid, error_message).
    """
    if name not in ENV_VAR_DEFINITIONS:
        return True, None

    if value is None:
        return True, None

    valid_values = ENV_VAR_DEFINITIONS[name].get("valid_values")
    if valid_values is None:
        return True, None

    if value.lower() not in [v.lower() for v in valid_values]:
        return False, f"Invalid value '{value}' for {name}. Valid values: {valid_values}"

    return True, None


def validate_all_env_vars() -> List[str]:
    """Validate all XUI_* environment variables.

    Returns:
        List of error messages (empty if all valid).
    """
    errors = []
    for name in ENV_VAR_DEFINITIONS:
        is_valid, error = validate_env_var(name, os.environ.get(name))
        if not is_valid:
            errors.append(error)
    return errors


def get_env_var(name: str, validate: bool = True) -> Optional[str]:
    """Get an environment variable with optional validation.

    Raises:
        ConfigurationError: If validate=True and the value is invalid.
    """
    value = os.environ.get(name)

    if validate and value is not None:
        is_valid, error = validate_env_var(name, value)
        if not is_valid:
            raise ConfigurationError(error, setting=name)

    if value is None and name in ENV_VAR_DEFINITIONS:
        return ENV_VAR_DEFINITIONS[name].get("default")

    return value


def _get_number(name: str, cast):
    raw = get_env_var(name)
    try:
        number = cast(raw)
    except (TypeError, ValueError) as e:
        raise ConfigurationError(f"{name} must be a number, got {raw!r}", setting=name) from e
    if number < 0:
        raise ConfigurationError(f"{name} must not be negative", setting=name)
    return number


def load_settings() -> PanelSettings:
    """Build PanelSettings from the environment.

    Raises:
        ConfigurationError: If a value fails validation.
    """
    return PanelSettings(
        panel_url=get_env_var("XUI_PANEL_URL"),
        base_path=normalize_base_path(get_env_var("XUI_BASE_PATH")),
        username=get_env_var("XUI_USERNAME"),
        password=get_env_var("XUI_PASSWORD"),
        timeout=_get_number("XUI_SEARCH_TIMEOUT", float),
        debounce_ms=_get_number("XUI_SEARCH_DEBOUNCE_MS", int),
        log_level=get_env_var("XUI_SEARCH_LOG_LEVEL").upper(),
    )


def get_env_info() -> Dict[str, Dict]:
    """Get information about all XUI_* environment variables.

    Returns:
        Dictionary mapping env var names to description, current value
        (masked for sensitive vars), validity and default.
    """
    info = {}
    for name, definition in ENV_VAR_DEFINITIONS.items():
        value = os.environ.get(name)
        is_valid, _ = validate_env_var(name, value)

        display_value = value
        if value and definition.get("sensitive"):
            display_value = value[:4] + "..." if len(value) > 4 else "***"

        info[name] = {
            "description": definition.get("description", ""),
            "value": display_value,
            "is_set": value is not None,
            "valid": is_valid,
            "default": definition.get("default"),
            "sensitive": definition.get("sensitive", False),
        }
    return info
