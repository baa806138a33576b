"""Exception hierarchy for xui-search.

Exception Hierarchy:
    XuiSearchError (base)
    ├── RemoteFailure - panel request failed or returned a failure envelope
    │   ├── RemoteConnectionError (retryable)
    │   └── RemoteAuthenticationError
    ├── MalformedRecord - an inbound object does not match the expected shape
    ├── MalformedSettings - an inbound's settings blob could not be parsed
    ├── ConcurrentCycleRejected - a search cycle is already in flight
    └── ConfigurationError - settings/environment issues

RemoteFailure and MalformedSettings are recovered inside the search core
(logged, never shown to the user). ConcurrentCycleRejected is a rejection,
not a failure.

Usage:
    from xui_search.exceptions import RemoteFailure

    try:
        response = session.post(url, timeout=timeout)
    except requests.RequestException as e:
        raise RemoteConnectionError("Panel unreachable", url=url) from e
"""

from typing import Any, Optional


class XuiSearchError(Exception):
    """Base exception for all xui-search errors.

    Attributes:
        message: Human-readable error description
        context: Additional context about the error (e.g., IDs, URLs)
        retryable: Whether this error might succeed on retry
    """

    def __init__(
        self,
        message: str,
        *,
        retryable: bool = False,
        **context: Any,
    ) -> None:
        self.message = message
        self.context = context
        self.retryable = retryable
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format the error message with context."""
        if self.context:
            context_str = ", ".join(f"{k}={v!r}" for k, v in self.context.items())
            return f"{self.message} ({context_str})"
        return self.message


# =============================================================================
# Remote Errors
# =============================================================================


class RemoteFailure(XuiSearchError):
    """The panel returned a non-success envelope or could not be read."""

    def __init__(
        self,
        message: str = "Remote request failed",
        *,
        url: Optional[str] = None,
        retryable: bool = False,
        **context: Any,
    ) -> None:
        if url:
            context["url"] = url
        super().__init__(message, retryable=retryable, **context)


class RemoteConnectionError(RemoteFailure):
    """Transport-level failure talking to the panel - typically retryable."""

    def __init__(
        self,
        message: str = "Panel connection failed",
        *,
        url: Optional[str] = None,
        **context: Any,
    ) -> None:
        super().__init__(message, url=url, retryable=True, **context)


class RemoteAuthenticationError(RemoteFailure):
    """Logging in to the panel failed."""

    def __init__(
        self,
        message: str = "Panel login failed",
        *,
        url: Optional[str] = None,
        **context: Any,
    ) -> None:
        super().__init__(message, url=url, **context)


# =============================================================================
# Decoding Errors
# =============================================================================


class MalformedRecord(XuiSearchError):
    """An inbound object from the panel is missing fields or has wrong types."""

    def __init__(
        self,
        message: str = "Malformed inbound record",
        *,
        field: Optional[str] = None,
        **context: Any,
    ) -> None:
        if field:
            context["field"] = field
        super().__init__(message, **context)


class MalformedSettings(XuiSearchError):
    """An inbound's settings blob is not a JSON object with usable clients."""

    def __init__(
        self,
        message: str = "Malformed inbound settings",
        *,
        inbound_id: Optional[int] = None,
        **context: Any,
    ) -> None:
        if inbound_id is not None:
            context["inbound_id"] = inbound_id
        super().__init__(message, **context)


# =============================================================================
# Search Errors
# =============================================================================


class ConcurrentCycleRejected(XuiSearchError):
    """A search cycle was requested while another one is still running."""

    def __init__(self, message: str = "Search cycle already in flight", **context: Any) -> None:
        super().__init__(message, **context)


# =============================================================================
# Configuration Errors
# =============================================================================


class ConfigurationError(XuiSearchError):
    """Configuration or settings error."""

    def __init__(
        self,
        message: str = "Configuration error",
        *,
        setting: Optional[str] = None,
        **context: Any,
    ) -> None:
        if setting:
            context["setting"] = setting
        super().__init__(message, **context)
