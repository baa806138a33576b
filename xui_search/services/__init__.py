"""Remote data access for xui-search."""

from .record_store import RecordStore

__all__ = ["RecordStore"]
