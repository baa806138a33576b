"""Record and result models for xui-search."""

from .records import ClientRecord, InboundRecord, parse_clients
from .results import ClientMatch, InboundMatch, ResultEntry, ResultKind

__all__ = [
    "ClientMatch",
    "ClientRecord",
    "InboundMatch",
    "InboundRecord",
    "ResultEntry",
    "ResultKind",
    "parse_clients",
]
