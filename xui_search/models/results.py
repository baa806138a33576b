"""Typed search results produced by one search cycle."""

from dataclasses import dataclass
from enum import Enum
from typing import Union


class ResultKind(Enum):
    """Which kind of record a result points at."""

    INBOUND = "inbound"
    CLIENT = "client"


@dataclass(frozen=True)
class InboundMatch:
    """An inbound matched on its remark, protocol or port."""

    id: int
    remark_display: str
    protocol: str
    port: int
    highlighted_text: str  # markup, escaped
    matched_fields: tuple[str, ...] = ()

    kind = ResultKind.INBOUND

    @property
    def target_id(self) -> int:
        return self.id


@dataclass(frozen=True)
class ClientMatch:
    """A client matched on its email or id.

    Clients have no detail view of their own, so ``target_id`` is the
    parent inbound.
    """

    parent_inbound_id: int
    parent_inbound_remark: str
    client_label: str
    client_id: str
    highlighted_text: str  # markup, escaped
    matched_fields: tuple[str, ...] = ()

    kind = ResultKind.CLIENT

    @property
    def target_id(self) -> int:
        return self.parent_inbound_id


ResultEntry = Union[InboundMatch, ClientMatch]
