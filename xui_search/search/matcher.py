"""Case-insensitive containment matching for inbounds and clients.

Callers lower-case the query once per cycle and pass it in as ``query_lower``.
"""

from xui_search.models.records import ClientRecord, InboundRecord


def _contains(value: str, query_lower: str) -> bool:
    return bool(value) and query_lower in value.lower()


def matched_inbound_fields(record: InboundRecord, query_lower: str) -> list[str]:
    """Names of the inbound fields that contain the query."""
    fields = []
    if _contains(record.remark, query_lower):
        fields.append("remark")
    if _contains(record.protocol, query_lower):
        fields.append("protocol")
    if query_lower in str(record.port):
        fields.append("port")
    return fields


def matched_client_fields(client: ClientRecord, query_lower: str) -> list[str]:
    """Names of the client fields that contain the query."""
    fields = []
    if _contains(client.email, query_lower):
        fields.append("email")
    if _contains(client.id, query_lower):
        fields.append("id")
    return fields


def match_inbound(record: InboundRecord, query_lower: str) -> bool:
    """True if remark, protocol or port contains the query."""
    return (
        _contains(record.remark, query_lower)
        or _contains(record.protocol, query_lower)
        or query_lower in str(record.port)
    )


def match_client(client: ClientRecord, query_lower: str) -> bool:
    """True if email or id contains the query."""
    return _contains(client.email, query_lower) or _contains(client.id, query_lower)
