"""Inbound and client records decoded from the panel's inbound list.

Records are rebuilt from the remote snapshot on every search cycle and are
never cached. Clients only exist inside their parent inbound's settings blob.
"""

import json
from dataclasses import dataclass
from typing import Any

from xui_search.exceptions import MalformedRecord, MalformedSettings


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _optional_str(raw: dict[str, Any], key: str) -> str:
    """Return raw[key] as a string; missing or null become ""."""
    value = raw.get(key)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise MalformedRecord(f"Expected a string for {key!r}", field=key, value=value)
    return value


@dataclass(frozen=True)
class InboundRecord:
    """One inbound listener as reported by the panel."""

    id: int
    remark: str
    protocol: str
    port: int
    settings: str  # serialized JSON, may be unparsable

    @classmethod
    def from_dict(cls, raw: Any) -> "InboundRecord":
        """Decode an inbound object from the panel.

        Raises:
            MalformedRecord: If the object lacks an integer id/port or a
                string protocol, or a text field has the wrong type.
        """
        if not isinstance(raw, dict):
            raise MalformedRecord("Inbound is not an object", value=type(raw).__name__)

        inbound_id = raw.get("id")
        if not _is_int(inbound_id):
            raise MalformedRecord("Inbound id must be an integer", field="id", value=inbound_id)

        protocol = raw.get("protocol")
        if not isinstance(protocol, str):
            raise MalformedRecord(
                "Inbound protocol must be a string", field="protocol", inbound_id=inbound_id
            )

        port = raw.get("port")
        if not _is_int(port):
            raise MalformedRecord(
                "Inbound port must be an integer", field="port", inbound_id=inbound_id
            )

        return cls(
            id=inbound_id,
            remark=_optional_str(raw, "remark"),
            protocol=protocol,
            port=port,
            settings=_optional_str(raw, "settings"),
        )

    def to_dict(self) -> dict[str, Any]:
        """Encode using the panel's field names."""
        return {
            "id": self.id,
            "remark": self.remark,
            "protocol": self.protocol,
            "port": self.port,
            "settings": self.settings,
        }


@dataclass(frozen=True)
class ClientRecord:
    """A credentialed sub-user nested in an inbound's settings."""

    id: str
    email: str

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> "ClientRecord":
        """Decode one entry of a settings ``clients`` list.

        Raises:
            MalformedSettings: If id or email is present but not a string.
        """
        values = {}
        for key in ("id", "email"):
            value = raw.get(key)
            if value is not None and not isinstance(value, str):
                raise MalformedSettings(f"Client {key} must be a string", field=key)
            values[key] = value or ""
        return cls(id=values["id"], email=values["email"])

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "email": self.email}


def parse_clients(settings_blob: str) -> list[ClientRecord]:
    """Parse the clients out of an inbound's settings blob.

    An empty blob, a missing ``clients`` key or a ``clients`` value that is not
    a list all mean "no clients". Entries that are not objects are skipped.

    Raises:
        MalformedSettings: If the blob is not a JSON object or a client has
            non-string id/email.
    """
    if not settings_blob:
        return []

    try:
        settings = json.loads(settings_blob)
    except json.JSONDecodeError as e:
        raise MalformedSettings("Settings are not valid JSON", error=str(e)) from e

    if not isinstance(settings, dict):
        raise MalformedSettings("Settings are not a JSON object", value=type(settings).__name__)

    clients = settings.get("clients")
    if not isinstance(clients, list):
        return []

    return [ClientRecord.from_dict(client) for client in clients if isinstance(client, dict)]
