"""Records parsed from switch status tables."""

from __future__ import annotations

from pydantic import BaseModel

# CSV header / column order of ``show interfaces status``
INTERFACE_STATUS_FIELDS: list[str] = [
    "Port", "Name", "Status", "Vlan", "Duplex", "Speed", "Type",
]


class InterfaceStatus(BaseModel):
    """One row of ``show interfaces status``; values are passed through verbatim."""

    port: str = ""
    name: str = ""
    status: str = ""
    vlan: str = ""
    duplex: str = ""
    speed: str = ""
    type: str = ""

    def as_row(self) -> list[str]:
        return [
            self.port, self.name, self.status, self.vlan,
            self.duplex, self.speed, self.type,
        ]


class VlanEntry(BaseModel):
    vlan_id: str
    name: str = ""
    status: str = ""
    ports: list[str] = []


class IpInterface(BaseModel):
    interface: str
    ip_address: str = ""
    ok: str = ""
    method: str = ""
    status: str = ""
    protocol: str = ""
