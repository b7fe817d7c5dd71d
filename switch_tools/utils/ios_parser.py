"""Utilities for parsing Cisco IOS switch CLI output.

Parsers here do structural extraction only.  They never raise on odd
input: lines that do not fit the table shape are dropped, and text with no
recognisable table yields an empty list.
"""

from __future__ import annotations

import re

from switch_tools.models.interfaces import InterfaceStatus, IpInterface, VlanEntry


# ---------------------------------------------------------------------------
# Error detection
# ---------------------------------------------------------------------------

IOS_ERROR_PATTERNS: list[re.Pattern[str]] = [
    re.compile(r"% Invalid input detected", re.IGNORECASE),
    re.compile(r"% Incomplete command", re.IGNORECASE),
    re.compile(r"% Ambiguous command", re.IGNORECASE),
    re.compile(r"% Unrecognized command", re.IGNORECASE),
    re.compile(r"% Invalid interface", re.IGNORECASE),
    re.compile(r"% Access denied", re.IGNORECASE),
    re.compile(r"% Bad secrets", re.IGNORECASE),
    re.compile(r"% Error", re.IGNORECASE),
]


def detect_ios_error(output: str) -> str | None:
    """Return the first IOS error line found, or None."""
    for pat in IOS_ERROR_PATTERNS:
        if pat.search(output):
            for line in output.splitlines():
                if pat.search(line):
                    return line.strip()
    return None


def mentions_password_prompt(output: str) -> bool:
    """True if *output* looks like it ends in a password prompt.

    This is a plain case-insensitive substring test for ``password``; a
    localised or customised prompt will not be recognised, and a banner
    that mentions the word will be.
    """
    return "password" in output.lower()


# ---------------------------------------------------------------------------
# show interfaces status
# ---------------------------------------------------------------------------

_STATUS_HEADER_RE = re.compile(r"^Port\s+Name\s+Status\b")
_SEPARATOR_RE = re.compile(r"^[-\s]+$")
# Column values may contain single spaces ("Not Present"), columns are
# separated by at least two.
_COLUMN_SPLIT_RE = re.compile(r"\s{2,}")
_STATUS_MIN_FIELDS = 7


def parse_interface_status(output: str) -> list[InterfaceStatus]:
    """Parse ``show interfaces status`` into records, in table order.

    Banner and echo lines before the ``Port  Name  Status ...`` header are
    ignored.  Data lines that split into fewer than seven columns (wrapped
    or truncated terminal lines, ports with a blank name) are dropped.
    """
    records: list[InterfaceStatus] = []
    in_table = False

    for line in output.splitlines():
        line_s = line.strip()
        if _STATUS_HEADER_RE.match(line_s):
            in_table = True
            continue
        if not in_table or not line_s or _SEPARATOR_RE.match(line_s):
            continue

        fields = _COLUMN_SPLIT_RE.split(line_s)
        if len(fields) < _STATUS_MIN_FIELDS:
            continue

        def col(i: int) -> str:
            return fields[i] if i < len(fields) else ""

        records.append(InterfaceStatus(
            port=col(0),
            name=col(1),
            status=col(2),
            vlan=col(3),
            duplex=col(4),
            speed=col(5),
            type=col(6),
        ))
    return records


# ---------------------------------------------------------------------------
# show vlan brief
# ---------------------------------------------------------------------------

_VLAN_HEADER_RE = re.compile(r"^VLAN\s+Name\s+Status\s+Ports\b")
_VLAN_LINE_RE = re.compile(r"^(\d+)\s+(\S+)\s+(\S+)(?:\s+(.*))?$")


def _split_ports(text: str | None) -> list[str]:
    if not text:
        return []
    return [p.strip() for p in text.split(",") if p.strip()]


def parse_vlan_brief(output: str) -> list[VlanEntry]:
    """Parse ``show vlan brief``.

    Port lists that wrap onto indented continuation lines are folded into
    the preceding VLAN.
    """
    vlans: list[VlanEntry] = []
    in_table = False

    for line in output.splitlines():
        line_s = line.strip()
        if _VLAN_HEADER_RE.match(line_s):
            in_table = True
            continue
        if not in_table or not line_s or _SEPARATOR_RE.match(line_s):
            continue

        m = _VLAN_LINE_RE.match(line_s)
        if m:
            vlans.append(VlanEntry(
                vlan_id=m.group(1),
                name=m.group(2),
                status=m.group(3),
                ports=_split_ports(m.group(4)),
            ))
        elif line[:1].isspace() and vlans:
            vlans[-1].ports.extend(_split_ports(line_s))
    return vlans


# ---------------------------------------------------------------------------
# show ip interface brief
# ---------------------------------------------------------------------------

_IP_BRIEF_HEADER_RE = re.compile(r"^Interface\s+IP-Address\s+OK\?\s+Method\s+Status\s+Protocol")
_IP_BRIEF_LINE_RE = re.compile(
    r"^(\S+)\s+(\S+)\s+(\S+)\s+(\S+)\s+(administratively down|\S+)\s+(\S+)$",
)


def parse_ip_interface_brief(output: str) -> list[IpInterface]:
    """Parse ``show ip interface brief``."""
    interfaces: list[IpInterface] = []
    in_table = False

    for line in output.splitlines():
        line_s = line.strip()
        if _IP_BRIEF_HEADER_RE.match(line_s):
            in_table = True
            continue
        if not in_table or not line_s:
            continue
        m = _IP_BRIEF_LINE_RE.match(line_s)
        if not m:
            continue
        interfaces.append(IpInterface(
            interface=m.group(1),
            ip_address=m.group(2),
            ok=m.group(3),
            method=m.group(4),
            status=m.group(5),
            protocol=m.group(6),
        ))
    return interfaces
