"""Tests for IOS output parsing utilities."""

from __future__ import annotations

from switch_tools.models.interfaces import InterfaceStatus
from switch_tools.utils.ios_parser import (
    detect_ios_error,
    mentions_password_prompt,
    parse_interface_status,
    parse_ip_interface_brief,
    parse_vlan_brief,
)
from tests.mock_switch import (
    SHOW_INTERFACES_STATUS,
    SHOW_IP_INTERFACE_BRIEF,
    SHOW_VLAN_BRIEF,
)

BANNER_TABLE = """\
Switch Banner Noise
Port      Name               Status       Vlan  Duplex  Speed   Type
----      ----               ------       ----  ------  -----   ----
Gi1/0/1   uplink             connected    1     a-full  a-1000  10/100/1000BaseTX
"""


class TestErrorDetection:
    def test_invalid_input(self):
        assert detect_ios_error("% Invalid input detected at '^' marker.") is not None

    def test_incomplete_command(self):
        assert detect_ios_error("% Incomplete command.") is not None

    def test_access_denied(self):
        assert detect_ios_error("% Access denied") == "% Access denied"

    def test_clean_output(self):
        assert detect_ios_error("Building configuration...\n[OK]") is None

    def test_multiline_with_error(self):
        output = "interface Gi9/9/9\n                 ^\n% Invalid input detected at '^' marker.\n"
        err = detect_ios_error(output)
        assert err == "% Invalid input detected at '^' marker."


class TestPasswordPrompt:
    def test_plain_prompt(self):
        assert mentions_password_prompt("enable\r\nPassword: ")

    def test_case_insensitive(self):
        assert mentions_password_prompt("PASSWORD:")

    def test_no_prompt(self):
        assert not mentions_password_prompt("enable\r\nSwitch#")


class TestInterfaceStatus:
    def test_banner_table(self):
        records = parse_interface_status(BANNER_TABLE)
        assert records == [
            InterfaceStatus(
                port="Gi1/0/1",
                name="uplink",
                status="connected",
                vlan="1",
                duplex="a-full",
                speed="a-1000",
                type="10/100/1000BaseTX",
            ),
        ]

    def test_full_table_order(self):
        records = parse_interface_status(SHOW_INTERFACES_STATUS)
        assert [r.port for r in records] == [
            "Gi1/0/1", "Gi1/0/2", "Gi1/0/3", "Gi1/0/4", "Gi1/1/1",
        ]

    def test_single_spaces_stay_inside_a_column(self):
        records = parse_interface_status(SHOW_INTERFACES_STATUS)
        by_port = {r.port: r for r in records}
        assert by_port["Gi1/0/2"].name == "Printer Room 2"
        assert by_port["Gi1/1/1"].type == "Not Present"

    def test_blank_name_row_is_dropped(self):
        records = parse_interface_status(SHOW_INTERFACES_STATUS)
        assert "Gi1/0/5" not in [r.port for r in records]

    def test_truncated_line_is_dropped(self):
        raw = BANNER_TABLE + "Gi1/0/2   spare              notconnect   1     auto\n"
        records = parse_interface_status(raw)
        assert len(records) == 1
        assert records[0].port == "Gi1/0/1"

    def test_no_header_yields_nothing(self):
        raw = "Gi1/0/1   uplink   connected   1   a-full   a-1000   10/100/1000BaseTX\n"
        assert parse_interface_status(raw) == []

    def test_empty_input(self):
        assert parse_interface_status("") == []

    def test_echo_and_prompt_are_ignored(self):
        raw = "show interfaces status\r\n" + BANNER_TABLE.replace("\n", "\r\n") + "Switch#"
        records = parse_interface_status(raw)
        assert len(records) == 1
        assert records[0].type == "10/100/1000BaseTX"

    def test_repeated_header_is_not_a_record(self):
        header = "Port      Name               Status       Vlan  Duplex  Speed   Type\n"
        records = parse_interface_status(BANNER_TABLE + header)
        assert len(records) == 1

    def test_parse_is_idempotent(self):
        first = parse_interface_status(SHOW_INTERFACES_STATUS)
        second = parse_interface_status(SHOW_INTERFACES_STATUS)
        assert first == second


class TestVlanBrief:
    def test_parse_vlans(self):
        vlans = parse_vlan_brief(SHOW_VLAN_BRIEF)
        assert [v.vlan_id for v in vlans] == ["1", "10", "20", "1002"]
        assert vlans[1].name == "printers"
        assert vlans[1].ports == ["Gi1/0/2"]

    def test_wrapped_ports_are_folded(self):
        vlans = parse_vlan_brief(SHOW_VLAN_BRIEF)
        assert vlans[0].ports[-2:] == ["Gi1/0/8", "Gi1/1/1"]
        assert len(vlans[0].ports) == 6

    def test_vlan_without_ports(self):
        vlans = parse_vlan_brief(SHOW_VLAN_BRIEF)
        assert vlans[-1].status == "act/unsup"
        assert vlans[-1].ports == []

    def test_no_header(self):
        assert parse_vlan_brief("1    default    active    Gi1/0/1\n") == []


class TestIpInterfaceBrief:
    def test_parse(self):
        rows = parse_ip_interface_brief(SHOW_IP_INTERFACE_BRIEF)
        assert len(rows) == 3
        assert rows[0].interface == "Vlan1"
        assert rows[0].ip_address == "192.168.1.2"

    def test_admin_down_status(self):
        rows = parse_ip_interface_brief(SHOW_IP_INTERFACE_BRIEF)
        assert rows[2].status == "administratively down"
        assert rows[2].protocol == "down"
