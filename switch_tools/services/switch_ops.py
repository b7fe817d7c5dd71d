"""Switch CLI operations built on :class:`SwitchSession`.

Every command string is sent verbatim.  Output that merely looks empty or
short is returned as-is; only transport failures raise.
"""

from __future__ import annotations

from switch_tools.models.commands import CommandResult, PortAction
from switch_tools.models.interfaces import InterfaceStatus, IpInterface, VlanEntry
from switch_tools.services.session import SwitchSession
from switch_tools.utils.ios_parser import (
    mentions_password_prompt,
    parse_interface_status,
    parse_ip_interface_brief,
    parse_vlan_brief,
)
from switch_tools.utils.logging import get_logger

log = get_logger(__name__)


def enter_privileged(session: SwitchSession, secret: str) -> bool:
    """Send ``enable`` and answer the password prompt if one appears.

    Returns True when a prompt was seen and the secret was sent.  A
    rejected secret is logged; the session then stays in user EXEC.
    """
    result = session.send("enable")
    if not mentions_password_prompt(result.output):
        log.info("switch.enable", prompted=False)
        return False
    reply = session.send(secret, redact=True)
    if reply.error:
        log.warning("switch.enable_failed", error=reply.error)
    else:
        log.info("switch.enable", prompted=True)
    return True


def disable_paging(session: SwitchSession) -> CommandResult:
    return session.send("terminal length 0")


def get_interface_status(session: SwitchSession) -> list[InterfaceStatus]:
    result = session.send("show interfaces status", window=session.settings.long_window)
    records = parse_interface_status(result.output)
    log.info("switch.interface_status", ports=len(records))
    return records


def get_vlan_brief(session: SwitchSession) -> list[VlanEntry]:
    result = session.send("show vlan brief", window=session.settings.long_window)
    return parse_vlan_brief(result.output)


def get_ip_interface_brief(session: SwitchSession) -> list[IpInterface]:
    result = session.send("show ip interface brief", window=session.settings.long_window)
    return parse_ip_interface_brief(result.output)


def get_power_inline(session: SwitchSession) -> CommandResult:
    return session.send("show power inline", window=session.settings.long_window)


def port_targets(ports: list[str]) -> list[str]:
    """Strip and check interface ids; each must be one non-empty line."""
    targets = [p.strip() for p in ports if p.strip()]
    if not targets:
        raise ValueError("at least one port is required")
    for port in targets:
        if "\n" in port or "\r" in port:
            raise ValueError(f"port id must be a single line: {port!r}")
    return targets


def apply_port_action(
    session: SwitchSession,
    action: PortAction,
    ports: list[str],
    description: str | None = None,
) -> list[CommandResult]:
    """Apply *action* to every port in *ports* from global config mode.

    Input is checked before anything is sent, so a bad request never
    leaves the switch in config mode.
    """
    targets = port_targets(ports)
    lines = action.config_lines(description)

    results = [session.send("conf t")]
    for port in targets:
        results.append(session.send(f"interface {port}"))
        for line in lines:
            results.append(session.send(line))
    results.append(session.send("end"))

    errors = [r for r in results if r.error]
    log.info(
        "switch.port_action",
        action=action.value,
        ports=len(targets),
        errors=len(errors),
    )
    return results


def save_config(session: SwitchSession) -> CommandResult:
    result = session.send("write memory", window=session.settings.long_window)
    log.info("switch.write_memory", error=result.error)
    return result
