"""Command allowlist / denylist for raw exec-mode commands.

Default mode: only read-only and harmless exec commands are allowed.
Maintenance mode: widens scope but still blocks destructive commands.
Interface configuration never goes through here; it is limited to the
fixed :class:`~switch_tools.models.commands.PortAction` set.
"""

from __future__ import annotations

import re

from switch_tools.config import settings

# ── ALWAYS-DENIED patterns (blocked even in maintenance mode) ─────────────
DENY_PATTERNS: list[re.Pattern[str]] = [
    re.compile(r"^\s*reload\b", re.I),
    re.compile(r"^\s*erase\b", re.I),
    re.compile(r"^\s*format\b", re.I),
    re.compile(r"^\s*write\s+erase\b", re.I),
    re.compile(r"^\s*delete\b", re.I),
    re.compile(r"^\s*squeeze\b", re.I),
    re.compile(r"^\s*debug\s+all\b", re.I),
    re.compile(r"^\s*conf(igure)?(\s+t(erminal)?)?\s*$", re.I),
    re.compile(r"^\s*copy\s+(?!running-config\s+)\S+\s+startup-config\b", re.I),
    re.compile(r"^\s*(no\s+)?enable\b", re.I),
]

# ── EXEC-mode allow patterns ──────────────────────────────────────────────
EXEC_ALLOW_PATTERNS: list[re.Pattern[str]] = [
    re.compile(r"^\s*show\b", re.I),
    re.compile(r"^\s*ping\b", re.I),
    re.compile(r"^\s*traceroute\b", re.I),
    re.compile(r"^\s*terminal\b", re.I),
    re.compile(r"^\s*write\s+memory\b", re.I),
    re.compile(r"^\s*copy\s+running-config\s+startup-config\b", re.I),
]


class CommandFilterResult:
    __slots__ = ("allowed", "reason")

    def __init__(self, allowed: bool, reason: str):
        self.allowed = allowed
        self.reason = reason

    def __bool__(self) -> bool:
        return self.allowed


def check_exec_command(command: str) -> CommandFilterResult:
    """Check whether an exec-mode command is allowed."""
    cmd = command.strip()
    if not cmd:
        return CommandFilterResult(False, "empty command")
    if "\n" in command or "\r" in command:
        return CommandFilterResult(False, "command must be a single line")

    for pat in DENY_PATTERNS:
        if pat.search(cmd):
            return CommandFilterResult(False, f"denied by safety rule: {pat.pattern}")

    for pat in EXEC_ALLOW_PATTERNS:
        if pat.search(cmd):
            return CommandFilterResult(True, "allowed exec command")

    if settings.maintenance_mode:
        return CommandFilterResult(True, "maintenance mode: exec commands allowed")

    return CommandFilterResult(False, "command not in exec allowlist")
