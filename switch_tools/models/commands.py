"""Command-related data structures."""

from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel


class CommandResult(BaseModel):
    """Text collected by one shell transaction.

    There is no failure flag: an empty ``output`` is a normal result.
    ``error`` holds an IOS ``%`` error line when the switch reported one.
    """

    command: str
    output: str
    elapsed_time: float = 0.0
    error: Optional[str] = None


class PortAction(str, Enum):
    """Bulk actions that can be applied to a set of interfaces."""

    ENABLE = "enable"
    DISABLE = "disable"
    DESCRIBE = "describe"
    POE_AUTO = "poe_auto"
    POE_NEVER = "poe_never"

    @classmethod
    def parse(cls, value: str) -> PortAction:
        """Return the action named *value*; unknown names raise ValueError."""
        try:
            return cls(value.strip().lower())
        except ValueError:
            valid = ", ".join(a.value for a in cls)
            raise ValueError(
                f"unknown port action {value!r} (expected one of: {valid})",
            ) from None

    def config_lines(self, description: str | None = None) -> list[str]:
        """Interface-mode commands that implement this action."""
        if self is PortAction.ENABLE:
            return ["no shutdown"]
        if self is PortAction.DISABLE:
            return ["shutdown"]
        if self is PortAction.DESCRIBE:
            if not description or not description.strip():
                raise ValueError("describe requires a non-empty description")
            if "\n" in description or "\r" in description:
                raise ValueError("description must be a single line")
            return [f"description {description.strip()}"]
        if self is PortAction.POE_AUTO:
            return ["power inline auto"]
        if self is PortAction.POE_NEVER:
            return ["power inline never"]
        raise AssertionError(f"unhandled port action: {self}")
