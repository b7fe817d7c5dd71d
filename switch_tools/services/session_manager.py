"""Switch session manager with session reuse, idle timeout, and concurrency lock.

Shell transactions block for their whole collection window, so they run
inside a single-thread executor and the FastAPI event loop is never
blocked.  The lock plus the single worker keep transactions strictly
sequential on the one shell stream.
"""

from __future__ import annotations

import asyncio
import time
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Callable, Optional

from switch_tools.config import Settings, settings
from switch_tools.models.commands import CommandResult, PortAction
from switch_tools.models.interfaces import InterfaceStatus, IpInterface, VlanEntry
from switch_tools.services import switch_ops
from switch_tools.services.session import SwitchSession, open_session
from switch_tools.services.shell_driver import TransportError
from switch_tools.utils.logging import get_logger

log = get_logger(__name__)


class SwitchSessionManager:
    """Singleton-style manager for a single switch shell session."""

    def __init__(
        self,
        cfg: Settings | None = None,
        opener: Callable[[Settings], SwitchSession] = open_session,
    ) -> None:
        self._cfg = cfg or settings
        self._opener = opener
        self._session: Optional[SwitchSession] = None
        self._lock = asyncio.Lock()
        self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="shell")
        self._idle_handle: Optional[asyncio.TimerHandle] = None
        self._last_used: float = 0.0

    # ── session lifecycle ─────────────────────────────────────────────

    def _open_sync(self) -> SwitchSession:
        session = self._opener(self._cfg)
        try:
            switch_ops.disable_paging(session)
            if self._cfg.enable_secret:
                switch_ops.enter_privileged(session, self._cfg.enable_secret)
        except TransportError:
            session.close()
            raise
        return session

    def _close_sync(self) -> None:
        if self._session is not None:
            self._session.close()
            self._session = None

    async def _ensure(self) -> SwitchSession:
        if self._session is not None and self._session.usable:
            return self._session
        await self._run(self._close_sync)
        self._session = await self._run(self._open_sync)
        return self._session

    # ── idle timeout ──────────────────────────────────────────────────

    def _reset_idle(self) -> None:
        self._last_used = time.monotonic()
        if self._idle_handle is not None:
            self._idle_handle.cancel()
        try:
            loop = asyncio.get_running_loop()
            self._idle_handle = loop.call_later(
                self._cfg.idle_timeout_seconds,
                lambda: asyncio.ensure_future(self._idle_close()),
            )
        except RuntimeError:
            pass

    async def _idle_close(self) -> None:
        async with self._lock:
            elapsed = time.monotonic() - self._last_used
            if elapsed >= self._cfg.idle_timeout_seconds:
                log.info("session.idle_timeout", elapsed=elapsed)
                await self._run(self._close_sync)

    # ── helpers ───────────────────────────────────────────────────────

    async def _run(self, fn: Callable[..., Any], *args: Any) -> Any:
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(self._executor, fn, *args)

    async def _call(self, fn: Callable[..., Any], *args: Any) -> Any:
        """Run ``fn(session, *args)`` under the lock.

        A transport failure discards the session so the next call starts
        a fresh one; the failed call itself is not retried.
        """
        async with self._lock:
            try:
                session = await self._ensure()
                self._reset_idle()
                return await self._run(fn, session, *args)
            except TransportError as exc:
                log.error("session.transport_failed", error=str(exc))
                await self._run(self._close_sync)
                raise

    # ── public: exec-mode commands ────────────────────────────────────

    async def send_show(self, command: str) -> CommandResult:
        return await self._call(_send_long_wrapper, command)

    async def interface_status(self) -> list[InterfaceStatus]:
        return await self._call(switch_ops.get_interface_status)

    async def vlan_brief(self) -> list[VlanEntry]:
        return await self._call(switch_ops.get_vlan_brief)

    async def ip_interface_brief(self) -> list[IpInterface]:
        return await self._call(switch_ops.get_ip_interface_brief)

    async def power_inline(self) -> CommandResult:
        return await self._call(switch_ops.get_power_inline)

    # ── public: config-mode commands ──────────────────────────────────

    async def apply_port_action(
        self,
        action: PortAction,
        ports: list[str],
        description: str | None = None,
    ) -> list[CommandResult]:
        # Reject bad input before taking the lock or touching the switch
        action.config_lines(description)
        switch_ops.port_targets(ports)
        return await self._call(switch_ops.apply_port_action, action, ports, description)

    async def save_config(self) -> CommandResult:
        return await self._call(switch_ops.save_config)

    # ── public: lifecycle helpers ─────────────────────────────────────

    async def close(self) -> None:
        async with self._lock:
            if self._idle_handle is not None:
                self._idle_handle.cancel()
            await self._run(self._close_sync)

    @property
    def is_connected(self) -> bool:
        return self._session is not None and self._session.usable


# ── module-level sync wrappers (executor-friendly) ────────────────────────

def _send_long_wrapper(session: SwitchSession, command: str) -> CommandResult:
    return session.send(command, window=session.settings.long_window)


# ── Singleton instance ────────────────────────────────────────────────────

session_manager = SwitchSessionManager()
