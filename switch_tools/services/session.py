"""One interactive shell session on a switch.

:class:`SwitchSession` is an explicit object handed to every operation;
there is no module-level session state.  :func:`open_session` is the SSH
transport: it authenticates, opens the interactive shell and drains the
login banner.
"""

from __future__ import annotations

import time
from typing import Optional

import paramiko

from switch_tools.config import Settings, settings
from switch_tools.models.commands import CommandResult
from switch_tools.services.shell_driver import (
    ParamikoShellStream,
    ShellStream,
    TransportError,
    transact,
)
from switch_tools.utils.ios_parser import detect_ios_error
from switch_tools.utils.logging import get_logger

log = get_logger(__name__)


class SwitchSession:
    """Owns a :class:`ShellStream` for the lifetime of one shell session.

    Not thread-safe; callers issue one command at a time.  Once a
    :class:`TransportError` has been raised the session is broken and
    every later :meth:`send` fails immediately.
    """

    def __init__(self, stream: ShellStream, cfg: Settings | None = None) -> None:
        self._stream = stream
        self._cfg = cfg or settings
        self._broken = False
        self._closed = False

    @property
    def settings(self) -> Settings:
        return self._cfg

    @property
    def usable(self) -> bool:
        return not (self._broken or self._closed)

    def send(
        self,
        command: str,
        *,
        settle_delay: Optional[float] = None,
        window: Optional[float] = None,
        redact: bool = False,
    ) -> CommandResult:
        """Run one transaction and wrap the collected text."""
        if self._closed:
            raise TransportError("session is closed")
        if self._broken:
            raise TransportError("session is broken by an earlier transport failure")

        started = time.monotonic()
        try:
            output = transact(
                self._stream,
                command,
                self._cfg.settle_delay if settle_delay is None else settle_delay,
                self._cfg.window if window is None else window,
                redact=redact,
            )
        except TransportError:
            self._broken = True
            raise
        return CommandResult(
            command="<redacted>" if redact else command,
            output=output,
            elapsed_time=time.monotonic() - started,
            error=detect_ios_error(output),
        )

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        try:
            self._stream.close()
        except (OSError, paramiko.SSHException) as exc:
            log.warning("session.close_failed", error=str(exc))
        log.info("session.closed")


def _connect(cfg: Settings) -> paramiko.SSHClient:
    client = paramiko.SSHClient()
    client.set_missing_host_key_policy(paramiko.AutoAddPolicy())
    client.connect(
        cfg.host,
        port=cfg.port,
        username=cfg.username,
        password=cfg.password,
        timeout=cfg.connect_timeout,
        look_for_keys=False,
        allow_agent=False,
    )
    return client


def open_session(cfg: Settings | None = None) -> SwitchSession:
    """Connect to the switch and return a session on a fresh shell.

    The TCP/SSH connect is retried ``connect_retries`` times; nothing
    after the shell is open is retried.
    """
    cfg = cfg or settings
    attempts = max(cfg.connect_retries, 1)
    client: paramiko.SSHClient | None = None

    for attempt in range(1, attempts + 1):
        log.info("ssh.connecting", host=cfg.host, port=cfg.port, attempt=attempt)
        try:
            client = _connect(cfg)
            break
        except paramiko.AuthenticationException as exc:
            raise TransportError(f"authentication to {cfg.host} failed") from exc
        except (OSError, paramiko.SSHException) as exc:
            log.warning("ssh.connect_failed", host=cfg.host, attempt=attempt, error=str(exc))
            if attempt == attempts:
                raise TransportError(
                    f"could not connect to {cfg.host}:{cfg.port}: {exc}",
                ) from exc
            time.sleep(cfg.connect_retry_delay)

    assert client is not None
    try:
        channel = client.invoke_shell()
    except paramiko.SSHException as exc:
        client.close()
        raise TransportError(f"could not open shell on {cfg.host}: {exc}") from exc

    session = SwitchSession(ParamikoShellStream(channel, client), cfg)
    banner = session.send("")
    log.info("ssh.connected", host=cfg.host, banner_bytes=len(banner.output))
    return session
