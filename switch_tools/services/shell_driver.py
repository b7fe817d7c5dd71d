"""Request/response transactions over an interactive shell stream.

An interactive CLI shell offers no framing: no length prefix, no end
marker, and the prompt is not a reliable delimiter across CLI modes.  The
only synchronisation available is the wall clock, so a transaction writes
one line, waits a settle delay, then drains whatever arrives until a fixed
collection window closes.  Successful transactions therefore always cost
the full window unless an optional prompt pattern is supplied.

A stream carries at most one transaction at a time.  Nothing here locks;
:class:`~switch_tools.services.session_manager.SwitchSessionManager`
serialises callers.
"""

from __future__ import annotations

import abc
import re
import select
import time
from typing import Optional

import paramiko

from switch_tools.utils.logging import get_logger

log = get_logger(__name__)

POLL_INTERVAL = 0.02
RECV_CHUNK = 65535


class TransportError(Exception):
    """The shell stream is closed or broken.

    Terminal for the whole session: the device state after a failed write
    is unknown, so the transaction is never retried.
    """


# ── stream abstraction ────────────────────────────────────────────────────


class ShellStream(abc.ABC):
    """Bidirectional byte channel to a remote interactive shell."""

    @abc.abstractmethod
    def write(self, data: bytes) -> None: ...

    @abc.abstractmethod
    def flush(self) -> None: ...

    @abc.abstractmethod
    def has_data_available(self) -> bool: ...

    @abc.abstractmethod
    def read_available(self) -> bytes: ...

    @abc.abstractmethod
    def close(self) -> None: ...

    def wait_for_data(self, timeout: float) -> bool:
        """Block up to *timeout* seconds until data is available.

        The default polls :meth:`has_data_available` with short sleeps.
        Streams backed by a selectable object should override this.
        """
        deadline = time.monotonic() + timeout
        while True:
            if self.has_data_available():
                return True
            remaining = deadline - time.monotonic()
            if remaining <= 0:
                return False
            time.sleep(min(POLL_INTERVAL, remaining))


class ParamikoShellStream(ShellStream):
    """:class:`ShellStream` over a paramiko channel from ``invoke_shell()``."""

    def __init__(
        self,
        channel: paramiko.Channel,
        client: Optional[paramiko.SSHClient] = None,
    ) -> None:
        self._channel = channel
        self._client = client
        # Interactive shells have no separate stderr worth keeping apart
        self._channel.set_combine_stderr(True)

    def _check_open(self) -> None:
        if self._channel.closed:
            raise TransportError("shell channel is closed")

    def write(self, data: bytes) -> None:
        self._check_open()
        try:
            self._channel.sendall(data)
        except (OSError, paramiko.SSHException) as exc:
            raise TransportError(f"shell write failed: {exc}") from exc

    def flush(self) -> None:
        # sendall() only returns once every byte is handed to the transport
        self._check_open()

    def has_data_available(self) -> bool:
        self._check_open()
        return self._channel.recv_ready()

    def read_available(self) -> bytes:
        self._check_open()
        buf = b""
        try:
            while self._channel.recv_ready():
                chunk = self._channel.recv(RECV_CHUNK)
                if not chunk:
                    raise TransportError("shell channel closed by remote")
                buf += chunk
        except (OSError, paramiko.SSHException) as exc:
            raise TransportError(f"shell read failed: {exc}") from exc
        return buf

    def wait_for_data(self, timeout: float) -> bool:
        self._check_open()
        if self._channel.recv_ready():
            return True
        try:
            readable, _, _ = select.select([self._channel], [], [], max(timeout, 0.0))
        except (OSError, ValueError) as exc:
            raise TransportError(f"shell select failed: {exc}") from exc
        if not readable:
            return False
        if self._channel.recv_ready():
            return True
        # Readable without data means EOF
        if self._channel.eof_received or self._channel.closed:
            raise TransportError("shell channel closed by remote")
        # Selectable for some other reason; back off instead of spinning
        time.sleep(min(POLL_INTERVAL, max(timeout, 0.0)))
        return False

    def close(self) -> None:
        self._channel.close()
        if self._client is not None:
            self._client.close()


# ── transaction ───────────────────────────────────────────────────────────


def _decode(chunks: list[bytes], encoding: str) -> str:
    return b"".join(chunks).decode(encoding, errors="replace")


def transact(
    stream: ShellStream,
    command: str,
    settle_delay: float,
    max_window: float,
    *,
    prompt: Optional[re.Pattern[str]] = None,
    encoding: str = "utf-8",
    redact: bool = False,
) -> str:
    """Send *command* and collect everything the device prints back.

    An empty *command* sends nothing and only collects pending output
    (banners, a password prompt).  After the write the call sleeps
    *settle_delay* seconds, then drains the stream until *max_window*
    seconds have passed, whether or not the device has gone quiet.  When
    *prompt* is given the drain stops early once the collected text
    matches it.

    Returns the collected text; an empty string is a valid result.
    Raises :class:`TransportError` if the stream is broken.  A failed
    write never proceeds to reading.  A *command* containing a line break
    raises ValueError before anything is written, since the shell would
    run each line as its own command.
    """
    if "\n" in command or "\r" in command:
        raise ValueError("command must be a single line")

    started = time.monotonic()
    shown = "<redacted>" if redact else command

    if command:
        try:
            stream.write(f"{command}\n".encode(encoding))
            stream.flush()
        except TransportError:
            log.error("shell.write_failed", command=shown)
            raise
        except (OSError, EOFError) as exc:
            log.error("shell.write_failed", command=shown, error=str(exc))
            raise TransportError(f"shell write failed: {exc}") from exc

    if settle_delay > 0:
        time.sleep(settle_delay)

    chunks: list[bytes] = []
    deadline = time.monotonic() + max_window
    try:
        while True:
            remaining = deadline - time.monotonic()
            if remaining <= 0:
                break
            if stream.wait_for_data(remaining):
                chunks.append(stream.read_available())
                if prompt is not None and prompt.search(_decode(chunks, encoding)):
                    break
        # Bytes that landed exactly on the window edge
        if stream.has_data_available():
            chunks.append(stream.read_available())
    except TransportError:
        log.error("shell.read_failed", command=shown)
        raise
    except (OSError, EOFError) as exc:
        log.error("shell.read_failed", command=shown, error=str(exc))
        raise TransportError(f"shell read failed: {exc}") from exc

    text = _decode(chunks, encoding)
    log.debug(
        "shell.transact",
        command=shown,
        received=len(text),
        elapsed=round(time.monotonic() - started, 3),
    )
    return text
