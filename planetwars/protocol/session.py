"""Line protocol with one player process.

Each turn the engine writes the rendered game state followed by a ``go``
line, then collects the player's lines until the player sends its own
``go``. The terminator is compared trimmed and case-insensitively; the
other lines are returned untouched for order parsing.

Two background threads do the blocking I/O: one writes to the player's
input, the other drains its output into a queue. The exchange deadline
covers both, so a player that stops reading its input times out like one
that never answers. Once an exchange times out, the session is finished:
anything the player sends afterwards is discarded.
"""

import logging
import threading
import time
from enum import Enum
from queue import Empty, Queue
from typing import List, Optional, TextIO

from ..errors import (
    ExchangeInProgressError,
    ProtocolClosedError,
    ProtocolTimeoutError,
    ProtocolWriteError,
)
from ..utils.constants import MESSAGE_TERMINATOR

logger = logging.getLogger(__name__)

_EOF = object()


class _PendingWrite:
    """Message handed to the writer thread."""

    def __init__(self, text: str):
        self.text = text
        self.error: Optional[Exception] = None
        self.done = threading.Event()


class SessionState(Enum):
    """Lifecycle of a protocol session."""

    IDLE = "idle"
    AWAITING_RESPONSE = "awaiting_response"
    COMPLETED = "completed"
    TIMED_OUT = "timed_out"
    WRITE_FAILED = "write_failed"
    CLOSED = "closed"


TERMINAL_STATES = frozenset(
    {SessionState.TIMED_OUT, SessionState.WRITE_FAILED, SessionState.CLOSED}
)


class ProtocolSession:
    """Exchanges game states and orders with one player process.

    The session exclusively owns the two streams it is given. At most one
    exchange can be outstanding at a time.
    """

    def __init__(
        self,
        stdin: TextIO,
        stdout: TextIO,
        label: str = "player",
        terminator: str = MESSAGE_TERMINATOR,
    ):
        """Initialize the session and start reading the player's output.

        Args:
            stdin: Player's input stream (the engine writes here)
            stdout: Player's output stream (the engine reads here)
            label: Name used in log messages and thread names
            terminator: Line that ends a message in both directions
        """
        self.label = label
        self.terminator = terminator
        self.state = SessionState.IDLE
        self._stdin = stdin
        self._stdout = stdout
        self._lines: Queue = Queue()
        self._lock = threading.Lock()
        self._discard = threading.Event()
        self._reader = threading.Thread(
            target=self._read_lines, name=f"{label}-stdout", daemon=True
        )
        self._reader.start()
        self._outbox: Queue = Queue()
        self._writer = threading.Thread(
            target=self._write_messages, name=f"{label}-stdin", daemon=True
        )
        self._writer.start()

    def exchange(self, message: str, timeout_ms: int) -> List[str]:
        """Send a message and collect the player's reply.

        Args:
            message: Rendered game state, newline terminated
            timeout_ms: Wall-clock budget for writing the message and
                receiving the reply, in milliseconds

        Returns:
            Lines received before the terminator, in receive order

        Raises:
            ExchangeInProgressError: If another exchange is outstanding
            ProtocolWriteError: If the message could not be written
            ProtocolTimeoutError: If the message was not taken or the
                terminator did not arrive in time
            ProtocolClosedError: If the player's output ended, or the session
                already failed
        """
        if not self._lock.acquire(blocking=False):
            raise ExchangeInProgressError(f"{self.label}: exchange already in progress")
        try:
            if self.state in TERMINAL_STATES:
                raise ProtocolClosedError(f"{self.label}: session is {self.state.value}")

            deadline = time.monotonic() + timeout_ms / 1000.0
            self.state = SessionState.AWAITING_RESPONSE
            self._discard_stale_lines()
            self._write(message + self.terminator + "\n", deadline)
            return self._collect_reply(deadline)
        finally:
            self._lock.release()

    def close(self) -> None:
        """Stop accepting lines from the player."""
        self._discard.set()
        self.state = SessionState.CLOSED
        self._outbox.put(_EOF)

    def _write(self, text: str, deadline: float) -> None:
        pending = _PendingWrite(text)
        self._outbox.put(pending)
        if not pending.done.wait(max(deadline - time.monotonic(), 0)):
            self.state = SessionState.TIMED_OUT
            self._discard.set()
            raise ProtocolTimeoutError(f"{self.label}: player is not reading its input")
        if pending.error is not None:
            self.state = SessionState.WRITE_FAILED
            raise ProtocolWriteError(
                f"{self.label}: failed to write to stdin: {pending.error}"
            ) from pending.error

    def _write_messages(self) -> None:
        while True:
            pending = self._outbox.get()
            if pending is _EOF:
                return
            try:
                self._stdin.write(pending.text)
                self._stdin.flush()
            except (OSError, ValueError) as e:
                pending.error = e
            finally:
                pending.done.set()

    def _collect_reply(self, deadline: float) -> List[str]:
        lines = []

        while True:
            remaining = deadline - time.monotonic()
            try:
                if remaining <= 0:
                    raise Empty
                line = self._lines.get(timeout=remaining)
            except Empty:
                self.state = SessionState.TIMED_OUT
                self._discard.set()
                raise ProtocolTimeoutError(
                    f"{self.label}: no '{self.terminator}' before the turn deadline"
                ) from None

            if line is _EOF:
                self.state = SessionState.CLOSED
                raise ProtocolClosedError(f"{self.label}: output closed before '{self.terminator}'")

            if line.strip().lower() == self.terminator:
                self.state = SessionState.COMPLETED
                return lines
            lines.append(line)

    def _discard_stale_lines(self) -> None:
        """Drop lines the player sent outside of an exchange."""
        while True:
            try:
                line = self._lines.get_nowait()
            except Empty:
                return
            if line is _EOF:
                self.state = SessionState.CLOSED
                raise ProtocolClosedError(f"{self.label}: output closed")
            logger.debug(f"{self.label}: ignoring line sent out of turn: {line!r}")

    def _read_lines(self) -> None:
        try:
            for raw in self._stdout:
                if self._discard.is_set():
                    continue
                self._lines.put(raw.rstrip("\r\n"))
        except (OSError, ValueError) as e:
            logger.debug(f"{self.label}: stopped reading output: {e}")
        finally:
            self._lines.put(_EOF)
