"""Player process management.

Starts one child process per player command, wires its standard streams to
a ProtocolSession and forwards whatever it prints on stderr to the log.
"""

import logging
import shlex
import subprocess
import threading
from typing import Optional

from ..errors import ProcessSpawnError
from ..utils.constants import PROCESS_SHUTDOWN_GRACE
from .session import ProtocolSession

logger = logging.getLogger(__name__)


class PlayerProcess:
    """One running player program and its protocol session.

    A player counts as alive until the engine kills it, even if the program
    has already exited on its own; the next exchange then fails and the
    player gets dropped.
    """

    def __init__(self, player_id: int, command: str, proc: subprocess.Popen):
        """Wrap an already started process.

        Args:
            player_id: 1-based player id (spawn order + 1)
            command: Command line the process was started from
            proc: Process with stdin, stdout and stderr pipes in text mode
        """
        self.player_id = player_id
        self.command = command
        self._proc: Optional[subprocess.Popen] = proc
        self.session = ProtocolSession(proc.stdin, proc.stdout, label=f"player{player_id}")
        self._stderr_thread = threading.Thread(
            target=self._forward_stderr,
            args=(proc.stderr,),
            name=f"player{player_id}-stderr",
            daemon=True,
        )
        self._stderr_thread.start()

    @property
    def pid(self) -> Optional[int]:
        return self._proc.pid if self._proc is not None else None

    def is_alive(self) -> bool:
        return self._proc is not None

    def kill(self) -> None:
        """Terminate the process, escalating to SIGKILL if it lingers."""
        if self._proc is None:
            return
        proc = self._proc
        self._proc = None
        self.session.close()

        if proc.poll() is None:
            proc.terminate()
            try:
                proc.wait(timeout=PROCESS_SHUTDOWN_GRACE)
            except subprocess.TimeoutExpired:
                logger.warning(f"Player {self.player_id} ignored terminate, killing")
                proc.kill()
                proc.wait()

        if proc.stdin is not None:
            try:
                proc.stdin.close()
            except (OSError, ValueError):
                # Closing flushes; the pipe may already be broken
                pass

    def _forward_stderr(self, stream) -> None:
        if stream is None:
            return
        try:
            for line in stream:
                logger.info(f"Player {self.player_id}: {line.rstrip()}")
        except (OSError, ValueError):
            return


def spawn_player(command: str, player_id: int) -> PlayerProcess:
    """Start a player program.

    Args:
        command: Command line, split with shell quoting rules
        player_id: 1-based player id

    Returns:
        Running PlayerProcess

    Raises:
        ProcessSpawnError: If the command is empty or cannot be started
    """
    try:
        argv = shlex.split(command)
    except ValueError as e:
        raise ProcessSpawnError(command, str(e)) from e
    if not argv:
        raise ProcessSpawnError(command, "empty command")

    try:
        proc = subprocess.Popen(
            argv,
            stdin=subprocess.PIPE,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            text=True,
            bufsize=1,
        )
    except (OSError, ValueError) as e:
        raise ProcessSpawnError(command, str(e)) from e

    logger.debug(f"Started player {player_id} (pid {proc.pid}): {command}")
    return PlayerProcess(player_id, command, proc)
