"""Append-only match log file.

The match log records what each player sent and why players were dropped,
one message per line. It is a plain ``logging`` file handler on a logger of
its own, so match records never mix with the engine's diagnostic output.
Failing to write the log never interrupts a match.
"""

import itertools
import logging
from typing import Optional

logger = logging.getLogger(__name__)

_match_ids = itertools.count(1)


class _QuietFileHandler(logging.FileHandler):
    """File handler that ignores write failures."""

    def handleError(self, record: logging.LogRecord) -> None:  # noqa: N802
        pass


class MatchLog:
    """Plain text log of one match.

    Args:
        path: File to write; truncated when the match starts. None disables
            the log.
    """

    def __init__(self, path: Optional[str]):
        self.path = path
        self._logger = logging.getLogger(f"planetwars.match.{next(_match_ids)}")
        self._logger.setLevel(logging.INFO)
        self._logger.propagate = False
        self._handler: Optional[logging.Handler] = None

        if path is None:
            return
        try:
            handler = _QuietFileHandler(path, mode="w", encoding="utf-8")
        except OSError as e:
            logger.warning(f"Match log {path} unavailable: {e}")
            return
        handler.setFormatter(logging.Formatter("%(message)s"))
        self._logger.addHandler(handler)
        self._handler = handler

    @property
    def enabled(self) -> bool:
        return self._handler is not None

    def write(self, message: str) -> None:
        if self._handler is not None:
            self._logger.info(message)

    def close(self) -> None:
        if self._handler is None:
            return
        self._logger.removeHandler(self._handler)
        self._handler.close()
        self._handler = None
