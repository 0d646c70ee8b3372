"""Exception hierarchy for the match engine.

Initialization errors (malformed map, spawn failure) are fatal to a match.
Order and protocol errors are local to one player: the orchestrator logs
them and drops the offending player.
"""


class PlanetWarsError(Exception):
    """Base class for all match engine errors."""


class MalformedStateError(PlanetWarsError, ValueError):
    """Raised when a Point-in-Time game state cannot be parsed."""

    def __init__(self, message: str, line_number: int | None = None):
        self.line_number = line_number
        if line_number is not None:
            message = f"line {line_number}: {message}"
        super().__init__(message)


class ProcessSpawnError(PlanetWarsError):
    """Raised when a player program cannot be started."""

    def __init__(self, command: str, reason: str):
        self.command = command
        self.reason = reason
        super().__init__(f"failed to start client: {command} ({reason})")


class OrderError(PlanetWarsError):
    """Base class for orders that get a player dropped."""

    def __init__(self, player_id: int, message: str):
        self.player_id = player_id
        self.message = message
        super().__init__(message)


class MalformedOrderError(OrderError):
    """Order line is not exactly three integer tokens."""


class IllegalOrderError(OrderError):
    """Order is well-formed but not allowed in the current state."""


class ProtocolError(PlanetWarsError):
    """Base class for failed exchanges with a player process."""


class ProtocolTimeoutError(ProtocolError):
    """Player did not send its terminator line in time."""


class ProtocolWriteError(ProtocolError):
    """Game state could not be written to the player's input stream."""


class ProtocolClosedError(ProtocolError):
    """Player's output stream ended, or the session can no longer exchange."""


class ExchangeInProgressError(ProtocolError):
    """A second exchange was attempted while one is still outstanding."""


class InvariantViolationError(PlanetWarsError):
    """Raised when a time step leaves the game state inconsistent."""
