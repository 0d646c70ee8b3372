"""Utility functions and constants for the match engine."""

from .constants import (
    DEFAULT_MAX_TURNS,
    DEFAULT_TURN_TIMEOUT_MS,
    DRAW,
    MESSAGE_TERMINATOR,
    NEUTRAL,
    NO_DECISION,
    PROCESS_SHUTDOWN_GRACE,
    SELF_ID,
)
from .distance import trip_length

__all__ = [
    "DEFAULT_MAX_TURNS",
    "DEFAULT_TURN_TIMEOUT_MS",
    "DRAW",
    "MESSAGE_TERMINATOR",
    "NEUTRAL",
    "NO_DECISION",
    "PROCESS_SHUTDOWN_GRACE",
    "SELF_ID",
    "trip_length",
]
