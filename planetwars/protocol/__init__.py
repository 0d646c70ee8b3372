"""Player process plumbing and line protocol."""

from .client import PlayerProcess, spawn_player
from .session import ProtocolSession, SessionState

__all__ = [
    "PlayerProcess",
    "ProtocolSession",
    "SessionState",
    "spawn_player",
]
