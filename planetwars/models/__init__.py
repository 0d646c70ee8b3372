"""Data models for the match engine."""

from .fleet import Fleet
from .game import GameState
from .order import Order, parse_order
from .planet import Planet

__all__ = [
    "Planet",
    "Fleet",
    "Order",
    "GameState",
    "parse_order",
]
