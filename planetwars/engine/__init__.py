"""Game engine components."""

from .combat import BattleEvent, BattleResult, resolve_battle
from .orders import drop_player, issue_order, issue_order_str
from .turn_executor import StepResults, TurnExecutor
from .victory import check_winner

__all__ = [
    "BattleEvent",
    "BattleResult",
    "StepResults",
    "TurnExecutor",
    "check_winner",
    "drop_player",
    "issue_order",
    "issue_order_str",
    "resolve_battle",
]
