"""Match orchestration."""

from .config import MatchConfig
from .orchestrator import MatchOrchestrator, MatchPhase, MatchResult

__all__ = [
    "MatchConfig",
    "MatchOrchestrator",
    "MatchPhase",
    "MatchResult",
]
