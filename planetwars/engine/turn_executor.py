"""Main time-step orchestrator.

This module coordinates the simulation phases in the correct order:
1. Production (Phase 1)
2. Fleet Movement (Phase 2)
3. Battle Resolution (Phase 3)
4. Replay Recording (Phase 4)

Orders are applied between time steps, as soon as a player's response has
been received. Victory is checked by the caller after every step.

Architecture:
Each phase is an independent, composable method so it can be tested on its
own. ``execute_time_step`` composes them in order.
"""

import logging
from dataclasses import dataclass

from ..errors import InvariantViolationError
from ..models.fleet import Fleet
from ..models.game import GameState
from ..utils.serialization import render_turn_playback
from .combat import BattleEvent, process_combat
from .movement import process_fleet_movement
from .orders import drop_player, issue_order_str
from .production import process_production
from .victory import check_winner

logger = logging.getLogger(__name__)


@dataclass
class StepResults:
    """Events produced by one time step.

    Attributes:
        turn: Value of num_turns after the step
        arrivals: Number of fleets that reached their destination
        battle_events: Battles resolved this step
    """

    turn: int
    arrivals: int
    battle_events: list[BattleEvent]


class TurnExecutor:
    """Applies orders and advances the game state one time step at a time."""

    # =========================================================================
    # INDEPENDENT PHASE METHODS
    # =========================================================================

    def execute_phase_production(self, game: GameState) -> GameState:
        """Execute Phase 1: every owned planet gains its growth rate."""
        return process_production(game)

    def execute_phase_movement(self, game: GameState) -> tuple[GameState, list[Fleet]]:
        """Execute Phase 2: advance every fleet, returning the arrivals."""
        return process_fleet_movement(game)

    def execute_phase_combat(self, game: GameState) -> tuple[GameState, list[BattleEvent]]:
        """Execute Phase 3: resolve battles and discard arrived fleets."""
        return process_combat(game)

    def execute_phase_playback(self, game: GameState) -> GameState:
        """Execute Phase 4: append the post-step snapshot to the replay."""
        game.append_playback(render_turn_playback(game))
        return game

    # =========================================================================
    # ORCHESTRATION
    # =========================================================================

    def execute_time_step(self, game: GameState) -> tuple[GameState, StepResults]:
        """Execute one complete time step.

        Args:
            game: Current game state

        Returns:
            Tuple of (updated game state, step results)

        Raises:
            InvariantViolationError: If any ship count went negative
        """
        game = self.execute_phase_production(game)
        game, arrived = self.execute_phase_movement(game)
        game, battle_events = self.execute_phase_combat(game)
        self._check_invariants(game)
        game = self.execute_phase_playback(game)
        game.num_turns += 1

        return game, StepResults(
            turn=game.num_turns, arrivals=len(arrived), battle_events=battle_events
        )

    def apply_order(self, game: GameState, player_id: int, line: str) -> Fleet:
        """Apply one order line from a player.

        Raises:
            MalformedOrderError: If the line is not three integer tokens
            IllegalOrderError: If the order is not allowed
        """
        return issue_order_str(game, player_id, line)

    def drop_player(self, game: GameState, player_id: int) -> None:
        logger.warning(f"Dropping player {player_id}")
        drop_player(game, player_id)

    def check_winner(self, game: GameState, max_turns: int) -> int:
        """Winner id, 0 for a draw, or -1 while the match goes on."""
        return check_winner(game, max_turns)

    def _check_invariants(self, game: GameState) -> None:
        for planet in game.planets:
            if planet.ships < 0:
                raise InvariantViolationError(
                    f"Planet {planet.id} has {planet.ships} ships after turn {game.num_turns + 1}"
                )
        for fleet in game.fleets:
            if fleet.ships < 0:
                raise InvariantViolationError(
                    f"Fleet {fleet.source} -> {fleet.dest} of player {fleet.owner} has "
                    f"{fleet.ships} ships after turn {game.num_turns + 1}"
                )
