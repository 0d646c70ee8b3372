"""Phase 4: Victory condition checking.

This module handles:
1. Elimination: the last player with planets or fleets wins
2. Turn limit: once the limit is passed, the player with most ships wins
3. Draws: nobody left, or a tie for most ships at the turn limit
"""

from ..models.game import GameState
from ..utils.constants import DRAW, NO_DECISION


def check_winner(game: GameState, max_turns: int) -> int:
    """Decide whether the match is over.

    Args:
        game: Current game state
        max_turns: Turn limit; the match ends once num_turns exceeds it

    Returns:
        Winning player id, DRAW (0), or NO_DECISION (-1) if the match goes on
    """
    remaining = game.remaining_players()
    if not remaining:
        return DRAW

    if game.num_turns > max_turns:
        leader = DRAW
        most_ships = -1
        for player_id in sorted(remaining):
            ships = game.num_ships(player_id)
            if ships == most_ships:
                leader = DRAW
            elif ships > most_ships:
                leader = player_id
                most_ships = ships
        return leader

    if len(remaining) == 1:
        return next(iter(remaining))
    return NO_DECISION
