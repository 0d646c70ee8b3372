"""Phase 2: Fleet movement.

Every fleet moves one turn closer to its destination. Fleets whose
turns_remaining reaches 0 have arrived and are resolved in Phase 3 of the
same time step.
"""

from ..models.fleet import Fleet
from ..models.game import GameState


def process_fleet_movement(game: GameState) -> tuple[GameState, list[Fleet]]:
    """Execute Phase 2: Fleet Movement.

    Args:
        game: Current game state

    Returns:
        Tuple of (updated game state, fleets that have arrived)
    """
    arrived = []
    for fleet in game.fleets:
        fleet.time_step()
        if fleet.has_arrived:
            arrived.append(fleet)
    return game, arrived
