"""Phase 1: Ship production.

Every planet owned by a player gains ships equal to its growth rate.
Neutral planets never grow.
"""

from ..models.game import GameState
from ..utils.constants import NEUTRAL


def process_production(game: GameState) -> GameState:
    """Execute Phase 1: Growth.

    Args:
        game: Current game state

    Returns:
        Updated game state with production added
    """
    for planet in game.planets:
        if planet.owner != NEUTRAL:
            planet.add_ships(planet.growth_rate)
    return game
