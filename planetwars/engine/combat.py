"""Phase 3: Battle resolution.

For each planet, the defending garrison and every fleet that has arrived
there are pooled per owner. The largest pool wins and keeps the difference
to the second largest pool; an exact tie for the top leaves the planet with
its old owner and no ships.
"""

import logging
from collections import defaultdict
from dataclasses import dataclass
from typing import Dict, List, Optional

from ..models.fleet import Fleet
from ..models.game import GameState
from ..models.planet import Planet
from ..utils.constants import NEUTRAL

logger = logging.getLogger(__name__)


@dataclass
class BattleResult:
    """Outcome of pooling all forces at one planet.

    Attributes:
        winner: Owner who takes the planet, or None on a tie for the top
        survivors: Ships left on the planet
    """

    winner: Optional[int]
    survivors: int


@dataclass
class BattleEvent:
    """Record of a battle that occurred at a planet.

    Attributes:
        planet_id: Planet where the battle happened
        contenders: Ships per owner, garrison included
        owner_before: Planet owner before the battle
        owner_after: Planet owner after the battle
        ships_after: Ships left on the planet
    """

    planet_id: int
    contenders: Dict[int, int]
    owner_before: int
    owner_after: int
    ships_after: int


def resolve_battle(contenders: Dict[int, int]) -> BattleResult:
    """Resolve a battle between any number of owners.

    Owners are ranked by ship count, highest first, then by lowest owner id.
    The tie-break only decides the ranking; whenever the top two counts are
    equal nobody wins.

    Args:
        contenders: Mapping of owner id to pooled ship count

    Returns:
        BattleResult with the winning owner (None on a tie) and survivors
    """
    ranked = sorted(contenders.items(), key=lambda item: (-item[1], item[0]))
    if not ranked:
        return BattleResult(winner=None, survivors=0)

    winner, winner_ships = ranked[0]
    second_ships = ranked[1][1] if len(ranked) > 1 else 0

    if winner_ships > second_ships:
        return BattleResult(winner=winner, survivors=winner_ships - second_ships)
    return BattleResult(winner=None, survivors=0)


def process_combat(game: GameState) -> tuple[GameState, List[BattleEvent]]:
    """Execute Phase 3: Battle Resolution.

    Arrived fleets are consumed and the fleet list is rebuilt from the
    fleets still in flight. Killed fleets are discarded without fighting.

    Args:
        game: Current game state

    Returns:
        Tuple of (updated game state, battle events)
    """
    arrivals: Dict[int, List[Fleet]] = defaultdict(list)
    in_flight = []
    for fleet in game.fleets:
        if not fleet.has_arrived:
            in_flight.append(fleet)
        elif fleet.owner != NEUTRAL:
            arrivals[fleet.dest].append(fleet)
    game.fleets = in_flight

    events = []
    for planet in game.planets:
        fleets = arrivals.get(planet.id)
        if fleets:
            events.append(_fight_battle(planet, fleets))
    return game, events


def _fight_battle(planet: Planet, fleets: List[Fleet]) -> BattleEvent:
    contenders = {planet.owner: planet.ships}
    for fleet in fleets:
        contenders[fleet.owner] = contenders.get(fleet.owner, 0) + fleet.ships

    owner_before = planet.owner
    result = resolve_battle(contenders)
    if result.winner is not None:
        planet.owner = result.winner
    planet.ships = result.survivors

    logger.debug(
        f"Battle at planet {planet.id}: {contenders} -> owner {planet.owner}, "
        f"{planet.ships} ships"
    )
    return BattleEvent(
        planet_id=planet.id,
        contenders=contenders,
        owner_before=owner_before,
        owner_after=planet.owner,
        ships_after=planet.ships,
    )
