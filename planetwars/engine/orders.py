"""Order issuance and player drops.

Orders are applied immediately, one at a time, in the order the player
sent them. Any invalid order gets the sending player dropped, which is
the caller's job; the order itself never has a partial effect.
"""

from ..errors import IllegalOrderError
from ..models.fleet import Fleet
from ..models.game import GameState
from ..models.order import parse_order
from ..utils.constants import NEUTRAL


def issue_order(
    game: GameState, player_id: int, source_id: int, dest_id: int, num_ships: int
) -> Fleet:
    """Send ships from one planet to another.

    Deducts the ships from the source planet and creates a fleet whose trip
    length is the rounded-up distance between the planets.

    Args:
        game: Current game state
        player_id: Player issuing the order
        source_id: Planet the ships leave from
        dest_id: Planet the ships travel to
        num_ships: Ships to send, between 0 and the source's ship count

    Returns:
        The new fleet, already appended to game.fleets

    Raises:
        IllegalOrderError: If a planet does not exist, the player does not
            own the source, or the ship count is out of range
    """
    if not game.has_planet(source_id):
        raise IllegalOrderError(player_id, f"source planet {source_id} does not exist")
    if not game.has_planet(dest_id):
        raise IllegalOrderError(player_id, f"destination planet {dest_id} does not exist")

    source = game.get_planet(source_id)
    if source.owner != player_id or num_ships < 0 or num_ships > source.ships:
        raise IllegalOrderError(
            player_id,
            f"source.owner = {source.owner}, player_id = {player_id}, "
            f"num_ships = {num_ships}, source.ships = {source.ships}",
        )

    source.remove_ships(num_ships)
    distance = game.distance(source_id, dest_id)
    fleet = Fleet(
        owner=player_id,
        ships=num_ships,
        source=source_id,
        dest=dest_id,
        total_trip_length=distance,
        turns_remaining=distance,
    )
    game.fleets.append(fleet)
    return fleet


def issue_order_str(game: GameState, player_id: int, line: str) -> Fleet:
    """Apply an order given as ``<source> <dest> <ships>``.

    Raises:
        MalformedOrderError: If the line is not three integer tokens
        IllegalOrderError: If the order is not allowed
    """
    order = parse_order(player_id, line)
    return issue_order(game, player_id, order.source, order.dest, order.ships)


def drop_player(game: GameState, player_id: int) -> None:
    """Remove a player from contention.

    Its planets turn neutral and keep their ships; its fleets are killed.
    Dropping a player twice has no further effect.
    """
    for planet in game.planets:
        if planet.owner == player_id:
            planet.owner = NEUTRAL
    for fleet in game.fleets:
        if fleet.owner == player_id:
            fleet.kill()
