"""Order data model for player commands."""

from dataclasses import dataclass

from ..errors import MalformedOrderError


@dataclass(frozen=True)
class Order:
    """Represents a movement order sent by a player.

    Players send one order per line as ``<source> <dest> <ships>``. Whether
    the order is legal is only known against the current game state, so
    this model checks nothing beyond the token shape.
    """

    source: int  # Source planet id
    dest: int  # Destination planet id
    ships: int  # Number of ships to send


def parse_order(player_id: int, line: str) -> Order:
    """Parse the string form of an order.

    Args:
        player_id: Player who sent the line (for error reporting)
        line: Raw order line as received from the player

    Returns:
        Parsed Order

    Raises:
        MalformedOrderError: If the line is not exactly three integer tokens
    """
    tokens = line.split()
    if len(tokens) != 3:
        raise MalformedOrderError(
            player_id,
            f"expected 3 tokens '<source> <dest> <ships>', got {len(tokens)}: {line!r}",
        )
    try:
        source, dest, ships = (int(token) for token in tokens)
    except ValueError:
        raise MalformedOrderError(player_id, f"non-integer token in order: {line!r}") from None
    return Order(source=source, dest=dest, ships=ships)
