"""Game state serialization to/from the Point-in-Time text format.

One entity per line, ``#`` starts a comment, blank lines are ignored::

    P <x> <y> <owner> <ships> <growth>
    F <owner> <ships> <source> <dest> <total_trip> <turns_remaining>

Planet ids are assigned by order of appearance. The same format is used
for map files and for the state sent to players each turn, where owner ids
are rotated so the receiving player always sees itself as player 1.

This module also produces the replay encoding consumed by visualizers.
"""

from pathlib import Path

from ..errors import MalformedStateError
from ..models.fleet import Fleet
from ..models.game import GameState
from ..models.planet import Planet
from .constants import SELF_ID

PLANET_TOKEN = "P"
FLEET_TOKEN = "F"


def pov_switch(pov: int, owner: int) -> int:
    """Rotate an owner id into a player's point of view.

    1. pov < 0: no switching, return owner unchanged
    2. owner == pov: return 1 so every player sees itself as player 1
    3. owner == 1: return pov so the real player 1 takes pov's number
    4. otherwise: unchanged

    Applying the switch twice with the same pov returns the original id.
    """
    if pov < 0:
        return owner
    if owner == pov:
        return SELF_ID
    if owner == SELF_ID:
        return pov
    return owner


def parse_entities(text: str) -> tuple[list[Planet], list[Fleet]]:
    """Parse Point-in-Time text into planets and fleets.

    Args:
        text: Map or state text

    Returns:
        Tuple of (planets in id order, fleets in order of appearance)

    Raises:
        MalformedStateError: On a wrong token count, an unknown leading
            token, a non-numeric value, a negative count, or a fleet that
            references a planet that does not exist
    """
    planets: list[Planet] = []
    fleets: list[Fleet] = []

    for line_number, raw_line in enumerate(text.split("\n"), start=1):
        line = raw_line.split("#", 1)[0]
        tokens = line.split()
        if not tokens:
            continue

        kind = tokens[0]
        try:
            if kind == PLANET_TOKEN:
                if len(tokens) != 6:
                    raise MalformedStateError(
                        f"planet line needs 6 tokens, got {len(tokens)}", line_number
                    )
                planets.append(
                    Planet(
                        id=len(planets),
                        x=float(tokens[1]),
                        y=float(tokens[2]),
                        owner=int(tokens[3]),
                        ships=int(tokens[4]),
                        growth_rate=int(tokens[5]),
                    )
                )
            elif kind == FLEET_TOKEN:
                if len(tokens) != 7:
                    raise MalformedStateError(
                        f"fleet line needs 7 tokens, got {len(tokens)}", line_number
                    )
                fleets.append(
                    Fleet(
                        owner=int(tokens[1]),
                        ships=int(tokens[2]),
                        source=int(tokens[3]),
                        dest=int(tokens[4]),
                        total_trip_length=int(tokens[5]),
                        turns_remaining=int(tokens[6]),
                    )
                )
            else:
                raise MalformedStateError(f"unknown line type {kind!r}", line_number)
        except MalformedStateError:
            raise
        except ValueError as e:
            raise MalformedStateError(str(e), line_number) from e

    for fleet in fleets:
        if fleet.source >= len(planets) or fleet.dest >= len(planets):
            raise MalformedStateError(
                f"fleet references unknown planet ({fleet.source} -> {fleet.dest}, "
                f"{len(planets)} planets)"
            )

    return planets, fleets


def parse_game_state(text: str) -> GameState:
    """Build a fresh GameState from Point-in-Time text.

    The replay buffer is seeded with the initial planet snapshot.
    """
    planets, fleets = parse_entities(text)
    game = GameState(planets=planets, fleets=fleets)
    game.append_playback(render_initial_playback(game))
    return game


def load_game_state(filepath: str) -> GameState:
    """Load a map file and parse it into a GameState.

    Raises:
        MalformedStateError: If the file cannot be read or parsed
    """
    try:
        text = Path(filepath).read_text()
    except OSError as e:
        raise MalformedStateError(f"cannot read map file {filepath}: {e}") from e
    return parse_game_state(text)


def render_game_state(game: GameState, pov: int = -1) -> str:
    """Serialize the state, optionally rotated into a player's point of view.

    Args:
        game: Current game state
        pov: Player id to render for; negative renders the canonical state

    Returns:
        Point-in-Time text, one newline-terminated line per entity
    """
    lines = []
    for p in game.planets:
        lines.append(
            f"{PLANET_TOKEN} {_format_number(p.x)} {_format_number(p.y)} "
            f"{pov_switch(pov, p.owner)} {p.ships} {p.growth_rate}\n"
        )
    for f in game.fleets:
        lines.append(
            f"{FLEET_TOKEN} {pov_switch(pov, f.owner)} {f.ships} {f.source} {f.dest} "
            f"{f.total_trip_length} {f.turns_remaining}\n"
        )
    return "".join(lines)


def render_initial_playback(game: GameState) -> str:
    """Replay header: ``x,y,owner,ships,growth`` per planet joined by ``:``, then ``|``.

    Fleets present in the initial state are not part of the header.
    """
    planets = ":".join(
        f"{_format_number(p.x)},{_format_number(p.y)},{p.owner},{p.ships},{p.growth_rate}"
        for p in game.planets
    )
    return planets + "|"


def render_turn_playback(game: GameState) -> str:
    """Replay segment for one time step, terminated with ``:``.

    Planets as ``owner.ships``, then fleets as
    ``owner.ships.source.dest.total_trip.turns_remaining``, comma separated.
    """
    entries = [f"{p.owner}.{p.ships}" for p in game.planets]
    entries.extend(
        f"{f.owner}.{f.ships}.{f.source}.{f.dest}.{f.total_trip_length}.{f.turns_remaining}"
        for f in game.fleets
    )
    return ",".join(entries) + ":"


def _format_number(value: float) -> str:
    """Format a coordinate without a trailing ``.0`` for whole numbers."""
    value = float(value)
    if value.is_integer():
        return str(int(value))
    return repr(value)
