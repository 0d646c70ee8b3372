"""Player-side view of a game state.

Contestants receive the state already rotated so that they are player 1,
enemies are players 2 and up, and 0 is neutral. This module parses that
state, answers the usual queries and writes orders back to the engine.
"""

import sys
from typing import Callable, List, Optional, TextIO, Union

from ..models.fleet import Fleet
from ..models.game import GameState
from ..models.planet import Planet
from ..utils.constants import DRAW, MESSAGE_TERMINATOR, NEUTRAL, NO_DECISION, SELF_ID
from ..utils.serialization import parse_entities

PlanetRef = Union[Planet, int]


class PlanetWars:
    """One turn's worth of game state, seen from the player's side."""

    def __init__(self, state_text: str, output: Optional[TextIO] = None):
        """Parse the state sent by the engine.

        Args:
            state_text: Point-in-Time text of the current turn
            output: Stream orders are written to (stdout by default)
        """
        planets, fleets = parse_entities(state_text)
        self.state = GameState(planets=planets, fleets=fleets)
        self._output = output if output is not None else sys.stdout

    # Planets

    def planets(self) -> List[Planet]:
        return list(self.state.planets)

    def get_planet(self, planet_id: int) -> Planet:
        return self.state.get_planet(planet_id)

    def my_planets(self) -> List[Planet]:
        return [p for p in self.state.planets if p.owner == SELF_ID]

    def neutral_planets(self) -> List[Planet]:
        return [p for p in self.state.planets if p.owner == NEUTRAL]

    def enemy_planets(self) -> List[Planet]:
        return [p for p in self.state.planets if p.owner > SELF_ID]

    def not_my_planets(self) -> List[Planet]:
        return [p for p in self.state.planets if p.owner != SELF_ID]

    # Fleets

    def fleets(self) -> List[Fleet]:
        return list(self.state.fleets)

    def my_fleets(self) -> List[Fleet]:
        return [f for f in self.state.fleets if f.owner == SELF_ID]

    def enemy_fleets(self) -> List[Fleet]:
        return [f for f in self.state.fleets if f.owner > SELF_ID]

    # Queries

    def distance(self, source: PlanetRef, dest: PlanetRef) -> int:
        return self.state.distance(_planet_id(source), _planet_id(dest))

    def num_ships(self, player_id: int) -> int:
        return self.state.num_ships(player_id)

    def is_alive(self, player_id: int) -> bool:
        return self.state.is_alive(player_id)

    def winner(self) -> int:
        """Last player standing, 0 if nobody is left, -1 while several remain."""
        remaining = self.state.remaining_players()
        if not remaining:
            return DRAW
        if len(remaining) == 1:
            return next(iter(remaining))
        return NO_DECISION

    # Orders

    def issue_order(self, source: PlanetRef, dest: PlanetRef, num_ships: int) -> None:
        """Send ships from one of your planets to another planet."""
        self._output.write(f"{_planet_id(source)} {_planet_id(dest)} {num_ships}\n")

    def finish_turn(self) -> None:
        """Tell the engine this turn's orders are complete."""
        self._output.write(MESSAGE_TERMINATOR + "\n")
        self._output.flush()


def _planet_id(planet: PlanetRef) -> int:
    return planet.id if isinstance(planet, Planet) else planet


def run(
    do_turn: Callable[[PlanetWars], None],
    stdin: Optional[TextIO] = None,
    stdout: Optional[TextIO] = None,
) -> None:
    """Play a whole match: read states, call do_turn, answer with orders.

    Args:
        do_turn: Strategy called once per turn
        stdin: Stream the engine writes states to (stdin by default)
        stdout: Stream orders are written to (stdout by default)
    """
    stdin = stdin if stdin is not None else sys.stdin
    stdout = stdout if stdout is not None else sys.stdout

    buffer: List[str] = []
    for raw in stdin:
        line = raw.strip()
        if line.lower() == MESSAGE_TERMINATOR:
            pw = PlanetWars("\n".join(buffer), stdout)
            do_turn(pw)
            pw.finish_turn()
            buffer = []
        else:
            buffer.append(line)
