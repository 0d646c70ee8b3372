"""Game state container."""

from dataclasses import dataclass, field

from ..utils.constants import NEUTRAL
from ..utils.distance import trip_length
from .fleet import Fleet
from .planet import Planet


@dataclass
class GameState:
    """Canonical match state.

    Holds every planet and fleet with their real owner ids, the number of
    time steps simulated so far and the replay text. The state is only
    mutated by the engine between player exchanges, never concurrently.
    """

    planets: list[Planet] = field(default_factory=list)  # Indexed by planet id
    fleets: list[Fleet] = field(default_factory=list)  # No stable order across steps
    num_turns: int = 0  # Time steps simulated so far
    playback: str = ""  # Full replay text
    pending_playback: str = ""  # Replay text not yet flushed to a stream

    def __post_init__(self):
        """Validate planet ids form a dense 0..N-1 range."""
        for index, planet in enumerate(self.planets):
            if planet.id != index:
                raise ValueError(
                    f"Invalid planet id {planet.id} at position {index} (ids must be 0..N-1)"
                )
        if self.num_turns < 0:
            raise ValueError(f"Invalid num_turns: {self.num_turns} (must be >= 0)")

    @property
    def num_planets(self) -> int:
        return len(self.planets)

    def has_planet(self, planet_id: int) -> bool:
        return 0 <= planet_id < len(self.planets)

    def get_planet(self, planet_id: int) -> Planet:
        """Return the planet with the given id.

        Raises:
            KeyError: If no planet has this id
        """
        if not self.has_planet(planet_id):
            raise KeyError(f"Planet {planet_id} does not exist")
        return self.planets[planet_id]

    def distance(self, source_id: int, dest_id: int) -> int:
        """Number of turns a fleet needs to travel between two planets."""
        source = self.get_planet(source_id)
        dest = self.get_planet(dest_id)
        return trip_length(source.x, source.y, dest.x, dest.y)

    def num_ships(self, player_id: int) -> int:
        """Total ships a player has on planets and in flight."""
        on_planets = sum(p.ships for p in self.planets if p.owner == player_id)
        in_flight = sum(f.ships for f in self.fleets if f.owner == player_id)
        return on_planets + in_flight

    def is_alive(self, player_id: int) -> bool:
        """True if the player owns at least one planet or fleet."""
        return any(p.owner == player_id for p in self.planets) or any(
            f.owner == player_id for f in self.fleets
        )

    def remaining_players(self) -> set[int]:
        """Distinct non-neutral owners across planets and fleets."""
        owners = {p.owner for p in self.planets}
        owners.update(f.owner for f in self.fleets)
        owners.discard(NEUTRAL)
        return owners

    def append_playback(self, fragment: str) -> None:
        self.playback += fragment
        self.pending_playback += fragment

    def flush_playback(self) -> str:
        """Return the replay text added since the last flush, then clear it.

        Used to stream the replay while the match is still running. The full
        replay stays available in ``playback``.
        """
        fragment = self.pending_playback
        self.pending_playback = ""
        return fragment
