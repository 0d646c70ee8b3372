"""Fleet data model for ships in transit."""

from dataclasses import dataclass

from ..utils.constants import NEUTRAL


@dataclass
class Fleet:
    """Represents ships travelling between two planets.

    Fleets have no identity of their own: they only exist as entries in the
    game state's fleet list and their position in that list is not stable
    from one turn to the next.
    """

    owner: int  # 0 only for killed fleets
    ships: int  # Ship count
    source: int  # Source planet id
    dest: int  # Destination planet id
    total_trip_length: int  # Turns needed for the whole trip
    turns_remaining: int  # Turns until arrival

    def __post_init__(self):
        """Validate fleet data after initialization."""
        if self.owner < 0:
            raise ValueError(f"Invalid owner: {self.owner} (must be >= 0)")
        if self.ships < 0:
            raise ValueError(f"Invalid ships: {self.ships} (must be >= 0)")
        if self.source < 0 or self.dest < 0:
            raise ValueError(
                f"Invalid planet ids: {self.source} -> {self.dest} (must be >= 0)"
            )
        if self.turns_remaining < 0:
            raise ValueError(
                f"Invalid turns_remaining: {self.turns_remaining} (must be >= 0)"
            )

    @property
    def has_arrived(self) -> bool:
        return self.turns_remaining <= 0

    def time_step(self) -> None:
        """Advance the fleet one turn, never going below zero."""
        self.turns_remaining = max(self.turns_remaining - 1, 0)

    def kill(self) -> None:
        """Neutralize the fleet when its owner is dropped.

        A killed fleet carries no ships and is discarded at its next
        battle resolution without affecting the outcome.
        """
        self.owner = NEUTRAL
        self.ships = 0
        self.turns_remaining = 0
